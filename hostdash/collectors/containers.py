from __future__ import annotations

from typing import Any

from hostdash.collectors.base import BaseCollector
from hostdash.models.snapshot import ContainerInfo, ImageInfo
from hostdash.runtime.docker_client import DockerClient

GB = 1024 * 1024 * 1024
SHORT_ID_LENGTH = 12


class ContainerInventoryReader(BaseCollector):
    """Lists containers and images through the shared Docker client."""

    name = "containers"

    def __init__(self, client: DockerClient) -> None:
        self._client = client

    async def list_containers(self) -> tuple[list[ContainerInfo], set[str]]:
        """Return every container (running or not) and the image IDs they reference."""
        containers: list[ContainerInfo] = []
        image_ids: set[str] = set()

        for raw in await self._client.list_containers():
            containers.append(
                ContainerInfo(
                    name=display_name(raw.get("Names") or []),
                    status=raw.get("Status") or "",
                    state=raw.get("State") or "",
                    ports=format_ports(raw.get("Ports") or []),
                )
            )
            if raw.get("ImageID"):
                image_ids.add(raw["ImageID"])

        return containers, image_ids

    async def list_images(self, in_use: set[str]) -> list[ImageInfo]:
        images: list[ImageInfo] = []
        for raw in await self._client.list_images():
            image_id = raw.get("Id") or ""
            repo_tags = raw.get("RepoTags") or ["<none>:<none>"]
            repo, tag = split_reference(repo_tags[0])
            images.append(
                ImageInfo(
                    repo=repo,
                    tag=tag,
                    id=short_id(image_id),
                    size_gb=round((raw.get("Size") or 0) / GB, 2),
                    in_use=image_id in in_use,
                )
            )
        return images


def display_name(names: list[str]) -> str:
    return ", ".join(n.lstrip("/") for n in names)


def format_ports(ports: list[dict[str, Any]]) -> str:
    """Summarize published bindings as ``public:private (proto)``."""
    bindings: list[str] = []
    for port in ports:
        public = port.get("PublicPort")
        if not public:
            continue
        binding = f"{public}:{port.get('PrivatePort')} ({(port.get('Type') or 'tcp').lower()})"
        # docker lists one entry per address family
        if binding not in bindings:
            bindings.append(binding)
    return ", ".join(bindings) if bindings else "-"


def split_reference(reference: str) -> tuple[str, str]:
    """Split ``repo:tag`` on the tag colon, leaving registry ports alone."""
    repo, sep, tag = reference.rpartition(":")
    if not sep or "/" in tag:
        return reference, "latest"
    return repo, tag or "latest"


def short_id(image_id: str) -> str:
    _, _, digest = image_id.rpartition(":")
    return digest[:SHORT_ID_LENGTH]
