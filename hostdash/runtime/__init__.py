from .docker_client import DockerClient, DockerError

__all__ = ["DockerClient", "DockerError"]
