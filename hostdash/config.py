from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings

BASE_DIR = Path(__file__).resolve().parent
STATIC_DIR = BASE_DIR / "static"


class Settings(BaseSettings):
    # --- app ---
    app_name: str = "Host Dashboard"
    debug: bool = False

    # --- container runtime ---
    docker_socket: str = "/var/run/docker.sock"
    docker_timeout: float = 10.0  # seconds per daemon call

    # --- process scan ---
    top_processes: int = 3
    process_memory_floor_mb: int = 10

    # --- reachability probe ---
    probe_primary: str = "8.8.8.8"
    probe_fallback: str = "1.1.1.1"
    probe_port: int = 53

    # --- container logs ---
    log_window_minutes: int = 30
    log_tail_lines: int = 50

    # --- server ---
    host: str = "0.0.0.0"
    port: int = 9999
    cors_origins: list[str] = ["*"]

    model_config = {"env_prefix": "HOSTDASH_"}


settings = Settings()
