"""Runtime settings: env-driven.

Centralized settings using pydantic-settings. Reads from a .env file and
CAVE_* environment variables. These are deployment knobs (where things
live, which endpoints to hit); user-facing toggles such as auto-update are
kept in ``~/.caveconfig.json`` (see :mod:`cave.core.config_store`).
"""

from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class CaveSettings(BaseSettings):
    """Settings with environment variable overrides.

    Examples
    --------
    Override via environment::

        export CAVE_DEBUG=true
        export CAVE_LOCAL_TELEMETRY=true
        export CAVE_REQUEST_TIMEOUT=30
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="CAVE_",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    debug: bool = False

    # Image and registry
    image: str = "simvia/code_aster"
    registry_tags_url: str = (
        "https://hub.docker.com/v2/repositories/simvia/code_aster/tags?page_size=100"
    )
    catalog_url: str = "https://hub.docker.com/r/simvia/code_aster"
    request_timeout: float = 10.0

    # Connectivity probe
    probe_host: str = "8.8.8.8"
    probe_port: int = 53
    probe_timeout: float = 2.0

    # Files
    home: Path | None = None  # defaults to the user's home directory
    store_filename: str = ".cave"
    config_filename: str = ".caveconfig.json"

    # Telemetry
    local_telemetry: bool = False
    telemetry_endpoint: str = "http://[::1]:50051/telemetry"
    telemetry_log_path: Path = Path(".cave_telemetry.jsonl")
    telemetry_timeout: float = 3.0

    # Release check
    release_url: str = "https://api.github.com/repos/simvia-tech/cave/releases/latest"

    def home_dir(self) -> Path:
        """Return the directory holding user-scope files."""
        return self.home if self.home is not None else Path.home()
