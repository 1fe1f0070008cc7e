"""User configuration file (``~/.caveconfig.json``).

To add a new option: add a field to :class:`~cave.models.user_config.UserConfig`,
then expose it through ``cave config`` in :mod:`cave.cli.commands.config_cmd`.
"""

from __future__ import annotations

import json
import logging
import uuid
from pathlib import Path

from pydantic import ValidationError

from cave.core.errors import ConfigError
from cave.models.user_config import UserConfig

logger = logging.getLogger(__name__)


class ConfigStore:
    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def read(self) -> UserConfig:
        """Load the config, creating it with defaults on first use.

        An empty ``user_id`` is replaced with a fresh one and saved.
        """
        if not self.path.exists():
            config = UserConfig()
            self.write(config)
            return config
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
            config = UserConfig.model_validate(raw)
        except OSError as exc:
            raise ConfigError(f"I/O error: {exc}") from exc
        except (ValueError, ValidationError) as exc:
            raise ConfigError(f"Invalid configuration file {self.path}: {exc}") from exc
        if not raw.get("user_id"):
            config = config.model_copy(update={"user_id": str(uuid.uuid4())})
            self.write(config)
        return config

    def write(self, config: UserConfig) -> None:
        try:
            self.path.write_text(
                json.dumps(config.model_dump(), indent=2), encoding="utf-8"
            )
        except OSError as exc:
            raise ConfigError(f"I/O error: {exc}") from exc
        logger.debug("Saved configuration to %s", self.path)

    def update(self, **changes: bool | str) -> UserConfig:
        """Apply *changes* to the stored config and save it."""
        config = self.read().model_copy(update=changes)
        self.write(config)
        return config
