"""Persisted resolution records.

One single-line file per scope, same name in both places:

- project scope: ``<cwd>/.cave``
- user scope:    ``~/.cave``

The line is either a bare version (``22.0.1``) or an alias with the
version it resolved to (``stable:22.0.1``). Reads check the project file
first. Writes overwrite the whole file; there is no locking, last writer
wins.
"""

from __future__ import annotations

import logging
from pathlib import Path

from cave.core.errors import ConfigError, InvalidFormatError, NotFoundError
from cave.core.version_parser import parse_concrete
from cave.models.records import ResolutionRecord, Scope
from cave.models.versioning import Alias

logger = logging.getLogger(__name__)


def decode_record(text: str) -> ResolutionRecord:
    """Parse the on-disk line; raise InvalidFormatError on anything else."""
    content = text.strip()
    if ":" in content:
        alias_name, _, version_text = content.partition(":")
        try:
            alias = Alias(alias_name)
        except ValueError:
            raise InvalidFormatError(content) from None
        return ResolutionRecord.pinned(alias, parse_concrete(version_text))
    return ResolutionRecord.bare(parse_concrete(content))


class ResolutionStore:
    """Reads and writes the scoped version files.

    Parameters
    ----------
    project_dir:
        Directory holding the project-scope file (normally the CWD).
    user_dir:
        Directory holding the user-scope file (normally ``$HOME``).
    filename:
        File name used in both directories.
    """

    def __init__(self, project_dir: Path, user_dir: Path, filename: str = ".cave") -> None:
        self._dirs = {Scope.PROJECT: Path(project_dir), Scope.USER: Path(user_dir)}
        self._filename = filename

    def path_for(self, scope: Scope) -> Path:
        return self._dirs[scope] / self._filename

    def read_scope(self, scope: Scope) -> ResolutionRecord | None:
        """Return the record stored at *scope*, or None if there is none."""
        path = self.path_for(scope)
        if not path.is_file():
            return None
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigError(f"I/O error: {exc}") from exc
        try:
            return decode_record(text)
        except InvalidFormatError as exc:
            raise ConfigError(f"Unreadable version file {path}: {exc}") from exc

    def read(self) -> tuple[Scope, ResolutionRecord]:
        """Return the effective record and where it came from.

        Project scope wins; raises NotFoundError when neither file exists.
        """
        for scope in (Scope.PROJECT, Scope.USER):
            record = self.read_scope(scope)
            if record is not None:
                logger.debug("Using %s record %s", scope.value, record.encode())
                return scope, record
        raise NotFoundError()

    def write(self, scope: Scope, record: ResolutionRecord) -> Path:
        path = self.path_for(scope)
        try:
            path.write_text(record.encode() + "\n", encoding="utf-8")
        except OSError as exc:
            raise ConfigError(f"I/O error: {exc}") from exc
        logger.info("Wrote %s to %s", record.encode(), path)
        return path
