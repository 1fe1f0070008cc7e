"""Error taxonomy for cave.

Every error raised by the engine derives from :class:`CaveError` and its
``str()`` is the message shown to the user. Errors propagate to the CLI,
which prints them on stderr and exits non-zero.
"""

from __future__ import annotations


class CaveError(RuntimeError):
    """Base class for all errors reported to the user."""


class InvalidFormatError(CaveError):
    """A version string is neither an alias nor ``MAJOR.MINOR.PATCH``."""

    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__(
            f"Invalid version input: '{value}'. "
            "Expected stable, testing or under this format: xx.x.xx"
        )


class AliasUnresolvedError(CaveError):
    """An alias is missing from the catalog or matches no release tag."""

    def __init__(self, alias: str) -> None:
        self.alias = alias
        super().__init__(
            f"Unable to resolve '{alias}': no matching release found in the registry."
        )


class VersionNotAvailableError(CaveError):
    """The version exists neither locally nor in the registry."""

    def __init__(self, version: str, catalog_url: str = "") -> None:
        self.version = version
        hint = "Run `cave available`"
        if catalog_url:
            hint += f" or see on {catalog_url}"
        super().__init__(f"Version '{version}' is not available. {hint}.")


class UserAbortedError(CaveError):
    """The user declined a confirmation prompt."""

    def __init__(self) -> None:
        super().__init__("No version pinned. Operation cancelled by user.")


class NoConnectivityError(CaveError):
    """The pre-flight reachability probe failed."""

    def __init__(self) -> None:
        super().__init__(
            "No internet connection detected. "
            "Please check your network and try again."
        )


class TransportError(CaveError):
    """Fetching registry metadata failed."""

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Error pulling image versions: {detail}")


class DockerError(CaveError):
    """A docker command exited unsuccessfully."""

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Docker error: {detail}")


class FetchError(DockerError):
    """``docker pull`` failed; carries docker's own diagnostic output."""

    def __init__(self, version: str, diagnostic: str = "") -> None:
        self.version = version
        self.diagnostic = diagnostic
        detail = f"Failed to pull version: {version}"
        if diagnostic:
            detail += f"\n{diagnostic}"
        super().__init__(detail)


class RuntimeMissingError(CaveError):
    """The docker executable is not installed."""

    def __init__(self) -> None:
        super().__init__("Docker not found. Please install Docker and try again.")


class NotFoundError(CaveError):
    """No resolution record exists at any scope."""

    def __init__(self) -> None:
        super().__init__(
            "No version found. Use `cave use <version>` or `cave pin <version>`."
        )


class VersionNotInstalledError(CaveError):
    """The recorded version is no longer present locally."""

    def __init__(self, version: str) -> None:
        self.version = version
        super().__init__(
            f"Invalid version : '{version}', not installed. Run cave pin {version}."
        )


class ExportFileNotFoundError(CaveError):
    """The ``.export`` file given to ``cave run`` does not exist."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Export file '{path}' not found or invalid.")


class ExecutionError(CaveError):
    """code_aster exited unsuccessfully."""

    def __init__(self, version: str) -> None:
        self.version = version
        super().__init__(f"code_aster error: run failed for version: {version}")


class ConfigError(CaveError):
    """A configuration or record file could not be read or written."""


class HomeNotFoundError(CaveError):
    """The user's home directory cannot be determined."""

    def __init__(self) -> None:
        super().__init__("Home not found.")
