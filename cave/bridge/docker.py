"""Docker CLI adapter.

Everything cave knows about installed images comes from the ``docker``
executable: which tags are present, pulling new ones, running code_aster
inside a container and looking up an image ID for telemetry.
"""

from __future__ import annotations

import logging
import subprocess
import time
from pathlib import Path
from typing import Protocol, runtime_checkable

from cave.core.errors import CaveError, DockerError, FetchError, RuntimeMissingError

logger = logging.getLogger(__name__)

_CONTAINER_WORKDIR = "/home/user/data"


@runtime_checkable
class LocalPresenceOracle(Protocol):
    """Reports and extends the set of locally installed image tags."""

    def local_versions(self) -> set[str]:
        """Return every locally present tag of the image."""
        ...

    def pull(self, version: str) -> None:
        """Fetch *version*; raise FetchError when the pull fails."""
        ...


class DockerRuntime:
    """Runs ``docker`` subcommands for one image repository.

    Parameters
    ----------
    image:
        Repository name, e.g. ``"simvia/code_aster"``.
    docker_bin:
        Name or path of the docker executable.
    """

    def __init__(self, image: str, *, docker_bin: str = "docker") -> None:
        self._image = image
        self._docker = docker_bin

    def reference(self, version: str) -> str:
        return f"{self._image}:{version}"

    def _run(self, args: list[str], **kwargs) -> subprocess.CompletedProcess:
        cmd = [self._docker, *args]
        logger.debug("Running %s", " ".join(cmd))
        try:
            return subprocess.run(cmd, check=False, **kwargs)
        except FileNotFoundError as exc:
            raise RuntimeMissingError() from exc
        except OSError as exc:
            raise CaveError(f"I/O error: {exc}") from exc

    # ------------------------------------------------------------------
    # Local presence
    # ------------------------------------------------------------------

    def local_versions(self) -> set[str]:
        result = self._run(
            [
                "images",
                "--filter", f"reference={self._image}",
                "--format", "{{.Tag}}",
            ],
            capture_output=True,
            text=True,
        )
        if result.returncode != 0:
            raise DockerError("Failed to run `docker images`.")
        return {line.strip() for line in result.stdout.splitlines() if line.strip()}

    def pull(self, version: str) -> None:
        """``docker pull``; progress goes to the terminal, stderr is kept."""
        result = self._run(
            ["pull", self.reference(version)],
            stderr=subprocess.PIPE,
            text=True,
        )
        if result.returncode != 0:
            raise FetchError(version, (result.stderr or "").strip())
        logger.info("Pulled %s", self.reference(version))

    def image_id(self, version: str) -> str:
        reference = self.reference(version)
        result = self._run(["images", "-q", reference], capture_output=True, text=True)
        if result.returncode != 0:
            raise DockerError(f"Failed to run `docker images` for {reference}")
        for line in result.stdout.splitlines():
            if line.strip():
                return line.strip()
        raise DockerError(f"No image found for {reference}")

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    def run(
        self,
        version: str,
        export_file: str | None,
        args: list[str],
        *,
        workdir: Path | None = None,
    ) -> tuple[bool, float]:
        """Run ``run_aster`` in a throwaway container.

        The working directory is mounted at ``/home/user/data``. Returns
        ``(success, elapsed_seconds)``; the container's output is not
        interpreted.
        """
        host_dir = workdir or Path.cwd()
        command = " ".join(["run_aster", *args, export_file or ""]).strip()
        start = time.monotonic()
        result = self._run(
            [
                "run", "--rm", "-it",
                "-v", f"{host_dir}:{_CONTAINER_WORKDIR}",
                "-w", _CONTAINER_WORKDIR,
                self.reference(version),
                "/bin/bash", "-i", "-c", command,
            ],
        )
        elapsed = time.monotonic() - start
        logger.debug("Container exited with %s after %.1fs", result.returncode, elapsed)
        return result.returncode == 0, elapsed


@runtime_checkable
class ImageRuntime(LocalPresenceOracle, Protocol):
    """A presence oracle that can also run images and report their IDs."""

    def run(
        self, version: str, export_file: str | None, args: list[str], *, workdir: Path | None = None
    ) -> tuple[bool, float]:
        ...

    def image_id(self, version: str) -> str:
        ...
