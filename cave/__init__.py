"""cave: version manager for code_aster Docker images.

Resolves ``stable`` / ``testing`` / ``MAJOR.MINOR.PATCH`` requests to an
installed ``simvia/code_aster`` image, records the choice per user or per
project, and keeps pinned aliases in sync with Docker Hub.
"""

__version__ = "0.2.0"
__description__ = "Version manager for code_aster Docker images"

from cave.core.version_manager import VersionManager

__all__ = ["VersionManager", "__version__"]
