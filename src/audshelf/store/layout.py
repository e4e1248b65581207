# ABOUTME: On-disk layout of an audshelf library root.
# ABOUTME: Resolves the root from CLI value, environment, or the default location.

import os
from dataclasses import dataclass
from pathlib import Path

DEFAULT_LIBRARY_ROOT = Path.home() / ".audshelf"
LIBRARY_ENV_VAR = "AUDSHELF_LIBRARY"

CATALOG_FILENAME = "metadata.json"
EPUBS_DIRNAME = "EPUBs"
COVERS_DIRNAME = "Covers"


@dataclass(frozen=True)
class LibraryPaths:
    """Locations of the catalog document and the two managed directories."""

    root: Path

    @property
    def catalog_path(self) -> Path:
        return self.root / CATALOG_FILENAME

    @property
    def epubs_dir(self) -> Path:
        return self.root / EPUBS_DIRNAME

    @property
    def covers_dir(self) -> Path:
        return self.root / COVERS_DIRNAME


def resolve_library_root(value: Path | str | None = None) -> Path:
    """Pick the library root: explicit value, then $AUDSHELF_LIBRARY, then ~/.audshelf."""
    if value:
        return Path(value).expanduser()
    env_value = os.environ.get(LIBRARY_ENV_VAR)
    if env_value:
        return Path(env_value).expanduser()
    return DEFAULT_LIBRARY_ROOT
