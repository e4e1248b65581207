# ABOUTME: All-or-nothing file writes for the audshelf stores.
# ABOUTME: Writes go to a temp file in the target directory, then replace the target.

import shutil
import tempfile
from pathlib import Path


def ensure_directory(directory: Path) -> Path:
    """Create directory (and parents) if needed and return it.

    Raises:
        OSError: If the directory cannot be created, or the path exists
            and is not a directory.
    """
    if not directory.is_dir():
        directory.mkdir(parents=True, exist_ok=True)
    return directory


def write_bytes_atomic(path: Path, data: bytes) -> None:
    """Write data to path so readers see either the old or the new content.

    The temporary file is removed if anything fails before the replace.
    """
    tmp_handle = tempfile.NamedTemporaryFile(
        "wb", dir=path.parent, prefix=f".{path.name}.", suffix=".tmp", delete=False
    )
    tmp_path = Path(tmp_handle.name)
    try:
        with tmp_handle as handle:
            handle.write(data)
            handle.flush()
        tmp_path.replace(path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise


def copy_file_atomic(source: Path, dest: Path) -> None:
    """Copy source to dest, leaving no partial file at dest on failure."""
    tmp_handle = tempfile.NamedTemporaryFile(
        "wb", dir=dest.parent, prefix=f".{dest.name}.", suffix=".tmp", delete=False
    )
    tmp_path = Path(tmp_handle.name)
    try:
        with tmp_handle as handle, open(source, "rb") as src:
            shutil.copyfileobj(src, handle)
            handle.flush()
        shutil.copystat(source, tmp_path)
        tmp_path.replace(dest)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise
