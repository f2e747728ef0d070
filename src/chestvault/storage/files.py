import os

from pathlib import Path
from typing import Optional

KEY_FILE_MODE = 0o600


def _replace(path: Path, data: bytes, mode: Optional[int] = None) -> None:
    """Write ``<name>.tmp`` and rename it over ``path``; the temp file never outlives a failure."""
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_name(path.name + ".tmp")
    try:
        fd = os.open(tmp, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o666 if mode is None else mode)
        with os.fdopen(fd, "wb") as f:
            if mode is not None:
                # O_CREAT leaves the mode of a stale temp file alone.
                os.chmod(tmp, mode)
            f.write(data)
        os.replace(tmp, path)
    except BaseException:
        tmp.unlink(missing_ok=True)
        raise


def read_secrets(path: Path) -> bytes:
    return Path(path).read_bytes()


def write_secrets(path: Path, data: bytes) -> None:
    """Replace the whole secrets file; readers never see a half-written file."""
    _replace(Path(path), data)


def read_key(path: Path) -> bytes:
    return Path(path).read_bytes()


def write_key(path: Path, key: str) -> None:
    _replace(Path(path), key.encode("ascii"), KEY_FILE_MODE)
