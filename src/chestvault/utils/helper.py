import os

from pathlib import Path
from typing import Dict, Optional

from chestvault.utils.dataModels import DEFAULT_CIPHER, DEFAULT_KEY_FILE, DEFAULT_SECRETS_FILE


def chest_paths(cwd: Optional[Path] = None) -> Dict[str, Path]:
    """Default key/secrets locations, overridable with CHEST_KEY and CHEST_SECRETS."""
    base = Path(cwd) if cwd is not None else Path.cwd()
    return {
        "key": Path(os.environ.get("CHEST_KEY") or base / DEFAULT_KEY_FILE),
        "secrets": Path(os.environ.get("CHEST_SECRETS") or base / DEFAULT_SECRETS_FILE),
    }


def default_cipher() -> str:
    return os.environ.get("CHEST_CIPHER") or DEFAULT_CIPHER
