import argparse
import logging

from pathlib import Path
from typing import Union

from chestvault.crypto.cipher import required_key_length
from chestvault.storage.files import read_secrets
from chestvault.utils.core import Chest, finish, config_from_args
from chestvault.utils.dataModels import PREFIX, ChestError, ChestResult, ChestState

logger = logging.getLogger(__name__)


def has_chest_prefix(raw: bytes) -> bool:
    """True when any chest header is present, whatever its version or cipher."""
    return f"{PREFIX}:".encode("utf-8") in raw


def regenerate_key(chest: Chest, file_path: Union[str, Path]) -> ChestResult:
    """Replace the chest key, keeping the secrets file locked or unlocked as it was.

    Steps:
      1) Refuse an unknown cipher before anything changes.
      2) If the secrets file is locked, unlock it with the current key; a failed
         unlock aborts with the old key still in place.
      3) Force-create a new key.
      4) If step 2 unlocked the file, lock it again under the new key.
    A missing or unlocked secrets file only gets its key replaced. A file that
    carries a header for another version or cipher is refused, since the new
    key could never open it.
    """
    if required_key_length(chest.cipher) is None:
        return chest.fail(ChestError.UNKNOWN_CIPHER, f"Invalid cipher: {chest.cipher}")

    state = chest.state(file_path)
    logger.debug("rekey: %s is %s", file_path, state.value if state else "missing")
    if state is ChestState.AMBIGUOUS:
        return chest.fail(ChestError.AMBIGUOUS, "The chest file contains more than one chest header")
    if state is ChestState.PLAINTEXT and has_chest_prefix(read_secrets(Path(file_path))):
        return chest.fail(
            ChestError.FOREIGN_HEADER,
            "The chest file is locked with another cipher or version; unlock it with that key first",
        )

    was_locked = state is ChestState.ENCRYPTED
    if was_locked:
        unlocked = chest.decrypt(file_path)
        if not unlocked:
            return unlocked

    created = chest.create_key(force=True)
    if not created:
        return created

    if was_locked:
        locked = chest.encrypt(file_path)
        if not locked:
            return locked
    return ChestResult.success("Chest key is re-keyed")


def cmd_rekey(args: argparse.Namespace) -> None:
    config, secrets = config_from_args(args)
    finish(regenerate_key(Chest(config), secrets), config.ignore)
