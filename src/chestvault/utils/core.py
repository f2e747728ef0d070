import argparse
import logging
import os
import sys

from pathlib import Path
from typing import Optional, Tuple, Union

from chestvault.crypto.cipher import (
    CipherSpec,
    UnknownCipherError,
    decrypt_bytes,
    encrypt_bytes,
    required_key_length,
    resolve_cipher,
    validate_key_length,
)
from chestvault.storage.files import read_key, read_secrets, write_key, write_secrets
from chestvault.ui.console import say
from chestvault.utils.dataModels import (
    DEFAULT_IV_LENGTH,
    VERSION,
    ChestConfig,
    ChestError,
    ChestResult,
    ChestState,
    Envelope,
)
from chestvault.utils.helper import chest_paths, default_cipher

logger = logging.getLogger(__name__)


class Chest:
    """Locks and unlocks a single secrets file with the key stored at ``config.key_path``.

    Every operation validates everything it needs before touching the disk and
    reports the outcome as a ChestResult; a failed operation never writes.
    """

    def __init__(self, config: ChestConfig):
        self.config = config

    @property
    def key_path(self) -> Path:
        return Path(self.config.key_path)

    @property
    def cipher(self) -> str:
        return self.config.cipher

    @property
    def header(self) -> bytes:
        return self.config.header()

    @staticmethod
    def classify(raw: bytes, header: bytes) -> ChestState:
        fragments = len(raw.split(header))
        if fragments == 1:
            return ChestState.PLAINTEXT
        if fragments == 2:
            return ChestState.ENCRYPTED
        return ChestState.AMBIGUOUS

    @staticmethod
    def is_encryptable(raw: bytes, header: bytes) -> bool:
        # An ambiguous file is still encryptable: only a single header blocks locking.
        return Chest.classify(raw, header) is not ChestState.ENCRYPTED

    @staticmethod
    def is_decryptable(raw: bytes, header: bytes) -> bool:
        return Chest.classify(raw, header) is ChestState.ENCRYPTED

    def state(self, file_path: Union[str, Path]) -> Optional[ChestState]:
        """State of the secrets file, or None when it does not exist."""
        path = Path(file_path)
        if not path.is_file():
            return None
        return Chest.classify(read_secrets(path), self.header)

    def fail(self, error: ChestError, message: str, level: str = "error") -> ChestResult:
        logger.debug("%s: %s", error.value, message)
        say(level, message, self.config.ignore)
        return ChestResult.failure(error, message)

    def _check_files(self, file_path: Path) -> Optional[ChestResult]:
        if not file_path.is_file():
            return self.fail(ChestError.MISSING_FILE, "Missing or invalid chest file")
        if not self.key_path.is_file():
            return self.fail(ChestError.MISSING_FILE, "Missing or invalid key file")
        return None

    def _load_cipher(self) -> Tuple[Optional[ChestResult], Optional[CipherSpec], bytes]:
        try:
            spec = resolve_cipher(self.cipher)
        except UnknownCipherError:
            return self.fail(ChestError.UNKNOWN_CIPHER, f"Invalid cipher: {self.cipher}"), None, b""
        key = read_key(self.key_path)
        if not validate_key_length(key, required_key_length(self.cipher)):
            return self.fail(ChestError.INVALID_KEY_LENGTH, "Invalid key length"), None, b""
        return None, spec, key

    def encrypt(self, file_path: Union[str, Path]) -> ChestResult:
        file_path = Path(file_path)
        failed = self._check_files(file_path)
        if failed is not None:
            return failed

        data = read_secrets(file_path)
        if not Chest.is_encryptable(data, self.header):
            return self.fail(ChestError.ALREADY_LOCKED, "The chest file is already locked", "warning")

        failed, spec, key = self._load_cipher()
        if failed is not None:
            return failed

        iv = os.urandom(DEFAULT_IV_LENGTH)
        envelope = Envelope(
            version=self.config.version,
            cipher=self.cipher,
            iv=iv,
            ciphertext=encrypt_bytes(spec, key, iv, data),
        )
        write_secrets(file_path, envelope.to_bytes())
        logger.debug("locked %s with %s", file_path, spec.algorithm)
        return ChestResult.success("Chest is locked")

    def decrypt(self, file_path: Union[str, Path]) -> ChestResult:
        file_path = Path(file_path)
        failed = self._check_files(file_path)
        if failed is not None:
            return failed

        data = read_secrets(file_path)
        state = Chest.classify(data, self.header)
        if state is ChestState.AMBIGUOUS:
            return self.fail(ChestError.AMBIGUOUS, "The chest file contains more than one chest header")
        if not Chest.is_decryptable(data, self.header):
            return self.fail(ChestError.ALREADY_UNLOCKED, "The chest file is already unlocked", "warning")

        failed, spec, key = self._load_cipher()
        if failed is not None:
            return failed

        try:
            envelope = Envelope.from_bytes(data, self.config.version, self.cipher)
            plaintext = decrypt_bytes(spec, key, envelope.iv, envelope.ciphertext)
        except ValueError as e:
            return self.fail(ChestError.CORRUPT, f"Failed to unlock chest file: {e}")

        write_secrets(file_path, plaintext)
        logger.debug("unlocked %s with %s", file_path, spec.algorithm)
        return ChestResult.success("Chest is unlocked")

    def create_key(self, force: bool = False) -> ChestResult:
        if self.key_path.exists() and not force:
            return self.fail(ChestError.KEY_EXISTS, "A chest key already exists")

        key_size = required_key_length(self.cipher)
        if key_size is None:
            return self.fail(ChestError.UNKNOWN_CIPHER, f"Invalid cipher: {self.cipher}")

        # Stored as hex text cut to key_size characters, so the file is key_size bytes long.
        key = os.urandom(key_size).hex()[:key_size]
        write_key(self.key_path, key)
        logger.debug("wrote %d byte key to %s", key_size, self.key_path)
        return ChestResult.success("Chest key generated")


def config_from_args(args: argparse.Namespace) -> Tuple[ChestConfig, Path]:
    defaults = chest_paths()
    config = ChestConfig(
        key_path=Path(args.key) if args.key else defaults["key"],
        cipher=args.cipher or default_cipher(),
        version=VERSION,
        ignore=getattr(args, "quiet", False),
    )
    secrets = Path(args.secrets) if args.secrets else defaults["secrets"]
    return config, secrets


def finish(result: ChestResult, ignore: bool) -> None:
    if not result:
        sys.exit(1)
    say("success", result.message, ignore)


def cmd_create(args: argparse.Namespace) -> None:
    config, _ = config_from_args(args)
    finish(Chest(config).create_key(force=args.force), config.ignore)


def cmd_lock(args: argparse.Namespace) -> None:
    config, secrets = config_from_args(args)
    finish(Chest(config).encrypt(secrets), config.ignore)


def cmd_unlock(args: argparse.Namespace) -> None:
    config, secrets = config_from_args(args)
    finish(Chest(config).decrypt(secrets), config.ignore)
