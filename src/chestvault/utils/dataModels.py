from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional, Union

VERSION = "1.0.0"
DEFAULT_CIPHER = "AES_256_CBC"
DEFAULT_KEY_FILE = ".chest_key"
DEFAULT_SECRETS_FILE = ".chest"

PREFIX = "$CHEST"
DEFAULT_IV_LENGTH = 16
KEY_LENGTH = {
    "128": 16,
    "192": 24,
    "256": 32,
}


class ChestState(Enum):
    PLAINTEXT = "plaintext"   # header not found
    ENCRYPTED = "encrypted"   # header found exactly once
    AMBIGUOUS = "ambiguous"   # header found more than once


class ChestError(Enum):
    MISSING_FILE = "missing_file"
    ALREADY_LOCKED = "already_locked"
    ALREADY_UNLOCKED = "already_unlocked"
    AMBIGUOUS = "ambiguous"
    FOREIGN_HEADER = "foreign_header"
    UNKNOWN_CIPHER = "unknown_cipher"
    INVALID_KEY_LENGTH = "invalid_key_length"
    KEY_EXISTS = "key_exists"
    CORRUPT = "corrupt"


@dataclass(frozen=True)
class ChestConfig:
    key_path: Path
    cipher: str = DEFAULT_CIPHER
    version: Union[str, int] = VERSION
    ignore: bool = False

    def header(self) -> bytes:
        return Envelope.header_for(self.version, self.cipher)


@dataclass(frozen=True)
class ChestResult:
    ok: bool
    message: str
    error: Optional[ChestError] = None

    def __bool__(self) -> bool:
        return self.ok

    @staticmethod
    def success(message: str) -> "ChestResult":
        return ChestResult(ok=True, message=message)

    @staticmethod
    def failure(error: ChestError, message: str) -> "ChestResult":
        return ChestResult(ok=False, message=message, error=error)


@dataclass
class Envelope:
    """Encrypted chest file: ``$CHEST:<version>:<cipher>;\\n<iv-hex>:<ct-hex>``."""
    version: Union[str, int]
    cipher: str
    iv: bytes
    ciphertext: bytes

    @staticmethod
    def header_for(version: Union[str, int], cipher: str) -> bytes:
        return f"{PREFIX}:{version}:{cipher};\n".encode("utf-8")

    def payload(self) -> bytes:
        return self.iv.hex().encode("ascii") + b":" + self.ciphertext.hex().encode("ascii")

    def to_bytes(self) -> bytes:
        return Envelope.header_for(self.version, self.cipher) + self.payload()

    @staticmethod
    def from_bytes(raw: bytes, version: Union[str, int], cipher: str) -> "Envelope":
        """Strip the header and split the payload into IV and ciphertext.

        The header is removed by splitting on it and rejoining what is left, and
        every ``:`` fragment after the first belongs to the ciphertext. Raises
        ValueError when either field is not valid hex.
        """
        header = Envelope.header_for(version, cipher)
        fragment = b"".join(raw.split(header))
        fields = fragment.split(b":")
        iv_hex = fields.pop(0)
        ct_hex = b"".join(fields)
        return Envelope(
            version=version,
            cipher=cipher,
            iv=bytes.fromhex(iv_hex.decode("ascii")),
            ciphertext=bytes.fromhex(ct_hex.decode("ascii")),
        )
