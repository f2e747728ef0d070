import logging
import re

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes
from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Mapping, Optional

try:
    from cryptography.hazmat.decrepit.ciphers.modes import CFB, OFB
except ImportError:
    from cryptography.hazmat.primitives.ciphers.modes import CFB, OFB

from chestvault.utils.dataModels import KEY_LENGTH

logger = logging.getLogger(__name__)

AES_BLOCK_BITS = algorithms.AES.block_size


@dataclass(frozen=True)
class CipherSpec:
    name: str
    algorithm: str
    mode: Callable[[bytes], modes.Mode]
    padded: bool


def _spec(name: str, algorithm: str, mode: Callable[[bytes], modes.Mode], padded: bool = False) -> CipherSpec:
    return CipherSpec(name=name, algorithm=algorithm, mode=mode, padded=padded)


# Bare AES_<bits> names are CBC, matching OpenSSL's aes128/aes192/aes256 aliases.
CIPHERS: Mapping[str, CipherSpec] = MappingProxyType({
    "AES_128":     _spec("AES_128", "aes128", modes.CBC, padded=True),
    "AES_128_CTR": _spec("AES_128_CTR", "aes-128-ctr", modes.CTR),
    "AES_128_OFB": _spec("AES_128_OFB", "aes-128-ofb", OFB),
    "AES_128_CFB": _spec("AES_128_CFB", "aes-128-cfb", CFB),
    "AES_128_CBC": _spec("AES_128_CBC", "aes-128-cbc", modes.CBC, padded=True),
    "AES_192":     _spec("AES_192", "aes192", modes.CBC, padded=True),
    "AES_192_CTR": _spec("AES_192_CTR", "aes-192-ctr", modes.CTR),
    "AES_192_OFB": _spec("AES_192_OFB", "aes-192-ofb", OFB),
    "AES_192_CFB": _spec("AES_192_CFB", "aes-192-cfb", CFB),
    "AES_192_CBC": _spec("AES_192_CBC", "aes-192-cbc", modes.CBC, padded=True),
    "AES_256":     _spec("AES_256", "aes256", modes.CBC, padded=True),
    "AES_256_CTR": _spec("AES_256_CTR", "aes-256-ctr", modes.CTR),
    "AES_256_OFB": _spec("AES_256_OFB", "aes-256-ofb", OFB),
    "AES_256_CFB": _spec("AES_256_CFB", "aes-256-cfb", CFB),
    "AES_256_CBC": _spec("AES_256_CBC", "aes-256-cbc", modes.CBC, padded=True),
})


class UnknownCipherError(KeyError):
    pass


def resolve_cipher(name: str) -> CipherSpec:
    try:
        return CIPHERS[name]
    except KeyError:
        raise UnknownCipherError(name) from None


def extract_bit_size(name: str) -> str:
    """All digits of the cipher name, in order ("AES_256_CTR" -> "256")."""
    return "".join(re.findall(r"\d", name))


def required_key_length(name: str) -> Optional[int]:
    return KEY_LENGTH.get(extract_bit_size(name))


def validate_key_length(key: bytes, required: Optional[int]) -> bool:
    return required is not None and len(key) == required


def encrypt_bytes(spec: CipherSpec, key: bytes, iv: bytes, data: bytes) -> bytes:
    if spec.padded:
        padder = padding.PKCS7(AES_BLOCK_BITS).padder()
        data = padder.update(data) + padder.finalize()
    encryptor = Cipher(algorithms.AES(key), spec.mode(iv)).encryptor()
    logger.debug("encrypting %d bytes with %s", len(data), spec.algorithm)
    return encryptor.update(data) + encryptor.finalize()


def decrypt_bytes(spec: CipherSpec, key: bytes, iv: bytes, data: bytes) -> bytes:
    """Raises ValueError on a bad IV length, a partial block or bad padding."""
    decryptor = Cipher(algorithms.AES(key), spec.mode(iv)).decryptor()
    plaintext = decryptor.update(data) + decryptor.finalize()
    if spec.padded:
        unpadder = padding.PKCS7(AES_BLOCK_BITS).unpadder()
        plaintext = unpadder.update(plaintext) + unpadder.finalize()
    logger.debug("decrypted %d bytes with %s", len(plaintext), spec.algorithm)
    return plaintext
