#!/usr/bin/env python3
"""
chest – lock and unlock a single secrets file with a symmetric AES key

The key lives in a sibling key file (default ``./.chest_key``) and the secrets
in ``./.chest``. Locking replaces the secrets file with an envelope:

    $CHEST:<version>:<CIPHER_NAME>;\\n<iv-hex>:<ciphertext-hex>

The header appears exactly once in a locked file. A file without it is
unlocked; a file with it more than once is ambiguous and is never unlocked.

Commands:
  create               Generate a key file (refuses to overwrite without --force)
  lock                 Encrypt the secrets file
  unlock               Decrypt the secrets file
  rekey                Replace the key, keeping the secrets file locked or unlocked as it was

Ciphers:
  AES_<bits>, AES_<bits>_CBC, AES_<bits>_CTR, AES_<bits>_OFB, AES_<bits>_CFB
  for <bits> in 128, 192, 256. The key length (16, 24 or 32 bytes) is taken
  from the digits in the cipher name.

Each command exits 0 on success and 1 on failure. Nothing is written unless
every check passes. There is no locking between concurrent invocations on the
same files.

Note: plain AES without authentication. A tampered file is not detected.
Note: the key file holds random hex digits cut to the key length, and those
ASCII bytes are the AES key. That leaves 4 bits of entropy per key byte: 64
bits for the AES_128 family, 96 for AES_192, 128 for AES_256.
"""
from __future__ import annotations

import logging

from chestvault.ui.cli import build_parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    args.func(args)


if __name__ == "__main__":
    main()
