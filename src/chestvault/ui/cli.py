import argparse

from chestvault.utils.core import cmd_create, cmd_lock, cmd_unlock
from chestvault.utils.dataModels import VERSION
from chestvault.utils.maintain import cmd_rekey


def _chest_options(p: argparse.ArgumentParser, secrets_help: str) -> None:
    p.add_argument("-k", "--key", help="Custom path to the chest key (default: ./.chest_key)")
    p.add_argument("-s", "--secrets", help=secrets_help)
    p.add_argument("-c", "--cipher", help="Custom cipher (default: AES_256_CBC)")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Ahoy Matey!! Securely encrypt or decrypt secrets stored in a file")
    p.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    p.add_argument("-q", "--quiet", action="store_true", help="Suppress console output")
    p.add_argument("-v", "--verbose", action="store_true", help="Log debug details")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_create = sub.add_parser("create", help="Creates a key file for encrypting")
    _chest_options(p_create, "Custom path to the file to be encrypted (default: ./.chest)")
    p_create.add_argument("--force", action="store_true", help="Overwrite an existing chest key")
    p_create.set_defaults(func=cmd_create)

    p_lock = sub.add_parser("lock", help="Encrypts a secrets file")
    _chest_options(p_lock, "Custom path to the file to be encrypted (default: ./.chest)")
    p_lock.set_defaults(func=cmd_lock)

    p_unlock = sub.add_parser("unlock", help="Decrypts a secrets file")
    _chest_options(p_unlock, "Custom path to the file to be decrypted (default: ./.chest)")
    p_unlock.set_defaults(func=cmd_unlock)

    p_rekey = sub.add_parser("rekey", help="Re-generates an existing key file")
    _chest_options(p_rekey, "Custom path to the file to be re-keyed (default: ./.chest)")
    p_rekey.set_defaults(func=cmd_rekey)

    return p
