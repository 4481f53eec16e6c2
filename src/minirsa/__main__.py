"""The Command Line Interface for key generation, encryption and decryption.

Typical usage example:

    minirsa -k
    minirsa -e 3233 17 plain.txt cipher.txt
    minirsa -d 3233 2753 cipher.txt plain.txt
    OR
    python -m minirsa -k --public-key key.pub --private-key key
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import argparse
import logging
import pathlib
import sys

import minirsa
from minirsa import cipher
from minirsa import keyfile
from minirsa import keygen

corep = argparse.ArgumentParser(prog="minirsa", description="Minimal public-key encryption of files.")
corep.add_argument("--version", action="version", version=f"%(prog)s {minirsa.__version__}")
corep.add_argument("--verbose", "-v", action="count", default=0, help="Log progress, twice for debug output")
modes = corep.add_mutually_exclusive_group(required=True)
modes.add_argument("-k", "--keygen", action="store_true", help="Generate and print a key pair.")
modes.add_argument("-e", "--encrypt", nargs=4, metavar=("N", "E", "IN", "OUT"), help="Encrypt IN into OUT.")
modes.add_argument("-d", "--decrypt", nargs=4, metavar=("N", "D", "IN", "OUT"), help="Decrypt IN into OUT.")
modes.add_argument("-E",
                   "--encrypt-with",
                   nargs=3,
                   metavar=("KEYFILE", "IN", "OUT"),
                   help="Encrypt IN into OUT with the public key in KEYFILE.")
modes.add_argument("-D",
                   "--decrypt-with",
                   nargs=3,
                   metavar=("KEYFILE", "IN", "OUT"),
                   help="Decrypt IN into OUT with the private key in KEYFILE.")
corep.add_argument("--public-key", type=pathlib.Path, help="With -k, also export the public key to this file.")
corep.add_argument("--private-key", type=pathlib.Path, help="With -k, also export the private key to this file.")
corep.add_argument("--strict", action="store_true", help="Refuse to encrypt blocks that are not below the modulus.")


def setup_logging(verbose: int = 0) -> None:
    """Configure log level based on verbose argument."""
    logging.basicConfig()
    if verbose >= 2:
        logging.root.setLevel(logging.DEBUG)
    elif verbose == 1:
        logging.root.setLevel(logging.INFO)


def parse_key(mod: str, expo: str) -> tuple[int, int]:
    """Parse a key given on the command line, exiting with usage on garbage."""
    try:
        return int(mod, 10), int(expo, 10)
    except ValueError:
        corep.error(f"Key values must be decimal integers, got {mod!r} and {expo!r}.")
        raise


def run(args: argparse.Namespace) -> None:
    """Dispatch the parsed command line."""
    if args.keygen:
        keys = keygen.generate_key_pair()
        print(f"Public key: {keys.n} {keys.e}")
        print(f"Private key: {keys.n} {keys.d}")
        if args.public_key is not None:
            keyfile.export_public_key(args.public_key, *keys.public)
        if args.private_key is not None:
            keyfile.export_private_key(args.private_key, *keys.private)
    elif args.encrypt:
        n, e = parse_key(args.encrypt[0], args.encrypt[1])
        size = cipher.encrypt_file(args.encrypt[2], args.encrypt[3], n, e, args.strict)
        logging.info("Encrypted %d bytes into %s", size, args.encrypt[3])
    elif args.decrypt:
        n, d = parse_key(args.decrypt[0], args.decrypt[1])
        size = cipher.decrypt_file(args.decrypt[2], args.decrypt[3], n, d)
        logging.info("Decrypted %d bytes into %s", size, args.decrypt[3])
    elif args.encrypt_with:
        n, e = keyfile.import_public_key(args.encrypt_with[0])
        size = cipher.encrypt_file(args.encrypt_with[1], args.encrypt_with[2], n, e, args.strict)
        logging.info("Encrypted %d bytes into %s", size, args.encrypt_with[2])
    else:
        n, d = keyfile.import_private_key(args.decrypt_with[0])
        size = cipher.decrypt_file(args.decrypt_with[1], args.decrypt_with[2], n, d)
        logging.info("Decrypted %d bytes into %s", size, args.decrypt_with[2])


def main(argv: list[str] | None = None) -> None:
    """Parse the command line and run it, turning resource and stream errors into exit status 1."""
    args = corep.parse_args(argv)
    if not args.keygen and (args.public_key is not None or args.private_key is not None):
        corep.error("--public-key and --private-key are only valid with -k.")
    setup_logging(args.verbose)
    try:
        run(args)
    except (OSError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
