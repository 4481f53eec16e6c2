"""Minimal public-key encryption of files in an Academic Sense.

Provides key pair generation from small random primes, block encryption/decryption by modular exponentiation, and the
streaming radix-64 codec the ciphertext is written with. Key sizes are far below anything secure.

Typical usage example:

    keys = generate_key_pair()
    encrypt_file("plain.bin", "cipher.txt", *keys.public)
    decrypt_file("cipher.txt", "plain.out", *keys.private)
    text = encode_bytes(b"Hi there!")
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from minirsa.cipher import decrypt
from minirsa.cipher import decrypt_file
from minirsa.cipher import encrypt
from minirsa.cipher import encrypt_file
from minirsa.codec import decode_text
from minirsa.codec import encode_bytes
from minirsa.codec import Radix64Codec
from minirsa.keyfile import export_private_key
from minirsa.keyfile import export_public_key
from minirsa.keyfile import import_private_key
from minirsa.keyfile import import_public_key
from minirsa.keygen import generate_key_pair
from minirsa.keygen import KeyPair
from minirsa.numtheory import gcd
from minirsa.numtheory import is_prime
from minirsa.numtheory import mod_exp
from minirsa.numtheory import mod_inverse

__version__ = "0.0.1"
__all__ = [
    "KeyPair",
    "Radix64Codec",
    "decode_text",
    "decrypt",
    "decrypt_file",
    "encode_bytes",
    "encrypt",
    "encrypt_file",
    "export_private_key",
    "export_public_key",
    "gcd",
    "generate_key_pair",
    "import_private_key",
    "import_public_key",
    "is_prime",
    "mod_exp",
    "mod_inverse",
]
