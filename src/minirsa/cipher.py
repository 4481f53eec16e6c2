"""Block encryption and decryption of byte streams into radix-64 text.

Plaintext is cut into blocks of three bytes, each block read as a little-endian integer and raised to the key
exponent modulo `n`. The encoded stream starts with the plaintext length as a 32-bit integer, followed by one 32-bit
integer per cipher block, all of it written through a `Radix64Codec`.

Typical usage example:

    keys = keygen.generate_key_pair()
    encrypt_file("plain.bin", "cipher.txt", *keys.public)
    decrypt_file("cipher.txt", "plain.out", *keys.private)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import logging
import os
from typing import BinaryIO
import warnings

from minirsa import numtheory
from minirsa.codec import CodecMode
from minirsa.codec import Radix64Codec

log = logging.getLogger(__name__)

BLOCK_SIZE: int = 3
MAX_BLOCK: int = (1 << 8 * BLOCK_SIZE) - 1
MAX_MODULUS: int = (1 << 32) - 1


def pack_block(b0: int, b1: int = 0, b2: int = 0) -> int:
    """Combine up to three bytes into a block integer, `b0` being least significant."""
    return b0 + 256 * b1 + 65536 * b2


def unpack_block(value: int) -> tuple[int, int, int]:
    """Split a block integer back into its three bytes, least significant first."""
    return value & 0xFF, (value >> 8) & 0xFF, (value >> 16) & 0xFF


def _check_key(n: int, exponent: int) -> None:
    """Make sure the key fits the 32-bit cipher block representation.

    Raises:
        ValueError: If the modulus or exponent is out of range.
    """
    if not 2 <= n <= MAX_MODULUS:
        raise ValueError(f"Modulus must be in range [2, {MAX_MODULUS}].")
    if exponent < 0:
        raise ValueError("Exponent must be non-negative.")


def _plan_blocks(data: bytes, n: int, e: int, strict: bool) -> list[int]:
    """Validate the key against the plaintext and cut it into block integers.

    Raises:
        ValueError: If the key is out of range, the plaintext is too long,
            or `strict` is set and a block is not below `n`.
    """
    _check_key(n, e)
    size = len(data)
    if size > 0xFFFFFFFF:
        raise ValueError("Plaintext too long for the 32-bit length header.")
    blocks = [pack_block(*data[i:i + BLOCK_SIZE]) for i in range(0, size, BLOCK_SIZE)]
    if strict:
        for index, block in enumerate(blocks):
            if block >= n:
                raise ValueError(f"Block {index} ({block}) is not below the modulus {n}.")
    elif n <= MAX_BLOCK:
        warnings.warn(f"Modulus {n} is too small for {BLOCK_SIZE}-byte blocks, data may not decrypt correctly.",
                      RuntimeWarning)
    return blocks


def _write_blocks(codec: Radix64Codec, size: int, blocks: list[int], n: int, e: int) -> int:
    codec.put_integer32(size)
    for block in blocks:
        codec.put_integer32(numtheory.mod_exp(block, e, n))
    codec.end_encode()
    log.debug("Encrypted %d bytes in %d blocks", size, len(blocks))
    return size


def encrypt(source: BinaryIO, codec: Radix64Codec, n: int, e: int, strict: bool = False) -> int:
    """Encrypt everything readable from `source` into an encoding codec, then end the codec.

    Blocks whose value is not below `n` cannot be recovered. By default they are encrypted anyway; a key with
    `n <= 0xFFFFFF` triggers a warning since such blocks are possible with it.

    Args:
        source: Binary stream holding the plaintext.
        codec: A codec on which `begin_encode` succeeded.
        n: The modulus of the public key.
        e: The public exponent.
        strict: If true, refuse to encrypt when any block is not below `n`.

    Returns:
        The number of plaintext bytes encrypted.

    Raises:
        IOError: If the codec is not encoding.
        ValueError: If the key is out of range, the plaintext is longer than 32 bits can describe,
            or `strict` is set and a block is not below `n`.
    """
    if codec.mode is not CodecMode.ENCODING:
        raise IOError("Codec is not ready for encoding.")
    data = source.read()
    blocks = _plan_blocks(data, n, e, strict)
    return _write_blocks(codec, len(data), blocks, n, e)


def decrypt(codec: Radix64Codec, sink: BinaryIO, n: int, d: int) -> int:
    """Decrypt a stream from a decoding codec into `sink`, then end the codec.

    Padding bytes of the final block, which were never part of the plaintext, are dropped.

    Args:
        codec: A codec on which `begin_decode` succeeded.
        sink: Binary stream receiving the plaintext.
        n: The modulus of the private key.
        d: The private exponent.

    Returns:
        The number of plaintext bytes written.

    Raises:
        IOError: If the codec is not decoding, or the encoded stream ends early or holds invalid symbols.
        ValueError: If the key is out of range.
    """
    if codec.mode is not CodecMode.DECODING:
        raise IOError("Codec is not ready for decoding.")
    _check_key(n, d)
    try:
        size = codec.get_integer32()
        if size is None:
            raise IOError("Encoded stream ends before the length header.")
        for i in range(0, size, BLOCK_SIZE):
            cipher = codec.get_integer32()
            if cipher is None:
                raise IOError(f"Encoded stream is truncated at block {i // BLOCK_SIZE}.")
            plain = unpack_block(numtheory.mod_exp(cipher, d, n))
            sink.write(bytes(plain[:min(BLOCK_SIZE, size - i)]))
    finally:
        codec.end_decode()
    log.debug("Decrypted %d bytes", size)
    return size


def encrypt_file(in_path: str | os.PathLike,
                 out_path: str | os.PathLike,
                 n: int,
                 e: int,
                 strict: bool = False) -> int:
    """Encrypt the file at `in_path` into a new text file at `out_path`.

    The key and plaintext are checked before `out_path` is created, so a rejected key leaves no output behind.

    Args:
        in_path: The plaintext file.
        out_path: The file to write the encoded ciphertext to.
        n: The modulus of the public key.
        e: The public exponent.
        strict: Passed to `encrypt`.

    Returns:
        The number of plaintext bytes encrypted.

    Raises:
        OSError: If either file cannot be opened.
        ValueError: As raised by `encrypt`.
    """
    with open(in_path, "rb") as source:
        data = source.read()
    blocks = _plan_blocks(data, n, e, strict)
    codec = Radix64Codec()
    if not codec.begin_encode(out_path):
        raise OSError(f"Could not open output file {out_path}.")
    with codec:
        return _write_blocks(codec, len(data), blocks, n, e)


def decrypt_file(in_path: str | os.PathLike, out_path: str | os.PathLike, n: int, d: int) -> int:
    """Decrypt the encoded file at `in_path` into `out_path`.

    Args:
        in_path: The encoded ciphertext file.
        out_path: The file to write the plaintext to.
        n: The modulus of the private key.
        d: The private exponent.

    Returns:
        The number of plaintext bytes written.

    Raises:
        OSError: If either file cannot be opened, or the ciphertext is truncated or malformed.
    """
    codec = Radix64Codec()
    if not codec.begin_decode(in_path):
        raise OSError(f"Could not open input file {in_path}.")
    with codec, open(out_path, "wb") as sink:
        return decrypt(codec, sink, n, d)
