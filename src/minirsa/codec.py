"""Streaming radix-64 codec, turning bytes into printable text and back.

The codec keeps a partially filled group of up to three bytes between calls, so data can be pushed through one byte
(or one integer) at a time. Every full group becomes four symbols of the standard base64 alphabet, the final partial
group is padded with `=`, and a line break follows every 64th symbol. Integers are serialized little-endian by
splitting them into halves down to single bytes.

Typical usage example:

    codec = Radix64Codec()
    if codec.begin_encode("out.txt"):
        codec.put_integer32(1234)
        codec.end_encode()
    text = encode_bytes(b"Hi there!")
    data = decode_text(text)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import enum
import io
import logging
import os
from typing import TextIO

log = logging.getLogger(__name__)

ALPHABET: str = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"
PAD: str = "="
LINE_LENGTH: int = 64

_DECODE_TABLE: dict[str, int] = {symbol: value for value, symbol in enumerate(ALPHABET)}
_DECODE_TABLE[PAD] = 0


class CodecMode(enum.Enum):
    IDLE = "idle"
    ENCODING = "encoding"
    DECODING = "decoding"


class Radix64Codec:
    """A stateful radix-64 encoder/decoder bound to one text resource at a time.

    Encoding and decoding are mutually exclusive: `begin_encode` or `begin_decode` resets all state and attaches the
    resource, the matching `end_*` call finishes it. Put and get calls made outside the matching mode do nothing.

    Attributes:
        mode: Which direction the codec is currently working in, if any.
        buffer: Bits of the group currently being assembled (encoding) or served (decoding).
        count: Number of raw bytes held in `buffer`, always between 0 and 3.
        column: Position of the next symbol on the current output line.
        padding: Number of trailing `=` symbols (at most 2) in the last complete group read while decoding.
    """

    def __init__(self) -> None:
        self.mode: CodecMode = CodecMode.IDLE
        self.buffer: int = 0
        self.count: int = 0
        self.column: int = 0
        self.padding: int = 0
        self._stream: TextIO | None = None
        self._owned: bool = False

    def __enter__(self) -> "Radix64Codec":
        return self

    def __exit__(self, *_exc) -> None:
        if self.mode is CodecMode.ENCODING:
            self.end_encode()
        elif self.mode is CodecMode.DECODING:
            self.end_decode()

    @property
    def active(self) -> bool:
        """Whether a resource is attached and put/get calls will take effect."""
        return self.mode is not CodecMode.IDLE

    def _attach(self, resource: str | os.PathLike | TextIO, file_mode: str) -> bool:
        """Release any current resource, reset state and attach the new one.

        Args:
            resource: A path to open, or an already open text stream.
            file_mode: Mode to open a path with.

        Returns:
            True if the resource is ready for use, False if it could not be opened.
        """
        self._release()
        self.mode = CodecMode.IDLE
        self.buffer = 0
        self.count = 0
        self.column = 0
        self.padding = 0
        if isinstance(resource, (str, os.PathLike)):
            try:
                # pylint: disable-next=consider-using-with
                self._stream = open(resource, file_mode, encoding="ascii", newline="\n" if file_mode == "w" else None)
            except OSError as exc:
                log.warning("Could not open %s: %s", resource, exc)
                return False
            self._owned = True
        else:
            self._stream = resource
            self._owned = False
        return True

    def _release(self) -> None:
        if self._stream is None:
            return
        if self._owned:
            self._stream.close()
        elif self.mode is CodecMode.ENCODING:
            self._stream.flush()
        self._stream = None
        self._owned = False

    def begin_encode(self, sink: str | os.PathLike | TextIO) -> bool:
        """Start encoding into `sink`.

        Args:
            sink: Path of the file to create, or a writable text stream.

        Returns:
            True if encoding is active. On failure the codec stays idle.
        """
        if self._attach(sink, "w"):
            self.mode = CodecMode.ENCODING
            log.debug("Encoding into %s", getattr(self._stream, "name", sink))
        return self.active

    def begin_decode(self, source: str | os.PathLike | TextIO) -> bool:
        """Start decoding from `source`.

        Args:
            source: Path of the file to read, or a readable text stream.

        Returns:
            True if decoding is active. On failure the codec stays idle.
        """
        if self._attach(source, "r"):
            self.mode = CodecMode.DECODING
            log.debug("Decoding from %s", getattr(self._stream, "name", source))
        return self.active

    def put_byte(self, value: int, padding: int = 0) -> None:
        """Append one raw byte, emitting four symbols once a group of three is complete.

        Args:
            value: The byte to encode.
            padding: How many of the trailing symbols of the completed group to replace with `=`.
                Only meaningful on the byte that completes the final group.

        Raises:
            ValueError: If `value` does not fit in a byte.
        """
        if self.mode is not CodecMode.ENCODING:
            return
        if not 0 <= value <= 0xFF:
            raise ValueError(f"Byte value {value} out of range.")
        self.buffer = (self.buffer << 8) + value
        self.count += 1
        if self.count < 3:
            return
        out = []
        for i in range(4):
            if i > 3 - padding:
                out.append(PAD)
            else:
                out.append(ALPHABET[(self.buffer >> (18 - 6 * i)) & 0x3F])
            if self.column == LINE_LENGTH - 1:
                out.append("\n")
            self.column = (self.column + 1) % LINE_LENGTH
        self._stream.write("".join(out))
        self.buffer = 0
        self.count = 0

    def _put_integer(self, value: int, bits: int, padding: int) -> None:
        if bits == 8:
            self.put_byte(value, padding)
            return
        half = bits // 2
        self._put_integer(value & ((1 << half) - 1), half, 0)
        self._put_integer(value >> half, half, padding)

    def put_integer(self, value: int, bits: int, padding: int = 0) -> None:
        """Append an unsigned integer as `bits // 8` bytes, least significant byte first.

        Args:
            value: The integer to encode.
            bits: Width of the integer, one of 8, 16, 32 or 64.
            padding: Forwarded to the most significant byte only.

        Raises:
            ValueError: If the width is unsupported or `value` does not fit in it.
        """
        if bits not in (8, 16, 32, 64):
            raise ValueError(f"Unsupported integer width {bits}.")
        if not 0 <= value < 1 << bits:
            raise ValueError(f"Value {value} does not fit in {bits} bits.")
        self._put_integer(value, bits, padding)

    def put_integer16(self, value: int, padding: int = 0) -> None:
        self.put_integer(value, 16, padding)

    def put_integer32(self, value: int, padding: int = 0) -> None:
        self.put_integer(value, 32, padding)

    def put_integer64(self, value: int, padding: int = 0) -> None:
        self.put_integer(value, 64, padding)

    def _read_symbol(self) -> str | None:
        """Read the next non-whitespace symbol, None at the end of the source or on a symbol outside the alphabet."""
        while True:
            symbol = self._stream.read(1)
            if not symbol:
                return None
            if symbol.isspace():
                continue
            if symbol not in _DECODE_TABLE:
                log.warning("Invalid symbol %r in encoded stream.", symbol)
                return None
            return symbol

    def get_byte(self) -> int | None:
        """Fetch the next raw byte, reading a new group of four symbols when the current one is drained.

        Returns:
            The byte, or None if the codec is not decoding or the source cannot supply a complete group.
        """
        if self.mode is not CodecMode.DECODING:
            return None
        if self.count == 0:
            symbols = ""
            for _ in range(4):
                symbol = self._read_symbol()
                if symbol is None:
                    return None
                symbols += symbol
            group = 0
            for symbol in symbols:
                group = (group << 6) + _DECODE_TABLE[symbol]
            self.buffer = group
            self.count = 3
            self.padding = min(len(symbols) - len(symbols.rstrip(PAD)), 2)
        self.count -= 1
        return (self.buffer >> (8 * self.count)) & 0xFF

    def _get_integer(self, bits: int) -> int | None:
        if bits == 8:
            return self.get_byte()
        half = bits // 2
        low = self._get_integer(half)
        if low is None:
            return None
        high = self._get_integer(half)
        if high is None:
            return None
        return low + (high << half)

    def get_integer(self, bits: int) -> int | None:
        """Fetch an unsigned little-endian integer of the given width.

        Args:
            bits: Width of the integer, one of 8, 16, 32 or 64.

        Returns:
            The integer, or None if any underlying byte read failed.

        Raises:
            ValueError: If the width is unsupported.
        """
        if bits not in (8, 16, 32, 64):
            raise ValueError(f"Unsupported integer width {bits}.")
        return self._get_integer(bits)

    def get_integer16(self) -> int | None:
        return self.get_integer(16)

    def get_integer32(self) -> int | None:
        return self.get_integer(32)

    def get_integer64(self) -> int | None:
        return self.get_integer(64)

    def end_encode(self) -> None:
        """Pad out a partial final group, flush it and release the sink."""
        if self.mode is not CodecMode.ENCODING:
            return
        if self.count == 2:
            self.put_byte(0, 1)
        elif self.count == 1:
            self.put_integer16(0, 2)
        self._release()
        self.mode = CodecMode.IDLE
        log.debug("Encoding finished")

    def end_decode(self) -> None:
        """Release the source. Trailing padding is not validated."""
        if self.mode is not CodecMode.DECODING:
            return
        self._release()
        self.mode = CodecMode.IDLE
        self.buffer = 0
        self.count = 0
        log.debug("Decoding finished")


def encode_bytes(data: bytes) -> str:
    """Encode a complete byte string.

    Args:
        data: The bytes to encode.

    Returns:
        Standard base64 text with a line break after every 64th symbol.
    """
    sink = io.StringIO()
    codec = Radix64Codec()
    codec.begin_encode(sink)
    for value in data:
        codec.put_byte(value)
    codec.end_encode()
    return sink.getvalue()


def decode_text(text: str) -> bytes:
    """Decode text produced by `encode_bytes`.

    Decoding stops at the first incomplete group or invalid symbol. Bytes that stand in for the `=` symbols of the
    last complete group are dropped.

    Args:
        text: The encoded text, line breaks allowed anywhere.

    Returns:
        The decoded bytes.
    """
    codec = Radix64Codec()
    codec.begin_decode(io.StringIO(text))
    out = bytearray()
    while (value := codec.get_byte()) is not None:
        out.append(value)
    if codec.padding:
        del out[-codec.padding:]
    codec.end_decode()
    return bytes(out)
