"""
XDR Reader

Forward-only, bounds-checked cursor over an XDR buffer (RFC 4506).
All integers are big-endian; opaque data and strings are padded to a
4-byte boundary.
"""

import builtins
import struct
from typing import Callable, List, Optional, TypeVar, Union

from ..runtime.errors import (
    DecodeError,
    ErrorCode,
    MalformedCountError,
    TruncatedInputError,
    UnknownDiscriminantError,
)
from .limits import DEFAULT_LIMITS

T = TypeVar("T")

_INT32 = struct.Struct(">i")
_UINT32 = struct.Struct(">I")
_INT64 = struct.Struct(">q")
_UINT64 = struct.Struct(">Q")


def _padding(n: int) -> int:
    return (4 - n % 4) % 4


class XdrReader:
    """
    Binary reader for XDR-encoded ledger structures.

    The reader owns a private copy of the buffer and an offset that only moves
    forward. Every read either consumes exactly the bytes of its field or
    raises; a short buffer is never padded or wrapped.

    One reader serves one decode on one thread.
    """

    def __init__(self, buf: Union[builtins.bytes, bytearray, memoryview], offset: int = 0,
                 max_length: int = DEFAULT_LIMITS.max_opaque_length):
        """
        Initialize reader with byte buffer.

        Args:
            buf: Byte buffer to read from (copied)
            offset: Starting offset
            max_length: Upper bound for any variable-length opaque or string field
        """
        if not isinstance(buf, (builtins.bytes, bytearray, memoryview)):
            raise TypeError(f"XdrReader requires a bytes-like buffer, got {type(buf).__name__}")
        self._buf = builtins.bytes(buf)
        if offset < 0 or offset > len(self._buf):
            raise ValueError(f"Offset {offset} outside buffer of length {len(self._buf)}")
        self._off = offset
        self._max_length = max_length

    @property
    def offset(self) -> int:
        """Current read position."""
        return self._off

    @property
    def remaining(self) -> int:
        """Number of unread bytes."""
        return len(self._buf) - self._off

    @property
    def eof(self) -> bool:
        """
        Check if at end of buffer.

        Returns:
            True if at end of buffer
        """
        return self._off >= len(self._buf)

    def expect_eof(self) -> None:
        """Raise if any bytes remain unread."""
        if not self.eof:
            raise DecodeError(
                f"{self.remaining} trailing bytes after offset {self._off}",
                ErrorCode.TRAILING_BYTES,
                {"offset": self._off, "remaining": self.remaining},
            )

    def _take(self, n: int, field: str) -> builtins.bytes:
        if n > self.remaining:
            raise TruncatedInputError(self._off, n, self.remaining, field)
        out = self._buf[self._off : self._off + n]
        self._off += n
        return out

    def read_int32(self) -> int:
        """
        Read signed 32-bit integer.

        Returns:
            Signed two's-complement value
        """
        return _INT32.unpack(self._take(4, "int32"))[0]

    def read_uint32(self) -> int:
        """Read unsigned 32-bit integer."""
        return _UINT32.unpack(self._take(4, "uint32"))[0]

    def read_int64(self) -> int:
        """
        Read signed 64-bit integer.

        Returns:
            Signed value; Python ints hold the full range exactly
        """
        return _INT64.unpack(self._take(8, "int64"))[0]

    def read_uint64(self) -> int:
        """Read unsigned 64-bit integer."""
        return _UINT64.unpack(self._take(8, "uint64"))[0]

    def read_bool(self) -> bool:
        """
        Read an XDR boolean.

        Raises:
            UnknownDiscriminantError: If the value is neither 0 nor 1
        """
        value = self.read_int32()
        if value not in (0, 1):
            raise UnknownDiscriminantError(value, "bool")
        return value == 1

    def read_fixed_opaque(self, n: int) -> builtins.bytes:
        """
        Read fixed-length opaque data and its padding.

        Args:
            n: Number of data bytes

        Returns:
            Data bytes without padding
        """
        if n < 0:
            raise ValueError("Fixed opaque length cannot be negative")
        pad = _padding(n)
        if n + pad > self.remaining:
            raise TruncatedInputError(self._off, n + pad, self.remaining, "opaque")
        data = self._take(n, "opaque")
        padding = self._take(pad, "padding")
        if padding.strip(b"\x00"):
            raise DecodeError(
                f"Non-zero padding at offset {self._off - pad}",
                ErrorCode.INVALID_PADDING,
                {"offset": self._off - pad, "padding": padding.hex()},
            )
        return data

    def read_length(self, limit: int, field: str = "length") -> int:
        """
        Read a uint32 length or count prefix and validate it against ``limit``.

        The prefix is read as signed so a value with the high bit set is
        reported as negative rather than as a 2GB allocation request.
        """
        n = self.read_int32()
        if n < 0 or n > limit:
            raise MalformedCountError(n, limit, field)
        return n

    def read_var_opaque(self, max_len: Optional[int] = None) -> builtins.bytes:
        """
        Read length-prefixed opaque data.

        Args:
            max_len: Maximum accepted length; defaults to the reader's bound

        Returns:
            Data bytes without padding
        """
        limit = self._max_length if max_len is None else min(max_len, self._max_length)
        n = self.read_length(limit, "opaque length")
        return self.read_fixed_opaque(n)

    def read_string(self, max_len: Optional[int] = None) -> str:
        """
        Read length-prefixed string.

        Returns:
            String decoded as UTF-8
        """
        data = self.read_var_opaque(max_len)
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise DecodeError("String is not valid UTF-8", ErrorCode.DECODE_ERROR,
                              {"offset": self._off}, e) from e

    def read_optional(self, read_fn: Callable[["XdrReader"], T]) -> Optional[T]:
        """
        Read an XDR optional: a bool presence flag followed by the value.

        Args:
            read_fn: Reader for the value when present
        """
        if self.read_bool():
            return read_fn(self)
        return None

    def read_array(self, read_fn: Callable[["XdrReader"], T], max_count: int,
                   field: str = "array length") -> List[T]:
        """
        Read a variable-length array.

        Args:
            read_fn: Reader for one element
            max_count: Maximum accepted element count

        Returns:
            Elements in wire order
        """
        n = self.read_length(max_count, field)
        return [read_fn(self) for _ in range(n)]
