"""
XDR Writer

Counterpart of XdrReader. Used to produce fixtures and to re-encode values;
emits big-endian integers and 4-byte padded opaque data.
"""

import struct
from typing import List


class XdrWriter:
    """
    Binary writer producing XDR output.

    Each method appends one field; ``to_bytes`` returns the result.
    """

    def __init__(self):
        """Initialize writer with empty byte buffer."""
        self._bb: List[bytes] = []

    @staticmethod
    def _check_range(v: int, lo: int, hi: int, kind: str) -> None:
        if isinstance(v, bool) or not isinstance(v, int):
            raise TypeError(f"{kind} requires an int")
        if not lo <= v <= hi:
            raise ValueError(f"{v} does not fit in {kind}")

    def int32(self, v: int) -> "XdrWriter":
        """
        Write signed 32-bit integer.

        Args:
            v: Value in [-2**31, 2**31)
        """
        self._check_range(v, -(2 ** 31), 2 ** 31 - 1, "int32")
        self._bb.append(struct.pack(">i", v))
        return self

    def uint32(self, v: int) -> "XdrWriter":
        """Write unsigned 32-bit integer."""
        self._check_range(v, 0, 2 ** 32 - 1, "uint32")
        self._bb.append(struct.pack(">I", v))
        return self

    def int64(self, v: int) -> "XdrWriter":
        """
        Write signed 64-bit integer.

        Args:
            v: Value in [-2**63, 2**63)
        """
        self._check_range(v, -(2 ** 63), 2 ** 63 - 1, "int64")
        self._bb.append(struct.pack(">q", v))
        return self

    def uint64(self, v: int) -> "XdrWriter":
        """Write unsigned 64-bit integer."""
        self._check_range(v, 0, 2 ** 64 - 1, "uint64")
        self._bb.append(struct.pack(">Q", v))
        return self

    def bool(self, v: bool) -> "XdrWriter":
        """Write boolean as int32 0/1."""
        return self.int32(1 if v else 0)

    def fixed_opaque(self, v: bytes) -> "XdrWriter":
        """
        Write raw bytes followed by padding to a 4-byte boundary.

        Args:
            v: Bytes to write
        """
        self._bb.append(bytes(v))
        self._bb.append(b"\x00" * ((4 - len(v) % 4) % 4))
        return self

    def var_opaque(self, v: bytes) -> "XdrWriter":
        """
        Write bytes with uint32 length prefix and padding.

        Args:
            v: Bytes to write
        """
        self.uint32(len(v))
        return self.fixed_opaque(v)

    def string(self, s: str) -> "XdrWriter":
        """Write UTF-8 string with length prefix."""
        return self.var_opaque(s.encode("utf-8"))

    def raw(self, v: bytes) -> "XdrWriter":
        """Write bytes exactly as given, without padding."""
        self._bb.append(bytes(v))
        return self

    def to_bytes(self) -> bytes:
        """
        Return accumulated bytes as immutable bytes object.

        Returns:
            Bytes containing all written data
        """
        return b"".join(self._bb)
