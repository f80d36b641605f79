"""
Stellar XDR Codec Module

Implements the primitive layer of the XDR wire format used by the ledger
network: a bounds-checked cursor reader, the matching writer, and the sanity
limits applied while decoding.

Key components:
- reader.py: Forward-only XdrReader with typed big-endian reads
- writer.py: XdrWriter producing the same encoding
- limits.py: DecodeLimits configuration
"""

from .limits import DEFAULT_LIMITS, DecodeLimits
from .reader import XdrReader
from .writer import XdrWriter

__all__ = [
    "XdrReader",
    "XdrWriter",
    "DecodeLimits",
    "DEFAULT_LIMITS",
]
