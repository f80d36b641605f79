"""Runtime helpers for the Stellar client"""

from .amount import StellarAmount
from .errors import (
    StellarError,
    DecodeError,
    TruncatedInputError,
    UnknownResultCodeError,
    UnknownOperationTypeError,
    MalformedCountError,
    UnknownDiscriminantError,
)

__all__ = [
    "StellarAmount",
    "StellarError",
    "DecodeError",
    "TruncatedInputError",
    "UnknownResultCodeError",
    "UnknownOperationTypeError",
    "MalformedCountError",
    "UnknownDiscriminantError",
]
