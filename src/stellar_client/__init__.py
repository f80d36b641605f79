"""
Stellar Python Client - transaction result decoding

Decodes the XDR ``result_xdr`` returned by the ledger network when a
transaction is submitted into typed, immutable result objects.
"""

from .runtime.amount import StellarAmount
from .runtime.errors import *
from .codec import XdrReader, XdrWriter, DecodeLimits, DEFAULT_LIMITS
from .xdr import *

__version__ = "0.1.0"
__all__ = [
    # Entry points
    "decode_transaction_result",
    "TransactionResult",
    "TransactionResultCode",

    # Operation results
    "OperationType",
    "OperationResult",
    "CreateAccountResult",
    "PaymentResult",
    "PathPaymentResult",
    "ManageOfferResult",
    "CreatePassiveOfferResult",
    "SetOptionsResult",
    "ChangeTrustResult",
    "AllowTrustResult",
    "AccountMergeResult",
    "InflationResult",
    "ManageDataResult",
    "BumpSequenceResult",

    # Shared types
    "AccountId",
    "Asset",
    "AssetType",
    "StellarAmount",

    # Codec
    "XdrReader",
    "XdrWriter",
    "DecodeLimits",
    "DEFAULT_LIMITS",

    # Errors
    "StellarError",
    "DecodeError",
    "TruncatedInputError",
    "UnknownResultCodeError",
    "UnknownOperationTypeError",
    "MalformedCountError",
    "UnknownDiscriminantError",
    "ErrorHandler",
]
