"""
Transaction results.

Decodes the ``result_xdr`` returned when a transaction is submitted:

    feeCharged      : int64
    resultCode      : int32
    [success/failed only]
    operationCount  : int32
    operationResult[operationCount]

A decoded result whose ``failed()`` is true means the ledger rejected the
transaction. A raised ``DecodeError`` means the bytes could not be
understood. The two are never mixed.
"""

from __future__ import annotations
import base64
import binascii
import logging
from enum import Enum
from typing import List, Optional, Tuple, Union

from ..codec.limits import DEFAULT_LIMITS, DecodeLimits
from ..codec.reader import XdrReader
from ..runtime.amount import StellarAmount
from ..runtime.errors import DecodeError, ErrorCode, UnknownResultCodeError
from .operation_result import OperationResult, decode_operation_result
from .types import XdrModel

logger = logging.getLogger(__name__)


class TransactionResultCode(str, Enum):
    """Transaction-level result codes"""
    SUCCESS = "success"                            # all operations succeeded
    FAILED = "failed"                              # one or more operations failed
    TOO_EARLY = "too_early"                        # ledger close time before min timebounds
    TOO_LATE = "too_late"                          # ledger close time after max timebounds
    MISSING_OPERATION = "missing_operation"        # no operations specified
    BAD_SEQ = "bad_seq"                            # sequence number not correct for source account
    BAD_AUTH = "bad_auth"                          # too few valid signatures or wrong network
    INSUFFICIENT_BALANCE = "insufficient_balance"  # account would be below the reserve
    NO_ACCOUNT = "no_account"                      # source account not found
    INSUFFICIENT_FEE = "insufficient_fee"          # fee was too small
    BAD_AUTH_EXTRA = "bad_auth_extra"              # included extra signatures
    INTERNAL_ERROR = "internal_error"              # unknown error

    @classmethod
    def from_tag(cls, tag: int) -> TransactionResultCode:
        """
        Map a wire tag to its result code.

        Raises:
            UnknownResultCodeError: If the tag is not one of 0, -1..-11
        """
        try:
            return _CODE_BY_TAG[tag]
        except KeyError:
            raise UnknownResultCodeError(tag, "transaction") from None

    @property
    def tag(self) -> int:
        return _TAG_BY_CODE[self]

    @property
    def executes_operations(self) -> bool:
        """Whether the wire format carries operation results for this code."""
        return self in (TransactionResultCode.SUCCESS, TransactionResultCode.FAILED)


_TAG_BY_CODE = {
    TransactionResultCode.SUCCESS: 0,
    TransactionResultCode.FAILED: -1,
    TransactionResultCode.TOO_EARLY: -2,
    TransactionResultCode.TOO_LATE: -3,
    TransactionResultCode.MISSING_OPERATION: -4,
    TransactionResultCode.BAD_SEQ: -5,
    TransactionResultCode.BAD_AUTH: -6,
    TransactionResultCode.INSUFFICIENT_BALANCE: -7,
    TransactionResultCode.NO_ACCOUNT: -8,
    TransactionResultCode.INSUFFICIENT_FEE: -9,
    TransactionResultCode.BAD_AUTH_EXTRA: -10,
    TransactionResultCode.INTERNAL_ERROR: -11,
}
_CODE_BY_TAG = {tag: code for code, tag in _TAG_BY_CODE.items()}


class TransactionResult(XdrModel):
    """
    Decoded outcome of a submitted transaction.

    Example:
        >>> result = decode_transaction_result(raw)
        >>> result.succeeded()
        True
        >>> result.fee_charged.unscaled_string
        '100'
    """
    fee_charged: StellarAmount
    result_code: TransactionResultCode
    operation_results: Tuple[OperationResult, ...] = ()

    @classmethod
    def from_xdr(cls, reader: XdrReader, limits: DecodeLimits = DEFAULT_LIMITS) -> TransactionResult:
        """
        Decode a transaction result at the reader's position.

        Args:
            reader: Cursor positioned at the fee field
            limits: Bounds for counts and nested arrays

        Returns:
            Fully decoded result

        Raises:
            TruncatedInputError: If the buffer ends mid-field
            UnknownResultCodeError: If a result code tag is unknown
            UnknownOperationTypeError: If an operation type tag is unknown
            MalformedCountError: If the operation count is negative or above the limit
        """
        fee_charged = StellarAmount(reader.read_int64())
        result_code = TransactionResultCode.from_tag(reader.read_int32())

        operation_results: List[OperationResult] = []
        if result_code.executes_operations:
            count = reader.read_length(limits.max_operations, "operation count")
            for _ in range(count):
                operation_results.append(decode_operation_result(reader, limits))

        return cls(
            fee_charged=fee_charged,
            result_code=result_code,
            operation_results=tuple(operation_results),
        )

    @classmethod
    def from_bytes(cls, data: Union[bytes, bytearray, memoryview],
                   limits: Optional[DecodeLimits] = None) -> TransactionResult:
        """Decode a complete transaction result buffer."""
        limits = limits or DEFAULT_LIMITS
        reader = XdrReader(data, max_length=limits.max_opaque_length)
        logger.debug("Decoding transaction result (%d bytes)", reader.remaining)

        result = cls.from_xdr(reader, limits)

        if not reader.eof:
            if limits.strict_trailing_bytes:
                reader.expect_eof()
            logger.warning("Ignoring %d trailing bytes after transaction result", reader.remaining)

        logger.debug(
            "Decoded transaction result: code=%s fee=%s operations=%d",
            result.result_code.value, result.fee_charged, result.operation_count,
        )
        return result

    @classmethod
    def from_base64(cls, text: Union[str, bytes], limits: Optional[DecodeLimits] = None) -> TransactionResult:
        """
        Decode the base64 ``result_xdr`` field of a submission response.

        Raises:
            DecodeError: If the text is not valid base64
        """
        try:
            data = base64.b64decode(text, validate=True)
        except (binascii.Error, ValueError) as e:
            raise DecodeError("result_xdr is not valid base64", ErrorCode.INVALID_BASE64, cause=e) from e
        return cls.from_bytes(data, limits)

    def succeeded(self) -> bool:
        """Returns true if all operations in this transaction succeeded"""
        return self.result_code == TransactionResultCode.SUCCESS

    def failed(self) -> bool:
        """Returns true if the transaction did not succeed"""
        return not self.succeeded()

    @property
    def operation_count(self) -> int:
        return len(self.operation_results)

    def failed_operations(self) -> List[OperationResult]:
        """Operation results whose own code is not success, in order."""
        return [op for op in self.operation_results if op.failed()]


def decode_transaction_result(data: Union[bytes, bytearray, memoryview],
                              limits: Optional[DecodeLimits] = None) -> TransactionResult:
    """
    Decode raw transaction result bytes.

    Args:
        data: XDR bytes (already base64-decoded)
        limits: Decode bounds; defaults to ``DEFAULT_LIMITS``

    Returns:
        Decoded TransactionResult

    Raises:
        DecodeError: Any failure; no partial result is ever returned
    """
    return TransactionResult.from_bytes(data, limits)


__all__ = [
    "TransactionResultCode",
    "TransactionResult",
    "decode_transaction_result",
]
