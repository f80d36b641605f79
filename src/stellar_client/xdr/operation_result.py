"""
Operation results.

Each record on the wire is an operation-type tag followed by that operation's
own result code and, for some codes, a payload:

    operationType : int32
    resultCode    : int32   (per-operation enumeration)
    payload       : depends on type and code

One frozen model per operation kind; ``OPERATION_RESULT_DECODERS`` maps every
``OperationType`` to its model and is checked for completeness at import.
"""

from __future__ import annotations
import logging
from enum import IntEnum
from typing import ClassVar, Dict, Optional, Tuple, Type, TypeVar

from ..codec.limits import DEFAULT_LIMITS, DecodeLimits
from ..codec.reader import XdrReader
from ..runtime.amount import StellarAmount
from ..runtime.errors import UnknownDiscriminantError, UnknownOperationTypeError, UnknownResultCodeError
from .types import Asset, ClaimOfferAtom, InflationPayout, OfferEntry, SimplePaymentResult, XdrModel

logger = logging.getLogger(__name__)

C = TypeVar("C", bound=IntEnum)


class OperationType(IntEnum):
    """Operation kinds and their wire tags."""
    CREATE_ACCOUNT = 0
    PAYMENT = 1
    PATH_PAYMENT = 2
    MANAGE_OFFER = 3
    CREATE_PASSIVE_OFFER = 4
    SET_OPTIONS = 5
    CHANGE_TRUST = 6
    ALLOW_TRUST = 7
    ACCOUNT_MERGE = 8
    INFLATION = 9
    MANAGE_DATA = 10
    BUMP_SEQUENCE = 11

    @property
    def type_name(self) -> str:
        """Name as used by the REST API, e.g. ``create_account``."""
        return self.name.lower()


# Per-operation result codes. SUCCESS is always 0, failures are negative.

class CreateAccountResultCode(IntEnum):
    SUCCESS = 0
    MALFORMED = -1
    UNDERFUNDED = -2
    LOW_RESERVE = -3
    ALREADY_EXIST = -4


class PaymentResultCode(IntEnum):
    SUCCESS = 0
    MALFORMED = -1
    UNDERFUNDED = -2
    SRC_NO_TRUST = -3
    SRC_NOT_AUTHORIZED = -4
    NO_DESTINATION = -5
    NO_TRUST = -6
    NOT_AUTHORIZED = -7
    LINE_FULL = -8
    NO_ISSUER = -9


class PathPaymentResultCode(IntEnum):
    SUCCESS = 0
    MALFORMED = -1
    UNDERFUNDED = -2
    SRC_NO_TRUST = -3
    SRC_NOT_AUTHORIZED = -4
    NO_DESTINATION = -5
    NO_TRUST = -6
    NOT_AUTHORIZED = -7
    LINE_FULL = -8
    NO_ISSUER = -9
    TOO_FEW_OFFERS = -10
    OFFER_CROSS_SELF = -11
    OVER_SENDMAX = -12


class ManageOfferResultCode(IntEnum):
    SUCCESS = 0
    MALFORMED = -1
    SELL_NO_TRUST = -2
    BUY_NO_TRUST = -3
    SELL_NOT_AUTHORIZED = -4
    BUY_NOT_AUTHORIZED = -5
    LINE_FULL = -6
    UNDERFUNDED = -7
    CROSS_SELF = -8
    SELL_NO_ISSUER = -9
    BUY_NO_ISSUER = -10
    NOT_FOUND = -11
    LOW_RESERVE = -12


class ManageOfferEffect(IntEnum):
    CREATED = 0
    UPDATED = 1
    DELETED = 2


class SetOptionsResultCode(IntEnum):
    SUCCESS = 0
    LOW_RESERVE = -1
    TOO_MANY_SIGNERS = -2
    BAD_FLAGS = -3
    INVALID_INFLATION = -4
    CANT_CHANGE = -5
    UNKNOWN_FLAG = -6
    THRESHOLD_OUT_OF_RANGE = -7
    BAD_SIGNER = -8
    INVALID_HOME_DOMAIN = -9


class ChangeTrustResultCode(IntEnum):
    SUCCESS = 0
    MALFORMED = -1
    NO_ISSUER = -2
    INVALID_LIMIT = -3
    LOW_RESERVE = -4
    SELF_NOT_ALLOWED = -5


class AllowTrustResultCode(IntEnum):
    SUCCESS = 0
    MALFORMED = -1
    NO_TRUST_LINE = -2
    TRUST_NOT_REQUIRED = -3
    CANT_REVOKE = -4
    SELF_NOT_ALLOWED = -5


class AccountMergeResultCode(IntEnum):
    SUCCESS = 0
    MALFORMED = -1
    NO_ACCOUNT = -2
    IMMUTABLE_SET = -3
    HAS_SUB_ENTRIES = -4
    SEQNUM_TOO_FAR = -5
    DEST_FULL = -6


class InflationResultCode(IntEnum):
    SUCCESS = 0
    NOT_TIME = -1


class ManageDataResultCode(IntEnum):
    SUCCESS = 0
    NOT_SUPPORTED_YET = -1
    NAME_NOT_FOUND = -2
    LOW_RESERVE = -3
    INVALID_NAME = -4


class BumpSequenceResultCode(IntEnum):
    SUCCESS = 0
    BAD_SEQ = -1


def read_result_code(reader: XdrReader, code_cls: Type[C], scope: str) -> C:
    """
    Read an int32 tag and map it into ``code_cls``.

    Raises:
        UnknownResultCodeError: If the tag is not a member of ``code_cls``
    """
    tag = reader.read_int32()
    try:
        return code_cls(tag)
    except ValueError:
        raise UnknownResultCodeError(tag, scope) from None


class OperationResult(XdrModel):
    """
    Outcome of a single operation.

    Subclasses set ``operation_type`` and ``code_type``; those whose
    result carries a payload override ``_read_payload``.
    """
    operation_type: ClassVar[OperationType]
    code_type: ClassVar[Type[IntEnum]]

    code: int

    @classmethod
    def from_xdr(cls, reader: XdrReader, limits: DecodeLimits = DEFAULT_LIMITS) -> OperationResult:
        """Decode the result code and payload that follow the operation-type tag."""
        code = read_result_code(reader, cls.code_type, cls.operation_type.type_name)
        return cls(code=code, **cls._read_payload(reader, code, limits))

    @classmethod
    def _read_payload(cls, reader: XdrReader, code: IntEnum, limits: DecodeLimits) -> dict:
        return {}

    @property
    def type_name(self) -> str:
        return self.operation_type.type_name

    @property
    def code_name(self) -> str:
        """Result code name, e.g. ``underfunded``."""
        return self.code.name.lower()

    def succeeded(self) -> bool:
        return self.code == 0

    def failed(self) -> bool:
        return not self.succeeded()


class CreateAccountResult(OperationResult):
    operation_type: ClassVar[OperationType] = OperationType.CREATE_ACCOUNT
    code_type: ClassVar[Type[IntEnum]] = CreateAccountResultCode
    code: CreateAccountResultCode


class PaymentResult(OperationResult):
    operation_type: ClassVar[OperationType] = OperationType.PAYMENT
    code_type: ClassVar[Type[IntEnum]] = PaymentResultCode
    code: PaymentResultCode


class PathPaymentResult(OperationResult):
    """
    Path payment outcome.

    On success carries the offers crossed along the path and the final
    payment to the destination; on NO_ISSUER carries the asset whose issuer
    is missing.
    """
    operation_type: ClassVar[OperationType] = OperationType.PATH_PAYMENT
    code_type: ClassVar[Type[IntEnum]] = PathPaymentResultCode
    code: PathPaymentResultCode
    offers: Tuple[ClaimOfferAtom, ...] = ()
    last: Optional[SimplePaymentResult] = None
    no_issuer: Optional[Asset] = None

    @classmethod
    def _read_payload(cls, reader: XdrReader, code: IntEnum, limits: DecodeLimits) -> dict:
        if code == PathPaymentResultCode.SUCCESS:
            offers = reader.read_array(ClaimOfferAtom.from_xdr, limits.max_offers_claimed, "offers claimed")
            return {"offers": tuple(offers), "last": SimplePaymentResult.from_xdr(reader)}
        if code == PathPaymentResultCode.NO_ISSUER:
            return {"no_issuer": Asset.from_xdr(reader)}
        return {}

    @property
    def amount_received(self) -> Optional[StellarAmount]:
        """Amount credited to the destination, when the payment succeeded."""
        return self.last.amount if self.last is not None else None


class ManageOfferResult(OperationResult):
    """
    Manage offer outcome.

    On success carries the offers crossed and what happened to the
    submitted offer: created or updated (with the resulting entry) or
    deleted.
    """
    operation_type: ClassVar[OperationType] = OperationType.MANAGE_OFFER
    code_type: ClassVar[Type[IntEnum]] = ManageOfferResultCode
    code: ManageOfferResultCode
    offers_claimed: Tuple[ClaimOfferAtom, ...] = ()
    effect: Optional[ManageOfferEffect] = None
    offer: Optional[OfferEntry] = None

    @classmethod
    def _read_payload(cls, reader: XdrReader, code: IntEnum, limits: DecodeLimits) -> dict:
        if code != ManageOfferResultCode.SUCCESS:
            return {}
        claimed = reader.read_array(ClaimOfferAtom.from_xdr, limits.max_offers_claimed, "offers claimed")
        tag = reader.read_int32()
        try:
            effect = ManageOfferEffect(tag)
        except ValueError:
            raise UnknownDiscriminantError(tag, "manage offer effect") from None
        offer = OfferEntry.from_xdr(reader) if effect != ManageOfferEffect.DELETED else None
        return {"offers_claimed": tuple(claimed), "effect": effect, "offer": offer}


class CreatePassiveOfferResult(ManageOfferResult):
    operation_type: ClassVar[OperationType] = OperationType.CREATE_PASSIVE_OFFER


class SetOptionsResult(OperationResult):
    operation_type: ClassVar[OperationType] = OperationType.SET_OPTIONS
    code_type: ClassVar[Type[IntEnum]] = SetOptionsResultCode
    code: SetOptionsResultCode


class ChangeTrustResult(OperationResult):
    operation_type: ClassVar[OperationType] = OperationType.CHANGE_TRUST
    code_type: ClassVar[Type[IntEnum]] = ChangeTrustResultCode
    code: ChangeTrustResultCode


class AllowTrustResult(OperationResult):
    operation_type: ClassVar[OperationType] = OperationType.ALLOW_TRUST
    code_type: ClassVar[Type[IntEnum]] = AllowTrustResultCode
    code: AllowTrustResultCode


class AccountMergeResult(OperationResult):
    """Account merge outcome; on success carries the balance moved to the destination."""
    operation_type: ClassVar[OperationType] = OperationType.ACCOUNT_MERGE
    code_type: ClassVar[Type[IntEnum]] = AccountMergeResultCode
    code: AccountMergeResultCode
    source_account_balance: Optional[StellarAmount] = None

    @classmethod
    def _read_payload(cls, reader: XdrReader, code: IntEnum, limits: DecodeLimits) -> dict:
        if code == AccountMergeResultCode.SUCCESS:
            return {"source_account_balance": StellarAmount(reader.read_int64())}
        return {}


class InflationResult(OperationResult):
    operation_type: ClassVar[OperationType] = OperationType.INFLATION
    code_type: ClassVar[Type[IntEnum]] = InflationResultCode
    code: InflationResultCode
    payouts: Tuple[InflationPayout, ...] = ()

    @classmethod
    def _read_payload(cls, reader: XdrReader, code: IntEnum, limits: DecodeLimits) -> dict:
        if code == InflationResultCode.SUCCESS:
            return {"payouts": tuple(reader.read_array(InflationPayout.from_xdr, limits.max_payouts, "payouts"))}
        return {}


class ManageDataResult(OperationResult):
    operation_type: ClassVar[OperationType] = OperationType.MANAGE_DATA
    code_type: ClassVar[Type[IntEnum]] = ManageDataResultCode
    code: ManageDataResultCode


class BumpSequenceResult(OperationResult):
    operation_type: ClassVar[OperationType] = OperationType.BUMP_SEQUENCE
    code_type: ClassVar[Type[IntEnum]] = BumpSequenceResultCode
    code: BumpSequenceResultCode


OPERATION_RESULT_DECODERS: Dict[OperationType, Type[OperationResult]] = {
    cls.operation_type: cls
    for cls in (
        CreateAccountResult,
        PaymentResult,
        PathPaymentResult,
        ManageOfferResult,
        CreatePassiveOfferResult,
        SetOptionsResult,
        ChangeTrustResult,
        AllowTrustResult,
        AccountMergeResult,
        InflationResult,
        ManageDataResult,
        BumpSequenceResult,
    )
}

_missing = set(OperationType) - set(OPERATION_RESULT_DECODERS)
if _missing:
    raise RuntimeError(f"No result decoder for operation types: {sorted(t.type_name for t in _missing)}")


def decode_operation_result(reader: XdrReader, limits: DecodeLimits = DEFAULT_LIMITS) -> OperationResult:
    """
    Decode one operation result record at the reader's position.

    Args:
        reader: Cursor positioned at the operation-type tag
        limits: Bounds for nested arrays

    Returns:
        The variant matching the operation type

    Raises:
        UnknownOperationTypeError: If the type tag is not a known operation
        UnknownResultCodeError: If the nested result code is not known for that operation
        TruncatedInputError: If the record is cut short
    """
    tag = reader.read_int32()
    try:
        op_type = OperationType(tag)
    except ValueError:
        raise UnknownOperationTypeError(tag) from None

    result = OPERATION_RESULT_DECODERS[op_type].from_xdr(reader, limits)
    logger.debug("Decoded %s result: %s", op_type.type_name, result.code_name)
    return result


__all__ = [
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
    "CreateAccountResultCode",
    "PaymentResultCode",
    "PathPaymentResultCode",
    "ManageOfferResultCode",
    "ManageOfferEffect",
    "SetOptionsResultCode",
    "ChangeTrustResultCode",
    "AllowTrustResultCode",
    "AccountMergeResultCode",
    "InflationResultCode",
    "ManageDataResultCode",
    "BumpSequenceResultCode",
    "OPERATION_RESULT_DECODERS",
    "decode_operation_result",
    "read_result_code",
]
