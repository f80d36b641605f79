"""
Shared XDR structures carried inside operation results.

Account identifiers, assets, prices and offers. They only need decoding here,
but each must consume exactly its own bytes so the records after it stay
aligned.
"""

from __future__ import annotations
import base64
import binascii
from enum import IntEnum
from fractions import Fraction
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from ..codec.reader import XdrReader
from ..runtime.amount import StellarAmount
from ..runtime.errors import DecodeError, UnknownDiscriminantError

# Strkey version byte for account ids ('G' prefix)
_ACCOUNT_ID_VERSION = 6 << 3


class XdrModel(BaseModel):
    """Base for decoded XDR values: immutable once built."""
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)


class PublicKeyType(IntEnum):
    """PublicKey union discriminants."""
    ED25519 = 0


class AssetType(IntEnum):
    """Asset union discriminants."""
    NATIVE = 0
    CREDIT_ALPHANUM4 = 1
    CREDIT_ALPHANUM12 = 2


def encode_account_id(key: bytes) -> str:
    """
    Render a 32-byte ed25519 public key as a ``G...`` strkey.

    Args:
        key: Raw public key bytes

    Returns:
        Base32 strkey with CRC16-XModem checksum
    """
    payload = bytes([_ACCOUNT_ID_VERSION]) + key
    checksum = binascii.crc_hqx(payload, 0).to_bytes(2, "little")
    return base64.b32encode(payload + checksum).decode("ascii")


class AccountId(XdrModel):
    """Account identifier (PublicKey union, ed25519 arm only)."""
    key: bytes = Field(description="Raw 32-byte ed25519 public key")

    @classmethod
    def from_xdr(cls, reader: XdrReader) -> AccountId:
        key_type = reader.read_int32()
        if key_type != PublicKeyType.ED25519:
            raise UnknownDiscriminantError(key_type, "public key type")
        return cls(key=reader.read_fixed_opaque(32))

    @property
    def account_id(self) -> str:
        return encode_account_id(self.key)

    def __str__(self) -> str:
        return self.account_id


def _read_asset_code(reader: XdrReader, length: int) -> str:
    raw = reader.read_fixed_opaque(length).rstrip(b"\x00")
    try:
        return raw.decode("ascii")
    except UnicodeDecodeError as e:
        raise DecodeError(f"Asset code {raw!r} is not ASCII", cause=e) from e


class Asset(XdrModel):
    """
    Asset reference: the native asset, or a credit asset identified by its
    code and issuing account.
    """
    asset_type: AssetType
    code: Optional[str] = None
    issuer: Optional[AccountId] = None

    @classmethod
    def native(cls) -> Asset:
        return cls(asset_type=AssetType.NATIVE)

    @classmethod
    def from_xdr(cls, reader: XdrReader) -> Asset:
        tag = reader.read_int32()
        if tag == AssetType.NATIVE:
            return cls.native()
        if tag == AssetType.CREDIT_ALPHANUM4:
            code = _read_asset_code(reader, 4)
        elif tag == AssetType.CREDIT_ALPHANUM12:
            code = _read_asset_code(reader, 12)
        else:
            raise UnknownDiscriminantError(tag, "asset type")
        return cls(asset_type=AssetType(tag), code=code, issuer=AccountId.from_xdr(reader))

    def is_native(self) -> bool:
        return self.asset_type == AssetType.NATIVE

    def __str__(self) -> str:
        if self.is_native():
            return "native"
        return f"{self.code}:{self.issuer}"


class Price(XdrModel):
    """Price as a fraction of two int32 values."""
    n: int
    d: int

    @classmethod
    def from_xdr(cls, reader: XdrReader) -> Price:
        return cls(n=reader.read_int32(), d=reader.read_int32())

    def to_fraction(self) -> Fraction:
        if self.d == 0:
            raise ZeroDivisionError("Price denominator is zero")
        return Fraction(self.n, self.d)


class ClaimOfferAtom(XdrModel):
    """One offer (partially) consumed while crossing the order book."""
    seller: AccountId
    offer_id: int
    asset_sold: Asset
    amount_sold: StellarAmount
    asset_bought: Asset
    amount_bought: StellarAmount

    @classmethod
    def from_xdr(cls, reader: XdrReader) -> ClaimOfferAtom:
        return cls(
            seller=AccountId.from_xdr(reader),
            offer_id=reader.read_int64(),
            asset_sold=Asset.from_xdr(reader),
            amount_sold=StellarAmount(reader.read_int64()),
            asset_bought=Asset.from_xdr(reader),
            amount_bought=StellarAmount(reader.read_int64()),
        )


class OfferEntry(XdrModel):
    """An offer as it stands in the ledger after a manage-offer operation."""
    seller: AccountId
    offer_id: int
    selling: Asset
    buying: Asset
    amount: StellarAmount
    price: Price
    flags: int

    @classmethod
    def from_xdr(cls, reader: XdrReader) -> OfferEntry:
        entry = cls(
            seller=AccountId.from_xdr(reader),
            offer_id=reader.read_int64(),
            selling=Asset.from_xdr(reader),
            buying=Asset.from_xdr(reader),
            amount=StellarAmount(reader.read_int64()),
            price=Price.from_xdr(reader),
            flags=reader.read_uint32(),
        )
        ext = reader.read_int32()
        if ext != 0:
            raise UnknownDiscriminantError(ext, "offer entry extension")
        return entry


class SimplePaymentResult(XdrModel):
    """Final hop of a path payment."""
    destination: AccountId
    asset: Asset
    amount: StellarAmount

    @classmethod
    def from_xdr(cls, reader: XdrReader) -> SimplePaymentResult:
        return cls(
            destination=AccountId.from_xdr(reader),
            asset=Asset.from_xdr(reader),
            amount=StellarAmount(reader.read_int64()),
        )


class InflationPayout(XdrModel):
    destination: AccountId
    amount: StellarAmount

    @classmethod
    def from_xdr(cls, reader: XdrReader) -> InflationPayout:
        return cls(destination=AccountId.from_xdr(reader), amount=StellarAmount(reader.read_int64()))


__all__ = [
    "XdrModel",
    "PublicKeyType",
    "AssetType",
    "AccountId",
    "Asset",
    "Price",
    "ClaimOfferAtom",
    "OfferEntry",
    "SimplePaymentResult",
    "InflationPayout",
    "encode_account_id",
]
