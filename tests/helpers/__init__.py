"""Test helpers for the Stellar client test suite."""

from .factories import (
    ISSUER_KEY,
    ZERO_KEY,
    op_record,
    tx_result,
    write_account_id,
    write_claim_offer_atom,
    write_credit_asset,
    write_native_asset,
    write_offer_entry,
)

__all__ = [
    "ISSUER_KEY",
    "ZERO_KEY",
    "op_record",
    "tx_result",
    "write_account_id",
    "write_claim_offer_atom",
    "write_credit_asset",
    "write_native_asset",
    "write_offer_entry",
]
