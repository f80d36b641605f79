"""
Decode limits.

Sanity bounds applied to every length and count field read from the wire, so
an adversarial length prefix is rejected before anything is allocated.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class DecodeLimits:
    """Configuration for the XDR decoders."""
    # The network never accepts more than 100 operations per transaction
    max_operations: int = 100
    max_offers_claimed: int = 1000
    max_payouts: int = 1000
    max_opaque_length: int = 64 * 1024
    strict_trailing_bytes: bool = False

    def __post_init__(self):
        for name in ("max_operations", "max_offers_claimed", "max_payouts", "max_opaque_length"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must not be negative")


DEFAULT_LIMITS = DecodeLimits()
