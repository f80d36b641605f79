"""
Exact-width ledger amounts.

Fees, balances and sequence numbers travel on the wire as signed 64-bit
integers. StellarAmount keeps them as Python integers and only ever renders
them through ``decimal.Decimal``, so no value in the int64 range loses
precision on its way to a display string.
"""

from __future__ import annotations
from decimal import Decimal, InvalidOperation, localcontext
from functools import total_ordering
from typing import Union

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

# 1 XLM = 10,000,000 stroops
STROOP_SCALE = 10_000_000
STROOP_DIGITS = 7

_QUANTUM = Decimal(1).scaleb(-STROOP_DIGITS)
# Largest whole-unit magnitude is 922337203685.4775807 (adjusted exponent 11)
_MAX_ADJUSTED = 11


@total_ordering
class StellarAmount:
    """
    Immutable signed 64-bit amount, measured in stroops.

    Example:
        >>> fee = StellarAmount(100)
        >>> str(fee)
        '100'
        >>> fee.scaled_value
        '0.0000100'
    """

    __slots__ = ("_stroops",)

    def __init__(self, stroops: int):
        if isinstance(stroops, bool) or not isinstance(stroops, int):
            raise TypeError(f"StellarAmount requires an int, got {type(stroops).__name__}")
        if not INT64_MIN <= stroops <= INT64_MAX:
            raise ValueError(f"Amount {stroops} is outside the signed 64-bit range")
        object.__setattr__(self, "_stroops", stroops)

    def __setattr__(self, name, value):
        raise AttributeError("StellarAmount is immutable")

    def __delattr__(self, name):
        raise AttributeError("StellarAmount is immutable")

    @classmethod
    def from_scaled(cls, value: Union[str, int, Decimal]) -> StellarAmount:
        """
        Build an amount from a display value such as ``"12.5"``.

        Args:
            value: Decimal amount in whole units (at most 7 fractional digits)

        Returns:
            The equivalent amount in stroops

        Raises:
            ValueError: If the value is not a number or is finer than one stroop
        """
        if isinstance(value, float):
            raise TypeError("Use a string or Decimal, floats cannot carry exact amounts")
        try:
            dec = Decimal(value)
        except (InvalidOperation, TypeError) as e:
            raise ValueError(f"Invalid amount: {value!r}") from e
        if not dec.is_finite():
            raise ValueError(f"Invalid amount: {value!r}")
        if dec.is_zero():
            return cls(0)
        # Bound the exponent before scaling so huge or tiny exponents cannot overflow the context
        if dec.adjusted() > _MAX_ADJUSTED:
            raise ValueError(f"Amount {value!r} is outside the signed 64-bit range")
        if dec.adjusted() < -STROOP_DIGITS:
            raise ValueError(f"Amount {value!r} has more than {STROOP_DIGITS} decimal places")

        with localcontext() as ctx:
            ctx.prec = len(dec.as_tuple().digits) + STROOP_DIGITS + 1
            stroops = dec.scaleb(STROOP_DIGITS)
        if stroops != stroops.to_integral_value():
            raise ValueError(f"Amount {value!r} has more than {STROOP_DIGITS} decimal places")
        return cls(int(stroops))

    @property
    def stroops(self) -> int:
        """Raw integer value in stroops."""
        return self._stroops

    @property
    def unscaled_string(self) -> str:
        """Exact decimal string of the stroop value."""
        return str(self._stroops)

    def to_decimal(self) -> Decimal:
        """Value in whole units, exact."""
        return Decimal(self._stroops).scaleb(-STROOP_DIGITS)

    @property
    def scaled_value(self) -> str:
        """Value in whole units with exactly 7 fractional digits."""
        return format(self.to_decimal().quantize(_QUANTUM), "f")

    def __int__(self) -> int:
        return self._stroops

    def __str__(self) -> str:
        return str(self._stroops)

    def __repr__(self) -> str:
        return f"StellarAmount({self._stroops})"

    def __eq__(self, other) -> bool:
        if isinstance(other, StellarAmount):
            return self._stroops == other._stroops
        if isinstance(other, int) and not isinstance(other, bool):
            return self._stroops == other
        return NotImplemented

    def __lt__(self, other) -> bool:
        if isinstance(other, StellarAmount):
            return self._stroops < other._stroops
        if isinstance(other, int) and not isinstance(other, bool):
            return self._stroops < other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._stroops)


__all__ = [
    "StellarAmount",
    "INT64_MIN",
    "INT64_MAX",
    "STROOP_SCALE",
    "STROOP_DIGITS",
]
