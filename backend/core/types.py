# backend/core/types.py

"""
Custom column types.

``Money`` keeps currency amounts exact on every backend: values are bound
as integer minor units (cents) and always read back as ``Decimal``. Because
the stored representation is an integer, ``SUM`` in SQL never goes through
binary floating point, not even on SQLite.
"""

from decimal import Decimal, ROUND_HALF_UP

from sqlalchemy import BigInteger, TypeDecorator

CENT = Decimal("0.01")
MINOR_UNITS = 100


def to_minor_units(value) -> int:
    """Convert a currency amount to integer cents (half-up rounding)."""
    amount = value if isinstance(value, Decimal) else Decimal(str(value))
    return int((amount * MINOR_UNITS).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def from_minor_units(value) -> Decimal:
    """Convert integer cents (or an exact numeric aggregate of them) to Decimal."""
    return (Decimal(value) / MINOR_UNITS).quantize(CENT, rounding=ROUND_HALF_UP)


class Money(TypeDecorator):
    """Platform-independent exact currency amount stored as BIGINT cents."""

    impl = BigInteger
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return value
        return to_minor_units(value)

    def process_result_value(self, value, dialect):
        if value is None:
            return value
        return from_minor_units(value)
