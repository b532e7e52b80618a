"""
Exact Money Helpers

DESIGN DECISION: Amounts are never stored or computed as floats.
User input and persisted records are decimal text ("12.50"). Inside the
system every amount is an integer count of minor units (cents), so all
arithmetic, including split remainders, is exact.

Parsing NEVER rounds. An amount with more precision than a minor unit
is rejected rather than silently truncated.
"""

from decimal import Decimal, InvalidOperation, localcontext

MINOR_UNIT_PLACES = 2
MINOR_UNITS_PER_MAJOR = 10 ** MINOR_UNIT_PLACES
MAX_MINOR_UNIT_DIGITS = 18


class AmountError(ValueError):
    """Amount text could not be converted to minor units exactly."""
    pass


def parse_amount(text: str) -> Decimal:
    """
    Parse amount text into a finite Decimal.

    Raises:
        AmountError: If the text is empty, not a number, NaN or infinite
    """
    cleaned = (text or "").strip()
    if not cleaned:
        raise AmountError("Amount is required")
    try:
        value = Decimal(cleaned)
    except InvalidOperation:
        raise AmountError(f"Not a valid amount: {cleaned!r}")
    if not value.is_finite():
        raise AmountError(f"Not a valid amount: {cleaned!r}")
    return value


def to_minor_units(value: Decimal) -> int:
    """
    Convert a Decimal amount to integer minor units.

    Scaling runs with enough precision for every digit of `value`, so
    the context precision never rounds it.

    Raises:
        AmountError: If the amount has more than MINOR_UNIT_PLACES decimals
            or more than MAX_MINOR_UNIT_DIGITS digits in minor units
    """
    if value.adjusted() + MINOR_UNIT_PLACES >= MAX_MINOR_UNIT_DIGITS:
        raise AmountError(f"Amount {value} is out of range")

    with localcontext() as ctx:
        ctx.prec = len(value.as_tuple().digits) + MINOR_UNIT_PLACES
        try:
            scaled = value.scaleb(MINOR_UNIT_PLACES)
            integral = scaled.to_integral_value()
        except ArithmeticError:
            raise AmountError(f"Amount {value} is out of range")

    if scaled != integral:
        raise AmountError(
            f"Amount {value} has more than {MINOR_UNIT_PLACES} decimal places"
        )
    return int(scaled)


def amount_text_to_minor_units(text: str) -> int:
    """Parse amount text straight into minor units."""
    return to_minor_units(parse_amount(text))


def format_minor_units(amount: int) -> str:
    """Render minor units as decimal text, e.g. 1050 -> '10.50', -40 -> '-0.40'."""
    sign = "-" if amount < 0 else ""
    major, minor = divmod(abs(amount), MINOR_UNITS_PER_MAJOR)
    return f"{sign}{major}.{minor:0{MINOR_UNIT_PLACES}d}"
