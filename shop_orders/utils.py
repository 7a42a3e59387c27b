from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

CENT = Decimal("0.01")


def to_money(value) -> Decimal:
    """Quantize a number to two fractional digits (ROUND_HALF_UP).

    Floats go through ``str`` so 2.5 becomes Decimal("2.50"), not the binary
    expansion. Raises ``InvalidOperation`` for values Decimal cannot parse.
    """
    if isinstance(value, bool):
        raise InvalidOperation(f"not a number: {value!r}")
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(CENT, rounding=ROUND_HALF_UP)
