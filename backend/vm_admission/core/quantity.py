"""Quantity Parsing — Kubernetes-style resource quantities to integers.

Invariants:
    - parse_quantity is PURE and exact (Decimal, never float arithmetic)
    - Byte and millicore values round UP to the next integer, matching kube semantics
    - Booleans and negative values are rejected with ValueError

Design Decisions:
    - Single regex over a hand-written tokenizer: the grammar is tiny and fixed
    - ValueError over a custom type: pydantic BeforeValidators surface it as a field error
"""

import re
from decimal import ROUND_CEILING, Decimal, InvalidOperation

from vm_admission.core.domain_types import ByteCount, MilliCPU


_BINARY_SUFFIXES: dict[str, int] = {
    "Ki": 1 << 10, "Mi": 1 << 20, "Gi": 1 << 30,
    "Ti": 1 << 40, "Pi": 1 << 50, "Ei": 1 << 60,
}
_DECIMAL_SUFFIXES: dict[str, Decimal] = {
    "n": Decimal("1e-9"), "u": Decimal("1e-6"), "m": Decimal("1e-3"),
    "k": Decimal("1e3"), "M": Decimal("1e6"), "G": Decimal("1e9"),
    "T": Decimal("1e12"), "P": Decimal("1e15"), "E": Decimal("1e18"),
}

_QUANTITY_RE = re.compile(
    r"^(?P<number>[+-]?(?:\d+\.?\d*|\.\d+))"
    r"(?:(?P<exponent>[eE][+-]?\d+)|(?P<suffix>Ki|Mi|Gi|Ti|Pi|Ei|[numkMGTPE]))?$"
)


def parse_quantity(value: str | int | float | Decimal) -> Decimal:
    """Parse '1Gi', '250m', '1.5', '1e3' or a plain number into a Decimal."""
    if isinstance(value, bool):
        raise ValueError(f"quantity must be a number or string, got {value!r}")
    if isinstance(value, Decimal):
        return value
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, float):
        return Decimal(str(value))
    if not isinstance(value, str):
        raise ValueError(f"quantity must be a number or string, got {value!r}")

    match = _QUANTITY_RE.match(value.strip())
    if match is None:
        raise ValueError(f"invalid quantity {value!r}")

    try:
        number = Decimal(match.group("number"))
        if match.group("exponent"):
            number = number.scaleb(int(match.group("exponent")[1:]))
    except InvalidOperation as e:
        raise ValueError(f"invalid quantity {value!r}") from e

    suffix = match.group("suffix")
    if suffix in _BINARY_SUFFIXES:
        return number * _BINARY_SUFFIXES[suffix]
    if suffix:
        return number * _DECIMAL_SUFFIXES[suffix]
    return number


def _ceil_non_negative(amount: Decimal, original: object) -> int:
    if amount < 0:
        raise ValueError(f"quantity must not be negative, got {original!r}")
    return int(amount.to_integral_value(rounding=ROUND_CEILING))


def parse_bytes(value: str | int | float | Decimal) -> ByteCount:
    """Parse a memory quantity into whole bytes."""
    return ByteCount(_ceil_non_negative(parse_quantity(value), value))


def parse_milli_cpu(value: str | int | float | Decimal) -> MilliCPU:
    """Parse a CPU amount in cores ('0.25', 2, '250m') into millicores."""
    return MilliCPU(_ceil_non_negative(parse_quantity(value) * 1000, value))


def format_milli_cpu(value: int) -> str:
    """Render millicores as cores: 2000 -> '2', 250 -> '0.25'."""
    if value % 1000 == 0:
        return str(value // 1000)
    return str((Decimal(value) / 1000).normalize())
