"""Invoice totals engine.

The only place subtotal, tax and total are computed. The preview endpoint and the
invoice persistence path both call ``calculate_invoice_totals`` so the amount a
user sees while editing is the amount that gets stored.

Arithmetic is done with ``Decimal`` and rounded to cents once, after summing.
"""

from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Iterable, List, Mapping, Sequence

CENTS = Decimal("0.01")
ZERO = Decimal("0.00")
HUNDRED = Decimal("100")
# Largest value a Numeric(12, 2) money column holds
MAX_AMOUNT = Decimal("9999999999.99")
MAX_QUANTITY = 2**31 - 1


class InvalidLineItem(ValueError):
    """A line entry cannot be priced."""


class InvalidDiscount(ValueError):
    """The discount is not a finite number."""


@dataclass(frozen=True)
class LineTotals:
    item_id: str
    quantity: int
    unit_price: Decimal
    line_total: Decimal
    tax_amount: Decimal


@dataclass(frozen=True)
class InvoiceTotals:
    subtotal: Decimal
    total_tax: Decimal
    discount: Decimal
    total: Decimal
    lines: List[LineTotals] = field(default_factory=list)


def to_decimal(value: Any) -> Decimal:
    """Coerce numbers and numeric strings to Decimal; floats go through str()."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise TypeError("boolean is not an amount")
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def quantize_money(value: Decimal) -> Decimal:
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


def _field(entry: Any, name: str) -> Any:
    if isinstance(entry, Mapping):
        return entry.get(name)
    return getattr(entry, name, None)


def _parse_quantity(raw: Any, item_id: str) -> int:
    if isinstance(raw, bool) or raw is None:
        raise InvalidLineItem(f"Quantity for item {item_id} must be a positive integer")
    try:
        quantity = to_decimal(raw)
    except (InvalidOperation, TypeError, ValueError) as exc:
        raise InvalidLineItem(f"Quantity for item {item_id} must be a positive integer") from exc
    if not quantity.is_finite() or quantity != quantity.to_integral_value() or quantity <= 0:
        raise InvalidLineItem(f"Quantity for item {item_id} must be a positive integer")
    if quantity > MAX_QUANTITY:
        raise InvalidLineItem(f"Quantity for item {item_id} exceeds {MAX_QUANTITY}")
    return int(quantity)


def _parse_unit_price(raw: Any, item_id: str) -> Decimal:
    try:
        price = to_decimal(raw)
    except (InvalidOperation, TypeError, ValueError) as exc:
        raise InvalidLineItem(f"Unit price for item {item_id} is not a number") from exc
    if not price.is_finite() or price < 0:
        raise InvalidLineItem(f"Unit price for item {item_id} must be a non-negative number")
    if price > MAX_AMOUNT:
        raise InvalidLineItem(f"Unit price for item {item_id} exceeds {MAX_AMOUNT}")
    return price


def _parse_rate(raw: Any, item_id: str) -> Decimal:
    try:
        rate = to_decimal(raw)
    except (InvalidOperation, TypeError, ValueError) as exc:
        raise InvalidLineItem(f"Tax rate for item {item_id} is not a number") from exc
    if not rate.is_finite() or rate < 0 or rate > HUNDRED:
        raise InvalidLineItem(f"Tax rate for item {item_id} must be between 0 and 100")
    return rate


def normalize_discount(discount: Any) -> Decimal:
    """Return the discount as a non-negative Decimal; negative values count as 0."""
    if discount is None:
        return ZERO
    try:
        value = to_decimal(discount)
    except (InvalidOperation, TypeError, ValueError) as exc:
        raise InvalidDiscount("Discount must be a finite number") from exc
    if not value.is_finite():
        raise InvalidDiscount("Discount must be a finite number")
    if value < 0:
        return ZERO
    if value > MAX_AMOUNT:
        raise InvalidDiscount(f"Discount exceeds {MAX_AMOUNT}")
    return value


def apply_discount(subtotal: Any, total_tax: Any, discount: Any = None) -> Decimal:
    """Total for already-computed parts: max(0, subtotal + tax - discount)."""
    total = quantize_money(to_decimal(subtotal)) + quantize_money(to_decimal(total_tax))
    total -= quantize_money(normalize_discount(discount))
    if total < 0:
        return ZERO
    return total


def calculate_invoice_totals(
    line_items: Sequence[Any],
    tax_rates: Mapping[str, Iterable[Any]],
    discount: Any = None,
) -> InvoiceTotals:
    """Compute subtotal, tax and clamped total for an invoice draft.

    ``line_items`` holds entries exposing ``item_id``, ``quantity`` and
    ``unit_price`` as attributes or mapping keys. A ``total`` on an entry is
    never read. ``tax_rates`` maps every referenced item id to that item's tax
    percentages; an id missing from it is an invalid line.

    Each line's ``tax_amount`` is rounded on its own, while ``total_tax`` is
    rounded once from the unrounded sum, so the per-line tax figures can add up
    to a cent more or less than ``total_tax``.

    Amounts above ``MAX_AMOUNT`` are rejected: a discount with
    ``InvalidDiscount``, everything else with ``InvalidLineItem``.
    """
    discount_value = normalize_discount(discount)

    subtotal = Decimal("0")
    total_tax = Decimal("0")
    lines: List[LineTotals] = []

    for entry in line_items:
        item_id = _field(entry, "item_id")
        if not item_id:
            raise InvalidLineItem("Line item is missing an item reference")
        if item_id not in tax_rates:
            raise InvalidLineItem(f"Item {item_id} is not in the catalog")

        quantity = _parse_quantity(_field(entry, "quantity"), item_id)
        unit_price = _parse_unit_price(_field(entry, "unit_price"), item_id)

        line_total = quantity * unit_price
        line_tax = Decimal("0")
        for percentage in tax_rates[item_id]:
            line_tax += line_total * _parse_rate(percentage, item_id) / HUNDRED
        if line_total > MAX_AMOUNT:
            raise InvalidLineItem(f"Line total for item {item_id} exceeds {MAX_AMOUNT}")

        subtotal += line_total
        total_tax += line_tax
        lines.append(
            LineTotals(
                item_id=item_id,
                quantity=quantity,
                unit_price=unit_price,
                line_total=quantize_money(line_total),
                tax_amount=quantize_money(line_tax),
            )
        )

    if subtotal + total_tax > MAX_AMOUNT:
        raise InvalidLineItem(f"Invoice amounts exceed {MAX_AMOUNT}")
    subtotal = quantize_money(subtotal)
    total_tax = quantize_money(total_tax)
    discount_value = quantize_money(discount_value)
    total = subtotal + total_tax - discount_value
    if total < 0:
        total = ZERO

    return InvoiceTotals(
        subtotal=subtotal,
        total_tax=total_tax,
        discount=discount_value,
        total=total,
        lines=lines,
    )


def format_money(amount: Any, symbol: str) -> str:
    """Render an amount as ``<symbol><grouped amount>`` with two decimals."""
    value = quantize_money(to_decimal(amount))
    return f"{symbol}{value:,.2f}"
