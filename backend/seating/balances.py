"""
Per-seat running balances for an order still in progress.

Both calculators are pure functions over a snapshot of items and payments;
the tax rate arrives through an explicit TaxPolicy.
"""

from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from decimal import Decimal
from typing import List, Optional, Sequence

from orders.records import OrderItemRecord
from payments.money import format_amount, quantize
from payments.records import PaymentRecord
from settings.config import TaxPolicy

from .status import DEFAULT_STALE_WINDOW, SeatStatus, determine_seat_status, items_for_seat


@dataclass(frozen=True)
class SeatBalance:
    seat_number: int
    subtotal: Decimal
    tax_amount: Decimal
    total: Decimal
    item_count: int
    status: SeatStatus = SeatStatus.EMPTY


def calculate_seat_balance(
    items: Sequence[OrderItemRecord],
    seat_number: int,
    tax_policy: TaxPolicy = TaxPolicy(),
) -> SeatBalance:
    """
    Subtotal, tax and total for one seat.

    subtotal = Σ (unit_price × quantity) + Σ(modifier prices) × quantity
    tax      = round(subtotal × rate)
    total    = round(subtotal + tax)

    The returned status is a placeholder; ``calculate_all_seat_balances``
    fills it in from the classifier.
    """
    currency = tax_policy.currency
    seat_items = items_for_seat(items, seat_number)

    subtotal = sum(
        (item.unit_price * item.quantity + item.modifier_total * item.quantity for item in seat_items),
        Decimal("0.00"),
    )

    tax_amount = quantize(currency, subtotal * tax_policy.rate)
    total = quantize(currency, subtotal + tax_amount)
    item_count = sum(item.quantity for item in seat_items)

    return SeatBalance(
        seat_number=seat_number,
        subtotal=quantize(currency, subtotal),
        tax_amount=tax_amount,
        total=total,
        item_count=item_count,
    )


def calculate_all_seat_balances(
    items: Sequence[OrderItemRecord],
    total_seats: int,
    payments: Sequence[PaymentRecord] = (),
    tax_policy: TaxPolicy = TaxPolicy(),
    stale_after: timedelta = DEFAULT_STALE_WINDOW,
    now: Optional[datetime] = None,
) -> List[SeatBalance]:
    """
    One SeatBalance for every seat 1..total_seats, including seats with no items.
    """
    balances = []
    for seat_number in range(1, total_seats + 1):
        balance = calculate_seat_balance(items, seat_number, tax_policy)
        status = determine_seat_status(items, seat_number, payments, stale_after=stale_after, now=now)
        balances.append(replace(balance, status=status))
    return balances


def format_seat_balance(amount: Decimal, currency: str = "USD") -> str:
    """Seat badge text: blank for a zero balance."""
    if amount == 0:
        return ""
    return format_amount(currency, amount)
