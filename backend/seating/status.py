"""
Seat lifecycle classification.

A seat's status is not stored anywhere: it is recomputed from the order's
items and payments every time it is asked for. The checks run in a fixed
order and the first match wins:

1. paid    - a completed payment carries this seat in its metadata
2. empty   - the seat has no items
3. printed - any item has left the "pending" kitchen state
4. active  - any item was created/updated inside the stale window
5. stale   - otherwise
"""

from datetime import datetime, timedelta
from typing import Iterable, Optional, Sequence

from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _
import logging

from orders.records import KitchenStatus, OrderItemRecord
from payments.records import PaymentRecord

logger = logging.getLogger(__name__)

DEFAULT_STALE_WINDOW = timedelta(minutes=5)


class SeatStatus(models.TextChoices):
    EMPTY = "empty", _("Empty")
    STALE = "stale", _("Stale")
    ACTIVE = "active", _("Active")
    PRINTED = "printed", _("Printed")
    PAID = "paid", _("Paid")


def items_for_seat(items: Iterable[OrderItemRecord], seat_number: int) -> list:
    return [item for item in items if item.seat_number == seat_number]


def is_seat_paid(payments: Iterable[PaymentRecord], seat_number: int) -> bool:
    return any(
        payment.is_completed and payment.seat_number == seat_number
        for payment in payments
    )


def determine_seat_status(
    items: Sequence[OrderItemRecord],
    seat_number: int,
    payments: Sequence[PaymentRecord] = (),
    stale_after: timedelta = DEFAULT_STALE_WINDOW,
    now: Optional[datetime] = None,
) -> SeatStatus:
    """
    Classify one seat.

    Args:
        items: All items on the order (filtered to the seat here).
        seat_number: Seat to classify.
        payments: Payments recorded against the order.
        stale_after: How long after its last change an item keeps a seat active.
        now: Reference time, defaults to ``timezone.now()``. Naive values are
            read in the current time zone.
    """
    if is_seat_paid(payments, seat_number):
        return SeatStatus.PAID

    seat_items = items_for_seat(items, seat_number)
    if not seat_items:
        return SeatStatus.EMPTY

    # Kitchen progress outranks recency
    if any(item.effective_kitchen_status != KitchenStatus.PENDING for item in seat_items):
        return SeatStatus.PRINTED

    now = now or timezone.now()
    if timezone.is_naive(now):
        now = timezone.make_aware(now)
    threshold = now - stale_after
    for item in seat_items:
        last_activity = item.last_activity_at
        if last_activity is not None and last_activity > threshold:
            return SeatStatus.ACTIVE

    logger.debug("Seat %s has no activity since %s", seat_number, threshold)
    return SeatStatus.STALE
