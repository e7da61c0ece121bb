"""
Value types for the split-check engine.

Everything here is immutable: transitions build new tuples of shares and
tickets instead of mutating the old ones, so a reference to an earlier state
(the reset snapshot, for instance) can never be changed behind its back.
"""

from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Iterable, Optional, Tuple

from django.db import models
from django.utils.translation import gettext_lazy as _

from orders.records import OrderItemRecord


class SplitMode(models.TextChoices):
    BY_SEAT = "by_seat", _("By Seat")
    CUSTOM = "custom", _("Custom")
    EVEN = "even", _("Even")
    BUSINESS_PLEASURE = "business_pleasure", _("Business / Pleasure")


@dataclass(frozen=True, order=True)
class SplitGroupId:
    """
    Identity shared by every share descended from one split of an item.

    The sequence comes from the owning session, so two groups never collide
    even when they originate from the same item.
    """
    original_item_id: str
    sequence: int

    def __str__(self) -> str:
        return f"{self.original_item_id}#{self.sequence}"


@dataclass(frozen=True)
class ShareRecord:
    """An allocatable slice of an item's value."""
    id: str
    original_item_id: str
    name: str
    amount: Decimal
    quantity: int = 1
    seat_number: Optional[int] = None
    category_type: Optional[str] = None
    is_sent_to_kitchen: bool = False
    is_paid: bool = False
    split_group_id: Optional[SplitGroupId] = None
    fraction_label: Optional[str] = None

    @property
    def extended_amount(self) -> Decimal:
        return self.amount * self.quantity

    @property
    def is_split(self) -> bool:
        return self.split_group_id is not None

    @classmethod
    def from_item(cls, item: OrderItemRecord) -> "ShareRecord":
        """Whole-item share; keeps the item's quantity and per-unit line price."""
        return cls(
            id=f"share-{item.id}",
            original_item_id=item.id,
            name=item.name,
            amount=item.line_price,
            quantity=item.quantity,
            seat_number=item.seat_number,
            category_type=item.category_type,
            is_sent_to_kitchen=item.sent_to_kitchen,
            is_paid=item.is_paid,
        )


@dataclass(frozen=True)
class Ticket:
    """One independently payable check."""
    id: str
    label: str
    color: str
    shares: Tuple[ShareRecord, ...] = ()
    seat_number: Optional[int] = None

    @property
    def subtotal(self) -> Decimal:
        return sum((share.extended_amount for share in self.shares), Decimal("0.00"))

    def with_shares(self, shares: Iterable[ShareRecord]) -> "Ticket":
        return replace(self, shares=tuple(shares))

    def without_share(self, share_id: str) -> "Ticket":
        return self.with_shares(share for share in self.shares if share.id != share_id)

    def appending(self, share: ShareRecord) -> "Ticket":
        return self.with_shares(self.shares + (share,))
