"""
Immutable order item records handed to the seat and split-check engines.

Records are snapshots produced by order retrieval; the engines never write
back to them.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional, Tuple

from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from payments.money import round_to_cents


class CategoryType(models.TextChoices):
    FOOD = "food", _("Food")
    DRINKS = "drinks", _("Drinks")
    LIQUOR = "liquor", _("Liquor")
    ENTERTAINMENT = "entertainment", _("Entertainment")
    COMBOS = "combos", _("Combos")
    PIZZA = "pizza", _("Pizza")
    RETAIL = "retail", _("Retail")


class KitchenStatus(models.TextChoices):
    PENDING = "pending", _("Pending")
    SENT = "sent", _("Sent to Kitchen")
    PREPARING = "preparing", _("Preparing")
    READY = "ready", _("Ready for Pickup")
    SERVED = "served", _("Served")


@dataclass(frozen=True)
class ModifierRecord:
    name: str
    price: Decimal


@dataclass(frozen=True)
class OrderItemRecord:
    """
    One line of an order as seen by billing.

    ``unit_price`` excludes modifiers; ``line_price`` is what one unit of the
    item actually costs, and ``extended_amount`` is that times the quantity.
    """
    id: str
    name: str
    unit_price: Decimal
    quantity: int = 1
    seat_number: Optional[int] = None
    category_type: Optional[str] = None
    sent_to_kitchen: bool = False
    is_paid: bool = False
    kitchen_status: Optional[str] = None
    modifiers: Tuple[ModifierRecord, ...] = field(default_factory=tuple)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def modifier_total(self) -> Decimal:
        return sum((modifier.price for modifier in self.modifiers), Decimal("0.00"))

    @property
    def line_price(self) -> Decimal:
        return self.unit_price + self.modifier_total

    @property
    def extended_amount(self) -> Decimal:
        return round_to_cents(self.line_price * self.quantity)

    @property
    def effective_kitchen_status(self) -> str:
        # Older tickets only carry the sent flag
        if self.kitchen_status:
            return self.kitchen_status
        return KitchenStatus.SENT if self.sent_to_kitchen else KitchenStatus.PENDING

    @property
    def last_activity_at(self) -> Optional[datetime]:
        # Naive timestamps are taken to be in the current time zone
        stamps = [
            timezone.make_aware(stamp) if timezone.is_naive(stamp) else stamp
            for stamp in (self.updated_at, self.created_at)
            if stamp is not None
        ]
        return max(stamps) if stamps else None
