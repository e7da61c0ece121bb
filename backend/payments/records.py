"""
Read-only payment records consumed by the seat status classifier.

Payments are captured elsewhere; this backend only needs to know whether a
completed payment was taken against a particular seat.
"""

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from django.db import models
from django.utils.translation import gettext_lazy as _


class PaymentStatus(models.TextChoices):
    PENDING = "pending", _("Pending")
    COMPLETED = "completed", _("Completed")
    FAILED = "failed", _("Failed")
    REFUNDED = "refunded", _("Refunded")
    VOIDED = "voided", _("Voided")


@dataclass(frozen=True)
class PaymentRecord:
    """A payment as reported by the payment subsystem (no id needed here)."""
    status: str
    metadata: Optional[Mapping[str, Any]] = field(default=None)

    @property
    def is_completed(self) -> bool:
        return self.status == PaymentStatus.COMPLETED

    @property
    def seat_number(self) -> Optional[int]:
        if not self.metadata:
            return None
        return self.metadata.get("seatNumber", self.metadata.get("seat_number"))
