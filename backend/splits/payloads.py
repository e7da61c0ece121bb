"""
Commit payloads handed to the settlement layer.

Two structures describe a finished split completely:

- assignments: whole items and the (1-based) ticket each one lands on
- split items: for every split item, the fraction of it each ticket carries

Tickets are addressed by position only; durable ticket ids are assigned by
whoever persists the split.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, List, Sequence, Tuple
import logging

from .exceptions import SplitIntegrityError
from .integrity import check_integrity
from .session import SplitSession

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TicketAssignment:
    ticket_index: int
    item_ids: Tuple[str, ...]

    def to_dict(self) -> dict:
        return {"ticketIndex": self.ticket_index, "itemIds": list(self.item_ids)}


@dataclass(frozen=True)
class SplitFraction:
    ticket_index: int
    fraction: Decimal

    def to_dict(self) -> dict:
        return {"ticketIndex": self.ticket_index, "fraction": float(self.fraction)}


@dataclass(frozen=True)
class SplitItemPayload:
    original_item_id: str
    fractions: Tuple[SplitFraction, ...]

    def to_dict(self) -> dict:
        return {
            "originalItemId": self.original_item_id,
            "fractions": [fraction.to_dict() for fraction in self.fractions],
        }


@dataclass(frozen=True)
class AssignmentValidation:
    missing_item_ids: Tuple[str, ...]
    duplicate_item_ids: Tuple[str, ...]

    @property
    def valid(self) -> bool:
        return not self.missing_item_ids and not self.duplicate_item_ids


def get_assignments(session: SplitSession) -> List[TicketAssignment]:
    """Whole (never split) items per ticket; tickets without any are left out."""
    assignments = []
    for index, ticket in enumerate(session.tickets, start=1):
        item_ids = tuple(
            share.original_item_id for share in ticket.shares if not share.is_split
        )
        if item_ids:
            assignments.append(TicketAssignment(ticket_index=index, item_ids=item_ids))
    return assignments


def get_split_items_payload(session: SplitSession) -> List[SplitItemPayload]:
    """
    Fractional distribution of every split group with more than one share.

    Each fraction is the share's amount over the group's total; fractions of
    a group sum to 1. Zero-value shares carry no fraction.
    """
    groups = {}
    for index, ticket in enumerate(session.tickets, start=1):
        for share in ticket.shares:
            if share.split_group_id is not None:
                groups.setdefault(share.split_group_id, []).append((index, share))

    payload = []
    for group_id, members in groups.items():
        if len(members) <= 1:
            continue

        group_total = sum((share.extended_amount for _, share in members), Decimal("0.00"))
        if group_total == 0:
            logger.debug("Skipping zero-value split group %s", group_id)
            continue

        fractions = tuple(
            SplitFraction(ticket_index=index, fraction=share.extended_amount / group_total)
            for index, share in members
            if share.extended_amount != 0
        )
        payload.append(
            SplitItemPayload(original_item_id=group_id.original_item_id, fractions=fractions)
        )
    return payload


def build_commit_payload(session: SplitSession) -> dict:
    """
    Wire payload for the settlement layer.

    Raises:
        SplitIntegrityError: if the session fails its integrity check.
    """
    report = check_integrity(session)
    if not report.ok:
        logger.warning("Blocked split commit: %s", "; ".join(report.issues))
        raise SplitIntegrityError(report.issues)

    assignments = get_assignments(session)
    split_items = get_split_items_payload(session)

    return {
        "assignments": [assignment.to_dict() for assignment in assignments],
        "splitItems": [item.to_dict() for item in split_items],
    }


def validate_assignments(
    item_ids: Iterable[str], assignments: Sequence[TicketAssignment]
) -> AssignmentValidation:
    """
    Check that a whole-item assignment list places every item exactly once.

    For the settlement layer to verify assignments it received; sessions
    built here are already covered by ``check_integrity``.
    """
    seen = set()
    duplicates = []
    for assignment in assignments:
        for item_id in assignment.item_ids:
            if item_id in seen and item_id not in duplicates:
                duplicates.append(item_id)
            seen.add(item_id)

    missing = tuple(item_id for item_id in item_ids if item_id not in seen)
    return AssignmentValidation(missing_item_ids=missing, duplicate_item_ids=tuple(duplicates))
