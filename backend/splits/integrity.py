"""
Integrity checks run against a split session before it may be committed.

Three rules, each reported as a human-readable issue staff can act on:
- coverage: every original item appears on at least one ticket
- conservation: the tickets add up to the original order total
- split groups: the shares of a split add up to the item they came from

The tolerance only absorbs rounding noise; every real mismatch is at least
one cent.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, List, Tuple

from payments.money import format_amount

from .session import SplitSession
from .types import ShareRecord, SplitGroupId

INTEGRITY_TOLERANCE = Decimal("0.01")


@dataclass(frozen=True)
class IntegrityReport:
    issues: Tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.issues

    def to_dict(self) -> dict:
        return {"ok": self.ok, "issues": list(self.issues)}


def split_groups(session: SplitSession) -> Dict[SplitGroupId, List[ShareRecord]]:
    """Current shares of every split group, in ticket order."""
    groups: Dict[SplitGroupId, List[ShareRecord]] = {}
    for share in session.shares:
        if share.split_group_id is not None:
            groups.setdefault(share.split_group_id, []).append(share)
    return groups


def check_integrity(session: SplitSession) -> IntegrityReport:
    issues = []
    currency = session.currency

    covered = {share.original_item_id for share in session.shares}
    for item in session.source_items:
        if item.id not in covered:
            issues.append(f"Item {item.id} is missing from all checks")

    split_total = session.split_total
    if abs(split_total - session.original_total) > INTEGRITY_TOLERANCE:
        issues.append(
            f"Total mismatch: split={format_amount(currency, split_total)} "
            f"vs original={format_amount(currency, session.original_total)}"
        )

    items_by_id = {item.id: item for item in session.source_items}
    for group_id, shares in split_groups(session).items():
        item = items_by_id.get(group_id.original_item_id)
        if item is None:
            continue
        shares_total = sum((share.extended_amount for share in shares), Decimal("0.00"))
        if abs(shares_total - item.extended_amount) > INTEGRITY_TOLERANCE:
            issues.append(
                f"Split item {item.id} fractions sum to {format_amount(currency, shares_total)} "
                f"but original is {format_amount(currency, item.extended_amount)}"
            )

    return IntegrityReport(issues=tuple(issues))
