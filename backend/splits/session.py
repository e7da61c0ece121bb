"""
SplitSession: the in-memory state of one split-check interaction.

A session is a frozen value. Every operation returns a new session and leaves
the receiver untouched, so callers can keep any earlier state around (undo,
diffing, the reset snapshot) without copying. Operations whose preconditions
are not met return the receiver itself.

Usage:
    session = SplitSession.start(items)
    session = session.select_share("share-i2").move_selected_to_new_ticket()
    session = session.split_share("share-i1", 3)
"""

from dataclasses import dataclass, replace
from decimal import Decimal
from typing import List, Optional, Sequence, Tuple
import logging

from orders.records import OrderItemRecord
from payments.money import DEFAULT_CURRENCY, split_evenly
from seating.colors import palette_color

from .partitioning import PartitionStrategyFactory, single_check, ticket_id
from .types import ShareRecord, SplitGroupId, SplitMode, Ticket

logger = logging.getLogger(__name__)

DEFAULT_EVEN_WAYS = 2


@dataclass(frozen=True)
class SessionSnapshot:
    """Tickets and mode exactly as they were right after construction."""
    tickets: Tuple[Ticket, ...]
    mode: SplitMode


@dataclass(frozen=True)
class ShareLocation:
    ticket_index: int
    share_index: int
    share: ShareRecord


@dataclass(frozen=True)
class SplitSession:
    source_items: Tuple[OrderItemRecord, ...]
    tickets: Tuple[Ticket, ...]
    mode: SplitMode
    original_total: Decimal
    snapshot: SessionSnapshot
    selected_share_id: Optional[str] = None
    even_ways: int = DEFAULT_EVEN_WAYS
    default_ways: int = DEFAULT_EVEN_WAYS
    currency: str = DEFAULT_CURRENCY
    next_ticket_number: int = 1
    next_share_number: int = 1
    next_group_sequence: int = 1

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def start(
        cls,
        items: Sequence[OrderItemRecord],
        mode: Optional[str] = None,
        currency: str = DEFAULT_CURRENCY,
        default_ways: int = DEFAULT_EVEN_WAYS,
    ) -> "SplitSession":
        """
        Build the initial partition for an order.

        Without an explicit mode, orders whose unpaid items sit on two or more
        seats open by seat; everything else opens as a single check.
        """
        items = tuple(items)
        shares = [ShareRecord.from_item(item) for item in items]

        if mode is None:
            unpaid_seats = {
                item.seat_number for item in items
                if not item.is_paid and item.seat_number is not None
            }
            mode = SplitMode.BY_SEAT if len(unpaid_seats) >= 2 else SplitMode.CUSTOM
        mode = SplitMode(mode)

        tickets = PartitionStrategyFactory.get_strategy(mode).partition(shares, 1)
        if tickets is None:
            tickets = [single_check(shares, 1)]
        tickets = tuple(tickets)

        original_total = sum((ticket.subtotal for ticket in tickets), Decimal("0.00"))
        logger.info(
            "Started split session: %d items, %d tickets, mode=%s, total=%s",
            len(items), len(tickets), mode, original_total,
        )

        return cls(
            source_items=items,
            tickets=tickets,
            mode=mode,
            original_total=original_total,
            snapshot=SessionSnapshot(tickets=tickets, mode=mode),
            even_ways=default_ways,
            default_ways=default_ways,
            currency=currency,
            next_ticket_number=len(tickets) + 1,
        )

    # ------------------------------------------------------------------
    # Derived values
    # ------------------------------------------------------------------

    @property
    def split_total(self) -> Decimal:
        return sum((ticket.subtotal for ticket in self.tickets), Decimal("0.00"))

    @property
    def shares(self) -> List[ShareRecord]:
        return [share for ticket in self.tickets for share in ticket.shares]

    def locate_share(self, share_id: Optional[str]) -> Optional[ShareLocation]:
        for ticket_index, ticket in enumerate(self.tickets):
            for share_index, share in enumerate(ticket.shares):
                if share.id == share_id:
                    return ShareLocation(ticket_index, share_index, share)
        return None

    def ticket_position(self, ticket_id: str) -> Optional[int]:
        for index, ticket in enumerate(self.tickets):
            if ticket.id == ticket_id:
                return index
        return None

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def _with_tickets(self, tickets, **changes) -> "SplitSession":
        return replace(self, tickets=tuple(tickets), **changes)

    def select_share(self, share_id: Optional[str]) -> "SplitSession":
        """Toggle selection; paid and unknown shares cannot be selected."""
        if share_id is None:
            return replace(self, selected_share_id=None)

        location = self.locate_share(share_id)
        if location is None:
            logger.debug("Ignoring selection of unknown share %s", share_id)
            return self
        if location.share.is_paid:
            logger.debug("Ignoring selection of paid share %s", share_id)
            return self

        if self.selected_share_id == share_id:
            return replace(self, selected_share_id=None)
        return replace(self, selected_share_id=share_id)

    def move_selected_to(self, target_ticket_id: str) -> "SplitSession":
        """Move the selected share onto an existing ticket."""
        if self.selected_share_id is None:
            logger.debug("Move requested with nothing selected")
            return self

        location = self.locate_share(self.selected_share_id)
        target_index = self.ticket_position(target_ticket_id)
        if location is None or target_index is None:
            logger.debug(
                "Cannot move share %s to ticket %s", self.selected_share_id, target_ticket_id
            )
            return self

        tickets = list(self.tickets)
        tickets[location.ticket_index] = tickets[location.ticket_index].without_share(location.share.id)
        tickets[target_index] = tickets[target_index].appending(location.share)

        return self._with_tickets(tickets, selected_share_id=None)

    def move_selected_to_new_ticket(self) -> "SplitSession":
        """Move the selected share onto a fresh "Check N" ticket."""
        location = self.locate_share(self.selected_share_id) if self.selected_share_id else None
        if location is None:
            logger.debug("New-check move requested without a movable selection")
            return self

        number = self.next_ticket_number
        new_ticket = Ticket(
            id=ticket_id(number),
            label=f"Check {number}",
            color=palette_color(number),
            shares=(location.share,),
        )

        tickets = list(self.tickets)
        tickets[location.ticket_index] = tickets[location.ticket_index].without_share(location.share.id)
        tickets.append(new_ticket)

        return self._with_tickets(
            tickets, selected_share_id=None, next_ticket_number=number + 1
        )

    def split_share(self, share_id: str, ways: int) -> "SplitSession":
        """
        Replace a share, in place, with ``ways`` shares whose amounts sum
        exactly to its extended amount. The first shares absorb leftover cents.
        """
        if ways < 2:
            logger.debug("Ignoring split of %s into %s ways", share_id, ways)
            return self

        location = self.locate_share(share_id)
        if location is None:
            logger.debug("Ignoring split of unknown share %s", share_id)
            return self

        share = location.share
        if share.is_paid:
            logger.debug("Ignoring split of paid share %s", share_id)
            return self

        # A re-split stays in its item's group so group totals keep matching the item
        group_sequence = self.next_group_sequence
        group_id = share.split_group_id
        if group_id is None:
            group_id = SplitGroupId(share.original_item_id, group_sequence)
            group_sequence += 1

        amounts = split_evenly(self.currency, share.extended_amount, ways)
        new_shares = tuple(
            replace(
                share,
                id=f"split-{self.next_share_number + position}",
                amount=amount,
                quantity=1,
                split_group_id=group_id,
                fraction_label=f"{position + 1}/{ways}",
            )
            for position, amount in enumerate(amounts)
        )

        ticket = self.tickets[location.ticket_index]
        shares = ticket.shares
        ticket = ticket.with_shares(
            shares[:location.share_index] + new_shares + shares[location.share_index + 1:]
        )
        tickets = list(self.tickets)
        tickets[location.ticket_index] = ticket

        selected = None if self.selected_share_id == share_id else self.selected_share_id
        return self._with_tickets(
            tickets,
            selected_share_id=selected,
            next_share_number=self.next_share_number + ways,
            next_group_sequence=group_sequence,
        )

    def apply_mode(self, mode: str) -> "SplitSession":
        """Re-derive the ticket list from every current share under ``mode``."""
        mode = SplitMode(mode)
        strategy = PartitionStrategyFactory.get_strategy(mode)
        tickets = strategy.partition(self.shares, self.next_ticket_number)

        if tickets is None:
            return replace(self, mode=mode, selected_share_id=None)

        logger.debug("Applied %s mode: %d tickets", mode, len(tickets))
        return self._with_tickets(
            tickets,
            mode=mode,
            selected_share_id=None,
            next_ticket_number=self.next_ticket_number + len(tickets),
        )

    def reset(self) -> "SplitSession":
        """Back to the construction-time layout and mode."""
        return self._with_tickets(
            self.snapshot.tickets,
            mode=self.snapshot.mode,
            selected_share_id=None,
            even_ways=self.default_ways,
            next_ticket_number=len(self.snapshot.tickets) + 1,
        )

    def set_even_ways(self, ways: int) -> "SplitSession":
        if ways < 2:
            logger.debug("Ignoring even split of %s ways", ways)
            return self
        return replace(self, even_ways=ways)
