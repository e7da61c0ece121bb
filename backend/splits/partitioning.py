"""
Partition strategies: how a flat list of shares becomes a list of tickets.

Each strategy numbers the tickets it creates from ``first_number`` upward;
the session owns the counter and advances it by however many tickets came
back.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Sequence

from orders.records import CategoryType
from seating.colors import SEAT_EMPTY_COLOR, palette_color, seat_color

from .types import ShareRecord, SplitMode, Ticket

NO_SEAT_LABEL = "No Seat"
BUSINESS_LABEL = "Business"
PLEASURE_LABEL = "Pleasure"
BUSINESS_COLOR = "#10b981"
PLEASURE_COLOR = "#8b5cf6"

# Everything else (food, drinks, combos, pizza, retail, unknown) bills as business
PLEASURE_CATEGORIES = frozenset({CategoryType.LIQUOR, CategoryType.ENTERTAINMENT})


def ticket_id(number: int) -> str:
    return f"check-{number}"


def single_check(shares: Sequence[ShareRecord], number: int) -> Ticket:
    """Everything on one "Check 1" ticket."""
    return Ticket(
        id=ticket_id(number),
        label="Check 1",
        color=palette_color(1),
        shares=tuple(shares),
    )


class PartitionStrategy(ABC):
    """The interface for a partition strategy."""

    @abstractmethod
    def partition(self, shares: Sequence[ShareRecord], first_number: int) -> Optional[List[Ticket]]:
        """Return the new ticket list, or None to keep the current layout."""
        pass


class BySeatStrategy(PartitionStrategy):
    """One ticket per seat in ascending order, then a trailing "No Seat" ticket."""

    def partition(self, shares, first_number):
        by_seat: Dict[int, List[ShareRecord]] = {}
        no_seat: List[ShareRecord] = []

        for share in shares:
            if share.seat_number is not None:
                by_seat.setdefault(share.seat_number, []).append(share)
            else:
                no_seat.append(share)

        if not by_seat:
            return [single_check(shares, first_number)]

        tickets = []
        number = first_number
        for seat_number in sorted(by_seat):
            tickets.append(
                Ticket(
                    id=ticket_id(number),
                    label=f"Seat {seat_number}",
                    color=seat_color(seat_number),
                    shares=tuple(by_seat[seat_number]),
                    seat_number=seat_number,
                )
            )
            number += 1

        if no_seat:
            tickets.append(
                Ticket(
                    id=ticket_id(number),
                    label=NO_SEAT_LABEL,
                    color=SEAT_EMPTY_COLOR,
                    shares=tuple(no_seat),
                )
            )

        return tickets


class CustomStrategy(PartitionStrategy):
    """Collapse everything onto a single check."""

    def partition(self, shares, first_number):
        return [single_check(shares, first_number)]


class EvenStrategy(PartitionStrategy):
    """
    Even mode is a display mode only. Splitting a total evenly happens through
    SplitSession.split_share with the chosen number of ways.
    """

    def partition(self, shares, first_number):
        return None


class BusinessPleasureStrategy(PartitionStrategy):
    """Business ticket always; Pleasure ticket only when something qualifies."""

    def partition(self, shares, first_number):
        business = [share for share in shares if share.category_type not in PLEASURE_CATEGORIES]
        pleasure = [share for share in shares if share.category_type in PLEASURE_CATEGORIES]

        tickets = [
            Ticket(
                id=ticket_id(first_number),
                label=BUSINESS_LABEL,
                color=BUSINESS_COLOR,
                shares=tuple(business),
            )
        ]
        if pleasure:
            tickets.append(
                Ticket(
                    id=ticket_id(first_number + 1),
                    label=PLEASURE_LABEL,
                    color=PLEASURE_COLOR,
                    shares=tuple(pleasure),
                )
            )
        return tickets


class PartitionStrategyFactory:
    """
    Factory returning the partition strategy for a split mode.
    """

    _strategies = {
        SplitMode.BY_SEAT: BySeatStrategy,
        SplitMode.CUSTOM: CustomStrategy,
        SplitMode.EVEN: EvenStrategy,
        SplitMode.BUSINESS_PLEASURE: BusinessPleasureStrategy,
    }

    @classmethod
    def get_strategy(cls, mode) -> PartitionStrategy:
        strategy_class = cls._strategies.get(mode)
        if strategy_class is None:
            raise ValueError(f"Unknown split mode: {mode!r}")
        return strategy_class()
