"""
Tests for SplitSession construction and transitions.
"""

import pytest
from decimal import Decimal

from seating.colors import SEAT_COLORS, SEAT_EMPTY_COLOR
from splits.partitioning import BUSINESS_COLOR, PLEASURE_COLOR
from splits.session import SplitSession
from splits.types import SplitGroupId, SplitMode


def labels(session):
    return [ticket.label for ticket in session.tickets]


def grouping(session):
    """Ticket label -> share ids, ignoring ticket ids."""
    return [(ticket.label, [share.id for share in ticket.shares]) for ticket in session.tickets]


@pytest.fixture
def two_seat_items(make_item):
    return [
        make_item("i1", "10.00", seat_number=1),
        make_item("i2", "15.00", seat_number=2),
    ]


class TestStart:
    """Test the initial partition of an order."""

    def test_two_unpaid_seats_open_by_seat(self, two_seat_items):
        session = SplitSession.start(two_seat_items)

        assert session.mode == SplitMode.BY_SEAT
        assert labels(session) == ["Seat 1", "Seat 2"]
        assert [ticket.subtotal for ticket in session.tickets] == [Decimal("10.00"), Decimal("15.00")]
        assert session.original_total == Decimal("25.00")

    def test_single_seat_opens_custom(self, make_item):
        items = [make_item("i1", seat_number=1), make_item("i2", seat_number=1), make_item("i3")]

        session = SplitSession.start(items)

        assert session.mode == SplitMode.CUSTOM
        assert labels(session) == ["Check 1"]
        assert len(session.tickets[0].shares) == 3

    def test_paid_items_do_not_count_towards_seats(self, make_item):
        items = [make_item("i1", seat_number=1), make_item("i2", seat_number=2, is_paid=True)]
        assert SplitSession.start(items).mode == SplitMode.CUSTOM

    def test_unseated_items_trail_in_no_seat_ticket(self, scenario_items):
        session = SplitSession.start(scenario_items)

        assert grouping(session) == [
            ("Seat 1", ["share-i1", "share-i2"]),
            ("Seat 2", ["share-i3"]),
            ("No Seat", ["share-i4"]),
        ]
        assert session.tickets[0].color == SEAT_COLORS[0]
        assert session.tickets[2].color == SEAT_EMPTY_COLOR
        assert session.tickets[0].seat_number == 1

    def test_seats_sorted_ascending(self, make_item):
        items = [make_item("a", seat_number=5), make_item("b", seat_number=2), make_item("c", seat_number=9)]
        assert labels(SplitSession.start(items)) == ["Seat 2", "Seat 5", "Seat 9"]

    def test_forced_mode(self, scenario_items):
        session = SplitSession.start(scenario_items, mode=SplitMode.BUSINESS_PLEASURE)

        assert session.mode == SplitMode.BUSINESS_PLEASURE
        assert labels(session) == ["Business", "Pleasure"]

    def test_forced_even_mode_is_a_single_check(self, scenario_items):
        session = SplitSession.start(scenario_items, mode="even")

        assert session.mode == SplitMode.EVEN
        assert labels(session) == ["Check 1"]

    def test_share_carries_quantity_and_modifiers(self, make_item):
        item = make_item("i1", "4.00", quantity=3, modifiers=[("Syrup", "0.50")])

        share = SplitSession.start([item]).shares[0]

        assert share.amount == Decimal("4.50")
        assert share.quantity == 3
        assert share.extended_amount == Decimal("13.50")

    def test_empty_order(self):
        session = SplitSession.start([])

        assert labels(session) == ["Check 1"]
        assert session.original_total == Decimal("0.00")


class TestSelectShare:
    """Test share selection."""

    def test_toggle(self, two_seat_items):
        session = SplitSession.start(two_seat_items)

        selected = session.select_share("share-i1")
        assert selected.selected_share_id == "share-i1"
        assert selected.select_share("share-i1").selected_share_id is None

    def test_select_other_replaces(self, two_seat_items):
        session = SplitSession.start(two_seat_items).select_share("share-i1").select_share("share-i2")
        assert session.selected_share_id == "share-i2"

    def test_paid_share_cannot_be_selected(self, make_item):
        session = SplitSession.start([make_item("i1", is_paid=True)])
        assert session.select_share("share-i1") is session

    def test_unknown_share_is_ignored(self, two_seat_items):
        session = SplitSession.start(two_seat_items)
        assert session.select_share("nope") is session

    def test_none_clears(self, two_seat_items):
        session = SplitSession.start(two_seat_items).select_share("share-i1")
        assert session.select_share(None).selected_share_id is None

    def test_original_session_is_untouched(self, two_seat_items):
        session = SplitSession.start(two_seat_items)
        session.select_share("share-i1")
        assert session.selected_share_id is None


class TestMoves:
    """Test moving the selected share between checks."""

    def test_move_to_existing_ticket(self, two_seat_items):
        session = SplitSession.start(two_seat_items)

        moved = session.select_share("share-i1").move_selected_to("check-2")

        assert grouping(moved) == [("Seat 1", []), ("Seat 2", ["share-i2", "share-i1"])]
        assert moved.tickets[1].subtotal == Decimal("25.00")
        assert moved.selected_share_id is None

    def test_move_without_selection_is_noop(self, two_seat_items):
        session = SplitSession.start(two_seat_items)
        assert session.move_selected_to("check-2") is session

    def test_move_to_unknown_ticket_keeps_share(self, two_seat_items):
        session = SplitSession.start(two_seat_items).select_share("share-i1")

        assert session.move_selected_to("check-99") is session
        assert len(session.shares) == 2

    def test_move_to_new_ticket(self, two_seat_items):
        session = SplitSession.start(two_seat_items)

        moved = session.select_share("share-i1").move_selected_to_new_ticket()

        assert labels(moved) == ["Seat 1", "Seat 2", "Check 3"]
        assert moved.tickets[2].id == "check-3"
        assert moved.tickets[2].color == SEAT_COLORS[2]
        assert [share.id for share in moved.tickets[2].shares] == ["share-i1"]
        assert moved.tickets[0].shares == ()

    def test_new_ticket_numbers_keep_increasing(self, scenario_items):
        session = SplitSession.start(scenario_items, mode="custom")

        session = session.select_share("share-i1").move_selected_to_new_ticket()
        session = session.select_share("share-i2").move_selected_to_new_ticket()

        assert labels(session) == ["Check 1", "Check 2", "Check 3"]
        assert len({ticket.id for ticket in session.tickets}) == 3

    def test_new_ticket_without_selection_is_noop(self, two_seat_items):
        session = SplitSession.start(two_seat_items)
        assert session.move_selected_to_new_ticket() is session


class TestSplitShare:
    """Test splitting a share into equal parts."""

    def test_ten_dollars_three_ways(self, make_item):
        session = SplitSession.start([make_item("i1", "10.00")])

        split = session.split_share("share-i1", 3)

        shares = split.tickets[0].shares
        assert [share.amount for share in shares] == [Decimal("3.34"), Decimal("3.33"), Decimal("3.33")]
        assert [share.fraction_label for share in shares] == ["1/3", "2/3", "3/3"]
        assert {share.split_group_id for share in shares} == {SplitGroupId("i1", 1)}
        assert split.split_total == Decimal("10.00")

    def test_split_is_in_place(self, scenario_items):
        session = SplitSession.start(scenario_items, mode="custom")

        split = session.split_share("share-i2", 2)

        ids = [share.id for share in split.tickets[0].shares]
        assert ids == ["share-i1", "split-1", "split-2", "share-i3", "share-i4"]

    def test_split_inherits_flags(self, make_item):
        item = make_item("i1", "9.00", seat_number=4, category_type="liquor", sent_to_kitchen=True)
        session = SplitSession.start([item])

        for share in session.split_share("share-i1", 3).shares:
            assert share.seat_number == 4
            assert share.category_type == "liquor"
            assert share.is_sent_to_kitchen
            assert share.original_item_id == "i1"

    def test_split_uses_extended_amount(self, make_item):
        session = SplitSession.start([make_item("i1", "2.50", quantity=3)])

        shares = session.split_share("share-i1", 2).shares

        assert [share.amount for share in shares] == [Decimal("3.75"), Decimal("3.75")]
        assert all(share.quantity == 1 for share in shares)

    @pytest.mark.parametrize("ways", [0, 1, -3])
    def test_fewer_than_two_ways_is_noop(self, make_item, ways):
        session = SplitSession.start([make_item("i1")])
        assert session.split_share("share-i1", ways) is session

    def test_paid_share_is_not_split(self, make_item):
        session = SplitSession.start([make_item("i1", is_paid=True)])
        assert session.split_share("share-i1", 2) is session

    def test_unknown_share_is_noop(self, make_item):
        session = SplitSession.start([make_item("i1")])
        assert session.split_share("share-x", 2) is session

    @pytest.mark.parametrize("ways", range(2, 11))
    @pytest.mark.parametrize("price", ["0.01", "0.07", "10.00", "33.33", "9999.99"])
    def test_shares_sum_exactly(self, make_item, price, ways):
        session = SplitSession.start([make_item("i1", price)])

        shares = session.split_share("share-i1", ways).shares

        assert len(shares) == ways
        assert sum(share.amount for share in shares) == Decimal(price)

    def test_resplit_stays_in_group(self, make_item):
        session = SplitSession.start([make_item("i1", "10.00")]).split_share("share-i1", 2)

        resplit = session.split_share("split-1", 2)

        assert [share.id for share in resplit.shares] == ["split-3", "split-4", "split-2"]
        assert {share.split_group_id for share in resplit.shares} == {SplitGroupId("i1", 1)}
        assert resplit.split_total == Decimal("10.00")

    def test_each_split_gets_its_own_group(self, make_item):
        session = SplitSession.start([make_item("i1", "4.00"), make_item("i2", "6.00")])

        session = session.split_share("share-i1", 2).split_share("share-i2", 2)

        groups = {share.split_group_id for share in session.shares}
        assert groups == {SplitGroupId("i1", 1), SplitGroupId("i2", 2)}

    def test_splitting_selected_share_clears_selection(self, make_item):
        session = SplitSession.start([make_item("i1")]).select_share("share-i1")
        assert session.split_share("share-i1", 2).selected_share_id is None


class TestApplyMode:
    """Test repartitioning by mode."""

    def test_by_seat_then_custom(self, scenario_items):
        session = SplitSession.start(scenario_items).apply_mode("custom")

        assert labels(session) == ["Check 1"]
        assert session.mode == SplitMode.CUSTOM
        assert session.split_total == Decimal("25.00")

    def test_by_seat_without_seats_falls_back(self, make_item):
        session = SplitSession.start([make_item("i1"), make_item("i2")])

        assert labels(session.apply_mode("by_seat")) == ["Check 1"]

    def test_business_pleasure(self, make_item):
        items = [
            make_item("i1", category_type="food"),
            make_item("i2", category_type="liquor"),
            make_item("i3", category_type="entertainment"),
            make_item("i4", category_type="mystery"),
            make_item("i5"),
        ]

        session = SplitSession.start(items).apply_mode("business_pleasure")

        assert grouping(session) == [
            ("Business", ["share-i1", "share-i4", "share-i5"]),
            ("Pleasure", ["share-i2", "share-i3"]),
        ]
        assert [ticket.color for ticket in session.tickets] == [BUSINESS_COLOR, PLEASURE_COLOR]

    def test_business_ticket_always_present(self, make_item):
        session = SplitSession.start([make_item("i1", category_type="liquor")]).apply_mode("business_pleasure")

        assert grouping(session) == [("Business", []), ("Pleasure", ["share-i1"])]

    def test_pleasure_omitted_when_empty(self, make_item):
        session = SplitSession.start([make_item("i1", category_type="food")]).apply_mode("business_pleasure")
        assert labels(session) == ["Business"]

    def test_even_only_changes_mode(self, scenario_items):
        session = SplitSession.start(scenario_items).select_share("share-i1")

        even = session.apply_mode("even")

        assert even.mode == SplitMode.EVEN
        assert even.tickets == session.tickets
        assert even.selected_share_id is None

    def test_clears_selection(self, scenario_items):
        session = SplitSession.start(scenario_items).select_share("share-i1")
        assert session.apply_mode("custom").selected_share_id is None

    def test_keeps_split_shares(self, two_seat_items):
        session = SplitSession.start(two_seat_items).split_share("share-i2", 3)

        regrouped = session.apply_mode("custom").apply_mode("by_seat")

        assert grouping(regrouped) == [
            ("Seat 1", ["share-i1"]),
            ("Seat 2", ["split-1", "split-2", "split-3"]),
        ]

    @pytest.mark.parametrize("mode", ["by_seat", "custom", "business_pleasure"])
    def test_reapplying_is_idempotent(self, scenario_items, mode):
        once = SplitSession.start(scenario_items).apply_mode(mode)
        twice = once.apply_mode(mode)

        assert grouping(twice) == grouping(once)

    def test_fresh_ticket_ids(self, two_seat_items):
        session = SplitSession.start(two_seat_items)

        regrouped = session.apply_mode("by_seat")

        assert [ticket.id for ticket in regrouped.tickets] == ["check-3", "check-4"]

    def test_unknown_mode(self, two_seat_items):
        with pytest.raises(ValueError):
            SplitSession.start(two_seat_items).apply_mode("alphabetical")


class TestReset:
    """Test restoring the starting layout."""

    def test_round_trip(self, scenario_items):
        session = SplitSession.start(scenario_items)

        changed = (
            session.split_share("share-i1", 3)
            .select_share("split-2")
            .move_selected_to_new_ticket()
            .apply_mode("business_pleasure")
            .set_even_ways(4)
        )
        restored = changed.reset()

        assert restored.tickets == session.tickets
        assert restored.mode == session.mode
        assert restored.split_total == session.split_total == session.original_total
        assert restored.even_ways == session.even_ways
        assert restored.selected_share_id is None

    def test_new_tickets_after_reset_do_not_collide(self, two_seat_items):
        session = SplitSession.start(two_seat_items).reset()

        moved = session.select_share("share-i1").move_selected_to_new_ticket()

        assert len({ticket.id for ticket in moved.tickets}) == 3

    def test_resplit_after_reset_mints_new_share_ids(self, make_item):
        session = SplitSession.start([make_item("i1", "6.00")])

        again = session.split_share("share-i1", 2).reset().split_share("share-i1", 2)

        assert [share.id for share in again.shares] == ["split-3", "split-4"]


class TestEvenWays:
    """Test the even-split ways setting."""

    def test_defaults(self, two_seat_items):
        assert SplitSession.start(two_seat_items).even_ways == 2
        assert SplitSession.start(two_seat_items, default_ways=3).even_ways == 3

    def test_set(self, two_seat_items):
        assert SplitSession.start(two_seat_items).set_even_ways(5).even_ways == 5

    def test_below_two_is_noop(self, two_seat_items):
        session = SplitSession.start(two_seat_items)
        assert session.set_even_ways(1) is session


class TestScenario:
    """Test a two-seat split end to end."""

    def test_split_and_move_preserves_total(self, two_seat_items):
        session = SplitSession.start(two_seat_items).apply_mode("by_seat")
        assert labels(session) == ["Seat 1", "Seat 2"]
        assert session.split_total == Decimal("25.00")

        session = session.split_share("share-i2", 3)
        assert [share.amount for share in session.tickets[1].shares] == [Decimal("5.00")] * 3

        session = session.select_share("split-2").move_selected_to_new_ticket()

        assert len(session.tickets) == 3
        assert session.tickets[2].subtotal == Decimal("5.00")
        assert session.split_total == Decimal("25.00")
