"""
Per-check pricing for a split session.

Tax is computed once for the whole order and then allocated across checks in
proportion to their subtotals, so the checks' tax and totals add up to the
order's to the cent no matter how the order was cut.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import List

from payments.money import allocate_minor, from_minor, quantize, to_minor, validate_minor_sum
from settings.config import TaxPolicy

from .session import SplitSession


@dataclass(frozen=True)
class TicketPricing:
    ticket_id: str
    ticket_index: int
    label: str
    subtotal: Decimal
    tax_amount: Decimal
    total: Decimal

    def to_dict(self) -> dict:
        return {
            "ticketId": self.ticket_id,
            "ticketIndex": self.ticket_index,
            "label": self.label,
            "subtotal": str(self.subtotal),
            "taxAmount": str(self.tax_amount),
            "total": str(self.total),
        }


def price_tickets(session: SplitSession, tax_policy: TaxPolicy) -> List[TicketPricing]:
    currency = tax_policy.currency
    subtotals_minor = [to_minor(currency, ticket.subtotal) for ticket in session.tickets]

    order_tax_minor = to_minor(currency, quantize(currency, session.split_total) * tax_policy.rate)

    # Credit-only checks take no share of the tax
    weights = [max(subtotal, 0) for subtotal in subtotals_minor]
    taxes_minor = allocate_minor(weights, order_tax_minor)
    if sum(weights):
        validate_minor_sum(taxes_minor, order_tax_minor, context="for check tax allocation")

    pricing = []
    for index, (ticket, subtotal_minor, tax_minor) in enumerate(
        zip(session.tickets, subtotals_minor, taxes_minor), start=1
    ):
        pricing.append(
            TicketPricing(
                ticket_id=ticket.id,
                ticket_index=index,
                label=ticket.label,
                subtotal=from_minor(currency, subtotal_minor),
                tax_amount=from_minor(currency, tax_minor),
                total=from_minor(currency, subtotal_minor + tax_minor),
            )
        )
    return pricing
