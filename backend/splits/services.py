"""
Split-check service: glue between request data and the pure engine.

Nothing here is stored; every call starts from the items the client sends
and replays its operations.
"""

import logging

from orders.serializers import build_order_items
from settings.config import app_settings

from .integrity import check_integrity
from .operations import replay
from .payloads import build_commit_payload, get_assignments, get_split_items_payload
from .pricing import price_tickets
from .serializers import SplitSessionSerializer
from .session import SplitSession

logger = logging.getLogger(__name__)


class SplitCheckService:
    """Builds, previews and commits split sessions from validated request data."""

    @staticmethod
    def session_from_request(validated_data) -> SplitSession:
        items = build_order_items(validated_data["items"])
        session = SplitSession.start(
            items,
            mode=validated_data.get("mode"),
            currency=app_settings.currency,
            default_ways=app_settings.split_default_ways,
        )
        return replay(session, validated_data.get("operations", []))

    @staticmethod
    def preview(session: SplitSession) -> dict:
        tax_policy = app_settings.get_tax_policy()
        data = dict(SplitSessionSerializer(session).data)
        data["integrity"] = check_integrity(session).to_dict()
        data["assignments"] = [assignment.to_dict() for assignment in get_assignments(session)]
        data["splitItems"] = [item.to_dict() for item in get_split_items_payload(session)]
        data["pricing"] = [ticket.to_dict() for ticket in price_tickets(session, tax_policy)]
        return data

    @staticmethod
    def commit(session: SplitSession) -> dict:
        payload = build_commit_payload(session)
        logger.info(
            "Split ready to commit: %d assignments, %d split items",
            len(payload["assignments"]), len(payload["splitItems"]),
        )
        return payload
