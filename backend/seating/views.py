from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView
import logging

from orders.serializers import build_order_items
from payments.serializers import build_payments
from settings.config import app_settings

from .balances import calculate_all_seat_balances
from .serializers import SeatBalanceSerializer, SeatBalancesRequestSerializer

logger = logging.getLogger(__name__)


class SeatBalancesView(APIView):
    """
    Running balance and lifecycle status for every seat at a table.

    POST body: {items, payments, totalSeats}
    """

    permission_classes = [AllowAny]

    def post(self, request, *args, **kwargs):
        serializer = SeatBalancesRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        items = build_order_items(data["items"])
        payments = build_payments(data.get("payments", []))

        balances = calculate_all_seat_balances(
            items,
            data["total_seats"],
            payments=payments,
            tax_policy=app_settings.get_tax_policy(),
            stale_after=app_settings.get_stale_window(),
        )
        logger.debug("Computed balances for %d seats", len(balances))

        output = SeatBalanceSerializer(
            balances, many=True, context={"currency": app_settings.currency}
        )
        return Response({"seats": output.data}, status=status.HTTP_200_OK)
