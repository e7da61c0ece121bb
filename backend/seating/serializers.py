from rest_framework import serializers

from orders.serializers import OrderItemRecordSerializer
from payments.serializers import PaymentRecordSerializer

from .balances import format_seat_balance
from .colors import SEAT_STATUS_COLORS, seat_color
from .status import SeatStatus


class SeatBalancesRequestSerializer(serializers.Serializer):
    items = OrderItemRecordSerializer(many=True)
    payments = PaymentRecordSerializer(many=True, required=False)
    totalSeats = serializers.IntegerField(source="total_seats", min_value=0, max_value=100)


class SeatBalanceSerializer(serializers.Serializer):
    seatNumber = serializers.IntegerField(source="seat_number")
    subtotal = serializers.DecimalField(max_digits=12, decimal_places=2)
    taxAmount = serializers.DecimalField(source="tax_amount", max_digits=12, decimal_places=2)
    total = serializers.DecimalField(max_digits=12, decimal_places=2)
    itemCount = serializers.IntegerField(source="item_count")
    status = serializers.ChoiceField(choices=SeatStatus.choices)
    color = serializers.SerializerMethodField()
    statusColor = serializers.SerializerMethodField()
    badge = serializers.SerializerMethodField()

    def get_color(self, obj):
        return seat_color(obj.seat_number, has_items=obj.item_count > 0)

    def get_statusColor(self, obj):
        return SEAT_STATUS_COLORS[obj.status]

    def get_badge(self, obj):
        return format_seat_balance(obj.total, self.context.get("currency", "USD"))
