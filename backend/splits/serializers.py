from rest_framework import serializers

from orders.serializers import OrderItemRecordSerializer

from .operations import OPERATIONS
from .types import SplitMode


class SplitOperationSerializer(serializers.Serializer):
    """One client action to replay against the session."""
    op = serializers.ChoiceField(choices=sorted(OPERATIONS))
    shareId = serializers.CharField(source="share_id", required=False, allow_null=True)
    ticketId = serializers.CharField(source="ticket_id", required=False)
    ways = serializers.IntegerField(required=False)
    mode = serializers.ChoiceField(choices=SplitMode.choices, required=False)

    # Arguments each operation cannot do without
    REQUIRED_ARGUMENTS = {
        "move_selected_to": ("ticket_id",),
        "split_share": ("share_id", "ways"),
        "apply_mode": ("mode",),
        "set_even_ways": ("ways",),
    }

    def validate(self, data):
        missing = [
            argument for argument in self.REQUIRED_ARGUMENTS.get(data["op"], ())
            if data.get(argument) is None
        ]
        if missing:
            raise serializers.ValidationError(
                f"Operation '{data['op']}' requires: {', '.join(missing)}"
            )
        return data


class SplitRequestSerializer(serializers.Serializer):
    items = OrderItemRecordSerializer(many=True)
    mode = serializers.ChoiceField(choices=SplitMode.choices, required=False, allow_null=True)
    operations = SplitOperationSerializer(many=True, required=False)

    def validate_items(self, value):
        ids = [item["id"] for item in value]
        if len(ids) != len(set(ids)):
            raise serializers.ValidationError("Item ids must be unique.")
        return value


class ShareSerializer(serializers.Serializer):
    id = serializers.CharField()
    originalItemId = serializers.CharField(source="original_item_id")
    name = serializers.CharField()
    amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    quantity = serializers.IntegerField()
    seatNumber = serializers.IntegerField(source="seat_number", allow_null=True)
    categoryType = serializers.CharField(source="category_type", allow_null=True)
    isSentToKitchen = serializers.BooleanField(source="is_sent_to_kitchen")
    isPaid = serializers.BooleanField(source="is_paid")
    splitGroupId = serializers.CharField(source="split_group_id", allow_null=True)
    fractionLabel = serializers.CharField(source="fraction_label", allow_null=True)


class TicketSerializer(serializers.Serializer):
    id = serializers.CharField()
    label = serializers.CharField()
    color = serializers.CharField()
    seatNumber = serializers.IntegerField(source="seat_number", allow_null=True)
    shares = ShareSerializer(many=True)
    subtotal = serializers.DecimalField(max_digits=12, decimal_places=2)


class SplitSessionSerializer(serializers.Serializer):
    tickets = TicketSerializer(many=True)
    mode = serializers.CharField()
    selectedShareId = serializers.CharField(source="selected_share_id", allow_null=True)
    evenWays = serializers.IntegerField(source="even_ways")
    originalTotal = serializers.DecimalField(source="original_total", max_digits=12, decimal_places=2)
    splitTotal = serializers.DecimalField(source="split_total", max_digits=12, decimal_places=2)
