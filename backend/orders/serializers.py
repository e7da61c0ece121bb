from rest_framework import serializers

from orders.records import KitchenStatus, ModifierRecord, OrderItemRecord


class ModifierRecordSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=200, required=False, default="")
    price = serializers.DecimalField(max_digits=10, decimal_places=2)


class OrderItemRecordSerializer(serializers.Serializer):
    """
    Wire shape of an order item as sent by the POS client.

    Field names follow the client's camelCase contract; validated data uses
    the record's attribute names.
    """
    id = serializers.CharField(max_length=64)
    name = serializers.CharField(max_length=200)
    price = serializers.DecimalField(max_digits=10, decimal_places=2, source="unit_price")
    quantity = serializers.IntegerField(default=1)
    seatNumber = serializers.IntegerField(
        source="seat_number", required=False, allow_null=True, min_value=1
    )
    categoryType = serializers.CharField(
        source="category_type", required=False, allow_null=True, allow_blank=True
    )
    sentToKitchen = serializers.BooleanField(source="sent_to_kitchen", default=False)
    isPaid = serializers.BooleanField(source="is_paid", default=False)
    kitchenStatus = serializers.ChoiceField(
        source="kitchen_status", choices=KitchenStatus.choices, required=False, allow_null=True
    )
    modifiers = ModifierRecordSerializer(many=True, required=False)
    createdAt = serializers.DateTimeField(source="created_at", required=False, allow_null=True)
    updatedAt = serializers.DateTimeField(source="updated_at", required=False, allow_null=True)

    def validate_quantity(self, value):
        if value <= 0:
            raise serializers.ValidationError("Quantity must be a positive integer.")
        return value

    def validate_categoryType(self, value):
        # Unknown categories are billed as business; keep the raw value
        return value or None

    def to_record(self, data=None) -> OrderItemRecord:
        data = dict(data if data is not None else self.validated_data)
        modifiers = tuple(
            ModifierRecord(name=modifier.get("name", ""), price=modifier["price"])
            for modifier in data.pop("modifiers", [])
        )
        return OrderItemRecord(modifiers=modifiers, **data)


def build_order_items(validated_items) -> list:
    """OrderItemRecords from already validated item payloads."""
    serializer = OrderItemRecordSerializer()
    return [serializer.to_record(item) for item in validated_items]
