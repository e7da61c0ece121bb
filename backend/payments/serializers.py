from rest_framework import serializers

from payments.records import PaymentRecord


class PaymentRecordSerializer(serializers.Serializer):
    status = serializers.CharField(max_length=32)
    metadata = serializers.DictField(required=False, allow_null=True)

    def to_record(self, data=None) -> PaymentRecord:
        data = data if data is not None else self.validated_data
        return PaymentRecord(status=data["status"], metadata=data.get("metadata"))


def build_payments(validated_payments) -> list:
    """PaymentRecords from already validated payment payloads."""
    serializer = PaymentRecordSerializer()
    return [serializer.to_record(payment) for payment in validated_payments]
