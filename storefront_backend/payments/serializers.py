# payments/serializers.py

from rest_framework import serializers


class PaymentIntentRequestSerializer(serializers.Serializer):
    order_id = serializers.UUIDField()


class PaymentIntentSerializer(serializers.Serializer):
    order_id = serializers.UUIDField(read_only=True)
    client_secret = serializers.CharField(read_only=True)
    payment_intent_id = serializers.CharField(read_only=True)
    amount = serializers.IntegerField(read_only=True, help_text="Minor currency units")
    currency = serializers.CharField(read_only=True)


class WebhookAckSerializer(serializers.Serializer):
    received = serializers.BooleanField(read_only=True)
    detail = serializers.CharField(read_only=True)
