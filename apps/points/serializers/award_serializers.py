"""
Input serializers for the award endpoints.
"""
from rest_framework import serializers

from .event_serializers import PointsEventSerializer


class InviteSignupAwardSerializer(serializers.Serializer):
    inviter_id = serializers.IntegerField()
    invitee_id = serializers.IntegerField()


class InviteReservationAwardSerializer(serializers.Serializer):
    inviter_id = serializers.IntegerField()
    invitee_id = serializers.IntegerField()
    order_id = serializers.CharField(max_length=100, required=False, allow_null=True, default=None)


class OwnOrderAwardSerializer(serializers.Serializer):
    user_id = serializers.IntegerField()
    bottle_count = serializers.IntegerField()
    order_id = serializers.CharField(max_length=100, required=False, allow_null=True, default=None)


class PalletMilestoneAwardSerializer(serializers.Serializer):
    user_id = serializers.IntegerField()
    pallet_count = serializers.IntegerField()


class ManualAdjustmentSerializer(serializers.Serializer):
    """Staff correction of a user's impact points"""
    user_id = serializers.IntegerField()
    points = serializers.IntegerField()
    description = serializers.CharField(max_length=200)
    order_id = serializers.CharField(max_length=100, required=False, allow_null=True, default=None)


class AwardResultSerializer(serializers.Serializer):
    """Outcome of a ledger write"""
    awarded = serializers.BooleanField()
    new_total = serializers.IntegerField()
    tier = serializers.CharField()
    tier_changed = serializers.BooleanField()
    event = PointsEventSerializer(allow_null=True)
