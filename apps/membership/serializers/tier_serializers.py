"""
Tier change serializers.
"""
from rest_framework import serializers
from ..models import TierChangeLog
from ..tiers import TierClassifier


class TierChangeLogSerializer(serializers.ModelSerializer):
    """
    Serializer for tier change history entries.
    Used for: GET /api/membership/tier-history/
    """
    is_upgrade = serializers.BooleanField(read_only=True)

    class Meta:
        model = TierChangeLog
        fields = ['from_tier', 'to_tier', 'reason', 'impact_points', 'is_upgrade', 'created_at']
        read_only_fields = fields


class SetTierSerializer(serializers.Serializer):
    """Input for administrative tier changes"""
    tier = serializers.ChoiceField(choices=TierClassifier.TIER_CHOICES)
    reason = serializers.CharField(max_length=200, required=False, default='Manual tier change by admin')
