"""
Membership status serializers.
"""
from rest_framework import serializers
from ..models import Membership


class MembershipStatusSerializer(serializers.ModelSerializer):
    """
    Serializer for the current membership state.
    Used for: GET /api/membership/status/
    """
    tier_display_name = serializers.CharField(source='get_tier_display', read_only=True)
    level_segment = serializers.CharField(read_only=True, allow_null=True)
    invite_quota_monthly = serializers.IntegerField(read_only=True)
    available_invites = serializers.IntegerField(read_only=True)
    next_level = serializers.SerializerMethodField()

    class Meta:
        model = Membership
        fields = ['tier', 'tier_display_name', 'impact_points', 'level_segment',
                  'invite_quota_monthly', 'available_invites', 'next_level',
                  'tier_start_date', 'created_at']
        read_only_fields = fields

    def get_next_level(self, obj):
        return obj.get_next_level_info()


class InviteQuotaSerializer(serializers.Serializer):
    """
    Invite allowance for the current month.
    Used for: GET /api/membership/invites/
    """
    available = serializers.IntegerField()
    used = serializers.IntegerField()
    total = serializers.IntegerField()
