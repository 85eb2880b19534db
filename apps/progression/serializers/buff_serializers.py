"""
Progression buff serializers.
"""
from rest_framework import serializers
from ..models import ProgressionBuff


class ProgressionBuffSerializer(serializers.ModelSerializer):
    """
    Serializer for a user's buffs.
    Used for: GET /api/progression/buffs/
    """
    status = serializers.CharField(read_only=True)

    class Meta:
        model = ProgressionBuff
        fields = [
            'id', 'buff_percentage', 'buff_description', 'level_segment',
            'status', 'earned_at', 'used_at', 'used_on_order_id'
        ]
        read_only_fields = fields


class ApplyBuffsSerializer(serializers.Serializer):
    """Input for consuming buffs on an order"""
    order_id = serializers.CharField(max_length=100, required=False, allow_null=True, default=None)


class ProgressionSummarySerializer(serializers.Serializer):
    active_buffs = ProgressionBuffSerializer(many=True)
    total_percentage = serializers.DecimalField(max_digits=5, decimal_places=2)
    current_segment = serializers.CharField(allow_null=True)
    cap = serializers.DecimalField(max_digits=5, decimal_places=2)
