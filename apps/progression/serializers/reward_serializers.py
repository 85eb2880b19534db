from rest_framework import serializers
from ..models import ProgressionReward


class ProgressionRewardSerializer(serializers.ModelSerializer):
    """
    Serializer for reward definitions.
    Used for: GET /api/progression/rewards/<segment>/
    """
    reward_type_display = serializers.CharField(source='get_reward_type_display', read_only=True)

    class Meta:
        model = ProgressionReward
        fields = [
            'id', 'level_segment', 'ip_threshold', 'reward_type', 'reward_type_display',
            'reward_value', 'reward_description', 'sort_order'
        ]
        read_only_fields = fields
