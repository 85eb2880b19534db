from rest_framework.views import APIView
from rest_framework.permissions import IsAuthenticated

from apps.common.utils import success_response
from ..serializers import ProgressionRewardSerializer
from ..services import ProgressionService


class SegmentRewardsView(APIView):
    """List the rewards configured for a progression segment"""
    permission_classes = [IsAuthenticated]

    def get(self, request, segment):
        rewards = ProgressionService.get_progression_rewards_for_segment(segment)
        serializer = ProgressionRewardSerializer(rewards, many=True)
        return success_response(serializer.data)
