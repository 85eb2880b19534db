"""
Progression buff views.
"""
from rest_framework.views import APIView
from rest_framework.permissions import IsAuthenticated

from apps.common.utils import success_response, error_response
from ..serializers import ApplyBuffsSerializer, ProgressionSummarySerializer
from ..services import ProgressionService


class ProgressionBuffsView(APIView):
    """Get active buffs and their total"""
    permission_classes = [IsAuthenticated]

    def get(self, request):
        summary = ProgressionService.get_progression_summary(request.user.id)
        serializer = ProgressionSummarySerializer(summary)
        return success_response(serializer.data)


class ApplyProgressionBuffsView(APIView):
    """Consume all active buffs for an order"""
    permission_classes = [IsAuthenticated]

    def post(self, request):
        serializer = ApplyBuffsSerializer(data=request.data)
        if not serializer.is_valid():
            return error_response('Invalid request', serializer.errors)

        result = ProgressionService.apply_progression_buffs(
            request.user.id, order_id=serializer.validated_data['order_id'],
        )
        return success_response({
            'applied_percentage': str(result['applied_percentage']),
            'buff_count': result['buff_count'],
        }, 'Buffs applied' if result['buff_count'] else 'No active buffs')
