"""
Staff-only membership views.
"""
from rest_framework.views import APIView
from rest_framework.permissions import IsAdminUser

from apps.common.utils import success_response, error_response
from ..serializers import SetTierSerializer, MembershipStatusSerializer
from ..services import MembershipService


class AdminSetTierView(APIView):
    """Administratively move a user to another tier"""
    permission_classes = [IsAdminUser]

    def post(self, request, user_id):
        serializer = SetTierSerializer(data=request.data)
        if not serializer.is_valid():
            return error_response('Invalid tier change', serializer.errors)

        result = MembershipService.set_tier(
            user_id,
            serializer.validated_data['tier'],
            reason=serializer.validated_data['reason'],
        )
        return success_response({
            'membership': MembershipStatusSerializer(result['membership']).data,
            'cleared_buffs': result['cleared_buffs'],
        }, 'Tier updated')
