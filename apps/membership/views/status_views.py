"""
Membership status views.
"""
from rest_framework.views import APIView
from rest_framework.permissions import IsAuthenticated

from apps.common.utils import success_response
from ..serializers import MembershipStatusSerializer, InviteQuotaSerializer, TierChangeLogSerializer
from ..services import MembershipService, InviteQuotaService


class MembershipStatusView(APIView):
    """Get current membership status"""
    permission_classes = [IsAuthenticated]

    def get(self, request):
        membership = MembershipService.get_membership(request.user.id)
        serializer = MembershipStatusSerializer(membership)
        return success_response(serializer.data)


class InviteQuotaView(APIView):
    """Get remaining invites for this month"""
    permission_classes = [IsAuthenticated]

    def get(self, request):
        quota = InviteQuotaService.get_available_invites(request.user.id)
        data = InviteQuotaSerializer(quota).data
        data['next_reset'] = InviteQuotaService.get_time_until_reset()['reset_date']
        return success_response(data)


class ConsumeInviteView(APIView):
    """Spend one invite from this month's quota"""
    permission_classes = [IsAuthenticated]

    def post(self, request):
        result = InviteQuotaService.consume_invite_quota(request.user.id)
        return success_response(result, 'Invite consumed')


class TierHistoryView(APIView):
    """Get tier change history"""
    permission_classes = [IsAuthenticated]

    def get(self, request):
        changes = MembershipService.get_tier_history(request.user.id, limit=50)
        serializer = TierChangeLogSerializer(changes, many=True)
        return success_response(serializer.data)
