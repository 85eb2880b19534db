"""
Impact point ledger query views.
"""
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated

from apps.common.utils import success_response, paginated_response
from apps.membership.services import MembershipService
from ..services import PointsService
from ..serializers import PointsEventListSerializer


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def get_points_events(request):
    """Get user's impact point ledger, newest first"""
    events = PointsService.get_events(request.user.id, event_type=request.query_params.get('event_type'))
    return paginated_response(events, PointsEventListSerializer, request)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def get_points_summary(request):
    """Get impact point total and tier progress for user"""
    membership = MembershipService.get_membership(request.user.id)
    return success_response({
        'impact_points': membership.impact_points,
        'tier': membership.tier,
        'level_segment': membership.level_segment,
        'next_level': membership.get_next_level_info(),
        'event_count': PointsService.get_events(request.user.id).count(),
    })
