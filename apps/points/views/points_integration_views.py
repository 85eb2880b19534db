"""
Points integration views (internal API endpoints for other systems).

These are called by the storefront backend with a staff service account.
"""
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAdminUser

from apps.common.utils import success_response, error_response
from ..services import PointsService, PointsIntegrationService
from ..serializers import (
    InviteSignupAwardSerializer, InviteReservationAwardSerializer,
    OwnOrderAwardSerializer, PalletMilestoneAwardSerializer,
    ManualAdjustmentSerializer, AwardResultSerializer
)


def _award_response(result):
    message = 'Impact points awarded' if result['awarded'] else 'No impact points awarded'
    return success_response(AwardResultSerializer(result).data, message)


@api_view(['POST'])
@permission_classes([IsAdminUser])
def internal_award_invite_signup(request):
    """Award the inviter when an invited friend signs up"""
    serializer = InviteSignupAwardSerializer(data=request.data)
    if not serializer.is_valid():
        return error_response('Invalid award request', serializer.errors)

    result = PointsIntegrationService.award_invite_signup(**serializer.validated_data)
    return _award_response(result)


@api_view(['POST'])
@permission_classes([IsAdminUser])
def internal_award_invite_reservation(request):
    """Award the inviter when an invited friend reserves an order"""
    serializer = InviteReservationAwardSerializer(data=request.data)
    if not serializer.is_valid():
        return error_response('Invalid award request', serializer.errors)

    result = PointsIntegrationService.award_invite_reservation(**serializer.validated_data)
    return _award_response(result)


@api_view(['POST'])
@permission_classes([IsAdminUser])
def internal_award_own_order(request):
    """Award a user for their own qualifying order"""
    serializer = OwnOrderAwardSerializer(data=request.data)
    if not serializer.is_valid():
        return error_response('Invalid award request', serializer.errors)

    result = PointsIntegrationService.award_own_order(**serializer.validated_data)
    return _award_response(result)


@api_view(['POST'])
@permission_classes([IsAdminUser])
def internal_award_pallet_milestone(request):
    """Award a user for reaching a pallet milestone"""
    serializer = PalletMilestoneAwardSerializer(data=request.data)
    if not serializer.is_valid():
        return error_response('Invalid award request', serializer.errors)

    result = PointsIntegrationService.award_pallet_milestone(**serializer.validated_data)
    return _award_response(result)


@api_view(['POST'])
@permission_classes([IsAdminUser])
def admin_adjust_points(request):
    """Manually correct a user's impact points"""
    serializer = ManualAdjustmentSerializer(data=request.data)
    if not serializer.is_valid():
        return error_response('Invalid adjustment', serializer.errors)

    data = serializer.validated_data
    result = PointsService.adjust_impact_points(
        data['user_id'], data['points'], data['description'],
        related_order_id=data['order_id'],
    )
    return _award_response(result)
