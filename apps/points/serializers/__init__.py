"""
Points serializers module.

All serializers are exported from this module to maintain backward compatibility.
"""
from .event_serializers import PointsEventListSerializer, PointsEventSerializer
from .award_serializers import (
    InviteSignupAwardSerializer, InviteReservationAwardSerializer,
    OwnOrderAwardSerializer, PalletMilestoneAwardSerializer,
    ManualAdjustmentSerializer, AwardResultSerializer
)

__all__ = [
    'PointsEventListSerializer',
    'PointsEventSerializer',
    'InviteSignupAwardSerializer',
    'InviteReservationAwardSerializer',
    'OwnOrderAwardSerializer',
    'PalletMilestoneAwardSerializer',
    'ManualAdjustmentSerializer',
    'AwardResultSerializer',
]
