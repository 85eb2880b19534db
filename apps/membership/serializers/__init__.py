"""
Membership serializers module.

All serializers are exported from this module to maintain backward compatibility.
"""
from .status_serializers import (
    MembershipStatusSerializer, InviteQuotaSerializer
)
from .tier_serializers import (
    TierChangeLogSerializer, SetTierSerializer
)

__all__ = [
    'MembershipStatusSerializer',
    'InviteQuotaSerializer',
    'TierChangeLogSerializer',
    'SetTierSerializer',
]
