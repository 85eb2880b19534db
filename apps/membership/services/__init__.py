"""
Membership services module.

All services are exported from this module to maintain backward compatibility.
"""
from .membership_service import MembershipService
from .invite_quota_service import InviteQuotaService
from .notification_service import TierNotificationService

__all__ = [
    'MembershipService',
    'InviteQuotaService',
    'TierNotificationService',
]
