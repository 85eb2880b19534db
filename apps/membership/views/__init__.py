"""
Membership views module.

All views are exported from this module to maintain backward compatibility.
"""
from .status_views import (
    MembershipStatusView, InviteQuotaView, ConsumeInviteView, TierHistoryView
)
from .admin_views import AdminSetTierView

__all__ = [
    'MembershipStatusView',
    'InviteQuotaView',
    'ConsumeInviteView',
    'TierHistoryView',
    'AdminSetTierView',
]
