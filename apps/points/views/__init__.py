"""
Points views module.

All views are exported from this module to maintain backward compatibility.
"""
from .points_event_views import get_points_events, get_points_summary
from .points_integration_views import (
    internal_award_invite_signup, internal_award_invite_reservation,
    internal_award_own_order, internal_award_pallet_milestone,
    admin_adjust_points
)

__all__ = [
    'get_points_events',
    'get_points_summary',
    'internal_award_invite_signup',
    'internal_award_invite_reservation',
    'internal_award_own_order',
    'internal_award_pallet_milestone',
    'admin_adjust_points',
]
