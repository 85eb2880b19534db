"""
Points integration service: turns storefront happenings into ledger events.
"""
import logging

from apps.common.exceptions import ValidationError
from apps.membership.services import MembershipService
from .points_service import PointsService

logger = logging.getLogger(__name__)

INVITE_SIGNUP_POINTS = 1
INVITE_RESERVATION_POINTS = 2
# An inviter earns reservation points for at most this many of an invitee's orders
INVITE_RESERVATION_LIMIT = 2

OWN_ORDER_POINTS = 1
OWN_ORDER_MIN_BOTTLES = 6

PALLET_MILESTONE_POINTS = 3
PALLET_MILESTONES = (3, 6, 9, 12, 15)


def _validate_count(name, value):
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValidationError(f"{name} must be a non-negative integer", **{name: value})


class PointsIntegrationService:
    """Service for integrating impact points with other systems (invites, orders)"""

    @staticmethod
    def award_invite_signup(inviter_id, invitee_id):
        """Award the inviter when an invited friend signs up (once per invitee)"""
        return PointsService.award_points(
            inviter_id, 'invite_signup', INVITE_SIGNUP_POINTS,
            related_user_id=invitee_id,
            description='Friend joined',
            dedup_key=f'invitee:{invitee_id}',
        )

    @staticmethod
    def award_invite_reservation(inviter_id, invitee_id, order_id=None):
        """Award the inviter when an invited friend reserves an order (first two only)"""
        return PointsService.award_points(
            inviter_id, 'invite_reservation', INVITE_RESERVATION_POINTS,
            related_user_id=invitee_id,
            related_order_id=str(order_id) if order_id is not None else None,
            description='Friend placed a reservation',
            dedup_key=f'reservation:{order_id}' if order_id is not None else None,
            limit_per_related_user=INVITE_RESERVATION_LIMIT,
        )

    @staticmethod
    def award_own_order(user_id, bottle_count, order_id=None):
        """Award a point for a user's own order of at least six bottles"""
        _validate_count('bottle_count', bottle_count)

        if bottle_count < OWN_ORDER_MIN_BOTTLES:
            return PointsIntegrationService._no_award(user_id)

        return PointsService.award_points(
            user_id, 'own_order', OWN_ORDER_POINTS,
            related_order_id=str(order_id) if order_id is not None else None,
            description=f'Own order ({bottle_count} bottles)',
            dedup_key=f'order:{order_id}' if order_id is not None else None,
        )

    @staticmethod
    def award_pallet_milestone(user_id, pallet_count):
        """Award bonus points when a user's pallet count hits a milestone"""
        _validate_count('pallet_count', pallet_count)

        if pallet_count not in PALLET_MILESTONES:
            return PointsIntegrationService._no_award(user_id)

        description = f'{pallet_count} pallets milestone'
        return PointsService.award_points(
            user_id, 'pallet_milestone', PALLET_MILESTONE_POINTS,
            description=description,
            dedup_key=description,
        )

    @staticmethod
    def _no_award(user_id):
        membership = MembershipService.get_membership(user_id)
        return {
            'awarded': False,
            'new_total': membership.impact_points,
            'event': None,
            'tier': membership.tier,
            'tier_changed': False,
            'progression': None,
        }
