"""
Membership service for tier management and operations.
"""
import logging

from django.db import transaction
from django.utils import timezone

from apps.common.db import retry_on_conflict
from apps.common.exceptions import NotFoundError, ValidationError
from ..models import Membership, TierChangeLog
from ..signals import tier_changed
from ..tiers import TierClassifier

logger = logging.getLogger(__name__)
audit_logger = logging.getLogger('audit')


class MembershipService:
    """Service class for membership operations"""

    @staticmethod
    def create_membership_for_user(user, tier=None):
        """Create membership for a new user"""
        return Membership.create_for_user(user, tier=tier)

    @staticmethod
    def get_membership(user_id):
        """Current membership state for a user"""
        try:
            return Membership.objects.select_related('user').get(user_id=user_id)
        except Membership.DoesNotExist:
            raise NotFoundError(user_id=user_id)

    @staticmethod
    def get_membership_for_update(user_id):
        """
        Lock the user's membership row for the rest of the current transaction.

        Every write path goes through this lock first, so operations on the
        same user serialize while other users are never blocked.
        """
        try:
            return Membership.objects.select_for_update().get(user_id=user_id)
        except Membership.DoesNotExist:
            raise NotFoundError(user_id=user_id)

    @staticmethod
    def apply_tier_change(membership, new_tier, reason):
        """
        Move a locked membership to a new tier inside the caller's transaction.

        Clears outstanding progression buffs, writes the change log and
        announces the change once the transaction commits. Returns the
        number of buffs that were voided.
        """
        from apps.progression.services import ProgressionService

        old_tier = membership.tier
        if old_tier == new_tier:
            return 0

        membership.tier = new_tier
        membership.tier_start_date = timezone.now()
        membership.save(update_fields=['tier', 'tier_start_date', 'updated_at'])

        TierChangeLog.objects.create(
            user_id=membership.user_id,
            from_tier=old_tier,
            to_tier=new_tier,
            reason=reason,
            impact_points=membership.impact_points,
        )

        cleared = ProgressionService.clear_progression_buffs_on_level_up(membership.user_id)

        audit_logger.info(
            f"tier_change user={membership.user_id} from={old_tier} to={new_tier} "
            f"points={membership.impact_points} cleared_buffs={cleared} reason={reason}"
        )

        user_id = membership.user_id
        points = membership.impact_points
        transaction.on_commit(lambda: tier_changed.send(
            sender=MembershipService,
            user_id=user_id,
            old_tier=old_tier,
            new_tier=new_tier,
            impact_points=points,
            reason=reason,
        ))
        return cleared

    @staticmethod
    @retry_on_conflict
    def set_tier(user_id, tier, reason="Manual tier change by admin"):
        """
        Administratively move a user to a tier.

        Point-derived tiers set this way hold until the next ledger write
        reclassifies the membership from its points.
        """
        if tier not in dict(TierClassifier.TIER_CHOICES):
            raise ValidationError(f"Unknown tier: {tier}", tier=tier)

        with transaction.atomic():
            membership = MembershipService.get_membership_for_update(user_id)
            cleared = MembershipService.apply_tier_change(membership, tier, reason)

        return {
            'membership': membership,
            'cleared_buffs': cleared,
        }

    @staticmethod
    def get_tier_history(user_id, limit=10):
        """Get user's tier change history"""
        return TierChangeLog.objects.filter(user_id=user_id).order_by('-created_at')[:limit]
