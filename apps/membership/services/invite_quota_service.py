"""
Invite quota service: monthly invitation allowances per tier.
"""
import logging
from datetime import datetime

from django.db import transaction
from django.db.models import F, Q
from django.utils import timezone

from apps.common.db import retry_on_conflict
from apps.common.exceptions import QuotaExhaustedError
from ..models import Membership
from ..models.membership import current_month_start
from .membership_service import MembershipService

logger = logging.getLogger(__name__)
audit_logger = logging.getLogger('audit')


def reset_due_filter(month_start):
    """Rows whose usage counter belongs to an earlier month"""
    return Q(last_quota_reset__lt=month_start)


class InviteQuotaService:
    """Service for invite quota accounting"""

    @staticmethod
    def get_available_invites(user_id):
        """Get available invites for a user (quota - used this month)"""
        membership = MembershipService.get_membership(user_id)
        return {
            'available': membership.available_invites,
            'used': membership.effective_invites_used,
            'total': membership.invite_quota_monthly,
        }

    @staticmethod
    @retry_on_conflict
    def consume_invite_quota(user_id):
        """
        Consume one invite.

        The availability check and the increment are one conditional UPDATE
        under the membership row lock; when no row qualifies the quota is
        exhausted and nothing changes.
        """
        with transaction.atomic():
            membership = MembershipService.get_membership_for_update(user_id)
            InviteQuotaService._reset_locked_membership(membership)

            quota = membership.invite_quota_monthly
            updated = Membership.objects.filter(
                pk=membership.pk,
                tier=membership.tier,
                invites_used_this_month__lt=quota,
            ).update(
                invites_used_this_month=F('invites_used_this_month') + 1,
                updated_at=timezone.now(),
            )

            if not updated:
                logger.info(f"Invite quota exhausted for user {user_id} ({quota}/{quota})")
                raise QuotaExhaustedError(user_id=user_id, total=quota)

            membership.refresh_from_db(fields=['invites_used_this_month'])

        remaining = max(0, quota - membership.invites_used_this_month)
        audit_logger.info(f"invite_consumed user={user_id} used={membership.invites_used_this_month}/{quota}")
        return {'remaining': remaining}

    @staticmethod
    def reset_monthly_quotas(now=None):
        """
        Reset monthly quotas for all users (run on the 1st of each month).

        Only rows last reset before the current month are touched, so a
        second run in the same month is a no-op.
        """
        now = now or timezone.now()
        month_start = current_month_start(now)

        users_reset = Membership.objects.filter(reset_due_filter(month_start)).update(
            invites_used_this_month=0,
            last_quota_reset=now,
            updated_at=now,
        )

        audit_logger.info(f"monthly_quota_reset month={month_start.date()} users_reset={users_reset}")
        return {'users_reset': users_reset}

    @staticmethod
    @retry_on_conflict
    def check_and_reset_if_needed(user_id):
        """Check if user needs quota reset (if last_quota_reset is before this month)"""
        with transaction.atomic():
            membership = MembershipService.get_membership_for_update(user_id)
            return InviteQuotaService._reset_locked_membership(membership)

    @staticmethod
    def _reset_locked_membership(membership, now=None):
        now = now or timezone.now()
        month_start = current_month_start(now)

        reset = Membership.objects.filter(
            reset_due_filter(month_start), pk=membership.pk,
        ).update(
            invites_used_this_month=0,
            last_quota_reset=now,
            updated_at=now,
        )

        if reset:
            membership.invites_used_this_month = 0
            membership.last_quota_reset = now
            logger.info(f"Lazy invite quota reset for user {membership.user_id}")
        return bool(reset)

    @staticmethod
    def get_time_until_reset(now=None):
        """Get time until next quota reset"""
        local_now = timezone.localtime(now or timezone.now())
        if local_now.month == 12:
            next_month = datetime(local_now.year + 1, 1, 1)
        else:
            next_month = datetime(local_now.year, local_now.month + 1, 1)
        reset_date = timezone.make_aware(next_month, local_now.tzinfo)

        remaining = reset_date - local_now
        return {
            'days': remaining.days,
            'hours': remaining.seconds // 3600,
            'reset_date': reset_date,
        }
