"""
Progression buff engine: discount buffs earned between tiers.
"""
import logging
from decimal import Decimal

from django.conf import settings
from django.db import transaction
from django.db.models import Sum
from django.utils import timezone

from apps.common.db import retry_on_conflict
from apps.common.exceptions import ConcurrencyConflictError, ValidationError
from apps.membership.models import Membership
from apps.membership.tiers import TierClassifier
from ..models import ProgressionBuff, ProgressionReward
from ..signals import progression_reward_earned

logger = logging.getLogger(__name__)
audit_logger = logging.getLogger('audit')

ZERO = Decimal('0.00')


def get_buff_cap():
    """Upper bound for the sum of active buffs within one segment"""
    return Decimal(str(settings.MEMBERSHIP_ENGINE.get('PROGRESSION_BUFF_CAP', '5.00')))


def lock_membership(user_id):
    """Take the per-user row lock if the user has a membership"""
    return Membership.objects.select_for_update().filter(user_id=user_id).first()


class ProgressionService:
    """Service for progression buffs and rewards"""

    @staticmethod
    def get_progression_rewards_for_segment(segment, thresholds=None):
        """Active reward definitions for a segment in processing order"""
        if segment not in dict(TierClassifier.SEGMENT_CHOICES):
            raise ValidationError(f"Unknown progression segment: {segment}", segment=segment)

        rewards = ProgressionReward.objects.filter(level_segment=segment, is_active=True)
        if thresholds is not None:
            low, high = thresholds
            rewards = rewards.filter(ip_threshold__gt=low, ip_threshold__lte=high)
        return rewards.order_by('ip_threshold', 'sort_order', 'id')

    @staticmethod
    def _rewards_reached(segment, current_points, previous_points):
        if previous_points is None:
            return ProgressionService.get_progression_rewards_for_segment(segment).filter(
                ip_threshold=current_points,
            )
        return ProgressionService.get_progression_rewards_for_segment(
            segment, thresholds=(previous_points, current_points),
        )

    @staticmethod
    @retry_on_conflict
    def award_progression_buff(user_id, current_points, current_tier, origin_event=None, previous_points=None):
        """
        Issue the rewards a user has just reached inside their progression segment.

        Buff rewards become ProgressionBuff rows, clamped so the segment's
        active buffs never sum above the cap. Other rewards are announced
        through ``progression_reward_earned`` once the transaction commits.

        Returns a dict with the ``segment``, the created ``buffs`` and the
        emitted ``rewards``.
        """
        segment = TierClassifier.level_segment(current_points, current_tier)
        result = {'segment': segment, 'buffs': [], 'rewards': []}
        if segment is None:
            return result

        with transaction.atomic():
            lock_membership(user_id)

            for reward in ProgressionService._rewards_reached(segment, current_points, previous_points):
                if reward.is_buff:
                    buff = ProgressionService._issue_buff(user_id, segment, reward, origin_event)
                    if buff is not None:
                        result['buffs'].append(buff)
                else:
                    ProgressionService._emit_reward(user_id, segment, reward)
                    result['rewards'].append(reward)

        return result

    @staticmethod
    def _issue_buff(user_id, segment, reward, origin_event):
        value = reward.buff_percentage
        if value is None:
            logger.warning(
                f"Skipping reward {reward.pk} for user {user_id}: invalid buff percentage {reward.reward_value!r}"
            )
            return None

        active = ProgressionBuff.objects.active().filter(user_id=user_id)

        if active.filter(reward=reward).exists():
            logger.info(f"User {user_id} already holds an active buff from reward {reward.pk}")
            return None

        cap = get_buff_cap()
        active_total = active.filter(level_segment=segment).aggregate(total=Sum('buff_percentage'))['total'] or ZERO
        room = cap - active_total
        percentage = min(value, room)

        if percentage <= ZERO:
            logger.info(f"Buff cap of {cap}% reached for user {user_id} in {segment}")
            return None
        if percentage < value:
            logger.info(f"Buff for user {user_id} clamped to {percentage}% by the {cap}% cap")

        buff = ProgressionBuff.objects.create(
            user_id=user_id,
            buff_percentage=percentage,
            buff_description=reward.reward_description,
            level_segment=segment,
            reward=reward,
            related_event=origin_event,
        )
        audit_logger.info(
            f"buff_awarded user={user_id} segment={segment} percentage={percentage} "
            f"reward={reward.pk} buff={buff.pk}"
        )
        return buff

    @staticmethod
    def _emit_reward(user_id, segment, reward):
        audit_logger.info(
            f"reward_earned user={user_id} segment={segment} type={reward.reward_type} reward={reward.pk}"
        )
        payload = {
            'user_id': user_id,
            'reward_type': reward.reward_type,
            'reward_value': reward.reward_value,
            'description': reward.reward_description,
            'segment': segment,
            'reward_id': reward.pk,
        }
        transaction.on_commit(lambda: progression_reward_earned.send(sender=ProgressionService, **payload))

    @staticmethod
    def emit_segment_rewards(user_id, segment, previous_points, current_points):
        """
        Announce the non-buff rewards of a segment the user has just left.

        Buffs from that segment would be voided by the tier change straight
        away, so only the other reward types are emitted.
        """
        emitted = []
        rewards = ProgressionService.get_progression_rewards_for_segment(
            segment, thresholds=(previous_points, current_points),
        )
        for reward in rewards:
            if reward.is_buff:
                continue
            ProgressionService._emit_reward(user_id, segment, reward)
            emitted.append(reward)
        return emitted

    @staticmethod
    def get_active_buffs(user_id):
        """Active buffs for a user, oldest first"""
        return ProgressionBuff.objects.active().filter(user_id=user_id).order_by('earned_at', 'id')

    @staticmethod
    def calculate_total_buff_percentage(user_id):
        total = ProgressionBuff.objects.active().filter(user_id=user_id).aggregate(
            total=Sum('buff_percentage'),
        )['total']
        return total or ZERO

    @staticmethod
    @retry_on_conflict
    def apply_progression_buffs(user_id, order_id=None):
        """
        Consume every active buff for an order.

        The active rows are locked, summed and marked used in one
        transaction, so each buff is applied at most once.
        """
        now = timezone.now()
        with transaction.atomic():
            lock_membership(user_id)
            buffs = list(
                ProgressionBuff.objects.select_for_update().active().filter(user_id=user_id).order_by('earned_at', 'id')
            )
            if not buffs:
                return {'applied_percentage': ZERO, 'buff_count': 0}

            total = sum((buff.buff_percentage for buff in buffs), ZERO)
            buff_ids = [buff.pk for buff in buffs]
            updated = ProgressionBuff.objects.filter(pk__in=buff_ids, used_at__isnull=True).update(
                used_at=now,
                used_on_order_id=str(order_id) if order_id is not None else None,
            )
            if updated != len(buff_ids):
                raise ConcurrencyConflictError(
                    f"Expected to consume {len(buff_ids)} buffs for user {user_id}, consumed {updated}",
                    user_id=user_id,
                )

        audit_logger.info(
            f"buffs_applied user={user_id} order={order_id} percentage={total} count={len(buff_ids)}"
        )
        return {'applied_percentage': total, 'buff_count': len(buff_ids)}

    @staticmethod
    @retry_on_conflict
    def clear_progression_buffs_on_level_up(user_id):
        """Void every active buff; returns how many were cleared"""
        now = timezone.now()
        with transaction.atomic():
            lock_membership(user_id)
            cleared = ProgressionBuff.objects.active().filter(user_id=user_id).update(
                used_at=now,
                cleared_at=now,
            )

        if cleared:
            audit_logger.info(f"buffs_cleared user={user_id} count={cleared}")
        return cleared

    @staticmethod
    def get_progression_summary(user_id):
        """Active buffs, their total and the segment the user is working through"""
        membership = Membership.objects.filter(user_id=user_id).first()
        current_segment = membership.level_segment if membership else None
        return {
            'active_buffs': list(ProgressionService.get_active_buffs(user_id)),
            'total_percentage': ProgressionService.calculate_total_buff_percentage(user_id),
            'current_segment': current_segment,
            'cap': get_buff_cap(),
        }
