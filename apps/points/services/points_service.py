"""
Impact point ledger service.

Every change to a user's impact points goes through ``award_points``: the
membership row is locked, the ledger event is written, the cached total is
incremented, and tier and progression buffs are brought up to date, all in
one transaction.
"""
import logging

from django.db import IntegrityError, transaction
from django.db.models import F, Sum
from django.utils import timezone

from apps.common.db import retry_on_conflict
from apps.common.exceptions import ValidationError
from apps.membership.models import Membership
from apps.membership.services import MembershipService
from apps.membership.tiers import TierClassifier
from ..models import PointsEvent

logger = logging.getLogger(__name__)
audit_logger = logging.getLogger('audit')

NEGATIVE_EVENT_TYPES = frozenset(['manual_adjustment', 'migration'])


class PointsService:
    """Service for impact point ledger operations"""

    @staticmethod
    @retry_on_conflict
    def award_points(user_id, event_type, points, related_user_id=None, related_order_id=None,
                     description='', dedup_key=None, limit_per_related_user=None):
        """
        Append an event to the ledger and update everything derived from it.

        A dedup_key that was already used for this user and event type makes
        the call a no-op. With ``limit_per_related_user`` the award is also
        skipped once that many events of this type exist for the related user.

        Returns a dict with ``awarded``, ``new_total``, ``event``, ``tier``,
        ``tier_changed`` and ``progression``.
        """
        PointsService._validate_award(event_type, points)

        with transaction.atomic():
            membership = MembershipService.get_membership_for_update(user_id)
            previous_points = membership.impact_points
            previous_tier = membership.tier

            new_total = previous_points + points
            if new_total < 0:
                raise ValidationError(
                    f"Adjustment of {points} would leave user {user_id} with {new_total} impact points",
                    user_id=user_id, points=points,
                )

            if limit_per_related_user is not None and related_user_id is not None:
                earned = PointsEvent.objects.filter(
                    user_id=user_id, event_type=event_type, related_user_id=related_user_id,
                ).count()
                if earned >= limit_per_related_user:
                    logger.info(
                        f"Skipping {event_type} for user {user_id}: limit of "
                        f"{limit_per_related_user} reached for related user {related_user_id}"
                    )
                    return PointsService._unchanged(membership)

            try:
                with transaction.atomic():
                    event = PointsEvent.objects.create(
                        user_id=user_id,
                        event_type=event_type,
                        points=points,
                        related_user_id=related_user_id,
                        related_order_id=related_order_id,
                        description=description,
                        dedup_key=dedup_key,
                    )
            except IntegrityError:
                if dedup_key is None or not PointsEvent.objects.filter(
                    user_id=user_id, event_type=event_type, dedup_key=dedup_key,
                ).exists():
                    raise
                logger.info(f"Duplicate {event_type} for user {user_id} ignored (dedup_key={dedup_key})")
                return PointsService._unchanged(membership)

            Membership.objects.filter(pk=membership.pk).update(
                impact_points=F('impact_points') + points,
                updated_at=timezone.now(),
            )
            membership.refresh_from_db(fields=['impact_points'])

            progression = PointsService._sync_progression(membership, previous_points, previous_tier, event)

        audit_logger.info(
            f"impact_points user={user_id} type={event_type} points={points:+d} "
            f"total={membership.impact_points} tier={membership.tier} event={event.pk}"
        )

        return {
            'awarded': True,
            'new_total': membership.impact_points,
            'event': event,
            'tier': membership.tier,
            'tier_changed': membership.tier != previous_tier,
            'progression': progression,
        }

    @staticmethod
    def _sync_progression(membership, previous_points, previous_tier, event):
        """Reclassify the tier and settle progression rewards for a locked membership"""
        from apps.progression.services import ProgressionService

        current_points = membership.impact_points
        new_tier = TierClassifier.resolve_tier(current_points, previous_tier)

        if new_tier != previous_tier:
            departed_segment = TierClassifier.level_segment(previous_points, previous_tier)
            MembershipService.apply_tier_change(
                membership, new_tier, reason=f"Impact points changed to {current_points}",
            )
            if PointsService._is_upgrade(previous_tier, new_tier):
                # Zero-point marker so the ledger timeline shows the promotion
                PointsEvent.objects.create(
                    user_id=membership.user_id,
                    event_type='level_upgrade',
                    points=0,
                    description=f"Upgraded to {TierClassifier.get_display_name(new_tier)}",
                )
            if departed_segment:
                ProgressionService.emit_segment_rewards(
                    membership.user_id, departed_segment, previous_points, current_points,
                )

        return ProgressionService.award_progression_buff(
            membership.user_id, current_points, new_tier,
            origin_event=event, previous_points=previous_points,
        )

    @staticmethod
    def _is_upgrade(old_tier, new_tier):
        ladder = TierClassifier.POINT_TIERS
        return old_tier in ladder and new_tier in ladder and ladder.index(new_tier) > ladder.index(old_tier)

    @staticmethod
    def _unchanged(membership):
        return {
            'awarded': False,
            'new_total': membership.impact_points,
            'event': None,
            'tier': membership.tier,
            'tier_changed': False,
            'progression': None,
        }

    @staticmethod
    def _validate_award(event_type, points):
        if event_type not in PointsEvent.valid_event_types():
            raise ValidationError(f"Unknown event type: {event_type}", event_type=event_type)
        if isinstance(points, bool) or not isinstance(points, int):
            raise ValidationError("Points must be an integer", points=points)
        if event_type == 'level_upgrade':
            raise ValidationError("Level upgrade events are written by the ledger itself", event_type=event_type)
        if points < 0 and event_type not in NEGATIVE_EVENT_TYPES:
            raise ValidationError(
                f"Negative points are only allowed for manual adjustments, not {event_type}",
                event_type=event_type, points=points,
            )

    @staticmethod
    def adjust_impact_points(user_id, delta, description, related_order_id=None):
        """Manual correction of a user's impact points"""
        if not description or not description.strip():
            raise ValidationError("A description is required for manual adjustments")
        return PointsService.award_points(
            user_id, 'manual_adjustment', delta,
            related_order_id=related_order_id,
            description=description.strip(),
        )

    @staticmethod
    def get_events(user_id, event_type=None):
        """Ledger events for a user, newest first"""
        events = PointsEvent.objects.filter(user_id=user_id)
        if event_type:
            events = events.filter(event_type=event_type)
        return events

    @staticmethod
    def get_ledger_total(user_id):
        """Sum of all ledger events for a user"""
        return PointsEvent.objects.filter(user_id=user_id).aggregate(total=Sum('points'))['total'] or 0

    @staticmethod
    def ledger_total_matches(user_id):
        membership = MembershipService.get_membership(user_id)
        return membership.impact_points == PointsService.get_ledger_total(user_id)

    @staticmethod
    def find_ledger_mismatches():
        """
        Memberships whose cached impact_points differ from their ledger sum.

        Returns a list of ``(membership, ledger_total)`` pairs.
        """
        totals = dict(
            PointsEvent.objects.order_by().values('user_id').annotate(total=Sum('points')).values_list('user_id', 'total')
        )
        mismatches = []
        for membership in Membership.objects.select_related('user').order_by('user_id'):
            ledger_total = totals.get(membership.user_id, 0)
            if ledger_total != membership.impact_points:
                mismatches.append((membership, ledger_total))
        return mismatches

    @staticmethod
    @retry_on_conflict
    def rebuild_cached_total(user_id):
        """Reset a membership's impact_points to its ledger sum and reclassify its tier"""
        with transaction.atomic():
            membership = MembershipService.get_membership_for_update(user_id)
            ledger_total = PointsService.get_ledger_total(user_id)
            if ledger_total < 0:
                raise ValidationError(f"Ledger for user {user_id} sums to {ledger_total}", user_id=user_id)

            previous_points = membership.impact_points
            Membership.objects.filter(pk=membership.pk).update(impact_points=ledger_total, updated_at=timezone.now())
            membership.impact_points = ledger_total

            new_tier = TierClassifier.resolve_tier(ledger_total, membership.tier)
            MembershipService.apply_tier_change(membership, new_tier, reason="Rebuilt from impact point ledger")

        audit_logger.info(f"ledger_rebuild user={user_id} from={previous_points} to={ledger_total}")
        return membership
