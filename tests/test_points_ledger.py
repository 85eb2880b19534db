"""
Tests for the impact point ledger and the integration award rules
"""
from django.db.models import Sum
from django.test import TestCase
from hypothesis import given, settings, strategies as st
from hypothesis.extra.django import TestCase as HypothesisTestCase

from apps.common.exceptions import NotFoundError, ValidationError
from apps.membership.models import Membership, TierChangeLog
from apps.membership.tiers import TierClassifier
from apps.points.models import PointsEvent
from apps.points.services import PointsService, PointsIntegrationService
from tests.factories import UserFactory, create_user_with_membership


def ledger_sum(user):
    return PointsEvent.objects.filter(user=user).aggregate(total=Sum('points'))['total'] or 0


class AwardPointsTest(TestCase):
    """Test the single write path into the ledger"""

    def setUp(self):
        self.user, self.membership = create_user_with_membership()

    def test_award_appends_event_and_updates_total(self):
        result = PointsService.award_points(self.user.id, 'own_order', 1, description='Own order')

        self.assertTrue(result['awarded'])
        self.assertEqual(result['new_total'], 1)
        self.membership.refresh_from_db()
        self.assertEqual(self.membership.impact_points, 1)
        self.assertEqual(PointsEvent.objects.filter(user=self.user).count(), 1)
        self.assertEqual(result['event'].points, 1)

    def test_total_always_equals_ledger_sum(self):
        PointsService.award_points(self.user.id, 'invite_signup', 1)
        PointsService.award_points(self.user.id, 'pallet_milestone', 3, dedup_key='3 pallets milestone')
        PointsService.adjust_impact_points(self.user.id, -2, 'Refunded order')

        self.membership.refresh_from_db()
        self.assertEqual(self.membership.impact_points, 2)
        self.assertEqual(ledger_sum(self.user), 2)
        self.assertTrue(PointsService.ledger_total_matches(self.user.id))

    def test_ledger_total_mismatch_is_detected(self):
        PointsService.award_points(self.user.id, 'invite_signup', 1)
        Membership.objects.filter(user=self.user).update(impact_points=7)

        self.assertFalse(PointsService.ledger_total_matches(self.user.id))

    def test_duplicate_dedup_key_is_a_noop(self):
        PointsService.award_points(self.user.id, 'own_order', 1, dedup_key='order:42')
        result = PointsService.award_points(self.user.id, 'own_order', 1, dedup_key='order:42')

        self.assertFalse(result['awarded'])
        self.assertEqual(result['new_total'], 1)
        self.assertIsNone(result['event'])
        self.assertEqual(PointsEvent.objects.filter(user=self.user).count(), 1)

    def test_null_dedup_keys_never_collide(self):
        PointsService.award_points(self.user.id, 'own_order', 1)
        PointsService.award_points(self.user.id, 'own_order', 1)

        self.assertEqual(PointsEvent.objects.filter(user=self.user).count(), 2)

    def test_unknown_user_raises_not_found(self):
        with self.assertRaises(NotFoundError):
            PointsService.award_points(999999, 'own_order', 1)

    def test_user_without_membership_raises_not_found(self):
        Membership.objects.filter(user=self.user).delete()

        with self.assertRaises(NotFoundError):
            PointsService.award_points(self.user.id, 'own_order', 1)
        self.assertFalse(PointsEvent.objects.filter(user=self.user).exists())

    def test_unknown_event_type_is_rejected(self):
        with self.assertRaises(ValidationError):
            PointsService.award_points(self.user.id, 'birthday', 1)

    def test_negative_points_only_for_manual_adjustments(self):
        with self.assertRaises(ValidationError):
            PointsService.award_points(self.user.id, 'own_order', -1)

    def test_adjustment_below_zero_is_rejected(self):
        PointsService.award_points(self.user.id, 'own_order', 1)

        with self.assertRaises(ValidationError):
            PointsService.adjust_impact_points(self.user.id, -2, 'Too much')

        self.membership.refresh_from_db()
        self.assertEqual(self.membership.impact_points, 1)
        self.assertEqual(ledger_sum(self.user), 1)

    def test_adjustment_requires_description(self):
        with self.assertRaises(ValidationError):
            PointsService.adjust_impact_points(self.user.id, 1, '  ')

    def test_events_are_immutable(self):
        result = PointsService.award_points(self.user.id, 'own_order', 1)
        event = result['event']

        event.points = 10
        with self.assertRaises(ValueError):
            event.save()
        with self.assertRaises(ValueError):
            event.delete()
        self.assertEqual(PointsEvent.objects.get(pk=event.pk).points, 1)


class TierReclassificationTest(TestCase):
    """Tier follows points within the same ledger write"""

    def test_reaching_five_points_promotes_to_bronze(self):
        user, membership = create_user_with_membership('basic', 4)

        result = PointsService.award_points(user.id, 'own_order', 1)

        self.assertTrue(result['tier_changed'])
        self.assertEqual(result['tier'], 'bronze')
        membership.refresh_from_db()
        self.assertEqual(membership.tier, 'bronze')
        log = TierChangeLog.objects.get(user=user)
        self.assertEqual((log.from_tier, log.to_tier, log.impact_points), ('basic', 'bronze', 5))
        self.assertTrue(log.is_upgrade)

    def test_promotion_recorded_in_ledger(self):
        user, _ = create_user_with_membership('basic', 4)

        PointsService.award_points(user.id, 'own_order', 1)

        marker = PointsEvent.objects.get(user=user, event_type='level_upgrade')
        self.assertEqual(marker.points, 0)
        self.assertEqual(marker.description, 'Upgraded to Bronze')
        self.assertEqual(ledger_sum(user), 5)

    def test_level_upgrade_cannot_be_awarded_directly(self):
        user, _ = create_user_with_membership()

        with self.assertRaises(ValidationError):
            PointsService.award_points(user.id, 'level_upgrade', 5)

    def test_large_award_skips_tiers(self):
        user, membership = create_user_with_membership('basic', 0)

        PointsService.adjust_impact_points(user.id, 40, 'Imported history')

        membership.refresh_from_db()
        self.assertEqual(membership.tier, 'gold')

    def test_negative_adjustment_demotes(self):
        user, membership = create_user_with_membership('bronze', 5)

        PointsService.adjust_impact_points(user.id, -1, 'Cancelled order')

        membership.refresh_from_db()
        self.assertEqual(membership.tier, 'basic')
        self.assertFalse(TierChangeLog.objects.get(user=user).is_upgrade)
        self.assertFalse(PointsEvent.objects.filter(user=user, event_type='level_upgrade').exists())

    def test_administrative_tier_is_kept(self):
        user, membership = create_user_with_membership('admin', 0)

        PointsService.adjust_impact_points(user.id, 20, 'Staff bonus')

        membership.refresh_from_db()
        self.assertEqual(membership.tier, 'admin')
        self.assertEqual(membership.impact_points, 20)

    def test_no_log_without_tier_change(self):
        user, _ = create_user_with_membership('basic', 0)

        PointsService.award_points(user.id, 'own_order', 1)

        self.assertFalse(TierChangeLog.objects.filter(user=user).exists())


class IntegrationAwardsTest(TestCase):
    """Test the award rules for invites, orders and pallets"""

    def setUp(self):
        self.user, self.membership = create_user_with_membership()
        self.friend = UserFactory()

    def test_pallet_milestone_awarded_once(self):
        first = PointsIntegrationService.award_pallet_milestone(self.user.id, 3)
        second = PointsIntegrationService.award_pallet_milestone(self.user.id, 3)

        self.assertTrue(first['awarded'])
        self.assertFalse(second['awarded'])
        self.assertEqual(second['new_total'], 3)
        event = PointsEvent.objects.get(user=self.user, event_type='pallet_milestone')
        self.assertEqual(event.points, 3)
        self.assertEqual(event.description, '3 pallets milestone')
        self.assertEqual(event.dedup_key, '3 pallets milestone')

    def test_every_milestone_awards_three_points(self):
        for pallets in (3, 6, 9, 12, 15):
            PointsIntegrationService.award_pallet_milestone(self.user.id, pallets)

        self.membership.refresh_from_db()
        self.assertEqual(self.membership.impact_points, 15)
        self.assertEqual(self.membership.tier, 'silver')

    def test_non_milestone_pallet_count_awards_nothing(self):
        result = PointsIntegrationService.award_pallet_milestone(self.user.id, 4)

        self.assertFalse(result['awarded'])
        self.assertEqual(result['new_total'], 0)
        self.assertFalse(PointsEvent.objects.filter(user=self.user).exists())

    def test_negative_pallet_count_is_rejected(self):
        with self.assertRaises(ValidationError):
            PointsIntegrationService.award_pallet_milestone(self.user.id, -3)

    def test_five_bottles_award_nothing(self):
        result = PointsIntegrationService.award_own_order(self.user.id, 5, order_id='A-1')

        self.assertFalse(result['awarded'])
        self.assertFalse(PointsEvent.objects.filter(user=self.user).exists())

    def test_six_bottles_award_one_point(self):
        result = PointsIntegrationService.award_own_order(self.user.id, 6, order_id='A-2')

        self.assertTrue(result['awarded'])
        self.assertEqual(result['new_total'], 1)
        event = PointsEvent.objects.get(user=self.user)
        self.assertEqual((event.event_type, event.points, event.related_order_id), ('own_order', 1, 'A-2'))

    def test_own_order_counted_once_per_order(self):
        PointsIntegrationService.award_own_order(self.user.id, 12, order_id='A-3')
        PointsIntegrationService.award_own_order(self.user.id, 12, order_id='A-3')

        self.assertEqual(PointsEvent.objects.filter(user=self.user).count(), 1)

    def test_negative_bottle_count_is_rejected(self):
        with self.assertRaises(ValidationError):
            PointsIntegrationService.award_own_order(self.user.id, -1)

    def test_invite_signup_once_per_invitee(self):
        PointsIntegrationService.award_invite_signup(self.user.id, self.friend.id)
        result = PointsIntegrationService.award_invite_signup(self.user.id, self.friend.id)

        self.assertFalse(result['awarded'])
        event = PointsEvent.objects.get(user=self.user)
        self.assertEqual(event.related_user, self.friend)

    def test_invite_signup_for_different_invitees(self):
        PointsIntegrationService.award_invite_signup(self.user.id, self.friend.id)
        PointsIntegrationService.award_invite_signup(self.user.id, UserFactory().id)

        self.membership.refresh_from_db()
        self.assertEqual(self.membership.impact_points, 2)

    def test_invite_reservation_limited_to_two_per_invitee(self):
        results = [
            PointsIntegrationService.award_invite_reservation(self.user.id, self.friend.id, order_id=f'R-{n}')
            for n in range(3)
        ]

        self.assertEqual([r['awarded'] for r in results], [True, True, False])
        self.assertEqual(
            PointsEvent.objects.filter(user=self.user, event_type='invite_reservation').count(), 2
        )

    def test_invite_reservation_limit_is_per_invitee(self):
        other_friend = UserFactory()
        for n in range(2):
            PointsIntegrationService.award_invite_reservation(self.user.id, self.friend.id, order_id=f'R-{n}')

        result = PointsIntegrationService.award_invite_reservation(self.user.id, other_friend.id, order_id='R-9')

        self.assertTrue(result['awarded'])
        self.assertEqual(result['new_total'], 6)

    def test_invite_reservation_order_counted_once(self):
        PointsIntegrationService.award_invite_reservation(self.user.id, self.friend.id, order_id='R-1')
        result = PointsIntegrationService.award_invite_reservation(self.user.id, self.friend.id, order_id='R-1')

        self.assertFalse(result['awarded'])
        self.assertEqual(result['new_total'], 2)


class LedgerAuditTest(TestCase):
    def test_mismatch_detected_and_rebuilt(self):
        user, membership = create_user_with_membership('bronze', 5)
        Membership.objects.filter(pk=membership.pk).update(impact_points=20, tier='silver')

        mismatches = PointsService.find_ledger_mismatches()
        self.assertEqual([(m.user_id, total) for m, total in mismatches], [(user.id, 5)])

        PointsService.rebuild_cached_total(user.id)

        membership.refresh_from_db()
        self.assertEqual(membership.impact_points, 5)
        self.assertEqual(membership.tier, 'bronze')
        self.assertEqual(PointsService.find_ledger_mismatches(), [])


class LedgerSumPropertyTest(HypothesisTestCase):
    """The cached total equals the ledger sum after any sequence of writes"""

    @settings(max_examples=25, deadline=None)
    @given(deltas=st.lists(st.integers(min_value=-4, max_value=6), max_size=12))
    def test_cached_total_matches_ledger(self, deltas):
        user, membership = create_user_with_membership()
        expected = 0

        for delta in deltas:
            if expected + delta < 0:
                with self.assertRaises(ValidationError):
                    PointsService.adjust_impact_points(user.id, delta, 'Property test')
                continue
            result = PointsService.adjust_impact_points(user.id, delta, 'Property test')
            expected += delta
            self.assertEqual(result['new_total'], expected)

        membership.refresh_from_db()
        self.assertEqual(membership.impact_points, expected)
        self.assertEqual(ledger_sum(user), expected)
        self.assertEqual(membership.tier, TierClassifier.classify_tier(expected))
