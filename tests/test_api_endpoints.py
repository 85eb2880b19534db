"""
API endpoint tests
"""
from decimal import Decimal

import pytest
from django.urls import reverse

from apps.membership.models import Membership
from apps.points.models import PointsEvent
from tests.factories import ProgressionBuffFactory, UserFactory, create_user_with_membership


@pytest.mark.django_db
class TestMembershipEndpoints:

    def test_requires_authentication(self, api_client):
        response = api_client.get(reverse('membership-status'))

        assert response.status_code == 401
        assert response.data['code'] == 401

    def test_status(self, api_client, silver_user):
        api_client.force_authenticate(user=silver_user)

        response = api_client.get(reverse('membership-status'))

        assert response.status_code == 200
        data = response.data['data']
        assert data['tier'] == 'silver'
        assert data['impact_points'] == 20
        assert data['level_segment'] == 'silver-gold'
        assert data['invite_quota_monthly'] == 12
        assert data['next_level']['points_needed'] == 15

    def test_status_without_membership(self, api_client, basic_user):
        Membership.objects.filter(user=basic_user).delete()
        api_client.force_authenticate(user=basic_user)

        response = api_client.get(reverse('membership-status'))

        assert response.status_code == 404
        assert response.data['errors']['type'] == 'not_found'

    def test_consume_invites_until_exhausted(self, api_client, basic_user):
        api_client.force_authenticate(user=basic_user)
        url = reverse('membership-consume-invite')

        assert api_client.post(url).data['data'] == {'remaining': 1}
        assert api_client.post(url).data['data'] == {'remaining': 0}
        response = api_client.post(url)

        assert response.status_code == 403
        assert response.data['errors']['type'] == 'quota_exhausted'

        quota = api_client.get(reverse('membership-invites')).data['data']
        assert (quota['available'], quota['used'], quota['total']) == (0, 2, 2)
        assert quota['next_reset'] is not None

    def test_tier_history(self, api_client, staff_user):
        user, _ = create_user_with_membership('basic', 4)
        api_client.force_authenticate(user=staff_user)
        api_client.post(reverse('points:admin_adjust'), {
            'user_id': user.id, 'points': 1, 'description': 'Goodwill'
        }, format='json')

        api_client.force_authenticate(user=user)
        response = api_client.get(reverse('membership-tier-history'))

        assert response.status_code == 200
        assert response.data['data'][0]['to_tier'] == 'bronze'
        assert response.data['data'][0]['is_upgrade'] is True

    def test_admin_set_tier(self, api_client, staff_user, basic_user):
        api_client.force_authenticate(user=staff_user)

        response = api_client.post(
            reverse('membership-admin-set-tier', args=[basic_user.id]),
            {'tier': 'requester', 'reason': 'Pending approval'}, format='json'
        )

        assert response.status_code == 200
        assert response.data['data']['membership']['tier'] == 'requester'

    def test_admin_set_tier_requires_staff(self, api_client, basic_user):
        api_client.force_authenticate(user=basic_user)

        response = api_client.post(
            reverse('membership-admin-set-tier', args=[basic_user.id]), {'tier': 'gold'}, format='json'
        )

        assert response.status_code == 403

    def test_admin_set_tier_rejects_unknown_tier(self, api_client, staff_user, basic_user):
        api_client.force_authenticate(user=staff_user)

        response = api_client.post(
            reverse('membership-admin-set-tier', args=[basic_user.id]), {'tier': 'platinum'}, format='json'
        )

        assert response.status_code == 400


@pytest.mark.django_db
class TestPointsEndpoints:

    def test_internal_award_requires_staff(self, api_client, basic_user):
        api_client.force_authenticate(user=basic_user)

        response = api_client.post(reverse('points:internal_award_pallet_milestone'), {
            'user_id': basic_user.id, 'pallet_count': 3
        }, format='json')

        assert response.status_code == 403
        assert not PointsEvent.objects.exists()

    def test_award_pallet_milestone(self, api_client, staff_user, basic_user):
        api_client.force_authenticate(user=staff_user)
        url = reverse('points:internal_award_pallet_milestone')

        first = api_client.post(url, {'user_id': basic_user.id, 'pallet_count': 3}, format='json')
        second = api_client.post(url, {'user_id': basic_user.id, 'pallet_count': 3}, format='json')

        assert first.status_code == 200
        assert first.data['data']['awarded'] is True
        assert first.data['data']['new_total'] == 3
        assert second.data['data']['awarded'] is False
        assert second.data['data']['new_total'] == 3

    def test_award_own_order_rejects_negative_bottles(self, api_client, staff_user, basic_user):
        api_client.force_authenticate(user=staff_user)

        response = api_client.post(reverse('points:internal_award_own_order'), {
            'user_id': basic_user.id, 'bottle_count': -1, 'order_id': 'X-1'
        }, format='json')

        assert response.status_code == 400
        assert response.data['errors']['type'] == 'validation_error'

    def test_award_for_unknown_user(self, api_client, staff_user):
        api_client.force_authenticate(user=staff_user)

        response = api_client.post(reverse('points:internal_award_invite_signup'), {
            'inviter_id': 999999, 'invitee_id': staff_user.id
        }, format='json')

        assert response.status_code == 404

    def test_award_invite_reservation(self, api_client, staff_user, basic_user):
        friend = UserFactory()
        api_client.force_authenticate(user=staff_user)

        response = api_client.post(reverse('points:internal_award_invite_reservation'), {
            'inviter_id': basic_user.id, 'invitee_id': friend.id, 'order_id': 'R-1'
        }, format='json')

        assert response.data['data']['awarded'] is True
        assert response.data['data']['new_total'] == 2
        assert response.data['data']['event']['related_user'] == friend.id

    def test_events_list(self, api_client, staff_user, basic_user):
        api_client.force_authenticate(user=staff_user)
        api_client.post(reverse('points:internal_award_own_order'), {
            'user_id': basic_user.id, 'bottle_count': 6, 'order_id': 'X-2'
        }, format='json')

        api_client.force_authenticate(user=basic_user)
        response = api_client.get(reverse('points:events'))

        assert response.status_code == 200
        assert response.data['data']['page']['total'] == 1
        assert response.data['data']['list'][0]['event_type'] == 'own_order'

    def test_summary(self, api_client, silver_user):
        api_client.force_authenticate(user=silver_user)

        response = api_client.get(reverse('points:summary'))

        assert response.data['data']['impact_points'] == 20
        assert response.data['data']['event_count'] == 1

    def test_admin_adjust_below_zero(self, api_client, staff_user, basic_user):
        api_client.force_authenticate(user=staff_user)

        response = api_client.post(reverse('points:admin_adjust'), {
            'user_id': basic_user.id, 'points': -5, 'description': 'Mistake'
        }, format='json')

        assert response.status_code == 400
        assert Membership.objects.get(user=basic_user).impact_points == 0


@pytest.mark.django_db
class TestProgressionEndpoints:

    def test_buffs_and_apply(self, api_client, basic_user):
        ProgressionBuffFactory.create_batch(3, user=basic_user)
        api_client.force_authenticate(user=basic_user)

        listing = api_client.get(reverse('progression-buffs')).data['data']
        assert len(listing['active_buffs']) == 3
        assert Decimal(listing['total_percentage']) == Decimal('1.50')
        assert listing['current_segment'] == 'basic-bronze'

        applied = api_client.post(reverse('progression-apply-buffs'), {'order_id': 'ORD-7'}, format='json')
        assert applied.status_code == 200
        assert applied.data['data'] == {'applied_percentage': '1.50', 'buff_count': 3}

        again = api_client.post(reverse('progression-apply-buffs'), {}, format='json')
        assert again.data['data']['buff_count'] == 0

    def test_segment_rewards(self, api_client, basic_user, progression_rewards):
        api_client.force_authenticate(user=basic_user)

        response = api_client.get(reverse('progression-segment-rewards', args=['bronze-silver']))

        assert response.status_code == 200
        assert [r['reward_type'] for r in response.data['data']] == ['early_access_token', 'fee_waiver']

    def test_unknown_segment(self, api_client, basic_user):
        api_client.force_authenticate(user=basic_user)

        response = api_client.get(reverse('progression-segment-rewards', args=['gold-platinum']))

        assert response.status_code == 400
