"""
Unit and property tests for tier classification and progression segments
"""
import pytest
from hypothesis import given, strategies as st

from apps.membership.tiers import TierClassifier

points_strategy = st.integers(min_value=0, max_value=10000)


@pytest.mark.parametrize('points,expected', [
    (0, 'basic'),
    (4, 'basic'),
    (5, 'bronze'),
    (14, 'bronze'),
    (15, 'silver'),
    (34, 'silver'),
    (35, 'gold'),
    (1000, 'gold'),
])
def test_classify_tier_boundaries(points, expected):
    assert TierClassifier.classify_tier(points) == expected


@pytest.mark.parametrize('tier,quota', [
    ('requester', 0),
    ('basic', 2),
    ('bronze', 5),
    ('silver', 12),
    ('gold', 50),
    ('admin', 999999),
])
def test_invite_quotas(tier, quota):
    assert TierClassifier.get_invite_quota(tier) == quota


def test_unknown_tier_has_no_invites():
    assert TierClassifier.get_invite_quota('platinum') == 0


@pytest.mark.parametrize('points,tier,segment', [
    (0, 'basic', 'basic-bronze'),
    (4, 'basic', 'basic-bronze'),
    (5, 'bronze', 'bronze-silver'),
    (14, 'bronze', 'bronze-silver'),
    (15, 'silver', 'silver-gold'),
    (34, 'silver', 'silver-gold'),
    (35, 'gold', None),
    (3, 'requester', None),
    (3, 'admin', None),
])
def test_level_segment(points, tier, segment):
    assert TierClassifier.level_segment(points, tier) == segment


def test_level_segment_ignores_stale_tier():
    """A tier whose range no longer holds the points earns no segment"""
    assert TierClassifier.level_segment(20, 'bronze') is None
    assert TierClassifier.level_segment(3, 'silver') is None


def test_administrative_tiers_survive_reclassification():
    assert TierClassifier.resolve_tier(40, 'admin') == 'admin'
    assert TierClassifier.resolve_tier(40, 'requester') == 'requester'
    assert TierClassifier.resolve_tier(40, 'silver') == 'gold'
    assert TierClassifier.resolve_tier(3, 'bronze') == 'basic'


def test_next_level_info():
    info = TierClassifier.get_next_level_info(12, 'bronze')
    assert info['level'] == 'silver'
    assert info['points_needed'] == 3
    assert TierClassifier.get_next_level_info(50, 'gold') is None
    assert TierClassifier.get_next_level_info(0, 'requester') is None


def test_level_info():
    info = TierClassifier.get_level_info('silver')
    assert info['name'] == 'Silver'
    assert (info['min_points'], info['max_points']) == (15, 34)
    assert info['invite_quota'] == 12


@given(points=points_strategy)
def test_classification_falls_inside_tier_range(points):
    tier = TierClassifier.classify_tier(points)
    minimum, maximum = TierClassifier.LEVEL_THRESHOLDS[tier]
    assert minimum <= points
    assert maximum is None or points <= maximum


@given(low=points_strategy, high=points_strategy)
def test_classification_is_monotonic(low, high):
    low, high = min(low, high), max(low, high)
    ladder = TierClassifier.POINT_TIERS
    assert ladder.index(TierClassifier.classify_tier(low)) <= ladder.index(TierClassifier.classify_tier(high))


@given(points=points_strategy)
def test_classified_tier_always_matches_its_segment(points):
    tier = TierClassifier.classify_tier(points)
    segment = TierClassifier.level_segment(points, tier)
    if tier == 'gold':
        assert segment is None
    else:
        assert segment == TierClassifier.TIER_SEGMENTS[tier]
