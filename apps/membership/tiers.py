"""
Tier classifier for impact-point based membership levels.

Pure functions over immutable configuration: no database access.
"""

REQUESTER = 'requester'
BASIC = 'basic'
BRONZE = 'bronze'
SILVER = 'silver'
GOLD = 'gold'
ADMIN = 'admin'

BASIC_BRONZE = 'basic-bronze'
BRONZE_SILVER = 'bronze-silver'
SILVER_GOLD = 'silver-gold'


class TierClassifier:
    """Classify impact points into membership tiers and progression segments"""

    TIER_CHOICES = [
        (REQUESTER, 'Requester'),
        (BASIC, 'Basic'),
        (BRONZE, 'Bronze'),
        (SILVER, 'Silver'),
        (GOLD, 'Gold'),
        (ADMIN, 'Admin'),
    ]

    SEGMENT_CHOICES = [
        (BASIC_BRONZE, 'Basic to Bronze'),
        (BRONZE_SILVER, 'Bronze to Silver'),
        (SILVER_GOLD, 'Silver to Gold'),
    ]

    # Closed, non-overlapping point ranges; None means no upper bound
    LEVEL_THRESHOLDS = {
        BASIC: (0, 4),
        BRONZE: (5, 14),
        SILVER: (15, 34),
        GOLD: (35, None),
    }

    # Ladder of tiers derived from points, lowest first
    POINT_TIERS = [BASIC, BRONZE, SILVER, GOLD]

    # Assigned out-of-band, never derived from points
    ADMINISTRATIVE_TIERS = frozenset([REQUESTER, ADMIN])

    INVITE_QUOTAS = {
        REQUESTER: 0,
        BASIC: 2,
        BRONZE: 5,
        SILVER: 12,
        GOLD: 50,
        ADMIN: 999999,
    }

    # The segment a user works through while holding a tier
    TIER_SEGMENTS = {
        BASIC: BASIC_BRONZE,
        BRONZE: BRONZE_SILVER,
        SILVER: SILVER_GOLD,
    }

    @classmethod
    def classify_tier(cls, points):
        """Map a point total onto basic, bronze, silver or gold"""
        points = max(0, int(points))
        for tier in reversed(cls.POINT_TIERS):
            minimum, _ = cls.LEVEL_THRESHOLDS[tier]
            if points >= minimum:
                return tier
        return BASIC

    @classmethod
    def resolve_tier(cls, points, current_tier):
        """
        Tier a membership should hold after its points changed.

        Administrative tiers stay as they are; every other tier follows the
        point total up and down.
        """
        if current_tier in cls.ADMINISTRATIVE_TIERS:
            return current_tier
        return cls.classify_tier(points)

    @classmethod
    def level_segment(cls, points, tier):
        """
        Progression segment for a tier/points pair, or None.

        The segment only applies while the points still fall inside the
        tier's own range, so a stale tier never earns buffs.
        """
        segment = cls.TIER_SEGMENTS.get(tier)
        if segment is None:
            return None

        minimum, maximum = cls.LEVEL_THRESHOLDS[tier]
        if minimum <= points <= maximum:
            return segment
        return None

    @classmethod
    def get_invite_quota(cls, tier):
        """Monthly invite quota for a tier"""
        return cls.INVITE_QUOTAS.get(tier, 0)

    @classmethod
    def get_display_name(cls, tier):
        return dict(cls.TIER_CHOICES).get(tier, tier.capitalize())

    @classmethod
    def get_level_info(cls, tier):
        """Display name, point range and invite quota for a tier"""
        minimum, maximum = cls.LEVEL_THRESHOLDS.get(tier, (0, None))
        return {
            'level': tier,
            'name': cls.get_display_name(tier),
            'min_points': minimum,
            'max_points': maximum,
            'invite_quota': cls.get_invite_quota(tier),
        }

    @classmethod
    def get_next_level_info(cls, points, tier):
        """Next tier on the ladder and the points still needed, or None at the top"""
        if tier not in cls.POINT_TIERS:
            return None

        index = cls.POINT_TIERS.index(tier)
        if index == len(cls.POINT_TIERS) - 1:
            return None

        next_tier = cls.POINT_TIERS[index + 1]
        next_minimum, _ = cls.LEVEL_THRESHOLDS[next_tier]
        return {
            'level': next_tier,
            'name': cls.get_display_name(next_tier),
            'points_needed': max(0, next_minimum - points),
            'min_points': next_minimum,
        }
