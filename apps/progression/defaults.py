"""
Default progression reward configuration, seeded by setup_progression_rewards.
"""
from apps.membership.tiers import BASIC_BRONZE, BRONZE_SILVER, SILVER_GOLD

DEFAULT_PROGRESSION_REWARDS = [
    {
        'level_segment': BASIC_BRONZE,
        'ip_threshold': 2,
        'reward_type': 'buff_percentage',
        'reward_value': '0.50',
        'reward_description': '+0.5% discount for reaching 2 impact points',
        'sort_order': 1,
    },
    {
        'level_segment': BASIC_BRONZE,
        'ip_threshold': 4,
        'reward_type': 'buff_percentage',
        'reward_value': '0.50',
        'reward_description': '+0.5% discount for reaching 4 impact points',
        'sort_order': 2,
    },
    {
        'level_segment': BRONZE_SILVER,
        'ip_threshold': 10,
        'reward_type': 'early_access_token',
        'reward_value': 'early_access',
        'reward_description': 'Early access to the next release',
        'sort_order': 1,
    },
    {
        'level_segment': BRONZE_SILVER,
        'ip_threshold': 14,
        'reward_type': 'fee_waiver',
        'reward_value': 'service_fee',
        'reward_description': 'Service fee waived on your next order',
        'sort_order': 2,
    },
    {
        'level_segment': SILVER_GOLD,
        'ip_threshold': 20,
        'reward_type': 'buff_percentage',
        'reward_value': '1.00',
        'reward_description': '+1% discount for reaching 20 impact points',
        'sort_order': 1,
    },
    {
        'level_segment': SILVER_GOLD,
        'ip_threshold': 25,
        'reward_type': 'buff_percentage',
        'reward_value': '1.00',
        'reward_description': '+1% discount for reaching 25 impact points',
        'sort_order': 2,
    },
    {
        'level_segment': SILVER_GOLD,
        'ip_threshold': 30,
        'reward_type': 'buff_percentage',
        'reward_value': '1.00',
        'reward_description': '+1% discount for reaching 30 impact points',
        'sort_order': 3,
    },
    {
        'level_segment': SILVER_GOLD,
        'ip_threshold': 30,
        'reward_type': 'badge',
        'reward_value': 'almost_gold',
        'reward_description': 'Almost Gold badge',
        'sort_order': 4,
    },
    {
        'level_segment': SILVER_GOLD,
        'ip_threshold': 35,
        'reward_type': 'celebration',
        'reward_value': 'gold_reached',
        'reward_description': 'Welcome to Gold!',
        'sort_order': 5,
    },
]
