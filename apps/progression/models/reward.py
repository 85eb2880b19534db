from decimal import Decimal, InvalidOperation

from django.core.exceptions import ValidationError
from django.db import models

from apps.membership.tiers import TierClassifier


class ProgressionReward(models.Model):
    """Reward handed out when a user's points reach a threshold inside a segment"""
    BUFF_PERCENTAGE = 'buff_percentage'

    REWARD_TYPES = [
        (BUFF_PERCENTAGE, 'Discount Buff'),
        ('badge', 'Badge'),
        ('early_access_token', 'Early Access Token'),
        ('fee_waiver', 'Fee Waiver'),
        ('celebration', 'Celebration'),
    ]

    level_segment = models.CharField(max_length=20, choices=TierClassifier.SEGMENT_CHOICES)
    ip_threshold = models.PositiveIntegerField()
    reward_type = models.CharField(max_length=30, choices=REWARD_TYPES)
    # Percentage for buffs, free-form token for everything else
    reward_value = models.CharField(max_length=50)
    reward_description = models.CharField(max_length=200)
    is_active = models.BooleanField(default=True)
    sort_order = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'progression_rewards'
        ordering = ['level_segment', 'ip_threshold', 'sort_order']
        verbose_name = 'Progression Reward'
        verbose_name_plural = 'Progression Rewards'
        constraints = [
            models.UniqueConstraint(
                fields=['level_segment', 'ip_threshold', 'reward_type'],
                name='unique_progression_reward',
            ),
        ]

    def __str__(self):
        return f"{self.level_segment} @ {self.ip_threshold} IP: {self.reward_description}"

    def clean(self):
        super().clean()
        if self.is_buff and self.buff_percentage is None:
            raise ValidationError({'reward_value': 'Buff rewards need a positive percentage such as 0.50'})

    @property
    def is_buff(self):
        return self.reward_type == self.BUFF_PERCENTAGE

    @property
    def buff_percentage(self):
        """Buff percentage as a Decimal, or None when reward_value is not a positive number"""
        try:
            percentage = Decimal(self.reward_value)
        except (InvalidOperation, TypeError):
            return None
        if not percentage.is_finite() or percentage <= 0:
            return None
        return percentage
