from django.db import models
from django.conf import settings

from apps.membership.tiers import TierClassifier


class ProgressionBuffQuerySet(models.QuerySet):
    def active(self):
        return self.filter(used_at__isnull=True)


class ProgressionBuff(models.Model):
    """
    Temporary percentage discount earned while climbing towards the next tier.

    A buff is active until ``used_at`` is set, either when it is applied to an
    order or when a tier change voids it (``cleared_at`` set as well).
    """
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='progression_buffs')
    buff_percentage = models.DecimalField(max_digits=5, decimal_places=2)
    buff_description = models.CharField(max_length=200)
    level_segment = models.CharField(max_length=20, choices=TierClassifier.SEGMENT_CHOICES)
    reward = models.ForeignKey(
        'progression.ProgressionReward', on_delete=models.SET_NULL,
        null=True, blank=True, related_name='buffs'
    )
    related_event = models.ForeignKey(
        'points.PointsEvent', on_delete=models.SET_NULL,
        null=True, blank=True, related_name='progression_buffs'
    )
    earned_at = models.DateTimeField(auto_now_add=True)
    used_at = models.DateTimeField(null=True, blank=True)
    used_on_order_id = models.CharField(max_length=100, blank=True, null=True)
    cleared_at = models.DateTimeField(null=True, blank=True)
    expires_on_use = models.BooleanField(default=True)

    objects = ProgressionBuffQuerySet.as_manager()

    class Meta:
        db_table = 'user_progression_buffs'
        ordering = ['earned_at', 'id']
        verbose_name = 'Progression Buff'
        verbose_name_plural = 'Progression Buffs'
        indexes = [
            models.Index(fields=['user', 'used_at'], name='progression_buff_active_idx'),
        ]

    def __str__(self):
        return f"{self.user} +{self.buff_percentage}% ({self.level_segment})"

    @property
    def is_active(self):
        return self.used_at is None

    @property
    def status(self):
        if self.used_at is None:
            return 'active'
        if self.cleared_at is not None:
            return 'cleared'
        return 'consumed'
