from django.db import models
from django.conf import settings

from ..tiers import TierClassifier


class TierChangeLog(models.Model):
    """History of tier changes"""
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='tier_changes')
    from_tier = models.CharField(max_length=20, choices=TierClassifier.TIER_CHOICES, null=True, blank=True)
    to_tier = models.CharField(max_length=20, choices=TierClassifier.TIER_CHOICES)
    reason = models.CharField(max_length=200)
    impact_points = models.IntegerField(null=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'tier_change_logs'
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.user}: {self.from_tier} -> {self.to_tier}"

    @property
    def is_upgrade(self):
        ladder = TierClassifier.POINT_TIERS
        if self.from_tier in ladder and self.to_tier in ladder:
            return ladder.index(self.to_tier) > ladder.index(self.from_tier)
        return None
