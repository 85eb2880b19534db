from django.db import models
from django.conf import settings
from django.utils import timezone

from apps.common.exceptions import ValidationError
from ..tiers import TierClassifier


def current_month_start(now=None):
    """First instant of the current calendar month in the configured time zone"""
    local_now = timezone.localtime(now or timezone.now())
    return local_now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)


class Membership(models.Model):
    """User's membership tier, impact points and invite usage"""
    TIER_CHOICES = TierClassifier.TIER_CHOICES

    user = models.OneToOneField(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='membership')
    tier = models.CharField(max_length=20, choices=TIER_CHOICES, default='basic')
    # Cached projection of the impact point ledger
    impact_points = models.PositiveIntegerField(default=0)
    invites_used_this_month = models.PositiveIntegerField(default=0)
    last_quota_reset = models.DateTimeField(default=timezone.now)
    tier_start_date = models.DateTimeField(default=timezone.now)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'user_memberships'
        verbose_name = 'Membership'
        verbose_name_plural = 'Memberships'
        indexes = [
            models.Index(fields=['tier'], name='membership_tier_idx'),
            models.Index(fields=['last_quota_reset'], name='membership_quota_reset_idx'),
        ]

    def __str__(self):
        return f"{self.user} - {self.get_tier_display()} ({self.impact_points} IP)"

    @property
    def invite_quota_monthly(self):
        """Quota is derived from the tier at read time"""
        return TierClassifier.get_invite_quota(self.tier)

    @property
    def quota_reset_due(self):
        return self.last_quota_reset < current_month_start()

    @property
    def effective_invites_used(self):
        """Usage counter as it stands this month (a stale counter counts as zero)"""
        if self.quota_reset_due:
            return 0
        return self.invites_used_this_month

    @property
    def available_invites(self):
        return max(0, self.invite_quota_monthly - self.effective_invites_used)

    @property
    def level_segment(self):
        return TierClassifier.level_segment(self.impact_points, self.tier)

    def get_level_info(self):
        return TierClassifier.get_level_info(self.tier)

    def get_next_level_info(self):
        return TierClassifier.get_next_level_info(self.impact_points, self.tier)

    @classmethod
    def create_for_user(cls, user, tier=None):
        """Create membership for a new user with the configured default tier"""
        tier = tier or settings.MEMBERSHIP_ENGINE.get('DEFAULT_TIER', 'basic')
        if tier not in ('requester', 'basic'):
            raise ValidationError(f"New memberships start as requester or basic, not {tier}", tier=tier)

        membership, _ = cls.objects.get_or_create(user=user, defaults={'tier': tier})
        return membership
