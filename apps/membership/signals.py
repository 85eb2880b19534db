"""
Signals for membership app
"""
from django.contrib.auth import get_user_model
from django.db.models.signals import post_save
from django.dispatch import Signal, receiver

User = get_user_model()

# Sent after commit with user_id, old_tier, new_tier, impact_points, reason
tier_changed = Signal()


@receiver(post_save, sender=User)
def create_user_membership(sender, instance, created, **kwargs):
    """Create membership when a new user signs up"""
    if created:
        from .services import MembershipService
        MembershipService.create_membership_for_user(instance)


@receiver(tier_changed)
def notify_tier_change(sender, user_id, old_tier, new_tier, impact_points=None, **kwargs):
    from .services import TierNotificationService
    TierNotificationService.send_tier_change_notification(user_id, old_tier, new_tier, impact_points)
