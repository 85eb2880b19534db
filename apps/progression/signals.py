"""
Signals for progression app
"""
from django.dispatch import Signal, receiver

# Sent after commit with user_id, reward_type, reward_value, description, segment, reward_id
progression_reward_earned = Signal()


@receiver(progression_reward_earned)
def notify_progression_reward(sender, user_id, reward_type, reward_value, description, segment, **kwargs):
    from apps.membership.services import TierNotificationService
    TierNotificationService.send_progression_reward_notification(
        user_id, reward_type, reward_value, description, segment,
    )
