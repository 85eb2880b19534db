"""
Tier notification service for handling tier change and reward notifications.
"""
import logging

from ..tiers import TierClassifier

logger = logging.getLogger(__name__)


class TierNotificationService:
    """Builds notification payloads for membership domain events"""

    @staticmethod
    def send_tier_change_notification(user_id, old_tier, new_tier, impact_points=None):
        """Send tier change notification"""
        old_name = TierClassifier.get_display_name(old_tier) if old_tier else None
        new_name = TierClassifier.get_display_name(new_tier)

        notification_data = {
            'user_id': user_id,
            'old_tier': old_name,
            'new_tier': new_name,
            'impact_points': impact_points,
            'invite_quota': TierClassifier.get_invite_quota(new_tier),
            'message': f'Congratulations! You are now a {new_name} member!',
        }

        # Delivery (email, in-app toast) belongs to the storefront
        logger.info(f"Tier change notification: {notification_data}")
        return notification_data

    @staticmethod
    def send_progression_reward_notification(user_id, reward_type, reward_value, description, segment):
        """Send notification for a non-discount progression reward"""
        notification_data = {
            'user_id': user_id,
            'reward_type': reward_type,
            'reward_value': reward_value,
            'segment': segment,
            'message': description,
        }

        logger.info(f"Progression reward notification: {notification_data}")
        return notification_data
