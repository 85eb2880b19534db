from django.core.management.base import BaseCommand

from apps.progression.defaults import DEFAULT_PROGRESSION_REWARDS
from apps.progression.models import ProgressionReward


class Command(BaseCommand):
    help = 'Set up the default progression reward definitions'

    def handle(self, *args, **options):
        """Create or update progression rewards"""
        for reward_data in DEFAULT_PROGRESSION_REWARDS:
            lookup = {
                'level_segment': reward_data['level_segment'],
                'ip_threshold': reward_data['ip_threshold'],
                'reward_type': reward_data['reward_type'],
            }
            defaults = {key: value for key, value in reward_data.items() if key not in lookup}
            defaults['is_active'] = True

            reward, created = ProgressionReward.objects.update_or_create(defaults=defaults, **lookup)

            action = 'Created' if created else 'Updated'
            self.stdout.write(
                self.style.SUCCESS(
                    f'{action} reward: {reward.level_segment} @ {reward.ip_threshold} IP ({reward.reward_type})'
                )
            )

        self.stdout.write(
            self.style.SUCCESS(f'Progression rewards setup complete ({len(DEFAULT_PROGRESSION_REWARDS)} definitions)')
        )
