from django.core.management.base import BaseCommand

from apps.membership.services import InviteQuotaService


class Command(BaseCommand):
    help = 'Reset monthly invite quotas for memberships last reset before this month'

    def handle(self, *args, **options):
        result = InviteQuotaService.reset_monthly_quotas()
        self.stdout.write(
            self.style.SUCCESS(f"Reset invite quotas for {result['users_reset']} memberships")
        )
