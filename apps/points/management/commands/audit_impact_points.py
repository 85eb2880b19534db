from django.core.management.base import BaseCommand

from apps.points.services import PointsService


class Command(BaseCommand):
    help = 'Check that every membership total equals the sum of its impact point ledger'

    def add_arguments(self, parser):
        parser.add_argument(
            '--fix',
            action='store_true',
            help='Rebuild mismatched totals from the ledger',
        )

    def handle(self, *args, **options):
        mismatches = PointsService.find_ledger_mismatches()

        if not mismatches:
            self.stdout.write(self.style.SUCCESS('All membership totals match their ledgers'))
            return

        for membership, ledger_total in mismatches:
            self.stdout.write(
                self.style.WARNING(
                    f'User {membership.user_id}: cached {membership.impact_points} IP, ledger {ledger_total} IP'
                )
            )
            if options['fix']:
                PointsService.rebuild_cached_total(membership.user_id)

        if options['fix']:
            self.stdout.write(self.style.SUCCESS(f'Rebuilt {len(mismatches)} membership totals'))
        else:
            self.stdout.write(self.style.ERROR(f'{len(mismatches)} membership totals out of sync'))
