from django.core.management.base import BaseCommand, CommandError
from django.utils.dateparse import parse_date

from HR.attendance.services import AttendanceService


class Command(BaseCommand):
    help = 'Mark active employees without an attendance record as absent (all active companies)'

    def add_arguments(self, parser):
        parser.add_argument('--date', help='Date to process (YYYY-MM-DD), defaults to today')

    def handle(self, *args, **options):
        target_date = None
        if options.get('date'):
            target_date = parse_date(options['date'])
            if target_date is None:
                raise CommandError(f"Invalid date: {options['date']}")

        created = AttendanceService.mark_absents_for_all_companies(target_date)
        self.stdout.write(self.style.SUCCESS(f'Marked {created} employee(s) absent'))
