import datetime

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError

from garment_erp.common.exceptions import BusinessError
from garment_erp.payroll.services.payroll_runner import generate_payroll


def _parse_date(value):
    try:
        return datetime.date.fromisoformat(value)
    except ValueError:
        raise CommandError(f"Invalid date {value!r}, expected YYYY-MM-DD")


class Command(BaseCommand):
    help = "Generate a draft payroll period for all active employees"

    def add_arguments(self, parser):
        parser.add_argument("start_date", help="First day of the period (YYYY-MM-DD)")
        parser.add_argument("end_date", help="Last day of the period (YYYY-MM-DD)")
        parser.add_argument("--user", required=True, help="Email of the user running payroll")

    def handle(self, *args, **options):
        User = get_user_model()
        try:
            caller = User.objects.get(email=options["user"])
        except User.DoesNotExist:
            raise CommandError(f"No user with email {options['user']}")

        try:
            period = generate_payroll(
                start_date=_parse_date(options["start_date"]),
                end_date=_parse_date(options["end_date"]),
                caller=caller,
            )
        except BusinessError as e:
            raise CommandError(e.message)

        self.stdout.write(self.style.SUCCESS(
            f"Generated {period.period_name} ({period.entries.count()} entries), "
            f"payment on {period.payment_date}"
        ))
