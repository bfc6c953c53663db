"""
Management command to seed example outlets and orders.

Usage:
    python manage.py seed_example
    python manage.py seed_example --reset  # Clear and reseed
    python manage.py seed_example --demo   # Include one demo order per format
"""

from django.core.management.base import BaseCommand

from orderman.formats import OrderNumberFormat
from orderman.models import Order, Outlet
from orderman.services import GenerationConfig, create_order


OUTLETS = [
    {"public_id": 1, "name": "Loja Centro"},
    {"public_id": 7, "name": "Loja Shopping"},
    {"public_id": 42, "name": "Quiosque Aeroporto"},
]


class Command(BaseCommand):
    help = "Seed example outlets and orders"

    def add_arguments(self, parser):
        parser.add_argument(
            "--reset",
            action="store_true",
            help="Clear existing data before seeding",
        )
        parser.add_argument(
            "--demo",
            action="store_true",
            help="Create one demo order per format for each outlet",
        )

    def handle(self, *args, **options):
        if options["reset"]:
            self.stdout.write("Clearing existing data...")
            Order.objects.all().delete()
            Outlet.objects.all().delete()

        self.seed_outlets()

        if options["demo"]:
            self.create_demo_orders()

        self.stdout.write(self.style.SUCCESS("\nExample data seeded successfully!"))
        self.stdout.write("\nNext steps:")
        self.stdout.write("  1. Run: django-admin runserver --settings=example.project.settings")
        self.stdout.write("  2. Visit: http://localhost:8000/admin/")
        self.stdout.write("  3. Or: django-admin order_number_stats --outlet 7 --compare --settings=example.project.settings")

    def seed_outlets(self):
        self.stdout.write("\nCreating outlets...")
        for data in OUTLETS:
            outlet, created = Outlet.objects.get_or_create(public_id=data["public_id"], defaults={"name": data["name"]})
            status = "created" if created else "exists"
            self.stdout.write(f"  - {outlet} ({outlet.segment}) [{status}]")

    def create_demo_orders(self):
        self.stdout.write("\nCreating demo orders...")
        for data in OUTLETS:
            for fmt in OrderNumberFormat:
                order = create_order(
                    GenerationConfig(format=fmt, outlet_id=data["public_id"]),
                    meta={"demo": True},
                )
                self.stdout.write(f"  - {fmt.value:<16} {order.order_number}")
