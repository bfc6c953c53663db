"""
Management command com estatísticas e comparação de formatos de uma loja.

Uso:
    python manage.py order_number_stats --outlet 7
    python manage.py order_number_stats --outlet 7 --compare
"""

from django.core.management.base import BaseCommand, CommandError

from orderman.exceptions import OrdermanError
from orderman.services import compare_formats, get_outlet_stats


class Command(BaseCommand):
    help = "Mostra estatísticas de números de pedido de uma loja"

    def add_arguments(self, parser):
        parser.add_argument("--outlet", type=int, required=True, help="ID público da loja")
        parser.add_argument(
            "--compare",
            action="store_true",
            help="Mostra um candidato de cada formato (nada é persistido)",
        )

    def handle(self, *args, **options):
        outlet_id = options["outlet"]

        try:
            stats = get_outlet_stats(outlet_id)
        except OrdermanError as e:
            raise CommandError(f"{e.code}: {e.message}")

        self.stdout.write(f"Total de pedidos: {stats.total_orders}")
        self.stdout.write(f"Pedidos hoje (UTC): {stats.today_orders}")
        if stats.last_order_number:
            self.stdout.write(f"Último pedido: {stats.last_order_number} ({stats.last_order_at.isoformat()})")
        else:
            self.stdout.write("Último pedido: -")

        if not options["compare"]:
            return

        self.stdout.write("")
        for comparison in compare_formats(outlet_id):
            if comparison.error:
                self.stdout.write(self.style.ERROR(f"  {comparison.format:<16} erro: {comparison.error}"))
            else:
                self.stdout.write(f"  {comparison.format:<16} {comparison.order_number} ({comparison.length} chars)")
