"""
Management command para auditoria estrutural de números de pedido.

Uso:
    python manage.py validate_order_numbers
    python manage.py validate_order_numbers --outlet 7 --prefix ORD
    python manage.py validate_order_numbers ORD-007-0001 ORDX-1

Com argumentos posicionais valida apenas os números informados; caso
contrário valida os pedidos do banco.
"""

from django.core.management.base import BaseCommand

from orderman.models import Order
from orderman.services import validate_order_number_format


class Command(BaseCommand):
    help = "Valida a estrutura de números de pedido"

    def add_arguments(self, parser):
        parser.add_argument("order_numbers", nargs="*", help="Números a validar")
        parser.add_argument("--outlet", type=int, default=None, help="Filtra pedidos por loja")
        parser.add_argument("--prefix", default="ORD", help="Prefixo esperado (default: ORD)")

    def handle(self, *args, **options):
        numbers = options["order_numbers"]
        if not numbers:
            qs = Order.objects.all()
            if options["outlet"] is not None:
                qs = qs.filter(outlet__public_id=options["outlet"])
            numbers = qs.values_list("order_number", flat=True).iterator()

        checked = 0
        invalid = 0
        for order_number in numbers:
            checked += 1
            validation = validate_order_number_format(order_number, prefix=options["prefix"])
            if not validation.is_valid:
                invalid += 1
                self.stdout.write(self.style.WARNING(f"{order_number}: {'; '.join(validation.errors)}"))

        style = self.style.SUCCESS if invalid == 0 else self.style.ERROR
        self.stdout.write(style(f"{checked} verificados, {invalid} inválidos"))
