"""
Management command para gerar números de pedido.

Uso:
    python manage.py generate_order_numbers --outlet 7
    python manage.py generate_order_numbers --outlet 7 --format date-based --count 3
    python manage.py generate_order_numbers --outlet 7 --create --count 10

Sem --create apenas gera (não persiste): números sequenciais repetem até que
um pedido seja criado.
"""

import logging

from django.core.management.base import BaseCommand, CommandError

from orderman.exceptions import OrdermanError
from orderman.formats import OrderNumberFormat
from orderman.services import build_config, create_order, generate_order_number


logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = "Gera números de pedido para uma loja"

    def add_arguments(self, parser):
        parser.add_argument("--outlet", type=int, required=True, help="ID público da loja")
        parser.add_argument(
            "--format",
            choices=OrderNumberFormat.values,
            default=None,
            help="Formato (default: ORDERMAN['FORMAT'])",
        )
        parser.add_argument("--count", type=int, default=1, help="Quantidade (default: 1)")
        parser.add_argument("--prefix", default=None, help="Prefixo (default: ORDERMAN['PREFIX'])")
        parser.add_argument(
            "--create",
            action="store_true",
            help="Cria um pedido de teste para cada número",
        )

    def handle(self, *args, **options):
        overrides = {"prefix": options["prefix"]} if options["prefix"] else {}
        config = build_config(options["outlet"], options["format"], **overrides)

        for _ in range(options["count"]):
            try:
                if options["create"]:
                    order_number = create_order(config, meta={"source": "generate_order_numbers"}).order_number
                else:
                    order_number = generate_order_number(config).order_number
            except OrdermanError as e:
                raise CommandError(f"{e.code}: {e.message}")

            logger.info("Generated order number %s", order_number)
            self.stdout.write(order_number)

        if options["create"]:
            self.stdout.write(self.style.SUCCESS(f"{options['count']} pedidos criados"))
