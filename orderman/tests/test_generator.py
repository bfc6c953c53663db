"""
Tests for OrderNumberGenerator and create_order.
"""

from __future__ import annotations

from datetime import datetime, timezone as dt_timezone

from django.test import TestCase, override_settings

from orderman.exceptions import ConfigurationError, OutletNotFound
from orderman.formats import OrderNumberFormat
from orderman.models import Order, Outlet
from orderman.services import (
    GenerationConfig,
    OrderNumberGenerator,
    build_config,
    create_order,
    create_order_number,
    create_order_number_with_format,
    generate_order_number,
)


def fixed_clock(year: int, month: int, day: int):
    return lambda: datetime(year, month, day, 12, 0, tzinfo=dt_timezone.utc)


class SequentialTests(TestCase):
    def setUp(self) -> None:
        super().setUp()
        self.outlet = Outlet.objects.create(public_id=7, name="Loja 7")
        Outlet.objects.create(public_id=8, name="Loja 8")

    def _create(self, outlet_id: int = 7, **kwargs) -> Order:
        return create_order(GenerationConfig(format=OrderNumberFormat.SEQUENTIAL, outlet_id=outlet_id, **kwargs))

    def test_first_number(self) -> None:
        result = generate_order_number(GenerationConfig(format="sequential", outlet_id=7))

        self.assertEqual(result.order_number, "ORD-007-0001")
        self.assertEqual(result.sequence, 1)
        self.assertEqual(result.format, "sequential")
        self.assertEqual(result.outlet_id, 7)
        self.assertEqual(result.attempts, 1)

    def test_generate_without_order_does_not_advance(self) -> None:
        config = GenerationConfig(format="sequential", outlet_id=7)
        self.assertEqual(generate_order_number(config).order_number, "ORD-007-0001")
        self.assertEqual(generate_order_number(config).order_number, "ORD-007-0001")
        self.assertEqual(Order.objects.count(), 0)

    def test_sequence_advances_with_orders(self) -> None:
        numbers = [self._create().order_number for _ in range(3)]
        self.assertEqual(numbers, ["ORD-007-0001", "ORD-007-0002", "ORD-007-0003"])
        self.assertEqual(list(Order.objects.order_by("id").values_list("sequence", flat=True)), [1, 2, 3])

    def test_outlets_are_independent(self) -> None:
        self._create(7)
        self._create(7)
        self.assertEqual(self._create(8).order_number, "ORD-008-0001")
        self.assertEqual(self._create(7).order_number, "ORD-007-0003")

    def test_custom_prefix_and_length(self) -> None:
        order = self._create(prefix="INV", sequence_length=6)
        self.assertEqual(order.order_number, "INV-007-000001")
        # Escopo inclui o prefixo
        self.assertEqual(self._create().order_number, "ORD-007-0001")

    def test_random_numeric_orders_do_not_move_the_sequence(self) -> None:
        create_order(GenerationConfig(format=OrderNumberFormat.RANDOM_NUMERIC, outlet_id=7))
        self.assertEqual(self._create().order_number, "ORD-007-0001")

    def test_date_based_orders_do_not_move_the_sequence(self) -> None:
        create_order(GenerationConfig(format=OrderNumberFormat.DATE_BASED, outlet_id=7))
        self.assertEqual(self._create().order_number, "ORD-007-0001")

    def test_outlet_above_999_is_not_truncated(self) -> None:
        Outlet.objects.create(public_id=1234)
        self.assertEqual(self._create(1234).order_number, "ORD-1234-0001")

    def test_order_records_allocation(self) -> None:
        order = self._create()
        self.assertEqual(order.outlet, self.outlet)
        self.assertEqual(order.format, "sequential")
        self.assertEqual(order.sequence, 1)

    def test_create_order_number_returns_string(self) -> None:
        self.assertEqual(create_order_number(7), "ORD-007-0001")


class DateBasedTests(TestCase):
    def setUp(self) -> None:
        super().setUp()
        Outlet.objects.create(public_id=7)

    def _create(self, generator: OrderNumberGenerator) -> Order:
        return create_order(GenerationConfig(format="date-based", outlet_id=7), generator=generator)

    def test_sequence_per_day(self) -> None:
        jan_15 = OrderNumberGenerator(clock=fixed_clock(2025, 1, 15))
        self.assertEqual(self._create(jan_15).order_number, "ORD-007-20250115-0001")
        self.assertEqual(self._create(jan_15).order_number, "ORD-007-20250115-0002")

    def test_sequence_resets_on_new_day(self) -> None:
        self._create(OrderNumberGenerator(clock=fixed_clock(2025, 1, 15)))
        self._create(OrderNumberGenerator(clock=fixed_clock(2025, 1, 15)))

        order = self._create(OrderNumberGenerator(clock=fixed_clock(2025, 1, 16)))
        self.assertEqual(order.order_number, "ORD-007-20250116-0001")
        self.assertEqual(order.sequence, 1)


class OpportunisticFormatTests(TestCase):
    def setUp(self) -> None:
        super().setUp()
        Outlet.objects.create(public_id=7)

    def test_random(self) -> None:
        result = generate_order_number(GenerationConfig(format="random", outlet_id=7))
        self.assertRegex(result.order_number, r"^ORD-007-[A-Z0-9]{6}$")
        self.assertEqual(result.sequence, 0)

    def test_random_with_length(self) -> None:
        result = generate_order_number(GenerationConfig(format="random", outlet_id=7, random_length=10))
        self.assertRegex(result.order_number, r"^ORD-007-[A-Z0-9]{10}$")

    def test_random_numeric(self) -> None:
        result = generate_order_number(GenerationConfig(format="random-numeric", outlet_id=7))
        self.assertRegex(result.order_number, r"^ORD-007-\d{6}$")
        self.assertEqual(result.sequence, 0)

    def test_compact_numeric(self) -> None:
        result = create_order_number_with_format(7, "compact-numeric")
        self.assertRegex(result.order_number, r"^ORD007\d{5}$")

    def test_hybrid(self) -> None:
        generator = OrderNumberGenerator(clock=fixed_clock(2025, 1, 15))
        result = generator.generate(GenerationConfig(format="hybrid", outlet_id=7))
        self.assertRegex(result.order_number, r"^ORD-007-20250115-[A-Z0-9]{4}$")

    def test_hybrid_numeric_only(self) -> None:
        generator = OrderNumberGenerator(clock=fixed_clock(2025, 1, 15))
        result = generator.generate(GenerationConfig(format="hybrid", outlet_id=7, numeric_only=True))
        self.assertRegex(result.order_number, r"^ORD-007-20250115-\d{4}$")

    def test_created_numbers_are_unique(self) -> None:
        numbers = [
            create_order(GenerationConfig(format="random-numeric", outlet_id=7)).order_number
            for _ in range(30)
        ]
        self.assertEqual(len(set(numbers)), 30)


class ConfigurationTests(TestCase):
    def setUp(self) -> None:
        super().setUp()
        Outlet.objects.create(public_id=7)

    def test_unknown_format_fails_before_store_access(self) -> None:
        with self.assertNumQueries(0):
            with self.assertRaises(ConfigurationError) as ctx:
                generate_order_number(GenerationConfig(format="uuid", outlet_id=7))
        self.assertEqual(ctx.exception.code, "unknown_format")

    def test_outlet_not_found(self) -> None:
        with self.assertRaises(OutletNotFound) as ctx:
            generate_order_number(GenerationConfig(format="sequential", outlet_id=999))
        self.assertEqual(ctx.exception.context, {"outlet_id": 999})
        self.assertEqual(Order.objects.count(), 0)

    def test_invalid_outlet_id(self) -> None:
        for outlet_id in (0, -1, "7", True):
            with self.assertRaises(ConfigurationError) as ctx:
                generate_order_number(GenerationConfig(format="sequential", outlet_id=outlet_id))
            self.assertEqual(ctx.exception.code, "invalid_outlet_id")

    def test_invalid_sequence_length(self) -> None:
        for length in (0, 11):
            with self.assertRaises(ConfigurationError) as ctx:
                generate_order_number(GenerationConfig(format="sequential", outlet_id=7, sequence_length=length))
            self.assertEqual(ctx.exception.code, "invalid_length")

    def test_invalid_random_length(self) -> None:
        for length in (3, 21):
            with self.assertRaises(ConfigurationError) as ctx:
                generate_order_number(GenerationConfig(format="random", outlet_id=7, random_length=length))
            self.assertEqual(ctx.exception.code, "invalid_length")

    def test_random_length_ignored_for_sequential(self) -> None:
        result = generate_order_number(GenerationConfig(format="sequential", outlet_id=7, random_length=3))
        self.assertEqual(result.order_number, "ORD-007-0001")

    def test_invalid_prefix(self) -> None:
        for prefix in ("", "OR-D", "OR D"):
            with self.assertRaises(ConfigurationError) as ctx:
                generate_order_number(GenerationConfig(format="sequential", outlet_id=7, prefix=prefix))
            self.assertEqual(ctx.exception.code, "invalid_prefix")

    @override_settings(ORDERMAN={"PREFIX": "PED", "SEQUENCE_LENGTH": 5})
    def test_settings_defaults(self) -> None:
        result = generate_order_number(GenerationConfig(format="sequential", outlet_id=7))
        self.assertEqual(result.order_number, "PED-007-00001")

    @override_settings(ORDERMAN={"FORMAT": "random"})
    def test_build_config_uses_default_format(self) -> None:
        self.assertEqual(build_config(7).format, "random")
        self.assertEqual(build_config(7, "hybrid").format, "hybrid")
