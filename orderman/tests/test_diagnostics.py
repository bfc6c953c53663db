"""
Tests for orderman.services.diagnostics.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone as dt_timezone

from django.test import TestCase
from django.utils import timezone

from orderman.exceptions import OutletNotFound
from orderman.formats import OrderNumberFormat
from orderman.models import Order, Outlet
from orderman.services import (
    GenerationConfig,
    OrderNumberGenerator,
    analyze_order_number,
    compare_formats,
    create_order,
    generate_test_order_numbers,
    get_outlet_stats,
    is_valid_order_number,
    parse_order_number,
    validate_order_number_format,
)


class OutletStatsTests(TestCase):
    def setUp(self) -> None:
        super().setUp()
        self.outlet = Outlet.objects.create(public_id=7)

    def test_empty_outlet(self) -> None:
        stats = get_outlet_stats(7)
        self.assertEqual(stats.total_orders, 0)
        self.assertEqual(stats.today_orders, 0)
        self.assertIsNone(stats.last_order_number)
        self.assertIsNone(stats.last_order_at)

    def test_counts_and_last_order(self) -> None:
        old = create_order(GenerationConfig(format="sequential", outlet_id=7))
        Order.objects.filter(pk=old.pk).update(created_at=timezone.now() - timedelta(days=2))
        create_order(GenerationConfig(format="sequential", outlet_id=7))
        last = create_order(GenerationConfig(format="random", outlet_id=7))

        stats = get_outlet_stats(7)

        self.assertEqual(stats.total_orders, 3)
        self.assertEqual(stats.today_orders, 2)
        self.assertEqual(stats.last_order_number, last.order_number)

    def test_other_outlets_are_not_counted(self) -> None:
        Outlet.objects.create(public_id=8)
        create_order(GenerationConfig(format="sequential", outlet_id=8))
        self.assertEqual(get_outlet_stats(7).total_orders, 0)

    def test_unknown_outlet(self) -> None:
        with self.assertRaises(OutletNotFound):
            get_outlet_stats(999)


class CompareFormatsTests(TestCase):
    def setUp(self) -> None:
        super().setUp()
        Outlet.objects.create(public_id=7)

    def test_one_candidate_per_format(self) -> None:
        generator = OrderNumberGenerator(clock=lambda: datetime(2025, 1, 15, 12, tzinfo=dt_timezone.utc))
        comparisons = compare_formats(7, generator=generator)

        self.assertEqual([c.format for c in comparisons], list(OrderNumberFormat.values))
        by_format = {c.format: c for c in comparisons}
        self.assertEqual(by_format["sequential"].order_number, "ORD-007-0001")
        self.assertEqual(by_format["sequential"].sequence, 1)
        self.assertEqual(by_format["date-based"].order_number, "ORD-007-20250115-0001")
        self.assertEqual(by_format["random"].length, len("ORD-007-A7B9C2"))
        for comparison in comparisons:
            self.assertIsNone(comparison.error)

    def test_nothing_is_persisted(self) -> None:
        compare_formats(7)
        compare_formats(7)
        self.assertEqual(Order.objects.count(), 0)
        self.assertEqual(compare_formats(7)[0].order_number, "ORD-007-0001")

    def test_errors_are_reported_per_format(self) -> None:
        comparisons = compare_formats(999)
        self.assertEqual(len(comparisons), 6)
        for comparison in comparisons:
            self.assertIsNone(comparison.order_number)
            self.assertIn("999", comparison.error)


class ValidateFormatTests(TestCase):
    def setUp(self) -> None:
        super().setUp()
        Outlet.objects.create(public_id=7)

    def test_generated_numbers_are_valid(self) -> None:
        for fmt in OrderNumberFormat:
            order = create_order(GenerationConfig(format=fmt, outlet_id=7))
            validation = validate_order_number_format(order.order_number)
            self.assertTrue(validation.is_valid, (fmt, order.order_number, validation.errors))
            self.assertIn("Order number format is valid", validation.suggestions)

    def test_empty(self) -> None:
        validation = validate_order_number_format("")
        self.assertFalse(validation.is_valid)
        self.assertEqual(validation.errors, ["Order number cannot be empty"])

    def test_wrong_prefix(self) -> None:
        validation = validate_order_number_format("INV-007-0001")
        self.assertFalse(validation.is_valid)
        self.assertIn('Order number must start with "ORD-"', validation.errors)

    def test_custom_prefix(self) -> None:
        self.assertTrue(validate_order_number_format("INV-007-0001", prefix="INV").is_valid)

    def test_too_few_parts(self) -> None:
        validation = validate_order_number_format("ORD-007")
        self.assertIn("Order number must have at least 3 parts separated by hyphens", validation.errors)

    def test_outlet_must_be_positive_number(self) -> None:
        for value in ("ORD-000-0001", "ORD-ABC-0001", "ORD00012345"):
            validation = validate_order_number_format(value)
            self.assertFalse(validation.is_valid, value)
            self.assertIn("Outlet ID must be a positive number", validation.errors)


class ParseOrderNumberTests(TestCase):
    def test_sequential(self) -> None:
        parsed = parse_order_number("ORD-007-0001")
        self.assertEqual(parsed.format, "sequential")
        self.assertEqual(parsed.outlet_id, 7)
        self.assertEqual(parsed.sequence, 1)
        self.assertIsNone(parsed.random)

    def test_date_based(self) -> None:
        parsed = parse_order_number("ORD-007-20250115-0012")
        self.assertEqual(parsed.format, "date-based")
        self.assertEqual(parsed.date, "20250115")
        self.assertEqual(parsed.sequence, 12)

    def test_random(self) -> None:
        parsed = parse_order_number("ORD-007-A7B9C2")
        self.assertEqual(parsed.format, "random")
        self.assertEqual(parsed.random, "A7B9C2")
        self.assertIsNone(parsed.sequence)

    def test_hybrid(self) -> None:
        parsed = parse_order_number("ORD-042-20250115-A7B9")
        self.assertEqual(parsed.format, "hybrid")
        self.assertEqual(parsed.outlet_id, 42)
        self.assertEqual(parsed.random, "A7B9")

    def test_compact_numeric(self) -> None:
        parsed = parse_order_number("ORD00712345")
        self.assertEqual(parsed.format, "compact-numeric")
        self.assertEqual(parsed.outlet_id, 7)
        self.assertEqual(parsed.random, "12345")

    def test_random_numeric_reads_as_sequential(self) -> None:
        self.assertEqual(parse_order_number("ORD-007-123456").format, "sequential")

    def test_invalid(self) -> None:
        for value in ("", "ORD-7", "INV-007-0001", "ord-007-0001", "ORD-007-a7b9c2"):
            self.assertIsNone(parse_order_number(value), value)
            self.assertFalse(is_valid_order_number(value))

    def test_analyze(self) -> None:
        analysis = analyze_order_number("ORD-007-20250115-A7B9")
        self.assertTrue(analysis["is_valid"])
        self.assertEqual(analysis["format"], "hybrid")
        self.assertEqual(analysis["outlet_id"], 7)
        self.assertEqual(analysis["errors"], [])

        analysis = analyze_order_number("XYZ")
        self.assertFalse(analysis["is_valid"])
        self.assertEqual(analysis["format"], "unknown")
        self.assertTrue(analysis["errors"])


class GenerateTestOrderNumbersTests(TestCase):
    def test_creates_marked_orders(self) -> None:
        Outlet.objects.create(public_id=7)

        numbers = generate_test_order_numbers(7, 3)

        self.assertEqual(numbers, ["ORD-007-0001", "ORD-007-0002", "ORD-007-0003"])
        self.assertEqual(Order.objects.filter(meta__test=True).count(), 3)
