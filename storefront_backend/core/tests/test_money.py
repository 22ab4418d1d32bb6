# core/tests/test_money.py

from decimal import Decimal

from django.test import SimpleTestCase

from core.money import money, to_decimal


class MoneyRoundingTests(SimpleTestCase):
    def test_rounds_half_up_to_two_places(self):
        self.assertEqual(money("2.675"), Decimal("2.68"))
        self.assertEqual(money("0.005"), Decimal("0.01"))
        self.assertEqual(money("0.004"), Decimal("0.00"))
        self.assertEqual(money(Decimal("33.333")), Decimal("33.33"))

    def test_blank_is_zero(self):
        self.assertEqual(money(None), Decimal("0.00"))
        self.assertEqual(money(""), Decimal("0.00"))

    def test_ints_and_floats_go_through_str(self):
        self.assertEqual(money(10), Decimal("10.00"))
        self.assertEqual(money(0.1), Decimal("0.10"))

    def test_to_decimal_rejects_non_numbers(self):
        for bad in (True, None, "  ", "abc", "NaN", "Infinity"):
            with self.subTest(value=bad):
                with self.assertRaises(ValueError):
                    to_decimal(bad)

    def test_amounts_beyond_column_range_are_rejected(self):
        for bad in ("1" + "0" * 30, "10000000000", "-10000000000", Decimal("1E+40"), "1e999999"):
            with self.subTest(value=bad):
                with self.assertRaises(ValueError):
                    money(bad)

    def test_largest_storable_amount_is_accepted(self):
        self.assertEqual(money("9999999999.99"), Decimal("9999999999.99"))
        self.assertEqual(money("0.0000000001"), Decimal("0.00"))

    def test_rounding_up_past_the_limit_is_rejected(self):
        with self.assertRaises(ValueError):
            money("9999999999.995")
