"""
Arguments module behavioral tests (records and strict numeric coercion).

Scope
- Validate Flag counters and their boolean value view.
- Validate Option construction: value types, fallbacks, and their checks.
- Validate strict, locale-independent integer/floating-point parsing.
- Validate eager conversion of positional lists.

Conventions
- Test method names follow CamelCase per project convention.
"""
import math
import unittest
from unittest import TestCase

from argstream import Flag, Option, integer, floating, convert_all
from argstream.faults import InvalidNumericValueError


class TestFlag(TestCase):
    """Behavioral tests for Flag records."""

    def testFlagDefaults(self):
        flag = Flag()
        self.assertEqual(flag.count, 0)
        self.assertFalse(flag.value)
        self.assertEqual(flag.values, [])

    def testFlagHitsAccumulate(self):
        flag = Flag()
        flag.hit()
        flag.hit()
        self.assertEqual(flag.count, 2)
        self.assertTrue(flag.value)
        self.assertEqual(flag.values, [True, True])


class TestOption(TestCase):
    """Behavioral tests for Option records."""

    def testZeroValueFallbacks(self):
        self.assertEqual(Option(str).fallback, "")
        self.assertEqual(Option(int).fallback, 0)
        self.assertEqual(Option(float).fallback, 0.0)

    def testFallbackReturnedUntilValueFound(self):
        option = Option(str, "default")
        self.assertEqual(option.value, "default")
        self.assertEqual(option.values, [])
        option.append("given")
        self.assertEqual(option.value, "given")
        self.assertEqual(option.count, 1)

    def testLastValueWins(self):
        option = Option(int)
        option.append("1")
        option.append("-2")
        self.assertEqual(option.value, -2)
        self.assertEqual(option.values, [1, -2])

    def testValuesIsACopy(self):
        option = Option(str)
        option.append("a")
        option.values.append("b")
        self.assertEqual(option.values, ["a"])

    def testIntegerFallbackAcceptedForFloat(self):
        option = Option(float, 2)
        self.assertIsInstance(option.fallback, float)
        self.assertEqual(option.fallback, 2.0)

    def testUnsupportedTypeRaises(self):
        for type in (bool, list, bytes):
            with self.subTest(type=type), self.assertRaises(TypeError):
                Option(type)

    def testMismatchedFallbackRaises(self):
        with self.assertRaises(TypeError):
            Option(int, "1")
        with self.assertRaises(TypeError):
            Option(str, 1)
        with self.assertRaises(TypeError):
            Option(int, True)

    def testInvalidTokenLeavesValuesUntouched(self):
        option = Option(int, 7)
        with self.assertRaises(InvalidNumericValueError):
            option.append("seven")
        self.assertEqual(option.count, 0)
        self.assertEqual(option.value, 7)


class TestCoercion(TestCase):
    """Behavioral tests for integer() and floating()."""

    def testIntegerAcceptsSignedDecimal(self):
        self.assertEqual(integer("42"), 42)
        self.assertEqual(integer("-7"), -7)
        self.assertEqual(integer("+3"), 3)
        self.assertEqual(integer("007"), 7)

    def testIntegerRejectsMalformedTokens(self):
        for token in ("", " 1", "1 ", "1_000", "0x10", "1.0", "١٢", "abc", "-"):
            with self.subTest(token=token), self.assertRaises(InvalidNumericValueError) as context:
                integer(token)
            self.assertEqual(context.exception.input, token)

    def testIntegerMessage(self):
        with self.assertRaises(InvalidNumericValueError) as context:
            integer("foo")
        self.assertEqual(str(context.exception), "cannot parse 'foo' as an integer")

    def testFloatingAcceptsDecimalAndExponent(self):
        self.assertEqual(floating("1.5"), 1.5)
        self.assertEqual(floating("-.5"), -0.5)
        self.assertEqual(floating("2."), 2.0)
        self.assertEqual(floating("1e3"), 1000.0)
        self.assertEqual(floating("1.5E-1"), 0.15)
        self.assertEqual(floating("7"), 7.0)

    def testFloatingAcceptsSpecialValues(self):
        self.assertEqual(floating("inf"), math.inf)
        self.assertEqual(floating("-Infinity"), -math.inf)
        self.assertTrue(math.isnan(floating("nan")))

    def testFloatingRejectsMalformedTokens(self):
        for token in ("", ".", "1e", "e3", " 1.0", "1_0.0", "1,5", "0x1p3", "abc"):
            with self.subTest(token=token), self.assertRaises(InvalidNumericValueError):
                floating(token)

    def testFloatingMessage(self):
        with self.assertRaises(InvalidNumericValueError) as context:
            floating("foo")
        self.assertEqual(str(context.exception), "cannot parse 'foo' as a floating-point value")


class TestConvertAll(TestCase):
    """Behavioral tests for convert_all()."""

    def testConvertsEveryToken(self):
        self.assertEqual(convert_all(["1", "-2"], int), [1, -2])
        self.assertEqual(convert_all(["1", "2.5"], float), [1.0, 2.5])
        self.assertEqual(convert_all(["a"], str), ["a"])

    def testFirstFailureAborts(self):
        with self.assertRaises(InvalidNumericValueError) as context:
            convert_all(["1", "x", "y"], int)
        self.assertEqual(context.exception.input, "x")


if __name__ == "__main__":
    unittest.main()
