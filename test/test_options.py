"""
Options module behavioral tests (Option capability, registry rules).

Conventions
- Test method names follow CamelCase per project convention.
"""
import unittest
import warnings
from types import SimpleNamespace
from unittest import TestCase

from flagpole import (
    AttributeSlot,
    ConflictingFlagError,
    InvalidArgumentError,
    Kind,
    NamelessFlagError,
    Option,
    OptionRegistry,
    OutOfRangeError,
    ReservedFlagWarning,
    Slot,
    UnsupportedTypeError,
    unset,
)


class TestOption(TestCase):
    """Behavioral tests for a single Option."""

    def testMatchIsExact(self):
        option = Option(Kind.BOOL, "-u", "--boop")
        self.assertTrue(option.match("-u"))
        self.assertTrue(option.match("--boop"))
        self.assertFalse(option.match("--boo"))
        self.assertFalse(option.match("--BOOP"))
        self.assertFalse(option.match("-U"))
        self.assertFalse(option.match(""))

    def testMatchWithOnlyOneName(self):
        option = Option("i32", long="--num")
        self.assertTrue(option.match("--num"))
        self.assertFalse(option.match("-n"))
        self.assertEqual(option.names, ("--num",))

    def testParseWritesIntoSlot(self):
        slot = Slot(0)
        option = Option(Kind.I8, "-a", "--i8", slot=slot)
        option.parse("64")
        self.assertEqual(slot.value, 64)
        option.parse("-64")
        self.assertEqual(slot.value, -64)

    def testBoolParse(self):
        option = Option(Kind.BOOL, "-u", "--boop")
        for raw, expected in (("true", True), ("1", True), ("false", False), ("0", False)):
            with self.subTest(raw=raw):
                option.parse(raw)
                self.assertIs(option.slot.value, expected)

    def testInvalidArgumentCarriesFlagAndValue(self):
        option = Option(Kind.BOOL, "-u", "--boop")
        with self.assertRaises(InvalidArgumentError) as context:
            option.parse("yes", flag="-u")
        self.assertEqual(context.exception.flag, "-u")
        self.assertEqual(context.exception.value, "yes")
        self.assertIs(option.slot.value, unset)

    def testOutOfRange(self):
        slot = Slot(3)
        option = Option(Kind.U8, long="--byte", slot=slot)
        with self.assertRaises(OutOfRangeError) as context:
            option.parse("256")
        self.assertEqual(context.exception.flag, "--byte")
        self.assertEqual(context.exception.value, "256")
        self.assertEqual(slot.value, 3)

    def testNamelessRejected(self):
        with self.assertRaises(NamelessFlagError):
            Option(Kind.I32)

    def testBadNamesRejected(self):
        with self.assertRaises(ValueError):
            Option(Kind.I32, "")
        with self.assertRaises(ValueError):
            Option(Kind.I32, long="--a=b")
        with self.assertRaises(TypeError):
            Option(Kind.I32, 5)

    def testUnsupportedKind(self):
        with self.assertRaises(UnsupportedTypeError):
            Option(str, "-s")

    def testAttributeSlot(self):
        namespace = SimpleNamespace()
        option = Option(float, long="--ratio", slot=AttributeSlot(namespace, "ratio"))
        option.parse("0.25")
        self.assertEqual(namespace.ratio, 0.25)

    def testDescribe(self):
        self.assertEqual(Option(Kind.I32, "-n", "--num", "count").describe().plain, "  --num|-n  count")
        self.assertEqual(Option(Kind.I32, long="--num", descr="count").describe().plain, "  --num  count")
        self.assertEqual(Option(Kind.I32, "-n", descr="count").describe().plain, "  -n  count")
        self.assertEqual(Option(Kind.I32, "-n", "--num").describe().plain, "  --num|-n")


class TestOptionRegistry(TestCase):
    """Behavioral tests for the kind-partitioned registry."""

    def testInsertionOrderWithinKind(self):
        registry = OptionRegistry()
        first = registry.register(Kind.I32, "-a")
        second = registry.register(Kind.I32, "-b")
        self.assertEqual(list(registry.options(Kind.I32)), [first, second])

    def testIterationFollowsKindOrder(self):
        registry = OptionRegistry()
        flag = registry.register(bool, "-g")
        number = registry.register("i32", "-n")
        byte = registry.register("u8", "-b")
        self.assertEqual(list(registry), [number, byte, flag])
        self.assertEqual(len(registry), 3)

    def testFirstMatchWithinKindWins(self):
        registry = OptionRegistry()
        first = registry.register(Kind.I32, "-n", "--num")
        registry.register(Kind.I32, "-n", "--number")
        self.assertIs(registry.lookup("-n"), first)

    def testLaterKindMatchReplacesEarlier(self):
        registry = OptionRegistry()
        number = registry.register(Kind.I32, "-n", "--num")
        # bypass the conflict check to place the same name under two kinds
        flag = Option(Kind.BOOL, "-n", "--now")
        registry._options[Kind.BOOL].append(flag)
        self.assertIs(registry.lookup("-n"), flag)
        self.assertIs(registry.lookup("--num"), number)

    def testLookupMiss(self):
        registry = OptionRegistry()
        registry.register(Kind.I32, "-n", "--num")
        self.assertIsNone(registry.lookup("--nu"))
        self.assertNotIn("positional", registry)
        self.assertIn("--num", registry)

    def testCrossKindConflictRejected(self):
        registry = OptionRegistry()
        registry.register(Kind.I32, "-n", "--num")
        with self.assertRaises(ConflictingFlagError) as context:
            registry.register(Kind.BOOL, "-x", "--num")
        self.assertEqual(context.exception.flag, "--num")
        self.assertEqual(len(registry), 1)

    def testReservedNamesWarnAndNeverMatch(self):
        registry = OptionRegistry()
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            registry.register(Kind.U64, "-h", "--u64")
        self.assertTrue(any(issubclass(w.category, ReservedFlagWarning) for w in caught))
        self.assertIsNone(registry.lookup("-h"))
        self.assertIsNotNone(registry.lookup("--u64"))


if __name__ == "__main__":
    unittest.main()
