"""
The closed set of scalar kinds a flag can be bound to.

Kind is a tagged variant: one enum member per supported scalar, each carrying
its family (integer, float, boolean) and, for integers, the inclusive range of
its width. Conversion dispatches on the member, never on the runtime type of
a destination.

Members (in matching/help order)
- I8, I16, I32, I64: signed integers
- U8, U16, U32, U64: unsigned integers
- F32, F64: IEEE floats (F32 is rounded to single precision; literals beyond
  either range become infinity)
- BOOL: "true"/"1" and "false"/"0"

Conversion errors
- ValueError: the text is not a literal of the family.
- OverflowError: the literal does not fit the kind.
The option layer turns those into InvalidArgumentError / OutOfRangeError.
"""
import math
import re
import struct
from enum import Enum

from .faults import UnsupportedTypeError

_INTEGER = re.compile(r"[+-]?[0-9]+", re.ASCII)
# significant digits of the widest kind (u64)
_DIGITS = 20
_FLOAT = re.compile(
    r"[+-]?(([0-9]+(\.[0-9]*)?|\.[0-9]+)([eE][+-]?[0-9]+)?|inf|infinity|nan)",
    re.ASCII | re.IGNORECASE,
)

_TRUE = frozenset(("true", "1"))
_FALSE = frozenset(("false", "0"))


class Kind(Enum):
    I8 = ("i8", "integer", -2 ** 7, 2 ** 7 - 1)
    I16 = ("i16", "integer", -2 ** 15, 2 ** 15 - 1)
    I32 = ("i32", "integer", -2 ** 31, 2 ** 31 - 1)
    I64 = ("i64", "integer", -2 ** 63, 2 ** 63 - 1)
    U8 = ("u8", "integer", 0, 2 ** 8 - 1)
    U16 = ("u16", "integer", 0, 2 ** 16 - 1)
    U32 = ("u32", "integer", 0, 2 ** 32 - 1)
    U64 = ("u64", "integer", 0, 2 ** 64 - 1)
    F32 = ("f32", "float", None, None)
    F64 = ("f64", "float", None, None)
    BOOL = ("bool", "boolean", None, None)

    def __new__(cls, label, family, low, high):
        member = object.__new__(cls)
        member._value_ = label
        member.label = label
        member.family = family
        member.low = low
        member.high = high
        return member

    def convert(self, raw, /):
        """
        convert the raw command-line text into a value of this kind.

        raises ValueError on malformed text and OverflowError when the value
        does not fit.
        """
        match self.family:
            case "integer":
                return self._to_integer(raw)
            case "float":
                return self._to_float(raw)
            case "boolean":
                return self._to_boolean(raw)
        raise AssertionError("unreachable kind family %r" % self.family)

    def _to_integer(self, raw):
        if not _INTEGER.fullmatch(raw):
            raise ValueError("invalid %s literal %r" % (self.label, raw))
        digits = raw.lstrip("+-").lstrip("0")
        if len(digits) > _DIGITS:
            raise OverflowError("%s does not fit %s [%d, %d]" % (raw, self.label, self.low, self.high))
        number = int(digits or "0", 10)
        if raw.startswith("-"):
            number = -number
        if not self.low <= number <= self.high:
            raise OverflowError("%s does not fit %s [%d, %d]" % (raw, self.label, self.low, self.high))
        return number

    def _to_float(self, raw):
        if not _FLOAT.fullmatch(raw):
            raise ValueError("invalid %s literal %r" % (self.label, raw))
        number = float(raw)
        if self is Kind.F32:
            try:
                # round to single precision
                number = struct.unpack("<f", struct.pack("<f", number))[0]
            except OverflowError:
                # beyond the f32 range rounds to infinity, like f64 does
                number = math.copysign(math.inf, number)
        return number

    def _to_boolean(self, raw):
        if raw in _TRUE:
            return True
        if raw in _FALSE:
            return False
        raise ValueError("invalid bool literal %r (expected true, false, 1 or 0)" % raw)

    def __repr__(self):
        return "Kind.%s" % self.name


_BUILTINS = {
    bool: Kind.BOOL,
    int: Kind.I64,
    float: Kind.F64,
}


def resolve(designator, /):
    """
    map a registration designator onto a Kind.

    accepted
    - a Kind member
    - its label, case-insensitive ("i32", "U8", "bool")
    - the builtins bool, int (as i64) and float (as f64)

    anything else raises UnsupportedTypeError.
    """
    if isinstance(designator, Kind):
        return designator
    if isinstance(designator, str):
        try:
            return Kind(designator.lower())
        except ValueError:
            pass
    elif isinstance(designator, type) and designator in _BUILTINS:
        return _BUILTINS[designator]
    raise UnsupportedTypeError(
        "unsupported flag type %r" % (designator,),
        value=designator,
        hint="use one of: %s" % ", ".join(kind.label for kind in Kind),
    )


__all__ = (
    "Kind",
    "resolve",
)
