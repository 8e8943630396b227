"""
Flag options and the kind-partitioned registry.

Option
- identity: an optional short name ("-n") and an optional long name ("--num");
  at least one is required.
- descr: optional one-line help.
- kind: the Kind that converts the raw value.
- slot: the caller-owned Slot receiving the converted value.
- match/parse/describe: the whole per-flag capability.

OptionRegistry
- one ordered list of Options per Kind, in Kind declaration order.
- lookup() walks every kind; the first match inside a kind wins, and a match
  in a later kind replaces one from an earlier kind.
- register() rejects nameless flags, unsupported kinds, and names already taken
  by a different kind. Re-using a name within the same kind is allowed; the
  first registration keeps matching.
"""
import logging
import warnings

from rich.text import Text

from .faults import *
from .kinds import Kind, resolve
from .slots import Slot

logger = logging.getLogger(__name__)

RESERVED = frozenset(("-h", "--help"))


def _name(x, what):
    if x is None:
        return None
    if not isinstance(x, str):
        raise TypeError("%s name must be a string, got %r" % (what, type(x).__name__))
    if not x:
        raise ValueError("%s name must not be empty" % what)
    if "=" in x:
        raise ValueError("%s name %r must not contain '='" % (what, x))
    return x


class Option:
    __slots__ = ("short", "long", "descr", "kind", "slot")

    def __init__(self, kind, short=None, long=None, descr=None, slot=None):
        self.kind = resolve(kind)
        self.short = _name(short, "short")
        self.long = _name(long, "long")
        if self.short is None and self.long is None:
            raise NamelessFlagError(
                "a %s flag needs a short or a long name" % self.kind.label,
                hint="pass a short name like '-n' or a long name like '--num'",
            )
        if descr is not None and not isinstance(descr, str):
            raise TypeError("flag description must be a string, got %r" % type(descr).__name__)
        self.descr = descr
        self.slot = Slot() if slot is None else slot

    @property
    def names(self):
        return tuple(name for name in (self.short, self.long) if name is not None)

    @property
    def display(self):
        """the name used in messages, long form preferred."""
        return self.long or self.short

    def match(self, token, /):
        return token == self.short or token == self.long

    def parse(self, raw, /, *, flag=None):
        """
        convert `raw` and store it into the slot.

        `flag` is the spelling seen on the command line, used in error
        messages; it defaults to the display name.
        """
        flag = flag or self.display
        try:
            value = self.kind.convert(raw)
        except OverflowError as e:
            raise OutOfRangeError(
                "value %r for %s is out of range for %s" % (raw, flag, self.kind.label),
                flag=flag,
                value=raw,
                hint=self._hint(),
            ) from e
        except ValueError as e:
            raise InvalidArgumentError(
                "invalid value %r for %s (expected %s)" % (raw, flag, self.kind.label),
                flag=flag,
                value=raw,
                hint=self._hint(),
            ) from e
        self.slot.value = value
        logger.debug("%s <- %r", flag, value)
        return value

    def _hint(self):
        if self.kind is Kind.BOOL:
            return "pass one of: true, false, 1, 0"
        if self.kind.family == "integer":
            return "pass a base-10 integer between %d and %d" % (self.kind.low, self.kind.high)
        return "pass a decimal number (for example: 1.5 or 2e-3)"

    def describe(self, styles=None):
        """
        help line for this option: "  <long>|<short>  <descr>".

        the pipe is dropped when either name is missing and the description
        column when there is no description.
        """
        styles = styles or {}
        line = Text("  ")
        if self.long is not None:
            line.append(self.long, styles.get("option-name", ""))
            if self.short is not None:
                line.append("|")
        if self.short is not None:
            line.append(self.short, styles.get("option-name", ""))
        if self.descr is not None:
            line.append("  ")
            line.append(self.descr, styles.get("option-description", ""))
        return line

    def __repr__(self):
        return "%s(%s, %s)" % (type(self).__name__, self.kind.label, "|".join(self.names))


class OptionRegistry:
    __slots__ = ("_options",)

    def __init__(self):
        self._options = {kind: [] for kind in Kind}

    def register(self, kind, short=None, long=None, descr=None, slot=None):
        option = Option(kind, short, long, descr, slot)

        for name in option.names:
            if name in RESERVED:
                warnings.warn(ReservedFlagWarning(
                    "%r is reserved for help and will never be matched" % name
                ), stacklevel=3)
            for other in self.options(exclude=option.kind):
                if other.match(name):
                    raise ConflictingFlagError(
                        "%s flag %r is already registered as a %s flag" % (option.kind.label, name, other.kind.label),
                        flag=name,
                        hint="give the %s flag a different name" % option.kind.label,
                    )

        self._options[option.kind].append(option)
        logger.debug("registered %r", option)
        return option

    def lookup(self, flag, /):
        if flag in RESERVED:
            return None
        found = None
        for kind in Kind:
            for option in self._options[kind]:
                if option.match(flag):
                    found = option
                    break
        return found

    def options(self, kind=None, *, exclude=None):
        """registered options in matching order, optionally narrowed to one kind."""
        for k in Kind if kind is None else (resolve(kind),):
            if k is exclude:
                continue
            yield from self._options[k]

    def __iter__(self):
        return self.options()

    def __len__(self):
        return sum(map(len, self._options.values()))

    def __contains__(self, flag):
        return self.lookup(flag) is not None


__all__ = (
    "Option",
    "OptionRegistry",
)
