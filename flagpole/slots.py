"""
Caller-owned destinations for flag values.

A flag writes its parsed value into a Slot. Python has no references to plain
scalars, so the Slot is the reference: the caller keeps it, the parser writes
into it.

- Slot: a mutable one-value cell.
- AttributeSlot: writes through to an attribute of an existing object
  (a namespace, a dataclass, a settings object).
- unset: falsy singleton marking a Slot that was never written.

Example
    >>> from flagpole import FlagParser, Slot
    >>> count = Slot(1)
    >>> parser = FlagParser("tool")
    >>> parser.add_flag("i32", "-n", "--num", "how many", count)
    >>> parser.parse(["tool", "--num=3"])
    >>> count.value
    3
"""
import functools


class unsettype:
    """
    Singleton type of `unset`, the marker of a never-written Slot.

    Falsy, final, and always the same instance per interpreter.
    """

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "unset"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'unsettype' is not an acceptable base type")


unset = unsettype()


class Slot:
    """
    Mutable cell holding one scalar value.

    `value` is `unset` until something is stored, unless an initial value is
    given. Use get(default) to read with a fallback.
    """
    __slots__ = ("value",)

    def __init__(self, value=unset, /):
        self.value = value

    def get(self, default=None, /):
        """return the stored value, or `default` when the slot was never written."""
        return default if self.value is unset else self.value

    def set(self, value, /):
        self.value = value

    @property
    def empty(self):
        return self.value is unset

    def __repr__(self):
        return "%s(%r)" % (type(self).__name__, self.value)


class AttributeSlot(Slot):
    """
    Slot that reads and writes `owner.<attribute>`.

    The attribute does not need to exist beforehand; reading a missing
    attribute yields `unset`.
    """
    __slots__ = ("owner", "attribute")

    def __init__(self, owner, attribute, /):
        if not isinstance(attribute, str) or not attribute.isidentifier():
            raise ValueError("attribute name must be an identifier, got %r" % (attribute,))
        self.owner = owner
        self.attribute = attribute

    @property
    def value(self):
        return getattr(self.owner, self.attribute, unset)

    @value.setter
    def value(self, value):
        setattr(self.owner, self.attribute, value)

    def __repr__(self):
        return "%s(%s.%s=%r)" % (type(self).__name__, type(self.owner).__name__, self.attribute, self.value)


__all__ = (
    "Slot",
    "AttributeSlot",
    "unset",
)
