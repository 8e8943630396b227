"""
Flagpole faults (errors, warnings, signals) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing issue.
  Codes are grouped by domain (registration, parsing, warnings).
- FlagException: base type that carries a message + options and knows how to
  render itself through rich.
- RegistrationError / ParseError: the two failure families. Registration faults
  are programming errors of the host tool; parse faults come from the user.
- HelpRequested: control-flow signal raised after help was shown. It is not a
  FlagException so that `except ParseError` never swallows it.
- FlagWarning: soft feedback emitted through the warnings machinery.

Integration
- FlagParser raises these directly. FlagParser.run() catches them, renders the
  fault on stderr and turns it into an exit status.
"""
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Group
from rich.text import Text


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping
    - registration (2110x): UNSUPPORTED_TYPE, NAMELESS_FLAG, CONFLICTING_FLAG
    - parsing (2111x): MISSING_ARGUMENT, INVALID_ARGUMENT, OUT_OF_RANGE
    - warnings (2210x): RESERVED_FLAG
    """
    # --- registration errors ---
    UNSUPPORTED_TYPE    = 21101
    NAMELESS_FLAG       = 21102
    CONFLICTING_FLAG    = 21103

    # --- parse errors ---
    MISSING_ARGUMENT    = 21111
    INVALID_ARGUMENT    = 21112
    OUT_OF_RANGE        = 21113

    # --- warnings ---
    RESERVED_FLAG       = 22101

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__ to
        override numeric ids with friendlier labels.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class FlagException(Exception):
    """
    base class of every flagpole error.

    options
    - title: short headline used by the renderer.
    - code: FaultCode of the fault.
    - hint: one actionable sentence.
    - flag / value: the offending flag name and raw value, when relevant.
    - prog / colorful: rendering context attached by the parser.
    """
    __title__ = "flag error"
    __faultcode__ = None

    def __init__(self, message, /, **options):
        super().__init__(message)
        self.message = message
        options.setdefault("title", self.__title__)
        options.setdefault("code", self.__faultcode__)
        self.options = MappingProxyType(options)

    @property
    def flag(self):
        return self.options.get("flag")

    @property
    def value(self):
        return self.options.get("value")

    @property
    def code(self):
        return self.options["code"]

    def __str__(self):
        return self.message

    def __rich__(self):
        main = __import__("__main__")
        colorful = self.options.get("colorful", False)

        styles = defaultdict(str, {
            "prog-name": "bold #E6E6F0",
            "code": "bold #00E5FF",
            "error-title": "bold #FF4DA6",
            "error-message": "#C8C8D0",
            "hint-arrow": "#9CE19C dim",
            "hint": "italic #9CE19C",
        } | getattr(main, "__styles__", {}))

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            return Text(str(fragment), styles[style] if colorful else "")

        parts = ["[ ", text(self.options.get("prog") or "PROGRAM", "prog-name")]
        if self.code is not None:
            parts += [" | ", text(self.code.normalize(), "code")]
        parts += [" | ", text(self.options["title"], "error-title"), " ]"]

        renders = [Text.assemble(*parts), text(self.message, "error-message")]
        if self.options.get("hint"):
            renders.append(Text.assemble(text(" -> ", "hint-arrow"), text(self.options["hint"], "hint")))
        return Group(*renders)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class RegistrationError(FlagException):
    __title__ = "bad flag registration"


class UnsupportedTypeError(RegistrationError):
    __title__ = "unsupported flag type"
    __faultcode__ = FaultCode.UNSUPPORTED_TYPE


class NamelessFlagError(RegistrationError):
    __title__ = "flag without a name"
    __faultcode__ = FaultCode.NAMELESS_FLAG


class ConflictingFlagError(RegistrationError):
    __title__ = "conflicting flag name"
    __faultcode__ = FaultCode.CONFLICTING_FLAG


class ParseError(FlagException):
    __title__ = "bad command line"


class MissingArgumentError(ParseError):
    __title__ = "missing value"
    __faultcode__ = FaultCode.MISSING_ARGUMENT


class InvalidArgumentError(ParseError):
    __title__ = "invalid value"
    __faultcode__ = FaultCode.INVALID_ARGUMENT


class OutOfRangeError(ParseError):
    __title__ = "value out of range"
    __faultcode__ = FaultCode.OUT_OF_RANGE


class HelpRequested(Exception):
    """
    raised once help has been rendered for '-h' or '--help'.

    callers should treat it as "help was already shown, exit cleanly".
    """

    def __init__(self, prog=None):
        super().__init__("help requested")
        self.prog = prog


class FlagWarning(Warning):
    __faultcode__ = None

    @property
    def code(self):
        return self.__faultcode__


class ReservedFlagWarning(FlagWarning):
    __faultcode__ = FaultCode.RESERVED_FLAG


__all__ = (
    "FaultCode",
    "FlagException",
    "RegistrationError",
    "UnsupportedTypeError",
    "NamelessFlagError",
    "ConflictingFlagError",
    "ParseError",
    "MissingArgumentError",
    "InvalidArgumentError",
    "OutOfRangeError",
    "HelpRequested",
    "FlagWarning",
    "ReservedFlagWarning",
)
