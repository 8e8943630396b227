"""
Flagpole parser: register typed flags, then parse a command line into them.

What this module provides
- FlagParser: owns an OptionRegistry and an ArgumentReader and runs the parse
  state machine over them.
- ParseState: the states of that machine; the terminal state of the latest
  parse is kept on FlagParser.state.

State machine
    START -> PROGRAM_NAME -> SCANNING -> HELP_REQUESTED | DONE | FAILED

- PROGRAM_NAME: the first token is always consumed and remembered as the
  discovered program name (used when no `prog` was given).
- SCANNING, per token:
  • '-h' / '--help' exactly: print help, raise HelpRequested.
  • split on the first '=' into flag and inline value.
  • look the flag up in the registry; no match ends parsing (DONE) and leaves
    the token and everything after it unconsumed (see remaining()).
  • value = inline value, else the next token; none left -> MissingArgumentError.
  • conversion failures propagate as InvalidArgumentError / OutOfRangeError.

Quick start
    from flagpole import FlagParser, Slot

    num, go = Slot(1), Slot(False)
    parser = FlagParser("tool", "does things")
    parser.add_flag("i32", "-n", "--num", "how many times", num)
    parser.add_flag(bool, "-g", "--go", "really do it", go)
    parser.run()

Notes
- A failed parse leaves the tokens consumed before the failure consumed. Call
  parse() again with an explicit vector, or rewind the reader, to retry.
- close() releases the captured vector once; the parser refuses to parse after.
"""
import logging
import sys
from enum import Enum

from rich.console import Console

from .faults import *
from .help import HelpFormatter
from .options import RESERVED, OptionRegistry
from .reader import ArgumentReader

logger = logging.getLogger(__name__)


class ParseState(Enum):
    START = "start"
    PROGRAM_NAME = "program-name"
    SCANNING = "scanning"
    HELP_REQUESTED = "help-requested"
    DONE = "done"
    FAILED = "failed"

    @property
    def terminal(self):
        return self in (ParseState.HELP_REQUESTED, ParseState.DONE, ParseState.FAILED)


class FlagParser:
    """
    Minimal flag parser binding named flags to caller-owned Slots.

    Parameters
    - prog: str | None
      program name shown in help; defaults to the first parsed token.
    - descr: str | None
      program description shown in help.
    - reader: ArgumentReader | None (keyword-only)
      pre-built reader, mostly for tests; created lazily otherwise.
    - colorful: bool (keyword-only)
      style help and fault output.
    - console: rich Console | None (keyword-only)
      where help and faults are printed; a stderr console by default.
    """

    def __init__(self, prog=None, descr=None, *, reader=None, colorful=False, console=None):
        self.prog = prog
        self.descr = descr
        self.found = None
        self.colorful = colorful
        self.console = console
        self.registry = OptionRegistry()
        self.reader = reader
        self.state = ParseState.START
        self.formatter = HelpFormatter(colorful=colorful, console=console)
        self._closed = False

    @property
    def name(self):
        """declared program name, else the discovered one."""
        return self.prog or self.found

    @property
    def closed(self):
        return self._closed

    def add_flag(self, kind, short=None, long=None, descr=None, destination=None):
        """
        register a flag and return the Slot it writes into.

        `kind` is a Kind, a kind label ("i32", "u8", "f64", "bool") or one of
        the builtins bool, int, float. When `destination` is omitted a fresh
        Slot is created.

        raises UnsupportedTypeError, NamelessFlagError or ConflictingFlagError.
        """
        self._ensure_open()
        return self.registry.register(kind, short, long, descr, destination).slot

    def parse(self, argv=None):
        """
        parse `argv` (the process arguments when omitted) into the registered slots.

        returns None once parsing stops on an unknown token or the end of input.
        raises HelpRequested after printing help, and ParseError subclasses on
        bad input.
        """
        self._ensure_open()
        if argv is not None:
            if self.reader is not None:
                self.reader.release()
            self.reader = ArgumentReader(argv)
        elif self.reader is None:
            self.reader = ArgumentReader()
        self.reader.acquire()

        self._transition(ParseState.START)
        try:
            self._scan(self.reader)
        except HelpRequested:
            self._transition(ParseState.HELP_REQUESTED)
            raise
        except ParseError:
            self._transition(ParseState.FAILED)
            raise
        self._transition(ParseState.DONE)

    def _scan(self, reader):
        self._transition(ParseState.PROGRAM_NAME)
        self.found = reader.next()

        self._transition(ParseState.SCANNING)
        while (token := reader.peek()) is not None:
            if token in RESERVED:
                self.print_help()
                raise HelpRequested(self.name)

            flag, sep, value = token.partition("=")
            option = self.registry.lookup(flag)
            if option is None:
                logger.debug("stopped at unmatched token %r", token)
                return

            if not sep:
                reader.next()
                value = reader.peek()
                if value is None:
                    logger.error("argument missing for option %s", flag)
                    raise MissingArgumentError(
                        "option %s expects a value" % flag,
                        flag=flag,
                        hint="pass a value after it (for example: %s <value> or %s=<value>)" % (flag, flag),
                    )

            option.parse(value, flag=flag)
            reader.next()

    def _transition(self, state):
        logger.debug("%s -> %s", self.state.value, state.value)
        self.state = state

    def remaining(self):
        """tokens left unconsumed by the latest parse."""
        if self.reader is None:
            return ()
        return self.reader.remaining()

    def print_help(self):
        self.formatter.print(self.name, self.descr, self.registry)

    def run(self, argv=None):
        """
        parse like a program entry point would.

        help exits with status 0; a ParseError is printed on stderr and exits
        with status 1.
        """
        try:
            self.parse(argv)
        except HelpRequested:
            sys.exit(0)
        except ParseError as e:
            console = self.console or Console(stderr=True)
            console.print(e.__replace__(prog=self.name, colorful=self.colorful))
            sys.exit(1)

    def close(self):
        if self._closed:
            return
        self._closed = True
        if self.reader is not None:
            self.reader.release()

    def _ensure_open(self):
        if self._closed:
            raise RuntimeError("flag parser is closed")

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def __repr__(self):
        return "%s(prog=%r, flags=%d, state=%s)" % (type(self).__name__, self.name, len(self.registry), self.state.value)


__all__ = (
    "FlagParser",
    "ParseState",
)
