"""
Cursor-based reader over a captured argument vector.

ArgumentReader owns an immutable snapshot of the tokens (captured from
sys.argv on first use, or injected) plus a mutable cursor.

- peek(): token at the cursor, without advancing.
- next(): token at the cursor, then advance.
Both return None once the cursor reaches the end, however many times they are
called. The reader also iterates like any Python iterator.

Lifecycle
- acquire() captures sys.argv once; it is a no-op when tokens are present.
- release() drops the snapshot exactly once; afterwards the reader is spent and
  acquire() refuses to capture again.
"""
import logging
import sys

logger = logging.getLogger(__name__)


class ArgumentReader:
    __slots__ = ("_tokens", "_cursor", "_released")

    def __init__(self, tokens=None, /):
        if tokens is not None:
            tokens = tuple(tokens)
            for token in tokens:
                if not isinstance(token, str):
                    raise TypeError("argument tokens must be strings, got %r" % type(token).__name__)
        self._tokens = tokens
        self._cursor = 0
        self._released = False

    @property
    def captured(self):
        return self._tokens is not None

    @property
    def released(self):
        return self._released

    @property
    def cursor(self):
        return self._cursor

    def acquire(self):
        """capture the process argument vector unless tokens are already present."""
        if self._released:
            raise RuntimeError("argument reader was released")
        if self._tokens is None:
            self._tokens = tuple(sys.argv)
            logger.debug("captured %d process arguments", len(self._tokens))

    def peek(self):
        if self._tokens is None or self._cursor >= len(self._tokens):
            return None
        return self._tokens[self._cursor]

    def next(self):
        token = self.peek()
        if token is not None:
            self._cursor += 1
        return token

    def remaining(self):
        """unconsumed tokens, from the cursor to the end."""
        if self._tokens is None:
            return ()
        return self._tokens[self._cursor:]

    def rewind(self):
        self._cursor = 0

    def release(self):
        if self._released:
            return
        self._released = True
        self._tokens = None
        self._cursor = 0

    def __iter__(self):
        return self

    def __next__(self):
        token = self.next()
        if token is None:
            raise StopIteration
        return token

    def __len__(self):
        return 0 if self._tokens is None else len(self._tokens)

    def __repr__(self):
        return "%s(tokens=%r, cursor=%d)" % (type(self).__name__, self._tokens, self._cursor)


__all__ = (
    "ArgumentReader",
)
