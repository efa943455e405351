"""
Argstream token stream.

Scope
- TokenStream: a pull-only cursor over an immutable sequence of raw tokens.
- StreamExhausted: raised when the cursor is advanced past the last token.

Contract
- Callers check has_next() (or the stream's truthiness) before every next().
  Advancing an exhausted stream is a programming mistake inside the engine,
  so it raises StreamExhausted rather than a user-facing fault.
- There is no pushback: a handler that needs a value pulls exactly one more token.
- A command's parser receives the same stream object and drains what is left.
"""


class StreamExhausted(RuntimeError):
    """
    Raised by TokenStream.next() when no token remains.
    """


class TokenStream:
    __slots__ = ("_tokens", "_index")

    def __init__(self, tokens=(), /):
        self._tokens = tuple(tokens)
        self._index = 0

    def __repr__(self):
        return "%s(consumed=%d, remaining=%r)" % (type(self).__name__, self._index, self.remaining())

    def __bool__(self):
        return self.has_next()

    def __len__(self):
        return len(self._tokens) - self._index

    @property
    def consumed(self):
        """
        Number of tokens pulled from the stream so far.
        """
        return self._index

    def has_next(self):
        return self._index < len(self._tokens)

    def next(self):
        """
        Return the current token and advance the cursor.

        Raises
        - StreamExhausted: when called without a remaining token.
        """
        if not self.has_next():
            raise StreamExhausted("token stream is exhausted (%d consumed)" % self._index)
        self._index += 1
        return self._tokens[self._index - 1]

    def remaining(self):
        """
        Tuple of the tokens not yet consumed (the cursor is not moved).
        """
        return self._tokens[self._index:]


__all__ = (
    "StreamExhausted",
    "TokenStream",
)
