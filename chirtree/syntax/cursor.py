"""
Token cursor with buffered lookahead.
"""

from __future__ import annotations

from collections import deque
from typing import Iterable, Iterator

from chirtree.syntax.kinds import SyntaxKind
from chirtree.syntax.lexer import Token


class TokenCursor:
    """Forward-only cursor over a token stream.

    Tokens are pulled from the underlying iterator only when a lookahead
    needs them, so ``peek(k)`` costs amortized O(1). There is no
    backtracking: once bumped, a token is gone.

    Example:
        >>> cursor = TokenCursor(tokenize("C=O"))
        >>> cursor.peek(1)
        SyntaxKind.EQUALS
    """

    __slots__ = ("_tokens", "_buffer", "_offset")

    def __init__(self, tokens: Iterable[Token]) -> None:
        self._tokens: Iterator[Token] = iter(tokens)
        self._buffer: deque[Token] = deque()
        self._offset = 0

    @property
    def offset(self) -> int:
        """Source offset of the next unconsumed token."""
        token = self.peek_token()
        return token.start if token is not None else self._offset

    def _fill(self, k: int) -> bool:
        while len(self._buffer) <= k:
            token = next(self._tokens, None)
            if token is None:
                return False
            self._buffer.append(token)
        return True

    def peek_token(self, k: int = 0) -> Token | None:
        """Return the ``k``-th upcoming token without consuming it."""
        if not self._fill(k):
            return None
        return self._buffer[k]

    def peek(self, k: int = 0) -> SyntaxKind | None:
        """Return the kind of the ``k``-th upcoming token, or None past the end."""
        token = self.peek_token(k)
        return token.kind if token is not None else None

    def at(self, kind: SyntaxKind, k: int = 0) -> bool:
        return self.peek(k) is kind

    def at_end(self) -> bool:
        return self.peek() is None

    def bump(self) -> Token:
        """Consume and return the next token.

        Raises:
            IndexError: If the stream is exhausted.
        """
        if not self._fill(0):
            raise IndexError("bump past end of token stream")
        token = self._buffer.popleft()
        self._offset = token.end
        return token

    def drain(self) -> Iterator[Token]:
        """Consume every remaining token."""
        while not self.at_end():
            yield self.bump()
