"""
SMILES tokenizer.

Splits raw text into a lazy stream of tokens. The tokenizer never fails:
characters it does not recognize become ``ERROR_TOKEN`` leaves, and it is the
parser's job to turn them into syntax errors.

Lexing is context sensitive in two places:
    - inside ``[...]`` any element symbol is recognized (``Sc`` is scandium),
      outside only the organic subset is (``Sc`` is sulfur + aromatic carbon);
    - directly after ``@`` the chirality classes ``TH AL SP TB OH`` are read
      as a single ``CHIRAL_CLASS`` token.

The first whitespace character terminates the SMILES string. The whitespace
run becomes a ``WHITESPACE`` token and everything after it a single ``TEXT``
token (the title).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Final, FrozenSet, Iterator

from chirtree.syntax.kinds import SyntaxKind


@dataclass(frozen=True, slots=True)
class Token:
    """A lexeme with its kind and source position.

    Attributes:
        kind: Token kind.
        text: Matched text.
        start: Offset of the first character in the input.
    """

    kind: SyntaxKind
    text: str
    start: int

    @property
    def end(self) -> int:
        """Offset one past the last character."""
        return self.start + len(self.text)

    @property
    def range(self) -> tuple[int, int]:
        """Half-open ``[start, end)`` range."""
        return (self.start, self.end)

    def __str__(self) -> str:
        if self.kind is SyntaxKind.END_OF_STRING:
            return "end of string"
        return f"{self.text!r} at {self.start}"


_PUNCTUATION: Final[dict[str, SyntaxKind]] = {
    "@": SyntaxKind.AT,
    "\\": SyntaxKind.BACKSLASH,
    ":": SyntaxKind.COLON,
    "$": SyntaxKind.DOLLAR,
    ".": SyntaxKind.DOT,
    "=": SyntaxKind.EQUALS,
    "#": SyntaxKind.HASH,
    "-": SyntaxKind.MINUS,
    "%": SyntaxKind.PERCENT,
    "+": SyntaxKind.PLUS,
    "/": SyntaxKind.SLASH,
    "*": SyntaxKind.STAR,
    "[": SyntaxKind.LEFT_BRACKET,
    "]": SyntaxKind.RIGHT_BRACKET,
    "(": SyntaxKind.LEFT_PAREN,
    ")": SyntaxKind.RIGHT_PAREN,
}

_WHITESPACE: Final[FrozenSet[str]] = frozenset(" \t\n\r")
_DIGITS: Final[FrozenSet[str]] = frozenset("0123456789")

# Shorthand symbols allowed without brackets
_ORGANIC_TWO_LETTER: Final[FrozenSet[str]] = frozenset({"Cl", "Br"})
_ORGANIC_ONE_LETTER: Final[FrozenSet[str]] = frozenset("BCNOPSFIbcnops")

# Aromatic two-letter symbols allowed inside brackets
_AROMATIC_TWO_LETTER: Final[FrozenSet[str]] = frozenset({"se", "as"})

CHIRAL_CLASSES: Final[FrozenSet[str]] = frozenset({"TH", "AL", "SP", "TB", "OH"})


class _Scanner:
    """Character-level cursor with lookahead."""

    __slots__ = ("_string", "_pos")

    def __init__(self, string: str) -> None:
        self._string = string
        self._pos = 0

    @property
    def position(self) -> int:
        return self._pos

    def peek(self, offset: int = 0) -> str | None:
        pos = self._pos + offset
        if pos >= len(self._string):
            return None
        return self._string[pos]

    def take(self, count: int = 1) -> str:
        text = self._string[self._pos:self._pos + count]
        self._pos += len(text)
        return text

    def take_while(self, predicate: Callable[[str], bool]) -> str:
        start = self._pos
        while self._pos < len(self._string) and predicate(self._string[self._pos]):
            self._pos += 1
        return self._string[start:self._pos]

    def take_rest(self) -> str:
        return self.take(len(self._string) - self._pos)

    def is_eof(self) -> bool:
        return self._pos >= len(self._string)


def tokenize(smiles: str) -> Iterator[Token]:
    """Lazily tokenize a SMILES string.

    Concatenating the text of all produced tokens always reproduces
    ``smiles`` exactly.

    Args:
        smiles: Input text.

    Yields:
        Tokens in input order.

    Example:
        >>> [t.kind.name for t in tokenize("C=O")]
        ['IMPLICIT', 'EQUALS', 'IMPLICIT']
    """
    scanner = _Scanner(smiles)
    in_brackets = False
    previous: SyntaxKind | None = None

    while not scanner.is_eof():
        start = scanner.position
        char = scanner.peek()
        assert char is not None

        if char in _WHITESPACE:
            yield Token(SyntaxKind.WHITESPACE, scanner.take_while(_WHITESPACE.__contains__), start)
            if not scanner.is_eof():
                title_start = scanner.position
                yield Token(SyntaxKind.TEXT, scanner.take_rest(), title_start)
            return

        if char in _PUNCTUATION:
            kind = _PUNCTUATION[char]
            scanner.take()
            if kind is SyntaxKind.LEFT_BRACKET:
                in_brackets = True
            elif kind is SyntaxKind.RIGHT_BRACKET:
                in_brackets = False
            previous = kind
            yield Token(kind, char, start)
            continue

        if char in _DIGITS:
            scanner.take()
            previous = SyntaxKind.DIGIT
            yield Token(SyntaxKind.DIGIT, char, start)
            continue

        if char.isascii() and char.isalpha():
            if in_brackets:
                token = _bracket_symbol(scanner, previous)
            else:
                token = _organic_symbol(scanner)
            previous = token.kind
            yield token
            continue

        scanner.take()
        previous = SyntaxKind.ERROR_TOKEN
        yield Token(SyntaxKind.ERROR_TOKEN, char, start)


def _organic_symbol(scanner: _Scanner) -> Token:
    """Read a shorthand atom outside brackets."""
    start = scanner.position
    pair = (scanner.peek() or "") + (scanner.peek(1) or "")
    if pair in _ORGANIC_TWO_LETTER:
        return Token(SyntaxKind.IMPLICIT, scanner.take(2), start)
    char = scanner.take()
    if char in _ORGANIC_ONE_LETTER:
        return Token(SyntaxKind.IMPLICIT, char, start)
    return Token(SyntaxKind.ERROR_TOKEN, char, start)


def _bracket_symbol(scanner: _Scanner, previous: SyntaxKind | None) -> Token:
    """Read a letter run inside brackets.

    Unknown symbols such as ``Xx`` are still emitted as ``EXPLICIT``; the
    semantic layer reports them as unknown elements.
    """
    start = scanner.position
    first = scanner.peek() or ""
    second = scanner.peek(1) or ""

    if previous is SyntaxKind.AT and first + second in CHIRAL_CLASSES:
        return Token(SyntaxKind.CHIRAL_CLASS, scanner.take(2), start)

    if first.isupper():
        if second.islower():
            return Token(SyntaxKind.EXPLICIT, scanner.take(2), start)
        scanner.take()
        kind = SyntaxKind.H if first == "H" else SyntaxKind.EXPLICIT
        return Token(kind, first, start)

    if first + second in _AROMATIC_TWO_LETTER:
        return Token(SyntaxKind.EXPLICIT, scanner.take(2), start)
    return Token(SyntaxKind.EXPLICIT, scanner.take(), start)
