"""
Tokenizer for the chemexpr language.

Turns a character sequence into a lazy sequence of tokens. The tokenizer
never fails: characters it cannot place become ``UNKNOWN`` tokens and the
parser decides what to do with them.

Lexical rules, tried in order on the next unconsumed character:
    - Whitespace run -> one WHITESPACE token
    - ASCII letter or ``_`` -> IDENTIFIER; continuation is lowercase only,
      so ``NaCl`` is ``Na`` ``Cl``
    - ``'`` -> quoted IDENTIFIER; continuation is letters, digits, ``_``, ``-``
    - Digit -> INTEGER, or REAL when a fraction follows (``1.5``, ``2.0e-3``)
    - ``#`` + digit -> always REAL (``#2``)
    - ``"`` -> STRING up to the closing quote
    - Longest match in STRUCTURAL_TOKENS, else UNKNOWN for one character
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Final, Iterable, Mapping

from chemexpr.peek import PeekBuffer


class TokenKind(Enum):
    """Token types for the expression language."""

    UNKNOWN = auto()
    WHITESPACE = auto()

    # Literals and names
    IDENTIFIER = auto()
    STRING = auto()
    INTEGER = auto()
    REAL = auto()

    # Structural
    LPAREN = auto()
    RPAREN = auto()
    LBRACKET = auto()
    RBRACKET = auto()
    LBRACE = auto()
    RBRACE = auto()
    DOT = auto()
    BANG = auto()
    FORMULA = auto()
    CONDENSED_FORMULA = auto()
    EQUALS = auto()
    PLUS = auto()
    MINUS = auto()
    MULTIPLY = auto()
    DIVIDE = auto()
    POWER = auto()
    COMMA = auto()
    COLON = auto()
    ARROW = auto()
    ELLIPSIS = auto()


@dataclass(frozen=True, slots=True)
class Token:
    """A single token.

    Attributes:
        kind: Token type.
        value: Payload (identifier name, string contents, digit text).
            Structural tokens carry their source text.
        source: Exact characters consumed for this token.
    """

    kind: TokenKind
    value: str
    source: str

    @classmethod
    def structural(cls, kind: TokenKind, source: str) -> Token:
        return cls(kind, source, source)

    def __repr__(self) -> str:
        return f"Token({self.kind.name}, {self.value!r})"


# Fixed structural tokens: source text -> kind
STRUCTURAL_TOKENS: Final[dict[str, TokenKind]] = {
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
    "[": TokenKind.LBRACKET,
    "]": TokenKind.RBRACKET,
    "{": TokenKind.LBRACE,
    "}": TokenKind.RBRACE,
    ".": TokenKind.DOT,
    "!": TokenKind.BANG,
    "$": TokenKind.FORMULA,
    "$$": TokenKind.CONDENSED_FORMULA,
    "=": TokenKind.EQUALS,
    "+": TokenKind.PLUS,
    "-": TokenKind.MINUS,
    "*": TokenKind.MULTIPLY,
    "/": TokenKind.DIVIDE,
    "^": TokenKind.POWER,
    ",": TokenKind.COMMA,
    ":": TokenKind.COLON,
    "->": TokenKind.ARROW,
    "``": TokenKind.ELLIPSIS,
}

QUOTE: Final = "'"
STRING_DELIMITER: Final = '"'
REAL_PREFIX: Final = "#"


def _is_digit(char: str | None) -> bool:
    return char is not None and "0" <= char <= "9"


def _is_ascii_letter(char: str | None) -> bool:
    return char is not None and char.isascii() and char.isalpha()


def _is_identifier_start(char: str | None) -> bool:
    return _is_ascii_letter(char) or char == "_"


def _is_identifier_tail(char: str) -> bool:
    return "a" <= char <= "z"


def _is_quoted_identifier_tail(char: str) -> bool:
    return _is_ascii_letter(char) or _is_digit(char) or char in "_-"


class Tokenizer:
    """Lazy tokenizer over any character iterable.

    Iterating yields Token objects; the source is read only as far as the
    current token requires (at most three characters of lookahead).

    Example:
        >>> [t.value for t in Tokenizer("H2O")]
        ['H', '2', 'O']
    """

    __slots__ = ("_chars", "_table")

    def __init__(
        self,
        source: Iterable[str],
        table: Mapping[str, TokenKind] = STRUCTURAL_TOKENS,
    ) -> None:
        self._chars: PeekBuffer[str] = PeekBuffer(source)
        self._table = table

    def __iter__(self) -> Tokenizer:
        return self

    def __next__(self) -> Token:
        chars = self._chars
        char = chars.peek()
        if char is None:
            raise StopIteration

        if char.isspace():
            text = "".join(chars.read_while(str.isspace))
            return Token(TokenKind.WHITESPACE, text, text)

        if _is_identifier_start(char):
            first = chars.next()
            name = first + "".join(chars.read_while(_is_identifier_tail))
            return Token(TokenKind.IDENTIFIER, name, name)

        if char == QUOTE and _is_identifier_start(chars.peek(1)):
            return self._read_quoted_identifier()

        if _is_digit(char):
            return self._read_number()

        if char == REAL_PREFIX and _is_digit(chars.peek(1)):
            chars.next()
            return self._read_number(prefix=REAL_PREFIX)

        if char == STRING_DELIMITER:
            return self._read_string()

        return self._read_structural()

    def _read_quoted_identifier(self) -> Token:
        chars = self._chars
        chars.next()  # discard the quote
        first = chars.next()
        name = first + "".join(chars.read_while(_is_quoted_identifier_tail))
        return Token(TokenKind.IDENTIFIER, name, QUOTE + name)

    def _read_number(self, prefix: str = "") -> Token:
        """Read an INTEGER or REAL literal; a prefix forces REAL."""
        chars = self._chars
        text = "".join(chars.read_while(_is_digit))
        is_real = bool(prefix)

        if chars.peek() == "." and _is_digit(chars.peek(1)):
            text += chars.next()
            text += "".join(chars.read_while(_is_digit))
            is_real = True

        if is_real:
            text += self._read_exponent()

        kind = TokenKind.REAL if is_real else TokenKind.INTEGER
        return Token(kind, text, prefix + text)

    def _read_exponent(self) -> str:
        """Read ``e12`` / ``E-3`` style exponent, or nothing."""
        chars = self._chars
        if chars.peek() not in ("e", "E"):
            return ""
        if _is_digit(chars.peek(1)):
            marker = chars.next()
        elif chars.peek(1) in ("+", "-") and _is_digit(chars.peek(2)):
            marker = chars.next() + chars.next()
        else:
            return ""
        return marker + "".join(chars.read_while(_is_digit))

    def _read_string(self) -> Token:
        chars = self._chars
        chars.next()  # opening quote
        content = "".join(chars.read_while(lambda c: c != STRING_DELIMITER))
        if chars.next() is None:
            # Unterminated: the rest of the input becomes one unknown token
            return Token(TokenKind.UNKNOWN, STRING_DELIMITER + content, STRING_DELIMITER + content)
        source = STRING_DELIMITER + content + STRING_DELIMITER
        return Token(TokenKind.STRING, content, source)

    def _matches(self, pattern: str) -> bool:
        return all(self._chars.peek(i) == c for i, c in enumerate(pattern))

    def _read_structural(self) -> Token:
        """Longest structural match; ties go to the greatest source string."""
        candidates = [pattern for pattern in self._table if self._matches(pattern)]
        if not candidates:
            char = self._chars.next()
            return Token(TokenKind.UNKNOWN, char, char)

        pattern = max(candidates)
        for _ in pattern:
            self._chars.next()
        return Token.structural(self._table[pattern], pattern)


def tokenize(source: Iterable[str]) -> Tokenizer:
    """Tokenize a string (or any character iterable) lazily.

    Args:
        source: Characters to tokenize.

    Returns:
        An iterator of Token objects.
    """
    return Tokenizer(source)
