"""Tests for the tokenizer and the lookahead buffer."""

import itertools

import pytest

from chemexpr import Token, TokenKind, Tokenizer, tokenize
from chemexpr.peek import PeekBuffer
from chemexpr.tokens import STRUCTURAL_TOKENS


def kinds_and_values(source: str) -> list[tuple[TokenKind, str]]:
    """Tokenize and keep only (kind, value) pairs."""
    return [(t.kind, t.value) for t in tokenize(source)]


K = TokenKind


class TestPeekBuffer:
    """Test the lookahead buffer."""

    def test_peek_does_not_consume(self):
        """peek() leaves items in place."""
        buf = PeekBuffer("abc")
        assert buf.peek() == "a"
        assert buf.peek(2) == "c"
        assert buf.next() == "a"

    def test_peek_past_end(self):
        """peek() past the end returns None."""
        buf = PeekBuffer("ab")
        assert buf.peek(2) is None
        assert list(buf) == ["a", "b"]

    def test_source_order_preserved(self):
        """Items come out in source order after deep peeks."""
        buf = PeekBuffer(range(5))
        buf.peek(3)
        assert list(buf) == [0, 1, 2, 3, 4]

    def test_push_front(self):
        """push_front() restores an item for re-consumption."""
        buf = PeekBuffer("bc")
        first = buf.next()
        buf.push_front(first)
        assert buf.next() == "b"
        buf.push_front("a")
        assert list(buf) == ["a", "c"]

    def test_next_if(self):
        """next_if() consumes only matching items."""
        buf = PeekBuffer("1a")
        assert buf.next_if(str.isalpha) is None
        assert buf.next_if(str.isdigit) == "1"
        assert buf.next_if(str.isalpha) == "a"
        assert buf.next_if(str.isalpha) is None

    def test_next_at_end(self):
        """next() at the end returns None instead of raising."""
        buf = PeekBuffer("")
        assert buf.next() is None
        assert buf.is_eof()

    def test_buffer_grows_only_as_deep_as_peek(self):
        """Peeking pulls exactly as many items as needed."""
        pulled = []

        def source():
            for i in range(100):
                pulled.append(i)
                yield i

        buf = PeekBuffer(source())
        buf.peek(2)
        assert pulled == [0, 1, 2]

    def test_negative_peek(self):
        """Negative offsets are rejected."""
        with pytest.raises(ValueError):
            PeekBuffer("a").peek(-1)


class TestIdentifiers:
    """Test identifier tokenization."""

    def test_letter_digit_boundary(self):
        """A letter run never spans an intervening digit."""
        assert kinds_and_values("A1B2") == [
            (K.IDENTIFIER, "A"),
            (K.INTEGER, "1"),
            (K.IDENTIFIER, "B"),
            (K.INTEGER, "2"),
        ]

    def test_capital_starts_new_identifier(self):
        """Continuation is lowercase only, so element symbols split."""
        assert kinds_and_values("NaCl") == [(K.IDENTIFIER, "Na"), (K.IDENTIFIER, "Cl")]

    def test_lowercase_run(self):
        """A lowercase word is one identifier."""
        assert kinds_and_values("water") == [(K.IDENTIFIER, "water")]

    def test_underscore_start(self):
        """Underscore may start an identifier."""
        assert kinds_and_values("_x") == [(K.IDENTIFIER, "_x")]

    def test_hyphen_not_continuation(self):
        """Unquoted identifiers stop at a hyphen."""
        assert kinds_and_values("Cl-") == [(K.IDENTIFIER, "Cl"), (K.MINUS, "-")]

    def test_quoted_identifier(self):
        """A leading quote switches to the permissive rule and is dropped."""
        tokens = list(tokenize("'Sodium_chloride-2"))
        assert len(tokens) == 1
        assert tokens[0].kind is K.IDENTIFIER
        assert tokens[0].value == "Sodium_chloride-2"
        assert tokens[0].source == "'Sodium_chloride-2"

    def test_lone_quote_is_unknown(self):
        """A quote not followed by a letter is unknown."""
        assert kinds_and_values("'1") == [(K.UNKNOWN, "'"), (K.INTEGER, "1")]


class TestNumbers:
    """Test numeric literal tokenization."""

    def test_integer(self):
        assert kinds_and_values("1234") == [(K.INTEGER, "1234")]

    def test_real_with_fraction(self):
        assert kinds_and_values("5678.4") == [(K.REAL, "5678.4")]

    def test_real_with_exponent(self):
        """Exponents are read after a fraction."""
        assert kinds_and_values("6.02e23") == [(K.REAL, "6.02e23")]
        assert kinds_and_values("1.5E-3") == [(K.REAL, "1.5E-3")]

    def test_dangling_exponent_marker(self):
        """An exponent marker with no digits is left for the next token."""
        assert kinds_and_values("2.5e") == [(K.REAL, "2.5"), (K.IDENTIFIER, "e")]

    def test_exponent_needs_fraction(self):
        """Without a fraction the number stays an integer."""
        assert kinds_and_values("1e5") == [
            (K.INTEGER, "1"),
            (K.IDENTIFIER, "e"),
            (K.INTEGER, "5"),
        ]

    def test_single_decimal_point(self):
        """Only one decimal point belongs to a real."""
        assert kinds_and_values("1.2.3") == [
            (K.REAL, "1.2"),
            (K.DOT, "."),
            (K.INTEGER, "3"),
        ]

    def test_trailing_dot(self):
        """A dot without digits after it is a separate token."""
        assert kinds_and_values("3.x") == [
            (K.INTEGER, "3"),
            (K.DOT, "."),
            (K.IDENTIFIER, "x"),
        ]

    def test_real_prefix(self):
        """The # prefix always yields a real."""
        tokens = list(tokenize("#5"))
        assert [(t.kind, t.value, t.source) for t in tokens] == [(K.REAL, "5", "#5")]

    def test_real_prefix_with_fraction(self):
        assert kinds_and_values("#1.234") == [(K.REAL, "1.234")]

    def test_bare_hash_is_unknown(self):
        assert kinds_and_values("#x") == [(K.UNKNOWN, "#"), (K.IDENTIFIER, "x")]


class TestStrings:
    """Test string literal tokenization."""

    def test_string(self):
        """Delimiters are dropped from the value but kept in the source."""
        tokens = list(tokenize('"table salt"'))
        assert len(tokens) == 1
        assert tokens[0].kind is K.STRING
        assert tokens[0].value == "table salt"
        assert tokens[0].source == '"table salt"'

    def test_empty_string(self):
        assert kinds_and_values('""') == [(K.STRING, "")]

    def test_unterminated_string(self):
        """An unterminated string swallows the rest of the input as unknown."""
        tokens = list(tokenize('a "open'))
        assert [t.kind for t in tokens] == [K.IDENTIFIER, K.WHITESPACE, K.UNKNOWN]
        assert tokens[-1].source == '"open'


class TestStructural:
    """Test structural token matching."""

    @pytest.mark.parametrize("source,kind", list(STRUCTURAL_TOKENS.items()))
    def test_each_structural_token(self, source, kind):
        """Every table entry tokenizes to its own kind."""
        assert kinds_and_values(source) == [(kind, source)]

    def test_longest_match(self):
        """Two-character tokens win over their one-character prefix."""
        assert kinds_and_values("->") == [(K.ARROW, "->")]
        assert kinds_and_values("$$") == [(K.CONDENSED_FORMULA, "$$")]

    def test_longest_match_needs_full_fit(self):
        """The one-character token is used when the longer one does not fit."""
        assert kinds_and_values("-=") == [(K.MINUS, "-"), (K.EQUALS, "=")]
        assert kinds_and_values("$$$") == [(K.CONDENSED_FORMULA, "$$"), (K.FORMULA, "$")]

    def test_custom_table(self):
        """A custom table is matched with the same longest-match rule."""
        table = {"<": K.UNKNOWN, "<-": K.ARROW}
        tokens = list(Tokenizer("<-<", table=table))
        assert [t.source for t in tokens] == ["<-", "<"]

    def test_unknown_character(self):
        """Unrecognized characters become one-character unknown tokens."""
        assert kinds_and_values("?;") == [(K.UNKNOWN, "?"), (K.UNKNOWN, ";")]

    def test_whitespace_run(self):
        """Contiguous whitespace is one token."""
        assert kinds_and_values("a \t\n b") == [
            (K.IDENTIFIER, "a"),
            (K.WHITESPACE, " \t\n "),
            (K.IDENTIFIER, "b"),
        ]


class TestTokenStream:
    """Test stream-level properties."""

    def test_mixed_input(self):
        """A mixed line tokenizes as expected."""
        source = "'regular_1dEnti-fier*=-->(< caLiFor_ni-aGurls1234 .5678.4#1.234.a ? "
        assert kinds_and_values(source) == [
            (K.IDENTIFIER, "regular_1dEnti-fier"),
            (K.MULTIPLY, "*"),
            (K.EQUALS, "="),
            (K.MINUS, "-"),
            (K.ARROW, "->"),
            (K.LPAREN, "("),
            (K.UNKNOWN, "<"),
            (K.WHITESPACE, " "),
            (K.IDENTIFIER, "ca"),
            (K.IDENTIFIER, "Li"),
            (K.IDENTIFIER, "For"),
            (K.IDENTIFIER, "_ni"),
            (K.MINUS, "-"),
            (K.IDENTIFIER, "a"),
            (K.IDENTIFIER, "Gurls"),
            (K.INTEGER, "1234"),
            (K.WHITESPACE, " "),
            (K.DOT, "."),
            (K.REAL, "5678.4"),
            (K.REAL, "1.234"),
            (K.DOT, "."),
            (K.IDENTIFIER, "a"),
            (K.WHITESPACE, " "),
            (K.UNKNOWN, "?"),
            (K.WHITESPACE, " "),
        ]

    @pytest.mark.parametrize("source", [
        "",
        "$H2O",
        "  a + b  ",
        "(x, #2.5, \"s\")",
        "f!{ $Fe2O3-2 }",
        "'quoted-name ?? \"unterminated",
        "6.02e23 1.5E-3 1e5 #7",
        "->``$$$...\t\n",
        "'",
    ])
    def test_round_trip(self, source):
        """Concatenated token sources reproduce the input exactly."""
        assert "".join(t.source for t in tokenize(source)) == source

    def test_lazy_over_infinite_source(self):
        """Tokens can be pulled from an endless character stream."""
        tokens = list(itertools.islice(Tokenizer(itertools.cycle("Ab")), 3))
        assert [t.value for t in tokens] == ["Ab", "Ab", "Ab"]

    def test_empty_input(self):
        assert list(tokenize("")) == []

    def test_token_is_value_object(self):
        """Tokens compare by value."""
        assert Token(K.PLUS, "+", "+") == Token.structural(K.PLUS, "+")
