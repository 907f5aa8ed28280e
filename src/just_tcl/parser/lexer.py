"""Lexer for Tcl scripts.

Turns script text into tokens, one token per call to ``next_token``.
Three grammars share the character engine in :class:`BaseLexer`:

- :class:`ScriptLexer` splits command scripts into words, substitutions
  and braced/quoted/bracketed regions.
- :class:`StringLexer` splits text into literal runs and ``$name`` /
  ``[script]`` substitutions.
- :class:`ExpressionLexer` produces numbers, operators and names for the
  expression grammar.

The lexers never raise: unrecognized input becomes an UNKNOWN token.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator, Optional


class TokenType(Enum):
    """Token types."""

    # Literals
    NUMBER = auto()
    STRING = auto()
    WORD = auto()
    NAME = auto()

    # Arithmetic
    PLUS = auto()
    MINUS = auto()
    MUL = auto()
    DIV = auto()
    EXP = auto()
    REM = auto()

    # Bitwise and logical
    BOR = auto()
    BAND = auto()
    BXOR = auto()
    BNOT = auto()
    OR = auto()
    AND = auto()
    NOT = auto()
    LSHIFT = auto()
    RSHIFT = auto()

    # Comparison
    LEQ = auto()
    MEQ = auto()
    LESS = auto()
    MORE = auto()
    NE = auto()
    EQ = auto()
    IN = auto()
    NI = auto()

    # Ternary
    QM = auto()
    COLON = auto()

    # Delimiters
    LEFTPAR = auto()
    RIGHTPAR = auto()
    LEFTBR = auto()
    RIGHTBR = auto()
    LEFTQ = auto()
    RIGHTQ = auto()
    LEFTCURL = auto()
    RIGHTCURL = auto()

    # Structure
    SEMI = auto()
    EOL = auto()
    DOLLAR = auto()
    WHITESPACE = auto()
    CMT = auto()

    # Sentinels
    EOF = auto()
    UNKNOWN = auto()
    NULL = auto()


@dataclass(frozen=True)
class Token:
    """A lexer token."""

    type: TokenType
    value: Optional[str] = None
    pos: int = -1


# Backslash escapes mapping to a single control character
SIMPLE_ESCAPES = {
    "a": "\a",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
}

OCTAL_DIGITS = "01234567"
HEX_DIGITS = "0123456789abcdefABCDEF"
LINE_TERMINATORS = "\r\n"

# Longest match first
OPERATORS: tuple[tuple[str, TokenType], ...] = (
    ("**", TokenType.EXP),
    ("<<", TokenType.LSHIFT),
    (">>", TokenType.RSHIFT),
    ("<=", TokenType.LEQ),
    (">=", TokenType.MEQ),
    ("&&", TokenType.AND),
    ("||", TokenType.OR),
    ("==", TokenType.EQ),
    ("!=", TokenType.NE),
    ("*", TokenType.MUL),
    ("/", TokenType.DIV),
    ("%", TokenType.REM),
    ("+", TokenType.PLUS),
    ("-", TokenType.MINUS),
    ("<", TokenType.LESS),
    (">", TokenType.MORE),
    ("&", TokenType.BAND),
    ("^", TokenType.BXOR),
    ("|", TokenType.BOR),
    ("!", TokenType.NOT),
    ("~", TokenType.BNOT),
    ("?", TokenType.QM),
    (":", TokenType.COLON),
    ("(", TokenType.LEFTPAR),
    (")", TokenType.RIGHTPAR),
)

WORD_OPERATORS = {
    "eq": TokenType.EQ,
    "ne": TokenType.NE,
    "in": TokenType.IN,
    "ni": TokenType.NI,
}


def is_name_char(char: str) -> bool:
    """Check if a character may appear in a variable name."""
    return char != "" and (char.isalnum() or char == "_")


class BaseLexer:
    """Character engine shared by the lexer grammars.

    Tracks the current position and provides escape, number, name and
    whitespace scanning. Subclasses implement ``_read_token``.
    """

    skip_whitespace = False

    def __init__(self, script: str):
        self.script = script
        self.pos = 0

    @property
    def current(self) -> str:
        """The character at the current position, or "" at end of input."""
        return self.peek(0)

    def peek(self, offset: int = 1) -> str:
        idx = self.pos + offset
        if 0 <= idx < len(self.script):
            return self.script[idx]
        return ""

    def peekback(self) -> str:
        return self.peek(-1)

    def advance(self, count: int = 1) -> None:
        self.pos = min(self.pos + count, len(self.script))

    def at_end(self) -> bool:
        return self.pos >= len(self.script)

    def skip_spaces(self, newlines: bool = True) -> None:
        """Skip whitespace, optionally stopping at line terminators."""
        while self.current and self.current.isspace():
            if not newlines and self.current in LINE_TERMINATORS:
                break
            self.advance()

    def at_continuation(self) -> bool:
        """Check for a backslash followed by a line terminator."""
        return self.current == "\\" and self.peek() != "" and self.peek() in LINE_TERMINATORS

    def skip_continuation(self) -> None:
        """Elide a line continuation together with all following whitespace."""
        self.advance()
        self.skip_spaces()

    def read_escape(self) -> str:
        """Read a backslash escape sequence and return its replacement."""
        self.advance()  # backslash
        char = self.current
        if char == "":
            return "\\"
        if char in SIMPLE_ESCAPES:
            self.advance()
            return SIMPLE_ESCAPES[char]
        if char in OCTAL_DIGITS:
            digits = self._read_digits(OCTAL_DIGITS, 3)
            return chr(int(digits, 8))
        if char == "x":
            self.advance()
            digits = self._read_digits(HEX_DIGITS)
            if not digits:
                return "x"
            # Only the low byte of a long hex escape is kept
            return chr(int(digits, 16) & 0xFF)
        if char == "u":
            self.advance()
            digits = self._read_digits(HEX_DIGITS, 4)
            if not digits:
                return "u"
            return chr(int(digits, 16))
        self.advance()
        return char

    def _read_digits(self, allowed: str, limit: Optional[int] = None) -> str:
        start = self.pos
        while self.current and self.current in allowed:
            if limit is not None and self.pos - start >= limit:
                break
            self.advance()
        return self.script[start:self.pos]

    def read_number(self) -> str:
        """Read a numeric literal.

        Octal and hexadecimal literals are converted to decimal text.
        """
        if self.current == "0" and self.peek() != "" and self.peek() in OCTAL_DIGITS:
            self.advance()
            return str(int(self._read_digits(OCTAL_DIGITS), 8))
        if self.current == "0" and self.peek() in ("x", "X"):
            self.advance(2)
            digits = self._read_digits(HEX_DIGITS)
            return str(int(digits, 16)) if digits else "0"

        start = self.pos
        seen_dot = False
        while self.current:
            char = self.current
            if char.isdigit():
                self.advance()
            elif char == "." and not seen_dot:
                seen_dot = True
                self.advance()
            elif char in ("e", "E") and self._exponent_follows():
                self.advance()
                if self.current in ("+", "-"):
                    self.advance()
                self._read_digits("0123456789")
                break
            else:
                break
        return self.script[start:self.pos]

    def _exponent_follows(self) -> bool:
        nxt = self.peek()
        if nxt in ("+", "-"):
            return self.peek(2).isdigit()
        return nxt.isdigit()

    def starts_name(self) -> bool:
        """Check if the current ``$`` introduces a variable substitution."""
        nxt = self.peek()
        return self.current == "$" and (is_name_char(nxt) or nxt == "{")

    def read_name(self) -> str:
        """Read a variable name, including any ``(index)`` suffix.

        The index is kept literally; nested parentheses are counted so
        the closing parenthesis is found correctly.
        """
        if self.current == "{":
            self.advance()
            start = self.pos
            while self.current and self.current != "}":
                self.advance()
            name = self.script[start:self.pos]
            self.advance()
            return name

        start = self.pos
        while is_name_char(self.current):
            self.advance()
        if self.current == "(":
            depth = 0
            while self.current:
                char = self.current
                self.advance()
                if char == "(":
                    depth += 1
                elif char == ")":
                    depth -= 1
                    if depth == 0:
                        break
        return self.script[start:self.pos]

    def read_bracketed(self) -> str:
        """Read the raw text of a ``[...]`` region up to its closing bracket."""
        start = self.pos
        depth = 1
        braces = 0
        while self.current:
            char = self.current
            if char == "\\":
                self.advance(2)
                continue
            if char == "{":
                braces += 1
            elif char == "}" and braces > 0:
                braces -= 1
            elif char == "[" and braces == 0:
                depth += 1
            elif char == "]" and braces == 0:
                depth -= 1
                if depth == 0:
                    break
            self.advance()
        return self.script[start:self.pos]

    def read_braced(self) -> str:
        """Read the interior of a ``{...}`` region up to its matching brace.

        Backslash sequences are kept literally except line continuations,
        which are elided.
        """
        parts: list[str] = []
        depth = 1
        while self.current:
            char = self.current
            if self.at_continuation():
                self.skip_continuation()
                continue
            if char == "\\":
                parts.append(self.script[self.pos:self.pos + 2])
                self.advance(2)
                continue
            if char == "{":
                depth += 1
            elif char == "}":
                depth -= 1
                if depth == 0:
                    break
            parts.append(char)
            self.advance()
        return "".join(parts)

    def next_token(self) -> Token:
        """Return the next token; EOF is returned repeatedly at end of input."""
        if self.skip_whitespace:
            self.skip_spaces()
        if self.at_end():
            return Token(TokenType.EOF, None, self.pos)
        pos = self.pos
        token = self._read_token()
        if token is None:
            char = self.current
            self.advance()
            return Token(TokenType.UNKNOWN, char, pos)
        return token

    def _read_token(self) -> Optional[Token]:
        raise NotImplementedError

    def __iter__(self) -> Iterator[Token]:
        while True:
            token = self.next_token()
            yield token
            if token.type == TokenType.EOF:
                return


class ScriptLexer(BaseLexer):
    """Lexer for command scripts."""

    def __init__(self, script: str):
        super().__init__(script)
        self.in_quotes = False
        self.in_curly = False
        self.in_brackets = False
        self._interior_read = False
        self._after_dollar = False
        self._word_start = True
        self._command_start = True

    def _read_token(self) -> Optional[Token]:
        pos = self.pos
        if self.in_curly:
            return self._close_region("}", TokenType.RIGHTCURL, self.read_braced)
        if self.in_brackets:
            return self._close_region("]", TokenType.RIGHTBR, self.read_bracketed)
        if self.in_quotes:
            return self._close_region('"', TokenType.RIGHTQ, self._read_quoted)
        if self._after_dollar:
            self._after_dollar = False
            return self._word(Token(TokenType.NAME, self.read_name(), pos))

        char = self.current
        if self.at_continuation():
            self.skip_continuation()
            return self.next_token()
        if char in LINE_TERMINATORS:
            self.skip_spaces()
            return self._separator(Token(TokenType.EOL, "\n", pos), command_start=True)
        if char == ";":
            self.advance()
            return self._separator(Token(TokenType.SEMI, ";", pos), command_start=True)
        if char.isspace():
            self.skip_spaces(newlines=False)
            return self._separator(Token(TokenType.WHITESPACE, " ", pos))
        if char == "#" and self._command_start:
            self.advance()
            start = self.pos
            while self.current and self.current not in LINE_TERMINATORS:
                self.advance()
            return Token(TokenType.CMT, self.script[start:self.pos], pos)
        if char == "[":
            self.advance()
            self.in_brackets = True
            return self._word(Token(TokenType.LEFTBR, "[", pos))
        if char == "{" and self._word_start:
            self.advance()
            self.in_curly = True
            return self._word(Token(TokenType.LEFTCURL, "{", pos))
        if char == '"' and self._word_start:
            self.advance()
            self.in_quotes = True
            return self._word(Token(TokenType.LEFTQ, '"', pos))
        if self.starts_name():
            self.advance()
            self._after_dollar = True
            return self._word(Token(TokenType.DOLLAR, "$", pos))
        return self._word(Token(TokenType.WORD, self._read_word(), pos))

    def _word(self, token: Token) -> Token:
        self._word_start = False
        self._command_start = False
        return token

    def _separator(self, token: Token, command_start: bool = False) -> Token:
        self._word_start = True
        if command_start:
            self._command_start = True
        return token

    def _close_region(self, closer: str, closing_type: TokenType, read_interior) -> Token:
        pos = self.pos
        if not self._interior_read:
            self._interior_read = True
            return Token(TokenType.STRING, read_interior(), pos)
        self._interior_read = False
        self.in_curly = self.in_brackets = self.in_quotes = False
        if self.current == closer:
            self.advance()
        return Token(closing_type, closer, pos)

    def _read_quoted(self) -> str:
        """Read the raw interior of a quoted word.

        A quote inside a bracketed command substitution does not end
        the word. Backslash sequences are kept for the substitution pass.
        """
        start = self.pos
        depth = 0
        while self.current:
            char = self.current
            if char == "\\":
                self.advance(2)
                continue
            if char == "[":
                depth += 1
            elif char == "]" and depth > 0:
                depth -= 1
            elif char == '"' and depth == 0:
                break
            self.advance()
        return self.script[start:self.pos]

    def _read_word(self) -> str:
        parts: list[str] = []
        while self.current:
            char = self.current
            if self.at_continuation():
                self.skip_continuation()
                continue
            if char.isspace() or char in ";[" or self.starts_name():
                break
            if char == "\\":
                parts.append(self.read_escape())
                continue
            parts.append(char)
            self.advance()
        return "".join(parts)


class StringLexer(BaseLexer):
    """Lexer for substitution-only text such as quoted words."""

    def __init__(self, script: str):
        super().__init__(script)
        self.in_brackets = False
        self._interior_read = False
        self._after_dollar = False

    def _read_token(self) -> Optional[Token]:
        pos = self.pos
        if self.in_brackets:
            if not self._interior_read:
                self._interior_read = True
                return Token(TokenType.STRING, self.read_bracketed(), pos)
            self._interior_read = False
            self.in_brackets = False
            self.advance()
            return Token(TokenType.RIGHTBR, "]", pos)
        if self._after_dollar:
            self._after_dollar = False
            return Token(TokenType.NAME, self.read_name(), pos)
        if self.current == "[":
            self.advance()
            self.in_brackets = True
            return Token(TokenType.LEFTBR, "[", pos)
        if self.starts_name():
            self.advance()
            self._after_dollar = True
            return Token(TokenType.DOLLAR, "$", pos)
        return Token(TokenType.STRING, self._read_literal(), pos)

    def _read_literal(self) -> str:
        parts: list[str] = []
        while self.current:
            char = self.current
            if char == "[" or self.starts_name():
                break
            if self.at_continuation():
                self.skip_continuation()
                continue
            if char == "\\":
                parts.append(self.read_escape())
                continue
            parts.append(char)
            self.advance()
        return "".join(parts)


class ExpressionLexer(BaseLexer):
    """Lexer for the expression grammar."""

    def __init__(self, script: str):
        super().__init__(script)
        self.in_quotes = False
        self.in_curly = False
        self._interior_read = False

    @property
    def skip_whitespace(self) -> bool:
        # Whitespace inside a quoted or braced literal is significant
        return not (self.in_quotes or self.in_curly)

    def _read_token(self) -> Optional[Token]:
        pos = self.pos
        if self.in_quotes:
            if not self._interior_read:
                self._interior_read = True
                return Token(TokenType.STRING, self._read_until_quote(), pos)
            self._interior_read = False
            self.in_quotes = False
            self.advance()
            return Token(TokenType.RIGHTQ, '"', pos)
        if self.in_curly:
            if not self._interior_read:
                self._interior_read = True
                return Token(TokenType.STRING, self.read_braced(), pos)
            self._interior_read = False
            self.in_curly = False
            self.advance()
            return Token(TokenType.RIGHTCURL, "}", pos)

        char = self.current
        if char.isdigit() or (char == "." and self.peek().isdigit()):
            return Token(TokenType.NUMBER, self.read_number(), pos)
        if char == '"':
            self.advance()
            self.in_quotes = True
            return Token(TokenType.LEFTQ, '"', pos)
        if char == "{":
            self.advance()
            self.in_curly = True
            return Token(TokenType.LEFTCURL, "{", pos)
        if is_name_char(char):
            start = self.pos
            while is_name_char(self.current):
                self.advance()
            word = self.script[start:self.pos]
            if word in WORD_OPERATORS:
                return Token(WORD_OPERATORS[word], word, pos)
            return Token(TokenType.NAME, word, pos)
        for text, token_type in OPERATORS:
            if self.script.startswith(text, self.pos):
                self.advance(len(text))
                return Token(token_type, text, pos)
        return None

    def _read_until_quote(self) -> str:
        start = self.pos
        while self.current and self.current != '"':
            self.advance()
        return self.script[start:self.pos]


def tokenize(lexer: BaseLexer) -> list[Token]:
    """Collect all tokens from a lexer, including the final EOF."""
    return list(lexer)
