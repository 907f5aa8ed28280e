"""Parsers for Tcl scripts.

- :class:`ScriptParser` builds PROGRAM > COMMAND > OPERAND trees from
  command scripts.
- :class:`SubstitutionParser` builds a flat LIST of literal and
  substitution fragments from quoted text and expression strings.
- :class:`ExpressionParser` builds operator trees for ``expr`` and the
  conditions of control commands.
"""

from __future__ import annotations

from typing import Optional, Protocol

from ..ast.types import Node, NodeType
from ..errors import ParseError, UnbalancedParenthesesError
from .lexer import ExpressionLexer, ScriptLexer, StringLexer, Token, TokenType, tokenize


class TokenSource(Protocol):
    """Anything producing tokens on demand."""

    def next_token(self) -> Token: ...


class StreamParser:
    """Parser reading one token at a time from a token source."""

    def __init__(self, lexer: TokenSource):
        self.lexer = lexer
        self.current = Token(TokenType.NULL)

    def advance(self) -> Token:
        """Read the next token and make it current."""
        self.current = self.lexer.next_token()
        return self.current

    def expect(self, *types: TokenType) -> Token:
        """Read the next token, which must be one of the given types."""
        token = self.advance()
        if token.type not in types:
            raise ParseError("Unexpected token", token.type, types[0])
        return token


class ScriptParser(StreamParser):
    """Parser for command scripts."""

    def __init__(self, lexer: TokenSource, name: str = "Tcl script"):
        super().__init__(lexer)
        self.name = name

    def parse(self) -> Node:
        """Parse the whole script into a PROGRAM node."""
        program = Node(NodeType.PROGRAM, self.name)
        while True:
            command = self.parse_command()
            if command is not None:
                program.add(command)
            if self.current.type == TokenType.EOF:
                return program

    def parse_command(self) -> Optional[Node]:
        """Parse one command, or return None at end of input."""
        token = self.advance()
        while token.type in (
            TokenType.WHITESPACE,
            TokenType.EOL,
            TokenType.SEMI,
            TokenType.CMT,
        ):
            token = self.advance()
        if token.type == TokenType.EOF:
            return None
        if token.type != TokenType.WORD:
            raise ParseError("Command name expected", token.type, TokenType.WORD)

        command = Node(NodeType.COMMAND, token.value)
        token = self.advance()
        if token.type not in (
            TokenType.WHITESPACE,
            TokenType.EOL,
            TokenType.SEMI,
            TokenType.EOF,
        ):
            raise ParseError("Command name must be a single word", token.type, TokenType.WHITESPACE)

        operand: Optional[Node] = None
        while token.type not in (TokenType.EOL, TokenType.SEMI, TokenType.EOF):
            if token.type == TokenType.WHITESPACE:
                operand = None
            else:
                if operand is None:
                    operand = command.add(Node(NodeType.OPERAND))
                self._parse_fragment(token, operand)
            token = self.advance()
        return command

    def _parse_fragment(self, token: Token, operand: Node) -> None:
        if token.type == TokenType.WORD:
            operand.add(Node(NodeType.WORD, token.value))
        elif token.type == TokenType.DOLLAR:
            name = self.expect(TokenType.NAME)
            operand.add(Node(NodeType.NAME, name.value))
        elif token.type == TokenType.LEFTCURL:
            text = self.expect(TokenType.STRING)
            self.expect(TokenType.RIGHTCURL)
            operand.add(Node(NodeType.STRING, text.value or ""))
        elif token.type == TokenType.LEFTBR:
            text = self.expect(TokenType.STRING)
            self.expect(TokenType.RIGHTBR)
            operand.add(Node(NodeType.PROGRAM, text.value or ""))
        elif token.type == TokenType.LEFTQ:
            text = self.expect(TokenType.STRING)
            self.expect(TokenType.RIGHTQ)
            fragments = parse_substitutions(text.value or "")
            if fragments.children:
                operand.children.extend(fragments.children)
            else:
                operand.add(Node(NodeType.SUBSTRING, ""))
        else:
            raise ParseError("Unexpected token in command", token.type, TokenType.WORD)


class SubstitutionParser(StreamParser):
    """Parser splitting text into literal and substitution fragments."""

    def parse(self) -> Node:
        """Parse the text into a flat LIST node."""
        fragments = Node(NodeType.LIST)
        token = self.advance()
        while token.type != TokenType.EOF:
            if token.type == TokenType.STRING:
                fragments.add(Node(NodeType.SUBSTRING, token.value))
            elif token.type == TokenType.DOLLAR:
                name = self.expect(TokenType.NAME)
                fragments.add(Node(NodeType.NAME, name.value))
            elif token.type == TokenType.LEFTBR:
                text = self.expect(TokenType.STRING)
                self.expect(TokenType.RIGHTBR)
                fragments.add(Node(NodeType.PROGRAM, text.value or ""))
            else:
                raise ParseError("Unexpected token in substitution", token.type, TokenType.STRING)
            token = self.advance()
        return fragments


# Binary operator levels, tightest first
BINARY_LEVELS: tuple[frozenset[TokenType], ...] = (
    frozenset({TokenType.MUL, TokenType.DIV, TokenType.REM}),
    frozenset({TokenType.PLUS, TokenType.MINUS}),
    frozenset({TokenType.LSHIFT, TokenType.RSHIFT}),
    frozenset({TokenType.LESS, TokenType.MORE, TokenType.LEQ, TokenType.MEQ}),
    frozenset({TokenType.EQ, TokenType.NE, TokenType.IN, TokenType.NI}),
    frozenset({TokenType.BAND}),
    frozenset({TokenType.BXOR}),
    frozenset({TokenType.BOR}),
    frozenset({TokenType.AND}),
    frozenset({TokenType.OR}),
)

UNARY_OPERATORS = frozenset({TokenType.PLUS, TokenType.MINUS, TokenType.NOT, TokenType.BNOT})

TOO_MANY_CLOSING = "The number of closing parentheses exceeds the number of opening parentheses"
TOO_MANY_OPENING = "The number of opening parentheses exceeds the number of closing parentheses"


class ExpressionParser:
    """Recursive descent parser for expressions."""

    def __init__(self, tokens: list[Token]):
        self.tokens = tokens
        self.pos = 0

    def peek(self, offset: int = 0) -> Token:
        """Look at token at current position + offset."""
        idx = self.pos + offset
        if idx < len(self.tokens):
            return self.tokens[idx]
        return Token(TokenType.EOF, None, -1)

    def advance(self) -> Token:
        """Advance and return current token."""
        tok = self.peek()
        self.pos += 1
        return tok

    def check(self, type_: TokenType) -> bool:
        """Check if current token is of given type."""
        return self.peek().type == type_

    def expect(self, type_: TokenType, msg: str) -> Token:
        """Expect current token to be of given type, or raise error."""
        if not self.check(type_):
            raise ParseError(msg, self.peek().type, type_)
        return self.advance()

    def parse(self) -> Node:
        """Parse the entire expression."""
        if self.check(TokenType.EOF):
            return Node(NodeType.NUMBER, "0")
        expr = self.parse_ternary()
        if self.check(TokenType.RIGHTPAR):
            raise UnbalancedParenthesesError(TOO_MANY_CLOSING, TokenType.RIGHTPAR)
        if not self.check(TokenType.EOF):
            raise ParseError("Unexpected token in expression", self.peek().type, TokenType.EOF)
        return expr

    def parse_ternary(self) -> Node:
        """Parse ``cond ? a : b`` (right-associative)."""
        condition = self.parse_binary(len(BINARY_LEVELS) - 1)
        if not self.check(TokenType.QM):
            return condition
        self.advance()
        then = self.parse_ternary()
        self.expect(TokenType.COLON, "Missing ':' in ternary operation")
        otherwise = self.parse_ternary()
        return Node(NodeType.TERNARYOP, "?", [condition, then, otherwise])

    def parse_binary(self, level: int) -> Node:
        """Parse a left-associative chain of operators at one level."""
        if level < 0:
            return self.parse_exponent()
        left = self.parse_binary(level - 1)
        while self.peek().type in BINARY_LEVELS[level]:
            op = self.advance()
            right = self.parse_binary(level - 1)
            left = Node(NodeType.BINARYOP, op.value, [left, right])
        return left

    def parse_exponent(self) -> Node:
        """Parse ``**`` chains.

        Chained exponents fold from the left: ``2 ** 3 ** 2`` is 64.
        """
        left = self.parse_factor()
        while self.check(TokenType.EXP):
            self.advance()
            left = Node(NodeType.BINARYOP, "**", [left, self.parse_factor()])
        return left

    def parse_factor(self) -> Node:
        """Parse an atom or a unary operator applied to one."""
        token = self.peek()
        if token.type == TokenType.NUMBER:
            self.advance()
            return Node(NodeType.NUMBER, token.value)
        if token.type in UNARY_OPERATORS:
            self.advance()
            return Node(NodeType.UNARYOP, token.value, [self.parse_factor()])
        if token.type == TokenType.LEFTPAR:
            self.advance()
            return self._parse_parenthesized()
        if token.type == TokenType.RIGHTPAR:
            raise UnbalancedParenthesesError(TOO_MANY_CLOSING, TokenType.RIGHTPAR)
        if token.type in (TokenType.LEFTQ, TokenType.LEFTCURL):
            closing = TokenType.RIGHTQ if token.type == TokenType.LEFTQ else TokenType.RIGHTCURL
            self.advance()
            text = ""
            if self.check(TokenType.STRING):
                text = self.advance().value or ""
            self.expect(closing, "Unterminated string in expression")
            return Node(NodeType.QSTRING, text)
        if token.type == TokenType.NAME:
            self.advance()
            if self.check(TokenType.LEFTPAR):
                self.advance()
                return Node(NodeType.FUNC, token.value, [self._parse_parenthesized()])
            # A bare word is a string operand
            return Node(NodeType.STRING, token.value)
        if token.type == TokenType.EOF:
            raise ParseError("Unexpected end of expression", TokenType.EOF, TokenType.NUMBER)
        raise ParseError("Unexpected token in expression", token.type, TokenType.NUMBER)

    def _parse_parenthesized(self) -> Node:
        expr = self.parse_ternary()
        if self.check(TokenType.EOF):
            raise UnbalancedParenthesesError(TOO_MANY_OPENING, TokenType.EOF, TokenType.RIGHTPAR)
        self.expect(TokenType.RIGHTPAR, "Unexpected token in expression")
        return expr


def parse_script(script: str, name: str = "Tcl script") -> Node:
    """Parse a command script into a PROGRAM node."""
    return ScriptParser(ScriptLexer(script), name).parse()


def parse_substitutions(text: str) -> Node:
    """Parse text into a LIST of literal and substitution fragments."""
    return SubstitutionParser(StringLexer(text)).parse()


def parse_expression(text: str) -> Node:
    """Parse an expression into an operator tree."""
    return ExpressionParser(tokenize(ExpressionLexer(text))).parse()
