"""Parser module for just-tcl."""

from .lexer import (
    BaseLexer,
    ExpressionLexer,
    ScriptLexer,
    StringLexer,
    Token,
    TokenType,
    tokenize,
)
from .parallel import ParallelLexer, MAX_QUEUED_TOKENS
from .parser import (
    ExpressionParser,
    ScriptParser,
    SubstitutionParser,
    parse_expression,
    parse_script,
    parse_substitutions,
)
from .tcl_list import TclList

__all__ = [
    # Lexer
    "BaseLexer",
    "ExpressionLexer",
    "ScriptLexer",
    "StringLexer",
    "Token",
    "TokenType",
    "tokenize",
    "ParallelLexer",
    "MAX_QUEUED_TOKENS",
    # Parser
    "ExpressionParser",
    "ScriptParser",
    "SubstitutionParser",
    "parse_expression",
    "parse_script",
    "parse_substitutions",
    # Values
    "TclList",
]
