"""Tests for the lexers."""

from just_tcl.parser import (
    ExpressionLexer,
    ParallelLexer,
    ScriptLexer,
    StringLexer,
    TokenType,
    tokenize,
)


def kinds(lexer):
    return [token.type for token in tokenize(lexer)]


def pairs(lexer):
    return [(token.type, token.value) for token in tokenize(lexer)]


def words(script):
    return [token.value for token in tokenize(ScriptLexer(script)) if token.type == TokenType.WORD]


class TestScriptLexer:
    """Test command script lexing."""

    def test_simple_command(self):
        assert kinds(ScriptLexer("set x 5")) == [
            TokenType.WORD,
            TokenType.WHITESPACE,
            TokenType.WORD,
            TokenType.WHITESPACE,
            TokenType.WORD,
            TokenType.EOF,
        ]

    def test_separators(self):
        types = kinds(ScriptLexer("a;b\nc"))
        assert types == [
            TokenType.WORD,
            TokenType.SEMI,
            TokenType.WORD,
            TokenType.EOL,
            TokenType.WORD,
            TokenType.EOF,
        ]

    def test_eof_repeats(self):
        lexer = ScriptLexer("x")
        lexer.next_token()
        assert lexer.next_token().type == TokenType.EOF
        assert lexer.next_token().type == TokenType.EOF

    def test_braced_string(self):
        assert pairs(ScriptLexer("{a {b} c}")) == [
            (TokenType.LEFTCURL, "{"),
            (TokenType.STRING, "a {b} c"),
            (TokenType.RIGHTCURL, "}"),
            (TokenType.EOF, None),
        ]

    def test_empty_braces(self):
        assert pairs(ScriptLexer("{}"))[:3] == [
            (TokenType.LEFTCURL, "{"),
            (TokenType.STRING, ""),
            (TokenType.RIGHTCURL, "}"),
        ]

    def test_quoted_string_keeps_interior_raw(self):
        assert pairs(ScriptLexer('puts "a $b\\n"'))[2:5] == [
            (TokenType.LEFTQ, '"'),
            (TokenType.STRING, "a $b\\n"),
            (TokenType.RIGHTQ, '"'),
        ]

    def test_quote_inside_word_is_literal(self):
        assert words('puts a"b') == ["puts", 'a"b']

    def test_bracketed_command(self):
        assert pairs(ScriptLexer("[expr {[x]}]")) == [
            (TokenType.LEFTBR, "["),
            (TokenType.STRING, "expr {[x]}"),
            (TokenType.RIGHTBR, "]"),
            (TokenType.EOF, None),
        ]

    def test_variable_name(self):
        assert pairs(ScriptLexer("$abc"))[:2] == [
            (TokenType.DOLLAR, "$"),
            (TokenType.NAME, "abc"),
        ]

    def test_array_name_with_nested_parentheses(self):
        tokens = pairs(ScriptLexer("$a(x(1)) y"))
        assert tokens[1] == (TokenType.NAME, "a(x(1))")
        assert tokens[2] == (TokenType.WHITESPACE, " ")

    def test_braced_variable_name(self):
        assert pairs(ScriptLexer("${a b}"))[1] == (TokenType.NAME, "a b")

    def test_lone_dollar_is_a_word(self):
        assert words("puts $") == ["puts", "$"]

    def test_comment_at_command_start(self):
        tokens = pairs(ScriptLexer("# note\nset x 1"))
        assert tokens[0] == (TokenType.CMT, " note")
        assert tokens[1][0] == TokenType.EOL

    def test_comment_after_semicolon(self):
        assert TokenType.CMT in kinds(ScriptLexer("set x 1 ;# note"))

    def test_hash_inside_command_is_a_word(self):
        assert words("puts #x") == ["puts", "#x"]


class TestEscapes:
    """Test backslash substitution in words."""

    def test_newline_escape(self):
        assert words("set x a\\nb")[2] == "a\nb"

    def test_control_escapes(self):
        assert words("x \\a\\b\\f\\r\\t\\v")[1] == "\a\b\f\r\t\v"

    def test_hex_escape(self):
        assert words("x \\x41")[1] == "A"

    def test_octal_escape(self):
        assert words("x \\101")[1] == "A"

    def test_unicode_escape(self):
        assert words("x \\u00e9")[1] == "é"

    def test_other_characters_are_literal(self):
        assert words("x \\q\\$\\[")[1] == "q$["

    def test_line_continuation(self):
        assert words("set x 1 \\\n    2") == ["set", "x", "1", "2"]
        assert TokenType.EOL not in kinds(ScriptLexer("set x 1 \\\n    2"))


class TestStringLexer:
    """Test substitution-only lexing."""

    def test_fragments(self):
        assert pairs(StringLexer("a $b [c] d")) == [
            (TokenType.STRING, "a "),
            (TokenType.DOLLAR, "$"),
            (TokenType.NAME, "b"),
            (TokenType.STRING, " "),
            (TokenType.LEFTBR, "["),
            (TokenType.STRING, "c"),
            (TokenType.RIGHTBR, "]"),
            (TokenType.STRING, " d"),
            (TokenType.EOF, None),
        ]

    def test_escapes_in_literal(self):
        assert pairs(StringLexer("a\\tb"))[0] == (TokenType.STRING, "a\tb")

    def test_dollar_without_name_is_literal(self):
        assert pairs(StringLexer("cost: $ 5"))[0] == (TokenType.STRING, "cost: $ 5")


class TestExpressionLexer:
    """Test expression lexing."""

    def test_longest_match_operators(self):
        assert kinds(ExpressionLexer("1**2<<3<=4&&5")) == [
            TokenType.NUMBER,
            TokenType.EXP,
            TokenType.NUMBER,
            TokenType.LSHIFT,
            TokenType.NUMBER,
            TokenType.LEQ,
            TokenType.NUMBER,
            TokenType.AND,
            TokenType.NUMBER,
            TokenType.EOF,
        ]

    def test_word_operators(self):
        assert kinds(ExpressionLexer("a eq b ne c in d ni e"))[1::2] == [
            TokenType.EQ,
            TokenType.NE,
            TokenType.IN,
            TokenType.NI,
            TokenType.EOF,
        ]

    def test_word_operator_not_part_of_identifier(self):
        assert pairs(ExpressionLexer("equal"))[0] == (TokenType.NAME, "equal")

    def test_numbers(self):
        assert pairs(ExpressionLexer("0x1F 017 1.5e+3 2e3 .5"))[:-1] == [
            (TokenType.NUMBER, "31"),
            (TokenType.NUMBER, "15"),
            (TokenType.NUMBER, "1.5e+3"),
            (TokenType.NUMBER, "2e3"),
            (TokenType.NUMBER, ".5"),
        ]

    def test_second_dot_ends_number(self):
        assert pairs(ExpressionLexer("1.2.3"))[:2] == [
            (TokenType.NUMBER, "1.2"),
            (TokenType.NUMBER, ".3"),
        ]

    def test_quoted_string_keeps_spaces(self):
        assert pairs(ExpressionLexer('" a b "'))[:3] == [
            (TokenType.LEFTQ, '"'),
            (TokenType.STRING, " a b "),
            (TokenType.RIGHTQ, '"'),
        ]

    def test_unknown_character_advances(self):
        assert pairs(ExpressionLexer("1 @ 2")) == [
            (TokenType.NUMBER, "1"),
            (TokenType.UNKNOWN, "@"),
            (TokenType.NUMBER, "2"),
            (TokenType.EOF, None),
        ]


class TestParallelLexer:
    """Test lexing on a background thread."""

    def test_same_tokens_as_direct_lexing(self):
        script = "set x {a b}\n" * 80 + "puts [expr $x]"
        lexer = ParallelLexer(ScriptLexer(script))
        produced = []
        while True:
            token = lexer.next_token()
            produced.append(token)
            if token.type == TokenType.EOF:
                break
        assert produced == tokenize(ScriptLexer(script))

    def test_eof_after_end(self):
        lexer = ParallelLexer(ScriptLexer("x"))
        assert lexer.next_token().type == TokenType.WORD
        assert lexer.next_token().type == TokenType.EOF
        assert lexer.next_token().type == TokenType.EOF
        lexer.close()
