"""Test newline significance: only newlines ending a leaf statement are emitted."""

import pytest

from curlylex.errors import UnterminatedStringError
from curlylex.lexer import Lexer, tokenize
from curlylex.tokens import TokenType

from .conftest import assert_types, find_tokens

ID = TokenType.IDENTIFIER
S = TokenType.STRING
NL = TokenType.NEWLINE
LB = TokenType.LBRACE
RB = TokenType.RBRACE
C = TokenType.COMMENT
EOF = TokenType.EOF


class TestLeafNewlines:
    def test_identifier_then_newline(self):
        tokens = tokenize("foo\n")
        assert_types(tokens, [ID, NL, EOF])
        assert tokens[0].value == "foo"

    def test_key_value_newline(self, lex):
        assert_types(lex("disable\naddress '192.0.2.1/24'\n"), [ID, NL, ID, S, NL])

    def test_string_then_newline(self, lex):
        assert_types(lex("'eth0'\n"), [S, NL])

    def test_only_first_newline_counts(self, lex):
        assert_types(lex("foo\n\n\n"), [ID, NL])

    def test_blank_lines_between_leaves(self, lex):
        assert_types(lex("a\n\n\nb\n"), [ID, NL, ID, NL])

    def test_no_trailing_newline(self):
        assert_types(tokenize("foo"), [ID, EOF])


class TestStructuralNewlines:
    def test_braces_produce_no_newlines(self):
        assert_types(tokenize("{\n}\n"), [LB, RB, EOF])

    def test_newline_after_open_brace(self, lex):
        assert_types(lex("system {\n"), [ID, LB])

    def test_newline_after_close_brace(self, lex):
        assert_types(lex("}\n\n"), [RB])

    def test_brace_clears_leaf_context(self, lex):
        # "host {" : identifier opens leaf context, brace closes it
        assert_types(lex("host {\n  name x\n}\n"), [ID, LB, ID, ID, NL, RB])


class TestCommentsAndNewlines:
    def test_line_comment_keeps_leaf_context(self):
        assert_types(tokenize("foo // comment\n"), [ID, NL, EOF])

    def test_line_comment_alone(self, lex):
        assert lex("// just a note\n") == []

    def test_line_comment_at_eof(self, lex):
        assert_types(lex("foo // trailing"), [ID])

    def test_line_comment_after_brace(self, lex):
        assert_types(lex("{ // open\n}"), [LB, RB])

    def test_block_comment_clears_leaf_context(self, lex):
        assert_types(lex("foo /* note */\nbar\n"), [ID, C, ID, NL])

    def test_discarded_block_comment_still_clears(self, lex):
        assert_types(lex("foo /* note */\nbar\n", keep_comments=False), [ID, ID, NL])

    def test_identifier_after_block_comment(self, lex):
        assert_types(lex("/* c */ foo\n"), [C, ID, NL])


class TestLeafContextFlag:
    def test_initially_closed(self):
        assert Lexer("foo").leaf_context is False

    def test_open_after_identifier(self):
        lx = Lexer("foo\n")
        lx.next_token()
        assert lx.leaf_context is True
        lx.next_token()
        assert lx.leaf_context is False

    def test_eof_leaves_flag_unchanged(self):
        lx = Lexer("foo")
        lx.next_token()
        assert lx.next_token().type == EOF
        assert lx.leaf_context is True

    def test_open_after_failed_string(self):
        lx = Lexer("'abc")
        with pytest.raises(UnterminatedStringError):
            lx.next_token()
        assert lx.leaf_context is True

    def test_instances_do_not_share_state(self):
        a = Lexer("foo\n")
        b = Lexer("{\n")
        a.next_token()
        b.next_token()
        assert a.leaf_context is True
        assert b.leaf_context is False
        assert a.next_token().type == NL
        assert b.next_token().type == EOF


class TestDocumentExample:
    SOURCE = (
        "interfaces {\n"
        "  ethernet 'eth0' {\n"
        "    address '192.0.2.1/24'\n"
        "    disable\n"
        "\n"
        "    hw-id 00:aa:bb:cc:dd:ee\n"
        "  }\n"
        "}\n"
    )

    def test_full_stream(self):
        tokens = tokenize(self.SOURCE)
        assert_types(
            tokens,
            [ID, LB, ID, S, LB, ID, S, NL, ID, NL, ID, ID, NL, RB, RB, EOF],
        )

    def test_newlines_follow_leaf_statements(self):
        tokens = tokenize(self.SOURCE)
        preceding = [tokens[i - 1].value for i, t in enumerate(tokens) if t.type == NL]
        assert preceding == ["192.0.2.1/24", "disable", "00:aa:bb:cc:dd:ee"]

    def test_newline_lines(self):
        newlines = find_tokens(tokenize(self.SOURCE), NL)
        assert [t.span.start.line for t in newlines] == [3, 4, 6]
