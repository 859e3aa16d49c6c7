import io

import pytest

from bikeshed.jsengine import (
    JSToken,
    JSTokenizeError,
    JSTokenType,
    dump_tokens,
    format_token,
    run_js,
    tokenise_js,
)


def test_tokenise_expression():
    assert tokenise_js("1+2") == [
        JSToken(JSTokenType.INTEGER, 1),
        JSToken(JSTokenType.PLUS),
        JSToken(JSTokenType.INTEGER, 2),
    ]


def test_tokenise_operators_and_whitespace():
    kinds = [t.kind for t in tokenise_js("- * / \n")]
    assert kinds == [
        JSTokenType.MINUS,
        JSTokenType.SPACE,
        JSTokenType.STAR,
        JSTokenType.SPACE,
        JSTokenType.SLASH,
        JSTokenType.SPACE,
        JSTokenType.NEWLINE,
    ]


def test_tokenise_empty():
    assert tokenise_js("") == []


def test_multi_digit_number():
    assert tokenise_js("1234") == [JSToken(JSTokenType.INTEGER, 1234)]


def test_huge_number_is_clamped():
    tokens = tokenise_js("9" * 30)
    assert tokens[0].value == 2**63 - 1


def test_invalid_character_raises():
    with pytest.raises(JSTokenizeError) as info:
        tokenise_js("1+a")
    assert info.value.char == "a"


def test_format_tokens():
    assert format_token(JSToken(JSTokenType.NEWLINE)) == "(Newline)"
    assert format_token(JSToken(JSTokenType.INTEGER, 42)) == "(Integer: 42)"
    assert format_token(JSToken(JSTokenType.PLUS)) == "(+)"


def test_dump_tokens():
    out = io.StringIO()
    dump_tokens([JSToken(JSTokenType.INTEGER, 7), JSToken(JSTokenType.MINUS)], out)
    assert out.getvalue() == "Token dump:\n(Integer: 7), (-)\n"


def test_run_js_reports_and_returns_tokens():
    out = io.StringIO()
    tokens = run_js("3*4", out)
    assert len(tokens) == 3
    assert out.getvalue().startswith("Tokenising complete.\nToken dump:\n")


def test_run_js_propagates_error():
    with pytest.raises(JSTokenizeError):
        run_js("x", io.StringIO())