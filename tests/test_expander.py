import pytest

from uaparser.expander import expand_alternatives


@pytest.mark.parametrize(
    "expression, expected",
    [
        ("a", ["a"]),
        ("(a)", ["(a)"]),
        ("(a|b)", ["(a)", "(b)"]),
        ("(?:a|b)", ["(?:a)", "(?:b)"]),
        ("(a|b)?", ["(a|b)?"]),
        ("(a|b)+", ["(a)+", "(b)+"]),
        ("(a|b)*", ["(a|b)*"]),
        ("(a|b){0,2}", ["(a|b){0,2}"]),
        ("a|b", ["a", "b"]),
        ("x(a|b)y", ["x(a)y", "x(b)y"]),
        ("(a|b)yz", ["(a)yz", "(b)yz"]),
        ("xa|by", ["xa", "by"]),
        ("(a|b)(c|d)", ["(a)(c)", "(a)(d)", "(b)(c)", "(b)(d)"]),
        ("(a(b|c)|d)", ["(a(b))", "(a(c))", "(d)"]),
        ("(a", ["(a"]),
        ("(a|b", ["(a|b"]),
        ("((a", ["((a"]),
        ("((a|b", ["((a|b"]),
        ("(a((a|b", ["(a((a|b"]),
        ("[ab]", ["[ab]"]),
        ("[(|)]", ["[(|)]"]),
        ("[(a|a)]", ["[(a|a)]"]),
        ("a(|)b", ["a()b", "a()b"]),
        ("([ab]|[bc])", ["([ab])", "([bc])"]),
        ("[[](a|b)", ["[[](a)", "[[](b)"]),
        ("[]abc](a|b)", ["[]abc](a)", "[]abc](b)"]),
    ],
)
def test_expansions(expression, expected):
    assert expand_alternatives(expression) == expected


def test_negative_lookahead_is_not_expanded():
    expression = "(?!a|b)c"
    assert expand_alternatives(expression) == [expression]


def test_escaped_pipe_is_literal():
    expression = "a\\|b"
    assert expand_alternatives(expression) == [expression]


@pytest.mark.parametrize("expression", ["", "abc", "Mozilla/\\d+\\.\\d+", "foo[|]bar"])
def test_expression_without_alternatives_is_unchanged(expression):
    assert expand_alternatives(expression) == [expression]


def test_combination_count_is_product():
    result = expand_alternatives("(a|b|c)x(d|e)")
    assert len(result) == 3 * 2
    assert len(set(result)) == len(result)
    assert all("|" not in item for item in result)