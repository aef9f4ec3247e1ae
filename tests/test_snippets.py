import pytest

from uaparser.snippets import SnippetIndex, SnippetMapping


def _snippet_strings(expression):
    index = SnippetIndex()
    ids = index.register_snippets(expression)
    names = index.registered_snippets()
    return [names[snippet_id] for snippet_id in ids]


@pytest.mark.parametrize(
    "expression, expected",
    [
        ("foo.bar", ["foo", "bar"]),
        ("foodbar", ["foodbar"]),
        ("food?bar", ["foo", "bar"]),
        ("foo.?bar", ["foo", "bar"]),
        ("foo\\.bar", ["foo", ".bar"]),
        ("(foo)", ["foo"]),
        ("toto(foo|bar)tata", ["toto", "tata"]),
        ("toto(foo)tata", ["toto", "foo", "tata"]),
        ("toto(foo)?tata", ["toto", "tata"]),
        ("toto(foo)*tata", ["toto", "tata"]),
        ("toto(foo){0,10}tata", ["toto", "tata"]),
        ("toto(foo){0,}tata", ["toto", "tata"]),
        ("toto(foo){1,10}tata", ["toto", "foo", "tata"]),
        ("toto(foo){1,}tata", ["toto", "foo", "tata"]),
        ("foo[abc]bar", ["foo", "bar"]),
        ("foo[abc]+bar", ["foo", "bar"]),
        ("foo|bar", []),
        ("foo[|]bar", ["foo", "bar"]),
        ("[(foo)]bar", ["bar"]),
        ("[]foo]bar", ["bar"]),
        ("(foo[abc)])bar", ["foo", "bar"]),
        ("(foo(abc))bar", ["foo", "abc", "bar"]),
        ("Foo.bAR", ["foo", "bar"]),
        ("/(\\d+)\\.?foo(\\d+)", ["foo"]),
        ("(?:foo|bar);.*(baz)/(\\d+)\\.(\\d+)", ["baz"]),
    ],
)
def test_register_snippets(expression, expected):
    assert _snippet_strings(expression) == expected


def test_same_snippet_keeps_its_id_regardless_of_case():
    index = SnippetIndex()
    first = index.register_snippets("Mozilla")
    second = index.register_snippets("MOZILLA")
    assert first == second
    assert len(first) == 1


def test_ids_are_ascending_and_unique():
    index = SnippetIndex()
    ids = index.register_snippets("alpha.beta.gamma")
    assert list(ids) == sorted(set(ids))
    assert len(ids) == 3


def test_short_snippets_are_not_registered():
    index = SnippetIndex()
    assert index.register_snippets("ab.cd") == ()
    assert index.registered_snippets() == {}


def test_snippets_in_finds_registered_snippets():
    index = SnippetIndex()
    ids = index.register_snippets("toto(foo)tata")
    assert index.snippets_in("xx TOTOfooTATA yy") == ids


def test_snippets_in_reports_only_present_snippets():
    index = SnippetIndex()
    foo_ids = index.register_snippets("foo")
    index.register_snippets("bar")
    assert index.snippets_in("a foo here") == foo_ids
    assert index.snippets_in("nothing") == ()


def test_snippets_in_empty_text():
    index = SnippetIndex()
    index.register_snippets("foo")
    assert index.snippets_in("") == ()


def test_registered_snippets_covers_all_ids():
    index = SnippetIndex()
    ids = set(index.register_snippets("one.two1.three"))
    ids |= set(index.register_snippets("four"))
    assert set(index.registered_snippets()) == ids


def test_mapping_returns_expressions_with_all_snippets_present():
    mapping = SnippetMapping()
    mapping.add_mapping((1, 2), "both")
    mapping.add_mapping((1,), "first")
    mapping.add_mapping((), "any")
    assert mapping.expressions((1,)) == {"first", "any"}
    assert mapping.expressions((1, 2)) == {"both", "first", "any"}
    assert mapping.expressions((2,)) == {"any"}


def test_mapping_skips_extra_snippets():
    mapping = SnippetMapping()
    mapping.add_mapping((2, 5), "expr")
    assert mapping.expressions((1, 2, 3, 5, 7)) == {"expr"}
    assert mapping.expressions((1, 2, 3, 7)) == set()


def test_mapping_with_index_round_trip():
    index = SnippetIndex()
    mapping = SnippetMapping()
    mapping.add_mapping(index.register_snippets("Chrome/(\\d+)"), "chrome")
    mapping.add_mapping(index.register_snippets("Firefox/(\\d+)"), "firefox")
    found = index.snippets_in("Mozilla/5.0 Chrome/99")
    assert mapping.expressions(found) == {"chrome"}


def test_empty_mapping_has_no_expressions():
    mapping = SnippetMapping()
    assert mapping.expressions((1, 2, 3)) == set()