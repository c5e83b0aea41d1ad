"""End-to-end tests for the public curly API."""

from concurrent.futures import ThreadPoolExecutor

import pytest

import curly
from curly import (
    EmitLiteral,
    Options,
    Program,
    UnknownMacroError,
    UnmatchedBraceError,
    compile_children,
    parse_path,
)


def test_render_each():
    data = {"pages": [{"title": "A"}, {"title": "B"}]}
    assert curly.render("{each pages {. title} }", data) == "A B "


def test_render_has():
    template = "{has title <h1>{. title}</h1>}"
    assert curly.render(template, {"title": "X"}) == "<h1>X</h1>"
    assert curly.render(template, {}) == ""


def test_render_list_page():
    template = """<ul>
{each pages  <li>{. title}</li>
}</ul>"""
    data = {"pages": [{"title": "Home"}, {"title": "About"}]}
    assert curly.render(template, data) == (
        "<ul>\n<li>Home</li>\n<li>About</li>\n</ul>"
    )


def test_render_without_data():
    assert curly.render("static {. missing}") == "static "


def test_compile_returns_reusable_program():
    program = curly.compile("Hello {. name}!")
    assert isinstance(program, Program)
    assert program({"name": "Ada"}) == "Hello Ada!"
    assert program({"name": "Bob"}) == "Hello Bob!"


def test_unknown_macro():
    with pytest.raises(UnknownMacroError) as exc_info:
        curly.compile("{bogus x}")
    assert exc_info.value.name == "bogus"


@pytest.mark.parametrize("source", ["{a", "a}"])
def test_unmatched_brace(source):
    with pytest.raises(UnmatchedBraceError):
        curly.render(source, {})


def test_errors_share_base():
    with pytest.raises(curly.CurlyError):
        curly.compile("{nope}")


def test_user_macro_with_helpers():
    """User macros get the same helpers the built-ins use."""

    def bold(group, recurse):
        return (EmitLiteral("<b>"), *compile_children(group, recurse), EmitLiteral("</b>"))

    def upper_path(group, recurse):
        return EmitLiteral(parse_path(group).upper())

    template = "{bold {. name}} {upper_path a.b}"
    macros = {"bold": bold, "upper_path": upper_path}
    assert curly.render(template, {"name": "Ada"}, macros) == "<b>Ada</b> A.B"


def test_user_macro_overrides_builtin():
    macros = {"has": lambda group, recurse: "overridden"}
    assert curly.render("{has title x}", {"title": "X"}, macros) == "overridden"


def test_render_with_functions():
    def count(path, data):
        return str(len(data["items"]))

    assert curly.render("{fn count} items", {"items": [1, 2, 3]}, functions={"count": count}) == (
        "3 items"
    )


def test_render_with_options():
    options = Options(
        macros={"hi": lambda group, recurse: "hi"},
        functions={"who": lambda path, data: data["who"]},
    )
    assert curly.render("{hi} {fn who}", {"who": "there"}, options=options) == "hi there"


def test_options_from_mapping():
    options = {"functions": {"x": lambda path, data: "X"}}
    assert curly.render("{fn x}", {}, options=options) == "X"


def test_options_merged_layers_in_front():
    base = Options(functions={"x": lambda path, data: "base"})
    merged = base.merged(functions={"x": lambda path, data: "front"})
    assert curly.render("{fn x}", {}, options=merged) == "front"
    assert curly.render("{fn x}", {}, options=base) == "base"


def test_options_reject_non_callables():
    with pytest.raises(ValueError):
        Options(functions={"x": "not callable"})


def test_concurrent_renders_do_not_share_path_state():
    program = curly.compile("{each items {-> inner {path}:{. v}};}")

    def make(prefix, count):
        return {"items": [{"inner": {"v": f"{prefix}{i}"}} for i in range(count)]}

    expected_a = "".join(f"items.{i}.inner:a{i};" for i in range(200))
    expected_b = "".join(f"items.{i}.inner:b{i};" for i in range(50))

    with ThreadPoolExecutor(max_workers=8) as pool:
        futures = [
            pool.submit(program, make("a", 200) if n % 2 == 0 else make("b", 50))
            for n in range(40)
        ]
        results = [f.result() for f in futures]

    for n, result in enumerate(results):
        assert result == (expected_a if n % 2 == 0 else expected_b)


def test_parse_round_trip_from_package():
    source = "<p>{has x {. x}}</p>"
    assert curly.parse(source).inner_source() == source
