# mod_core/test_widget_parser.py
from modtransformer.backend.mod_core.widget_parser import (
    Property,
    ScanPhase,
    Widget,
    _WidgetScanner,
    get_bracket_state,
    parse_widget,
)


def test_parses_name_and_ordered_properties():
    widget = parse_widget("Name(a: 1, b: 2)")

    assert widget.name == "Name"
    assert widget.properties == [Property("a", "1"), Property("b", "2")]
    assert widget.child is None
    assert widget.builder is None
    assert widget.key is None


def test_child_is_split_out_with_trailing_terminator():
    widget = parse_widget("Name(a: 1, child: Inner(x: 2))")

    assert widget.properties == [("a", "1")]
    assert widget.has_child()
    assert widget.get_child() == "Inner(x: 2),"


def test_child_value_is_parseable_on_its_own():
    inner = parse_widget(parse_widget("Name(a: 1, child: Inner(x: 2))").get_child())

    assert inner.name == "Inner"
    assert inner.properties == [("x", "2")]
    assert not inner.has_child()


def test_values_keep_nested_calls_and_commas():
    widget = parse_widget("Padding(padding: EdgeInsets.fromLTRB(1, 2, 3, 4), child: Text('hi'))")

    assert widget.properties == [("padding", "EdgeInsets.fromLTRB(1, 2, 3, 4)")]
    assert widget.get_child() == "Text('hi'),"


def test_builder_is_captured_but_kept_out_of_properties():
    widget = parse_widget("ListView(builder: (c, i) => Text(i), itemCount: 3)")

    assert widget.builder == Property("builder", "(c, i) => Text(i)")
    assert widget.properties == [("itemCount", "3")]
    assert widget.child is None


def test_newlines_are_ignored():
    assert parse_widget("Name(a:\n1)").to_dict() == parse_widget("Name(a:1)").to_dict()


def test_multiline_widget():
    raw = """
    Container(
      width: 10,
      color: Colors.red,
    )
    """
    widget = parse_widget(raw)

    assert widget.name == "Container"
    assert widget.properties == [("width", "10"), ("color", "Colors.red")]


def test_stray_separators_before_property_name_are_skipped():
    widget = parse_widget("Name(,) a: 1,, b: 2)")

    assert widget.properties == [("a", "1"), ("b", "2")]


def test_empty_input_gives_empty_record():
    widget = parse_widget("")

    assert widget.name == ""
    assert widget.properties == []
    assert widget.child is None


def test_missing_open_paren_leaves_name_empty():
    widget = parse_widget("Foo")

    assert widget.name == ""
    assert widget.properties == []


def test_unterminated_value_is_dropped():
    widget = parse_widget("Foo(a: 1, b: bar(")

    assert widget.name == "Foo"
    assert widget.properties == [("a", "1")]


def test_negative_balance_discards_pending_property():
    scanner = _WidgetScanner()
    for char in "Foo(a: x":
        scanner.feed(char)
    scanner.term_text += ")"
    scanner.feed(",")

    assert scanner.phase is ScanPhase.PROPERTY_NAME
    assert scanner.build().properties == []


def test_bracket_state():
    assert get_bracket_state("(a(b)c)") == 0
    assert get_bracket_state("") == 0
    assert get_bracket_state("((") == 2
    assert get_bracket_state("x))") == -2


def test_get_modifier():
    widget = Widget("Padding", [Property("padding", "8"), Property("top", "true")])

    assert widget.get_modifier() == "PaddingModifier( padding: 8,,top: true, )"
