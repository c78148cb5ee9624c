import pytest

from cityscript.errors import ScriptSyntaxError
from cityscript.parser import (
    parse_arguments,
    parse_value,
    split_arguments,
    split_call,
    strip_comment,
)


def test_strip_comment_drops_trailing_comment():
    assert strip_comment("build_park(1, 2)  # near the river") == "build_park(1, 2)"
    assert strip_comment("# whole line") == ""
    assert strip_comment("   ") == ""


def test_strip_comment_keeps_hash_inside_quotes():
    line = "build_shop(3, 4, name='#1 Shop')  # flagship"
    assert strip_comment(line) == "build_shop(3, 4, name='#1 Shop')"
    assert strip_comment('build_shop(name="a#b")') == 'build_shop(name="a#b")'


def test_split_call_recovers_head_and_argument_text():
    raw = split_call("build_house(5, 5, 2, 'Home')", 3)
    assert raw.head == "build_house"
    assert raw.args_text == "5, 5, 2, 'Home'"
    assert raw.source_line == 3


def test_split_call_discards_assignment_prefix():
    raw = split_call("x = op(1, 2)", 1)
    assert raw.head == "op"
    assert raw.args_text == "1, 2"


def test_split_call_tolerates_whitespace_before_parenthesis_and_after_call():
    raw = split_call("clear_all ()   ", 1)
    assert raw.head == "clear_all"
    assert raw.args_text == ""


def test_split_call_takes_body_up_to_last_parenthesis():
    raw = split_call("op((1, 2), [3])", 1)
    assert raw.args_text == "(1, 2), [3]"


@pytest.mark.parametrize(
    "line",
    ["build_house", "build_house(1) extra", "1house(2)", "x == op(1)", "(1, 2)"],
)
def test_split_call_rejects_lines_without_call_shape(line):
    with pytest.raises(ScriptSyntaxError, match="Cannot parse line"):
        split_call(line, 1)


def test_split_arguments_respects_brackets_and_quotes():
    assert split_arguments("a, (b, c), 'd,e'") == ["a", "(b, c)", "'d,e'"]
    assert split_arguments('[1, 2], "x, y", z') == ["[1, 2]", '"x, y"', "z"]


def test_split_arguments_on_empty_input_yields_no_tokens():
    assert split_arguments("") == []
    assert split_arguments("   ") == []


def test_split_arguments_is_best_effort_on_unbalanced_input():
    assert split_arguments("a, (b, c") == ["a", "(b, c"]
    assert split_arguments("'a, b") == ["'a, b"]
    assert split_arguments("a), b, c") == ["a), b, c"]


def test_split_arguments_keeps_inner_empty_tokens_and_drops_trailing_one():
    assert split_arguments("1,,2") == ["1", "", "2"]
    assert split_arguments("1, 2,") == ["1", "2"]


def test_parse_value_literals():
    assert parse_value("None") is None
    assert parse_value("null") is None
    assert parse_value("True") is True
    assert parse_value("False") is False


def test_parse_value_quoted_number_stays_string():
    assert parse_value("'5'") == "5"
    assert parse_value('"Home"') == "Home"
    assert parse_value("''") == ""


def test_parse_value_numbers():
    assert parse_value("5") == 5
    assert isinstance(parse_value("5"), int)
    assert parse_value("-3") == -3
    assert parse_value("5.5e2") == 550
    assert isinstance(parse_value("5.5e2"), float)
    assert parse_value(".5") == 0.5
    assert parse_value("2.") == 2.0


def test_parse_value_falls_back_to_raw_token():
    assert parse_value("river") == "river"
    assert parse_value("'unterminated") == "'unterminated"
    assert parse_value("'") == "'"
    assert parse_value("1_000") == "1_000"
    assert parse_value("inf") == "inf"


def test_parse_arguments_splits_positional_and_keyword():
    parsed = parse_arguments("1, 2, name='Town Hall', floors=3")
    assert parsed.positional == [1, 2]
    assert parsed.keyword == {"name": "Town Hall", "floors": 3}


def test_parse_arguments_keyword_detection_ignores_quoted_equals():
    parsed = parse_arguments("'a=b', name='c=d'")
    assert parsed.positional == ["a=b"]
    assert parsed.keyword == {"name": "c=d"}


def test_parse_arguments_last_duplicate_keyword_wins():
    parsed = parse_arguments("name='a', name='b'")
    assert parsed.keyword == {"name": "b"}


def test_parse_value_reads_oversized_integers_as_float():
    assert parse_value("9" * 5000) == float("inf")
    assert parse_value("-" + "1" * 5000) == float("-inf")
