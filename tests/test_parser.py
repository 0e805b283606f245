import pytest

from csvcodec import MalformedInputError, MalformedRowError, ParseConfig, parse


def test_blank_lines_removed():
    assert parse("a,b\n\n c,d \n") == [["a", "b"], [" c", "d"]]


def test_blank_lines_removed_skip_initial_space():
    config = ParseConfig(skip_initial_space=True)
    assert parse("a,b\n\n c,d \n", config=config) == [["a", "b"], ["c", "d"]]


def test_empty_input():
    assert parse("") == []
    assert parse("   \n  \n") == []


def test_trailing_separator_normalization():
    config = ParseConfig(skip_blank_last=True)
    assert parse("a,b,\nc,d,\n", config=config) == [["a", "b", ""], ["c", "d", ""]]


def test_trailing_separator_without_skip():
    assert parse("a,b,\nc,d,\n") == [["a", "b", ""], ["c", "d", ""]]


def test_all_or_nothing_stripping():
    config = ParseConfig(skip_blank_last=True)
    assert parse("a,b,\nc,d\n", config=config) == [["a", "b", ""], ["c", "d"]]


def test_skip_blank_last_collapses_one_blank_field():
    text = "a,b,,\nc,d,,\n"
    assert parse(text) == [["a", "b", "", ""], ["c", "d", "", ""]]
    assert parse(text, config=ParseConfig(skip_blank_last=True)) == [["a", "b", ""], ["c", "d", ""]]


def test_separator_only_line():
    assert parse(",\nx") == [["", ""], ["x"]]


def test_ragged_rows_allowed():
    assert parse("a\nb,c,d\ne,f") == [["a"], ["b", "c", "d"], ["e", "f"]]


def test_custom_dialect():
    config = ParseConfig(separator="\t", quote="'", escape="\\")
    assert parse("'a\\'b'\tc\n\nd\te", config=config) == [["a'b", "c"], ["d", "e"]]


def test_multiline_quoted_field():
    assert parse('a,"x\ny",b\nc') == [["a", "x\ny", "b"], ["c"]]


def test_error_reports_original_line():
    with pytest.raises(MalformedRowError) as excinfo:
        parse('x\n\n\na,"bc', "data.csv")

    err = excinfo.value
    assert err.source == "data.csv"
    assert err.line == 4
    assert err.row == 1
    assert isinstance(err, MalformedInputError)
    assert isinstance(err, ValueError)


def test_parse_returns_fresh_lists():
    first = parse("a,b")
    first[0].append("z")
    assert parse("a,b") == [["a", "b"]]


def test_config_validation():
    with pytest.raises(ValueError):
        ParseConfig(separator=",,")
    with pytest.raises(ValueError):
        ParseConfig(separator='"')
    with pytest.raises(ValueError):
        ParseConfig(separator="\n", quote="'")


def test_disabled_escape_spellings():
    assert ParseConfig(escape="").escape is None
    assert ParseConfig(escape="\0").escape is None
    assert ParseConfig(escape="\\").escape == "\\"


def test_tab_separated_trailing_blank_field():
    config = ParseConfig(separator="\t")
    assert parse("a\tb\t\nc\td\t\n", config=config) == [["a", "b", ""], ["c", "d", ""]]


def test_tab_separated_skip_blank_last():
    config = ParseConfig(separator="\t", skip_blank_last=True)
    assert parse("a\tb\t\nc\td\t\n", config=config) == [["a", "b", ""], ["c", "d", ""]]
    assert parse("a\tb\t\t\nc\td\t\t\n", config=config) == [["a", "b", ""], ["c", "d", ""]]


def test_space_separated_trailing_blank_field():
    config = ParseConfig(separator=" ")
    assert parse("a b \nc d ", config=config) == [["a", "b", ""], ["c", "d", ""]]
