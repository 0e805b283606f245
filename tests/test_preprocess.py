from csvcodec.preprocess import Preprocessed, preprocess, trim_trailing


def test_blank_lines_dropped():
    result = preprocess("a,b\n\n  \nc,d\n", ",")
    assert result.text == "a,b\nc,d"
    assert result.line_numbers == (1, 4)
    assert result.ending_lines == frozenset()
    assert result.stripped is False


def test_trailing_whitespace_trimmed():
    assert preprocess("a,b\nc,d  \n\n\t\n", ",").text == "a,b\nc,d"


def test_empty_input():
    assert preprocess("", ",").is_empty
    assert preprocess("   \n  \n", ",").is_empty
    assert preprocess("   \n  \n", ",") == Preprocessed()


def test_endings_recorded_without_skip():
    result = preprocess("a,b,\nc,d", ",")
    assert result.text == "a,b,\nc,d"
    assert result.ending_lines == frozenset({0})


def test_skip_blank_last_strips_every_line():
    result = preprocess("a,b,\n\nc,d,\n", ",", skip_blank_last=True)
    assert result.text == "a,b\nc,d"
    assert result.ending_lines == frozenset({0, 1})
    assert result.stripped is True


def test_skip_blank_last_is_all_or_nothing():
    result = preprocess("a,b,\nc,d\n", ",", skip_blank_last=True)
    assert result.text == "a,b,\nc,d"
    assert result.ending_lines == frozenset({0})
    assert result.stripped is False


def test_skip_blank_last_strips_only_one_separator():
    result = preprocess("a;;\nb;", ";", skip_blank_last=True)
    assert result.text == "a;\nb"


def test_cleaning_is_idempotent():
    once = preprocess("x,y\n\n  z , w  \n\n", ",")
    twice = preprocess(once.text, ",")
    assert twice.text == once.text
    assert twice.ending_lines == once.ending_lines


def test_whitespace_separator_survives_trimming():
    result = preprocess("a\tb\t\nc\td\t \n\n", "\t", skip_blank_last=True)
    assert result.text == "a\tb\nc\td"
    assert result.ending_lines == frozenset({0, 1})
    assert result.stripped is True


def test_trim_trailing():
    assert trim_trailing("a,b, \t\n", ",") == "a,b,"
    assert trim_trailing("a\tb\t \n", "\t") == "a\tb\t"
    assert trim_trailing("a b  ", " ") == "a b  "
