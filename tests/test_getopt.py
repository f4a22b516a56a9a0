import io

from fifotrigger.getopt import OptionParser

LISTEN_OPTS = "1vqQdDUu:g:c:t:i:"


def test_flags_and_arguments():
    parser = OptionParser(
        ["prog", "-1v", "-c", "5", "-t10", "path", "x"], LISTEN_OPTS
    )
    assert list(parser) == [("1", None), ("v", None), ("c", "5"), ("t", "10")]
    assert parser.remaining() == ["path", "x"]


def test_double_dash_is_consumed():
    parser = OptionParser(["p", "-v", "--", "-q"], LISTEN_OPTS)
    assert list(parser) == [("v", None)]
    assert parser.remaining() == ["-q"]


def test_single_dash_is_kept():
    parser = OptionParser(["p", "-", "x"], LISTEN_OPTS)
    assert list(parser) == []
    assert parser.remaining() == ["-", "x"]


def test_stops_at_first_non_option():
    parser = OptionParser(["p", "x", "-v"], LISTEN_OPTS)
    assert list(parser) == []
    assert parser.remaining() == ["x", "-v"]


def test_unknown_option_is_reported():
    stream = io.StringIO()
    parser = OptionParser(["/usr/bin/prog", "-z", "x"], LISTEN_OPTS, stream=stream)
    assert list(parser) == [("?", None)]
    assert parser.problem == "z"
    assert stream.getvalue() == "prog: illegal option -- z\n"


def test_missing_argument_is_reported():
    stream = io.StringIO()
    parser = OptionParser(["p", "-c"], LISTEN_OPTS, stream=stream)
    assert list(parser) == [("?", None)]
    assert parser.problem == "c"
    assert stream.getvalue() == "p: option requires an argument -- c\n"


def test_report_disabled_writes_nothing():
    stream = io.StringIO()
    parser = OptionParser(["p", "-z"], "v", report=False, stream=stream)
    assert list(parser) == [("?", None)]
    assert stream.getvalue() == ""


def test_colon_is_not_an_option():
    parser = OptionParser(["p", "-:"], "c:", report=False)
    assert list(parser) == [("?", None)]
    assert parser.problem == ":"


def test_empty_argv():
    parser = OptionParser([], "v")
    assert list(parser) == []
    assert parser.remaining() == []


def test_argument_may_start_with_dash():
    parser = OptionParser(["p", "-u", "-v", "rest"], LISTEN_OPTS)
    assert list(parser) == [("u", "-v")]
    assert parser.remaining() == ["rest"]