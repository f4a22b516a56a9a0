import errno
import io

import pytest

from fifotrigger.errors import die, error_str, format_message, warn


def test_error_str_zero():
    assert error_str(0) == "no error"


def test_error_str_known_codes():
    assert error_str(errno.ENOENT) == "file does not exist"
    assert error_str(errno.EPIPE) == "broken pipe"
    assert error_str(errno.EACCES) == "access denied"


def test_error_str_again_takes_precedence():
    assert error_str(errno.EAGAIN) == "temporary failure"


def test_error_str_unknown():
    assert error_str(987654) == "unknown error"


def test_format_message_skips_none():
    assert format_message("a", None, "b") == "ab"


def test_format_message_with_oserror():
    exc = OSError(errno.ENOENT, "gone")
    text = format_message("trigger-pull: fatal: ", "cannot open ", "f", ": ", error=exc)
    assert text == "trigger-pull: fatal: cannot open f: file does not exist"


def test_format_message_with_code_and_string():
    assert format_message("x: ", error=errno.EIO) == "x: input/output error"
    assert format_message("x: ", error="detail") == "x: detail"


def test_format_message_rejects_bad_error():
    with pytest.raises(TypeError):
        format_message("x", error=1.5)


def test_warn_writes_line():
    out = io.StringIO()
    warn("trigger-listen: status: ", "0", "/", "1", stream=out)
    assert out.getvalue() == "trigger-listen: status: 0/1\n"


def test_die_exits_with_status():
    out = io.StringIO()
    with pytest.raises(SystemExit) as info:
        die(111, "fatal: ", "cannot write ", "p", ": ", error=OSError(errno.EPIPE, "x"), stream=out)
    assert info.value.code == 111
    assert out.getvalue() == "fatal: cannot write p: broken pipe\n"