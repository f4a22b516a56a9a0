import os
import sys

import pytest

from fifotrigger.wait import TIMED_OUT, USAGE, WaitConfig, main, parse_args, usage


def test_parse_defaults():
    cfg = parse_args(["trigger-wait", "f", "prog", "a"])
    assert cfg == WaitConfig(path="f", program=["prog", "a"])
    assert cfg.wait is True
    assert cfg.delete is True


def test_parse_options():
    cfg = parse_args(["trigger-wait", "-W", "-D", "-t", "5", "f", "prog"])
    assert cfg.wait is False
    assert cfg.delete is False
    assert cfg.timeout == 5
    assert cfg.program == ["prog"]


def test_no_program_disables_waiting():
    cfg = parse_args(["trigger-wait", "-w", "f"])
    assert cfg.program == []
    assert cfg.wait is False


def test_usage_without_path(capsys):
    with pytest.raises(SystemExit) as info:
        parse_args(["trigger-wait"])
    assert info.value.code == 100
    assert capsys.readouterr().err == USAGE + "\n"


def test_unknown_option(capsys):
    with pytest.raises(SystemExit) as info:
        parse_args(["trigger-wait", "-z", "f"])
    assert info.value.code == 100
    err = capsys.readouterr().err
    assert "illegal option -- z" in err
    assert USAGE in err


def test_usage_function(capsys):
    with pytest.raises(SystemExit) as info:
        usage()
    assert info.value.code == 100
    assert capsys.readouterr().err == USAGE + "\n"


def test_timeout_returns_99(tmp_path):
    fifo = tmp_path / "fifo"
    with pytest.raises(SystemExit) as info:
        main(["trigger-wait", "-t", "0", str(fifo)])
    assert info.value.code == TIMED_OUT == 99
    assert fifo.is_fifo()


def test_timeout_with_program_reaps_child(tmp_path):
    fifo = tmp_path / "fifo"
    with pytest.raises(SystemExit) as info:
        main(["trigger-wait", "-t", "0", str(fifo), sys.executable, "-c", "pass"])
    assert info.value.code == 99


def test_pending_byte_triggers(tmp_path):
    fifo = tmp_path / "fifo"
    os.mkfifo(fifo)
    rd = os.open(fifo, os.O_RDONLY | os.O_NONBLOCK)
    wr = os.open(fifo, os.O_WRONLY | os.O_NONBLOCK)
    try:
        os.write(wr, b"\0")
        with pytest.raises(SystemExit) as info:
            main(["trigger-wait", "-D", "-t", "5", str(fifo)])
        assert info.value.code == 0
        with pytest.raises(BlockingIOError):
            os.read(rd, 1)
    finally:
        os.close(wr)
        os.close(rd)


def test_unreadable_path_is_fatal(tmp_path, capsys):
    path = tmp_path / "missing" / "fifo"
    with pytest.raises(SystemExit) as info:
        main(["trigger-wait", "-t", "0", str(path)])
    assert info.value.code == 111
    assert capsys.readouterr().err == (
        f"trigger-wait: fatal: cannot read {path}: file does not exist\n"
    )