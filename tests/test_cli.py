"""Tests for the crankdash command-line interface."""

from __future__ import annotations

import os

import pytest

from crankdash import cli
from crankdash.tui.registry import JobRegistry
from crankdash.tui.views import run_dashboard


def _session_log(log_root):
    logs = list((log_root / "sessions").glob("*.log"))
    assert len(logs) == 1
    return logs[0].read_text(encoding="utf-8")


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------


def test_parser_requires_command():
    with pytest.raises(SystemExit):
        cli.build_parser().parse_args([])


def test_parser_run_defaults():
    args = cli.build_parser().parse_args(["run"])
    assert args.command == "run"
    assert args.plain is False
    assert args.ticks is None
    assert args.no_log is False


def test_ticks_without_plain_is_rejected():
    with pytest.raises(SystemExit) as exc:
        cli.main(["run", "--ticks", "2"])
    assert exc.value.code == 2


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def test_jobs_command_lists_seed(capsys):
    with pytest.raises(SystemExit) as exc:
        cli.main(["jobs"])

    assert exc.value.code == 0
    assert capsys.readouterr().out.splitlines() == [
        "… 1: Job A - Running",
        "✔ 2: Job B - Completed",
    ]


def test_run_launches_curses_dashboard(monkeypatch, isolated_log_root):
    calls = []
    monkeypatch.setattr(cli.curses, "wrapper",
                        lambda func, **kwargs: calls.append((func, kwargs)))

    with pytest.raises(SystemExit) as exc:
        cli.main(["run"])

    assert exc.value.code == 0
    assert calls[0][0] is run_dashboard
    assert "Session started mode=tui" in _session_log(isolated_log_root)


def test_run_plain_dispatch(monkeypatch, isolated_log_root):
    calls = []
    monkeypatch.setattr(cli, "run_plain", lambda **kwargs: calls.append(kwargs))

    with pytest.raises(SystemExit) as exc:
        cli.main(["run", "--plain", "--ticks", "3"])

    assert exc.value.code == 0
    assert calls[0]["ticks"] == 3
    log = _session_log(isolated_log_root)
    assert "Session started mode=plain" in log
    assert "Session finished" in log


def test_ctrl_c_exits_cleanly(monkeypatch, isolated_log_root):
    def interrupted(func, **kwargs):
        raise KeyboardInterrupt

    monkeypatch.setattr(cli.curses, "wrapper", interrupted)

    with pytest.raises(SystemExit) as exc:
        cli.main(["run"])

    assert exc.value.code == 0
    assert "WARN Interrupted (Ctrl+C)" in _session_log(isolated_log_root)


def test_terminal_failure_propagates(monkeypatch, isolated_log_root):
    def broken(func, **kwargs):
        raise cli.curses.error("setupterm: could not find terminal")

    monkeypatch.setattr(cli.curses, "wrapper", broken)

    with pytest.raises(cli.curses.error):
        cli.main(["run"])
    assert "ERROR Terminal failure" in _session_log(isolated_log_root)


def test_no_log_writes_no_session_file(monkeypatch, isolated_log_root):
    monkeypatch.setattr(cli.curses, "wrapper", lambda func, **kwargs: None)

    with pytest.raises(SystemExit):
        cli.main(["run", "--no-log"])
    assert not isolated_log_root.exists()


def test_run_plain_prints_updates(capsys, recording_logger):
    printed = cli.run_plain(ticks=2, logger=recording_logger, tick_interval=0.01)

    out = capsys.readouterr().out
    assert printed == 2
    assert "[crankdash] Initial jobs" in out
    assert "[crankdash] Update 1" in out
    assert "[crankdash] Update 2" in out
    update_1 = out.split("[crankdash] Update 1")[1].split("[crankdash] Update 2")[0]
    assert "✔ 1: Job A - Completed" in update_1
    assert "… 2: Job B - Running" in update_1


# ---------------------------------------------------------------------------
# .env loading
# ---------------------------------------------------------------------------


def test_load_dotenv_sets_missing_values(tmp_path, monkeypatch):
    env_file = tmp_path / ".env"
    env_file.write_text(
        "# comment\n"
        "\n"
        "CRANKDASH_TEST_NEW=from-file\n"
        "CRANKDASH_TEST_EXISTING=from-file\n"
        "not a pair\n"
        "CRANKDASH_TEST_URL=a=b\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("CRANKDASH_TEST_EXISTING", "from-env")
    monkeypatch.delenv("CRANKDASH_TEST_NEW", raising=False)
    monkeypatch.delenv("CRANKDASH_TEST_URL", raising=False)
    monkeypatch.chdir(tmp_path)

    cli.load_dotenv()

    assert os.environ["CRANKDASH_TEST_NEW"] == "from-file"
    assert os.environ["CRANKDASH_TEST_EXISTING"] == "from-env"
    assert os.environ["CRANKDASH_TEST_URL"] == "a=b"


def test_load_dotenv_missing_file_is_ignored(tmp_path):
    cli.load_dotenv(tmp_path / "missing.env")


@pytest.mark.parametrize("ticks", ["0", "-1"])
def test_ticks_below_one_is_rejected(ticks, capsys):
    with pytest.raises(SystemExit) as exc:
        cli.main(["run", "--plain", "--ticks", ticks])
    assert exc.value.code == 2
    assert "--ticks must be at least 1" in capsys.readouterr().err


def test_list_jobs_with_empty_registry_prints_nothing(capsys):
    cli.list_jobs(JobRegistry())
    assert capsys.readouterr().out == ""


def test_run_plain_with_empty_registry_prints_no_jobs(capsys):
    printed = cli.run_plain(ticks=1, registry=JobRegistry(), tick_interval=0.01)

    out = capsys.readouterr().out
    assert printed == 1
    assert "Job" not in out
    assert "[crankdash] Update 1" in out


@pytest.mark.parametrize("line, expected", [
    ("KEY=value", ("KEY", "value")),
    ("  KEY = value  ", ("KEY", "value")),
    ("export KEY=value", ("KEY", "value")),
    ('KEY="quoted value"', ("KEY", "quoted value")),
    ("KEY='single'", ("KEY", "single")),
    ("KEY=a=b", ("KEY", "a=b")),
    ("KEY=", ("KEY", "")),
    ("# KEY=value", None),
    ("", None),
    ("no equals sign", None),
    ("=value", None),
])
def test_parse_env_line(line, expected):
    assert cli.parse_env_line(line) == expected


def test_load_dotenv_reports_applied_keys(tmp_path, monkeypatch):
    env_file = tmp_path / "custom.env"
    env_file.write_text("CRANKDASH_TEST_A=1\nCRANKDASH_TEST_B=2\n", encoding="utf-8")
    monkeypatch.setenv("CRANKDASH_TEST_B", "already")
    monkeypatch.delenv("CRANKDASH_TEST_A", raising=False)

    assert cli.load_dotenv(env_file) == ["CRANKDASH_TEST_A"]
    assert os.environ["CRANKDASH_TEST_B"] == "already"
