# tests/test_console_connector.py

from __future__ import annotations

from task_tracker.connectors.console_connector import run_console_loop


def _scripted(lines: list[str]):
    it = iter(lines)

    def read_line(prompt: str) -> str:
        try:
            return next(it)
        except StopIteration:
            raise EOFError from None

    return read_line


def test_console_runs_commands_until_exit(state, capsys) -> None:
    run_console_loop(state, read_line=_scripted(["/add hello #x", "", "/list", "/exit", "/add never"]))

    out = capsys.readouterr().out
    assert "Created task #1." in out
    assert "#1 hello [tags: x]" in out
    assert state.task_store.count_tasks() == 1


def test_console_stops_on_eof_and_reports_non_commands(state, capsys) -> None:
    run_console_loop(state, read_line=_scripted(["hello there"]))
    assert "Not a command" in capsys.readouterr().out


def test_console_survives_store_failure(state, capsys, monkeypatch) -> None:
    def boom() -> list:
        raise RuntimeError("disk on fire")

    monkeypatch.setattr(state.task_store, "get_all_tasks", boom)
    run_console_loop(state, read_line=_scripted(["/list", "/add still works"]))

    out = capsys.readouterr().out
    assert "Internal error while handling a command." in out
    assert "Created task #1." in out
