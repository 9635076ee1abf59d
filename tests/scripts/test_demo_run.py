from __future__ import annotations

import pytest

from scripts import demo_run


@pytest.fixture(autouse=True)
def quiet_settings(monkeypatch):
    monkeypatch.setenv("RUNNER_LOG_SINK", "null")


@pytest.mark.parametrize(
    "argv, expected, code",
    [
        (["--title", "Hello"], "renamed to 'Hello'", 0),
        (["--title", ""], "invalid params:", 1),
        (["--missing"], "post not found", 1),
        (["--user", "guest"], "denied: Only admins may rename", 1),
        (["--locked"], "post is busy", 1),
        (["--boom"], "retry later: database unavailable", 1),
    ],
)
def test_demo_dispatches_expected_handler(argv, expected, code, capsys) -> None:
    assert demo_run.main(argv) == code
    out = capsys.readouterr().out
    assert expected in out
