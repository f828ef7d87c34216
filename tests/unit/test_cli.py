"""Unit tests for the command-line interface."""

from __future__ import annotations

import pytest

from gmail_fixture_builder.cli import main
from gmail_fixture_builder.config import get_settings


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv("FIXTURE_BUILDER_SOURCE_ROOT", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_missing_source_root_exits_non_zero(tmp_path) -> None:
    assert main(["--output", str(tmp_path / "out")]) == 1


def test_nonexistent_source_root_exits_non_zero(tmp_path) -> None:
    assert main(["--source-root", str(tmp_path / "missing"), "--output", str(tmp_path / "out")]) == 1


def test_negative_limit_exits_non_zero(maildir, tmp_path) -> None:
    assert main(["--source-root", str(maildir()), "--limit", "-5"]) == 1


def test_unknown_argument_exits_with_usage_error() -> None:
    with pytest.raises(SystemExit) as exc_info:
        main(["--no-such-flag"])

    assert exc_info.value.code == 2


def test_successful_run(maildir, tmp_path, capsys) -> None:
    maildir("inbox", "1.", message_id="<1>", sender="alice@enron.com", subject="Hello")
    root = maildir("inbox", "2.", message_id="<2>", date="whenever", subject="No date")
    out = tmp_path / "out"

    code = main(
        [
            "--source-root",
            str(root),
            "--output",
            str(out),
            "--primary-email",
            "me@example.com",
            "--target-start",
            "2022-01-01T00:00:00+00:00",
            "--strict-dates",
        ]
    )

    assert code == 0
    assert (out / "gmail_messages.json").exists()
    assert (out / "transform_stats.json").exists()
    assert "Transformed 1/1 emails" in capsys.readouterr().out
