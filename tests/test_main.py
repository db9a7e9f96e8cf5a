"""Tests for the command line entry point."""

import json
import logging
from unittest.mock import patch

import pytest

import main
from appsnap.errors import SyncError
from appsnap.sync import SyncResult


@pytest.fixture(autouse=True)
def quiet_logging(monkeypatch):
    """Keep tests from writing log files into the repository."""
    monkeypatch.setattr(main, "configure_logging", lambda level, base_dir: None)


def test_parse_args_defaults() -> None:
    args = main.parse_args([])

    assert args.demo is False
    assert args.output is None
    assert args.workers is None


def test_demo_snapshot_to_file(tmp_path) -> None:
    out = tmp_path / "apps.json"

    code = main.main(["--demo", "--output", str(out), "--settings", str(tmp_path / "s.json")])

    data = json.loads(out.read_text(encoding="utf-8"))
    assert code == 0
    assert data["ok"] is True
    assert [a["appName"] for a in data["apps"]] == ["Instagram", "Spotify", "WhatsApp", "Twitter"]
    assert all(a["appIcon"].startswith("data:image/png;base64,") for a in data["apps"])


def test_demo_snapshot_to_stdout(tmp_path, capsys) -> None:
    code = main.main(["--demo", "--workers", "2", "--settings", str(tmp_path / "s.json")])

    assert code == 0
    assert json.loads(capsys.readouterr().out)["ok"] is True


def test_sync_failure_exit_code(tmp_path) -> None:
    with patch.object(main, "sync_with_backend", side_effect=SyncError("down")):
        code = main.main([
            "--demo", "--output", str(tmp_path / "o.json"),
            "--settings", str(tmp_path / "s.json"),
            "--sync", "http://localhost:9",
        ])

    assert code == 2


def test_sync_success(tmp_path) -> None:
    with patch.object(main, "sync_with_backend", return_value=SyncResult(4, 0)) as sync:
        code = main.main([
            "--demo", "--output", str(tmp_path / "o.json"),
            "--settings", str(tmp_path / "s.json"),
            "--sync", "http://localhost:9", "--token", "abc",
        ])

    assert code == 0
    assert sync.call_args.kwargs["token"] == "abc"
    assert len(sync.call_args.args[0]) == 4


def test_first_run_writes_default_settings(tmp_path) -> None:
    settings = tmp_path / "s.json"

    code = main.main(["--demo", "--output", str(tmp_path / "o.json"), "--settings", str(settings)])

    assert code == 0
    data = json.loads(settings.read_text(encoding="utf-8"))
    assert data["max_workers"] == 1
    assert data["sync_url"] == ""


def test_existing_settings_are_left_alone(tmp_path) -> None:
    settings = tmp_path / "s.json"
    settings.write_text('{"max_workers": 3}', encoding="utf-8")

    main.main(["--demo", "--output", str(tmp_path / "o.json"), "--settings", str(settings)])

    assert json.loads(settings.read_text(encoding="utf-8")) == {"max_workers": 3}


def test_sync_logs_new_packages(tmp_path, caplog) -> None:
    result = SyncResult(2, 0, new_packages=["com.instagram.android", "com.spotify.music"])
    with patch.object(main, "sync_with_backend", return_value=result):
        with caplog.at_level(logging.INFO, logger="appsnap"):
            code = main.main([
                "--demo", "--output", str(tmp_path / "o.json"),
                "--settings", str(tmp_path / "s.json"),
                "--sync", "http://localhost:9",
            ])

    assert code == 0
    assert "New on backend: com.instagram.android, com.spotify.music" in caplog.text


def test_non_numeric_settings_do_not_crash(tmp_path) -> None:
    """Bad values in the settings file fall back to defaults instead of failing the run."""
    settings = tmp_path / "s.json"
    settings.write_text('{"max_workers": "lots", "enumeration_timeout": "soon"}', encoding="utf-8")
    out = tmp_path / "o.json"

    code = main.main(["--demo", "--output", str(out), "--settings", str(settings)])

    assert code == 0
    assert json.loads(out.read_text(encoding="utf-8"))["ok"] is True
