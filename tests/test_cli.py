"""Tests for warren.cli — argument parsing and the routes/run commands."""

from pathlib import Path

import pytest

from warren.cli import _build_parser, main
from warren.cli._resolve import resolve_config

PAGE = '''
def default():
    return "home"
'''

ITEMS = '''
def GET():
    return "items"


def POST():
    return "created"
'''


@pytest.fixture
def routes_dir(tmp_path: Path) -> Path:
    (tmp_path / "index.py").write_text(PAGE, encoding="utf-8")
    (tmp_path / "api").mkdir()
    (tmp_path / "api" / "items.py").write_text(ITEMS, encoding="utf-8")
    return tmp_path


class TestCLIHelp:
    def test_help_exits_zero(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--help"])
        assert exc_info.value.code == 0

    def test_routes_help_exits_zero(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["routes", "--help"])
        assert exc_info.value.code == 0

    def test_run_help_exits_zero(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["run", "--help"])
        assert exc_info.value.code == 0


class TestCLIMissingArgs:
    def test_routes_missing_directory(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["routes"])
        assert exc_info.value.code == 2

    def test_run_missing_directory(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["run"])
        assert exc_info.value.code == 2


class TestCLINoCommand:
    def test_no_command_exits_zero(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 0
        assert "warren" in capsys.readouterr().out


class TestRoutesCommand:
    def test_prints_table(self, routes_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
        main(["routes", str(routes_dir)])
        out = capsys.readouterr().out
        lines = out.splitlines()
        assert lines[0].split() == ["METHOD", "PATH", "HANDLER"]
        assert any(line.split()[:2] == ["GET", "/"] for line in lines[2:])
        assert any(line.split()[:2] == ["POST", "/api/items"] for line in lines[2:])

    def test_empty_directory(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        main(["routes", str(tmp_path)])
        assert "No routes registered." in capsys.readouterr().out

    def test_missing_directory_exits_one(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["routes", str(tmp_path / "nope")])
        assert exc_info.value.code == 1
        assert "Error:" in capsys.readouterr().err

    def test_broken_route_file_exits_one(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        (tmp_path / "index.py").write_text("def default(:\n", encoding="utf-8")
        with pytest.raises(SystemExit) as exc_info:
            main(["routes", str(tmp_path)])
        assert exc_info.value.code == 1
        assert "Error: Cannot import route file" in capsys.readouterr().err


class TestRunCommand:
    def test_starts_dev_server(self, routes_dir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        calls: list[tuple] = []

        def fake_run(app, host, port, **kwargs):
            calls.append((app, host, port, kwargs))

        monkeypatch.setattr("warren.server.dev.run_dev_server", fake_run)
        main(["run", str(routes_dir), "--port", "9001", "--no-reload"])

        assert len(calls) == 1
        app, host, port, kwargs = calls[0]
        assert callable(app)
        assert host == "127.0.0.1"
        assert port == 9001
        assert kwargs["reload"] is False
        assert kwargs["reload_dirs"] == (str(routes_dir.resolve()),)

    def test_run_debug_reaches_router(
        self, routes_dir: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        apps: list[object] = []
        monkeypatch.setattr(
            "warren.server.dev.run_dev_server", lambda app, host, port, **kwargs: apps.append(app)
        )
        main(["run", str(routes_dir), "--debug", "--host", "0.0.0.0"])
        assert apps[0]._debug is True


class TestResolveConfig:
    def test_run_arguments_become_config(self, routes_dir: Path) -> None:
        args = _build_parser().parse_args(
            ["run", str(routes_dir), "--host", "0.0.0.0", "--port", "9002", "--no-reload"]
        )
        config = resolve_config(args)
        assert (config.host, config.port, config.reload) == ("0.0.0.0", 9002, False)
        assert config.log_level == "info"

    def test_routes_command_keeps_server_defaults(self, routes_dir: Path) -> None:
        config = resolve_config(_build_parser().parse_args(["routes", str(routes_dir)]))
        assert config.port == 8000
        assert config.reload is True
        assert config.log_level == "warning"
