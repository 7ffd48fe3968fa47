from __future__ import annotations

import runpy
from pathlib import Path

import statsboard_app.__main__ as bot_main


def test_main_defaults_to_run(monkeypatch) -> None:
    calls: list[list[str]] = []
    monkeypatch.setattr(bot_main, "_cli_main", lambda argv=None: calls.append(list(argv or [])) or 0)

    rc = bot_main.main([])
    assert rc == 0
    assert calls == [["run"]]


def test_main_passes_through_args(monkeypatch) -> None:
    calls: list[list[str]] = []
    monkeypatch.setattr(bot_main, "_cli_main", lambda argv=None: calls.append(list(argv or [])) or 0)

    rc = bot_main.main(["doctor", "--export"])
    assert rc == 0
    assert calls == [["doctor", "--export"]]


def test_main_module_runpath_without_package_context() -> None:
    main_path = (
        Path(__file__).resolve().parents[1]
        / "apps"
        / "bot"
        / "statsboard_app"
        / "__main__.py"
    )
    result = runpy.run_path(str(main_path))
    assert "main" in result


def test_config_error_exits_with_2(tmp_path, capsys) -> None:
    from statsboard_app.cli import main as cli_main

    bad = tmp_path / "config.json"
    bad.write_text("{broken", encoding="utf-8")
    assert cli_main(["--config", str(bad), "run"]) == 2
    assert "cannot read config" in capsys.readouterr().err
