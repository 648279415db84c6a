"""Tests for describer.cli — entrypoint, app resolution, and ``describer routes``."""

import json
import sys
import types

import pytest

from describer.app import App
from describer.cli import main
from describer.cli._resolve import resolve_app


class TestCLIHelp:
    def test_help_exits_zero(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--help"])
        assert exc_info.value.code == 0

    def test_routes_help_exits_zero(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["routes", "--help"])
        assert exc_info.value.code == 0

    def test_routes_missing_app(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["routes"])
        assert exc_info.value.code == 2

    def test_no_command_exits_zero(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 0
        assert "describer" in capsys.readouterr().out


@pytest.fixture
def _fake_app_module(monkeypatch: pytest.MonkeyPatch) -> None:
    """Register a fake module with describer Apps on sys.modules."""
    mod = types.ModuleType("_fake_describer_app")
    mod.app = App()  # type: ignore[attr-defined]
    mod.custom = App()  # type: ignore[attr-defined]
    mod.not_an_app = "just a string"  # type: ignore[attr-defined]
    mod.factory = App  # type: ignore[attr-defined]

    def broken_factory() -> App:
        msg = "no database"
        raise RuntimeError(msg)

    mod.broken_factory = broken_factory  # type: ignore[attr-defined]
    monkeypatch.setitem(sys.modules, "_fake_describer_app", mod)


@pytest.mark.usefixtures("_fake_app_module")
class TestResolveApp:
    def test_explicit_attribute(self) -> None:
        assert isinstance(resolve_app("_fake_describer_app:app"), App)

    def test_custom_attribute(self) -> None:
        assert isinstance(resolve_app("_fake_describer_app:custom"), App)

    def test_default_attribute(self) -> None:
        """Omitting :attr defaults to 'app'."""
        app = resolve_app("_fake_describer_app")
        assert app is sys.modules["_fake_describer_app"].app

    def test_factory_is_called(self) -> None:
        assert isinstance(resolve_app("_fake_describer_app:factory"), App)

    def test_factory_error_is_type_error(self) -> None:
        with pytest.raises(TypeError, match="no database"):
            resolve_app("_fake_describer_app:broken_factory")

    def test_missing_module(self) -> None:
        with pytest.raises(ModuleNotFoundError):
            resolve_app("nonexistent_module_xyz:app")

    def test_missing_attribute(self) -> None:
        with pytest.raises(AttributeError):
            resolve_app("_fake_describer_app:does_not_exist")

    def test_wrong_type(self) -> None:
        with pytest.raises(TypeError, match=r"not a describer\.App instance"):
            resolve_app("_fake_describer_app:not_an_app")


class TestRoutesCommand:
    def test_table_sorted_by_path(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["routes", "example_routes:app", "--scope", "/route/test"])
        lines = capsys.readouterr().out.splitlines()

        assert lines[0].split() == ["METHOD", "PATH"]
        assert set(lines[1]) == {"-"}
        assert [line.split() for line in lines[2:]] == [
            ["POST", "/"],
            ["GET", "/hello/{id}"],
        ]

    def test_default_scope_lists_everything(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["routes", "example_routes:app"])
        rows = capsys.readouterr().out.splitlines()[2:]
        assert len(rows) == 13
        paths = [row.split()[1] for row in rows]
        assert paths == sorted(paths)

    def test_json_output(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["routes", "example_routes:app", "--scope", "/route/test2", "--json"])
        assert json.loads(capsys.readouterr().out) == [{"method": "GET", "uri": "/inner"}]

    def test_factory_import_string(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["routes", "example_routes:create_app", "--scope", "/route/test2/inner", "--json"])
        assert json.loads(capsys.readouterr().out) == [{"method": "GET", "uri": "/"}]

    def test_empty_scope(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["routes", "example_routes:app", "--scope", "/nowhere"])
        assert capsys.readouterr().out.strip() == "No routes registered."

    def test_empty_scope_json(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["routes", "example_routes:app", "--scope", "/nowhere", "--json"])
        assert json.loads(capsys.readouterr().out) == []

    def test_bad_import_exits_one(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["routes", "nonexistent_module_xyz:app"])
        assert exc_info.value.code == 1
        assert "Error:" in capsys.readouterr().err
