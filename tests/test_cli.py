"""Tests for the tandem CLI — app resolution, ``run`` and ``routes``."""

import sys
import types
from collections.abc import Iterator

import pytest

from tandem.app import App
from tandem.cli import main
from tandem.cli._resolve import resolve_app
from tandem.http.request import Request
from tandem.server.gateway import GatewayHandler


def _build_app() -> App:
    app = App()

    @app.route("/hello")
    def hello(request: Request) -> str:
        return "Hello"

    @app.route("/users/{id}", methods=["GET", "DELETE"], name="user")
    def user(request: Request) -> str:
        return "user"

    return app


def _register(name: str, **attrs: object) -> types.ModuleType:
    module = types.ModuleType(name)
    for attr, value in attrs.items():
        setattr(module, attr, value)
    sys.modules[name] = module
    return module


@pytest.fixture
def fake_module() -> Iterator[types.ModuleType]:
    module = types.ModuleType("_tandem_cli_fixture")
    module.app = _build_app()  # type: ignore[attr-defined]
    module.create_app = _build_app  # type: ignore[attr-defined]
    module.not_an_app = 42  # type: ignore[attr-defined]
    sys.modules[module.__name__] = module
    yield module
    del sys.modules[module.__name__]


class TestResolveApp:
    def test_explicit_attribute(self, fake_module: types.ModuleType) -> None:
        assert resolve_app("_tandem_cli_fixture:app") is fake_module.app

    def test_default_attribute(self, fake_module: types.ModuleType) -> None:
        assert resolve_app("_tandem_cli_fixture") is fake_module.app

    def test_factory(self, fake_module: types.ModuleType) -> None:
        assert isinstance(resolve_app("_tandem_cli_fixture:create_app"), App)

    def test_not_an_app(self, fake_module: types.ModuleType) -> None:
        with pytest.raises(TypeError, match="neither a tandem.App"):
            resolve_app("_tandem_cli_fixture:not_an_app")

    def test_missing_module(self) -> None:
        with pytest.raises(ModuleNotFoundError):
            resolve_app("_tandem_no_such_module:app")

    def test_bound_lambda_handler(self) -> None:
        app = _build_app()
        module = _register("_tandem_cli_lambda", handler=app.lambda_handler)
        try:
            assert resolve_app(module.__name__) is app
        finally:
            del sys.modules[module.__name__]

    def test_gateway_handler(self) -> None:
        app = _build_app()
        module = _register("_tandem_cli_gateway", entry=GatewayHandler(app))
        try:
            assert resolve_app(f"{module.__name__}:entry") is app
        finally:
            del sys.modules[module.__name__]

    def test_factory_returning_entry_point(self) -> None:
        app = _build_app()
        module = _register("_tandem_cli_factory", make=lambda: app.lambda_handler)
        try:
            assert resolve_app(f"{module.__name__}:make") is app
        finally:
            del sys.modules[module.__name__]

    def test_module_without_defaults(self) -> None:
        module = _register("_tandem_cli_bare", other=1)
        try:
            with pytest.raises(AttributeError, match="defines none of"):
                resolve_app(module.__name__)
        finally:
            del sys.modules[module.__name__]

    def test_failing_factory(self) -> None:
        def broken() -> App:
            msg = "no database"
            raise RuntimeError(msg)

        module = _register("_tandem_cli_broken", make=broken)
        try:
            with pytest.raises(TypeError, match="no database"):
                resolve_app(f"{module.__name__}:make")
        finally:
            del sys.modules[module.__name__]


class TestRoutesCommand:
    def test_lists_routes_in_order(
        self, fake_module: types.ModuleType, capsys: pytest.CaptureFixture[str]
    ) -> None:
        main(["routes", "_tandem_cli_fixture:app"])
        lines = capsys.readouterr().out.splitlines()
        assert lines[0].split() == ["METHOD", "PATH", "HANDLER"]
        assert lines[2].split() == ["GET", "/hello", "hello"]
        assert lines[3].split()[:3] == ["GET", "/users/{id}", "user"]
        assert lines[4].split()[:2] == ["DELETE", "/users/{id}"]

    def test_empty_app(self, capsys: pytest.CaptureFixture[str]) -> None:
        module = types.ModuleType("_tandem_cli_empty")
        module.app = App()  # type: ignore[attr-defined]
        sys.modules[module.__name__] = module
        try:
            main(["routes", "_tandem_cli_empty"])
        finally:
            del sys.modules[module.__name__]
        assert "No routes registered." in capsys.readouterr().out

    def test_bad_import_exits(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["routes", "_tandem_no_such_module:app"])
        assert exc_info.value.code == 1
        assert "Error:" in capsys.readouterr().err


class TestRunCommand:
    def test_run_calls_serve(
        self, fake_module: types.ModuleType, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        calls: list[tuple[str, int]] = []

        def fake_run(app: App, host: str, port: int, *, workers: int = 1) -> None:
            calls.append((host, port))

        monkeypatch.setattr("tandem.server.local.run_local_server", fake_run)
        main(["run", "_tandem_cli_fixture:app", "--port", "5000", "--log-level", "warning"])
        assert calls == [("127.0.0.1", 5000)]
        assert fake_module.app.config.log_level == "warning"

    def test_no_command_prints_help(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 0
        assert "usage: tandem" in capsys.readouterr().out

    def test_help_describes_both_modes(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit):
            main(["--help"])
        out = capsys.readouterr().out
        assert "Tandem: one route table" in out
