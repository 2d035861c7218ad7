"""Locate the ``App`` behind an import string.

A serverless module often exposes only its entry point (``handler =
app.lambda_handler`` or ``handler = GatewayHandler(app)``), so resolution
walks back from those to the owning ``App``.
"""

import importlib
from types import ModuleType

from tandem.app import App
from tandem.server.gateway import GatewayHandler

# Looked up in order when the import string names only a module
DEFAULT_ATTRIBUTES = ("app", "handler", "lambda_handler")


def _owning_app(obj: object) -> App | None:
    match obj:
        case App():
            return obj
        case GatewayHandler():
            return obj.app
        case _ if isinstance(getattr(obj, "__self__", None), App):
            # Bound entry point such as app.lambda_handler
            return obj.__self__  # type: ignore[attr-defined]
    return None


def _lookup(module: ModuleType, attr_name: str | None) -> tuple[str, object]:
    if attr_name:
        return attr_name, getattr(module, attr_name)
    for candidate in DEFAULT_ATTRIBUTES:
        if hasattr(module, candidate):
            return candidate, getattr(module, candidate)
    names = ", ".join(DEFAULT_ATTRIBUTES)
    msg = f"Module {module.__name__!r} defines none of: {names}"
    raise AttributeError(msg)


def resolve_app(import_string: str) -> App:
    """Resolve ``"module[:attribute]"`` to a tandem ``App``.

    The attribute may be the ``App`` itself, its bound ``lambda_handler``,
    a ``GatewayHandler`` wrapping it, or a zero-argument factory returning
    any of those. Without an attribute, ``app``, ``handler`` and
    ``lambda_handler`` are tried in that order.

    Raises:
        ModuleNotFoundError: If the module cannot be imported.
        AttributeError: If the attribute (or every default) is missing.
        TypeError: If no ``App`` can be reached from the resolved object.
    """
    module_path, _, attr_name = import_string.partition(":")
    module = importlib.import_module(module_path)
    found_name, obj = _lookup(module, attr_name or None)

    app = _owning_app(obj)
    if app is None and callable(obj):
        try:
            app = _owning_app(obj())
        except Exception as exc:
            msg = f"Factory {module_path}:{found_name} raised an error: {exc}"
            raise TypeError(msg) from exc

    if app is None:
        msg = (
            f"{module_path}:{found_name} resolved to {type(obj).__name__}, "
            "which is neither a tandem.App nor one of its entry points"
        )
        raise TypeError(msg)
    return app
