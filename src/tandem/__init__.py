"""Tandem — one route table, served locally or from a serverless gateway.

Basic usage::

    from tandem import App, AppConfig

    app = App(AppConfig.from_env())

    @app.route("/hello")
    def hello(request):
        return "Hello, World!"

    # Serverless entry point referenced by the function config
    handler = app.lambda_handler

    if __name__ == "__main__":
        app.serve()
"""

__version__ = "0.1.0"
__all__ = [
    "App",
    "AppConfig",
    "ConfigurationError",
    "HTTPError",
    "Method",
    "Middleware",
    "Mode",
    "Next",
    "NotFound",
    "Request",
    "Response",
    "TandemError",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import tandem`` fast while providing a clean top-level API.
    """
    if name == "App":
        from tandem.app import App

        return App

    if name in ("AppConfig", "Mode"):
        from tandem import config as _config

        return getattr(_config, name)

    if name == "Request":
        from tandem.http.request import Request

        return Request

    if name == "Response":
        from tandem.http.response import Response

        return Response

    if name == "Method":
        from tandem.routing.route import Method

        return Method

    if name in ("Middleware", "Next"):
        from tandem.middleware import protocol as _mw

        return getattr(_mw, name)

    if name in ("TandemError", "ConfigurationError", "HTTPError", "NotFound"):
        from tandem import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
