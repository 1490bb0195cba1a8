"""CLI for contentstash."""

# Import commands to register them with the app
# These imports have side effects (registering commands with @app.command())
from contentstash.cli.commands import records as _records_module  # noqa: F401
from contentstash.cli.main import app, main


__all__ = ["app", "main"]
