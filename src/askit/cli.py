"""askit command line: run request envelopes from JSON files through a handler."""

from __future__ import annotations

import importlib
import sys
from importlib import util as importlib_util
from pathlib import Path
from types import ModuleType
from typing import cast

import typer
from rich import print_json

from askit.config import get_settings
from askit.dispatcher import RequestDispatcher
from askit.errors import AskitError, ConfigurationError
from askit.handler import RequestHandler
from askit.hookspecs import LIFECYCLE_HOOKS
from askit.logging_utils import configure_logging
from askit.models import parse_envelope

DEFAULT_HANDLER = "askit.builtin.echo:handler"

app = typer.Typer(name="askit", help="Voice skill request dispatcher", add_completion=False)


def load_handler(target: str) -> RequestHandler:
    """Resolve ``module:attr`` or ``path/to/file.py:attr`` to a handler instance.

    A class is instantiated with no arguments; any other object must already
    provide the four lifecycle methods.
    """

    module_part, sep, attr = target.rpartition(":")
    if not sep or not module_part or not attr:
        raise ConfigurationError(f"handler must look like module:attr, got {target!r}")

    try:
        if module_part.endswith(".py"):
            module = _load_module_from_file(Path(module_part))
        else:
            module = importlib.import_module(module_part)
    except (ImportError, OSError) as exc:
        raise ConfigurationError(f"cannot import handler module {module_part!r}: {exc}") from exc

    candidate = getattr(module, attr, None)
    if candidate is None:
        raise ConfigurationError(f"module {module_part!r} has no attribute {attr!r}")
    if isinstance(candidate, type):
        candidate = candidate()
    if not _is_handler_like(candidate):
        raise ConfigurationError(f"{target!r} does not implement {', '.join(LIFECYCLE_HOOKS)}")
    return cast(RequestHandler, candidate)


def build_dispatcher(
    handler: str,
    *,
    app_id: str | None = None,
    ignore_app_id: bool | None = None,
    ignore_timestamp: bool | None = None,
    tolerance: int | None = None,
) -> RequestDispatcher:
    settings = get_settings(
        application_id=app_id,
        ignore_application_id=ignore_app_id,
        ignore_timestamp=ignore_timestamp,
        timestamp_tolerance=tolerance,
    )
    configure_logging(profile="cli", level=settings.log_level)
    return RequestDispatcher(load_handler(handler), settings)


@app.command("process")
def process(
    request_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Request envelope JSON file"),  # noqa: B008
    handler: str = typer.Option(DEFAULT_HANDLER, "--handler", "-H", help="Handler as module:attr or file.py:attr"),
    app_id: str | None = typer.Option(None, "--app-id", help="Expected application id"),
    ignore_app_id: bool | None = typer.Option(None, "--ignore-app-id/--check-app-id"),
    ignore_timestamp: bool | None = typer.Option(None, "--ignore-timestamp/--check-timestamp"),
    tolerance: int | None = typer.Option(None, "--tolerance", min=0, help="Timestamp tolerance in seconds"),
) -> None:
    """Process one request envelope and print the response envelope."""

    try:
        dispatcher = build_dispatcher(
            handler,
            app_id=app_id,
            ignore_app_id=ignore_app_id,
            ignore_timestamp=ignore_timestamp,
            tolerance=tolerance,
        )
        result = dispatcher.process_payload(request_file.read_bytes())
    except AskitError as exc:
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(code=1) from exc
    print_json(data=result)


@app.command("verify")
def verify(
    request_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Request envelope JSON file"),  # noqa: B008
    app_id: str | None = typer.Option(None, "--app-id", help="Expected application id"),
    ignore_app_id: bool | None = typer.Option(None, "--ignore-app-id/--check-app-id"),
    ignore_timestamp: bool | None = typer.Option(None, "--ignore-timestamp/--check-timestamp"),
    tolerance: int | None = typer.Option(None, "--tolerance", min=0, help="Timestamp tolerance in seconds"),
) -> None:
    """Run the identity and timestamp checks without dispatching."""

    try:
        dispatcher = build_dispatcher(
            DEFAULT_HANDLER,
            app_id=app_id,
            ignore_app_id=ignore_app_id,
            ignore_timestamp=ignore_timestamp,
            tolerance=tolerance,
        )
        dispatcher.verify_request(parse_envelope(request_file.read_bytes()))
    except AskitError as exc:
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(code=1) from exc
    typer.echo("ok")


@app.command("hooks")
def hooks(
    handler: str = typer.Option(DEFAULT_HANDLER, "--handler", "-H", help="Handler as module:attr or file.py:attr"),
) -> None:
    """Show which plugins implement each hook."""

    try:
        dispatcher = build_dispatcher(handler)
    except AskitError as exc:
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(code=1) from exc
    for hook_name, adapters in dispatcher.hook_report().items():
        typer.echo(f"{hook_name}: {', '.join(adapters)}")


def _is_handler_like(candidate: object) -> bool:
    return all(callable(getattr(candidate, name, None)) for name in LIFECYCLE_HOOKS)


def _load_module_from_file(path: Path) -> ModuleType:
    module_name = f"askit_handler_{path.stem}"
    spec = importlib_util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise ImportError(f"failed to build module spec for {path}")

    module = importlib_util.module_from_spec(spec)
    sys.modules.pop(module_name, None)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except Exception:
        sys.modules.pop(module_name, None)
        raise
    return module
