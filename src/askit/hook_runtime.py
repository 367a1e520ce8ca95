"""Hook execution runtime for lifecycle and observer hooks."""

from __future__ import annotations

import inspect
from typing import Any

import pluggy
from loguru import logger

from askit.errors import AsyncHookError
from askit.models import RequestEnvelope


class HookRuntime:
    """Thin wrapper around pluggy hook execution.

    Lifecycle hooks are strict: the first exception stops the chain and is
    re-raised. Observer hooks are isolated: their failures are logged and
    ignored.
    """

    def __init__(self, plugin_manager: pluggy.PluginManager) -> None:
        self._plugin_manager = plugin_manager

    def call_lifecycle(self, hook_name: str, **kwargs: Any) -> None:
        """Run every implementation of ``hook_name`` in precedence order."""

        for impl in self._iter_hookimpls(hook_name):
            value = impl.function(**self._kwargs_for_impl(impl, kwargs))
            if inspect.isawaitable(value):
                _discard_awaitable(value)
                raise AsyncHookError(
                    f"hook {hook_name} from {impl.plugin_name or '<unknown>'} returned an awaitable; "
                    "lifecycle hooks must be synchronous"
                )

    def call_observers(self, hook_name: str, **kwargs: Any) -> None:
        """Run observer implementations, swallowing their failures."""

        for impl in self._iter_hookimpls(hook_name):
            try:
                value = impl.function(**self._kwargs_for_impl(impl, kwargs))
            except Exception:
                logger.opt(exception=True).warning(
                    "hook.observer_failed hook={} adapter={}",
                    hook_name,
                    impl.plugin_name or "<unknown>",
                )
                continue
            if inspect.isawaitable(value):
                _discard_awaitable(value)
                logger.warning(
                    "hook.async_not_supported hook={} adapter={}",
                    hook_name,
                    impl.plugin_name or "<unknown>",
                )

    def notify_error(self, *, stage: str, error: Exception, envelope: RequestEnvelope | None) -> None:
        self.call_observers("on_error", stage=stage, error=error, envelope=envelope)

    def hook_report(self) -> dict[str, list[str]]:
        """Build a hook->adapters mapping for diagnostics."""

        report: dict[str, list[str]] = {}
        for hook_name, hook_caller in sorted(self._plugin_manager.hook.__dict__.items()):
            if hook_name.startswith("_") or not hasattr(hook_caller, "get_hookimpls"):
                continue
            adapter_names = [impl.plugin_name for impl in hook_caller.get_hookimpls()]
            if adapter_names:
                report[hook_name] = adapter_names
        return report

    def _iter_hookimpls(self, hook_name: str) -> list[Any]:
        hook = getattr(self._plugin_manager.hook, hook_name, None)
        if hook is None or not hasattr(hook, "get_hookimpls"):
            return []
        return list(reversed(hook.get_hookimpls()))

    @staticmethod
    def _kwargs_for_impl(impl: Any, kwargs: dict[str, Any]) -> dict[str, Any]:
        return {name: kwargs[name] for name in impl.argnames if name in kwargs}


def _discard_awaitable(value: Any) -> None:
    close = getattr(value, "close", None)
    if callable(close):
        close()
