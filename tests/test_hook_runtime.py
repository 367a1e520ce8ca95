from __future__ import annotations

import pluggy
import pytest

from askit.errors import AsyncHookError
from askit.hook_runtime import HookRuntime
from askit.hookspecs import ASKIT_HOOK_NAMESPACE, SkillHookSpecs, hookimpl
from askit.response import Response


def _runtime(*plugins: object) -> HookRuntime:
    manager = pluggy.PluginManager(ASKIT_HOOK_NAMESPACE)
    manager.add_hookspecs(SkillHookSpecs)
    for index, plugin in enumerate(plugins):
        manager.register(plugin, name=f"plugin-{index}")
    return HookRuntime(manager)


def test_lifecycle_runs_latest_registration_first() -> None:
    order: list[str] = []

    class First:
        @hookimpl
        def on_intent(self) -> None:
            order.append("first")

    class Second:
        @hookimpl
        def on_intent(self) -> None:
            order.append("second")

    _runtime(First(), Second()).call_lifecycle("on_intent", response=Response())

    assert order == ["second", "first"]


def test_lifecycle_stops_at_first_error() -> None:
    order: list[str] = []

    class Quiet:
        @hookimpl
        def on_launch(self) -> None:
            order.append("quiet")

    class Loud:
        @hookimpl
        def on_launch(self) -> None:
            raise KeyError("boom")

    with pytest.raises(KeyError):
        _runtime(Quiet(), Loud()).call_lifecycle("on_launch")

    assert order == []


def test_lifecycle_passes_only_requested_arguments() -> None:
    seen: dict[str, object] = {}

    class Partial:
        @hookimpl
        def on_launch(self, response) -> None:
            seen["response"] = response

    response = Response()
    _runtime(Partial()).call_lifecycle("on_launch", request=None, session=None, context=None, response=response)

    assert seen == {"response": response}


def test_async_lifecycle_impl_rejected() -> None:
    class Async:
        @hookimpl
        async def on_launch(self) -> None:
            return None

    with pytest.raises(AsyncHookError):
        _runtime(Async()).call_lifecycle("on_launch")


def test_observer_failures_are_isolated() -> None:
    seen: list[str] = []

    class Broken:
        @hookimpl
        def on_error(self, stage) -> None:
            raise RuntimeError(stage)

    class Working:
        @hookimpl
        def on_error(self, stage) -> None:
            seen.append(stage)

    _runtime(Working(), Broken()).notify_error(stage="verify", error=ValueError("x"), envelope=None)

    assert seen == ["verify"]


def test_hook_report_lists_implementations() -> None:
    class Launcher:
        @hookimpl
        def on_launch(self) -> None:
            return None

    report = _runtime(Launcher()).hook_report()

    assert report == {"on_launch": ["plugin-0"]}
