from __future__ import annotations

import asyncio
import inspect

import pytest


def pytest_configure(config: pytest.Config) -> None:  # pragma: no cover - pytest integration
    config.addinivalue_line("markers", "asyncio: run the coroutine test function with asyncio.run")


def _is_async_test(item: pytest.Function) -> bool:
    return item.get_closest_marker("asyncio") is not None and inspect.iscoroutinefunction(item.obj)


@pytest.hookimpl(tryfirst=True)
def pytest_pyfunc_call(pyfuncitem: pytest.Function) -> bool | None:  # pragma: no cover - pytest integration
    """Drive DeepL client and fallback coroutines through a fresh event loop."""

    if not _is_async_test(pyfuncitem):
        return None

    wanted = pyfuncitem._fixtureinfo.argnames  # type: ignore[attr-defined]
    fixtures = {name: value for name, value in pyfuncitem.funcargs.items() if name in wanted}
    asyncio.run(pyfuncitem.obj(**fixtures))
    return True
