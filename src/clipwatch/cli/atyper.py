"""Async wrapper for Typer so commands can be coroutines."""

import asyncio
import inspect
from functools import wraps
from typing import Any, Callable

import typer
from typer.core import TyperCommand, TyperGroup


def _run_sync(f: Callable) -> Callable:
    """Wrap a coroutine function so Click can call it synchronously.

    Inside a running loop (tests) the coroutine is returned for the
    caller to await.
    """

    @wraps(f)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        coro = f(*args, **kwargs)
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            return asyncio.run(coro)
        return coro

    return wrapper


class AsyncTyperGroup(TyperGroup):
    """Group whose callback may be a coroutine function."""

    def invoke(self, ctx: Any) -> Any:
        if inspect.iscoroutinefunction(self.callback):
            return asyncio.run(self.callback(**ctx.params))
        return super().invoke(ctx)


class ATyper(typer.Typer):
    """Typer subclass with async command support."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        kwargs.setdefault("cls", AsyncTyperGroup)
        super().__init__(*args, **kwargs)

    def command(  # type: ignore[override]
        self,
        name: str | None = None,
        *,
        cls: type[TyperCommand] | None = None,
        **kwargs: Any,
    ) -> Any:
        """Register a command, running coroutine functions with asyncio."""

        def decorator(f: Callable) -> Callable:
            if inspect.iscoroutinefunction(f):
                f = _run_sync(f)
            return typer.Typer.command(self, name, cls=cls, **kwargs)(f)

        return decorator
