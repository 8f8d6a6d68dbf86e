"""Tool gateway: the single call boundary between the pipeline and remote tools."""

from __future__ import annotations

from typing import Any, Awaitable, Callable, Protocol, runtime_checkable


@runtime_checkable
class ToolCaller(Protocol):
    """Invoke a named remote tool with an argument bag and return its raw result.

    May raise, and may never return; timeouts belong to the implementation.
    """

    async def call(self, tool: str, args: dict[str, Any]) -> Any:
        raise NotImplementedError


ToolCallFn = Callable[[str, dict[str, Any]], Awaitable[Any]]


class CallbackToolCaller:
    """ToolCaller that delegates every call to an async callback."""

    def __init__(self, call_fn: ToolCallFn) -> None:
        self._call_fn = call_fn

    async def call(self, tool: str, args: dict[str, Any]) -> Any:
        return await self._call_fn(tool, args)


def create_live_caller(call_fn: ToolCallFn) -> ToolCaller:
    """Wrap an async `(tool, args) -> result` callable as a ToolCaller."""
    return CallbackToolCaller(call_fn)
