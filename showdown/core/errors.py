"""Errors raised by tool gateway implementations."""

from __future__ import annotations


class ToolCallError(RuntimeError):
    """A remote tool call failed (transport, protocol or tool-reported error)."""

    def __init__(self, tool: str, message: str) -> None:
        super().__init__(message)
        self.tool = tool


class LiveBridgeUnavailableError(RuntimeError):
    """Live mode is disabled or the MCP endpoint is not configured."""
