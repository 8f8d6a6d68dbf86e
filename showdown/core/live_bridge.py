"""Live MCP tool caller: bridges ToolCaller to a nexus-agents MCP server over HTTP.

Speaks JSON-RPC 2.0 (`initialize`, then `tools/call`). Tool results arrive as MCP
content blocks; text blocks are joined and JSON-decoded when possible so the pipeline
receives the same payload shapes the pydantic contracts expect.
"""

from __future__ import annotations

import asyncio
import itertools
import json
import time
from typing import Any

import httpx
import structlog

from showdown.core.errors import LiveBridgeUnavailableError, ToolCallError
from showdown.core.settings import Settings

log = structlog.get_logger(__name__)

MCP_PROTOCOL_VERSION = "2024-11-05"
_SESSION_HEADER = "mcp-session-id"


def is_live_mode(settings: Settings) -> bool:
    """Check if live mode is enabled via NEXUS_LIVE."""
    return settings.NEXUS_LIVE


def _extract_tool_result(result: Any) -> Any:
    """Unwrap MCP `content` text blocks into a decoded payload."""
    if not isinstance(result, dict):
        return result
    if "structuredContent" in result:
        return result["structuredContent"]
    content = result.get("content")
    if not isinstance(content, list):
        return result
    texts = [block.get("text", "") for block in content if isinstance(block, dict) and block.get("type") == "text"]
    if not texts:
        return result
    combined = "\n".join(texts)
    try:
        return json.loads(combined)
    except json.JSONDecodeError:
        return combined


def _decode_body(response: httpx.Response) -> dict[str, Any]:
    """Decode a JSON-RPC reply from either a JSON body or an SSE stream."""
    content_type = response.headers.get("content-type", "")
    if content_type.startswith("text/event-stream"):
        data_lines = [line[len("data:"):].strip() for line in response.text.splitlines() if line.startswith("data:")]
        if not data_lines:
            raise ValueError("empty event stream")
        return json.loads(data_lines[-1])
    return response.json()


class McpHttpCaller:
    """ToolCaller backed by an MCP server's HTTP JSON-RPC endpoint."""

    def __init__(
        self,
        url: str,
        *,
        timeout_s: float = 120.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._url = url
        self._client = client or httpx.AsyncClient(timeout=timeout_s)
        self._ids = itertools.count(1)
        self._session_id: str | None = None
        self._initialized = False
        self._init_lock = asyncio.Lock()

    async def close(self) -> None:
        await self._client.aclose()

    async def _post(self, tool: str, payload: dict[str, Any]) -> httpx.Response:
        headers = {"Accept": "application/json, text/event-stream"}
        if self._session_id:
            headers["Mcp-Session-Id"] = self._session_id
        try:
            response = await self._client.post(self._url, json=payload, headers=headers)
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise ToolCallError(tool, f"MCP transport error: {e}") from e
        return response

    async def _request(self, tool: str, method: str, params: dict[str, Any]) -> tuple[httpx.Response, Any]:
        payload = {"jsonrpc": "2.0", "id": next(self._ids), "method": method, "params": params}
        response = await self._post(tool, payload)
        try:
            body = _decode_body(response)
        except ValueError as e:
            raise ToolCallError(tool, f"Invalid JSON response: {e}") from e
        if not isinstance(body, dict):
            raise ToolCallError(tool, "Invalid JSON-RPC response: expected an object")
        if "error" in body:
            error = body["error"]
            message = error.get("message", str(error)) if isinstance(error, dict) else str(error)
            raise ToolCallError(tool, message)
        return response, body.get("result", {})

    async def initialize(self) -> None:
        response, _ = await self._request(
            "initialize",
            "initialize",
            {
                "protocolVersion": MCP_PROTOCOL_VERSION,
                "capabilities": {},
                "clientInfo": {"name": "model-showdown", "version": "1.0.0"},
            },
        )
        self._session_id = response.headers.get(_SESSION_HEADER) or self._session_id
        await self._post("initialize", {"jsonrpc": "2.0", "method": "notifications/initialized"})
        self._initialized = True
        log.info("mcp_initialized", url=self._url, session=bool(self._session_id))

    async def call(self, tool: str, args: dict[str, Any]) -> Any:
        if not self._initialized:
            async with self._init_lock:
                if not self._initialized:
                    await self.initialize()
        start = time.perf_counter()
        try:
            _, result = await self._request(tool, "tools/call", {"name": tool, "arguments": args})
        except ToolCallError as e:
            log.warning("mcp_tool_call_failed", tool=tool, error=str(e))
            raise
        latency_ms = (time.perf_counter() - start) * 1000.0
        if isinstance(result, dict) and result.get("isError"):
            message = _extract_tool_result(result)
            log.warning("mcp_tool_call_failed", tool=tool, error=str(message), latency_ms=latency_ms)
            raise ToolCallError(tool, f"{tool} returned an error: {message}")
        log.info("mcp_tool_call", tool=tool, latency_ms=latency_ms)
        return _extract_tool_result(result)


def create_mcp_caller(settings: Settings, *, client: httpx.AsyncClient | None = None) -> McpHttpCaller:
    """Build the live caller from settings."""
    if not is_live_mode(settings):
        raise LiveBridgeUnavailableError("Set NEXUS_LIVE=true to run against a live MCP server.")
    if not settings.NEXUS_MCP_URL:
        raise LiveBridgeUnavailableError("Set NEXUS_MCP_URL to the MCP server's JSON-RPC endpoint.")
    return McpHttpCaller(settings.NEXUS_MCP_URL, timeout_s=settings.NEXUS_MCP_TIMEOUT_S, client=client)
