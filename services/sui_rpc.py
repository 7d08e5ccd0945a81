# services/sui_rpc.py

import itertools
import logging
from typing import Any, List, Optional

import httpx

logger = logging.getLogger("sui_rpc")


class SuiRpcError(Exception):
    """JSON-RPC level error returned by a Sui fullnode."""

    def __init__(self, method: str, code: Optional[int], message: str):
        super().__init__(f"{method} failed: {message}")
        self.method = method
        self.code = code
        self.message = message


class SuiRpcClient:
    """
    Minimal async JSON-RPC 2.0 client for a Sui fullnode.
    HTTP errors propagate as httpx exceptions.
    """

    def __init__(
        self,
        url: str,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url = url
        self.timeout = timeout
        self._transport = transport
        self._ids = itertools.count(1)

    async def call(self, method: str, params: List[Any]) -> Any:
        payload = {
            "jsonrpc": "2.0",
            "id": next(self._ids),
            "method": method,
            "params": params,
        }
        logger.debug(f"[RPC] method={method}")

        async with httpx.AsyncClient(transport=self._transport, timeout=self.timeout) as client:
            response = await client.post(self.url, json=payload)
            response.raise_for_status()
            body = response.json()

        if body.get("error"):
            error = body["error"]
            raise SuiRpcError(method, error.get("code"), error.get("message", str(error)))
        return body.get("result")
