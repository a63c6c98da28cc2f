import asyncio
import json

import aiohttp
from loguru import logger

from py_evm_rpc.constants import (
    JSONRPC_REQUEST_ID,
    JSONRPC_VERSION,
    TIMEOUT_WAIT_RPC,
)
from py_evm_rpc.exceptions.provider import (
    RPC_CODE_TO_EXCEPTION,
    HTTPStatusError,
    JsonRpcError,
    MalformedResponseError,
    RpcNotAvailableError,
    RPCTimeoutError,
)


class JsonProvider(object):
    """
    JSON-RPC provider for a single EVM node.

    Pure conduit: sends one request per call, decodes the response and maps
    every failure into the TransportError hierarchy. A successful call with
    a null result is returned as None.
    """

    def __init__(self, rpc_addr: str, timeout=TIMEOUT_WAIT_RPC, headers=None):
        """
        Initialize JSON-RPC provider.

        Args:
            rpc_addr: Node endpoint URL
            timeout: Per-call timeout in seconds
            headers: Extra HTTP headers sent with every request
        """
        self._rpc_addr = rpc_addr
        self._headers = headers or dict()
        self.timeout = timeout
        self._timeout: aiohttp.ClientTimeout = None
        self._client: aiohttp.ClientSession = None

    @property
    def rpc_addr(self) -> str:
        return self._rpc_addr

    async def __aenter__(self):
        await self.startup()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.shutdown()

    async def startup(self):
        if self._client is not None and not self._client.closed:
            return
        self._timeout = aiohttp.ClientTimeout(total=self.timeout)
        self._client = aiohttp.ClientSession(timeout=self._timeout)

    async def shutdown(self):
        """
        Close the HTTP session. The provider can be started again afterwards.
        """
        if self._client is not None and not self._client.closed:
            await self._client.close()
        self._client = None

    def build_request(self, method, params) -> dict:
        return {
            "jsonrpc": JSONRPC_VERSION,
            "method": method,
            "params": list(params or []),
            "id": JSONRPC_REQUEST_ID,
        }

    async def call_rpc_request(self, method, params) -> dict:
        """
        Make an RPC request to the node.

        Args:
            method: RPC method name
            params: Ordered method parameters

        Returns:
            Decoded JSON-RPC response dictionary

        Raises:
            RpcNotAvailableError: Connection could not be made
            RPCTimeoutError: Call exceeded the timeout
            HTTPStatusError: Node answered with a non-200 status
            MalformedResponseError: Body is not a JSON object
        """
        if self._client is None or self._client.closed:
            await self.startup()
        j = self.build_request(method, params)
        logger.debug(f"RPC call {method} -> {self._rpc_addr}")
        try:
            async with self._client.post(
                self._rpc_addr, json=j, headers=self._headers
            ) as r:
                body = await r.read()
                if r.status != 200:
                    logger.error(f"RPC {method} failed with status {r.status}")
                    raise HTTPStatusError(
                        r.status, body.decode("utf-8", errors="replace")
                    )
        except asyncio.TimeoutError as e:
            logger.error(f"RPC {method} timed out after {self.timeout}s")
            raise RPCTimeoutError(f"{method} timed out after {self.timeout}s") from e
        except (aiohttp.ClientError, OSError, ValueError) as e:
            logger.error(f"Rpc error: {e}")
            raise RpcNotAvailableError(f"{self._rpc_addr} not available: {e}") from e

        try:
            content = json.loads(body.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.error(f"RPC {method} returned invalid JSON: {body[:200]!r}")
            raise MalformedResponseError(f"Invalid JSON in {method} response") from e
        if not isinstance(content, dict):
            raise MalformedResponseError(
                f"Unexpected {type(content).__name__} in {method} response"
            )
        return content

    @staticmethod
    def get_error_from_response(content: dict):
        """
        Parse error from RPC response and convert to appropriate exception.

        Args:
            content: RPC response dictionary

        Returns:
            Exception instance if error found, None otherwise
        """
        if "error" in content and content["error"] is not None:
            error = content["error"]
            if not isinstance(error, dict):
                return JsonRpcError(str(error), error_json={"message": error})
            code = error.get("code")
            return RPC_CODE_TO_EXCEPTION.get(code, JsonRpcError)(
                error.get("message", ""),
                code=code,
                data=error.get("data"),
                error_json=error,
            )
        if "result" not in content:
            return MalformedResponseError(
                "Response has neither result nor error", error_json=content
            )
        return None

    async def json_rpc(self, method, params=None):
        """
        Execute JSON-RPC call and parse response.

        Args:
            method: RPC method name
            params: Ordered method parameters

        Returns:
            Result from RPC response, None when the node has no data

        Raises:
            TransportError subclasses: see call_rpc_request and RPC_CODE_TO_EXCEPTION
        """
        content = await self.call_rpc_request(method, params)
        error = self.get_error_from_response(content)
        if error:
            logger.error(f"RPC {method} error: {error}")
            raise error
        return content["result"]
