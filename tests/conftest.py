import asyncio
from collections import deque

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from py_evm_rpc.client import EVMClient

ADDRESS = "0xde0b295669a9fd93d5f28d9ec85e40f4cb697bae"
TX_HASH = "0x" + "ab" * 32
BLOCK_HASH = "0x" + "cd" * 32
PARENT_HASH = "0x" + "ef" * 32


class SpyProvider:
    """
    Records every json_rpc call and replays scripted results per method.

    The last scripted result of a method is repeated, exceptions are raised.
    """

    def __init__(self):
        self.calls = []
        self._results = {}

    def set(self, method, *results):
        self._results[method] = deque(results)

    async def json_rpc(self, method, params=None):
        self.calls.append((method, list(params or [])))
        results = self._results[method]
        result = results.popleft() if len(results) > 1 else results[0]
        if isinstance(result, Exception):
            raise result
        return result


def make_tx(index, **overrides):
    tx = {
        "hash": "0x" + f"{index:02x}" * 32,
        "nonce": hex(index),
        "blockHash": BLOCK_HASH,
        "blockNumber": "0x64",
        "transactionIndex": hex(index),
        "from": ADDRESS,
        "to": "0x" + "11" * 20,
        "value": "0xde0b6b3a7640000",
        "gas": "0x5208",
        "gasPrice": "0x3b9aca00",
        "input": "0x",
        "type": "0x2",
        "chainId": "0x1",
    }
    tx.update(overrides)
    return tx


def make_block(number=100, block_hash=BLOCK_HASH, tx_count=2):
    return {
        "number": hex(number),
        "hash": block_hash,
        "parentHash": PARENT_HASH,
        "timestamp": "0x65f1e0a0",
        "miner": "0x" + "22" * 20,
        "gasLimit": "0x1c9c380",
        "gasUsed": "0xa410",
        "baseFeePerGas": "0x7",
        "logsBloom": "0x" + "00" * 256,
        "transactions": [make_tx(i + 1) for i in range(tx_count)],
    }


def make_receipt(status="0x1", tx_hash=TX_HASH):
    return {
        "transactionHash": tx_hash,
        "transactionIndex": "0x0",
        "blockHash": BLOCK_HASH,
        "blockNumber": "0x64",
        "from": ADDRESS,
        "to": "0x" + "11" * 20,
        "contractAddress": None,
        "gasUsed": "0x5208",
        "cumulativeGasUsed": "0x5208",
        "effectiveGasPrice": "0x3b9aca00",
        "status": status,
        "logs": [
            {
                "address": "0x" + "33" * 20,
                "topics": ["0x" + "44" * 32],
                "data": "0x",
                "blockNumber": "0x64",
                "transactionHash": tx_hash,
                "logIndex": "0x0",
                "removed": False,
            }
        ],
    }


@pytest.fixture
def provider() -> SpyProvider:
    return SpyProvider()


@pytest.fixture
def client(provider) -> EVMClient:
    return EVMClient(provider, receipt_poll_attempts=3, receipt_poll_interval=0)


class NodeStub:
    """
    Local HTTP node: answers each POST with the next queued (status, body).
    """

    def __init__(self):
        self.requests = []
        self.headers = []
        self.replies = deque()
        self.delay = 0

    def reply(self, body, status=200):
        self.replies.append((status, body))

    async def handle(self, request):
        self.headers.append(dict(request.headers))
        self.requests.append(await request.json())
        if self.delay:
            await asyncio.sleep(self.delay)
        status, body = self.replies.popleft()
        if isinstance(body, (dict, list)):
            return web.json_response(body, status=status)
        if isinstance(body, bytes):
            return web.Response(body=body, status=status, content_type="application/json")
        return web.Response(text=body, status=status)


@pytest.fixture
async def node():
    stub = NodeStub()
    app = web.Application()
    app.router.add_post("/", stub.handle)
    server = TestServer(app)
    await server.start_server()
    stub.url = str(server.make_url("/"))
    yield stub
    await server.close()
