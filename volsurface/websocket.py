"""Subscription to the exchange's option mark-price channel."""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

import websockets
from websockets.exceptions import ConnectionClosed

from volsurface.models import RawDeribitOption, parse_message

DEFAULT_URL = "wss://test.deribit.com/ws/api/v2"
CHANNEL = "markprice.options.btc_usd"


def subscribe_message() -> dict[str, Any]:
    """The JSON-RPC request that subscribes to BTC option mark prices."""
    return {
        "jsonrpc": "2.0",
        "id": 1,
        "method": "public/subscribe",
        "params": {"channels": [CHANNEL]},
    }


async def listen_for_deribit_data(
    sink: Callable[[list[RawDeribitOption]], Any],
    url: str = DEFAULT_URL,
) -> None:
    """Connect, subscribe and hand every batch of option data to ``sink``.

    Returns when the connection closes. Messages that are not valid JSON of
    the expected shape raise ValueError.
    """
    async with websockets.connect(url) as connection:
        print("Connected to deribit")
        await connection.send(json.dumps(subscribe_message()))
        print("Listening for deribit data")
        try:
            async for message in connection:
                if isinstance(message, bytes):
                    message = message.decode("utf-8")
                data = parse_message(message)
                if data is not None:
                    sink(data)
        except ConnectionClosed:
            return