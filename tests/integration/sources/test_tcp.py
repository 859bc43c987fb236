import asyncio
import socket
from collections.abc import Callable

import pytest

from feed_kit.errors import SourceError
from feed_kit.parsing.engine import FeedParser
from feed_kit.rss.item import RssItemStrategy

FEED = b"""<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0"><channel>
<item><title>First</title><link>https://example.com/1</link></item>
<item><title>Second</title><description><![CDATA[<b>x</b>]]></description></item>
<item><title>Truncated</title>"""


def dribble(data: bytes, size: int) -> Callable:
    """Server handler that sends ``data`` in small delayed pieces, then closes."""

    async def handle(reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
        for i in range(0, len(data), size):
            writer.write(data[i : i + size])
            await writer.drain()
            await asyncio.sleep(0.001)
        writer.close()
        await writer.wait_closed()

    return handle


def unused_port() -> int:
    with socket.socket() as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


@pytest.mark.asyncio
async def test_records_arrive_over_slow_connection() -> None:
    server = await asyncio.start_server(dribble(FEED, 5), "127.0.0.1", 0)
    port = server.sockets[0].getsockname()[1]

    async with server:
        parser = await FeedParser.from_tcp("127.0.0.1", port, RssItemStrategy())
        async with parser:
            items = [item async for item in parser]

    assert [item.title for item in items] == ["First", "Second"]
    assert items[1].description == "<b>x</b>"


@pytest.mark.asyncio
async def test_connection_refused_raises() -> None:
    with pytest.raises(SourceError, match="Cannot connect"):
        await FeedParser.from_tcp("127.0.0.1", unused_port(), RssItemStrategy())
