import io
from pathlib import Path

import pytest

from feed_kit.errors import SourceError
from feed_kit.parsing.engine import FeedParser
from feed_kit.parsing.strategy import DictRecordStrategy
from feed_kit.sources.file import FileByteSource

FEED = b"<rss><channel><item><title>First Item</title></item></channel></rss>"


@pytest.mark.asyncio
async def test_reads_then_signals_eof() -> None:
    source = FileByteSource(io.BytesIO(b"abcdef"))

    assert await source.read(4) == b"abcd"
    assert await source.read(4) == b"ef"
    assert await source.read(4) is None
    assert await source.read(4) is None


@pytest.mark.asyncio
async def test_open_missing_file_raises() -> None:
    with pytest.raises(SourceError, match="Cannot open"):
        await FileByteSource.open("/nonexistent/file.xml")


@pytest.mark.asyncio
async def test_read_after_external_close_raises() -> None:
    handle = io.BytesIO(b"abc")
    source = FileByteSource(handle)
    handle.close()

    with pytest.raises(SourceError, match="File read failed"):
        await source.read(1)


@pytest.mark.asyncio
async def test_close_only_closes_owned_handle(tmp_path: Path) -> None:
    path = tmp_path / "feed.xml"
    path.write_bytes(FEED)

    borrowed = io.BytesIO(FEED)
    await FileByteSource(borrowed).close()
    assert not borrowed.closed

    owned = await FileByteSource.open(path)
    await owned.close()
    assert owned._handle.closed


@pytest.mark.asyncio
async def test_from_file(tmp_path: Path) -> None:
    path = tmp_path / "feed.xml"
    path.write_bytes(FEED)

    parser = await FeedParser.from_file(path, DictRecordStrategy())
    async with parser:
        records = [record async for record in parser]

    assert records == [{"title": "First Item"}]


@pytest.mark.asyncio
async def test_from_file_nonexistent() -> None:
    with pytest.raises(SourceError):
        await FeedParser.from_file("/nonexistent/file.xml", DictRecordStrategy())


@pytest.mark.asyncio
async def test_from_reader_with_blocking_handle() -> None:
    parser = FeedParser.from_reader(io.BytesIO(FEED), DictRecordStrategy())
    assert await parser.next() == {"title": "First Item"}
