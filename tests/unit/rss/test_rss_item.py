import pytest

from feed_kit.parsing.engine import FeedParser
from feed_kit.parsing.models import RawNode
from feed_kit.rss.item import RssItem, RssItemStrategy
from feed_kit.sources.iterable import IterableByteSource


@pytest.fixture
def strategy() -> RssItemStrategy:
    return RssItemStrategy()


def test_text_is_stripped_and_cdata_is_fallback(strategy: RssItemStrategy) -> None:
    item = strategy.init()
    strategy.populate(item, RawNode(tag="title", text="\n  Hello  \n"))
    strategy.populate(item, RawNode(tag="description", literal=" <p>x</p> "))

    assert item.title == "Hello"
    assert item.description == " <p>x</p> "


def test_field_mapping(strategy: RssItemStrategy) -> None:
    item = strategy.init()
    for tag, value in [
        ("link", "https://example.com"),
        ("pubdate", "Mon, 01 Jan 2024 00:00:00 GMT"),
        ("guid", "g-1"),
        ("author", "a@example.com"),
        ("comments", "https://example.com/c"),
        ("content:encoded", "<p>full</p>"),
        ("category", "news"),
        ("category", "tech"),
        ("unknown", "ignored"),
    ]:
        strategy.populate(item, RawNode(tag=tag, text=value))

    assert item == RssItem(
        link="https://example.com",
        pub_date="Mon, 01 Jan 2024 00:00:00 GMT",
        guid="g-1",
        author="a@example.com",
        comments="https://example.com/c",
        content="<p>full</p>",
        categories=["news", "tech"],
    )


def test_empty_node_leaves_field_unset(strategy: RssItemStrategy) -> None:
    item = strategy.init()
    strategy.populate(item, RawNode(tag="title"))
    assert item.title is None


@pytest.mark.asyncio
async def test_parses_mixed_content_feed(strategy: RssItemStrategy) -> None:
    data = b"""<?xml version="1.0" encoding="UTF-8"?>
<RSS version="2.0">
    <CHANNEL>
        <ITEM>
            <TITLE>Mixed Content</TITLE>
            <Description>Regular text</Description>
            <content:encoded><![CDATA[CDATA content]]></content:encoded>
            <pubDate>Tue, 02 Jan 2024 00:00:00 GMT</pubDate>
        </ITEM>
    </CHANNEL>
</RSS>"""
    parser = FeedParser(IterableByteSource([data]), strategy)

    items = [item async for item in parser]

    assert items == [
        RssItem(
            title="Mixed Content",
            description="Regular text",
            content="CDATA content",
            pub_date="Tue, 02 Jan 2024 00:00:00 GMT",
        )
    ]
