# src/feed_kit/rss/item.py

from pydantic import BaseModel, Field

from feed_kit.parsing.models import RawNode


class RssItem(BaseModel):
    """One RSS 2.0 <item>. Every field is optional."""

    title: str | None = None
    link: str | None = None
    description: str | None = None
    pub_date: str | None = None
    guid: str | None = None
    author: str | None = None
    comments: str | None = None
    content: str | None = None  # <content:encoded>
    categories: list[str] = Field(default_factory=list)


_FIELDS = {
    "title": "title",
    "link": "link",
    "description": "description",
    "pubdate": "pub_date",
    "guid": "guid",
    "author": "author",
    "comments": "comments",
    "content:encoded": "content",
}


class RssItemStrategy:
    """Populates RssItem from field nodes.

    Value is the stripped text, falling back to the CDATA block.
    """

    def init(self) -> RssItem:
        return RssItem()

    def populate(self, record: RssItem, node: RawNode) -> None:
        value = _value(node)
        if value is None:
            return
        if node.tag == "category":
            record.categories.append(value)
            return
        attr = _FIELDS.get(node.tag)
        if attr is not None:
            setattr(record, attr, value)


def _value(node: RawNode) -> str | None:
    if node.text is not None:
        return node.text.strip()
    return node.literal
