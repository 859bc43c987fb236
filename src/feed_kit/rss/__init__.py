from .item import RssItem, RssItemStrategy

__all__ = [
    "RssItem",
    "RssItemStrategy",
]
