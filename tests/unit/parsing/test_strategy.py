from feed_kit.parsing.models import RawNode
from feed_kit.parsing.strategy import DictRecordStrategy, FunctionStrategy


class TestDictRecordStrategy:
    def test_prefers_text_then_literal(self) -> None:
        strategy = DictRecordStrategy()
        record = strategy.init()

        strategy.populate(record, RawNode(tag="title", text="T", literal="L"))
        strategy.populate(record, RawNode(tag="description", literal="D"))
        strategy.populate(record, RawNode(tag="empty"))

        assert record == {"title": "T", "description": "D"}

    def test_field_allow_list(self) -> None:
        strategy = DictRecordStrategy(fields=["Title"])
        record = strategy.init()

        strategy.populate(record, RawNode(tag="title", text="T"))
        strategy.populate(record, RawNode(tag="link", text="L"))

        assert record == {"title": "T"}

    def test_init_returns_fresh_record(self) -> None:
        strategy = DictRecordStrategy()
        assert strategy.init() is not strategy.init()


def test_function_strategy_delegates() -> None:
    strategy = FunctionStrategy(
        init=list, populate=lambda record, node: record.append(node.tag)
    )
    record = strategy.init()
    strategy.populate(record, RawNode(tag="guid"))
    assert record == ["guid"]
