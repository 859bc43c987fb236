from feed_kit.parsing.accumulator import RecordAccumulator
from feed_kit.parsing.models import (
    EndTag,
    Event,
    LiteralBlock,
    ParseState,
    RawNode,
    StartTag,
    Text,
)
from feed_kit.parsing.strategy import FunctionStrategy


def node_collector() -> FunctionStrategy[list[RawNode]]:
    return FunctionStrategy(init=list, populate=lambda record, node: record.append(node))


def run(events: list[Event]) -> list[list[RawNode]]:
    accumulator = RecordAccumulator("item", node_collector())
    records = []
    for event in events:
        record = accumulator.feed(event)
        if record is not None:
            records.append(record)
    return records


def test_fields_outside_records_are_ignored() -> None:
    records = run(
        [
            StartTag("channel"),
            StartTag("title"),
            Text("Feed"),
            EndTag("title"),
            EndTag("channel"),
        ]
    )
    assert records == []


def test_record_collects_field_nodes() -> None:
    records = run(
        [
            StartTag("item"),
            Text("\n  "),
            StartTag("title"),
            Text("A"),
            EndTag("title"),
            StartTag("description"),
            Text("\n"),
            LiteralBlock("x"),
            Text("\n"),
            EndTag("description"),
            EndTag("item"),
        ]
    )
    assert records == [
        [
            RawNode(tag="title", text="A"),
            RawNode(tag="description", literal="x"),
        ]
    ]


def test_text_and_literal_are_both_kept() -> None:
    records = run(
        [
            StartTag("item"),
            StartTag("content"),
            Text("before "),
            LiteralBlock("cdata"),
            Text("after"),
            EndTag("content"),
            EndTag("item"),
        ]
    )
    assert records[0] == [RawNode(tag="content", text="before after", literal="cdata")]


def test_nested_record_tag_is_a_field() -> None:
    records = run(
        [
            StartTag("item"),
            StartTag("item"),
            Text("inner"),
            EndTag("item"),
            StartTag("title"),
            Text("T"),
            EndTag("title"),
            EndTag("item"),
        ]
    )
    assert records == [
        [RawNode(tag="item", text="inner"), RawNode(tag="title", text="T")]
    ]


def test_nested_fields_deliver_inner_first() -> None:
    records = run(
        [
            StartTag("item"),
            StartTag("image"),
            StartTag("url"),
            Text("u"),
            EndTag("url"),
            EndTag("image"),
            EndTag("item"),
        ]
    )
    assert records == [[RawNode(tag="url", text="u"), RawNode(tag="image")]]


def test_unclosed_inner_field_is_dropped() -> None:
    records = run(
        [
            StartTag("item"),
            StartTag("title"),
            Text("A"),
            StartTag("b"),
            Text("bold"),
            EndTag("title"),
            EndTag("item"),
        ]
    )
    assert records == [[RawNode(tag="title", text="A")]]


def test_stray_end_tag_is_ignored() -> None:
    records = run([StartTag("item"), EndTag("nope"), EndTag("item")])
    assert records == [[]]


def test_self_closing_field_and_record() -> None:
    records = run(
        [
            StartTag("item", self_closing=True),
            StartTag("item"),
            StartTag("enclosure", self_closing=True),
            EndTag("item"),
        ]
    )
    assert records == [[], [RawNode(tag="enclosure")]]


def test_finish_discards_partial_record() -> None:
    accumulator = RecordAccumulator("item", node_collector())
    accumulator.feed(StartTag("item"))
    assert accumulator.state is ParseState.IN_RECORD

    accumulator.finish()

    assert accumulator.state is ParseState.SEEKING
    assert not accumulator.in_record
