from __future__ import annotations

import math

import pytest

from scribeline.history.authors import LOCAL_AUTHOR, Author
from scribeline.history.snapshots import Snapshot, create_snapshot
from scribeline.history.timeline import DocumentTimeline, clamp_timeline_value


def test_commit_appends_and_moves_to_tip(alice: Author, bob: Author) -> None:
    timeline = DocumentTimeline("draft", alice)

    timeline.commit("draft one", bob)
    timeline.commit("draft one two", alice)

    assert len(timeline) == 3
    assert timeline.index == 2
    assert timeline.latest_entry().content == "draft one two"
    assert timeline.current_entry() is timeline.latest_entry()


def test_commit_ignores_unchanged_content(alice: Author) -> None:
    timeline = DocumentTimeline("same", alice)
    emissions: list[int] = []
    timeline.entries_changed.connect(emissions.append)

    timeline.commit("same", alice)

    assert len(timeline) == 1
    assert emissions == []


def test_commit_seeds_empty_timeline(alice: Author) -> None:
    timeline = DocumentTimeline()

    entry = timeline.commit("first", alice)

    assert len(timeline) == 1
    assert entry == create_snapshot("first", alice)
    assert timeline.index == 0


def test_eviction_keeps_capacity_and_drops_oldest(alice: Author) -> None:
    timeline = DocumentTimeline("v0", alice, capacity=240)
    first = timeline.entries[0]

    for number in range(1, 241):
        timeline.commit(f"v{number}", alice)

    assert len(timeline) == 240
    assert timeline.index == 239
    assert first not in timeline.entries
    assert timeline.entries[0].content == "v1"
    assert timeline.latest_entry().content == "v240"


def test_eviction_with_small_capacity(alice: Author) -> None:
    timeline = DocumentTimeline("a", alice, capacity=2)

    timeline.commit("ab", alice)
    timeline.commit("abc", alice)

    assert [entry.content for entry in timeline.entries] == ["ab", "abc"]


def test_invalid_capacity_is_rejected() -> None:
    with pytest.raises(ValueError):
        DocumentTimeline("", capacity=0)


def test_scrub_does_not_mutate_entries(fake_editor, alice: Author, bob: Author) -> None:
    timeline = DocumentTimeline("one", alice, editor=fake_editor)
    timeline.commit("one two", bob)
    timeline.commit("one two three", alice)
    fake_editor.type_text("one two three")
    before = timeline.entries

    snapshot = timeline.scrub(0)

    assert timeline.entries == before
    assert timeline.index == 0
    assert snapshot.content == "one"
    assert fake_editor.toPlainText() == "one"
    assert fake_editor.writes == ["one"]


def test_scrub_holds_flag_only_during_write(fake_editor, alice: Author) -> None:
    timeline = DocumentTimeline("one", alice, editor=fake_editor)
    timeline.commit("one two", alice)
    observed: list[bool] = []
    fake_editor.textChanged.connect(lambda: observed.append(timeline.applying_snapshot))

    timeline.scrub(0)

    assert observed == [True]
    assert timeline.applying_snapshot is False


def test_scrub_skips_write_when_editor_already_matches(fake_editor, alice: Author) -> None:
    timeline = DocumentTimeline("one", alice, editor=fake_editor)
    timeline.commit("one two", alice)
    fake_editor.type_text("one")

    timeline.scrub(0)

    assert fake_editor.writes == []


@pytest.mark.parametrize(("target", "expected"), [(-5, 0), (1, 1), (99, 2), (math.nan, 0)])
def test_scrub_clamps_target(alice: Author, target: float, expected: int) -> None:
    timeline = DocumentTimeline("a", alice)
    timeline.commit("ab", alice)
    timeline.commit("abc", alice)

    timeline.scrub(target)

    assert timeline.index == expected


def test_commit_after_scrub_returns_to_tip(fake_editor, alice: Author, bob: Author) -> None:
    timeline = DocumentTimeline("one", alice, editor=fake_editor)
    timeline.commit("one two", alice)
    timeline.scrub(0)

    timeline.commit("one two!", bob)

    assert timeline.index == len(timeline) - 1
    assert timeline.is_at_tip


def test_scrub_emits_index_changes(alice: Author) -> None:
    timeline = DocumentTimeline("a", alice)
    timeline.commit("ab", alice)
    indexes: list[int] = []
    timeline.index_changed.connect(indexes.append)

    timeline.scrub(0)
    timeline.scrub(0)
    timeline.scrub(1)

    assert indexes == [0, 1]


def test_empty_timeline_falls_back_to_empty_snapshot() -> None:
    timeline = DocumentTimeline()

    assert timeline.current_entry() == Snapshot("", ())
    assert timeline.latest_entry() == Snapshot("", ())
    assert timeline.scrub(3) == Snapshot("", ())
    assert timeline.index == 0


def test_reset_replaces_history(alice: Author) -> None:
    timeline = DocumentTimeline("a", alice)
    timeline.commit("ab", alice)

    timeline.reset("fresh")

    assert len(timeline) == 1
    assert timeline.index == 0
    assert timeline.latest_entry().attribution == (LOCAL_AUTHOR,) * 5


def test_scrub_with_real_plain_text_edit(qt_app, alice: Author) -> None:
    from PySide6.QtWidgets import QPlainTextEdit

    editor = QPlainTextEdit()
    editor.setPlainText("one two")
    timeline = DocumentTimeline("one", alice, editor=editor)
    timeline.commit("one two", alice)
    recorded: list[str] = []
    editor.textChanged.connect(
        lambda: None if timeline.applying_snapshot else recorded.append(editor.toPlainText())
    )

    timeline.scrub(0)

    assert editor.toPlainText() == "one"
    assert recorded == []
    assert len(timeline) == 2


@pytest.mark.parametrize(
    ("value", "maximum", "expected"),
    [(-5, 10, 0), (3, 10, 3), (99, 10, 10), (math.nan, 10, 0), (2.7, 10, 2), (4, -1, 0)],
)
def test_clamp_timeline_value(value: float, maximum: float, expected: int) -> None:
    assert clamp_timeline_value(value, maximum) == expected


@pytest.mark.parametrize(("target", "expected"), [(10**400, 2), (-(10**400), 0), (math.inf, 0)])
def test_scrub_handles_out_of_range_targets(alice: Author, target: float, expected: int) -> None:
    timeline = DocumentTimeline("a", alice)
    timeline.commit("ab", alice)
    timeline.commit("abc", alice)

    timeline.scrub(target)

    assert timeline.index == expected


def test_clamp_timeline_value_accepts_huge_integers() -> None:
    assert clamp_timeline_value(10**400, 10) == 10
    assert clamp_timeline_value(-(10**400), 10) == 0
    assert clamp_timeline_value(3, 10**400) == 3
