"""Tests for comment records and sort modes."""

from datetime import datetime, timedelta, timezone

import pytest

from feedthread.thread.types import Comment, SortMode, ThreadKind, ThreadNode, parse_timestamp


def test_parse_timestamp_variants():
    expected = datetime(2026, 3, 4, 15, 0, tzinfo=timezone.utc)
    assert parse_timestamp("2026-03-04T15:00:00Z") == expected
    assert parse_timestamp("2026-03-04T15:00:00.000Z") == expected
    assert parse_timestamp("2026-03-04T15:00:00") == expected
    assert parse_timestamp(datetime(2026, 3, 4, 15, 0)) == expected
    assert parse_timestamp("2026-03-04T17:00:00+02:00") == expected


def test_comment_from_camel_and_snake_case():
    camel = Comment.from_dict(
        {
            "id": 7,
            "parentId": 3,
            "createdAt": "2026-03-04T15:00:00Z",
            "authorLabel": "Anon-ABCD",
            "isOriginalPoster": True,
            "feedbackId": "fb1",
            "content": "hello",
        }
    )
    snake = Comment.from_dict(
        {
            "id": "7",
            "parent_id": "3",
            "created_at": "2026-03-04T15:00:00Z",
            "author_label": "Anon-ABCD",
            "is_original_poster": True,
            "thread_id": "fb1",
            "content": "hello",
        }
    )
    assert camel == snake
    assert camel.id == "7"
    assert camel.parent_id == "3"


def test_comment_to_dict_round_trip():
    comment = Comment(
        id="c1",
        created_at=datetime(2026, 3, 4, tzinfo=timezone.utc),
        content="text",
        parent_id="p",
        author_label="Anon-0001",
        thread_id="fb1",
    )
    data = comment.to_dict()
    assert data["parentId"] == "p"
    assert data["isOriginalPoster"] is False
    assert Comment.from_dict(data) == comment


def test_sort_mode_parse():
    assert SortMode.parse("best") is SortMode.BEST
    assert SortMode.parse("New") is SortMode.NEWEST
    assert SortMode.parse(" old ") is SortMode.OLDEST
    assert SortMode.parse(SortMode.NEWEST) is SortMode.NEWEST
    with pytest.raises(ValueError):
        SortMode.parse("top")


def test_thread_kind_paths():
    assert ThreadKind.FEEDBACK.collection_path.format(id="x") == "feedback/x/comments"
    assert ThreadKind.QUESTION.collection_path.format(id="x") == "questions/x/responses"


def test_node_walk_is_depth_first():
    base = datetime(2026, 3, 4, tzinfo=timezone.utc)

    def node(i, replies=()):
        return ThreadNode(comment=Comment(id=i, created_at=base + timedelta(minutes=1)), replies=list(replies))

    tree = node("a", [node("b", [node("c")]), node("d")])
    assert [n.id for n in tree.walk()] == ["a", "b", "c", "d"]
    assert tree.reply_count == 2
