"""Tests for building reply trees from flat comment lists."""

from conftest import make_comment

from feedthread.thread.builder import build_tree, index_nodes


def _all_ids(roots):
    ids = []
    for root in roots:
        ids.extend(node.id for node in root.walk())
    return ids


def test_build_empty():
    assert build_tree([]) == []


def test_build_nested():
    comments = [
        make_comment("r1"),
        make_comment("c1", "r1", minutes=1),
        make_comment("c2", "c1", minutes=2),
        make_comment("r2", minutes=3),
    ]
    roots = build_tree(comments)
    assert [r.id for r in roots] == ["r1", "r2"]
    assert [c.id for c in roots[0].replies] == ["c1"]
    assert [c.id for c in roots[0].replies[0].replies] == ["c2"]
    assert roots[1].replies == []


def test_child_listed_before_parent():
    comments = [make_comment("c1", "r1", minutes=1), make_comment("r1")]
    roots = build_tree(comments)
    assert [r.id for r in roots] == ["r1"]
    assert [c.id for c in roots[0].replies] == ["c1"]


def test_completeness():
    comments = [
        make_comment("a"),
        make_comment("b", "a"),
        make_comment("c", "a"),
        make_comment("d", "c"),
        make_comment("e", "missing"),
        make_comment("f"),
        make_comment("g", "d"),
    ]
    ids = _all_ids(build_tree(comments))
    assert sorted(ids) == sorted(c.id for c in comments)
    assert len(ids) == len(set(ids))


def test_orphan_becomes_root():
    comments = [make_comment("r1"), make_comment("o1", "deleted-parent")]
    roots = build_tree(comments)
    assert [r.id for r in roots] == ["r1", "o1"]
    assert roots[1].replies == []


def test_duplicate_ids_last_write_wins():
    first = make_comment("x", content="first version")
    second = make_comment("x", content="second version")
    roots = build_tree([first, make_comment("y"), second])
    assert [r.id for r in roots] == ["x", "y"]
    assert roots[0].comment.content == "second version"
    assert index_nodes([first, second])["x"].comment is second


def test_duplicate_parent_keeps_children():
    comments = [
        make_comment("p"),
        make_comment("child", "p"),
        make_comment("p", content="edited"),
    ]
    roots = build_tree(comments)
    assert [r.id for r in roots] == ["p"]
    assert [c.id for c in roots[0].replies] == ["child"]


def test_reply_cycle_is_promoted_to_root():
    comments = [make_comment("a", "b"), make_comment("b", "a"), make_comment("r")]
    roots = build_tree(comments)
    ids = _all_ids(roots)
    assert sorted(ids) == ["a", "b", "r"]
    assert len(ids) == 3
    assert [r.id for r in roots] == ["r", "a"]
    assert [c.id for c in roots[1].replies] == ["b"]


def test_self_parent_is_root():
    roots = build_tree([make_comment("s", "s")])
    assert [r.id for r in roots] == ["s"]
    assert roots[0].replies == []
