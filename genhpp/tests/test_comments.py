"""
Test suite for comment threading.
"""

from genhpp.core.comments import build_comment_tree


def _c(id, parent_id=None):
    return {"id": id, "parent_id": parent_id, "text": f"komentar {id}"}


def test_flat_comments_are_roots():
    tree = build_comment_tree([_c(1), _c(2)])
    assert [n["id"] for n in tree] == [1, 2]
    assert all(n["replies"] == [] for n in tree)


def test_replies_nest_under_direct_parent():
    """Test multi-level replies keep input order at each level."""
    tree = build_comment_tree([_c(1), _c(2, 1), _c(3), _c(4, 2), _c(5, 1)])
    assert [n["id"] for n in tree] == [1, 3]
    assert [n["id"] for n in tree[0]["replies"]] == [2, 5]
    assert [n["id"] for n in tree[0]["replies"][0]["replies"]] == [4]


def test_orphans_become_roots():
    """Test a reply whose parent is gone is promoted to the top level."""
    tree = build_comment_tree([_c(1), _c(7, 99)])
    assert [n["id"] for n in tree] == [1, 7]


def test_reply_listed_before_parent_still_nests():
    tree = build_comment_tree([_c(2, 1), _c(1)])
    assert [n["id"] for n in tree] == [1]
    assert tree[0]["replies"][0]["id"] == 2


def test_input_is_not_mutated():
    comments = [_c(1), _c(2, 1)]
    build_comment_tree(comments)
    assert "replies" not in comments[0]
