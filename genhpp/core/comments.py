"""
Comment threading for community posts.

Comments are stored flat with an optional ``parent_id``. The tree is rebuilt
in one pass over an id -> node map:
- a reply is attached to its direct parent's ``replies``
- a comment whose parent is missing (deleted or foreign) becomes a root
- order at every level follows input order (created_at ascending)
"""

from typing import Any, Dict, Iterable, List, Mapping


def build_comment_tree(comments: Iterable[Mapping[str, Any]]) -> List[Dict[str, Any]]:
    """
    Nest a flat comment list by parent_id.

    Examples:
        >>> tree = build_comment_tree([{"id": 1, "parent_id": None}, {"id": 2, "parent_id": 1}])
        >>> [c["id"] for c in tree[0]["replies"]]
        [2]
    """
    nodes: Dict[Any, Dict[str, Any]] = {}
    ordered: List[Dict[str, Any]] = []
    for comment in comments:
        node = dict(comment)
        node["replies"] = []
        nodes[node["id"]] = node
        ordered.append(node)

    roots: List[Dict[str, Any]] = []
    for node in ordered:
        parent = nodes.get(node.get("parent_id"))
        if parent is not None and parent is not node:
            parent["replies"].append(node)
        else:
            roots.append(node)
    return roots
