"""层级结构工具（建树、展开、祖先链、成环检测）的单元测试。"""

import pytest

from app.packages.kangalos.core.exceptions import CycleDetectedError, NotFoundError
from app.packages.kangalos.utils.tree import (
    build_tree,
    flatten_tree,
    resolve_ancestry,
    would_create_cycle,
)


def _rows():
    return [
        {"id": "ur", "name": "UR", "parent_id": None},
        {"id": "cst", "name": "College A", "parent_id": "ur"},
        {"id": "ict", "name": "School of ICT", "parent_id": "cst"},
        {"id": "eng", "name": "School of Engineering", "parent_id": "cst"},
        {"id": "cbe", "name": "College B", "parent_id": "ur"},
    ]


def test_build_tree_nests_children_in_input_order():
    roots = build_tree(_rows())

    assert [root["id"] for root in roots] == ["ur"]
    colleges = roots[0]["children"]
    assert [node["id"] for node in colleges] == ["cst", "cbe"]
    assert [node["id"] for node in colleges[0]["children"]] == ["ict", "eng"]
    assert colleges[1]["children"] == []


def test_flatten_tree_restores_every_node_once():
    rows = _rows()
    flat = flatten_tree(build_tree(rows))

    assert sorted(node["id"] for node in flat) == sorted(row["id"] for row in rows)
    by_id = {node["id"]: node for node in flat}
    for row in rows:
        assert by_id[row["id"]] == row


def test_flatten_tree_is_preorder():
    flat = flatten_tree(build_tree(_rows()))
    assert [node["id"] for node in flat] == ["ur", "cst", "ict", "eng", "cbe"]


def test_dangling_parent_becomes_root():
    rows = [
        {"id": "a", "parent_id": None},
        {"id": "orphan", "parent_id": "missing"},
    ]
    roots = build_tree(rows)
    assert [root["id"] for root in roots] == ["a", "orphan"]


def test_cycle_is_reported():
    rows = [
        {"id": "root", "parent_id": None},
        {"id": "x", "parent_id": "y"},
        {"id": "y", "parent_id": "x"},
    ]
    with pytest.raises(CycleDetectedError) as exc_info:
        build_tree(rows)
    assert exc_info.value.node_ids == ["x", "y"]
    assert exc_info.value.status_code == 409


def test_empty_input_yields_empty_forest():
    assert build_tree([]) == []
    assert flatten_tree([]) == []


def test_resolve_ancestry_returns_root_first():
    lookup = {row["id"]: row for row in _rows()}.get
    chain = resolve_ancestry("ict", lookup)
    assert [item["id"] for item in chain] == ["ur", "cst", "ict"]


def test_resolve_ancestry_of_root_is_itself():
    lookup = {row["id"]: row for row in _rows()}.get
    assert [item["id"] for item in resolve_ancestry("ur", lookup)] == ["ur"]


def test_resolve_ancestry_missing_start():
    with pytest.raises(NotFoundError):
        resolve_ancestry("nope", {}.get)


def test_resolve_ancestry_stops_at_dangling_parent():
    rows = {"b": {"id": "b", "parent_id": "gone"}, "c": {"id": "c", "parent_id": "b"}}
    chain = resolve_ancestry("c", rows.get)
    assert [item["id"] for item in chain] == ["b", "c"]


def test_resolve_ancestry_detects_cycle():
    rows = {"x": {"id": "x", "parent_id": "y"}, "y": {"id": "y", "parent_id": "x"}}
    with pytest.raises(CycleDetectedError):
        resolve_ancestry("x", rows.get)


def test_resolve_ancestry_accepts_objects():
    class Node:
        def __init__(self, id, parent_id):
            self.id = id
            self.parent_id = parent_id

    nodes = {"a": Node("a", None), "b": Node("b", "a")}
    assert [item.id for item in resolve_ancestry("b", nodes.get)] == ["a", "b"]


def test_would_create_cycle():
    lookup = {row["id"]: row for row in _rows()}.get

    assert would_create_cycle("cst", "ict", lookup) is True
    assert would_create_cycle("cst", "cst", lookup) is True
    assert would_create_cycle("ict", "cbe", lookup) is False
    assert would_create_cycle("cst", None, lookup) is False
