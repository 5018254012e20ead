"""Parent-pointer hierarchy helpers shared by organisation units and categories.

Rows are plain mappings carrying ``id`` and ``parent_id``. ``build_tree`` keeps
the rows in an arena list and links children by index, so the output is
deterministic (input order) and each node is emitted exactly once.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Hashable, Iterable, Mapping, Optional, Sequence

from app.packages.kangalos.core.exceptions import CycleDetectedError, NotFoundError

logger = logging.getLogger(__name__)

TreeNode = dict[str, Any]


def build_tree(
    nodes: Sequence[Mapping[str, Any]],
    *,
    id_key: str = "id",
    parent_key: str = "parent_id",
    children_key: str = "children",
) -> list[TreeNode]:
    """从扁平的父指针列表重建森林。

    - 父节点不存在（悬空引用）时，该节点作为孤立根节点返回并记录告警；
    - 存在无法从任何根到达的节点（即父指针成环）时抛出 ``CycleDetectedError``。
    """
    arena: list[TreeNode] = []
    index: dict[Hashable, int] = {}
    for node in nodes:
        index[node[id_key]] = len(arena)
        arena.append({**node, children_key: []})

    child_slots: list[list[int]] = [[] for _ in arena]
    root_slots: list[int] = []
    for slot, node in enumerate(arena):
        parent_id = node.get(parent_key)
        if parent_id is None:
            root_slots.append(slot)
            continue
        parent_slot = index.get(parent_id)
        if parent_slot is None:
            logger.warning("Node %s references non-existent parent %s", node[id_key], parent_id)
            root_slots.append(slot)
            continue
        child_slots[parent_slot].append(slot)

    reached = [False] * len(arena)
    stack = list(root_slots)
    while stack:
        slot = stack.pop()
        reached[slot] = True
        stack.extend(child_slots[slot])
    unreachable = [arena[slot][id_key] for slot, seen in enumerate(reached) if not seen]
    if unreachable:
        raise CycleDetectedError(unreachable)

    for slot, children in enumerate(child_slots):
        arena[slot][children_key] = [arena[child] for child in children]
    return [arena[slot] for slot in root_slots]


def flatten_tree(
    roots: Iterable[Mapping[str, Any]],
    *,
    children_key: str = "children",
) -> list[dict[str, Any]]:
    """深度优先展开树，返回去掉 ``children`` 的节点列表（先序）。"""
    flat: list[dict[str, Any]] = []
    stack = list(reversed(list(roots)))
    while stack:
        node = stack.pop()
        flat.append({key: value for key, value in node.items() if key != children_key})
        stack.extend(reversed(node.get(children_key, [])))
    return flat


def resolve_ancestry(
    node_id: Hashable,
    lookup_by_id: Callable[[Hashable], Optional[Any]],
    *,
    parent_attr: str = "parent_id",
) -> list[Any]:
    """自下而上沿父指针查找祖先，返回从根到当前节点的有序列表。

    ``lookup_by_id`` 返回 ORM 对象或映射；起点不存在时抛出 ``NotFoundError``，
    中途父节点缺失则返回已收集到的部分链路。
    """
    current = lookup_by_id(node_id)
    if current is None:
        raise NotFoundError(f"Node with id {node_id} not found")

    chain = [current]
    visited = {node_id}
    parent_id = _parent_of(current, parent_attr)
    while parent_id is not None:
        if parent_id in visited:
            raise CycleDetectedError(visited)
        visited.add(parent_id)
        parent = lookup_by_id(parent_id)
        if parent is None:
            logger.warning("Ancestry of %s stops at dangling parent %s", node_id, parent_id)
            break
        chain.insert(0, parent)
        parent_id = _parent_of(parent, parent_attr)
    return chain


def would_create_cycle(
    node_id: Hashable,
    new_parent_id: Optional[Hashable],
    lookup_by_id: Callable[[Hashable], Optional[Any]],
    *,
    id_attr: str = "id",
    parent_attr: str = "parent_id",
) -> bool:
    """判断把 ``node_id`` 挂到 ``new_parent_id`` 下是否会形成环。"""
    if new_parent_id is None:
        return False
    if new_parent_id == node_id:
        return True
    try:
        chain = resolve_ancestry(new_parent_id, lookup_by_id, parent_attr=parent_attr)
    except CycleDetectedError:
        return True
    return any(_value_of(item, id_attr) == node_id for item in chain)


def _value_of(item: Any, attr: str) -> Any:
    if isinstance(item, Mapping):
        return item.get(attr)
    return getattr(item, attr, None)


def _parent_of(item: Any, parent_attr: str) -> Any:
    return _value_of(item, parent_attr)
