"""Copy-on-write helpers over map/list document containers."""

from __future__ import annotations

from functools import singledispatch
from typing import Any

from tree_ot.core.doc_types import MISSING, DocNode, PathKey
from tree_ot.core.errors import MissingNode, NodeExists


@singledispatch
def get_child(node: object, key: PathKey) -> DocNode:
    """Child at `key`, or MISSING when absent (scalars have no children)."""

    del node
    del key
    return MISSING


@get_child.register
def _get_map_child(node: dict, key: PathKey) -> DocNode:
    if not isinstance(key, str):
        return MISSING
    return node.get(key, MISSING)


@get_child.register
def _get_list_child(node: list, key: PathKey) -> DocNode:
    if not _is_index(key) or key >= len(node):
        return MISSING
    return node[key]


def is_container(node: object) -> bool:
    """True for map and list nodes."""

    return isinstance(node, (dict, list))


def clone(node: dict[str, Any] | list[Any]) -> dict[str, Any] | list[Any]:
    """Shallow copy keeping container type; children stay shared."""

    copied = type(node)(node)
    # ruamel.yaml containers carry comments/anchors; copy so edits stay local.
    copy_attributes = getattr(node, "copy_attributes", None)
    if copy_attributes is not None:
        copy_attributes(copied, memo={})
    return copied


@singledispatch
def insert_child(node: object, key: PathKey, value: DocNode, *, path: tuple[PathKey, ...]) -> None:
    """Insert into a container owned by the caller."""

    del key
    del value
    if node is MISSING:
        raise MissingNode(path[:-1], reason="parent container does not exist")
    raise MissingNode(path[:-1], reason=f"cannot insert into {type(node).__name__} leaf")


@insert_child.register
def _insert_map_child(
    node: dict, key: PathKey, value: DocNode, *, path: tuple[PathKey, ...]
) -> None:
    if not isinstance(key, str):
        raise MissingNode(path, reason="list index used on a map")
    if key in node:
        raise NodeExists(path)
    node[key] = value


@insert_child.register
def _insert_list_child(
    node: list, key: PathKey, value: DocNode, *, path: tuple[PathKey, ...]
) -> None:
    if not _is_index(key):
        raise MissingNode(path, reason="map key used on a list")
    if key > len(node):
        raise MissingNode(path, reason=f"index out of bounds (length {len(node)})")
    node.insert(key, value)


def set_child(node: dict[str, Any] | list[Any], key: PathKey, value: DocNode) -> None:
    """Replace existing child in a container owned by the caller."""

    node[key] = value  # type: ignore[index]


def remove_child(node: dict[str, Any] | list[Any], key: PathKey) -> None:
    """Delete existing child from a container owned by the caller."""

    del node[key]  # type: ignore[arg-type]


def _is_index(key: object) -> bool:
    return isinstance(key, int) and not isinstance(key, bool) and key >= 0
