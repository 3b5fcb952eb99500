"""Flattening of the device group hierarchy into a parent lookup."""

from __future__ import annotations

from collections.abc import Iterable

from panorama_cli.models.hierarchy import HierarchyNode


def flatten_hierarchy(nodes: Iterable[HierarchyNode] | None) -> dict[str, str]:
    """Map every device group name to its parent's name.

    Top-level groups map to ``""``. The walk is pre-order, depth first, in
    the order the groups were listed; a name that occurs more than once
    keeps the parent of its last occurrence.
    """

    parents: dict[str, str] = {}

    def visit(node: HierarchyNode, parent: str) -> None:
        parents[node.name] = parent
        for child in node.children:
            visit(child, node.name)

    for node in nodes or ():
        visit(node, "")
    return parents
