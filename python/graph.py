"""
Directed acyclic graph with a single root, built from shared GraphNodes.

Nodes may have several parents (convergent edges), so a node is reachable
by more than one route. Graph.add refuses any edge that would close a cycle.
"""

from __future__ import annotations

import logging
from collections.abc import Hashable, Mapping
from types import MappingProxyType
from typing import Generic, TypeVar, Union

from spatial_errors import CycleError, ParentNotFoundError

logger = logging.getLogger(__name__)

Id = TypeVar("Id", bound=Hashable)


class GraphNode(Generic[Id]):
    """
    A node with symmetric parent/child links.

    Adding a child also records this node as the child's parent, and adding
    the same child twice is a no-op. Standalone nodes do no cycle checking;
    that lives in Graph.
    """

    def __init__(self, node_id: Id, parent: GraphNode[Id] | None = None) -> None:
        self._id = node_id
        self._parents: list[GraphNode[Id]] = []
        self._children: list[GraphNode[Id]] = []
        if parent is not None:
            parent.add_child(self)

    @property
    def id(self) -> Id:
        return self._id

    @property
    def parents(self) -> list[GraphNode[Id]]:
        """A copy of the parent list."""
        return list(self._parents)

    @property
    def children(self) -> list[GraphNode[Id]]:
        """A copy of the child list."""
        return list(self._children)

    def add_child(self, child: GraphNode[Id]) -> None:
        """Link child below this node, in both directions."""
        if not any(parent is self for parent in child._parents):
            child._parents.append(self)
        if not any(existing is child for existing in self._children):
            self._children.append(child)

    def has_children(self) -> bool:
        return bool(self._children)

    def get_child_paths(self, ancestors: list[Id] | None = None) -> list[list[Id]]:
        """
        Every path of ids from this node down to a leaf.

        A node reached through several parents appears once per route. If
        this node's id is already among the ancestors the branch is a cycle
        and contributes no paths.

        Args:
            ancestors: Ids of the path above this node

        Returns:
            One list of ids per leaf route, each ending at a leaf
        """
        ancestors = ancestors or []
        if self._id in ancestors:
            return []

        path_to_this = [*ancestors, self._id]
        if not self._children:
            return [path_to_this]

        return [path for child in self._children for path in child.get_child_paths(path_to_this)]

    def __str__(self) -> str:
        parent_ids = ",".join(f"[{parent.id}]" for parent in self._parents)
        child_ids = ",".join(f"[{child.id}]" for child in self._children)
        return f"GraphNode(id={self._id!r}, parents={parent_ids}, children={child_ids})"

    def __repr__(self) -> str:
        return f"GraphNode({self._id!r})"


class Graph(Generic[Id]):
    """
    A rooted DAG. Every node other than the root is added via add().

    Example:
        graph = Graph("root")
        graph.add("A", "root")
        graph.add("B", "root")
        graph.add("C", "A")
        graph.add("C", "B")       # C now has two parents
        graph.add("root", "C")    # raises CycleError
    """

    def __init__(self, root_id: Id) -> None:
        self._root: GraphNode[Id] = GraphNode(root_id)
        self._nodes_by_id: dict[Id, GraphNode[Id]] = {root_id: self._root}

    @property
    def root(self) -> GraphNode[Id]:
        return self._root

    @property
    def nodes_by_id(self) -> Mapping[Id, GraphNode[Id]]:
        """Read-only view of the registry. Use add() to change the graph."""
        return MappingProxyType(self._nodes_by_id)

    def add(self, child_id: Id, parent: Union[GraphNode[Id], Id]) -> None:
        """
        Add an edge parent -> child, creating the child node if needed.

        An existing node with child_id is reused, which is how a node gets
        several parents. Nothing is changed if the call fails.

        Args:
            child_id: Id of the child node
            parent: The parent node itself or its id

        Raises:
            ParentNotFoundError: If the parent is not in this graph
            CycleError: If the parent is reachable from the child
        """
        parent_node = self._get_node(parent)
        if parent_node is None:
            raise ParentNotFoundError(f'Cannot add child. Parent not found: "{parent!r}"')

        child = self._nodes_by_id.get(child_id)
        if child is not None and self._reaches(child, parent_node):
            logger.debug("Rejected edge %r -> %r: would create a cycle", parent_node.id, child_id)
            raise CycleError(
                f'Cannot add child "{child_id!r}" to "{parent_node.id!r}": would create a cycle'
            )

        if child is None:
            child = GraphNode(child_id)
            self._nodes_by_id[child_id] = child
        parent_node.add_child(child)

    def _get_node(self, id_or_node: Union[GraphNode[Id], Id]) -> GraphNode[Id] | None:
        if isinstance(id_or_node, GraphNode):
            # Only accept nodes that belong to this graph
            registered = self._nodes_by_id.get(id_or_node.id)
            return id_or_node if registered is id_or_node else None
        return self._nodes_by_id.get(id_or_node)

    @staticmethod
    def _reaches(start: GraphNode[Id], target: GraphNode[Id]) -> bool:
        """True if target is start or one of its descendants."""
        seen: set[int] = set()
        stack = [start]
        while stack:
            node = stack.pop()
            if node is target:
                return True
            if id(node) in seen:
                continue
            seen.add(id(node))
            stack.extend(node._children)
        return False
