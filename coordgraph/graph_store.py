"""
Graph store for the coordinate playground.

Vertices and edges live in an undirected NetworkX graph:
- nodes are vertex ids with ``x``/``y`` attributes in world pixels
- edges carry their own ``id`` attribute

NetworkX already keeps one edge per unordered pair, so ``(a, b)`` and
``(b, a)`` are the same edge. A separate id -> pair index keeps edges in
creation order and makes delete-by-id cheap.

Ids come from two counters that only grow, so an id is never handed out
twice until ``clear()`` resets both.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, NamedTuple, Optional, Tuple

import networkx as nx

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Vertex:
    id: int
    x: float
    y: float


@dataclass(frozen=True)
class Edge:
    id: int
    v1: int
    v2: int

    def touches(self, vertex_id: int) -> bool:
        return vertex_id in (self.v1, self.v2)


class ChangeKind(str, Enum):
    VERTEX_ADDED = "vertex_added"
    VERTEX_MOVED = "vertex_moved"
    VERTEX_REMOVED = "vertex_removed"
    EDGE_ADDED = "edge_added"
    EDGE_REMOVED = "edge_removed"
    CLEARED = "cleared"


class GraphChange(NamedTuple):
    kind: ChangeKind
    item_id: Optional[int] = None


GraphListener = Callable[[GraphChange], None]


class GraphStore:
    """Owns vertices, edges and the id counters."""

    def __init__(self):
        self._graph = nx.Graph()
        self._edges: Dict[int, Tuple[int, int]] = {}
        self._next_vertex_id = 0
        self._next_edge_id = 0
        self._listeners: List[GraphListener] = []

    # --- Observers ---

    def add_listener(self, callback: GraphListener) -> None:
        self._listeners.append(callback)

    def remove_listener(self, callback: GraphListener) -> None:
        if callback in self._listeners:
            self._listeners.remove(callback)

    def _notify(self, kind: ChangeKind, item_id: Optional[int] = None) -> None:
        change = GraphChange(kind, item_id)
        for callback in list(self._listeners):
            callback(change)

    # --- Queries ---

    @property
    def next_vertex_id(self) -> int:
        return self._next_vertex_id

    @property
    def next_edge_id(self) -> int:
        return self._next_edge_id

    @property
    def vertex_count(self) -> int:
        return self._graph.number_of_nodes()

    @property
    def edge_count(self) -> int:
        return len(self._edges)

    def has_vertex(self, vertex_id: int) -> bool:
        return self._graph.has_node(vertex_id)

    def vertex(self, vertex_id: int) -> Optional[Vertex]:
        if not self._graph.has_node(vertex_id):
            return None
        attrs = self._graph.nodes[vertex_id]
        return Vertex(vertex_id, attrs["x"], attrs["y"])

    def vertices(self) -> List[Vertex]:
        """All vertices in insertion order."""
        return [Vertex(n, attrs["x"], attrs["y"]) for n, attrs in self._graph.nodes(data=True)]

    def edge(self, edge_id: int) -> Optional[Edge]:
        pair = self._edges.get(edge_id)
        if pair is None:
            return None
        return Edge(edge_id, pair[0], pair[1])

    def edges(self) -> List[Edge]:
        """All edges in creation order."""
        return [Edge(eid, v1, v2) for eid, (v1, v2) in self._edges.items()]

    def has_edge_between(self, a: int, b: int) -> bool:
        return self._graph.has_edge(a, b)

    def edges_of(self, vertex_id: int) -> List[Edge]:
        return [e for e in self.edges() if e.touches(vertex_id)]

    def neighbors(self, vertex_id: int) -> List[int]:
        if not self._graph.has_node(vertex_id):
            return []
        return list(self._graph.neighbors(vertex_id))

    # --- Mutations ---

    def add_vertex(self, wx: float, wy: float) -> int:
        vertex_id = self._next_vertex_id
        self._next_vertex_id += 1
        self._graph.add_node(vertex_id, x=float(wx), y=float(wy))
        logger.debug(f"Added vertex V{vertex_id} at world ({wx:.2f}, {wy:.2f})")
        self._notify(ChangeKind.VERTEX_ADDED, vertex_id)
        return vertex_id

    def move_vertex(self, vertex_id: int, wx: float, wy: float) -> bool:
        if not self._graph.has_node(vertex_id):
            return False
        attrs = self._graph.nodes[vertex_id]
        attrs["x"] = float(wx)
        attrs["y"] = float(wy)
        self._notify(ChangeKind.VERTEX_MOVED, vertex_id)
        return True

    def delete_vertex(self, vertex_id: int) -> bool:
        """
        Remove a vertex and every edge that references it.

        Unknown ids are a no-op and return False.
        """
        if not self._graph.has_node(vertex_id):
            return False
        removed = [eid for eid, pair in self._edges.items() if vertex_id in pair]
        for eid in removed:
            del self._edges[eid]
        # Graph.remove_node drops the incident edges as well
        self._graph.remove_node(vertex_id)
        logger.debug(f"Deleted vertex V{vertex_id} and {len(removed)} incident edge(s)")
        for eid in removed:
            self._notify(ChangeKind.EDGE_REMOVED, eid)
        self._notify(ChangeKind.VERTEX_REMOVED, vertex_id)
        return True

    def add_edge(self, v1: int, v2: int) -> Optional[int]:
        """
        Connect two distinct vertices.

        Returns the new edge id, or None when the edge is a self loop, an
        endpoint is missing, or the pair is already connected in either order.
        """
        if v1 == v2:
            return None
        if not (self._graph.has_node(v1) and self._graph.has_node(v2)):
            return None
        if self._graph.has_edge(v1, v2):
            return None
        edge_id = self._next_edge_id
        self._next_edge_id += 1
        self._graph.add_edge(v1, v2, id=edge_id)
        self._edges[edge_id] = (v1, v2)
        logger.debug(f"Added edge e{edge_id}: V{v1} <-> V{v2}")
        self._notify(ChangeKind.EDGE_ADDED, edge_id)
        return edge_id

    def delete_edge(self, edge_id: int) -> bool:
        pair = self._edges.pop(edge_id, None)
        if pair is None:
            return False
        self._graph.remove_edge(*pair)
        logger.debug(f"Deleted edge e{edge_id}")
        self._notify(ChangeKind.EDGE_REMOVED, edge_id)
        return True

    def clear(self) -> None:
        """Drop everything and restart both id counters at zero."""
        self._graph.clear()
        self._edges.clear()
        self._next_vertex_id = 0
        self._next_edge_id = 0
        self._notify(ChangeKind.CLEARED)
