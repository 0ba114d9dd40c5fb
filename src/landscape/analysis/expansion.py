"""
Expansion Engine.

Grows a seed node set in two ways:

- Connected: every edge touching a seed, in either direction, plus the node
  on its other end.
- Reachable: breadth-first traversal of outgoing edges only, bounded by
  max_depth hops from the seeds.

Depth is measured from the seeds. When connected expansion is on, the
connected ring is hop 1, so reachable traversal continues from it with the
remaining budget:

    A --e1--> B --e2--> C

    seeds={A}, connected on, max_depth=1  ->  reachable = {}
    seeds={A}, connected on, max_depth=2  ->  reachable = {C}, edges = {e2}

Connected and reachable sets never overlap: the visited-edge set starts with
the connected edges and the visited-node set with the seeds and connected
nodes.
"""

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Iterable, Set, Tuple

from ..core.graph import LandscapeGraph

logger = logging.getLogger(__name__)


@dataclass
class ExpansionResult:
    """Node and edge ids discovered around a seed set."""
    connected_nodes: Set[str] = field(default_factory=set)
    connected_edges: Set[str] = field(default_factory=set)
    reachable_nodes: Set[str] = field(default_factory=set)
    reachable_edges: Set[str] = field(default_factory=set)

    def all_ids(self) -> Set[str]:
        return self.connected_nodes | self.connected_edges | self.reachable_nodes | self.reachable_edges


def connected_elements(graph: LandscapeGraph, seeds: Set[str]) -> Tuple[Set[str], Set[str]]:
    """Return (nodes, edges) directly attached to seeds, excluding the seeds."""
    nodes: Set[str] = set()
    edges: Set[str] = set()
    for seed in seeds:
        for edge in graph.incident_edges(seed):
            edges.add(edge.id)
            other = edge.other_end(seed)
            if other not in seeds:
                nodes.add(other)
    return nodes, edges


def expand(
    graph: LandscapeGraph,
    seeds: Iterable[str],
    include_connected: bool = True,
    include_reachable: bool = True,
    max_depth: int = 3,
) -> ExpansionResult:
    """
    Compute connected and reachable elements around seeds.

    Only set membership is guaranteed; the order in which nodes of one
    frontier are visited is arbitrary.

    Raises:
        ValueError: If max_depth is negative.
    """
    if max_depth < 0:
        raise ValueError(f"max_depth must be >= 0, got {max_depth}")

    seed_set = {s for s in seeds if graph.has_node(s)}
    result = ExpansionResult()
    if not seed_set:
        return result

    if include_connected:
        result.connected_nodes, result.connected_edges = connected_elements(graph, seed_set)

    if include_reachable:
        result.reachable_nodes, result.reachable_edges = _reachable(graph, seed_set, result, max_depth)

    logger.debug(
        "Expanded %d seeds: %d connected nodes, %d connected edges, %d reachable nodes, %d reachable edges",
        len(seed_set),
        len(result.connected_nodes),
        len(result.connected_edges),
        len(result.reachable_nodes),
        len(result.reachable_edges),
    )
    return result


def _reachable(
    graph: LandscapeGraph,
    seeds: Set[str],
    connected: ExpansionResult,
    max_depth: int,
) -> Tuple[Set[str], Set[str]]:
    visited_nodes: Set[str] = seeds | connected.connected_nodes
    visited_edges: Set[str] = set(connected.connected_edges)

    queue: Deque[Tuple[str, int]] = deque((seed, 0) for seed in seeds)
    queue.extend((node_id, 1) for node_id in connected.connected_nodes)

    reachable_nodes: Set[str] = set()
    reachable_edges: Set[str] = set()

    while queue:
        current, depth = queue.popleft()
        if depth >= max_depth:
            continue

        for edge in graph.out_edges(current):
            if edge.id in visited_edges:
                continue
            visited_edges.add(edge.id)
            reachable_edges.add(edge.id)

            if edge.target not in visited_nodes:
                visited_nodes.add(edge.target)
                reachable_nodes.add(edge.target)
                queue.append((edge.target, depth + 1))

    return reachable_nodes, reachable_edges
