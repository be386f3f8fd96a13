"""Graph construction from raw CFG payloads.

This module turns a validated payload into a ``Graph``: it checks id
integrity, classifies every node into exactly one role and synthesizes the
owner → sub-node detail edges. Construction is pure; each call returns a new
graph and never touches a previously built one.
"""

from collections.abc import Iterable, Mapping
from typing import Any

from loguru import logger

from .descriptions import DescriptionIndex
from .exceptions import ValidationError
from .loader import validate_payload
from .models import EdgeKind, Graph, GraphEdge, GraphNode, NodeRole, RawEdge, RawGraph


def connected_node_ids(edges: Iterable[RawEdge]) -> frozenset[int]:
    """Union of every edge endpoint: the main-graph node ids."""
    connected: set[int] = set()
    for edge in edges:
        connected.add(edge.source_id)
        connected.add(edge.dest_id)
    return frozenset(connected)


def classify_roles(
    node_ids: Iterable[int], edges: Iterable[RawEdge]
) -> dict[int, NodeRole]:
    """Derive the role of every node from the flow edge set.

    A node outside the connected set is DETAIL. Connected nodes are START
    (no incoming, some outgoing), END (some incoming, no outgoing) or MAIN.
    A self-loop counts as both incoming and outgoing.

    Args:
        node_ids: All node ids of the graph
        edges: Raw flow edges

    Returns:
        Mapping of node id to role, in ``node_ids`` order
    """
    edges = list(edges)
    has_incoming = {edge.dest_id for edge in edges}
    has_outgoing = {edge.source_id for edge in edges}
    connected = has_incoming | has_outgoing

    roles: dict[int, NodeRole] = {}
    for node_id in node_ids:
        if node_id not in connected:
            roles[node_id] = NodeRole.DETAIL
        elif node_id not in has_incoming:
            roles[node_id] = NodeRole.START
        elif node_id not in has_outgoing:
            roles[node_id] = NodeRole.END
        else:
            roles[node_id] = NodeRole.MAIN
    return roles


def build_graph(raw: RawGraph | Mapping[str, Any]) -> Graph:
    """Build a typed graph from a raw payload.

    Args:
        raw: Validated ``RawGraph`` or a decoded JSON mapping

    Returns:
        New ``Graph`` with roles, flow edges, detail edges and descriptions

    Raises:
        ValidationError: On malformed fields, duplicate node ids, or edges
            and sub-node references naming unknown node ids
    """
    if not isinstance(raw, RawGraph):
        raw = validate_payload(raw)

    node_ids = _check_unique_ids(raw)
    _check_edge_references(raw, node_ids)
    _check_sub_node_references(raw, node_ids)

    roles = classify_roles((node.id for node in raw.nodes), raw.edges)
    descriptions = DescriptionIndex.from_entries(raw.descriptions)

    nodes = {
        node.id: GraphNode(
            id=node.id,
            text=node.text,
            role=roles[node.id],
            sub_node_ids=tuple(node.sub_nodes),
            description=descriptions.get(node.id),
        )
        for node in raw.nodes
    }

    edges: list[GraphEdge] = [
        GraphEdge(id=i, source=edge.source_id, target=edge.dest_id, kind=edge.kind)
        for i, edge in enumerate(raw.edges)
    ]
    # duplicates in subNodes are kept as distinct detail edges
    for node in raw.nodes:
        for sub_id in node.sub_nodes:
            edges.append(
                GraphEdge(
                    id=len(edges), source=node.id, target=sub_id, kind=EdgeKind.DETAIL
                )
            )

    graph = Graph(
        nodes=nodes,
        edges=tuple(edges),
        name=raw.name,
        connected=connected_node_ids(raw.edges),
    )
    logger.debug(
        f"Built graph '{graph.name or 'Control Flow Graph'}': "
        f"{len(nodes)} nodes ({len(graph.connected)} main), "
        f"{len(graph.flow_edges)} flow edges, {len(graph.detail_edges)} detail edges, "
        f"{len(descriptions)} descriptions"
    )
    return graph


def _check_unique_ids(raw: RawGraph) -> set[int]:
    seen: set[int] = set()
    for i, node in enumerate(raw.nodes):
        if node.id in seen:
            raise ValidationError(
                f"Duplicate node id {node.id} at nodes[{i}]",
                context={"field": f"nodes[{i}].id", "node_id": node.id},
            )
        seen.add(node.id)
    return seen


def _check_edge_references(raw: RawGraph, node_ids: set[int]) -> None:
    for i, edge in enumerate(raw.edges):
        for field_name, node_id in (
            ("sourceId", edge.source_id),
            ("destId", edge.dest_id),
        ):
            if node_id not in node_ids:
                raise ValidationError(
                    f"Edge {i} references unknown node id {node_id} ({field_name})",
                    context={"field": f"edges[{i}].{field_name}", "node_id": node_id},
                )


def _check_sub_node_references(raw: RawGraph, node_ids: set[int]) -> None:
    for i, node in enumerate(raw.nodes):
        for j, sub_id in enumerate(node.sub_nodes):
            if sub_id not in node_ids:
                raise ValidationError(
                    f"Node {node.id} lists unknown sub node id {sub_id}",
                    context={"field": f"nodes[{i}].subNodes[{j}]", "node_id": sub_id},
                )
