"""
Render-ready graph construction and change status annotation.

Builds node/edge lists from a Topology, maps diff output onto them as
transient statuses (overlaying removed entities from the previous graph
so they remain renderable) and narrows graphs to view presets.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

from dataclasses import replace

from ospfscope.topology.models import (
    Change,
    ChangeType,
    EntityStatus,
    GraphEdge,
    GraphNode,
    LinkType,
    RouterRole,
    Topology,
    ViewFilter,
)


def build_graph(topology: Topology) -> tuple[list[GraphNode], list[GraphEdge]]:
    """Convert a topology into graph nodes and edges.

    Nodes are placed at the origin; coordinates belong to the layout
    engine of the rendering layer.
    """
    nodes: list[GraphNode] = []

    for router in topology.routers:
        nodes.append(GraphNode(
            id=router.id,
            type="router",
            label=router.router_id,
            area=router.area,
            role=router.role,
            data=router.to_dict(),
        ))

    for network in topology.networks:
        label = network.network_address
        if network.mask:
            label = f"{label}{network.mask}" if network.mask.startswith("/") else f"{label} {network.mask}"
        nodes.append(GraphNode(
            id=network.id,
            type="network",
            label=label,
            area=network.area,
            data=network.to_dict(),
        ))

    edges = [
        GraphEdge(
            id=link.id,
            source=link.source,
            target=link.target,
            cost=link.cost,
            source_cost=link.source_cost,
            target_cost=link.target_cost,
            link_type=link.link_type,
            area=link.area,
            interface_info=link.interface_info,
        )
        for link in topology.links
    ]

    return nodes, edges


def apply_node_statuses(
    nodes: list[GraphNode],
    changes: list[Change],
    previous_nodes: list[GraphNode] | None = None,
) -> list[GraphNode]:
    """Return copies of the nodes with statuses from router changes.

    Routers removed since the previous snapshot are appended from
    previous_nodes with status 'removed'.
    """
    statuses: dict[str, tuple[EntityStatus, float]] = {}
    removed: dict[str, float] = {}

    for change in changes:
        if change.router_id is None:
            continue
        if change.type == ChangeType.ROUTER_ADDED:
            statuses[change.router_id] = (EntityStatus.NEW, change.timestamp)
        elif change.type == ChangeType.ROUTER_REMOVED:
            removed[change.router_id] = change.timestamp
        elif change.type in (ChangeType.AREA_CHANGED, ChangeType.ROLE_CHANGED):
            statuses.setdefault(change.router_id, (EntityStatus.CHANGED, change.timestamp))

    result: list[GraphNode] = []
    for node in nodes:
        status, stamp = statuses.get(node.id, (EntityStatus.STABLE, None))
        result.append(replace(node, data=dict(node.data), status=status, status_timestamp=stamp))

    present = {node.id for node in nodes}
    for node in previous_nodes or []:
        if node.id in removed and node.id not in present:
            present.add(node.id)
            result.append(replace(
                node,
                data=dict(node.data),
                status=EntityStatus.REMOVED,
                status_timestamp=removed[node.id],
            ))

    return result


def apply_edge_statuses(
    edges: list[GraphEdge],
    changes: list[Change],
    previous_edges: list[GraphEdge] | None = None,
) -> list[GraphEdge]:
    """Return copies of the edges with statuses from link changes.

    Changed edges record the previous symmetric cost in old_cost. Links
    removed since the previous snapshot are appended from previous_edges
    with status 'removed'.
    """
    previous_by_key = {edge.key: edge for edge in previous_edges or []}
    statuses: dict[str, tuple[EntityStatus, float, int | None]] = {}
    removed: dict[str, float] = {}

    for change in changes:
        if change.link_key is None:
            continue
        if change.type == ChangeType.LINK_ADDED:
            statuses[change.link_key] = (EntityStatus.NEW, change.timestamp, None)
        elif change.type == ChangeType.LINK_REMOVED:
            removed[change.link_key] = change.timestamp
        elif change.type == ChangeType.METRIC_CHANGED:
            if isinstance(change.old_value, int):
                old_cost = change.old_value
            elif change.link_key in previous_by_key:
                old_cost = previous_by_key[change.link_key].cost
            else:
                old_cost = None
            statuses[change.link_key] = (EntityStatus.CHANGED, change.timestamp, old_cost)

    result: list[GraphEdge] = []
    for edge in edges:
        status, stamp, old_cost = statuses.get(edge.key, (EntityStatus.STABLE, None, None))
        result.append(replace(edge, status=status, status_timestamp=stamp, old_cost=old_cost))

    present = {edge.key for edge in edges}
    for edge in previous_edges or []:
        if edge.key in removed and edge.key not in present:
            present.add(edge.key)
            result.append(replace(
                edge,
                status=EntityStatus.REMOVED,
                status_timestamp=removed[edge.key],
            ))

    return result


def annotate(
    nodes: list[GraphNode],
    edges: list[GraphEdge],
    changes: list[Change],
    previous_nodes: list[GraphNode] | None = None,
    previous_edges: list[GraphEdge] | None = None,
) -> tuple[list[GraphNode], list[GraphEdge]]:
    """Annotate a graph with change statuses.

    Args:
        nodes: Current graph nodes
        edges: Current graph edges
        changes: Output of diff_topologies(previous, current)
        previous_nodes: Graph nodes of the previous snapshot
        previous_edges: Graph edges of the previous snapshot

    Returns:
        Tuple of (nodes, edges); the inputs are left untouched
    """
    annotated_nodes = apply_node_statuses(nodes, changes, previous_nodes)
    annotated_edges = apply_edge_statuses(edges, changes, previous_edges)

    # Removed edges may still reference a network that is gone from the
    # current graph
    present = {node.id for node in annotated_nodes}
    previous_by_id = {node.id: node for node in previous_nodes or []}
    for edge in annotated_edges:
        if edge.status != EntityStatus.REMOVED:
            continue
        for endpoint in (edge.source, edge.target):
            node = previous_by_id.get(endpoint)
            if endpoint in present or node is None:
                continue
            present.add(endpoint)
            annotated_nodes.append(replace(
                node,
                data=dict(node.data),
                status=EntityStatus.REMOVED,
                status_timestamp=edge.status_timestamp,
            ))

    return annotated_nodes, annotated_edges


# =============================================================================
# View Filters
# =============================================================================

def _is_unbalanced(edge: GraphEdge) -> bool:
    return edge.link_type == LinkType.POINT_TO_POINT and edge.source_cost != edge.target_cost


def _is_balanced(edge: GraphEdge) -> bool:
    return (
        edge.link_type == LinkType.POINT_TO_POINT
        and edge.source_cost == edge.target_cost
        and edge.cost > 0
    )


def filter_graph(
    nodes: list[GraphNode],
    edges: list[GraphEdge],
    view: ViewFilter | str = ViewFilter.ALL,
    area: str | None = None,
    link_type: LinkType | str | None = None,
) -> tuple[list[GraphNode], list[GraphEdge]]:
    """Narrow a graph to a view preset, an area and/or a link type.

    Node rules:
        area: nodes in that area
        abr / asbr: routers with that role
        cost-unbalanced: endpoints of point-to-point edges whose directional
            costs differ
        cost-balanced: endpoints of point-to-point edges with equal, non-zero
            directional costs
        down: nodes with status 'removed'

    Edges are kept when both endpoints survive the node rules (whenever an
    area or a non-'all' view is given), then narrowed by link type and by
    the view's own edge rule.

    Returns:
        Tuple of (nodes, edges); the inputs are left untouched
    """
    view = ViewFilter(view)
    link_type = LinkType(link_type) if link_type else None

    result_nodes = list(nodes)
    if area:
        result_nodes = [n for n in result_nodes if n.area == area]

    if view in (ViewFilter.ABR, ViewFilter.ASBR):
        role = RouterRole(view.value)
        result_nodes = [n for n in result_nodes if n.type == "router" and n.role == role]
    elif view == ViewFilter.COST_UNBALANCED:
        endpoints = {end for e in edges if _is_unbalanced(e) for end in (e.source, e.target)}
        result_nodes = [n for n in result_nodes if n.id in endpoints]
    elif view == ViewFilter.COST_BALANCED:
        endpoints = {end for e in edges if _is_balanced(e) for end in (e.source, e.target)}
        result_nodes = [n for n in result_nodes if n.id in endpoints]
    elif view == ViewFilter.DOWN:
        result_nodes = [n for n in result_nodes if n.status == EntityStatus.REMOVED]

    result_edges = list(edges)
    if area or view != ViewFilter.ALL:
        kept = {n.id for n in result_nodes}
        result_edges = [e for e in result_edges if e.source in kept and e.target in kept]

    if link_type is not None:
        result_edges = [e for e in result_edges if e.link_type == link_type]

    if view == ViewFilter.COST_UNBALANCED:
        result_edges = [e for e in result_edges if e.source_cost != e.target_cost]
    elif view == ViewFilter.COST_BALANCED:
        result_edges = [e for e in result_edges if e.source_cost == e.target_cost and e.cost > 0]
    elif view == ViewFilter.DOWN:
        result_edges = [e for e in result_edges if e.status == EntityStatus.REMOVED]

    return result_nodes, result_edges
