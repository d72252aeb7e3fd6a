"""
OSPF topology reconstruction for ospfscope.

Rebuilds routers, transit networks and links from captured OSPF command
output, detects changes between topology snapshots and annotates
render-ready graphs with change statuses.

Supported input:
- show ip ospf database [router | network]
- show ip ospf
- show ip ospf neighbor
- show ip ospf interface
- show ip route ospf

Supported vendors:
- Cisco (IOS, IOS-XE)

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

from ospfscope.topology.models import (
    OSPFScopeError,
    InvalidInputError,
    RouterRole,
    LinkType,
    LSAType,
    ChangeType,
    EntityStatus,
    ViewFilter,
    AuxOwnerPolicy,
    OSPFInterface,
    OSPFNeighborEntry,
    InterfaceDetail,
    LearnedRoute,
    ProcessInfo,
    SummaryRoute,
    ExternalRoute,
    CommandBundle,
    Router,
    Network,
    Link,
    Topology,
    Change,
    GraphNode,
    GraphEdge,
)
from ospfscope.topology.builder import TopologyBuilder, parse_topology, parse
from ospfscope.topology.diff import diff_topologies, diff
from ospfscope.topology.annotate import (
    build_graph,
    annotate,
    apply_node_statuses,
    apply_edge_statuses,
    filter_graph,
)

__all__ = [
    # Exceptions
    "OSPFScopeError",
    "InvalidInputError",
    # Enums
    "RouterRole",
    "LinkType",
    "LSAType",
    "ChangeType",
    "EntityStatus",
    "ViewFilter",
    "AuxOwnerPolicy",
    # Auxiliary records
    "OSPFInterface",
    "OSPFNeighborEntry",
    "InterfaceDetail",
    "LearnedRoute",
    "ProcessInfo",
    # Routes
    "SummaryRoute",
    "ExternalRoute",
    # Topology
    "CommandBundle",
    "Router",
    "Network",
    "Link",
    "Topology",
    # Changes and graph
    "Change",
    "GraphNode",
    "GraphEdge",
    # Operations
    "TopologyBuilder",
    "parse_topology",
    "parse",
    "diff_topologies",
    "diff",
    "build_graph",
    "annotate",
    "apply_node_statuses",
    "apply_edge_statuses",
    "filter_graph",
]
