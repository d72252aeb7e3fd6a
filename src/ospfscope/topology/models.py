"""
Data models for OSPF topology reconstruction.

Provides dataclass-based models for routers, transit networks, links,
inter-area and external routes, auxiliary command records, topology
changes and render-ready graph elements.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from netaddr import IPAddress, valid_ipv4


# =============================================================================
# Exceptions
# =============================================================================

class OSPFScopeError(Exception):
    """Base exception for ospfscope errors."""
    pass


class InvalidInputError(OSPFScopeError):
    """Input violates the parser contract (wrong type, malformed bundle)."""
    pass


# =============================================================================
# Enumerations
# =============================================================================

class RouterRole(str, Enum):
    """OSPF router role."""
    INTERNAL = "internal"
    ABR = "abr"  # Area Border Router
    ASBR = "asbr"  # AS Boundary Router

    @property
    def rank(self) -> int:
        return _ROLE_RANK[self]


_ROLE_RANK = {
    RouterRole.INTERNAL: 0,
    RouterRole.ABR: 1,
    RouterRole.ASBR: 2,
}


class LinkType(str, Enum):
    """Router LSA link / graph edge type."""
    POINT_TO_POINT = "point-to-point"
    STUB = "stub"
    TRANSIT = "transit"


class LSAType(str, Enum):
    """LSA kinds a router can be seen originating."""
    ROUTER = "Router LSA (Type 1)"
    NETWORK = "Network LSA (Type 2)"
    SUMMARY = "Summary LSA (Type 3)"
    ASBR_SUMMARY = "ASBR Summary LSA (Type 4)"
    EXTERNAL = "AS External LSA (Type 5)"


class ChangeType(str, Enum):
    """Topology change kinds."""
    ROUTER_ADDED = "router-added"
    ROUTER_REMOVED = "router-removed"
    LINK_ADDED = "link-added"
    LINK_REMOVED = "link-removed"
    METRIC_CHANGED = "metric-changed"
    AREA_CHANGED = "area-changed"
    ROLE_CHANGED = "role-changed"


class EntityStatus(str, Enum):
    """Transient render status of a graph node or edge."""
    STABLE = "stable"
    NEW = "new"
    REMOVED = "removed"
    CHANGED = "changed"


class ViewFilter(str, Enum):
    """Graph view presets."""
    ALL = "all"
    COST_UNBALANCED = "cost-unbalanced"  # Point-to-point links with asymmetric costs
    COST_BALANCED = "cost-balanced"
    ABR = "abr"
    ASBR = "asbr"
    DOWN = "down"  # Entities removed since the previous snapshot


class AuxOwnerPolicy(str, Enum):
    """Fallback owner for auxiliary command data."""
    FIRST_LSA_ROUTER = "first-lsa-router"  # First router with any LSA data
    NONE = "none"  # Discard unowned data


# =============================================================================
# Helpers
# =============================================================================

def id_sort_key(value: str) -> tuple[int, int, str]:
    """Sort key placing dotted quads first, in numeric order."""
    if valid_ipv4(value):
        return (0, int(IPAddress(value)), value)
    if value.isdigit():
        return (0, int(value), value)
    return (1, 0, value)


def link_key(source: str, target: str, link_type: "LinkType | str") -> str:
    """Dedup/identity key of a link: sorted endpoint pair plus link type."""
    first, second = sorted((source, target))
    return f"{first}|{second}|{LinkType(link_type).value}"


# =============================================================================
# Auxiliary Command Records
# =============================================================================

@dataclass
class OSPFInterface:
    """Router interface derived from a Router LSA link descriptor."""
    address: str
    connected_to: str
    link_type: LinkType
    cost: int = 0

    # Enrichment from 'show ip ospf interface'
    name: str | None = None  # e.g. GigabitEthernet0/0
    state: str | None = None  # DR, BDR, DROTHER, POINT_TO_POINT
    dr_address: str | None = None
    bdr_address: str | None = None
    hello_interval: int | None = None
    dead_interval: int | None = None
    area: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "address": self.address,
            "connected_to": self.connected_to,
            "link_type": self.link_type.value,
            "cost": self.cost,
            "name": self.name,
            "state": self.state,
            "dr_address": self.dr_address,
            "bdr_address": self.bdr_address,
            "hello_interval": self.hello_interval,
            "dead_interval": self.dead_interval,
            "area": self.area,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "OSPFInterface":
        return cls(
            address=data["address"],
            connected_to=data.get("connected_to", ""),
            link_type=LinkType(data.get("link_type", "stub")),
            cost=data.get("cost", 0),
            name=data.get("name"),
            state=data.get("state"),
            dr_address=data.get("dr_address"),
            bdr_address=data.get("bdr_address"),
            hello_interval=data.get("hello_interval"),
            dead_interval=data.get("dead_interval"),
            area=data.get("area"),
        )


@dataclass
class OSPFNeighborEntry:
    """One row of 'show ip ospf neighbor'."""
    neighbor_id: str
    priority: int
    state: str  # e.g. FULL/DR, FULL/-
    dead_time: str
    address: str  # Neighbor interface address
    interface: str  # Local interface name

    def to_dict(self) -> dict[str, Any]:
        return {
            "neighbor_id": self.neighbor_id,
            "priority": self.priority,
            "state": self.state,
            "dead_time": self.dead_time,
            "address": self.address,
            "interface": self.interface,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "OSPFNeighborEntry":
        return cls(
            neighbor_id=data["neighbor_id"],
            priority=data.get("priority", 1),
            state=data.get("state", ""),
            dead_time=data.get("dead_time", ""),
            address=data.get("address", ""),
            interface=data.get("interface", ""),
        )


@dataclass
class InterfaceDetail:
    """One interface section of 'show ip ospf interface'."""
    name: str
    address: str | None = None
    prefix_length: int | None = None
    area: str | None = None
    router_id: str | None = None
    network_type: str | None = None
    cost: int | None = None
    state: str | None = None
    dr_address: str | None = None
    bdr_address: str | None = None
    hello_interval: int | None = None
    dead_interval: int | None = None


@dataclass
class LearnedRoute:
    """One OSPF route from 'show ip route ospf'."""
    prefix: str  # e.g. 10.0.0.0/24
    route_type: str  # O, O IA, O E1, O E2, O N1, O N2
    metric: int
    next_hop: str
    out_interface: str = ""
    tag: int | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "prefix": self.prefix,
            "route_type": self.route_type,
            "metric": self.metric,
            "next_hop": self.next_hop,
            "out_interface": self.out_interface,
            "tag": self.tag,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LearnedRoute":
        return cls(
            prefix=data["prefix"],
            route_type=data.get("route_type", "O"),
            metric=data.get("metric", 0),
            next_hop=data.get("next_hop", ""),
            out_interface=data.get("out_interface", ""),
            tag=data.get("tag"),
        )


@dataclass
class ProcessInfo:
    """OSPF process summary from 'show ip ospf'."""
    process_id: str
    router_id: str
    spf_algorithm: str | None = None
    number_of_areas: int | None = None
    reference_bandwidth: int | None = None  # Mbps

    def to_dict(self) -> dict[str, Any]:
        return {
            "process_id": self.process_id,
            "router_id": self.router_id,
            "spf_algorithm": self.spf_algorithm,
            "number_of_areas": self.number_of_areas,
            "reference_bandwidth": self.reference_bandwidth,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ProcessInfo":
        return cls(
            process_id=data.get("process_id", ""),
            router_id=data.get("router_id", ""),
            spf_algorithm=data.get("spf_algorithm"),
            number_of_areas=data.get("number_of_areas"),
            reference_bandwidth=data.get("reference_bandwidth"),
        )


# =============================================================================
# Inter-Area and External Routes
# =============================================================================

@dataclass
class SummaryRoute:
    """Type 3 / Type 4 summary advertisement."""
    network: str  # Destination prefix (or ASBR router ID for Type 4)
    mask: str
    cost: int
    area: str  # Area the summary was flooded into
    lsa_type: LSAType
    advertising_router: str
    seq_number: str | None = None
    age: int | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "network": self.network,
            "mask": self.mask,
            "cost": self.cost,
            "area": self.area,
            "lsa_type": self.lsa_type.value,
            "advertising_router": self.advertising_router,
            "seq_number": self.seq_number,
            "age": self.age,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SummaryRoute":
        return cls(
            network=data["network"],
            mask=data.get("mask", ""),
            cost=data.get("cost", 0),
            area=data.get("area", "0"),
            lsa_type=LSAType(data.get("lsa_type", LSAType.SUMMARY.value)),
            advertising_router=data["advertising_router"],
            seq_number=data.get("seq_number"),
            age=data.get("age"),
        )


@dataclass
class ExternalRoute:
    """Type 5 AS-external advertisement."""
    network: str
    mask: str
    metric: int
    metric_type: int  # 1 (E1) or 2 (E2)
    tag: int
    forwarding_address: str
    advertising_router: str
    seq_number: str | None = None
    age: int | None = None

    @property
    def metric_type_label(self) -> str:
        return f"E{self.metric_type}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "network": self.network,
            "mask": self.mask,
            "metric": self.metric,
            "metric_type": self.metric_type,
            "tag": self.tag,
            "forwarding_address": self.forwarding_address,
            "advertising_router": self.advertising_router,
            "seq_number": self.seq_number,
            "age": self.age,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ExternalRoute":
        return cls(
            network=data["network"],
            mask=data.get("mask", ""),
            metric=data.get("metric", 0),
            metric_type=data.get("metric_type", 2),
            tag=data.get("tag", 0),
            forwarding_address=data.get("forwarding_address", "0.0.0.0"),
            advertising_router=data["advertising_router"],
            seq_number=data.get("seq_number"),
            age=data.get("age"),
        )


# =============================================================================
# Raw LSA Records (parser output, assembler input)
# =============================================================================

@dataclass
class LSABlock:
    """Area-header pseudo-block or LSA content block."""
    is_area_header: bool
    area: str | None = None  # Set on area headers
    lines: list[str] = field(default_factory=list)


@dataclass
class RawLink:
    """'Link connected to' descriptor inside a Router LSA."""
    type: LinkType
    link_id: str
    link_data: str
    metric: int = 0


@dataclass
class RawRouterLSA:
    """Type 1 Router LSA."""
    router_id: str
    area: str
    age: int | None = None
    seq_number: str | None = None
    checksum: str | None = None
    is_abr: bool = False
    is_asbr: bool = False
    links: list[RawLink] = field(default_factory=list)


@dataclass
class RawNetworkLSA:
    """Type 2 Network LSA."""
    link_state_id: str
    advertising_router: str
    area: str
    network_mask: str = ""
    age: int | None = None
    seq_number: str | None = None
    checksum: str | None = None
    attached_routers: list[str] = field(default_factory=list)


# =============================================================================
# Input Bundle
# =============================================================================

_BUNDLE_KEYS = {
    "process_info": "process_info",
    "processInfo": "process_info",
    "neighbor_table": "neighbor_table",
    "neighborTable": "neighbor_table",
    "database_router": "database_router",
    "databaseRouter": "database_router",
    "database_network": "database_network",
    "databaseNetwork": "database_network",
    "interface_detail": "interface_detail",
    "interfaceDetail": "interface_detail",
    "route_table": "route_table",
    "routeTable": "route_table",
    "raw": "raw",
}


@dataclass
class CommandBundle:
    """Named command outputs collected from one device session."""
    process_info: str | None = None  # show ip ospf
    neighbor_table: str | None = None  # show ip ospf neighbor
    database_router: str | None = None  # show ip ospf database router
    database_network: str | None = None  # show ip ospf database network
    interface_detail: str | None = None  # show ip ospf interface
    route_table: str | None = None  # show ip route ospf
    raw: str | None = None  # Combined / legacy database dump

    def __post_init__(self):
        for name in _BUNDLE_FIELDS:
            value = getattr(self, name)
            if value is not None and not isinstance(value, str):
                raise InvalidInputError(
                    f"Bundle field '{name}' must be text, got {type(value).__name__}"
                )

    def database_text(self) -> str:
        """All LSA database text, in bundle order."""
        parts = [self.database_router, self.database_network, self.raw]
        return "\n".join(p for p in parts if p)

    def command_text(self, name: str) -> str:
        """Output of one auxiliary command, falling back to the raw dump."""
        return getattr(self, name) or self.raw or ""

    def is_empty(self) -> bool:
        return not any((getattr(self, name) or "").strip() for name in _BUNDLE_FIELDS)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CommandBundle":
        values: dict[str, Any] = {}
        for key, value in data.items():
            name = _BUNDLE_KEYS.get(key)
            if name is None:
                raise InvalidInputError(f"Unknown bundle field: {key!r}")
            values[name] = value
        return cls(**values)


_BUNDLE_FIELDS = tuple(sorted(set(_BUNDLE_KEYS.values())))


# =============================================================================
# Topology Entities
# =============================================================================

@dataclass
class Router:
    """OSPF router keyed by its Router ID."""
    id: str
    router_id: str
    role: RouterRole = RouterRole.INTERNAL
    area: str = "0"
    lsa_types: list[LSAType] = field(default_factory=list)
    neighbors: list[str] = field(default_factory=list)
    neighbor_interfaces: dict[str, str] = field(default_factory=dict)  # neighbor -> local address
    neighbor_entries: list[OSPFNeighborEntry] = field(default_factory=list)
    interfaces: list[OSPFInterface] = field(default_factory=list)
    networks: list[str] = field(default_factory=list)
    stub_networks: list[str] = field(default_factory=list)
    summary_routes: list[SummaryRoute] = field(default_factory=list)
    external_routes: list[ExternalRoute] = field(default_factory=list)
    learned_routes: list[LearnedRoute] = field(default_factory=list)
    process_info: ProcessInfo | None = None

    # Freshness of the first LSA instance seen
    sequence_number: str | None = None
    age: int | None = None
    checksum: str | None = None

    def add_lsa_type(self, lsa_type: LSAType) -> None:
        if lsa_type not in self.lsa_types:
            self.lsa_types.append(lsa_type)

    def add_neighbor(self, neighbor_id: str) -> bool:
        """Add a neighbor; returns True if it was not present."""
        if neighbor_id == self.id or neighbor_id in self.neighbors:
            return False
        self.neighbors.append(neighbor_id)
        return True

    def add_network(self, network_id: str) -> None:
        if network_id not in self.networks:
            self.networks.append(network_id)

    def add_interface(self, interface: OSPFInterface) -> None:
        for existing in self.interfaces:
            if (existing.address == interface.address
                    and existing.connected_to == interface.connected_to
                    and existing.link_type == interface.link_type):
                return
        self.interfaces.append(interface)

    def promote(self, role: RouterRole) -> bool:
        """Raise the role (internal -> abr -> asbr); never demotes."""
        if role.rank > self.role.rank:
            self.role = role
            return True
        return False

    def set_freshness(
        self,
        sequence_number: str | None,
        age: int | None,
        checksum: str | None,
    ) -> None:
        """First-seen-wins: only fills fields that are still empty."""
        if self.sequence_number is None and sequence_number:
            self.sequence_number = sequence_number
        if self.age is None and age is not None:
            self.age = age
        if self.checksum is None and checksum:
            self.checksum = checksum

    @property
    def has_lsa_data(self) -> bool:
        return bool(self.lsa_types)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "router_id": self.router_id,
            "role": self.role.value,
            "area": self.area,
            "lsa_types": [t.value for t in self.lsa_types],
            "neighbors": list(self.neighbors),
            "neighbor_interfaces": dict(self.neighbor_interfaces),
            "neighbor_entries": [e.to_dict() for e in self.neighbor_entries],
            "interfaces": [i.to_dict() for i in self.interfaces],
            "networks": list(self.networks),
            "stub_networks": list(self.stub_networks),
            "summary_routes": [r.to_dict() for r in self.summary_routes],
            "external_routes": [r.to_dict() for r in self.external_routes],
            "learned_routes": [r.to_dict() for r in self.learned_routes],
            "process_info": self.process_info.to_dict() if self.process_info else None,
            "sequence_number": self.sequence_number,
            "age": self.age,
            "checksum": self.checksum,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Router":
        process_info = data.get("process_info")
        return cls(
            id=data["id"],
            router_id=data.get("router_id", data["id"]),
            role=RouterRole(data.get("role", "internal")),
            area=data.get("area", "0"),
            lsa_types=[LSAType(t) for t in data.get("lsa_types", [])],
            neighbors=list(data.get("neighbors", [])),
            neighbor_interfaces=dict(data.get("neighbor_interfaces", {})),
            neighbor_entries=[OSPFNeighborEntry.from_dict(e) for e in data.get("neighbor_entries", [])],
            interfaces=[OSPFInterface.from_dict(i) for i in data.get("interfaces", [])],
            networks=list(data.get("networks", [])),
            stub_networks=list(data.get("stub_networks", [])),
            summary_routes=[SummaryRoute.from_dict(r) for r in data.get("summary_routes", [])],
            external_routes=[ExternalRoute.from_dict(r) for r in data.get("external_routes", [])],
            learned_routes=[LearnedRoute.from_dict(r) for r in data.get("learned_routes", [])],
            process_info=ProcessInfo.from_dict(process_info) if process_info else None,
            sequence_number=data.get("sequence_number"),
            age=data.get("age"),
            checksum=data.get("checksum"),
        )


@dataclass
class Network:
    """Transit network keyed by its Link State ID."""
    id: str
    network_address: str
    mask: str
    attached_routers: list[str] = field(default_factory=list)
    designated_router: str | None = None
    area: str = "0"

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "network_address": self.network_address,
            "mask": self.mask,
            "attached_routers": list(self.attached_routers),
            "designated_router": self.designated_router,
            "area": self.area,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Network":
        return cls(
            id=data["id"],
            network_address=data.get("network_address", data["id"]),
            mask=data.get("mask", ""),
            attached_routers=list(data.get("attached_routers", [])),
            designated_router=data.get("designated_router"),
            area=data.get("area", "0"),
        )


@dataclass
class Link:
    """Graph edge: router-router (point-to-point) or network-router (transit)."""
    id: str
    source: str
    target: str
    cost: int  # max(source_cost, target_cost)
    source_cost: int
    target_cost: int
    link_type: LinkType
    interface_info: str | None = None
    area: str = "0"

    @property
    def key(self) -> str:
        return link_key(self.source, self.target, self.link_type)

    def cost_from(self, endpoint: str) -> int | None:
        """Directional cost announced by one endpoint."""
        if endpoint == self.source:
            return self.source_cost
        if endpoint == self.target:
            return self.target_cost
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "source": self.source,
            "target": self.target,
            "cost": self.cost,
            "source_cost": self.source_cost,
            "target_cost": self.target_cost,
            "link_type": self.link_type.value,
            "interface_info": self.interface_info,
            "area": self.area,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Link":
        return cls(
            id=data["id"],
            source=data["source"],
            target=data["target"],
            cost=data.get("cost", 0),
            source_cost=data.get("source_cost", 0),
            target_cost=data.get("target_cost", 0),
            link_type=LinkType(data["link_type"]),
            interface_info=data.get("interface_info"),
            area=data.get("area", "0"),
        )


@dataclass
class Topology:
    """Reconstructed OSPF topology."""
    routers: list[Router] = field(default_factory=list)
    networks: list[Network] = field(default_factory=list)
    links: list[Link] = field(default_factory=list)
    areas: list[str] = field(default_factory=list)
    summary_routes: list[SummaryRoute] = field(default_factory=list)
    external_routes: list[ExternalRoute] = field(default_factory=list)
    process_info: ProcessInfo | None = None

    def get_router(self, router_id: str) -> Router | None:
        for router in self.routers:
            if router.id == router_id:
                return router
        return None

    def get_network(self, network_id: str) -> Network | None:
        for network in self.networks:
            if network.id == network_id:
                return network
        return None

    def is_empty(self) -> bool:
        """True when no OSPF data was found."""
        return not self.routers and not self.networks

    def to_dict(self) -> dict[str, Any]:
        return {
            "routers": [r.to_dict() for r in self.routers],
            "networks": [n.to_dict() for n in self.networks],
            "links": [l.to_dict() for l in self.links],
            "areas": list(self.areas),
            "summary_routes": [r.to_dict() for r in self.summary_routes],
            "external_routes": [r.to_dict() for r in self.external_routes],
            "process_info": self.process_info.to_dict() if self.process_info else None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Topology":
        if not isinstance(data, dict):
            raise InvalidInputError(f"Topology must be an object, got {type(data).__name__}")
        try:
            process_info = data.get("process_info")
            return cls(
                routers=[Router.from_dict(r) for r in data.get("routers", [])],
                networks=[Network.from_dict(n) for n in data.get("networks", [])],
                links=[Link.from_dict(l) for l in data.get("links", [])],
                areas=list(data.get("areas", [])),
                summary_routes=[SummaryRoute.from_dict(r) for r in data.get("summary_routes", [])],
                external_routes=[ExternalRoute.from_dict(r) for r in data.get("external_routes", [])],
                process_info=ProcessInfo.from_dict(process_info) if process_info else None,
            )
        except (KeyError, ValueError, TypeError, AttributeError) as e:
            raise InvalidInputError(f"Malformed topology data: {e}") from e


# =============================================================================
# Change Tracking
# =============================================================================

@dataclass(frozen=True)
class Change:
    """Semantic difference between two topology snapshots."""
    id: str
    type: ChangeType
    description: str
    timestamp: float
    router_id: str | None = None
    link_id: str | None = None
    link_key: str | None = None
    old_value: str | int | None = None
    new_value: str | int | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type.value,
            "router_id": self.router_id,
            "link_id": self.link_id,
            "link_key": self.link_key,
            "description": self.description,
            "old_value": self.old_value,
            "new_value": self.new_value,
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Change":
        return cls(
            id=data["id"],
            type=ChangeType(data["type"]),
            description=data.get("description", ""),
            timestamp=data.get("timestamp", 0.0),
            router_id=data.get("router_id"),
            link_id=data.get("link_id"),
            link_key=data.get("link_key"),
            old_value=data.get("old_value"),
            new_value=data.get("new_value"),
        )


# =============================================================================
# Render-Ready Graph
# =============================================================================

@dataclass
class GraphNode:
    """Router or network node handed to the rendering layer."""
    id: str
    type: str  # router | network
    label: str
    area: str
    role: RouterRole | None = None
    x: float = 0.0
    y: float = 0.0
    data: dict[str, Any] = field(default_factory=dict)
    status: EntityStatus | None = None
    status_timestamp: float | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type,
            "label": self.label,
            "area": self.area,
            "role": self.role.value if self.role else None,
            "x": self.x,
            "y": self.y,
            "data": self.data,
            "status": self.status.value if self.status else None,
            "status_timestamp": self.status_timestamp,
        }


@dataclass
class GraphEdge:
    """Link edge handed to the rendering layer."""
    id: str
    source: str
    target: str
    cost: int
    source_cost: int
    target_cost: int
    link_type: LinkType
    area: str
    interface_info: str | None = None
    status: EntityStatus | None = None
    status_timestamp: float | None = None
    old_cost: int | None = None

    @property
    def key(self) -> str:
        return link_key(self.source, self.target, self.link_type)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "source": self.source,
            "target": self.target,
            "cost": self.cost,
            "source_cost": self.source_cost,
            "target_cost": self.target_cost,
            "link_type": self.link_type.value,
            "area": self.area,
            "interface_info": self.interface_info,
            "status": self.status.value if self.status else None,
            "status_timestamp": self.status_timestamp,
            "old_cost": self.old_cost,
        }
