"""
OSPF topology assembler.

Folds the link-state records and auxiliary command data extracted by a
parser into a consistent Topology: router and network registries, the
deduplicated link set, the area set, role inference and bidirectional
adjacency.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Callable

from netaddr import AddrFormatError, IPAddress, IPNetwork

from ospfscope.config import OSPFScopeConfig, get_config
from ospfscope.topology.models import (
    AuxOwnerPolicy,
    CommandBundle,
    ExternalRoute,
    InterfaceDetail,
    InvalidInputError,
    LSAType,
    Link,
    LinkType,
    Network,
    OSPFInterface,
    ProcessInfo,
    RawNetworkLSA,
    RawRouterLSA,
    Router,
    RouterRole,
    SummaryRoute,
    Topology,
    id_sort_key,
)
from ospfscope.topology.parsers.base import OSPFOutputParser
from ospfscope.topology.parsers.cisco_ios import CiscoIOSParser

logger = logging.getLogger(__name__)

# Receives (event name, event details) during assembly
Observer = Callable[[str, dict[str, Any]], None]


# =============================================================================
# Assembly State
# =============================================================================

@dataclass
class _PendingP2P:
    """Point-to-point costs accumulated from both sides of a router pair."""
    source: str  # First router to author the pair
    target: str
    source_cost: int
    target_cost: int
    interface_info: str
    area: str


@dataclass
class _AssemblyState:
    """Registries for one assembly pass."""
    routers: dict[str, Router] = field(default_factory=dict)
    networks: dict[str, Network] = field(default_factory=dict)
    links: list[Link] = field(default_factory=list)
    pending_p2p: dict[tuple[str, str], _PendingP2P] = field(default_factory=dict)
    summary_routes: list[SummaryRoute] = field(default_factory=list)
    external_routes: list[ExternalRoute] = field(default_factory=list)
    process_info: ProcessInfo | None = None


def initial_role(is_abr: bool, is_asbr: bool) -> RouterRole:
    """Role of a router at creation; the ASBR marker wins in combination."""
    if is_asbr:
        return RouterRole.ASBR
    if is_abr:
        return RouterRole.ABR
    return RouterRole.INTERNAL


# =============================================================================
# Topology Builder
# =============================================================================

class TopologyBuilder:
    """Assemble a Topology from a CommandBundle.

    The builder keeps no state between calls to build(), so a single
    instance may be shared.

    Example:
        builder = TopologyBuilder()
        topology = builder.build(CommandBundle(raw=output))
    """

    def __init__(
        self,
        parser: OSPFOutputParser | None = None,
        config: OSPFScopeConfig | None = None,
        observer: Observer | None = None,
    ):
        self.parser = parser or CiscoIOSParser()
        self.config = config or get_config()
        self.observer = observer

    def build(self, bundle: CommandBundle, owner_router_id: str | None = None) -> Topology:
        """Assemble the topology described by a command bundle.

        Args:
            bundle: Named command outputs
            owner_router_id: Router that produced the auxiliary commands,
                overriding the configured owner policy

        Returns:
            Topology (empty when no OSPF data was found)
        """
        state = _AssemblyState()

        blocks = self.parser.split_blocks(bundle.database_text())
        router_lsas = self.parser.parse_router_lsas(blocks)
        network_lsas = self.parser.parse_network_lsas(blocks)
        summary_lsas = self.parser.parse_summary_lsas(blocks)
        external_lsas = self.parser.parse_external_lsas(blocks)

        logger.debug(
            f"Extracted {len(router_lsas)} router, {len(network_lsas)} network, "
            f"{len(summary_lsas)} summary and {len(external_lsas)} external LSAs"
        )

        # Routers and pending point-to-point costs
        for lsa in router_lsas:
            self._fold_router_lsa(state, lsa)

        # Point-to-point links once both sides have been seen
        self._materialize_p2p(state)

        for nlsa in network_lsas:
            self._fold_network_lsa(state, nlsa)

        self._close_adjacencies(state)

        for summary in summary_lsas:
            self._attach_summary(state, summary)
        for external in external_lsas:
            self._attach_external(state, external)

        self._attach_auxiliary(state, bundle, owner_router_id)

        topology = Topology(
            routers=list(state.routers.values()),
            networks=list(state.networks.values()),
            links=dedup_links(state.links),
            summary_routes=state.summary_routes,
            external_routes=state.external_routes,
            process_info=state.process_info,
        )
        topology.areas = collect_areas(topology)

        logger.debug(
            f"Assembled topology: {len(topology.routers)} routers, "
            f"{len(topology.networks)} networks, {len(topology.links)} links, "
            f"areas {topology.areas}"
        )
        return topology

    # ==========================================================================
    # Router LSAs
    # ==========================================================================

    def _fold_router_lsa(self, state: _AssemblyState, lsa: RawRouterLSA) -> None:
        rid = lsa.router_id
        router = state.routers.get(rid)

        if router is None:
            router = Router(
                id=rid,
                router_id=rid,
                role=initial_role(lsa.is_abr, lsa.is_asbr),
                area=lsa.area,
            )
            state.routers[rid] = router
            self._emit("router-created", router_id=rid, area=lsa.area, role=router.role.value)
        else:
            if lsa.is_abr:
                self._promote(router, RouterRole.ABR, "Area Border Router marker")
            if lsa.is_asbr:
                self._promote(router, RouterRole.ASBR, "AS Boundary Router marker")

        router.add_lsa_type(LSAType.ROUTER)
        router.set_freshness(lsa.seq_number, lsa.age, lsa.checksum)

        for link in lsa.links:
            if link.type == LinkType.POINT_TO_POINT:
                router.add_neighbor(link.link_id)
                if link.link_data:
                    router.neighbor_interfaces.setdefault(link.link_id, link.link_data)
                router.add_interface(OSPFInterface(
                    address=link.link_data,
                    connected_to=link.link_id,
                    link_type=link.type,
                    cost=link.metric,
                ))
                self._accumulate_p2p(state, rid, link.link_id, link.metric, link.link_data, lsa.area)

            elif link.type == LinkType.STUB:
                router.add_network(f"stub-{link.link_id}-{link.link_data}")
                label = f"{link.link_id}/{link.link_data}"
                if label not in router.stub_networks:
                    router.stub_networks.append(label)
                router.add_interface(OSPFInterface(
                    address=link.link_id,
                    connected_to=link.link_data,
                    link_type=link.type,
                    cost=link.metric,
                ))

            else:
                router.add_network(link.link_id)
                router.add_interface(OSPFInterface(
                    address=link.link_data,
                    connected_to=link.link_id,
                    link_type=link.type,
                    cost=link.metric,
                ))

    @staticmethod
    def _accumulate_p2p(
        state: _AssemblyState,
        rid: str,
        neighbor_id: str,
        metric: int,
        interface_info: str,
        area: str,
    ) -> None:
        key = tuple(sorted((rid, neighbor_id)))
        pending = state.pending_p2p.get(key)

        if pending is None:
            # Both directions start at the author's cost until the
            # other side's LSA is seen
            state.pending_p2p[key] = _PendingP2P(
                source=rid,
                target=neighbor_id,
                source_cost=metric,
                target_cost=metric,
                interface_info=interface_info,
                area=area,
            )
        elif rid == pending.source:
            pending.source_cost = metric
        else:
            pending.target_cost = metric

    def _materialize_p2p(self, state: _AssemblyState) -> None:
        for pending in state.pending_p2p.values():
            source = self._ensure_router(state, pending.source, pending.area)
            target = self._ensure_router(state, pending.target, pending.area)

            link = Link(
                id=f"p2p-{pending.source}-{pending.target}",
                source=pending.source,
                target=pending.target,
                cost=max(pending.source_cost, pending.target_cost),
                source_cost=pending.source_cost,
                target_cost=pending.target_cost,
                link_type=LinkType.POINT_TO_POINT,
                interface_info=pending.interface_info or None,
                area=pending.area,
            )
            state.links.append(link)
            self._emit("link-materialized", link_id=link.id, cost=link.cost)

            source.add_neighbor(target.id)
            target.add_neighbor(source.id)
            if pending.interface_info:
                source.neighbor_interfaces.setdefault(target.id, pending.interface_info)

    # ==========================================================================
    # Network LSAs
    # ==========================================================================

    def _fold_network_lsa(self, state: _AssemblyState, nlsa: RawNetworkLSA) -> None:
        nid = nlsa.link_state_id
        network = state.networks.get(nid)

        if network is None:
            network = Network(
                id=nid,
                network_address=nid,
                mask=nlsa.network_mask,
                attached_routers=list(nlsa.attached_routers),
                designated_router=nlsa.advertising_router or None,
                area=nlsa.area,
            )
            state.networks[nid] = network
            self._emit("network-created", network_id=nid, area=nlsa.area)
        else:
            for rid in nlsa.attached_routers:
                if rid not in network.attached_routers:
                    network.attached_routers.append(rid)

        for rid in nlsa.attached_routers:
            router = self._ensure_router(state, rid, nlsa.area)
            router.add_network(nid)
            state.links.append(Link(
                id=f"transit-{nid}-{rid}",
                source=nid,
                target=rid,
                cost=0,
                source_cost=0,
                target_cost=0,
                link_type=LinkType.TRANSIT,
                area=nlsa.area,
            ))

        if nlsa.advertising_router:
            dr = self._ensure_router(state, nlsa.advertising_router, nlsa.area)
            dr.add_lsa_type(LSAType.NETWORK)

    # ==========================================================================
    # Adjacency Closure
    # ==========================================================================

    def _close_adjacencies(self, state: _AssemblyState) -> None:
        # Iterate over a snapshot; missing neighbors are created on the way
        for router in list(state.routers.values()):
            for neighbor_id in list(router.neighbors):
                neighbor = self._ensure_router(state, neighbor_id, router.area)
                if neighbor.add_neighbor(router.id):
                    self._emit("closure-added", router_id=neighbor.id, neighbor_id=router.id)

    # ==========================================================================
    # Summary and External LSAs
    # ==========================================================================

    def _attach_summary(self, state: _AssemblyState, summary: SummaryRoute) -> None:
        router = self._ensure_router(state, summary.advertising_router, summary.area)
        router.summary_routes.append(summary)
        router.add_lsa_type(summary.lsa_type)
        state.summary_routes.append(summary)

        if summary.lsa_type == LSAType.ASBR_SUMMARY:
            self._promote(router, RouterRole.ABR, "ASBR Summary LSA")

    def _attach_external(self, state: _AssemblyState, external: ExternalRoute) -> None:
        router = self._ensure_router(state, external.advertising_router, self.config.external_area)
        router.external_routes.append(external)
        router.add_lsa_type(LSAType.EXTERNAL)
        state.external_routes.append(external)

        self._promote(router, RouterRole.ASBR, "AS External LSA")

    # ==========================================================================
    # Auxiliary Commands
    # ==========================================================================

    def _attach_auxiliary(
        self,
        state: _AssemblyState,
        bundle: CommandBundle,
        owner_router_id: str | None,
    ) -> None:
        process_text = bundle.command_text("process_info")
        process_info = self.parser.parse_process_info(process_text) if process_text else None
        state.process_info = process_info

        neighbor_text = bundle.command_text("neighbor_table")
        if neighbor_text:
            for entry in self.parser.parse_neighbor_table(neighbor_text):
                router = state.routers.get(entry.neighbor_id)
                if router is None:
                    router = self._router_with_address(state, entry.address)
                if router is None:
                    self._emit("aux-unmatched", kind="neighbor", neighbor_id=entry.neighbor_id)
                    continue
                router.neighbor_entries.append(entry)

        interface_text = bundle.command_text("interface_detail")
        if interface_text:
            for detail in self.parser.parse_interface_detail(interface_text):
                if not self._enrich_interfaces(state, detail):
                    self._emit("aux-unmatched", kind="interface", name=detail.name)

        route_text = bundle.command_text("route_table")
        routes = self.parser.parse_route_table(route_text) if route_text else []

        if not routes and process_info is None:
            return

        owner = self._resolve_owner(state, process_info, owner_router_id)
        if owner is None:
            self._emit("aux-unmatched", kind="owner", routes=len(routes))
            return

        owner.learned_routes.extend(routes)
        if process_info is not None and owner.process_info is None:
            owner.process_info = process_info

    def _resolve_owner(
        self,
        state: _AssemblyState,
        process_info: ProcessInfo | None,
        owner_router_id: str | None,
    ) -> Router | None:
        """Pick the router the auxiliary commands were captured on.

        An explicit owner wins (an unknown explicit owner leaves the data
        unowned), then the process Router ID when it names a known router,
        then the configured fallback policy.
        """
        if owner_router_id:
            return state.routers.get(owner_router_id)

        if process_info is not None and process_info.router_id in state.routers:
            return state.routers[process_info.router_id]

        policy = AuxOwnerPolicy(self.config.aux_owner_policy)
        if policy == AuxOwnerPolicy.FIRST_LSA_ROUTER:
            for router in state.routers.values():
                if router.has_lsa_data:
                    return router
        return None

    @staticmethod
    def _router_with_address(state: _AssemblyState, address: str) -> Router | None:
        for router in state.routers.values():
            for interface in router.interfaces:
                if interface.address == address:
                    return router
        return None

    @staticmethod
    def _enrich_interfaces(state: _AssemblyState, detail: InterfaceDetail) -> bool:
        """Fill enrichment fields on matching interfaces; never creates any.

        Matches are tried in order: interfaces owning the record address,
        stub prefixes containing it, then connected_to. Transit interfaces
        hold the DR address in connected_to, so it is only a fallback.
        """
        if not detail.address:
            return False

        if detail.router_id and detail.router_id in state.routers:
            candidates = [state.routers[detail.router_id]]
        else:
            candidates = list(state.routers.values())

        interfaces = [i for router in candidates for i in router.interfaces]
        matches = [i for i in interfaces if i.address == detail.address]
        if not matches:
            matches = [i for i in interfaces if _in_stub_prefix(i, detail.address)]
        if not matches:
            matches = [i for i in interfaces if i.connected_to == detail.address]

        for interface in matches:
            if interface.name is None:
                interface.name = detail.name
            if interface.state is None:
                interface.state = detail.state
            if interface.dr_address is None:
                interface.dr_address = detail.dr_address
            if interface.bdr_address is None:
                interface.bdr_address = detail.bdr_address
            if interface.hello_interval is None:
                interface.hello_interval = detail.hello_interval
            if interface.dead_interval is None:
                interface.dead_interval = detail.dead_interval
            if interface.area is None:
                interface.area = detail.area
        return bool(matches)

    # ==========================================================================
    # Helpers
    # ==========================================================================

    def _ensure_router(self, state: _AssemblyState, rid: str, area: str) -> Router:
        """Return the router, creating a bare entry when first referenced."""
        router = state.routers.get(rid)
        if router is None:
            router = Router(id=rid, router_id=rid, area=area)
            state.routers[rid] = router
            self._emit("router-created", router_id=rid, area=area, role=router.role.value)
        return router

    def _promote(self, router: Router, role: RouterRole, reason: str) -> None:
        previous = router.role
        if router.promote(role):
            self._emit(
                "role-promoted",
                router_id=router.id,
                old_role=previous.value,
                new_role=role.value,
                reason=reason,
            )

    def _emit(self, event: str, **details: Any) -> None:
        logger.debug(f"{event}: {details}")
        if self.observer is not None:
            self.observer(event, details)


def _in_stub_prefix(interface: OSPFInterface, address: str) -> bool:
    if interface.link_type != LinkType.STUB:
        return False
    try:
        return IPAddress(address) in IPNetwork(f"{interface.address}/{interface.connected_to}")
    except (AddrFormatError, ValueError, TypeError):
        return False


# =============================================================================
# Finalization
# =============================================================================

def dedup_links(links: list[Link]) -> list[Link]:
    """Merge links sharing a (sorted endpoint pair, link type) key.

    The first occurrence keeps its identity; later duplicates fill in zero
    costs and missing interface info.
    """
    merged: dict[str, Link] = {}

    for link in links:
        existing = merged.get(link.key)
        if existing is None:
            merged[link.key] = replace(link)
            continue

        if not existing.cost and link.cost:
            existing.cost = link.cost
        source_cost = link.cost_from(existing.source)
        if not existing.source_cost and source_cost:
            existing.source_cost = source_cost
        target_cost = link.cost_from(existing.target)
        if not existing.target_cost and target_cost:
            existing.target_cost = target_cost
        if not existing.interface_info and link.interface_info:
            existing.interface_info = link.interface_info

    return list(merged.values())


def collect_areas(topology: Topology) -> list[str]:
    """Every area referenced by any entity, sorted numerically."""
    areas: set[str] = set()
    for router in topology.routers:
        areas.add(router.area)
        for interface in router.interfaces:
            if interface.area:
                areas.add(interface.area)
    for network in topology.networks:
        areas.add(network.area)
    for link in topology.links:
        areas.add(link.area)
    for summary in topology.summary_routes:
        areas.add(summary.area)
    return sorted(areas, key=id_sort_key)


def _coerce_bundle(data: Any) -> CommandBundle:
    if data is None:
        return CommandBundle()
    if isinstance(data, CommandBundle):
        return data
    if isinstance(data, str):
        # Legacy mode: a single combined database dump
        return CommandBundle(raw=data)
    if isinstance(data, dict):
        return CommandBundle.from_dict(data)
    raise InvalidInputError(
        f"Unsupported input type {type(data).__name__}; "
        "expected text, a command bundle or a dict of command outputs"
    )


def parse_topology(
    data: str | CommandBundle | dict | None = None,
    *,
    config: OSPFScopeConfig | None = None,
    observer: Observer | None = None,
    owner_router_id: str | None = None,
) -> Topology:
    """Parse OSPF command output into a Topology.

    Args:
        data: Raw database text, a CommandBundle, or a dict of command
            outputs (snake_case or camelCase keys)
        config: Configuration (defaults to the global one)
        observer: Callback receiving assembly events
        owner_router_id: Router that produced the auxiliary commands

    Returns:
        Topology; empty when no OSPF data was found

    Raises:
        InvalidInputError: If the input violates the input contract
    """
    bundle = _coerce_bundle(data)
    builder = TopologyBuilder(config=config, observer=observer)
    return builder.build(bundle, owner_router_id=owner_router_id)


parse = parse_topology
