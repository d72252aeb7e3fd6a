"""
Cisco IOS/IOS-XE OSPF output parser.

Parses 'show ip ospf database' LSA output and the auxiliary OSPF
commands from Cisco IOS and IOS-XE devices into link-state records.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import re

from ospfscope.topology.parsers.base import OSPFOutputParser
from ospfscope.topology.parsers.blocks import iter_content_blocks
from ospfscope.topology.models import (
    LSABlock,
    LSAType,
    LinkType,
    RawLink,
    RawRouterLSA,
    RawNetworkLSA,
    SummaryRoute,
    ExternalRoute,
    ProcessInfo,
    OSPFNeighborEntry,
    InterfaceDetail,
    LearnedRoute,
)


# =============================================================================
# LSA Field Patterns (matched against stripped lines)
# =============================================================================

LS_AGE = re.compile(r"^LS age:\s*(?:MAXAGE\()?(\d+)\)?", re.IGNORECASE)
LINK_STATE_ID = re.compile(r"^Link State ID:\s*([\d.]+)", re.IGNORECASE)
ADV_ROUTER = re.compile(r"^Advertising Router:\s*([\d.]+)", re.IGNORECASE)
SEQ_NUMBER = re.compile(r"^LS Seq Number:\s*(\S+)", re.IGNORECASE)
CHECKSUM = re.compile(r"^Checksum:\s*(\S+)", re.IGNORECASE)
NETWORK_MASK = re.compile(r"^Network Mask:\s*(\S+)", re.IGNORECASE)
ATTACHED_ROUTER = re.compile(r"Attached Router:\s*([\d.]+)", re.IGNORECASE)
METRIC = re.compile(r"\bMetric:\s*(\d+)", re.IGNORECASE)
METRIC_TYPE = re.compile(r"Metric Type:\s*(\d)", re.IGNORECASE)
FORWARD_ADDRESS = re.compile(r"Forward(?:ing)? Address:\s*([\d.]+)", re.IGNORECASE)
ROUTE_TAG = re.compile(r"External Route Tag:\s*(\d+)", re.IGNORECASE)
ABR_MARKER = re.compile(r"(?:^|,\s*)Area Border Router", re.IGNORECASE)
ASBR_MARKER = re.compile(r"(?:^|,\s*)AS Boundary Router", re.IGNORECASE)

# "LS Type:" signatures
ROUTER_SIGNATURE = re.compile(r"LS Type:\s*Router Links", re.IGNORECASE)
NETWORK_SIGNATURE = re.compile(r"LS Type:\s*Network Links", re.IGNORECASE)
SUMMARY_NET_SIGNATURE = re.compile(r"LS Type:\s*Summary Links\s*\(Network\)", re.IGNORECASE)
SUMMARY_ASBR_SIGNATURE = re.compile(
    r"LS Type:\s*Summary Links\s*\(AS Boundary Router\)", re.IGNORECASE
)
EXTERNAL_SIGNATURE = re.compile(r"LS Type:\s*AS External Link", re.IGNORECASE)

# Router LSA link descriptors
LINK_START = re.compile(r"Link connected to:\s*(.+)", re.IGNORECASE)
LINK_ID = re.compile(r"\(Link ID\)[^:]*:\s*([\d.]+)", re.IGNORECASE)
LINK_DATA = re.compile(r"\(Link Data\)[^:]*:\s*([\d./]+)", re.IGNORECASE)
TOS0_METRIC = re.compile(r"TOS\s+0\s+Metrics?:\s*(\d+)", re.IGNORECASE)
BARE_METRIC = re.compile(r"^Metric:\s*(\d+)", re.IGNORECASE)


class CiscoIOSParser(OSPFOutputParser):
    """Parser for Cisco IOS/IOS-XE OSPF command output."""

    @property
    def vendor(self) -> str:
        return "cisco_ios"

    # ==========================================================================
    # Router LSAs (Type 1)
    # ==========================================================================

    def parse_router_lsas(self, blocks: list[LSABlock]) -> list[RawRouterLSA]:
        """Extract Router LSAs from 'show ip ospf database [router]' blocks."""
        result: list[RawRouterLSA] = []

        for area, block in iter_content_blocks(blocks):
            if not self._has_signature(block, ROUTER_SIGNATURE):
                continue

            fields = self._header_fields(block.lines)
            is_abr = any(ABR_MARKER.search(line.strip()) for line in block.lines)
            is_asbr = any(ASBR_MARKER.search(line.strip()) for line in block.lines)

            # The Router LSA is self-originated, so the advertising router
            # is the canonical router ID even when Link State ID differs
            router_id = fields["advertising_router"] or fields["link_state_id"]
            if not router_id:
                continue

            result.append(RawRouterLSA(
                router_id=router_id,
                area=area,
                age=fields["age"],
                seq_number=fields["seq_number"],
                checksum=fields["checksum"],
                is_abr=is_abr,
                is_asbr=is_asbr,
                links=self.parse_link_sub_blocks(block.lines),
            ))

        return result

    def parse_link_sub_blocks(self, lines: list[str]) -> list[RawLink]:
        """Parse 'Link connected to:' descriptors within a Router LSA.

        Handles both the classic database format and the detailed
        'show ip ospf database router' format:

          Link connected to: another Router (point-to-point)
           (Link ID) Neighboring Router ID: 2.2.2.2
           (Link Data) Router Interface address: 10.0.0.1
            Number of MTID metrics: 0
             TOS 0 Metrics: 10
        """
        links: list[RawLink] = []

        starts = [i for i, line in enumerate(lines) if LINK_START.search(line)]

        for n, start in enumerate(starts):
            end = starts[n + 1] if n + 1 < len(starts) else len(lines)
            description = LINK_START.search(lines[start]).group(1).strip()

            if re.search(r"point-to-point", description, re.IGNORECASE):
                link_type = LinkType.POINT_TO_POINT
            elif re.search(r"Transit", description, re.IGNORECASE):
                link_type = LinkType.TRANSIT
            else:
                link_type = LinkType.STUB

            link_id = ""
            link_data = ""
            tos0_metric: int | None = None
            bare_metric: int | None = None

            for line in lines[start + 1:end]:
                stripped = line.strip()

                match = LINK_ID.search(stripped)
                if match:
                    link_id = match.group(1)
                    continue

                match = LINK_DATA.search(stripped)
                if match:
                    link_data = match.group(1)
                    continue

                match = TOS0_METRIC.search(stripped)
                if match:
                    tos0_metric = int(match.group(1))
                    continue

                match = BARE_METRIC.match(stripped)
                if match and bare_metric is None:
                    bare_metric = int(match.group(1))

            if not link_id:
                continue

            if tos0_metric is not None:
                metric = tos0_metric
            elif bare_metric is not None:
                metric = bare_metric
            else:
                metric = 0

            links.append(RawLink(
                type=link_type,
                link_id=link_id,
                link_data=link_data,
                metric=metric,
            ))

        return links

    # ==========================================================================
    # Network LSAs (Type 2)
    # ==========================================================================

    def parse_network_lsas(self, blocks: list[LSABlock]) -> list[RawNetworkLSA]:
        """Extract Network LSAs from 'show ip ospf database [network]' blocks."""
        result: list[RawNetworkLSA] = []

        for area, block in iter_content_blocks(blocks):
            if not self._has_signature(block, NETWORK_SIGNATURE):
                continue

            fields = self._header_fields(block.lines)
            if not fields["link_state_id"]:
                continue

            attached: list[str] = []
            for line in block.lines:
                match = ATTACHED_ROUTER.search(line)
                if match and match.group(1) not in attached:
                    attached.append(match.group(1))

            result.append(RawNetworkLSA(
                link_state_id=fields["link_state_id"],
                advertising_router=fields["advertising_router"],
                area=area,
                network_mask=fields["network_mask"],
                age=fields["age"],
                seq_number=fields["seq_number"],
                checksum=fields["checksum"],
                attached_routers=attached,
            ))

        return result

    # ==========================================================================
    # Summary LSAs (Type 3 / Type 4)
    # ==========================================================================

    def parse_summary_lsas(self, blocks: list[LSABlock]) -> list[SummaryRoute]:
        """Extract Summary Net and Summary ASBR LSAs."""
        result: list[SummaryRoute] = []

        for area, block in iter_content_blocks(blocks):
            if self._has_signature(block, SUMMARY_NET_SIGNATURE):
                lsa_type = LSAType.SUMMARY
            elif self._has_signature(block, SUMMARY_ASBR_SIGNATURE):
                lsa_type = LSAType.ASBR_SUMMARY
            else:
                continue

            fields = self._header_fields(block.lines)
            if not fields["link_state_id"] or not fields["advertising_router"]:
                continue

            result.append(SummaryRoute(
                network=fields["link_state_id"],
                mask=fields["network_mask"],
                cost=fields["metric"] or 0,
                area=area,
                lsa_type=lsa_type,
                advertising_router=fields["advertising_router"],
                seq_number=fields["seq_number"],
                age=fields["age"],
            ))

        return result

    # ==========================================================================
    # External LSAs (Type 5)
    # ==========================================================================

    def parse_external_lsas(self, blocks: list[LSABlock]) -> list[ExternalRoute]:
        """Extract AS External LSAs."""
        result: list[ExternalRoute] = []

        for _area, block in iter_content_blocks(blocks):
            if not self._has_signature(block, EXTERNAL_SIGNATURE):
                continue

            fields = self._header_fields(block.lines)
            if not fields["link_state_id"] or not fields["advertising_router"]:
                continue

            metric_type = 2
            forwarding_address = "0.0.0.0"
            tag = 0
            for line in block.lines:
                stripped = line.strip()

                match = METRIC_TYPE.search(stripped)
                if match:
                    metric_type = 1 if match.group(1) == "1" else 2
                    continue

                match = FORWARD_ADDRESS.search(stripped)
                if match:
                    forwarding_address = match.group(1)
                    continue

                match = ROUTE_TAG.search(stripped)
                if match:
                    tag = int(match.group(1))

            result.append(ExternalRoute(
                network=fields["link_state_id"],
                mask=fields["network_mask"],
                metric=fields["metric"] or 0,
                metric_type=metric_type,
                tag=tag,
                forwarding_address=forwarding_address,
                advertising_router=fields["advertising_router"],
                seq_number=fields["seq_number"],
                age=fields["age"],
            ))

        return result

    # ==========================================================================
    # show ip ospf
    # ==========================================================================

    def parse_process_info(self, output: str) -> ProcessInfo | None:
        """Parse 'show ip ospf' output.

        Example:
         Routing Process "ospf 1" with ID 1.1.1.1
         Number of areas in this router is 2. 2 normal 0 stub 0 nssa
         Reference bandwidth unit is 100 mbps
        """
        output = self.clean_output(output)

        process_id = ""
        router_id = ""

        header_match = re.search(
            r"Routing Process\s+\"ospf\s+(\d+)\"\s+with ID\s+(\d+\.\d+\.\d+\.\d+)",
            output,
            re.IGNORECASE,
        )
        if header_match:
            process_id, router_id = header_match.groups()
        else:
            router_id_match = re.search(r"Router ID\s+(\d+\.\d+\.\d+\.\d+)", output)
            if router_id_match:
                router_id = router_id_match.group(1)
            process_match = re.search(r"Routing Process\s+\"ospf\s+(\d+)\"", output)
            if process_match:
                process_id = process_match.group(1)

        if not router_id and not process_id:
            return None

        info = ProcessInfo(process_id=process_id, router_id=router_id)

        areas_match = re.search(r"Number of areas in this router is\s+(\d+)", output)
        if areas_match:
            info.number_of_areas = int(areas_match.group(1))

        ref_bw_match = re.search(r"Reference bandwidth unit is\s+(\d+)", output)
        if ref_bw_match:
            info.reference_bandwidth = int(ref_bw_match.group(1))

        spf_match = re.search(r"Incremental-SPF\s+(enabled|disabled)", output, re.IGNORECASE)
        if spf_match:
            info.spf_algorithm = "incremental" if spf_match.group(1).lower() == "enabled" else "full"

        return info

    # ==========================================================================
    # show ip ospf neighbor
    # ==========================================================================

    def parse_neighbor_table(self, output: str) -> list[OSPFNeighborEntry]:
        """Parse 'show ip ospf neighbor' output."""
        output = self.clean_output(output)
        entries: list[OSPFNeighborEntry] = []

        # Neighbor ID     Pri   State           Dead Time   Address         Interface
        # 2.2.2.2           1   FULL/DR         00:00:39    10.0.12.2       GigabitEthernet0/0
        # 3.3.3.3           0   FULL/  -        00:00:33    10.0.13.3       Serial0/1
        neighbor_pattern = re.compile(
            r"^\s*(\d+\.\d+\.\d+\.\d+)\s+"  # Neighbor ID
            r"(\d+)\s+"  # Priority
            r"([A-Za-z0-9]+/\s*[A-Za-z-]+)\s+"  # State/Role
            r"(\S+)\s+"  # Dead time
            r"(\d+\.\d+\.\d+\.\d+)\s+"  # Address
            r"(\S+)",  # Interface
            re.MULTILINE,
        )

        for match in neighbor_pattern.finditer(output):
            neighbor_id, priority, state, dead_time, address, interface = match.groups()
            entries.append(OSPFNeighborEntry(
                neighbor_id=neighbor_id,
                priority=int(priority),
                state=re.sub(r"\s+", "", state),
                dead_time=dead_time,
                address=address,
                interface=interface,
            ))

        return entries

    # ==========================================================================
    # show ip ospf interface
    # ==========================================================================

    def parse_interface_detail(self, output: str) -> list[InterfaceDetail]:
        """Parse 'show ip ospf interface' output.

        Example section:
        GigabitEthernet0/0 is up, line protocol is up
          Internet Address 10.0.12.1/24, Area 0, Attached via Network Statement
          Process ID 1, Router ID 1.1.1.1, Network Type BROADCAST, Cost: 1
          Transmit Delay is 1 sec, State DR, Priority 1
          Designated Router (ID) 1.1.1.1, Interface address 10.0.12.1
          Backup Designated router (ID) 2.2.2.2, Interface address 10.0.12.2
          Timer intervals configured, Hello 10, Dead 40, Wait 40, Retransmit 5
        """
        output = self.clean_output(output)
        details: list[InterfaceDetail] = []
        current: InterfaceDetail | None = None

        header_pattern = re.compile(
            r"^(\S+)\s+is\s+(?:administratively\s+)?(?:up|down),\s*line protocol is",
            re.IGNORECASE,
        )

        for line in output.split("\n"):
            header_match = header_pattern.match(line)
            if header_match:
                current = InterfaceDetail(name=header_match.group(1))
                details.append(current)
                continue

            if current is None:
                continue

            stripped = line.strip()

            match = re.search(
                r"Internet Address\s+(\d+\.\d+\.\d+\.\d+)/(\d+)(?:,\s*Area\s+([\d.]+))?",
                stripped,
                re.IGNORECASE,
            )
            if match:
                current.address = match.group(1)
                current.prefix_length = int(match.group(2))
                if match.group(3):
                    current.area = match.group(3)
                continue

            if re.match(r"Process ID\s+\d+", stripped, re.IGNORECASE):
                match = re.search(r"Router ID\s+(\d+\.\d+\.\d+\.\d+)", stripped)
                if match:
                    current.router_id = match.group(1)
                match = re.search(r"Network Type\s+(\w+)", stripped)
                if match:
                    current.network_type = match.group(1)
                match = re.search(r"Cost:\s*(\d+)", stripped)
                if match:
                    current.cost = int(match.group(1))
                continue

            match = re.search(r",\s*State\s+([A-Za-z_]+)", stripped)
            if match:
                current.state = match.group(1)
                continue

            match = re.match(
                r"Designated Router \(ID\)\s+[\d.]+,\s*Interface address\s+(\d+\.\d+\.\d+\.\d+)",
                stripped,
                re.IGNORECASE,
            )
            if match:
                current.dr_address = match.group(1)
                continue

            match = re.match(
                r"Backup Designated Router \(ID\)\s+[\d.]+,\s*Interface address\s+(\d+\.\d+\.\d+\.\d+)",
                stripped,
                re.IGNORECASE,
            )
            if match:
                current.bdr_address = match.group(1)
                continue

            match = re.search(r"Hello\s+(\d+),\s*Dead\s+(\d+)", stripped)
            if match:
                current.hello_interval = int(match.group(1))
                current.dead_interval = int(match.group(2))

        return details

    # ==========================================================================
    # show ip route ospf
    # ==========================================================================

    def parse_route_table(self, output: str) -> list[LearnedRoute]:
        """Parse 'show ip route ospf' output."""
        output = self.clean_output(output)
        routes: list[LearnedRoute] = []

        # O        10.0.0.0/24 [110/20] via 192.168.1.1, 00:05:30, Gi0/0
        # O IA     172.16.0.0/16 [110/30] via 10.1.1.1, 00:10:00, Gi0/1
        # O*E2     0.0.0.0/0 [110/1] via 192.168.1.1, 00:15:00, Gi0/0
        route_pattern = re.compile(
            r"^O(\*)?\s*(IA|E1|E2|N1|N2)?\s+"  # OSPF type
            r"(\d+\.\d+\.\d+\.\d+(?:/\d+)?)\s+"  # Network
            r"\[\d+/(\d+)\]\s+"  # [AD/metric]
            r"via\s+(\d+\.\d+\.\d+\.\d+)"  # Next hop
            r"(?:,\s*([^,\s]+))?"  # Age (or interface)
            r"(?:,\s*(\S+))?"  # Interface
        )
        # ECMP continuation:   [110/20] via 10.0.0.5, 00:05:30, Gi0/1
        continuation_pattern = re.compile(
            r"^\s+\[\d+/(\d+)\]\s+"
            r"via\s+(\d+\.\d+\.\d+\.\d+)"
            r"(?:,\s*([^,\s]+))?"
            r"(?:,\s*(\S+))?"
        )
        # Classful header; entries below it omit the prefix length
        #       172.16.0.0/24 is subnetted, 2 subnets
        subnetted_pattern = re.compile(r"^\s*\d+\.\d+\.\d+\.\d+/(\d+)\s+is subnetted")
        tag_pattern = re.compile(r"\btag\s+(\d+)", re.IGNORECASE)

        subnet_length: str | None = None
        last_prefix: str | None = None
        last_type: str | None = None

        for line in output.split("\n"):
            subnetted_match = subnetted_pattern.match(line)
            if subnetted_match:
                subnet_length = subnetted_match.group(1)
                last_prefix = last_type = None
                continue

            match = route_pattern.match(line)
            if match:
                _, sub_type, network, metric, next_hop, age, interface = match.groups()
                if "/" not in network and subnet_length:
                    network = f"{network}/{subnet_length}"
                address, length = self.parse_prefix(network)
                prefix = f"{address}/{length}"
                route_type = f"O {sub_type}" if sub_type else "O"
                last_prefix, last_type = prefix, route_type
            else:
                match = continuation_pattern.match(line)
                if not match or last_prefix is None:
                    if line.strip():
                        last_prefix = last_type = None
                    continue
                metric, next_hop, age, interface = match.groups()
                prefix, route_type = last_prefix, last_type

            tag_match = tag_pattern.search(line)
            routes.append(LearnedRoute(
                prefix=prefix,
                route_type=route_type,
                metric=int(metric),
                next_hop=next_hop,
                out_interface=self._route_interface(age, interface),
                tag=int(tag_match.group(1)) if tag_match else None,
            ))

        return routes

    # ==========================================================================
    # Helpers
    # ==========================================================================

    @staticmethod
    def _has_signature(block: LSABlock, signature: re.Pattern) -> bool:
        return any(signature.search(line) for line in block.lines)

    @staticmethod
    def _route_interface(age: str | None, interface: str | None) -> str:
        """Pick the outgoing interface from the trailing route fields."""
        if interface:
            return interface
        # A lone trailing field is the interface unless it is an age
        if age and not age[0].isdigit():
            return age
        return ""

    def _header_fields(self, lines: list[str]) -> dict:
        """Scan the common LSA header fields of a block (first value wins).

        Network masks are normalized to slash form ("255.255.255.0" -> "/24").
        """
        fields: dict = {
            "age": None,
            "link_state_id": "",
            "advertising_router": "",
            "seq_number": None,
            "checksum": None,
            "network_mask": "",
            "metric": None,
        }

        for line in lines:
            stripped = line.strip()

            match = LS_AGE.match(stripped)
            if match:
                if fields["age"] is None:
                    fields["age"] = int(match.group(1))
                continue

            match = LINK_STATE_ID.match(stripped)
            if match:
                fields["link_state_id"] = fields["link_state_id"] or match.group(1)
                continue

            match = ADV_ROUTER.match(stripped)
            if match:
                fields["advertising_router"] = fields["advertising_router"] or match.group(1)
                continue

            match = SEQ_NUMBER.match(stripped)
            if match:
                fields["seq_number"] = fields["seq_number"] or match.group(1)
                continue

            match = CHECKSUM.match(stripped)
            if match:
                fields["checksum"] = fields["checksum"] or match.group(1)
                continue

            match = NETWORK_MASK.match(stripped)
            if match:
                if not fields["network_mask"]:
                    fields["network_mask"] = f"/{self.mask_to_prefix_length(match.group(1))}"
                continue

            if "Metric Type" in stripped:
                continue
            match = METRIC.search(stripped)
            if match and fields["metric"] is None:
                fields["metric"] = int(match.group(1))

        return fields
