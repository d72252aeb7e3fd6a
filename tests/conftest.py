"""Shared fixtures: Cisco IOS OSPF command captures."""

import logging

import pytest

from ospfscope.config import OSPFScopeConfig, set_config


DATABASE_ROUTER = """\
R1#show ip ospf database router

            OSPF Router with ID (1.1.1.1) (Process ID 1)

                Router Link States (Area 0)

  LS age: 120
  Options: (No TOS-capability, DC)
  LS Type: Router Links
  Link State ID: 1.1.1.1
  Advertising Router: 1.1.1.1
  LS Seq Number: 80000005
  Checksum: 0x1A2B
  Length: 72
  Area Border Router
  Number of Links: 3

    Link connected to: another Router (point-to-point)
     (Link ID) Neighboring Router ID: 2.2.2.2
     (Link Data) Router Interface address: 10.0.12.1
      Number of MTID metrics: 0
       TOS 0 Metrics: 10

    Link connected to: a Stub Network
     (Link ID) Network/subnet number: 10.0.12.0
     (Link Data) Network Mask: 255.255.255.252
      Number of MTID metrics: 0
       TOS 0 Metrics: 10

    Link connected to: a Transit Network
     (Link ID) Designated Router address: 10.0.123.3
     (Link Data) Router Interface address: 10.0.123.1
      Number of MTID metrics: 0
       TOS 0 Metrics: 1

  LS age: 98
  Options: (No TOS-capability, DC)
  LS Type: Router Links
  Link State ID: 2.2.2.2
  Advertising Router: 2.2.2.2
  LS Seq Number: 80000003
  Checksum: 0x2B3C
  Length: 72
  Number of Links: 3

    Link connected to: another Router (point-to-point)
     (Link ID) Neighboring Router ID: 1.1.1.1
     (Link Data) Router Interface address: 10.0.12.2
      Number of MTID metrics: 0
       TOS 0 Metrics: 20

    Link connected to: a Stub Network
     (Link ID) Network/subnet number: 10.0.12.0
     (Link Data) Network Mask: 255.255.255.252
      Number of MTID metrics: 0
       TOS 0 Metrics: 20

    Link connected to: a Transit Network
     (Link ID) Designated Router address: 10.0.123.3
     (Link Data) Router Interface address: 10.0.123.2
      Number of MTID metrics: 0
       TOS 0 Metrics: 1

  LS age: MAXAGE(3600)
  Options: (No TOS-capability, DC)
  LS Type: Router Links
  Link State ID: 3.3.3.3
  Advertising Router: 3.3.3.3
  LS Seq Number: 80000007
  Checksum: 0x3C4D
  Length: 48
  AS Boundary Router
  Number of Links: 2

    Link connected to: a Transit Network
     (Link ID) Designated Router address: 10.0.123.3
     (Link Data) Router Interface address: 10.0.123.3
      Number of MTID metrics: 0
       TOS 0 Metrics: 1

    Link connected to: a Stub Network
     (Link ID) Network/subnet number: 3.3.3.3
     (Link Data) Network Mask: 255.255.255.255
      Number of MTID metrics: 0
       TOS 0 Metrics: 1


                Router Link States (Area 1)

  LS age: 310
  Options: (No TOS-capability, DC)
  LS Type: Router Links
  Link State ID: 1.1.1.1
  Advertising Router: 1.1.1.1
  LS Seq Number: 80000002
  Checksum: 0x4D5E
  Length: 36
  Area Border Router
  Number of Links: 1

    Link connected to: another Router (point-to-point)
     (Link ID) Neighboring Router ID: 4.4.4.4
     (Link Data) Router Interface address: 10.0.14.1
      Number of MTID metrics: 0
       TOS 0 Metrics: 5

  LS age: 305
  Options: (No TOS-capability, DC)
  LS Type: Router Links
  Link State ID: 4.4.4.4
  Advertising Router: 4.4.4.4
  LS Seq Number: 80000004
  Checksum: 0x5E6F
  Length: 36
  Number of Links: 1

    Link connected to: another Router (point-to-point)
     (Link ID) Neighboring Router ID: 1.1.1.1
     (Link Data) Router Interface address: 10.0.14.4
      Number of MTID metrics: 0
       TOS 0 Metrics: 5
"""

DATABASE_NETWORK = """\
R1#show ip ospf database network

            OSPF Router with ID (1.1.1.1) (Process ID 1)

                Net Link States (Area 0)

  LS age: 95
  Options: (No TOS-capability, DC)
  LS Type: Network Links
  Link State ID: 10.0.123.3 (address of Designated Router)
  Advertising Router: 3.3.3.3
  LS Seq Number: 80000002
  Checksum: 0x6F70
  Length: 36
  Network Mask: /24
        Attached Router: 3.3.3.3
        Attached Router: 1.1.1.1
        Attached Router: 2.2.2.2
"""

DATABASE_INTER_AREA = """\
                Summary Net Link States (Area 0)

  LS age: 300
  Options: (No TOS-capability, DC, Upward)
  LS Type: Summary Links(Network)
  Link State ID: 172.16.1.0 (summary Network Number)
  Advertising Router: 1.1.1.1
  LS Seq Number: 80000001
  Checksum: 0x9ABC
  Length: 28
  Network Mask: /24
        MTID: 0         Metric: 2

                Summary ASB Link States (Area 1)

  LS age: 280
  Options: (No TOS-capability, DC, Upward)
  LS Type: Summary Links(AS Boundary Router)
  Link State ID: 3.3.3.3 (AS Boundary Router address)
  Advertising Router: 1.1.1.1
  LS Seq Number: 80000001
  Checksum: 0xABCD
  Length: 28
  Network Mask: /0
        MTID: 0         Metric: 1

                Type-5 AS External Link States

  LS age: 200
  Options: (No TOS-capability, DC, Upward)
  LS Type: AS External Link
  Link State ID: 192.168.100.0 (External Network Number )
  Advertising Router: 3.3.3.3
  LS Seq Number: 80000001
  Checksum: 0xDEF0
  Length: 36
  Network Mask: /24
        Metric Type: 2 (Larger than any link state path)
        MTID: 0
        Metric: 20
        Forward Address: 0.0.0.0
        External Route Tag: 100
"""

PROCESS_INFO = """\
R1#show ip ospf
 Routing Process "ospf 1" with ID 1.1.1.1
 Start time: 00:00:12.345, Time elapsed: 01:02:03.456
 Supports only single TOS(TOS0) routes
 It is an area border router
 Incremental-SPF disabled
 Reference bandwidth unit is 100 mbps
    Number of areas in this router is 2. 2 normal 0 stub 0 nssa
"""

NEIGHBOR_TABLE = """\
R1#show ip ospf neighbor

Neighbor ID     Pri   State           Dead Time   Address         Interface
2.2.2.2           1   FULL/BDR        00:00:38    10.0.123.2      GigabitEthernet0/1
3.3.3.3           1   FULL/DR         00:00:35    10.0.123.3      GigabitEthernet0/1
2.2.2.2           0   FULL/  -        00:00:33    10.0.12.2       Serial0/0
4.4.4.4           0   FULL/  -        00:00:31    10.0.14.4       Serial0/1
"""

INTERFACE_DETAIL = """\
R1#show ip ospf interface
GigabitEthernet0/1 is up, line protocol is up
  Internet Address 10.0.123.1/24, Area 0, Attached via Network Statement
  Process ID 1, Router ID 1.1.1.1, Network Type BROADCAST, Cost: 1
  Topology-MTID    Cost    Disabled    Shutdown      Topology Name
        0           1         no          no            Base
  Transmit Delay is 1 sec, State DROTHER, Priority 1
  Designated Router (ID) 3.3.3.3, Interface address 10.0.123.3
  Backup Designated router (ID) 2.2.2.2, Interface address 10.0.123.2
  Timer intervals configured, Hello 10, Dead 40, Wait 40, Retransmit 5
Serial0/1 is up, line protocol is up
  Internet Address 10.0.14.1/30, Area 1, Attached via Network Statement
  Process ID 1, Router ID 1.1.1.1, Network Type POINT_TO_POINT, Cost: 5
  Transmit Delay is 1 sec, State POINT_TO_POINT
  Timer intervals configured, Hello 10, Dead 40, Wait 40, Retransmit 5
"""

ROUTE_TABLE = """\
R1#show ip route ospf
Codes: L - local, C - connected, S - static, R - RIP, M - mobile, B - BGP
       O - OSPF, IA - OSPF inter area
       E1 - OSPF external type 1, E2 - OSPF external type 2

Gateway of last resort is not set

      3.0.0.0/32 is subnetted, 1 subnets
O        3.3.3.3 [110/2] via 10.0.123.3, 00:15:00, GigabitEthernet0/1
O E2  192.168.100.0/24 [110/20] via 10.0.123.3, 00:14:10, GigabitEthernet0/1
O IA  172.16.4.0/24 [110/11] via 10.0.14.4, 00:10:00, Serial0/1
                    [110/11] via 10.0.12.2, 00:10:00, Serial0/0
"""


def router_lsa(router_id, links=(), abr=False, asbr=False, age=100, seq="80000001"):
    """Render one IOS Router LSA.

    links: (kind, link_id, link_data, metric) with kind p2p, stub or transit
    """
    lines = [
        f"  LS age: {age}",
        "  Options: (No TOS-capability, DC)",
        "  LS Type: Router Links",
        f"  Link State ID: {router_id}",
        f"  Advertising Router: {router_id}",
        f"  LS Seq Number: {seq}",
        "  Checksum: 0x1234",
        "  Length: 48",
    ]
    if abr:
        lines.append("  Area Border Router")
    if asbr:
        lines.append("  AS Boundary Router")
    lines.append(f"  Number of Links: {len(links)}")
    lines.append("")

    labels = {
        "p2p": ("another Router (point-to-point)", "Neighboring Router ID", "Router Interface address"),
        "stub": ("a Stub Network", "Network/subnet number", "Network Mask"),
        "transit": ("a Transit Network", "Designated Router address", "Router Interface address"),
    }
    for kind, link_id, link_data, metric in links:
        description, id_label, data_label = labels[kind]
        lines.extend([
            f"    Link connected to: {description}",
            f"     (Link ID) {id_label}: {link_id}",
            f"     (Link Data) {data_label}: {link_data}",
            "      Number of MTID metrics: 0",
            f"       TOS 0 Metrics: {metric}",
            "",
        ])
    return "\n".join(lines)


def area_header(area, kind="Router"):
    return f"\n                {kind} Link States (Area {area})\n"


@pytest.fixture(autouse=True)
def default_config():
    """Isolate tests from any OSPFSCOPE_* environment or .env file."""
    set_config(OSPFScopeConfig())
    yield
    set_config(None)

    # CLI runs attach handlers bound to captured streams
    logger = logging.getLogger("ospfscope")
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def database_router():
    return DATABASE_ROUTER


@pytest.fixture
def database_network():
    return DATABASE_NETWORK


@pytest.fixture
def database_inter_area():
    return DATABASE_INTER_AREA


@pytest.fixture
def full_database():
    return "\n".join([DATABASE_ROUTER, DATABASE_NETWORK, DATABASE_INTER_AREA])


@pytest.fixture
def process_info():
    return PROCESS_INFO


@pytest.fixture
def neighbor_table():
    return NEIGHBOR_TABLE


@pytest.fixture
def interface_detail():
    return INTERFACE_DETAIL


@pytest.fixture
def route_table():
    return ROUTE_TABLE


@pytest.fixture
def full_bundle():
    return {
        "processInfo": PROCESS_INFO,
        "neighborTable": NEIGHBOR_TABLE,
        "databaseRouter": DATABASE_ROUTER,
        "databaseNetwork": DATABASE_NETWORK + DATABASE_INTER_AREA,
        "interfaceDetail": INTERFACE_DETAIL,
        "routeTable": ROUTE_TABLE,
    }


@pytest.fixture
def make_router_lsa():
    return router_lsa


@pytest.fixture
def make_area_header():
    return area_header
