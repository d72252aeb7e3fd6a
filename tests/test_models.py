"""Tests for topology data models."""

import json

import pytest

from ospfscope.topology import (
    ChangeType,
    CommandBundle,
    InvalidInputError,
    Link,
    LinkType,
    OSPFInterface,
    Router,
    RouterRole,
    Topology,
    diff_topologies,
    parse_topology,
)
from ospfscope.topology.models import Change, id_sort_key, link_key


class TestHelpers:
    def test_id_sort_key_numeric_order(self):
        ids = ["10.0.0.1", "9.9.9.9", "1.1.1.1", "backbone", "2"]
        assert sorted(ids, key=id_sort_key) == ["2", "1.1.1.1", "9.9.9.9", "10.0.0.1", "backbone"]

    def test_link_key_is_unordered(self):
        assert link_key("2.2.2.2", "1.1.1.1", "point-to-point") == "1.1.1.1|2.2.2.2|point-to-point"
        assert link_key("1.1.1.1", "2.2.2.2", LinkType.TRANSIT) == "1.1.1.1|2.2.2.2|transit"

    def test_link_cost_from(self):
        link = Link(
            id="p2p-1.1.1.1-2.2.2.2",
            source="1.1.1.1",
            target="2.2.2.2",
            cost=20,
            source_cost=10,
            target_cost=20,
            link_type=LinkType.POINT_TO_POINT,
        )
        assert link.cost_from("1.1.1.1") == 10
        assert link.cost_from("2.2.2.2") == 20
        assert link.cost_from("3.3.3.3") is None


class TestRouter:
    def test_promote_never_demotes(self):
        router = Router(id="1.1.1.1", router_id="1.1.1.1")
        assert router.promote(RouterRole.ASBR) is True
        assert router.promote(RouterRole.ABR) is False
        assert router.role == RouterRole.ASBR

    def test_freshness_first_seen_wins(self):
        router = Router(id="1.1.1.1", router_id="1.1.1.1")
        router.set_freshness("80000001", 10, "0x1")
        router.set_freshness("80000009", 99, "0x9")
        assert (router.sequence_number, router.age, router.checksum) == ("80000001", 10, "0x1")

    def test_neighbors_exclude_self_and_duplicates(self):
        router = Router(id="1.1.1.1", router_id="1.1.1.1")
        assert router.add_neighbor("2.2.2.2") is True
        assert router.add_neighbor("2.2.2.2") is False
        assert router.add_neighbor("1.1.1.1") is False
        assert router.neighbors == ["2.2.2.2"]

    def test_interface_dedup(self):
        router = Router(id="1.1.1.1", router_id="1.1.1.1")
        router.add_interface(OSPFInterface("10.0.0.1", "2.2.2.2", LinkType.POINT_TO_POINT, 10))
        router.add_interface(OSPFInterface("10.0.0.1", "2.2.2.2", LinkType.POINT_TO_POINT, 10))
        router.add_interface(OSPFInterface("10.0.0.1", "10.0.0.0", LinkType.STUB, 10))
        assert len(router.interfaces) == 2


class TestCommandBundle:
    def test_camel_and_snake_keys(self):
        bundle = CommandBundle.from_dict({"databaseRouter": "a", "route_table": "b"})
        assert bundle.database_router == "a"
        assert bundle.route_table == "b"

    def test_unknown_key(self):
        with pytest.raises(InvalidInputError):
            CommandBundle.from_dict({"bogus": "x"})

    def test_non_text_field(self):
        with pytest.raises(InvalidInputError):
            CommandBundle(raw=["not", "text"])

    def test_database_text_order(self):
        bundle = CommandBundle(raw="C", database_network="B", database_router="A")
        assert bundle.database_text() == "A\nB\nC"

    def test_command_text_falls_back_to_raw(self):
        bundle = CommandBundle(raw="dump")
        assert bundle.command_text("neighbor_table") == "dump"
        assert CommandBundle().command_text("neighbor_table") == ""

    def test_is_empty(self):
        assert CommandBundle().is_empty()
        assert CommandBundle(raw="   \n").is_empty()
        assert not CommandBundle(route_table="O 10.0.0.0/8").is_empty()


class TestTopologySerialization:
    def test_round_trip(self, full_bundle):
        topology = parse_topology(full_bundle)
        restored = Topology.from_dict(json.loads(json.dumps(topology.to_dict())))
        assert restored == topology
        assert diff_topologies(topology, restored) == []

    def test_rejects_non_object(self):
        with pytest.raises(InvalidInputError):
            Topology.from_dict(["routers"])

    def test_rejects_malformed_router(self):
        with pytest.raises(InvalidInputError):
            Topology.from_dict({"routers": [{"router_id": "1.1.1.1"}]})

    def test_rejects_unknown_enum_value(self):
        data = {"links": [{"id": "x", "source": "a", "target": "b", "link_type": "virtual"}]}
        with pytest.raises(InvalidInputError):
            Topology.from_dict(data)

    def test_is_empty(self):
        assert Topology().is_empty()
        assert not Topology(routers=[Router(id="1.1.1.1", router_id="1.1.1.1")]).is_empty()


class TestChange:
    def test_round_trip(self):
        change = Change(
            id="metric-changed:1.1.1.1|2.2.2.2|point-to-point",
            type=ChangeType.METRIC_CHANGED,
            description="Cost changed",
            timestamp=3.0,
            link_id="p2p-1.1.1.1-2.2.2.2",
            link_key="1.1.1.1|2.2.2.2|point-to-point",
            old_value=10,
            new_value=20,
        )
        data = change.to_dict()
        assert data["type"] == "metric-changed"
        assert Change.from_dict(data) == change
