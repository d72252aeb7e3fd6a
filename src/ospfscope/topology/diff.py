"""
OSPF topology change detection.

Compares two topology snapshots and reports the semantic differences
between them as an ordered list of Change records.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import logging
import time

from ospfscope.topology.models import (
    Change,
    ChangeType,
    Link,
    Router,
    Topology,
    id_sort_key,
)

logger = logging.getLogger(__name__)


def _link_sort_key(key: str) -> tuple:
    first, second, link_type = key.split("|")
    return (id_sort_key(first), id_sort_key(second), link_type)


def _endpoints(key: str) -> tuple[str, str]:
    first, second, _ = key.split("|")
    return first, second


def _link_label(link: Link) -> str:
    return f"{link.link_type.value} link {link.source} <-> {link.target}"


def _change(
    change_type: ChangeType,
    subject: str,
    description: str,
    timestamp: float,
    **values,
) -> Change:
    return Change(
        id=f"{change_type.value}:{subject}",
        type=change_type,
        description=description,
        timestamp=timestamp,
        **values,
    )


def diff_topologies(
    previous: Topology,
    current: Topology,
    *,
    timestamp: float | None = None,
) -> list[Change]:
    """Compute the changes that turn one topology snapshot into another.

    Routers are matched by Router ID and links by their dedup key (sorted
    endpoint pair plus link type). Changes are emitted grouped by kind in
    the order router-added, router-removed, area-changed, role-changed,
    link-added, link-removed, metric-changed, each group in ascending
    identifier order, so identical inputs always yield identical output.

    Args:
        previous: Earlier snapshot
        current: Later snapshot
        timestamp: Timestamp stamped on every change (defaults to now)

    Returns:
        Ordered list of Change records (empty when nothing changed)
    """
    stamp = time.time() if timestamp is None else timestamp

    old_routers: dict[str, Router] = {}
    for router in previous.routers:
        old_routers.setdefault(router.id, router)
    new_routers: dict[str, Router] = {}
    for router in current.routers:
        new_routers.setdefault(router.id, router)

    added = sorted(new_routers.keys() - old_routers.keys(), key=id_sort_key)
    removed = sorted(old_routers.keys() - new_routers.keys(), key=id_sort_key)
    common = sorted(old_routers.keys() & new_routers.keys(), key=id_sort_key)

    changes: list[Change] = []

    for rid in added:
        router = new_routers[rid]
        changes.append(_change(
            ChangeType.ROUTER_ADDED, rid,
            f"Router {rid} added in area {router.area} ({router.role.value})",
            stamp,
            router_id=rid,
        ))

    for rid in removed:
        router = old_routers[rid]
        changes.append(_change(
            ChangeType.ROUTER_REMOVED, rid,
            f"Router {rid} removed from area {router.area}",
            stamp,
            router_id=rid,
        ))

    for rid in common:
        old, new = old_routers[rid], new_routers[rid]
        if old.area != new.area:
            changes.append(_change(
                ChangeType.AREA_CHANGED, rid,
                f"Router {rid} moved from area {old.area} to area {new.area}",
                stamp,
                router_id=rid,
                old_value=old.area,
                new_value=new.area,
            ))

    for rid in common:
        old, new = old_routers[rid], new_routers[rid]
        if old.role != new.role:
            changes.append(_change(
                ChangeType.ROLE_CHANGED, rid,
                f"Router {rid} role changed from {old.role.value} to {new.role.value}",
                stamp,
                router_id=rid,
                old_value=old.role.value,
                new_value=new.role.value,
            ))

    old_links: dict[str, Link] = {}
    for link in previous.links:
        old_links.setdefault(link.key, link)
    new_links: dict[str, Link] = {}
    for link in current.links:
        new_links.setdefault(link.key, link)

    for key in sorted(new_links.keys() - old_links.keys(), key=_link_sort_key):
        link = new_links[key]
        changes.append(_change(
            ChangeType.LINK_ADDED, key,
            f"{_link_label(link).capitalize()} added (cost {link.cost})",
            stamp,
            link_id=link.id,
            link_key=key,
            new_value=link.cost,
        ))

    for key in sorted(old_links.keys() - new_links.keys(), key=_link_sort_key):
        link = old_links[key]
        changes.append(_change(
            ChangeType.LINK_REMOVED, key,
            f"{_link_label(link).capitalize()} removed",
            stamp,
            link_id=link.id,
            link_key=key,
            old_value=link.cost,
        ))

    for key in sorted(old_links.keys() & new_links.keys(), key=_link_sort_key):
        old, new = old_links[key], new_links[key]
        first, second = _endpoints(key)

        # Directional costs compared per endpoint, so a swapped
        # source/target between snapshots is not a change
        old_costs = (old.cost_from(first), old.cost_from(second))
        new_costs = (new.cost_from(first), new.cost_from(second))
        if old.cost == new.cost and old_costs == new_costs:
            continue

        if old.cost != new.cost:
            old_value, new_value = old.cost, new.cost
        else:
            old_value = f"{old_costs[0]}/{old_costs[1]}"
            new_value = f"{new_costs[0]}/{new_costs[1]}"

        changes.append(_change(
            ChangeType.METRIC_CHANGED, key,
            f"Cost of {_link_label(new)} changed from {old_value} to {new_value}",
            stamp,
            link_id=new.id,
            link_key=key,
            old_value=old_value,
            new_value=new_value,
        ))

    logger.debug(f"Topology diff produced {len(changes)} changes")
    return changes


diff = diff_topologies
