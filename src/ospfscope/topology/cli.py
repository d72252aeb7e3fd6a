"""
CLI commands for OSPF topology reconstruction.

Provides commands for parsing captured OSPF command output into a
topology and for comparing two topology snapshots.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import json
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ospfscope import __version__
from ospfscope.logging_config import (
    configure_logging,
    error_summary,
    reset_error_stats,
    track_error,
)
from ospfscope.topology.annotate import annotate, build_graph, filter_graph
from ospfscope.topology.builder import parse_topology
from ospfscope.topology.diff import diff_topologies
from ospfscope.topology.models import (
    ChangeType,
    CommandBundle,
    InvalidInputError,
    LinkType,
    RouterRole,
    Topology,
    ViewFilter,
)

console = Console()
err_console = Console(stderr=True)

ROLE_STYLES = {
    RouterRole.INTERNAL: "white",
    RouterRole.ABR: "yellow",
    RouterRole.ASBR: "magenta",
}

CHANGE_STYLES = {
    ChangeType.ROUTER_ADDED: "green",
    ChangeType.LINK_ADDED: "green",
    ChangeType.ROUTER_REMOVED: "red",
    ChangeType.LINK_REMOVED: "red",
    ChangeType.METRIC_CHANGED: "yellow",
    ChangeType.AREA_CHANGED: "cyan",
    ChangeType.ROLE_CHANGED: "cyan",
}


def read_capture(path: str | None) -> str | None:
    """Read a capture file ('-' for stdin); None when no path was given."""
    if path is None:
        return None
    if path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8", errors="replace")


def load_snapshot(path: str) -> Topology:
    """Load a topology from a JSON file written by 'parse --output' or from raw text.

    Raises:
        InvalidInputError: If a JSON snapshot is malformed
    """
    text = read_capture(path) or ""
    if text.lstrip().startswith("{"):
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise InvalidInputError(f"{path}: invalid topology JSON: {e}") from e
        return Topology.from_dict(data)
    return parse_topology(text)


def fail(kind: str, message: str, exception: Exception | None = None) -> None:
    """Report a failure and exit with status 1."""
    track_error(kind, message, exception)
    if kind == "no_data":
        console.print(f"[yellow]{message}[/yellow]")
    else:
        console.print(f"[red]{message}[/red]")
    sys.exit(1)


def report_errors() -> None:
    """Print the failures recorded during this invocation."""
    rows = error_summary()
    if not rows:
        return
    table = Table(title="Errors")
    table.add_column("Kind", style="red")
    table.add_column("Count", justify="right")
    table.add_column("Last message")
    for kind, count, message in rows:
        table.add_row(kind, str(count), message)
    err_console.print(table)


def graph_filter_options(f):
    """Shared --view, --area and --link-type options."""
    f = click.option("--link-type", type=click.Choice([t.value for t in LinkType]),
                     help="Only show links of this type")(f)
    f = click.option("--area", help="Only show nodes in this area")(f)
    f = click.option("--view", type=click.Choice([v.value for v in ViewFilter]), default="all",
                     show_default=True, help="Graph view preset")(f)
    return f


def echo_graph(nodes, edges) -> None:
    click.echo(json.dumps({
        "nodes": [n.to_dict() for n in nodes],
        "edges": [e.to_dict() for e in edges],
    }, indent=2))


# =============================================================================
# Main command group
# =============================================================================

@click.group()
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.version_option(__version__, prog_name="ospfscope")
@click.pass_context
def topology(ctx, debug):
    """OSPF topology reconstruction and change detection.

    Parse 'show ip ospf' command captures from Cisco IOS devices into
    routers, networks and links, and compare snapshots over time.
    """
    configure_logging(debug=debug)
    reset_error_stats()
    if debug:
        ctx.call_on_close(report_errors)


# =============================================================================
# parse
# =============================================================================

@topology.command("parse")
@click.argument("file", required=False, type=click.Path(exists=True, allow_dash=True, dir_okay=False))
@click.option("--router", "router_file", type=click.Path(exists=True, dir_okay=False),
              help="'show ip ospf database router' output")
@click.option("--network", "network_file", type=click.Path(exists=True, dir_okay=False),
              help="'show ip ospf database network' output")
@click.option("--neighbor", "neighbor_file", type=click.Path(exists=True, dir_okay=False),
              help="'show ip ospf neighbor' output")
@click.option("--interface", "interface_file", type=click.Path(exists=True, dir_okay=False),
              help="'show ip ospf interface' output")
@click.option("--process", "process_file", type=click.Path(exists=True, dir_okay=False),
              help="'show ip ospf' output")
@click.option("--routes", "routes_file", type=click.Path(exists=True, dir_okay=False),
              help="'show ip route ospf' output")
@click.option("--owner", help="Router ID the auxiliary commands were captured on")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.option("--graph", "as_graph", is_flag=True, help="Output the graph as JSON")
@click.option("-o", "--output", type=click.Path(dir_okay=False), help="Write topology JSON to file")
@graph_filter_options
def parse_command(file, router_file, network_file, neighbor_file, interface_file, process_file,
                  routes_file, owner, as_json, as_graph, output, view, area, link_type):
    """Parse OSPF command output into a topology.

    FILE: Combined capture (e.g. 'show ip ospf database' plus any other
    commands); '-' reads standard input.

    Examples:

        ospfscope parse capture.txt

        ospfscope parse --router db-router.txt --network db-network.txt --neighbor nbr.txt

        ospfscope parse capture.txt --owner 1.1.1.1 -o snapshot.json

        ospfscope parse capture.txt --view cost-unbalanced

    The view, area and link-type filters narrow the tables and the --graph
    output; --json and --output always carry the full topology.
    """
    bundle = CommandBundle(
        raw=read_capture(file),
        database_router=read_capture(router_file),
        database_network=read_capture(network_file),
        neighbor_table=read_capture(neighbor_file),
        interface_detail=read_capture(interface_file),
        process_info=read_capture(process_file),
        route_table=read_capture(routes_file),
    )
    if bundle.is_empty() and file is None:
        bundle = CommandBundle(raw=sys.stdin.read())

    try:
        topo = parse_topology(bundle, owner_router_id=owner)
    except InvalidInputError as e:
        fail("invalid_input", f"Failed to parse: {e}", e)

    if topo.is_empty():
        fail("no_data", "No OSPF data found. Check that the input contains 'show ip ospf database' output.")

    if output:
        Path(output).write_text(json.dumps(topo.to_dict(), indent=2), encoding="utf-8")

    if as_json:
        click.echo(json.dumps(topo.to_dict(), indent=2))
        return

    nodes, edges = filter_graph(*build_graph(topo), view=view, area=area, link_type=link_type)
    if as_graph:
        echo_graph(nodes, edges)
        return

    display_topology(topo, {n.id for n in nodes}, {e.id for e in edges})
    if output:
        console.print(f"\n[dim]Topology written to {output}[/dim]")


def display_topology(topo: Topology, node_ids: set[str] | None = None,
                     edge_ids: set[str] | None = None) -> None:
    """Print router, link and external route tables.

    When node_ids or edge_ids are given, only those routers and links are listed.
    """
    routers = [r for r in topo.routers if node_ids is None or r.id in node_ids]
    links = [link for link in topo.links if edge_ids is None or link.id in edge_ids]

    table = Table(title="OSPF Routers")
    table.add_column("Router ID", style="cyan")
    table.add_column("Role")
    table.add_column("Area")
    table.add_column("Neighbors", justify="right")
    table.add_column("Networks", justify="right")
    table.add_column("LSA Types")

    for router in routers:
        style = ROLE_STYLES.get(router.role, "white")
        table.add_row(
            router.id,
            f"[{style}]{router.role.value}[/{style}]",
            router.area,
            str(len(router.neighbors)),
            str(len(router.networks)),
            ", ".join(t.value for t in router.lsa_types) or "-",
        )

    console.print(table)

    if links:
        link_table = Table(title="Links")
        link_table.add_column("Type", style="cyan")
        link_table.add_column("Source")
        link_table.add_column("Target")
        link_table.add_column("Cost", justify="right")
        link_table.add_column("Src/Tgt Cost", justify="right")
        link_table.add_column("Area")

        for link in links:
            link_table.add_row(
                link.link_type.value,
                link.source,
                link.target,
                str(link.cost),
                f"{link.source_cost}/{link.target_cost}",
                link.area,
            )

        console.print(link_table)

    if topo.external_routes:
        ext_table = Table(title="External Routes")
        ext_table.add_column("Network", style="cyan")
        ext_table.add_column("Mask")
        ext_table.add_column("Metric", justify="right")
        ext_table.add_column("Type")
        ext_table.add_column("Tag", justify="right")
        ext_table.add_column("Advertising Router")

        for route in topo.external_routes:
            ext_table.add_row(
                route.network,
                route.mask,
                str(route.metric),
                route.metric_type_label,
                str(route.tag),
                route.advertising_router,
            )

        console.print(ext_table)

    summary_text = (
        f"Routers: {len(topo.routers)}\n"
        f"Networks: {len(topo.networks)}\n"
        f"Links: {len(topo.links)}\n"
        f"Areas: {', '.join(topo.areas)}\n"
        f"Summary routes: {len(topo.summary_routes)}\n"
        f"External routes: {len(topo.external_routes)}"
    )
    if topo.process_info:
        summary_text += (
            f"\nProcess: ospf {topo.process_info.process_id} "
            f"(Router ID {topo.process_info.router_id})"
        )
    console.print(Panel(summary_text, title="OSPF Topology"))


# =============================================================================
# diff
# =============================================================================

@topology.command("diff")
@click.argument("previous", type=click.Path(exists=True, dir_okay=False))
@click.argument("current", type=click.Path(exists=True, dir_okay=False))
@click.option("--json", "as_json", is_flag=True, help="Output changes as JSON")
@click.option("--graph", "as_graph", is_flag=True, help="Output the annotated graph as JSON")
@graph_filter_options
def diff_command(previous, current, as_json, as_graph, view, area, link_type):
    """Compare two topology snapshots.

    PREVIOUS and CURRENT are raw captures or topology JSON files written
    by 'ospfscope parse --output'.

    Examples:

        ospfscope diff monday.json tuesday.json

        ospfscope diff before.txt after.txt --json

        ospfscope diff monday.json tuesday.json --graph --view down

    The view, area and link-type filters apply to the --graph output.
    """
    try:
        old_topo = load_snapshot(previous)
        new_topo = load_snapshot(current)
    except InvalidInputError as e:
        fail("invalid_input", f"Failed to parse: {e}", e)

    for path, topo in ((previous, old_topo), (current, new_topo)):
        if topo.is_empty():
            fail("no_data", f"No OSPF data found in {path}")

    changes = diff_topologies(old_topo, new_topo)

    if as_graph:
        old_nodes, old_edges = build_graph(old_topo)
        nodes, edges = build_graph(new_topo)
        nodes, edges = annotate(nodes, edges, changes, old_nodes, old_edges)
        echo_graph(*filter_graph(nodes, edges, view=view, area=area, link_type=link_type))
        return

    if as_json:
        click.echo(json.dumps([c.to_dict() for c in changes], indent=2))
        return

    if not changes:
        console.print("[green]No topology changes[/green]")
        return

    table = Table(title="Topology Changes")
    table.add_column("Change")
    table.add_column("Subject", style="cyan")
    table.add_column("Old", justify="right")
    table.add_column("New", justify="right")
    table.add_column("Description")

    for change in changes:
        style = CHANGE_STYLES.get(change.type, "white")
        table.add_row(
            f"[{style}]{change.type.value}[/{style}]",
            change.router_id or change.link_id or "",
            "" if change.old_value is None else str(change.old_value),
            "" if change.new_value is None else str(change.new_value),
            change.description,
        )

    console.print(table)
    console.print(f"\nTotal changes: {len(changes)}")


def main():
    """Entry point for the ospfscope command."""
    topology()


if __name__ == "__main__":
    main()
