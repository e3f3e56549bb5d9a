"""Graph CLI commands: inspect."""

from __future__ import annotations

from typing import Annotated

import typer

from stylegraph.cli._format import print_json, print_lines, print_table, truncate_value
from stylegraph.exceptions import SnapshotError
from stylegraph.graph import Graph, validate_graph
from stylegraph.project import Project, load_project

app = typer.Typer(help="Inspect component and script graphs.")


def load_or_exit(path: str) -> Project:
    """Load a project snapshot, exiting with a message when it is invalid."""
    try:
        return load_project(path)
    except FileNotFoundError:
        print(f"Error: No such project file: '{path}'")
        raise typer.Exit(1) from None
    except SnapshotError as e:
        print(f"Error: {e}")
        raise typer.Exit(1) from None


def find_graph(project: Project, graph_id: str) -> tuple[str, Graph] | None:
    """Look a graph up by component id, script id, or detached element id."""
    component = project.component(graph_id)
    if component is not None:
        return "component", component
    script = project.script(graph_id)
    if script is not None:
        return "script", script
    element = project.element(graph_id)
    if element is not None and element.custom_node_group is not None:
        return "element", element.custom_node_group
    return None


@app.command("inspect")
def graph_inspect(
    project_path: Annotated[str, typer.Argument(help="Project snapshot (JSON)")],
    graph_id: Annotated[str, typer.Argument(help="Component id, script id, or id of an element with its own graph")],
    as_json: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
    output: Annotated[str | None, typer.Option("--output", help="Write JSON to file")] = None,
):
    """Show graph structure (nodes, connections, issues)."""
    project = load_or_exit(project_path)
    found = find_graph(project, graph_id)
    if found is None:
        print(f"Error: No component, script or element graph with id '{graph_id}'")
        raise typer.Exit(1)
    kind, graph = found
    issues = validate_graph(graph)
    nx_graph = graph.nx_graph

    if as_json:
        data = {
            "id": graph_id,
            "kind": kind,
            "name": graph.name,
            "nodes": [
                {
                    **node.to_dict(),
                    "in_degree": nx_graph.in_degree(node.id) if node.id in nx_graph else 0,
                    "out_degree": nx_graph.out_degree(node.id) if node.id in nx_graph else 0,
                }
                for node in graph.nodes
            ],
            "connections": [conn.to_dict() for conn in graph.connections],
            "issues": [{"code": i.code, "message": i.message, "node_id": i.node_id} for i in issues],
        }
        print_json("graph.inspect", data, output)
        return

    label = graph.name or graph_id
    print(f"\nGraph: {label} ({kind}) | {len(graph.nodes)} nodes | {len(graph.connections)} connections\n")

    headers = ["Node", "Type", "Value", "Inputs"]
    rows = []
    for node in graph.nodes:
        sockets = sorted(c.socket for c in graph.connections if c.target == node.id)
        rows.append(
            [
                node.id,
                node.type,
                truncate_value(node.value, 30),
                ", ".join(sockets) if sockets else "—",
            ]
        )
    print_lines(print_table(headers, rows))

    if issues:
        print(f"\n  Issues ({len(issues)}):")
        for issue in issues:
            print(f"    [{issue.code}] {issue.message}")
    else:
        print("\n  No issues found.")

    print(f"\n  For JSON: stylegraph graph inspect {project_path} {graph_id} --json")
