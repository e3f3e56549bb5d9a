"""Stylegraph CLI - export projects and inspect their graphs.

Entry point for the `stylegraph` command. Requires ``pip install stylegraph[cli]``.

Commands:
    export          Write a project as a standalone HTML document
    eval            Compose one element for a given context
    preview         Run the runtime loop headlessly and show the result
    graph inspect   Show a graph's nodes, connections and issues
"""

from __future__ import annotations


def _require_typer():
    """Check that typer is available."""
    try:
        import typer  # noqa: F401
    except ImportError:
        import sys

        print("Error: typer is required for the CLI. Install with: pip install stylegraph[cli]", file=sys.stderr)
        raise SystemExit(1) from None


def create_app():
    """Create the Typer app with all subcommands."""
    _require_typer()

    import typer

    from stylegraph.cli.graph_cmd import app as graph_app
    from stylegraph.cli.project_cmd import register_commands

    app = typer.Typer(
        name="stylegraph",
        help="Evaluate, preview and export node-graph driven designs.",
        no_args_is_help=True,
    )
    app.add_typer(graph_app, name="graph")
    register_commands(app)

    return app


def main():
    """CLI entry point."""
    app = create_app()
    app()
