"""CLI commands working on a whole project.

Provides `stylegraph export`, `stylegraph eval` and `stylegraph preview`
as top-level commands.
"""

from __future__ import annotations

from typing import Annotated

import typer

from stylegraph.actions import ActionRecorder
from stylegraph.cli._config import load_config
from stylegraph.cli._format import print_json, truncate_value
from stylegraph.cli.graph_cmd import load_or_exit
from stylegraph.composition import compose
from stylegraph.evaluator.types import EvaluationContext
from stylegraph.events.types import ActionEvent, PageChangedEvent


def register_commands(app: typer.Typer) -> None:
    """Register export, eval and preview as top-level commands."""

    @app.command("export")
    def export_cmd(
        project_path: Annotated[str, typer.Argument(help="Project snapshot (JSON)")],
        output: Annotated[str | None, typer.Option("--output", "-o", help="HTML file to write")] = None,
        title: Annotated[str, typer.Option("--title", help="Document title")] = "Exported Project",
    ):
        """Write the project as a standalone HTML document."""
        from stylegraph.export import export_html

        project = load_or_exit(project_path)
        target = output or load_config().output or "index.html"
        path = export_html(project, target, title=title)
        print(f"Exported {len(project.elements)} elements on {len(project.pages)} pages to {path}")

    @app.command("eval")
    def eval_cmd(
        project_path: Annotated[str, typer.Argument(help="Project snapshot (JSON)")],
        element_id: Annotated[str, typer.Argument(help="Element to compose")],
        hover: Annotated[bool, typer.Option("--hover", help="Evaluate as hovered")] = False,
        click: Annotated[bool, typer.Option("--click", help="Evaluate as clicked")] = False,
        at: Annotated[float, typer.Option("--time", help="Seconds since start")] = 0.0,
        as_json: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
        output: Annotated[str | None, typer.Option("--output", help="Write JSON to file")] = None,
    ):
        """Compose one element for the given hover/click/time context."""
        project = load_or_exit(project_path)
        element = project.element(element_id)
        if element is None:
            print(f"Error: No element with id '{element_id}'")
            raise typer.Exit(1)

        context = EvaluationContext(is_hovered=hover, is_clicked=click, time=at)
        composition = compose(element, project, context)

        if as_json:
            data = {
                "element": element_id,
                "context": {"hovered": hover, "clicked": click, "time": at},
                "style": composition.style,
                "content": composition.content,
                "computed_style": composition.computed_style,
                "computed_content": composition.computed_content,
                "dynamic": composition.dynamic,
            }
            print_json("eval", data, output)
            return

        print(f"\nElement: {element_id} ({element.type})")
        if not composition.dynamic:
            print("  No graphs attached; showing static appearance.")
        print(f"  Content: {truncate_value(composition.content)}")
        if composition.style:
            print("  Style:")
            for key, value in composition.style.items():
                marker = "*" if key in composition.computed_style else " "
                print(f"   {marker} {key}: {truncate_value(value)}")
            print("\n  (* = produced by a graph)")

    @app.command("preview")
    def preview_cmd(
        project_path: Annotated[str, typer.Argument(help="Project snapshot (JSON)")],
        frames: Annotated[int, typer.Option("--frames", help="Number of ticks to run")] = 60,
        fps: Annotated[float | None, typer.Option("--fps", help="Frames per second")] = None,
    ):
        """Run the runtime loop headlessly and print the final element state."""
        from rich.console import Console
        from rich.table import Table

        from stylegraph.runtime import InMemoryDocument, RuntimeLoop

        project = load_or_exit(project_path)
        document = InMemoryDocument.from_project(project)
        recorder = ActionRecorder()
        loop = RuntimeLoop(project, document, processors=[recorder])
        try:
            ticks = loop.run(frames=frames, fps=fps or load_config().fps)
        finally:
            loop.close()

        console = Console()
        table = Table(title=f"Page {loop.state.active_page_id} after {ticks} ticks")
        table.add_column("Element")
        table.add_column("Type")
        table.add_column("Text")
        table.add_column("Animation")
        for element in project.elements_on(loop.state.active_page_id):
            live = document.element(element.id)
            if live is None:
                continue
            table.add_row(
                element.id,
                element.type,
                truncate_value(live.text, 40),
                truncate_value(live.style.get("animation"), 40),
            )
        console.print(table)

        fired = [e for e in recorder.events if isinstance(e, (ActionEvent, PageChangedEvent))]
        if fired:
            actions = Table(title="Events")
            actions.add_column("Event")
            actions.add_column("Element")
            actions.add_column("Details")
            for event in fired:
                if isinstance(event, ActionEvent):
                    actions.add_row(event.kind, event.element_id or "—", truncate_value(event.payload()))
                else:
                    actions.add_row("PAGE", "—", f"{event.previous_page_id} -> {event.page_id}")
            console.print(actions)
