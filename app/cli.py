from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from adapters.filesystem.config_repository import FileSystemWeathermapConfigRepository
from adapters.filesystem.metric_values_repository import FileSystemMetricValuesRepository
from adapters.svg.repository import FileSystemSvgRepository, scene_to_svg
from app.config import AppSettings, load_settings
from domain.errors import WeathermapError
from domain.services.render_weathermap import WeathermapRenderer

app = typer.Typer(no_args_is_help=True)
console = Console()
logger = logging.getLogger(__name__)


def _configure_logging(settings: AppSettings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.render.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@app.command("render")
def render(
    config_path: Path = typer.Argument(..., help="Weathermap configuration JSON file."),
    values_path: Path = typer.Argument(..., help="Metric values JSON file."),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Target SVG file (defaults to the output directory).",
    ),
    view_box: Optional[bool] = typer.Option(
        None, "--view-box/--no-view-box", help="Add a viewBox attribute to the SVG.",
    ),
    settings_path: Optional[Path] = typer.Option(
        None, "--settings", help="YAML file with application settings.",
    ),
) -> None:
    try:
        settings = load_settings(settings_path)
    except (FileNotFoundError, ValidationError) as exc:
        console.print(f"[red]Invalid settings:[/] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc
    _configure_logging(settings)

    for path in (config_path, values_path):
        if not path.exists():
            console.print(f"[red]File not found:[/] {path}")
            raise typer.Exit(code=1)

    try:
        config = FileSystemWeathermapConfigRepository().load(config_path)
        value_name = settings.render.value_name_override or config.value_name
        values = FileSystemMetricValuesRepository().load(values_path, value_name)
        add_view_box = settings.render.add_view_box if view_box is None else view_box
        scene = WeathermapRenderer().render(config, values, add_view_box=add_view_box)
    except (ValidationError, ValueError, WeathermapError) as exc:
        console.print(f"[red]Rendering failed:[/] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc

    target_path = output or settings.render.output_dir / f"{config_path.stem}.svg"
    FileSystemSvgRepository().save(scene_to_svg(scene), target_path)
    logger.info("Wrote weathermap %s to %s", config.id, target_path)
    console.print(f"[green]Wrote[/] {target_path}")


@app.command("validate")
def validate(
    config_path: Path = typer.Argument(..., help="Weathermap configuration JSON file."),
) -> None:
    if not config_path.exists():
        console.print(f"[red]File not found:[/] {config_path}")
        raise typer.Exit(code=1)

    try:
        config = FileSystemWeathermapConfigRepository().load(config_path)
    except (ValidationError, ValueError) as exc:
        console.print(f"[red]Validation failed:[/] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc

    known_labels = {node.label for node in config.weathermap_nodes}
    dangling = [
        f"{edge.node1} - {edge.node2}"
        for edge in config.weathermap_edges
        if edge.node1 not in known_labels or edge.node2 not in known_labels
    ]
    for description in dangling:
        console.print(f"[yellow]Edge references unknown node:[/] {description}")
    console.print(f"[green]Valid weathermap configuration:[/] {config_path}")


if __name__ == "__main__":
    app()
