"""Shell Builder CLI.

Usage:
    python -m shell_builder <command> [options]

Every command prints JSON. Failures print ``{"ok": false, ...}`` and
exit with status 1.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError

from shell_builder.command import create_shell
from shell_builder.config import ShellConfig
from shell_builder.errors import ShellBuilderError
from shell_builder.generators.shell import plan_shell
from shell_builder.host.memory import MemoryDocument
from shell_builder.models.plan import Category, LevelRef, RoofStrategy
from shell_builder.units import LengthUnit, to_internal

app = typer.Typer(
    name="shell_builder",
    help="Shell Builder — rectangular building shells: walls, door, windows, roof.",
    no_args_is_help=True,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _output(data: dict) -> None:
    """Print JSON output to stdout."""
    typer.echo(json.dumps(data, indent=2, ensure_ascii=False))


def _fail(error: str, kind: str = "error") -> None:
    _output({"ok": False, "error": error, "kind": kind})
    raise typer.Exit(1)


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _load_config(path: Optional[Path]) -> ShellConfig:
    if path is None:
        return ShellConfig()
    if not path.exists():
        _fail(f"Config not found: {path}", "not_found")
    try:
        return ShellConfig.load(path)
    except ValidationError as e:
        _fail(f"Invalid config {path}: {e}", "invalid_input")


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

@app.command()
def plan(
    width: float = typer.Option(10000.0, "--width", "-w", help="Footprint size along X"),
    depth: float = typer.Option(5000.0, "--depth", "-d", help="Footprint size along Y"),
    height: float = typer.Option(3000.0, "--height", help="Level-to-level wall height"),
    unit: LengthUnit = typer.Option(LengthUnit.MILLIMETERS, "--unit", "-u", help="Display unit"),
    roof: RoofStrategy = typer.Option(RoofStrategy.EXTRUSION, "--roof", help="Roof strategy"),
    slope: float = typer.Option(0.5, "--slope", help="Footprint roof slope (rise/run)"),
    thickness: float = typer.Option(200.0, "--thickness", help="Wall thickness (footprint roof)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
):
    """Plan a shell without building it. Output is in internal units (feet)."""
    _setup_logging(verbose)
    config = ShellConfig()
    try:
        result = plan_shell(
            half_width=to_internal(width, unit) / 2,
            half_depth=to_internal(depth, unit) / 2,
            base_level=LevelRef(name=config.base_level, elevation=0.0),
            top_level=LevelRef(name=config.top_level, elevation=to_internal(height, unit)),
            door_type=config.type_descriptor(Category.DOORS),
            window_type=config.type_descriptor(Category.WINDOWS),
            roof_strategy=roof,
            wall_thickness=to_internal(thickness, unit),
            roof_slope=slope,
        )
    except ShellBuilderError as e:
        _fail(str(e), e.kind)
    _output({"ok": True, "plan": result.model_dump(mode="json")})


@app.command()
def build(
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Shell config JSON"),
    ifc: Optional[Path] = typer.Option(None, "--ifc", help="Write the built shell to this IFC file"),
    render: Optional[Path] = typer.Option(None, "--render", "-r", help="Render the plan to this PNG"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
):
    """Build a shell into a fresh in-memory document seeded from the config."""
    _setup_logging(verbose)
    config = _load_config(config_path)
    document = MemoryDocument.from_config(config)
    try:
        result = create_shell(document, config)
    except ShellBuilderError as e:
        _fail(str(e), e.kind)

    output: dict = {
        "ok": True,
        "walls": len(document.walls),
        "doors": len(document.instances_of(Category.DOORS)),
        "windows": len(document.instances_of(Category.WINDOWS)),
        "roof": {"id": result.roof_id, "strategy": config.roof_strategy.value},
    }
    if ifc is not None:
        from shell_builder.export.ifc import IFCExporter

        output["ifc"] = str(IFCExporter(document).export(ifc))
    if render is not None:
        from shell_builder.export.plan_view import render_plan

        output["render"] = str(render_plan(result.plan, render))
    _output(output)


@app.command("config")
def config_cmd(
    path: Path = typer.Argument(..., help="Where to write the default config"),
):
    """Write the default shell config as JSON."""
    written = ShellConfig().save(path)
    _output({"ok": True, "config": str(written)})


@app.command()
def version() -> None:
    """Show version."""
    from shell_builder import __version__

    _output({"ok": True, "version": __version__})


if __name__ == "__main__":
    app()
