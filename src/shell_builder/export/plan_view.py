"""Shell plan rendering using matplotlib.

Two panels:
- Top view: footprint, wall spans (tagged W1..Wn), door/window markers
  at their placement points, ridge line or footprint roof outline
- Gable section: eave corners, apex and ridge height of the roof profile
"""

from __future__ import annotations

from pathlib import Path

import matplotlib
matplotlib.use("Agg")  # headless rendering
import matplotlib.pyplot as plt
import matplotlib.patheffects as pe

from shell_builder.models.plan import (
    ExtrusionRoofProfile,
    FootprintRoofProfile,
    OpeningKind,
    ShellPlan,
)
from shell_builder.units import LengthUnit, from_internal

_TEXT_HALO = [pe.withStroke(linewidth=3, foreground="white")]

_OPENING_STYLE = {
    OpeningKind.DOOR: {"marker": "s", "color": "#C62828", "label": "Door"},
    OpeningKind.WINDOW: {"marker": "D", "color": "#1565C0", "label": "Window"},
}


def _m(value: float) -> float:
    return from_internal(value, LengthUnit.METERS)


def render_plan(
    plan: ShellPlan,
    output_path: str | Path,
    title: str | None = None,
    dpi: int = 150,
) -> Path:
    """Render a shell plan to PNG. Coordinates are labelled in metres.

    Args:
        plan: The plan to draw.
        output_path: Output image path.
        title: Figure title (defaults to footprint size).
        dpi: Image resolution.

    Returns:
        Path to the output image.
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    fig, (ax_top, ax_section) = plt.subplots(1, 2, figsize=(14, 6))
    fig.patch.set_facecolor("white")

    corners = plan.footprint.corners
    width = _m(max(p.x for p in corners) - min(p.x for p in corners))
    depth = _m(max(p.y for p in corners) - min(p.y for p in corners))
    fig.suptitle(title or f"Shell {width:.2f} m x {depth:.2f} m", fontsize=14, fontweight="bold")

    _draw_top_view(ax_top, plan)
    _draw_section(ax_section, plan)

    plt.tight_layout()
    fig.savefig(str(output_path), dpi=dpi, bbox_inches="tight")
    plt.close(fig)
    return output_path


def _draw_top_view(ax: plt.Axes, plan: ShellPlan) -> None:
    ax.set_aspect("equal")
    ax.set_facecolor("#FAFAFA")
    ax.set_title("Top view")

    xs = [_m(p.x) for p in plan.footprint.points]
    ys = [_m(p.y) for p in plan.footprint.points]
    ax.fill(xs, ys, color="#F0F0F0", zorder=1)

    for span in plan.walls:
        ax.plot(
            [_m(span.start.x), _m(span.end.x)],
            [_m(span.start.y), _m(span.end.y)],
            color="#212121", linewidth=5, solid_capstyle="projecting", zorder=3,
        )
        mid = span.midpoint
        ax.annotate(
            f"W{span.index + 1}", (_m(mid.x), _m(mid.y)),
            textcoords="offset points", xytext=(0, 12), ha="center",
            fontsize=9, path_effects=_TEXT_HALO, zorder=6,
        )

    labelled: set[OpeningKind] = set()
    for opening in plan.openings:
        style = _OPENING_STYLE[opening.kind]
        ax.scatter(
            _m(opening.placement_point.x), _m(opening.placement_point.y),
            marker=style["marker"], color=style["color"], s=60, zorder=5,
            label=style["label"] if opening.kind not in labelled else None,
        )
        labelled.add(opening.kind)

    roof = plan.roof
    if isinstance(roof, ExtrusionRoofProfile):
        ax.plot(
            [_m(roof.ridge.start.x), _m(roof.ridge.end.x)],
            [_m(roof.ridge.start.y), _m(roof.ridge.end.y)],
            color="#6D4C41", linestyle="--", linewidth=1.5, zorder=4, label="Ridge",
        )
    elif isinstance(roof, FootprintRoofProfile):
        for i, seg in enumerate(roof.boundary):
            ax.plot(
                [_m(seg.start.x), _m(seg.end.x)],
                [_m(seg.start.y), _m(seg.end.y)],
                color="#6D4C41", linestyle=":", linewidth=1.5, zorder=2,
                label="Roof outline" if i == 0 else None,
            )

    ax.legend(loc="upper right", fontsize=8)
    ax.set_xlabel("x (m)")
    ax.set_ylabel("y (m)")


def _draw_section(ax: plt.Axes, plan: ShellPlan) -> None:
    """Section across Y: walls as verticals, roof profile on top."""
    ax.set_facecolor("#FAFAFA")
    ax.set_title("Gable section")

    span = plan.walls[0] if plan.walls else None
    if span is None:
        ax.axis("off")
        return

    ys = [_m(p.y) for p in plan.footprint.corners]
    y0, y1 = min(ys), max(ys)
    base = _m(span.base_level.elevation)
    top = _m(span.top_level.elevation)
    for y in (y0, y1):
        ax.plot([y, y], [base, top], color="#212121", linewidth=4)
    ax.axhline(base, color="#9E9E9E", linewidth=0.8)
    ax.text(y1, base, f" {span.base_level.name}", va="bottom", fontsize=8)
    ax.axhline(top, color="#9E9E9E", linewidth=0.8, linestyle="--")
    ax.text(y1, top, f" {span.top_level.name}", va="bottom", fontsize=8)

    roof = plan.roof
    if isinstance(roof, ExtrusionRoofProfile):
        pts = [roof.slope_curves[0].start] + [seg.end for seg in roof.slope_curves]
        ax.plot([_m(p.y) for p in pts], [_m(p.z) for p in pts], color="#6D4C41", linewidth=2.5)
        ax.annotate(
            f"ridge {_m(roof.apex_elevation):.2f} m",
            (_m(roof.ridge.start.y), _m(roof.apex_elevation)),
            textcoords="offset points", xytext=(0, 8), ha="center",
            fontsize=9, path_effects=_TEXT_HALO,
        )
    elif isinstance(roof, FootprintRoofProfile):
        overhang = _m(roof.overhang)
        rise = (y1 - y0 + 2 * overhang) / 2 * roof.slope
        ax.plot(
            [y0 - overhang, (y0 + y1) / 2, y1 + overhang],
            [top, top + rise, top],
            color="#6D4C41", linewidth=2.5,
        )

    ax.set_aspect("equal")
    ax.set_xlabel("y (m)")
    ax.set_ylabel("z (m)")
