"""Simple shell — proof of concept.

10m x 5m footprint between Level 1 (0) and Level 2 (3m):
- 4 walls (200mm thick)
- 1 door on the south wall
- 3 windows (east, north, west walls)
- 1 gable roof, ridge half a wall height above the eaves

   N
   ↑
   |
   +--- E

Layout (top view):
   (-5,2.5) -------- (5,2.5)
      |                 |
   W  |      room       |  E
      |                 |
   (-5,-2.5) ------- (5,-2.5)
            S (door here)
"""

import logging
from pathlib import Path

from shell_builder.command import create_shell
from shell_builder.config import ShellConfig
from shell_builder.export.ifc import IFCExporter
from shell_builder.export.plan_view import render_plan
from shell_builder.host.memory import MemoryDocument
from shell_builder.models import Category

logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

config = ShellConfig(width=10000, depth=5000)
document = MemoryDocument.from_config(config, title="Simple Shell")
result = create_shell(document, config)

print(f"Walls:   {len(document.walls)}")
print(f"Doors:   {len(document.instances_of(Category.DOORS))}")
print(f"Windows: {len(document.instances_of(Category.WINDOWS))}")
print(f"Ridge:   {result.plan.roof.apex_elevation:.3f} ft")

output_dir = Path(__file__).parent / "output"
ifc_path = IFCExporter(document).export(output_dir / "simple_shell.ifc")
png_path = render_plan(result.plan, output_dir / "simple_shell.png")
print(f"Exported: {ifc_path}")
print(f"Rendered: {png_path}")
