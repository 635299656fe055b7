from __future__ import annotations

import logging
import os
from pathlib import Path

from pixelgrid.grid.palette import UNPAINTED_TOKEN, PaletteStore
from pixelgrid.grid.state import GridState, PaintedWith

logger = logging.getLogger(__name__)


def to_text(grid: GridState, palette: PaletteStore) -> str:
    """Serialize the grid row by row, top row first, cells left to right.

    Painted cells export the palette name of their stored index as it is
    now, not as it was when painted. Unpainted cells export ``"none"``.
    Lines are separated by ``\\n`` with no trailing newline.
    """
    lines = []
    for row in grid.rows():
        tokens = [
            palette.name_of(ref.index) if isinstance(ref, PaintedWith) else UNPAINTED_TOKEN
            for ref in row
        ]
        lines.append(",".join(tokens))
    return "\n".join(lines)


def export_filename(size: int) -> str:
    return f"grid_colors_{size}x{size}.csv"


def _write_text_atomic(text: str, path: Path) -> None:
    tmp_path = path.with_name(f".{path.stem}.tmp{path.suffix}")
    # newline="" keeps the exact "\n" separators on every platform.
    with tmp_path.open("w", encoding="utf-8", newline="") as handle:
        handle.write(text)
    os.replace(tmp_path, path)


def write_export(grid: GridState, palette: PaletteStore, directory: Path) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / export_filename(grid.size)
    _write_text_atomic(to_text(grid, palette), path)
    logger.info("Exported %d painted cells to %s", grid.painted_count(), path)
    return path
