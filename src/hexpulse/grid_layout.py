from hexpulse.constants import (
    COL_SPACING,
    GRID_COLS,
    GRID_ROWS,
    HEX_RADIUS_SCALE,
    MARGIN_FACTOR,
    ROW_OFFSET_FACTOR,
    ROW_SPACING,
)


def hex_radius(width, height, cols=GRID_COLS, rows=GRID_ROWS):
    """Shared circumradius so the whole grid fits the viewport."""
    return min(width / (cols * 3), height / (rows * 3)) * HEX_RADIUS_SCALE


def cell_position(row, col, width, height, cols=GRID_COLS, rows=GRID_ROWS):
    """
    Honeycomb centre of cell (row, col).

    Odd rows shift right by 1.5 radii so neighbouring rows interlock.
    """
    radius = hex_radius(width, height, cols, rows)
    row_offset = 0 if row % 2 == 0 else radius * ROW_OFFSET_FACTOR
    x = col * radius * COL_SPACING + row_offset + radius * MARGIN_FACTOR
    y = row * radius * ROW_SPACING + radius * MARGIN_FACTOR
    return x, y


def iter_cells(cols=GRID_COLS, rows=GRID_ROWS):
    """Yield (index, row, col) in row-major order."""
    index = 0
    for row in range(rows):
        for col in range(cols):
            yield index, row, col
            index += 1
