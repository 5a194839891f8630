"""
Summed-area table occupancy model and free-space search.

The canvas is tracked as a binary ink grid (1 = ink or outside the mask,
0 = free). Its summed-area table answers "how much ink is inside this
rectangle" with four lookups, which is what makes random placement cheap.

Usage:
    table = OccupancyTable.blank(400, 200)
    pos = find_space_for_rect(table, 400, 200, Rect(50, 20), rng)
    if pos is not None:
        table.draw(ink, pos.x, pos.y)
"""

from typing import NamedTuple, Optional

import numpy as np

DEFAULT_SEARCH_TRIALS = 2000


class Rect(NamedTuple):
    width: int
    height: int


class Position(NamedTuple):
    x: int
    y: int


def _to_gray_array(mask) -> np.ndarray:
    """Accept a PIL image or an array-like and return a 2-D uint8 array."""
    if hasattr(mask, "convert"):
        mask = mask.convert("L")
    arr = np.asarray(mask)
    if arr.ndim != 2:
        raise ValueError("Mask must be a single-channel image, got shape %s" % (arr.shape,))
    return arr


class OccupancyTable:
    """Ink grid plus its summed-area table.

    The table carries an extra leading row and column of zeros, so
    ``table[y + 1, x + 1]`` is the ink count of the rectangle (0, 0)-(x, y)
    inclusive.
    """

    def __init__(self, grid: np.ndarray):
        self.grid = grid
        self.height, self.width = grid.shape
        self.table = np.zeros((self.height + 1, self.width + 1), dtype=np.int64)

    @classmethod
    def build(cls, grid) -> "OccupancyTable":
        occupancy = cls((np.asarray(grid) != 0).astype(np.uint8))
        occupancy.rebuild_from_row(0)
        return occupancy

    @classmethod
    def blank(cls, width: int, height: int) -> "OccupancyTable":
        return cls(np.zeros((height, width), dtype=np.uint8))

    @classmethod
    def from_mask(cls, mask) -> "OccupancyTable":
        """Pre-seed every non-black mask pixel as permanently occupied."""
        return cls.build(_to_gray_array(mask) != 0)

    def rebuild_from_row(self, start_row: int) -> None:
        """Recompute the table for rows >= start_row.

        Row ``start_row - 1`` of the table must already be up to date; the
        running column sums continue from it.
        """
        start_row = min(max(int(start_row), 0), self.height)
        if start_row == self.height:
            return
        # the order of the cumsums doesn't matter, rows first keeps it cache friendly
        partial = np.cumsum(np.cumsum(self.grid[start_row:], axis=1, dtype=np.int64), axis=0)
        partial += self.table[start_row, 1:]
        self.table[start_row + 1:, 1:] = partial

    def rect_sum(self, x: int, y: int, w: int, h: int) -> int:
        """Ink inside [x, x+w) x [y, y+h).

        Whatever part of the rectangle hangs off the canvas counts as ink,
        one unit per pixel, so oversized rectangles never read as free.
        """
        if w <= 0 or h <= 0:
            return 0
        x0, y0 = max(x, 0), max(y, 0)
        x1, y1 = min(x + w, self.width), min(y + h, self.height)
        outside = w * h
        if x0 >= x1 or y0 >= y1:
            return outside
        t = self.table
        inside = int(t[y1, x1] - t[y0, x1] - t[y1, x0] + t[y0, x0])
        return inside + outside - (x1 - x0) * (y1 - y0)

    def rect_sums(self, xs: np.ndarray, ys: np.ndarray, w: int, h: int) -> np.ndarray:
        """Vectorized rect_sum for in-bounds top-left corners."""
        t = self.table
        return t[ys + h, xs + w] - t[ys, xs + w] - t[ys + h, xs] + t[ys, xs]

    def is_free(self, x: int, y: int, w: int, h: int) -> bool:
        return self.rect_sum(x, y, w, h) == 0

    def draw(self, ink: np.ndarray, x: int, y: int) -> int:
        """OR a boolean ink array into the grid and refresh the table.

        Returns the first row that had to be recomputed.
        """
        ink_h, ink_w = ink.shape
        x0, y0 = max(x, 0), max(y, 0)
        x1, y1 = min(x + ink_w, self.width), min(y + ink_h, self.height)
        if x0 >= x1 or y0 >= y1:
            return self.height
        region = ink[y0 - y:y1 - y, x0 - x:x1 - x]
        self.grid[y0:y1, x0:x1] |= region.astype(np.uint8)
        # drawing only dirties rows at or below the top edge
        self.rebuild_from_row(y0)
        return y0

    def free_fraction(self) -> float:
        total = self.width * self.height
        if total == 0:
            return 0.0
        return 1.0 - float(self.table[-1, -1]) / total


class MaskIndex:
    """Per-row span of allowed (black) mask pixels.

    Rows without any allowed pixel get ``(width, 0)`` so no span fits.
    """

    def __init__(self, left: np.ndarray, right: np.ndarray, width: int):
        self.left = left
        self.right = right
        self.width = width

    @classmethod
    def from_mask(cls, mask) -> "MaskIndex":
        allowed = _to_gray_array(mask) == 0
        width = allowed.shape[1]
        has_any = allowed.any(axis=1)
        first = np.argmax(allowed, axis=1)
        last = width - 1 - np.argmax(allowed[:, ::-1], axis=1)
        left = np.where(has_any, first, width).astype(np.int64)
        right = np.where(has_any, last, 0).astype(np.int64)
        return cls(left, right, width)

    def bounds(self, y: int):
        return int(self.left[y]), int(self.right[y])

    def row_fits(self, y: int, x: int, w: int) -> bool:
        return self.left[y] <= x and x + w - 1 <= self.right[y]

    def spans_fit(self, xs: np.ndarray, ys: np.ndarray, w: int, h: int) -> np.ndarray:
        """True where both the top and the bottom row of the rect contain [x, x+w)."""
        bottom = ys + h - 1
        last = xs + w - 1
        return ((self.left[ys] <= xs) & (last <= self.right[ys])
                & (self.left[bottom] <= xs) & (last <= self.right[bottom]))


# --- Free space search ---

def _sample_corners(width, height, rect, rng, trials):
    max_x = width - rect.width
    max_y = height - rect.height
    xs = rng.integers(0, max_x + 1, size=trials)
    ys = rng.integers(0, max_y + 1, size=trials)
    return xs, ys


def _first_hit(xs, ys, hits) -> Optional[Position]:
    found = np.flatnonzero(hits)
    if found.size == 0:
        return None
    i = found[0]
    return Position(int(xs[i]), int(ys[i]))


def find_space_for_rect(
    table: OccupancyTable,
    width: int,
    height: int,
    rect: Rect,
    rng: np.random.Generator,
    trials: int = DEFAULT_SEARCH_TRIALS,
) -> Optional[Position]:
    """Look for a free top-left corner for ``rect`` by random sampling.

    The whole trial sequence is drawn up front and the earliest free
    candidate wins, so the outcome only depends on the generator state.

    Args:
        table: Occupancy of the canvas.
        width: Canvas width.
        height: Canvas height.
        rect: Box to place, margin included.
        rng: The run's random generator.
        trials: How many random corners to test.

    Returns:
        The first free Position, or None when every trial hit ink.
    """
    if rect.width > width or rect.height > height:
        return None
    xs, ys = _sample_corners(width, height, rect, rng, trials)
    hits = table.rect_sums(xs, ys, rect.width, rect.height) == 0
    return _first_hit(xs, ys, hits)


def find_space_for_rect_masked(
    table: OccupancyTable,
    width: int,
    height: int,
    mask_index: MaskIndex,
    rect: Rect,
    rng: np.random.Generator,
    trials: int = DEFAULT_SEARCH_TRIALS,
) -> Optional[Position]:
    """Like find_space_for_rect, skipping corners outside the mask's row spans.

    The mask is already painted into ``table``, so the span check only saves
    rect-sum lookups; it never accepts or rejects anything the table would not.
    """
    if rect.width > width or rect.height > height:
        return None
    xs, ys = _sample_corners(width, height, rect, rng, trials)
    candidates = np.flatnonzero(mask_index.spans_fit(xs, ys, rect.width, rect.height))
    if candidates.size == 0:
        return None
    cx, cy = xs[candidates], ys[candidates]
    hits = table.rect_sums(cx, cy, rect.width, rect.height) == 0
    return _first_hit(cx, cy, hits)
