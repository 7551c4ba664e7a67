# pathfinder/core/types.py
#!/usr/bin/env python3
from dataclasses import dataclass, field
from math import inf
from typing import List, Tuple, Optional, Dict, Any, Iterator, Set, Sequence

Cell = Tuple[int, int]  # (row, col)

WALL_CHAR = "#"
START_CHAR = "S"
TARGET_CHAR = "T"
OPEN_CHAR = "."

DEFAULT_ROWS = 25
DEFAULT_COLS = 50


def default_endpoints(rows: int, cols: int) -> Tuple[Cell, Cell]:
    """Start at 15% and target at 85% of the width, both on the middle row."""
    if rows * cols < 2:
        raise ValueError(f"a {rows}x{cols} grid has no room for both start and target")
    mid = rows // 2
    start = (mid, int(cols * 0.15))
    target = (mid, int(cols * 0.85))
    if start == target:
        if cols > 1:
            target = (mid, cols - 1) if start[1] != cols - 1 else (mid, 0)
        else:
            # single column: spread the endpoints vertically instead
            start, target = (0, 0), (rows - 1, 0)
    return start, target


@dataclass
class SearchState:
    """Per-run search table keyed by cell. Missing keys read as the sentinels."""
    distance: Dict[Cell, float] = field(default_factory=dict)
    g_score: Dict[Cell, float] = field(default_factory=dict)
    f_score: Dict[Cell, float] = field(default_factory=dict)
    predecessor: Dict[Cell, Cell] = field(default_factory=dict)
    visited: Set[Cell] = field(default_factory=set)
    visited_order: List[Cell] = field(default_factory=list)

    def dist(self, c: Cell) -> float:
        return self.distance.get(c, inf)

    def g(self, c: Cell) -> float:
        return self.g_score.get(c, inf)

    def f(self, c: Cell) -> float:
        return self.f_score.get(c, inf)

    def is_visited(self, c: Cell) -> bool:
        return c in self.visited

    def mark_visited(self, c: Cell) -> None:
        self.visited.add(c)
        self.visited_order.append(c)


@dataclass
class Grid:
    rows: int
    cols: int
    start: Cell
    target: Cell
    walls: List[List[bool]] = field(default_factory=list)   # [row][col]
    search: SearchState = field(default_factory=SearchState)

    def __post_init__(self) -> None:
        if self.rows <= 0 or self.cols <= 0:
            raise ValueError(f"grid must be at least 1x1, got {self.rows}x{self.cols}")
        if not self.walls:
            self.walls = [[False] * self.cols for _ in range(self.rows)]
        elif len(self.walls) != self.rows or any(len(r) != self.cols for r in self.walls):
            raise ValueError("walls size mismatch")
        self.start = tuple(self.start)
        self.target = tuple(self.target)
        if not self.in_bounds(self.start):
            raise ValueError(f"start {self.start} out of bounds")
        if not self.in_bounds(self.target):
            raise ValueError(f"target {self.target} out of bounds")
        if self.start == self.target:
            raise ValueError("start and target must be different cells")
        for r, c in (self.start, self.target):
            self.walls[r][c] = False

    # -------------------- construction --------------------

    @classmethod
    def create(cls, rows: int = DEFAULT_ROWS, cols: int = DEFAULT_COLS) -> "Grid":
        start, target = default_endpoints(rows, cols)
        return cls(rows, cols, start, target)

    @classmethod
    def from_strings(cls, lines: Sequence[str]) -> "Grid":
        """Build a grid from ASCII rows: '#' wall, 'S' start, 'T' target, anything else open."""
        lines = [ln.strip() for ln in lines if ln.strip()]
        if not lines:
            raise ValueError("empty grid")
        cols = len(lines[0])
        if any(len(ln) != cols for ln in lines):
            raise ValueError("ragged grid rows")
        start = target = None
        walls: List[List[bool]] = []
        for r, ln in enumerate(lines):
            walls.append([ch == WALL_CHAR for ch in ln])
            for c, ch in enumerate(ln):
                if ch == START_CHAR:
                    start = (r, c)
                elif ch == TARGET_CHAR:
                    target = (r, c)
        if start is None or target is None:
            raise ValueError("grid needs exactly one 'S' and one 'T'")
        return cls(len(lines), cols, start, target, walls)

    # -------------------- queries --------------------

    def in_bounds(self, c: Cell) -> bool:
        r, col = c
        return 0 <= r < self.rows and 0 <= col < self.cols

    def _check(self, c: Cell) -> None:
        if not self.in_bounds(c):
            raise IndexError(f"cell {c} outside {self.rows}x{self.cols} grid")

    def is_wall(self, c: Cell) -> bool:
        r, col = c
        return self.walls[r][col]

    def is_endpoint(self, c: Cell) -> bool:
        return c == self.start or c == self.target

    def cells(self) -> Iterator[Cell]:
        """All cells in scan order (row-major)."""
        for r in range(self.rows):
            for c in range(self.cols):
                yield (r, c)

    def neighbors(self, c: Cell) -> List[Cell]:
        """In-bounds orthogonal neighbors: up, down, left, right."""
        r, col = c
        out: List[Cell] = []
        if r > 0:
            out.append((r - 1, col))
        if r < self.rows - 1:
            out.append((r + 1, col))
        if col > 0:
            out.append((r, col - 1))
        if col < self.cols - 1:
            out.append((r, col + 1))
        return out

    def open_neighbors(self, c: Cell) -> List[Cell]:
        return [n for n in self.neighbors(c) if not self.is_wall(n)]

    def wall_count(self) -> int:
        return sum(sum(1 for w in row if w) for row in self.walls)

    # -------------------- edits --------------------

    def toggle_wall(self, c: Cell) -> bool:
        """Flip the wall flag; start/target are left alone. Returns True if the cell changed."""
        self._check(c)
        if self.is_endpoint(c):
            return False
        r, col = c
        self.walls[r][col] = not self.walls[r][col]
        return True

    def set_wall(self, c: Cell, value: bool = True) -> bool:
        self._check(c)
        if self.is_endpoint(c):
            return False
        r, col = c
        changed = self.walls[r][col] != value
        self.walls[r][col] = value
        return changed

    def clear_walls(self) -> None:
        for row in self.walls:
            for i in range(len(row)):
                row[i] = False

    def clear(self) -> None:
        self.clear_walls()
        self.search = SearchState()

    def place_start(self, c: Cell) -> bool:
        self._check(c)
        if c == self.target:
            return False
        self.walls[c[0]][c[1]] = False
        self.start = c
        return True

    def place_target(self, c: Cell) -> bool:
        self._check(c)
        if c == self.start:
            return False
        self.walls[c[0]][c[1]] = False
        self.target = c
        return True

    def render(self) -> str:
        out = []
        for r in range(self.rows):
            line = []
            for c in range(self.cols):
                if (r, c) == self.start:
                    line.append(START_CHAR)
                elif (r, c) == self.target:
                    line.append(TARGET_CHAR)
                elif self.walls[r][c]:
                    line.append(WALL_CHAR)
                else:
                    line.append(OPEN_CHAR)
            out.append("".join(line))
        return "\n".join(out)


@dataclass
class StepResult:
    status: str                   # "idle" | "running" | "done" | "no_path"
    opened: List[Cell] = field(default_factory=list)
    closed: List[Cell] = field(default_factory=list)
    current: Optional[Cell] = None
    path: Optional[List[Cell]] = None
    metrics: Dict[str, Any] = field(default_factory=dict)


@dataclass
class RunResult:
    algorithm: str
    visited: List[Cell] = field(default_factory=list)
    path: List[Cell] = field(default_factory=list)
    status: str = "no_path"       # "done" | "no_path"
    elapsed_ms: float = 0.0
    metrics: Dict[str, Any] = field(default_factory=dict)

    @property
    def found(self) -> bool:
        return self.status == "done"
