# gridbet/grid.py
"""
3x3 grid topology, the 27 lines through it, and the match selection that
decides which fixtures occupy which grid position.

Layout (positions)::

     Col1  Col2  Col3
      0     1     2     Row 0
      3     4     5     Row 1
      6     7     8     Row 2

A line runs col1 -> col2 -> col3 picking one cell per column, so there are
3 x 3 x 3 = 27 of them.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Dict, List, Sequence, Tuple

GRID_SIZE = 3
TOTAL_CELLS = GRID_SIZE * GRID_SIZE
MATCH_COUNT = 13       # fixtures in a typical round
GRID_MATCH_COUNT = 9   # fixtures that make it into the grid

COL1: Tuple[int, int, int] = (0, 3, 6)
COL2: Tuple[int, int, int] = (1, 4, 7)
COL3: Tuple[int, int, int] = (2, 5, 8)
COLUMNS = (COL1, COL2, COL3)

Selector = Callable[[Sequence[Sequence[float]], int], List[int]]


@dataclass(frozen=True)
class GridLine:
    positions: Tuple[int, int, int]
    id: str
    name: str
    multiplier: float = 1.0  # display weighting only; payouts use odds


def _shape_multiplier(c1: int, c2: int, c3: int) -> float:
    rows = {c1 // GRID_SIZE, c2 // GRID_SIZE, c3 // GRID_SIZE}
    if len(rows) == 1:
        return 1.0   # straight
    if len(rows) == 3:
        return 1.5   # zigzag
    return 1.2       # bent


def generate_lines() -> List[GridLine]:
    """All 27 col1 x col2 x col3 paths, in nested (row-major) order."""
    lines: List[GridLine] = []
    for c1 in COL1:
        for c2 in COL2:
            for c3 in COL3:
                lines.append(GridLine(
                    positions=(c1, c2, c3),
                    id=f"path-{c1}-{c2}-{c3}",
                    name=f"Path {c1}→{c2}→{c3}",
                    multiplier=_shape_multiplier(c1, c2, c3),
                ))
    return lines


STANDARD_LINES: Tuple[GridLine, ...] = tuple(generate_lines())


# --------------------------
# Match selection
# --------------------------

def _ranked_by_confidence(probabilities: Sequence[Sequence[float]]) -> List[int]:
    # sorted() is stable: equal confidence keeps original fixture order
    return sorted(range(len(probabilities)), key=lambda i: -max(probabilities[i]))


def select_best_matches(probabilities: Sequence[Sequence[float]],
                        count: int = GRID_MATCH_COUNT) -> List[int]:
    """
    Indices of the `count` most confident matches (confidence = max of the
    triple), highest first. Position i of the result is grid position i.

    With fewer than `count` matches every match is returned and the caller
    treats the missing grid positions as free cells.
    """
    return _ranked_by_confidence(probabilities)[:max(count, 0)]


def select_balanced_matches(probabilities: Sequence[Sequence[float]],
                            count: int = GRID_MATCH_COUNT) -> List[int]:
    """Most confident half followed by the least confident half."""
    ranked = _ranked_by_confidence(probabilities)
    confident = ranked[:math.ceil(count / 2)]
    n_uncertain = count // 2
    tail = ranked[-n_uncertain:] if n_uncertain else []
    uncertain = [i for i in tail if i not in confident]
    return (confident + uncertain)[:count]


def match_mapping(probabilities: Sequence[Sequence[float]],
                  count: int = GRID_MATCH_COUNT,
                  selector: Selector = select_best_matches) -> Dict[int, int]:
    """Grid position -> original match index."""
    return {pos: idx for pos, idx in enumerate(selector(probabilities, count))}


def cell_lines(position: int, lines: Sequence[GridLine] = STANDARD_LINES) -> List[GridLine]:
    return [ln for ln in lines if position in ln.positions]
