"""Munkres (Hungarian) algorithm for the minimum-cost assignment problem.

Given an m x k cost matrix, finds the set of (row, col) pairs that assigns
every row or every column exactly once with the lowest total cost. The same
solver drives power pairing within a bracket and judge allocation.

Forbidden cells are marked with ``DISALLOWED``. The solver never fails on
them: if no assignment avoids every forbidden cell it returns the cheapest
assignment that uses as few of them as possible, and reports those cells in
``Assignment.disallowed`` so callers can flag the result for review.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass, field

DISALLOWED: float = math.inf

# Cell marks
_NONE = 0
_STAR = 1
_PRIME = 2


def is_disallowed(cost: float) -> bool:
    """Return True if a cost cell marks a forbidden assignment."""
    return cost == DISALLOWED


@dataclass(frozen=True)
class Assignment:
    """Result of one solver run.

    Attributes:
        pairs: (row, col) pairs in row order, padding excluded.
        total_cost: Sum of the chosen input cells. Infinite when any chosen
            cell is disallowed.
        disallowed: Chosen pairs that sit on disallowed cells.
    """

    pairs: list[tuple[int, int]] = field(default_factory=list)
    total_cost: float = 0.0
    disallowed: list[tuple[int, int]] = field(default_factory=list)

    @property
    def is_feasible(self) -> bool:
        return not self.disallowed


def compute_assignment(matrix: Sequence[Sequence[float]]) -> Assignment:
    """Compute the minimum-cost assignment for a cost matrix.

    The matrix may be rectangular; it is padded to square with zero-cost
    filler and any pair touching the padding is dropped from the result, so
    exactly ``min(rows, cols)`` pairs come back. The input is never modified.

    Args:
        matrix: Rows of costs. ``DISALLOWED`` marks forbidden cells.

    Returns:
        The optimal Assignment.

    Raises:
        ValueError: If rows have different lengths or a cell is NaN or
            negative infinity.
    """
    rows = len(matrix)
    if rows == 0:
        return Assignment()

    cols = len(matrix[0])
    if any(len(row) != cols for row in matrix):
        msg = "Cost matrix rows must all have the same length"
        raise ValueError(msg)
    if cols == 0:
        return Assignment()

    for row in matrix:
        for cost in row:
            if math.isnan(cost) or cost == -math.inf:
                msg = f"Invalid cost in matrix: {cost}"
                raise ValueError(msg)

    state = _MunkresState(matrix, rows, cols)
    starred = state.solve()

    pairs: list[tuple[int, int]] = []
    blocked: list[tuple[int, int]] = []
    total = 0.0
    for i, j in starred:
        if i >= rows or j >= cols:
            continue
        pairs.append((i, j))
        total += matrix[i][j]
        if is_disallowed(matrix[i][j]):
            blocked.append((i, j))

    return Assignment(pairs=pairs, total_cost=total, disallowed=blocked)


class _MunkresState:
    """Working state for a single solve.

    Created fresh by ``compute_assignment`` and discarded afterwards, so
    concurrent solves share nothing.
    """

    def __init__(self, matrix: Sequence[Sequence[float]], rows: int, cols: int) -> None:
        n = max(rows, cols)
        finite = [c for row in matrix for c in row if not is_disallowed(c)]
        low = min([*finite, 0.0])
        high = max([*finite, 0.0])
        # Any assignment with k disallowed cells costs more than every
        # assignment with fewer of them.
        big = n * (abs(high) + abs(low) + 1.0) + 1.0

        self.n = n
        # Zero tolerance follows the finite costs only; big-M cells never set it.
        self.eps = 1e-12 * n * max(1.0, abs(high), abs(low))
        self.C = [
            [
                (big if is_disallowed(matrix[i][j]) else float(matrix[i][j]))
                if i < rows and j < cols
                else 0.0
                for j in range(n)
            ]
            for i in range(n)
        ]
        self.marked = [[_NONE] * n for _ in range(n)]
        self.row_covered = [False] * n
        self.col_covered = [False] * n
        self.z0 = (0, 0)

    def solve(self) -> list[tuple[int, int]]:
        steps = {
            1: self._step1,
            2: self._step2,
            3: self._step3,
            4: self._step4,
            5: self._step5,
            6: self._step6,
        }
        step = 1
        while step in steps:
            step = steps[step]()

        return [
            (i, j) for i in range(self.n) for j in range(self.n) if self.marked[i][j] == _STAR
        ]

    def _is_zero(self, value: float) -> bool:
        return value <= self.eps

    def _step1(self) -> int:
        """Subtract each row's minimum from the row."""
        for row in self.C:
            min_val = min(row)
            for j in range(self.n):
                row[j] -= min_val
        return 2

    def _step2(self) -> int:
        """Star zeros that share no row or column with another starred zero."""
        for i in range(self.n):
            for j in range(self.n):
                if self.row_covered[i] or self.col_covered[j]:
                    continue
                if self._is_zero(self.C[i][j]):
                    self.marked[i][j] = _STAR
                    self.row_covered[i] = True
                    self.col_covered[j] = True
        self._clear_covers()
        return 3

    def _step3(self) -> int:
        """Cover columns holding a starred zero; done when all are covered."""
        for i in range(self.n):
            for j in range(self.n):
                if self.marked[i][j] == _STAR:
                    self.col_covered[j] = True

        if sum(self.col_covered) >= self.n:
            return 7
        return 4

    def _step4(self) -> int:
        """Prime uncovered zeros until one has no starred zero in its row."""
        while True:
            row, col = self._find_uncovered_zero()
            if row < 0:
                return 6

            self.marked[row][col] = _PRIME
            star_col = self._find_in_row(row, _STAR)
            if star_col >= 0:
                self.row_covered[row] = True
                self.col_covered[star_col] = False
            else:
                self.z0 = (row, col)
                return 5

    def _step5(self) -> int:
        """Augment along the alternating path of primed and starred zeros."""
        path = [self.z0]
        while True:
            row = self._find_in_col(path[-1][1], _STAR)
            if row < 0:
                break
            path.append((row, path[-1][1]))
            col = self._find_in_row(row, _PRIME)
            path.append((row, col))

        for i, j in path:
            self.marked[i][j] = _NONE if self.marked[i][j] == _STAR else _STAR

        self._clear_covers()
        self._erase_primes()
        return 3

    def _step6(self) -> int:
        """Shift the smallest uncovered value to create a new zero."""
        min_val = self._find_smallest_uncovered()
        for i in range(self.n):
            for j in range(self.n):
                if self.row_covered[i]:
                    self.C[i][j] += min_val
                if not self.col_covered[j]:
                    self.C[i][j] -= min_val
        return 4

    def _find_uncovered_zero(self) -> tuple[int, int]:
        for i in range(self.n):
            if self.row_covered[i]:
                continue
            for j in range(self.n):
                if not self.col_covered[j] and self._is_zero(self.C[i][j]):
                    return i, j
        return -1, -1

    def _find_in_row(self, row: int, mark: int) -> int:
        for j in range(self.n):
            if self.marked[row][j] == mark:
                return j
        return -1

    def _find_in_col(self, col: int, mark: int) -> int:
        for i in range(self.n):
            if self.marked[i][col] == mark:
                return i
        return -1

    def _find_smallest_uncovered(self) -> float:
        return min(
            self.C[i][j]
            for i in range(self.n)
            if not self.row_covered[i]
            for j in range(self.n)
            if not self.col_covered[j]
        )

    def _clear_covers(self) -> None:
        self.row_covered = [False] * self.n
        self.col_covered = [False] * self.n

    def _erase_primes(self) -> None:
        for row in self.marked:
            for j in range(self.n):
                if row[j] == _PRIME:
                    row[j] = _NONE
