"""Dancing-links exact cover (Knuth's Algorithm X) with secondary columns.

The sparse matrix lives in an arena: every node is an integer index into
parallel lists holding its four neighbours, its column header and its row id.
Node 0 is the root, nodes 1..num_columns are the column headers, and the
remaining nodes are the set bits of the matrix.

Primary columns are linked into the root's header ring and must be covered
exactly once. Secondary columns keep a self-linked header: they are never
picked for branching and never required, but covering them when a selected row
touches them hides every other row that touches them, so each is covered at
most once.
"""

from typing import Callable, Iterable, List, Optional

from src.utils.trace import Tracer

ROOT = 0

# Receives the selected row ids; a truthy return value stops the search.
SolutionCallback = Callable[[List[int]], Optional[bool]]


class ExactCover:
    def __init__(self, num_primary: int, num_secondary: int = 0) -> None:
        if num_primary < 0 or num_secondary < 0:
            raise ValueError("Column counts must be non-negative")
        self.num_primary = num_primary
        self.num_secondary = num_secondary
        self.num_rows = 0
        self._solutions = 0

        headers = num_primary + num_secondary + 1
        self.left: List[int] = list(range(headers))
        self.right: List[int] = list(range(headers))
        self.up: List[int] = list(range(headers))
        self.down: List[int] = list(range(headers))
        self.column: List[int] = list(range(headers))
        self.row_id: List[int] = [-1] * headers
        self.size: List[int] = [0] * headers

        # Header ring: root plus primary headers in column order.
        ring = list(range(num_primary + 1))
        for pos, node in enumerate(ring):
            self.right[node] = ring[(pos + 1) % len(ring)]
            self.left[node] = ring[pos - 1]

    @property
    def num_columns(self) -> int:
        return self.num_primary + self.num_secondary

    def _header(self, column: int) -> int:
        if not 0 <= column < self.num_columns:
            raise IndexError(f"Column {column} out of range (0..{self.num_columns - 1})")
        return column + 1

    def add_row(self, columns: Iterable[int]) -> int:
        """Append a row with a 1 in each of `columns`; returns its row id."""
        row = self.num_rows
        first = None
        for column in sorted(set(columns)):
            header = self._header(column)
            node = len(self.left)

            self.column.append(header)
            self.row_id.append(row)
            # Vertical: insert at the bottom of the column.
            self.up.append(self.up[header])
            self.down.append(header)
            self.down[self.up[header]] = node
            self.up[header] = node
            self.size[header] += 1

            # Horizontal: insert before the row's first node.
            if first is None:
                first = node
                self.left.append(node)
                self.right.append(node)
            else:
                self.left.append(self.left[first])
                self.right.append(first)
                self.right[self.left[first]] = node
                self.left[first] = node

        self.num_rows += 1
        return row

    def cover(self, column: int) -> None:
        self._cover(self._header(column))

    def uncover(self, column: int) -> None:
        self._uncover(self._header(column))

    def _cover(self, header: int) -> None:
        left, right, up, down = self.left, self.right, self.up, self.down
        right[left[header]] = right[header]
        left[right[header]] = left[header]
        i = down[header]
        while i != header:
            j = right[i]
            while j != i:
                down[up[j]] = down[j]
                up[down[j]] = up[j]
                self.size[self.column[j]] -= 1
                j = right[j]
            i = down[i]

    def _uncover(self, header: int) -> None:
        left, right, up, down = self.left, self.right, self.up, self.down
        i = up[header]
        while i != header:
            j = left[i]
            while j != i:
                self.size[self.column[j]] += 1
                down[up[j]] = j
                up[down[j]] = j
                j = left[j]
            i = up[i]
        right[left[header]] = header
        left[right[header]] = header

    def _choose_column(self) -> int:
        """Live primary header with the fewest nodes; first one wins ties."""
        best = ROOT
        best_size = -1
        c = self.right[ROOT]
        while c != ROOT:
            if best == ROOT or self.size[c] < best_size:
                best, best_size = c, self.size[c]
                if best_size == 0:
                    break
            c = self.right[c]
        return best

    def search(self, on_solution: SolutionCallback, tracer: Optional[Tracer] = None) -> int:
        """
        Enumerate every exact cover, calling `on_solution` with the selected row
        ids (in selection order) for each. Returns the number of solutions
        delivered. The matrix is left exactly as it was before the call, even
        when the callback stops the search early.
        """
        tracer = tracer or Tracer(enabled=False)
        self._solutions = 0
        self._search([], on_solution, tracer)
        return self._solutions

    def _search(self, selected: List[int], on_solution: SolutionCallback, tracer: Tracer) -> bool:
        if self.right[ROOT] == ROOT:
            self._solutions += 1
            tracer.log_solution_found(size=len(selected))
            return bool(on_solution(list(selected)))

        header = self._choose_column()
        if self.size[header] == 0:
            tracer.log_backtrack(column=header - 1, depth=len(selected), reason="Empty column")
            return False

        self._cover(header)
        stop = False
        r = self.down[header]
        while r != header and not stop:
            row = self.row_id[r]
            selected.append(row)
            tracer.log_select(
                row=row,
                column=header - 1,
                depth=len(selected),
                branching=self.size[header],
            )
            j = self.right[r]
            while j != r:
                self._cover(self.column[j])
                j = self.right[j]

            stop = self._search(selected, on_solution, tracer)

            j = self.left[r]
            while j != r:
                self._uncover(self.column[j])
                j = self.left[j]
            selected.pop()
            r = self.down[r]
        self._uncover(header)
        if not stop:
            tracer.log_backtrack(column=header - 1, depth=len(selected))
        return stop
