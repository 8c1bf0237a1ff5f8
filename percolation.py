import numpy as np

from union_find import WeightedQuickUnionUF


class Percolation:
    """
    An n-by-n grid of sites, every site blocked at construction.

    Public coordinates are 1-based (row, col). Internally sites live at
    0-based (i, j) and are flattened to ``i * n + j + 1`` so that index 0
    is free for the virtual top node.

    Two union-find structures are kept:

    * ``uf`` holds virtual top (0) and virtual bottom (n*n + 1) and only
      answers ``percolates()``.
    * ``ufNoVirtualBottom`` holds the virtual top only and answers
      ``isFull()``. Without it, once the system percolates every open
      bottom-row site would look full through the virtual bottom
      (backwash).
    """

    def __init__(self, n: int):
        if n <= 0:
            raise ValueError("n must be a positive integer")

        self.gridSize = n
        self.gridSquare = n * n
        self.grid = np.zeros((n, n), dtype=bool)

        self.uf = WeightedQuickUnionUF(self.gridSquare + 2)
        self.ufNoVirtualBottom = WeightedQuickUnionUF(self.gridSquare + 1)

        self.virtualTop = 0
        self.virtualBottom = self.gridSquare + 1

        self.firstRow = 0
        self.lastRow = n - 1

        self.openSite = 0

    # open site (row, col) if it is not open yet
    def open(self, row: int, col: int):
        i, j = self._to_internal(row, col)

        if self.grid[i, j]:
            return

        self.grid[i, j] = True
        self.openSite += 1

        self._connect_site(i, j)

    # is site (row, col) open?
    def isOpen(self, row: int, col: int) -> bool:
        i, j = self._to_internal(row, col)
        return bool(self.grid[i, j])

    # is site (row, col) connected to the top row through open sites?
    def isFull(self, row: int, col: int) -> bool:
        i, j = self._to_internal(row, col)
        return self.ufNoVirtualBottom.connected(self.virtualTop, self._flatten(i, j))

    def percolates(self) -> bool:
        return self.uf.connected(self.virtualTop, self.virtualBottom)

    def numberOfOpenSites(self) -> int:
        return self.openSite

    def _to_internal(self, row: int, col: int):
        """
        The one place a 1-based public (row, col) becomes a 0-based (i, j).

        Raises IndexError when either coordinate is outside [1, n].
        """
        i = row - 1
        j = col - 1
        if not self._on_grid(i, j):
            raise IndexError(
                f"site ({row}, {col}) is outside the {self.gridSize}x{self.gridSize} grid"
            )
        return i, j

    def _on_grid(self, i: int, j: int) -> bool:
        return 0 <= i < self.gridSize and 0 <= j < self.gridSize

    def _flatten(self, i: int, j: int) -> int:
        return i * self.gridSize + j + 1

    def _connect_site(self, i: int, j: int):
        index = self._flatten(i, j)

        ## top row
        if i == self.firstRow:
            self.uf.union(self.virtualTop, index)
            self.ufNoVirtualBottom.union(self.virtualTop, index)

        ## up, down, left, right
        self._connect_neighbour(index, i - 1, j)
        self._connect_neighbour(index, i + 1, j)
        self._connect_neighbour(index, i, j - 1)
        self._connect_neighbour(index, i, j + 1)

        ## bottom row, full structure only
        if i == self.lastRow:
            self.uf.union(index, self.virtualBottom)

    def _connect_neighbour(self, index: int, ni: int, nj: int):
        # closed or off-grid neighbours are never joined
        if not self._on_grid(ni, nj) or not self.grid[ni, nj]:
            return

        neighbour = self._flatten(ni, nj)
        self.uf.union(index, neighbour)
        self.ufNoVirtualBottom.union(index, neighbour)

