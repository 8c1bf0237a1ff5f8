# weighted quick union-find
class WeightedQuickUnionUF:
    """
    Weighted quick-union over a fixed universe of sites 0 .. n-1,
    with path compression on every find.

    The percolation grid keeps two of these side by side, one of them
    without the virtual bottom node, so they never share state.
    """

    def __init__(self, n: int):
        """
        Creates 'n' singleton components.

        :param n: The number of sites, including any virtual sites.
        """
        if n <= 0:
            raise ValueError(f"union-find size must be > 0, got {n}")

        # parent[i] == i marks a root
        self.parent = list(range(n))

        # size[r] = number of sites in the tree rooted at r (roots only)
        self.size = [1] * n

        self.count = n

    def __len__(self):
        return len(self.parent)

    def get_count(self) -> int:
        """
        Returns the number of components.
        """
        return self.count

    def _validate(self, p: int):
        n = len(self.parent)
        if p < 0 or p >= n:
            raise IndexError(f"index {p} is not between 0 and {n - 1}")

    def find(self, p: int) -> int:
        """
        Returns the root of the component holding 'p', pointing every
        site on the way directly at that root.
        """
        self._validate(p)

        root = p
        while root != self.parent[root]:
            root = self.parent[root]

        while p != root:
            next_p = self.parent[p]
            self.parent[p] = root
            p = next_p

        return root

    def connected(self, p: int, q: int) -> bool:
        return self.find(p) == self.find(q)

    def union(self, p: int, q: int):
        """
        Merges the components holding 'p' and 'q'. The smaller tree is
        hung under the root of the larger one.
        """
        rootP = self.find(p)
        rootQ = self.find(q)

        if rootP == rootQ:
            return

        if self.size[rootP] < self.size[rootQ]:
            rootP, rootQ = rootQ, rootP

        self.parent[rootQ] = rootP
        self.size[rootP] += self.size[rootQ]

        self.count -= 1
