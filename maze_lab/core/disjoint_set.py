from typing import List


class DisjointSet:
    """
    Union-Find over the integers 0..n-1 with path compression and union by rank.
    Kruskal and Eller use it to know which cells are already connected.
    """

    __slots__ = ('parent', 'rank')

    def __init__(self, n: int):
        self.parent: List[int] = list(range(n))
        self.rank: List[int] = [0] * n

    def __len__(self):
        return len(self.parent)

    def root_of(self, x: int) -> int:
        # Iterative so that long chains on big boards don't hit the recursion limit
        root = x
        while self.parent[root] != root:
            root = self.parent[root]
        while self.parent[x] != root:
            self.parent[x], x = root, self.parent[x]
        return root

    def is_joined(self, a: int, b: int) -> bool:
        return self.root_of(a) == self.root_of(b)

    def join(self, a: int, b: int) -> bool:
        """Merges the sets of a and b. Returns False if they were already one set."""
        root_a = self.root_of(a)
        root_b = self.root_of(b)
        if root_a == root_b:
            return False

        if self.rank[root_a] < self.rank[root_b]:
            self.parent[root_a] = root_b
        elif self.rank[root_a] > self.rank[root_b]:
            self.parent[root_b] = root_a
        else:
            self.parent[root_b] = root_a
            self.rank[root_a] += 1
        return True
