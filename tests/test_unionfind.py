"""
Unit tests for the disjoint-set forest.
"""

from core.paths import reconstruct_path
from core.unionfind import UnionFind


class TestUnionFind:
    """Union by rank with path compression."""

    def test_singletons(self):
        uf = UnionFind(range(4))
        assert uf.count() == 4
        assert all(uf.find(i) == i for i in range(4))

    def test_union_is_transitive(self):
        """find(a) == find(c) after union(a, b) then union(b, c)."""
        uf = UnionFind("abcd")
        uf.union("a", "b")
        uf.union("b", "c")
        assert uf.find("a") == uf.find("c")
        assert not uf.connected("a", "d")
        assert uf.count() == 2

    def test_union_of_joined_sets_returns_false(self):
        uf = UnionFind(range(3))
        assert uf.union(0, 1) is True
        assert uf.union(1, 0) is False

    def test_find_compresses_paths(self):
        uf = UnionFind(range(6))
        for i in range(5):
            uf.union(i, i + 1)
        root = uf.find(5)
        assert all(uf.parent[i] == root for i in range(6) if uf.find(i) == root)

    def test_add_is_idempotent(self):
        uf = UnionFind([1])
        uf.union(1, 1)
        uf.add(1)
        assert len(uf) == 1


class TestReconstructPath:
    """Back-pointer walking."""

    def test_root_first(self):
        back = {0: None, 1: 0, 4: 1, 9: 4}
        assert reconstruct_path(back, 9) == [0, 1, 4, 9]

    def test_missing_end(self):
        assert reconstruct_path({0: None}, 3) == []
