import pytest

from tiptypes.types import TipInt, TipRecord, TipRef, TipVar
from tiptypes.unionfind import UnionFind


class Node:
    def __init__(self, text, line=1, column=1):
        self.text = text
        self.line = line
        self.column = column

    def __str__(self):
        return self.text


def test_fresh_term_is_its_own_representative():
    a = Node("a")
    uf = UnionFind()
    assert uf.find(TipVar(a)) == TipVar(a)
    assert len(uf) == 1


def test_union_points_first_root_at_second():
    a = Node("a")
    uf = UnionFind([TipVar(a), TipInt()])
    uf.quick_union(TipVar(a), TipInt())
    assert uf.find(TipVar(a)) == TipInt()
    assert uf.find(TipInt()) == TipInt()


def test_connected_before_and_after_union():
    a, b = Node("a"), Node("b")
    uf = UnionFind()
    assert not uf.connected(TipVar(a), TipVar(b))
    uf.quick_union(TipVar(a), TipVar(b))
    assert uf.connected(TipVar(a), TipVar(b))


def test_union_is_transitive():
    a, b = Node("a"), Node("b")
    uf = UnionFind()
    uf.quick_union(TipVar(a), TipVar(b))
    uf.quick_union(TipVar(b), TipRef(TipInt()))
    assert uf.find(TipVar(a)) == TipRef(TipInt())


def test_lookup_is_by_value():
    a = Node("a")
    uf = UnionFind([TipVar(a)])
    uf.add([TipVar(a), TipInt()])
    assert len(uf) == 2


def test_records_equal_by_field_types_share_entry():
    uf = UnionFind([TipRecord([TipInt()], ["f"])])
    uf.add([TipRecord([TipInt()], ["g"])])
    assert len(uf) == 1


def test_str_lists_edges():
    a = Node("a")
    uf = UnionFind()
    uf.quick_union(TipVar(a), TipInt())
    text = str(uf)
    assert text.startswith("UnionFind edges {\n")
    assert "  int => int\n" in text
    assert text.endswith("}")


def test_none_is_rejected():
    with pytest.raises(ValueError):
        UnionFind().find(None)