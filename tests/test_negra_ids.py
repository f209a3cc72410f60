"""Tests for NEGRA node id assignment."""

import pytest

from negra_coref.core.errors import TreeStructureError
from negra_coref.core.negra_ids import assign_ids
from negra_coref.core.tree import Tree


def chain_tree():
    """
    Root children: B(A(w1)), C(w2), D(w3).

    A, C and D are seeded in that order; B becomes complete as soon as A
    is numbered.
    """
    tree = Tree(sentence_id="chain")
    words = [tree.add_terminal(f"w{i}", "X") for i in range(1, 4)]
    a = tree.add_nonterminal("A")
    b = tree.add_nonterminal("B")
    c = tree.add_nonterminal("C")
    d = tree.add_nonterminal("D")
    tree.attach(a, words[0])
    tree.attach(b, a)
    tree.attach(c, words[1])
    tree.attach(d, words[2])
    for node in (b, c, d):
        tree.attach(tree.root, node)
    return tree, {"A": a, "B": b, "C": c, "D": d}


def assert_bijective(tree, ids):
    assert len(ids) == len(tree)
    assert set(ids.values()) == set(tree.nodes())


class TestAssignIds:
    """Numbering of roots, terminals and constituents."""

    def test_root_and_terminals(self, sample_trees):
        """The root is 0 and terminals are numbered by position."""
        for tree in sample_trees:
            ids = assign_ids(tree)
            assert ids["0"] == tree.root
            terminals = tree.sorted_terminals()
            for number, terminal in enumerate(terminals, start=1):
                assert ids[str(number)] == terminal
            assert_bijective(tree, ids)

    def test_sample_ids_match_export_numbering(self, sample_trees):
        """The computed ids reproduce the #5xx numbers of the export file."""
        second = sample_trees[1]
        ids = assign_ids(second)
        labels = {node_id: second[handle].label for node_id, handle in ids.items() if int(node_id) >= 500}
        assert labels == {"500": "NX", "501": "VXFIN", "502": "NX", "503": "SIMPX"}
        assert second.span(ids["502"]) == (3,)
        assert second.span(ids["503"]) == (1, 2, 3)

    def test_nonterminal_ids_are_consecutive_from_500(self, sample_trees):
        """Constituent ids form an unbroken run from 500."""
        for tree in sample_trees:
            ids = assign_ids(tree)
            nonterminal_ids = sorted(int(i) for i in ids if int(i) >= 500)
            expected_count = sum(1 for _ in tree.nonterminals()) - 1
            assert nonterminal_ids == list(range(500, 500 + expected_count))

    def test_completed_ancestor_is_numbered_before_queued_siblings(self):
        """A parent completed by its last child jumps the queue."""
        tree, nodes = chain_tree()
        ids = assign_ids(tree)
        assert ids["500"] == nodes["A"]
        assert ids["501"] == nodes["B"]
        assert ids["502"] == nodes["C"]
        assert ids["503"] == nodes["D"]

    def test_duplicate_seeds_get_one_id(self):
        """A parent seeded by several terminals is numbered once."""
        tree = Tree()
        np = tree.add_nonterminal("NP")
        words = [tree.add_terminal(form, "X") for form in ("der", "alte", "Mann")]
        for word in words:
            tree.attach(np, word)
        tree.attach(tree.root, np)

        ids = assign_ids(tree)
        assert ids == {"0": tree.root, "1": words[0], "2": words[1], "3": words[2], "500": np}

    def test_bottom_up_order(self):
        """Every constituent is numbered after all of its children."""
        tree = Tree()
        words = [tree.add_terminal(f"w{i}", "X") for i in range(1, 6)]
        np1 = tree.add_nonterminal("NP")
        pp = tree.add_nonterminal("PP")
        np2 = tree.add_nonterminal("NP")
        vp = tree.add_nonterminal("VP")
        s = tree.add_nonterminal("S")
        tree.attach(np1, words[0])
        tree.attach(s, np1)
        tree.attach(vp, words[1])
        tree.attach(pp, words[2])
        tree.attach(np2, words[3])
        tree.attach(np2, words[4])
        tree.attach(pp, np2)
        tree.attach(vp, pp)
        tree.attach(s, vp)
        tree.attach(tree.root, s)

        ids = assign_ids(tree)
        number = {handle: int(node_id) for node_id, handle in ids.items()}
        for handle in tree.nonterminals():
            if handle == tree.root:
                continue
            for child in tree.children(handle):
                assert number[child] < number[handle]
        assert number[s] == 504

    def test_only_terminals_under_root(self):
        """A flat sentence has no constituent ids."""
        tree = Tree()
        for form in ("Ja", "."):
            tree.attach(tree.root, tree.add_terminal(form, "X"))
        assert assign_ids(tree) == {"0": tree.root, "1": 1, "2": 2}

    def test_terminal_order_follows_positions_not_handles(self):
        """Terminal ids follow token positions."""
        tree = Tree()
        late = tree.add_terminal("b", "X", position=2)
        early = tree.add_terminal("a", "X", position=1)
        tree.attach(tree.root, late)
        tree.attach(tree.root, early)
        ids = assign_ids(tree)
        assert ids["1"] == early
        assert ids["2"] == late

    def test_numbering_is_deterministic(self, sample_trees):
        """Numbering the same tree twice gives the same map."""
        for tree in sample_trees:
            assert assign_ids(tree) == assign_ids(tree)

    def test_unreachable_nonterminal_is_fatal(self):
        """A constituent outside the tree cannot be numbered."""
        tree = Tree(sentence_id="9")
        tree.attach(tree.root, tree.add_terminal("a", "X"))
        tree.add_nonterminal("NP")
        with pytest.raises(TreeStructureError, match="sentence 9"):
            assign_ids(tree)
