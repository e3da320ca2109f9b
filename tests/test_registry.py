"""
Tests for the structure registry (structures/__init__.py).
"""

import dataclasses

import pytest

from structures import (
    Category,
    NotFound,
    REGISTRY,
    StructureDescriptor,
    StructureKind,
    categories,
    get_structure,
    learning_tip,
    list_structures,
    structures_by_category,
)


class TestLookup:
    """list / get round-trip."""

    def test_list_order(self):
        ids = [d.id for d in list_structures()]
        assert ids == ["array", "stack", "queue", "linked-list", "tree", "graph"]

    def test_get_round_trip(self):
        for d in list_structures():
            assert get_structure(d.id).id == d.id

    def test_unknown_id_raises_not_found(self):
        with pytest.raises(NotFound) as excinfo:
            get_structure("heap")
        assert excinfo.value.structure_id == "heap"
        assert isinstance(excinfo.value, LookupError)

    def test_tree_search_complexity(self):
        assert get_structure("tree").complexity.search == "O(log n)"

    def test_graph_access_is_not_applicable(self):
        assert get_structure("graph").complexity.access == "N/A"

    def test_ids_match_kinds(self):
        assert {d.kind for d in list_structures()} == set(StructureKind)
        for d in list_structures():
            assert d.kind.value == d.id


class TestCategories:
    """Category filtering and sidebar sections."""

    def test_filter_preserves_registry_order(self):
        full = list_structures()
        for category in Category:
            subset = structures_by_category(category)
            positions = [full.index(d) for d in subset]
            assert positions == sorted(positions)

    def test_partition_is_exact(self):
        seen = []
        for category in Category:
            seen.extend(d.id for d in structures_by_category(category))
        assert sorted(seen) == sorted(REGISTRY)
        assert len(seen) == len(set(seen))

    def test_linear_and_non_linear_members(self):
        linear = [d.id for d in structures_by_category(Category.LINEAR)]
        non_linear = [d.id for d in structures_by_category(Category.NON_LINEAR)]
        assert linear == ["array", "stack", "queue", "linked-list"]
        assert non_linear == ["tree", "graph"]

    def test_sidebar_sections(self):
        sections = categories()
        assert [c for c, _ in sections] == [Category.LINEAR, Category.NON_LINEAR]
        assert sections[0][0].heading == "Linear Structures"
        assert sections[1][0].heading == "Non-Linear Structures"

    def test_learning_tip_per_category(self):
        assert "sequentially" in learning_tip(Category.LINEAR)
        assert "connect to many" in learning_tip(Category.NON_LINEAR)


class TestDescriptor:
    def test_descriptors_are_frozen(self):
        d = get_structure("array")
        with pytest.raises(dataclasses.FrozenInstanceError):
            d.name = "Vector"

    def test_complexity_rows_order(self):
        rows = get_structure("array").complexity.as_rows()
        assert rows == [("Access", "O(1)"), ("Search", "O(n)"),
                        ("Insertion", "O(n)"), ("Deletion", "O(n)")]

    def test_to_dict_shape(self):
        d = get_structure("queue").to_dict()
        assert d["type"] == "linear"
        assert d["properties"] == ["Enqueue/Dequeue operations", "Front/Rear access", "FIFO"]
        assert set(d["complexity"]) == {"access", "search", "insertion", "deletion"}

    def test_kind_is_required(self):
        array = get_structure("array")
        with pytest.raises(TypeError):
            StructureDescriptor(
                id="heap", name="Heap", category=Category.NON_LINEAR,
                description="", properties=(), complexity=array.complexity,
            )
