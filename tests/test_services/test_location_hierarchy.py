# tests/test_services/test_location_hierarchy.py
import unittest
from datetime import datetime, timedelta

import models_bootstrap  # noqa: F401
from location.models import Location
from location import hierarchy

T0 = datetime(2024, 1, 1, 8, 0, 0)


def _loc(id_, parent=None, minutes=0, name=None):
    return Location(id=id_, name=name or f"L{id_}", parent_location_id=parent, created_at=T0 + timedelta(minutes=minutes))


class HierarchyHelperTests(unittest.TestCase):
    def setUp(self):
        # 1 -> (2, 3), 2 -> 4, 5 is a second root
        self.rows = [
            _loc(1, minutes=0),
            _loc(2, parent=1, minutes=1),
            _loc(3, parent=1, minutes=2),
            _loc(4, parent=2, minutes=3),
            _loc(5, minutes=4),
        ]
        self.by_id, self.by_parent = hierarchy.index_locations(self.rows)

    def test_roots_newest_first(self):
        self.assertEqual([r.id for r in hierarchy.roots(self.by_parent)], [5, 1])

    def test_children_ties_break_on_higher_id(self):
        rows = [_loc(1), _loc(2, parent=1), _loc(3, parent=1)]
        _, by_parent = hierarchy.index_locations(rows)
        self.assertEqual([r.id for r in by_parent[1]], [3, 2])

    def test_descendants_breadth_first(self):
        self.assertEqual([r.id for r in hierarchy.descendants(self.by_parent, 1)], [3, 2, 4])

    def test_descendants_exclude_start_node(self):
        self.assertNotIn(2, [r.id for r in hierarchy.descendants(self.by_parent, 2)])

    def test_ancestors_nearest_first(self):
        self.assertEqual([r.id for r in hierarchy.ancestors(self.by_id, 4)], [2, 1])

    def test_ancestors_of_unknown_node_is_empty(self):
        self.assertEqual(hierarchy.ancestors(self.by_id, 42), [])

    def test_would_create_cycle(self):
        self.assertTrue(hierarchy.would_create_cycle(self.by_id, 1, 1))
        self.assertTrue(hierarchy.would_create_cycle(self.by_id, 1, 4))
        self.assertFalse(hierarchy.would_create_cycle(self.by_id, 2, 3))
        self.assertFalse(hierarchy.would_create_cycle(self.by_id, 4, 5))

    def test_corrupted_chain_terminates(self):
        rows = [_loc(1, parent=2), _loc(2, parent=1)]
        by_id, by_parent = hierarchy.index_locations(rows)
        self.assertEqual([r.id for r in hierarchy.ancestors(by_id, 1)], [2])
        self.assertEqual([r.id for r in hierarchy.descendants(by_parent, 1)], [2])

    def test_build_forest(self):
        forest = hierarchy.build_forest(self.by_parent, lambda row, kids: (row.id, kids))
        self.assertEqual(forest, [(5, []), (1, [(3, []), (2, [(4, [])])])])


if __name__ == "__main__":
    unittest.main()
