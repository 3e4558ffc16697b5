"""
Tests for cell assignment and table assembly
"""

import unittest
import sys
import os

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from table_engine.assembly import (
    AssemblerConfig,
    TableAssembler,
    assemble_table,
    assign_cells,
    has_consecutive_table_rows,
)
from table_engine.layout import StructureScorer
from table_engine.page_model import build_page_data
from table_engine.types import Row, Token


def item(text, x, y):
    return {'text': text, 'x': x, 'y': y, 'width': 30, 'height': 10}


def grid_items(xs=(0, 100, 200, 300), ys=(500, 480, 460, 440)):
    return [item(f'r{r}c{c}', x, y) for r, y in enumerate(ys) for c, x in enumerate(xs)]


class TestCellAssigner(unittest.TestCase):

    def _row(self, *pairs):
        return Row(key=0, tokens=[Token(x=x, y=0, width=10, height=10, text=t) for t, x in pairs])

    def test_exact_positions(self):
        row = self._row(('a', 0), ('b', 100), ('c', 200))
        self.assertEqual(assign_cells(row, [0, 100, 200]), ['a', 'b', 'c'])

    def test_missing_cells_empty(self):
        row = self._row(('a', 0), ('c', 200))
        self.assertEqual(assign_cells(row, [0, 100, 200, 300]), ['a', '', 'c', ''])

    def test_tolerance_is_exclusive(self):
        anchors = [0, 100, 200]
        self.assertEqual(assign_cells(self._row(('near', 119)), anchors), ['', 'near', ''])
        self.assertEqual(assign_cells(self._row(('edge', 120)), anchors), ['', '', ''])
        self.assertEqual(assign_cells(self._row(('gap', 150)), anchors), ['', '', ''])
        self.assertEqual(assign_cells(self._row(('gap', 150)), anchors, tolerance=60), ['', 'gap', ''])

    def test_jitter_assigned(self):
        row = self._row(('a', 4), ('b', 96), ('c', 204))
        self.assertEqual(assign_cells(row, [0, 100, 200]), ['a', 'b', 'c'])

    def test_first_writer_wins(self):
        row = self._row(('first', 103), ('second', 100), ('a', 0))
        self.assertEqual(assign_cells(row, [0, 100, 200]), ['a', 'first', ''])

    def test_cell_count_matches_anchors(self):
        row = self._row(('a', 0), ('b', 50), ('c', 100), ('d', 500))
        for anchors in ([0], [0, 100], [0, 100, 200, 300, 400]):
            self.assertEqual(len(assign_cells(row, anchors)), len(anchors))


class TestTableAssembler(unittest.TestCase):

    def setUp(self):
        self.assembler = TableAssembler()

    def test_grid_table(self):
        page = build_page_data(grid_items(), page_num=1)
        table = self.assembler.assemble(page)
        self.assertIsNotNone(table)
        self.assertEqual(table.page_num, 1)
        self.assertEqual(table.anchors, [0, 100, 200, 300])
        self.assertEqual(table.cells, [
            ['r0c0', 'r0c1', 'r0c2', 'r0c3'],
            ['r1c0', 'r1c1', 'r1c2', 'r1c3'],
            ['r2c0', 'r2c1', 'r2c2', 'r2c3'],
            ['r3c0', 'r3c1', 'r3c2', 'r3c3'],
        ])
        self.assertEqual([r.key for r in table.rows], [500.0, 480.0, 460.0, 440.0])
        self.assertIsNone(self.assembler.last_reject_reason)

    def test_rows_follow_page_order_not_input_order(self):
        items = grid_items()
        items.reverse()
        table = self.assembler.assemble(build_page_data(items, page_num=1))
        self.assertEqual(table.cells[0], ['r0c0', 'r0c1', 'r0c2', 'r0c3'])
        self.assertEqual(table.cells[-1], ['r3c0', 'r3c1', 'r3c2', 'r3c3'])

    def test_column_count_invariant(self):
        items = grid_items()
        items.append(item('note', 50, 420))
        items.append(item('partial', 200, 400))
        table = self.assembler.assemble(build_page_data(items, page_num=1))
        for row in table.rows:
            self.assertEqual(len(row.cells), table.column_count)
        self.assertEqual(table.cells[-1], ['', '', 'partial', ''])

    def test_unassignable_rows_dropped(self):
        items = grid_items()
        items.append(item('Quarterly Report', 400, 560))
        table = self.assembler.assemble(build_page_data(items, page_num=1))
        self.assertEqual(table.row_count, 4)
        self.assertEqual(table.cells[0][0], 'r0c0')

    def test_too_few_tokens(self):
        page = build_page_data([item('a', 0, 10), item('b', 100, 10)], page_num=1)
        self.assertIsNone(self.assembler.assemble(page))
        self.assertEqual(self.assembler.last_reject_reason, 'too_few_tokens')

    def test_two_columns_never_table(self):
        items = grid_items(xs=(0, 100), ys=(500, 480, 460, 440))
        self.assertIsNone(assemble_table(build_page_data(items, page_num=1)))

    def test_no_consecutive_rows(self):
        items = [
            item('a', 0, 500), item('b', 100, 500), item('c', 200, 500),
            item('title', 0, 480),
            item('d', 0, 460), item('e', 100, 460), item('f', 200, 460),
            item('footer', 0, 440),
        ]
        page = build_page_data(items, page_num=1)
        self.assertIsNone(self.assembler.assemble(page))
        self.assertEqual(self.assembler.last_reject_reason, 'no_consecutive_rows')

    def test_consecutive_rows_helper(self):
        page = build_page_data(grid_items(xs=(0, 100, 200), ys=(500, 480)), page_num=1)
        scorer = StructureScorer()
        anchors = [0, 100, 200]
        self.assertTrue(has_consecutive_table_rows(page.rows, anchors, scorer, min_run=2))
        self.assertFalse(has_consecutive_table_rows(page.rows, anchors, scorer, min_run=3))

    def test_min_consecutive_rows_config(self):
        config = AssemblerConfig(min_consecutive_rows=5)
        self.assertIsNone(assemble_table(build_page_data(grid_items(), page_num=1), config))

    def test_reject_reason_reset(self):
        self.assembler.assemble(build_page_data([item('a', 0, 0)], page_num=1))
        self.assertEqual(self.assembler.last_reject_reason, 'too_few_tokens')
        self.assembler.assemble(build_page_data(grid_items(), page_num=2))
        self.assertIsNone(self.assembler.last_reject_reason)


if __name__ == "__main__":
    unittest.main()
