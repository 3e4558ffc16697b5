"""
Tests for token normalization and row grouping
"""

import unittest
import sys
import os

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from table_engine.page_model import (
    build_page_data,
    group_rows,
    normalize_tokens,
    row_key,
    token_from_item,
)
from table_engine.types import Token


class TestTokenNormalizer(unittest.TestCase):

    def test_text_layer_record(self):
        item = {'str': '  Total ', 'transform': [1, 0, 0, 1, 72.5, 640.0], 'width': 30.0, 'height': 10.0}
        token = token_from_item(item)
        self.assertEqual(token, Token(x=72.5, y=640.0, width=30.0, height=10.0, text='Total'))

    def test_flat_record(self):
        token = token_from_item({'text': 'Q1', 'x': 100, 'y': 480, 'width': 12, 'height': 9})
        self.assertEqual((token.x, token.y, token.width, token.height), (100.0, 480.0, 12.0, 9.0))
        self.assertEqual(token.text, 'Q1')

    def test_missing_size_defaults(self):
        token = token_from_item({'str': 'A', 'transform': [1, 0, 0, 1, 10, 20]})
        self.assertEqual(token.width, 0.0)
        self.assertEqual(token.height, 12.0)

        # Zero height is treated as missing
        token = token_from_item({'text': 'A', 'x': 0, 'y': 0, 'width': 4, 'height': 0})
        self.assertEqual(token.height, 12.0)

    def test_non_finite_coordinates_default(self):
        token = token_from_item({'text': 'a', 'x': 'inf', 'y': 'nan', 'width': float('nan'), 'height': '-inf'})
        self.assertEqual((token.x, token.y, token.width, token.height), (0.0, 0.0, 0.0, 12.0))

        token = token_from_item({'str': 'b', 'transform': [1, 0, 0, 1, float('inf'), 40]})
        self.assertEqual((token.x, token.y), (0.0, 40.0))

    def test_non_finite_page_builds(self):
        items = [
            {'text': 'a', 'x': 0, 'y': 'nan'},
            {'text': 'b', 'x': 'inf', 'y': float('-inf')},
        ]
        page = build_page_data(items, page_num=1)
        self.assertEqual(page.token_count, 2)
        self.assertEqual([r.key for r in page.rows], [0.0])

    def test_scalar_transform_falls_back_to_flat_fields(self):
        token = token_from_item({'text': 'a', 'transform': 7, 'x': 15, 'y': 25})
        self.assertEqual((token.x, token.y), (15.0, 25.0))

        token = token_from_item({'text': 'a', 'transform': [1, 0, 0], 'x': 5, 'y': 6})
        self.assertEqual((token.x, token.y), (5.0, 6.0))

    def test_empty_tokens_dropped(self):
        items = [
            {'str': 'A', 'transform': [1, 0, 0, 1, 0, 10]},
            {'str': '   ', 'transform': [1, 0, 0, 1, 20, 10]},
            {'str': '', 'transform': [1, 0, 0, 1, 40, 10]},
            {'text': None, 'x': 60, 'y': 10},
            {'text': '\tB\n', 'x': 80, 'y': 10},
        ]
        tokens = normalize_tokens(items)
        self.assertEqual([t.text for t in tokens], ['A', 'B'])


class TestRowGrouper(unittest.TestCase):

    def _tok(self, x, y, text):
        return Token(x=x, y=y, width=10, height=10, text=text)

    def test_row_key_rounding(self):
        self.assertEqual(row_key(500.4), 500.0)
        self.assertEqual(row_key(499.6), 500.0)
        self.assertEqual(row_key(10.5), 11.0)
        self.assertEqual(row_key(-0.5), 0.0)

    def test_row_key_quantum(self):
        self.assertEqual(row_key(500, 12), 504.0)
        self.assertEqual(row_key(501, 12), 504.0)
        self.assertEqual(row_key(480, 12), 480.0)
        # Non-positive quantum falls back to integer rounding
        self.assertEqual(row_key(12.2, 0), 12.0)

    def test_rows_ordered_top_first(self):
        tokens = [
            self._tok(0, 440, 'd'),
            self._tok(0, 500.4, 'a'),
            self._tok(100, 499.6, 'b'),
            self._tok(0, 480, 'c'),
        ]
        rows = group_rows(tokens)
        self.assertEqual([r.key for r in rows], [500.0, 480.0, 440.0])
        self.assertEqual([t.text for t in rows[0].tokens], ['a', 'b'])

    def test_row_keeps_input_order(self):
        tokens = [self._tok(200, 10, 'c'), self._tok(0, 10, 'a'), self._tok(100, 10, 'b')]
        rows = group_rows(tokens)
        self.assertEqual(len(rows), 1)
        self.assertEqual([t.text for t in rows[0].tokens], ['c', 'a', 'b'])
        self.assertEqual(rows[0].text, 'a b c')

    def test_single_token_rows_kept(self):
        rows = group_rows([self._tok(0, 100, 'x'), self._tok(0, 50, 'y')])
        self.assertEqual([r.size for r in rows], [1, 1])

    def test_build_page_data(self):
        items = [
            {'text': 'Name', 'x': 0, 'y': 700},
            {'text': 'Qty', 'x': 100, 'y': 700},
            {'text': ' ', 'x': 150, 'y': 700},
            {'text': 'Bolt', 'x': 0, 'y': 680},
        ]
        page = build_page_data(items, page_num=3, page_height=800)
        self.assertEqual(page.page_num, 3)
        self.assertEqual(page.height, 800)
        self.assertEqual(page.token_count, 3)
        self.assertEqual(page.row_count, 2)
        self.assertEqual(page.text, 'Name Qty\nBolt')
        self.assertEqual([r.key for r in page.rows], [700.0, 680.0])


if __name__ == "__main__":
    unittest.main()
