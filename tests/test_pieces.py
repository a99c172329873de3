import unittest

import numpy as np

from falling_blocks.game import (
    COLORS,
    ActivePiece,
    SequencePieceSource,
    TetrominoType,
    UniformPieceSource,
    random_piece,
    rotate_shape,
)
from falling_blocks.game.pieces import base_shape, kinds_from_names


class RotationTests(unittest.TestCase):
    def test_rotate_t_clockwise(self):
        rotated = rotate_shape(base_shape(TetrominoType.T))
        expected = np.array([[0, 1, 0], [0, 1, 1], [0, 1, 0]])
        self.assertTrue(np.array_equal(rotated, expected))

    def test_rectangle_swaps_dimensions(self):
        bar = np.array([[1, 1, 1, 1]], dtype=np.int8)
        self.assertEqual(rotate_shape(bar).shape, (4, 1))

    def test_four_rotations_are_identity(self):
        for kind in TetrominoType:
            with self.subTest(kind=kind.name):
                shape = base_shape(kind)
                out = shape
                for _ in range(4):
                    out = rotate_shape(out)
                self.assertTrue(np.array_equal(out, shape))

    def test_o_piece_is_invariant(self):
        shape = base_shape(TetrominoType.O)
        self.assertTrue(np.array_equal(rotate_shape(shape), shape))

    def test_i_piece_half_turn_is_horizontal_bar(self):
        twice = rotate_shape(rotate_shape(base_shape(TetrominoType.I)))
        self.assertEqual(int(twice.sum()), 4)
        self.assertEqual(int(twice[2].sum()), 4)

    def test_rotation_preserves_color(self):
        piece = ActivePiece.spawn(TetrominoType.L)
        self.assertEqual(piece.rotated().color, "orange")

    def test_shapes_are_read_only(self):
        piece = ActivePiece.spawn(TetrominoType.S)
        with self.assertRaises(ValueError):
            piece.shape[0, 0] = 1


class CatalogTests(unittest.TestCase):
    def test_every_kind_has_four_cells_and_a_color(self):
        for kind in TetrominoType:
            with self.subTest(kind=kind.name):
                self.assertEqual(int(base_shape(kind).sum()), 4)
                self.assertIn(kind, COLORS)

    def test_random_piece_spawns_at_default_position(self):
        piece = random_piece(SequencePieceSource([TetrominoType.Z]))
        self.assertEqual((piece.x, piece.y), (3, 0))
        self.assertEqual(piece.kind, TetrominoType.Z)

    def test_cells_are_absolute(self):
        piece = ActivePiece.spawn(TetrominoType.O, (5, 7))
        self.assertEqual(sorted(piece.cells()), [(5, 7), (5, 8), (6, 7), (6, 8)])

    def test_moved_returns_new_value(self):
        piece = ActivePiece.spawn(TetrominoType.T)
        moved = piece.moved(1, 2)
        self.assertEqual((piece.x, piece.y), (3, 0))
        self.assertEqual((moved.x, moved.y), (4, 2))


class PieceSourceTests(unittest.TestCase):
    def test_uniform_source_is_reproducible_with_seed(self):
        a = UniformPieceSource(seed=7)
        b = UniformPieceSource(seed=7)
        self.assertEqual([a.next_kind() for _ in range(50)], [b.next_kind() for _ in range(50)])

    def test_uniform_source_covers_all_kinds(self):
        source = UniformPieceSource(seed=1)
        seen = {source.next_kind() for _ in range(700)}
        self.assertEqual(seen, set(TetrominoType))

    def test_sequence_source_cycles(self):
        source = SequencePieceSource([TetrominoType.I, TetrominoType.O])
        kinds = [source.next_kind() for _ in range(5)]
        self.assertEqual(kinds, [TetrominoType.I, TetrominoType.O, TetrominoType.I, TetrominoType.O, TetrominoType.I])

    def test_sequence_source_without_repeat_runs_out(self):
        source = SequencePieceSource([TetrominoType.T], repeat=False)
        source.next_kind()
        with self.assertRaises(ValueError):
            source.next_kind()

    def test_empty_sequence_rejected(self):
        with self.assertRaises(ValueError):
            SequencePieceSource([])

    def test_kinds_from_names(self):
        self.assertEqual(kinds_from_names(list("io")), [TetrominoType.I, TetrominoType.O])


if __name__ == "__main__":
    unittest.main()
