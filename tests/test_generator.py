import json
import math
import unittest
from collections import Counter
from unittest.mock import patch

from crossmath.core.constants import Difficulty, Operator
from crossmath.core.models import BlankCell, FixedCell
from crossmath.data.difficulty import DifficultyParams, get_difficulty, shape_name
from crossmath.engine.generator import (LayoutConfig, LayoutGenerator, fallback_seed,
                                        generate_layout, generate_level, level_seed)
from crossmath.engine.prng import XorShift32


def _numeric_values(level):
    values = []
    for row in level.grid:
        for cell in row:
            if isinstance(cell, BlankCell):
                values.append(cell.answer)
            elif isinstance(cell, FixedCell) and isinstance(cell.value, int):
                values.append(cell.value)
    return values


def _operators(level):
    return {
        cell.value
        for row in level.grid
        for cell in row
        if isinstance(cell, FixedCell) and isinstance(cell.value, Operator)
    }


class GenerateLevelTests(unittest.TestCase):
    def test_level_one_seed_42(self) -> None:
        level = generate_level(1, 42)
        self.assertIsNotNone(level)
        assert level is not None
        self.assertEqual(level.eq_count, 2)
        self.assertEqual(len(level.eq_lines), 2)
        self.assertEqual(_operators(level), {Operator.ADD})
        self.assertEqual(level.level_num, 1)
        self.assertEqual(level.seed, 42)
        self.assertEqual(level.difficulty, Difficulty.EASY)

    def test_deterministic_serialization(self) -> None:
        for level_num in (1, 5, 10, 16, 23):
            a = generate_level(level_num, 42)
            b = generate_level(level_num, 42)
            assert a is not None and b is not None
            self.assertEqual(
                json.dumps(a.to_jsonable(), ensure_ascii=False),
                json.dumps(b.to_jsonable(), ensure_ascii=False),
            )

    def test_tile_bank_matches_blanks(self) -> None:
        for level_num in (1, 4, 9, 13, 19):
            level = generate_level(level_num, 1234)
            assert level is not None
            answers = [level.grid[r][c].answer for r, c in level.blank_positions()]
            self.assertEqual(Counter(answers), Counter(level.tiles))
            self.assertEqual(level.tiles, sorted(level.tiles))

    def test_blank_count_bounds(self) -> None:
        for level_num in (1, 7, 14, 20):
            level = generate_level(level_num, 77)
            assert level is not None
            numeric = len(_numeric_values(level))
            blanks = len(level.blank_positions())
            self.assertLess(blanks, numeric)
            if numeric >= 3:
                self.assertGreaterEqual(blanks, 2)

    def test_operators_come_from_level_pool(self) -> None:
        for level_num in (4, 10, 13, 17):
            level = generate_level(level_num, 8)
            assert level is not None
            self.assertTrue(_operators(level) <= set(get_difficulty(level_num).operators))

    def test_diversity_floor(self) -> None:
        for level_num in (2, 6, 12, 18):
            level = generate_level(level_num, 31)
            assert level is not None
            values = _numeric_values(level)
            self.assertGreaterEqual(len(set(values)), math.ceil(0.5 * len(values)))

    def test_values_within_range(self) -> None:
        level = generate_level(16, 5)
        assert level is not None
        for value in _numeric_values(level):
            self.assertTrue(1 <= value <= 81)

    def test_fallback_when_parameters_fail(self) -> None:
        impossible = DifficultyParams(Difficulty.HARD, 3, (Operator.ADD,), 0.0, 3)
        with patch("crossmath.engine.generator.get_difficulty", return_value=impossible):
            level = generate_level(12, 42)
        self.assertIsNotNone(level)
        assert level is not None
        self.assertEqual(level.eq_count, 2)
        self.assertEqual(level.difficulty, Difficulty.EASY)
        self.assertEqual(level.name, "L-Shape")
        self.assertEqual(_operators(level), {Operator.ADD})

    def test_none_when_fallback_also_fails(self) -> None:
        impossible = DifficultyParams(Difficulty.HARD, 3, (Operator.ADD,), 0.0, 3)
        broken_fallback = LayoutConfig(2, (Operator.ADD,), 0.4, 3, layout_attempts=3)
        with patch("crossmath.engine.generator.get_difficulty", return_value=impossible), \
                patch("crossmath.engine.generator.FALLBACK_CONFIG", broken_fallback):
            self.assertIsNone(generate_level(12, 42))


class LayoutTests(unittest.TestCase):
    def test_grid_too_small_is_bounded_failure(self) -> None:
        self.assertIsNone(generate_layout(2, [Operator.ADD], 0.5, 3, XorShift32(1)))

    def test_empty_pool_is_bounded_failure(self) -> None:
        config = LayoutConfig(2, (), 0.5, 7, layout_attempts=5)
        self.assertIsNone(LayoutGenerator(config, XorShift32(1)).generate())

    def test_zero_equations_is_bounded_failure(self) -> None:
        self.assertIsNone(generate_layout(0, [Operator.ADD], 0.5, 7, XorShift32(1)))
        self.assertIsNone(generate_layout(-2, [Operator.ADD], 0.5, 7, XorShift32(1)))

    def test_single_division_equation_is_solved(self) -> None:
        layout = generate_layout(1, [Operator.DIVIDE], 0.0, 7, XorShift32(2))
        self.assertIsNotNone(layout)
        assert layout is not None
        self.assertEqual(layout.eq_count, 1)
        (line,) = layout.eq_lines
        symbols = []
        for r, c in line:
            cell = layout.grid[r][c]
            symbols.append(cell.answer if isinstance(cell, BlankCell) else cell.value)
        left, op, right, _, result = symbols
        self.assertEqual(op, Operator.DIVIDE)
        self.assertEqual(left, right * result)

    def test_division_only_pool_is_deterministic(self) -> None:
        def run():
            config = LayoutConfig(
                3, (Operator.DIVIDE,), 0.0, 9, layout_attempts=5, solver_attempts=200
            )
            return LayoutGenerator(config, XorShift32(2)).generate()

        self.assertEqual(run(), run())

    def test_layout_fits_grid(self) -> None:
        layout = generate_layout(4, [Operator.ADD, Operator.SUBTRACT], 0.2, 9, XorShift32(10))
        assert layout is not None
        self.assertLessEqual(layout.rows, 9)
        self.assertLessEqual(layout.cols, 9)
        for line in layout.eq_lines:
            self.assertEqual(len(line), 5)


class SeedTests(unittest.TestCase):
    def test_level_seed_is_32_bit(self) -> None:
        for seed in (0, 1, 42, 2**40, -5):
            for level in (1, 50):
                value = level_seed(seed, level)
                self.assertTrue(0 <= value < 2**32)

    def test_level_seed_varies_by_level(self) -> None:
        self.assertNotEqual(level_seed(42, 1), level_seed(42, 2))

    def test_fallback_seed(self) -> None:
        self.assertEqual(fallback_seed(42, 2), 42 + 2 * 31337)


class DifficultyTests(unittest.TestCase):
    def test_table_buckets(self) -> None:
        self.assertEqual(get_difficulty(1).equations, 2)
        self.assertEqual(get_difficulty(1).operators, (Operator.ADD,))
        self.assertEqual(get_difficulty(7).label, Difficulty.MEDIUM)
        self.assertIn(Operator.DIVIDE, get_difficulty(16).operators)
        self.assertNotIn(Operator.DIVIDE, get_difficulty(15).operators)

    def test_growth_is_capped(self) -> None:
        self.assertEqual(get_difficulty(22).equations, 6)
        self.assertEqual(get_difficulty(25).equations, 7)
        self.assertEqual(get_difficulty(500).equations, 10)
        self.assertEqual(get_difficulty(500).max_grid, 13)

    def test_shape_names(self) -> None:
        self.assertEqual(shape_name(3, 7, 2), "L-Shape")
        self.assertEqual(shape_name(7, 3, 2), "Tower")
        self.assertEqual(shape_name(5, 5, 4), "Cross")
        self.assertEqual(shape_name(9, 9, 9), "Web")


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
