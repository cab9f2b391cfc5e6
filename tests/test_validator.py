import unittest

from crossmath.core.constants import EQUALS, CellStatus, Difficulty, Operator
from crossmath.core.models import BlankCell, FixedCell, GridLayout, LevelDescriptor
from crossmath.engine.generator import generate_level
from crossmath.engine.validator import (GridValidator, clear_statuses, mark_statuses,
                                        matches_structure, validate_grid)


def _small_level() -> LevelDescriptor:
    # 2 + 3 = 5 across, 5 + 4 = 9 down from the shared 5.
    grid = [
        [BlankCell(2), FixedCell(Operator.ADD), FixedCell(3), FixedCell(EQUALS), BlankCell(5)],
        [None, None, None, None, FixedCell(Operator.ADD)],
        [None, None, None, None, BlankCell(4)],
        [None, None, None, None, FixedCell(EQUALS)],
        [None, None, None, None, FixedCell(9)],
    ]
    layout = GridLayout(
        rows=5,
        cols=5,
        grid=grid,
        tiles=[2, 4, 5],
        eq_count=2,
        eq_lines=[
            [(0, 0), (0, 1), (0, 2), (0, 3), (0, 4)],
            [(0, 4), (1, 4), (2, 4), (3, 4), (4, 4)],
        ],
    )
    return LevelDescriptor.from_layout(
        layout, difficulty=Difficulty.EASY, level_num=1, seed=0, name="Corner"
    )


def _fill(live, values) -> None:
    for (r, c), value in values.items():
        live[r][c].value = value


class ValidateGridTests(unittest.TestCase):
    def setUp(self) -> None:
        self.level = _small_level()

    def test_incomplete_grid_returns_none(self) -> None:
        live = self.level.live_copy()
        _fill(live, {(0, 0): 2, (0, 4): 5})
        self.assertIsNone(validate_grid(live, self.level))

    def test_incomplete_even_when_filled_cells_are_wrong(self) -> None:
        live = self.level.live_copy()
        _fill(live, {(0, 0): 9, (0, 4): 9})
        self.assertIsNone(validate_grid(live, self.level))

    def test_correct_grid_returns_empty_set(self) -> None:
        live = self.level.live_copy()
        _fill(live, {(0, 0): 2, (0, 4): 5, (2, 4): 4})
        self.assertEqual(validate_grid(live, self.level), set())

    def test_wrong_line_marks_its_blanks(self) -> None:
        live = self.level.live_copy()
        _fill(live, {(0, 0): 3, (0, 4): 5, (2, 4): 4})
        self.assertEqual(validate_grid(live, self.level), {(0, 0), (0, 4)})

    def test_shared_cell_fails_both_lines(self) -> None:
        live = self.level.live_copy()
        _fill(live, {(0, 0): 2, (0, 4): 4, (2, 4): 4})
        self.assertEqual(validate_grid(live, self.level), {(0, 0), (0, 4), (2, 4)})

    def test_level_grid_is_not_mutated(self) -> None:
        live = self.level.live_copy()
        _fill(live, {(0, 0): 2, (0, 4): 5, (2, 4): 4})
        validate_grid(live, self.level)
        self.assertIsNone(self.level.grid[0][0].value)

    def test_is_complete(self) -> None:
        self.assertFalse(GridValidator.is_complete(self.level.grid))


class StatusTests(unittest.TestCase):
    def test_mark_and_clear_statuses(self) -> None:
        level = _small_level()
        live = level.live_copy()
        _fill(live, {(0, 0): 3, (0, 4): 5, (2, 4): 4})
        wrong = validate_grid(live, level)
        assert wrong is not None

        marked = mark_statuses(live, wrong)
        self.assertEqual(marked[0][0].status, CellStatus.BAD)
        self.assertEqual(marked[0][4].status, CellStatus.BAD)
        self.assertEqual(marked[2][4].status, CellStatus.OK)
        self.assertEqual(marked[0][2], FixedCell(3))
        self.assertIsNone(live[0][0].status)

        cleared = clear_statuses(marked)
        self.assertIsNone(cleared[0][0].status)
        self.assertEqual(cleared[0][0].value, 3)

    def test_matches_structure(self) -> None:
        level = _small_level()
        live = level.live_copy()
        self.assertTrue(matches_structure(live, level))
        self.assertFalse(matches_structure(live[:-1], level))
        live[0] = live[0][:-1]
        self.assertFalse(matches_structure(live, level))


class GeneratedSolvabilityTests(unittest.TestCase):
    def test_generated_answers_validate(self) -> None:
        for level_num, seed in ((1, 42), (4, 7), (8, 99), (11, 3), (14, 5), (17, 2020)):
            level = generate_level(level_num, seed)
            self.assertIsNotNone(level)
            assert level is not None
            live = level.live_copy()
            for r, c in level.blank_positions():
                live[r][c].value = live[r][c].answer
            self.assertEqual(validate_grid(live, level), set(), (level_num, seed))


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
