"""Tests for the standard ruleset."""

import numpy as np
import pytest

from snek.board import Board
from snek.config import RulesetConfig
from snek.errors import NotEnoughSpaceError
from snek.point import Direction, Point
from snek.ruleset import StandardRuleset
from snek.size import Size
from snek.snake import ALIVE, Eliminated, EliminationCause, Snake

STANDARD_SIZES = [Size.small(), Size.medium(), Size.large()]
CUSTOM_SIZES = [
    Size(3, 3), Size(4, 5), Size(8, 8), Size(10, 6), Size(3, 25), Size(25, 25),
]
SEEDS = [0, 1, 7, 42]


def _ids(count):
    return [f"snek{i}" for i in range(count)]


def _snake(snake_id, *points, health=100, state=ALIVE):
    return Snake(
        id=snake_id,
        state=state,
        health=health,
        body=tuple(Point(x, y) for x, y in points),
    )


def _board(*snakes, apples=(), size=None):
    return Board(
        size=size or Size.small(),
        apples=tuple(Point(x, y) for x, y in apples),
        snakes=tuple(snakes),
    )


class _FixedRng:
    """Stands in for a generator, always drawing the same values."""

    def __init__(self, value):
        self.value = value

    def random(self):
        return self.value

    def integers(self, high):
        return 0


# ---------------------------------------------------------------------------
# init — standard board sizes
# ---------------------------------------------------------------------------


class TestInitStandardSizes:
    @pytest.mark.parametrize("size", STANDARD_SIZES)
    @pytest.mark.parametrize("count", range(1, 9))
    @pytest.mark.parametrize("seed", SEEDS)
    def test_snakes_and_apples(self, size, count, seed):
        board = StandardRuleset(RulesetConfig(seed=seed)).init(size, _ids(count))

        assert board.size == size
        assert sorted(s.id for s in board.snakes) == sorted(_ids(count))
        assert all(s.alive and s.health == 100 and s.length == 3 for s in board.snakes)

        heads = [s.head for s in board.snakes]
        assert len(set(heads)) == count
        assert not set(board.apples) & set(heads)

        assert board.occupied_by_apple(board.center_point())
        assert len(board.apples) == 1 + count
        for head in heads:
            assert any(head.manhattan_distance(a) == 2 for a in board.apples)

    @pytest.mark.parametrize("size", STANDARD_SIZES)
    def test_snakes_use_fixed_start_points(self, size):
        mn, md, mx = 1, (size.width - 1) // 2, size.width - 2
        expected = {
            Point(mn, mn), Point(mn, md), Point(mn, mx), Point(md, mn),
            Point(md, mx), Point(mx, mn), Point(mx, md), Point(mx, mx),
        }
        board = StandardRuleset(RulesetConfig(seed=3)).init(size, _ids(8))
        assert {s.head for s in board.snakes} == expected

    def test_too_many_snakes(self):
        with pytest.raises(NotEnoughSpaceError):
            StandardRuleset().init(Size.small(), _ids(9))

    def test_occupied_points_have_no_duplicates(self):
        board = StandardRuleset(RulesetConfig(seed=5)).init(Size.medium(), _ids(6))
        occupied = board.occupied_points()
        assert len(occupied) == len(set(occupied))


# ---------------------------------------------------------------------------
# init — custom board sizes
# ---------------------------------------------------------------------------


class TestInitCustomSizes:
    @pytest.mark.parametrize("size", CUSTOM_SIZES)
    @pytest.mark.parametrize("count", range(1, 6))
    @pytest.mark.parametrize("seed", SEEDS)
    def test_snakes_and_apples(self, size, count, seed):
        board = StandardRuleset(RulesetConfig(seed=seed)).init(size, _ids(count))

        assert board.size == size
        assert len(board.snakes) == count
        assert len({s.id for s in board.snakes}) == count
        assert all(s.head.is_even() for s in board.snakes)

        assert 1 <= len(board.apples) <= count
        assert len(set(board.apples)) == len(board.apples)
        assert not set(board.apples) & {s.head for s in board.snakes}

    def test_too_many_snakes(self):
        with pytest.raises(NotEnoughSpaceError, match="start points"):
            StandardRuleset().init(Size(2, 2), _ids(3))

    def test_apples_are_best_effort(self):
        board = StandardRuleset(RulesetConfig(seed=0)).init(Size(2, 1), _ids(1))
        assert len(board.snakes) == 1
        assert len(board.apples) == 1


class TestInitOptions:
    def test_same_seed_same_board(self):
        a = StandardRuleset(RulesetConfig(seed=11)).init(Size(9, 9), _ids(4))
        b = StandardRuleset(RulesetConfig(seed=11)).init(Size(9, 9), _ids(4))
        assert a == b

    def test_rng_argument_overrides_ruleset_rng(self):
        ruleset = StandardRuleset(RulesetConfig(seed=1))
        a = ruleset.init(Size(9, 9), _ids(4), rng=np.random.default_rng(99))
        b = StandardRuleset().init(Size(9, 9), _ids(4), rng=np.random.default_rng(99))
        assert a == b

    def test_configured_length_and_health(self):
        config = RulesetConfig(snake_start_length=5, snake_max_health=80, seed=0)
        board = StandardRuleset(config).init(Size.small(), _ids(2))
        assert all(s.length == 5 and s.health == 80 for s in board.snakes)

    def test_duplicate_ids_spawn_once(self):
        board = StandardRuleset(RulesetConfig(seed=0)).init(
            Size.small(), ["a", "a", "b"],
        )
        assert sorted(s.id for s in board.snakes) == ["a", "b"]

    def test_no_snakes(self):
        board = StandardRuleset().init(Size.small(), [])
        assert board.snakes == ()
        assert board.apples == (board.center_point(),)


# ---------------------------------------------------------------------------
# next_turn
# ---------------------------------------------------------------------------


class TestNextTurnMovement:
    def test_applies_moves(self):
        board = Board.new(Size.small()).spawn_snake("a", Point(3, 3))
        board = StandardRuleset().next_turn(board, {"a": Direction.RIGHT}, 0.0)
        snake = board.get_snake("a")
        assert snake.body == (Point(4, 3), Point(3, 3), Point(3, 3))
        assert snake.health == 99

    def test_missing_move_continues_forward(self):
        ruleset = StandardRuleset()
        board = Board.new(Size.small()).spawn_snake("a", Point(3, 3))
        board = ruleset.next_turn(board, {"a": Direction.RIGHT}, 0.0)
        board = ruleset.next_turn(board, {}, 0.0)
        assert board.get_snake("a").head == Point(5, 3)

    def test_missing_move_on_stacked_snake_goes_up(self):
        board = Board.new(Size.small()).spawn_snake("a", Point(3, 3))
        board = StandardRuleset().next_turn(board, {}, 0.0)
        assert board.get_snake("a").head == Point(3, 2)

    def test_unknown_ids_and_moves_ignored(self):
        ruleset = StandardRuleset()
        board = Board.new(Size.small()).spawn_snake("a", Point(3, 3))
        expected = ruleset.next_turn(board, {}, 0.0)
        moves = {"ghost": "up", "a": "sideways"}
        assert ruleset.next_turn(board, moves, 0.0) == expected

    def test_accepts_move_pairs(self):
        ruleset = StandardRuleset()
        board = Board.new(Size.small()).spawn_snake("a", Point(3, 3))
        assert ruleset.next_turn(board, [("a", "west")], 0.0) == ruleset.next_turn(
            board, {"a": Direction.LEFT}, 0.0,
        )

    def test_previous_board_is_unchanged(self):
        board = Board.new(Size.small()).spawn_snake("a", Point(3, 3))
        StandardRuleset().next_turn(board, {"a": Direction.UP}, 1.0)
        assert board.get_snake("a").body == (Point(3, 3),) * 3
        assert board.apples == ()


class TestNextTurnFeeding:
    def test_food_on_last_health_point_saves_snake(self):
        board = _board(_snake("a", (1, 1), (1, 2), (1, 3), health=1), apples=[(1, 0)])
        board = StandardRuleset().next_turn(board, {"a": Direction.UP}, 0.0)
        snake = board.get_snake("a")
        assert snake.alive
        assert snake.health == 100
        assert snake.length == 4
        assert board.apples == ()

    def test_starves_without_food(self):
        board = _board(_snake("a", (1, 1), (1, 2), (1, 3), health=1), apples=[(5, 5)])
        board = StandardRuleset().next_turn(board, {"a": Direction.UP}, 0.0)
        assert board.get_snake("a").state == Eliminated(EliminationCause.STARVATION)

    def test_head_to_head_on_food_feeds_both(self):
        board = _board(
            _snake("a", (2, 3), (1, 3), (0, 3)),
            _snake("b", (4, 3), (5, 3), (6, 3)),
            apples=[(3, 3)],
        )
        board = StandardRuleset().next_turn(
            board, {"a": Direction.RIGHT, "b": Direction.LEFT}, 0.0,
        )
        assert board.apples == ()
        a, b = board.get_snake("a"), board.get_snake("b")
        assert a.length == b.length == 4
        assert a.state == Eliminated(EliminationCause.HEAD_TO_HEAD, "b")
        assert b.state == Eliminated(EliminationCause.HEAD_TO_HEAD, "a")


class TestNextTurnAppleSpawning:
    def test_zero_chance_never_spawns(self):
        board = Board.new(Size.small()).spawn_snake("a", Point(3, 3))
        board = StandardRuleset().next_turn(board, {}, 0.0)
        assert board.apples == ()

    def test_spawns_when_board_has_no_apples(self):
        board = Board.new(Size.small()).spawn_snake("a", Point(3, 3))
        board = StandardRuleset(RulesetConfig(seed=0)).next_turn(board, {}, 1e-9)
        assert len(board.apples) == 1
        assert not board.occupied_by_snake(board.apples[0])

    def test_full_chance_always_spawns(self):
        board = _board(_snake("a", (3, 3), (3, 4), (3, 5)), apples=[(0, 0)])
        board = StandardRuleset(RulesetConfig(seed=0)).next_turn(board, {}, 1.0)
        assert len(board.apples) == 2

    def test_coin_flip_at_chance_spawns(self):
        board = _board(_snake("a", (3, 3), (3, 4), (3, 5)), apples=[(6, 6)])
        board = StandardRuleset().next_turn(board, {}, 0.5, rng=_FixedRng(0.5))
        assert board.apples == (Point(0, 0), Point(6, 6))

    def test_coin_flip_above_chance_does_not_spawn(self):
        board = _board(_snake("a", (3, 3), (3, 4), (3, 5)), apples=[(6, 6)])
        board = StandardRuleset().next_turn(board, {}, 0.5, rng=_FixedRng(0.6))
        assert board.apples == (Point(6, 6),)

    def test_configured_chance_used_by_default(self):
        ruleset = StandardRuleset(RulesetConfig(apple_spawn_chance=0.0))
        board = Board.new(Size.small()).spawn_snake("a", Point(3, 3))
        assert ruleset.next_turn(board, {}).apples == ()

    def test_full_board_does_not_fail(self):
        board = (
            Board.new(Size(2, 1))
            .spawn_snake("a", Point(0, 0))
            .spawn_apple(Point(1, 0))
        )
        assert board.unoccupied_points() == []
        board = StandardRuleset().next_turn(board, {}, 1.0)
        assert board.apples == (Point(1, 0),)
        assert board.get_snake("a").state == Eliminated(EliminationCause.OUT_OF_BOUNDS)


# ---------------------------------------------------------------------------
# Turn-over-turn invariants
# ---------------------------------------------------------------------------


class TestTurnInvariants:
    @pytest.mark.parametrize("seed", range(8))
    def test_random_games(self, seed):
        rng = np.random.default_rng(seed)
        ruleset = StandardRuleset(RulesetConfig(seed=seed))
        board = ruleset.init(Size.small(), _ids(4))
        directions = list(Direction)

        for _ in range(300):
            if ruleset.done(board):
                break
            moves = {
                s.id: directions[rng.integers(4)] for s in board.alive_snakes()
            }
            nxt = ruleset.next_turn(board, moves)
            for before in board.snakes:
                after = nxt.get_snake(before.id)
                if before.alive and after.alive:
                    assert after.length >= before.length
                if before.eliminated:
                    assert after.state == before.state
                    assert after.body == before.body
                    assert after.health == before.health
            board = nxt

        assert ruleset.done(board) or board.alive_snakes_remaining() >= 2

    def test_eliminated_body_frozen_for_later_turns(self):
        ruleset = StandardRuleset()
        board = _board(
            _snake("a", (3, 0), (3, 1), (3, 2)),
            _snake("b", (5, 5), (5, 6), (6, 6)),
            _snake("c", (1, 5), (1, 6), (0, 6)),
        )
        turn1 = ruleset.next_turn(board, {"a": Direction.UP}, 0.0)
        dead = turn1.get_snake("a")
        assert dead.state == Eliminated(EliminationCause.OUT_OF_BOUNDS)

        turn2 = ruleset.next_turn(turn1, {"a": Direction.DOWN}, 0.0)
        turn3 = ruleset.next_turn(turn2, {}, 0.0)
        assert turn2.get_snake("a") == dead
        assert turn3.get_snake("a") == dead


class TestDone:
    def test_done_counts_alive_snakes(self):
        ruleset = StandardRuleset()
        starved = Eliminated(EliminationCause.STARVATION)
        three = _board(_snake("a", (1, 1)), _snake("b", (2, 2)), _snake("c", (3, 3)))
        two = _board(
            _snake("a", (1, 1)), _snake("b", (2, 2)),
            _snake("c", (3, 3), state=starved),
        )
        one = _board(
            _snake("a", (1, 1)), _snake("b", (2, 2), state=starved),
            _snake("c", (3, 3), state=starved),
        )
        assert not ruleset.done(three)
        assert not ruleset.done(two)
        assert ruleset.done(one)
        assert ruleset.done(Board.new(Size.small()))
