"""Tests for the SpawnEngine module."""

import numpy as np
import pytest

from mode_snake.grid import Grid
from mode_snake.snake import Snake
from mode_snake.spawner import BoardFullError, SpawnEngine
from mode_snake.state import Collectible, CollectibleKind, GameState


def _fill_walls(grid: Grid, state: GameState, keep: list[tuple[int, int]]):
    for y in range(grid.height):
        for x in range(grid.width):
            pos = (x, y)
            if pos not in keep and pos not in state.snake.body:
                state.walls.append(pos)


class TestSpawnEngineInit:
    def test_invalid_max_attempts(self):
        with pytest.raises(ValueError, match="at least 1"):
            SpawnEngine(Grid(), max_attempts=0)


class TestSpawnFood:
    def test_food_kind_and_storage(self):
        spawner = SpawnEngine(Grid(), rng=np.random.default_rng(0))
        state = GameState(snake=Snake())
        food = spawner.spawn_food(state)
        assert food.kind is CollectibleKind.FOOD
        assert state.food is food

    @pytest.mark.parametrize("seed", range(20))
    def test_food_never_on_occupied_cell(self, seed):
        grid = Grid(width=6, height=6)
        spawner = SpawnEngine(grid, rng=np.random.default_rng(seed))
        state = GameState(snake=Snake([(0, 0), (1, 0), (2, 0), (3, 0)]))
        state.walls.extend([(0, 1), (1, 1), (2, 1)])
        state.food = Collectible((5, 5))
        state.portals = None
        occupied = state.occupied()
        food = spawner.spawn_food(state)
        assert food.position not in occupied

    def test_deterministic_with_seed(self):
        def place(seed):
            spawner = SpawnEngine(Grid(), rng=np.random.default_rng(seed))
            return spawner.spawn_food(GameState(snake=Snake())).position

        assert place(42) == place(42)

    def test_fallback_finds_last_free_cell(self):
        grid = Grid(width=4, height=4)
        state = GameState(snake=Snake([(0, 0)]))
        _fill_walls(grid, state, keep=[(3, 3)])
        spawner = SpawnEngine(grid, max_attempts=1, rng=np.random.default_rng(0))
        assert spawner.spawn_food(state).position == (3, 3)

    def test_board_full_raises(self):
        grid = Grid(width=4, height=4)
        state = GameState(snake=Snake([(0, 0)]))
        _fill_walls(grid, state, keep=[])
        spawner = SpawnEngine(grid, max_attempts=5)
        with pytest.raises(BoardFullError):
            spawner.spawn_food(state)


class TestSpawnPortalPair:
    @pytest.mark.parametrize("seed", range(20))
    def test_pair_distinct_and_free(self, seed):
        grid = Grid(width=5, height=5)
        spawner = SpawnEngine(grid, rng=np.random.default_rng(seed))
        state = GameState(snake=Snake([(0, 0), (1, 0), (2, 0)]))
        occupied = state.occupied()
        pair = spawner.spawn_portal_pair(state)
        assert pair.a.position != pair.b.position
        assert pair.a.position not in occupied
        assert pair.b.position not in occupied
        assert pair.a.kind is CollectibleKind.PORTAL_A
        assert pair.b.kind is CollectibleKind.PORTAL_B
        assert state.portals is pair

    def test_fallback_uses_two_remaining_cells(self):
        grid = Grid(width=4, height=4)
        state = GameState(snake=Snake([(0, 0)]))
        _fill_walls(grid, state, keep=[(3, 3), (2, 3)])
        spawner = SpawnEngine(grid, max_attempts=1, rng=np.random.default_rng(1))
        pair = spawner.spawn_portal_pair(state)
        assert {pair.a.position, pair.b.position} == {(3, 3), (2, 3)}

    def test_single_free_cell_is_board_full(self):
        grid = Grid(width=4, height=4)
        state = GameState(snake=Snake([(0, 0)]))
        _fill_walls(grid, state, keep=[(3, 3)])
        spawner = SpawnEngine(grid, max_attempts=3)
        with pytest.raises(BoardFullError):
            spawner.spawn_portal_pair(state)


class TestSpawnWall:
    def test_wall_appended_on_free_cell(self):
        spawner = SpawnEngine(Grid(), rng=np.random.default_rng(3))
        state = GameState(snake=Snake())
        state.food = Collectible((2, 10))
        first = spawner.spawn_wall(state)
        second = spawner.spawn_wall(state)
        assert state.walls == [first, second]
        assert first != second
        for pos in (first, second):
            assert pos not in state.snake.body
            assert pos != state.food.position
