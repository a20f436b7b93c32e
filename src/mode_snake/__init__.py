"""Mode Snake — grid snake rule engine with selectable game modes."""

from mode_snake.collision import Collision, CollisionDetector
from mode_snake.config import GameConfig
from mode_snake.engine import GameEngine
from mode_snake.grid import CellType, Grid
from mode_snake.modes import EatenEvent, ModeController
from mode_snake.persistence import JsonBestScoreStore, MemoryBestScoreStore
from mode_snake.scheduler import GameLoopScheduler, Phase
from mode_snake.score import ScoreTracker
from mode_snake.snake import Direction, Snake
from mode_snake.spawner import BoardFullError, SpawnEngine
from mode_snake.state import (
    Collectible,
    CollectibleKind,
    GameMode,
    GameState,
    PortalPair,
)

__all__ = [
    "BoardFullError",
    "CellType",
    "Collectible",
    "CollectibleKind",
    "Collision",
    "CollisionDetector",
    "Direction",
    "EatenEvent",
    "GameConfig",
    "GameEngine",
    "GameLoopScheduler",
    "GameMode",
    "GameState",
    "Grid",
    "JsonBestScoreStore",
    "MemoryBestScoreStore",
    "ModeController",
    "Phase",
    "PortalPair",
    "ScoreTracker",
    "Snake",
    "SpawnEngine",
]
