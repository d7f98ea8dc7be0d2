"""
Shawapoli Rules Engine

Turn sequencing, property, rent, card, jail and bankruptcy rules for a
Monopoly-like property-trading board game.
"""

from .game import GameState, TurnPhase, create_game
from .player import PlayerState
from .board import Board
from .config import GameConfig, GameSettings, get_game_settings
from .gateway import (
    AgentGateway,
    BoardRenderer,
    Choice,
    Decision,
    DecisionGateway,
    NullRenderer,
    QueuedGateway,
    ScriptedGateway,
)

__all__ = [
    "GameState",
    "TurnPhase",
    "create_game",
    "PlayerState",
    "Board",
    "GameConfig",
    "GameSettings",
    "get_game_settings",
    "AgentGateway",
    "BoardRenderer",
    "Choice",
    "Decision",
    "DecisionGateway",
    "NullRenderer",
    "QueuedGateway",
    "ScriptedGateway",
]
