"""Shared test fixtures for Shawapoli tests."""

import random
from collections import deque

import pytest

from shawapoli.config import GameConfig
from shawapoli.game import create_game
from shawapoli.gateway import BoardRenderer, ScriptedGateway


class LoadedDice(random.Random):
    """Random source whose dice faces are scripted; shuffles stay seeded."""

    def __init__(self, faces=(), seed=0):
        super().__init__(seed)
        self.faces = deque(faces)

    def randint(self, a, b):
        if self.faces:
            return self.faces.popleft()
        return super().randint(a, b)


class RecordingRenderer(BoardRenderer):
    """Renderer that remembers what it was asked to draw."""

    def __init__(self):
        self.calls = []
        self.marks = {}
        self.messages = []

    def refresh_positions(self, players):
        self.calls.append(("positions", [p.position for p in players]))

    def refresh_money(self, players):
        self.calls.append(("money", [p.money for p in players]))

    def mark_owner(self, position, player_id):
        self.marks[position] = player_id

    def unmark_owner(self, position):
        self.marks.pop(position, None)

    def highlight(self, player_id, position):
        self.calls.append(("highlight", player_id, position))

    def show_message(self, text):
        self.messages.append(text)


@pytest.fixture
def game_config():
    """Default game configuration with fixed seed for reproducibility."""
    return GameConfig(seed=42)


@pytest.fixture
def gateway():
    """Gateway that takes the first offered choice unless scripted otherwise."""
    return ScriptedGateway()


@pytest.fixture
def renderer():
    return RecordingRenderer()


@pytest.fixture
def basic_game(game_config, gateway, renderer):
    """Basic game with two players and fixed seed."""
    return create_game(game_config, 2, gateway, renderer)


@pytest.fixture
def four_player_game(game_config, gateway, renderer):
    """Game with four players and fixed seed."""
    return create_game(game_config, 4, gateway, renderer)


@pytest.fixture
def make_game(renderer):
    """Build a game with scripted dice faces and gateway answers."""

    def _make(num_players=2, faces=(), answers=(), default=None, **overrides):
        config = GameConfig(seed=42, **overrides)
        gateway = ScriptedGateway(answers, default=default)
        return create_game(config, num_players, gateway, renderer, rng=LoadedDice(faces))

    return _make
