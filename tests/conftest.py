from __future__ import annotations

import io

import pytest

from conquest.console import ConsoleIO
from conquest.models import GameState
from fakes import ConsoleFactory, ScriptedRng, StateFactory, make_playing_state


@pytest.fixture()
def red_state() -> GameState:
    return make_playing_state()


@pytest.fixture()
def console() -> ConsoleFactory:
    def _make(text: str) -> tuple[ConsoleIO, io.StringIO]:
        out = io.StringIO()
        return ConsoleIO(stdin=io.StringIO(text), stdout=out), out

    return _make


@pytest.fixture()
def make_state() -> StateFactory:
    return make_playing_state


@pytest.fixture()
def scripted_rng() -> type[ScriptedRng]:
    return ScriptedRng
