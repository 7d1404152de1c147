from __future__ import annotations

from statemachine import State, StateMachine

from conquest.models import GamePhase, GameState


class GameFSM(StateMachine):
    """FSM wrapper around GameState.

    - phases: setup -> playing -> won | quit
    - commands are applied by `actions`; the FSM only guards transitions.
    """

    setup = State(GamePhase.setup.value, value=GamePhase.setup.value, initial=True)
    playing = State(GamePhase.playing.value, value=GamePhase.playing.value)
    won = State(GamePhase.won.value, value=GamePhase.won.value, final=True)
    quit = State(GamePhase.quit.value, value=GamePhase.quit.value, final=True)

    begin = setup.to(playing)
    win = playing.to(won)
    # Input can also run dry during setup (EOF); that ends the game as a quit too.
    leave = playing.to(quit) | setup.to(quit)

    def __init__(self, game: GameState):
        self.game = game
        super().__init__(start_value=game.phase.value)

    def sync_phase_to_model(self) -> None:
        self.game.phase = GamePhase(str(self.current_state.value))
        self.game.won = self.game.phase == GamePhase.won

    @property
    def is_over(self) -> bool:
        return self.current_state.final
