from __future__ import annotations

import logging
from typing import Callable, List, NamedTuple, Optional

from complex_tetris.complexlib import ComplexFunction

from .core import Action, GameConfig, GameState, Position, TetrisMachine
from .pieces import Offsets, ShapePicker, ShapeType
from .rules import ScoringRules, drop_interval_ms


logger = logging.getLogger(__name__)


class PieceSnapshot(NamedTuple):
    offsets: Offsets
    piece_type: ShapeType
    position: Position


PieceObserver = Callable[[PieceSnapshot], None]


class TetrisGame:
    """Single-command-at-a-time driver around `TetrisMachine`.

    Holds the one current-state reference. Keyboard handlers and the
    auto-drop timer both go through `step`, and each command swaps in the
    resulting state wholesale. Observers hear about every change to the
    active piece's offsets or shape.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[ScoringRules] = None,
        picker: Optional[ShapePicker] = None,
        transform_kind: ComplexFunction = ComplexFunction.ROTATION,
    ) -> None:
        self.machine = TetrisMachine(config, rules, picker)
        self.transform_kind = transform_kind
        self.state: GameState = self.machine.initial_state()
        self._observers: List[PieceObserver] = []

    def add_observer(self, observer: PieceObserver) -> None:
        self._observers.append(observer)

    def remove_observer(self, observer: PieceObserver) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    def snapshot(self) -> PieceSnapshot:
        return PieceSnapshot(self.state.piece, self.state.piece_type, self.state.position)

    def _install(self, new_state: GameState) -> GameState:
        old = self.state
        self.state = new_state
        if new_state is old:
            return new_state
        # A new board means a lock or restart: the active piece was replaced
        # even if it has the same shape and offsets as before
        if (
            new_state.board is not old.board
            or new_state.piece != old.piece
            or new_state.piece_type != old.piece_type
        ):
            snap = self.snapshot()
            for observer in list(self._observers):
                observer(snap)
        return new_state

    def step(self, action: Action) -> GameState:
        before = self.state
        after = self.machine.step(before, action, self.transform_kind)
        if action == Action.TOGGLE_PAUSE and after is not before:
            logger.info("Game %s", "paused" if after.is_paused else "resumed")
        elif action == Action.RESTART:
            logger.info("Game restarted (final score %d)", before.score)
        elif after.game_over and not before.game_over:
            logger.info("Game over: score=%d lines=%d level=%d", after.score, after.lines, after.level)
        return self._install(after)

    def tick(self) -> GameState:
        """Timer entry point; a no-op while paused or after game over."""
        return self.step(Action.SOFT_DROP)

    def reset(self) -> GameState:
        return self.step(Action.RESTART)

    def select_transform(self, kind: ComplexFunction) -> None:
        self.transform_kind = kind

    @property
    def drop_interval_ms(self) -> int:
        return drop_interval_ms(self.state.level)

    @property
    def game_over(self) -> bool:
        return self.state.game_over
