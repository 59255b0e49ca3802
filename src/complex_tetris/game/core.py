from __future__ import annotations

import dataclasses
import logging
import random
from dataclasses import dataclass
from enum import IntEnum
from typing import List, NamedTuple, Optional

import numpy as np

from complex_tetris.complexlib import ComplexFunction

from .grid import (
    BOARD_HEIGHT,
    BOARD_WIDTH,
    Coordinate,
    clear_lines,
    create_empty_board,
    is_valid_position,
    lock_piece,
    piece_cells,
)
from .pieces import (
    SHAPES,
    Offsets,
    ShapePicker,
    ShapeType,
    color_code,
    random_shape_picker,
    rotate_piece,
    transform_piece,
)
from .rules import ScoringRules


logger = logging.getLogger(__name__)

# Horizontal anchor shifts tried, in order, when a transform collides
TRANSFORM_SEARCH_OFFSETS = (0, -1, 1, -2, 2)


class Action(IntEnum):
    LEFT = 0
    RIGHT = 1
    SOFT_DROP = 2
    HARD_DROP = 3
    ROTATE = 4
    TRANSFORM = 5
    TOGGLE_PAUSE = 6
    RESTART = 7
    NONE = 8


class Position(NamedTuple):
    x: int
    y: int


@dataclass
class GameConfig:
    width: int = BOARD_WIDTH
    height: int = BOARD_HEIGHT
    spawn_x: int = 5
    spawn_y: int = 0
    random_seed: Optional[int] = None

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"board size must be positive, got {self.width}x{self.height}")

    @property
    def spawn(self) -> Position:
        return Position(self.spawn_x, self.spawn_y)


@dataclass(frozen=True, eq=False)
class GameState:
    """Snapshot of a game. Never mutated once handed out; operations build new ones."""

    board: np.ndarray
    piece: Offsets
    piece_type: ShapeType
    position: Position
    next_type: ShapeType
    score: int = 0
    level: int = 0
    lines: int = 0
    game_over: bool = False
    is_paused: bool = False

    def __post_init__(self) -> None:
        # Frozen boards are shared between snapshots; anything else is copied
        # so the caller's array stays writable and unaliased
        if self.board.flags.writeable or not self.board.flags.owndata:
            board = np.array(self.board, copy=True)
            board.setflags(write=False)
            object.__setattr__(self, "board", board)

    def replace(self, **changes) -> "GameState":
        return dataclasses.replace(self, **changes)

    @property
    def is_running(self) -> bool:
        return not self.game_over and not self.is_paused


class TetrisMachine:
    """Rules of the game as pure transitions between `GameState` snapshots.

    Every command returns the state it was given when nothing happens, so
    callers can detect a rejected command with `is`.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[ScoringRules] = None,
        picker: Optional[ShapePicker] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.picker = picker or random_shape_picker(random.Random(self.config.random_seed))

    def initial_state(self) -> GameState:
        piece_type = self.picker()
        next_type = self.picker()
        return GameState(
            board=create_empty_board(self.config.width, self.config.height),
            piece=SHAPES[piece_type],
            piece_type=piece_type,
            position=self.config.spawn,
            next_type=next_type,
        )

    def restart(self, state: Optional[GameState] = None) -> GameState:
        logger.debug("Restarting game (previous score %s)", state.score if state is not None else None)
        return self.initial_state()

    def toggle_pause(self, state: GameState) -> GameState:
        if state.game_over:
            return state
        return state.replace(is_paused=not state.is_paused)

    def move(self, state: GameState, dx: int, dy: int) -> GameState:
        if not state.is_running:
            return state
        candidate = Position(state.position.x + dx, state.position.y + dy)
        if is_valid_position(state.piece, candidate, state.board):
            return state.replace(position=candidate)
        if dy > 0:
            # Blocked from below: the piece settles
            return self.lock(state)
        return state

    def move_left(self, state: GameState) -> GameState:
        return self.move(state, -1, 0)

    def move_right(self, state: GameState) -> GameState:
        return self.move(state, 1, 0)

    def move_down(self, state: GameState) -> GameState:
        return self.move(state, 0, 1)

    def rotate(self, state: GameState) -> GameState:
        if not state.is_running or state.piece_type == ShapeType.O:
            return state
        rotated = rotate_piece(state.piece)
        if is_valid_position(rotated, state.position, state.board):
            return state.replace(piece=rotated)
        return state

    def transform(self, state: GameState, kind: ComplexFunction | str) -> GameState:
        if not state.is_running:
            return state
        transformed = transform_piece(state.piece, kind)
        if transformed == state.piece:
            return state
        for dx in TRANSFORM_SEARCH_OFFSETS:
            candidate = Position(state.position.x + dx, state.position.y)
            if is_valid_position(transformed, candidate, state.board):
                return state.replace(piece=transformed, position=candidate)
        return state

    def hard_drop(self, state: GameState) -> GameState:
        if not state.is_running:
            return state
        x, y = state.position
        while is_valid_position(state.piece, (x, y + 1), state.board):
            y += 1
        return self.lock(state.replace(position=Position(x, y)))

    def lock(self, state: GameState) -> GameState:
        if not state.is_running:
            return state
        merged = lock_piece(state.piece, state.position, state.board, color_code(state.piece_type))
        cleared = clear_lines(merged)
        lines = state.lines + cleared.lines_cleared
        # Score uses the level in effect before this clear
        score = state.score + self.rules.score_for_lines(cleared.lines_cleared, state.level)
        level = self.rules.level_for_lines(lines)
        if cleared.lines_cleared:
            logger.debug("Cleared %d line(s); score=%d lines=%d level=%d", cleared.lines_cleared, score, lines, level)

        spawn = self.config.spawn
        next_piece = SHAPES[state.next_type]
        if not is_valid_position(next_piece, spawn, cleared.board):
            logger.debug("Spawn of %s blocked; game over with score %d", state.next_type.name, score)
            return state.replace(
                board=cleared.board,
                piece=next_piece,
                piece_type=state.next_type,
                position=spawn,
                score=score,
                lines=lines,
                level=level,
                game_over=True,
            )

        return state.replace(
            board=cleared.board,
            piece=next_piece,
            piece_type=state.next_type,
            position=spawn,
            next_type=self.picker(),
            score=score,
            lines=lines,
            level=level,
        )

    def step(
        self,
        state: GameState,
        action: Action,
        kind: ComplexFunction | str = ComplexFunction.ROTATION,
    ) -> GameState:
        if action == Action.LEFT:
            return self.move_left(state)
        if action == Action.RIGHT:
            return self.move_right(state)
        if action == Action.SOFT_DROP:
            return self.move_down(state)
        if action == Action.HARD_DROP:
            return self.hard_drop(state)
        if action == Action.ROTATE:
            return self.rotate(state)
        if action == Action.TRANSFORM:
            return self.transform(state, kind)
        if action == Action.TOGGLE_PAUSE:
            return self.toggle_pause(state)
        if action == Action.RESTART:
            return self.restart(state)
        return state

    def overlay(self, state: GameState) -> np.ndarray:
        """Board copy with the falling piece drawn as negative colour codes."""
        view = state.board.copy()
        if state.game_over:
            return view
        height, width = view.shape
        for x, y in self.cells(state):
            if 0 <= y < height and 0 <= x < width:
                view[y, x] = -color_code(state.piece_type)
        return view

    @staticmethod
    def cells(state: GameState) -> List[Coordinate]:
        return piece_cells(state.piece, state.position)
