import numpy as np
import pytest

from complex_tetris.complexlib import ComplexFunction
from complex_tetris.game import SHAPES, Action, GameConfig, GameState, Position, ShapeType, TetrisMachine, rotate_piece
from complex_tetris.game.grid import create_empty_board


def state_with(machine: TetrisMachine, board: np.ndarray, kind: ShapeType, position, **kwargs) -> GameState:
    return machine.initial_state().replace(
        board=board, piece=SHAPES[kind], piece_type=kind, position=Position(*position), **kwargs
    )


def test_initial_state(make_machine):
    machine = make_machine(ShapeType.T, ShapeType.L)
    state = machine.initial_state()
    assert state.board.shape == (20, 10)
    assert not state.board.any()
    assert state.piece_type == ShapeType.T
    assert state.piece == SHAPES[ShapeType.T]
    assert state.next_type == ShapeType.L
    assert state.position == (5, 0)
    assert (state.score, state.level, state.lines) == (0, 0, 0)
    assert not state.game_over and not state.is_paused


def test_state_board_is_read_only(make_machine):
    state = make_machine().initial_state()
    with pytest.raises(ValueError):
        state.board[0, 0] = 1


def test_invalid_config():
    with pytest.raises(ValueError):
        GameConfig(width=0)


def test_move_left_right_down(make_machine):
    machine = make_machine()
    state = machine.initial_state()
    left = machine.move_left(state)
    assert left.position == (4, 0)
    assert state.position == (5, 0)
    assert machine.move_right(state).position == (6, 0)
    assert machine.move_down(state).position == (5, 1)


def test_blocked_sideways_move_returns_same_state(make_machine):
    machine = make_machine()
    state = state_with(machine, create_empty_board(), ShapeType.I, (1, 5))
    assert machine.move_left(state) is state
    state = state_with(machine, create_empty_board(), ShapeType.I, (7, 5))
    assert machine.move_right(state) is state


def test_blocked_down_move_locks(make_machine):
    machine = make_machine(ShapeType.O, ShapeType.T, ShapeType.S)
    state = state_with(machine, create_empty_board(), ShapeType.O, (5, 18))
    locked = machine.move_down(state)
    assert locked is not state
    assert int(np.count_nonzero(locked.board)) == 4
    assert locked.board[19, 5] == int(ShapeType.O)
    assert locked.position == (5, 0)
    assert locked.piece_type == state.next_type
    assert not state.board.any()


def test_rotate_accepts_free_rotation(make_machine):
    machine = make_machine()
    state = state_with(machine, create_empty_board(), ShapeType.T, (5, 5))
    rotated = machine.rotate(state)
    assert rotated.piece == rotate_piece(SHAPES[ShapeType.T])
    assert rotated.position == state.position


def test_rotate_o_is_a_no_op(make_machine):
    machine = make_machine()
    state = state_with(machine, create_empty_board(), ShapeType.O, (5, 5))
    assert machine.rotate(state) is state


def test_rotate_has_no_wall_kick(make_machine):
    machine = make_machine()
    board = create_empty_board()
    # vertical I at (5, 6) would cover rows 5..8 of column 5
    board[7, 5] = 1
    state = state_with(machine, board, ShapeType.I, (5, 6))
    assert machine.rotate(state) is state


def test_rotate_at_wall_is_rejected(make_machine):
    machine = make_machine()
    vertical = rotate_piece(SHAPES[ShapeType.I])
    state = state_with(machine, create_empty_board(), ShapeType.I, (0, 5)).replace(piece=vertical)
    # back to horizontal would need column -1
    assert machine.rotate(state) is state


def test_transform_rotation_in_place(make_machine):
    machine = make_machine()
    state = state_with(machine, create_empty_board(), ShapeType.T, (5, 5))
    result = machine.transform(state, ComplexFunction.ROTATION)
    assert result.piece == rotate_piece(SHAPES[ShapeType.T])
    assert result.position == (5, 5)


def test_transform_searches_nearest_column(make_machine):
    machine = make_machine()
    vertical = rotate_piece(SHAPES[ShapeType.I])
    state = state_with(machine, create_empty_board(), ShapeType.I, (0, 5)).replace(piece=vertical)
    result = machine.transform(state, ComplexFunction.ROTATION)
    # reversed I needs columns x-2..x+1; only the +2 shift fits
    assert result.position == (2, 5)
    assert result.piece == rotate_piece(vertical)


def test_transform_prefers_left_shift_before_right(make_machine):
    machine = make_machine()
    board = create_empty_board()
    # T rotated at (5, 5) covers (5,4) (5,5) (5,6) (4,5); block (4, 5)
    board[5, 4] = 1
    state = state_with(machine, board, ShapeType.T, (5, 5))
    result = machine.transform(state, ComplexFunction.ROTATION)
    # shift -1 puts the cells at column 4, still blocked; +1 is free
    assert result.position == (6, 5)

    board = create_empty_board()
    # block only (5, 4): both -1 and +1 fit, -1 is tried first
    board[4, 5] = 1
    state = state_with(machine, board, ShapeType.T, (5, 5))
    result = machine.transform(state, ComplexFunction.ROTATION)
    assert result.position == (4, 5)


def test_transform_gives_up_beyond_two_columns(make_machine):
    machine = make_machine()
    board = create_empty_board()
    board[2:5, 1:] = 1
    state = state_with(machine, board, ShapeType.T, (5, 3))
    assert machine.transform(state, ComplexFunction.ROTATION) is state


def test_transform_square_snaps(make_machine):
    machine = make_machine()
    state = state_with(machine, create_empty_board(), ShapeType.T, (5, 5))
    result = machine.transform(state, ComplexFunction.SQUARE)
    assert len(result.piece) == 4
    assert {(p.re, p.im) for p in result.piece} == {(1, 0), (0, 0), (-1, 0)}


def test_transform_reciprocal_is_rejected_through_origin(make_machine):
    machine = make_machine()
    state = state_with(machine, create_empty_board(), ShapeType.T, (5, 5))
    assert machine.transform(state, ComplexFunction.RECIPROCAL) is state


def test_transform_applies_to_o(make_machine):
    machine = make_machine()
    state = state_with(machine, create_empty_board(), ShapeType.O, (5, 5))
    assert machine.transform(state, ComplexFunction.ROTATION) is not state


def test_transform_unknown_kind_keeps_piece(make_machine):
    machine = make_machine()
    state = state_with(machine, create_empty_board(), ShapeType.S, (5, 5))
    assert machine.transform(state, "unknown") is state


def test_hard_drop_locks_at_floor(make_machine):
    machine = make_machine(ShapeType.O, ShapeType.I, ShapeType.T)
    state = state_with(machine, create_empty_board(), ShapeType.O, (3, 0))
    dropped = machine.hard_drop(state)
    assert dropped.board[18, 3] == int(ShapeType.O)
    assert dropped.board[19, 4] == int(ShapeType.O)
    assert int(np.count_nonzero(dropped.board)) == 4
    assert dropped.position == (5, 0)


def test_hard_drop_stops_on_stack(make_machine):
    machine = make_machine(ShapeType.O)
    board = create_empty_board()
    board[10, 3] = 1
    state = state_with(machine, board, ShapeType.O, (3, 0))
    dropped = machine.hard_drop(state)
    assert dropped.board[9, 3] == int(ShapeType.O)
    assert dropped.board[8, 4] == int(ShapeType.O)


def test_lock_clears_lines_and_scores(make_machine):
    machine = make_machine(ShapeType.O)
    board = create_empty_board()
    board[18:, :] = 1
    board[18:, 5:7] = 0
    state = state_with(machine, board, ShapeType.O, (5, 0))
    result = machine.hard_drop(state)
    assert result.lines == 2
    assert result.score == 300
    assert result.level == 0
    assert not result.board.any()


def test_score_uses_level_before_clear(make_machine):
    machine = make_machine(ShapeType.O)
    board = create_empty_board()
    board[19, :] = 1
    board[19, 5:7] = 0
    state = state_with(machine, board, ShapeType.O, (5, 0), lines=9, level=0, score=50)
    result = machine.hard_drop(state)
    assert result.lines == 10
    assert result.level == 1
    assert result.score == 150


def test_lock_draws_next_piece(make_machine):
    machine = make_machine(ShapeType.T, ShapeType.L, ShapeType.J, ShapeType.Z)
    state = machine.initial_state()
    assert (state.piece_type, state.next_type) == (ShapeType.T, ShapeType.L)
    state = machine.hard_drop(state)
    assert (state.piece_type, state.next_type) == (ShapeType.L, ShapeType.J)
    assert state.piece == SHAPES[ShapeType.L]


def test_spawn_blocked_is_game_over(make_machine):
    machine = make_machine(ShapeType.O)
    board = create_empty_board()
    # spawn rows occupied everywhere except column 0, so nothing clears
    board[0:2, 1:] = 1
    state = state_with(machine, board, ShapeType.I, (1, 10), score=700, lines=3)
    over = machine.hard_drop(state)
    assert over.game_over
    # the lock itself is kept; only the spawn fails
    assert over.board[19, 1] == int(ShapeType.I)
    assert (over.score, over.lines) == (700, 3)
    assert over.piece_type == state.next_type
    assert over.next_type == state.next_type
    assert over.position == (5, 0)


def test_game_over_freezes_everything_but_restart(make_machine):
    machine = make_machine(ShapeType.O)
    board = create_empty_board()
    board[0:2, 1:] = 1
    over = machine.hard_drop(state_with(machine, board, ShapeType.I, (1, 10)))
    assert over.game_over
    for action in (Action.LEFT, Action.RIGHT, Action.SOFT_DROP, Action.HARD_DROP, Action.ROTATE,
                   Action.TRANSFORM, Action.TOGGLE_PAUSE, Action.NONE):
        assert machine.step(over, action) is over
    assert machine.lock(over) is over
    fresh = machine.step(over, Action.RESTART)
    assert not fresh.game_over
    assert not fresh.board.any()
    assert fresh.score == 0


def test_pause_freezes_play(make_machine):
    machine = make_machine()
    state = machine.initial_state()
    paused = machine.toggle_pause(state)
    assert paused.is_paused
    for action in (Action.LEFT, Action.RIGHT, Action.SOFT_DROP, Action.HARD_DROP, Action.ROTATE, Action.TRANSFORM):
        assert machine.step(paused, action) is paused
    resumed = machine.toggle_pause(paused)
    assert not resumed.is_paused
    assert resumed.position == state.position
    assert resumed.piece == state.piece
    assert machine.step(paused, Action.RESTART).is_paused is False


def test_counters_never_decrease(make_machine):
    machine = make_machine(*ShapeType)
    state = machine.initial_state()
    actions = [Action.LEFT, Action.ROTATE, Action.HARD_DROP, Action.RIGHT, Action.RIGHT, Action.HARD_DROP,
               Action.TRANSFORM, Action.SOFT_DROP, Action.HARD_DROP]
    for i in range(200):
        before = state
        state = machine.step(state, actions[i % len(actions)], ComplexFunction.EXP)
        assert state.score >= before.score
        assert state.lines >= before.lines
        assert state.level == state.lines // 10
        assert state.board.shape == (20, 10)
        assert len(state.piece) == 4
        if state.game_over:
            break


def test_overlay_marks_falling_piece(make_machine):
    machine = make_machine()
    state = state_with(machine, create_empty_board(), ShapeType.O, (5, 5))
    view = machine.overlay(state)
    assert view[5, 5] == -int(ShapeType.O)
    assert int(np.count_nonzero(view)) == 4
    assert not state.board.any()


def test_building_a_state_leaves_callers_board_writable(make_machine):
    machine = make_machine()
    board = create_empty_board()
    state = machine.initial_state().replace(board=board)
    board[0, 0] = 1
    assert board[0, 0] == 1
    assert state.board[0, 0] == 0
    with pytest.raises(ValueError):
        state.board[0, 0] = 1


def test_moves_share_the_frozen_board(make_machine):
    machine = make_machine()
    state = machine.initial_state()
    moved = machine.move_left(state)
    assert moved.board is state.board
    assert machine.hard_drop(state).board is not state.board
