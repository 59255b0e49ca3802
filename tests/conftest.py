from __future__ import annotations

import itertools
from typing import Iterable

import pytest

from complex_tetris.game import ShapeType, TetrisMachine


def cycle_picker(kinds: Iterable[ShapeType]):
    it = itertools.cycle(list(kinds))
    return lambda: next(it)


@pytest.fixture
def make_picker():
    def _make(*kinds: ShapeType):
        return cycle_picker(kinds or [ShapeType.T])

    return _make


@pytest.fixture
def make_machine(make_picker):
    def _make(*kinds: ShapeType) -> TetrisMachine:
        return TetrisMachine(picker=make_picker(*kinds))

    return _make
