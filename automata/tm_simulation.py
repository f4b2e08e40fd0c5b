import logging
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable, Iterator, List, NamedTuple, Optional, Set, Tuple

from .search import (
    DEFAULT_MAX_STEPS,
    SimulationResult,
    depth_first_search,
    get_step_from_path,
)

logger = logging.getLogger(__name__)

DEFAULT_BLANK = '_'


class Move(Enum):
    LEFT = 'L'
    RIGHT = 'R'
    STAY = 'S'

    @property
    def delta(self) -> int:
        return {Move.LEFT: -1, Move.RIGHT: 1, Move.STAY: 0}[self]

    @classmethod
    def parse(cls, value) -> 'Move':
        """Accepts a Move, its letter ('L', 'R', 'S') or its name, any case."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            text = value.strip().upper()
            for move in cls:
                if text in (move.value, move.name):
                    return move
        raise ValueError(f'Unknown head move: {value!r}')


@dataclass(frozen=True)
class TMTransition:
    """
    (from_state, read_symbol) -> (to_state, write_symbol, move)

    An empty read_symbol or write_symbol stands for the blank symbol.
    """
    from_state: str
    read_symbol: str
    to_state: str
    write_symbol: str
    move: Move

    def __post_init__(self):
        if not isinstance(self.move, Move):
            object.__setattr__(self, 'move', Move.parse(self.move))


@dataclass(frozen=True)
class TMStep:
    from_state: str
    to_state: str
    read_symbol: str
    write_symbol: str
    move: Move
    # Every tape cell after the step, blanks included
    tape_snapshot: str
    # Index of the head in tape_snapshot
    head_position: int
    # Cells prepended to the left of the original input so far
    offset: int
    # tape_snapshot without leading and trailing blanks
    tape_contents: str

    @property
    def logical_head(self) -> int:
        """Head position relative to the first cell of the original input."""
        return self.head_position - self.offset

    def to_dict(self):
        return {
            'from_state': self.from_state,
            'to_state': self.to_state,
            'read': self.read_symbol,
            'write': self.write_symbol,
            'move': self.move.value,
            'tape': self.tape_snapshot,
            'head_position': self.head_position,
            'logical_head': self.logical_head,
            'tape_contents': self.tape_contents,
        }


class Tape:
    """
    Bi-infinite tape realised lazily over a double-ended sequence.

    Cells are only materialised when the head reaches them. `offset` counts
    the cells prepended since the tape was created, so `head - offset` is a
    stable logical coordinate: 0 is the first cell of the input.
    """

    def __init__(self, contents: Iterable[str] = '', blank: str = DEFAULT_BLANK):
        self.blank = blank
        self.cells = deque(contents)
        if not self.cells:
            self.cells.append(blank)
        self.head = 0
        self.offset = 0

    def read(self) -> str:
        if 0 <= self.head < len(self.cells):
            return self.cells[self.head]
        return self.blank

    def write(self, symbol: str) -> None:
        self.cells[self.head] = symbol or self.blank

    def move(self, move: Move) -> None:
        self.head += move.delta
        self.expand()

    def expand(self) -> None:
        if self.head < 0:
            self.cells.appendleft(self.blank)
            self.offset += 1
            self.head = 0
        elif self.head >= len(self.cells):
            self.cells.append(self.blank)

    @property
    def logical_head(self) -> int:
        return self.head - self.offset

    def snapshot(self) -> str:
        return ''.join(self.cells)

    def contents(self) -> str:
        return self.snapshot().strip(self.blank)

    def copy(self) -> 'Tape':
        other = Tape.__new__(Tape)
        other.blank = self.blank
        other.cells = deque(self.cells)
        other.head = self.head
        other.offset = self.offset
        return other

    def __str__(self) -> str:
        return tape_to_string(self.cells, self.head)


def tape_to_string(cells: Iterable[str], head_position: int) -> str:
    """Tape text with the cell under the head in brackets, e.g. '1[0]0'."""
    return ''.join(f'[{cell}]' if index == head_position else cell
                   for index, cell in enumerate(cells))


class _Configuration(NamedTuple):
    state: str
    tape: Tape


class TuringMachine:
    """
    Non-deterministic single-tape Turing machine that accepts by entering a
    final state.

    Acceptance is decided by a backtracking depth-first search over
    (state, tape) configurations; each branch owns its own copy of the tape.
    """

    def __init__(self, initial_state: str, blank: str = DEFAULT_BLANK):
        self.initial_state = initial_state
        self.blank = blank
        self._transitions: List[TMTransition] = []
        self._final_states: Set[str] = set()

    @property
    def transitions(self) -> List[TMTransition]:
        return list(self._transitions)

    @property
    def final_states(self) -> Set[str]:
        return set(self._final_states)

    def add_transition(self, *args, **kwargs) -> TMTransition:
        """
        Adds a transition, given either as a TMTransition or as its fields
        (from_state, read_symbol, to_state, write_symbol, move).
        """
        if len(args) == 1 and not kwargs and isinstance(args[0], TMTransition):
            transition = args[0]
        else:
            transition = TMTransition(*args, **kwargs)
        self._transitions.append(transition)
        return transition

    def add_final_state(self, state: str) -> None:
        self._final_states.add(state)

    def _reads(self, transition: TMTransition, symbol: str) -> bool:
        if transition.read_symbol in ('', self.blank):
            return symbol == self.blank
        return transition.read_symbol == symbol

    def run(self, input_string: str, max_steps: int = DEFAULT_MAX_STEPS,
            should_stop: Optional[Callable[[], bool]] = None) -> SimulationResult:
        """
        Searches for a run of the machine on input_string that reaches a final state.

        Args:
            input_string: Initial tape contents, head on its first cell
            max_steps: Number of configurations the search may visit
            should_stop: Optional cancellation check polled at every configuration

        Returns:
            SimulationResult with the list of TMStep on acceptance
        """
        transitions = list(self._transitions)
        final_states = set(self._final_states)
        initial = _Configuration(self.initial_state, Tape(input_string, self.blank))

        def is_accepting(config: _Configuration) -> bool:
            return config.state in final_states

        def expand(config: _Configuration) -> Iterator[Tuple[TMStep, _Configuration]]:
            symbol = config.tape.read()
            for transition in transitions:
                if transition.from_state != config.state or not self._reads(transition, symbol):
                    continue

                tape = config.tape.copy()
                written = transition.write_symbol or self.blank
                tape.write(written)
                tape.move(transition.move)

                step = TMStep(
                    from_state=config.state,
                    to_state=transition.to_state,
                    read_symbol=symbol,
                    write_symbol=written,
                    move=transition.move,
                    tape_snapshot=tape.snapshot(),
                    head_position=tape.head,
                    offset=tape.offset,
                    tape_contents=tape.contents(),
                )
                yield step, _Configuration(transition.to_state, tape)

        result = depth_first_search(initial, expand, is_accepting, max_steps, should_stop)
        logger.debug("TM on %r: %s after %d steps", input_string, result.outcome.value, result.steps_used)
        return result

    def accepts(self, input_string: str, out_path: Optional[List[TMStep]] = None,
                max_steps: int = DEFAULT_MAX_STEPS) -> bool:
        """
        Checks whether the machine accepts the input string.

        When it does and out_path is given, out_path is replaced with the
        accepting steps. A rejected input and an exhausted step budget both
        return False; use run() to tell them apart.
        """
        result = self.run(input_string, max_steps)
        if result.accepted and out_path is not None:
            out_path[:] = result.path
        return result.accepted

    @staticmethod
    def get_step_from_path(path: List[TMStep], index: int) -> Optional[TMStep]:
        return get_step_from_path(path, index)
