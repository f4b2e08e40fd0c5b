import logging
from dataclasses import dataclass
from typing import Callable, Iterator, List, NamedTuple, Optional, Set, Tuple

from .search import (
    DEFAULT_MAX_STEPS,
    SimulationResult,
    depth_first_search,
    get_step_from_path,
)
from .transition_table import EPSILON

logger = logging.getLogger(__name__)

DEFAULT_INITIAL_STACK = 'Z'


@dataclass(frozen=True)
class PDATransition:
    """
    (from_state, input_symbol, pop_symbol) -> (to_state, push_string)

    An empty input_symbol or pop_symbol is epsilon. push_string is written
    top-first: after the move its first character is the top of the stack.
    """
    from_state: str
    input_symbol: str
    pop_symbol: str
    push_string: str
    to_state: str


@dataclass(frozen=True)
class PDAStep:
    from_state: str
    to_state: str
    consumed: str
    popped: str
    pushed: str
    # Stack after the step, top first
    stack_snapshot: str
    # Position of the next unconsumed input symbol
    input_index: int

    def to_dict(self):
        return {
            'from_state': self.from_state,
            'to_state': self.to_state,
            'consumed': self.consumed,
            'popped': self.popped,
            'pushed': self.pushed,
            'stack': self.stack_snapshot,
            'input_index': self.input_index,
        }


class _Configuration(NamedTuple):
    state: str
    input_index: int
    # Top of the stack is the last element
    stack: Tuple[str, ...]


def stack_to_string(stack: Tuple[str, ...]) -> str:
    """Textual stack, top first."""
    return ''.join(reversed(stack))


def _stack_from_string(text: str) -> Tuple[str, ...]:
    return tuple(reversed(text))


class PushdownAutomaton:
    """
    Non-deterministic pushdown automaton accepting by final state.

    Acceptance is decided by a backtracking depth-first search over
    (state, input index, stack) configurations. Candidate transitions are
    tried in the order they were added, so the reported path is the first
    accepting one in declaration order.
    """

    def __init__(self, initial_state: str, initial_stack: str = DEFAULT_INITIAL_STACK):
        self.initial_state = initial_state
        # Written top-first, e.g. 'Z0' has 'Z' on top
        self.initial_stack = initial_stack
        self._transitions: List[PDATransition] = []
        self._final_states: Set[str] = set()

    @property
    def transitions(self) -> List[PDATransition]:
        return list(self._transitions)

    @property
    def final_states(self) -> Set[str]:
        return set(self._final_states)

    def add_transition(self, *args, **kwargs) -> PDATransition:
        """
        Adds a transition, given either as a PDATransition or as its fields
        (from_state, input_symbol, pop_symbol, push_string, to_state).
        """
        if len(args) == 1 and not kwargs and isinstance(args[0], PDATransition):
            transition = args[0]
        else:
            transition = PDATransition(*args, **kwargs)
        self._transitions.append(transition)
        return transition

    def add_final_state(self, state: str) -> None:
        self._final_states.add(state)

    def run(self, input_string: str, max_steps: int = DEFAULT_MAX_STEPS,
            should_stop: Optional[Callable[[], bool]] = None) -> SimulationResult:
        """
        Searches for an accepting path for the input string.

        Args:
            input_string: The input string to simulate
            max_steps: Number of configurations the search may visit
            should_stop: Optional cancellation check polled at every configuration

        Returns:
            SimulationResult whose outcome tells accepted, rejected (no accepting
            path exists within the explored space) and exhausted (budget ran out)
            apart, with the list of PDAStep on acceptance
        """
        transitions = list(self._transitions)
        final_states = set(self._final_states)
        initial = _Configuration(self.initial_state, 0, _stack_from_string(self.initial_stack))

        def is_accepting(config: _Configuration) -> bool:
            return config.input_index == len(input_string) and config.state in final_states

        def expand(config: _Configuration) -> Iterator[Tuple[PDAStep, _Configuration]]:
            for transition in transitions:
                if transition.from_state != config.state:
                    continue

                consumed = transition.input_symbol
                if consumed != EPSILON and not input_string.startswith(consumed, config.input_index):
                    continue

                stack = config.stack
                popped = transition.pop_symbol
                if popped != EPSILON:
                    depth = len(popped)
                    # Not enough symbols, or the top does not match
                    if len(stack) < depth or stack_to_string(stack[-depth:]) != popped:
                        continue
                    stack = stack[:-depth]

                if transition.push_string:
                    stack = stack + _stack_from_string(transition.push_string)

                input_index = config.input_index + len(consumed)
                step = PDAStep(
                    from_state=config.state,
                    to_state=transition.to_state,
                    consumed=consumed,
                    popped=popped,
                    pushed=transition.push_string,
                    stack_snapshot=stack_to_string(stack),
                    input_index=input_index,
                )
                yield step, _Configuration(transition.to_state, input_index, stack)

        result = depth_first_search(initial, expand, is_accepting, max_steps, should_stop)
        logger.debug("PDA on %r: %s after %d steps", input_string, result.outcome.value, result.steps_used)
        return result

    def accepts(self, input_string: str, out_path: Optional[List[PDAStep]] = None,
                max_steps: int = DEFAULT_MAX_STEPS) -> bool:
        """
        Checks whether the input string is accepted.

        When it is and out_path is given, out_path is replaced with the
        accepting steps. Rejection and an exhausted step budget both return
        False; use run() to tell them apart.
        """
        result = self.run(input_string, max_steps)
        if result.accepted and out_path is not None:
            out_path[:] = result.path
        return result.accepted

    @staticmethod
    def get_step_from_path(path: List[PDAStep], index: int) -> Optional[PDAStep]:
        return get_step_from_path(path, index)
