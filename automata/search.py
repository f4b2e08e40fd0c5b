import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Generic, Iterable, List, Optional, Sequence, Tuple, TypeVar

logger = logging.getLogger(__name__)

Config = TypeVar('Config')
Step = TypeVar('Step')

DEFAULT_MAX_STEPS = 100000


class SearchOutcome(Enum):
    ACCEPTED = 'accepted'
    # Every candidate transition at every open frame was tried
    REJECTED = 'rejected'
    # The step budget ran out before a conclusion was reached
    EXHAUSTED = 'exhausted'
    CANCELLED = 'cancelled'

    @property
    def is_conclusive(self) -> bool:
        return self in (SearchOutcome.ACCEPTED, SearchOutcome.REJECTED)


@dataclass
class SimulationResult(Generic[Step]):
    outcome: SearchOutcome
    path: List[Step] = field(default_factory=list)
    steps_used: int = 0

    @property
    def accepted(self) -> bool:
        return self.outcome is SearchOutcome.ACCEPTED

    def __bool__(self) -> bool:
        return self.accepted


def get_step_from_path(path: Sequence[Step], index: int) -> Optional[Step]:
    """Returns step `index` of a recorded path, or None when there is no such step."""
    if 0 <= index < len(path):
        return path[index]
    return None


def depth_first_search(initial: Config,
                       expand: Callable[[Config], Iterable[Tuple[Step, Config]]],
                       is_accepting: Callable[[Config], bool],
                       max_steps: int = DEFAULT_MAX_STEPS,
                       should_stop: Optional[Callable[[], bool]] = None) -> SimulationResult:
    """
    Backtracking depth-first search over machine configurations.

    The search keeps an explicit stack of frames, one per open configuration,
    each holding the iterator over that configuration's remaining successors.
    The step path is kept in lockstep with the frame stack: a step is appended
    when the search descends into a successor and removed when that successor's
    frame is exhausted.

    Every configuration visited costs one step of the budget, the initial one
    included. Successors are tried in the order `expand` yields them.

    Args:
        initial: The starting configuration
        expand: Yields (step, next_configuration) pairs for a configuration
        is_accepting: Acceptance test for a configuration
        max_steps: Number of configurations that may be visited
        should_stop: Polled before every visit; returning True cancels the search

    Returns:
        SimulationResult with the accepting path when the outcome is ACCEPTED
    """
    if max_steps < 0:
        raise ValueError(f'max_steps must be non-negative, got {max_steps}')

    steps_used = 0
    path: List[Any] = []
    frames: List[Iterable] = []
    config = initial

    while True:
        if should_stop is not None and should_stop():
            logger.debug("Search cancelled after %d steps at depth %d", steps_used, len(path))
            return SimulationResult(SearchOutcome.CANCELLED, [], steps_used)

        if steps_used >= max_steps:
            logger.debug("Step budget of %d exhausted at depth %d", max_steps, len(path))
            return SimulationResult(SearchOutcome.EXHAUSTED, [], steps_used)
        steps_used += 1

        if is_accepting(config):
            return SimulationResult(SearchOutcome.ACCEPTED, list(path), steps_used)

        frames.append(iter(expand(config)))

        # Advance to the next untried successor, backtracking through finished frames
        while frames:
            successor = next(frames[-1], None)
            if successor is not None:
                step, config = successor
                path.append(step)
                break
            frames.pop()
            if path:
                path.pop()
        else:
            logger.debug("Search space exhausted after %d steps", steps_used)
            return SimulationResult(SearchOutcome.REJECTED, [], steps_used)
