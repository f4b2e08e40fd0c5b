import logging
from collections import deque
from typing import Dict, Iterable, List, Optional, Set, Tuple, Union

from .string_generation import generate_accepted_dfs
from .transition_table import TransitionTable

logger = logging.getLogger(__name__)


def reached_states(table: TransitionTable, initial_state: str, input_string: str) -> Set[str]:
    """
    Computes the set of states a (possibly non-deterministic) FSA can be in
    after consuming the whole input string.

    The search is breadth-first over (state, position) configurations seeded
    with (initial_state, 0). A configuration is queued at most once, so
    branches that reconverge on the same state at the same position are not
    expanded twice.

    Args:
        table: The transition relation
        initial_state: The starting state
        input_string: The input string to consume

    Returns:
        Set of states reached with position == len(input_string)
    """
    reached = set()
    start = (initial_state, 0)
    visited = {start}
    queue = deque([start])

    while queue:
        state, position = queue.popleft()

        # Consumed all input
        if position == len(input_string):
            reached.add(state)
            continue

        symbol = input_string[position]
        for next_state in table.get_next_states(state, symbol):
            configuration = (next_state, position + 1)
            if configuration not in visited:
                visited.add(configuration)
                queue.append(configuration)

    return reached


def is_accepted(table: TransitionTable, initial_state: str, final_states: Iterable[str],
                input_string: str) -> bool:
    """
    Checks whether the input string is accepted.

    Args:
        table: The transition relation
        initial_state: The starting state
        final_states: Accepting states
        input_string: The input string to check

    Returns:
        True if some state reached after the whole input is an accepting state
    """
    return not reached_states(table, initial_state, input_string).isdisjoint(set(final_states))


def simulate_deterministic_fsa(table: TransitionTable, initial_state: str, final_states: Iterable[str],
                               input_string: str) -> Union[List[Tuple[str, str, str]], Dict]:
    """
    Replays a deterministic FSA along its single path.

    Args:
        table: The transition relation, at most one destination per (state, symbol)
        initial_state: The starting state
        final_states: Accepting states
        input_string: The input string to simulate

    Returns:
        If the input is accepted, returns a list of transitions in the format:
        [(current_state, symbol, next_state), ...].
        If the input is rejected, returns a dictionary with:
        {
            'accepted': False,
            'path': [(current_state, symbol, next_state), ...],  # Path up to rejection
            'rejection_reason': str,
            'rejection_position': int
        }
    """
    final_states = set(final_states)
    current_state = initial_state
    execution_path = []

    for position, symbol in enumerate(input_string):
        next_states = table.get_next_states(current_state, symbol)

        if not next_states:
            return {
                'accepted': False,
                'path': execution_path,
                'rejection_reason': f"No transition defined for symbol '{symbol}' from state '{current_state}'",
                'rejection_position': position
            }

        if len(next_states) != 1:
            return {
                'accepted': False,
                'path': execution_path,
                'rejection_reason': f"Non-deterministic transition: multiple states for symbol '{symbol}' from state '{current_state}'",
                'rejection_position': position
            }

        next_state = next_states[0]
        execution_path.append((current_state, symbol, next_state))
        current_state = next_state

    if current_state in final_states:
        return execution_path

    return {
        'accepted': False,
        'path': execution_path,
        'rejection_reason': f"Final state '{current_state}' is not an accepting state",
        'rejection_position': len(input_string)
    }


def is_accepted_by_enumeration(table: TransitionTable, initial_state: str, final_states: Iterable[str],
                               input_string: str, alphabet: Optional[List[str]] = None,
                               max_repetitions: int = 3) -> bool:
    """
    Membership test by enumeration: generates accepted strings up to the length
    of the input with generate_accepted_dfs and looks the input up in them.

    Slower than is_accepted and bounded by max_repetitions, so it can miss
    strings that is_accepted finds. Kept for comparison with the enumerator.
    """
    if alphabet is None:
        alphabet = sorted(table.symbols())
    accepted = generate_accepted_dfs(table, initial_state, final_states, alphabet,
                                     len(input_string), max_repetitions=max_repetitions)
    logger.debug("Enumerated %d strings while checking %r", len(accepted), input_string)
    return input_string in accepted
