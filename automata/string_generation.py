import logging
from collections import deque
from typing import Dict, Iterable, Iterator, List, Optional, Set, Tuple

from .transition_table import TransitionTable

logger = logging.getLogger(__name__)


def iter_accepted(table: TransitionTable, initial_state: str, final_states: Iterable[str],
                  alphabet: Iterable[str], max_length: int,
                  cycle_limit: Optional[int] = 2) -> Iterator[str]:
    """
    Generator version of generate_accepted that yields strings as they are found.

    Enumeration is breadth-first over (state, accumulated string) frontier
    entries. Each entry is expanded with every alphabet symbol while its
    string is shorter than max_length, and a string is yielded whenever a
    transition lands on a final state. The empty string comes first, and only
    if the initial state is itself final.

    With cycle_limit=None every path is followed. With an integer cycle_limit
    each entry also carries a per-state visit counter (the initial state
    starts at 1) and a branch is pruned once its destination would be visited
    more than cycle_limit times. Strings whose only accepting paths revisit a
    state more often than that are not produced.

    Args:
        table: The transition relation
        initial_state: The starting state
        final_states: Accepting states
        alphabet: Symbols to try, in order
        max_length: Longest string to produce
        cycle_limit: Per-state visit bound along one path, or None for no bound

    Yields:
        Accepted strings in breadth-first order, once per accepting path
    """
    if max_length < 0:
        return

    final_states = set(final_states)
    alphabet = list(alphabet)

    if initial_state in final_states:
        yield ''

    # Frontier entry: (state, string, visits); visits is None when unbounded
    initial_visits = {initial_state: 1} if cycle_limit is not None else None
    frontier = deque([(initial_state, '', initial_visits)])
    expanded = 0

    while frontier:
        state, accumulated, visits = frontier.popleft()
        expanded += 1

        if len(accumulated) >= max_length:
            continue

        for symbol in alphabet:
            for next_state in table.get_next_states(state, symbol):
                next_string = accumulated + symbol
                next_visits = None

                if visits is not None:
                    next_visits = dict(visits)
                    next_visits[next_state] = next_visits.get(next_state, 0) + 1
                    if next_visits[next_state] > cycle_limit:
                        continue

                if next_state in final_states:
                    yield next_string

                if len(next_string) < max_length:
                    frontier.append((next_state, next_string, next_visits))

    logger.debug("Expanded %d frontier entries (max_length=%d, cycle_limit=%s)",
                 expanded, max_length, cycle_limit)


def generate_accepted(table: TransitionTable, initial_state: str, final_states: Iterable[str],
                      alphabet: Iterable[str], max_length: int, cycle_limit: Optional[int] = 2,
                      unique: bool = False) -> List[str]:
    """
    Enumerates the strings of length <= max_length accepted by the automaton.

    Args:
        table: The transition relation
        initial_state: The starting state
        final_states: Accepting states
        alphabet: Symbols to try, in order
        max_length: Longest string to produce
        cycle_limit: Per-state visit bound, None to explore cycles without limit
        unique: Drop repeated strings, keeping first-seen order

    Returns:
        List of accepted strings; '' is present iff the initial state is final
    """
    results = iter_accepted(table, initial_state, final_states, alphabet, max_length, cycle_limit)
    if not unique:
        return list(results)

    seen = set()
    ordered = []
    for string in results:
        if string not in seen:
            seen.add(string)
            ordered.append(string)
    return ordered


def generate_accepted_dfs(table: TransitionTable, initial_state: str, final_states: Iterable[str],
                          alphabet: Iterable[str], max_length: int, max_repetitions: int = 3) -> Set[str]:
    """
    Depth-first enumeration bounding how often each (state, symbol) edge is
    taken along a single path. Returns a set, so there is no ordering.
    """
    final_states = set(final_states)
    alphabet = list(alphabet)
    accepted: Set[str] = set()
    edge_counts: Dict[Tuple[str, str], int] = {}

    def dfs(state: str, accumulated: str):
        if state in final_states:
            accepted.add(accumulated)

        if len(accumulated) >= max_length:
            return

        for symbol in alphabet:
            for next_state in table.get_next_states(state, symbol):
                edge = (state, symbol)
                edge_counts[edge] = edge_counts.get(edge, 0) + 1
                if edge_counts[edge] <= max_repetitions:
                    dfs(next_state, accumulated + symbol)
                edge_counts[edge] -= 1

    if max_length >= 0:
        dfs(initial_state, '')
    return accepted
