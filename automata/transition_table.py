from typing import Dict, Iterator, List, Optional, Set, Tuple

EPSILON = ''
EPSILON_MARKER = 'ε'


class TransitionTable:
    """
    Transition relation of a finite automaton: (state, symbol) -> [next states].

    Repeated calls to add_transition for the same key accumulate destinations,
    which is what gives the table its NFA semantics. Destinations keep their
    insertion order and duplicates are kept.
    """

    def __init__(self):
        self._delta: Dict[Tuple[str, str], List[str]] = {}

    def add_transition(self, from_state: str, symbol: str, to_state: str) -> None:
        self._delta.setdefault((from_state, symbol), []).append(to_state)

    def get_next_states(self, from_state: str, symbol: str) -> List[str]:
        """
        Get all states reachable from given state on given symbol.

        Args:
            from_state: Current state
            symbol: Input symbol

        Returns:
            List of next states, empty if no transition is defined
        """
        return list(self._delta.get((from_state, symbol), []))

    def clear(self) -> None:
        self._delta.clear()

    def items(self) -> Iterator[Tuple[str, str, str]]:
        """Yields (from_state, symbol, to_state) triples in insertion order."""
        for (from_state, symbol), destinations in self._delta.items():
            for to_state in destinations:
                yield from_state, symbol, to_state

    def states(self) -> Set[str]:
        found = set()
        for from_state, _, to_state in self.items():
            found.add(from_state)
            found.add(to_state)
        return found

    def symbols(self) -> Set[str]:
        return {symbol for (_, symbol) in self._delta}

    def is_deterministic(self) -> bool:
        """True when no key has more than one destination and there are no epsilon moves."""
        for (_, symbol), destinations in self._delta.items():
            if symbol == EPSILON or len(destinations) > 1:
                return False
        return True

    def copy(self) -> 'TransitionTable':
        snapshot = TransitionTable()
        for key, destinations in self._delta.items():
            snapshot._delta[key] = list(destinations)
        return snapshot

    def __len__(self) -> int:
        return sum(len(destinations) for destinations in self._delta.values())

    def __contains__(self, key) -> bool:
        return key in self._delta and bool(self._delta[key])

    def __repr__(self) -> str:
        return f'TransitionTable({list(self.items())!r})'

    @classmethod
    def from_fsa_dict(cls, fsa: Dict) -> 'TransitionTable':
        """
        Builds a table from an FSA dictionary.

        Args:
            fsa: A dictionary with a 'transitions' key mapping each state to a
                dictionary of symbol -> list of next states, e.g.
                {'q0': {'a': ['q1']}, 'q1': {'b': ['q2']}}

        Returns:
            The populated TransitionTable
        """
        table = cls()
        for from_state, by_symbol in (fsa.get('transitions') or {}).items():
            for symbol, destinations in (by_symbol or {}).items():
                if isinstance(destinations, str):
                    destinations = [destinations]
                for to_state in destinations:
                    table.add_transition(from_state, symbol, to_state)
        return table

    def to_fsa_dict(self, states: Optional[List[str]] = None) -> Dict[str, Dict[str, List[str]]]:
        """Inverse of from_fsa_dict; states without outgoing moves map to {}."""
        transitions: Dict[str, Dict[str, List[str]]] = {}
        for state in states or []:
            transitions.setdefault(state, {})
        for (from_state, symbol), destinations in self._delta.items():
            transitions.setdefault(from_state, {})[symbol] = list(destinations)
        return transitions
