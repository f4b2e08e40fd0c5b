"""
Text forms of finite automata exchanged with the editor's persistence layer.

Everything here works on strings; reading and writing files is left to the
caller.

Two formats are supported:

- transition triples, one 'from,to,symbol' per line
- the project format::

    # Automaton project
    alphabet: (a,b)
    states: (q0,q1,q2)
    initial: q0
    finals: (q2)
    transitions:
    q0,a->q1
    q1,b->q2
"""
from typing import Dict, Iterable, List

from .transition_table import EPSILON, EPSILON_MARKER, TransitionTable
from .validation import normalize_epsilon, parse_alphabet

PROJECT_HEADER = '# Automaton project'


def _display_symbol(symbol: str) -> str:
    return EPSILON_MARKER if symbol == EPSILON else symbol


def parse_transition_triples(text: str, table: TransitionTable = None) -> TransitionTable:
    """
    Reads 'from,to,symbol' lines into a TransitionTable.

    Blank lines and lines starting with '#' are skipped. An epsilon marker as
    symbol is read as epsilon.

    Raises:
        ValueError: If a line does not have exactly three non-empty states/symbol fields
    """
    if table is None:
        table = TransitionTable()

    for line_number, raw_line in enumerate(text.splitlines(), start=1):
        line = raw_line.strip()
        if not line or line.startswith('#'):
            continue

        fields = [field.strip() for field in line.split(',')]
        if len(fields) != 3 or not fields[0] or not fields[1]:
            raise ValueError(f"Line {line_number}: expected 'from,to,symbol', got '{line}'")

        from_state, to_state, symbol = fields
        table.add_transition(from_state, normalize_epsilon(symbol), to_state)

    return table


def format_transition_triples(table: TransitionTable) -> str:
    return ''.join(f'{from_state},{to_state},{_display_symbol(symbol)}\n'
                   for from_state, symbol, to_state in table.items())


def format_alphabet(alphabet: Iterable[str]) -> str:
    return '(' + ','.join(alphabet) + ')'


def format_state_list(states: Iterable[str]) -> str:
    return '(' + ','.join(states) + ')'


def _parse_state_list(text: str) -> List[str]:
    text = text.strip()
    if not text.startswith('(') or not text.endswith(')'):
        raise ValueError(f"Expected a list between parentheses, got '{text}'")
    return [state.strip() for state in text[1:-1].split(',') if state.strip()]


def dump_automaton(table: TransitionTable, alphabet: List[str], states: List[str],
                   initial_state: str, final_states: Iterable[str]) -> str:
    """
    Writes a finite automaton in the project format.

    Transitions are listed symbol by symbol in alphabet order, then by state
    in the order of `states`. Symbols and states the table uses without them
    being listed follow, sorted.
    """
    lines = [
        PROJECT_HEADER,
        f'alphabet: {format_alphabet(alphabet)}',
        f'states: {format_state_list(states)}',
        f'initial: {initial_state}',
        f'finals: {format_state_list(sorted(final_states))}',
        'transitions:',
    ]
    ordered_states = list(states) + sorted(table.states() - set(states))
    ordered_symbols = list(alphabet) + sorted(table.symbols() - set(alphabet))
    for symbol in ordered_symbols:
        for state in ordered_states:
            for to_state in table.get_next_states(state, symbol):
                lines.append(f'{state},{_display_symbol(symbol)}->{to_state}')
    return '\n'.join(lines) + '\n'


def load_automaton(text: str) -> Dict:
    """
    Reads the project format.

    Returns:
        An FSA dictionary with keys states, alphabet, transitions,
        startingState and acceptingStates

    Raises:
        ValueError: On an unknown header line, a malformed transition or a
            missing alphabet/initial state
    """
    alphabet = None
    states: List[str] = []
    initial_state = None
    final_states: List[str] = []
    table = TransitionTable()
    in_transitions = False

    for line_number, raw_line in enumerate(text.splitlines(), start=1):
        line = raw_line.strip()
        if not line or line.startswith('#'):
            continue

        if in_transitions:
            source, arrow, to_state = line.partition('->')
            from_state, comma, symbol = source.rpartition(',')
            if not arrow or not comma or not from_state.strip() or not to_state.strip():
                raise ValueError(f"Line {line_number}: expected 'from,symbol->to', got '{line}'")
            table.add_transition(from_state.strip(), normalize_epsilon(symbol.strip()), to_state.strip())
            continue

        key, _, value = line.partition(':')
        key = key.strip().lower()
        if key == 'alphabet':
            alphabet = parse_alphabet(value)
        elif key == 'states':
            states = _parse_state_list(value)
        elif key == 'initial':
            initial_state = value.strip()
        elif key == 'finals':
            final_states = _parse_state_list(value)
        elif key == 'transitions':
            in_transitions = True
        else:
            raise ValueError(f"Line {line_number}: unknown entry '{key}'")

    if alphabet is None:
        raise ValueError('Missing alphabet')
    if not initial_state:
        raise ValueError('Missing initial state')

    return {
        'states': states,
        'alphabet': alphabet,
        'transitions': table.to_fsa_dict(states),
        'startingState': initial_state,
        'acceptingStates': final_states,
    }
