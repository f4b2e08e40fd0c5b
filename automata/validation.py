from typing import Dict, List, Optional

from .tm_simulation import Move

EPSILON_ALIASES = ('ε', 'λ', '&')


def normalize_epsilon(symbol: Optional[str]) -> str:
    """Maps None and the usual display markers for epsilon to ''."""
    if symbol is None or symbol in EPSILON_ALIASES:
        return ''
    return symbol


def parse_alphabet(text: str) -> List[str]:
    """
    Parses an alphabet written as '(a,b,c)'.

    Args:
        text: Comma separated single characters between parentheses

    Returns:
        List of symbols in the order given

    Raises:
        ValueError: If the parentheses are missing, a symbol is not a single
            character, a symbol is repeated or the alphabet is empty
    """
    text = (text or '').strip()
    if len(text) < 3 or not text.startswith('(') or not text.endswith(')'):
        raise ValueError('The alphabet must be written between parentheses, e.g. (a,b)')

    alphabet = []
    for symbol in text[1:-1].split(','):
        if len(symbol) != 1:
            raise ValueError(f"Each symbol must be a single character, got '{symbol}'")
        if symbol in alphabet:
            raise ValueError(f"Duplicate symbol '{symbol}' in alphabet")
        alphabet.append(symbol)

    if not alphabet:
        raise ValueError('The alphabet cannot be empty')
    return alphabet


def check_input_alphabet(input_string: str, alphabet: List[str]) -> Dict:
    """
    Checks that every symbol of the input belongs to the alphabet.

    Returns:
        Dict: {'valid': True} or {'valid': False, 'error': str, 'position': int}
    """
    for position, symbol in enumerate(input_string):
        if symbol not in alphabet:
            return {
                'valid': False,
                'error': f"Symbol '{symbol}' not in alphabet",
                'position': position
            }
    return {'valid': True}


def _check_states(machine: Dict) -> Optional[str]:
    if not isinstance(machine['states'], list):
        return 'states must be a list'

    if not isinstance(machine['acceptingStates'], list):
        return 'acceptingStates must be a list'

    if not machine.get('startingState'):
        return 'startingState must not be empty'

    # Only check membership if states were listed
    if machine.get('states'):
        if machine['startingState'] not in machine['states']:
            return 'Starting state not in states list'
        for state in machine['acceptingStates']:
            if state not in machine['states']:
                return f'Accepting state {state} not in states list'

    return None


def _check_symbol_fields(transition: Dict, index: int, fields: List[str],
                         single: bool = False) -> Optional[str]:
    for field in fields:
        value = transition.get(field)
        if value is not None and not isinstance(value, str):
            return f'Transition {index}: {field} must be a string'
        if single and len(normalize_epsilon(value)) > 1:
            return f'Transition {index}: {field} must be one symbol or epsilon'
    return None


def validate_fsa_structure(fsa: Dict) -> Dict:
    """
    Validates that the FSA has the required structure for simulation.

    Args:
        fsa: The FSA dictionary to validate, with keys states, alphabet,
            transitions ({state: {symbol: [next states]}}), startingState and
            acceptingStates

    Returns:
        Dict: Validation result with 'valid' boolean and optional 'error' message
    """
    if not isinstance(fsa, dict):
        return {'valid': False, 'error': 'FSA must be a dictionary'}

    required_keys = ['states', 'alphabet', 'transitions', 'startingState', 'acceptingStates']
    for key in required_keys:
        if key not in fsa:
            return {'valid': False, 'error': f'Missing required key: {key}'}

    if not isinstance(fsa['alphabet'], list):
        return {'valid': False, 'error': 'alphabet must be a list'}

    if not isinstance(fsa['transitions'], dict):
        return {'valid': False, 'error': 'transitions must be a dictionary'}

    error = _check_states(fsa)
    if error:
        return {'valid': False, 'error': error}

    for state, by_symbol in fsa['transitions'].items():
        if not isinstance(by_symbol, dict):
            return {'valid': False, 'error': f'Transitions of state {state} must be a dictionary'}
        for symbol, destinations in by_symbol.items():
            # Reachability only follows input symbols
            if not normalize_epsilon(symbol):
                return {'valid': False, 'error': 'epsilon transitions are not supported for finite automata'}
            if not isinstance(destinations, list):
                return {'valid': False, 'error': f'Destinations of {state} on {symbol} must be a list'}

    return {'valid': True}


def validate_pda_structure(pda: Dict) -> Dict:
    """
    Validates a PDA definition.

    Expected keys: states, transitions (list of {from, input, pop, push, to}),
    startingState, acceptingStates and optionally initialStack.
    """
    if not isinstance(pda, dict):
        return {'valid': False, 'error': 'PDA must be a dictionary'}

    for key in ['states', 'transitions', 'startingState', 'acceptingStates']:
        if key not in pda:
            return {'valid': False, 'error': f'Missing required key: {key}'}

    error = _check_states(pda)
    if error:
        return {'valid': False, 'error': error}

    if not isinstance(pda['transitions'], list):
        return {'valid': False, 'error': 'transitions must be a list'}

    for index, transition in enumerate(pda['transitions']):
        if not isinstance(transition, dict) or 'from' not in transition or 'to' not in transition:
            return {'valid': False, 'error': f'Transition {index} must have from and to'}
        error = (_check_symbol_fields(transition, index, ['input'], single=True)
                 or _check_symbol_fields(transition, index, ['pop', 'push']))
        if error:
            return {'valid': False, 'error': error}

    return {'valid': True}


def validate_tm_structure(tm: Dict) -> Dict:
    """
    Validates a TM definition.

    Expected keys: states, transitions (list of {from, read, to, write, move}),
    startingState, acceptingStates and optionally blank.
    """
    if not isinstance(tm, dict):
        return {'valid': False, 'error': 'TM must be a dictionary'}

    for key in ['states', 'transitions', 'startingState', 'acceptingStates']:
        if key not in tm:
            return {'valid': False, 'error': f'Missing required key: {key}'}

    error = _check_states(tm)
    if error:
        return {'valid': False, 'error': error}

    if not isinstance(tm['transitions'], list):
        return {'valid': False, 'error': 'transitions must be a list'}

    blank = tm.get('blank')
    if blank is not None and (not isinstance(blank, str) or len(blank) != 1):
        return {'valid': False, 'error': 'blank must be a single character'}

    for index, transition in enumerate(tm['transitions']):
        if not isinstance(transition, dict) or 'from' not in transition or 'to' not in transition:
            return {'valid': False, 'error': f'Transition {index} must have from and to'}
        error = _check_symbol_fields(transition, index, ['read', 'write'], single=True)
        if error:
            return {'valid': False, 'error': error}
        try:
            Move.parse(transition.get('move', 'S'))
        except ValueError as e:
            return {'valid': False, 'error': f'Transition {index}: {e}'}

    return {'valid': True}
