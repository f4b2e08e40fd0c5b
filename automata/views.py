import json
import logging

from django.http import JsonResponse, StreamingHttpResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_POST

from .conf import get_setting
from .fsa_simulation import is_accepted, reached_states, simulate_deterministic_fsa
from .pda_simulation import PushdownAutomaton
from .serialization import dump_automaton, format_transition_triples, load_automaton
from .string_generation import generate_accepted, iter_accepted
from .tm_simulation import Move, TuringMachine
from .transition_table import EPSILON_MARKER, TransitionTable
from .validation import (
    check_input_alphabet,
    normalize_epsilon,
    parse_alphabet,
    validate_fsa_structure,
    validate_pda_structure,
    validate_tm_structure,
)

logger = logging.getLogger(__name__)

_UNSET = object()


def _build_pda(definition):
    pda = PushdownAutomaton(
        definition['startingState'],
        definition.get('initialStack') or get_setting('INITIAL_STACK'),
    )
    for transition in definition['transitions']:
        pda.add_transition(
            transition['from'],
            normalize_epsilon(transition.get('input')),
            normalize_epsilon(transition.get('pop')),
            normalize_epsilon(transition.get('push')),
            transition['to'],
        )
    for state in definition['acceptingStates']:
        pda.add_final_state(state)
    return pda


def _build_tm(definition):
    blank = definition.get('blank') or get_setting('BLANK_SYMBOL')
    tm = TuringMachine(definition['startingState'], blank)
    for transition in definition['transitions']:
        tm.add_transition(
            transition['from'],
            normalize_epsilon(transition.get('read')),
            transition['to'],
            normalize_epsilon(transition.get('write')),
            Move.parse(transition.get('move', 'S')),
        )
    for state in definition['acceptingStates']:
        tm.add_final_state(state)
    return tm


def _bounded_int(data, key, default, upper):
    """Reads a non-negative integer option from the request body."""
    value = data.get(key, default)
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f'{key} must be an integer')
    if value < 0 or value > upper:
        raise ValueError(f'{key} must be between 0 and {upper}')
    return value


def _display(string):
    return string if string else EPSILON_MARKER


def _event(payload):
    return f"data: {json.dumps(payload)}\n\n"


def _error_stream(message, status):
    def error_generator():
        yield _event({'error': message})

    return StreamingHttpResponse(error_generator(), content_type='text/event-stream', status=status)


@csrf_exempt
@require_POST
def validate_string(request):
    """
    Checks whether a finite automaton accepts an input string.

    Expects a POST request with a JSON body containing:
    - fsa: The FSA definition
    - input: The input string

    Returns the acceptance result and the set of states reached after the
    whole input.
    """
    try:
        data = json.loads(request.body)
        fsa = data.get('fsa')
        input_string = data.get('input', '')

        if not fsa:
            return JsonResponse({'error': 'Missing FSA definition'}, status=400)

        validation = validate_fsa_structure(fsa)
        if not validation['valid']:
            return JsonResponse({'error': validation['error']}, status=400)

        if fsa['alphabet']:
            alphabet_check = check_input_alphabet(input_string, fsa['alphabet'])
            if not alphabet_check['valid']:
                return JsonResponse(alphabet_check, status=400)

        table = TransitionTable.from_fsa_dict(fsa)
        reached = reached_states(table, fsa['startingState'], input_string)
        accepted = is_accepted(table, fsa['startingState'], fsa['acceptingStates'], input_string)
        logger.info("Validated %r: %s", input_string, 'accepted' if accepted else 'rejected')

        return JsonResponse({
            'accepted': accepted,
            'type': 'dfa' if table.is_deterministic() else 'nfa',
            'reached_states': sorted(reached),
        })

    except ValueError as e:
        return JsonResponse({'error': str(e)}, status=400)
    except Exception as e:
        logger.exception("validate_string failed")
        return JsonResponse({'error': f'Server error: {str(e)}'}, status=500)


@csrf_exempt
@require_POST
def simulate_dfa(request):
    """
    Replays a deterministic FSA on the input and returns its path.
    """
    try:
        data = json.loads(request.body)
        fsa = data.get('fsa')
        input_string = data.get('input', '')

        if not fsa:
            return JsonResponse({'error': 'Missing FSA definition'}, status=400)

        validation = validate_fsa_structure(fsa)
        if not validation['valid']:
            return JsonResponse({'error': validation['error']}, status=400)

        result = simulate_deterministic_fsa(TransitionTable.from_fsa_dict(fsa), fsa['startingState'],
                                            fsa['acceptingStates'], input_string)

        if isinstance(result, list):
            return JsonResponse({
                'accepted': True,
                'path': result
            })

        return JsonResponse({
            'accepted': False,
            'path': result.get('path', []),
            'rejection_reason': result.get('rejection_reason', 'Unknown rejection reason'),
            'rejection_position': result.get('rejection_position', 0)
        })

    except ValueError as e:
        return JsonResponse({'error': str(e)}, status=400)
    except Exception as e:
        logger.exception("simulate_dfa failed")
        return JsonResponse({'error': f'Server error: {str(e)}'}, status=500)


def _generation_options(data):
    upper = get_setting('MAX_GENERATION_LENGTH')
    # An explicit null switches off the cycle limit
    cycle_limit = data.get('cycle_limit', _UNSET)
    if cycle_limit is _UNSET:
        cycle_limit = get_setting('CYCLE_LIMIT')
    elif cycle_limit is not None:
        # No path of length <= upper visits a state more than upper + 1 times
        cycle_limit = _bounded_int(data, 'cycle_limit', 0, upper + 1)
    if cycle_limit is None:
        # The unbounded variant grows with |alphabet| ** max_length
        upper = min(upper, get_setting('MAX_UNBOUNDED_GENERATION_LENGTH'))
    max_length = _bounded_int(data, 'max_length', 0, upper)
    return max_length, cycle_limit


@csrf_exempt
@require_POST
def generate_strings(request):
    """
    Enumerates the strings accepted by a finite automaton.

    Expects a POST request with a JSON body containing:
    - fsa: The FSA definition
    - max_length: Longest string to generate
    - cycle_limit: Optional per-state visit bound, null for no bound
    - unique: Optional, drop repeated strings

    The empty string is reported with the epsilon marker.
    """
    try:
        data = json.loads(request.body)
        fsa = data.get('fsa')

        if not fsa:
            return JsonResponse({'error': 'Missing FSA definition'}, status=400)

        validation = validate_fsa_structure(fsa)
        if not validation['valid']:
            return JsonResponse({'error': validation['error']}, status=400)

        max_length, cycle_limit = _generation_options(data)
        table = TransitionTable.from_fsa_dict(fsa)
        strings = generate_accepted(table, fsa['startingState'], fsa['acceptingStates'],
                                    fsa['alphabet'], max_length, cycle_limit,
                                    unique=bool(data.get('unique', False)))
        logger.info("Generated %d strings up to length %d", len(strings), max_length)

        return JsonResponse({
            'strings': [_display(string) for string in strings],
            'count': len(strings),
            'max_length': max_length,
            'cycle_limit': cycle_limit,
        })

    except ValueError as e:
        return JsonResponse({'error': str(e)}, status=400)
    except Exception as e:
        logger.exception("generate_strings failed")
        return JsonResponse({'error': f'Server error: {str(e)}'}, status=500)


@csrf_exempt
@require_POST
def generate_strings_stream(request):
    """
    Streaming version of generate_strings.
    Returns strings as they are found using Server-Sent Events format.
    """
    try:
        data = json.loads(request.body)
        fsa = data.get('fsa')

        if not fsa:
            return _error_stream('Missing FSA definition', 400)

        validation = validate_fsa_structure(fsa)
        if not validation['valid']:
            return _error_stream(validation['error'], 400)

        max_length, cycle_limit = _generation_options(data)
        table = TransitionTable.from_fsa_dict(fsa)

        def result_generator():
            count = 0
            try:
                for string in iter_accepted(table, fsa['startingState'], fsa['acceptingStates'],
                                            fsa['alphabet'], max_length, cycle_limit):
                    count += 1
                    yield _event({'type': 'string', 'string': _display(string), 'number': count})

                yield _event({'type': 'summary', 'count': count})
                yield _event({'type': 'end'})

            except Exception as e:
                logger.exception("generate_strings_stream failed mid-stream")
                yield _event({'type': 'error', 'message': str(e)})

        response = StreamingHttpResponse(result_generator(), content_type='text/event-stream')
        response['Cache-Control'] = 'no-cache'
        response['X-Accel-Buffering'] = 'no'  # Disable nginx buffering
        return response

    except ValueError as e:
        return _error_stream(str(e), 400)
    except Exception as e:
        logger.exception("generate_strings_stream failed")
        return _error_stream(f'Server error: {str(e)}', 500)


def _step_response(result, input_string):
    return {
        'accepted': result.accepted,
        'outcome': result.outcome.value,
        'conclusive': result.outcome.is_conclusive,
        'steps_used': result.steps_used,
        'input': input_string,
        'path': [step.to_dict() for step in result.path],
    }


@csrf_exempt
@require_POST
def simulate_pda(request):
    """
    Runs a pushdown automaton on the input.

    Expects a POST request with a JSON body containing:
    - pda: The PDA definition
    - input: The input string
    - max_steps: Optional search budget

    The outcome is one of accepted, rejected or exhausted; path holds the
    accepting steps for stepwise replay.
    """
    try:
        data = json.loads(request.body)
        pda = data.get('pda')
        input_string = data.get('input', '')

        if not pda:
            return JsonResponse({'error': 'Missing PDA definition'}, status=400)

        validation = validate_pda_structure(pda)
        if not validation['valid']:
            return JsonResponse({'error': validation['error']}, status=400)

        limit = get_setting('MAX_STEPS')
        max_steps = _bounded_int(data, 'max_steps', limit, limit)
        result = _build_pda(pda).run(input_string, max_steps)
        logger.info("PDA run on %r: %s", input_string, result.outcome.value)

        return JsonResponse(_step_response(result, input_string))

    except ValueError as e:
        return JsonResponse({'error': str(e)}, status=400)
    except Exception as e:
        logger.exception("simulate_pda failed")
        return JsonResponse({'error': f'Server error: {str(e)}'}, status=500)


@csrf_exempt
@require_POST
def simulate_tm(request):
    """
    Runs a Turing machine on the input.

    Expects a POST request with a JSON body containing:
    - tm: The TM definition
    - input: Initial tape contents
    - max_steps: Optional search budget
    """
    try:
        data = json.loads(request.body)
        tm = data.get('tm')
        input_string = data.get('input', '')

        if not tm:
            return JsonResponse({'error': 'Missing TM definition'}, status=400)

        validation = validate_tm_structure(tm)
        if not validation['valid']:
            return JsonResponse({'error': validation['error']}, status=400)

        limit = get_setting('MAX_STEPS')
        max_steps = _bounded_int(data, 'max_steps', limit, limit)
        result = _build_tm(tm).run(input_string, max_steps)
        logger.info("TM run on %r: %s", input_string, result.outcome.value)

        return JsonResponse(_step_response(result, input_string))

    except ValueError as e:
        return JsonResponse({'error': str(e)}, status=400)
    except Exception as e:
        logger.exception("simulate_tm failed")
        return JsonResponse({'error': f'Server error: {str(e)}'}, status=500)


@csrf_exempt
@require_POST
def check_fsa_type(request):
    """
    Django view to check if an FSA is deterministic or non-deterministic.
    """
    try:
        data = json.loads(request.body)
        fsa = data.get('fsa')

        if not fsa:
            return JsonResponse({'error': 'Missing FSA definition'}, status=400)

        validation = validate_fsa_structure(fsa)
        if not validation['valid']:
            return JsonResponse({'error': validation['error']}, status=400)

        is_nfa = not TransitionTable.from_fsa_dict(fsa).is_deterministic()

        return JsonResponse({
            'is_nondeterministic': is_nfa,
            'type': 'NFA' if is_nfa else 'DFA',
            'description': 'Non-deterministic Finite Automaton' if is_nfa else 'Deterministic Finite Automaton'
        })

    except ValueError as e:
        return JsonResponse({'error': str(e)}, status=400)
    except Exception as e:
        logger.exception("check_fsa_type failed")
        return JsonResponse({'error': f'Server error: {str(e)}'}, status=500)


@csrf_exempt
@require_POST
def parse_alphabet_view(request):
    """
    Parses an alphabet written as '(a,b,c)' into a list of symbols.
    """
    try:
        data = json.loads(request.body)
        return JsonResponse({'alphabet': parse_alphabet(data.get('alphabet', ''))})

    except ValueError as e:
        return JsonResponse({'error': str(e)}, status=400)
    except Exception as e:
        logger.exception("parse_alphabet_view failed")
        return JsonResponse({'error': f'Server error: {str(e)}'}, status=500)


@csrf_exempt
@require_POST
def export_automaton(request):
    """
    Converts an FSA definition to its text forms: the project format and
    'from,to,symbol' triples.
    """
    try:
        data = json.loads(request.body)
        fsa = data.get('fsa')

        if not fsa:
            return JsonResponse({'error': 'Missing FSA definition'}, status=400)

        validation = validate_fsa_structure(fsa)
        if not validation['valid']:
            return JsonResponse({'error': validation['error']}, status=400)

        table = TransitionTable.from_fsa_dict(fsa)
        return JsonResponse({
            'project': dump_automaton(table, fsa['alphabet'], fsa['states'],
                                      fsa['startingState'], fsa['acceptingStates']),
            'triples': format_transition_triples(table),
        })

    except ValueError as e:
        return JsonResponse({'error': str(e)}, status=400)
    except Exception as e:
        logger.exception("export_automaton failed")
        return JsonResponse({'error': f'Server error: {str(e)}'}, status=500)


@csrf_exempt
@require_POST
def import_automaton(request):
    """
    Reads the project text format back into an FSA definition.
    """
    try:
        data = json.loads(request.body)
        text = data.get('text')

        if not text:
            return JsonResponse({'error': 'Missing automaton text'}, status=400)

        return JsonResponse({'fsa': load_automaton(text)})

    except ValueError as e:
        return JsonResponse({'error': str(e)}, status=400)
    except Exception as e:
        logger.exception("import_automaton failed")
        return JsonResponse({'error': f'Server error: {str(e)}'}, status=500)
