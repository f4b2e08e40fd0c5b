from .fsa_simulation import is_accepted, reached_states, simulate_deterministic_fsa
from .pda_simulation import PDAStep, PDATransition, PushdownAutomaton
from .search import SearchOutcome, SimulationResult, get_step_from_path
from .string_generation import generate_accepted, iter_accepted
from .tm_simulation import Move, Tape, TMStep, TMTransition, TuringMachine
from .transition_table import TransitionTable

__all__ = [
    'TransitionTable',
    'reached_states',
    'is_accepted',
    'simulate_deterministic_fsa',
    'generate_accepted',
    'iter_accepted',
    'PushdownAutomaton',
    'PDATransition',
    'PDAStep',
    'TuringMachine',
    'TMTransition',
    'TMStep',
    'Tape',
    'Move',
    'SearchOutcome',
    'SimulationResult',
    'get_step_from_path',
]
