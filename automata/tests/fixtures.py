import unittest
from itertools import product

from automata.transition_table import TransitionTable


def all_strings(alphabet, max_length):
    for length in range(max_length + 1):
        for symbols in product(alphabet, repeat=length):
            yield ''.join(symbols)


def build_table(triples):
    table = TransitionTable()
    for from_state, symbol, to_state in triples:
        table.add_transition(from_state, symbol, to_state)
    return table


class AutomataFixtures(unittest.TestCase):
    def setUp(self):
        # Accepts only "ab"
        self.dfa = build_table([('q0', 'a', 'q1'), ('q1', 'b', 'q2')])
        self.dfa_final = {'q2'}

        # a+b
        self.nfa_triples = [('q0', 'a', 'q0'), ('q0', 'a', 'q1'), ('q1', 'b', 'q2')]
        self.nfa = build_table(self.nfa_triples)
        self.nfa_final = {'q2'}

        # Strings over {0, 1} ending in '1'
        self.cycle = build_table([('S', '0', 'S'), ('S', '1', 'A'), ('A', '0', 'S'), ('A', '1', 'A')])
        self.cycle_final = {'A'}

        # Accepts only the empty string
        self.empty = build_table([('q0', 'a', 'q1')])
        self.empty_final = {'q0'}
