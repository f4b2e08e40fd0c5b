from django.test import SimpleTestCase

from automata.fsa_simulation import is_accepted
from automata.serialization import (
    dump_automaton,
    format_alphabet,
    format_state_list,
    format_transition_triples,
    load_automaton,
    parse_transition_triples,
)
from automata.transition_table import TransitionTable


class TestTransitionTriples(SimpleTestCase):
    def test_parse(self):
        table = parse_transition_triples(
            "# a+b\n"
            "q0,q0,a\n"
            "q0,q1,a\n"
            "\n"
            "q1, q2, b\n"
        )
        self.assertEqual(table.get_next_states('q0', 'a'), ['q0', 'q1'])
        self.assertEqual(table.get_next_states('q1', 'b'), ['q2'])
        self.assertTrue(is_accepted(table, 'q0', {'q2'}, 'aab'))

    def test_parse_epsilon_marker(self):
        table = parse_transition_triples("q0,q1,ε\n")
        self.assertEqual(table.get_next_states('q0', ''), ['q1'])

    def test_parse_into_existing_table(self):
        table = TransitionTable()
        table.add_transition('q0', 'a', 'q1')
        parse_transition_triples("q0,q2,a", table)
        self.assertEqual(table.get_next_states('q0', 'a'), ['q1', 'q2'])

    def test_malformed_line(self):
        with self.assertRaisesMessage(ValueError, 'Line 2'):
            parse_transition_triples("q0,q1,a\nq1,b\n")

    def test_format(self):
        table = TransitionTable()
        table.add_transition('q0', 'a', 'q1')
        table.add_transition('q1', '', 'q2')
        self.assertEqual(format_transition_triples(table), "q0,q1,a\nq1,q2,ε\n")

    def test_lists(self):
        self.assertEqual(format_alphabet(['a', 'b']), '(a,b)')
        self.assertEqual(format_state_list(['q0']), '(q0)')


class TestProjectFormat(SimpleTestCase):
    def setUp(self):
        self.table = TransitionTable()
        self.table.add_transition('q0', 'a', 'q1')
        self.table.add_transition('q1', 'b', 'q2')
        self.table.add_transition('q0', 'b', 'q0')

    def test_dump(self):
        text = dump_automaton(self.table, ['a', 'b'], ['q0', 'q1', 'q2'], 'q0', {'q2'})
        self.assertEqual(text, (
            "# Automaton project\n"
            "alphabet: (a,b)\n"
            "states: (q0,q1,q2)\n"
            "initial: q0\n"
            "finals: (q2)\n"
            "transitions:\n"
            "q0,a->q1\n"
            "q0,b->q0\n"
            "q1,b->q2\n"
        ))

    def test_load(self):
        text = dump_automaton(self.table, ['a', 'b'], ['q0', 'q1', 'q2'], 'q0', {'q2'})
        fsa = load_automaton(text)

        self.assertEqual(fsa['alphabet'], ['a', 'b'])
        self.assertEqual(fsa['states'], ['q0', 'q1', 'q2'])
        self.assertEqual(fsa['startingState'], 'q0')
        self.assertEqual(fsa['acceptingStates'], ['q2'])
        self.assertEqual(fsa['transitions'], {
            'q0': {'a': ['q1'], 'b': ['q0']},
            'q1': {'b': ['q2']},
            'q2': {},
        })

    def test_load_errors(self):
        with self.assertRaisesMessage(ValueError, 'Missing alphabet'):
            load_automaton("initial: q0\n")
        with self.assertRaisesMessage(ValueError, 'Missing initial state'):
            load_automaton("alphabet: (a)\n")
        with self.assertRaisesMessage(ValueError, "unknown entry 'colour'"):
            load_automaton("colour: red\n")
        with self.assertRaisesMessage(ValueError, 'Line 4'):
            load_automaton("alphabet: (a)\ninitial: q0\ntransitions:\nq0 a q1\n")

    def test_dump_lists_states_and_symbols_that_are_not_declared(self):
        self.table.add_transition('q2', 'c', 'q0')
        text = dump_automaton(self.table, [], [], 'q0', {'q2'})

        self.assertTrue(text.endswith(
            "transitions:\n"
            "q0,a->q1\n"
            "q0,b->q0\n"
            "q1,b->q2\n"
            "q2,c->q0\n"
        ))

    def test_load_keeps_transitions_without_state_list(self):
        text = dump_automaton(self.table, ['a', 'b'], [], 'q0', {'q2'})
        fsa = load_automaton(text)

        self.assertEqual(fsa['states'], [])
        self.assertEqual(fsa['transitions']['q0'], {'a': ['q1'], 'b': ['q0']})
        self.assertEqual(fsa['transitions']['q1'], {'b': ['q2']})
