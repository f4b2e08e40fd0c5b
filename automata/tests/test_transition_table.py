import unittest

from automata.transition_table import TransitionTable


class TestTransitionTable(unittest.TestCase):
    def test_absent_key_returns_empty_list(self):
        table = TransitionTable()
        self.assertEqual(table.get_next_states('q0', 'a'), [])

        table.add_transition('q0', 'a', 'q1')
        self.assertEqual(table.get_next_states('q0', 'b'), [])
        self.assertEqual(table.get_next_states('q1', 'a'), [])

    def test_repeated_calls_accumulate(self):
        table = TransitionTable()
        table.add_transition('q0', 'a', 'q0')
        table.add_transition('q0', 'a', 'q1')
        table.add_transition('q0', 'a', 'q1')

        # Insertion order and duplicates are kept
        self.assertEqual(table.get_next_states('q0', 'a'), ['q0', 'q1', 'q1'])
        self.assertEqual(len(table), 3)

    def test_returned_list_is_a_copy(self):
        table = TransitionTable()
        table.add_transition('q0', 'a', 'q1')

        next_states = table.get_next_states('q0', 'a')
        next_states.append('q2')
        self.assertEqual(table.get_next_states('q0', 'a'), ['q1'])

    def test_clear(self):
        table = TransitionTable()
        table.add_transition('q0', 'a', 'q1')
        table.add_transition('q1', 'b', 'q2')
        table.clear()

        self.assertEqual(len(table), 0)
        self.assertEqual(table.get_next_states('q0', 'a'), [])
        self.assertEqual(list(table.items()), [])

    def test_items_states_and_symbols(self):
        table = TransitionTable()
        table.add_transition('q0', 'a', 'q1')
        table.add_transition('q1', 'b', 'q2')

        self.assertEqual(list(table.items()), [('q0', 'a', 'q1'), ('q1', 'b', 'q2')])
        self.assertEqual(table.states(), {'q0', 'q1', 'q2'})
        self.assertEqual(table.symbols(), {'a', 'b'})
        self.assertIn(('q0', 'a'), table)
        self.assertNotIn(('q0', 'b'), table)

    def test_is_deterministic(self):
        table = TransitionTable()
        table.add_transition('q0', 'a', 'q1')
        table.add_transition('q1', 'b', 'q2')
        self.assertTrue(table.is_deterministic())

        table.add_transition('q0', 'a', 'q2')
        self.assertFalse(table.is_deterministic())

        epsilon_table = TransitionTable()
        epsilon_table.add_transition('q0', '', 'q1')
        self.assertFalse(epsilon_table.is_deterministic())

    def test_copy_is_independent(self):
        table = TransitionTable()
        table.add_transition('q0', 'a', 'q1')

        snapshot = table.copy()
        table.add_transition('q0', 'a', 'q2')

        self.assertEqual(snapshot.get_next_states('q0', 'a'), ['q1'])
        self.assertEqual(table.get_next_states('q0', 'a'), ['q1', 'q2'])

    def test_fsa_dict_conversion(self):
        fsa = {
            'states': ['S0', 'S1', 'S2'],
            'alphabet': ['a', 'b'],
            'transitions': {
                'S0': {'a': ['S0', 'S1'], 'b': ['S0']},
                'S1': {'b': ['S2']},
                'S2': {}
            },
            'startingState': 'S0',
            'acceptingStates': ['S2']
        }

        table = TransitionTable.from_fsa_dict(fsa)
        self.assertEqual(table.get_next_states('S0', 'a'), ['S0', 'S1'])
        self.assertEqual(table.get_next_states('S1', 'b'), ['S2'])
        self.assertEqual(table.to_fsa_dict(fsa['states']), fsa['transitions'])


if __name__ == '__main__':
    unittest.main()
