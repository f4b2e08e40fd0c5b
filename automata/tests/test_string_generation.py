import unittest

from automata.fsa_simulation import is_accepted
from automata.string_generation import generate_accepted, generate_accepted_dfs, iter_accepted
from automata.tests.fixtures import AutomataFixtures, all_strings, build_table


class TestGenerateAcceptedUnbounded(AutomataFixtures):
    def test_dfa(self):
        self.assertEqual(generate_accepted(self.dfa, 'q0', self.dfa_final, ['a', 'b'], 3, cycle_limit=None),
                         ['ab'])

    def test_nfa(self):
        result = generate_accepted(self.nfa, 'q0', self.nfa_final, ['a', 'b'], 4, cycle_limit=None)
        self.assertEqual(result, ['ab', 'aab', 'aaab'])

    def test_cycle(self):
        result = generate_accepted(self.cycle, 'S', self.cycle_final, ['0', '1'], 3, cycle_limit=None)
        self.assertEqual(sorted(result), sorted(['1', '01', '11', '001', '011', '101', '111']))

    def test_breadth_first_order(self):
        result = generate_accepted(self.cycle, 'S', self.cycle_final, ['0', '1'], 3, cycle_limit=None)
        self.assertEqual([len(string) for string in result], sorted(len(string) for string in result))

    def test_empty_string_first_when_initial_is_final(self):
        self.assertEqual(generate_accepted(self.empty, 'q0', self.empty_final, ['a'], 2, cycle_limit=None), [''])

        table = build_table([('q0', 'a', 'q0')])
        self.assertEqual(generate_accepted(table, 'q0', {'q0'}, ['a'], 3, cycle_limit=None),
                         ['', 'a', 'aa', 'aaa'])

    def test_no_accepted_strings(self):
        self.assertEqual(generate_accepted(self.dfa, 'q0', {'q_unreachable'}, ['a', 'b'], 5, cycle_limit=None), [])

    def test_length_bounds(self):
        self.assertEqual(generate_accepted(self.empty, 'q0', self.empty_final, ['a'], 0), [''])
        self.assertEqual(generate_accepted(self.dfa, 'q0', self.dfa_final, ['a', 'b'], 0), [])
        self.assertEqual(generate_accepted(self.empty, 'q0', self.empty_final, ['a'], -1), [])

    def test_one_entry_per_accepting_path(self):
        # Two distinct paths accept "a"
        table = build_table([('q0', 'a', 'q1'), ('q0', 'a', 'q2')])
        self.assertEqual(generate_accepted(table, 'q0', {'q1', 'q2'}, ['a'], 1), ['a', 'a'])
        self.assertEqual(generate_accepted(table, 'q0', {'q1', 'q2'}, ['a'], 1, unique=True), ['a'])

    def test_iter_accepted_is_lazy(self):
        table = build_table([('q0', 'a', 'q0')])
        strings = iter_accepted(table, 'q0', {'q0'}, ['a'], 1000, cycle_limit=None)
        self.assertEqual([next(strings) for _ in range(3)], ['', 'a', 'aa'])


class TestGenerateAcceptedCycleLimited(AutomataFixtures):
    def test_dfa_same_as_unbounded(self):
        self.assertEqual(generate_accepted(self.dfa, 'q0', self.dfa_final, ['a', 'b'], 3, cycle_limit=2), ['ab'])

    def test_cycle_limit_two(self):
        # A state may appear at most twice on one path
        result = generate_accepted(self.cycle, 'S', self.cycle_final, ['0', '1'], 4, cycle_limit=2)
        self.assertEqual(result, ['1', '01', '11', '011', '101'])

    def test_cycle_limit_one(self):
        # No state may be revisited
        result = generate_accepted(self.cycle, 'S', self.cycle_final, ['0', '1'], 4, cycle_limit=1)
        self.assertEqual(result, ['1'])

    def test_default_limit_is_two(self):
        self.assertEqual(generate_accepted(self.cycle, 'S', self.cycle_final, ['0', '1'], 4),
                         generate_accepted(self.cycle, 'S', self.cycle_final, ['0', '1'], 4, cycle_limit=2))

    def test_misses_strings_needing_more_visits(self):
        # "aaab" has to visit q0 three times
        limited = generate_accepted(self.nfa, 'q0', self.nfa_final, ['a', 'b'], 4, cycle_limit=2)
        self.assertEqual(limited, ['ab', 'aab'])
        self.assertTrue(is_accepted(self.nfa, 'q0', self.nfa_final, 'aaab'))

    def test_limit_one_yields_no_more_than_limit_two(self):
        automata = [
            (self.dfa, 'q0', self.dfa_final, ['a', 'b']),
            (self.nfa, 'q0', self.nfa_final, ['a', 'b']),
            (self.cycle, 'S', self.cycle_final, ['0', '1']),
            (self.empty, 'q0', self.empty_final, ['a']),
        ]
        for table, initial, finals, alphabet in automata:
            for max_length in range(6):
                one = generate_accepted(table, initial, finals, alphabet, max_length, cycle_limit=1)
                two = generate_accepted(table, initial, finals, alphabet, max_length, cycle_limit=2)
                self.assertLessEqual(len(one), len(two))
                self.assertTrue(set(one) <= set(two))


class TestGenerationRoundTrip(AutomataFixtures):
    def test_every_accepted_string_is_generated(self):
        automata = [
            (self.dfa, 'q0', self.dfa_final, ['a', 'b']),
            (self.nfa, 'q0', self.nfa_final, ['a', 'b']),
            (self.cycle, 'S', self.cycle_final, ['0', '1']),
            (self.empty, 'q0', self.empty_final, ['a']),
        ]
        max_length = 5
        for table, initial, finals, alphabet in automata:
            generated = set(generate_accepted(table, initial, finals, alphabet, max_length, cycle_limit=None))
            for string in all_strings(alphabet, max_length):
                self.assertEqual(string in generated, is_accepted(table, initial, finals, string), string)


class TestGenerateAcceptedDfs(AutomataFixtures):
    def test_matches_unbounded_on_small_lengths(self):
        self.assertEqual(generate_accepted_dfs(self.cycle, 'S', self.cycle_final, ['0', '1'], 3),
                         {'1', '01', '11', '001', '011', '101', '111'})
        self.assertEqual(generate_accepted_dfs(self.empty, 'q0', self.empty_final, ['a'], 2), {''})

    def test_repetition_bound(self):
        # (q0, 'a') is taken once per 'a'
        self.assertEqual(generate_accepted_dfs(self.nfa, 'q0', self.nfa_final, ['a', 'b'], 6, max_repetitions=3),
                         {'ab', 'aab', 'aaab'})


if __name__ == '__main__':
    unittest.main()
