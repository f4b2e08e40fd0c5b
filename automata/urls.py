from django.urls import path
from . import views

urlpatterns = [
    # Finite automata
    path('api/validate-string/', views.validate_string, name='validate_string'),
    path('api/simulate-dfa/', views.simulate_dfa, name='simulate_dfa'),
    path('api/check-fsa-type/', views.check_fsa_type, name='check_fsa_type'),

    # Accepted string enumeration
    path('api/generate-strings/', views.generate_strings, name='generate_strings'),
    path('api/generate-strings-stream/', views.generate_strings_stream, name='generate_strings_stream'),

    # Step-through simulators
    path('api/simulate-pda/', views.simulate_pda, name='simulate_pda'),
    path('api/simulate-tm/', views.simulate_tm, name='simulate_tm'),

    # Alphabet and text formats
    path('api/parse-alphabet/', views.parse_alphabet_view, name='parse_alphabet'),
    path('api/export-automaton/', views.export_automaton, name='export_automaton'),
    path('api/import-automaton/', views.import_automaton, name='import_automaton'),
]
