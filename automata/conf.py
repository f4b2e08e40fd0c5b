from django.conf import settings

DEFAULTS = {
    # Configurations a PDA/TM search may visit per request
    'MAX_STEPS': 100000,
    'CYCLE_LIMIT': 2,
    # Upper bound on max_length accepted by the generation endpoints
    'MAX_GENERATION_LENGTH': 12,
    # Upper bound on max_length when cycle_limit is None
    'MAX_UNBOUNDED_GENERATION_LENGTH': 8,
    'BLANK_SYMBOL': '_',
    'INITIAL_STACK': 'Z',
}


def get_setting(name: str):
    """
    Reads an option from the AUTOMATA dictionary in the Django settings,
    falling back to DEFAULTS.
    """
    overrides = getattr(settings, 'AUTOMATA', None) or {}
    if name in overrides:
        return overrides[name]
    return DEFAULTS[name]
