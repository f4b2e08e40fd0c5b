import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent

DEBUG = os.environ.get('DJANGO_DEBUG', '0') == '1'

# Only local runs and the test suite may use the fallback key
SECRET_KEY = os.environ.get('DJANGO_SECRET_KEY', 'django-insecure-local-only')

ALLOWED_HOSTS = os.environ.get('DJANGO_ALLOWED_HOSTS', 'localhost,127.0.0.1,testserver').split(',')

INSTALLED_APPS = [
    'django.contrib.contenttypes',
    'django.contrib.staticfiles',
    'automata',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
]

ROOT_URLCONF = 'automata_site.urls'

WSGI_APPLICATION = 'automata_site.wsgi.application'

# The simulator keeps no state; the database only satisfies the test runner
DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': BASE_DIR / 'db.sqlite3',
    }
}

USE_TZ = True

STATIC_URL = 'static/'

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

AUTOMATA = {
    'MAX_STEPS': int(os.environ.get('AUTOMATA_MAX_STEPS', 100000)),
    'CYCLE_LIMIT': 2,
    'MAX_GENERATION_LENGTH': int(os.environ.get('AUTOMATA_MAX_GENERATION_LENGTH', 12)),
    'MAX_UNBOUNDED_GENERATION_LENGTH': int(os.environ.get('AUTOMATA_MAX_UNBOUNDED_GENERATION_LENGTH', 8)),
    'BLANK_SYMBOL': '_',
    'INITIAL_STACK': 'Z',
}

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'simple': {
            'format': '%(asctime)s %(levelname)s %(name)s: %(message)s',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'simple',
        },
    },
    'loggers': {
        'automata': {
            'handlers': ['console'],
            'level': os.environ.get('AUTOMATA_LOG_LEVEL', 'INFO'),
            'propagate': False,
        },
    },
}
