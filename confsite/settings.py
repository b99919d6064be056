# Django settings for the conference programme project.
import os
import os.path

DEBUG = os.environ.get('DEBUG', '') == '1'

PROJECT_DIR = os.environ.get('PROJECT_DIR', os.path.normpath(os.path.join(os.path.dirname(__file__), '..')))
DATA_DIR = os.environ.get('DATA_DIR', os.path.join(PROJECT_DIR, 'data'))

SECRET_KEY = os.environ.get('SECRET_KEY', '')

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': os.path.join(DATA_DIR, 'programme.db'),
    }
}

INSTALLED_APPS = [
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'programme.apps.ProgrammeConfig',
]

DEFAULT_AUTO_FIELD = 'django.db.models.AutoField'

# Local time zone of the installation; conferences default to it.
TIME_ZONE = 'Europe/Berlin'
USE_TZ = True

LANGUAGE_CODE = 'en-us'
USE_I18N = True

MEDIA_ROOT = os.path.join(DATA_DIR, 'media')
MEDIA_URL = '/media/'

CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
        'LOCATION': 'programme',
    }
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
            'level': 'DEBUG',
            'class': 'logging.StreamHandler',
            'formatter': 'simple',
        },
    },
    'loggers': {
        'programme': {
            'handlers': ['console'],
            'level': os.environ.get('PROGRAMME_LOG_LEVEL', 'INFO'),
            'propagate': True,
        },
    },
}

PROGRAMME_DEFAULT_LOCALE = 'en'
PROGRAMME_CALENDAR_HOST = os.environ.get('PROGRAMME_CALENDAR_HOST', '')

if not SECRET_KEY:
    if not DEBUG:
        raise RuntimeError('SECRET_KEY not set')
    else:
        import warnings
        warnings.warn('SECRET_KEY not set')
