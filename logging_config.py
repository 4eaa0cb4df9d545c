# logging_config.py
import logging.config

from config import LOG_LEVEL


def build_logging_config(level: str = LOG_LEVEL) -> dict:
    return {
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {
            'standard': {
                'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            },
        },
        'handlers': {
            'console': {
                'level': level,
                'class': 'logging.StreamHandler',
                'formatter': 'standard',
            },
        },
        'loggers': {
            # uvicorn installs its own handlers; route them through ours
            'uvicorn': {
                'handlers': ['console'],
                'level': level,
                'propagate': False,
            },
            'uvicorn.access': {
                'handlers': [],
                'level': 'WARNING',
                'propagate': False,
            },
            '': {
                'handlers': ['console'],
                'level': level,
                'propagate': True,
            },
        },
    }


def setup_logging(level: str = LOG_LEVEL):
    logging.config.dictConfig(build_logging_config(level))
