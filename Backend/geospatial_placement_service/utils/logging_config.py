"""
Logging Configuration for the placement service
Console logging with optional rotating log files
"""

import logging
import logging.config
import sys
from pathlib import Path
from typing import Optional

from .config import Settings, get_settings


def build_logging_config(settings: Settings) -> dict:
    """Build a dictConfig for the given settings"""
    handlers = {
        'console': {
            'level': settings.LOG_LEVEL,
            'class': 'logging.StreamHandler',
            'formatter': 'detailed',
            'stream': sys.stdout
        }
    }

    if settings.LOG_DIR:
        logs_dir = Path(settings.LOG_DIR)
        logs_dir.mkdir(parents=True, exist_ok=True)

        handlers['file'] = {
            'level': 'INFO',
            'class': 'logging.handlers.RotatingFileHandler',
            'formatter': 'detailed',
            'filename': str(logs_dir / 'geospatial_placement.log'),
            'maxBytes': 10 * 1024 * 1024,  # 10MB
            'backupCount': 5,
            'encoding': 'utf-8'
        }
        handlers['error_file'] = {
            'level': 'ERROR',
            'class': 'logging.handlers.RotatingFileHandler',
            'formatter': 'detailed',
            'filename': str(logs_dir / 'errors.log'),
            'maxBytes': 10 * 1024 * 1024,  # 10MB
            'backupCount': 3,
            'encoding': 'utf-8'
        }

    return {
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {
            'detailed': {
                'format': '[%(asctime)s] %(levelname)s [%(name)s:%(lineno)d] %(message)s',
                'datefmt': '%Y-%m-%d %H:%M:%S'
            }
        },
        'handlers': handlers,
        'loggers': {
            'geospatial_placement_service': {
                'level': settings.LOG_LEVEL,
                'handlers': list(handlers),
                'propagate': False
            }
        }
    }


def setup_logging(settings: Optional[Settings] = None):
    """Setup application logging configuration"""
    settings = settings or get_settings()

    logging.config.dictConfig(build_logging_config(settings))
    logging.getLogger('asyncio').setLevel(logging.WARNING)

    logger = logging.getLogger(__name__)
    logger.info(f"🚀 Placement logging initialized - Level: {settings.LOG_LEVEL}")
