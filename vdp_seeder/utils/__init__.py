"""
Utility modules for the seeder.
"""

from .logger import SeederLogger, get_logger, init_logger
from .patterns import *
from .validators import URLValidator

__all__ = [
    'SeederLogger',
    'get_logger',
    'init_logger',
    'URLValidator',
]
