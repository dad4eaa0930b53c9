"""
Output generation module.
"""

from .writer import ResultWriter

__all__ = [
    'ResultWriter',
]
