"""
Wiki Racer - Core Library

Finds the shortest chain of links between two Wikipedia pages by
breadth-first search over pages fetched on demand.
"""

from .racer import WikiRacer
from .models import RaceResult
from .solver import FrontierSearch, FetchDispatcher, SearchMode

__all__ = ['WikiRacer', 'RaceResult', 'FrontierSearch', 'FetchDispatcher', 'SearchMode']
