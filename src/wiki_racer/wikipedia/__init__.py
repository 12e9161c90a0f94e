"""
Wikipedia module for wiki_racer.

This module contains the live Wikipedia collaborators of the solver:
link extraction, endpoint validation and redirect handling.
"""

from .link_service import LinkService, extract_links
from .page_checker import PageChecker, is_orphan
from .redirects import RedirectResolver

__all__ = [
    'LinkService',
    'extract_links',
    'PageChecker',
    'is_orphan',
    'RedirectResolver',
]
