"""
================================================================================
Page Objects
================================================================================

Page Object Model implementations for the sites under test.

Each page class encapsulates:
    - Site URL (from configuration)
    - Element selectors
    - Page-specific actions and verifications

================================================================================
"""

from .google_search_page import GoogleSearchPage
from .mammoth_workwear_page import MammothWorkwearPage

__all__ = [
    "GoogleSearchPage",
    "MammothWorkwearPage",
]
