# -*- coding: utf-8 -*-
"""
AI suggestions (food analysis, exercise ideas, skincare and meal advice)
"""

from .service import SuggestionService

__all__ = [
    'SuggestionService',
]
