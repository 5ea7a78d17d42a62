"""
Pattern catalogue: complete, ordered kolam designs.
"""

from kolam.patterns.models import Pattern
from kolam.patterns.assembler import (
    PATTERNS,
    build_pattern,
    get_pattern,
    list_patterns,
    pattern_count,
)

__all__ = [
    'Pattern',
    'PATTERNS',
    'build_pattern',
    'get_pattern',
    'list_patterns',
    'pattern_count',
]
