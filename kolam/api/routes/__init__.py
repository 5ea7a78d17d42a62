"""
API route modules.
"""

from kolam.api.routes import health, patterns

__all__ = ["health", "patterns"]
