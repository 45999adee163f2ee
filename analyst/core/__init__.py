"""
Core Utilities

Modules:
    - security: Bearer token verification
    - exceptions: Custom exceptions and HTTP helpers
"""

from analyst.core import security, exceptions

__all__ = ["security", "exceptions"]
