"""
Infrastructure module: hosted backend access.

Provides:
- Async REST/storage client (backend.py)
"""

from shared.infrastructure.backend import BackendClient

__all__ = [
    "BackendClient",
]
