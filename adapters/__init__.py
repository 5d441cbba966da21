"""
Adapters package - External service connections.
Object storage adapter for menu images.
"""

from adapters import s3_adapter

__all__ = [
    "s3_adapter",
]
