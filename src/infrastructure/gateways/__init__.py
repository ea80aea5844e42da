"""
Gateways Package - Infrastructure Layer

This package contains gateway implementations for external services.
"""

from .feed_gateway import FeedFetchCoordinator

__all__ = ["FeedFetchCoordinator"]
