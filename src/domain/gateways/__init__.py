"""
Gateways Package - Domain Layer

This package contains interfaces defining gateway contracts
for external service communications. Specific implementations
are provided by the infrastructure layer.
"""

from .feed_gateway import FetchCallback, IFeedGateway

__all__ = ["FetchCallback", "IFeedGateway"]
