"""
Infrastructure Layer Package

This package contains implementations of interfaces defined in the
domain layer, dealing with external concerns such as HTTP feeds and
their wire formats.
"""

from src.infrastructure import gateways, parsers

__all__ = ["gateways", "parsers"]
