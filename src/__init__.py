"""
Source Code Root Module

This module serves as the root for the source code of the application.

Layer Structure:
- Domain: Time-series entities, feed contracts and pure computations
- Application: Use cases and DTOs
- Infrastructure: HTTP feed gateway and wire-format parsers
- Shared: Cross-cutting concerns and shared utilities
- Main: Composition root, command-line entry point and configuration
"""
