"""
Use Cases Package - Application Layer

This package contains the application use cases that orchestrate
the domain objects to perform specific application tasks.
"""

from .dashboard_use_cases import (
    FETCHED_METRICS,
    GetTimeSliceUseCase,
    LoadDashboardUseCase,
)

__all__ = ["FETCHED_METRICS", "GetTimeSliceUseCase", "LoadDashboardUseCase"]
