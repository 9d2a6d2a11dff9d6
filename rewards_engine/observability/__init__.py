"""
Observability module for the rewards engine.

This module provides:
- Metrics collection with Prometheus
"""

__all__ = ["metrics"]
