"""
Core module for rotor-inflow.

Provides the YAML run configuration.
"""

from .config import HubConfig, InflowSimulationConfig, OperatingPoint, OutputConfig

__all__ = [
    "InflowSimulationConfig",
    "HubConfig",
    "OperatingPoint",
    "OutputConfig",
]
