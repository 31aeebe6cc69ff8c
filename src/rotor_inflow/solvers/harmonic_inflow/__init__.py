"""
Harmonic Inflow Solver for Helicopter Rotors.
==============================================

This module computes the induced inflow over a rotor disk: a uniform
component from momentum theory and first-harmonic longitudinal/lateral
components from disk tilt and body angular-rate coupling.

The module is organized into submodules for maintainability:

- **config**: Configuration dataclasses (RotorConfig, InflowSolverConfig)
- **states**: Immutable state snapshots (PitchState, BodyState, InflowState, ...)
- **transforms**: Body-to-hub frame transformations (HubTransforms)
- **inflow_model**: Main HarmonicInflowModel class
- **inflow_logger**: Inflow history CSV logging (InflowLogger)

Example Usage
-------------
Warm-started inflow over a simulation loop::

    from rotor_inflow.solvers.harmonic_inflow import HarmonicInflowModel, RotorConfig

    rotor = RotorConfig(lift_slope=5.7, radius=5.5, solidity=0.08)
    model = HarmonicInflowModel(rotor)

    inflow = None
    for pitch, flapping, forces, body in steps:
        inflow = model.compute_state(pitch, flapping, forces, body, Omega, inflow)
"""

from .config import InflowSolverConfig, RotorConfig
from .inflow_logger import InflowLogger
from .inflow_model import HarmonicInflowModel, nan_to_zero
from .states import (
    BladeForceState,
    BodyState,
    FlappingState,
    InflowSolution,
    InflowState,
    InflowStatus,
    PitchState,
    UniformInflowResult,
)
from .transforms import HubTransforms

__all__ = [
    # Main solver
    "HarmonicInflowModel",
    "nan_to_zero",
    # Configuration
    "RotorConfig",
    "InflowSolverConfig",
    # States
    "PitchState",
    "FlappingState",
    "BladeForceState",
    "BodyState",
    "InflowState",
    "InflowStatus",
    "UniformInflowResult",
    "InflowSolution",
    # Components
    "HubTransforms",
    "InflowLogger",
]
