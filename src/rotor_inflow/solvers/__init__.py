from .harmonic_inflow import (
    BladeForceState,
    BodyState,
    FlappingState,
    HarmonicInflowModel,
    HubTransforms,
    InflowLogger,
    InflowSolution,
    InflowSolverConfig,
    InflowState,
    InflowStatus,
    PitchState,
    RotorConfig,
    UniformInflowResult,
)
