"""
Configuration classes for the Harmonic Inflow Solver.

This module contains all configuration-related classes:
- RotorConfig dataclass with blade/rotor geometry and validation
- InflowSolverConfig dataclass with uniform inflow iteration parameters
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional

import numpy as np

logger = logging.getLogger(__name__)


@dataclass
class RotorConfig:
    """
    Configuration dataclass for rotor and blade parameters.

    The configuration is validated at initialization time and shared
    read-only by every solver built on top of it.

    Parameters
    ----------
    lift_slope : float
        Blade lift-curve slope a0 [1/rad].
    radius : float
        Blade radius R [m].
    twist : float
        Blade linear twist rate θ_tw [rad].
    solidity : Optional[float]
        Rotor solidity s. When omitted it is derived from ``n_blades``
        and ``chord``.
    n_blades : Optional[int]
        Number of blades.
    chord : Optional[float]
        Blade chord [m].

    Raises
    ------
    ValueError
        If any parameter has an invalid value.
    """

    lift_slope: float = 5.7
    radius: float = 5.5
    twist: float = 0.0
    solidity: Optional[float] = None
    n_blades: Optional[int] = None
    chord: Optional[float] = None

    def __post_init__(self):
        """Validate all configuration parameters."""
        self._validate()

    def _validate(self):
        """Perform comprehensive validation of all parameters."""
        self._validate_geometry()
        self._validate_solidity()
        self._log_physics_warnings()

    def _validate_geometry(self):
        """Validate lift slope and radius."""
        if not np.isfinite(self.lift_slope) or self.lift_slope <= 0:
            raise ValueError(f"lift_slope must be positive, got {self.lift_slope}")

        if not np.isfinite(self.radius) or self.radius <= 0:
            raise ValueError(f"radius must be positive, got {self.radius}")

    def _validate_solidity(self):
        """Validate solidity or the blade geometry it is derived from."""
        if self.solidity is not None:
            if not np.isfinite(self.solidity) or self.solidity <= 0:
                raise ValueError(f"solidity must be positive, got {self.solidity}")
            return

        if self.n_blades is None or self.chord is None:
            raise ValueError("Either solidity or both n_blades and chord must be specified")
        if int(self.n_blades) != self.n_blades or self.n_blades < 1:
            raise ValueError(f"n_blades must be a positive integer, got {self.n_blades}")
        if not np.isfinite(self.chord) or self.chord <= 0:
            raise ValueError(f"chord must be positive, got {self.chord}")

    def _log_physics_warnings(self):
        """Log warnings for unusual rotor configurations."""
        if self.sigma > 0.2:
            logger.warning(
                "Rotor solidity %.3f is unusually high for a helicopter rotor. "
                "Momentum-theory inflow may be inaccurate.",
                self.sigma,
            )

    @property
    def sigma(self) -> float:
        """Effective rotor solidity s = Nb·c/(π·R)."""
        if self.solidity is not None:
            return float(self.solidity)
        return self.n_blades * self.chord / (np.pi * self.radius)

    @classmethod
    def from_dict(cls, params: Dict) -> "RotorConfig":
        """
        Create RotorConfig from a parameters dictionary.

        Parameters
        ----------
        params : Dict
            Dictionary containing rotor parameters.

        Returns
        -------
        RotorConfig
            Validated configuration object.
        """
        if not isinstance(params, dict):
            raise ValueError(f"Rotor parameters must be a mapping, got {type(params).__name__}")
        return cls(
            lift_slope=params.get("lift_slope", 5.7),
            radius=params.get("radius", 5.5),
            twist=params.get("twist", 0.0),
            solidity=params.get("solidity", None),
            n_blades=params.get("n_blades", None),
            chord=params.get("chord", None),
        )


@dataclass
class InflowSolverConfig:
    """
    Parameters of the uniform inflow fixed-point iteration.

    Parameters
    ----------
    relaxation : float
        Relaxation factor applied to the quasi-Newton correction.
    tolerance : float
        Convergence tolerance on the change between successive iterates.
    max_iterations : int
        Iteration cap after which the solve is reported as not converged.
    initial_inflow : float
        Seed for the uniform inflow when no previous inflow state is given.

    Raises
    ------
    ValueError
        If any parameter has an invalid value.
    """

    relaxation: float = 0.6
    tolerance: float = 0.001
    max_iterations: int = 10000
    initial_inflow: float = 0.05

    def __post_init__(self):
        """Validate all configuration parameters."""
        if not 0 < self.relaxation <= 1:
            raise ValueError(f"relaxation must be in (0, 1], got {self.relaxation}")

        if not np.isfinite(self.tolerance) or self.tolerance <= 0:
            raise ValueError(f"tolerance must be positive, got {self.tolerance}")

        if self.max_iterations <= 0:
            raise ValueError(f"max_iterations must be positive, got {self.max_iterations}")

        if not np.isfinite(self.initial_inflow):
            raise ValueError(f"initial_inflow must be finite, got {self.initial_inflow}")

    @classmethod
    def from_dict(cls, params: Dict) -> "InflowSolverConfig":
        """Create InflowSolverConfig from a parameters dictionary."""
        if not isinstance(params, dict):
            raise ValueError(f"Solver parameters must be a mapping, got {type(params).__name__}")
        return cls(
            relaxation=params.get("relaxation", 0.6),
            tolerance=params.get("tolerance", 0.001),
            max_iterations=params.get("max_iterations", 10000),
            initial_inflow=params.get("initial_inflow", 0.05),
        )
