"""
Inflow Run Configuration Module.

This module provides a YAML-based configuration system for inflow runs,
allowing users to evaluate the inflow model over a sequence of operating
points without writing Python code.

Example YAML configuration:
    rotor:
      lift_slope: 5.7
      radius: 5.5
      solidity: 0.08

    solver:
      relaxation: 0.6
      tolerance: 0.001

    omega: 27.0

    steps:
      - time: 0.0
        C_T: 0.006
        velocity: [29.7, 0.0, 0.0]
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from ..solvers.harmonic_inflow.config import InflowSolverConfig, RotorConfig
from ..solvers.harmonic_inflow.states import BladeForceState, BodyState, FlappingState, PitchState
from ..solvers.harmonic_inflow.transforms import HubTransforms

logger = logging.getLogger(__name__)


@dataclass
class HubConfig:
    """Rotor shaft orientation relative to body axes [rad]."""

    shaft_tilt_lon: float = 0.0
    shaft_tilt_lat: float = 0.0

    def get_transforms(self) -> HubTransforms:
        """Get the body-to-hub transformation for this shaft."""
        return HubTransforms(self.shaft_tilt_lon, self.shaft_tilt_lat)


@dataclass
class OperatingPoint:
    """Inputs of one simulation step.

    Velocities are body-axis [u, v, w] in m/s, angular velocities
    [p, q, r] in rad/s and all angles in radians.
    """

    time: float = 0.0
    C_T: float = 0.0
    velocity: List[float] = field(default_factory=lambda: [0.0, 0.0, 0.0])
    angular_velocity: List[float] = field(default_factory=lambda: [0.0, 0.0, 0.0])
    pitch: Dict[str, float] = field(default_factory=dict)
    flapping: Dict[str, float] = field(default_factory=dict)

    def __post_init__(self):
        if len(self.velocity) != 3:
            raise ValueError(f"velocity must have 3 components, got {len(self.velocity)}")
        if len(self.angular_velocity) != 3:
            raise ValueError(
                f"angular_velocity must have 3 components, got {len(self.angular_velocity)}"
            )
        unknown = set(self.pitch) - {"theta_0", "theta_1c", "theta_1s"}
        if unknown:
            raise ValueError(f"Unknown pitch components: {sorted(unknown)}")
        unknown = set(self.flapping) - {"beta_0", "beta_1c", "beta_1s"}
        if unknown:
            raise ValueError(f"Unknown flapping components: {sorted(unknown)}")

    def pitch_state(self) -> PitchState:
        return PitchState(**{k: float(v) for k, v in self.pitch.items()})

    def flapping_state(self) -> FlappingState:
        return FlappingState(**{k: float(v) for k, v in self.flapping.items()})

    def force_state(self) -> BladeForceState:
        return BladeForceState(C_T=float(self.C_T))

    def body_state(self, transforms: HubTransforms) -> BodyState:
        return BodyState(
            velocity=self.velocity,
            angular_velocity=self.angular_velocity,
            transforms=transforms,
        )


@dataclass
class OutputConfig:
    """Output configuration."""

    log_file: Optional[str] = None
    separator: str = ","


@dataclass
class InflowSimulationConfig:
    """Complete inflow run configuration."""

    rotor: RotorConfig
    omega: float
    steps: List[OperatingPoint]
    solver: InflowSolverConfig = field(default_factory=InflowSolverConfig)
    hub: HubConfig = field(default_factory=HubConfig)
    output: OutputConfig = field(default_factory=OutputConfig)

    def __post_init__(self):
        if self.omega <= 0:
            raise ValueError(f"omega must be positive, got {self.omega}")

    @classmethod
    def from_yaml(cls, yaml_path: Union[str, Path]) -> "InflowSimulationConfig":
        """Load configuration from YAML file.

        Parameters
        ----------
        yaml_path : str or Path
            Path to the YAML configuration file.

        Returns
        -------
        InflowSimulationConfig
            Validated configuration object.

        Raises
        ------
        FileNotFoundError
            If the YAML file does not exist.
        ValueError
            If the configuration is invalid.
        """
        yaml_path = Path(yaml_path)
        if not yaml_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {yaml_path}")

        with open(yaml_path, "r") as f:
            data = yaml.safe_load(f)

        if not isinstance(data, dict):
            raise ValueError(f"Configuration file must contain a mapping: {yaml_path}")

        return cls.from_dict(data, base_path=yaml_path.parent)

    @classmethod
    def from_dict(
        cls, data: Dict[str, Any], base_path: Optional[Path] = None
    ) -> "InflowSimulationConfig":
        """Create configuration from dictionary.

        Parameters
        ----------
        data : dict
            Configuration dictionary.
        base_path : Path, optional
            Base path for resolving relative file paths.

        Returns
        -------
        InflowSimulationConfig
            Validated configuration object.
        """
        if "rotor" not in data:
            raise ValueError("Configuration requires a 'rotor' section")
        if "omega" not in data:
            raise ValueError("Configuration requires the rotor speed 'omega' [rad/s]")
        for name in ("rotor", "solver", "hub", "output"):
            section = data.get(name)
            if section is not None and not isinstance(section, dict):
                raise ValueError(f"'{name}' section must be a mapping, got {type(section).__name__}")
        if data["rotor"] is None:
            raise ValueError("'rotor' section must be a mapping, got NoneType")
        if not isinstance(data.get("steps") or [], list):
            raise ValueError("'steps' must be a list of operating points")

        rotor_config = RotorConfig.from_dict(data["rotor"])
        solver_config = InflowSolverConfig.from_dict(data.get("solver") or {})

        hub_data = data.get("hub") or {}
        hub_config = HubConfig(
            shaft_tilt_lon=hub_data.get("shaft_tilt_lon", 0.0),
            shaft_tilt_lat=hub_data.get("shaft_tilt_lat", 0.0),
        )

        steps = []
        for i, step in enumerate(data.get("steps") or []):
            if not isinstance(step, dict):
                raise ValueError(f"Step {i} must be a mapping, got {type(step).__name__}")
            steps.append(
                OperatingPoint(
                    time=step.get("time", float(i)),
                    C_T=step.get("C_T", 0.0),
                    velocity=step.get("velocity", [0.0, 0.0, 0.0]),
                    angular_velocity=step.get("angular_velocity", [0.0, 0.0, 0.0]),
                    pitch=step.get("pitch") or {},
                    flapping=step.get("flapping") or {},
                )
            )

        output_data = data.get("output") or {}
        log_file = output_data.get("log_file")
        # Resolve relative paths
        if base_path and log_file and not Path(log_file).is_absolute():
            log_file = str(base_path / log_file)
        output_config = OutputConfig(
            log_file=log_file,
            separator=output_data.get("separator", ","),
        )

        return cls(
            rotor=rotor_config,
            omega=float(data["omega"]),
            steps=steps,
            solver=solver_config,
            hub=hub_config,
            output=output_config,
        )

    def validate(self) -> List[str]:
        """Validate the complete configuration.

        Returns
        -------
        list of str
            List of validation warnings (empty if all OK).
        """
        warnings = []

        if not self.steps:
            warnings.append("No operating points defined in 'steps'")

        times = [step.time for step in self.steps]
        if any(t1 < t0 for t0, t1 in zip(times, times[1:])):
            warnings.append("Step times are not monotonically increasing")

        for i, step in enumerate(self.steps):
            if step.C_T < 0:
                warnings.append(f"Step {i} has negative thrust coefficient C_T={step.C_T}")

        return warnings

    def __str__(self) -> str:
        """Human-readable string representation."""
        lines = [
            "Inflow Run Configuration",
            "=" * 40,
            f"Rotor: a0={self.rotor.lift_slope}, s={self.rotor.sigma:.4f}, R={self.rotor.radius} m",
            f"  Twist: {self.rotor.twist} rad",
            f"Rotor speed: {self.omega} rad/s",
            f"Shaft tilt: lon={self.hub.shaft_tilt_lon} rad, lat={self.hub.shaft_tilt_lat} rad",
            f"Solver: relaxation={self.solver.relaxation}, tolerance={self.solver.tolerance}, "
            f"max_iterations={self.solver.max_iterations}",
            f"Operating points: {len(self.steps)}",
        ]
        if self.output.log_file:
            lines.append(f"Log file: {self.output.log_file}")
        return "\n".join(lines)
