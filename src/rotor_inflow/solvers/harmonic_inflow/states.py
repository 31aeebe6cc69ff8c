"""
State snapshots exchanged with the Harmonic Inflow Solver.

Every state is an immutable value for one simulation instant. Input
states are produced by the owning simulation; the inflow state is
created fresh by the solver on every call.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Tuple

import numpy as np

from .transforms import HubTransforms


@dataclass(frozen=True)
class PitchState:
    """
    Blade feathering angles [rad].

    Attributes
    ----------
    theta_0 : float
        Collective pitch.
    theta_1c : float
        First-harmonic (cosine) cyclic pitch.
    theta_1s : float
        First-harmonic (sine) cyclic pitch.
    """

    theta_0: float = 0.0
    theta_1c: float = 0.0
    theta_1s: float = 0.0


@dataclass(frozen=True)
class FlappingState:
    """
    Blade flap angles [rad].

    Attributes
    ----------
    beta_0 : float
        Coning angle.
    beta_1c : float
        Longitudinal (cosine) flapping.
    beta_1s : float
        Lateral (sine) flapping.
    """

    beta_0: float = 0.0
    beta_1c: float = 0.0
    beta_1s: float = 0.0


@dataclass(frozen=True)
class BladeForceState:
    """Aerodynamic force state of the current step."""

    C_T: float = 0.0


@dataclass(frozen=True, eq=False)
class BodyState:
    """
    Body motion resolved for the rotor.

    Parameters
    ----------
    velocity : np.ndarray
        Body-axis velocity [u, v, w] relative to the air [m/s].
    angular_velocity : np.ndarray
        Body-axis angular rates [p, q, r] [rad/s].
    transforms : HubTransforms
        Body-to-hub transformation of the rotor shaft.

    Notes
    -----
    All derived quantities are pure accessors; nothing is cached between
    calls so a snapshot can be shared freely.
    """

    velocity: np.ndarray = field(default_factory=lambda: np.zeros(3))
    angular_velocity: np.ndarray = field(default_factory=lambda: np.zeros(3))
    transforms: HubTransforms = field(default_factory=HubTransforms)

    def __post_init__(self):
        velocity = np.array(self.velocity, dtype=np.float64)
        angular_velocity = np.array(self.angular_velocity, dtype=np.float64)
        if velocity.shape != (3,):
            raise ValueError(f"velocity must have 3 components, got shape {velocity.shape}")
        if angular_velocity.shape != (3,):
            raise ValueError(
                f"angular_velocity must have 3 components, got shape {angular_velocity.shape}"
            )
        velocity.flags.writeable = False
        angular_velocity.flags.writeable = False
        object.__setattr__(self, "velocity", velocity)
        object.__setattr__(self, "angular_velocity", angular_velocity)

    def velocity_hub(self) -> np.ndarray:
        """Velocity [u_H, v_H, w_H] in hub axes [m/s]."""
        return self.transforms.to_hub(self.velocity)

    def omega_hub(self) -> np.ndarray:
        """Angular rates [p_H, q_H, r_H] in hub axes [rad/s]."""
        return self.transforms.to_hub(self.angular_velocity)

    def mu(self, Omega: float, R: float) -> float:
        """
        In-plane advance ratio.

            μ = √(u_H² + v_H²) / (Ω·R)
        """
        u_h, v_h, _ = self.velocity_hub()
        return np.hypot(u_h, v_h) / (Omega * R)

    def mu_z(self, Omega: float, R: float) -> float:
        """
        Normal advance ratio μz = w_H / (Ω·R).

        Hub z points down through the disk, so climb gives μz < 0.
        """
        return self.velocity_hub()[2] / (Omega * R)

    def psi_w(self) -> float:
        """Wind-relative azimuth of the in-plane velocity [rad]."""
        u_h, v_h, _ = self.velocity_hub()
        return np.arctan2(v_h, u_h)

    def omega_bar_hub(self, Omega: float) -> np.ndarray:
        """Hub-axis angular rates normalized by rotor speed [p̄, q̄, r̄]."""
        return self.omega_hub() / Omega


@dataclass(frozen=True)
class InflowState:
    """
    Induced inflow over the rotor disk, normalized by tip speed.

    Attributes
    ----------
    lambda_0 : float
        Uniform (disk-averaged) inflow ratio.
    lambda_1c : float
        First-harmonic cosine (longitudinal) inflow.
    lambda_1s : float
        First-harmonic sine (lateral) inflow.
    """

    lambda_0: float = 0.0
    lambda_1c: float = 0.0
    lambda_1s: float = 0.0

    def as_tuple(self) -> Tuple[float, float, float]:
        return (self.lambda_0, self.lambda_1c, self.lambda_1s)


class InflowStatus(Enum):
    """
    Outcome of the uniform inflow iteration.

    Attributes
    ----------
    CONVERGED : str
        Successive iterates agree within tolerance.
    MAX_ITERATIONS : str
        Iteration cap reached before convergence.
    NON_FINITE : str
        An iterate became NaN or infinite.
    """

    CONVERGED = "converged"
    MAX_ITERATIONS = "max_iterations"
    NON_FINITE = "non_finite"


@dataclass(frozen=True)
class UniformInflowResult:
    """Uniform inflow ratio tagged with how the iteration ended."""

    lambda_0: float
    iterations: int
    status: InflowStatus

    @property
    def converged(self) -> bool:
        return self.status is InflowStatus.CONVERGED


@dataclass(frozen=True)
class InflowSolution:
    """
    Sanitized inflow state together with the raw uniform solve.

    Attributes
    ----------
    state : InflowState
        Output handed to the blade-element force calculation.
    uniform : UniformInflowResult
        Unsanitized uniform inflow solve, for diagnosing degenerate steps.
    """

    state: InflowState
    uniform: UniformInflowResult

    @property
    def converged(self) -> bool:
        return self.uniform.converged
