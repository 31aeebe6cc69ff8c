"""
Harmonic (Glauert-type) inflow model for a helicopter rotor disk.

This module provides calculations for:
- Uniform inflow from the momentum-theory balance (damped quasi-Newton iteration)
- First-harmonic longitudinal/lateral inflow in closed form
- Assembly of the inflow state with NaN sanitation
"""

import logging
from typing import Optional, Tuple

import numpy as np

from .config import InflowSolverConfig, RotorConfig
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

logger = logging.getLogger(__name__)


def nan_to_zero(value: float) -> float:
    """
    Replace NaN with 0.0.

    Infinite values are returned unchanged.
    """
    if np.isnan(value):
        return 0.0
    return float(value)


class HarmonicInflowModel:
    """
    Induced inflow solver for a rotor disk.

    The solver is stateless between calls: the only shared data is the
    rotor configuration, which is referenced but never modified. Warm
    starting across simulation steps is done by passing the previous
    `InflowState` back in.

    Parameters
    ----------
    rotor : RotorConfig
        Rotor and blade configuration.
    solver_config : Optional[InflowSolverConfig]
        Uniform inflow iteration parameters. Defaults are used when omitted.

    Example
    -------
    ::

        model = HarmonicInflowModel(RotorConfig(lift_slope=5.7, radius=5.5, solidity=0.08))

        inflow = None
        for step in simulation:
            inflow = model.compute_state(pitch, flapping, forces, body, Omega, inflow)
    """

    def __init__(
        self,
        rotor: RotorConfig,
        solver_config: Optional[InflowSolverConfig] = None,
    ):
        self.rotor = rotor
        self.solver_config = solver_config if solver_config is not None else InflowSolverConfig()

    def compute_uniform_inflow(
        self,
        lambda_seed: float,
        C_T: float,
        mu: float,
        mu_z: float,
    ) -> UniformInflowResult:
        """
        Solve the momentum-theory balance for the uniform inflow ratio.

        Solves

            2·λ0·√(μ² + (λ0 - μz)²) = C_T

        with the relaxed quasi-Newton update

            Λ = μ² + (λ - μz)²
            h = -[(2·λ·√Λ - C_T)·Λ] / [2·Λ^1.5 + (a0·s/4)·Λ - C_T·(μz - λ)]
            λ ← λ + f·h

        Parameters
        ----------
        lambda_seed : float
            Starting guess, normally the previous step's uniform inflow.
        C_T : float
            Thrust coefficient.
        mu : float
            In-plane advance ratio.
        mu_z : float
            Normal advance ratio.

        Returns
        -------
        UniformInflowResult
            Last iterate, number of iterations and termination status.

        Notes
        -----
        No guard is placed on Λ or the denominator. Degenerate inputs
        (e.g. hover with zero thrust and a zero seed) produce NaN, which is
        reported as ``InflowStatus.NON_FINITE`` instead of raising.
        """
        f = self.solver_config.relaxation
        tol = self.solver_config.tolerance
        max_iterations = self.solver_config.max_iterations

        a0 = np.float64(self.rotor.lift_slope)
        s = np.float64(self.rotor.sigma)
        C_T = np.float64(C_T)
        mu = np.float64(mu)
        mu_z = np.float64(mu_z)

        lmd = np.float64(lambda_seed)
        status = InflowStatus.MAX_ITERATIONS
        iterations = 0

        with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
            while iterations < max_iterations:
                Lambda = mu**2 + (lmd - mu_z) ** 2
                h = -((2 * lmd * np.sqrt(Lambda) - C_T) * Lambda) / (
                    2 * Lambda**1.5 + a0 * s / 4.0 * Lambda - C_T * (mu_z - lmd)
                )
                lmd_next = lmd + f * h
                iterations += 1

                step = np.abs(lmd_next - lmd)
                lmd = lmd_next

                if not np.isfinite(lmd):
                    status = InflowStatus.NON_FINITE
                    break
                if step <= tol:
                    status = InflowStatus.CONVERGED
                    break

        if status is not InflowStatus.CONVERGED:
            logger.warning(
                "Uniform inflow did not converge (%s after %d iterations): "
                "C_T=%.4e, mu=%.4f, mu_z=%.4f, lambda=%s",
                status.value,
                iterations,
                C_T,
                mu,
                mu_z,
                lmd,
            )
        else:
            logger.debug("Uniform inflow converged in %d iterations: lambda_0=%.6f", iterations, lmd)

        return UniformInflowResult(lambda_0=float(lmd), iterations=iterations, status=status)

    def compute_harmonics_inflow(
        self,
        pitch: PitchState,
        flapping: FlappingState,
        body: BodyState,
        Omega: float,
        lambda_0: float,
    ) -> Tuple[float, float]:
        """
        Compute the first-harmonic inflow components.

            C' = 1 / (1 + a0·s / (16·λ0))
            λ_1c = C' · (a0·s / 16 / λ0) · (θ_1c - β_1s + q̄)
            λ_1s = C' · (a0·s / 16 / λ0) · (θ_1s + β_1c + p̄)

        Parameters
        ----------
        pitch : PitchState
            Blade pitch harmonics [rad].
        flapping : FlappingState
            Blade flapping harmonics [rad].
        body : BodyState
            Body motion; supplies the hub-axis normalized rates p̄, q̄.
        Omega : float
            Rotor angular speed [rad/s].
        lambda_0 : float
            Converged uniform inflow ratio.

        Returns
        -------
        lambda_1c : float
            Longitudinal (cosine) inflow.
        lambda_1s : float
            Lateral (sine) inflow.

        Notes
        -----
        λ0 = 0 is singular and yields NaN; it is left to the caller to
        sanitize. The wind azimuth ψ_w does not appear in the first-harmonic
        reduction.
        """
        a0 = np.float64(self.rotor.lift_slope)
        s = np.float64(self.rotor.sigma)

        lmd_0 = np.float64(lambda_0)
        with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
            omega_bar = body.omega_bar_hub(Omega)
            p_bar = omega_bar[0]
            q_bar = omega_bar[1]

            C_prime = 1 / (1 + a0 * s / (16 * lmd_0))
            lmd_1c = C_prime * (a0 * s) / (16 * lmd_0) * (pitch.theta_1c - flapping.beta_1s + q_bar)
            lmd_1s = C_prime * (a0 * s) / (16 * lmd_0) * (pitch.theta_1s + flapping.beta_1c + p_bar)

        return float(lmd_1c), float(lmd_1s)

    def solve(
        self,
        pitch: PitchState,
        flapping: FlappingState,
        forces: BladeForceState,
        body: BodyState,
        Omega: float,
        previous: Optional[InflowState] = None,
    ) -> InflowSolution:
        """
        Compute the inflow state and keep the uniform solve diagnostics.

        Parameters
        ----------
        pitch, flapping, forces, body : state snapshots
            Inputs of the current simulation step.
        Omega : float
            Rotor angular speed [rad/s].
        previous : Optional[InflowState]
            Inflow of the previous step, used to seed the uniform iteration.

        Returns
        -------
        InflowSolution
            Sanitized inflow state and the raw uniform inflow result.
        """
        R = self.rotor.radius
        if previous is not None:
            lambda_seed = previous.lambda_0
        else:
            lambda_seed = self.solver_config.initial_inflow

        with np.errstate(divide="ignore", invalid="ignore"):
            mu = body.mu(Omega, R)
            mu_z = body.mu_z(Omega, R)

        uniform = self.compute_uniform_inflow(lambda_seed, forces.C_T, mu, mu_z)
        lmd_1c, lmd_1s = self.compute_harmonics_inflow(
            pitch, flapping, body, Omega, uniform.lambda_0
        )

        state = InflowState(
            lambda_0=nan_to_zero(uniform.lambda_0),
            lambda_1c=nan_to_zero(lmd_1c),
            lambda_1s=nan_to_zero(lmd_1s),
        )
        return InflowSolution(state=state, uniform=uniform)

    def compute_state(
        self,
        pitch: PitchState,
        flapping: FlappingState,
        forces: BladeForceState,
        body: BodyState,
        Omega: float,
        previous: Optional[InflowState] = None,
    ) -> InflowState:
        """Compute the inflow state for one simulation step."""
        return self.solve(pitch, flapping, forces, body, Omega, previous).state
