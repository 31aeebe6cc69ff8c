"""
Unit tests for the Harmonic Inflow Solver.

Tests the uniform inflow iteration, the closed-form first-harmonic
correction and the NaN sanitation of the assembled inflow state.

Reference values were obtained from an independent double-precision
run of the same relaxed iteration.
"""

import logging

import numpy as np
import pytest
from numpy.testing import assert_allclose

from rotor_inflow.solvers.harmonic_inflow import (
    BladeForceState,
    BodyState,
    FlappingState,
    HarmonicInflowModel,
    InflowSolverConfig,
    InflowState,
    InflowStatus,
    PitchState,
    RotorConfig,
    nan_to_zero,
)

OMEGA = 27.0
RADIUS = 5.5
TIP_SPEED = OMEGA * RADIUS

#: Converged uniform inflow for a0=5.7, s=0.08, C_T=0.006, mu=0.2, mu_z=0, seed 0.05
LAMBDA_0_REFERENCE = 0.015751970678
#: C'·a0·s/(16·λ0) at the reference uniform inflow
HARMONIC_GAIN_REFERENCE = 0.644039114263


def momentum_residual(lmd, C_T, mu, mu_z):
    return 2 * lmd * np.sqrt(mu**2 + (lmd - mu_z) ** 2) - C_T


@pytest.fixture
def rotor():
    """Representative helicopter rotor."""
    return RotorConfig(lift_slope=5.7, radius=RADIUS, solidity=0.08)


@pytest.fixture
def model(rotor):
    return HarmonicInflowModel(rotor)


@pytest.fixture
def forward_flight_body():
    """Level forward flight at mu = 0.2."""
    return BodyState(velocity=[0.2 * TIP_SPEED, 0.0, 0.0])


@pytest.fixture
def pitch():
    return PitchState(theta_0=0.15, theta_1c=0.02, theta_1s=-0.05)


@pytest.fixture
def flapping():
    return FlappingState(beta_0=0.05, beta_1c=0.03, beta_1s=0.01)


class TestUniformInflow:
    """Tests for the uniform inflow iteration."""

    def test_forward_flight_reference(self, model):
        """Forward flight converges to the documented reference value."""
        result = model.compute_uniform_inflow(0.05, 0.006, 0.2, 0.0)

        assert result.converged
        assert result.status is InflowStatus.CONVERGED
        assert result.iterations == 6
        assert result.lambda_0 == pytest.approx(LAMBDA_0_REFERENCE, rel=1e-8)

    def test_hover_tight_tolerance(self, rotor):
        """Hover converges to sqrt(C_T/2) within 1%."""
        model = HarmonicInflowModel(rotor, InflowSolverConfig(tolerance=1e-5))
        C_T = 0.005

        result = model.compute_uniform_inflow(0.01, C_T, 0.0, 0.0)

        assert result.converged
        assert result.lambda_0 == pytest.approx(np.sqrt(C_T / 2), rel=0.01)

    def test_hover_default_tolerance(self, model):
        """The default stopping tolerance lands close to the hover inflow."""
        C_T = 0.005

        result = model.compute_uniform_inflow(0.02, C_T, 0.0, 0.0)

        assert result.converged
        # Stopping on a 0.001 step leaves the iterate about 3% from the root
        assert result.lambda_0 == pytest.approx(np.sqrt(C_T / 2), rel=0.05)

    def test_hover_exact_seed(self, model):
        """Seeding with the exact root stops after one iteration."""
        result = model.compute_uniform_inflow(0.05, 0.005, 0.0, 0.0)

        assert result.iterations == 1
        assert result.lambda_0 == pytest.approx(0.05, abs=1e-12)

    @pytest.mark.parametrize("seed", [-0.05, 0.01, 0.04, 0.1, 0.19])
    def test_zero_thrust_drives_inflow_to_zero(self, model, seed):
        """Without thrust the uniform inflow vanishes for any seed."""
        result = model.compute_uniform_inflow(seed, 0.0, 0.2, 0.0)

        assert result.converged
        assert abs(result.lambda_0) < 2 * model.solver_config.tolerance

    @pytest.mark.parametrize("mu", [0.05, 0.1, 0.2, 0.3, 0.35])
    @pytest.mark.parametrize("C_T", [0.002, 0.006, 0.01])
    @pytest.mark.parametrize("mu_z", [-0.02, 0.0, 0.02])
    def test_flight_envelope_converges(self, model, mu, C_T, mu_z):
        """The loop terminates and satisfies the momentum balance."""
        result = model.compute_uniform_inflow(0.05, C_T, mu, mu_z)

        assert result.converged
        assert result.iterations < 10000
        assert abs(momentum_residual(result.lambda_0, C_T, mu, mu_z)) < 1e-3

    @pytest.mark.parametrize("mu", [0.05, 0.2, 0.35])
    @pytest.mark.parametrize("mu_z", [-0.02, 0.02])
    def test_tight_tolerance_residual(self, rotor, mu, mu_z):
        """A tighter tolerance reduces the momentum residual accordingly."""
        model = HarmonicInflowModel(rotor, InflowSolverConfig(tolerance=1e-6))
        C_T = 0.006

        result = model.compute_uniform_inflow(0.05, C_T, mu, mu_z)

        assert result.converged
        assert abs(momentum_residual(result.lambda_0, C_T, mu, mu_z)) < 1e-5

    def test_degenerate_hover_is_non_finite(self, model):
        """Zero thrust, zero seed and zero advance ratio give 0/0."""
        result = model.compute_uniform_inflow(0.0, 0.0, 0.0, 0.0)

        assert result.status is InflowStatus.NON_FINITE
        assert not result.converged
        assert result.iterations == 1
        assert np.isnan(result.lambda_0)

    def test_iteration_cap(self, rotor):
        """Hitting the cap is reported instead of looping forever."""
        model = HarmonicInflowModel(rotor, InflowSolverConfig(max_iterations=2))

        result = model.compute_uniform_inflow(0.01, 0.005, 0.0, 0.0)

        assert result.status is InflowStatus.MAX_ITERATIONS
        assert result.iterations == 2
        assert np.isfinite(result.lambda_0)

    def test_non_convergence_is_logged(self, rotor, caplog):
        model = HarmonicInflowModel(rotor, InflowSolverConfig(max_iterations=2))

        with caplog.at_level(logging.WARNING):
            model.compute_uniform_inflow(0.01, 0.005, 0.0, 0.0)

        assert "did not converge" in caplog.text
        assert "max_iterations" in caplog.text

    def test_relaxation_changes_path_not_root(self, rotor):
        """A different relaxation factor converges to the same root."""
        tight = InflowSolverConfig(tolerance=1e-8)
        damped = HarmonicInflowModel(rotor, tight)
        undamped = HarmonicInflowModel(
            rotor, InflowSolverConfig(relaxation=1.0, tolerance=1e-8)
        )

        a = damped.compute_uniform_inflow(0.05, 0.006, 0.2, 0.0)
        b = undamped.compute_uniform_inflow(0.05, 0.006, 0.2, 0.0)

        assert b.iterations < a.iterations
        assert_allclose(a.lambda_0, b.lambda_0, rtol=1e-5)


class TestHarmonicsInflow:
    """Tests for the closed-form first-harmonic correction."""

    def test_reference_values(self, model, pitch, flapping, forward_flight_body):
        lmd_1c, lmd_1s = model.compute_harmonics_inflow(
            pitch, flapping, forward_flight_body, OMEGA, LAMBDA_0_REFERENCE
        )

        assert lmd_1c == pytest.approx(HARMONIC_GAIN_REFERENCE * (0.02 - 0.01), rel=1e-9)
        assert lmd_1s == pytest.approx(HARMONIC_GAIN_REFERENCE * (-0.05 + 0.03), rel=1e-9)

    def test_matches_closed_form(self, model, rotor):
        """Both components follow C'·(a0·s/16/λ0)·(...) with body rates."""
        lmd_0 = 0.04
        body = BodyState(angular_velocity=[0.135, -0.27, 0.0])
        pitch = PitchState(theta_1c=0.03, theta_1s=0.01)
        flapping = FlappingState(beta_1c=-0.02, beta_1s=0.04)

        lmd_1c, lmd_1s = model.compute_harmonics_inflow(pitch, flapping, body, OMEGA, lmd_0)

        k = rotor.lift_slope * rotor.sigma / (16 * lmd_0)
        gain = k / (1 + k)
        p_bar, q_bar = 0.135 / OMEGA, -0.27 / OMEGA
        assert_allclose(lmd_1c, gain * (0.03 - 0.04 + q_bar), rtol=1e-12)
        assert_allclose(lmd_1s, gain * (0.01 - 0.02 + p_bar), rtol=1e-12)

    def test_longitudinal_symmetry(self, model):
        """theta_1c = beta_1s with no pitch rate gives no longitudinal inflow."""
        body = BodyState(angular_velocity=[0.3, 0.0, 0.1])
        pitch = PitchState(theta_1c=0.035, theta_1s=0.02)
        flapping = FlappingState(beta_1c=0.01, beta_1s=0.035)

        lmd_1c, lmd_1s = model.compute_harmonics_inflow(pitch, flapping, body, OMEGA, 0.03)

        assert lmd_1c == 0.0
        assert lmd_1s != 0.0

    def test_lateral_symmetry(self, model):
        """theta_1s = -beta_1c with no roll rate gives no lateral inflow."""
        body = BodyState(angular_velocity=[0.0, 0.2, 0.1])
        pitch = PitchState(theta_1c=0.01, theta_1s=-0.025)
        flapping = FlappingState(beta_1c=0.025, beta_1s=0.0)

        lmd_1c, lmd_1s = model.compute_harmonics_inflow(pitch, flapping, body, OMEGA, 0.03)

        assert lmd_1s == 0.0
        assert lmd_1c != 0.0

    def test_zero_uniform_inflow_is_singular(self, model, pitch, flapping, forward_flight_body):
        lmd_1c, lmd_1s = model.compute_harmonics_inflow(
            pitch, flapping, forward_flight_body, OMEGA, 0.0
        )

        assert np.isnan(lmd_1c)
        assert np.isnan(lmd_1s)

    def test_shaft_tilt_resolves_rates(self, model):
        """Body yaw rate appears as hub roll rate on a tilted shaft."""
        from rotor_inflow.solvers.harmonic_inflow import HubTransforms

        tilt = np.radians(10.0)
        body = BodyState(angular_velocity=[0.0, 0.0, 0.5], transforms=HubTransforms(tilt))

        _, lmd_1s = model.compute_harmonics_inflow(PitchState(), FlappingState(), body, OMEGA, 0.03)

        k = 5.7 * 0.08 / (16 * 0.03)
        assert_allclose(lmd_1s, k / (1 + k) * (-np.sin(tilt) * 0.5 / OMEGA), rtol=1e-12)


class TestComputeState:
    """Tests for the assembled inflow state."""

    def test_end_to_end(self, model, pitch, flapping, forward_flight_body):
        state = model.compute_state(
            pitch, flapping, BladeForceState(C_T=0.006), forward_flight_body, OMEGA
        )

        assert isinstance(state, InflowState)
        assert state.lambda_0 == pytest.approx(LAMBDA_0_REFERENCE, rel=1e-8)
        assert state.lambda_1c == pytest.approx(HARMONIC_GAIN_REFERENCE * 0.01, rel=1e-7)
        assert state.lambda_1s == pytest.approx(HARMONIC_GAIN_REFERENCE * -0.02, rel=1e-7)

    def test_idempotent(self, model, pitch, flapping, forward_flight_body):
        """Repeated calls with identical inputs are bit-identical."""
        forces = BladeForceState(C_T=0.006)
        previous = InflowState(0.03, 0.0, 0.0)

        first = model.compute_state(pitch, flapping, forces, forward_flight_body, OMEGA, previous)
        second = model.compute_state(pitch, flapping, forces, forward_flight_body, OMEGA, previous)

        assert first == second
        assert first.as_tuple() == second.as_tuple()

    def test_warm_start_from_previous_state(self, model, pitch, flapping, forward_flight_body):
        """Seeding with the previous inflow needs fewer iterations."""
        forces = BladeForceState(C_T=0.006)

        cold = model.solve(pitch, flapping, forces, forward_flight_body, OMEGA)
        warm = model.solve(pitch, flapping, forces, forward_flight_body, OMEGA, cold.state)

        assert cold.uniform.iterations == 6
        assert warm.uniform.iterations < cold.uniform.iterations
        assert warm.state.lambda_0 == pytest.approx(cold.state.lambda_0, abs=1e-3)

    def test_default_seed_from_solver_config(self, rotor, pitch, flapping, forward_flight_body):
        forces = BladeForceState(C_T=0.006)
        model = HarmonicInflowModel(rotor, InflowSolverConfig(initial_inflow=0.05))

        seeded = model.solve(
            pitch, flapping, forces, forward_flight_body, OMEGA, InflowState(0.05, 0.0, 0.0)
        )
        unseeded = model.solve(pitch, flapping, forces, forward_flight_body, OMEGA)

        assert seeded == unseeded

    def test_nan_sanitation_degenerate_hover(self, model, pitch, flapping):
        """A 0/0 uniform solve degrades to zero inflow everywhere."""
        solution = model.solve(
            pitch, flapping, BladeForceState(C_T=0.0), BodyState(), OMEGA, InflowState()
        )

        assert solution.uniform.status is InflowStatus.NON_FINITE
        assert solution.state.as_tuple() == (0.0, 0.0, 0.0)

    def test_nan_sanitation_zero_uniform_inflow(self, model, pitch, flapping, forward_flight_body):
        """A converged zero uniform inflow still gives zero harmonics, not NaN."""
        solution = model.solve(
            pitch, flapping, BladeForceState(C_T=0.0), forward_flight_body, OMEGA, InflowState()
        )

        assert solution.converged
        assert solution.state.lambda_0 == 0.0
        assert solution.state.lambda_1c == 0.0
        assert solution.state.lambda_1s == 0.0

    def test_infinity_is_not_sanitized(self, model, flapping, forward_flight_body):
        """Only NaN is mapped to zero; infinite components pass through."""
        pitch = PitchState(theta_1c=np.inf)

        state = model.compute_state(
            pitch, flapping, BladeForceState(C_T=0.006), forward_flight_body, OMEGA
        )

        assert state.lambda_1c == np.inf
        assert np.isfinite(state.lambda_1s)
        assert np.isfinite(state.lambda_0)

    def test_configuration_not_modified(self, rotor, model, pitch, flapping, forward_flight_body):
        before = (rotor.lift_slope, rotor.radius, rotor.sigma, rotor.twist)

        model.compute_state(
            pitch, flapping, BladeForceState(C_T=0.006), forward_flight_body, OMEGA
        )

        assert (rotor.lift_slope, rotor.radius, rotor.sigma, rotor.twist) == before


class TestNanToZero:
    def test_nan(self):
        assert nan_to_zero(float("nan")) == 0.0

    @pytest.mark.parametrize("value", [np.inf, -np.inf])
    def test_infinity_passes_through(self, value):
        assert nan_to_zero(value) == value

    def test_finite_value_unchanged(self):
        assert nan_to_zero(np.float64(0.0123)) == 0.0123
        assert type(nan_to_zero(np.float64(0.0123))) is float
