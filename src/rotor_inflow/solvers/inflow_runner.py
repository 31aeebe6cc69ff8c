"""
Inflow Run Driver.

This module provides a runner that evaluates the harmonic inflow model
over a sequence of operating points described by a YAML configuration,
warm-starting each step from the previous step's inflow.

Example usage:
    from rotor_inflow.solvers.inflow_runner import InflowRunner

    runner = InflowRunner("inflow.yaml")
    solutions = runner.run()

Or from command line:
    python -m rotor_inflow.cli.run_inflow inflow.yaml
"""

import logging
from pathlib import Path
from typing import List, Optional, Union

from ..core.config import InflowSimulationConfig
from .harmonic_inflow import HarmonicInflowModel, InflowLogger, InflowSolution, InflowState

logger = logging.getLogger(__name__)


class InflowRunner:
    """
    Owning step loop around the Harmonic Inflow Solver.

    Parameters
    ----------
    config : InflowSimulationConfig or str or Path
        Configuration object or path to YAML configuration file.

    Attributes
    ----------
    config : InflowSimulationConfig
        The validated run configuration.
    model : HarmonicInflowModel
        Inflow solver built from the rotor and solver sections.
    solutions : List[InflowSolution]
        Solutions of the last run, one per operating point.

    Examples
    --------
    >>> runner = InflowRunner("inflow.yaml")
    >>> solutions = runner.run()
    >>> solutions[-1].state.lambda_0
    """

    def __init__(self, config: Union[InflowSimulationConfig, str, Path]):
        if isinstance(config, (str, Path)):
            self.config_path = Path(config)
            self.config = InflowSimulationConfig.from_yaml(config)
        else:
            self.config_path = None
            self.config = config

        self.model = HarmonicInflowModel(self.config.rotor, self.config.solver)
        self.solutions: List[InflowSolution] = []

    def run(self, initial_inflow: Optional[InflowState] = None) -> List[InflowSolution]:
        """
        Evaluate the inflow model over all operating points.

        Parameters
        ----------
        initial_inflow : Optional[InflowState]
            Inflow used to seed the first step. The solver default seed is
            used when omitted.

        Returns
        -------
        List[InflowSolution]
            One solution per operating point, in order.
        """
        for warning in self.config.validate():
            logger.warning(warning)

        Omega = self.config.omega
        R = self.config.rotor.radius
        transforms = self.config.hub.get_transforms()

        inflow_log = InflowLogger(
            self.config.output.log_file,
            self.config.rotor,
            self.config.solver,
            separator=self.config.output.separator,
        )
        inflow_log.initialize()

        logger.info("Starting inflow run: %d operating points", len(self.config.steps))

        self.solutions = []
        previous = initial_inflow
        n_degenerate = 0
        try:
            for step in self.config.steps:
                body = step.body_state(transforms)
                forces = step.force_state()

                solution = self.model.solve(
                    step.pitch_state(),
                    step.flapping_state(),
                    forces,
                    body,
                    Omega,
                    previous,
                )
                if not solution.converged:
                    n_degenerate += 1

                inflow_log.log_step(
                    t=step.time,
                    C_T=forces.C_T,
                    mu=body.mu(Omega, R),
                    mu_z=body.mu_z(Omega, R),
                    solution=solution,
                )
                logger.debug(
                    "t=%.4f: lambda_0=%.6f, lambda_1c=%.6f, lambda_1s=%.6f",
                    step.time,
                    *solution.state.as_tuple(),
                )

                self.solutions.append(solution)
                previous = solution.state
        finally:
            inflow_log.close()

        if n_degenerate:
            logger.warning(
                "%d of %d steps did not converge", n_degenerate, len(self.config.steps)
            )
        logger.info("Inflow run completed")
        return self.solutions
