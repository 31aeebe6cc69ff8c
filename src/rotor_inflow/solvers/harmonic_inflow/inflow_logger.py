"""
Inflow history CSV logger.

This module handles logging of per-step inflow results to CSV files,
including header generation and step logging.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional, TextIO

from .config import InflowSolverConfig, RotorConfig
from .states import InflowSolution

logger = logging.getLogger(__name__)


class InflowLogger:
    """
    Handles logging of inflow solutions to a CSV file.

    Parameters
    ----------
    log_file : Optional[str]
        Path to log file, or None to disable logging.
    rotor : RotorConfig
        Rotor configuration, written to the header.
    solver_config : InflowSolverConfig
        Iteration parameters, written to the header.
    separator : str
        Column separator character.

    Attributes
    ----------
    handle : Optional[TextIO]
        File handle for writing.

    Example
    -------
    ::

        log = InflowLogger("inflow.csv", rotor, solver_config)
        log.initialize()

        for step in simulation:
            log.log_step(t=t, C_T=C_T, mu=mu, mu_z=mu_z, solution=solution)

        log.close()
    """

    COLUMNS = [
        "time",
        "C_T",
        "mu",
        "mu_z",
        "lambda_0",
        "lambda_1c",
        "lambda_1s",
        "iterations",
        "status",
    ]

    def __init__(
        self,
        log_file: Optional[str],
        rotor: RotorConfig,
        solver_config: InflowSolverConfig,
        separator: str = ",",
    ):
        self.log_file = log_file
        self.rotor = rotor
        self.solver_config = solver_config
        self.separator = separator
        self.handle: Optional[TextIO] = None

    def initialize(self) -> None:
        """
        Initialize the log file with header information.

        Creates the log file, parent directories if needed, and writes
        the configuration header and column names.
        """
        if self.log_file is None:
            return

        log_path = Path(self.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        try:
            self.handle = open(log_path, "w", encoding="utf-8")
        except OSError as e:
            logger.warning("Could not open inflow log file: %s", e)
            self.handle = None
            return

        self._write_header()

    def _write_header(self) -> None:
        """Write the configuration header to the log file."""
        if self.handle is None:
            return

        h = self.handle

        h.write("# Harmonic Inflow Log\n")
        h.write(f"# Generated: {datetime.now().isoformat()}\n")
        h.write("#\n")

        h.write("# === ROTOR CONFIGURATION ===\n")
        h.write(f"# Lift slope [1/rad]: {self.rotor.lift_slope:.6f}\n")
        h.write(f"# Solidity: {self.rotor.sigma:.6f}\n")
        h.write(f"# Radius [m]: {self.rotor.radius:.6f}\n")
        h.write(f"# Twist [rad]: {self.rotor.twist:.6f}\n")

        h.write("#\n")
        h.write("# === UNIFORM INFLOW ITERATION ===\n")
        h.write(f"# Relaxation: {self.solver_config.relaxation:.4f}\n")
        h.write(f"# Tolerance: {self.solver_config.tolerance:.3e}\n")
        h.write(f"# Max iterations: {self.solver_config.max_iterations}\n")
        h.write("#\n")

        h.write(self.separator.join(self.COLUMNS) + "\n")
        h.flush()

    def log_step(
        self,
        t: float,
        C_T: float,
        mu: float,
        mu_z: float,
        solution: InflowSolution,
    ) -> None:
        """
        Write a single step entry to the log.

        Parameters
        ----------
        t : float
            Current time [s].
        C_T : float
            Thrust coefficient.
        mu : float
            Advance ratio.
        mu_z : float
            Normal advance ratio.
        solution : InflowSolution
            Inflow solution of the step.
        """
        if self.handle is None:
            return

        state = solution.state
        values = [
            f"{t:.6e}",
            f"{C_T:.6e}",
            f"{mu:.6e}",
            f"{mu_z:.6e}",
            f"{state.lambda_0:.6e}",
            f"{state.lambda_1c:.6e}",
            f"{state.lambda_1s:.6e}",
            f"{solution.uniform.iterations:d}",
            solution.uniform.status.value,
        ]

        self.handle.write(self.separator.join(values) + "\n")
        self.handle.flush()

    def close(self) -> None:
        """Close the log file."""
        if self.handle is not None:
            self.handle.close()
            self.handle = None
