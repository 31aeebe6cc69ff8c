#!/usr/bin/env python3
"""
Inflow Run CLI.

This script provides a command-line interface for evaluating the harmonic
inflow model from YAML configuration files.

Usage:
    python -m rotor_inflow.cli.run_inflow config.yaml [options]

Examples:
    # Run from YAML
    python -m rotor_inflow.cli.run_inflow inflow.yaml

    # Preview configuration without running
    python -m rotor_inflow.cli.run_inflow inflow.yaml --preview

    # Generate template configuration
    python -m rotor_inflow.cli.run_inflow --template > my_config.yaml
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List

# Template YAML configuration
TEMPLATE_CONFIG = """# Harmonic Inflow Configuration
# =============================
# All angles in radians, velocities in m/s, rates in rad/s.

#============================================================================
# ROTOR
#============================================================================
rotor:
  lift_slope: 5.7   # Blade lift-curve slope a0 [1/rad]
  radius: 5.5       # Blade radius R [m]
  twist: -0.14      # Linear twist [rad]
  solidity: 0.08    # Or give n_blades and chord instead
  # n_blades: 4
  # chord: 0.35

#============================================================================
# UNIFORM INFLOW ITERATION (optional)
#============================================================================
solver:
  relaxation: 0.6
  tolerance: 0.001
  max_iterations: 10000
  initial_inflow: 0.05

#============================================================================
# HUB
#============================================================================
hub:
  shaft_tilt_lon: 0.0
  shaft_tilt_lat: 0.0

omega: 27.0   # Rotor angular speed [rad/s]

#============================================================================
# OPERATING POINTS
#============================================================================
steps:
  - time: 0.0
    C_T: 0.006
    velocity: [29.7, 0.0, 0.0]          # Body axes [u, v, w]
    angular_velocity: [0.0, 0.0, 0.0]   # Body axes [p, q, r]
    pitch: {theta_0: 0.15, theta_1c: 0.02, theta_1s: -0.05}
    flapping: {beta_0: 0.05, beta_1c: 0.03, beta_1s: 0.01}

#============================================================================
# OUTPUT (optional)
#============================================================================
output:
  log_file: "inflow.csv"
  separator: ","
"""


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the CLI."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def print_template() -> None:
    """Print template configuration to stdout."""
    print(TEMPLATE_CONFIG)


def validate_config(config_path: str) -> bool:
    """Validate configuration file without running."""
    from rotor_inflow.core.config import InflowSimulationConfig

    try:
        config = InflowSimulationConfig.from_yaml(config_path)
        warnings = config.validate()

        print("Configuration validation:")
        print("=" * 50)
        print(config)

        if warnings:
            print("\nWarnings:")
            for w in warnings:
                print(f"  ⚠️  {w}")
            return False
        else:
            print("\n✓ Configuration is valid")
            return True

    except (OSError, ValueError, TypeError) as e:
        print(f"\n✗ Validation failed: {e}")
        return False


def format_results(times: List[float], solutions: List) -> str:
    """Format inflow solutions as a fixed-width table."""
    header = f"{'time':>10} {'lambda_0':>12} {'lambda_1c':>12} {'lambda_1s':>12} {'iter':>6}  status"
    lines = [header, "-" * len(header)]
    for t, solution in zip(times, solutions):
        state = solution.state
        lines.append(
            f"{t:10.4f} {state.lambda_0:12.6f} {state.lambda_1c:12.6f} "
            f"{state.lambda_1s:12.6f} {solution.uniform.iterations:6d}  "
            f"{solution.uniform.status.value}"
        )
    return "\n".join(lines)


def main(argv=None):
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="Evaluate the harmonic rotor inflow model from YAML configuration files.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s config.yaml                    Run inflow model
  %(prog)s config.yaml --preview          Preview configuration
  %(prog)s --template > config.yaml       Generate template
        """,
    )

    parser.add_argument(
        "config",
        nargs="?",
        help="Path to YAML configuration file",
    )

    parser.add_argument(
        "--preview",
        "-p",
        action="store_true",
        help="Preview configuration without running",
    )

    parser.add_argument(
        "--validate",
        action="store_true",
        help="Validate configuration file",
    )

    parser.add_argument(
        "--template",
        "-t",
        action="store_true",
        help="Print template configuration to stdout",
    )

    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )

    args = parser.parse_args(argv)

    if args.template:
        print_template()
        return 0

    # Require config file for other operations
    if not args.config:
        parser.print_help()
        return 1

    config_path = Path(args.config)
    if not config_path.exists():
        print(f"Error: Configuration file not found: {config_path}")
        return 1

    setup_logging(args.verbose)

    # Validate only
    if args.validate:
        return 0 if validate_config(str(config_path)) else 1

    # Preview configuration
    if args.preview:
        from rotor_inflow.core.config import InflowSimulationConfig

        config = InflowSimulationConfig.from_yaml(str(config_path))
        print(config)
        return 0

    try:
        from rotor_inflow.solvers.inflow_runner import InflowRunner

        runner = InflowRunner(str(config_path))
        solutions = runner.run()
        times = [step.time for step in runner.config.steps]
        print(format_results(times, solutions))
        return 0

    except KeyboardInterrupt:
        print("\nRun interrupted by user")
        return 130

    except Exception as e:
        logging.exception("Inflow run failed")
        print(f"\nError: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
