"""
rotor-inflow: induced inflow over a helicopter rotor disk.

The solver lives in :mod:`rotor_inflow.solvers.harmonic_inflow`; YAML run
configuration in :mod:`rotor_inflow.core`; the command line in
:mod:`rotor_inflow.cli.run_inflow`.
"""

__version__ = "0.1.0"
