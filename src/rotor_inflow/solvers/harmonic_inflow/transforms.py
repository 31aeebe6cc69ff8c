"""
Coordinate frame transformations between body and rotor hub axes.

This module provides the rotation matrices used to resolve body-axis
velocities and angular rates into the hub (shaft) reference frame.
"""

from typing import Dict

import numpy as np


class HubTransforms:
    """
    Body-to-hub coordinate transformation for a tilted rotor shaft.

    Body axes follow the flight-dynamics convention (x forward, y starboard,
    z down). The hub frame is obtained by tilting the body axes forward by
    the longitudinal shaft tilt (about body y) and then sideways by the
    lateral shaft tilt (about the tilted x axis).

    Parameters
    ----------
    shaft_tilt_lon : float
        Longitudinal (forward) shaft tilt [rad].
    shaft_tilt_lat : float
        Lateral shaft tilt [rad].

    Example
    -------
    ::

        transforms = HubTransforms(shaft_tilt_lon=np.radians(5.0))

        # Resolve body velocity into hub axes
        v_hub = transforms.to_hub(np.array([60.0, 0.0, 2.0]))
    """

    #: Mapping from axis name to array index
    AXIS_MAP: Dict[str, int] = {"x": 0, "y": 1, "z": 2}

    def __init__(self, shaft_tilt_lon: float = 0.0, shaft_tilt_lat: float = 0.0):
        self.shaft_tilt_lon = float(shaft_tilt_lon)
        self.shaft_tilt_lat = float(shaft_tilt_lat)
        self._matrix = self.get_rotation_matrix()

    @staticmethod
    def axis_rotation(axis: str, angle: float) -> np.ndarray:
        """
        Get 3x3 rotation matrix around a principal axis.

        Parameters
        ----------
        axis : str
            Rotation axis: 'x', 'y', or 'z'.
        angle : float
            Rotation angle [rad]. Positive follows right-hand rule.

        Returns
        -------
        R : np.ndarray
            3x3 rotation matrix.

        Notes
        -----
        Rotation matrices for principal axes:

        Rx(θ) = [[1,    0,       0    ],
                 [0,  cos(θ), -sin(θ)],
                 [0,  sin(θ),  cos(θ)]]

        Ry(θ) = [[ cos(θ), 0, sin(θ)],
                 [   0,    1,   0    ],
                 [-sin(θ), 0, cos(θ)]]

        Rz(θ) = [[cos(θ), -sin(θ), 0],
                 [sin(θ),  cos(θ), 0],
                 [  0,       0,    1]]
        """
        c = np.cos(angle)
        s = np.sin(angle)

        axis = axis.lower()
        if axis not in HubTransforms.AXIS_MAP:
            raise ValueError(f"Invalid axis: '{axis}'. Must be one of {tuple(HubTransforms.AXIS_MAP)}.")

        if axis == "x":
            return np.array([[1, 0, 0], [0, c, -s], [0, s, c]])
        elif axis == "y":
            return np.array([[c, 0, s], [0, 1, 0], [-s, 0, c]])
        return np.array([[c, -s, 0], [s, c, 0], [0, 0, 1]])

    def get_rotation_matrix(self) -> np.ndarray:
        """
        Get the body-to-hub component transformation matrix.

        Returns
        -------
        T : np.ndarray
            3x3 matrix such that ``v_hub = T · v_body``.

        Notes
        -----
        The axes are rotated, not the vectors, so each elementary rotation
        enters with a negative angle:

            T = Rx(-φ_s) · Ry(-γ_s)

        For a pure longitudinal tilt this gives the classical result
        u_H = u·cos(γ_s) - w·sin(γ_s), w_H = u·sin(γ_s) + w·cos(γ_s).
        """
        return self.axis_rotation("x", -self.shaft_tilt_lat) @ self.axis_rotation(
            "y", -self.shaft_tilt_lon
        )

    def to_hub(self, vectors: np.ndarray) -> np.ndarray:
        """
        Resolve body-axis vector(s) into hub axes.

        Parameters
        ----------
        vectors : np.ndarray
            Vector(s) in body axes, shape (3,) or (N, 3).

        Returns
        -------
        vectors_hub : np.ndarray
            Vector(s) in hub axes, same shape as the input.
        """
        # For (N, 3) vectors V: V @ T.T transforms each row vector
        return np.asarray(vectors, dtype=np.float64) @ self._matrix.T

    def to_body(self, vectors: np.ndarray) -> np.ndarray:
        """
        Resolve hub-axis vector(s) back into body axes.

        This is the inverse transformation of `to_hub`.
        """
        return np.asarray(vectors, dtype=np.float64) @ self._matrix

    def __repr__(self) -> str:
        return (
            f"HubTransforms(shaft_tilt_lon={self.shaft_tilt_lon:.4f} rad, "
            f"shaft_tilt_lat={self.shaft_tilt_lat:.4f} rad)"
        )
