"""
Error conditions reported by the SPS kinematics toolkit.

None of these are fatal to a running application. The evaluator attaches
them to the reaction (or level) they concern and carries on with the rest
of the reaction set.
"""
from typing import Optional


class SpsPlotError(Exception):
    """Base class for all recoverable toolkit conditions."""


class UnresolvedNuclideError(SpsPlotError):
    """A (Z, A) pair has no entry in the mass table."""

    def __init__(self, role: str, z: Optional[int] = None, a: Optional[int] = None):
        self.role = role
        self.z = z
        self.a = a
        if z is None:
            message = f"No mass data for {role}"
        else:
            message = f"No mass data for {role} (Z={z}, A={a})"
        super().__init__(message)


class ExcitationFetchError(SpsPlotError):
    """The excitation-level source failed to deliver data."""


class NoExcitationDataError(SpsPlotError):
    """No excitation levels are available for a residual nucleus."""

    def __init__(self, isotope: str, reason: str = "no levels returned"):
        self.isotope = isotope
        self.reason = reason
        super().__init__(f"No excitation levels for {isotope}: {reason}")


class KinematicallyForbiddenError(SpsPlotError):
    """The outgoing-momentum quadratic has no real root for this level."""

    def __init__(self, excitation: float):
        self.excitation = excitation
        super().__init__(
            f"Channel closed at excitation energy {excitation:.3f} MeV"
        )


class InvalidParameterError(SpsPlotError, ValueError):
    """A non-physical configuration value (field, charge, energy, ...)."""
