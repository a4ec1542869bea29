"""
Spectrometer operating settings.

The defaults describe the usual Split-Pole spectrometer setup: 35 degrees,
16 MeV beam, 8.7 kG field and a focal-plane acceptance of 69-87 cm.
"""

import math
from dataclasses import dataclass, replace

from .errors import InvalidParameterError

MAX_SPECTROMETER_ANGLE = 60.0  # degrees
MAX_MAGNETIC_FIELD = 17.0  # kG


@dataclass(frozen=True)
class SpectrometerSettings:
    """
    Global parameters shared by every reaction in an evaluation.

    Parameters
    ----------
    spectrometer_angle : float
        Lab angle of the spectrometer in degrees (0-60).
    beam_energy : float
        Beam kinetic energy in MeV.
    magnetic_field : float
        Dipole field in kG.
    rho_min, rho_max : float
        Focal-plane acceptance window in cm.
    """

    spectrometer_angle: float = 35.0
    beam_energy: float = 16.0
    magnetic_field: float = 8.7
    rho_min: float = 69.0
    rho_max: float = 87.0

    def validate(self) -> "SpectrometerSettings":
        """Raise InvalidParameterError for non-physical settings."""
        for name in ("spectrometer_angle", "beam_energy", "magnetic_field", "rho_min", "rho_max"):
            if not math.isfinite(getattr(self, name)):
                raise InvalidParameterError(f"{name} must be finite")
        if not 0.0 <= self.spectrometer_angle <= MAX_SPECTROMETER_ANGLE:
            raise InvalidParameterError(
                f"Spectrometer angle {self.spectrometer_angle} outside 0-{MAX_SPECTROMETER_ANGLE} degrees"
            )
        if self.beam_energy < 0.0:
            raise InvalidParameterError(f"Beam energy must be >= 0 MeV, got {self.beam_energy}")
        if not 0.0 < self.magnetic_field <= MAX_MAGNETIC_FIELD:
            raise InvalidParameterError(
                f"Magnetic field {self.magnetic_field} outside (0, {MAX_MAGNETIC_FIELD}] kG"
            )
        if self.rho_min < 0.0 or self.rho_min >= self.rho_max:
            raise InvalidParameterError(
                f"Invalid rho window [{self.rho_min}, {self.rho_max}] cm"
            )
        return self

    def in_acceptance(self, rho: float) -> bool:
        """True if ``rho`` falls inside the focal-plane window."""
        return self.rho_min <= rho <= self.rho_max

    def with_updates(self, **changes) -> "SpectrometerSettings":
        """Return a validated copy with some fields replaced."""
        return replace(self, **changes).validate()
