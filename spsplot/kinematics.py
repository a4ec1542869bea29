"""
Kinematics solver: excitation energy to ejectile rigidity.

Validated Python interface over the compiled kernels in ``kinematics_core``.
Every function takes the four resolved ``NuclideData`` roles of a reaction
(target, projectile, ejectile, residual). Callers must resolve the reaction
first; an absent role raises ``UnresolvedNuclideError`` instead of running
with a default mass.

Units: masses and energies in MeV, angle in degrees, field in kG,
rigidity in cm.
"""

import math
from typing import List, Optional, Sequence, Tuple

import numpy as np

from .errors import (
    InvalidParameterError,
    KinematicallyForbiddenError,
    UnresolvedNuclideError,
)
from .kinematics_core import (
    KIN_FORBIDDEN,
    _ejectile_energy,
    _rho_spectrum,
    _rigidity,
    _threshold_energy,
)
from .nuclear_data import NuclideData

ROLES = ("target", "projectile", "ejectile", "residual")


def _check_roles(target, projectile, ejectile, residual) -> Tuple[NuclideData, ...]:
    nuclides = (target, projectile, ejectile, residual)
    for role, data in zip(ROLES, nuclides):
        if data is None:
            raise UnresolvedNuclideError(role)
        if not (math.isfinite(data.mass) and data.mass > 0.0):
            raise InvalidParameterError(f"Non-physical {role} mass: {data.mass}")
    return nuclides


def _check_beam(beam_energy: float, spectrometer_angle: float) -> None:
    if not math.isfinite(beam_energy) or beam_energy < 0.0:
        raise InvalidParameterError(f"Beam energy must be >= 0 MeV, got {beam_energy}")
    if not math.isfinite(spectrometer_angle):
        raise InvalidParameterError(f"Spectrometer angle must be finite, got {spectrometer_angle}")


def _check_levels(levels) -> None:
    for excitation in levels:
        if not math.isfinite(excitation):
            raise InvalidParameterError(f"Excitation energy must be finite, got {excitation}")


def _check_optics(magnetic_field: float, ejectile: NuclideData) -> None:
    if not math.isfinite(magnetic_field) or magnetic_field <= 0.0:
        raise InvalidParameterError(f"Magnetic field must be > 0 kG, got {magnetic_field}")
    if ejectile.z <= 0:
        raise InvalidParameterError(
            f"Ejectile {ejectile.isotope} has charge {ejectile.z}; it cannot be bent"
        )


def reaction_q_value(target: Optional[NuclideData], projectile: Optional[NuclideData],
                     ejectile: Optional[NuclideData], residual: Optional[NuclideData],
                     excitation: float = 0.0) -> float:
    """Q-value of the channel populating ``excitation`` in the residual."""
    mt, mp, me, mr = (n.mass for n in _check_roles(target, projectile, ejectile, residual))
    return mt + mp - me - mr - excitation


def threshold_energy(target: Optional[NuclideData], projectile: Optional[NuclideData],
                     ejectile: Optional[NuclideData], residual: Optional[NuclideData],
                     excitation: float = 0.0) -> float:
    """Beam threshold energy (MeV) of the channel; 0.0 when exothermic."""
    q = reaction_q_value(target, projectile, ejectile, residual, excitation)
    return float(_threshold_energy(projectile.mass, ejectile.mass, residual.mass, q))


def ejectile_energy(target: Optional[NuclideData], projectile: Optional[NuclideData],
                    ejectile: Optional[NuclideData], residual: Optional[NuclideData],
                    beam_energy: float, spectrometer_angle: float,
                    excitation: float = 0.0) -> float:
    """
    Laboratory kinetic energy (MeV) of the ejectile at the spectrometer angle.

    Raises:
        UnresolvedNuclideError: If any role is missing.
        InvalidParameterError: For a negative or non-finite beam energy or a
            non-finite excitation energy.
        KinematicallyForbiddenError: If the channel is closed at this level.
    """
    mt, mp, me, mr = (n.mass for n in _check_roles(target, projectile, ejectile, residual))
    _check_beam(beam_energy, spectrometer_angle)
    _check_levels((excitation,))

    status, energy = _ejectile_energy(mt, mp, me, mr, float(beam_energy),
                                      float(spectrometer_angle), float(excitation))
    if status == KIN_FORBIDDEN:
        raise KinematicallyForbiddenError(excitation)
    return float(energy)


def excitation_to_rho(target: Optional[NuclideData], projectile: Optional[NuclideData],
                      ejectile: Optional[NuclideData], residual: Optional[NuclideData],
                      beam_energy: float, magnetic_field: float,
                      spectrometer_angle: float, excitation: float) -> Tuple[float, float]:
    """
    Rigidity of the ejectile leaving the residual at ``excitation``.

    Args:
        target, projectile, ejectile, residual: Resolved nuclide data
        beam_energy: Beam kinetic energy in MeV
        magnetic_field: Spectrometer field in kG
        spectrometer_angle: Lab angle in degrees
        excitation: Excitation energy of the residual in MeV

    Returns:
        Tuple of (excitation, rho) with rho in cm.

    Raises:
        UnresolvedNuclideError: If any role is missing.
        InvalidParameterError: For non-physical field, charge or energy, or a
            non-finite excitation energy.
        KinematicallyForbiddenError: If the channel is closed at this level.
    """
    mt, mp, me, mr = (n.mass for n in _check_roles(target, projectile, ejectile, residual))
    _check_beam(beam_energy, spectrometer_angle)
    _check_optics(magnetic_field, ejectile)
    _check_levels((excitation,))

    status, energy = _ejectile_energy(mt, mp, me, mr, float(beam_energy),
                                      float(spectrometer_angle), float(excitation))
    if status == KIN_FORBIDDEN:
        raise KinematicallyForbiddenError(excitation)
    rho = _rigidity(energy, me, ejectile.z, float(magnetic_field))
    return excitation, float(rho)


def rho_spectrum(target: Optional[NuclideData], projectile: Optional[NuclideData],
                 ejectile: Optional[NuclideData], residual: Optional[NuclideData],
                 beam_energy: float, magnetic_field: float, spectrometer_angle: float,
                 levels: Sequence[float]) -> Tuple[List[Tuple[float, float]], List[float]]:
    """
    Rigidities for a whole list of excitation energies.

    Levels are processed in the given order. Closed channels are left out
    of the result and returned separately.

    Returns:
        Tuple of (rho_values, forbidden_levels) where rho_values is a list of
        (excitation, rho) pairs.

    Raises:
        InvalidParameterError: If any level is non-finite; nothing is
            computed in that case.
    """
    nuclides = _check_roles(target, projectile, ejectile, residual)
    _check_beam(beam_energy, spectrometer_angle)
    _check_optics(magnetic_field, ejectile)

    energies = np.asarray(levels, dtype=np.float64)
    if energies.size == 0:
        return [], []
    _check_levels(energies)

    masses = np.array([n.mass for n in nuclides], dtype=np.float64)
    status, rho = _rho_spectrum(masses, float(beam_energy), float(spectrometer_angle),
                                float(magnetic_field), ejectile.z, energies)

    rho_values = []
    forbidden = []
    for ex, st, r in zip(levels, status, rho):
        if st == KIN_FORBIDDEN:
            forbidden.append(float(ex))
        else:
            rho_values.append((float(ex), float(r)))
    return rho_values, forbidden
