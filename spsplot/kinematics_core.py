"""
Core physics functions for SPS reaction kinematics calculations.

All masses and energies are in MeV, angles in degrees, magnetic field in kG
and rigidities in cm.

Functions:
    _ejectile_energy: Non-relativistic two-body ejectile kinetic energy
    _rigidity: Ejectile kinetic energy to magnetic rigidity
    _rho_spectrum: Rigidities for an array of excitation energies
    _threshold_energy: Beam threshold energy of an endothermic channel
"""

import numpy as np
from numba import jit

# Physical constants
C = 299792458.0  # Speed of light in m/s
QBRHO2P = 1.0e-9 * C  # Converts qBrho to momentum (kG*cm -> MeV/c)
DEG_TO_RAD = np.pi / 180.0

# Mass-table conversion constants (MeV)
AMU_TO_MEV = 931.49410242
ELECTRON_MASS = 0.51099895

# Kernel status codes
KIN_OK = 0
KIN_FORBIDDEN = 1


@jit(nopython=True)
def _ejectile_energy(mt, mp, me, mr, eb, thdeg, ex):
    """
    Calculate the laboratory kinetic energy of the ejectile.

    The outgoing momentum follows from the non-relativistic two-body
    quadratic. Of its two roots the forward-going one is kept: k1 when it is
    positive, otherwise k2.

    Args:
        mt, mp, me, mr: Target, projectile, ejectile and residual masses
        eb: Beam kinetic energy
        thdeg: Spectrometer (lab) angle in degrees
        ex: Excitation energy of the residual nucleus

    Returns:
        Tuple of (status, ejectile_energy). When status is KIN_FORBIDDEN
        the discriminant is negative and the energy is 0.0.
    """
    q = (mt + mp - me - mr) - ex

    term1 = np.sqrt(mp * me * eb) / (me + mr) * np.cos(thdeg * DEG_TO_RAD)
    term2 = (eb * (mr - mp) + mr * q) / (me + mr)

    disc = term1 * term1 + term2
    if disc < 0.0:
        return (KIN_FORBIDDEN, 0.0)

    root = np.sqrt(disc)
    k1 = term1 + root
    k2 = term1 - root

    if k1 > 0.0:
        return (KIN_OK, k1 * k1)
    return (KIN_OK, k2 * k2)


@jit(nopython=True)
def _rigidity(t, me, ze, bfield):
    """
    Convert ejectile kinetic energy to magnetic rigidity (radius in cm).
    """
    p = np.sqrt(t * (t + 2.0 * me))
    qbrho = p / QBRHO2P
    return qbrho / (bfield * ze)


@jit(nopython=True)
def _rho_spectrum(masses, eb, thdeg, bfield, ze, levels):
    """
    Calculate rigidities for every excitation energy in ``levels``.

    Args:
        masses: Array of masses [target, projectile, ejectile, residual]
        eb: Beam kinetic energy
        thdeg: Spectrometer angle in degrees
        bfield: Magnetic field in kG
        ze: Ejectile charge number
        levels: Array of excitation energies

    Returns:
        Tuple of (status, rho) arrays with one entry per level, in order.
    """
    n = levels.shape[0]
    status = np.zeros(n, dtype=np.int64)
    rho = np.zeros(n, dtype=np.float64)

    for i in range(n):
        st, t = _ejectile_energy(masses[0], masses[1], masses[2], masses[3],
                                 eb, thdeg, levels[i])
        status[i] = st
        if st == KIN_OK:
            rho[i] = _rigidity(t, masses[2], ze, bfield)

    return status, rho


@jit(nopython=True)
def _threshold_energy(mp, me, mr, q):
    """
    Non-relativistic beam threshold energy for a channel with Q-value q.

    Exothermic channels (q >= 0) have no threshold and return 0.0.
    """
    if q >= 0.0:
        return 0.0
    return -q * (me + mr) / (me + mr - mp)
