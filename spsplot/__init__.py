"""
SPS Plot: Reaction Kinematics for Split-Pole Spectrometer Experiments

This package computes where the ejectiles of two-body nuclear reactions land
on the focal plane of a fixed-field magnetic spectrometer. For each
reaction target(projectile, ejectile)residual and each excitation level of
the residual, the ejectile's magnetic rigidity (rho, in cm) is calculated
for a given beam energy, spectrometer angle and field.

Key Features:
- Non-relativistic two-body kinematics with JIT-compiled kernels
- Reaction data model with derived residual and identifier
- Batch evaluation of whole reaction sets with per-reaction error isolation
- Static position-spectrum figures

Classes:
    Reaction: One reaction and its excitation levels
    ReactionSet: Ordered collection of reactions
    SpectrometerSettings: Angle, beam energy, field and rho window
    MassTable: In-memory mass lookup
"""

from .config import SpectrometerSettings
from .errors import (
    ExcitationFetchError,
    InvalidParameterError,
    KinematicallyForbiddenError,
    NoExcitationDataError,
    SpsPlotError,
    UnresolvedNuclideError,
)
from .evaluator import ReactionSet, evaluate, evaluate_reaction
from .kinematics import ejectile_energy, excitation_to_rho, rho_spectrum, threshold_energy
from .nuclear_data import MassTable, NuclideData, StaticExcitationSource, parse_isotope
from .reaction import Reaction, resolve

__version__ = "0.1.0"
__all__ = [
    "Reaction",
    "ReactionSet",
    "SpectrometerSettings",
    "MassTable",
    "NuclideData",
    "StaticExcitationSource",
    "parse_isotope",
    "resolve",
    "evaluate",
    "evaluate_reaction",
    "excitation_to_rho",
    "ejectile_energy",
    "rho_spectrum",
    "threshold_energy",
    "SpsPlotError",
    "UnresolvedNuclideError",
    "NoExcitationDataError",
    "ExcitationFetchError",
    "KinematicallyForbiddenError",
    "InvalidParameterError",
]
