"""
Reaction set evaluation.

``ReactionSet`` keeps reactions in insertion order; the index of a reaction
is also its color and row in the position spectrum. ``evaluate`` runs the
kinematics solver over every excitation level of every reaction, one
reaction at a time. A failing reaction is reported against itself and never
stops the others.
"""

import logging
from typing import Iterator, List, Optional, Tuple

from .config import SpectrometerSettings
from .errors import (
    InvalidParameterError,
    KinematicallyForbiddenError,
    UnresolvedNuclideError,
)
from .kinematics import rho_spectrum
from .reaction import Reaction

logger = logging.getLogger(__name__)

_EVALUATION_ERRORS = (KinematicallyForbiddenError, InvalidParameterError)


def evaluate_reaction(reaction: Reaction, beam_energy: float, magnetic_field: float,
                      spectrometer_angle: float) -> bool:
    """
    Recompute ``reaction.rho_values`` from scratch.

    Levels are evaluated fetched first, then extras, each in stored order.
    Closed channels are skipped and listed in ``reaction.forbidden_levels``.

    Returns:
        True if the reaction was evaluated, False if it was refused
        (unresolved nuclides or invalid parameters).
    """
    reaction.rho_values = []
    reaction.forbidden_levels = []
    reaction.errors = [e for e in reaction.errors if not isinstance(e, _EVALUATION_ERRORS)]
    reaction.invalidate()

    if not reaction.is_resolved:
        reported = {e.role for e in reaction.errors if isinstance(e, UnresolvedNuclideError)}
        for role in ("target", "projectile", "ejectile", "residual"):
            if getattr(reaction, f"{role}_data") is None and role not in reported:
                reaction.errors.append(UnresolvedNuclideError(
                    role, getattr(reaction, f"{role}_z"), getattr(reaction, f"{role}_a")))
        logger.error("Cannot evaluate unresolved reaction %s", reaction.identifier or "(empty)")
        return False

    levels = reaction.all_levels()
    try:
        rho_values, forbidden = rho_spectrum(
            reaction.target_data, reaction.projectile_data,
            reaction.ejectile_data, reaction.residual_data,
            beam_energy, magnetic_field, spectrometer_angle, levels)
    except InvalidParameterError as exc:
        reaction.errors.append(exc)
        logger.error("Refusing to evaluate %s: %s", reaction.identifier, exc)
        return False

    for excitation in forbidden:
        error = KinematicallyForbiddenError(excitation)
        reaction.errors.append(error)
        logger.warning("%s: %s", reaction.identifier, error)

    for excitation, rho in rho_values:
        logger.debug("Excitation: %s, rho: %s", excitation, rho)

    reaction.rho_values = rho_values
    reaction.forbidden_levels = forbidden
    reaction.mark_evaluated(beam_energy, magnetic_field, spectrometer_angle)
    logger.info("%s: %d of %d levels evaluated", reaction.identifier,
                len(rho_values), len(levels))
    return True


def evaluate(reaction_set: "ReactionSet", beam_energy: float, magnetic_field: float,
             spectrometer_angle: float) -> List[bool]:
    """
    Evaluate every reaction of ``reaction_set``.

    Returns:
        Per-reaction success flags, in set order.
    """
    return [evaluate_reaction(reaction, beam_energy, magnetic_field, spectrometer_angle)
            for reaction in reaction_set]


class ReactionSet:
    """Ordered collection of reactions. Duplicates are allowed."""

    def __init__(self, reactions: Optional[List[Reaction]] = None):
        self._reactions: List[Reaction] = list(reactions) if reactions else []

    def __len__(self) -> int:
        return len(self._reactions)

    def __iter__(self) -> Iterator[Reaction]:
        return iter(self._reactions)

    def __getitem__(self, index: int) -> Reaction:
        return self._reactions[index]

    def append(self, reaction: Reaction) -> Reaction:
        self._reactions.append(reaction)
        return reaction

    def new_reaction(self) -> Reaction:
        """Append and return an empty reaction."""
        return self.append(Reaction())

    def remove(self, index: int) -> Reaction:
        """Remove the reaction at ``index``; later reactions shift down."""
        return self._reactions.pop(index)

    def evaluate(self, settings: Optional[SpectrometerSettings] = None) -> List[bool]:
        """
        Evaluate all reactions with ``settings`` (defaults if omitted).

        Settings are passed through as given; a value the solver refuses is
        recorded on each reaction instead of being raised.
        """
        settings = settings or SpectrometerSettings()
        return evaluate(self, settings.beam_energy, settings.magnetic_field,
                        settings.spectrometer_angle)

    def rho_table(self) -> List[Tuple[str, List[Tuple[float, float]]]]:
        """(identifier, rho_values) for every reaction, in set order."""
        return [(reaction.identifier, list(reaction.rho_values)) for reaction in self._reactions]
