"""
Reaction: the data model of one two-body reaction.

A reaction target(projectile, ejectile)residual is defined by the (Z, A) of
the first three roles. The residual (Z, A) follows from charge and mass
number balance and is recomputed whenever one of the other roles changes.

``resolve`` is the only method that writes the derived fields (residual
(Z, A), the four resolved ``NuclideData`` and the identifier); it always
rewrites all of them together.
"""

import logging
import math
from typing import List, Optional, Tuple

from .errors import (
    ExcitationFetchError,
    InvalidParameterError,
    NoExcitationDataError,
    SpsPlotError,
    UnresolvedNuclideError,
)
from .kinematics import reaction_q_value
from .nuclear_data import ExcitationSource, MassLookup, NuclideData

logger = logging.getLogger(__name__)


class Reaction:
    """
    One reaction and its excitation levels.

    A fresh reaction is empty: all (Z, A) are zero, nothing is resolved and
    the identifier is an empty string. It becomes resolved once all four
    mass lookups succeed and evaluated once ``rho_values`` is filled.

    Attributes:
        excitation_levels: Levels (MeV) supplied by the excitation source.
        extra_excitation_levels: User-added levels (MeV), evaluated after
            the fetched ones.
        rho_values: (excitation, rho) pairs from the last evaluation.
        forbidden_levels: Levels skipped in the last evaluation because the
            channel is closed.
        errors: Conditions reported against this reaction.
    """

    def __init__(self, target: Tuple[int, int] = (0, 0), projectile: Tuple[int, int] = (0, 0),
                 ejectile: Tuple[int, int] = (0, 0)):
        self.target_z, self.target_a = target
        self.projectile_z, self.projectile_a = projectile
        self.ejectile_z, self.ejectile_a = ejectile
        self.residual_z = 0
        self.residual_a = 0
        self._update_residual()

        self.target_data: Optional[NuclideData] = None
        self.projectile_data: Optional[NuclideData] = None
        self.ejectile_data: Optional[NuclideData] = None
        self.residual_data: Optional[NuclideData] = None
        self.identifier = ""

        self.excitation_levels: List[float] = []
        self.extra_excitation_levels: List[float] = []
        self.rho_values: List[Tuple[float, float]] = []
        self.forbidden_levels: List[float] = []
        self.errors: List[SpsPlotError] = []

        # (beam_energy, magnetic_field, spectrometer_angle) of the last evaluation
        self._evaluated_with: Optional[Tuple[float, float, float]] = None

    def __repr__(self):
        return (f"Reaction({self.identifier or 'unresolved'}, "
                f"levels={len(self.all_levels())}, rho_values={len(self.rho_values)})")

    # ------------------------------------------------------------------
    # Role definition
    # ------------------------------------------------------------------
    def set_target(self, z: int, a: int) -> None:
        self.target_z, self.target_a = z, a
        self._roles_changed()

    def set_projectile(self, z: int, a: int) -> None:
        self.projectile_z, self.projectile_a = z, a
        self._roles_changed()

    def set_ejectile(self, z: int, a: int) -> None:
        self.ejectile_z, self.ejectile_a = z, a
        self._roles_changed()

    def _update_residual(self) -> None:
        self.residual_z = self.target_z + self.projectile_z - self.ejectile_z
        self.residual_a = self.target_a + self.projectile_a - self.ejectile_a

    def _roles_changed(self) -> None:
        # Resolved data no longer matches the roles
        self._update_residual()
        self.target_data = None
        self.projectile_data = None
        self.ejectile_data = None
        self.residual_data = None
        self.identifier = ""
        self.invalidate()

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------
    def resolve(self, lookup: MassLookup) -> bool:
        """
        Look up all four nuclides and rebuild the derived fields.

        Missing nuclides are recorded as ``UnresolvedNuclideError`` in
        ``errors`` and shown as "None" in the identifier; nothing is raised.
        Excitation levels are kept, but previous rho values become stale.

        Args:
            lookup: Mass lookup ``(z, a) -> Optional[NuclideData]``

        Returns:
            True if all four roles were resolved.
        """
        self._update_residual()
        self.errors = [e for e in self.errors if not isinstance(e, UnresolvedNuclideError)]

        resolved = []
        for role in ("target", "projectile", "ejectile", "residual"):
            z = getattr(self, f"{role}_z")
            a = getattr(self, f"{role}_a")
            data = lookup(z, a)
            if data is None:
                error = UnresolvedNuclideError(role, z, a)
                self.errors.append(error)
                logger.warning("%s", error)
            setattr(self, f"{role}_data", data)
            resolved.append(data)

        self.identifier = "{}({},{}){}".format(
            *(data.isotope if data is not None else "None" for data in resolved)
        )
        self.invalidate()

        logger.info("Reaction: %s", self.identifier)
        return self.is_resolved

    def populate_excitation_levels(self, source: ExcitationSource) -> bool:
        """
        Fetch the residual's excitation levels from ``source``.

        The levels are stored in the order the source returns them.
        Non-finite values are dropped. A failing source, a non-numeric
        answer or one without any finite level is recorded as
        ``NoExcitationDataError`` and leaves ``excitation_levels`` empty.

        Returns:
            True if at least one level was stored.
        """
        self.errors = [e for e in self.errors if not isinstance(e, NoExcitationDataError)]
        self.excitation_levels = []
        self.invalidate()

        if self.residual_data is None:
            error = NoExcitationDataError("None", "residual nucleus is unresolved")
            self.errors.append(error)
            logger.error("No isotope found for reaction: %s", self.identifier)
            return False

        isotope = self.residual_data.isotope
        try:
            fetched = [float(e) for e in source(isotope)]
        except (ExcitationFetchError, TypeError, ValueError) as exc:
            error = NoExcitationDataError(isotope, str(exc))
            self.errors.append(error)
            logger.error("Error fetching excitation levels: %s", exc)
            return False

        levels = [e for e in fetched if math.isfinite(e)]
        if len(levels) < len(fetched):
            logger.warning("Dropped %d non-finite excitation levels for %s",
                           len(fetched) - len(levels), isotope)

        if not levels:
            self.errors.append(NoExcitationDataError(isotope))
            logger.warning("No excitation levels found for %s", isotope)
            return False

        self.excitation_levels = levels
        logger.info("Fetched %d excitation levels for %s", len(levels), isotope)
        return True

    # ------------------------------------------------------------------
    # Extra levels
    # ------------------------------------------------------------------
    def add_extra_level(self, excitation: float) -> None:
        """Append a user-supplied excitation energy (MeV, >= 0)."""
        if not math.isfinite(excitation) or excitation < 0.0:
            raise InvalidParameterError(f"Excitation energy must be >= 0 MeV, got {excitation}")
        self.extra_excitation_levels.append(float(excitation))
        self.invalidate()

    def remove_extra_level(self, index: int) -> float:
        level = self.extra_excitation_levels.pop(index)
        self.invalidate()
        return level

    def clear_extra_levels(self) -> None:
        self.extra_excitation_levels.clear()
        self.invalidate()

    def all_levels(self) -> List[float]:
        """Fetched levels followed by the extra levels."""
        return list(self.excitation_levels) + list(self.extra_excitation_levels)

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------
    @property
    def is_resolved(self) -> bool:
        return None not in (self.target_data, self.projectile_data,
                            self.ejectile_data, self.residual_data)

    @property
    def is_evaluated(self) -> bool:
        return self._evaluated_with is not None

    def invalidate(self) -> None:
        """Mark the current rho values as stale."""
        self._evaluated_with = None

    def mark_evaluated(self, beam_energy: float, magnetic_field: float,
                       spectrometer_angle: float) -> None:
        self._evaluated_with = (beam_energy, magnetic_field, spectrometer_angle)

    def is_stale(self, beam_energy: float, magnetic_field: float,
                 spectrometer_angle: float) -> bool:
        """True unless rho_values were computed with exactly these settings."""
        return self._evaluated_with != (beam_energy, magnetic_field, spectrometer_angle)

    def q_value(self, excitation: float = 0.0) -> float:
        """Q-value (MeV) for populating ``excitation``; requires a resolved reaction."""
        return reaction_q_value(self.target_data, self.projectile_data,
                                self.ejectile_data, self.residual_data, excitation)


def resolve(reaction: Reaction, lookup: MassLookup) -> bool:
    """Resolve ``reaction`` against ``lookup``. See ``Reaction.resolve``."""
    return reaction.resolve(lookup)
