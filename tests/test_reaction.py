"""
Tests for the Reaction data model: residual derivation, resolution,
identifier, excitation levels and staleness.
"""

import pytest

from spsplot import (
    ExcitationFetchError,
    InvalidParameterError,
    NoExcitationDataError,
    Reaction,
    UnresolvedNuclideError,
    resolve,
)


class TestResidual:

    def test_empty_reaction(self):
        reaction = Reaction()
        assert (reaction.residual_z, reaction.residual_a) == (0, 0)
        assert reaction.identifier == ""
        assert not reaction.is_resolved
        assert not reaction.is_evaluated
        assert reaction.rho_values == []

    def test_dp_on_carbon(self):
        reaction = Reaction(target=(6, 12), projectile=(1, 2), ejectile=(1, 1))
        assert (reaction.residual_z, reaction.residual_a) == (6, 13)

    def test_recomputed_on_role_change(self, mass_lookup):
        reaction = Reaction(target=(6, 12), projectile=(1, 2), ejectile=(1, 1))
        reaction.resolve(mass_lookup)
        reaction.set_ejectile(2, 4)
        assert (reaction.residual_z, reaction.residual_a) == (5, 10)
        # Old resolved data no longer applies
        assert reaction.residual_data is None
        assert reaction.identifier == ""

    def test_setters_build_residual(self):
        reaction = Reaction()
        reaction.set_target(6, 12)
        reaction.set_projectile(1, 2)
        reaction.set_ejectile(1, 1)
        assert (reaction.residual_z, reaction.residual_a) == (6, 13)


class TestResolve:

    def test_resolves_all_roles(self, mass_lookup):
        reaction = Reaction(target=(6, 12), projectile=(1, 2), ejectile=(1, 1))
        assert reaction.resolve(mass_lookup)
        assert reaction.is_resolved
        assert reaction.identifier == "12C(2H,1H)13C"
        assert reaction.residual_data.isotope == "13C"
        assert reaction.errors == []

    def test_module_function(self, mass_lookup):
        reaction = Reaction(target=(6, 12), projectile=(1, 2), ejectile=(2, 4))
        assert resolve(reaction, mass_lookup)
        assert reaction.identifier == "12C(2H,4He)10B"

    def test_unresolved_roles_show_none(self, mass_lookup):
        reaction = Reaction(target=(6, 12), projectile=(99, 300), ejectile=(1, 1))
        assert not reaction.resolve(mass_lookup)
        assert reaction.identifier == "12C(None,1H)None"
        roles = [e.role for e in reaction.errors if isinstance(e, UnresolvedNuclideError)]
        assert roles == ["projectile", "residual"]
        assert reaction.projectile_data is None

    def test_lookup_called_for_every_role(self):
        calls = []

        def recording_lookup(z, a):
            calls.append((z, a))
            return None

        Reaction(target=(6, 12), projectile=(1, 2), ejectile=(1, 1)).resolve(recording_lookup)
        assert calls == [(6, 12), (1, 2), (1, 1), (6, 13)]

    def test_resolve_replaces_previous_errors(self, mass_lookup):
        reaction = Reaction(target=(6, 12), projectile=(99, 300), ejectile=(1, 1))
        reaction.resolve(mass_lookup)
        reaction.set_projectile(1, 2)
        reaction.resolve(mass_lookup)
        assert reaction.errors == []

    def test_resolve_keeps_levels(self, dp_reaction, mass_lookup):
        dp_reaction.resolve(mass_lookup)
        assert dp_reaction.excitation_levels == [0.0, 4.439]

    def test_q_value(self, dp_reaction):
        assert dp_reaction.q_value() == pytest.approx(2.722, abs=1e-9)

    def test_q_value_requires_resolution(self):
        with pytest.raises(UnresolvedNuclideError):
            Reaction(target=(6, 12), projectile=(1, 2), ejectile=(1, 1)).q_value()


class TestExcitationLevels:

    def test_populated_in_source_order(self, mass_lookup):
        reaction = Reaction(target=(6, 12), projectile=(1, 2), ejectile=(1, 1))
        reaction.resolve(mass_lookup)
        assert reaction.populate_excitation_levels(lambda isotope: [3.089, 0.0, 3.685])
        assert reaction.excitation_levels == [3.089, 0.0, 3.685]

    def test_source_receives_residual_label(self, mass_lookup):
        seen = []

        def source(isotope):
            seen.append(isotope)
            return [0.0]

        reaction = Reaction(target=(6, 12), projectile=(1, 2), ejectile=(1, 1))
        reaction.resolve(mass_lookup)
        reaction.populate_excitation_levels(source)
        assert seen == ["13C"]

    def test_source_error(self, mass_lookup):
        def failing(isotope):
            raise ExcitationFetchError("Table not found")

        reaction = Reaction(target=(6, 12), projectile=(1, 2), ejectile=(1, 1))
        reaction.resolve(mass_lookup)
        assert not reaction.populate_excitation_levels(failing)
        assert reaction.excitation_levels == []
        error = reaction.errors[-1]
        assert isinstance(error, NoExcitationDataError)
        assert error.isotope == "13C"
        assert "Table not found" in str(error)

    def test_empty_source(self, mass_lookup):
        reaction = Reaction(target=(6, 12), projectile=(1, 2), ejectile=(1, 1))
        reaction.resolve(mass_lookup)
        assert not reaction.populate_excitation_levels(lambda isotope: [])
        assert isinstance(reaction.errors[-1], NoExcitationDataError)

    def test_non_finite_levels_dropped(self, mass_lookup):
        reaction = Reaction(target=(6, 12), projectile=(1, 2), ejectile=(1, 1))
        reaction.resolve(mass_lookup)
        assert reaction.populate_excitation_levels(
            lambda isotope: [0.0, float("nan"), 4.439, float("inf")])
        assert reaction.excitation_levels == [0.0, 4.439]
        assert not any(isinstance(e, NoExcitationDataError) for e in reaction.errors)

    def test_only_non_finite_levels(self, mass_lookup):
        reaction = Reaction(target=(6, 12), projectile=(1, 2), ejectile=(1, 1))
        reaction.resolve(mass_lookup)
        assert not reaction.populate_excitation_levels(lambda isotope: [float("nan")])
        assert reaction.excitation_levels == []
        assert isinstance(reaction.errors[-1], NoExcitationDataError)

    @pytest.mark.parametrize("answer", [["abc"], [0.0, None], None])
    def test_malformed_source_answer(self, mass_lookup, answer):
        reaction = Reaction(target=(6, 12), projectile=(1, 2), ejectile=(1, 1))
        reaction.resolve(mass_lookup)
        assert not reaction.populate_excitation_levels(lambda isotope: answer)
        assert reaction.excitation_levels == []
        error = reaction.errors[-1]
        assert isinstance(error, NoExcitationDataError)
        assert error.isotope == "13C"

    def test_unresolved_residual(self, mass_lookup):
        reaction = Reaction(target=(6, 12), projectile=(99, 300), ejectile=(1, 1))
        reaction.resolve(mass_lookup)
        assert not reaction.populate_excitation_levels(lambda isotope: [0.0])
        assert reaction.excitation_levels == []

    def test_extra_levels_appended(self, dp_reaction):
        dp_reaction.add_extra_level(8.2)
        dp_reaction.add_extra_level(6.864)
        assert dp_reaction.all_levels() == [0.0, 4.439, 8.2, 6.864]
        assert dp_reaction.excitation_levels == [0.0, 4.439]

    def test_remove_and_clear_extra_levels(self, dp_reaction):
        dp_reaction.add_extra_level(1.0)
        dp_reaction.add_extra_level(2.0)
        assert dp_reaction.remove_extra_level(0) == 1.0
        assert dp_reaction.extra_excitation_levels == [2.0]
        dp_reaction.clear_extra_levels()
        assert dp_reaction.all_levels() == [0.0, 4.439]

    @pytest.mark.parametrize("level", [-0.5, float("inf"), float("nan")])
    def test_invalid_extra_level(self, dp_reaction, level):
        with pytest.raises(InvalidParameterError):
            dp_reaction.add_extra_level(level)


class TestStaleness:

    def test_mark_and_compare(self, dp_reaction):
        assert dp_reaction.is_stale(16.0, 8.7, 35.0)
        dp_reaction.mark_evaluated(16.0, 8.7, 35.0)
        assert dp_reaction.is_evaluated
        assert not dp_reaction.is_stale(16.0, 8.7, 35.0)
        assert dp_reaction.is_stale(16.0, 8.7, 40.0)

    def test_changes_invalidate(self, dp_reaction, mass_lookup):
        dp_reaction.mark_evaluated(16.0, 8.7, 35.0)
        dp_reaction.add_extra_level(1.0)
        assert dp_reaction.is_stale(16.0, 8.7, 35.0)

        dp_reaction.mark_evaluated(16.0, 8.7, 35.0)
        dp_reaction.resolve(mass_lookup)
        assert dp_reaction.is_stale(16.0, 8.7, 35.0)
