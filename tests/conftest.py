import pytest

from spsplot import NuclideData, Reaction, StaticExcitationSource

# Nuclear masses in MeV
TEST_MASSES = {
    (6, 12): NuclideData("12C", 11174.862, 6, 12),
    (1, 2): NuclideData("2H", 1875.613, 1, 2),
    (1, 1): NuclideData("1H", 938.272, 1, 1),
    (6, 13): NuclideData("13C", 12109.481, 6, 13),
    (2, 4): NuclideData("4He", 3727.379, 2, 4),
    (5, 10): NuclideData("10B", 9324.436, 5, 10),
}


def lookup(z, a):
    return TEST_MASSES.get((z, a))


@pytest.fixture
def mass_lookup():
    return lookup


@pytest.fixture
def nuclides():
    """(target, projectile, ejectile, residual) for 12C(d,p)13C."""
    return (TEST_MASSES[(6, 12)], TEST_MASSES[(1, 2)],
            TEST_MASSES[(1, 1)], TEST_MASSES[(6, 13)])


@pytest.fixture
def level_source():
    return StaticExcitationSource({"13C": [0.0, 4.439]})


@pytest.fixture
def dp_reaction(mass_lookup, level_source):
    reaction = Reaction(target=(6, 12), projectile=(1, 2), ejectile=(1, 1))
    reaction.resolve(mass_lookup)
    reaction.populate_excitation_levels(level_source)
    return reaction
