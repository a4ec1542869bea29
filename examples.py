#!/usr/bin/env python3
"""
SPS Plot - Examples

This script demonstrates the usage of the SPS kinematics toolkit by planning
a deuteron-induced run on a carbon target:

1. 12C(d,p)13C
2. 12C(d,d)12C
3. 12C(d,a)10B

Each reaction is resolved against the built-in mass table, given a short
list of known excitation levels, evaluated at the default spectrometer
settings (35 deg, 16 MeV, 8.7 kG) and drawn as a position spectrum.
"""

import logging

import matplotlib.pyplot as plt

from spsplot import MassTable, Reaction, ReactionSet, SpectrometerSettings, StaticExcitationSource
from spsplot.logging_config import setup_logging
from spsplot.plotting import plot_rho_spectrum

# Excitation levels in MeV
LEVELS = {
    "13C": [0.0, 3.089, 3.685, 3.854, 6.864, 7.492, 7.547, 7.686],
    "12C": [0.0, 4.439, 7.654, 9.641],
    "10B": [0.0, 0.718, 1.740, 2.154, 3.587, 4.774, 5.110],
}


def build_reactions(mass_table, source):
    """Create and resolve the example reactions."""
    reactions = ReactionSet()

    # (target, projectile, ejectile) as (Z, A)
    definitions = [
        ((6, 12), (1, 2), (1, 1)),
        ((6, 12), (1, 2), (1, 2)),
        ((6, 12), (1, 2), (2, 4)),
    ]

    for target, projectile, ejectile in definitions:
        reaction = reactions.append(Reaction(target, projectile, ejectile))
        reaction.resolve(mass_table)
        reaction.populate_excitation_levels(source)

    # A level not in the table, added by hand
    reactions[0].add_extra_level(8.2)
    return reactions


def print_table(reactions, settings):
    """Print Q-values and rigidities for every reaction."""
    for reaction in reactions:
        print("=" * 60)
        print(f"Reaction: {reaction.identifier}")
        print(f"Q-value: {reaction.q_value():.3f} MeV")
        print("=" * 60)
        for excitation, rho in reaction.rho_values:
            marker = "*" if settings.in_acceptance(rho) else " "
            print(f"  {marker} Ex = {excitation:6.3f} MeV   rho = {rho:7.3f} cm")
        for excitation in reaction.forbidden_levels:
            print(f"    Ex = {excitation:6.3f} MeV   closed")
        print()


def main():
    """Run the example."""
    setup_logging(logging.INFO)

    settings = SpectrometerSettings().validate()
    reactions = build_reactions(MassTable.default(), StaticExcitationSource(LEVELS))

    reactions.evaluate(settings)
    print_table(reactions, settings)

    ax = plot_rho_spectrum(reactions, settings)
    ax.figure.tight_layout()
    ax.figure.savefig('sps_spectrum.png', dpi=150, bbox_inches='tight')
    plt.show()

    print("Position spectrum saved as 'sps_spectrum.png' (* = inside the rho window)")


if __name__ == "__main__":
    main()
