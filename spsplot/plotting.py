"""
Position spectrum figure for an evaluated reaction set.

Each reaction gets its own row (its index in the set) and color. Every
(excitation, rho) pair is drawn as a thin bar at rho; the focal-plane
acceptance window is marked with red lines.
"""

from typing import Optional

import matplotlib.pyplot as plt

from .config import SpectrometerSettings
from .evaluator import ReactionSet

BAR_HEIGHT = 0.5
BAR_WIDTH = 0.01
ROW_OFFSET = 0.25


def plot_rho_spectrum(reaction_set: ReactionSet, settings: Optional[SpectrometerSettings] = None,
                      ax=None, label_levels: bool = True):
    """
    Draw the rigidity spectrum of ``reaction_set``.

    Args:
        reaction_set: Evaluated reactions
        settings: Provides the rho window (defaults if omitted)
        ax: Matplotlib axes to draw into; a new figure is created if None
        label_levels: Annotate each bar with its excitation energy

    Returns:
        The matplotlib Axes.
    """
    settings = settings or SpectrometerSettings()
    if ax is None:
        _, ax = plt.subplots(figsize=(12, 6))

    ax.axvline(settings.rho_min, color='red', linewidth=1.0)
    ax.axvline(settings.rho_max, color='red', linewidth=1.0)

    for index, reaction in enumerate(reaction_set):
        color = f"C{index % 10}"
        y_value = index + ROW_OFFSET
        if not reaction.rho_values:
            continue

        rhos = [rho for _, rho in reaction.rho_values]
        ax.bar(rhos, BAR_HEIGHT, width=BAR_WIDTH, bottom=y_value, color=color,
               edgecolor=color, linewidth=1.0, label=reaction.identifier)

        if label_levels:
            for excitation, rho in reaction.rho_values:
                if settings.rho_min - 5.0 <= rho <= settings.rho_max + 5.0:
                    ax.annotate(f"{excitation:.3f}", (rho, y_value + BAR_HEIGHT),
                                rotation=90, fontsize=7, ha='center', va='bottom',
                                color=color)

    ax.set_xlim(settings.rho_min - 5.0, settings.rho_max + 5.0)
    ax.set_ylim(-1.0, len(reaction_set) + 1.0)
    ax.set_yticks([])
    ax.set_xlabel('Rho (cm)')
    ax.set_title(f"SPS: {settings.spectrometer_angle:g}°, {settings.beam_energy:g} MeV, "
                 f"{settings.magnetic_field:g} kG")
    if any(reaction.rho_values for reaction in reaction_set):
        ax.legend(loc='upper right')
    return ax
