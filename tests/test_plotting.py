import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import pytest  # noqa: E402

from spsplot import Reaction, ReactionSet, SpectrometerSettings  # noqa: E402
from spsplot.plotting import plot_rho_spectrum  # noqa: E402


@pytest.fixture(autouse=True)
def close_figures():
    yield
    plt.close("all")


def test_spectrum_axes(dp_reaction):
    reactions = ReactionSet([dp_reaction, Reaction()])
    reactions.evaluate()

    ax = plot_rho_spectrum(reactions, SpectrometerSettings())

    assert ax.get_xlim() == (64.0, 92.0)
    assert ax.get_ylim() == (-1.0, 3.0)
    assert len(ax.patches) == 2
    labels = [text.get_text() for text in ax.get_legend().get_texts()]
    assert labels == ["12C(2H,1H)13C"]


def test_draws_into_given_axes(dp_reaction):
    reactions = ReactionSet([dp_reaction])
    reactions.evaluate()
    _, ax = plt.subplots()
    assert plot_rho_spectrum(reactions, ax=ax, label_levels=False) is ax
    assert len(ax.texts) == 0


def test_unevaluated_set():
    ax = plot_rho_spectrum(ReactionSet([Reaction()]))
    assert len(ax.patches) == 0
    assert ax.get_legend() is None
