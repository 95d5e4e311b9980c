import matplotlib.pyplot as plt
import pandas as pd
import pytest
from psrf import render_rhat_plot
from psrf.plot import greek_label, x_limits

result = pd.DataFrame({
    "Parameter": ["alpha", "beta[1]", "beta[2]", "sigma"],
    "B": [1.0, 2.0, 3.0, 0.0],
    "W": [1.0, 1.0, 1.0, 0.0],
    "wa": [1.0, 1.0, 1.0, 0.0],
    "Rhat": pd.array([1.01, 1.2, 1.05, None], dtype="Float64"),
})


def test_render():
    fig = render_rhat_plot(result)
    ax = fig.axes[0]
    assert ax.get_title() == "Potential Scale Reduction Factors"
    assert ax.get_xlabel() == r"$\hat{R}$"
    assert [t.get_text() for t in ax.get_yticklabels()] == ["alpha", "beta[1]", "beta[2]", "sigma"]
    # The parameter without Rhat has no point
    assert len(ax.collections[0].get_offsets()) == 3
    assert ax.get_xlim() == pytest.approx((1.01, 1.5))
    plt.close(fig)


def test_scaling_never_clips():
    fig = render_rhat_plot(result, scaling=1.1)
    assert fig.axes[0].get_xlim() == pytest.approx((1.01, 1.2))
    plt.close(fig)


@pytest.mark.parametrize("scaling", [None, 0, float("nan")])
def test_scaling_disabled(scaling):
    assert x_limits(result["Rhat"], scaling) is None


def test_all_missing():
    missing = result.assign(Rhat=pd.array([None] * 4, dtype="Float64"))
    assert x_limits(missing["Rhat"]) is None
    fig = render_rhat_plot(missing)
    plt.close(fig)


def test_greek():
    fig = render_rhat_plot(result, greek=True)
    labels = [t.get_text() for t in fig.axes[0].get_yticklabels()]
    assert labels[0] == r"$\alpha$"
    assert labels[1] == r"$\beta_{1}$"
    plt.close(fig)


@pytest.mark.parametrize("name,label", [
    ("beta[1]", r"$\beta_{1}$"),
    ("sigma.y[2,3]", r"$\sigma.y_{2,3}$"),
    ("Omega", r"$\Omega$"),
    ("mu0", r"$\mu0$"),
    ("alphabet", r"$alphabet$"),
])
def test_greek_label(name, label):
    assert greek_label(name) == label
