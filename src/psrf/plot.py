## Dotplot of Potential Scale Reduction Factors

import math
import re

import matplotlib.pyplot as plt
import numpy as np
from loguru import logger

GREEK = (
    "alpha", "beta", "gamma", "delta", "epsilon", "varepsilon", "zeta", "eta",
    "theta", "vartheta", "iota", "kappa", "lambda", "mu", "nu", "xi", "pi",
    "varpi", "rho", "varrho", "sigma", "varsigma", "tau", "upsilon", "phi",
    "varphi", "chi", "psi", "omega",
    "Gamma", "Delta", "Theta", "Lambda", "Xi", "Pi", "Sigma", "Upsilon", "Phi",
    "Psi", "Omega",
)

_word = re.compile(r"[A-Za-z]+")
_index = re.compile(r"\[([^\]]*)\]")


def greek_label(name):
    """
    Mathtext version of a parameter name: Greek letter names become symbols
    and indices between square brackets become subscripts.

        beta[1]      -> $\\beta_{1}$
        sigma.y[2,3] -> $\\sigma.y_{2,3}$
    """
    label = _word.sub(lambda m: "\\" + m.group(0) if m.group(0) in GREEK else m.group(0), name)
    label = _index.sub(lambda m: "_{%s}" % m.group(1), label)
    return "$%s$" % label


def _scaling_enabled(scaling):
    if scaling is None or scaling is False:
        return False
    return not (scaling == 0 or math.isnan(scaling))


def x_limits(rhat, scaling=1.5):
    """
    Limits for the Rhat axis. The lower limit is the minimum Rhat; the upper
    limit is `scaling`, or the maximum Rhat if it is larger.
    Returns None when scaling is disabled or there is no Rhat to show.
    """
    if not _scaling_enabled(scaling):
        return None
    values = rhat.dropna().to_numpy(dtype=float)
    if len(values) == 0:
        logger.warning("No defined Rhat values, the x-axis is not scaled")
        return None
    upper = max(float(scaling), values.max())
    return values.min(), upper


def render_rhat_plot(result, scaling=1.5, greek=False):
    """
    Plot a dotplot of Potential Scale Reduction Factors.

    Parameters:
        result(pandas.DataFrame): Output of compute_rhat
            Columns:
                Name: Parameter, dtype: str
                Name: Rhat, dtype: Float64
        scaling(float): Upper limit for the x-axis. By default it is 1.5, to help
                        contextualize the convergence. When None, 0 or NaN the axis is not scaled.
        greek(bool): Whether parameter labels have to be parsed to get Greek letters

    Returns:
        fig(matplotlib.figure.Figure)
    """

    parameters = result["Parameter"].astype(str).tolist()
    rhat = result["Rhat"]
    y = np.arange(len(parameters))
    defined = rhat.notna().to_numpy()

    fig, ax = plt.subplots(figsize=(6, max(2.5, 0.3 * len(parameters) + 1.5)))
    ax.scatter(rhat[defined].to_numpy(dtype=float), y[defined], color='k')
    ax.set_yticks(y)
    ax.set_yticklabels([greek_label(p) for p in parameters] if greek else parameters)
    ax.set_ylim(-0.5, len(parameters) - 0.5)
    ax.set_xlabel(r'$\hat{R}$')
    ax.set_ylabel('Parameter')
    ax.set_title('Potential Scale Reduction Factors')
    ax.grid(axis='y', linestyle=':', alpha=0.5)

    limits = x_limits(rhat, scaling)
    if limits is not None:
        lower, upper = limits
        if lower == upper:
            # Single distinct value, matplotlib needs a non-empty range
            ax.set_xlim(lower - 0.01, upper + 0.01)
        else:
            ax.set_xlim(lower, upper)

    fig.tight_layout()
    return fig
