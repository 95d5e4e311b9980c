# __init__.py

from .draws import load_draws, read_draws
from .errors import (DrawsFormatError, EmptyFamilyError, PreconditionError,
                     PSRFError, UnbalancedDrawsError)
from .family import filter_family
from .plot import render_rhat_plot
from .rhat import compute_rhat, not_converged, rhat_chains
from .settings import Settings

__doc__ = """
psrf - Potential Scale Reduction Factors
========================================
psrf computes the Gelman-Rubin convergence diagnostic (Rhat) for the draws of
several independent MCMC chains and draws a dotplot with one point per
parameter. Values close to 1 indicate that the chains have mixed; values above
about 1.1 suggest the chains have not yet converged to the same distribution.
"""

__all__ = [
    "load_draws",
    "read_draws",
    "filter_family",
    "compute_rhat",
    "rhat_chains",
    "not_converged",
    "render_rhat_plot",
    "Settings",
    "PSRFError",
    "PreconditionError",
    "UnbalancedDrawsError",
    "EmptyFamilyError",
    "DrawsFormatError",
]
