# Potential scale reduction factor by Gelman and Rubin 1992
#
# The computations follow Bayesian Data Analysis, 2nd edition (Gelman, Carlin,
# Stern and Rubin, 2003), pages 296-297, and the notation tries to be
# consistent with it.

import numpy as np
import pandas as pd
from loguru import logger

from .errors import DrawsFormatError, PreconditionError, UnbalancedDrawsError
from .family import filter_family


def _n_chains(draws):
    if "nChains" in draws.attrs:
        return int(draws.attrs["nChains"])
    return int(draws["Chain"].nunique())


def _check_balanced(draws):
    """ Every (Parameter, Chain) pair must hold nIterations draws """
    m = _n_chains(draws)
    chains_per_parameter = draws.groupby("Parameter", observed=True)["Chain"].nunique()
    incomplete = chains_per_parameter[chains_per_parameter != m]
    if len(incomplete) > 0:
        missing = ", ".join("%s (%d)" % (p, k) for p, k in incomplete.head(5).items())
        raise UnbalancedDrawsError(
            "Expected draws from %d chains for every parameter, got: %s" % (m, missing))

    counts = draws.groupby(["Parameter", "Chain"], observed=True).size()
    n = int(draws.attrs.get("nIterations", counts.max()))
    unbalanced = counts[counts != n]
    if len(unbalanced) > 0:
        pairs = ", ".join("%s/chain %s (%d)" % (p, c, k) for (p, c), k in unbalanced.head(5).items())
        raise UnbalancedDrawsError(
            "Expected %d draws for every parameter and chain, got: %s" % (n, pairs))
    return n


def compute_rhat(draws, family=None):
    """
    Potential Scale Reduction Factor (Rhat), proposed by Gelman and Rubin (1992),
    in the version from the second edition of Bayesian Data Analysis.

    At least two chains are required.

    Parameters:
        draws(pandas.DataFrame): Simulation draws
            Columns:
                Name: Parameter, dtype: str
                Name: Chain, dtype: int
                Name: value, dtype: float
        family(str, re.Pattern or callable): Restrict the computation to a family
            of parameters before computing (see filter_family)

    Returns:
        result(pandas.DataFrame): One row per parameter
            Columns:
                Name: Parameter, dtype: str
                Name: B, dtype: float (between-sequence variance)
                Name: W, dtype: float (within-sequence variance)
                Name: wa, dtype: float (weighted average, var.hat+)
                Name: Rhat, dtype: Float64 (<NA> when the parameter does not vary)
    """

    if _n_chains(draws) < 2:
        raise PreconditionError("At least two chains are required")

    if family is not None:
        draws = filter_family(draws, family)

    if len(draws) == 0:
        raise DrawsFormatError("No draws to compute Rhat on")

    n = _check_balanced(draws)

    by_chain = draws.groupby(["Parameter", "Chain"], observed=True)["value"]
    chains = pd.DataFrame({"psi_dot": by_chain.mean(), "s2j": by_chain.var(ddof=1)})

    # Between-sequence variance, using psi.j and psi.. (psi.j is constant per parameter)
    by_parameter = chains.groupby(level="Parameter", observed=True)
    B = by_parameter["psi_dot"].var(ddof=1) * n
    # Within-sequence variance
    W = by_parameter["s2j"].mean()

    result = pd.DataFrame({"B": B, "W": W}).reset_index()
    result["wa"] = ((n - 1) / n) * result["W"] + (1 / n) * result["B"]

    with np.errstate(divide="ignore", invalid="ignore"):
        rhat = np.sqrt(result["wa"].to_numpy() / result["W"].to_numpy())
    # For parameters that do not vary, Rhat is undefined
    rhat[~(result["W"].to_numpy() > 0)] = np.nan
    result["Rhat"] = pd.array(rhat, dtype="Float64")

    undefined = result.loc[result["Rhat"].isna(), "Parameter"].tolist()
    if undefined:
        logger.warning("Rhat undefined for parameters without within-chain variance: {}", ", ".join(map(str, undefined)))
    logger.debug("Computed Rhat for {} parameters over {} iterations", len(result), n)

    return result[["Parameter", "B", "W", "wa", "Rhat"]]


def rhat_chains(chains):
    """
    Rhat for a single parameter given as an array shaped (chains, iterations).
    It is near 1 when the chains have converged. Returns NaN when the
    within-chain variance is zero.
    """
    chains = np.asarray(chains, dtype=float)
    if chains.ndim != 2:
        raise DrawsFormatError("Expected an array shaped (chains, iterations)")
    m, n = chains.shape
    if m < 2:
        raise PreconditionError("At least two chains are required")
    B = n * np.var(np.mean(chains, axis=1), ddof=1)
    W = np.mean(np.var(chains, axis=1, ddof=1)) if n > 1 else np.nan
    if not W > 0:
        return float("nan")
    wa = ((n - 1) / n) * W + B / n
    return float(np.sqrt(wa / W))


def not_converged(result, threshold=1.1):
    """ Parameters whose Rhat exceeds the threshold """
    flagged = result[result["Rhat"].fillna(0) > threshold]
    return flagged["Parameter"].tolist()
