from pathlib import Path

import numpy as np
import pandas as pd
from loguru import logger

from .errors import DrawsFormatError

COLUMNS = ["Iteration", "Chain", "Parameter", "value"]


def _annotate(draws):
    """ Store chain, iteration and parameter counts in the frame attributes """
    draws.attrs["nChains"] = int(draws["Chain"].nunique())
    draws.attrs["nParameters"] = int(draws["Parameter"].nunique())
    if len(draws) == 0:
        draws.attrs["nIterations"] = 0
    else:
        draws.attrs["nIterations"] = int(draws.groupby(["Parameter", "Chain"], sort=False).size().max())
    return draws


def _as_float(draws):
    """ Numeric draws, naming the parameters whose values are not numbers """
    try:
        draws["value"] = draws["value"].astype(float)
    except (ValueError, TypeError):
        bad = pd.to_numeric(draws["value"], errors="coerce").isna() & draws["value"].notna()
        names = draws.loc[bad, "Parameter"].astype(str).unique()
        raise DrawsFormatError("Non-numeric draws for: %s" % ", ".join(names[:5])) from None
    return draws


def _thin(draws, burnin, thin):
    if burnin < 0 or thin < 1:
        raise DrawsFormatError("burnin must be >= 0 and thin >= 1 (got %s, %s)" % (burnin, thin))
    if burnin == 0 and thin == 1:
        return draws
    # Position in the chain by iteration number, whatever the row order
    iteration = draws.groupby(["Parameter", "Chain"], sort=False)["Iteration"]
    position = iteration.rank(method="first").astype(int) - 1
    kept = draws[(position >= burnin) & ((position - burnin) % thin == 0)]
    if len(kept) == 0:
        raise DrawsFormatError("burnin of %d iterations leaves no draws" % burnin)
    return kept.reset_index(drop=True)


def _from_array(chains, parameters=None):
    chains = np.asarray(chains, dtype=float)
    if chains.ndim == 2:
        chains = chains[:, :, np.newaxis]
    if chains.ndim != 3:
        raise DrawsFormatError(
            "Expected an array shaped (chains, iterations, parameters), got %d dimensions" % chains.ndim)
    m, n, p = chains.shape
    if parameters is None:
        parameters = ["theta[%d]" % (i + 1) for i in range(p)]
    parameters = list(parameters)
    if len(parameters) != p:
        raise DrawsFormatError("Got %d parameter names for %d parameters" % (len(parameters), p))

    # Parameter varies slowest, then Chain, then Iteration
    values = chains.transpose(2, 0, 1).reshape(-1)
    return pd.DataFrame({
        "Iteration": np.tile(np.arange(1, n + 1), m * p),
        "Chain": np.tile(np.repeat(np.arange(1, m + 1), n), p),
        "Parameter": np.repeat(parameters, m * n),
        "value": values,
    })


def _from_chain_list(chains, chain_ids=None):
    names = list(chains[0].columns)
    if chain_ids is None:
        chain_ids = range(1, len(chains) + 1)
    frames = []
    for chain_id, chain in zip(chain_ids, chains):
        if list(chain.columns) != names:
            raise DrawsFormatError("Chain %s has columns %s, expected %s" % (chain_id, list(chain.columns), names))
        long = chain.reset_index(drop=True).melt(var_name="Parameter", value_name="value", ignore_index=False)
        long["Iteration"] = long.index + 1
        long["Chain"] = chain_id
        frames.append(long)
    draws = pd.concat(frames, ignore_index=True)
    # Keep the parameter order of the sampler output
    draws["order"] = draws["Parameter"].map({name: k for k, name in enumerate(names)})
    draws = draws.sort_values(["order", "Chain", "Iteration"], kind="stable")
    draws["Parameter"] = draws["Parameter"].astype(str)
    draws = _as_float(draws)
    return draws[COLUMNS].reset_index(drop=True)


def _from_wide(df, chain_column):
    if chain_column not in df:
        raise DrawsFormatError("Wide draws table needs a '%s' column" % chain_column)
    chain_ids, chains = [], []
    for chain_id, chain in df.groupby(chain_column, sort=True):
        chain_ids.append(chain_id)
        chains.append(chain.drop(columns=[c for c in (chain_column, "Iteration") if c in chain]))
    if not chains:
        raise DrawsFormatError("Wide draws table has no rows")
    return _from_chain_list(chains, chain_ids)


def _from_long(df):
    missing = {"Parameter", "Chain", "value"} - set(df.columns)
    if missing:
        raise DrawsFormatError("Draws table is missing columns: %s" % ", ".join(sorted(missing)))
    draws = df.copy()
    if "Iteration" not in draws:
        draws["Iteration"] = draws.groupby(["Parameter", "Chain"], sort=False).cumcount() + 1
    draws["Parameter"] = draws["Parameter"].astype(str)
    draws = _as_float(draws)
    return draws[COLUMNS].reset_index(drop=True)


def load_draws(raw, parameters=None, chain_column="Chain", burnin=0, thin=1):
    """
    Turn sampler output into a long table of simulation draws.

    Parameters:
        raw: Sampler output, one of
            numpy.ndarray shaped (chains, iterations, parameters)
            list of pandas.DataFrame, one per chain, one column per parameter
            pandas.DataFrame in wide format (a chain column plus one column per parameter)
            pandas.DataFrame in long format (columns Parameter, Chain, value)
        parameters(list): Parameter names for array input (default theta[1], theta[2], ...)
        chain_column(str): Name of the chain column of a wide table
        burnin(int): Number of initial iterations to discard in every chain
        thin(int): Keep one iteration out of every `thin`

    Returns:
        draws(pandas.DataFrame): Simulation draws
            Columns:
                Name: Iteration, dtype: int
                Name: Chain, dtype: int
                Name: Parameter, dtype: str
                Name: value, dtype: float
            Attributes:
                nChains, nIterations, nParameters
    """

    if isinstance(raw, pd.DataFrame):
        if {"Parameter", "value"} <= set(raw.columns):
            draws = _from_long(raw)
        else:
            draws = _from_wide(raw, chain_column)
    elif isinstance(raw, (list, tuple)) and raw and all(isinstance(c, pd.DataFrame) for c in raw):
        draws = _from_chain_list(list(raw))
    elif isinstance(raw, (np.ndarray, list, tuple)):
        draws = _from_array(raw, parameters)
    else:
        raise DrawsFormatError("Unsupported sampler output of type %s" % type(raw).__name__)

    draws = _annotate(_thin(draws, burnin, thin))
    logger.debug("Loaded {} draws: {} parameters, {} chains, {} iterations",
                 len(draws), draws.attrs["nParameters"], draws.attrs["nChains"], draws.attrs["nIterations"])
    return draws


def read_draws(path, **kwargs):
    """ Read simulation draws from a csv file, in long or wide format """

    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError("Draws file %s not found" % path)
    logger.info("Reading draws from {}", path)
    return load_draws(pd.read_csv(path), **kwargs)
