import re

import numpy as np
import pytest
from psrf import EmptyFamilyError, filter_family, load_draws

draws = load_draws(np.zeros((2, 3, 4)), parameters=["beta[1]", "beta[2]", "sigma", "betas"])


@pytest.mark.parametrize("family,expected", [
    ("beta", ["beta[1]", "beta[2]", "betas"]),
    (r"^beta\[", ["beta[1]", "beta[2]"]),
    (re.compile("^sig"), ["sigma"]),
    (lambda name: name.endswith("s"), ["betas"]),
])
def test_filter_family(family, expected):
    subset = filter_family(draws, family)
    assert subset["Parameter"].unique().tolist() == expected
    assert subset.attrs["nParameters"] == len(expected)
    assert subset.attrs["nChains"] == 2
    assert subset.attrs["nIterations"] == 3


def test_empty_family():
    with pytest.raises(EmptyFamilyError):
        filter_family(draws, "gamma")


def test_input_untouched():
    filter_family(draws, "sigma")
    assert draws.attrs["nParameters"] == 4
