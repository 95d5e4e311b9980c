import re

from loguru import logger

from .errors import EmptyFamilyError


def family_predicate(family):
    """
    Build a predicate over parameter names.

    A family of parameters is any group of parameters with the same name but a
    different index between square brackets (beta[1], beta[2], ...). `family`
    can be a regular expression (string or compiled) searched in the name, or
    a callable already taking a name and returning a bool.
    """
    if callable(family) and not isinstance(family, re.Pattern):
        return family
    pattern = family if isinstance(family, re.Pattern) else re.compile(str(family))
    return lambda name: pattern.search(name) is not None


def filter_family(draws, family):
    """
    Subset the draws to the parameters of a family.

    Parameters:
        draws(pandas.DataFrame): Simulation draws
        family(str, re.Pattern or callable): Family name, regular expression or predicate

    Returns:
        draws(pandas.DataFrame): Draws of the matching parameters, with the
            nChains and nIterations attributes of the input and an updated nParameters
    """

    predicate = family_predicate(family)
    names = draws["Parameter"].astype(str)
    selected = {name for name in names.unique() if predicate(name)}
    if not selected:
        raise EmptyFamilyError("No parameter matches the family %r" % (family,))

    subset = draws[names.isin(selected)].reset_index(drop=True)
    subset.attrs = dict(draws.attrs)
    subset.attrs["nParameters"] = len(selected)
    logger.debug("Family {!r} selected {} of {} parameters", family, len(selected), names.nunique())
    return subset
