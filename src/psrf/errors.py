""" Exceptions raised by psrf """


class PSRFError(ValueError):
    """ Base class for every error raised by psrf """


class PreconditionError(PSRFError):
    """ The draws do not meet the requirements of the diagnostic (e.g. a single chain) """


class UnbalancedDrawsError(PSRFError):
    """ Not every (Parameter, Chain) pair holds the same number of draws """


class EmptyFamilyError(PSRFError):
    """ A family filter selected no parameters """


class DrawsFormatError(PSRFError):
    """ Sampler output or a draws table has an unexpected layout """
