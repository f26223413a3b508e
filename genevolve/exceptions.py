"""
Exception types raised by the GenEvolve engine.

Engine-level failures are fatal: they abort the run and are never retried.
Stochastic non-convergence is not an error, a run that exhausts its
generation budget simply reports the best fitness it reached.
"""


class GenEvolveError(Exception):
    """Base for all GenEvolve exceptions."""

    pass


class ConfigurationError(GenEvolveError):
    """Invalid run parameters, raised before the generation loop starts."""

    pass


class MissingContextError(GenEvolveError):
    """A fitness evaluation needs externally supplied data that is missing."""

    pass
