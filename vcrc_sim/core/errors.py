"""
Error kinds raised while building or analysing a cycle.

Every error carries a ``kind`` tag so callers can branch without parsing
messages:
    - 'configuration': inconsistent or unsupported inputs
    - 'no_solution':   an iterative solve left its bracket or ran out of iterations
    - 'backend':       the property backend could not resolve a state
"""


class VCRCError(Exception):
    """Base class for all errors raised by vcrc_sim."""

    kind = 'error'


class ConfigurationError(VCRCError, ValueError):
    """Inputs are inconsistent with each other or with the chosen cycle."""

    kind = 'configuration'


class NoSolutionError(VCRCError, ArithmeticError):
    """An iterative solve did not converge inside its bracket."""

    kind = 'no_solution'

    def __init__(self, message: str = "Solution not found!"):
        super().__init__(message)


class PropertyBackendError(VCRCError, ValueError):
    """CoolProp rejected the requested input pair."""

    kind = 'backend'
