"""Core abstractions: state points, thermodynamic processes and error kinds."""

from vcrc_sim.core.errors import (
    ConfigurationError, NoSolutionError, PropertyBackendError, VCRCError,
)
from vcrc_sim.core.state import StatePoint

__all__ = [
    'ConfigurationError',
    'NoSolutionError',
    'PropertyBackendError',
    'StatePoint',
    'VCRCError',
]
