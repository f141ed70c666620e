"""
Compressor: raises refrigerant pressure using shaft work.
"""

from dataclasses import dataclass

from vcrc_sim.core.errors import ConfigurationError


@dataclass(frozen=True)
class Compressor:
    """
    Compressor specification.

    Governing relation (applied by the cycles):
        h_out = h_in + (h_out_isentropic - h_in) / η

    Parameters:
        efficiency: Isentropic efficiency, 0 < η < 1
    """
    efficiency: float

    def __post_init__(self):
        if not 0 < self.efficiency < 1:
            raise ConfigurationError(
                f"Isentropic efficiency of the compressor should be in (0; 1), got {self.efficiency}"
            )
