"""
Entropy analysis result record and batch helpers.
"""

from dataclasses import astuple, dataclass, fields
from typing import Sequence

import numpy as np

from vcrc_sim.core.errors import ConfigurationError


@dataclass(frozen=True)
class EntropyAnalysisResult:
    """
    Loss-ratio breakdown of a cycle's specific work. All values in percent.

    Attributes:
        thermodynamic_perfection: Minimum work / cycle specific work
        min_specific_work_ratio: Reverse-Carnot minimum work share
        compressor_energy_loss_ratio: Compressor irreversibility share
        condenser_energy_loss_ratio: Condenser share (0 for transcritical cycles)
        gas_cooler_energy_loss_ratio: Gas cooler share (0 for subcritical cycles)
        expansion_valves_energy_loss_ratio: All throttles combined
        ejector_energy_loss_ratio: Ejector share
        evaporator_energy_loss_ratio: Evaporator share
        recuperator_energy_loss_ratio: Recuperator share
        economizer_energy_loss_ratio: Economizer share
        mixing_energy_loss_ratio: Mixing junctions share
        analysis_relative_error: Mismatch between reconstructed and solved isentropic work
    """
    thermodynamic_perfection: float
    min_specific_work_ratio: float
    compressor_energy_loss_ratio: float
    condenser_energy_loss_ratio: float
    gas_cooler_energy_loss_ratio: float
    expansion_valves_energy_loss_ratio: float
    ejector_energy_loss_ratio: float
    evaporator_energy_loss_ratio: float
    recuperator_energy_loss_ratio: float
    economizer_energy_loss_ratio: float
    mixing_energy_loss_ratio: float
    analysis_relative_error: float

    def total(self) -> float:
        """Minimum-work ratio plus every loss ratio (100 by construction)."""
        return (self.min_specific_work_ratio
                + self.compressor_energy_loss_ratio
                + self.condenser_energy_loss_ratio
                + self.gas_cooler_energy_loss_ratio
                + self.expansion_valves_energy_loss_ratio
                + self.ejector_energy_loss_ratio
                + self.evaporator_energy_loss_ratio
                + self.recuperator_energy_loss_ratio
                + self.economizer_energy_loss_ratio
                + self.mixing_energy_loss_ratio)

    @classmethod
    def average(cls, results: Sequence['EntropyAnalysisResult']) -> 'EntropyAnalysisResult':
        """Field-by-field arithmetic mean."""
        if not results:
            raise ValueError("At least one result is required to average")
        table = np.array([astuple(result) for result in results], dtype=float)
        means = table.mean(axis=0)
        return cls(**{f.name: float(value) for f, value in zip(fields(cls), means)})


def entropy_analysis(cycles: Sequence, indoor: Sequence[float],
                     outdoor: Sequence[float]) -> EntropyAnalysisResult:
    """
    Average entropy analysis over several operating points.

    Args:
        cycles: Solved cycles, one per operating point
        indoor: Indoor reservoir temperatures [K], one per cycle
        outdoor: Outdoor reservoir temperatures [K], one per cycle

    Raises:
        ConfigurationError: If the sequences differ in length
    """
    cycles, indoor, outdoor = list(cycles), list(indoor), list(outdoor)
    if not len(cycles) == len(indoor) == len(outdoor):
        raise ConfigurationError("The lists should have the same length!")
    return EntropyAnalysisResult.average(
        [cycle.entropy_analysis(t_in, t_out) for cycle, t_in, t_out in zip(cycles, indoor, outdoor)]
    )
