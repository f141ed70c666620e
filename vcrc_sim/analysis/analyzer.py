"""
Variant-agnostic entropy (exergy) analyzer.

Decomposes the compressor work of any solved cycle into the reverse-Carnot
minimum work plus the work destroyed in each component:

    W_min   = q_cool * (T_hot - T_cold) / T_cold
    W_s*    = W_min + Σ losses                   (reconstructed isentropic work)
    W_comp  = W_s* * (1/η - 1)                   (compressor loss)
    W*      = W_s* + W_comp                      (reconstructed real work)

Every term is reported as a share of W*, so the shares add up to 100 %.
The reconstruction is then compared against the cycle's own isentropic work:
the relative error flags thermodynamic inconsistencies between the two.
"""

import logging
import warnings
from typing import Optional, Sequence, Union

from vcrc_sim.analysis.nodes import (
    EjectorNode, EvaporatorNode, ExpansionValveNode, HeatExchangerNode,
    HeatReleaserNode, MixingNode,
)
from vcrc_sim.analysis.result import EntropyAnalysisResult
from vcrc_sim.core.errors import ConfigurationError


logger = logging.getLogger(__name__)

# Temperatures closer than this are treated as equal [K]
TEMPERATURE_TOLERANCE = 1e-3

# Relative error above which a diagnostic warning is emitted [%]
RELATIVE_ERROR_WARNING = 5.0


class EntropyAnalyzer:
    """
    Entropy analysis of one solved cycle.

    Parameters:
        cycle: Solved cycle (supplies capacity, isentropic work and compressor efficiency)
        evaporator: Evaporator node
        heat_releaser: Condenser or gas cooler node
        expansion_valves: One to three expansion valve nodes
        ejector: Optional ejector node
        recuperator: Optional recuperator node
        economizer: Optional economizer node
        mixing: Mixing node, or a sequence of them
    """

    def __init__(self, cycle,
                 evaporator: EvaporatorNode,
                 heat_releaser: HeatReleaserNode,
                 expansion_valves: Sequence[ExpansionValveNode],
                 ejector: Optional[EjectorNode] = None,
                 recuperator: Optional[HeatExchangerNode] = None,
                 economizer: Optional[HeatExchangerNode] = None,
                 mixing: Union[MixingNode, Sequence[MixingNode]] = ()):
        if not 1 <= len(expansion_valves) <= 3:
            raise ValueError(
                f"One to three expansion valve nodes are required, got {len(expansion_valves)}"
            )
        self.cycle = cycle
        self.evaporator = evaporator
        self.heat_releaser = heat_releaser
        self.expansion_valves = tuple(expansion_valves)
        self.ejector = ejector
        self.recuperator = recuperator
        self.economizer = economizer
        self.mixing = (mixing,) if isinstance(mixing, MixingNode) else tuple(mixing)

    def perform_analysis(self, indoor: float, outdoor: float) -> EntropyAnalysisResult:
        """
        Args:
            indoor: Indoor reservoir temperature [K]
            outdoor: Outdoor reservoir temperature [K]

        Raises:
            ConfigurationError: Equal reservoir temperatures, or reservoirs that
                do not bracket the cycle's heat-exchange temperatures
        """
        cold, hot = min(indoor, outdoor), max(indoor, outdoor)
        if hot - cold <= TEMPERATURE_TOLERANCE:
            raise ConfigurationError("Indoor and outdoor temperatures should not be equal!")
        if cold <= self.evaporator.outlet.temperature:
            raise ConfigurationError(
                "Wrong temperature difference in the evaporator! "
                "Increase 'cold' source temperature."
            )
        if hot >= self.heat_releaser.outlet.temperature:
            raise ConfigurationError(
                "Wrong temperature difference in the condenser or gas cooler! "
                "Decrease 'hot' source temperature."
            )

        min_work = self.cycle.specific_cooling_capacity * (hot - cold) / cold
        heat_releaser_loss = self.heat_releaser.energy_loss(hot)
        expansion_valves_loss = sum(node.energy_loss(hot) for node in self.expansion_valves)
        ejector_loss = self.ejector.energy_loss(hot) if self.ejector else 0.0
        evaporator_loss = self.evaporator.energy_loss(cold, hot)
        recuperator_loss = self.recuperator.energy_loss(hot) if self.recuperator else 0.0
        economizer_loss = self.economizer.energy_loss(hot) if self.economizer else 0.0
        mixing_loss = sum(node.energy_loss(hot) for node in self.mixing)

        isentropic_work = (min_work + heat_releaser_loss + expansion_valves_loss + ejector_loss
                           + evaporator_loss + recuperator_loss + economizer_loss + mixing_loss)
        compressor_loss = isentropic_work * (1 / self.cycle.compressor.efficiency - 1)
        work = isentropic_work + compressor_loss

        def ratio(value: float) -> float:
            return value / work * 100

        solved_isentropic_work = self.cycle.isentropic_specific_work
        relative_error = abs(isentropic_work - solved_isentropic_work) / solved_isentropic_work * 100
        logger.debug("Entropy analysis of %r: reconstructed W_s=%.3f J/kg, solved W_s=%.3f J/kg",
                     self.cycle, isentropic_work, solved_isentropic_work)
        if relative_error > RELATIVE_ERROR_WARNING:
            warnings.warn(
                f"Entropy analysis relative error is {relative_error:.2f} % "
                f"for {type(self.cycle).__name__}"
            )

        is_transcritical = self.cycle.is_transcritical
        return EntropyAnalysisResult(
            thermodynamic_perfection=min_work / self.cycle.specific_work * 100,
            min_specific_work_ratio=ratio(min_work),
            compressor_energy_loss_ratio=ratio(compressor_loss),
            condenser_energy_loss_ratio=0.0 if is_transcritical else ratio(heat_releaser_loss),
            gas_cooler_energy_loss_ratio=ratio(heat_releaser_loss) if is_transcritical else 0.0,
            expansion_valves_energy_loss_ratio=ratio(expansion_valves_loss),
            ejector_energy_loss_ratio=ratio(ejector_loss),
            evaporator_energy_loss_ratio=ratio(evaporator_loss),
            recuperator_energy_loss_ratio=ratio(recuperator_loss),
            economizer_energy_loss_ratio=ratio(economizer_loss),
            mixing_energy_loss_ratio=ratio(mixing_loss),
            analysis_relative_error=relative_error,
        )
