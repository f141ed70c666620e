"""
Single-stage cycles: simple VCRC and VCRC with a recuperator.
"""

from vcrc_sim.analysis.analyzer import EntropyAnalyzer
from vcrc_sim.analysis.nodes import (
    EvaporatorNode, ExpansionValveNode, HeatExchangerNode, HeatReleaserNode,
)
from vcrc_sim.components.auxiliary import Recuperator
from vcrc_sim.components.compressor import Compressor
from vcrc_sim.components.evaporator import Evaporator
from vcrc_sim.components.heat_releasers import HeatReleaser
from vcrc_sim.core import processes
from vcrc_sim.core.cycle import Cycle
from vcrc_sim.core.errors import ConfigurationError


class SimpleVCRC(Cycle):
    """
    Simple single-stage cycle.

    Points:
        1: Evaporator outlet
        2s/2: Compressor discharge (isentropic / real)
        3: Condenser or gas cooler outlet
        4: Expansion valve outlet

    Example:
        >>> cycle = SimpleVCRC(
        ...     Evaporator('R744', 278.15, 8),
        ...     Compressor(0.8),
        ...     GasCooler('R744', 313.15),
        ... )
        >>> round(cycle.eer, 4)
        2.6245
    """

    def __init__(self, evaporator: Evaporator, compressor: Compressor,
                 heat_releaser: HeatReleaser):
        super().__init__(evaporator, compressor, heat_releaser)
        self._solve()

    def _solve(self):
        high = self.heat_releaser.pressure
        self.point1 = self.evaporator.outlet
        self.point2s = processes.isentropic_compression(self.point1, high)
        self.point2 = processes.compression(self.point1, high, self.compressor.efficiency)
        self.point3 = self.heat_releaser.outlet
        self.point4 = processes.isenthalpic_expansion(self.point3, self.evaporator.pressure)

    @property
    def heat_releaser_mass_flow(self) -> float:
        return self.evaporator_mass_flow

    @property
    def isentropic_specific_work(self) -> float:
        return self.point2s.enthalpy - self.point1.enthalpy

    @property
    def specific_cooling_capacity(self) -> float:
        return self.point1.enthalpy - self.point4.enthalpy

    @property
    def specific_heating_capacity(self) -> float:
        return self.point2.enthalpy - self.point3.enthalpy

    def _analyzer(self) -> EntropyAnalyzer:
        return EntropyAnalyzer(
            self,
            EvaporatorNode(self.evaporator_mass_flow, self.point4, self.point1),
            HeatReleaserNode(self.heat_releaser_mass_flow, self.point2s, self.point3),
            [ExpansionValveNode(self.heat_releaser_mass_flow, self.point3, self.point4)],
        )


class VCRCWithRecuperator(Cycle):
    """
    Single-stage cycle with a recuperator (suction-line heat exchanger).

    The evaporator outlet is heated to within ΔT of the heat-releaser outlet;
    the heat-releaser outlet gives up the same enthalpy before throttling.

    Points:
        1: Evaporator outlet
        2: Recuperator 'cold' outlet (compressor suction)
        3s/3: Compressor discharge
        4: Condenser or gas cooler outlet
        5: Recuperator 'hot' outlet
        6: Expansion valve outlet
    """

    def __init__(self, evaporator: Evaporator, recuperator: Recuperator,
                 compressor: Compressor, heat_releaser: HeatReleaser):
        super().__init__(evaporator, compressor, heat_releaser)
        self.recuperator = recuperator
        self._solve()

    def _solve(self):
        point1 = self.evaporator.outlet
        point4 = self.heat_releaser.outlet
        if point4.temperature - self.recuperator.temperature_difference <= point1.temperature:
            raise ConfigurationError(
                "Too high temperature difference at the recuperator 'hot' side!"
            )

        high = self.heat_releaser.pressure
        self.point1 = point1
        self.point2 = processes.heating_to(
            point1, temperature=point4.temperature - self.recuperator.temperature_difference
        )
        self.point3s = processes.isentropic_compression(self.point2, high)
        self.point3 = processes.compression(self.point2, high, self.compressor.efficiency)
        self.point4 = point4
        self.point5 = processes.cooling_to(
            point4, enthalpy=point4.enthalpy - (self.point2.enthalpy - point1.enthalpy)
        )
        self.point6 = processes.isenthalpic_expansion(self.point5, self.evaporator.pressure)

    @property
    def heat_releaser_mass_flow(self) -> float:
        return self.evaporator_mass_flow

    @property
    def isentropic_specific_work(self) -> float:
        return self.point3s.enthalpy - self.point2.enthalpy

    @property
    def specific_cooling_capacity(self) -> float:
        return self.point1.enthalpy - self.point6.enthalpy

    @property
    def specific_heating_capacity(self) -> float:
        return self.point3.enthalpy - self.point4.enthalpy

    def _analyzer(self) -> EntropyAnalyzer:
        return EntropyAnalyzer(
            self,
            EvaporatorNode(self.evaporator_mass_flow, self.point6, self.point1),
            HeatReleaserNode(self.heat_releaser_mass_flow, self.point3s, self.point4),
            [ExpansionValveNode(self.heat_releaser_mass_flow, self.point5, self.point6)],
            recuperator=HeatExchangerNode(
                self.evaporator_mass_flow, self.point1, self.point2,
                self.heat_releaser_mass_flow, self.point4, self.point5,
            ),
        )
