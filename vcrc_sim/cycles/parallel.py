"""
Two-stage cycle with parallel compression.
"""

from typing import Optional

from vcrc_sim.analysis.analyzer import EntropyAnalyzer
from vcrc_sim.analysis.nodes import (
    EvaporatorNode, ExpansionValveNode, HeatReleaserNode, MixingNode,
)
from vcrc_sim.components.auxiliary import IntermediateVessel
from vcrc_sim.components.compressor import Compressor
from vcrc_sim.components.evaporator import Evaporator
from vcrc_sim.components.heat_releasers import HeatReleaser
from vcrc_sim.core import flows, processes
from vcrc_sim.core.cycle import TwoStageCycle


class VCRCWithPC(TwoStageCycle):
    """
    Two-stage cycle with parallel compression.

    The flash-vessel vapor is compressed by a second (parallel) compressor
    straight to the heat-rejection pressure; both discharges mix before the
    heat releaser.

        m_hr = m_ev * (1 + x7 / (1 - x7))

    Points:
        1: Evaporator outlet
        2s/2: Main compressor discharge
        3: Vessel vapor outlet (dew point)
        4s/4: Parallel compressor discharge
        5s/5: Mixed discharge
        6: Condenser or gas cooler outlet
        7: First expansion valve outlet (vessel inlet)
        8: Vessel liquid outlet (bubble point)
        9: Second expansion valve outlet
    """

    def __init__(self, evaporator: Evaporator, compressor: Compressor,
                 heat_releaser: HeatReleaser,
                 intermediate_vessel: Optional[IntermediateVessel] = None):
        super().__init__(evaporator, compressor, heat_releaser, intermediate_vessel)
        self._check_refrigerant_type()
        self._solve()

    def _solve(self):
        fluid = self.refrigerant
        intermediate = self.intermediate_pressure
        high = self.heat_releaser.pressure
        efficiency = self.compressor.efficiency

        self.point1 = self.evaporator.outlet
        self.point2s = processes.isentropic_compression(self.point1, high)
        self.point2 = processes.compression(self.point1, high, efficiency)
        self.point3 = fluid.dew_point(pressure=intermediate)
        self.point6 = self.heat_releaser.outlet
        self.point7 = processes.isenthalpic_expansion(self.point6, intermediate)
        self.point4s = processes.isentropic_compression(self.point3, high)
        self.point4 = processes.compression(self.point3, high, efficiency)
        self.point5s = processes.mixing(self.evaporator_mass_flow, self.point2s,
                                        self.intermediate_mass_flow, self.point4s)
        self.point5 = processes.mixing(self.evaporator_mass_flow, self.point2,
                                       self.intermediate_mass_flow, self.point4)
        self.point8 = fluid.bubble_point(pressure=intermediate)
        self.point9 = processes.isenthalpic_expansion(self.point8, self.evaporator.pressure)

        flows.check_balance(
            [self.heat_releaser_mass_flow],
            [flows.separator_vapor_flow(self.heat_releaser_mass_flow, self.point7.enthalpy,
                                        self.point3.enthalpy, self.point8.enthalpy),
             self.evaporator_mass_flow],
            rel_tol=flows.SEPARATOR_BALANCE_TOLERANCE,
        )

    @property
    def heat_releaser_mass_flow(self) -> float:
        return self.evaporator_mass_flow * (1 + flows.separator_vapor_ratio(self.point7.quality))

    @property
    def isentropic_specific_work(self) -> float:
        return (self.point2s.enthalpy - self.point1.enthalpy
                + self.intermediate_mass_flow * (self.point4s.enthalpy - self.point3.enthalpy))

    @property
    def specific_cooling_capacity(self) -> float:
        return self.point1.enthalpy - self.point9.enthalpy

    @property
    def specific_heating_capacity(self) -> float:
        return self.heat_releaser_mass_flow * (self.point5.enthalpy - self.point6.enthalpy)

    def _analyzer(self) -> EntropyAnalyzer:
        return EntropyAnalyzer(
            self,
            EvaporatorNode(self.evaporator_mass_flow, self.point9, self.point1),
            HeatReleaserNode(self.heat_releaser_mass_flow, self.point5s, self.point6),
            [ExpansionValveNode(self.heat_releaser_mass_flow, self.point6, self.point7),
             ExpansionValveNode(self.evaporator_mass_flow, self.point8, self.point9)],
            mixing=MixingNode(self.point5, self.evaporator_mass_flow, self.point2,
                              self.intermediate_mass_flow, self.point4),
        )
