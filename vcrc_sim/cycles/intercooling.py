"""
Two-stage cycles with intercooling in a flash vessel.

IIC (incomplete intercooling): the low-stage discharge mixes with the
saturated vapor from the vessel, so the high-stage suction stays superheated.

CIC (complete intercooling): the low-stage discharge is bubbled through the
vessel liquid (barbotage) until it reaches the dew point.
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


class VCRCWithIIC(TwoStageCycle):
    """
    Two-stage cycle with incomplete intercooling.

    Points:
        1: Evaporator outlet
        2s/2: Low-stage discharge
        3: High-stage suction (mix of 2 and 7)
        4s/4: High-stage discharge
        5: Condenser or gas cooler outlet
        6: First expansion valve outlet (vessel inlet)
        7: Vessel vapor outlet (dew point)
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

        self.point1 = self.evaporator.outlet
        self.point2s = processes.isentropic_compression(self.point1, intermediate)
        self.point2 = processes.compression(self.point1, intermediate, self.compressor.efficiency)
        self.point5 = self.heat_releaser.outlet
        self.point6 = processes.isenthalpic_expansion(self.point5, intermediate)
        self.point7 = fluid.dew_point(pressure=intermediate)
        self.point8 = fluid.bubble_point(pressure=intermediate)
        self.point9 = processes.isenthalpic_expansion(self.point8, self.evaporator.pressure)
        self.point3 = processes.mixing(self.evaporator_mass_flow, self.point2,
                                       self.intermediate_mass_flow, self.point7)
        self.point4s = processes.isentropic_compression(self.point3, high)
        self.point4 = processes.compression(self.point3, high, self.compressor.efficiency)

        flows.check_balance(
            [self.heat_releaser_mass_flow],
            [flows.separator_vapor_flow(self.heat_releaser_mass_flow, self.point6.enthalpy,
                                        self.point7.enthalpy, self.point8.enthalpy),
             self.evaporator_mass_flow],
            rel_tol=flows.SEPARATOR_BALANCE_TOLERANCE,
        )

    @property
    def heat_releaser_mass_flow(self) -> float:
        return flows.separator_inlet_flow(self.evaporator_mass_flow, self.point6.quality)

    @property
    def isentropic_specific_work(self) -> float:
        return (self.point2s.enthalpy - self.point1.enthalpy
                + self.heat_releaser_mass_flow * (self.point4s.enthalpy - self.point3.enthalpy))

    @property
    def specific_cooling_capacity(self) -> float:
        return self.point1.enthalpy - self.point9.enthalpy

    @property
    def specific_heating_capacity(self) -> float:
        return self.heat_releaser_mass_flow * (self.point4.enthalpy - self.point5.enthalpy)

    def _analyzer(self) -> EntropyAnalyzer:
        return EntropyAnalyzer(
            self,
            EvaporatorNode(self.evaporator_mass_flow, self.point9, self.point1),
            HeatReleaserNode(self.heat_releaser_mass_flow, self.point4s, self.point5),
            [ExpansionValveNode(self.heat_releaser_mass_flow, self.point5, self.point6),
             ExpansionValveNode(self.evaporator_mass_flow, self.point8, self.point9)],
            mixing=MixingNode(self.point3, self.evaporator_mass_flow, self.point2,
                              self.intermediate_mass_flow, self.point7),
        )


class VCRCWithCIC(TwoStageCycle):
    """
    Two-stage cycle with complete intercooling.

    The barbotage flow m_b evaporates in the vessel to desuperheat the
    low-stage discharge down to the dew point:

        m_b = m_ev * (h2 - h3) / (h3 - h7)
        m_hr = (m_ev + m_b) / (1 - x6)

    All of m_hr passes through the high stage, so the intermediate flow
    equals the heat-releaser flow.

    Points:
        1: Evaporator outlet
        2s/2: Low-stage discharge
        3: High-stage suction (dew point)
        4s/4: High-stage discharge
        5: Condenser or gas cooler outlet
        6: First expansion valve outlet (vessel inlet)
        7: Vessel liquid outlet (bubble point)
        8: Second expansion valve outlet
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

        self.point1 = self.evaporator.outlet
        self.point2s = processes.isentropic_compression(self.point1, intermediate)
        self.point2 = processes.compression(self.point1, intermediate, self.compressor.efficiency)
        self.point3 = fluid.dew_point(pressure=intermediate)
        self.point4s = processes.isentropic_compression(self.point3, high)
        self.point4 = processes.compression(self.point3, high, self.compressor.efficiency)
        self.point5 = self.heat_releaser.outlet
        self.point6 = processes.isenthalpic_expansion(self.point5, intermediate)
        self.point7 = fluid.bubble_point(pressure=intermediate)
        self.point8 = processes.isenthalpic_expansion(self.point7, self.evaporator.pressure)

        flows.check_balance(
            [self.heat_releaser_mass_flow],
            [flows.separator_vapor_flow(self.heat_releaser_mass_flow, self.point6.enthalpy,
                                        self.point3.enthalpy, self.point7.enthalpy),
             self.evaporator_mass_flow, self.barbotage_mass_flow],
            rel_tol=flows.SEPARATOR_BALANCE_TOLERANCE,
        )

    @property
    def barbotage_mass_flow(self) -> float:
        return flows.intercooling_flow(self.evaporator_mass_flow,
                                       self.point2.enthalpy - self.point3.enthalpy,
                                       self.point3.enthalpy - self.point7.enthalpy)

    @property
    def heat_releaser_mass_flow(self) -> float:
        return flows.separator_inlet_flow(self.evaporator_mass_flow + self.barbotage_mass_flow,
                                          self.point6.quality)

    @property
    def intermediate_mass_flow(self) -> float:
        return self.heat_releaser_mass_flow

    @property
    def isentropic_specific_work(self) -> float:
        return (self.point2s.enthalpy - self.point1.enthalpy
                + self.heat_releaser_mass_flow * (self.point4s.enthalpy - self.point3.enthalpy))

    @property
    def specific_cooling_capacity(self) -> float:
        return self.point1.enthalpy - self.point8.enthalpy

    @property
    def specific_heating_capacity(self) -> float:
        return self.heat_releaser_mass_flow * (self.point4.enthalpy - self.point5.enthalpy)

    def _analyzer(self) -> EntropyAnalyzer:
        return EntropyAnalyzer(
            self,
            EvaporatorNode(self.evaporator_mass_flow, self.point8, self.point1),
            HeatReleaserNode(self.heat_releaser_mass_flow, self.point4s, self.point5),
            [ExpansionValveNode(self.heat_releaser_mass_flow, self.point5, self.point6),
             ExpansionValveNode(self.evaporator_mass_flow, self.point7, self.point8)],
            mixing=MixingNode(self.point3, self.evaporator_mass_flow, self.point2,
                              self.barbotage_mass_flow, self.point7),
        )
