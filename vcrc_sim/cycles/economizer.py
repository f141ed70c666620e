"""
Two-stage cycles with an economizer.

Part of the heat-releaser outlet flow is throttled to the intermediate pressure
and evaporated against the main liquid line, subcooling it before the
evaporator throttle. The injected flow returns to the compression path:
  - VCRCWithEconomizer: as superheated vapor, mixed between the stages
  - VCRCWithEconomizerAndPC: as superheated vapor, via a parallel compressor
  - VCRCWithEconomizerAndTPI: as two-phase refrigerant (two-phase injection),
    sized so that the high-stage suction is exactly at the dew point
"""

from typing import Optional

from vcrc_sim.analysis.analyzer import EntropyAnalyzer
from vcrc_sim.analysis.nodes import (
    EvaporatorNode, ExpansionValveNode, HeatExchangerNode, HeatReleaserNode, MixingNode,
)
from vcrc_sim.components.auxiliary import Economizer, EconomizerWithTPI, IntermediateVessel
from vcrc_sim.components.compressor import Compressor
from vcrc_sim.components.evaporator import Evaporator
from vcrc_sim.components.heat_releasers import HeatReleaser
from vcrc_sim.core import flows, processes
from vcrc_sim.core.cycle import TwoStageCycle
from vcrc_sim.core.errors import ConfigurationError
from vcrc_sim.core.state import StatePoint


def check_economizer(hot_inlet: StatePoint, cold_inlet: StatePoint,
                     temperature_difference: float,
                     cold_outlet: Optional[StatePoint] = None):
    """
    Temperature-ordering rules of an economizer.

    Raises:
        ConfigurationError: The injected vapor is not colder than the hot inlet,
            or the 'cold' side temperature difference cannot be reached
    """
    if cold_outlet is not None and cold_outlet.temperature >= hot_inlet.temperature:
        raise ConfigurationError("Wrong temperature difference at the economizer 'hot' side!")
    if cold_inlet.temperature + temperature_difference >= hot_inlet.temperature:
        raise ConfigurationError(
            "Too high temperature difference at the economizer 'cold' side!"
        )


def two_phase_injection_enthalpy(discharge: StatePoint, dew: StatePoint,
                                 cold_inlet: StatePoint, hot_inlet: StatePoint,
                                 hot_outlet: StatePoint) -> float:
    """
    Economizer 'cold' outlet enthalpy for two-phase injection.

    Chosen so that mixing the low-stage discharge with the injected flow lands
    exactly on the dew point, with the injected flow set by the economizer
    energy balance:

        h = (h_ci * (h_d - h_dew) + h_dew * (h_hi - h_ho)) / (h_d - h_dew + h_hi - h_ho)
    """
    desuperheat = discharge.enthalpy - dew.enthalpy
    hot_side_drop = hot_inlet.enthalpy - hot_outlet.enthalpy
    return ((cold_inlet.enthalpy * desuperheat + dew.enthalpy * hot_side_drop)
            / (desuperheat + hot_side_drop))


class VCRCWithEconomizer(TwoStageCycle):
    """
    Two-stage cycle with an economizer and vapor injection between the stages.

        m_hr = m_ev * (1 + (h5 - h8) / (h7 - h6))

    Points:
        1: Evaporator outlet
        2s/2: Low-stage discharge
        3: High-stage suction (mix of 2 and 7)
        4s/4: High-stage discharge
        5: Condenser or gas cooler outlet
        6: Injection expansion valve outlet (economizer 'cold' inlet)
        7: Economizer 'cold' outlet (superheated vapor)
        8: Economizer 'hot' outlet
        9: Evaporator expansion valve outlet
    """

    def __init__(self, evaporator: Evaporator, compressor: Compressor,
                 heat_releaser: HeatReleaser, economizer: Economizer,
                 intermediate_vessel: Optional[IntermediateVessel] = None):
        super().__init__(evaporator, compressor, heat_releaser, intermediate_vessel)
        self.economizer = economizer
        self._solve()

    def _solve(self):
        intermediate = self.intermediate_pressure
        high = self.heat_releaser.pressure
        efficiency = self.compressor.efficiency

        point1 = self.evaporator.outlet
        point5 = self.heat_releaser.outlet
        point6 = processes.isenthalpic_expansion(point5, intermediate)
        point7 = processes.superheated(self.refrigerant, intermediate, self.economizer.superheat)
        check_economizer(point5, point6, self.economizer.temperature_difference, point7)

        self.point1 = point1
        self.point2s = processes.isentropic_compression(point1, intermediate)
        self.point2 = processes.compression(point1, intermediate, efficiency)
        self.point5, self.point6, self.point7 = point5, point6, point7
        self.point8 = processes.cooling_to(
            point5, temperature=point6.temperature + self.economizer.temperature_difference
        )
        self.point9 = processes.isenthalpic_expansion(self.point8, self.evaporator.pressure)
        self.point3 = processes.mixing(self.evaporator_mass_flow, self.point2,
                                       self.intermediate_mass_flow, self.point7)
        self.point4s = processes.isentropic_compression(self.point3, high)
        self.point4 = processes.compression(self.point3, high, efficiency)

    @property
    def heat_releaser_mass_flow(self) -> float:
        return flows.economizer_flow(self.evaporator_mass_flow,
                                     self.point5.enthalpy - self.point8.enthalpy,
                                     self.point7.enthalpy - self.point6.enthalpy)

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
            [ExpansionValveNode(self.intermediate_mass_flow, self.point5, self.point6),
             ExpansionValveNode(self.evaporator_mass_flow, self.point8, self.point9)],
            economizer=HeatExchangerNode(
                self.intermediate_mass_flow, self.point6, self.point7,
                self.evaporator_mass_flow, self.point5, self.point8,
            ),
            mixing=MixingNode(self.point3, self.evaporator_mass_flow, self.point2,
                              self.intermediate_mass_flow, self.point7),
        )


class VCRCWithEconomizerAndPC(TwoStageCycle):
    """
    Economized cycle whose injected vapor is compressed by a parallel compressor.

        m_hr = m_ev * (1 + (h6 - h8) / (h3 - h7))

    Points:
        1: Evaporator outlet
        2s/2: Main compressor discharge
        3: Economizer 'cold' outlet (parallel compressor suction)
        4s/4: Parallel compressor discharge
        5s/5: Mixed discharge
        6: Condenser or gas cooler outlet
        7: Injection expansion valve outlet (economizer 'cold' inlet)
        8: Economizer 'hot' outlet
        9: Evaporator expansion valve outlet
    """

    def __init__(self, evaporator: Evaporator, compressor: Compressor,
                 heat_releaser: HeatReleaser, economizer: Economizer,
                 intermediate_vessel: Optional[IntermediateVessel] = None):
        super().__init__(evaporator, compressor, heat_releaser, intermediate_vessel)
        self.economizer = economizer
        self._solve()

    def _solve(self):
        intermediate = self.intermediate_pressure
        high = self.heat_releaser.pressure
        efficiency = self.compressor.efficiency

        point6 = self.heat_releaser.outlet
        point7 = processes.isenthalpic_expansion(point6, intermediate)
        point3 = processes.superheated(self.refrigerant, intermediate, self.economizer.superheat)
        check_economizer(point6, point7, self.economizer.temperature_difference, point3)

        self.point1 = self.evaporator.outlet
        self.point2s = processes.isentropic_compression(self.point1, high)
        self.point2 = processes.compression(self.point1, high, efficiency)
        self.point3, self.point6, self.point7 = point3, point6, point7
        self.point4s = processes.isentropic_compression(point3, high)
        self.point4 = processes.compression(point3, high, efficiency)
        self.point8 = processes.cooling_to(
            point6, temperature=point7.temperature + self.economizer.temperature_difference
        )
        self.point9 = processes.isenthalpic_expansion(self.point8, self.evaporator.pressure)
        self.point5s = processes.mixing(self.evaporator_mass_flow, self.point2s,
                                        self.intermediate_mass_flow, self.point4s)
        self.point5 = processes.mixing(self.evaporator_mass_flow, self.point2,
                                       self.intermediate_mass_flow, self.point4)

    @property
    def heat_releaser_mass_flow(self) -> float:
        return flows.economizer_flow(self.evaporator_mass_flow,
                                     self.point6.enthalpy - self.point8.enthalpy,
                                     self.point3.enthalpy - self.point7.enthalpy)

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
            [ExpansionValveNode(self.intermediate_mass_flow, self.point6, self.point7),
             ExpansionValveNode(self.evaporator_mass_flow, self.point8, self.point9)],
            economizer=HeatExchangerNode(
                self.intermediate_mass_flow, self.point7, self.point3,
                self.evaporator_mass_flow, self.point6, self.point8,
            ),
            mixing=MixingNode(self.point5, self.evaporator_mass_flow, self.point2,
                              self.intermediate_mass_flow, self.point4),
        )


class VCRCWithEconomizerAndTPI(TwoStageCycle):
    """
    Economized cycle with two-phase injection between the stages.

        m_hr = m_ev * (1 + (h2 - h3) / (h3 - h7))

    Points:
        1: Evaporator outlet
        2s/2: Low-stage discharge
        3: High-stage suction (dew point)
        4s/4: High-stage discharge
        5: Condenser or gas cooler outlet
        6: Injection expansion valve outlet (economizer 'cold' inlet)
        7: Economizer 'cold' outlet (two-phase)
        8: Economizer 'hot' outlet
        9: Evaporator expansion valve outlet
    """

    def __init__(self, evaporator: Evaporator, compressor: Compressor,
                 heat_releaser: HeatReleaser, economizer: EconomizerWithTPI,
                 intermediate_vessel: Optional[IntermediateVessel] = None):
        super().__init__(evaporator, compressor, heat_releaser, intermediate_vessel)
        self.economizer = economizer
        self._solve()

    def _solve(self):
        intermediate = self.intermediate_pressure
        high = self.heat_releaser.pressure
        efficiency = self.compressor.efficiency

        point5 = self.heat_releaser.outlet
        point6 = processes.isenthalpic_expansion(point5, intermediate)
        check_economizer(point5, point6, self.economizer.temperature_difference)

        self.point1 = self.evaporator.outlet
        self.point2s = processes.isentropic_compression(self.point1, intermediate)
        self.point2 = processes.compression(self.point1, intermediate, efficiency)
        self.point3 = self.refrigerant.dew_point(pressure=intermediate)
        self.point4s = processes.isentropic_compression(self.point3, high)
        self.point4 = processes.compression(self.point3, high, efficiency)
        self.point5, self.point6 = point5, point6
        self.point8 = processes.cooling_to(
            point5, temperature=point6.temperature + self.economizer.temperature_difference
        )
        self.point7 = processes.heating_to(
            point6, enthalpy=two_phase_injection_enthalpy(
                self.point2, self.point3, point6, point5, self.point8
            )
        )
        self.point9 = processes.isenthalpic_expansion(self.point8, self.evaporator.pressure)

    @property
    def heat_releaser_mass_flow(self) -> float:
        return flows.economizer_flow(self.evaporator_mass_flow,
                                     self.point2.enthalpy - self.point3.enthalpy,
                                     self.point3.enthalpy - self.point7.enthalpy)

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
            [ExpansionValveNode(self.intermediate_mass_flow, self.point5, self.point6),
             ExpansionValveNode(self.evaporator_mass_flow, self.point8, self.point9)],
            economizer=HeatExchangerNode(
                self.intermediate_mass_flow, self.point6, self.point7,
                self.evaporator_mass_flow, self.point5, self.point8,
            ),
            mixing=MixingNode(self.point3, self.evaporator_mass_flow, self.point2,
                              self.intermediate_mass_flow, self.point7),
        )
