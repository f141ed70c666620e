"""
Cycles with a two-phase ejector as the expansion device.

The ejector recovers part of the throttling loss: the heat-releaser outlet
drives the nozzle and entrains the evaporator outlet. A separator after the
diffuser returns vapor to the compressor and liquid to the evaporator, so
the heat-releaser flow is set by the diffuser outlet quality:

    m_hr = m_ev * x / (1 - x)

In the combined variants the diffuser outlet pressure also feeds back into
the states upstream of the ejector (through the recuperator or through the
intermediate pressure), so it is found with a bounded Newton search:

    guess    P_ev + 100 Pa
    bracket  [P_ev + 1 Pa, P_hr - 1 Pa]
    residual P_diffuser(guess) - guess, tolerance 10 Pa
"""

import logging
from abc import abstractmethod
from typing import Callable, Dict, Tuple

from vcrc_sim.analysis.analyzer import EntropyAnalyzer
from vcrc_sim.analysis.nodes import (
    EjectorNode, EvaporatorNode, ExpansionValveNode, HeatExchangerNode,
    HeatReleaserNode, MixingNode,
)
from vcrc_sim.components.auxiliary import Economizer, EconomizerWithTPI, Recuperator
from vcrc_sim.components.compressor import Compressor
from vcrc_sim.components.ejector import Ejector, EjectorFlows
from vcrc_sim.components.evaporator import Evaporator
from vcrc_sim.components.heat_releasers import HeatReleaser
from vcrc_sim.core import flows, processes
from vcrc_sim.core.cycle import Cycle, TwoStageCycle
from vcrc_sim.core.errors import ConfigurationError
from vcrc_sim.core.solver import find_root_near_guess
from vcrc_sim.core.state import StatePoint
from vcrc_sim.cycles.economizer import check_economizer, two_phase_injection_enthalpy


logger = logging.getLogger(__name__)

# Diffuser outlet pressure search [Pa]
DIFFUSER_PRESSURE_GUESS_OFFSET = 100.0
DIFFUSER_PRESSURE_BRACKET_MARGIN = 1.0
DIFFUSER_PRESSURE_TOLERANCE = 10.0

Trial = Callable[[float], Tuple[EjectorFlows, Dict[str, StatePoint]]]


def solve_diffuser_pressure(evaporating_pressure: float, high_pressure: float,
                            trial: Trial) -> Tuple[float, EjectorFlows, Dict[str, StatePoint]]:
    """
    Find the diffuser outlet pressure that reproduces itself.

    Args:
        evaporating_pressure: Lower end of the search [Pa]
        high_pressure: Upper end of the search (heat-rejection pressure) [Pa]
        trial: pressure -> (ejector flows, trial points); raises on invalid trial states

    Returns:
        (root pressure, ejector flows at the root, points at the root)

    Raises:
        NoSolutionError: If the search leaves the bracket or does not converge
    """
    def residual(pressure: float) -> float:
        ejector_flows, _ = trial(pressure)
        return ejector_flows.diffuser_outlet.pressure - pressure

    root = find_root_near_guess(
        residual,
        evaporating_pressure + DIFFUSER_PRESSURE_GUESS_OFFSET,
        evaporating_pressure + DIFFUSER_PRESSURE_BRACKET_MARGIN,
        high_pressure - DIFFUSER_PRESSURE_BRACKET_MARGIN,
        DIFFUSER_PRESSURE_TOLERANCE,
    )
    logger.debug("Diffuser outlet pressure converged to %.1f Pa", root)
    ejector_flows, points = trial(root)
    return root, ejector_flows, points


def ejector_points(ejector_flows: EjectorFlows, nozzle_outlet: int, mixing_inlet: int,
                   diffuser_outlet: int, suction_outlet: int) -> Dict[str, StatePoint]:
    """Name the ejector's internal states as cycle points."""
    return {
        f'point{nozzle_outlet}': ejector_flows.nozzle_outlet,
        f'point{mixing_inlet}': ejector_flows.mixing_inlet,
        f'point{diffuser_outlet}': ejector_flows.diffuser_outlet,
        f'point{suction_outlet}': ejector_flows.suction_outlet,
    }


class _EjectorCycle:
    """Shared ejector-cycle helpers (mixed into Cycle subclasses)."""

    def _assign(self, points: Dict[str, StatePoint]):
        for name, point in points.items():
            setattr(self, name, point)

    @property
    def _separator_vapor_ratio(self) -> float:
        return flows.separator_vapor_ratio(self.ejector_flows.diffuser_outlet.quality)


class VCRCWithEjector(_EjectorCycle, Cycle):
    """
    Single-stage cycle with an ejector.

    Points:
        1: Separator vapor outlet (compressor suction)
        2s/2: Compressor discharge
        3: Condenser or gas cooler outlet (nozzle inlet)
        4: Nozzle outlet
        5: Mixing section inlet
        6: Diffuser outlet
        7: Separator liquid outlet
        8: Expansion valve outlet
        9: Evaporator outlet (suction inlet)
        10: Suction section outlet
    """

    def __init__(self, evaporator: Evaporator, compressor: Compressor,
                 heat_releaser: HeatReleaser, ejector: Ejector):
        super().__init__(evaporator, compressor, heat_releaser)
        self._check_refrigerant_type()
        self.ejector = ejector
        self._solve()

    def _solve(self):
        high = self.heat_releaser.pressure
        point3 = self.heat_releaser.outlet
        point9 = self.evaporator.outlet
        ejector_flows = self.ejector.calculate_flows(point3, point9)
        diffuser_pressure = ejector_flows.diffuser_outlet.pressure

        self.ejector_flows = ejector_flows
        self._assign(ejector_points(ejector_flows, 4, 5, 6, 10))
        self.point1 = self.refrigerant.dew_point(pressure=diffuser_pressure)
        self.point2s = processes.isentropic_compression(self.point1, high)
        self.point2 = processes.compression(self.point1, high, self.compressor.efficiency)
        self.point3 = point3
        self.point7 = self.refrigerant.bubble_point(pressure=diffuser_pressure)
        self.point8 = processes.isenthalpic_expansion(self.point7, self.evaporator.pressure)
        self.point9 = point9

    @property
    def heat_releaser_mass_flow(self) -> float:
        return self.evaporator_mass_flow * self._separator_vapor_ratio

    @property
    def isentropic_specific_work(self) -> float:
        return self.heat_releaser_mass_flow * (self.point2s.enthalpy - self.point1.enthalpy)

    @property
    def specific_cooling_capacity(self) -> float:
        return self.point9.enthalpy - self.point8.enthalpy

    @property
    def specific_heating_capacity(self) -> float:
        return self.heat_releaser_mass_flow * (self.point2.enthalpy - self.point3.enthalpy)

    def _analyzer(self) -> EntropyAnalyzer:
        return EntropyAnalyzer(
            self,
            EvaporatorNode(self.evaporator_mass_flow, self.point8, self.point9),
            HeatReleaserNode(self.heat_releaser_mass_flow, self.point2s, self.point3),
            [ExpansionValveNode(self.evaporator_mass_flow, self.point7, self.point8)],
            ejector=EjectorNode(self.point6, self.heat_releaser_mass_flow, self.point3,
                                self.evaporator_mass_flow, self.point9),
        )


class VCRCWithEjectorAndRecuperator(_EjectorCycle, Cycle):
    """
    Ejector cycle with a recuperator between the separator vapor outlet and
    the heat-releaser outlet.

    Points:
        1: Separator vapor outlet
        2: Recuperator 'cold' outlet (compressor suction)
        3s/3: Compressor discharge
        4: Condenser or gas cooler outlet
        5: Recuperator 'hot' outlet (nozzle inlet)
        6: Nozzle outlet
        7: Mixing section inlet
        8: Diffuser outlet
        9: Separator liquid outlet
        10: Expansion valve outlet
        11: Evaporator outlet (suction inlet)
        12: Suction section outlet
    """

    def __init__(self, evaporator: Evaporator, recuperator: Recuperator,
                 compressor: Compressor, heat_releaser: HeatReleaser, ejector: Ejector):
        super().__init__(evaporator, compressor, heat_releaser)
        self._check_refrigerant_type()
        self.recuperator = recuperator
        self.ejector = ejector
        self._solve()

    def _trial(self, pressure: float):
        high = self.heat_releaser.pressure
        point4 = self.heat_releaser.outlet
        point1 = self.refrigerant.dew_point(pressure=pressure)
        if point4.temperature - self.recuperator.temperature_difference <= point1.temperature:
            raise ConfigurationError(
                "Too high temperature difference at the recuperator 'hot' side!"
            )
        point2 = processes.heating_to(
            point1, temperature=point4.temperature - self.recuperator.temperature_difference
        )
        point5 = processes.cooling_to(
            point4, enthalpy=point4.enthalpy - (point2.enthalpy - point1.enthalpy)
        )
        ejector_flows = self.ejector.calculate_flows(point5, self.evaporator.outlet)
        return ejector_flows, {
            'point1': point1,
            'point2': point2,
            'point3s': processes.isentropic_compression(point2, high),
            'point3': processes.compression(point2, high, self.compressor.efficiency),
            'point4': point4,
            'point5': point5,
        }

    def _solve(self):
        _, ejector_flows, points = solve_diffuser_pressure(
            self.evaporator.pressure, self.heat_releaser.pressure, self._trial
        )
        self.ejector_flows = ejector_flows
        self._assign(points)
        self._assign(ejector_points(ejector_flows, 6, 7, 8, 12))
        self.point9 = self.refrigerant.bubble_point(pressure=self.point8.pressure)
        self.point10 = processes.isenthalpic_expansion(self.point9, self.evaporator.pressure)
        self.point11 = self.evaporator.outlet

    @property
    def heat_releaser_mass_flow(self) -> float:
        return self.evaporator_mass_flow * self._separator_vapor_ratio

    @property
    def isentropic_specific_work(self) -> float:
        return self.heat_releaser_mass_flow * (self.point3s.enthalpy - self.point2.enthalpy)

    @property
    def specific_cooling_capacity(self) -> float:
        return self.point11.enthalpy - self.point10.enthalpy

    @property
    def specific_heating_capacity(self) -> float:
        return self.heat_releaser_mass_flow * (self.point3.enthalpy - self.point4.enthalpy)

    def _analyzer(self) -> EntropyAnalyzer:
        return EntropyAnalyzer(
            self,
            EvaporatorNode(self.evaporator_mass_flow, self.point10, self.point11),
            HeatReleaserNode(self.heat_releaser_mass_flow, self.point3s, self.point4),
            [ExpansionValveNode(self.evaporator_mass_flow, self.point9, self.point10)],
            ejector=EjectorNode(self.point8, self.heat_releaser_mass_flow, self.point5,
                                self.evaporator_mass_flow, self.point11),
            recuperator=HeatExchangerNode(
                self.heat_releaser_mass_flow, self.point1, self.point2,
                self.heat_releaser_mass_flow, self.point4, self.point5,
            ),
        )


class _EjectorTwoStageCycle(_EjectorCycle, TwoStageCycle):
    """
    Two-stage ejector cycle: the intermediate pressure is the geometric mean
    of the diffuser outlet pressure and the heat-rejection pressure.

    Flows:
        m_ej  = m_ev * x / (1 - x)           (ejector motive flow, low stage)
        m_int = m_hr - m_ej                  (economizer injection flow)
    """

    def __init__(self, evaporator: Evaporator, compressor: Compressor,
                 heat_releaser: HeatReleaser, ejector: Ejector, economizer):
        super().__init__(evaporator, compressor, heat_releaser)
        self._check_refrigerant_type()
        self.ejector = ejector
        self.economizer = economizer
        self._solve()

    def _intermediate_at(self, diffuser_pressure: float) -> float:
        return self._intermediate_pressure(diffuser_pressure, self.heat_releaser.pressure)

    @property
    def intermediate_pressure(self) -> float:
        return self._intermediate_at(self.diffuser_outlet_pressure)

    @property
    def ejector_mass_flow(self) -> float:
        return self.evaporator_mass_flow * self._separator_vapor_ratio

    @property
    def intermediate_mass_flow(self) -> float:
        return self.heat_releaser_mass_flow - self.ejector_mass_flow

    @property
    def specific_cooling_capacity(self) -> float:
        return self.point14.enthalpy - self.point13.enthalpy

    def _finish(self, diffuser_pressure: float, ejector_flows: EjectorFlows,
                points: Dict[str, StatePoint]):
        self.diffuser_outlet_pressure = diffuser_pressure
        self.ejector_flows = ejector_flows
        self._assign(points)
        self._assign(ejector_points(ejector_flows, 9, 10, 11, 15))
        self.point12 = self.refrigerant.bubble_point(pressure=self.point11.pressure)
        self.point13 = processes.isenthalpic_expansion(self.point12, self.evaporator.pressure)
        self.point14 = self.evaporator.outlet

    def _solve(self):
        self._finish(*solve_diffuser_pressure(
            self.evaporator.pressure, self.heat_releaser.pressure, self._trial
        ))
        self._solve_compression()

    @abstractmethod
    def _trial(self, pressure: float):
        pass

    @abstractmethod
    def _solve_compression(self):
        pass


class VCRCWithEjectorAndEconomizer(_EjectorTwoStageCycle):
    """
    Two-stage ejector cycle with an economizer (vapor injection between the stages).

        m_hr = m_ej * (1 + (h5 - h8) / (h7 - h6))

    Points:
        1: Separator vapor outlet (low-stage suction)
        2s/2: Low-stage discharge
        3: High-stage suction (mix of 2 and 7)
        4s/4: High-stage discharge
        5: Condenser or gas cooler outlet
        6: Injection expansion valve outlet
        7: Economizer 'cold' outlet
        8: Economizer 'hot' outlet (nozzle inlet)
        9: Nozzle outlet
        10: Mixing section inlet
        11: Diffuser outlet
        12: Separator liquid outlet
        13: Expansion valve outlet
        14: Evaporator outlet (suction inlet)
        15: Suction section outlet
    """

    def __init__(self, evaporator: Evaporator, compressor: Compressor,
                 heat_releaser: HeatReleaser, ejector: Ejector, economizer: Economizer):
        super().__init__(evaporator, compressor, heat_releaser, ejector, economizer)

    def _trial(self, pressure: float):
        intermediate = self._intermediate_at(pressure)
        point5 = self.heat_releaser.outlet
        point6 = processes.isenthalpic_expansion(point5, intermediate)
        point7 = processes.superheated(self.refrigerant, intermediate, self.economizer.superheat)
        check_economizer(point5, point6, self.economizer.temperature_difference, point7)
        point8 = processes.cooling_to(
            point5, temperature=point6.temperature + self.economizer.temperature_difference
        )
        ejector_flows = self.ejector.calculate_flows(point8, self.evaporator.outlet)
        return ejector_flows, {'point5': point5, 'point6': point6,
                               'point7': point7, 'point8': point8}

    def _solve_compression(self):
        intermediate = self.intermediate_pressure
        high = self.heat_releaser.pressure
        efficiency = self.compressor.efficiency
        self.point1 = self.refrigerant.dew_point(pressure=self.point11.pressure)
        self.point2s = processes.isentropic_compression(self.point1, intermediate)
        self.point2 = processes.compression(self.point1, intermediate, efficiency)
        self.point3 = processes.mixing(self.ejector_mass_flow, self.point2,
                                       self.intermediate_mass_flow, self.point7)
        self.point4s = processes.isentropic_compression(self.point3, high)
        self.point4 = processes.compression(self.point3, high, efficiency)

    @property
    def heat_releaser_mass_flow(self) -> float:
        return flows.economizer_flow(self.ejector_mass_flow,
                                     self.point5.enthalpy - self.point8.enthalpy,
                                     self.point7.enthalpy - self.point6.enthalpy)

    @property
    def isentropic_specific_work(self) -> float:
        return (self.ejector_mass_flow * (self.point2s.enthalpy - self.point1.enthalpy)
                + self.heat_releaser_mass_flow * (self.point4s.enthalpy - self.point3.enthalpy))

    @property
    def specific_heating_capacity(self) -> float:
        return self.heat_releaser_mass_flow * (self.point4.enthalpy - self.point5.enthalpy)

    def _analyzer(self) -> EntropyAnalyzer:
        return EntropyAnalyzer(
            self,
            EvaporatorNode(self.evaporator_mass_flow, self.point13, self.point14),
            HeatReleaserNode(self.heat_releaser_mass_flow, self.point4s, self.point5),
            [ExpansionValveNode(self.intermediate_mass_flow, self.point5, self.point6),
             ExpansionValveNode(self.evaporator_mass_flow, self.point12, self.point13)],
            ejector=EjectorNode(self.point11, self.ejector_mass_flow, self.point8,
                                self.evaporator_mass_flow, self.point14),
            economizer=HeatExchangerNode(
                self.intermediate_mass_flow, self.point6, self.point7,
                self.ejector_mass_flow, self.point5, self.point8,
            ),
            mixing=MixingNode(self.point3, self.ejector_mass_flow, self.point2,
                              self.intermediate_mass_flow, self.point7),
        )


class VCRCWithEjectorEconomizerAndPC(_EjectorTwoStageCycle):
    """
    Ejector cycle with an economizer whose vapor is compressed by a parallel compressor.

        m_hr = m_ej * (1 + (h6 - h8) / (h3 - h7))

    Points:
        1: Separator vapor outlet (main compressor suction)
        2s/2: Main compressor discharge
        3: Economizer 'cold' outlet (parallel compressor suction)
        4s/4: Parallel compressor discharge
        5s/5: Mixed discharge
        6: Condenser or gas cooler outlet
        7: Injection expansion valve outlet
        8: Economizer 'hot' outlet (nozzle inlet)
        9: Nozzle outlet
        10: Mixing section inlet
        11: Diffuser outlet
        12: Separator liquid outlet
        13: Expansion valve outlet
        14: Evaporator outlet (suction inlet)
        15: Suction section outlet
    """

    def __init__(self, evaporator: Evaporator, compressor: Compressor,
                 heat_releaser: HeatReleaser, ejector: Ejector, economizer: Economizer):
        super().__init__(evaporator, compressor, heat_releaser, ejector, economizer)

    def _trial(self, pressure: float):
        intermediate = self._intermediate_at(pressure)
        point6 = self.heat_releaser.outlet
        point7 = processes.isenthalpic_expansion(point6, intermediate)
        point3 = processes.superheated(self.refrigerant, intermediate, self.economizer.superheat)
        check_economizer(point6, point7, self.economizer.temperature_difference, point3)
        point8 = processes.cooling_to(
            point6, temperature=point7.temperature + self.economizer.temperature_difference
        )
        ejector_flows = self.ejector.calculate_flows(point8, self.evaporator.outlet)
        return ejector_flows, {'point3': point3, 'point6': point6,
                               'point7': point7, 'point8': point8}

    def _solve_compression(self):
        high = self.heat_releaser.pressure
        efficiency = self.compressor.efficiency
        self.point1 = self.refrigerant.dew_point(pressure=self.point11.pressure)
        self.point2s = processes.isentropic_compression(self.point1, high)
        self.point2 = processes.compression(self.point1, high, efficiency)
        self.point4s = processes.isentropic_compression(self.point3, high)
        self.point4 = processes.compression(self.point3, high, efficiency)
        self.point5s = processes.mixing(self.ejector_mass_flow, self.point2s,
                                        self.intermediate_mass_flow, self.point4s)
        self.point5 = processes.mixing(self.ejector_mass_flow, self.point2,
                                       self.intermediate_mass_flow, self.point4)

    @property
    def heat_releaser_mass_flow(self) -> float:
        return flows.economizer_flow(self.ejector_mass_flow,
                                     self.point6.enthalpy - self.point8.enthalpy,
                                     self.point3.enthalpy - self.point7.enthalpy)

    @property
    def isentropic_specific_work(self) -> float:
        return (self.ejector_mass_flow * (self.point2s.enthalpy - self.point1.enthalpy)
                + self.intermediate_mass_flow * (self.point4s.enthalpy - self.point3.enthalpy))

    @property
    def specific_heating_capacity(self) -> float:
        return self.heat_releaser_mass_flow * (self.point5.enthalpy - self.point6.enthalpy)

    def _analyzer(self) -> EntropyAnalyzer:
        return EntropyAnalyzer(
            self,
            EvaporatorNode(self.evaporator_mass_flow, self.point13, self.point14),
            HeatReleaserNode(self.heat_releaser_mass_flow, self.point5s, self.point6),
            [ExpansionValveNode(self.intermediate_mass_flow, self.point6, self.point7),
             ExpansionValveNode(self.evaporator_mass_flow, self.point12, self.point13)],
            ejector=EjectorNode(self.point11, self.ejector_mass_flow, self.point8,
                                self.evaporator_mass_flow, self.point14),
            economizer=HeatExchangerNode(
                self.intermediate_mass_flow, self.point7, self.point3,
                self.ejector_mass_flow, self.point6, self.point8,
            ),
            mixing=MixingNode(self.point5, self.ejector_mass_flow, self.point2,
                              self.intermediate_mass_flow, self.point4),
        )


class VCRCWithEjectorEconomizerAndTPI(_EjectorTwoStageCycle):
    """
    Two-stage ejector cycle with an economizer and two-phase injection.

        m_hr = m_ej * (1 + (h2 - h3) / (h3 - h7))

    Points:
        1: Separator vapor outlet (low-stage suction)
        2s/2: Low-stage discharge
        3: High-stage suction (dew point)
        4s/4: High-stage discharge
        5: Condenser or gas cooler outlet
        6: Injection expansion valve outlet
        7: Economizer 'cold' outlet (two-phase)
        8: Economizer 'hot' outlet (nozzle inlet)
        9: Nozzle outlet
        10: Mixing section inlet
        11: Diffuser outlet
        12: Separator liquid outlet
        13: Expansion valve outlet
        14: Evaporator outlet (suction inlet)
        15: Suction section outlet
    """

    def __init__(self, evaporator: Evaporator, compressor: Compressor,
                 heat_releaser: HeatReleaser, ejector: Ejector, economizer: EconomizerWithTPI):
        super().__init__(evaporator, compressor, heat_releaser, ejector, economizer)

    def _trial(self, pressure: float):
        intermediate = self._intermediate_at(pressure)
        efficiency = self.compressor.efficiency
        point1 = self.refrigerant.dew_point(pressure=pressure)
        point2s = processes.isentropic_compression(point1, intermediate)
        point2 = processes.compression(point1, intermediate, efficiency)
        point3 = self.refrigerant.dew_point(pressure=intermediate)
        point5 = self.heat_releaser.outlet
        point6 = processes.isenthalpic_expansion(point5, intermediate)
        check_economizer(point5, point6, self.economizer.temperature_difference)
        point8 = processes.cooling_to(
            point5, temperature=point6.temperature + self.economizer.temperature_difference
        )
        point7 = processes.heating_to(
            point6, enthalpy=two_phase_injection_enthalpy(point2, point3, point6, point5, point8)
        )
        ejector_flows = self.ejector.calculate_flows(point8, self.evaporator.outlet)
        return ejector_flows, {
            'point1': point1, 'point2s': point2s, 'point2': point2, 'point3': point3,
            'point5': point5, 'point6': point6, 'point7': point7, 'point8': point8,
        }

    def _solve_compression(self):
        high = self.heat_releaser.pressure
        self.point4s = processes.isentropic_compression(self.point3, high)
        self.point4 = processes.compression(self.point3, high, self.compressor.efficiency)

    @property
    def heat_releaser_mass_flow(self) -> float:
        return flows.economizer_flow(self.ejector_mass_flow,
                                     self.point2.enthalpy - self.point3.enthalpy,
                                     self.point3.enthalpy - self.point7.enthalpy)

    @property
    def isentropic_specific_work(self) -> float:
        return (self.ejector_mass_flow * (self.point2s.enthalpy - self.point1.enthalpy)
                + self.heat_releaser_mass_flow * (self.point4s.enthalpy - self.point3.enthalpy))

    @property
    def specific_heating_capacity(self) -> float:
        return self.heat_releaser_mass_flow * (self.point4.enthalpy - self.point5.enthalpy)

    def _analyzer(self) -> EntropyAnalyzer:
        return EntropyAnalyzer(
            self,
            EvaporatorNode(self.evaporator_mass_flow, self.point13, self.point14),
            HeatReleaserNode(self.heat_releaser_mass_flow, self.point4s, self.point5),
            [ExpansionValveNode(self.intermediate_mass_flow, self.point5, self.point6),
             ExpansionValveNode(self.evaporator_mass_flow, self.point12, self.point13)],
            ejector=EjectorNode(self.point11, self.ejector_mass_flow, self.point8,
                                self.evaporator_mass_flow, self.point14),
            economizer=HeatExchangerNode(
                self.intermediate_mass_flow, self.point6, self.point7,
                self.ejector_mass_flow, self.point5, self.point8,
            ),
            mixing=MixingNode(self.point3, self.ejector_mass_flow, self.point2,
                              self.intermediate_mass_flow, self.point7),
        )
