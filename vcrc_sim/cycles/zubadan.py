"""
Mitsubishi Zubadan cycle: two-stage compression with a recuperator on a
two-phase stream and an economizer with two-phase injection.

The condenser outlet is throttled to the recuperator pressure P_rh, gives
its heat to the suction line, and the saturated liquid is split between the
economizer (injection branch) and the evaporator. The injection quality is
unknown: it is found so that mixing the low-stage discharge with the
injected flow lands exactly on the dew point at the intermediate pressure.

The recuperator pressure starts at sqrt(P_int * P_cond) and is pushed toward
the condensing pressure until the recuperator and economizer temperature
differences are physically consistent.
"""

import logging
from typing import Dict, Optional

from vcrc_sim.analysis.analyzer import EntropyAnalyzer
from vcrc_sim.analysis.nodes import (
    EvaporatorNode, ExpansionValveNode, HeatExchangerNode, HeatReleaserNode,
    MixingNode,
)
from vcrc_sim.components.auxiliary import EconomizerWithTPI, Recuperator
from vcrc_sim.components.compressor import Compressor
from vcrc_sim.components.evaporator import Evaporator
from vcrc_sim.components.heat_releasers import Condenser
from vcrc_sim.core import processes
from vcrc_sim.core.cycle import TwoStageCycle
from vcrc_sim.core.errors import ConfigurationError, NoSolutionError
from vcrc_sim.core.solver import find_root_near_guess
from vcrc_sim.core.state import StatePoint


logger = logging.getLogger(__name__)

MAX_OUTER_PASSES = 100

# Injection quality search [%]
QUALITY_GUESS = 80.0
QUALITY_BOUNDS = (1e-9, 100 - 1e-9)
QUALITY_TOLERANCE = 1e-3


def _heat_releaser_flow_ratio(point8: StatePoint, point9: StatePoint,
                              point10: StatePoint, point11: StatePoint) -> float:
    """m_hr / m_ev = 1 + (h8 - h11) / (h10 - h9)"""
    return 1 + (point8.enthalpy - point11.enthalpy) / (point10.enthalpy - point9.enthalpy)


class VCRCMitsubishiZubadan(TwoStageCycle):
    """
    Mitsubishi Zubadan heat-pump cycle (subcritical only).

    Governing equations:
        m_hr  = m_ev * (1 + (h8 - h11) / (h10 - h9))
        h2    = h1 + m_hr / m_ev * (h7 - h8)                (recuperator)
        h10   = h4 - m_ev / m_int * (h3 - h4)               (mixing to dew point)
        m_int = m_hr - m_ev

    Points:
        1: Evaporator outlet
        2: Recuperator 'cold' outlet (low-stage suction)
        3s/3: Low-stage discharge
        4: High-stage suction (dew point at the intermediate pressure)
        5s/5: High-stage discharge
        6: Condenser outlet
        7: Recuperator 'hot' inlet (two-phase)
        8: Recuperator 'hot' outlet (bubble point)
        9: Economizer 'cold' inlet
        10: Economizer 'cold' outlet (injection)
        11: Economizer 'hot' outlet
        12: Evaporator inlet

    Attributes:
        recuperator_high_pressure: Pressure of the recuperator 'hot' side [Pa]
        recuperator: Recuperator built from the resulting T7 - T2
    """

    def __init__(self, evaporator: Evaporator, compressor: Compressor,
                 condenser: Condenser, economizer: EconomizerWithTPI):
        if not isinstance(condenser, Condenser):
            raise ConfigurationError("The Zubadan cycle needs a condenser (subcritical only)!")
        super().__init__(evaporator, compressor, condenser)
        self.economizer = economizer
        self._solve()

    def _solve(self):
        fluid = self.refrigerant
        intermediate = self.intermediate_pressure
        condensing = self.heat_releaser.pressure
        self.point1 = self.evaporator.outlet
        self.point4 = fluid.dew_point(pressure=intermediate)
        self.point6 = self.heat_releaser.outlet

        recuperator_pressure = self._intermediate_pressure(intermediate, condensing)
        for attempt in range(1, MAX_OUTER_PASSES + 1):
            points = self._solve_injection(recuperator_pressure)
            problem = self._validation_problem(points)
            if problem is None:
                break
            logger.debug("Recuperator pressure %.1f Pa rejected (%s), pass %d",
                         recuperator_pressure, problem, attempt)
            recuperator_pressure = self._intermediate_pressure(recuperator_pressure, condensing)
        else:
            logger.debug("Recuperator pressure search gave up after %d passes", MAX_OUTER_PASSES)
            raise NoSolutionError()

        self.recuperator_high_pressure = recuperator_pressure
        for name, point in points.items():
            setattr(self, name, point)
        self.point5s = processes.isentropic_compression(self.point4, condensing)
        self.point5 = processes.compression(self.point4, condensing, self.compressor.efficiency)
        self.recuperator = Recuperator(self.point7.temperature - self.point2.temperature)

    def _solve_injection(self, recuperator_pressure: float) -> Dict[str, StatePoint]:
        try:
            throttled = self._throttle_to(recuperator_pressure)
            quality = find_root_near_guess(
                lambda q: self._injection_residual(throttled, q),
                QUALITY_GUESS, *QUALITY_BOUNDS, QUALITY_TOLERANCE,
            )
            injected = self._injection_points(throttled, quality)
        except (ValueError, ArithmeticError) as error:
            raise NoSolutionError() from error

        logger.debug("Injection quality converged to %.4f %% at P_rh=%.1f Pa",
                     quality, recuperator_pressure)
        return {**throttled, **injected}

    def _throttle_to(self, recuperator_pressure: float) -> Dict[str, StatePoint]:
        intermediate = self.intermediate_pressure
        point7 = processes.isenthalpic_expansion(self.point6, recuperator_pressure)
        point8 = self.refrigerant.bubble_point(pressure=recuperator_pressure)
        point9 = processes.isenthalpic_expansion(point8, intermediate)
        point11 = processes.cooling_to(
            point8, temperature=point9.temperature + self.economizer.temperature_difference
        )
        return {
            'point7': point7,
            'point8': point8,
            'point9': point9,
            'point11': point11,
            'point12': processes.isenthalpic_expansion(point11, self.evaporator.pressure),
        }

    def _injection_residual(self, throttled: Dict[str, StatePoint], quality_percent: float) -> float:
        points = self._injection_points(throttled, quality_percent)
        ratio = _heat_releaser_flow_ratio(throttled['point8'], throttled['point9'],
                                          points['point10'], throttled['point11'])
        intermediate_flow = self.evaporator_mass_flow * (ratio - 1)
        target = (self.point4.enthalpy - self.evaporator_mass_flow / intermediate_flow
                  * (points['point3'].enthalpy - self.point4.enthalpy))
        return points['point10'].enthalpy - target

    def _injection_points(self, throttled: Dict[str, StatePoint],
                          quality_percent: float) -> Dict[str, StatePoint]:
        intermediate = self.intermediate_pressure
        point10 = processes.two_phase_point(self.refrigerant, intermediate, quality_percent / 100)
        ratio = _heat_releaser_flow_ratio(throttled['point8'], throttled['point9'],
                                          point10, throttled['point11'])
        point2 = processes.heating_to(
            self.point1,
            enthalpy=self.point1.enthalpy
            + ratio * (throttled['point7'].enthalpy - throttled['point8'].enthalpy),
        )
        return {
            'point2': point2,
            'point3s': processes.isentropic_compression(point2, intermediate),
            'point3': processes.compression(point2, intermediate, self.compressor.efficiency),
            'point10': point10,
        }

    def _validation_problem(self, points: Dict[str, StatePoint]) -> Optional[str]:
        point7, point8 = points['point7'], points['point8']
        if not (point7.is_two_phase and 0 < point7.quality < 1):
            return "There should be a two-phase refrigerant at the recuperator 'hot' inlet!"
        if point7.temperature <= points['point2'].temperature:
            return "Wrong temperature difference at the recuperator 'hot' side!"
        if point8.temperature <= self.point1.temperature:
            return "Wrong temperature difference at the recuperator 'cold' side!"
        if points['point11'].temperature >= point8.temperature:
            return "Too high temperature difference at the economizer 'cold' side!"
        return None

    @property
    def heat_releaser_mass_flow(self) -> float:
        return self.evaporator_mass_flow * _heat_releaser_flow_ratio(
            self.point8, self.point9, self.point10, self.point11
        )

    @property
    def isentropic_specific_work(self) -> float:
        return (self.point3s.enthalpy - self.point2.enthalpy
                + self.heat_releaser_mass_flow * (self.point5s.enthalpy - self.point4.enthalpy))

    @property
    def specific_cooling_capacity(self) -> float:
        return self.point1.enthalpy - self.point12.enthalpy

    @property
    def specific_heating_capacity(self) -> float:
        return self.heat_releaser_mass_flow * (self.point5.enthalpy - self.point6.enthalpy)

    def _analyzer(self) -> EntropyAnalyzer:
        return EntropyAnalyzer(
            self,
            EvaporatorNode(self.evaporator_mass_flow, self.point12, self.point1),
            HeatReleaserNode(self.heat_releaser_mass_flow, self.point5s, self.point6),
            [ExpansionValveNode(self.heat_releaser_mass_flow, self.point6, self.point7),
             ExpansionValveNode(self.intermediate_mass_flow, self.point8, self.point9),
             ExpansionValveNode(self.evaporator_mass_flow, self.point11, self.point12)],
            recuperator=HeatExchangerNode(
                self.evaporator_mass_flow, self.point1, self.point2,
                self.heat_releaser_mass_flow, self.point7, self.point8,
            ),
            economizer=HeatExchangerNode(
                self.intermediate_mass_flow, self.point9, self.point10,
                self.evaporator_mass_flow, self.point8, self.point11,
            ),
            mixing=MixingNode(self.point4, self.evaporator_mass_flow, self.point3,
                              self.intermediate_mass_flow, self.point10),
        )
