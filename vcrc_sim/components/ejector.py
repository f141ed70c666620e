"""
Two-phase ejector: motive (nozzle) flow entrains a low-pressure suction flow.

Governing model (constant-pressure mixing):
    1. Nozzle and suction flows expand to the mixing pressure P_mix = 0.9 * P_suction
    2. Outlet speeds from the enthalpy drops: u = sqrt(2 * Δh)
    3. Mixing inlet speed is the mass-weighted mean of both speeds, with
       f = nozzle flow / total flow
    4. Diffuser converts the kinetic energy back to pressure with efficiency η_d

The flow ratio f is unknown: the diffuser outlet quality must equal f, since the
vapor leaving a downstream separator is what the nozzle branch carries.
"""

import logging
import math
from dataclasses import dataclass
from typing import Optional

from vcrc_sim.core.errors import ConfigurationError, NoSolutionError
from vcrc_sim.core.processes import expansion
from vcrc_sim.core.solver import find_root_near_guess
from vcrc_sim.core.state import StatePoint


logger = logging.getLogger(__name__)

# Mixing pressure as a fraction of the suction inlet pressure
MIXING_PRESSURE_RATIO = 0.9

# Flow-ratio search, in percent
FLOW_RATIO_GUESS = 50.0
FLOW_RATIO_BOUNDS = (1e-9, 100 - 1e-9)
FLOW_RATIO_TOLERANCE = 1e-6


@dataclass(frozen=True)
class Ejector:
    """
    Ejector specification.

    Parameters:
        nozzle_efficiency: Isentropic efficiency of the nozzle, 0 < η < 1
        suction_efficiency: Isentropic efficiency of the suction section
            (defaults to the nozzle efficiency)
        diffuser_efficiency: Isentropic efficiency of the diffuser
            (defaults to the nozzle efficiency)
    """
    nozzle_efficiency: float
    suction_efficiency: Optional[float] = None
    diffuser_efficiency: Optional[float] = None

    def __post_init__(self):
        if self.suction_efficiency is None:
            object.__setattr__(self, 'suction_efficiency', self.nozzle_efficiency)
        if self.diffuser_efficiency is None:
            object.__setattr__(self, 'diffuser_efficiency', self.nozzle_efficiency)

        for value, section in ((self.nozzle_efficiency, 'nozzle'),
                               (self.suction_efficiency, 'suction section'),
                               (self.diffuser_efficiency, 'diffuser')):
            if not 0 < value < 1:
                raise ConfigurationError(
                    f"Isentropic efficiency of the {section} should be in (0; 1), got {value}"
                )

    def calculate_flows(self, nozzle_inlet: StatePoint,
                        suction_inlet: StatePoint) -> 'EjectorFlows':
        return EjectorFlows(self, nozzle_inlet, suction_inlet)


class EjectorFlows:
    """
    Solved state points inside an ejector.

    Attributes:
        nozzle_inlet, suction_inlet: Inlet states (given)
        nozzle_outlet, suction_outlet: States at the mixing pressure
        mixing_inlet: Mixed stream before the diffuser (kinetic energy removed)
        diffuser_outlet: Ejector outlet (two-phase)
        flow_ratio: Nozzle flow / total flow, decimal fraction
    """

    def __init__(self, ejector: Ejector, nozzle_inlet: StatePoint, suction_inlet: StatePoint):
        if nozzle_inlet.fluid != suction_inlet.fluid:
            raise ConfigurationError("Only one refrigerant should be selected!")
        if nozzle_inlet.pressure <= suction_inlet.pressure:
            raise ConfigurationError(
                "Ejector nozzle inlet pressure should be greater than suction inlet pressure!"
            )

        self.ejector = ejector
        self.nozzle_inlet = nozzle_inlet
        self.suction_inlet = suction_inlet
        self.mixing_pressure = MIXING_PRESSURE_RATIO * suction_inlet.pressure
        self.nozzle_outlet = expansion(nozzle_inlet, self.mixing_pressure,
                                       ejector.nozzle_efficiency)
        self.suction_outlet = expansion(suction_inlet, self.mixing_pressure,
                                        ejector.suction_efficiency)

        self._nozzle_speed = self._outlet_speed(nozzle_inlet, self.nozzle_outlet)
        self._suction_speed = self._outlet_speed(suction_inlet, self.suction_outlet)

        root = find_root_near_guess(self._residual, FLOW_RATIO_GUESS,
                                    *FLOW_RATIO_BOUNDS, FLOW_RATIO_TOLERANCE)
        self.flow_ratio = root / 100
        self.mixing_inlet, self.diffuser_outlet = self._mix_and_diffuse(self.flow_ratio)
        logger.debug("Ejector flow ratio %.6f, diffuser outlet %s",
                     self.flow_ratio, self.diffuser_outlet)

    @staticmethod
    def _outlet_speed(inlet: StatePoint, outlet: StatePoint) -> float:
        return math.sqrt(2 * (inlet.enthalpy - outlet.enthalpy))

    def _mix_and_diffuse(self, flow_ratio: float):
        fluid = self.nozzle_inlet.refrigerant
        speed = flow_ratio * self._nozzle_speed + (1 - flow_ratio) * self._suction_speed
        kinetic_energy = speed ** 2 / 2

        mixing_inlet = fluid.state(
            pressure=self.mixing_pressure,
            enthalpy=(flow_ratio * self.nozzle_inlet.enthalpy
                      + (1 - flow_ratio) * self.suction_inlet.enthalpy
                      - kinetic_energy),
        )
        diffuser_pressure = fluid.state(
            enthalpy=mixing_inlet.enthalpy + self.ejector.diffuser_efficiency * kinetic_energy,
            entropy=mixing_inlet.entropy,
        ).pressure
        diffuser_outlet = fluid.state(
            pressure=diffuser_pressure,
            enthalpy=mixing_inlet.enthalpy + kinetic_energy,
        )
        return mixing_inlet, diffuser_outlet

    def _residual(self, flow_ratio_percent: float) -> float:
        flow_ratio = flow_ratio_percent / 100
        _, diffuser_outlet = self._mix_and_diffuse(flow_ratio)
        if not diffuser_outlet.is_two_phase:
            raise NoSolutionError()
        return (diffuser_outlet.quality - flow_ratio) * 100
