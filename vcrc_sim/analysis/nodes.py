"""
Analysis nodes: a branch mass-flow ratio paired with the states bounding one
physical effect. Each node returns the specific work destroyed there [J/kg].

Nodes are built by a solved cycle only to feed EntropyAnalyzer.
"""

import math
from dataclasses import dataclass

from vcrc_sim.core.state import StatePoint


@dataclass(frozen=True)
class EvaporatorNode:
    """
    Heat absorption from the cold reservoir.

        loss = m * T_hot * ((s_out - s_in) - (h_out - h_in) / T_cold)
    """
    mass_flow: float
    inlet: StatePoint
    outlet: StatePoint

    def energy_loss(self, cold_source: float, hot_source: float) -> float:
        return self.mass_flow * hot_source * (
            (self.outlet.entropy - self.inlet.entropy)
            - (self.outlet.enthalpy - self.inlet.enthalpy) / cold_source
        )


@dataclass(frozen=True)
class HeatReleaserNode:
    """
    Heat rejection to the hot reservoir, measured from the isentropic
    compressor discharge so that compressor irreversibility is not counted twice.

        loss = m * ((h_in,s - h_out) - T_hot * (s_in,s - s_out))
    """
    mass_flow: float
    isentropic_inlet: StatePoint
    outlet: StatePoint

    def energy_loss(self, hot_source: float) -> float:
        return self.mass_flow * (
            (self.isentropic_inlet.enthalpy - self.outlet.enthalpy)
            - hot_source * (self.isentropic_inlet.entropy - self.outlet.entropy)
        )


@dataclass(frozen=True)
class ExpansionValveNode:
    """Throttling: loss = T_hot * m * (s_out - s_in)"""
    mass_flow: float
    inlet: StatePoint
    outlet: StatePoint

    def energy_loss(self, hot_source: float) -> float:
        return hot_source * self.mass_flow * (self.outlet.entropy - self.inlet.entropy)


@dataclass(frozen=True)
class HeatExchangerNode:
    """
    Internal heat exchanger (recuperator or economizer).

        loss = T_hot * (m_c * (s_c,out - s_c,in) - m_h * (s_h,in - s_h,out))
    """
    cold_mass_flow: float
    cold_inlet: StatePoint
    cold_outlet: StatePoint
    hot_mass_flow: float
    hot_inlet: StatePoint
    hot_outlet: StatePoint

    def energy_loss(self, hot_source: float) -> float:
        return hot_source * (
            self.cold_mass_flow * (self.cold_outlet.entropy - self.cold_inlet.entropy)
            - self.hot_mass_flow * (self.hot_inlet.entropy - self.hot_outlet.entropy)
        )


@dataclass(frozen=True)
class MixingNode:
    """
    Adiabatic junction of two flows.

        loss = T_hot * ((m1 + m2) * s_out - m1 * s1 - m2 * s2)
    """
    outlet: StatePoint
    first_mass_flow: float
    first: StatePoint
    second_mass_flow: float
    second: StatePoint

    def energy_loss(self, hot_source: float) -> float:
        return hot_source * (
            (self.first_mass_flow + self.second_mass_flow) * self.outlet.entropy
            - self.first_mass_flow * self.first.entropy
            - self.second_mass_flow * self.second.entropy
        )

    def enthalpy_imbalance(self) -> float:
        """Relative mismatch between inlet and outlet energy flows (0 for an exact balance)."""
        total = self.first_mass_flow + self.second_mass_flow
        inflow = self.first_mass_flow * self.first.enthalpy + self.second_mass_flow * self.second.enthalpy
        outflow = total * self.outlet.enthalpy
        return abs(outflow - inflow) / max(abs(inflow), math.ulp(1.0))


@dataclass(frozen=True)
class EjectorNode(MixingNode):
    """
    Ejector treated as a junction of the motive (first) and suction (second)
    flows, from the inlets to the diffuser outlet.
    """
    pass
