"""
Heat releasers: condenser (subcritical cycles) and gas cooler (transcritical cycles).

A cycle takes exactly one of them. Which one it is decides how the cycle
reports its heat-rejection losses and whether it is transcritical.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional

from vcrc_sim.components.evaporator import MAX_TEMPERATURE_DELTA, to_celsius
from vcrc_sim.core.errors import ConfigurationError
from vcrc_sim.core.state import StatePoint
from vcrc_sim.properties.coolprop_wrapper import Refrigerant


class HeatReleaser(ABC):
    """
    Base class for the high-pressure heat exchanger of a cycle.

    Subclasses expose:
        refrigerant: Refrigerant name
        temperature: Characteristic temperature [K]
        pressure: Heat-rejection pressure [Pa]
        outlet: Outlet state point
        fluid: Property backend
    """

    @property
    @abstractmethod
    def outlet(self) -> StatePoint:
        pass


@dataclass(frozen=True)
class Condenser(HeatReleaser):
    """
    Condenser specification.

    The outlet is subcooled liquid: bubble point at the condensing
    temperature, cooled at constant pressure by ``subcooling`` kelvins.

    Parameters:
        refrigerant: Refrigerant name
        temperature: Condensing (bubble point) temperature [K]
        subcooling: Subcooling at the outlet [K], 0 <= ΔT <= 50
    """
    refrigerant: str
    temperature: float
    subcooling: float

    fluid: Refrigerant = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        fluid = Refrigerant(self.refrigerant)
        object.__setattr__(self, 'fluid', fluid)

        if not fluid.triple_temperature < self.temperature < fluid.critical_temperature:
            raise ConfigurationError(
                f"Condensing temperature should be in "
                f"({to_celsius(fluid.triple_temperature):.2f}; "
                f"{to_celsius(fluid.critical_temperature):.2f}) °C!"
            )
        if not 0 <= self.subcooling <= MAX_TEMPERATURE_DELTA:
            raise ConfigurationError(
                f"Subcooling in the condenser should be in [0; {MAX_TEMPERATURE_DELTA:g}] K!"
            )

    @property
    def outlet(self) -> StatePoint:
        return self.fluid.subcooled(self.subcooling, temperature=self.temperature)

    @property
    def pressure(self) -> float:
        """Condensing pressure [Pa]"""
        return self.outlet.pressure


@dataclass(frozen=True)
class GasCooler(HeatReleaser):
    """
    Gas cooler specification.

    For R744 the pressure may be omitted for outlet temperatures up to 60 °C;
    it is then taken from the optimal high-pressure correlation

        P_opt [bar] = 2.759 * t_out [°C] - 9.912

    Parameters:
        refrigerant: Refrigerant name
        temperature: Outlet temperature [K], above the critical temperature
        pressure: Absolute pressure [Pa], above the critical pressure
    """
    refrigerant: str
    temperature: float
    pressure: Optional[float] = None

    fluid: Refrigerant = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        fluid = Refrigerant(self.refrigerant)
        object.__setattr__(self, 'fluid', fluid)

        if self.pressure is None:
            object.__setattr__(self, 'pressure', self._optimal_pressure())

        if self.temperature <= fluid.critical_temperature:
            raise ConfigurationError(
                f"Gas cooler outlet temperature should be greater than "
                f"{to_celsius(fluid.critical_temperature):.2f} °C!"
            )
        if self.pressure <= fluid.critical_pressure:
            raise ConfigurationError(
                f"Gas cooler absolute pressure should be greater than "
                f"{fluid.critical_pressure / 1e6:.2f} MPa!"
            )

    def _optimal_pressure(self) -> float:
        if self.refrigerant.upper() == 'R744' and to_celsius(self.temperature) <= 60:
            return (2.759 * to_celsius(self.temperature) - 9.912) * 1e5
        raise ConfigurationError(
            "It is impossible to automatically calculate the absolute pressure in the gas cooler!"
        )

    @property
    def outlet(self) -> StatePoint:
        return self.fluid.state(pressure=self.pressure, temperature=self.temperature)
