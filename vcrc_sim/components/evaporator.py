"""
Evaporator: absorbs heat from the cooled space at the evaporating temperature.
"""

from dataclasses import dataclass, field

from vcrc_sim.core.errors import ConfigurationError
from vcrc_sim.core.state import StatePoint
from vcrc_sim.properties.coolprop_wrapper import Refrigerant


# Upper limit for superheat and subcooling settings [K]
MAX_TEMPERATURE_DELTA = 50.0


def to_celsius(temperature: float) -> float:
    return temperature - 273.15


@dataclass(frozen=True)
class Evaporator:
    """
    Evaporator specification.

    The outlet is superheated vapor: dew point at the evaporating temperature,
    heated at constant pressure by ``superheat`` kelvins.

    Parameters:
        refrigerant: Refrigerant name
        temperature: Evaporating (dew point) temperature [K]
        superheat: Superheat at the outlet [K], 0 <= ΔT <= 50
    """
    refrigerant: str
    temperature: float
    superheat: float

    fluid: Refrigerant = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        fluid = Refrigerant(self.refrigerant)
        object.__setattr__(self, 'fluid', fluid)

        if not fluid.triple_temperature < self.temperature < fluid.critical_temperature:
            raise ConfigurationError(
                f"Evaporating temperature should be in "
                f"({to_celsius(fluid.triple_temperature):.2f}; "
                f"{to_celsius(fluid.critical_temperature):.2f}) °C!"
            )
        if not 0 <= self.superheat <= MAX_TEMPERATURE_DELTA:
            raise ConfigurationError(
                f"Superheat in the evaporator should be in [0; {MAX_TEMPERATURE_DELTA:g}] K!"
            )

    @property
    def outlet(self) -> StatePoint:
        return self.fluid.superheated(self.superheat, temperature=self.temperature)

    @property
    def pressure(self) -> float:
        """Evaporating pressure [Pa]"""
        return self.outlet.pressure
