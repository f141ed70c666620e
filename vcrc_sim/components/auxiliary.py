"""
Auxiliary heat exchangers and vessels: recuperator, economizers, intermediate vessel.
"""

from dataclasses import dataclass

from vcrc_sim.components.evaporator import MAX_TEMPERATURE_DELTA
from vcrc_sim.core.errors import ConfigurationError


@dataclass(frozen=True)
class Recuperator:
    """
    Internal heat exchanger between the evaporator outlet and the
    heat-releaser outlet.

    Parameters:
        temperature_difference: Temperature difference at the 'hot' side [K], 0 < ΔT < 50
    """
    temperature_difference: float

    def __post_init__(self):
        if not 0 < self.temperature_difference < MAX_TEMPERATURE_DELTA:
            raise ConfigurationError(
                f"Temperature difference at the recuperator 'hot' side "
                f"should be in (0; {MAX_TEMPERATURE_DELTA:g}) K!"
            )


@dataclass(frozen=True)
class EconomizerWithTPI:
    """
    Economizer feeding two-phase refrigerant to the intermediate injection port.

    Parameters:
        temperature_difference: Temperature difference at the 'cold' side [K], 0 < ΔT < 50
    """
    temperature_difference: float

    def __post_init__(self):
        if not 0 < self.temperature_difference < MAX_TEMPERATURE_DELTA:
            raise ConfigurationError(
                f"Temperature difference at the economizer 'cold' side "
                f"should be in (0; {MAX_TEMPERATURE_DELTA:g}) K!"
            )


@dataclass(frozen=True)
class Economizer(EconomizerWithTPI):
    """
    Economizer feeding superheated vapor to the intermediate injection port.

    Parameters:
        temperature_difference: Temperature difference at the 'cold' side [K], 0 < ΔT < 50
        superheat: Superheat of the injected vapor [K], 0 <= ΔT <= 50
    """
    superheat: float

    def __post_init__(self):
        super().__post_init__()
        if not 0 <= self.superheat <= MAX_TEMPERATURE_DELTA:
            raise ConfigurationError(
                f"Superheat in the economizer should be in [0; {MAX_TEMPERATURE_DELTA:g}] K!"
            )


@dataclass(frozen=True)
class IntermediateVessel:
    """
    Flash vessel at a fixed intermediate pressure.

    Two-stage cycles normally place their intermediate pressure at the
    geometric mean of the evaporating and heat-rejection pressures. Passing
    an IntermediateVessel pins it to an explicit value instead.

    Parameters:
        pressure: Absolute pressure [Pa]
    """
    pressure: float

    def __post_init__(self):
        if self.pressure <= 0:
            raise ConfigurationError(
                f"Intermediate vessel pressure should be positive, got {self.pressure}"
            )
