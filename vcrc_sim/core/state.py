"""
Immutable thermodynamic state of the refrigerant at one location in a cycle.
"""

from dataclasses import dataclass, field
from typing import Optional


LIQUID = 'liquid'
GAS = 'gas'
TWO_PHASE = 'two_phase'
SUPERCRITICAL = 'supercritical'
SUPERCRITICAL_GAS = 'supercritical_gas'
SUPERCRITICAL_LIQUID = 'supercritical_liquid'
CRITICAL_POINT = 'critical_point'
UNKNOWN = 'unknown'


@dataclass(frozen=True)
class StatePoint:
    """
    Fully determined refrigerant state.

    Created by Refrigerant.state() from exactly two independent inputs;
    never mutated. Equality is structural over the thermodynamic fields.

    Attributes:
        fluid: Refrigerant name (e.g. 'R744')
        pressure: Absolute pressure [Pa]
        temperature: Temperature [K]
        enthalpy: Specific enthalpy [J/kg]
        entropy: Specific entropy [J/(kg·K)]
        quality: Vapor quality in [0, 1], or None outside the two-phase dome
        phase: Phase tag (see module constants)
        refrigerant: Backend that produced this point (not compared)
    """
    fluid: str
    pressure: float
    temperature: float
    enthalpy: float
    entropy: float
    quality: Optional[float]
    phase: str

    refrigerant: Optional[object] = field(default=None, compare=False, repr=False)

    @property
    def is_two_phase(self) -> bool:
        return self.quality is not None

    def __repr__(self) -> str:
        quality = "-" if self.quality is None else f"{self.quality:.4f}"
        return (f"StatePoint({self.fluid}, P={self.pressure / 1e3:.3f} kPa, "
                f"T={self.temperature:.3f} K, h={self.enthalpy / 1e3:.3f} kJ/kg, "
                f"s={self.entropy:.3f} J/(kg·K), x={quality}, {self.phase})")
