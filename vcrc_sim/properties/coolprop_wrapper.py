"""
Wrapper around CoolProp with caching for performance.

CoolProp is the industry-standard thermodynamic property library.
This wrapper resolves full refrigerant states through the low-level
AbstractState interface (one flash per state instead of one PropsSI call
per property) and adds LRU caching to avoid redundant flashes.
"""

import re
from functools import lru_cache
from typing import Optional

import CoolProp.CoolProp as CP

from vcrc_sim.core.errors import ConfigurationError, PropertyBackendError
from vcrc_sim.core.state import (
    StatePoint, LIQUID, GAS, TWO_PHASE, SUPERCRITICAL, SUPERCRITICAL_GAS,
    SUPERCRITICAL_LIQUID, CRITICAL_POINT, UNKNOWN,
)


ATMOSPHERIC_PRESSURE = 101325.0

# Glide below this threshold is treated as numerical noise [K]
GLIDE_THRESHOLD = 0.01

# CoolProp input pairs: keyword names -> (pair constant, argument order)
_INPUT_PAIRS = {
    frozenset(('pressure', 'temperature')): (CP.PT_INPUTS, ('pressure', 'temperature')),
    frozenset(('pressure', 'enthalpy')): (CP.HmassP_INPUTS, ('enthalpy', 'pressure')),
    frozenset(('pressure', 'entropy')): (CP.PSmass_INPUTS, ('pressure', 'entropy')),
    frozenset(('pressure', 'quality')): (CP.PQ_INPUTS, ('pressure', 'quality')),
    frozenset(('temperature', 'quality')): (CP.QT_INPUTS, ('quality', 'temperature')),
    frozenset(('enthalpy', 'entropy')): (CP.HmassSmass_INPUTS, ('enthalpy', 'entropy')),
}

_PHASES = {
    CP.iphase_liquid: LIQUID,
    CP.iphase_gas: GAS,
    CP.iphase_twophase: TWO_PHASE,
    CP.iphase_supercritical: SUPERCRITICAL,
    CP.iphase_supercritical_gas: SUPERCRITICAL_GAS,
    CP.iphase_supercritical_liquid: SUPERCRITICAL_LIQUID,
    CP.iphase_critical_point: CRITICAL_POINT,
}

_ZEOTROPIC_BLEND = re.compile(r'^R4\d{2}')
_AZEOTROPIC_BLEND = re.compile(r'^R5\d{2}')


@lru_cache(maxsize=1)
def _known_fluids() -> dict:
    """Upper-cased CoolProp names, aliases and predefined mixtures -> CoolProp name."""
    names = {}
    for fluid in CP.get_global_param_string('FluidsList').split(','):
        names[fluid.upper()] = fluid
        for alias in CP.get_fluid_param_string(fluid, 'aliases').split(','):
            if alias.strip():
                names.setdefault(alias.strip().upper(), fluid)
    for mixture in CP.get_global_param_string('predefined_mixtures').split(','):
        mixture = mixture.strip()
        if mixture.lower().endswith('.mix'):
            mixture = mixture[:-len('.mix')]
        if mixture:
            names.setdefault(mixture.upper(), mixture)
    return names


def coolprop_name(name: str) -> str:
    """CoolProp's spelling of a fluid name, matched case-insensitively."""
    return _known_fluids().get(name.upper(), name)


class Refrigerant:
    """
    Interface to refrigerant thermodynamic properties via CoolProp.

    All methods use SI units:
        Pressure: Pa
        Temperature: K
        Enthalpy: J/kg
        Entropy: J/(kg·K)
        Quality: decimal fraction

    Each instance owns one CoolProp AbstractState, which is not thread-safe:
    create one Refrigerant per worker when evaluating cycles in parallel.

    Example:
        co2 = Refrigerant('R744')
        point = co2.state(pressure=4e6, temperature=290.0)
        same = co2.state(pressure=point.pressure, enthalpy=point.enthalpy)
    """

    def __init__(self, name: str, backend: str = 'HEOS'):
        """
        Initialize for a specific refrigerant.

        Args:
            name: CoolProp refrigerant name (e.g., 'R744', 'R32', 'R134a', 'R407C')
            backend: CoolProp backend string

        Raises:
            ConfigurationError: If the name does not designate a refrigerant
            PropertyBackendError: If CoolProp does not know the fluid
        """
        if not name.upper().startswith('R'):
            raise ConfigurationError(
                "The selected fluid is not a refrigerant (its name should start with 'R')!"
            )
        self.name = name
        self.backend = backend

        try:
            self._state = CP.AbstractState(backend, coolprop_name(name))
            self.critical_pressure = self._state.p_critical()
            self.critical_temperature = self._state.T_critical()
            self.triple_temperature = self._state.Ttriple()
        except (ValueError, RuntimeError) as e:
            raise PropertyBackendError(f"Unknown refrigerant '{name}' for CoolProp") from e

    def __repr__(self) -> str:
        return f"Refrigerant({self.name!r})"

    # =========================================================================
    # State resolution
    # =========================================================================

    def state(self, **inputs: float) -> StatePoint:
        """
        Resolve a full state from exactly two independent properties.

        Args:
            **inputs: Two of pressure, temperature, enthalpy, entropy, quality

        Returns:
            StatePoint with every property populated

        Raises:
            ValueError: Wrong number of inputs, unsupported pair, or quality outside [0, 1]
            PropertyBackendError: CoolProp cannot resolve the pair

        Example:
            >>> r32 = Refrigerant('R32')
            >>> r32.state(pressure=1e6, quality=0.5).phase
            'two_phase'
        """
        if len(inputs) != 2:
            raise ValueError(
                f"Exactly two independent properties are required, got {sorted(inputs)}"
            )
        key = frozenset(inputs)
        if key not in _INPUT_PAIRS:
            raise ValueError(f"Unsupported input pair: {sorted(inputs)}")
        if 'quality' in inputs and not 0 <= inputs['quality'] <= 1:
            raise ValueError(f"Quality must be in [0, 1], got {inputs['quality']}")

        pair, (first, second) = _INPUT_PAIRS[key]
        return self._flash(pair, float(inputs[first]), float(inputs[second]))

    @lru_cache(maxsize=10000)
    def _flash(self, pair: int, value1: float, value2: float) -> StatePoint:
        try:
            self._state.update(pair, value1, value2)
        except (ValueError, RuntimeError) as e:
            raise PropertyBackendError(f"State update failed for {self.name}: {e}") from e

        s = self._state
        phase = _PHASES.get(s.phase(), UNKNOWN)
        quality: Optional[float] = None
        if phase == TWO_PHASE:
            quality = min(max(s.Q(), 0.0), 1.0)

        return StatePoint(
            fluid=self.name,
            pressure=s.p(),
            temperature=s.T(),
            enthalpy=s.hmass(),
            entropy=s.smass(),
            quality=quality,
            phase=phase,
            refrigerant=self,
        )

    def clear_cache(self):
        """Clear the flash cache (useful for memory management in long sweeps)"""
        self._flash.cache_clear()

    # =========================================================================
    # Saturation and offset states
    # =========================================================================

    def dew_point(self, pressure: Optional[float] = None,
                  temperature: Optional[float] = None) -> StatePoint:
        """Saturated vapor (quality 1) at a pressure or temperature."""
        return self._saturated(1.0, pressure, temperature)

    def bubble_point(self, pressure: Optional[float] = None,
                     temperature: Optional[float] = None) -> StatePoint:
        """Saturated liquid (quality 0) at a pressure or temperature."""
        return self._saturated(0.0, pressure, temperature)

    def two_phase_point(self, pressure: float, quality: float) -> StatePoint:
        """Two-phase state at a pressure and vapor quality (decimal fraction)."""
        return self.state(pressure=pressure, quality=quality)

    def superheated(self, superheat: float, pressure: Optional[float] = None,
                    temperature: Optional[float] = None) -> StatePoint:
        """
        Superheated vapor relative to the dew point.

        The dew point is located by pressure or by (dew) temperature, then the
        vapor is heated at that pressure by ``superheat`` kelvins. Zero superheat
        returns the dew point itself.

        Raises:
            ValueError: If superheat is negative
        """
        if superheat < 0:
            raise ValueError("Invalid superheat!")
        dew = self.dew_point(pressure=pressure, temperature=temperature)
        if superheat == 0:
            return dew
        return self.state(pressure=dew.pressure, temperature=dew.temperature + superheat)

    def subcooled(self, subcooling: float, pressure: Optional[float] = None,
                  temperature: Optional[float] = None) -> StatePoint:
        """
        Subcooled liquid relative to the bubble point.

        Raises:
            ValueError: If subcooling is negative
        """
        if subcooling < 0:
            raise ValueError("Invalid subcooling!")
        bubble = self.bubble_point(pressure=pressure, temperature=temperature)
        if subcooling == 0:
            return bubble
        return self.state(pressure=bubble.pressure, temperature=bubble.temperature - subcooling)

    def _saturated(self, quality: float, pressure: Optional[float],
                   temperature: Optional[float]) -> StatePoint:
        if (pressure is None) == (temperature is None):
            raise ValueError("Specify exactly one of pressure or temperature")
        if pressure is not None:
            return self.state(pressure=pressure, quality=quality)
        return self.state(temperature=temperature, quality=quality)

    # =========================================================================
    # Classification
    # =========================================================================

    @property
    def glide(self) -> float:
        """
        Temperature glide |T_dew - T_bubble| [K] at atmospheric pressure.

        Fluids whose triple point lies above atmospheric pressure (R744) are
        evaluated just above the triple point instead.
        """
        reference = max(
            ATMOSPHERIC_PRESSURE,
            self.bubble_point(temperature=self.triple_temperature + 1.0).pressure,
        )
        return abs(self.dew_point(pressure=reference).temperature
                   - self.bubble_point(pressure=reference).temperature)

    @property
    def has_glide(self) -> bool:
        return self.glide > GLIDE_THRESHOLD

    @property
    def is_zeotropic_blend(self) -> bool:
        return _ZEOTROPIC_BLEND.match(self.name.upper()) is not None

    @property
    def is_azeotropic_blend(self) -> bool:
        return _AZEOTROPIC_BLEND.match(self.name.upper()) is not None

    @property
    def is_single_component(self) -> bool:
        return not self.is_zeotropic_blend and not self.is_azeotropic_blend
