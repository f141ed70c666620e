"""
Process primitives: physical operations that derive one state point from another.

Every primitive queries the property backend with exactly two independent
inputs. The compression and expansion relations follow the usual
isentropic-efficiency definitions:

    compression: h_out = h_in + (h_out_s - h_in) / η
    expansion:   h_out = h_in - η * (h_in - h_out_s)
"""

import math

from vcrc_sim.core.state import StatePoint


def _backend(point: StatePoint):
    if point.refrigerant is None:
        raise ValueError("State point is not attached to a refrigerant backend")
    return point.refrigerant


def isentropic_compression(point: StatePoint, pressure: float) -> StatePoint:
    """Compression to ``pressure`` at constant entropy."""
    if pressure <= point.pressure:
        raise ValueError("Compression process should increase the pressure!")
    return _backend(point).state(pressure=pressure, entropy=point.entropy)


def compression(point: StatePoint, pressure: float, efficiency: float) -> StatePoint:
    """
    Real compression to ``pressure`` with an isentropic efficiency.

    Args:
        point: Compressor inlet
        pressure: Discharge pressure [Pa]
        efficiency: Isentropic efficiency, 0 < η <= 1

    Returns:
        Compressor outlet at (pressure, h_in + (h_s - h_in) / η)
    """
    if not 0 < efficiency <= 1:
        raise ValueError(f"Efficiency must be in (0,1], got {efficiency}")
    h_out_s = isentropic_compression(point, pressure).enthalpy
    h_out = point.enthalpy + (h_out_s - point.enthalpy) / efficiency
    return _backend(point).state(pressure=pressure, enthalpy=h_out)


def isenthalpic_expansion(point: StatePoint, pressure: float) -> StatePoint:
    """Throttling to ``pressure`` at constant enthalpy."""
    if pressure >= point.pressure:
        raise ValueError("Expansion process should decrease the pressure!")
    return _backend(point).state(pressure=pressure, enthalpy=point.enthalpy)


def expansion(point: StatePoint, pressure: float, efficiency: float) -> StatePoint:
    """
    Real (work-producing) expansion to ``pressure`` with an isentropic efficiency.

    Used for the nozzle and suction sections of an ejector, where the
    enthalpy drop is converted into kinetic energy.
    """
    if pressure >= point.pressure:
        raise ValueError("Expansion process should decrease the pressure!")
    if not 0 < efficiency <= 1:
        raise ValueError(f"Efficiency must be in (0,1], got {efficiency}")
    h_out_s = _backend(point).state(pressure=pressure, entropy=point.entropy).enthalpy
    h_out = point.enthalpy - efficiency * (point.enthalpy - h_out_s)
    return _backend(point).state(pressure=pressure, enthalpy=h_out)


def cooling_to(point: StatePoint, temperature: float = None, enthalpy: float = None) -> StatePoint:
    """Isobaric cooling to a target temperature or enthalpy."""
    if (temperature is None) == (enthalpy is None):
        raise ValueError("Specify exactly one of temperature or enthalpy")
    if temperature is not None:
        if temperature > point.temperature:
            raise ValueError("During the cooling process, the temperature should decrease!")
        return _backend(point).state(pressure=point.pressure, temperature=temperature)
    if enthalpy > point.enthalpy:
        raise ValueError("During the cooling process, the enthalpy should decrease!")
    return _backend(point).state(pressure=point.pressure, enthalpy=enthalpy)


def heating_to(point: StatePoint, temperature: float = None, enthalpy: float = None) -> StatePoint:
    """Isobaric heating to a target temperature or enthalpy."""
    if (temperature is None) == (enthalpy is None):
        raise ValueError("Specify exactly one of temperature or enthalpy")
    if temperature is not None:
        if temperature < point.temperature:
            raise ValueError("During the heating process, the temperature should increase!")
        return _backend(point).state(pressure=point.pressure, temperature=temperature)
    if enthalpy < point.enthalpy:
        raise ValueError("During the heating process, the enthalpy should increase!")
    return _backend(point).state(pressure=point.pressure, enthalpy=enthalpy)


def superheated(refrigerant, pressure: float, superheat: float) -> StatePoint:
    """Vapor at ``pressure`` heated ``superheat`` kelvins above its dew point."""
    return refrigerant.superheated(superheat, pressure=pressure)


def two_phase_point(refrigerant, pressure: float, quality: float) -> StatePoint:
    """Two-phase state at ``pressure`` and vapor ``quality`` (decimal fraction)."""
    return refrigerant.two_phase_point(pressure, quality)


def mixing(first_flow: float, first: StatePoint,
           second_flow: float, second: StatePoint) -> StatePoint:
    """
    Adiabatic mixing of two flows at a common pressure.

    Energy balance:
        (m1 + m2) * h_mix = m1 * h1 + m2 * h2

    Args:
        first_flow, second_flow: Specific mass-flow ratios of the two streams
        first, second: Stream states (same refrigerant, same pressure)

    Returns:
        Mixed state at (first.pressure, h_mix)
    """
    if first.fluid != second.fluid:
        raise ValueError("The mixing process is possible only for the same refrigerants!")
    if not math.isclose(first.pressure, second.pressure, rel_tol=1e-6):
        raise ValueError("The mixing process is possible only for flows with the same pressure!")
    if first_flow + second_flow <= 0:
        raise ValueError("Total mass flow of the mixing streams should be positive")
    h_mix = (first_flow * first.enthalpy + second_flow * second.enthalpy) / (first_flow + second_flow)
    return _backend(first).state(pressure=first.pressure, enthalpy=h_mix)
