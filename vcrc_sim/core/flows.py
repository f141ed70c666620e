"""
Mass-flow balance at separators, economizers and mixing junctions.

All flows are specific mass-flow ratios: decimal fractions of the evaporator
branch flow (evaporator branch = 1.0).
"""

import math
from typing import Iterable

from vcrc_sim.core.errors import ConfigurationError


# Separator flows from quality and from the enthalpy lever rule come from
# different flashes
SEPARATOR_BALANCE_TOLERANCE = 1e-6


def _check_quality(quality) -> float:
    if quality is None or not 0 <= quality < 1:
        raise ConfigurationError(
            f"A two-phase state with quality in [0, 1) is required here, got {quality}"
        )
    return quality


def separator_vapor_ratio(quality: float) -> float:
    """
    Vapor-to-liquid flow ratio leaving a flash separator fed with ``quality``.

    A separator receiving two-phase refrigerant of quality x splits it into
    x parts vapor and (1 - x) parts liquid, so vapor/liquid = x / (1 - x).
    """
    x = _check_quality(quality)
    return x / (1 - x)


def separator_inlet_flow(liquid_flow: float, quality: float) -> float:
    """Total separator inlet flow whose liquid fraction equals ``liquid_flow``."""
    x = _check_quality(quality)
    return liquid_flow / (1 - x)


def separator_vapor_flow(inlet_flow: float, inlet_enthalpy: float,
                         vapor_enthalpy: float, liquid_enthalpy: float) -> float:
    """
    Vapor leaving a flash separator, from the lever rule on enthalpies.

        m_v = m_in * (h_in - h') / (h'' - h')

    Independent of the inlet quality, so it cross-checks flows derived from it.
    """
    if vapor_enthalpy <= liquid_enthalpy:
        raise ConfigurationError("Saturated vapor enthalpy should exceed liquid enthalpy!")
    return inlet_flow * (inlet_enthalpy - liquid_enthalpy) / (vapor_enthalpy - liquid_enthalpy)


def economizer_flow(main_flow: float, hot_side_drop: float, cold_side_rise: float) -> float:
    """
    Heat-rejection branch flow of an economized cycle.

    The injection branch absorbs what the main branch gives up:
        m_inj * Δh_cold = m_main * Δh_hot
    so the total through the heat releaser is
        m_main * (1 + Δh_hot / Δh_cold)

    Args:
        main_flow: Flow through the economizer hot side
        hot_side_drop: Enthalpy drop of the hot side [J/kg]
        cold_side_rise: Enthalpy rise of the injection (cold) side [J/kg]
    """
    if cold_side_rise <= 0:
        raise ConfigurationError("Economizer cold side enthalpy should increase!")
    return main_flow * (1 + hot_side_drop / cold_side_rise)


def intercooling_flow(main_flow: float, desuperheat: float, latent_rise: float) -> float:
    """
    Liquid flow evaporated in an intercooler to desuperheat the low-stage discharge.

        m_b * (h_dew - h_bubble) = m_main * (h_discharge - h_dew)
    """
    if latent_rise <= 0:
        raise ConfigurationError("Intercooler liquid enthalpy rise should be positive!")
    return main_flow * desuperheat / latent_rise


def check_balance(inflows: Iterable[float], outflows: Iterable[float],
                  rel_tol: float = 1e-9) -> None:
    """
    Verify that mass entering a junction equals mass leaving it.

    Raises:
        ConfigurationError: If the totals differ beyond ``rel_tol``
    """
    total_in = math.fsum(inflows)
    total_out = math.fsum(outflows)
    if not math.isclose(total_in, total_out, rel_tol=rel_tol, abs_tol=1e-12):
        raise ConfigurationError(
            f"Mass balance violated at junction: in={total_in}, out={total_out}"
        )
