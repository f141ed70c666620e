"""
Base classes for vapor-compression refrigeration cycles.

A cycle is built once from its component specifications. Construction:
  - Checks that every component uses the same refrigerant
  - Derives the cycle's state points (``point1 ... pointN``) in a fixed order,
    running a bounded root-find where the defining equations are circular
  - Fails with an exception if any physical-consistency rule is violated,
    so a partially solved cycle is never returned

Mass flows are specific ratios relative to the evaporator branch (= 1.0).
"""

import logging
import math
import re
from abc import ABC, abstractmethod
from collections import OrderedDict
from typing import Optional

from vcrc_sim.components.auxiliary import IntermediateVessel
from vcrc_sim.components.compressor import Compressor
from vcrc_sim.components.evaporator import Evaporator
from vcrc_sim.components.heat_releasers import Condenser, GasCooler, HeatReleaser
from vcrc_sim.core.errors import ConfigurationError
from vcrc_sim.core.state import StatePoint


logger = logging.getLogger(__name__)

_POINT_NAME = re.compile(r'^point(\d+)(s?)$')


class Cycle(ABC):
    """
    Abstract single-shot cycle solution.

    Subclasses must implement:
        - _solve(): derive and assign the state points
        - heat_releaser_mass_flow, isentropic_specific_work,
          specific_cooling_capacity, specific_heating_capacity
        - _analyzer(): build the entropy analyzer from the solved points

    Attributes:
        evaporator: Evaporator specification
        compressor: Compressor specification
        heat_releaser: Condenser or gas cooler
        refrigerant: Property backend shared by the derived points
    """

    def __init__(self, evaporator: Evaporator, compressor: Compressor,
                 heat_releaser: HeatReleaser):
        """
        Raises:
            ConfigurationError: Refrigerant mismatch, or condensing temperature
                not above the evaporating temperature
        """
        if evaporator.refrigerant.upper() != heat_releaser.refrigerant.upper():
            raise ConfigurationError("Only one refrigerant should be selected!")
        if isinstance(heat_releaser, Condenser) and \
                heat_releaser.temperature <= evaporator.temperature:
            raise ConfigurationError(
                "Condensing temperature should be greater than evaporating temperature!"
            )

        self.evaporator = evaporator
        self.compressor = compressor
        self.heat_releaser = heat_releaser
        self.refrigerant = evaporator.fluid

    @abstractmethod
    def _solve(self):
        pass

    def _check_refrigerant_type(self):
        if not (self.refrigerant.is_single_component or self.refrigerant.is_azeotropic_blend):
            raise ConfigurationError(
                "Refrigerant should be a single component or an azeotropic blend!"
            )

    @property
    def condenser(self) -> Optional[Condenser]:
        return self.heat_releaser if isinstance(self.heat_releaser, Condenser) else None

    @property
    def gas_cooler(self) -> Optional[GasCooler]:
        return self.heat_releaser if isinstance(self.heat_releaser, GasCooler) else None

    @property
    def is_transcritical(self) -> bool:
        return self.gas_cooler is not None

    @property
    def points(self) -> 'OrderedDict[str, StatePoint]':
        """Solved state points keyed by name, in cycle order (point2s before point2)."""
        found = []
        for name in dir(self):
            match = _POINT_NAME.match(name)
            if match:
                found.append((int(match.group(1)), match.group(2) == '', name))
        return OrderedDict((name, getattr(self, name)) for _, _, name in sorted(found))

    @property
    def evaporator_mass_flow(self) -> float:
        return 1.0

    @property
    @abstractmethod
    def heat_releaser_mass_flow(self) -> float:
        pass

    @property
    @abstractmethod
    def isentropic_specific_work(self) -> float:
        pass

    @property
    def specific_work(self) -> float:
        """Real specific work [J/kg] = isentropic work / η"""
        return self.isentropic_specific_work / self.compressor.efficiency

    @property
    @abstractmethod
    def specific_cooling_capacity(self) -> float:
        pass

    @property
    @abstractmethod
    def specific_heating_capacity(self) -> float:
        pass

    @property
    def eer(self) -> float:
        """Energy efficiency ratio (cooling coefficient)"""
        return self.specific_cooling_capacity / self.specific_work

    @property
    def cop(self) -> float:
        """Coefficient of performance (heating coefficient)"""
        return self.specific_heating_capacity / self.specific_work

    @abstractmethod
    def _analyzer(self):
        pass

    def entropy_analysis(self, indoor: float, outdoor: float):
        """
        Second-law breakdown of the specific work.

        Args:
            indoor: Indoor reservoir temperature [K]
            outdoor: Outdoor reservoir temperature [K]

        Returns:
            EntropyAnalysisResult (ratios in percent)
        """
        return self._analyzer().perform_analysis(indoor, outdoor)

    def __repr__(self) -> str:
        return (f"{type(self).__name__}({self.refrigerant.name}, "
                f"EER={self.eer:.4f}, COP={self.cop:.4f})")


def calculate_intermediate_pressure(low: float, high: float, critical: float) -> float:
    """
    Geometric mean of two pressures, capped below the critical pressure.

        P_int = sqrt(P_low * P_high)               if that is below P_crit
        P_int = sqrt(P_low * P_crit)               otherwise
    """
    result = math.sqrt(low * high)
    if result < critical:
        return result
    logger.debug("Intermediate pressure %.1f Pa is not below P_crit=%.1f Pa, capping it",
                 result, critical)
    return math.sqrt(low * critical)


class TwoStageCycle(Cycle):
    """
    Cycle with an intermediate-pressure level.

    The intermediate pressure defaults to the geometric mean of the evaporating
    and heat-rejection pressures; an IntermediateVessel pins it explicitly.
    """

    def __init__(self, evaporator: Evaporator, compressor: Compressor,
                 heat_releaser: HeatReleaser,
                 intermediate_vessel: Optional[IntermediateVessel] = None):
        super().__init__(evaporator, compressor, heat_releaser)
        self.intermediate_vessel = intermediate_vessel
        if intermediate_vessel is not None and \
                not evaporator.pressure < intermediate_vessel.pressure < heat_releaser.pressure:
            raise ConfigurationError(
                "Intermediate pressure should be greater than evaporating pressure "
                "and less than heat-rejection pressure!"
            )

    def _intermediate_pressure(self, low: float, high: float) -> float:
        return calculate_intermediate_pressure(low, high, self.refrigerant.critical_pressure)

    @property
    def intermediate_pressure(self) -> float:
        """Absolute intermediate pressure [Pa]"""
        if self.intermediate_vessel is not None:
            return self.intermediate_vessel.pressure
        return self._intermediate_pressure(self.evaporator.pressure, self.heat_releaser.pressure)

    @property
    def intermediate_mass_flow(self) -> float:
        return self.heat_releaser_mass_flow - self.evaporator_mass_flow
