"""Unit tests for the ejector flow model."""

import pytest

from vcrc_sim.components import Ejector, Evaporator, GasCooler
from vcrc_sim.components.ejector import MIXING_PRESSURE_RATIO
from vcrc_sim.core.errors import ConfigurationError


@pytest.fixture(scope='module')
def ejector():
    return Ejector(0.9, 0.9, 0.8)


@pytest.fixture(scope='module')
def inlets():
    """Transcritical R744: gas cooler outlet drives, evaporator outlet is entrained"""
    nozzle_inlet = GasCooler('R744', 313.15).outlet
    suction_inlet = Evaporator('R744', 278.15, 8).outlet
    return nozzle_inlet, suction_inlet


@pytest.fixture(scope='module')
def flows(ejector, inlets):
    return ejector.calculate_flows(*inlets)


class TestEjectorFlows:
    """Test the solved ejector states"""

    def test_mixing_pressure(self, flows, inlets):
        _, suction_inlet = inlets
        assert flows.mixing_pressure == pytest.approx(MIXING_PRESSURE_RATIO * suction_inlet.pressure)
        assert flows.nozzle_outlet.pressure == pytest.approx(flows.mixing_pressure)
        assert flows.suction_outlet.pressure == pytest.approx(flows.mixing_pressure)
        assert flows.mixing_inlet.pressure == pytest.approx(flows.mixing_pressure)

    def test_flow_ratio_matches_diffuser_quality(self, flows):
        """The vapor leaving the separator is what the nozzle branch carries"""
        assert flows.diffuser_outlet.is_two_phase
        assert flows.diffuser_outlet.quality == pytest.approx(flows.flow_ratio, abs=1e-7)
        assert 0 < flows.flow_ratio < 1

    def test_pressure_is_recovered(self, flows, inlets):
        """Diffuser outlet pressure lies between the suction and nozzle inlet pressures"""
        nozzle_inlet, suction_inlet = inlets
        assert suction_inlet.pressure < flows.diffuser_outlet.pressure < nozzle_inlet.pressure

    def test_nozzle_expansion_converts_enthalpy(self, flows, inlets):
        nozzle_inlet, _ = inlets
        assert flows.nozzle_outlet.enthalpy < nozzle_inlet.enthalpy

    def test_energy_balance(self, flows, inlets):
        """The diffuser outlet carries the mixed inlet enthalpy"""
        nozzle_inlet, suction_inlet = inlets
        mixed = (flows.flow_ratio * nozzle_inlet.enthalpy
                 + (1 - flows.flow_ratio) * suction_inlet.enthalpy)
        assert flows.diffuser_outlet.enthalpy == pytest.approx(mixed, rel=1e-6)


class TestEjectorFlowsValidation:

    def test_nozzle_pressure_must_exceed_suction(self, ejector, inlets):
        nozzle_inlet, suction_inlet = inlets
        with pytest.raises(ConfigurationError, match="nozzle inlet pressure should be greater"):
            ejector.calculate_flows(suction_inlet, nozzle_inlet)

    def test_same_refrigerant(self, ejector, inlets):
        nozzle_inlet, _ = inlets
        other = Evaporator('R32', 278.15, 8).outlet
        with pytest.raises(ConfigurationError, match="Only one refrigerant"):
            ejector.calculate_flows(nozzle_inlet, other)
