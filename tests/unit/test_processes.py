"""Unit tests for process primitives (compression, expansion, heat exchange, mixing)."""

import pytest

from vcrc_sim.core import processes
from vcrc_sim.core.state import StatePoint
from vcrc_sim.properties.coolprop_wrapper import Refrigerant


@pytest.fixture(scope='module')
def r32():
    return Refrigerant('R32')


@pytest.fixture(scope='module')
def suction(r32):
    """Superheated vapor at 5 °C dew point, 8 K superheat"""
    return r32.superheated(8.0, temperature=278.15)


@pytest.fixture(scope='module')
def liquid(r32):
    """Subcooled liquid at 45 °C bubble point, 3 K subcooling"""
    return r32.subcooled(3.0, temperature=318.15)


class TestCompression:
    """Test isentropic and real compression"""

    def test_isentropic_compression(self, suction):
        """Entropy is conserved and the pressure reaches its target"""
        outlet = processes.isentropic_compression(suction, 2.5e6)
        assert outlet.pressure == pytest.approx(2.5e6)
        assert outlet.entropy == pytest.approx(suction.entropy, rel=1e-9)
        assert outlet.temperature > suction.temperature

    def test_real_compression_enthalpy(self, suction):
        """h_out = h_in + (h_s - h_in) / η"""
        isentropic = processes.isentropic_compression(suction, 2.5e6)
        real = processes.compression(suction, 2.5e6, 0.8)
        expected = suction.enthalpy + (isentropic.enthalpy - suction.enthalpy) / 0.8

        assert real.enthalpy == pytest.approx(expected, rel=1e-9)
        assert real.entropy > isentropic.entropy, "Real compression should generate entropy"

    def test_compression_must_raise_pressure(self, suction):
        with pytest.raises(ValueError, match="increase the pressure"):
            processes.isentropic_compression(suction, suction.pressure / 2)

    def test_compression_efficiency_range(self, suction):
        with pytest.raises(ValueError, match="Efficiency"):
            processes.compression(suction, 2.5e6, 1.5)


class TestExpansion:
    """Test throttling and work-producing expansion"""

    def test_isenthalpic_expansion(self, liquid):
        """Throttling keeps enthalpy and lands in the two-phase region"""
        outlet = processes.isenthalpic_expansion(liquid, 1e6)
        assert outlet.enthalpy == pytest.approx(liquid.enthalpy, rel=1e-9)
        assert outlet.is_two_phase
        assert outlet.entropy > liquid.entropy

    def test_expansion_must_lower_pressure(self, liquid):
        with pytest.raises(ValueError, match="decrease the pressure"):
            processes.isenthalpic_expansion(liquid, liquid.pressure * 2)

    def test_efficient_expansion_between_limits(self, liquid):
        """Real expansion ends between the isentropic and isenthalpic outlets"""
        isentropic = processes.expansion(liquid, 1e6, 1.0)
        real = processes.expansion(liquid, 1e6, 0.9)
        throttled = processes.isenthalpic_expansion(liquid, 1e6)

        assert isentropic.entropy == pytest.approx(liquid.entropy, rel=1e-6)
        assert isentropic.enthalpy < real.enthalpy < throttled.enthalpy


class TestHeatExchange:
    """Test isobaric cooling and heating"""

    def test_cooling_to_temperature(self, r32):
        gas = r32.state(pressure=2.8e6, temperature=360.0)
        cooled = processes.cooling_to(gas, temperature=340.0)
        assert cooled.pressure == pytest.approx(gas.pressure)
        assert cooled.temperature == pytest.approx(340.0, abs=1e-6)

    def test_cooling_to_enthalpy(self, liquid):
        cooled = processes.cooling_to(liquid, enthalpy=liquid.enthalpy - 1e4)
        assert cooled.enthalpy == pytest.approx(liquid.enthalpy - 1e4)
        assert cooled.temperature < liquid.temperature

    def test_cooling_cannot_heat(self, liquid):
        with pytest.raises(ValueError, match="temperature should decrease"):
            processes.cooling_to(liquid, temperature=liquid.temperature + 1)

    def test_heating_to_temperature(self, suction):
        heated = processes.heating_to(suction, temperature=suction.temperature + 5)
        assert heated.temperature == pytest.approx(suction.temperature + 5, abs=1e-6)

    def test_heating_cannot_cool(self, suction):
        with pytest.raises(ValueError, match="enthalpy should increase"):
            processes.heating_to(suction, enthalpy=suction.enthalpy - 1)

    def test_exactly_one_target(self, suction):
        with pytest.raises(ValueError, match="exactly one"):
            processes.heating_to(suction)


class TestMixing:
    """Test adiabatic mixing"""

    def test_mixing_energy_balance(self, r32):
        """(m1 + m2) h = m1 h1 + m2 h2"""
        dew = r32.dew_point(pressure=1.5e6)
        hot = r32.state(pressure=1.5e6, temperature=340.0)
        mixed = processes.mixing(1.0, hot, 0.25, dew)

        expected = (1.0 * hot.enthalpy + 0.25 * dew.enthalpy) / 1.25
        assert mixed.enthalpy == pytest.approx(expected, rel=1e-9)
        assert dew.temperature < mixed.temperature < hot.temperature

    def test_mixing_requires_same_pressure(self, r32):
        with pytest.raises(ValueError, match="same pressure"):
            processes.mixing(1.0, r32.dew_point(pressure=1e6), 1.0, r32.dew_point(pressure=2e6))

    def test_mixing_requires_same_refrigerant(self, r32):
        other = Refrigerant('R134a').dew_point(pressure=1e6)
        with pytest.raises(ValueError, match="same refrigerants"):
            processes.mixing(1.0, r32.dew_point(pressure=1e6), 1.0, other)


class TestDetachedPoint:

    def test_point_without_backend(self):
        """Processes need a point created by a Refrigerant"""
        detached = StatePoint('R32', 1e6, 300.0, 5e5, 2e3, None, 'gas')
        with pytest.raises(ValueError, match="not attached"):
            processes.isentropic_compression(detached, 2e6)
