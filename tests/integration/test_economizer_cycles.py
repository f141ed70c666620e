"""Integration tests for economized cycles (vapor injection, parallel compression, two-phase injection)."""

import pytest

from vcrc_sim.components import Economizer, EconomizerWithTPI
from vcrc_sim.core.errors import ConfigurationError
from vcrc_sim.cycles import (
    VCRCWithEconomizer, VCRCWithEconomizerAndPC, VCRCWithEconomizerAndTPI,
)


INDOOR = 291.15   # 18 °C
OUTDOOR = 308.15  # 35 °C


class TestEconomizerTranscritical:

    @pytest.fixture(scope='class')
    def cycle(self, r744_evaporator, compressor, gas_cooler, economizer):
        return VCRCWithEconomizer(r744_evaporator, compressor, gas_cooler, economizer)

    def test_economizer_states(self, cycle, economizer):
        """Injected vapor is superheated; the hot side leaves ΔT above the cold inlet"""
        assert cycle.point7.temperature == pytest.approx(
            cycle.point6.temperature + economizer.superheat, abs=1e-6
        )
        assert cycle.point8.temperature == pytest.approx(
            cycle.point6.temperature + economizer.temperature_difference, abs=1e-6
        )

    def test_economizer_heat_balance(self, cycle):
        """m_int (h7 - h6) = m_ev (h5 - h8)"""
        assert cycle.intermediate_mass_flow * (cycle.point7.enthalpy - cycle.point6.enthalpy) == \
            pytest.approx(cycle.evaporator_mass_flow * (cycle.point5.enthalpy - cycle.point8.enthalpy))

    def test_eer(self, cycle):
        assert cycle.eer == pytest.approx(2.975458873387994, rel=1e-3)

    def test_entropy_analysis(self, cycle):
        result = cycle.entropy_analysis(INDOOR, OUTDOOR)
        assert result.economizer_energy_loss_ratio == pytest.approx(2.6005044065843, rel=1e-3)
        assert result.mixing_energy_loss_ratio == pytest.approx(0.8196895200831331, rel=1e-3)
        assert result.analysis_relative_error == pytest.approx(0.4542938077352593, rel=1e-2)
        assert result.total() == pytest.approx(100.0)


class TestEconomizerSubcritical:

    def test_eer(self, r32_evaporator, compressor, condenser, economizer):
        cycle = VCRCWithEconomizer(r32_evaporator, compressor, condenser, economizer)
        assert cycle.eer == pytest.approx(4.511109316237719, rel=1e-3)

    def test_injected_vapor_too_hot(self, r32_evaporator, compressor, condenser):
        with pytest.raises(ConfigurationError,
                           match="Wrong temperature difference at the economizer 'hot' side!"):
            VCRCWithEconomizer(r32_evaporator, compressor, condenser, Economizer(5, 49))

    def test_cold_side_difference_too_high(self, r32_evaporator, compressor, condenser):
        with pytest.raises(ConfigurationError,
                           match="Too high temperature difference at the economizer 'cold' side!"):
            VCRCWithEconomizer(r32_evaporator, compressor, condenser, Economizer(45, 0))


class TestEconomizerAndPC:

    def test_eer_transcritical(self, r744_evaporator, compressor, gas_cooler, economizer):
        cycle = VCRCWithEconomizerAndPC(r744_evaporator, compressor, gas_cooler, economizer)
        assert cycle.eer == pytest.approx(3.0102645369221146, rel=1e-3)

    @pytest.fixture(scope='class')
    def cycle(self, r32_evaporator, compressor, condenser, economizer):
        return VCRCWithEconomizerAndPC(r32_evaporator, compressor, condenser, economizer)

    def test_eer_subcritical(self, cycle):
        assert cycle.eer == pytest.approx(4.571161584395723, rel=1e-3)

    def test_parallel_discharge_pressure(self, cycle, condenser):
        assert cycle.point4.pressure == pytest.approx(condenser.pressure)
        assert cycle.point5.pressure == pytest.approx(condenser.pressure)

    def test_entropy_analysis(self, cycle):
        assert cycle.entropy_analysis(INDOOR, OUTDOOR).total() == pytest.approx(100.0)


class TestEconomizerAndTPI:

    @pytest.fixture(scope='class')
    def cycle(self, r32_evaporator, compressor, condenser, economizer):
        return VCRCWithEconomizerAndTPI(r32_evaporator, compressor, condenser, economizer)

    def test_high_stage_suction_is_dew_point(self, cycle):
        """Two-phase injection desuperheats the low-stage discharge exactly to the dew point"""
        assert cycle.point3.quality == pytest.approx(1.0)
        mixed = ((cycle.evaporator_mass_flow * cycle.point2.enthalpy
                  + cycle.intermediate_mass_flow * cycle.point7.enthalpy)
                 / cycle.heat_releaser_mass_flow)
        assert mixed == pytest.approx(cycle.point3.enthalpy, rel=1e-6)

    def test_injection_is_two_phase(self, cycle):
        assert cycle.point7.is_two_phase

    def test_eer(self, cycle):
        assert cycle.eer == pytest.approx(4.631753388612427, rel=1e-3)

    def test_accepts_economizer_without_superheat(self, r32_evaporator, compressor, condenser):
        cycle = VCRCWithEconomizerAndTPI(r32_evaporator, compressor, condenser, EconomizerWithTPI(5))
        assert cycle.eer == pytest.approx(4.631753388612427, rel=1e-3)

    def test_entropy_analysis(self, cycle):
        assert cycle.entropy_analysis(INDOOR, OUTDOOR).total() == pytest.approx(100.0)
