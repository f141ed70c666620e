"""Integration tests for ejector cycles, including the diffuser pressure search."""

import pytest

from vcrc_sim.components import Condenser, Evaporator, Recuperator
from vcrc_sim.core.errors import ConfigurationError
from vcrc_sim.cycles import (
    VCRCWithEjector, VCRCWithEjectorAndEconomizer, VCRCWithEjectorAndRecuperator,
    VCRCWithEjectorEconomizerAndPC, VCRCWithEjectorEconomizerAndTPI,
)
from vcrc_sim.cycles.ejector import DIFFUSER_PRESSURE_TOLERANCE, _EjectorTwoStageCycle


INDOOR = 291.15   # 18 °C
OUTDOOR = 308.15  # 35 °C


# ============================================================================
# Ejector as the expansion device
# ============================================================================

class TestEjectorTranscritical:

    @pytest.fixture(scope='class')
    def cycle(self, r744_evaporator, compressor, gas_cooler, ejector):
        return VCRCWithEjector(r744_evaporator, compressor, gas_cooler, ejector)

    @pytest.fixture(scope='class')
    def result(self, cycle):
        return cycle.entropy_analysis(INDOOR, OUTDOOR)

    def test_points(self, cycle, r744_evaporator, gas_cooler):
        assert cycle.point3 == gas_cooler.outlet
        assert cycle.point9 == r744_evaporator.outlet
        assert cycle.point1.quality == pytest.approx(1.0)
        assert cycle.point7.quality == pytest.approx(0.0)
        assert cycle.point1.pressure == pytest.approx(cycle.point6.pressure)
        assert cycle.point8.pressure == pytest.approx(r744_evaporator.pressure)

    def test_compressor_suction_above_evaporator(self, cycle, r744_evaporator):
        """The ejector lifts the compressor suction above the evaporating pressure"""
        assert cycle.point1.pressure > r744_evaporator.pressure

    def test_mass_flows(self, cycle):
        """m_hr = m_ev * x6 / (1 - x6)"""
        x6 = cycle.point6.quality
        assert cycle.heat_releaser_mass_flow == pytest.approx(x6 / (1 - x6))

    def test_eer_and_cop(self, cycle):
        assert cycle.eer == pytest.approx(3.417683634972164, rel=1e-3)
        assert cycle.cop == pytest.approx(4.417629862018599, rel=1e-3)

    def test_entropy_analysis(self, result):
        assert result.ejector_energy_loss_ratio == pytest.approx(20.506727646407636, rel=1e-3)
        assert result.expansion_valves_energy_loss_ratio == pytest.approx(2.7635883809857966, rel=1e-3)
        assert result.evaporator_energy_loss_ratio == pytest.approx(16.533405279234326, rel=1e-3)
        assert result.total() == pytest.approx(100.0)


class TestEjectorSubcritical:

    def test_eer(self, r32_evaporator, compressor, condenser, ejector):
        cycle = VCRCWithEjector(r32_evaporator, compressor, condenser, ejector)
        assert cycle.eer == pytest.approx(4.836643336835533, rel=1e-3)

    def test_zeotropic_blend_rejected(self, compressor, ejector):
        with pytest.raises(ConfigurationError,
                           match="Refrigerant should be a single component or an azeotropic blend!"):
            VCRCWithEjector(Evaporator('R407C', 278.15, 8), compressor,
                            Condenser('R407C', 318.15, 3), ejector)


# ============================================================================
# Ejector with recuperator
# ============================================================================

class TestEjectorAndRecuperator:

    @pytest.fixture(scope='class')
    def cycle(self, r744_evaporator, recuperator, compressor, gas_cooler, ejector):
        return VCRCWithEjectorAndRecuperator(r744_evaporator, recuperator, compressor,
                                             gas_cooler, ejector)

    def test_diffuser_pressure_is_self_consistent(self, cycle):
        """The suction line starts where the diffuser ends"""
        assert abs(cycle.point1.pressure - cycle.point8.pressure) < DIFFUSER_PRESSURE_TOLERANCE

    def test_recuperator_balance(self, cycle, recuperator):
        assert cycle.point2.temperature == pytest.approx(
            cycle.point4.temperature - recuperator.temperature_difference, abs=1e-6
        )
        assert cycle.point2.enthalpy - cycle.point1.enthalpy == pytest.approx(
            cycle.point4.enthalpy - cycle.point5.enthalpy, rel=1e-9
        )

    def test_nozzle_fed_by_recuperator(self, cycle):
        assert cycle.ejector_flows.nozzle_inlet == cycle.point5

    def test_entropy_analysis(self, cycle):
        result = cycle.entropy_analysis(INDOOR, OUTDOOR)
        assert result.recuperator_energy_loss_ratio > 0
        assert result.ejector_energy_loss_ratio > 0
        assert result.total() == pytest.approx(100.0)

    def test_too_high_temperature_difference(self, r744_evaporator, compressor, gas_cooler, ejector):
        with pytest.raises(ConfigurationError,
                           match="Too high temperature difference at the recuperator 'hot' side!"):
            VCRCWithEjectorAndRecuperator(r744_evaporator, Recuperator(45), compressor,
                                          gas_cooler, ejector)


# ============================================================================
# Ejector with economizer
# ============================================================================

class TestEjectorAndEconomizerTranscritical:

    @pytest.fixture(scope='class')
    def cycle(self, r744_evaporator, compressor, gas_cooler, ejector, economizer):
        return VCRCWithEjectorAndEconomizer(r744_evaporator, compressor, gas_cooler,
                                            ejector, economizer)

    def test_intermediate_pressure(self, cycle, gas_cooler):
        """Geometric mean of the diffuser outlet and gas cooler pressures"""
        assert cycle.intermediate_pressure == pytest.approx(
            (cycle.diffuser_outlet_pressure * gas_cooler.pressure) ** 0.5
        )
        assert cycle.point2.pressure == pytest.approx(cycle.intermediate_pressure)
        assert abs(cycle.point11.pressure - cycle.diffuser_outlet_pressure) < \
            DIFFUSER_PRESSURE_TOLERANCE

    def test_mass_flows(self, cycle):
        x11 = cycle.point11.quality
        assert cycle.ejector_mass_flow == pytest.approx(x11 / (1 - x11))
        assert cycle.intermediate_mass_flow == pytest.approx(
            cycle.heat_releaser_mass_flow - cycle.ejector_mass_flow
        )

    def test_eer(self, cycle):
        assert cycle.eer == pytest.approx(3.5076990300399533, rel=2e-3)

    def test_entropy_analysis(self, cycle):
        result = cycle.entropy_analysis(INDOOR, OUTDOOR)
        assert result.ejector_energy_loss_ratio == pytest.approx(12.556916295285012, rel=5e-3)
        assert result.total() == pytest.approx(100.0)


class TestEjectorAndEconomizerSubcritical:

    def test_eer(self, r32_evaporator, compressor, condenser, ejector, economizer):
        cycle = VCRCWithEjectorAndEconomizer(r32_evaporator, compressor, condenser,
                                             ejector, economizer)
        assert cycle.eer == pytest.approx(4.783695679338165, rel=2e-3)


class TestEjectorEconomizerAndPC:

    @pytest.fixture(scope='class')
    def cycle(self, r744_evaporator, compressor, gas_cooler, ejector, economizer):
        return VCRCWithEjectorEconomizerAndPC(r744_evaporator, compressor, gas_cooler,
                                              ejector, economizer)

    def test_eer(self, cycle):
        assert cycle.eer == pytest.approx(3.5417485177872754, rel=2e-3)

    def test_both_compressors_discharge_to_gas_cooler(self, cycle, gas_cooler):
        assert cycle.point2.pressure == pytest.approx(gas_cooler.pressure)
        assert cycle.point4.pressure == pytest.approx(gas_cooler.pressure)

    def test_entropy_analysis(self, cycle):
        assert cycle.entropy_analysis(INDOOR, OUTDOOR).total() == pytest.approx(100.0)


class TestEjectorEconomizerAndTPI:

    @pytest.fixture(scope='class')
    def cycle(self, r32_evaporator, compressor, condenser, ejector, economizer):
        return VCRCWithEjectorEconomizerAndTPI(r32_evaporator, compressor, condenser,
                                               ejector, economizer)

    def test_eer(self, cycle):
        assert cycle.eer == pytest.approx(4.877124735439032, rel=2e-3)

    def test_high_stage_suction_is_dew_point(self, cycle):
        assert cycle.point3.quality == pytest.approx(1.0)
        assert cycle.point7.is_two_phase

    def test_entropy_analysis(self, cycle):
        assert cycle.entropy_analysis(INDOOR, OUTDOOR).total() == pytest.approx(100.0)


class TestTwoStageEjectorHooks:
    """Two-stage ejector variants must supply their trial and compression steps"""

    def test_hooks_are_abstract(self):
        assert {'_trial', '_solve_compression'} <= _EjectorTwoStageCycle.__abstractmethods__

    def test_variant_without_trial_cannot_be_built(self, r744_evaporator, compressor, gas_cooler,
                                                   ejector, economizer):
        class WithoutTrial(_EjectorTwoStageCycle):
            def _solve_compression(self):
                pass

        with pytest.raises(TypeError, match="_trial"):
            WithoutTrial(r744_evaporator, compressor, gas_cooler, ejector, economizer)
