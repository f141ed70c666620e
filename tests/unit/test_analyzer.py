"""Unit tests for EntropyAnalyzer and EntropyAnalysisResult."""

import dataclasses
from types import SimpleNamespace

import pytest

from vcrc_sim.analysis import (
    EntropyAnalysisResult, EntropyAnalyzer, EvaporatorNode, ExpansionValveNode,
    HeatReleaserNode,
)
from vcrc_sim.components import Compressor, Condenser, Evaporator, GasCooler
from vcrc_sim.core.errors import ConfigurationError
from vcrc_sim.cycles import SimpleVCRC


INDOOR = 291.15
OUTDOOR = 308.15


@pytest.fixture(scope='module')
def cycle():
    return SimpleVCRC(Evaporator('R32', 278.15, 8), Compressor(0.8), Condenser('R32', 318.15, 3))


def nodes(cycle):
    return (
        EvaporatorNode(cycle.evaporator_mass_flow, cycle.point4, cycle.point1),
        HeatReleaserNode(cycle.heat_releaser_mass_flow, cycle.point2s, cycle.point3),
        [ExpansionValveNode(cycle.heat_releaser_mass_flow, cycle.point3, cycle.point4)],
    )


class TestValidation:
    """Test reservoir temperature checks"""

    def test_equal_temperatures(self, cycle):
        with pytest.raises(ConfigurationError, match="should not be equal"):
            cycle.entropy_analysis(INDOOR, INDOOR)

    def test_cold_source_too_cold(self, cycle):
        with pytest.raises(ConfigurationError, match="Increase 'cold' source temperature"):
            cycle.entropy_analysis(280.15, OUTDOOR)

    def test_hot_source_too_hot(self, cycle):
        with pytest.raises(ConfigurationError, match="Decrease 'hot' source temperature"):
            cycle.entropy_analysis(INDOOR, 320.15)

    def test_source_order_does_not_matter(self, cycle):
        """Reservoirs are sorted into cold and hot before the analysis"""
        assert cycle.entropy_analysis(OUTDOOR, INDOOR) == cycle.entropy_analysis(INDOOR, OUTDOOR)

    @pytest.mark.parametrize('count', [0, 4])
    def test_expansion_valve_count(self, cycle, count):
        evaporator, heat_releaser, valves = nodes(cycle)
        with pytest.raises(ValueError, match="One to three expansion valve nodes"):
            EntropyAnalyzer(cycle, evaporator, heat_releaser, valves * count)


class TestAnalysis:
    """Test the loss breakdown of a simple subcritical cycle"""

    @pytest.fixture(scope='class')
    def result(self, cycle):
        return cycle.entropy_analysis(INDOOR, OUTDOOR)

    def test_shares_add_up_to_100(self, result):
        assert result.total() == pytest.approx(100.0, abs=1e-9)

    def test_compressor_share(self, result):
        """With η = 0.8 the compressor destroys 20 % of the reconstructed work"""
        assert result.compressor_energy_loss_ratio == pytest.approx(20.0, abs=1e-9)

    def test_subcritical_reports_condenser(self, result):
        assert result.condenser_energy_loss_ratio > 0
        assert result.gas_cooler_energy_loss_ratio == 0

    def test_absent_components_report_zero(self, result):
        assert result.ejector_energy_loss_ratio == 0
        assert result.recuperator_energy_loss_ratio == 0
        assert result.economizer_energy_loss_ratio == 0
        assert result.mixing_energy_loss_ratio == 0

    def test_reconstruction_matches_cycle(self, result):
        """A simple cycle has no approximations: the relative error vanishes"""
        assert result.analysis_relative_error == pytest.approx(0.0, abs=1e-6)

    def test_transcritical_reports_gas_cooler(self):
        cycle = SimpleVCRC(Evaporator('R744', 278.15, 8), Compressor(0.8), GasCooler('R744', 313.15))
        result = cycle.entropy_analysis(INDOOR, OUTDOOR)
        assert result.gas_cooler_energy_loss_ratio > 0
        assert result.condenser_energy_loss_ratio == 0

    def test_large_error_warns(self, cycle):
        """A cycle whose own work disagrees with the reconstruction triggers a warning"""
        inconsistent = SimpleNamespace(
            specific_cooling_capacity=cycle.specific_cooling_capacity,
            isentropic_specific_work=2 * cycle.isentropic_specific_work,
            specific_work=2 * cycle.specific_work,
            compressor=cycle.compressor,
            is_transcritical=False,
        )
        analyzer = EntropyAnalyzer(inconsistent, *nodes(cycle))
        with pytest.warns(UserWarning, match="relative error"):
            result = analyzer.perform_analysis(INDOOR, OUTDOOR)
        assert result.analysis_relative_error == pytest.approx(50.0, rel=1e-6)


class TestEntropyAnalysisResult:

    @staticmethod
    def make(value):
        names = [f.name for f in dataclasses.fields(EntropyAnalysisResult)]
        return EntropyAnalysisResult(**{name: value for name in names})

    def test_average(self):
        average = EntropyAnalysisResult.average([self.make(1.0), self.make(3.0)])
        assert average == self.make(2.0)

    def test_average_of_nothing(self):
        with pytest.raises(ValueError, match="At least one result"):
            EntropyAnalysisResult.average([])

    def test_is_frozen(self):
        result = self.make(1.0)
        with pytest.raises(dataclasses.FrozenInstanceError):
            result.thermodynamic_perfection = 2.0
