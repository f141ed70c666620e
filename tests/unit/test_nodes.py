"""Unit tests for entropy analysis nodes."""

import pytest

from vcrc_sim.analysis.nodes import (
    EjectorNode, EvaporatorNode, ExpansionValveNode, HeatExchangerNode,
    HeatReleaserNode, MixingNode,
)
from vcrc_sim.core.state import StatePoint


def point(enthalpy, entropy, temperature=300.0):
    """Detached state point with just the fields the nodes read"""
    return StatePoint('R32', 1e6, temperature, enthalpy, entropy, None, 'gas')


HOT = 308.15
COLD = 291.15


class TestNodeLosses:

    def test_evaporator(self):
        """loss = m * T_hot * (Δs - Δh / T_cold)"""
        node = EvaporatorNode(1.0, point(250e3, 1200.0), point(500e3, 2100.0))
        expected = HOT * (900.0 - 250e3 / COLD)
        assert node.energy_loss(COLD, HOT) == pytest.approx(expected)

    def test_heat_releaser(self):
        """loss = m * ((h_in - h_out) - T_hot * (s_in - s_out))"""
        node = HeatReleaserNode(1.2, point(550e3, 2050.0), point(280e3, 1250.0))
        expected = 1.2 * (270e3 - HOT * 800.0)
        assert node.energy_loss(HOT) == pytest.approx(expected)

    def test_expansion_valve(self):
        node = ExpansionValveNode(1.0, point(280e3, 1250.0), point(280e3, 1290.0))
        assert node.energy_loss(HOT) == pytest.approx(HOT * 40.0)

    def test_heat_exchanger(self):
        """Entropy gained by the cold side minus entropy lost by the hot side"""
        node = HeatExchangerNode(
            1.0, point(500e3, 2100.0), point(520e3, 2170.0),
            1.0, point(280e3, 1250.0), point(260e3, 1185.0),
        )
        assert node.energy_loss(HOT) == pytest.approx(HOT * (70.0 - 65.0))

    def test_mixing(self):
        """loss = T_hot * ((m1 + m2) s_out - m1 s1 - m2 s2)"""
        node = MixingNode(point(520e3, 2010.0), 1.0, point(540e3, 2050.0), 0.25, point(440e3, 1800.0))
        expected = HOT * (1.25 * 2010.0 - 2050.0 - 0.25 * 1800.0)
        assert node.energy_loss(HOT) == pytest.approx(expected)

    def test_ejector_is_a_mixing_node(self):
        node = EjectorNode(point(300e3, 1400.0), 0.4, point(280e3, 1250.0), 1.0, point(500e3, 2100.0))
        assert isinstance(node, MixingNode)
        expected = HOT * (1.4 * 1400.0 - 0.4 * 1250.0 - 2100.0)
        assert node.energy_loss(HOT) == pytest.approx(expected)


class TestEnthalpyImbalance:

    def test_balanced_mixing(self):
        node = MixingNode(point(520e3, 2010.0), 1.0, point(540e3, 2050.0), 0.25, point(440e3, 1800.0))
        assert node.enthalpy_imbalance() == pytest.approx(0.0, abs=1e-12)

    def test_unbalanced_mixing(self):
        node = MixingNode(point(530e3, 2010.0), 1.0, point(540e3, 2050.0), 0.25, point(440e3, 1800.0))
        assert node.enthalpy_imbalance() == pytest.approx(1.25 * 10e3 / 650e3)
