"""Shared component fixtures for the cycle integration tests."""

import pytest

from vcrc_sim.components import (
    Compressor, Condenser, Economizer, Ejector, Evaporator, GasCooler, Recuperator,
)


@pytest.fixture(scope='session')
def compressor():
    return Compressor(0.8)


@pytest.fixture(scope='session')
def recuperator():
    return Recuperator(5)


@pytest.fixture(scope='session')
def economizer():
    return Economizer(5, 5)


@pytest.fixture(scope='session')
def ejector():
    return Ejector(0.9, 0.9, 0.8)


@pytest.fixture(scope='session')
def r744_evaporator():
    """Transcritical case: R744, 5 °C evaporating, 8 K superheat"""
    return Evaporator('R744', 278.15, 8)


@pytest.fixture(scope='session')
def gas_cooler():
    """R744 gas cooler at 40 °C with the automatic optimal pressure"""
    return GasCooler('R744', 313.15)


@pytest.fixture(scope='session')
def r32_evaporator():
    """Subcritical case: R32, 5 °C evaporating, 8 K superheat"""
    return Evaporator('R32', 278.15, 8)


@pytest.fixture(scope='session')
def condenser():
    """R32 condenser at 45 °C with 3 K subcooling"""
    return Condenser('R32', 318.15, 3)
