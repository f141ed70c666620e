"""Cycle library for vapor-compression refrigeration systems."""

from vcrc_sim.cycles.simple import SimpleVCRC, VCRCWithRecuperator
from vcrc_sim.cycles.intercooling import VCRCWithCIC, VCRCWithIIC
from vcrc_sim.cycles.parallel import VCRCWithPC
from vcrc_sim.cycles.economizer import (
    VCRCWithEconomizer, VCRCWithEconomizerAndPC, VCRCWithEconomizerAndTPI,
)
from vcrc_sim.cycles.ejector import (
    VCRCWithEjector, VCRCWithEjectorAndEconomizer, VCRCWithEjectorAndRecuperator,
    VCRCWithEjectorEconomizerAndPC, VCRCWithEjectorEconomizerAndTPI,
)
from vcrc_sim.cycles.zubadan import VCRCMitsubishiZubadan

__all__ = [
    'SimpleVCRC',
    'VCRCWithRecuperator',
    'VCRCWithIIC',
    'VCRCWithCIC',
    'VCRCWithPC',
    'VCRCWithEconomizer',
    'VCRCWithEconomizerAndPC',
    'VCRCWithEconomizerAndTPI',
    'VCRCWithEjector',
    'VCRCWithEjectorAndRecuperator',
    'VCRCWithEjectorAndEconomizer',
    'VCRCWithEjectorEconomizerAndPC',
    'VCRCWithEjectorEconomizerAndTPI',
    'VCRCMitsubishiZubadan',
]
