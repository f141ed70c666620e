"""Vapor-compression refrigeration cycle solver with entropy (exergy) analysis."""

from vcrc_sim.core import (
    ConfigurationError, NoSolutionError, PropertyBackendError, StatePoint, VCRCError,
)
from vcrc_sim.properties import Refrigerant
from vcrc_sim.components import (
    Compressor, Condenser, Economizer, EconomizerWithTPI, Ejector, EjectorFlows,
    Evaporator, GasCooler, IntermediateVessel, Recuperator,
)
from vcrc_sim.analysis import EntropyAnalysisResult, entropy_analysis
from vcrc_sim.cycles import (
    SimpleVCRC, VCRCMitsubishiZubadan, VCRCWithCIC, VCRCWithEconomizer,
    VCRCWithEconomizerAndPC, VCRCWithEconomizerAndTPI, VCRCWithEjector,
    VCRCWithEjectorAndEconomizer, VCRCWithEjectorAndRecuperator,
    VCRCWithEjectorEconomizerAndPC, VCRCWithEjectorEconomizerAndTPI,
    VCRCWithIIC, VCRCWithPC, VCRCWithRecuperator,
)

__version__ = '0.1.0'

__all__ = [
    'Compressor',
    'Condenser',
    'ConfigurationError',
    'Economizer',
    'EconomizerWithTPI',
    'Ejector',
    'EjectorFlows',
    'EntropyAnalysisResult',
    'Evaporator',
    'GasCooler',
    'IntermediateVessel',
    'NoSolutionError',
    'PropertyBackendError',
    'Recuperator',
    'Refrigerant',
    'SimpleVCRC',
    'StatePoint',
    'VCRCError',
    'VCRCMitsubishiZubadan',
    'VCRCWithCIC',
    'VCRCWithEconomizer',
    'VCRCWithEconomizerAndPC',
    'VCRCWithEconomizerAndTPI',
    'VCRCWithEjector',
    'VCRCWithEjectorAndEconomizer',
    'VCRCWithEjectorAndRecuperator',
    'VCRCWithEjectorEconomizerAndPC',
    'VCRCWithEjectorEconomizerAndTPI',
    'VCRCWithIIC',
    'VCRCWithPC',
    'VCRCWithRecuperator',
    'entropy_analysis',
]
