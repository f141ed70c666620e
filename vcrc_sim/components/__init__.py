from vcrc_sim.components.auxiliary import (
    Economizer, EconomizerWithTPI, IntermediateVessel, Recuperator,
)
from vcrc_sim.components.compressor import Compressor
from vcrc_sim.components.ejector import Ejector, EjectorFlows
from vcrc_sim.components.evaporator import Evaporator
from vcrc_sim.components.heat_releasers import Condenser, GasCooler, HeatReleaser

__all__ = [
    'Compressor',
    'Condenser',
    'Economizer',
    'EconomizerWithTPI',
    'Ejector',
    'EjectorFlows',
    'Evaporator',
    'GasCooler',
    'HeatReleaser',
    'IntermediateVessel',
    'Recuperator',
]
