from vcrc_sim.analysis.analyzer import EntropyAnalyzer
from vcrc_sim.analysis.nodes import (
    EjectorNode, EvaporatorNode, ExpansionValveNode, HeatExchangerNode,
    HeatReleaserNode, MixingNode,
)
from vcrc_sim.analysis.result import EntropyAnalysisResult, entropy_analysis

__all__ = [
    'EjectorNode',
    'EntropyAnalysisResult',
    'EntropyAnalyzer',
    'EvaporatorNode',
    'ExpansionValveNode',
    'HeatExchangerNode',
    'HeatReleaserNode',
    'MixingNode',
    'entropy_analysis',
]
