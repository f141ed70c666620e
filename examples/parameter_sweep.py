"""
Seasonal comparison of subcritical R32 cycles.

Each cycle is solved at five operating points (indoor 18..22 °C, outdoor
36..40 °C) with the evaporator 7 K below the indoor air and the condenser
10 K above the outdoor air. The entropy analysis is averaged over the season.

Expected result: economized and two-phase injection cycles beat the simple cycle
"""

import numpy as np

from vcrc_sim.analysis import entropy_analysis
from vcrc_sim.components import (
    Compressor, Condenser, Economizer, Ejector, Evaporator, Recuperator,
)
from vcrc_sim.core.errors import NoSolutionError
from vcrc_sim.cycles import (
    SimpleVCRC, VCRCMitsubishiZubadan, VCRCWithEconomizer, VCRCWithEconomizerAndTPI,
    VCRCWithEjector, VCRCWithRecuperator,
)


def build_cycles(evaporator, condenser):
    compressor = Compressor(0.8)
    economizer = Economizer(5, 5)
    return {
        'Simple': SimpleVCRC(evaporator, compressor, condenser),
        'Recuperator': VCRCWithRecuperator(evaporator, Recuperator(5), compressor, condenser),
        'Economizer': VCRCWithEconomizer(evaporator, compressor, condenser, economizer),
        'Economizer + TPI': VCRCWithEconomizerAndTPI(evaporator, compressor, condenser, economizer),
        'Ejector': VCRCWithEjector(evaporator, compressor, condenser, Ejector(0.9, 0.9, 0.8)),
        'Zubadan': VCRCMitsubishiZubadan(evaporator, compressor, condenser, economizer),
    }


def main():
    indoor = np.linspace(291.15, 295.15, 5)
    outdoor = np.linspace(309.15, 313.15, 5)

    solved = {}
    conditions = []
    for t_in, t_out in zip(indoor, outdoor):
        evaporator = Evaporator('R32', t_in - 7, 5)
        condenser = Condenser('R32', t_out + 10, 3)
        try:
            cycles = build_cycles(evaporator, condenser)
        except NoSolutionError as error:
            print(f"⚠ Skipping indoor {t_in - 273.15:.0f} °C / outdoor {t_out - 273.15:.0f} °C: {error}")
            continue
        conditions.append((t_in, t_out))
        for name, cycle in cycles.items():
            solved.setdefault(name, []).append(cycle)

    if not solved:
        print("✗ No operating point could be solved")
        return 1

    print(f"{'Cycle':<18}{'EER':>8}{'COP':>8}{'Perfection, %':>16}")
    for name, cycles in solved.items():
        result = entropy_analysis(cycles, *zip(*conditions))
        eer = np.mean([cycle.eer for cycle in cycles])
        cop = np.mean([cycle.cop for cycle in cycles])
        print(f"{name:<18}{eer:>8.3f}{cop:>8.3f}{result.thermodynamic_perfection:>16.2f}")

    return 0


if __name__ == '__main__':
    exit(main())
