"""
Transcritical R744 heat pump: simple cycle vs. ejector cycle.

Both cycles share the same components:
    Evaporator 5 °C (8 K superheat) → Compressor (η = 0.8) → Gas cooler 40 °C

The ejector replaces the expansion valve and recovers part of the throttling loss.

Expected result: the ejector raises the EER by roughly 30%
"""

import logging

from vcrc_sim.components import Compressor, Ejector, Evaporator, GasCooler
from vcrc_sim.core.errors import VCRCError
from vcrc_sim.cycles import SimpleVCRC, VCRCWithEjector


INDOOR = 291.15   # 18 °C
OUTDOOR = 308.15  # 35 °C


def print_losses(result):
    print(f"  Thermodynamic perfection: {result.thermodynamic_perfection:.2f} %")
    print(f"  Minimum work:             {result.min_specific_work_ratio:.2f} %")
    print(f"  Compressor:               {result.compressor_energy_loss_ratio:.2f} %")
    print(f"  Gas cooler:               {result.gas_cooler_energy_loss_ratio:.2f} %")
    print(f"  Expansion valves:         {result.expansion_valves_energy_loss_ratio:.2f} %")
    print(f"  Ejector:                  {result.ejector_energy_loss_ratio:.2f} %")
    print(f"  Evaporator:               {result.evaporator_energy_loss_ratio:.2f} %")
    print(f"  Analysis error:           {result.analysis_relative_error:.3f} %")


def main():
    logging.basicConfig(level=logging.INFO)

    evaporator = Evaporator('R744', 278.15, 8)
    compressor = Compressor(0.8)
    gas_cooler = GasCooler('R744', 313.15)  # optimal pressure from the correlation
    print(f"Gas cooler pressure: {gas_cooler.pressure / 1e6:.3f} MPa")

    try:
        simple = SimpleVCRC(evaporator, compressor, gas_cooler)
        ejector = VCRCWithEjector(evaporator, compressor, gas_cooler, Ejector(0.9, 0.9, 0.8))
    except VCRCError as error:
        print(f"✗ Cycle could not be solved: {error}")
        return 1

    for cycle in (simple, ejector):
        print(f"\n{type(cycle).__name__}: EER = {cycle.eer:.3f}, COP = {cycle.cop:.3f}")
        for name, point in cycle.points.items():
            print(f"  {name:>8}: {point}")
        print_losses(cycle.entropy_analysis(INDOOR, OUTDOOR))

    gain = ejector.eer / simple.eer - 1
    print(f"\nEER gain from the ejector: {gain * 100:.1f}%")
    if gain > 0:
        print("✓ Ejector recovers part of the expansion loss")
    else:
        print("⚠ Ejector did not improve the cycle")

    return 0


if __name__ == '__main__':
    exit(main())
