"""Refrigerant property backend."""

from vcrc_sim.properties.coolprop_wrapper import Refrigerant

__all__ = ['Refrigerant']
