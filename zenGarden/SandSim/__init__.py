# -- SandSim Package -- #

'''
Interactive zen sand garden simulation.

A circular bed of sand held as a height field, raked by a rotating
blade that combs a concentric wave pattern on one side and smooths on
the other. Touches disturb the sand; the blade heals it over the
following revolutions.
'''

__version__ = '0.1.0'

from zenGarden.SandSim.garden.protocols import GardenConfig, GardenState
from zenGarden.SandSim.garden.sandGarden import SandGarden
from zenGarden.SandSim.scenarios.presets import GARDEN_PRESETS, createPreset
from zenGarden.SandSim.export.frameExporter import FrameExporter
from zenGarden.SandSim.runner import GardenRunner
