# -- Garden Engine Package -- #

'''
Core sand garden engine.

Provides the grid mapper, height and target fields, the disturbance
engine, the blade sweep, the mass pool and the SandGarden simulation
context that ties them together.
'''

from zenGarden.SandSim.garden.protocols import GardenConfig, GardenState, AudioSink, NullAudioSink
from zenGarden.SandSim.garden.gridMapper import GridMapper
from zenGarden.SandSim.garden.heightField import HeightField, computeToothCount
from zenGarden.SandSim.garden.massPool import MassPool
from zenGarden.SandSim.garden.disturbance import DisturbanceEngine, DisturbanceResult
from zenGarden.SandSim.garden.bladeSweep import BladeState, BladeSweep, SweepResult
from zenGarden.SandSim.garden.sandGarden import SandGarden
