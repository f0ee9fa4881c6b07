# -- Garden Scenarios Package -- #

'''
Pre-configured garden variants and scripted input for headless runs.
'''

from zenGarden.SandSim.scenarios.presets import GARDEN_PRESETS, createPreset
from zenGarden.SandSim.scenarios.strokes import Stroke, StrokeScript, demoStrokes
