# -- Shared Test Fixtures -- #

'''
Fixtures for the sand garden tests.

The reference layout is a garden of radius 100 on a resolution-2 grid
(100 x 100 cells). A 264 x 264 viewport fits exactly that garden with
the default padding (20) and frame (12).
'''

import pytest

from zenGarden.SandSim.garden.gridMapper import GridMapper
from zenGarden.SandSim.garden.heightField import HeightField
from zenGarden.SandSim.garden.sandGarden import SandGarden
from zenGarden.SandSim.scenarios.presets import createPreset

VIEWPORT = (264.0, 264.0)
RADIUS = 100.0


@pytest.fixture
def mapper():
    '''Garden of radius 100 centred on the screen origin.'''
    return GridMapper(gardenRadius=RADIUS, resolution=2.0, centerX=0.0, centerY=0.0, boundaryMargin=5.0)


@pytest.fixture
def gradedConfig():
    '''Graded preset on a flat bed (35-unit dig touch of strength 0.25).'''
    return createPreset('graded', initialPattern='flat')


@pytest.fixture
def flatField(mapper, gradedConfig):
    '''Flat height field on the reference layout.'''
    return HeightField.initialize(mapper, gradedConfig)


@pytest.fixture
def makeGarden():
    '''Factory for small, fast gardens built from a preset.'''
    def factory(preset='classic', audio=None, **overrides):
        overrides.setdefault('rotationSpeed', 0.05)
        config = createPreset(preset, **overrides)
        return SandGarden(config, viewport=VIEWPORT, audio=audio)
    return factory
