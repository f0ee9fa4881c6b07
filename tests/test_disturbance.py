# -- Disturbance Engine Tests -- #

import numpy as np
import pytest

from zenGarden.SandSim.garden.disturbance import DisturbanceEngine, cellNoise, falloff
from zenGarden.SandSim.garden.heightField import HeightField
from zenGarden.SandSim.garden.massPool import MassPool


class RecordingAudio:
    '''Audio sink that remembers what it was asked to play.'''

    def __init__(self):
        self.disturbIntensities = []
        self.bladeCalls = 0

    def init(self):
        pass

    def playAmbient(self):
        pass

    def stopAmbient(self):
        pass

    def playDisturbSound(self, intensity):
        self.disturbIntensities.append(intensity)

    def playBladeSound(self):
        self.bladeCalls += 1


def testFalloffShape():
    d = np.array([0.0, 8.75, 17.5, 20.0])
    assert np.allclose(falloff(d, 17.5), [1.0, 0.25, 0.0, 0.0])


def testCellNoiseIsBoundedAndDeterministic():
    cols, rows = np.meshgrid(np.arange(50), np.arange(50))
    noise = cellNoise(cols, rows)
    assert np.all(noise >= -1.0) and np.all(noise <= 1.0)
    assert np.array_equal(noise, cellNoise(cols, rows))
    assert np.std(noise) > 0.1


def testDigLowersCenterCell(flatField, gradedConfig):
    '''Centre cell drops by the full strength; cells past the touch radius are untouched.'''
    engine = DisturbanceEngine(flatField, gradedConfig)
    assert engine.radiusCells == 17.5

    result = engine.disturb((0.0, 0.0), 0.25, mode='dig')

    assert flatField.height(50, 50) == pytest.approx(-0.25)
    assert flatField.height(50 + 18, 50) == 0.0
    assert flatField.height(50, 50 - 18) == 0.0
    assert flatField.height(50 + 17, 50) < 0.0
    assert result.removed == pytest.approx(-flatField.totalMass())
    assert result.cellsAffected > 0


def testDisturbanceNearRimIsIgnored(flatField, gradedConfig):
    engine = DisturbanceEngine(flatField, gradedConfig)

    result = engine.disturb((90.0, 0.0), 0.25, mode='dig')
    assert result.cellsAffected == 0
    assert flatField.totalMass() == 0.0

    result = engine.disturb((0.0, -150.0), 0.25, mode='pile')
    assert result.cellsAffected == 0
    assert flatField.totalMass() == 0.0

    result = engine.disturb((89.0, 0.0), 0.25, mode='dig')
    assert result.cellsAffected > 0


def testConserveKeepsMass(flatField, gradedConfig):
    '''Sand dug from the hole reappears on the surrounding ring.'''
    engine = DisturbanceEngine(flatField, gradedConfig)
    result = engine.disturb((-10.0, 6.0), 0.25, mode='conserve')

    assert result.removed > 0.0
    assert result.deposited == pytest.approx(result.removed, rel=1e-12)
    assert result.overflow == pytest.approx(0.0, abs=1e-12)
    assert flatField.totalMass() == pytest.approx(0.0, abs=1e-9)
    assert flatField.heights.max() > 0.0


def testConserveOverflowGoesToPool(mapper, gradedConfig):
    config = gradedConfig.withOverrides(maxHeight=0.001)
    field = HeightField.initialize(mapper, config)
    pool = MassPool(config.drainFraction, config.holeThreshold, config.fillIncrement)
    engine = DisturbanceEngine(field, config, pool=pool)

    result = engine.disturb((0.0, 0.0), 0.25, mode='conserve')

    assert result.overflow > 0.0
    assert pool.amount == pytest.approx(result.overflow)
    assert field.totalMass() + pool.amount == pytest.approx(0.0, abs=1e-9)


def testDigFeedsPool(flatField, gradedConfig):
    pool = MassPool(0.02, 0.5, 0.01)
    engine = DisturbanceEngine(flatField, gradedConfig, pool=pool)
    result = engine.disturb((0.0, 0.0), 0.25, mode='dig')
    assert pool.amount == pytest.approx(result.removed)


def testPileAndNoiseAreReproducible(mapper, gradedConfig):
    for mode in ('pile', 'noise', 'push'):
        first = HeightField.initialize(mapper, gradedConfig)
        second = HeightField.initialize(mapper, gradedConfig)
        DisturbanceEngine(first, gradedConfig).disturb((12.0, -7.0), 0.5, mode=mode, bladeAngle=0.3)
        DisturbanceEngine(second, gradedConfig).disturb((12.0, -7.0), 0.5, mode=mode, bladeAngle=0.3)
        assert np.array_equal(first.heights, second.heights)
        assert np.any(first.heights != 0.0)


def testPileRaisesByFalloff(flatField, gradedConfig):
    engine = DisturbanceEngine(flatField, gradedConfig)
    engine.disturb((0.0, 0.0), 0.5, mode='pile')

    assert flatField.height(50, 50) == pytest.approx(0.5)
    assert flatField.height(53, 48) == pytest.approx(0.5 * (1.0 - np.sqrt(13.0) / 17.5) ** 2)
    assert flatField.height(50, 50 + 18) == 0.0


def testNoiseFollowsCellHash(flatField, gradedConfig):
    engine = DisturbanceEngine(flatField, gradedConfig)
    engine.disturb((0.0, 0.0), 0.5, mode='noise')

    for dCol, dRow in ((0, 0), (3, -2), (-7, 5)):
        col, row = 50 + dCol, 50 + dRow
        weight = (1.0 - np.hypot(dCol, dRow) / 17.5) ** 2
        expected = 0.5 * weight * float(cellNoise(np.array(col), np.array(row)))
        assert flatField.height(col, row) == pytest.approx(expected)


def testPushPattern(flatField, gradedConfig):
    '''Four-lobed push: zero along the axes, +/- f(d) on the diagonals at blade angle 0.'''
    engine = DisturbanceEngine(flatField, gradedConfig)
    engine.disturb((0.0, 0.0), 1.0, mode='push', bladeAngle=0.0)

    diagonal = (1.0 - np.sqrt(2.0) / 17.5) ** 2
    assert flatField.height(51, 50) == pytest.approx(0.0, abs=1e-12)
    assert flatField.height(50, 51) == pytest.approx(0.0, abs=1e-12)
    assert flatField.height(51, 51) == pytest.approx(diagonal)
    assert flatField.height(51, 49) == pytest.approx(-diagonal)
    assert flatField.height(49, 51) == pytest.approx(-diagonal)


def testPushPhaseFollowsBlade(flatField, gradedConfig):
    engine = DisturbanceEngine(flatField, gradedConfig)
    engine.disturb((0.0, 0.0), 1.0, mode='push', bladeAngle=np.pi / 2.0)

    nextCell = (1.0 - 1.0 / 17.5) ** 2
    assert flatField.height(51, 50) == pytest.approx(nextCell)
    assert flatField.height(50, 51) == pytest.approx(-nextCell)
    assert flatField.height(51, 51) == pytest.approx(0.0, abs=1e-12)


def testRepeatedDisturbancesStayInBounds(flatField, gradedConfig):
    engine = DisturbanceEngine(flatField, gradedConfig)
    for _ in range(60):
        engine.disturb((5.0, 5.0), 2.0, mode='dig')
        engine.disturb((-40.0, 40.0), 2.0, mode='pile')
        engine.disturb((30.0, -30.0), 5.0, mode='noise')
    assert flatField.heights.min() >= gradedConfig.minHeight
    assert flatField.heights.max() <= gradedConfig.maxHeight
    assert flatField.height(52, 52) == gradedConfig.minHeight


def testUnknownModeRaises(flatField, gradedConfig):
    engine = DisturbanceEngine(flatField, gradedConfig)
    with pytest.raises(ValueError, match='Unknown disturbance mode'):
        engine.disturb((0.0, 0.0), 0.25, mode='rake')


def testDisturbSoundIntensityIsClipped(flatField, gradedConfig):
    audio = RecordingAudio()
    engine = DisturbanceEngine(flatField, gradedConfig, audio=audio)
    engine.disturb((0.0, 0.0), 0.125, mode='dig')
    engine.disturb((0.0, 0.0), 5.0, mode='dig')
    engine.disturb((95.0, 0.0), 0.25, mode='dig')
    assert audio.disturbIntensities == [pytest.approx(0.5), 1.0]
