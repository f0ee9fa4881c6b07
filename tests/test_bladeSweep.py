# -- Blade Sweep Tests -- #

import math

import numpy as np
import pytest

from zenGarden.SandSim.garden.bladeSweep import BladeState, BladeSweep
from zenGarden.SandSim.garden.heightField import HeightField
from zenGarden.SandSim.garden.massPool import MassPool
from zenGarden.SandSim.scenarios.presets import createPreset


def sweptAnnulus(garden):
    '''Active cells whose whole square lies between the hub and the blade tip.'''
    field = garden.heightField
    resolution = garden.mapper.resolution
    inner = garden.config.hubRadius + 2.0 * resolution
    outer = garden.bladeSweep.bladeLength - 2.0 * resolution
    return field.active & (field.distances >= inner) & (field.distances <= outer)


def testAngleWrapsIntoOneRevolution():
    blade = BladeState(angle=2.0 * math.pi - 0.01, rotationSpeed=0.05)
    angle = blade.advance()
    assert 0.0 <= angle < 2.0 * math.pi
    assert angle == pytest.approx(0.04)


def testWedgeFollowsSpeed(makeGarden):
    garden = makeGarden('classic', rotationSpeed=0.01)
    assert garden.bladeSweep.wedgeAngle == pytest.approx(0.03)
    garden.setRotationSpeed(0.002)
    assert garden.bladeSweep.wedgeAngle == pytest.approx(0.006)


def testSidesAreOppositeAndDisjoint(makeGarden):
    garden = makeGarden('classic')
    garden.tick()
    result = garden.lastSweep
    assert len(result.combCells) > 0
    assert len(result.smoothCells) > 0
    assert len(np.intersect1d(result.combCells, result.smoothCells)) == 0
    assert len(np.unique(result.combCells)) == len(result.combCells)

    # Comb cells sit on the +x side for a blade near angle zero
    worldX = garden.mapper.cellCoordinates()[0].reshape(-1)
    assert np.all(worldX[result.combCells] > 0.0)
    assert np.all(worldX[result.smoothCells] < 0.0)


def testOneRevolutionCoversTheAnnulus(makeGarden):
    '''After ceil(2*pi / rotationSpeed) ticks both sides have swept every annulus cell.'''
    garden = makeGarden('classic')
    combSeen = np.zeros(garden.heightField.shape, dtype=bool).reshape(-1)
    smoothSeen = np.zeros_like(combSeen)

    for _ in range(garden.config.ticksPerRevolution):
        garden.tick()
        combSeen[garden.lastSweep.combCells] = True
        smoothSeen[garden.lastSweep.smoothCells] = True

    annulus = sweptAnnulus(garden).reshape(-1)
    assert np.count_nonzero(annulus) > 1000
    assert np.all(combSeen[annulus])
    assert np.all(smoothSeen[annulus])
    # Nothing outside the bed is ever raked
    assert not np.any(combSeen[~garden.heightField.active.reshape(-1)])


def testTargetConvergesEachRevolution(makeGarden):
    '''From a flat bed, deviation over the swept annulus drops every revolution.'''
    garden = makeGarden('classic', initialPattern='flat')
    annulus = sweptAnnulus(garden)
    field = garden.heightField

    deviations = [field.deviation(annulus)]
    for _ in range(3):
        for _ in range(garden.config.ticksPerRevolution):
            garden.tick()
        deviations.append(field.deviation(annulus))

    assert all(later < earlier for earlier, later in zip(deviations, deviations[1:]))
    assert deviations[-1] < 0.6 * deviations[0]


def testGradedSnapIsExact(mapper):
    '''Cells within snapEpsilon of the target land on it exactly and stay there.'''
    config = createPreset('graded', initialPattern='target', rotationSpeed=0.05)
    field = HeightField.initialize(mapper, config)
    field.heights[field.active] += 0.01
    sweep = BladeSweep(field, config, BladeState(rotationSpeed=config.rotationSpeed))

    result = sweep.tick()
    combCells = result.combCells
    flatHeights = field.heights.reshape(-1)
    flatTarget = field.target.reshape(-1)
    assert len(combCells) > 0
    assert np.array_equal(flatHeights[combCells], flatTarget[combCells])

    snapped = flatHeights[combCells].copy()
    sweep._relax(combCells, comb=True)
    assert np.array_equal(flatHeights[combCells], snapped)


def testGradedUsesSlowRateForDeepHoles(mapper):
    config = createPreset('graded', initialPattern='flat', rotationSpeed=0.05)
    field = HeightField.initialize(mapper, config)
    sweep = BladeSweep(field, config, BladeState(rotationSpeed=config.rotationSpeed))
    cells = sweep.sweptCells(0.0)

    flatHeights = field.heights.reshape(-1)
    goal = field.target.reshape(-1)[cells]
    flatHeights[cells] = goal - 2.0
    sweep._relax(cells, comb=True)
    assert np.allclose(flatHeights[cells], goal - 2.0 * (1.0 - config.disturbedRate))

    flatHeights[cells] = goal - 0.2
    sweep._relax(cells, comb=True)
    assert np.allclose(flatHeights[cells], goal - 0.2 * (1.0 - config.normalRate))


def testOverflowFeedsPoolAndStaysBounded(mapper):
    config = createPreset('pooled', rotationSpeed=0.05)
    field = HeightField.initialize(mapper, config)
    field.heights[field.active] = config.maxHeight
    pool = MassPool(config.drainFraction, config.holeThreshold, config.fillIncrement)
    sweep = BladeSweep(field, config, BladeState(rotationSpeed=config.rotationSpeed), pool=pool)

    overflowed = 0.0
    for _ in range(20):
        overflowed += sweep.tick().overflowed
        assert field.heights.min() >= config.minHeight
        assert field.heights.max() <= config.maxHeight

    assert overflowed > 0.0
    assert pool.amount >= config.poolFraction * overflowed - 1e-9


def testSpreadToNeighborsReportsLostSand(mapper):
    config = createPreset('pooled')
    field = HeightField.initialize(mapper, config)
    sweep = BladeSweep(field, config, BladeState())
    nCols = field.shape[1]

    # Cell on the +x axis: neighbours are the cells just inward and outward along x
    cell = np.array([50 * nCols + 70])
    lost = sweep.spreadToNeighbors(cell, np.array([1.0]))
    assert lost == pytest.approx(0.0)
    assert field.height(71, 50) == pytest.approx(0.5)
    assert field.height(69, 50) == pytest.approx(0.5)

    field.heights[50, 71] = config.maxHeight
    lost = sweep.spreadToNeighbors(cell, np.array([1.0]))
    assert lost == pytest.approx(0.5)


def testBoundedUnderHeavyInteraction(makeGarden):
    garden = makeGarden('pooled')
    center = (garden.mapper.centerX, garden.mapper.centerY)
    for tick in range(150):
        if tick % 10 == 0:
            garden.disturb((center[0] + 40.0, center[1]), strength=5.0, mode='dig')
            garden.disturb((center[0] - 30.0, center[1] + 20.0), strength=5.0, mode='pile')
        state = garden.tick()
        assert state.minHeight >= garden.config.minHeight
        assert state.maxHeight <= garden.config.maxHeight
        assert state.pool >= 0.0
    heights = garden.heightField.heights
    assert heights.min() >= garden.config.minHeight
    assert heights.max() <= garden.config.maxHeight
