# -- Mass Pool Tests -- #

import numpy as np
import pytest

from zenGarden.SandSim.garden.massPool import MassPool


def testAddIgnoresNonPositive():
    pool = MassPool(0.02, 0.5, 0.01)
    pool.add(1.5)
    pool.add(0.0)
    pool.add(-3.0)
    assert pool.amount == 1.5
    assert pool.totalCollected == 1.5


def testDrainIsAtMostTwoPercent(flatField):
    '''Budget is 2% of the pool, handed out in row-major order.'''
    holes = np.argwhere(flatField.active)[:50]
    for row, col in holes:
        flatField.heights[row, col] = -2.0

    pool = MassPool(0.02, 0.5, 0.01)
    pool.add(10.0)
    deposited = pool.redistribute(flatField)

    assert deposited == pytest.approx(0.2)
    assert pool.amount == pytest.approx(9.8)
    assert pool.totalReleased == pytest.approx(0.2)

    # First twenty holes got a full increment, the rest nothing
    filled = flatField.heights[holes[:, 0], holes[:, 1]]
    assert np.allclose(filled[:20], -1.99)
    assert np.allclose(filled[20:], -2.0)


def testIncrementCapsEachHole(flatField):
    flatField.heights[50, 50] = -3.0
    pool = MassPool(0.02, 0.5, 0.01)
    pool.add(100.0)
    assert pool.redistribute(flatField) == pytest.approx(0.01)
    assert flatField.height(50, 50) == pytest.approx(-2.99)


def testNoHolesKeepsPool(flatField):
    pool = MassPool(0.02, 0.5, 0.01)
    pool.add(4.0)
    flatField.heights[60, 60] = -0.4
    assert pool.redistribute(flatField) == 0.0
    assert pool.amount == 4.0


def testPoolNeverGoesNegative(flatField):
    flatField.heights[flatField.active] = -5.0
    pool = MassPool(0.5, 0.5, 0.01)
    pool.add(0.003)
    total = 0.0
    for _ in range(50):
        total += pool.redistribute(flatField)
        assert pool.amount >= 0.0
    assert total + pool.amount == pytest.approx(0.003)


def testTroughsCountAsHoles(flatField):
    '''Natural pattern troughs below the threshold are filled too.'''
    flatField.heights[:] = flatField.target
    troughs = flatField.active & (flatField.target < -0.5)
    pool = MassPool(0.02, 0.5, 0.01)
    pool.add(100000.0)
    pool.redistribute(flatField)
    assert np.all(flatField.heights[troughs] > flatField.target[troughs])


def testResetClearsCounters():
    pool = MassPool(0.02, 0.5, 0.01)
    pool.add(2.0)
    pool.reset()
    assert (pool.amount, pool.totalCollected, pool.totalReleased) == (0.0, 0.0, 0.0)
