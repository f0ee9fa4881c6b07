# -- Input and Colour Adapter Tests -- #

import numpy as np
import pytest

from zenGarden.SandSim import constants as const
from zenGarden.SandSim.adapters.colorMap import bladeTeeth, heightToRgb, renderGarden
from zenGarden.SandSim.adapters.pointerInput import PointerTracker, SpeedControl
from zenGarden.SandSim.garden.protocols import GardenConfig


######################################################################
# -- Pointer Tracker -- #
######################################################################

def testPressQueuesFullStrength():
    pointer = PointerTracker(touchStrength=2.5, dragMultiplier=0.8, dragStep=5.0)
    pointer.pointerDown(10.0, 20.0)
    assert pointer.isInteracting
    assert pointer.lastPosition == (10.0, 20.0)
    assert pointer.drainPending() == [(10.0, 20.0, 2.5)]
    assert pointer.drainPending() == []


def testDragIsInterpolated():
    '''A 10-unit drag with 5-unit steps yields the start, midpoint and end.'''
    pointer = PointerTracker(touchStrength=2.5, dragMultiplier=0.8, dragStep=5.0)
    pointer.pointerDown(0.0, 0.0)
    pointer.drainPending()

    pointer.pointerMove(10.0, 0.0)
    points = pointer.drainPending()
    assert [(x, y) for x, y, _ in points] == [(0.0, 0.0), (5.0, 0.0), (10.0, 0.0)]
    assert all(strength == pytest.approx(2.0) for _, _, strength in points)
    assert pointer.lastPosition == (10.0, 0.0)


def testLongDragStepCount():
    pointer = PointerTracker(dragStep=5.0)
    pointer.pointerDown(0.0, 0.0)
    pointer.drainPending()
    pointer.pointerMove(0.0, 23.0)
    points = pointer.drainPending()
    assert len(points) == 6
    assert points[-1][:2] == (0.0, 23.0)


def testMoveWithoutPressIsIgnored():
    pointer = PointerTracker()
    pointer.pointerMove(5.0, 5.0)
    assert pointer.drainPending() == []
    assert not pointer.isInteracting


def testLeaveAndCancelEndTheStroke():
    for release in ('pointerUp', 'pointerLeave', 'pointerCancel'):
        pointer = PointerTracker()
        pointer.pointerDown(1.0, 1.0)
        getattr(pointer, release)()
        assert not pointer.isInteracting
        assert pointer.lastPosition is None
        pointer.pointerMove(50.0, 50.0)
        assert len(pointer.drainPending()) == 1


######################################################################
# -- Speed Control -- #
######################################################################

def testSpeedRangeMapping():
    control = SpeedControl()
    assert control.toSpeed(1) == pytest.approx(0.001)
    assert control.toSpeed(100) == pytest.approx(0.015)
    assert control.toSpeed(50.5) == pytest.approx(0.008)


def testSpeedIsClamped():
    control = SpeedControl()
    assert control.toSpeed(-20) == pytest.approx(0.001)
    assert control.toSpeed(500) == pytest.approx(0.015)
    assert control.toInput(0.015) == pytest.approx(100.0)
    assert control.toInput(1.0) == pytest.approx(100.0)


def testDefaultSpeedClampedToSliderRange():
    control = SpeedControl()
    assert control.clampSpeed(GardenConfig().rotationSpeed) == pytest.approx(0.001)
    assert control.clampSpeed(0.02) == pytest.approx(0.015)
    assert control.clampSpeed(0.004) == 0.004
    assert control.toInput(control.clampSpeed(0.0008)) == pytest.approx(1.0)


def testSpeedControlRejectsEmptyRange():
    with pytest.raises(ValueError):
        SpeedControl(inputMin=10, inputMax=10)


######################################################################
# -- Colour Map -- #
######################################################################

def testColourEndpoints():
    rgb = heightToRgb(np.array([0.0, 2.0, 7.0, -2.0, -7.0]), saturation=2.0)
    assert rgb.dtype == np.uint8
    assert rgb.shape == (5, 3)
    assert tuple(rgb[0]) == const.baseColor
    assert tuple(rgb[1]) == const.highlightColor
    assert tuple(rgb[2]) == const.highlightColor
    assert tuple(rgb[3]) == const.shadowColor
    assert tuple(rgb[4]) == const.shadowColor


def testColourBlendsHalfway():
    rgb = heightToRgb(np.array([-1.0]), saturation=2.0)[0]
    expected = np.round((np.array(const.baseColor) + np.array(const.shadowColor)) / 2.0)
    assert np.array_equal(rgb, expected.astype(np.uint8))


def testRenderPaintsFrameOutsideCircle(flatField):
    image = renderGarden(flatField)
    assert image.shape == (100, 100, 3)
    assert tuple(image[0, 0]) == const.frameColor
    assert tuple(image[50, 50]) == const.baseColor


def testBladeTeethPositions():
    teeth = bladeTeeth(6, 20.0, 12.0)
    assert np.allclose(teeth, [25.0, 37.0, 49.0, 61.0, 73.0, 85.0])


def testRenderKeepsMarginRingAsSand(flatField):
    '''Cells between the sand-bed edge and the rim are drawn as sand, beyond the rim as frame.'''
    image = renderGarden(flatField)
    assert not flatField.active[50, 98]
    assert flatField.distances[50, 98] < flatField.mapper.gardenRadius
    assert tuple(image[50, 98]) == const.baseColor
    assert flatField.distances[10, 10] > flatField.mapper.gardenRadius
    assert tuple(image[10, 10]) == const.frameColor
