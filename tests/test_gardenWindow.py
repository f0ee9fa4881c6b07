# -- Interactive Window Control Tests -- #

import pygame
import pytest

from zenGarden.SandSim.adapters.pointerInput import SpeedControl
from zenGarden.SandSim.interactive.gardenWindow import SpeedSlider


def mouse(eventType, x, y=34):
    return pygame.event.Event(eventType, pos=(x, y), button=1)


@pytest.fixture
def slider():
    '''160-pixel track starting at x = 20, knob at the slowest speed.'''
    return SpeedSlider(pygame.Rect(20, 30, 160, 8), SpeedControl(), 0.001)


def testSliderStartsAtSpeed():
    slider = SpeedSlider(pygame.Rect(20, 30, 160, 8), SpeedControl(), 0.008)
    assert slider.fraction == pytest.approx(0.5)
    assert slider.value == pytest.approx(50.5)
    assert slider.speed == pytest.approx(0.008)


def testPressAndDragSetSpeed(slider):
    assert slider.handleEvent(mouse(pygame.MOUSEBUTTONDOWN, 100)) == pytest.approx(0.008)
    assert slider.grabbed

    # Dragging past the end of the track pins the knob
    assert slider.handleEvent(mouse(pygame.MOUSEMOTION, 400, 300)) == pytest.approx(0.015)
    assert slider.handleEvent(mouse(pygame.MOUSEBUTTONUP, 400, 300)) == pytest.approx(0.015)
    assert not slider.grabbed


def testEventsAwayFromSliderPassThrough(slider):
    assert slider.handleEvent(mouse(pygame.MOUSEBUTTONDOWN, 400, 400)) is None
    assert slider.handleEvent(mouse(pygame.MOUSEMOTION, 100)) is None
    assert slider.handleEvent(mouse(pygame.MOUSEBUTTONUP, 100)) is None
    assert slider.speed == pytest.approx(0.001)
