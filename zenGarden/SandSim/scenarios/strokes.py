# -- Scripted Pointer Strokes -- #

'''
Deterministic pointer strokes for headless garden runs.

A stroke presses at its first point on its start tick, moves through
the remaining points one per tick and releases on the tick after the
last point. A StrokeScript drives a PointerTracker with any number of
strokes, so scripted runs exercise exactly the same input path as the
interactive window.
'''

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from zenGarden.SandSim.adapters.pointerInput import PointerTracker


@dataclass
class Stroke:
    '''
    One press-drag-release gesture.

    Parameters:
    -----------
    startTick : int
        Tick on which the press happens
    points : list[tuple[float, float]]
        Screen positions, one per tick
    '''

    startTick: int
    points: list[tuple[float, float]]

    @property
    def endTick(self) -> int:
        '''Tick on which the release happens.'''
        return self.startTick + len(self.points)

    @classmethod
    def line(
        cls,
        start: tuple[float, float],
        end: tuple[float, float],
        nPoints: int,
        startTick: int = 0,
    ) -> Stroke:
        '''Straight drag from start to end.'''
        t = np.linspace(0.0, 1.0, max(nPoints, 1))
        xs = start[0] + (end[0] - start[0]) * t
        ys = start[1] + (end[1] - start[1]) * t
        return cls(startTick=startTick, points=list(zip(xs.tolist(), ys.tolist())))

    @classmethod
    def arc(
        cls,
        center: tuple[float, float],
        radius: float,
        startAngle: float,
        sweepAngle: float,
        nPoints: int,
        startTick: int = 0,
    ) -> Stroke:
        '''Circular drag around a centre (angles in radians).'''
        angles = startAngle + np.linspace(0.0, sweepAngle, max(nPoints, 1))
        xs = center[0] + radius * np.cos(angles)
        ys = center[1] + radius * np.sin(angles)
        return cls(startTick=startTick, points=list(zip(xs.tolist(), ys.tolist())))


class StrokeScript:
    '''
    Feeds strokes into a pointer tracker tick by tick.

    Strokes must not overlap in time (a single pointer).
    '''

    def __init__(self, strokes: list[Stroke]) -> None:
        self._strokes = sorted(strokes, key=lambda s: s.startTick)
        for first, second in zip(self._strokes, self._strokes[1:]):
            if second.startTick < first.endTick + 1:
                raise ValueError(
                    f'Stroke starting at tick {second.startTick} overlaps the one '
                    f'ending at tick {first.endTick}'
                )

    @property
    def strokes(self) -> list[Stroke]:
        '''Strokes in start order.'''
        return list(self._strokes)

    @property
    def lastTick(self) -> int:
        '''Tick of the final release (0 without strokes).'''
        return self._strokes[-1].endTick if self._strokes else 0

    def feed(self, tick: int, pointer: PointerTracker) -> None:
        '''
        Emit the pointer events scheduled for a tick.

        Parameters:
        -----------
        tick : int
            Tick about to be simulated
        pointer : PointerTracker
            Tracker to drive
        '''
        for stroke in self._strokes:
            if tick == stroke.startTick:
                pointer.pointerDown(*stroke.points[0])
            elif stroke.startTick < tick < stroke.endTick:
                pointer.pointerMove(*stroke.points[tick - stroke.startTick])
            elif tick == stroke.endTick:
                pointer.pointerUp()


def demoStrokes(viewport: tuple[float, float], gardenRadius: float, startTick: int = 10) -> StrokeScript:
    '''
    A short rake-through-the-garden demonstration.

    A straight drag across the bed followed by a half-circle around the
    pivot, both scaled to the garden size.

    Parameters:
    -----------
    viewport : tuple[float, float]
        Viewport size [screen units]
    gardenRadius : float
        Radius of the sand bed
    startTick : int
        Tick of the first press

    Returns:
    --------
    StrokeScript : Script with two strokes
    '''
    cx = viewport[0] / 2.0
    cy = viewport[1] / 2.0
    reach = 0.6 * gardenRadius

    straight = Stroke.line(
        (cx - reach, cy - 0.3 * reach),
        (cx + reach, cy + 0.3 * reach),
        nPoints=30,
        startTick=startTick,
    )
    curved = Stroke.arc(
        (cx, cy),
        radius=0.45 * gardenRadius,
        startAngle=0.0,
        sweepAngle=math.pi,
        nPoints=40,
        startTick=straight.endTick + 5,
    )
    return StrokeScript([straight, curved])
