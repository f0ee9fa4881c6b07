# -- Pointer Input and Speed Control -- #

'''
Input producers for the sand garden.

PointerTracker records pointer/touch activity without touching the
simulation: a press queues its position at full strength, a drag
queues sub-points every dragStep screen units along the segment from
the previous position (so fast drags still disturb every cell along
the way), and release/leave/cancel end the interaction. The garden
drains the queue inside its next tick.

SpeedControl maps a bounded slider value linearly onto the blade
rotation speed.
'''

from __future__ import annotations

import math

from zenGarden.SandSim import constants as const


class PointerTracker:
    '''
    Records pointer positions for the next simulation tick.

    Parameters:
    -----------
    touchStrength : float
        Strength queued for a press
    dragMultiplier : float
        Strength multiplier for drag sub-points
    dragStep : float
        Screen distance between drag sub-points
    '''

    def __init__(
        self,
        touchStrength: float = const.touchStrength,
        dragMultiplier: float = const.dragMultiplier,
        dragStep: float = const.dragStep,
    ) -> None:
        self.touchStrength = touchStrength
        self.dragMultiplier = dragMultiplier
        self.dragStep = dragStep

        self._interacting: bool = False
        self._lastPosition: tuple[float, float] | None = None
        self._pending: list[tuple[float, float, float]] = []

    @property
    def isInteracting(self) -> bool:
        '''True between press and release.'''
        return self._interacting

    @property
    def lastPosition(self) -> tuple[float, float] | None:
        '''Most recent pointer position while interacting.'''
        return self._lastPosition

    @property
    def dragStrength(self) -> float:
        '''Strength of interpolated drag sub-points.'''
        return self.touchStrength * self.dragMultiplier

    def pointerDown(self, x: float, y: float) -> None:
        '''Begin interaction and queue the press position.'''
        self._interacting = True
        self._lastPosition = (x, y)
        self._pending.append((x, y, self.touchStrength))

    def pointerMove(self, x: float, y: float) -> None:
        '''
        Queue sub-points along the drag segment.

        Ignored unless a press is active. Sub-points are spaced every
        dragStep units from the previous position up to and including
        the new one.
        '''
        if not self._interacting:
            return

        if self._lastPosition is not None:
            x0, y0 = self._lastPosition
            dx = x - x0
            dy = y - y0
            steps = math.ceil(math.hypot(dx, dy) / self.dragStep)
            for i in range(steps + 1):
                t = i / steps if steps > 0 else 0.0
                self._pending.append((x0 + dx * t, y0 + dy * t, self.dragStrength))

        self._lastPosition = (x, y)

    def pointerUp(self) -> None:
        '''End interaction.'''
        self._interacting = False
        self._lastPosition = None

    # Leaving the surface or a cancelled touch ends the stroke like a release
    pointerLeave = pointerUp
    pointerCancel = pointerUp

    def drainPending(self) -> list[tuple[float, float, float]]:
        '''Return and clear the queued (x, y, strength) points.'''
        pending = self._pending
        self._pending = []
        return pending

    def clear(self) -> None:
        '''Drop queued points and end any interaction.'''
        self._pending.clear()
        self.pointerUp()


class SpeedControl:
    '''
    Linear mapping from a bounded input onto the blade speed.

    Parameters:
    -----------
    inputMin, inputMax : float
        Slider range
    speedMin, speedMax : float
        Rotation speed range [rad/tick]
    '''

    def __init__(
        self,
        inputMin: float = const.speedInputMin,
        inputMax: float = const.speedInputMax,
        speedMin: float = const.speedMin,
        speedMax: float = const.speedMax,
    ) -> None:
        if inputMax <= inputMin:
            raise ValueError(f'inputMax ({inputMax}) must exceed inputMin ({inputMin})')
        self.inputMin = inputMin
        self.inputMax = inputMax
        self.speedMin = speedMin
        self.speedMax = speedMax

    def toSpeed(self, value: float) -> float:
        '''Rotation speed for a slider value (clamped to the input range).'''
        value = min(max(value, self.inputMin), self.inputMax)
        t = (value - self.inputMin) / (self.inputMax - self.inputMin)
        return self.speedMin + t * (self.speedMax - self.speedMin)

    def clampSpeed(self, speed: float) -> float:
        '''Speed limited to the range the control can set.'''
        lo, hi = sorted((self.speedMin, self.speedMax))
        return min(max(speed, lo), hi)

    def toInput(self, speed: float) -> float:
        '''Slider value for a rotation speed (clamped to the speed range).'''
        speed = self.clampSpeed(speed)
        if self.speedMax == self.speedMin:
            return self.inputMin
        t = (speed - self.speedMin) / (self.speedMax - self.speedMin)
        return self.inputMin + t * (self.inputMax - self.inputMin)
