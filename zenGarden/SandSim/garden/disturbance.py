# -- Sand Disturbance Engine -- #

'''
Local, falloff-weighted deformation of the sand under a touch.

A touch affects the disk of radius R = touchRadius / resolution grid
cells around the touched cell. Each cell at grid distance d is
weighted by the smooth falloff

    f(d) = (1 - d / R)^2    for d <= R, zero beyond

Modes:
    noise    : height += strength * f * noise(col, row)
    dig      : height -= strength * f   (clamped at minHeight)
    pile     : height += strength * f   (clamped at maxHeight)
    push     : height += strength * f * sin(2 * theta + bladeAngle)
    conserve : dig, then spread the removed sand over a ring
               R + 1 <= d <= R + spreadRadius, weighted by
               1 / (1 + d - (R + 1)), so the hole is surrounded by a dune

noise(col, row) is a fixed hash of the cell coordinates, so the shape
of a disturbance is reproducible for a given location and strength.
'''

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

import numpy as np

from zenGarden.SandSim.garden.heightField import HeightField
from zenGarden.SandSim.garden.massPool import MassPool
from zenGarden.SandSim.garden.protocols import AudioSink, GardenConfig, NullAudioSink

log = logging.getLogger(__name__)


def falloff(d: np.ndarray, radius: float) -> np.ndarray:
    '''Smooth touch falloff (1 - d/R)^2 inside the radius, zero outside.'''
    linear = np.clip(1.0 - d / radius, 0.0, None)
    return linear * linear


def cellNoise(cols: np.ndarray, rows: np.ndarray) -> np.ndarray:
    '''Deterministic per-cell noise in [-1, 1].'''
    seed = np.sin(cols * 12.9898 + rows * 78.233) * 43758.5453
    return 2.0 * (seed - np.floor(seed)) - 1.0


@dataclass
class DisturbanceResult:
    '''
    Bookkeeping for one disturb call.

    Parameters:
    -----------
    cellsAffected : int
        Cells inside the touch disk that were updated
    removed : float
        Sand removed by digging (positive part of the height drop)
    deposited : float
        Sand added back onto the surrounding ring (conserve mode)
    overflow : float
        Removed sand that could not be deposited (clamped at maxHeight
        or no ring cells available)
    '''

    cellsAffected: int = 0
    removed: float = 0.0
    deposited: float = 0.0
    overflow: float = 0.0


class DisturbanceEngine:
    '''
    Applies touch disturbances to a height field.

    Parameters:
    -----------
    field : HeightField
        Height field to deform, modified in-place
    config : GardenConfig
        Touch radius, margins, strengths and spreading parameters
    pool : MassPool | None
        Receives removed/overflowing sand when the pool is enabled
    audio : AudioSink | None
        Sound hooks (defaults to a silent sink)
    '''

    def __init__(
        self,
        field: HeightField,
        config: GardenConfig,
        pool: MassPool | None = None,
        audio: AudioSink | None = None,
    ) -> None:
        self._field = field
        self._config = config
        self._pool = pool
        self._audio = audio or NullAudioSink()

    @property
    def radiusCells(self) -> float:
        '''Touch radius in grid cells.'''
        return self._config.touchRadius / self._field.mapper.resolution

    def disturb(
        self,
        point: tuple[float, float],
        strength: float,
        mode: str = 'noise',
        bladeAngle: float = 0.0,
    ) -> DisturbanceResult:
        '''
        Deform the sand around a screen point.

        Points outside the garden (closer than touchMargin to the rim)
        are ignored. Cells outside the grid or outside the sand bed are
        skipped.

        Parameters:
        -----------
        point : tuple[float, float]
            Touch position [screen units]
        strength : float
            Peak height change at the touch centre
        mode : str
            'noise', 'dig', 'pile', 'push' or 'conserve'
        bladeAngle : float
            Current blade angle, phase of the push pattern [rad]

        Returns:
        --------
        DisturbanceResult : What the call did
        '''
        mapper = self._field.mapper
        if not mapper.isInsideGarden(point, self._config.touchMargin):
            return DisturbanceResult()

        centerCol, centerRow = mapper.toGrid(point)
        radius = self.radiusCells
        rows, cols, dRow, dCol, dist = self._neighbourhood(centerCol, centerRow, math.ceil(radius))

        inDisk = dist <= radius
        rows, cols, dRow, dCol, dist = rows[inDisk], cols[inDisk], dRow[inDisk], dCol[inDisk], dist[inDisk]
        if len(rows) == 0:
            return DisturbanceResult()

        weight = falloff(dist, radius)
        heights = self._field.heights
        current = np.clip(heights[rows, cols], self._field.minHeight, self._field.maxHeight)

        result = DisturbanceResult(cellsAffected=len(rows))

        if mode == 'noise':
            delta = strength * weight * cellNoise(cols, rows)
            heights[rows, cols] = np.clip(current + delta, self._field.minHeight, self._field.maxHeight)

        elif mode == 'pile':
            heights[rows, cols] = np.minimum(current + strength * weight, self._field.maxHeight)

        elif mode == 'push':
            theta = np.arctan2(dRow, dCol)
            delta = strength * weight * np.sin(2.0 * theta + bladeAngle)
            heights[rows, cols] = np.clip(current + delta, self._field.minHeight, self._field.maxHeight)

        elif mode in ('dig', 'conserve'):
            newHeights = np.maximum(current - strength * weight, self._field.minHeight)
            heights[rows, cols] = newHeights
            result.removed = float(np.sum(np.maximum(current - newHeights, 0.0)))

            if mode == 'conserve':
                result.deposited = self._spreadRing(centerCol, centerRow, radius, result.removed)
                result.overflow = max(0.0, result.removed - result.deposited)
                self._collect(result.overflow)
            else:
                self._collect(result.removed)

        else:
            raise ValueError(f'Unknown disturbance mode \'{mode}\'')

        intensity = min(max(strength / self._config.touchStrength, 0.0), 1.0)
        self._audio.playDisturbSound(intensity)
        return result

    ######################################################################
    # -- Helpers -- #
    ######################################################################

    def _neighbourhood(
        self,
        centerCol: int,
        centerRow: int,
        reach: int,
    ) -> tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
        '''
        Active in-grid cells of the square of half-width reach.

        Returns:
        --------
        tuple : rows, cols, row offsets, col offsets, grid distances
        '''
        dRow, dCol = np.mgrid[-reach:reach + 1, -reach:reach + 1]
        dRow = dRow.ravel()
        dCol = dCol.ravel()
        rows = centerRow + dRow
        cols = centerCol + dCol

        nRows, nCols = self._field.shape
        inGrid = (rows >= 0) & (rows < nRows) & (cols >= 0) & (cols < nCols)
        rows, cols, dRow, dCol = rows[inGrid], cols[inGrid], dRow[inGrid], dCol[inGrid]

        isActive = self._field.active[rows, cols]
        rows, cols, dRow, dCol = rows[isActive], cols[isActive], dRow[isActive], dCol[isActive]

        dist = np.hypot(dRow, dCol)
        return rows, cols, dRow, dCol, dist

    def _spreadRing(self, centerCol: int, centerRow: int, radius: float, totalRemoved: float) -> float:
        '''
        Deposit removed sand on the ring around a hole.

        Each ring cell gets (weight / totalWeight) * totalRemoved,
        clamped to maxHeight.

        Returns:
        --------
        float : Sand actually deposited
        '''
        if totalRemoved <= 0.0:
            return 0.0

        inner = radius + 1.0
        outer = radius + self._config.spreadRadius
        rows, cols, _, _, dist = self._neighbourhood(centerCol, centerRow, math.ceil(outer))

        onRing = (dist >= inner) & (dist <= outer)
        rows, cols, dist = rows[onRing], cols[onRing], dist[onRing]
        if len(rows) == 0:
            return 0.0

        weights = 1.0 / (1.0 + dist - inner)
        shares = weights / np.sum(weights) * totalRemoved

        heights = self._field.heights
        before = heights[rows, cols]
        after = np.minimum(before + shares, self._field.maxHeight)
        heights[rows, cols] = after
        return float(np.sum(after - before))

    def _collect(self, amount: float) -> None:
        '''Send removed sand to the pool when one is attached.'''
        if self._pool is not None and amount > 0.0:
            self._pool.add(amount)
