# -- Sand Height Field -- #

'''
Height field and target pattern field of the sand bed.

The height field stores the vertical displacement of the sand at each
grid cell as a contiguous NumPy array, clamped to a closed interval.
The target pattern is the concentric wave the comb side of the blade
imprints:

    target(dist) = amplitude * sin(2 * pi * dist * waveFrequency)
    waveFrequency = toothCount / gardenRadius

The tooth count is derived once per grid setup from the blade length
and the tooth spacing, and the same value drives the rendered comb.
'''

from __future__ import annotations

import logging
import math

import numpy as np

from zenGarden.SandSim.garden.gridMapper import GridMapper
from zenGarden.SandSim.garden.protocols import GardenConfig

log = logging.getLogger(__name__)


def computeToothCount(gardenRadius: float, config: GardenConfig) -> int:
    '''
    Number of comb teeth (and of concentric waves) for a garden.

    toothCount = floor((bladeLength - toothInset) / toothSpacing),
    bladeLength = gardenRadius - activeMargin. A pinned
    config.toothCount takes precedence. Never less than 1.

    Parameters:
    -----------
    gardenRadius : float
        Radius of the sand bed
    config : GardenConfig
        Garden configuration

    Returns:
    --------
    int : Tooth count
    '''
    if config.toothCount is not None:
        return config.toothCount
    bladeLength = gardenRadius - config.activeMargin
    return max(1, math.floor((bladeLength - config.toothInset) / config.toothSpacing))


def targetHeight(dist: np.ndarray | float, amplitude: float, waveFrequency: float) -> np.ndarray | float:
    '''Concentric wave height at a radial distance.'''
    return amplitude * np.sin(2.0 * np.pi * dist * waveFrequency)


class HeightField:
    '''
    Mutable sand heights plus the immutable target pattern.

    Arrays are indexed [row, col]. Inactive cells (outside the sand
    bed) hold zero in both arrays and are never written by the engines.

    Parameters:
    -----------
    mapper : GridMapper
        Geometry of the garden
    toothCount : int
        Wave count shared with the renderer
    amplitude : float
        Wave amplitude
    minHeight, maxHeight : float
        Clamping bounds
    '''

    def __init__(
        self,
        mapper: GridMapper,
        toothCount: int,
        amplitude: float,
        minHeight: float,
        maxHeight: float,
    ) -> None:
        self._mapper = mapper
        self._toothCount = toothCount
        self._amplitude = amplitude
        self.minHeight = minHeight
        self.maxHeight = maxHeight

        self._distances = mapper.cellDistances()
        self._active = mapper.activeMask()

        target = targetHeight(self._distances, amplitude, self.waveFrequency)
        target = np.where(self._active, target, 0.0)
        np.clip(target, minHeight, maxHeight, out=target)
        target.flags.writeable = False
        self._target = target

        self.heights = np.zeros(mapper.shape, dtype=np.float64)

    @classmethod
    def initialize(cls, mapper: GridMapper, config: GardenConfig) -> HeightField:
        '''
        Allocate and fill a height field for a garden layout.

        Grid extent is ceil(2 * gardenRadius / resolution) per axis.
        The initial heights follow config.initialPattern:
        'target' (fully patterned), 'split' (patterned on the x >= 0
        half, flat on the other) or 'flat'.

        Parameters:
        -----------
        mapper : GridMapper
            Geometry of the garden
        config : GardenConfig
            Garden configuration

        Returns:
        --------
        HeightField : Ready-to-use height field
        '''
        if mapper.gardenRadius <= config.activeMargin:
            raise ValueError(
                f'Garden radius {mapper.gardenRadius:.1f} leaves no sand inside '
                f'the {config.activeMargin:.1f} margin'
            )

        field = cls(
            mapper=mapper,
            toothCount=computeToothCount(mapper.gardenRadius, config),
            amplitude=config.waveAmplitude,
            minHeight=config.minHeight,
            maxHeight=config.maxHeight,
        )
        if field.nActive == 0:
            raise ValueError(
                f'Garden radius {mapper.gardenRadius:.1f} is too small for a single '
                f'{mapper.resolution:g}-unit cell inside the {config.activeMargin:.1f} margin'
            )
        field.resetTo(config.initialPattern)

        log.debug(
            'Height field %dx%d, radius %.1f, %d teeth, %d active cells, pattern %s',
            mapper.gridWidth, mapper.gridHeight, mapper.gardenRadius,
            field.toothCount, field.nActive, config.initialPattern,
        )
        return field

    def resetTo(self, pattern: str) -> None:
        '''Overwrite the heights with an initial pattern.'''
        if pattern == 'target':
            self.heights[:] = self._target
        elif pattern == 'split':
            worldX, _ = self._mapper.cellCoordinates()
            self.heights[:] = np.where(worldX >= 0.0, self._target, 0.0)
        elif pattern == 'flat':
            self.heights[:] = 0.0
        else:
            raise ValueError(f'Unknown initial pattern \'{pattern}\'')

    ######################################################################
    # -- Properties -- #
    ######################################################################

    @property
    def mapper(self) -> GridMapper:
        '''Geometry the field was built for.'''
        return self._mapper

    @property
    def target(self) -> np.ndarray:
        '''Read-only target pattern, shape (rows, cols).'''
        return self._target

    @property
    def active(self) -> np.ndarray:
        '''Boolean mask of cells inside the sand bed.'''
        return self._active

    @property
    def distances(self) -> np.ndarray:
        '''World distance of each cell from the centre.'''
        return self._distances

    @property
    def toothCount(self) -> int:
        '''Comb tooth count (= number of concentric waves).'''
        return self._toothCount

    @property
    def amplitude(self) -> float:
        '''Wave amplitude.'''
        return self._amplitude

    @property
    def waveFrequency(self) -> float:
        '''Waves per unit radius: toothCount / gardenRadius.'''
        return self._toothCount / self._mapper.gardenRadius

    @property
    def shape(self) -> tuple[int, int]:
        '''Array shape (rows, cols).'''
        return self.heights.shape

    @property
    def nActive(self) -> int:
        '''Number of active cells.'''
        return int(np.count_nonzero(self._active))

    ######################################################################
    # -- Queries -- #
    ######################################################################

    def height(self, col: int, row: int) -> float:
        '''Height of one cell.'''
        return float(self.heights[row, col])

    def targetAt(self, col: int, row: int) -> float:
        '''Target height of one cell.'''
        return float(self._target[row, col])

    def clampInPlace(self) -> None:
        '''Force every height back into [minHeight, maxHeight].'''
        np.clip(self.heights, self.minHeight, self.maxHeight, out=self.heights)

    def totalMass(self) -> float:
        '''Sum of heights over the active cells.'''
        return float(np.sum(self.heights[self._active]))

    def deviation(self, mask: np.ndarray | None = None) -> float:
        '''
        Sum of |target - height| over a set of cells.

        Parameters:
        -----------
        mask : np.ndarray | None
            Boolean mask restricting the sum (defaults to active cells)

        Returns:
        --------
        float : Total absolute deviation from the target pattern
        '''
        if mask is None:
            mask = self._active
        return float(np.sum(np.abs(self._target[mask] - self.heights[mask])))

    def snapshot(self) -> np.ndarray:
        '''Copy of the current heights.'''
        return self.heights.copy()
