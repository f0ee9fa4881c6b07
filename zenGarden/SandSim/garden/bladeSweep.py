# -- Blade Sweep Engine -- #

'''
Rotating two-sided blade that rakes the sand each tick.

The blade is a full diameter through the pivot. The ray at the blade
angle is the comb side and drives cells toward the target pattern; the
opposite ray (angle + pi) is the smooth side and drives cells toward
zero.

Algorithm per tick:
    1. Advance the angle by rotationSpeed (mod 2*pi)
    2. For each side, sample the trailing wedge [angle - wedge, angle]
       from the hub out to the blade tip, wedge = rotationSpeed * wedgeFactor
    3. Optionally push overflowing sand (a dune above the goal) out of
       each swept cell, into the pool and the two radial neighbours
    4. Relax each swept cell toward its goal:
           fixed  : h += (goal - h) * rate
           graded : slow rate for large |goal - h|, normal rate otherwise,
                    exact snap once |goal - h| < snapEpsilon

Splitting the correction over many blade passes gives the gradual
raking look. Because the wedge width follows rotationSpeed, the swept
region always covers the arc travelled since the previous tick.

Sampling is dense enough (radial step resolution/2, arc step at most
resolution/3) that every active cell of the swept annulus is hit during
a revolution. Each cell is relaxed at most once per side per tick.
'''

from __future__ import annotations

import math
from dataclasses import dataclass, field

import numpy as np

from zenGarden.SandSim.garden.heightField import HeightField
from zenGarden.SandSim.garden.massPool import MassPool
from zenGarden.SandSim.garden.protocols import AudioSink, GardenConfig, NullAudioSink

TWO_PI = 2.0 * math.pi


######################################################################
# -- Blade State -- #
######################################################################

@dataclass
class BladeState:
    '''
    Angle and speed of the blade.

    Parameters:
    -----------
    angle : float
        Current angle in [0, 2*pi) [rad]
    rotationSpeed : float
        Advance per tick [rad]
    '''

    angle: float = 0.0
    rotationSpeed: float = 0.0008

    def advance(self) -> float:
        '''Step the angle forward by one tick and wrap it into [0, 2*pi).'''
        self.angle = math.fmod(self.angle + self.rotationSpeed, TWO_PI)
        if self.angle < 0.0:
            self.angle += TWO_PI
        return self.angle


@dataclass
class SweepResult:
    '''
    Cells processed by one blade tick.

    Parameters:
    -----------
    combCells : np.ndarray
        Flat indices of cells relaxed toward the target
    smoothCells : np.ndarray
        Flat indices of cells relaxed toward zero
    overflowed : float
        Sand pushed out of dunes this tick
    '''

    combCells: np.ndarray = field(default_factory=lambda: np.empty(0, dtype=np.intp))
    smoothCells: np.ndarray = field(default_factory=lambda: np.empty(0, dtype=np.intp))
    overflowed: float = 0.0


######################################################################
# -- Sweep Engine -- #
######################################################################

class BladeSweep:
    '''
    Sweep-and-relax engine for the two blade sides.

    Parameters:
    -----------
    heightField : HeightField
        Field to rake, modified in-place
    config : GardenConfig
        Blade geometry and relaxation parameters
    blade : BladeState
        Angle/speed state advanced by tick()
    pool : MassPool | None
        Receives part of the overflow when the pool is enabled
    audio : AudioSink | None
        Sound hooks (defaults to a silent sink)
    '''

    def __init__(
        self,
        heightField: HeightField,
        config: GardenConfig,
        blade: BladeState,
        pool: MassPool | None = None,
        audio: AudioSink | None = None,
    ) -> None:
        self._field = heightField
        self._config = config
        self._blade = blade
        self._pool = pool
        self._audio = audio or NullAudioSink()

        self._samplesFor: float | None = None
        self._sampleRadii = np.empty(0)
        self._sampleOffsets = np.empty(0)

    @property
    def bladeLength(self) -> float:
        '''Distance from the pivot to the blade tip.'''
        return self._field.mapper.gardenRadius - self._config.activeMargin

    @property
    def wedgeAngle(self) -> float:
        '''Angular width swept behind the blade this tick [rad].'''
        return self._blade.rotationSpeed * self._config.wedgeFactor

    ######################################################################
    # -- Tick -- #
    ######################################################################

    def tick(self) -> SweepResult:
        '''
        Advance the blade and rake both sides.

        Returns:
        --------
        SweepResult : Cells processed and overflow pushed
        '''
        angle = self._blade.advance()
        result = SweepResult()

        combCells = self.sweptCells(angle)
        smoothCells = self.sweptCells(angle + math.pi)

        result.overflowed += self._relax(combCells, comb=True)
        result.overflowed += self._relax(smoothCells, comb=False)
        result.combCells = combCells
        result.smoothCells = smoothCells

        self._audio.playBladeSound()
        return result

    def sweptCells(self, rayAngle: float) -> np.ndarray:
        '''
        Active cells inside the trailing wedge of one ray.

        Parameters:
        -----------
        rayAngle : float
            Angle of the ray (leading edge of the wedge) [rad]

        Returns:
        --------
        np.ndarray : Unique flat cell indices
        '''
        self._ensureSamples()
        if len(self._sampleRadii) == 0:
            return np.empty(0, dtype=np.intp)

        mapper = self._field.mapper
        angles = rayAngle + self._sampleOffsets
        worldX = np.cos(angles) * self._sampleRadii
        worldY = np.sin(angles) * self._sampleRadii

        cols = np.floor((worldX + mapper.gardenRadius) / mapper.resolution).astype(np.intp)
        rows = np.floor((worldY + mapper.gardenRadius) / mapper.resolution).astype(np.intp)

        nRows, nCols = self._field.shape
        inGrid = (rows >= 0) & (rows < nRows) & (cols >= 0) & (cols < nCols)
        rows, cols = rows[inGrid], cols[inGrid]

        isActive = self._field.active[rows, cols]
        flat = rows[isActive] * nCols + cols[isActive]
        return np.unique(flat)

    ######################################################################
    # -- Sampling Pattern -- #
    ######################################################################

    def _ensureSamples(self) -> None:
        '''Rebuild the polar sample pattern when the wedge width changes.'''
        wedge = self.wedgeAngle
        if self._samplesFor == wedge:
            return

        resolution = self._field.mapper.resolution
        radii = np.arange(self._config.hubRadius, self.bladeLength, resolution / 2.0)
        maxArcStep = resolution / 3.0

        sampleRadii = []
        sampleOffsets = []
        for r in radii:
            nAngles = max(2, math.ceil(wedge * r / maxArcStep) + 1)
            sampleOffsets.append(np.linspace(-wedge, 0.0, nAngles))
            sampleRadii.append(np.full(nAngles, r))

        if sampleRadii:
            self._sampleRadii = np.concatenate(sampleRadii)
            self._sampleOffsets = np.concatenate(sampleOffsets)
        else:
            self._sampleRadii = np.empty(0)
            self._sampleOffsets = np.empty(0)
        self._samplesFor = wedge

    ######################################################################
    # -- Relaxation -- #
    ######################################################################

    def _relax(self, cells: np.ndarray, comb: bool) -> float:
        '''
        Relax swept cells toward their goal.

        Parameters:
        -----------
        cells : np.ndarray
            Flat indices of the swept cells
        comb : bool
            True: goal is the target pattern. False: goal is zero.

        Returns:
        --------
        float : Sand pushed out by overflow handling
        '''
        if len(cells) == 0:
            return 0.0

        cfg = self._config
        flatHeights = self._field.heights.reshape(-1)
        goal = self._field.target.reshape(-1)[cells] if comb else np.zeros(len(cells))

        overflowed = 0.0
        if cfg.overflowThreshold is not None:
            overflowed = self._pushOverflow(cells, goal)

        current = flatHeights[cells]
        diff = goal - current

        if cfg.rateMode == 'graded':
            absDiff = np.abs(diff)
            rate = np.where(absDiff > cfg.disturbanceThreshold, cfg.disturbedRate, cfg.normalRate)
            relaxed = current + diff * rate
            relaxed = np.where(absDiff < cfg.snapEpsilon, goal, relaxed)
        else:
            rate = cfg.combRate if comb else cfg.smoothRate
            relaxed = current + diff * rate

        flatHeights[cells] = np.clip(relaxed, self._field.minHeight, self._field.maxHeight)
        return overflowed

    def _pushOverflow(self, cells: np.ndarray, goal: np.ndarray) -> float:
        '''
        Push dunes out from under the blade.

        Sand more than overflowThreshold above the goal is removed;
        poolFraction of it goes to the pool (when one is attached) and
        the rest is shared by the two radial neighbours.

        Returns:
        --------
        float : Sand removed from the swept cells
        '''
        flatHeights = self._field.heights.reshape(-1)
        excess = flatHeights[cells] - (goal + self._config.overflowThreshold)
        dunes = excess > 0.0
        if not np.any(dunes):
            return 0.0

        duneCells = cells[dunes]
        excess = excess[dunes]
        flatHeights[duneCells] -= excess
        totalExcess = float(np.sum(excess))

        if self._pool is not None:
            toPool = excess * self._config.poolFraction
            self._pool.add(float(np.sum(toPool)))
            toSpread = excess - toPool
        else:
            toSpread = excess

        lost = self.spreadToNeighbors(duneCells, toSpread)
        if self._pool is not None:
            self._pool.add(lost)
        return totalExcess

    def spreadToNeighbors(self, cells: np.ndarray, amounts: np.ndarray) -> float:
        '''
        Deposit sand into the radial neighbours of cells.

        The blade travels tangentially, so sand is shed perpendicular to
        its motion: half to the next cell outward and half to the next
        cell inward along the radius. Deposits are clamped to maxHeight;
        neighbours outside the grid or the sand bed receive nothing.

        Parameters:
        -----------
        cells : np.ndarray
            Flat indices of the source cells
        amounts : np.ndarray
            Sand to shed from each source cell

        Returns:
        --------
        float : Sand that could not be deposited
        '''
        if len(cells) == 0:
            return 0.0

        mapper = self._field.mapper
        nRows, nCols = self._field.shape
        rows, cols = np.divmod(cells, nCols)

        # Radial unit vector through each cell centre
        centreX = (cols + 0.5) * mapper.resolution - mapper.gardenRadius
        centreY = (rows + 0.5) * mapper.resolution - mapper.gardenRadius
        norm = np.hypot(centreX, centreY)
        norm = np.where(norm > 1e-12, norm, 1.0)
        unitX = centreX / norm
        unitY = centreY / norm

        incoming = np.zeros(nRows * nCols)
        half = 0.5 * amounts
        for sign in (1.0, -1.0):
            nbrCols = np.floor((centreX + sign * unitX * mapper.resolution + mapper.gardenRadius)
                               / mapper.resolution).astype(np.intp)
            nbrRows = np.floor((centreY + sign * unitY * mapper.resolution + mapper.gardenRadius)
                               / mapper.resolution).astype(np.intp)
            valid = (nbrRows >= 0) & (nbrRows < nRows) & (nbrCols >= 0) & (nbrCols < nCols)
            valid[valid] = self._field.active[nbrRows[valid], nbrCols[valid]]
            np.add.at(incoming, nbrRows[valid] * nCols + nbrCols[valid], half[valid])

        targets = np.flatnonzero(incoming)
        flatHeights = self._field.heights.reshape(-1)
        before = flatHeights[targets]
        after = np.minimum(before + incoming[targets], self._field.maxHeight)
        flatHeights[targets] = after

        deposited = float(np.sum(after - before))
        return max(0.0, float(np.sum(amounts)) - deposited)
