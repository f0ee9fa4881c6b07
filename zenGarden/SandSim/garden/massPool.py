# -- Sand Mass Pool -- #

'''
Accumulator of sand removed from the bed, slowly returned into holes.

Sand enters the pool when digging removes it, when the blade pushes
an overflowing dune away, or when a deposit is clamped at maxHeight.
Each tick a small fraction of the pool is released and dropped, a fixed
increment at a time, into cells below the hole threshold (row-major
scan order). The pool drains over many ticks rather than in one frame.

Note: any cell below -holeThreshold is a hole, including the natural
troughs of the wave pattern, so a full pool also lifts troughs near
the threshold.
'''

from __future__ import annotations

import logging

import numpy as np

from zenGarden.SandSim.garden.heightField import HeightField

log = logging.getLogger(__name__)


class MassPool:
    '''
    Non-negative sand accumulator with a slow drain.

    Parameters:
    -----------
    drainFraction : float
        Share of the pool released per tick
    holeThreshold : float
        Cells below -holeThreshold receive sand
    fillIncrement : float
        Most sand a single hole receives per tick
    '''

    def __init__(self, drainFraction: float, holeThreshold: float, fillIncrement: float) -> None:
        self.drainFraction = drainFraction
        self.holeThreshold = holeThreshold
        self.fillIncrement = fillIncrement
        self._amount: float = 0.0
        self._totalCollected: float = 0.0
        self._totalReleased: float = 0.0

    @property
    def amount(self) -> float:
        '''Sand currently held.'''
        return self._amount

    @property
    def totalCollected(self) -> float:
        '''Sand added since the last reset.'''
        return self._totalCollected

    @property
    def totalReleased(self) -> float:
        '''Sand returned to the bed since the last reset.'''
        return self._totalReleased

    def add(self, amount: float) -> None:
        '''Collect removed sand (non-positive amounts are ignored).'''
        if amount > 0.0:
            self._amount += amount
            self._totalCollected += amount

    def reset(self) -> None:
        '''Empty the pool and clear its counters.'''
        self._amount = 0.0
        self._totalCollected = 0.0
        self._totalReleased = 0.0

    def redistribute(self, field: HeightField) -> float:
        '''
        Release one tick's budget into holes.

        budget = pool * drainFraction. Holes are active cells with
        height < -holeThreshold, visited in row-major order. Each gets
        min(fillIncrement, remaining budget, maxHeight - height).

        Parameters:
        -----------
        field : HeightField
            Height field to fill, modified in-place

        Returns:
        --------
        float : Sand deposited this tick
        '''
        if self._amount <= 0.0:
            return 0.0

        budget = self._amount * self.drainFraction
        holeMask = field.active & (field.heights < -self.holeThreshold)
        holeIndices = np.flatnonzero(holeMask)
        if len(holeIndices) == 0:
            return 0.0

        flatHeights = field.heights.reshape(-1)
        room = field.maxHeight - flatHeights[holeIndices]
        wanted = np.minimum(self.fillIncrement, room)

        # Budget runs out part-way through the scan: truncate at the
        # hole where the running total crosses it
        cumulative = np.cumsum(wanted)
        before = cumulative - wanted
        given = np.clip(budget - before, 0.0, wanted)

        flatHeights[holeIndices] += given
        deposited = float(np.sum(given))

        self._amount = max(0.0, self._amount - deposited)
        self._totalReleased += deposited

        log.debug('Pool released %.4f into %d holes, %.4f left',
                  deposited, int(np.count_nonzero(given)), self._amount)
        return deposited
