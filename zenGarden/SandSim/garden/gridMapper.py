# -- Garden Grid Mapper -- #

'''
Coordinate mapping between the screen, the garden's world frame and
the fixed-resolution height grid.

World coordinates are centred on the garden pivot. Grid cell (col, row)
covers the world rectangle

    [col * res - R, (col + 1) * res - R) x [row * res - R, (row + 1) * res - R)

where R is the garden radius and res the grid resolution. Screen
coordinates are world coordinates shifted by the garden centre.
'''

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class GridMapper:
    '''
    Pure geometric mapping for one garden layout.

    Parameters:
    -----------
    gardenRadius : float
        Radius of the sand bed [screen units]
    resolution : float
        Screen units per grid cell
    centerX, centerY : float
        Screen position of the garden centre
    boundaryMargin : float
        Default margin used by isInsideGarden
    '''

    gardenRadius: float
    resolution: float
    centerX: float = 0.0
    centerY: float = 0.0
    boundaryMargin: float = 5.0

    @classmethod
    def fromViewport(
        cls,
        width: float,
        height: float,
        resolution: float,
        padding: float,
        frameWidth: float,
        boundaryMargin: float,
    ) -> GridMapper:
        '''
        Fit the garden into a viewport.

        The garden is centred and sized so that the circle plus its
        frame and padding fits the smaller viewport dimension.

        Parameters:
        -----------
        width, height : float
            Viewport size [screen units]
        resolution : float
            Screen units per grid cell
        padding : float
            Space between viewport edge and frame
        frameWidth : float
            Rim width
        boundaryMargin : float
            Default margin for isInsideGarden

        Returns:
        --------
        GridMapper : Mapper for the fitted garden
        '''
        gardenRadius = min(width, height) / 2.0 - padding - frameWidth
        return cls(
            gardenRadius=gardenRadius,
            resolution=resolution,
            centerX=width / 2.0,
            centerY=height / 2.0,
            boundaryMargin=boundaryMargin,
        )

    ######################################################################
    # -- Grid Extents -- #
    ######################################################################

    @property
    def gridWidth(self) -> int:
        '''Number of grid columns.'''
        return math.ceil(2.0 * self.gardenRadius / self.resolution)

    @property
    def gridHeight(self) -> int:
        '''Number of grid rows.'''
        return math.ceil(2.0 * self.gardenRadius / self.resolution)

    @property
    def shape(self) -> tuple[int, int]:
        '''Array shape (rows, cols) of the height grid.'''
        return (self.gridHeight, self.gridWidth)

    ######################################################################
    # -- Point Mapping -- #
    ######################################################################

    def screenToWorld(self, point: tuple[float, float]) -> tuple[float, float]:
        '''Screen point to world point (origin at the garden centre).'''
        return (point[0] - self.centerX, point[1] - self.centerY)

    def worldToScreen(self, point: tuple[float, float]) -> tuple[float, float]:
        '''World point to screen point.'''
        return (point[0] + self.centerX, point[1] + self.centerY)

    def worldToGrid(self, point: tuple[float, float]) -> tuple[int, int]:
        '''World point to the (col, row) of the cell containing it.'''
        col = math.floor((point[0] + self.gardenRadius) / self.resolution)
        row = math.floor((point[1] + self.gardenRadius) / self.resolution)
        return (col, row)

    def toGrid(self, screenPoint: tuple[float, float]) -> tuple[int, int]:
        '''Screen point to the (col, row) of the cell containing it.'''
        return self.worldToGrid(self.screenToWorld(screenPoint))

    def toWorld(self, col: int, row: int) -> tuple[float, float]:
        '''World position of a cell's corner (lowest x and y of its rectangle).'''
        return (
            col * self.resolution - self.gardenRadius,
            row * self.resolution - self.gardenRadius,
        )

    def toScreen(self, col: int, row: int) -> tuple[float, float]:
        '''Screen position of a cell's corner.'''
        return self.worldToScreen(self.toWorld(col, row))

    def inBounds(self, col: int, row: int) -> bool:
        '''True if (col, row) addresses a cell of the grid.'''
        return 0 <= col < self.gridWidth and 0 <= row < self.gridHeight

    def isInsideGarden(self, point: tuple[float, float], margin: float | None = None) -> bool:
        '''
        Circular boundary test for a screen point.

        Parameters:
        -----------
        point : tuple[float, float]
            Screen point
        margin : float | None
            Distance kept from the rim (defaults to boundaryMargin)

        Returns:
        --------
        bool : True if the point lies strictly inside radius - margin
        '''
        if margin is None:
            margin = self.boundaryMargin
        wx, wy = self.screenToWorld(point)
        return math.hypot(wx, wy) < self.gardenRadius - margin

    ######################################################################
    # -- Whole-Grid Arrays -- #
    ######################################################################

    def cellCoordinates(self) -> tuple[np.ndarray, np.ndarray]:
        '''World x and y of every cell corner, each shaped (rows, cols).'''
        xs = np.arange(self.gridWidth) * self.resolution - self.gardenRadius
        ys = np.arange(self.gridHeight) * self.resolution - self.gardenRadius
        worldX, worldY = np.meshgrid(xs, ys, indexing='xy')
        return worldX, worldY

    def cellDistances(self) -> np.ndarray:
        '''World distance of every cell corner from the centre, shape (rows, cols).'''
        worldX, worldY = self.cellCoordinates()
        return np.hypot(worldX, worldY)

    def activeMask(self, margin: float | None = None) -> np.ndarray:
        '''Boolean mask of cells inside the sand bed.'''
        if margin is None:
            margin = self.boundaryMargin
        return self.cellDistances() < self.gardenRadius - margin
