# -- Sand Colour Mapping -- #

'''
Height-to-colour mapping for drawing the sand bed.

Peaks blend from the base sand colour toward the highlight colour,
valleys toward the shadow colour:

    t = min(|height| / saturation, 1)
    colour = base + (highlight - base) * t    for height > 0
    colour = base + (shadow - base) * t       otherwise

renderGarden rasterises the whole grid into an RGB image, one pixel
per cell, with everything outside the garden circle painted in the
frame colour. Callers scale it by the grid resolution for display.
'''

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from zenGarden.SandSim import constants as const

if TYPE_CHECKING:
    from zenGarden.SandSim.garden.heightField import HeightField


def heightToRgb(
    heights: np.ndarray,
    saturation: float = const.colorSaturation,
    baseColor: tuple[int, int, int] = const.baseColor,
    shadowColor: tuple[int, int, int] = const.shadowColor,
    highlightColor: tuple[int, int, int] = const.highlightColor,
) -> np.ndarray:
    '''
    Colour for each height.

    Parameters:
    -----------
    heights : np.ndarray
        Heights, any shape
    saturation : float
        |height| giving the full shadow/highlight colour
    baseColor, shadowColor, highlightColor : tuple[int, int, int]
        RGB colours

    Returns:
    --------
    np.ndarray : uint8 RGB array of shape heights.shape + (3,)
    '''
    heights = np.asarray(heights, dtype=np.float64)
    base = np.asarray(baseColor, dtype=np.float64)
    shadow = np.asarray(shadowColor, dtype=np.float64)
    highlight = np.asarray(highlightColor, dtype=np.float64)

    t = np.minimum(np.abs(heights) / saturation, 1.0)[..., np.newaxis]
    toward = np.where((heights > 0.0)[..., np.newaxis], highlight, shadow)
    rgb = base + (toward - base) * t
    return np.round(rgb).astype(np.uint8)


def renderGarden(
    heightField: HeightField,
    saturation: float = const.colorSaturation,
    frameColor: tuple[int, int, int] = const.frameColor,
) -> np.ndarray:
    '''
    Rasterise a height field, clipped to the garden circle.

    Parameters:
    -----------
    heightField : HeightField
        Field to draw
    saturation : float
        |height| giving the full shadow/highlight colour
    frameColor : tuple[int, int, int]
        Colour of cells outside the circle

    Returns:
    --------
    np.ndarray : uint8 image of shape (rows, cols, 3)
    '''
    mapper = heightField.mapper
    image = heightToRgb(heightField.heights, saturation=saturation)

    outside = heightField.distances > mapper.gardenRadius
    image[outside] = np.asarray(frameColor, dtype=np.uint8)
    return image


def bladeTeeth(toothCount: int, toothInset: float, toothSpacing: float) -> np.ndarray:
    '''
    Positions of the comb teeth along the blade.

    The first tooth sits 5 units past the inset (25 units from the
    pivot for the default layout).

    Returns:
    --------
    np.ndarray : Distances from the pivot, one per tooth
    '''
    return toothInset + 5.0 + np.arange(toothCount) * toothSpacing
