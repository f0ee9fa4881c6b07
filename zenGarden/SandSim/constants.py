# -- Sand Garden Constants -- #

'''
Default geometric and numerical constants for the sand garden simulation.

Lengths are in screen units (pixels of the viewport the garden is
fitted into). Heights are dimensionless sand displacements; zero is the
undisturbed baseline of the smooth side.
'''

#--------------------------------------------------------------------#
# -- Garden Geometry -- #
#--------------------------------------------------------------------#

# Padding between the viewport edge and the garden frame
gardenPadding: float = 20.0

# Width of the dark rim around the sand bed
frameWidth: float = 12.0

# Cells closer than this to the rim are inert
activeMargin: float = 5.0

# Touches closer than this to the rim are ignored
touchMargin: float = 10.0

# Screen units per grid cell (lower = more detail, slower)
gridResolution: float = 2.0

#--------------------------------------------------------------------#
# -- Blade -- #
#--------------------------------------------------------------------#

# Radians per tick (slow, meditative)
rotationSpeed: float = 0.0008

# Swept wedge = rotationSpeed * wedgeFactor, trailing the blade
wedgeFactor: float = 3.0

# Radius of the hub; cells inside it are never swept
hubRadius: float = 20.0

# Comb tooth layout: teeth start this far from the pivot, spaced evenly
toothInset: float = 20.0
toothSpacing: float = 12.0

#--------------------------------------------------------------------#
# -- Speed Control -- #
#--------------------------------------------------------------------#

speedInputMin: float = 1.0
speedInputMax: float = 100.0
speedMin: float = 0.001
speedMax: float = 0.015

#--------------------------------------------------------------------#
# -- Wave Pattern -- #
#--------------------------------------------------------------------#

waveAmplitude: float = 1.0

#--------------------------------------------------------------------#
# -- Height Bounds -- #
#--------------------------------------------------------------------#

minHeight: float = -3.0
maxHeight: float = 3.0

#--------------------------------------------------------------------#
# -- Relaxation -- #
#--------------------------------------------------------------------#

# Fixed-rate blending toward the target (comb) and toward zero (smooth)
combRate: float = 0.9
smoothRate: float = 0.15

# Graded regime: slow correction for large deviations, fast otherwise,
# exact snap once the deviation is negligible
disturbanceThreshold: float = 0.5
disturbedRate: float = 0.05
normalRate: float = 0.3
snapEpsilon: float = 0.02

#--------------------------------------------------------------------#
# -- Touch -- #
#--------------------------------------------------------------------#

touchRadius: float = 25.0
touchStrength: float = 2.5
dragMultiplier: float = 0.8

# Screen units between interpolated drag sub-points
dragStep: float = 5.0

# Ring width (grid cells) receiving sand displaced by a conserving dig
spreadRadius: float = 4.0

#--------------------------------------------------------------------#
# -- Mass Pool -- #
#--------------------------------------------------------------------#

# Fraction of the pool released per tick
drainFraction: float = 0.02

# Cells below -holeThreshold count as holes
holeThreshold: float = 0.5

# Sand added to a single hole per tick
fillIncrement: float = 0.01

# Fraction of blade overflow sent to the pool (rest spreads to neighbours)
poolFraction: float = 0.5

#--------------------------------------------------------------------#
# -- Rendering -- #
#--------------------------------------------------------------------#

# |height| at which the colour reaches full shadow/highlight
colorSaturation: float = 2.0

baseColor: tuple[int, int, int] = (245, 240, 230)
shadowColor: tuple[int, int, int] = (200, 190, 175)
highlightColor: tuple[int, int, int] = (255, 252, 248)
frameColor: tuple[int, int, int] = (45, 45, 45)
backgroundColor: tuple[int, int, int] = (26, 26, 26)
bladeColor: tuple[int, int, int] = (250, 250, 250)
