# -- Adapters Package -- #

'''
Thin producers and consumers around the garden simulation.

Pointer/touch input and the speed control feed the simulation; the
colour map reads the height field for drawing.
'''

from zenGarden.SandSim.adapters.pointerInput import PointerTracker, SpeedControl
from zenGarden.SandSim.adapters.colorMap import heightToRgb, renderGarden, bladeTeeth
