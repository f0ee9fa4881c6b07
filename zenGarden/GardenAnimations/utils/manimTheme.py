# -- Manim Animation Theme -- #

'''
Colours for the GardenAnimations scenes.

Frame and blade match SandSim.constants so that videos,
dashboards and the interactive window look like the same garden.
'''

from manim import ManimColor

# Scene background and text
BG_COLOR = ManimColor('#1A1A1A')
TEXT_COLOR = ManimColor('#E0E0E0')
AXIS_COLOR = ManimColor('#888888')

# Garden
FRAME_COLOR = ManimColor('#2D2D2D')
BLADE_COLOR = ManimColor('#FAFAFA')

# Annotations
WAVE_COLOR = ManimColor('#42A5F5')
EQUATION_COLOR = ManimColor('#26C6DA')
TOOTH_COLOR = ManimColor('#FFA726')
