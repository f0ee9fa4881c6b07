# -- Animation Scenes Subpackage -- #

'''
Manim Scene classes for garden animations.

Each scene is a self-contained Manim animation that can be
rendered via the renderScene() API or the CLI.
'''

from zenGarden.GardenAnimations.scenes.targetPattern import TargetPatternIntro
from zenGarden.GardenAnimations.scenes.gardenPlayback import GardenPlayback
