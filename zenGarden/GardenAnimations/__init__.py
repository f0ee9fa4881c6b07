# -- GardenAnimations Package -- #

'''
Manim-based animations of the sand garden.

Provides an explainer for the raked target pattern and a playback of
exported SandSim runs.

API usage:
    from zenGarden.GardenAnimations import renderScene, SCENES
    renderScene('playback', quality='medium')
'''

from zenGarden.GardenAnimations.render import renderScene, renderAll, SCENES
