# -- Zen Garden Package -- #

'''
Master package for the zen garden toolkit.

Sub-packages:
    - SandSim: Sand garden simulation, interactive window, CLI runner
      and Plotly dashboard
    - GardenAnimations: Manim scenes for the raked pattern and run playback
'''
