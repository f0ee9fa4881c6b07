# -- Export Package -- #

'''
Data export utilities for sand garden runs.

Exports frame data as JSON for the Manim playback scene and the
Plotly dashboard.
'''

from zenGarden.SandSim.export.frameExporter import FrameExporter
