# -- Visualization Subpackage -- #

'''
Plotly-based interactive dashboards for sand garden runs.
'''

from zenGarden.SandSim.visualization.dashboard import createGardenDashboard, saveDashboard
