# -- Visualization Theme -- #

'''
Centralized dark-mode theme for the sand garden Plotly visualizations.

Change colors or template here to restyle every plot at once.
'''

# Plotly template
TEMPLATE = 'plotly_dark'

# Primary color palette (Material Design, visible on dark backgrounds)
BLUE = '#42A5F5'
ORANGE = '#FFA726'
SAND = '#F5F0E6'


# Diverging scale for heights: valleys dark, peaks light
HEIGHT_COLORSCALE = [
    [0.0, 'rgb(120, 105, 85)'],
    [0.5, 'rgb(245, 240, 230)'],
    [1.0, 'rgb(255, 255, 255)'],
]
