# -- Garden Analysis Dashboard -- #

'''
Multi-panel Plotly dashboard for a sand garden run.

Shows the rendered sand bed, the height field against the target
pattern, and the convergence and mass history recorded by the
FrameExporter.
'''

from __future__ import annotations

import plotly.graph_objects as go
from plotly.subplots import make_subplots

from zenGarden.SandSim.adapters.colorMap import renderGarden
from zenGarden.SandSim.garden.sandGarden import SandGarden
from zenGarden.SandSim.visualization import theme


def createGardenDashboard(garden: SandGarden, history: dict[str, list[float]]) -> go.Figure:
    '''
    Create a 4-panel garden dashboard.

    Layout:
        Row 1: Rendered Sand   |  Height - Target
        Row 2: Pattern Deviation  |  Sand Mass and Pool

    Parameters:
    -----------
    garden : SandGarden
        Garden after the run
    history : dict[str, list[float]]
        Diagnostics series ('ticks', 'deviation', 'totalMass', 'pool')

    Returns:
    --------
    go.Figure : Plotly figure with 4 subplots
    '''
    field = garden.heightField
    cfg = garden.config

    fig = make_subplots(
        rows=2, cols=2,
        subplot_titles=(
            'Rendered Sand', 'Height - Target',
            'Pattern Deviation', 'Sand Mass and Pool',
        ),
        vertical_spacing=0.12,
        horizontal_spacing=0.08,
    )

    ######################################################################
    # Row 1, Col 1: Rendered sand bed
    ######################################################################
    image = renderGarden(field, saturation=cfg.colorSaturation)
    fig.add_trace(go.Image(z=image), row=1, col=1)
    fig.update_xaxes(showticklabels=False, row=1, col=1)
    fig.update_yaxes(showticklabels=False, row=1, col=1)

    ######################################################################
    # Row 1, Col 2: Deviation from the target pattern
    ######################################################################
    residual = (field.heights - field.target)
    residual[~field.active] = 0.0
    limit = max(abs(cfg.minHeight), abs(cfg.maxHeight))
    fig.add_trace(go.Heatmap(z=residual, zmin=-limit, zmax=limit,
                             colorscale=theme.HEIGHT_COLORSCALE,
                             colorbar=dict(len=0.4, y=0.8)),
                  row=1, col=2)
    fig.update_yaxes(autorange='reversed', showticklabels=False, row=1, col=2)
    fig.update_xaxes(showticklabels=False, row=1, col=2)

    ######################################################################
    # Row 2, Col 1: Deviation history
    ######################################################################
    ticks = history.get('ticks', [])
    fig.add_trace(go.Scatter(x=ticks, y=history.get('deviation', []), mode='lines',
                             line=dict(color=theme.BLUE, width=2), showlegend=False),
                  row=2, col=1)
    fig.update_xaxes(title_text='Tick', row=2, col=1)
    fig.update_yaxes(title_text='sum |target - height|', row=2, col=1)

    ######################################################################
    # Row 2, Col 2: Mass bookkeeping
    ######################################################################
    fig.add_trace(go.Scatter(x=ticks, y=history.get('totalMass', []), mode='lines',
                             name='Bed', line=dict(color=theme.SAND, width=2)),
                  row=2, col=2)
    fig.add_trace(go.Scatter(x=ticks, y=history.get('pool', []), mode='lines',
                             name='Pool', line=dict(color=theme.ORANGE, width=2)),
                  row=2, col=2)
    fig.update_xaxes(title_text='Tick', row=2, col=2)
    fig.update_yaxes(title_text='Sand', row=2, col=2)

    ######################################################################
    # Layout
    ######################################################################
    state = garden.state
    fig.update_layout(
        title=(
            f'Zen Garden -- radius {garden.mapper.gardenRadius:.0f} '
            f'| grid {garden.mapper.gridWidth}x{garden.mapper.gridHeight} '
            f'| {garden.toothCount} teeth | tick {state.tick} '
            f'| pool {state.pool:.2f}'
        ),
        template=theme.TEMPLATE,
        height=900,
    )

    return fig


def saveDashboard(fig: go.Figure, outputPath: str) -> str:
    '''Write a dashboard to a standalone HTML file and return its path.'''
    fig.write_html(outputPath)
    return outputPath
