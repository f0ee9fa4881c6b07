# -- Garden Variant Presets -- #

'''
Named tunings of the garden engine.

Each preset is a set of GardenConfig overrides. Together they cover the
observed garden variants:

    classic    : fixed-rate raking, push touch, fully patterned start
    gradual    : slow fixed-rate healing (many passes), noise touch
    graded     : slow correction for deep disturbances, snap when close
    conserving : graded raking, digging leaves a dune ring around the hole
    pooled     : graded raking, blade pushes dunes away, pool refills holes
    sculpt     : piling sand on a flat bed, gentle fixed-rate raking
'''

from __future__ import annotations

from zenGarden.SandSim.garden.protocols import GardenConfig


GARDEN_PRESETS: dict[str, dict] = {
    'classic': {
        'rateMode': 'fixed',
        'combRate': 0.9,
        'smoothRate': 0.15,
        'touchMode': 'push',
        'touchStrength': 2.5,
        'initialPattern': 'target',
        'minHeight': -3.0,
        'maxHeight': 3.0,
    },
    'gradual': {
        'rateMode': 'fixed',
        'combRate': 0.08,
        'smoothRate': 0.08,
        'touchMode': 'noise',
        'touchStrength': 2.0,
        'initialPattern': 'split',
        'minHeight': -3.0,
        'maxHeight': 3.0,
    },
    'graded': {
        'rateMode': 'graded',
        'disturbanceThreshold': 0.5,
        'disturbedRate': 0.05,
        'normalRate': 0.3,
        'snapEpsilon': 0.02,
        'touchMode': 'dig',
        'touchStrength': 0.25,
        'touchRadius': 35.0,
        'continuousWhileHeld': True,
        'initialPattern': 'split',
        'minHeight': -6.0,
        'maxHeight': 6.0,
    },
    'conserving': {
        'rateMode': 'graded',
        'disturbanceThreshold': 0.5,
        'disturbedRate': 0.05,
        'normalRate': 0.3,
        'snapEpsilon': 0.02,
        'touchMode': 'conserve',
        'touchStrength': 0.25,
        'touchRadius': 35.0,
        'spreadRadius': 5.0,
        'continuousWhileHeld': True,
        'initialPattern': 'split',
        'minHeight': -6.0,
        'maxHeight': 6.0,
    },
    'pooled': {
        'rateMode': 'graded',
        'disturbanceThreshold': 0.5,
        'disturbedRate': 0.05,
        'normalRate': 0.3,
        'snapEpsilon': 0.02,
        'overflowThreshold': 0.8,
        'poolFraction': 0.5,
        'touchMode': 'dig',
        'touchStrength': 0.25,
        'touchRadius': 35.0,
        'continuousWhileHeld': True,
        'massPoolEnabled': True,
        'drainFraction': 0.02,
        'holeThreshold': 0.5,
        'fillIncrement': 0.01,
        'initialPattern': 'flat',
        'minHeight': -6.0,
        'maxHeight': 6.0,
    },
    'sculpt': {
        'rateMode': 'fixed',
        'combRate': 0.12,
        'smoothRate': 0.12,
        'touchMode': 'pile',
        'touchStrength': 0.3,
        'continuousWhileHeld': True,
        'initialPattern': 'flat',
        'minHeight': -3.0,
        'maxHeight': 3.0,
    },
}


def createPreset(name: str, **overrides) -> GardenConfig:
    '''
    Build a GardenConfig from a named preset.

    Parameters:
    -----------
    name : str
        Preset name (see GARDEN_PRESETS)
    **overrides
        Field values replacing the preset's

    Returns:
    --------
    GardenConfig : Validated configuration
    '''
    if name not in GARDEN_PRESETS:
        raise ValueError(
            f'Unknown preset \'{name}\'. '
            f'Available: {list(GARDEN_PRESETS.keys())}'
        )
    settings = {**GARDEN_PRESETS[name], **overrides}
    return GardenConfig(**settings)
