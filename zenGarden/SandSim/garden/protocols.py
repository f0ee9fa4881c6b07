# -- Sand Garden Protocols -- #

'''
Configuration, state snapshot and collaborator protocols for the
sand garden simulation.

Defines the core data structures (GardenConfig, GardenState) and the
audio sink protocol that the simulation calls into. The six tuned
variants of the garden are all expressed as GardenConfig presets
(see scenarios/presets.py).
'''

from __future__ import annotations

import dataclasses
import json
import math
from dataclasses import dataclass
from typing import Literal, Protocol

from zenGarden.SandSim import constants as const


RateMode = Literal['fixed', 'graded']
TouchMode = Literal['noise', 'dig', 'pile', 'conserve', 'push']
InitialPattern = Literal['target', 'split', 'flat']

RATE_MODES = ('fixed', 'graded')
TOUCH_MODES = ('noise', 'dig', 'pile', 'conserve', 'push')
INITIAL_PATTERNS = ('target', 'split', 'flat')


######################################################################
# -- Garden Configuration -- #
######################################################################

@dataclass
class GardenConfig:
    '''
    Configuration for one sand garden.

    Lengths are in screen units, heights are dimensionless. Every
    tuning constant of the blade, the touch interaction and the mass
    pool lives here so that the garden variants are presets of a
    single parametrized engine.

    Parameters:
    -----------
    padding : float
        Space between viewport edge and garden frame
    frameWidth : float
        Width of the dark rim around the sand bed
    activeMargin : float
        Cells closer than this to the rim are inert
    touchMargin : float
        Touches closer than this to the rim are ignored
    resolution : float
        Screen units per grid cell
    rotationSpeed : float
        Blade advance per tick [rad]
    wedgeFactor : float
        Swept wedge width as a multiple of rotationSpeed
    hubRadius : float
        Inner cutoff of the sweep (the pivot hub)
    toothInset : float
        Distance from the pivot to the first comb tooth
    toothSpacing : float
        Distance between comb teeth
    toothCount : int | None
        Pinned tooth count; derived from the blade length when None
    waveAmplitude : float
        Peak height of the concentric target pattern
    initialPattern : str
        'target', 'split' or 'flat'
    minHeight, maxHeight : float
        Closed height interval every cell is clamped to
    rateMode : str
        'fixed' (constant blend) or 'graded' (slow/normal/snap)
    combRate, smoothRate : float
        Fixed-mode blend rates toward target and toward zero
    disturbanceThreshold : float
        Graded mode: |diff| above this uses disturbedRate
    disturbedRate, normalRate : float
        Graded mode rates
    snapEpsilon : float
        Graded mode: |diff| below this snaps exactly
    overflowThreshold : float | None
        Height above the goal at which the blade pushes sand away
    poolFraction : float
        Share of blade overflow sent to the mass pool
    touchMode : str
        'noise', 'dig', 'pile', 'conserve' or 'push'
    touchRadius : float
        Disturbance radius [screen units]
    touchStrength : float
        Disturbance strength at press
    dragMultiplier : float
        Strength multiplier for drag sub-points
    dragStep : float
        Screen distance between interpolated drag sub-points
    spreadRadius : float
        Ring width [cells] receiving sand from a conserving dig
    continuousWhileHeld : bool
        Keep disturbing the last pointer position every tick while held
    massPoolEnabled : bool
        Collect removed sand and refill holes over time
    drainFraction : float
        Share of the pool released per tick
    holeThreshold : float
        Cells below -holeThreshold are holes
    fillIncrement : float
        Sand added to one hole per tick
    colorSaturation : float
        |height| at which rendering reaches full shadow/highlight
    '''

    padding: float = const.gardenPadding
    frameWidth: float = const.frameWidth
    activeMargin: float = const.activeMargin
    touchMargin: float = const.touchMargin
    resolution: float = const.gridResolution

    rotationSpeed: float = const.rotationSpeed
    wedgeFactor: float = const.wedgeFactor
    hubRadius: float = const.hubRadius
    toothInset: float = const.toothInset
    toothSpacing: float = const.toothSpacing
    toothCount: int | None = None

    waveAmplitude: float = const.waveAmplitude
    initialPattern: InitialPattern = 'target'

    minHeight: float = const.minHeight
    maxHeight: float = const.maxHeight

    rateMode: RateMode = 'fixed'
    combRate: float = const.combRate
    smoothRate: float = const.smoothRate
    disturbanceThreshold: float = const.disturbanceThreshold
    disturbedRate: float = const.disturbedRate
    normalRate: float = const.normalRate
    snapEpsilon: float = const.snapEpsilon
    overflowThreshold: float | None = None
    poolFraction: float = const.poolFraction

    touchMode: TouchMode = 'push'
    touchRadius: float = const.touchRadius
    touchStrength: float = const.touchStrength
    dragMultiplier: float = const.dragMultiplier
    dragStep: float = const.dragStep
    spreadRadius: float = const.spreadRadius
    continuousWhileHeld: bool = False

    massPoolEnabled: bool = False
    drainFraction: float = const.drainFraction
    holeThreshold: float = const.holeThreshold
    fillIncrement: float = const.fillIncrement

    colorSaturation: float = const.colorSaturation

    def __post_init__(self) -> None:
        if self.resolution <= 0.0:
            raise ValueError(f'resolution must be positive, got {self.resolution}')
        if self.minHeight >= self.maxHeight:
            raise ValueError(
                f'minHeight ({self.minHeight}) must be below maxHeight ({self.maxHeight})'
            )
        if self.rateMode not in RATE_MODES:
            raise ValueError(f'Unknown rateMode \'{self.rateMode}\'. Available: {list(RATE_MODES)}')
        if self.touchMode not in TOUCH_MODES:
            raise ValueError(f'Unknown touchMode \'{self.touchMode}\'. Available: {list(TOUCH_MODES)}')
        if self.initialPattern not in INITIAL_PATTERNS:
            raise ValueError(
                f'Unknown initialPattern \'{self.initialPattern}\'. '
                f'Available: {list(INITIAL_PATTERNS)}'
            )

        for name in ('combRate', 'smoothRate', 'disturbedRate', 'normalRate',
                     'drainFraction', 'poolFraction'):
            value = getattr(self, name)
            if not 0.0 < value <= 1.0:
                raise ValueError(f'{name} must be in (0, 1], got {value}')

        for name in ('rotationSpeed', 'wedgeFactor', 'touchRadius', 'dragStep',
                     'spreadRadius', 'toothSpacing', 'colorSaturation'):
            value = getattr(self, name)
            if value <= 0.0:
                raise ValueError(f'{name} must be positive, got {value}')

        if self.toothCount is not None and self.toothCount < 1:
            raise ValueError(f'toothCount must be at least 1, got {self.toothCount}')
        if self.overflowThreshold is not None and self.overflowThreshold < 0.0:
            raise ValueError(f'overflowThreshold must be non-negative, got {self.overflowThreshold}')

    @property
    def wedgeAngle(self) -> float:
        '''Angular width of the trailing wedge swept each tick [rad].'''
        return self.rotationSpeed * self.wedgeFactor

    @property
    def ticksPerRevolution(self) -> int:
        '''Ticks needed for one full blade revolution.'''
        return math.ceil(2.0 * math.pi / self.rotationSpeed)

    def withOverrides(self, **overrides) -> GardenConfig:
        '''Copy of this configuration with some fields replaced (re-validated).'''
        return dataclasses.replace(self, **overrides)

    def toDict(self) -> dict:
        '''Plain dictionary of every field (JSON-serialisable).'''
        return dataclasses.asdict(self)

    @classmethod
    def preset(cls, name: str, **overrides) -> GardenConfig:
        '''Named preset (see scenarios.presets.GARDEN_PRESETS) with overrides.'''
        from zenGarden.SandSim.scenarios.presets import createPreset

        return createPreset(name, **overrides)

    @classmethod
    def fromJson(cls, configPath: str) -> GardenConfig:
        '''
        Load configuration from a JSON file.

        Reads the 'garden', 'blade', 'waves', 'touch', 'simulation'
        and 'pool' sections. Keys inside each section are GardenConfig
        field names; an optional top-level 'preset' selects the base
        configuration the sections override.

        Parameters:
        -----------
        configPath : str
            Path to the JSON configuration file

        Returns:
        --------
        GardenConfig : Loaded configuration
        '''
        with open(configPath, 'r') as f:
            data = json.load(f)

        return cls.fromDict(data)

    @classmethod
    def fromDict(cls, data: dict) -> GardenConfig:
        '''Build a configuration from parsed JSON sections.'''
        from zenGarden.SandSim.scenarios.presets import createPreset

        fieldNames = {f.name for f in dataclasses.fields(cls)}
        overrides = {}
        for sectionName in ('garden', 'blade', 'waves', 'touch', 'simulation', 'pool'):
            section = data.get(sectionName, {})
            for key, value in section.items():
                if key not in fieldNames:
                    raise ValueError(f'Unknown key \'{key}\' in section \'{sectionName}\'')
                overrides[key] = value

        presetName = data.get('preset')
        if presetName is not None:
            return createPreset(presetName, **overrides)
        return cls(**overrides)


######################################################################
# -- Garden State -- #
######################################################################

@dataclass
class GardenState:
    '''
    Snapshot of the garden after a tick.

    Scalar diagnostics for monitoring the simulation (pattern
    convergence, mass bookkeeping, bounds).

    Parameters:
    -----------
    tick : int
        Number of completed ticks
    angle : float
        Blade angle [rad]
    rotationSpeed : float
        Blade speed used for the last tick [rad/tick]
    pool : float
        Sand waiting in the mass pool
    totalMass : float
        Sum of heights over active cells
    deviation : float
        Sum of |target - height| over active cells
    minHeight : float
        Lowest active cell height
    maxHeight : float
        Highest active cell height
    '''

    tick: int
    angle: float
    rotationSpeed: float
    pool: float
    totalMass: float
    deviation: float
    minHeight: float
    maxHeight: float

    @property
    def totalSand(self) -> float:
        '''Sand in the bed plus sand held in the pool.'''
        return self.totalMass + self.pool


######################################################################
# -- Audio Sink Protocol -- #
######################################################################

class AudioSink(Protocol):
    '''Protocol for the sound hooks the garden calls into.'''

    def init(self) -> None:
        '''Prepare audio output.'''
        ...

    def playAmbient(self) -> None:
        '''Start ambient background sound.'''
        ...

    def stopAmbient(self) -> None:
        '''Stop ambient background sound.'''
        ...

    def playDisturbSound(self, intensity: float) -> None:
        '''
        Sand disturbance sound.

        Parameters:
        -----------
        intensity : float
            0-1, relative to the configured touch strength
        '''
        ...

    def playBladeSound(self) -> None:
        '''Blade movement sound (called once per tick).'''
        ...


class NullAudioSink:
    '''Audio sink that does nothing.'''

    def __init__(self) -> None:
        self.initialized = False

    def init(self) -> None:
        self.initialized = True

    def playAmbient(self) -> None:
        pass

    def stopAmbient(self) -> None:
        pass

    def playDisturbSound(self, intensity: float) -> None:
        pass

    def playBladeSound(self) -> None:
        pass
