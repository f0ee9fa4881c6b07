# -- Sand Garden Simulation -- #

'''
Simulation context for one sand garden.

Owns every piece of mutable state (grid geometry, height field, blade,
mass pool, pointer queue) and runs the per-tick sequence:

    1. Apply a deferred resize (full reinitialisation)
    2. Advance the blade and rake the comb and smooth wedges
    3. Apply queued pointer disturbances (or the held position when
       continuousWhileHeld is set)
    4. Release part of the mass pool into holes

The renderer reads the height field after tick() returns. Input
handlers only record positions on the pointer tracker; all mutation
happens inside tick(), so no locking is needed as long as a single
thread drives the garden.
'''

from __future__ import annotations

import logging

from zenGarden.SandSim.adapters.pointerInput import PointerTracker
from zenGarden.SandSim.garden.bladeSweep import BladeState, BladeSweep, SweepResult
from zenGarden.SandSim.garden.disturbance import DisturbanceEngine, DisturbanceResult
from zenGarden.SandSim.garden.gridMapper import GridMapper
from zenGarden.SandSim.garden.heightField import HeightField
from zenGarden.SandSim.garden.massPool import MassPool
from zenGarden.SandSim.garden.protocols import AudioSink, GardenConfig, GardenState, NullAudioSink

log = logging.getLogger(__name__)


class SandGarden:
    '''
    One interactive sand garden.

    Parameters:
    -----------
    config : GardenConfig
        Garden configuration (a preset or custom)
    viewport : tuple[float, float]
        Width and height of the drawing surface [screen units]
    audio : AudioSink | None
        Sound hooks (defaults to a silent sink)
    '''

    def __init__(
        self,
        config: GardenConfig,
        viewport: tuple[float, float] = (800.0, 800.0),
        audio: AudioSink | None = None,
    ) -> None:
        self._config = config
        self._audio = audio or NullAudioSink()
        self._audio.init()

        self._blade = BladeState(angle=0.0, rotationSpeed=config.rotationSpeed)
        self._pointer = PointerTracker(
            touchStrength=config.touchStrength,
            dragMultiplier=config.dragMultiplier,
            dragStep=config.dragStep,
        )
        self._pool = MassPool(
            drainFraction=config.drainFraction,
            holeThreshold=config.holeThreshold,
            fillIncrement=config.fillIncrement,
        )

        self._tickCount: int = 0
        self._inTick: bool = False
        self._pendingResize: tuple[float, float] | None = None
        self._lastSweep: SweepResult = SweepResult()

        self._reinitialize(*viewport)

    ######################################################################
    # -- (Re)initialisation -- #
    ######################################################################

    def _reinitialize(self, width: float, height: float) -> None:
        '''
        Rebuild grid, fields and engines for a viewport.

        Prior disturbance state is discarded: the height field restarts
        from the initial pattern, the blade from angle zero and the pool
        from empty.
        '''
        cfg = self._config
        self._viewport = (width, height)
        self._mapper = GridMapper.fromViewport(
            width, height,
            resolution=cfg.resolution,
            padding=cfg.padding,
            frameWidth=cfg.frameWidth,
            boundaryMargin=cfg.activeMargin,
        )
        self._field = HeightField.initialize(self._mapper, cfg)

        self._blade.angle = 0.0
        self._pool.reset()

        pool = self._pool if cfg.massPoolEnabled else None
        self._sweep = BladeSweep(self._field, cfg, self._blade, pool=pool, audio=self._audio)
        self._disturber = DisturbanceEngine(self._field, cfg, pool=pool, audio=self._audio)
        self._lastSweep = SweepResult()

        log.info(
            'Garden initialised: viewport %.0fx%.0f, radius %.1f, grid %dx%d, %d teeth',
            width, height, self._mapper.gardenRadius,
            self._mapper.gridWidth, self._mapper.gridHeight, self._field.toothCount,
        )

    def requestResize(self, width: float, height: float) -> None:
        '''Record a viewport change; applied at the start of the next tick.'''
        log.debug('Resize to %.0fx%.0f queued for the next tick', width, height)
        self._pendingResize = (width, height)

    def resize(self, width: float, height: float) -> None:
        '''
        Reinitialise for a new viewport.

        Called while a tick is running, the resize is deferred to the
        start of the next tick instead.
        '''
        if self._inTick:
            self.requestResize(width, height)
            return
        self._pendingResize = None
        self._reinitialize(width, height)

    ######################################################################
    # -- Main Tick -- #
    ######################################################################

    def tick(self) -> GardenState:
        '''
        Advance the simulation by one frame.

        Returns:
        --------
        GardenState : Snapshot after the tick
        '''
        self._inTick = True
        try:
            # 1. Deferred resize
            if self._pendingResize is not None:
                width, height = self._pendingResize
                self._pendingResize = None
                self._reinitialize(width, height)

            # 2. Blade sweep
            self._lastSweep = self._sweep.tick()

            # 3. Pointer input
            self._applyInput()

            # 4. Mass pool
            if self._config.massPoolEnabled:
                self._pool.redistribute(self._field)

            self._tickCount += 1
        finally:
            self._inTick = False

        return self.state

    def _applyInput(self) -> None:
        '''Apply the pointer positions recorded since the last tick.'''
        pending = self._pointer.drainPending()
        for x, y, strength in pending:
            self._disturber.disturb((x, y), strength, self._config.touchMode, self._blade.angle)

        if not pending and self._config.continuousWhileHeld and self._pointer.isInteracting:
            position = self._pointer.lastPosition
            if position is not None:
                self._disturber.disturb(
                    position, self._pointer.dragStrength,
                    self._config.touchMode, self._blade.angle,
                )

    ######################################################################
    # -- Direct Operations -- #
    ######################################################################

    def disturb(
        self,
        point: tuple[float, float],
        strength: float | None = None,
        mode: str | None = None,
    ) -> DisturbanceResult:
        '''
        Disturb the sand immediately at a screen point.

        Parameters:
        -----------
        point : tuple[float, float]
            Touch position [screen units]
        strength : float | None
            Defaults to config.touchStrength
        mode : str | None
            Defaults to config.touchMode

        Returns:
        --------
        DisturbanceResult : What the disturbance did
        '''
        if strength is None:
            strength = self._config.touchStrength
        if mode is None:
            mode = self._config.touchMode
        return self._disturber.disturb(point, strength, mode, self._blade.angle)

    def setRotationSpeed(self, speed: float) -> None:
        '''Change the blade speed from the next tick on.'''
        if speed <= 0.0:
            raise ValueError(f'rotationSpeed must be positive, got {speed}')
        self._blade.rotationSpeed = speed

    ######################################################################
    # -- Properties -- #
    ######################################################################

    @property
    def state(self) -> GardenState:
        '''Current garden state snapshot.'''
        field = self._field
        activeHeights = field.heights[field.active]
        return GardenState(
            tick=self._tickCount,
            angle=self._blade.angle,
            rotationSpeed=self._blade.rotationSpeed,
            pool=self._pool.amount,
            totalMass=float(activeHeights.sum()),
            deviation=field.deviation(),
            minHeight=float(activeHeights.min()),
            maxHeight=float(activeHeights.max()),
        )

    @property
    def config(self) -> GardenConfig:
        '''Garden configuration.'''
        return self._config

    @property
    def viewport(self) -> tuple[float, float]:
        '''Viewport the garden is currently fitted to.'''
        return self._viewport

    @property
    def mapper(self) -> GridMapper:
        '''Coordinate mapping for the current layout.'''
        return self._mapper

    @property
    def heightField(self) -> HeightField:
        '''Height and target fields.'''
        return self._field

    @property
    def blade(self) -> BladeState:
        '''Blade angle and speed.'''
        return self._blade

    @property
    def bladeSweep(self) -> BladeSweep:
        '''Blade sweep engine.'''
        return self._sweep

    @property
    def pool(self) -> MassPool:
        '''Mass pool (inactive unless config.massPoolEnabled).'''
        return self._pool

    @property
    def pointer(self) -> PointerTracker:
        '''Pointer tracker fed by input handlers.'''
        return self._pointer

    @property
    def audio(self) -> AudioSink:
        '''Sound hooks.'''
        return self._audio

    @property
    def toothCount(self) -> int:
        '''Comb tooth count shared by the wave pattern and the renderer.'''
        return self._field.toothCount

    @property
    def tickCount(self) -> int:
        '''Completed ticks.'''
        return self._tickCount

    @property
    def lastSweep(self) -> SweepResult:
        '''Cells processed by the most recent blade tick.'''
        return self._lastSweep
