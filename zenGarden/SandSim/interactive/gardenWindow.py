# -- Interactive Garden Window -- #

'''
Pygame window for raking the sand garden by hand.

Mouse and touch input feed the garden's pointer tracker, a slider sets
the blade speed, and window resizes are handed to the garden as a
deferred reinitialisation. Each frame runs exactly one garden tick and
then draws the sand, the frame, the blade with its comb teeth and the
pivot.

Controls: drag to disturb the sand, slider for blade speed,
R to reset the garden, Esc to quit.
'''

from __future__ import annotations

import logging
import math

import pygame

from zenGarden.SandSim import constants as const
from zenGarden.SandSim.adapters.colorMap import bladeTeeth, renderGarden
from zenGarden.SandSim.adapters.pointerInput import SpeedControl
from zenGarden.SandSim.garden.protocols import AudioSink, GardenConfig
from zenGarden.SandSim.garden.sandGarden import SandGarden

log = logging.getLogger(__name__)

FPS = 60
BLADE_WIDTH = 8
HUB_RADIUS = 12


class SpeedSlider:
    '''
    Track-and-knob control for the blade speed.

    The knob position is kept as a fraction of the track; the
    SpeedControl turns it into slider units and rad/tick.
    '''

    def __init__(self, rect: pygame.Rect, control: SpeedControl, speed: float) -> None:
        self.rect = rect
        self.control = control
        span = control.inputMax - control.inputMin
        self.fraction = (control.toInput(speed) - control.inputMin) / span
        self.grabbed = False

    @property
    def value(self) -> float:
        '''Slider reading in input units (1-100 by default).'''
        return self.control.inputMin + self.fraction * (self.control.inputMax - self.control.inputMin)

    @property
    def speed(self) -> float:
        return self.control.toSpeed(self.value)

    def handleEvent(self, event: pygame.event.Event) -> float | None:
        '''New blade speed when the event moved the knob, None when it was not for the slider.'''
        if event.type == pygame.MOUSEBUTTONDOWN and self.rect.inflate(0, 12).collidepoint(event.pos):
            self.grabbed = True
        elif event.type == pygame.MOUSEBUTTONUP and self.grabbed:
            self.grabbed = False
            return self.speed
        elif event.type != pygame.MOUSEMOTION or not self.grabbed:
            return None

        self.fraction = min(max((event.pos[0] - self.rect.x) / self.rect.width, 0.0), 1.0)
        return self.speed

    def draw(self, screen: pygame.Surface, font: pygame.font.Font) -> None:
        caption = font.render(f'Blade speed {self.value:.0f}', True, const.bladeColor)
        screen.blit(caption, (self.rect.x, self.rect.y - 18))
        pygame.draw.rect(screen, const.shadowColor, self.rect, 1)
        knobX = self.rect.x + round(self.fraction * self.rect.width)
        pygame.draw.line(screen, const.shadowColor, self.rect.midleft, (knobX, self.rect.centery), 2)
        pygame.draw.circle(screen, const.bladeColor, (knobX, self.rect.centery), 6)


class GardenWindow:
    '''
    Interactive sand garden in a resizable pygame window.

    Parameters:
    -----------
    config : GardenConfig
        Garden configuration
    width, height : int
        Initial window size [pixels]
    audio : AudioSink | None
        Sound hooks passed to the garden
    '''

    def __init__(
        self,
        config: GardenConfig,
        width: int = 900,
        height: int = 900,
        audio: AudioSink | None = None,
    ) -> None:
        pygame.init()
        self.screen = pygame.display.set_mode((width, height), pygame.RESIZABLE)
        pygame.display.set_caption('Zen Garden')
        self.clock = pygame.time.Clock()
        self.font = pygame.font.Font(None, 20)

        self.garden = SandGarden(config, viewport=(width, height), audio=audio)
        self.speedControl = SpeedControl()
        # The blade never runs slower than the slider can express
        self.garden.setRotationSpeed(self.speedControl.clampSpeed(config.rotationSpeed))
        self.speedSlider = SpeedSlider(pygame.Rect(20, 30, 160, 8), self.speedControl, self.garden.blade.rotationSpeed)
        self.running = False

    ######################################################################
    # -- Events -- #
    ######################################################################

    def handleEvents(self) -> None:
        '''Route pygame events to the slider, the pointer tracker and the garden.'''
        pointer = self.garden.pointer
        width, height = self.screen.get_size()

        for event in pygame.event.get():
            # Slider events never reach the sand
            speed = self.speedSlider.handleEvent(event)
            if speed is not None:
                self.garden.setRotationSpeed(speed)
                continue

            if event.type == pygame.QUIT:
                self.stop()
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self.stop()
                elif event.key == pygame.K_r:
                    self.garden.requestResize(width, height)
            elif event.type == pygame.VIDEORESIZE:
                self.screen = pygame.display.set_mode((event.w, event.h), pygame.RESIZABLE)
                self.garden.requestResize(event.w, event.h)

            # Touches arrive as FINGER events; skip the mouse events pygame synthesizes for them
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1 and not getattr(event, 'touch', False):
                pointer.pointerDown(*event.pos)
            elif event.type == pygame.MOUSEMOTION and not getattr(event, 'touch', False):
                pointer.pointerMove(*event.pos)
            elif event.type == pygame.MOUSEBUTTONUP and event.button == 1 and not getattr(event, 'touch', False):
                pointer.pointerUp()
            elif event.type == pygame.WINDOWLEAVE:
                pointer.pointerLeave()

            elif event.type == pygame.FINGERDOWN:
                pointer.pointerDown(event.x * width, event.y * height)
            elif event.type == pygame.FINGERMOTION:
                pointer.pointerMove(event.x * width, event.y * height)
            elif event.type == pygame.FINGERUP:
                pointer.pointerUp()

    ######################################################################
    # -- Drawing -- #
    ######################################################################

    def draw(self) -> None:
        '''Draw one frame from the current garden state.'''
        garden = self.garden
        mapper = garden.mapper
        cfg = garden.config
        center = (mapper.centerX, mapper.centerY)
        radius = mapper.gardenRadius

        self.screen.fill(const.backgroundColor)
        pygame.draw.circle(self.screen, const.frameColor, center, radius + cfg.frameWidth)

        # Sand, one grid cell per resolution x resolution block
        image = renderGarden(garden.heightField, saturation=cfg.colorSaturation)
        rows, cols = image.shape[:2]
        sand = pygame.image.frombuffer(image.tobytes(), (cols, rows), 'RGB')
        sandSize = (int(round(cols * mapper.resolution)), int(round(rows * mapper.resolution)))
        sand = pygame.transform.scale(sand, sandSize)
        self.screen.blit(sand, (mapper.centerX - radius, mapper.centerY - radius))

        self._drawBlade(center, radius - cfg.activeMargin)
        pygame.draw.circle(self.screen, (224, 224, 224), center, HUB_RADIUS)
        pygame.draw.circle(self.screen, (189, 189, 189), center, HUB_RADIUS, 2)
        pygame.draw.circle(self.screen, (189, 189, 189), center, HUB_RADIUS // 2)

        self.speedSlider.draw(self.screen, self.font)
        state = garden.state
        hud = self.font.render(
            f'tick {state.tick}   teeth {garden.toothCount}   pool {state.pool:.2f}   '
            f'{self.clock.get_fps():.0f} fps',
            True, (224, 224, 224),
        )
        self.screen.blit(hud, (20, 50))

        pygame.display.flip()

    def _drawBlade(self, center: tuple[float, float], bladeLength: float) -> None:
        '''Blade across the full diameter, comb teeth on the comb ray.'''
        angle = self.garden.blade.angle
        cfg = self.garden.config
        ux, uy = math.cos(angle), math.sin(angle)
        nx, ny = -uy, ux
        half = BLADE_WIDTH / 2.0

        def point(along, across):
            return (center[0] + ux * along + nx * across, center[1] + uy * along + ny * across)

        body = [point(-bladeLength, -half), point(bladeLength, -half),
                point(bladeLength, half), point(-bladeLength, half)]
        pygame.draw.polygon(self.screen, const.bladeColor, body)

        for along in bladeTeeth(self.garden.toothCount, cfg.toothInset, cfg.toothSpacing):
            pygame.draw.line(self.screen, const.bladeColor,
                             point(along, half + 2), point(along, half + 10), 2)

    ######################################################################
    # -- Main Loop -- #
    ######################################################################

    def run(self) -> None:
        '''Run frames until stop() is called or the window closes.'''
        self.running = True
        self.garden.audio.playAmbient()
        log.info('Interactive garden started (%s touch)', self.garden.config.touchMode)

        while self.running:
            self.handleEvents()
            if not self.running:
                break
            self.garden.tick()
            self.draw()
            self.clock.tick(FPS)

        self.garden.audio.stopAmbient()
        pygame.quit()

    def stop(self) -> None:
        '''Stop scheduling frames; the current frame completes.'''
        self.running = False
