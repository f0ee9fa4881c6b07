# -- Garden Playback Scene -- #

'''
Manim animation replaying an exported sand garden run.

Loads frame data written by the SandSim FrameExporter, renders each
height grid with the sand colour map and plays the frames back with
the blade drawn on top and a tick / pool label.

Usage:
    python -m zenGarden.SandSim --preset pooled --strokes
    python -m zenGarden.GardenAnimations.render playback
'''

import json
import os

import numpy as np
from manim import (
    Scene, Text, ImageMobject, Line, Circle, Dot,
    FadeIn, Write, Create,
    UP, DOWN, RIGHT,
)

from zenGarden.SandSim import constants as const
from zenGarden.SandSim.adapters.colorMap import heightToRgb
from zenGarden.GardenAnimations.utils.manimTheme import (
    BG_COLOR, TEXT_COLOR, WAVE_COLOR, FRAME_COLOR, BLADE_COLOR,
)


def frameImage(heights: np.ndarray, outside: np.ndarray, saturation: float) -> np.ndarray:
    '''RGB image of one exported height grid, frame colour outside the garden.'''
    image = heightToRgb(heights, saturation=saturation)
    image[outside] = np.asarray(const.frameColor, dtype=np.uint8)
    return image


def findLatestExport(dataDir: str) -> str | None:
    '''Newest zenGarden_*.json in dataDir by modification time, or None.'''
    if not os.path.isdir(dataDir):
        return None
    exports = [
        os.path.join(dataDir, name)
        for name in os.listdir(dataDir)
        if name.startswith('zenGarden_') and name.endswith('.json')
    ]
    return max(exports, key=os.path.getmtime, default=None)


class GardenPlayback(Scene):
    '''
    Playback of an exported garden run.

    Export a run with the SandSim runner, then render this scene; the
    newest export in SandSim/output is used.
    '''

    def construct(self):
        '''Build and play the animation sequence.'''
        self.camera.background_color = BG_COLOR

        dataDir = os.path.join(os.path.dirname(__file__), '..', '..', 'SandSim', 'output')
        jsonPath = findLatestExport(dataDir)

        if jsonPath is None:
            errorText = Text(
                'No garden data found.\n'
                'Run: python -m zenGarden.GardenAnimations.render playback --simulate classic',
                font_size=28,
                color=TEXT_COLOR,
            )
            self.play(Write(errorText))
            self.wait(3)
            return

        with open(jsonPath, 'r') as f:
            data = json.load(f)

        frames = data['frames']
        meta = data['meta']
        gardenConfig = data['config']
        nFrames = len(frames)

        # Cell corners of the (strided) grid, relative to the garden centre
        radius = meta['gardenRadius']
        cellSize = meta['resolution'] * meta['stride']
        rows, cols = np.array(frames[0]['heights']).shape
        xs = -radius + np.arange(cols) * cellSize
        ys = -radius + np.arange(rows) * cellSize
        outside = np.hypot(xs[np.newaxis, :], ys[:, np.newaxis]) > radius
        saturation = gardenConfig.get('colorSaturation', const.colorSaturation)

        ######################################################################
        # Title Card
        ######################################################################
        title = Text(
            f'Zen Garden: {meta.get("scenario", "?")}',
            font_size=32,
            color=TEXT_COLOR,
        ).to_edge(UP, buff=0.3)

        subtitle = Text(
            f'{meta.get("toothCount", "?")} teeth  |  '
            f'{gardenConfig.get("rateMode", "?")} raking  |  '
            f'{gardenConfig.get("touchMode", "?")} touch  |  '
            f'{nFrames} frames',
            font_size=18,
            color=WAVE_COLOR,
        ).next_to(title, DOWN, buff=0.15)

        self.play(Write(title), run_time=0.8)
        self.play(FadeIn(subtitle), run_time=0.5)

        ######################################################################
        # Sand bed, frame and blade
        ######################################################################
        sceneRadius = 2.6
        bed = ImageMobject(frameImage(np.array(frames[0]['heights']), outside, saturation))
        bed.height = 2.0 * sceneRadius
        bed.move_to(DOWN * 0.4)
        center = bed.get_center()

        frameRing = Circle(radius=sceneRadius, color=FRAME_COLOR, stroke_width=10).move_to(center)
        bladeReach = sceneRadius * (radius - gardenConfig.get('activeMargin', const.activeMargin)) / radius

        def bladeLine(angle):
            # Screen y points down, scene y points up
            direction = np.array([np.cos(angle), -np.sin(angle), 0.0])
            return Line(center - direction * bladeReach, center + direction * bladeReach,
                        color=BLADE_COLOR, stroke_width=6)

        blade = bladeLine(frames[0]['angle'])
        hub = Dot(center, radius=0.08, color=TEXT_COLOR)

        self.play(FadeIn(bed), Create(frameRing), run_time=0.8)
        self.play(Create(blade), FadeIn(hub), run_time=0.5)

        tickLabel = Text(f'tick {frames[0]["tick"]}', font_size=20, color=TEXT_COLOR)
        tickLabel.to_corner(DOWN + RIGHT, buff=0.4)
        self.add(tickLabel)

        ######################################################################
        # Animate frames
        ######################################################################
        targetDuration = 12.0
        frameInterval = max(1, nFrames // int(targetDuration * 30))
        frameDt = 1.0 / 30.0

        for frameIdx in range(1, nFrames, frameInterval):
            frame = frames[frameIdx]

            newBed = ImageMobject(frameImage(np.array(frame['heights']), outside, saturation))
            newBed.height = 2.0 * sceneRadius
            newBed.move_to(center)
            newBlade = bladeLine(frame['angle'])
            newLabel = Text(
                f'tick {frame["tick"]}   pool {frame["pool"]:.2f}',
                font_size=20,
                color=TEXT_COLOR,
            ).to_corner(DOWN + RIGHT, buff=0.4)

            self.remove(bed, blade, tickLabel)
            bed, blade, tickLabel = newBed, newBlade, newLabel
            self.add(bed, frameRing, blade, hub, tickLabel)

            self.wait(frameDt)

        ######################################################################
        # End card
        ######################################################################
        self.wait(0.5)
        endText = Text('Raked', font_size=26, color=WAVE_COLOR).next_to(frameRing, RIGHT, buff=0.6)
        self.play(FadeIn(endText), run_time=0.6)
        self.wait(1.5)
