# -- Target Pattern Scene -- #

'''
Manim animation explaining the concentric wave the blade imprints.

Sequence (~15 seconds):
1. Title card with the target equation
2. Radial height profile for the default garden
3. The comb teeth placed along the blade and the wave count they set
'''

import numpy as np
from manim import (
    Scene, Text, MathTex, VGroup, Axes, Dot, Line, DashedLine,
    Create, FadeIn, Write,
    UP, DOWN, LEFT, RIGHT,
)

from zenGarden.SandSim.adapters.colorMap import bladeTeeth
from zenGarden.SandSim.garden.gridMapper import GridMapper
from zenGarden.SandSim.garden.heightField import computeToothCount, targetHeight
from zenGarden.SandSim.scenarios.presets import createPreset
from zenGarden.GardenAnimations.utils.manimTheme import (
    BG_COLOR, TEXT_COLOR, EQUATION_COLOR, WAVE_COLOR, TOOTH_COLOR, AXIS_COLOR, BLADE_COLOR,
)


class TargetPatternIntro(Scene):
    '''
    Radial profile of the target pattern for an 800x800 garden.
    '''

    def construct(self) -> None:
        self.camera.background_color = BG_COLOR

        cfg = createPreset('classic')
        mapper = GridMapper.fromViewport(
            800, 800,
            resolution=cfg.resolution,
            padding=cfg.padding,
            frameWidth=cfg.frameWidth,
            boundaryMargin=cfg.activeMargin,
        )
        radius = mapper.gardenRadius
        toothCount = computeToothCount(radius, cfg)
        waveFrequency = toothCount / radius
        activeRadius = radius - cfg.activeMargin

        # -------------------------------------------------------
        # 1. Title Card
        # -------------------------------------------------------
        title = Text('The Raked Pattern', font_size=44, color=TEXT_COLOR).to_edge(UP, buff=0.5)
        equation = MathTex(
            r'h^*(d) = A \sin\left(\frac{2\pi\, d\, n}{R}\right)',
            font_size=36,
            color=EQUATION_COLOR,
        ).next_to(title, DOWN, buff=0.4)

        self.play(Write(title), run_time=1.0)
        self.play(Write(equation), run_time=1.0)
        self.wait(0.5)

        titleGroup = VGroup(title, equation)
        self.play(titleGroup.animate.scale(0.5).to_corner(UP + RIGHT, buff=0.3), run_time=0.8)

        # -------------------------------------------------------
        # 2. Radial profile
        # -------------------------------------------------------
        axes = Axes(
            x_range=[0, radius, radius / 4],
            y_range=[-1.5 * cfg.waveAmplitude, 1.5 * cfg.waveAmplitude, cfg.waveAmplitude],
            x_length=10,
            y_length=3,
            axis_config={'color': AXIS_COLOR},
        ).shift(DOWN * 0.3)
        xLabel = Text('distance from pivot', font_size=18, color=AXIS_COLOR).next_to(axes, DOWN, buff=0.2)

        profile = axes.plot(
            lambda d: float(targetHeight(d, cfg.waveAmplitude, waveFrequency)) if d < activeRadius else 0.0,
            x_range=[0, radius, radius / 400],
            color=WAVE_COLOR,
        )
        edge = DashedLine(
            axes.c2p(activeRadius, -1.5 * cfg.waveAmplitude),
            axes.c2p(activeRadius, 1.5 * cfg.waveAmplitude),
            color=AXIS_COLOR,
            dash_length=0.1,
        )

        self.play(Create(axes), FadeIn(xLabel), run_time=1.0)
        self.play(Create(profile), run_time=2.0)
        self.play(Create(edge), run_time=0.5)

        # -------------------------------------------------------
        # 3. Comb teeth along the blade
        # -------------------------------------------------------
        bladeY = -2.8
        blade = Line(
            axes.c2p(0, 0) * np.array([1, 0, 0]) + np.array([0, bladeY, 0]),
            axes.c2p(activeRadius, 0) * np.array([1, 0, 0]) + np.array([0, bladeY, 0]),
            color=BLADE_COLOR,
            stroke_width=6,
        )
        teeth = VGroup(*[
            Dot(np.array([axes.c2p(t, 0)[0], bladeY - 0.12, 0]), radius=0.04, color=TOOTH_COLOR)
            for t in bladeTeeth(toothCount, cfg.toothInset, cfg.toothSpacing)
            if t < radius
        ])
        countLabel = Text(
            f'{toothCount} teeth  =  {toothCount} waves across the radius',
            font_size=20,
            color=TOOTH_COLOR,
        ).next_to(blade, RIGHT, buff=0.3).shift(LEFT * 3 + DOWN * 0.5)

        self.play(Create(blade), run_time=0.6)
        self.play(FadeIn(teeth), run_time=0.8)
        self.play(Write(countLabel), run_time=0.8)
        self.wait(2.0)
