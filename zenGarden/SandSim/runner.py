# -- Sand Garden Runner -- #

'''
Command-line entry point for sand garden runs.

Builds a garden from a preset or a JSON configuration, runs a fixed
number of ticks headless (optionally with scripted rake strokes),
prints progress, and optionally exports frame data for the Manim
playback scene and a Plotly dashboard. With --interactive the garden
opens in a pygame window instead.

Usage:
    python -m zenGarden.SandSim                              # Classic garden, 600 ticks
    python -m zenGarden.SandSim --preset pooled --strokes    # Pooled variant with scripted strokes
    python -m zenGarden.SandSim --config configs/garden.json
    python -m zenGarden.SandSim --no-export --dashboard      # Dashboard only
    python -m zenGarden.SandSim --interactive                # Rake by hand
'''

from __future__ import annotations

import argparse
import logging
import os
import time as timeModule

from zenGarden.SandSim.export.frameExporter import FrameExporter
from zenGarden.SandSim.garden.protocols import GardenConfig
from zenGarden.SandSim.garden.sandGarden import SandGarden
from zenGarden.SandSim.loggingConfig import setupLogging
from zenGarden.SandSim.scenarios.presets import GARDEN_PRESETS, createPreset
from zenGarden.SandSim.scenarios.strokes import StrokeScript, demoStrokes

log = logging.getLogger(__name__)

MAX_EXPORT_FRAMES = 120


#--------------------------------------------------------------------#
# -- CLI Argument Parser -- #
#--------------------------------------------------------------------#

def buildParser() -> argparse.ArgumentParser:
    '''Build the CLI argument parser.'''
    parser = argparse.ArgumentParser(
        description='zenGarden -- interactive sand garden simulation',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        '--preset', type=str, default='classic',
        choices=list(GARDEN_PRESETS.keys()),
        help='Garden variant preset (default: classic)',
    )
    parser.add_argument(
        '--config', type=str, default=None,
        help='Path to JSON configuration file (overrides --preset)',
    )
    parser.add_argument(
        '--ticks', type=int, default=600,
        help='Number of ticks for headless runs (default: 600)',
    )
    parser.add_argument(
        '--width', type=int, default=800,
        help='Viewport width (default: 800)',
    )
    parser.add_argument(
        '--height', type=int, default=800,
        help='Viewport height (default: 800)',
    )
    parser.add_argument(
        '--strokes', action='store_true',
        help='Rake the garden with scripted pointer strokes',
    )
    parser.add_argument(
        '--no-export', action='store_true',
        help='Skip frame data export',
    )
    parser.add_argument(
        '--output-dir', type=str, default='zenGarden/SandSim/output',
        help='Output directory for exported frames (default: SandSim/output)',
    )
    parser.add_argument(
        '--dashboard', action='store_true',
        help='Write a Plotly dashboard HTML next to the export',
    )
    parser.add_argument(
        '--interactive', action='store_true',
        help='Open the pygame window instead of running headless',
    )
    parser.add_argument(
        '--verbose', action='store_true',
        help='Enable debug logging',
    )

    return parser


#--------------------------------------------------------------------#
# -- Runner Class -- #
#--------------------------------------------------------------------#

class GardenRunner:
    '''
    Runs a sand garden headless and stores results.

    Handles the full pipeline: garden setup, tick loop with progress
    reporting, optional frame export and dashboard.
    '''

    def __init__(self) -> None:
        self._exporter: FrameExporter = FrameExporter()
        self._garden: SandGarden | None = None

    @property
    def garden(self) -> SandGarden | None:
        '''Garden of the most recent run.'''
        return self._garden

    def runFromConfig(self, configPath: str, **kwargs) -> dict:
        '''
        Run a garden from a JSON configuration file.

        Parameters:
        -----------
        configPath : str
            Path to the JSON configuration file
        **kwargs
            Passed on to run()

        Returns:
        --------
        dict : Run results summary
        '''
        config = GardenConfig.fromJson(configPath)
        scenarioName = os.path.splitext(os.path.basename(configPath))[0]
        return self.run(config, scenarioName=scenarioName, **kwargs)

    def run(
        self,
        config: GardenConfig,
        ticks: int = 600,
        viewport: tuple[float, float] = (800.0, 800.0),
        strokes: bool = False,
        doExport: bool = True,
        exportDir: str = 'zenGarden/SandSim/output',
        dashboard: bool = False,
        scenarioName: str = 'classic',
    ) -> dict:
        '''
        Run a garden for a fixed number of ticks.

        Parameters:
        -----------
        config : GardenConfig
            Garden configuration
        ticks : int
            Number of ticks to simulate
        viewport : tuple[float, float]
            Viewport size [screen units]
        strokes : bool
            Whether to rake the garden with the demonstration strokes
        doExport : bool
            Whether to export frame data
        exportDir : str
            Output directory for frame export and dashboard
        dashboard : bool
            Whether to write a Plotly dashboard
        scenarioName : str
            Name used in banners and output filenames

        Returns:
        --------
        dict : Run results summary
        '''
        if ticks < 1:
            raise ValueError(f'ticks must be at least 1, got {ticks}')

        print()
        print('=' * 62)
        print(f'  ZEN GARDEN -- {scenarioName.upper()}')
        print('=' * 62)
        print()

        #--------------------------------------------------------------------#
        # Garden Setup
        #--------------------------------------------------------------------#
        print('-' * 62)
        print('  GARDEN SETUP')
        print('-' * 62)

        garden = SandGarden(config, viewport=viewport)
        self._garden = garden
        self._exporter = FrameExporter()
        mapper = garden.mapper

        script = demoStrokes(viewport, mapper.gardenRadius) if strokes else StrokeScript([])

        print(f'  Viewport:          {viewport[0]:6.0f} x {viewport[1]:<6.0f}')
        print(f'  Garden Radius:     {mapper.gardenRadius:8.1f}')
        print(f'  Grid:              {mapper.gridWidth:6d} x {mapper.gridHeight:<6d}')
        print(f'  Active Cells:      {garden.heightField.nActive:8d}')
        print(f'  Comb Teeth:        {garden.toothCount:8d}')
        print(f'  Rate Mode:         {config.rateMode:>8s}')
        print(f'  Touch Mode:        {config.touchMode:>8s}')
        print(f'  Mass Pool:         {"on" if config.massPoolEnabled else "off":>8s}')
        print(f'  Rotation Speed:    {config.rotationSpeed:8.4f} rad/tick')
        print(f'  Ticks/Revolution:  {config.ticksPerRevolution:8d}')
        print(f'  Strokes:           {len(script.strokes):8d}')
        print()

        self._exporter.addFrame(garden.state, garden.heightField)

        #--------------------------------------------------------------------#
        # Tick Loop
        #--------------------------------------------------------------------#
        print('-' * 62)
        print('  RUNNING GARDEN')
        print('-' * 62)
        print()
        print(f'  {"Tick":>8}  {"Angle":>8}  {"Deviation":>10}  {"Mass":>10}  {"Pool":>8}')
        print(f'  {"":>8}  {"(rad)":>8}  {"":>10}  {"":>10}  {"":>8}')
        print('  ' + '-' * 52)

        frameInterval = max(1, ticks // MAX_EXPORT_FRAMES)
        printInterval = max(1, ticks // 20)

        wallClockStart = timeModule.time()
        for tick in range(ticks):
            script.feed(tick, garden.pointer)
            state = garden.tick()

            if state.tick % frameInterval == 0:
                self._exporter.addFrame(state, garden.heightField)
            else:
                self._exporter.recordState(state)

            if state.tick % printInterval == 0 or state.tick == ticks:
                print(
                    f'  {state.tick:8d}  {state.angle:8.4f}  {state.deviation:10.2f}  '
                    f'{state.totalMass:10.2f}  {state.pool:8.3f}'
                )

        wallClockSeconds = timeModule.time() - wallClockStart
        finalState = garden.state

        print()
        print(f'  Run complete.')
        print(f'  Total ticks:       {finalState.tick:8d}')
        print(f'  Wall-clock time:   {wallClockSeconds:8.1f} s')
        print(f'  Frames recorded:   {self._exporter.nFrames:8d}')
        print()

        #--------------------------------------------------------------------#
        # Export
        #--------------------------------------------------------------------#
        exportPath = None
        if doExport:
            print('-' * 62)
            print('  EXPORTING FRAME DATA')
            print('-' * 62)

            exportPath = self._exporter.export(
                config=config,
                heightField=garden.heightField,
                outputDir=exportDir,
                scenarioName=scenarioName,
            )
            print(f'  Exported to: {exportPath}')
            log.info('Exported %d frames to %s', self._exporter.nFrames, exportPath)
            print()

        dashboardPath = None
        if dashboard:
            # Plotly is only needed for the dashboard
            from zenGarden.SandSim.visualization.dashboard import createGardenDashboard, saveDashboard

            os.makedirs(exportDir, exist_ok=True)
            fig = createGardenDashboard(garden, self._exporter.history)
            dashboardPath = saveDashboard(fig, os.path.join(exportDir, f'zenGarden_{scenarioName}_dashboard.html'))
            print(f'  Dashboard: {dashboardPath}')
            print()

        #--------------------------------------------------------------------#
        # Summary
        #--------------------------------------------------------------------#
        history = self._exporter.history
        initialDeviation = history['deviation'][0]

        print('=' * 62)
        print('  GARDEN SUMMARY')
        print('=' * 62)
        print(f'  Initial Deviation: {initialDeviation:10.2f}')
        print(f'  Final Deviation:   {finalState.deviation:10.2f}')
        print(f'  Height Range:      {finalState.minHeight:6.2f} .. {finalState.maxHeight:<6.2f}')
        print(f'  Bed Mass:          {finalState.totalMass:10.2f}')
        print(f'  Pool:              {finalState.pool:10.3f}')
        print('=' * 62)
        print()

        return {
            'finalState': finalState,
            'wallClockSeconds': wallClockSeconds,
            'nFrames': self._exporter.nFrames,
            'history': history,
            'exportPath': exportPath,
            'dashboardPath': dashboardPath,
        }


#--------------------------------------------------------------------#
# -- CLI Entry Point -- #
#--------------------------------------------------------------------#

def main(argv: list[str] | None = None) -> dict | None:
    '''CLI entry point.'''
    parser = buildParser()
    args = parser.parse_args(argv)

    setupLogging(logging.DEBUG if args.verbose else logging.WARNING)

    if args.interactive:
        config = GardenConfig.fromJson(args.config) if args.config else createPreset(args.preset)

        # pygame is only needed for the interactive window
        from zenGarden.SandSim.interactive.gardenWindow import GardenWindow

        GardenWindow(config, width=args.width, height=args.height).run()
        return None

    runner = GardenRunner()
    runOptions = dict(
        ticks=args.ticks,
        viewport=(float(args.width), float(args.height)),
        strokes=args.strokes,
        doExport=not args.no_export,
        exportDir=args.output_dir,
        dashboard=args.dashboard,
    )
    if args.config:
        return runner.runFromConfig(args.config, **runOptions)
    return runner.run(createPreset(args.preset), scenarioName=args.preset, **runOptions)


if __name__ == '__main__':
    main()
