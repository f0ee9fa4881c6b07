# -- Garden Animation Renderer -- #

'''
Renders the GardenAnimations scenes through the manim CLI.

The playback scene needs a SandSim export. With --simulate a short
headless run of the chosen preset is made first, so that a video can
be produced from a clean checkout in one command.

Usage:
    python -m zenGarden.GardenAnimations.render target_pattern
    python -m zenGarden.GardenAnimations.render playback --simulate classic --ticks 900
    python -m zenGarden.GardenAnimations.render --all -q low
'''

import argparse
import os
import subprocess
import sys

PACKAGE_DIR = os.path.dirname(os.path.abspath(__file__))
SCENE_DIR = os.path.join(PACKAGE_DIR, 'scenes')
MEDIA_DIR = os.path.join(PACKAGE_DIR, 'media')
EXPORT_DIR = os.path.join(os.path.dirname(PACKAGE_DIR), 'SandSim', 'output')

# name -> (module file, Scene class, summary)
SCENES = {
    'target_pattern': ('targetPattern.py', 'TargetPatternIntro', 'Target wave profile and comb teeth'),
    'playback': ('gardenPlayback.py', 'GardenPlayback', 'Replay of the newest SandSim export'),
}

QUALITY_FLAGS = {
    'low': '-ql',
    'medium': '-qm',
    'high': '-qh',
    'fourk': '-qk',
}


def buildCommand(sceneName: str, quality: str = 'high') -> list[str]:
    '''
    Manim command line for a registered scene.

    Parameters:
    -----------
    sceneName : str
        Key of SCENES
    quality : str
        Key of QUALITY_FLAGS

    Returns:
    --------
    list[str] : Arguments for subprocess.run
    '''
    if sceneName not in SCENES:
        raise ValueError(f'Unknown scene \'{sceneName}\'; choose from {sorted(SCENES)}')
    if quality not in QUALITY_FLAGS:
        raise ValueError(f'Unknown quality \'{quality}\'; choose from {sorted(QUALITY_FLAGS)}')

    fileName, className, _ = SCENES[sceneName]
    return [
        sys.executable, '-m', 'manim', 'render', QUALITY_FLAGS[quality],
        '--media_dir', MEDIA_DIR,
        os.path.join(SCENE_DIR, fileName),
        className,
    ]


def simulateForPlayback(preset: str, ticks: int) -> str:
    '''Run the garden headless and export frames for the playback scene.'''
    from zenGarden.SandSim.runner import GardenRunner
    from zenGarden.SandSim.scenarios.presets import createPreset

    results = GardenRunner().run(
        createPreset(preset),
        ticks=ticks,
        strokes=True,
        exportDir=EXPORT_DIR,
        scenarioName=preset,
    )
    return results['exportPath']


def renderScene(sceneName: str, quality: str = 'high') -> bool:
    '''Render one scene; False when manim exits with an error.'''
    cmd = buildCommand(sceneName, quality)
    print(f'Rendering {sceneName} ({SCENES[sceneName][2]}) at {quality} quality')

    # Scenes import zenGarden, so manim runs from the project root
    projectRoot = os.path.dirname(os.path.dirname(PACKAGE_DIR))
    completed = subprocess.run(cmd, cwd=projectRoot)
    if completed.returncode != 0:
        print(f'  manim failed for {sceneName} (exit code {completed.returncode})')
        return False
    return True


def renderAll(quality: str = 'high') -> dict[str, bool]:
    return {name: renderScene(name, quality) for name in SCENES}


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description='Render sand garden animations with manim')
    parser.add_argument('scene', nargs='?', choices=sorted(SCENES), help='Scene to render')
    parser.add_argument('--all', '-a', action='store_true', help='Render every scene')
    parser.add_argument('--quality', '-q', choices=list(QUALITY_FLAGS), default='high')
    parser.add_argument('--simulate', metavar='PRESET', default=None,
                        help='Export a fresh headless run of PRESET before rendering')
    parser.add_argument('--ticks', type=int, default=900,
                        help='Ticks for --simulate (default: 900)')
    args = parser.parse_args(argv)

    if args.scene is None and not args.all:
        parser.print_help()
        return 2

    if args.simulate is not None:
        exportPath = simulateForPlayback(args.simulate, args.ticks)
        print(f'Playback data: {exportPath}')

    if args.all:
        results = renderAll(args.quality)
        failed = [name for name, ok in results.items() if not ok]
        print(f'{len(results) - len(failed)}/{len(results)} scenes rendered')
        return 1 if failed else 0

    return 0 if renderScene(args.scene, args.quality) else 1


if __name__ == '__main__':
    sys.exit(main())
