# -- Frame Export and Runner Tests -- #

import json
import os

import numpy as np
import pytest

from zenGarden.SandSim.export.frameExporter import FrameExporter
from zenGarden.SandSim.runner import GardenRunner, buildParser, main
from zenGarden.SandSim.scenarios.presets import createPreset


def testExportWritesFramesAndHistory(makeGarden, tmp_path):
    garden = makeGarden('graded')
    exporter = FrameExporter(stride=2)
    exporter.addFrame(garden.state, garden.heightField)
    for _ in range(4):
        state = garden.tick()
        exporter.recordState(state)
    exporter.addFrame(garden.state, garden.heightField)

    path = exporter.export(garden.config, garden.heightField, outputDir=str(tmp_path), scenarioName='graded')

    assert os.path.basename(path).startswith('zenGarden_graded_')
    with open(path, 'r') as f:
        data = json.load(f)

    assert data['meta']['type'] == 'zenGarden'
    assert data['meta']['nFrames'] == 2
    assert data['meta']['toothCount'] == 6
    assert data['config']['rateMode'] == 'graded'
    assert len(data['frames']) == 2
    assert data['frames'][-1]['tick'] == 4

    heights = np.array(data['frames'][-1]['heights'])
    assert heights.shape == (50, 50)
    assert np.allclose(heights, np.round(garden.heightField.heights[::2, ::2], 3))
    assert np.array(data['target']).shape == (50, 50)

    history = data['history']
    assert history['ticks'] == [0, 1, 2, 3, 4, 4]
    assert len(history['deviation']) == len(history['pool']) == 6


def testExporterRejectsBadStride():
    with pytest.raises(ValueError):
        FrameExporter(stride=0)


def testParserDefaults():
    args = buildParser().parse_args([])
    assert args.preset == 'classic'
    assert args.ticks == 600
    assert not args.no_export
    assert not args.interactive


def testRunnerHeadlessRun(tmp_path):
    runner = GardenRunner()
    config = createPreset('conserving', rotationSpeed=0.05)
    results = runner.run(
        config,
        ticks=40,
        viewport=(264.0, 264.0),
        strokes=True,
        exportDir=str(tmp_path),
        scenarioName='conserving',
    )

    assert results['finalState'].tick == 40
    assert results['exportPath'] is not None
    assert os.path.isfile(results['exportPath'])
    assert results['dashboardPath'] is None
    assert len(results['history']['ticks']) == 41
    assert runner.garden.tickCount == 40


def testRunnerRejectsZeroTicks():
    with pytest.raises(ValueError):
        GardenRunner().run(createPreset('classic'), ticks=0, doExport=False)


def testMainWithoutExport(tmp_path):
    results = main([
        '--preset', 'pooled', '--ticks', '5', '--width', '264', '--height', '264',
        '--no-export', '--output-dir', str(tmp_path),
    ])
    assert results['finalState'].tick == 5
    assert results['exportPath'] is None
    assert os.listdir(tmp_path) == []


def testMainFromConfigWithDashboard(tmp_path):
    configPath = tmp_path / 'sculptRun.json'
    configPath.write_text(json.dumps({
        'preset': 'sculpt',
        'blade': {'rotationSpeed': 0.05},
    }))
    outputDir = tmp_path / 'out'

    results = main([
        '--config', str(configPath), '--ticks', '10', '--width', '264', '--height', '264',
        '--strokes', '--dashboard', '--output-dir', str(outputDir),
    ])

    assert os.path.basename(results['exportPath']).startswith('zenGarden_sculptRun_')
    assert os.path.isfile(results['dashboardPath'])
    assert results['dashboardPath'].endswith('.html')
