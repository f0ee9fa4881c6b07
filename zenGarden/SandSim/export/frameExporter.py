# -- Garden Frame Exporter -- #

'''
Exports sand garden frames as JSON for visualization.

Collects height field snapshots during a run and writes them to a
JSON file that the Manim playback scene and the Plotly dashboard can
load.

The output stores the height grid of each frame (optionally
downsampled), the blade angle and pool level, plus the convergence
and mass history of every recorded tick.
'''

from __future__ import annotations

import json
import os
from datetime import datetime

import numpy as np

from zenGarden.SandSim.garden.heightField import HeightField
from zenGarden.SandSim.garden.protocols import GardenConfig, GardenState


class FrameExporter:
    '''
    Collects and exports garden frame data as JSON.

    Usage:
        exporter = FrameExporter()
        # During the tick loop:
        exporter.addFrame(state, garden.heightField)
        # After the run:
        exporter.export(config, garden.heightField, outputDir='output')

    Output JSON format:
    {
        "meta": { "type": "zenGarden", "gridWidth": 190, "toothCount": 6, ... },
        "config": { "resolution": 2.0, ... },
        "target": [[...], ...],
        "frames": [
            {
                "tick": 0,
                "angle": 0.0,
                "pool": 0.0,
                "heights": [[h00, h01, ...], ...]
            },
            ...
        ],
        "history": {
            "ticks": [...],
            "deviation": [...],
            "totalMass": [...],
            "pool": [...]
        }
    }

    Parameters:
    -----------
    stride : int
        Keep every stride-th cell along each axis in exported grids
    '''

    def __init__(self, stride: int = 1) -> None:
        if stride < 1:
            raise ValueError(f'stride must be at least 1, got {stride}')
        self._stride = stride
        self._frames: list[dict] = []
        self._history: dict[str, list[float]] = {
            'ticks': [],
            'deviation': [],
            'totalMass': [],
            'pool': [],
        }

    @property
    def nFrames(self) -> int:
        '''Number of collected frames.'''
        return len(self._frames)

    @property
    def history(self) -> dict[str, list[float]]:
        '''Recorded diagnostics series.'''
        return self._history

    def _grid(self, values: np.ndarray) -> list:
        '''Downsample and round a grid for JSON output.'''
        return np.round(values[::self._stride, ::self._stride], 3).tolist()

    def recordState(self, state: GardenState) -> None:
        '''Append one tick to the diagnostics history.'''
        self._history['ticks'].append(state.tick)
        self._history['deviation'].append(round(state.deviation, 6))
        self._history['totalMass'].append(round(state.totalMass, 6))
        self._history['pool'].append(round(state.pool, 6))

    def addFrame(self, state: GardenState, heightField: HeightField) -> None:
        '''
        Record a garden frame and its diagnostics.

        Parameters:
        -----------
        state : GardenState
            Garden state after the tick
        heightField : HeightField
            Current height field
        '''
        frame = {
            'tick': state.tick,
            'angle': round(state.angle, 6),
            'pool': round(state.pool, 6),
            'heights': self._grid(heightField.heights),
        }
        self._frames.append(frame)
        self.recordState(state)

    def export(
        self,
        config: GardenConfig,
        heightField: HeightField,
        outputDir: str = 'zenGarden/SandSim/output',
        scenarioName: str = 'classic',
    ) -> str:
        '''
        Write all collected frames to a JSON file.

        Parameters:
        -----------
        config : GardenConfig
            Garden configuration for metadata
        heightField : HeightField
            Field of the run (geometry and target pattern)
        outputDir : str
            Output directory path
        scenarioName : str
            Scenario name for the filename

        Returns:
        --------
        str : Path to the exported JSON file
        '''
        os.makedirs(outputDir, exist_ok=True)

        timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
        filename = f'zenGarden_{scenarioName}_{timestamp}.json'
        filepath = os.path.join(outputDir, filename)

        mapper = heightField.mapper
        output = {
            'meta': {
                'type': 'zenGarden',
                'scenario': scenarioName,
                'nFrames': len(self._frames),
                'gridWidth': mapper.gridWidth,
                'gridHeight': mapper.gridHeight,
                'stride': self._stride,
                'resolution': mapper.resolution,
                'gardenRadius': mapper.gardenRadius,
                'toothCount': heightField.toothCount,
                'created': datetime.now().isoformat(),
            },
            'config': config.toDict(),
            'target': self._grid(heightField.target),
            'frames': self._frames,
            'history': self._history,
        }

        with open(filepath, 'w') as f:
            json.dump(output, f, indent=None, separators=(',', ':'))

        return filepath
