import json

import pytest

from dsviz.controller import Visualizer
from dsviz.engine import AVLEngine
from dsviz.scheduler import ManualScheduler
from dsviz.snapshots import parse_tree


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def frames():
    return []


@pytest.fixture
def visualizer(scheduler, frames):
    return Visualizer(scheduler=scheduler, on_frame=lambda kind, frame: frames.append((kind, frame)))


def run(visualizer, kind, operation, **inputs):
    """Perform one operation and let its animation finish."""
    accepted = visualizer.perform(kind, operation, inputs)
    visualizer.scheduler.run_until_idle()
    return accepted


def avl_snapshot(keys):
    engine = AVLEngine()
    response = json.loads(engine.init())
    for key in keys:
        response = json.loads(engine.insert(key))
    return parse_tree(response["snapshot"])
