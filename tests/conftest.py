"""Shared fixtures: a synthetic catalog, recording sinks and fresh device state."""

import pytest

from galaxy_devices.base import CommandSink, DeviceCommunicationError
from galaxy_devices.catalog import SpeakerCatalog, parse_starting_points_document
from galaxy_devices.handlers.dry_run import DryRunHandler
from galaxy_devices.state import DeviceState

# ============================================================================
# Catalog
# ============================================================================

STARTING_POINTS_DOC = {
    "startingPoint": {
        "LINA": [
            {
                "title": "LINA Flown",
                "controlPoints": [
                    "/processing/output/{}/gain='-2'",
                    "/processing/output/{ch}/mute='false'",
                    "   ",
                ],
            },
            {"title": "Broken", "controlPoints": []},
            {
                "title": "LINA Ground Stack",
                "controlPoints": ["/processing/output/{CH}/polarity_reversal='true'"],
            },
        ],
        "LEO-M": [
            {"title": "LEO Main", "controlPoints": ["/processing/output/{ch}/gain='0'"]},
        ],
        "1100-LFC": [
            {"title": "Omni", "controlPoints": ["/processing/output/{ch}/gain='0'"]},
            {
                "title": "Cardioid Rear",
                "controlPoints": [
                    "/processing/output/{ch}/polarity_reversal='true'",
                    "/processing/output/{ch}/gain='-1'",
                ],
            },
        ],
    },
    "speakerCategories": {
        "LINA": "line-array",
        "LEO": "line-array",
        "LYON": "line-array",
        "M1D": "line-array",
        "1100_LFC": "subwoofer",
    },
    "mixedArrayCompensation": {
        "MINA": {"delayMs": 1.25},
    },
    "mixedArrayCombinations": {
        "LINA": {"secondary": "LEO", "primaryDelayMs": 2.5, "secondaryDelayMs": 0},
        "LYON": {"secondary": "LEOPARD", "primaryDelayMs": 0, "secondaryDelayMs": 1.0},
    },
}


@pytest.fixture
def starting_points_doc():
    return STARTING_POINTS_DOC


@pytest.fixture
def catalog():
    """Built-in integration table plus the synthetic starting-points document."""
    return SpeakerCatalog.build(source=parse_starting_points_document(STARTING_POINTS_DOC))


@pytest.fixture
def empty_catalog():
    return SpeakerCatalog.build()


# ============================================================================
# Sinks and state
# ============================================================================

class FailingSink(CommandSink):
    """Accepts `fail_after` commands, then raises like a dropped socket."""

    def __init__(self, fail_after=0):
        super().__init__()
        self.fail_after = fail_after
        self.sent = []

    @property
    def name(self):
        return "Failing"

    @property
    def is_connected(self):
        return True

    def connect(self):
        pass

    def disconnect(self):
        pass

    def send_command(self, line):
        if len(self.sent) >= self.fail_after:
            raise DeviceCommunicationError("connection reset")
        self.sent.append(line)


@pytest.fixture
def sink():
    """Connected dry-run sink that records every command."""
    handler = DryRunHandler()
    handler.connect()
    yield handler
    handler.disconnect()


@pytest.fixture
def failing_sink():
    return FailingSink(fail_after=3)


@pytest.fixture
def state():
    return DeviceState(num_outputs=16)


@pytest.fixture
def failing_sink_factory():
    return FailingSink
