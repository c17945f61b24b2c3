"""Pytest configuration and fixtures for pathchart tests"""
import pytest
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from unfurl import PaneProcessor, RootKey


@pytest.fixture
def items_document():
    """Object holding one array of records"""
    return {"items": [{"a": 1, "b": 2}, {"a": 3, "b": 4}]}


@pytest.fixture
def scalar_array_document():
    """Array of scalars under a key"""
    return {"x": [1, 2, 3]}


@pytest.fixture
def two_root_document():
    """Two arrays of different lengths sharing field names"""
    return {
        "a": [{"name": f"a{i}", "value": i} for i in range(3)],
        "b": [{"name": f"b{i}", "value": i * 10} for i in range(5)],
    }


@pytest.fixture
def weather_document():
    """Realistic API response: metadata, nested arrays, nested objects"""
    return {
        "meta": {"source": "station-api", "units": "metric"},
        "data": {
            "stations": [
                {
                    "id": "ST-1",
                    "location": {"city": "Oslo", "coords": {"lat": 59.9, "lon": 10.7}},
                    "readings": [{"temp": 4.5}, {"temp": 5.0}],
                },
                {
                    "id": "ST-2",
                    "location": {"city": "Bergen", "coords": {"lat": 60.4, "lon": 5.3}},
                    "readings": [],
                },
            ],
            "alerts": [
                {"level": "yellow", "region": "West"},
            ],
        },
    }


@pytest.fixture
def top_level_array_document():
    """Document that is itself an array"""
    return [
        {"Parameter": "PM2.5", "AQI": 42},
        {"Parameter": "O3", "AQI": 31},
        {"Parameter": "NO2", "AQI": 17},
    ]


@pytest.fixture
def pane_config_factory():
    """Factory for stored pane records"""
    def _create_config(graph_type="bar", parameters=None, root_keys=None, **extra):
        config = {
            "graphType": graph_type,
            "parameters": parameters or [],
            "rootKeys": root_keys or [],
        }
        config.update(extra)
        return config
    return _create_config


@pytest.fixture
def processor_factory(pane_config_factory):
    """Factory to create PaneProcessor from pane settings"""
    def _create_processor(graph_type="bar", parameters=None, root_keys=None, **extra):
        config = pane_config_factory(graph_type, parameters, root_keys, **extra)
        return PaneProcessor(config)
    return _create_processor


@pytest.fixture
def root():
    """Shorthand for building root keys"""
    def _root(label, path=""):
        return RootKey(label=label, path=path)
    return _root
