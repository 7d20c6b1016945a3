import pytest

from vehicles.pen_robot import VehicleConfig, create


@pytest.fixture
def config():
    return VehicleConfig(wheel_track=8.5, wheel_offset=12.0, speed=10.0)


@pytest.fixture
def robot(config):
    return create(config)
