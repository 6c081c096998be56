import logging

import pytest
from argon2 import PasswordHasher

from booking.auth.argon import PasswordService
from booking.database import RecordStore
from booking.models.train import Train
from booking.models.user import User
from booking.services.booking_engine import BookingEngine
from booking.services.train_catalog import TrainCatalog
from booking.services.user_directory import UserDirectory


@pytest.fixture
def passwords():
    # cheap parameters; the default cost makes the suite crawl
    return PasswordService(PasswordHasher(time_cost=1, memory_cost=8, parallelism=1))


@pytest.fixture
def logger():
    return logging.getLogger("booking.tests")


@pytest.fixture
def train_path(tmp_path):
    return str(tmp_path / "localDb" / "trains.json")


@pytest.fixture
def user_path(tmp_path):
    return str(tmp_path / "localDb" / "users.json")


def _make_train(train_id="T1", stations=("A", "B", "C"), seats=None):
    return Train(
        train_id=train_id,
        train_no=f"{train_id}-no",
        stations=list(stations),
        station_times={station: f"0{i}:00" for i, station in enumerate(stations)},
        seats=seats if seats is not None else [[0, 0], [0, 0]],
    )


@pytest.fixture
def make_train():
    return _make_train


@pytest.fixture
def catalog(train_path, logger):
    return TrainCatalog(RecordStore(train_path, Train, logger), logger)


@pytest.fixture
def directory(user_path, passwords, logger):
    return UserDirectory(RecordStore(user_path, User, logger), passwords, logger)


@pytest.fixture
def engine(catalog, directory, logger):
    return BookingEngine(catalog, directory, logger)


@pytest.fixture
def alice(directory):
    user = User(name="alice", user_id="u-alice", password="s3cret")
    assert directory.sign_up(user)
    return directory.find_by_id("u-alice")
