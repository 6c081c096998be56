from functools import lru_cache

from fastapi import Depends

from booking.config import Settings
from booking.database import RecordStore
from booking.models.train import Train
from booking.models.user import User
from booking.services.booking_engine import BookingEngine
from booking.services.train_catalog import TrainCatalog
from booking.services.user_directory import UserDirectory


@lru_cache()
def get_settings() -> Settings:
    return Settings.from_env()


def build_engine(settings: Settings) -> BookingEngine:
    trains = TrainCatalog(RecordStore(settings.train_db_path, Train))
    users = UserDirectory(RecordStore(settings.user_db_path, User))
    return BookingEngine(trains, users)


# One engine per process: each store owns its file and its working copy.
@lru_cache()
def get_engine() -> BookingEngine:
    return build_engine(get_settings())


def get_trains(engine: BookingEngine = Depends(get_engine)) -> TrainCatalog:
    return engine.trains


def get_users(engine: BookingEngine = Depends(get_engine)) -> UserDirectory:
    return engine.users
