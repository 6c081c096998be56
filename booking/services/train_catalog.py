import logging
from typing import Dict, List, Optional, Tuple

from booking.database import RecordStore
from booking.errors import InvalidArgument, NotFound
from booking.logging_config import get_logger
from booking.models.train import Train


class TrainCatalog:
    """
    Trains loaded once from a RecordStore and written back whole on every
    change. Callers only ever receive copies of the working list.
    """

    def __init__(self, store: RecordStore[Train], logger: Optional[logging.Logger] = None):
        self._store = store
        self._logger = logger or get_logger(__name__)
        # train id -> stations already reported as ambiguous
        self._flagged: Dict[str, Tuple[str, ...]] = {}
        self._trains: List[Train] = store.load()
        for train in self._trains:
            self._flag_duplicate_stations(train)

    @property
    def lock(self):
        return self._store.lock

    def all(self) -> List[Train]:
        with self.lock:
            return [train.model_copy(deep=True) for train in self._trains]

    def find_by_id(self, train_id: str) -> Optional[Train]:
        with self.lock:
            index = self._index_of(train_id)
            return self._trains[index].model_copy(deep=True) if index != -1 else None

    def search(self, source: str, destination: str) -> List[Train]:
        if not source or not source.strip() or not destination or not destination.strip():
            raise InvalidArgument("Source and destination cannot be empty.")

        with self.lock:
            matching = []
            for train in self._trains:
                if train.serves(source, destination):
                    matching.append(train.model_copy(deep=True))

        if not matching:
            raise NotFound(f"No trains found for source: {source} and destination: {destination}")
        return matching

    def add(self, train: Train) -> None:
        self._validate(train, "add")
        with self.lock:
            if self._index_of(train.train_id) != -1:
                self.update(train)
                return
            self._commit(self._trains + [train.model_copy(deep=True)], train)
        self._logger.info("Train added: %s", train.train_id, extra={"event": "train_added", "train_id": train.train_id})

    def update(self, train: Train) -> None:
        self._validate(train, "update")
        with self.lock:
            index = self._index_of(train.train_id)
            if index == -1:
                self._commit(self._trains + [train.model_copy(deep=True)], train)
                self._logger.warning(
                    "Train with id %s not found. Added as new.",
                    train.train_id,
                    extra={"event": "train_upserted", "train_id": train.train_id},
                )
                return
            trains = list(self._trains)
            trains[index] = train.model_copy(deep=True)
            self._commit(trains, train)
        self._logger.info("Train updated: %s", train.train_id, extra={"event": "train_updated", "train_id": train.train_id})

    def _commit(self, trains: List[Train], changed: Train) -> None:
        # the working copy only changes once the file has been written
        self._store.save(trains)
        self._trains = trains
        self._flag_duplicate_stations(changed)

    def _flag_duplicate_stations(self, train: Train) -> None:
        # route is ambiguous; search uses the first occurrence of each name
        duplicates = train.duplicate_stations()
        key = train.train_id.lower()
        if not duplicates:
            self._flagged.pop(key, None)
            return
        if self._flagged.get(key) == tuple(train.stations):
            return
        self._flagged[key] = tuple(train.stations)
        self._logger.warning(
            "Train %s lists station(s) %s more than once",
            train.train_id,
            ", ".join(duplicates),
            extra={"event": "duplicate_stations", "train_id": train.train_id},
        )

    def _index_of(self, train_id: str) -> int:
        wanted = train_id.lower()
        for index, train in enumerate(self._trains):
            if train.train_id.lower() == wanted:
                return index
        return -1

    @staticmethod
    def _validate(train: Optional[Train], operation: str) -> None:
        if train is None:
            raise InvalidArgument(f"Cannot {operation} train: no train given.")
        if not train.train_id or not train.train_id.strip():
            raise InvalidArgument(f"Cannot {operation} train {train.train_no!r}: train_id is empty.")
