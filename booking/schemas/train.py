from typing import Dict, List

from pydantic import BaseModel

from booking.models.train import Train


class TrainResponse(BaseModel):
    train_id: str
    train_no: str
    stations: List[str]
    station_times: Dict[str, str]
    free_seats: int

    @classmethod
    def from_train(cls, train: Train) -> "TrainResponse":
        return cls(
            train_id=train.train_id,
            train_no=train.train_no,
            stations=train.stations,
            station_times=train.station_times,
            free_seats=sum(row.count(0) for row in train.seats),
        )


class SeatMapResponse(BaseModel):
    train_id: str
    seats: List[List[int]]
