from datetime import date

from pydantic import BaseModel, ConfigDict

from booking.models.train import Train


class Ticket(BaseModel):
    model_config = ConfigDict(extra="ignore")

    ticket_id: str
    user_id: str
    source: str
    destination: str
    date_of_travel: date
    # snapshot of the train when the seat was booked
    train: Train

    def __str__(self) -> str:
        return (
            f"Ticket {self.ticket_id}: {self.source} -> {self.destination} "
            f"on {self.date_of_travel.isoformat()} (train {self.train.train_no or self.train.train_id})"
        )
