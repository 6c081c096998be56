from datetime import date

from pydantic import BaseModel, ConfigDict

from booking.models.ticket import Ticket
from booking.schemas.user import LoginRequest


class ReserveRequest(LoginRequest):
    train_id: str
    row: int
    seat: int
    source: str
    destination: str
    date_of_travel: date

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "joan",
                "password": "una-contrasenya-llarga",
                "train_id": "bacs1234",
                "row": 0,
                "seat": 3,
                "source": "Bangalore",
                "destination": "Delhi",
                "date_of_travel": "2025-04-20",
            }
        }
    )


class TicketResponse(BaseModel):
    ticket_id: str
    user_id: str
    source: str
    destination: str
    date_of_travel: date
    train_id: str
    train_no: str

    @classmethod
    def from_ticket(cls, ticket: Ticket) -> "TicketResponse":
        return cls(
            ticket_id=ticket.ticket_id,
            user_id=ticket.user_id,
            source=ticket.source,
            destination=ticket.destination,
            date_of_travel=ticket.date_of_travel,
            train_id=ticket.train.train_id,
            train_no=ticket.train.train_no,
        )


class CancelResponse(BaseModel):
    ticket_id: str
    cancelled: bool
