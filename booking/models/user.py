from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from booking.models.ticket import Ticket


class User(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str
    user_id: str
    # MAI es desa: només viu a la petició
    password: Optional[str] = Field(default=None, exclude=True, repr=False)
    hashed_password: Optional[str] = Field(default=None, repr=False)
    tickets_booked: List[Ticket] = Field(default_factory=list)

    def find_ticket(self, ticket_id: str) -> Optional[Ticket]:
        for ticket in self.tickets_booked:
            if ticket.ticket_id == ticket_id:
                return ticket
        return None
