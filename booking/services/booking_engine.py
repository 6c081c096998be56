import logging
import uuid
from datetime import date
from typing import List, Optional

from booking.errors import InvalidArgument
from booking.logging_config import get_logger
from booking.models.ticket import Ticket
from booking.models.train import Train
from booking.models.user import User
from booking.services.train_catalog import TrainCatalog
from booking.services.user_directory import UserDirectory


class BookingEngine:
    """
    Seat reservation on top of the train catalog and the user directory.

    Booking a seat is a check-then-set on the catalog's grid: it runs under
    the catalog lock so two callers can never both see the same cell free.
    """

    def __init__(self, trains: TrainCatalog, users: UserDirectory, logger: Optional[logging.Logger] = None):
        self.trains = trains
        self.users = users
        self._logger = logger or get_logger(__name__)

    def list_seats(self, train: Train) -> List[List[int]]:
        if train is None:
            raise InvalidArgument("Train object cannot be null.")
        current = self.trains.find_by_id(train.train_id) or train
        return [list(row) for row in current.seats]

    def book_seat(self, train: Train, row: int, col: int) -> bool:
        if train is None:
            raise InvalidArgument("Train object cannot be null.")

        with self.trains.lock:
            current = self.trains.find_by_id(train.train_id) or train.model_copy(deep=True)
            seats = current.seats
            if row < 0 or row >= len(seats) or col < 0 or col >= len(seats[row]):
                raise InvalidArgument(f"Invalid row or seat index ({row}, {col}) for train {train.train_id}.")
            if seats[row][col] != 0:
                self._logger.info(
                    "Seat (%d, %d) on train %s is already booked",
                    row,
                    col,
                    train.train_id,
                    extra={"event": "seat_taken", "train_id": train.train_id},
                )
                return False
            seats[row][col] = 1
            self.trains.update(current)

        train.seats = [list(r) for r in current.seats]
        self._logger.info(
            "Seat (%d, %d) booked on train %s", row, col, train.train_id, extra={"event": "seat_booked", "train_id": train.train_id}
        )
        return True

    def reserve(
        self,
        user: User,
        train: Train,
        row: int,
        col: int,
        source: str,
        destination: str,
        date_of_travel: date,
    ) -> Optional[Ticket]:
        """
        Book a seat and hand the user a ticket for it. Returns None when the
        seat is already taken.
        """
        if user is None:
            raise InvalidArgument("User object must be provided to reserve a seat.")
        if train is None:
            raise InvalidArgument("Train object cannot be null.")
        if not train.serves(source, destination):
            raise InvalidArgument(f"Train {train.train_id} does not run from {source} to {destination}.")

        with self.users.lock, self.trains.lock:
            owner = self.users.find_by_id(user.user_id)
            if owner is None:
                raise InvalidArgument(f"Cannot reserve a seat for unknown user {user.user_id}.")
            if not self.book_seat(train, row, col):
                return None

            ticket = Ticket(
                ticket_id=str(uuid.uuid4()),
                user_id=owner.user_id,
                source=source,
                destination=destination,
                date_of_travel=date_of_travel,
                train=train.model_copy(deep=True),
            )
            owner.tickets_booked.append(ticket)
            self.users.update(owner)

        user.tickets_booked = [t.model_copy(deep=True) for t in owner.tickets_booked]
        self._logger.info(
            "Ticket %s issued to user %s", ticket.ticket_id, owner.user_id, extra={"event": "ticket_issued", "ticket_id": ticket.ticket_id}
        )
        return ticket

    def cancel_booking(self, user: User, ticket_id: str) -> bool:
        if user is None:
            raise InvalidArgument("User object must be provided to cancel a booking.")
        if not ticket_id:
            raise InvalidArgument("Ticket ID cannot be null or empty.")

        with self.users.lock:
            owner = self.users.find_by_id(user.user_id)
            ticket = owner.find_ticket(ticket_id) if owner is not None else None
            if ticket is None:
                self._logger.warning(
                    "No ticket found with ID %s for user %s",
                    ticket_id,
                    user.user_id,
                    extra={"event": "ticket_not_found", "ticket_id": ticket_id},
                )
                return False
            owner.tickets_booked = [t for t in owner.tickets_booked if t is not ticket]
            self.users.update(owner)

        user.tickets_booked = [t.model_copy(deep=True) for t in owner.tickets_booked]
        self._logger.info("Ticket with ID %s has been canceled.", ticket_id, extra={"event": "ticket_cancelled", "ticket_id": ticket_id})
        return True
