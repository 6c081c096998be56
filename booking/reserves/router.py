# booking/reserves/router.py

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query

from booking.dependencies import get_engine, get_trains, get_users
from booking.errors import InvalidArgument, NotFound, StoreError
from booking.models.train import Train
from booking.schemas.ticket import CancelResponse, ReserveRequest, TicketResponse
from booking.schemas.train import SeatMapResponse, TrainResponse
from booking.schemas.user import LoginRequest
from booking.services.booking_engine import BookingEngine
from booking.services.train_catalog import TrainCatalog
from booking.services.user_directory import UserDirectory

router = APIRouter(prefix="/api", tags=["reserves"])


def _require_train(trains: TrainCatalog, train_id: str) -> Train:
    train = trains.find_by_id(train_id)
    if train is None:
        raise HTTPException(status_code=404, detail=f"Train {train_id} not found")
    return train


# --- Trains ---

@router.get("/trains", response_model=List[TrainResponse])
def list_trains(trains: TrainCatalog = Depends(get_trains)):
    return [TrainResponse.from_train(train) for train in trains.all()]


@router.get("/trains/search", response_model=List[TrainResponse])
def search_trains(
    source: str = Query(""),
    destination: str = Query(""),
    trains: TrainCatalog = Depends(get_trains),
):
    try:
        found = trains.search(source, destination)
    except InvalidArgument as e:
        raise HTTPException(status_code=400, detail=str(e))
    except NotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    return [TrainResponse.from_train(train) for train in found]


@router.post("/trains", response_model=TrainResponse, status_code=201)
def add_train(train: Train, trains: TrainCatalog = Depends(get_trains)):
    try:
        trains.add(train)
    except InvalidArgument as e:
        raise HTTPException(status_code=400, detail=str(e))
    except StoreError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return TrainResponse.from_train(train)


@router.get("/trains/{train_id}/seats", response_model=SeatMapResponse)
def get_seats(train_id: str, engine: BookingEngine = Depends(get_engine)):
    train = _require_train(engine.trains, train_id)
    return SeatMapResponse(train_id=train.train_id, seats=engine.list_seats(train))


# --- Reserves ---

@router.post("/reserves", response_model=TicketResponse, status_code=201)
def create_reserve(request: ReserveRequest, engine: BookingEngine = Depends(get_engine)):
    user = engine.users.authenticate(request.to_candidate())
    if user is None:
        raise HTTPException(status_code=401, detail="Credencials incorrectes")
    train = _require_train(engine.trains, request.train_id)

    try:
        ticket = engine.reserve(
            user, train, request.row, request.seat, request.source, request.destination, request.date_of_travel
        )
    except InvalidArgument as e:
        raise HTTPException(status_code=400, detail=str(e))
    except StoreError as e:
        raise HTTPException(status_code=500, detail=str(e))

    if ticket is None:
        raise HTTPException(status_code=409, detail=f"Seat ({request.row}, {request.seat}) on train {request.train_id} is already booked")
    return TicketResponse.from_ticket(ticket)


@router.post("/reserves/{ticket_id}/cancel", response_model=CancelResponse)
def cancel_reserve(
    ticket_id: str,
    request: LoginRequest,
    engine: BookingEngine = Depends(get_engine),
    users: UserDirectory = Depends(get_users),
):
    user = users.authenticate(request.to_candidate())
    if user is None:
        raise HTTPException(status_code=401, detail="Credencials incorrectes")
    try:
        cancelled = engine.cancel_booking(user, ticket_id)
    except StoreError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return CancelResponse(ticket_id=ticket_id, cancelled=cancelled)
