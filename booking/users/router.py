import uuid
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from booking.dependencies import get_users
from booking.errors import InvalidArgument, StoreError
from booking.models.user import User
from booking.schemas.ticket import TicketResponse
from booking.schemas.user import LoginRequest, RegisterRequest, UserResponse
from booking.services.user_directory import UserDirectory

router = APIRouter(prefix="/api", tags=["users"])


@router.post("/register", response_model=UserResponse, status_code=201)
def register(request: RegisterRequest, users: UserDirectory = Depends(get_users)):
    new_user = User(name=request.name, user_id=str(uuid.uuid4()), password=request.password)
    try:
        created = users.sign_up(new_user)
    except InvalidArgument as e:
        raise HTTPException(400, str(e))
    except StoreError as e:
        raise HTTPException(500, str(e))
    if not created:
        raise HTTPException(400, "Usuari ja enregistrat.")
    return UserResponse.from_user(new_user)


@router.post("/login", response_model=UserResponse)
def login(request: LoginRequest, users: UserDirectory = Depends(get_users)):
    user = users.authenticate(request.to_candidate())
    if user is None:
        # same answer for unknown name and wrong password
        raise HTTPException(401, "Credencials incorrectes")
    return UserResponse.from_user(user)


@router.post("/bookings", response_model=List[TicketResponse])
def fetch_bookings(request: LoginRequest, users: UserDirectory = Depends(get_users)):
    tickets = users.fetch_bookings(request.to_candidate())
    if tickets is None:
        raise HTTPException(401, "Credencials incorrectes")
    return [TicketResponse.from_ticket(ticket) for ticket in tickets]
