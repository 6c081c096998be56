from pydantic import BaseModel, ConfigDict, constr

from booking.models.user import User


class LoginRequest(BaseModel):
    name: str
    password: str

    def to_candidate(self) -> User:
        # user_id is unknown at login; lookup goes by name
        return User(name=self.name, user_id="", password=self.password)


class RegisterRequest(BaseModel):
    name: constr(strip_whitespace=True, min_length=1)
    password: constr(min_length=1)


class UserResponse(BaseModel):
    user_id: str
    name: str
    tickets_booked: int

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"user_id": "2d8f0c3e-7d0b-4f3a-9a57-0f3f5c1d6b1e", "name": "joan", "tickets_booked": 2}
        }
    )

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        return cls(user_id=user.user_id, name=user.name, tickets_booked=len(user.tickets_booked))
