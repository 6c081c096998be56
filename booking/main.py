# booking/main.py

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from booking.dependencies import get_settings
from booking.logging_config import get_logger, setup_logging
from booking.reserves.router import router as reserves_router
from booking.users.router import router as users_router

settings = get_settings()
setup_logging(settings.log_level)
logger = get_logger(__name__)

app = FastAPI(title="Train ticket booking")

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.allowed_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(users_router)
app.include_router(reserves_router)


@app.get("/")
def read_root():
    return {"message": "Train ticket booking API"}


logger.info("Trains file: %s, users file: %s", settings.train_db_path, settings.user_db_path)
