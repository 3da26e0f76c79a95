from fastapi import APIRouter

from akira.models import MessageResponse

system_router = APIRouter()

PING_MESSAGE = "Pong! You've pinged Akira. This endpoint will be used to get stats for a status page in the future."
ROOT_MESSAGE = "You've bumped into Akira. You probably shouldn't be here."


@system_router.get("/ping", response_model=MessageResponse)
async def ping():
    return MessageResponse(message=PING_MESSAGE, error=False)


@system_router.get("/", response_model=MessageResponse)
async def root():
    return MessageResponse(message=ROOT_MESSAGE, error=False)
