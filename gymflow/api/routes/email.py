from fastapi import APIRouter
from pydantic import BaseModel
import asyncio

from gymflow.api.middleware.email import send_email, check_email_connection
from gymflow.api.middleware.misc import *

router = APIRouter(prefix="/email")

class EmailSend(BaseModel):
    to: str = email_field
    subject: str = name_field
    body: str

@router.post("/send")
async def email_send(req: EmailSend):
    return await asyncio.to_thread(send_email, req.to, req.subject, req.body)

@router.get("/test")
async def email_test():
    return await asyncio.to_thread(check_email_connection)
