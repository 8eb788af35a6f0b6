from fastapi import APIRouter, Depends, status

from libs.result import Error
from booksphere_auth.adapter.email import CapturedEmail
from booksphere_auth.api.error import ClientError
from booksphere_auth.app.services.email_delivery import EmailDelivery
from booksphere_auth.depends import get_email_delivery

router = APIRouter(prefix="/auth/dev/inbox")


@router.get("/{message_id}", response_model=CapturedEmail)
async def read_captured_email(
    message_id: str, delivery: EmailDelivery = Depends(get_email_delivery)
):
    """
    Preview a mail captured by the test inbox.

    Only mounted outside production while no SMTP credentials are configured.
    """
    message = delivery.get(message_id)
    if message is None:
        raise ClientError(
            Error("MESSAGE_NOT_FOUND", "Message not found"),
            status_code=status.HTTP_404_NOT_FOUND,
        )
    return message
