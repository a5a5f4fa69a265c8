"""QR code rendering for tickets."""

import typing as t
from io import BytesIO

import qrcode
from django.conf import settings


class TicketVisual(t.NamedTuple):
    token: str
    png: bytes


def render_ticket_qr(token: str) -> TicketVisual:
    """Render the ticket token as a scannable PNG QR code."""
    qr = qrcode.QRCode(
        version=None,
        error_correction=qrcode.constants.ERROR_CORRECT_M,
        box_size=settings.TICKET_QR_BOX_SIZE,
        border=1,
    )
    qr.add_data(token)
    qr.make(fit=True)
    img = qr.make_image(fill_color="black", back_color="white")

    buffered = BytesIO()
    img.save(buffered, "PNG")
    return TicketVisual(token=token, png=buffered.getvalue())
