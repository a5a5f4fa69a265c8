"""Confirmation emails for attendees."""

from email.mime.image import MIMEImage

import structlog
from django.conf import settings
from django.core.mail import EmailMultiAlternatives, get_connection
from django.template.loader import render_to_string

from accounts.models import OfrendaUser
from events.models import Event

from .ticket_visual import TicketVisual

logger = structlog.get_logger(__name__)

QR_CONTENT_ID = "ticket-qr"


def send_attendee_confirmation(
    *,
    user: OfrendaUser,
    event: Event,
    ticket: TicketVisual,
    calendar_link: str | None = None,
) -> None:
    """Email the attendee their QR ticket.

    The SMTP connection is bounded by ``EMAIL_TIMEOUT``. Any failure, timeouts
    included, propagates to the caller.
    """
    context = {
        "attendee_name": user.display_name,
        "event": event,
        "ticket_token": ticket.token,
        "qr_content_id": QR_CONTENT_ID,
        "calendar_link": calendar_link,
    }
    subject = f"Registration confirmed: {event.title}"
    body = render_to_string("events/emails/attendee_confirmation.txt", context=context)
    html_body = render_to_string("events/emails/attendee_confirmation.html", context=context)

    connection = get_connection(timeout=settings.EMAIL_TIMEOUT)
    email_msg = EmailMultiAlternatives(
        subject=subject,
        body=body,
        from_email=settings.DEFAULT_FROM_EMAIL,
        to=[user.email],
        connection=connection,
    )
    email_msg.attach_alternative(html_body, "text/html")
    email_msg.mixed_subtype = "related"

    qr_image = MIMEImage(ticket.png, _subtype="png")
    qr_image.add_header("Content-ID", f"<{QR_CONTENT_ID}>")
    qr_image.add_header("Content-Disposition", "inline", filename="ticket.png")
    email_msg.attach(qr_image)

    email_msg.send(fail_silently=False)
    logger.info("attendee_confirmation_sent", event_id=str(event.id), user_id=str(user.id))
