"""
Email service using Resend
Docs: https://resend.com/docs

Used for conference notifications only. Sending is best-effort: callers get
False back and carry on when the service is not configured or fails.
"""
import os
import logging
from html import escape
from typing import List, Optional

import resend

logger = logging.getLogger(__name__)

DEFAULT_FROM_EMAIL = "WNY AI <info@wnyai.org>"


def _get_resend_api_key() -> Optional[str]:
    return os.getenv("RESEND_API_KEY")


def _get_default_reply_to() -> Optional[str]:
    """Default Reply-To for outgoing mail"""
    return os.getenv("RESEND_REPLY_TO") or os.getenv("DEFAULT_NOTIFICATION_EMAIL")


def _get_from_email() -> str:
    return os.getenv("RESEND_FROM_EMAIL", DEFAULT_FROM_EMAIL)


def get_organizer_emails() -> List[str]:
    """Addresses that receive sponsorship inquiries (comma separated)."""
    raw = os.getenv("DEFAULT_NOTIFICATION_EMAIL") or os.getenv("RESEND_REPLY_TO") or ""
    return [email.strip() for email in raw.split(",") if email.strip()]


def _is_email_service_configured() -> bool:
    if not _get_resend_api_key():
        logger.warning("RESEND_API_KEY not set, email disabled")
        return False
    return True


def get_email_config_info() -> dict:
    return {
        "api_key_configured": bool(_get_resend_api_key()),
        "from_email": _get_from_email(),
        "organizer_emails": len(get_organizer_emails()),
        "configured": _is_email_service_configured(),
    }


def _send(params: dict) -> bool:
    resend.api_key = _get_resend_api_key()
    reply_to = _get_default_reply_to()
    if reply_to and "reply_to" not in params:
        params["reply_to"] = [reply_to]
    response = resend.Emails.send(params)
    logger.info(f"Email sent to {len(params['to'])} recipient(s). ID: {response.get('id', 'N/A')}")
    return True


async def send_registration_confirmation_email(name: str, email: str, conference_name: str) -> bool:
    """
    Confirms a conference registration to the attendee.

    Returns:
        bool: True if the email was sent
    """
    if not _is_email_service_configured():
        logger.warning("Email service not configured, skipping registration confirmation")
        return False

    try:
        safe_name = escape(name.strip() or "there")
        html_content = f"""
        <!DOCTYPE html>
        <html>
        <head><meta charset="utf-8"></head>
        <body style="font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif; color: #333; max-width: 600px; margin: 0 auto; padding: 20px;">
            <h1 style="font-size: 22px;">You're registered! 🎉</h1>
            <p>Hi <strong>{safe_name}</strong>,</p>
            <p>Thank you for registering for the <strong>{escape(conference_name)}</strong>.
            We will send you confirmation details shortly.</p>
            <p style="color: #6b7280; font-size: 12px;">WNY AI · Buffalo, NY</p>
        </body>
        </html>
        """
        text_content = (
            f"Hi {name.strip() or 'there'},\n\n"
            f"Thank you for registering for the {conference_name}. "
            "We will send you confirmation details shortly.\n\n---\nWNY AI - Buffalo, NY\n"
        )
        return _send({
            "from": _get_from_email(),
            "to": [email],
            "subject": f"Your {conference_name} registration",
            "html": html_content,
            "text": text_content,
        })
    except Exception as e:
        logger.error(f"Error sending registration confirmation: {str(e)}", exc_info=True)
        return False


async def send_sponsor_inquiry_email(company_email: str, tier: Optional[str], organizer_emails: List[str]) -> bool:
    """
    Forwards a sponsorship inquiry to the organisers, with the company as Reply-To.
    """
    if not _is_email_service_configured():
        logger.warning("Email service not configured, skipping sponsor inquiry notification")
        return False

    if not organizer_emails:
        logger.warning("No organizer emails configured for sponsor inquiries")
        return False

    try:
        tier_text = tier or "Not specified"
        html_content = f"""
        <!DOCTYPE html>
        <html>
        <head><meta charset="utf-8"></head>
        <body style="font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif; color: #333;">
            <h2>New sponsorship inquiry</h2>
            <p><strong>Company email:</strong> {escape(company_email)}</p>
            <p><strong>Tier of interest:</strong> {escape(tier_text)}</p>
            <p>Reply to this email to send the sponsorship package.</p>
        </body>
        </html>
        """
        return _send({
            "from": _get_from_email(),
            "to": organizer_emails,
            "subject": f"💼 Sponsorship inquiry: {company_email}",
            "html": html_content,
            "reply_to": [company_email],
        })
    except Exception as e:
        logger.error(f"Error sending sponsor inquiry email: {str(e)}", exc_info=True)
        return False
