import os
import base64
import logging
from email.message import EmailMessage
from dotenv import load_dotenv
from google.oauth2.credentials import Credentials
from googleapiclient.discovery import build

load_dotenv(override=True)

logger = logging.getLogger(__name__)

APP_NAME = "GymFlow App"

def gmail_service():
    creds = Credentials(
        None,
        refresh_token=os.getenv("GOOGLE_REFRESH_TOKEN"),
        client_id=os.getenv("GOOGLE_CLIENT_ID"),
        client_secret=os.getenv("GOOGLE_CLIENT_SECRET"),
        token_uri="https://oauth2.googleapis.com/token"
    )
    return build("gmail", "v1", credentials=creds, cache_discovery=False)

def build_message(to: str, subject: str, body: str) -> EmailMessage:
    msg = EmailMessage()
    msg["To"] = to
    msg["Subject"] = subject
    msg["From"] = f'"{APP_NAME}" <{os.getenv("EMAIL")}>'
    msg.set_content(body)
    msg.add_alternative(body.replace("\n", "<br>"), subtype="html")
    return msg

def send_email(to: str, subject: str, body: str) -> dict:
    """Send a notification email, reporting the outcome instead of raising."""
    try:
        msg = build_message(to, subject, body)
        encoded_msg = base64.urlsafe_b64encode(msg.as_bytes()).decode()

        sent = gmail_service().users().messages().send(
            userId="me",
            body={"raw": encoded_msg}
        ).execute()

        logger.info("email sent to %s, message id %s", to, sent.get("id"))
        return {
            "success": True,
            "message": sent.get("id", "")
        }
    except Exception as e:
        logger.exception("error sending email to %s", to)
        return {
            "success": False,
            "message": str(e)
        }

def check_email_connection() -> dict:
    try:
        profile = gmail_service().users().getProfile(userId="me").execute()
        logger.info("gmail connection ok for %s", profile.get("emailAddress"))
        return {
            "success": True,
            "message": profile.get("emailAddress", "")
        }
    except Exception as e:
        logger.exception("gmail connection test failed")
        return {
            "success": False,
            "message": str(e)
        }
