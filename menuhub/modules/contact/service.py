import asyncio
import logging
from datetime import datetime, timezone
from html import escape

import httpx
from fastapi import HTTPException
from supabase import Client

from menuhub.config import settings
from menuhub.modules.contact.schemas import ContactFormRequest, ContactFormResponse

logger = logging.getLogger(__name__)


def render_notification(form: ContactFormRequest, submitted_at: datetime) -> str:
    features = ", ".join(form.features) or "None specified"
    rows = [
        ("Name", form.name),
        ("Email", form.email),
        ("Phone", form.phone or "Not provided"),
        ("Restaurant Name", form.restaurant_name),
        ("Budget", form.budget),
        ("Number of Tables", form.number_of_tables),
        ("Current Menu Type", form.current_menu_type),
        ("Desired Features", features),
        ("Additional Information", form.additional_info or "None provided"),
    ]
    body = "\n".join(f"<p><strong>{label}:</strong> {escape(str(value))}</p>" for label, value in rows)
    return (
        "<h2>New Contact Form Submission</h2>\n"
        f"{body}\n"
        "<hr>\n"
        f"<p><em>Submitted at: {submitted_at.strftime('%Y-%m-%d %H:%M:%S %Z')}</em></p>"
    )


class ContactService:
    def __init__(self, supabase: Client, http_client: httpx.AsyncClient):
        self.supabase = supabase
        self.http = http_client

    def _save_submission(self, form: ContactFormRequest) -> str:
        try:
            result = self.supabase.table("contact_submissions").insert({
                "name": form.name,
                "email": form.email,
                "phone": form.phone,
                "restaurant_name": form.restaurant_name,
                "budget": form.budget,
                "number_of_tables": form.number_of_tables,
                "current_menu_type": form.current_menu_type,
                "features": form.features,
                "additional_info": form.additional_info,
            }).execute()
        except Exception as e:
            logger.error(f"Database insert error: {e}")
            raise HTTPException(status_code=500, detail="Failed to save contact submission")

        if not result.data:
            raise HTTPException(status_code=500, detail="Failed to save contact submission")
        return str(result.data[0]["id"])

    def _company_contact_email(self) -> str:
        try:
            result = self.supabase.table("company_settings")\
                .select("contact_email")\
                .limit(1)\
                .execute()
        except Exception as e:
            logger.error(f"Error fetching company settings: {e}")
            raise HTTPException(status_code=500, detail="Company contact email not configured")

        rows = result.data or []
        if not rows or not rows[0].get("contact_email"):
            raise HTTPException(status_code=500, detail="Company contact email not configured")
        return rows[0]["contact_email"]

    async def _send_notification(self, to_email: str, form: ContactFormRequest) -> None:
        if not settings.resend_api_key:
            logger.warning("Resend is not configured; skipping contact notification email.")
            return

        payload = {
            "from": settings.contact_from_email,
            "to": [to_email],
            "subject": f"New Contact Form Submission from {form.name}",
            "html": render_notification(form, datetime.now(timezone.utc)),
            "reply_to": form.email,
        }
        headers = {
            "Authorization": f"Bearer {settings.resend_api_key}",
            "Content-Type": "application/json",
        }
        response = await self.http.post(settings.resend_api_url, json=payload, headers=headers)
        response.raise_for_status()

    async def submit(self, form: ContactFormRequest) -> ContactFormResponse:
        """Store the lead, then announce it to the company inbox"""
        # The supabase client is synchronous; keep its round trips off the event loop
        submission_id = await asyncio.to_thread(self._save_submission, form)
        logger.info(f"Contact submission saved: {submission_id}")

        to_email = await asyncio.to_thread(self._company_contact_email)
        try:
            await self._send_notification(to_email, form)
        except httpx.HTTPError as e:
            # The lead is already stored; a failed e-mail must not make the visitor resubmit it
            logger.error(f"Contact notification for {submission_id} failed: {e}")

        return ContactFormResponse(
            message="Contact form submitted successfully",
            submission_id=submission_id
        )
