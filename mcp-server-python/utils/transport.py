"""
Submission transports for finished applications.

The form state machine only depends on ``SubmissionTransport``: an async
``submit_application(draft)`` that returns a receipt or raises. Two
implementations are provided:

- ``SimulatedSubmissionTransport``: waits a fixed delay and always succeeds.
- ``HttpSubmissionTransport``: posts the draft as multipart form data,
  including the resume bytes, using httpx.
"""

import asyncio
import logging
import uuid
from datetime import datetime, timezone
from typing import Optional, Protocol

import httpx
from pydantic import BaseModel

from models.draft import ApplicationDraft
from models.status import FormField

logger = logging.getLogger(__name__)


class SubmissionError(Exception):
    """Raised when the transport could not deliver an application."""

    pass


class SubmissionReceipt(BaseModel):
    """Acknowledgement returned by a transport after a successful submission."""

    reference: str
    submitted_at: str


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


class SubmissionTransport(Protocol):
    """Delivers a validated application draft."""

    async def submit_application(self, draft: ApplicationDraft) -> SubmissionReceipt:
        ...


class SimulatedSubmissionTransport:
    """Stand-in transport that sleeps for ``delay_seconds`` and always succeeds."""

    def __init__(self, delay_seconds: float = 2.0):
        self.delay_seconds = max(0.0, delay_seconds)

    async def submit_application(self, draft: ApplicationDraft) -> SubmissionReceipt:
        await asyncio.sleep(self.delay_seconds)
        return SubmissionReceipt(reference=f"sim_{uuid.uuid4().hex[:12]}", submitted_at=_utc_now_iso())


class HttpSubmissionTransport:
    """
    Transport that posts applications to an HTTP endpoint.

    Text fields are sent as form fields keyed by their camelCase names and
    the resume as a ``resume`` file part. A JSON response may carry a
    ``reference`` (or ``id``) that becomes the receipt reference.
    """

    def __init__(
        self,
        url: str,
        timeout_seconds: float = 30.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.url = url
        self.timeout_seconds = timeout_seconds
        self._client = client

    def build_multipart(self, draft: ApplicationDraft):
        """
        Build the form-data and file parts for ``draft``.

        Raises:
            SubmissionError: If the resume has no content to upload
        """
        resume = draft.resume
        if resume is None or resume.content is None:
            raise SubmissionError("Resume content is not available for upload")

        data = {
            FormField.FULL_NAME.value: draft.full_name,
            FormField.EMAIL.value: draft.email,
            FormField.PHONE_NUMBER.value: draft.phone_number,
            FormField.COVER_LETTER.value: draft.cover_letter,
        }
        files = {FormField.RESUME.value: (resume.name, resume.content, resume.mime_type)}
        return data, files

    async def submit_application(self, draft: ApplicationDraft) -> SubmissionReceipt:
        data, files = self.build_multipart(draft)

        try:
            if self._client is not None:
                response = await self._client.post(
                    self.url, data=data, files=files, timeout=self.timeout_seconds
                )
            else:
                async with httpx.AsyncClient(timeout=self.timeout_seconds) as client:
                    response = await client.post(self.url, data=data, files=files)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise SubmissionError(
                f"Submission endpoint returned HTTP {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            raise SubmissionError(f"Submission request failed: {type(e).__name__}") from e

        return SubmissionReceipt(
            reference=self._extract_reference(response),
            submitted_at=_utc_now_iso(),
        )

    @staticmethod
    def _extract_reference(response: httpx.Response) -> str:
        try:
            payload = response.json()
        except ValueError:
            payload = None
        if isinstance(payload, dict):
            for key in ("reference", "id"):
                if payload.get(key) is not None:
                    return str(payload[key])
        return f"http_{uuid.uuid4().hex[:12]}"


def build_transport(config) -> SubmissionTransport:
    """
    Build the transport selected by configuration.

    Returns:
        HttpSubmissionTransport when ``config.submit_url`` is set,
        otherwise SimulatedSubmissionTransport
    """
    if config.submit_url:
        logger.info("Using HTTP submission transport")
        return HttpSubmissionTransport(
            url=config.submit_url, timeout_seconds=config.submit_timeout_seconds
        )
    return SimulatedSubmissionTransport(delay_seconds=config.submit_delay_seconds)
