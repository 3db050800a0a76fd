"""
Email service with provider abstraction.

Supports the Resend API (default) and a log-only provider for development.
Provider is selected via configuration.
"""

from __future__ import annotations

import hashlib
import uuid
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

import httpx
import structlog
from redis.exceptions import RedisError

from grantees.config import get_settings
from grantees.email.templates import welcome_email
from grantees.middleware.logging import email_fingerprint

if TYPE_CHECKING:
    from redis.asyncio import Redis

logger = structlog.get_logger()

# Template registry: name -> template function
_TEMPLATE_REGISTRY: dict[str, Any] = {
    "welcome": welcome_email,
}


class EmailDeliveryError(Exception):
    """The email could not be handed to the provider."""

    def __init__(self, message: str, data: Any = None) -> None:  # noqa: ANN401
        super().__init__(message)
        self.message = message
        self.data = data


class BaseEmailProvider(ABC):
    """Abstract base class for email delivery providers."""

    @abstractmethod
    async def send(
        self,
        to_email: str,
        subject: str,
        html_body: str,
        text_body: str,
    ) -> dict[str, Any]:
        """Send an email. Returns the provider response; raises EmailDeliveryError."""
        ...


class ResendProvider(BaseEmailProvider):
    """Send emails via Resend API."""

    def __init__(
        self,
        api_key: str,
        from_address: str,
        from_name: str,
        api_url: str = "https://api.resend.com/emails",
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.api_key = api_key
        self.from_address = from_address
        self.from_name = from_name
        self.api_url = api_url
        self._transport = transport

    async def send(
        self,
        to_email: str,
        subject: str,
        html_body: str,
        text_body: str,
    ) -> dict[str, Any]:
        """Send via Resend HTTP API."""
        if not self.api_key:
            msg = "RESEND_API_KEY is not configured"
            raise EmailDeliveryError(msg)

        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                response = await client.post(
                    self.api_url,
                    headers={
                        "Authorization": f"Bearer {self.api_key}",
                        "Content-Type": "application/json",
                    },
                    json={
                        "from": f"{self.from_name} <{self.from_address}>",
                        "to": [to_email],
                        "subject": subject,
                        "html": html_body,
                        "text": text_body,
                    },
                    timeout=10.0,
                )
        except httpx.HTTPError as e:
            logger.exception("email_send_failed", to=email_fingerprint(to_email), provider="resend")
            raise EmailDeliveryError(str(e) or "Failed to send email") from e

        try:
            data: dict[str, Any] = response.json()
        except ValueError:
            data = {}

        if response.is_error:
            logger.error(
                "email_send_failed",
                to=email_fingerprint(to_email),
                provider="resend",
                status=response.status_code,
                response=data,
            )
            raise EmailDeliveryError(data.get("message") or "Failed to send email", data=data)

        logger.info("email_sent", to=email_fingerprint(to_email), subject=subject, provider="resend", id=data.get("id"))
        return data


class LogProvider(BaseEmailProvider):
    """Development provider that logs emails instead of sending them."""

    async def send(
        self,
        to_email: str,
        subject: str,
        html_body: str,
        text_body: str,
    ) -> dict[str, Any]:
        message_id = f"log_{uuid.uuid4().hex}"
        logger.info("email_logged", to=email_fingerprint(to_email), subject=subject, id=message_id)
        return {"id": message_id}


def _create_provider() -> BaseEmailProvider:
    """Create email provider based on configuration."""
    settings = get_settings()
    provider_name = settings.email_provider.lower()

    if provider_name == "resend":
        return ResendProvider(
            api_key=settings.resend_api_key,
            from_address=settings.email_from_address,
            from_name=settings.email_from_name,
            api_url=settings.resend_api_url,
        )
    if provider_name == "log":
        return LogProvider()
    msg = f"Unsupported email provider: {provider_name}"
    raise ValueError(msg)


class EmailService:
    """
    High-level email service for Grantees.

    Handles per-recipient rate limiting and template rendering.
    """

    RATE_LIMIT_WINDOW = 3600

    def __init__(
        self,
        provider: BaseEmailProvider | None = None,
        redis: Redis | None = None,
        rate_limit_max: int | None = None,
    ) -> None:
        self.provider = provider or _create_provider()
        self._redis = redis
        self.rate_limit_max = rate_limit_max or get_settings().email_rate_limit_per_hour

    async def _check_rate_limit(self, email: str) -> bool:
        """Check if we can send another email to this address."""
        if self._redis is None:
            return True
        key = f"email_rate:{hashlib.sha256(email.lower().encode()).hexdigest()}"
        try:
            count = await self._redis.incr(key)
            if count == 1:
                await self._redis.expire(key, self.RATE_LIMIT_WINDOW)
        except RedisError:
            logger.warning("email_rate_limit_redis_unavailable", exc_info=True)
            return True
        return count <= self.rate_limit_max

    async def send_email(
        self,
        to: str,
        subject: str,
        html_body: str,
        text_body: str,
    ) -> dict[str, Any]:
        """
        Send an email with rate limiting.

        Raises:
            EmailDeliveryError: If rate limited or the provider failed.
        """
        if not await self._check_rate_limit(to):
            logger.warning("email_rate_limited", to=email_fingerprint(to), subject=subject)
            msg = "Too many emails sent to this address. Try again later."
            raise EmailDeliveryError(msg)
        return await self.provider.send(to, subject, html_body, text_body)

    async def send_template(
        self,
        to: str,
        template_name: str,
        context: dict[str, str | None],
    ) -> dict[str, Any]:
        """
        Render a template and send.

        Raises:
            ValueError: If the template name is unknown.
            EmailDeliveryError: If sending failed.
        """
        template_func = _TEMPLATE_REGISTRY.get(template_name)
        if template_func is None:
            msg = f"Unknown template: {template_name}"
            raise ValueError(msg)

        if template_name == "welcome":
            settings = get_settings()
            subject, html_body, text_body = template_func(
                context.get("display_name"),
                context.get("dashboard_url") or f"{settings.frontend_base_url}/dashboard",
            )
        else:
            msg = f"Unknown template: {template_name}"
            raise ValueError(msg)

        return await self.send_email(to, subject, html_body, text_body)


# Module-level singleton
_email_service: EmailService | None = None


def get_email_service(redis: Redis | None = None) -> EmailService:
    """Get or create the email service singleton."""
    global _email_service  # noqa: PLW0603
    if _email_service is None:
        _email_service = EmailService(redis=redis)
    return _email_service


def reset_email_service() -> None:
    """Reset the email service singleton (for testing)."""
    global _email_service  # noqa: PLW0603
    _email_service = None
