"""Serverless-function compatible endpoints: /functions/v1/*.

These keep the request and response shapes the web client already invokes:
camelCase success bodies and ``{"error": ...}`` failures.
"""

from __future__ import annotations

import structlog
from fastapi import APIRouter, Depends
from pydantic import BaseModel, EmailStr
from sqlalchemy.ext.asyncio import AsyncSession

from grantees.auth.dependencies import get_function_user
from grantees.credits.exceptions import CreditError
from grantees.credits.schemas import ConsumeRequest, ConsumeResponse, PurchaseRequest, PurchaseResponse
from grantees.credits.service import consume_credits, purchase_credits
from grantees.database import get_session
from grantees.db.models import User
from grantees.email.service import EmailDeliveryError, get_email_service
from grantees.functions.errors import FunctionError
from grantees.middleware.logging import email_fingerprint
from grantees.redis_client import get_optional_redis

logger = structlog.get_logger()

router = APIRouter(prefix="/functions/v1", tags=["Functions"])


class WelcomeEmailRequest(BaseModel):
    email: EmailStr


def _credit_failure(exc: CreditError) -> FunctionError:
    return FunctionError(exc.status_code, exc.message, **exc.context())


@router.post("/credits-consume", response_model=ConsumeResponse, response_model_by_alias=True)
async def credits_consume(
    body: ConsumeRequest | None = None,
    user: User = Depends(get_function_user),
    db: AsyncSession = Depends(get_session),
) -> ConsumeResponse:
    """Spend credits (default 1) for a premium action."""
    body = body or ConsumeRequest()
    try:
        new_balance = await consume_credits(db, user.id, body.amount, body.description)
    except CreditError as e:
        raise _credit_failure(e) from e
    except Exception as e:
        logger.exception("credits_consume_error", user_id=user.id)
        raise FunctionError(500, str(e) or "Unknown error") from e
    return ConsumeResponse(credits_spent=body.amount, new_balance=new_balance)


@router.post("/credits-purchase", response_model=PurchaseResponse, response_model_by_alias=True)
async def credits_purchase(
    body: PurchaseRequest,
    user: User = Depends(get_function_user),
    db: AsyncSession = Depends(get_session),
) -> PurchaseResponse:
    """Credit a package purchase paid from the user's wallet."""
    try:
        package, new_balance = await purchase_credits(
            db,
            user.id,
            wallet_address=body.wallet_address,
            package_name=body.package,
            tx_hash=body.tx_hash,
        )
    except CreditError as e:
        raise _credit_failure(e) from e
    except Exception as e:
        logger.exception("credits_purchase_error", user_id=user.id)
        raise FunctionError(500, str(e) or "Unknown error") from e
    return PurchaseResponse(credits=package.credits, new_balance=new_balance)


@router.post("/send-welcome-email")
async def send_welcome_email(body: WelcomeEmailRequest) -> dict[str, object]:
    """Send the welcome email through the configured provider."""
    logger.info("welcome_email_requested", to=email_fingerprint(body.email))
    try:
        data = await get_email_service(redis=get_optional_redis()).send_template(body.email, "welcome", {})
    except EmailDeliveryError as e:
        raise FunctionError(500, e.message) from e
    except Exception as e:
        logger.exception("welcome_email_error", to=email_fingerprint(body.email))
        raise FunctionError(500, str(e) or "Unknown error") from e
    return {"success": True, "data": data}
