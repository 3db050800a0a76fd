"""Onboarding wizard endpoints: /api/v1/onboarding/*."""

from __future__ import annotations

from fastapi import APIRouter

from grantees.catalog.models import ECOSYSTEM_LABELS, NICHE_LABELS
from grantees.onboarding.schemas import (
    EvaluateResponse,
    OnboardingFormRequest,
    OptionResponse,
    StepResponse,
    StepsResponse,
)
from grantees.onboarding.wizard import MATURITY_OPTIONS, ROLE_OPTIONS, STEP_IDS, STEPS, OnboardingWizard

router = APIRouter(prefix="/api/v1/onboarding", tags=["Onboarding"])


@router.get("/steps", response_model=StepsResponse)
async def get_steps() -> StepsResponse:
    """Wizard steps and the choices offered on each."""
    return StepsResponse(
        steps=[StepResponse(**s) for s in STEPS],
        roles=[OptionResponse(**r) for r in ROLE_OPTIONS],
        maturity_levels=[OptionResponse(**m) for m in MATURITY_OPTIONS],
        niches=[OptionResponse(value=k, label=v) for k, v in NICHE_LABELS.items()],
        # "other" is not offered as a target ecosystem
        ecosystems=[OptionResponse(value=k, label=v) for k, v in ECOSYSTEM_LABELS.items() if k != "other"],
    )


@router.post("/evaluate", response_model=EvaluateResponse)
async def evaluate(body: OnboardingFormRequest) -> EvaluateResponse:
    """Check a submitted form against every step gate."""
    wizard = OnboardingWizard(form=body.to_form())
    first_incomplete = wizard.first_incomplete_step()
    if first_incomplete is not None:
        wizard.step = first_incomplete
    else:
        wizard.step = len(STEP_IDS) - 1
    return EvaluateResponse(
        steps=wizard.step_results(),
        complete=first_incomplete is None,
        first_incomplete_step=STEP_IDS[first_incomplete] if first_incomplete is not None else None,
        progress=wizard.progress,
    )
