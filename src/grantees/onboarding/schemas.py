"""Onboarding request/response schemas."""

from __future__ import annotations

from pydantic import BaseModel, Field

from grantees.catalog.models import BuilderNiche, BuilderRole, Ecosystem, ProjectMaturity
from grantees.onboarding.wizard import OnboardingForm


class OnboardingFormRequest(BaseModel):
    """The wizard form as submitted. Every field may be blank while in progress."""

    display_name: str = Field("", max_length=64)
    role: BuilderRole | None = None
    niches: list[BuilderNiche] = Field(default_factory=list, max_length=10)
    ecosystems: list[Ecosystem] = Field(default_factory=list, max_length=12)
    project_maturity: ProjectMaturity | None = None
    project_description: str = Field("", max_length=2000)
    region: str = Field("", max_length=64)

    def to_form(self) -> OnboardingForm:
        return OnboardingForm(
            display_name=self.display_name,
            role=self.role or "",
            niches=list(dict.fromkeys(self.niches)),
            ecosystems=list(dict.fromkeys(self.ecosystems)),
            project_maturity=self.project_maturity or "",
            project_description=self.project_description,
            region=self.region,
        )


class StepResponse(BaseModel):
    id: str
    title: str
    description: str


class OptionResponse(BaseModel):
    value: str
    label: str
    description: str | None = None


class StepsResponse(BaseModel):
    steps: list[StepResponse]
    roles: list[OptionResponse]
    maturity_levels: list[OptionResponse]
    niches: list[OptionResponse]
    ecosystems: list[OptionResponse]


class EvaluateResponse(BaseModel):
    steps: dict[str, bool]
    complete: bool
    first_incomplete_step: str | None = None
    progress: float
