"""
Builder onboarding wizard.

A linear five-step form: role, niche, ecosystem, project, review. Each step
is gated by ``can_proceed``; nothing here touches the database. The collected
form is persisted separately as a profile edit.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

STEPS: tuple[dict[str, str], ...] = (
    {"id": "role", "title": "Your Role", "description": "Tell us about yourself"},
    {"id": "niche", "title": "Your Niche", "description": "Select your focus areas"},
    {"id": "ecosystem", "title": "Ecosystems", "description": "Where do you build?"},
    {"id": "project", "title": "Project Stage", "description": "Describe your project"},
    {"id": "review", "title": "All Set!", "description": "Review & launch"},
)

STEP_IDS: tuple[str, ...] = tuple(s["id"] for s in STEPS)

ROLE_OPTIONS: tuple[dict[str, str], ...] = (
    {"value": "solo-dev", "label": "Solo Developer", "description": "Building independently"},
    {"value": "founder", "label": "Founder", "description": "Leading a startup or project"},
    {"value": "team", "label": "Team Member", "description": "Part of a development team"},
    {"value": "dao-member", "label": "DAO Member", "description": "Contributing to a DAO"},
)

MATURITY_OPTIONS: tuple[dict[str, str], ...] = (
    {"value": "idea", "label": "Idea Stage", "description": "Concept or planning phase"},
    {"value": "mvp", "label": "MVP", "description": "Working prototype or early version"},
    {"value": "live", "label": "Live Product", "description": "Deployed and active users"},
    {"value": "scaling", "label": "Scaling", "description": "Growing and expanding"},
)


@dataclass
class OnboardingForm:
    display_name: str = ""
    role: str = ""
    niches: list[str] = field(default_factory=list)
    ecosystems: list[str] = field(default_factory=list)
    project_maturity: str = ""
    project_description: str = ""
    region: str = ""

    def to_profile_fields(self) -> dict[str, Any]:
        """Map the form onto Profile builder columns. Blank text becomes None."""
        return {
            "display_name": self.display_name.strip() or None,
            "role": self.role or None,
            "niches": list(self.niches),
            "target_ecosystems": list(self.ecosystems),
            "project_maturity": self.project_maturity or None,
            "project_description": self.project_description.strip() or None,
            "region": self.region.strip() or None,
        }


def _toggle(values: list[str], value: str) -> None:
    if value in values:
        values.remove(value)
    else:
        values.append(value)


@dataclass
class OnboardingWizard:
    form: OnboardingForm = field(default_factory=OnboardingForm)
    step: int = 0
    completed: bool = False

    @property
    def current_step_id(self) -> str:
        return STEP_IDS[self.step]

    @property
    def is_last_step(self) -> bool:
        return self.step == len(STEPS) - 1

    @property
    def progress(self) -> float:
        """Percent of the wizard reached, counting the current step."""
        return (self.step + 1) / len(STEPS) * 100

    def can_proceed(self, step: int | None = None) -> bool:
        """Whether the form satisfies the gate for ``step`` (default: current)."""
        index = self.step if step is None else step
        form = self.form
        if index == 0:
            return bool(form.display_name.strip() and form.role)
        if index == 1:
            return len(form.niches) > 0
        if index == 2:
            return len(form.ecosystems) > 0
        if index == 3:
            return bool(form.project_maturity)
        if index == 4:
            return True
        return False

    def next(self) -> bool:
        """
        Advance one step, or mark the wizard complete on the last step.

        Returns False (state unchanged) when the current step's gate fails.
        """
        if not self.can_proceed():
            return False
        if self.is_last_step:
            self.completed = True
        else:
            self.step += 1
        return True

    def back(self) -> bool:
        if self.step == 0:
            return False
        self.step -= 1
        return True

    def toggle_niche(self, niche: str) -> None:
        _toggle(self.form.niches, niche)

    def toggle_ecosystem(self, ecosystem: str) -> None:
        _toggle(self.form.ecosystems, ecosystem)

    def step_results(self) -> dict[str, bool]:
        """Gate result for every step, keyed by step id."""
        return {step_id: self.can_proceed(i) for i, step_id in enumerate(STEP_IDS)}

    def first_incomplete_step(self) -> int | None:
        for i in range(len(STEPS)):
            if not self.can_proceed(i):
                return i
        return None

    @property
    def is_complete_form(self) -> bool:
        return self.first_incomplete_step() is None
