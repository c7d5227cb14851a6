"""
Declarative wizard step graph.

Each job type maps to the ordered step numbers it walks through and the
kind of screen each number shows. The last entry is always the final
step, whose kind follows the wizard mode.
"""

from typing import Dict, List, Optional, Tuple

from dispatch_wizard.domain.value_objects.job_type import JobType
from dispatch_wizard.domain.value_objects.wizard_mode import WizardMode
from dispatch_wizard.domain.value_objects.wizard_step import WizardStep

_FINAL = WizardStep.REVIEW

_COMMON = (
    (1, WizardStep.CUSTOMER),
    (2, WizardStep.SCHEDULE),
    (3, WizardStep.LOCATION),
    (4, WizardStep.CREW),
)

STEP_TABLE: Dict[Optional[JobType], Tuple[Tuple[int, WizardStep], ...]] = {
    None: _COMMON + ((5, WizardStep.INVENTORY), (6, WizardStep.SERVICES), (7, _FINAL)),
    JobType.DELIVERY: _COMMON + ((5, WizardStep.INVENTORY), (6, WizardStep.SERVICES), (7, _FINAL)),
    JobType.SERVICE: _COMMON + ((6, WizardStep.SERVICES), (7, _FINAL)),
    JobType.PICKUP: _COMMON + ((6, _FINAL),),
    JobType.ON_SITE_SURVEY: _COMMON + ((7, _FINAL),),
}


def final_step_kind(mode: WizardMode) -> WizardStep:
    """Kind of the last step for a wizard mode."""
    if mode == WizardMode.QUOTE:
        return WizardStep.QUOTE_PREVIEW
    return WizardStep.REVIEW


def step_for(
    job_type: Optional[JobType], mode: WizardMode = WizardMode.JOB
) -> List[Tuple[int, WizardStep]]:
    """Ordered ``(number, kind)`` pairs legal for a job type and mode."""
    path = list(STEP_TABLE[job_type])
    number, _ = path[-1]
    path[-1] = (number, final_step_kind(mode))
    return path


def step_numbers(job_type: Optional[JobType], mode: WizardMode = WizardMode.JOB) -> List[int]:
    return [number for number, _ in step_for(job_type, mode)]


def step_kind(
    job_type: Optional[JobType], number: int, mode: WizardMode = WizardMode.JOB
) -> Optional[WizardStep]:
    """What step ``number`` shows for the job type, or None when it is skipped."""
    for candidate, kind in step_for(job_type, mode):
        if candidate == number:
            return kind
    return None


def final_step(job_type: Optional[JobType]) -> int:
    return STEP_TABLE[job_type][-1][0]


def next_step_number(job_type: Optional[JobType], current: int) -> Optional[int]:
    """Following step on the path, or None at the end."""
    numbers = step_numbers(job_type)
    for number in numbers:
        if number > current:
            return number
    return None


def previous_step_number(job_type: Optional[JobType], current: int) -> Optional[int]:
    """Preceding step on the path, or None at the start."""
    earlier = [number for number in step_numbers(job_type) if number < current]
    return earlier[-1] if earlier else None
