"""
Unit tests for the wizard step graph.
"""

import pytest

from dispatch_wizard.application.services import step_graph
from dispatch_wizard.domain.value_objects.job_type import JobType
from dispatch_wizard.domain.value_objects.wizard_mode import WizardMode
from dispatch_wizard.domain.value_objects.wizard_step import WizardStep


class TestStepGraph:
    """Test step paths per job type."""

    @pytest.mark.parametrize(
        "job_type,expected",
        [
            (None, [1, 2, 3, 4, 5, 6, 7]),
            (JobType.DELIVERY, [1, 2, 3, 4, 5, 6, 7]),
            (JobType.SERVICE, [1, 2, 3, 4, 6, 7]),
            (JobType.PICKUP, [1, 2, 3, 4, 6]),
            (JobType.ON_SITE_SURVEY, [1, 2, 3, 4, 7]),
        ],
    )
    def test_step_numbers(self, job_type, expected):
        assert step_graph.step_numbers(job_type) == expected

    def test_pickup_final_step_is_review(self):
        assert step_graph.step_kind(JobType.PICKUP, 6) == WizardStep.REVIEW
        assert step_graph.step_kind(JobType.PICKUP, 5) is None
        assert step_graph.final_step(JobType.PICKUP) == 6

    def test_final_step_kind_follows_mode(self):
        assert step_graph.step_kind(JobType.DELIVERY, 7, WizardMode.QUOTE) == WizardStep.QUOTE_PREVIEW
        assert step_graph.step_kind(JobType.DELIVERY, 7, WizardMode.JOB_AND_QUOTE) == WizardStep.REVIEW

    def test_service_path_skips_inventory(self):
        kinds = [kind for _, kind in step_graph.step_for(JobType.SERVICE)]
        assert WizardStep.INVENTORY not in kinds
        assert kinds[-2] == WizardStep.SERVICES

    def test_next_and_previous_skip_missing_numbers(self):
        assert step_graph.next_step_number(JobType.SERVICE, 4) == 6
        assert step_graph.previous_step_number(JobType.SERVICE, 6) == 4
        assert step_graph.next_step_number(JobType.ON_SITE_SURVEY, 4) == 7

    def test_path_boundaries(self):
        assert step_graph.next_step_number(JobType.PICKUP, 6) is None
        assert step_graph.previous_step_number(JobType.PICKUP, 1) is None

    def test_step_table_is_not_mutated_by_quote_mode(self):
        step_graph.step_for(JobType.DELIVERY, WizardMode.QUOTE)
        assert step_graph.STEP_TABLE[JobType.DELIVERY][-1] == (7, WizardStep.REVIEW)
