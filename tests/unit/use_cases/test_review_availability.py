"""
Unit tests for the review availability use case.
"""

from unittest.mock import AsyncMock

import pytest

from dispatch_wizard.application.services.availability_checker import AvailabilityChecker
from dispatch_wizard.application.use_cases.review_availability import ReviewAvailabilityUseCase
from dispatch_wizard.domain.value_objects.conflict_report import ConflictReport


class TestReviewAvailabilityUseCase:
    """Test cases for ReviewAvailabilityUseCase."""

    @pytest.fixture
    def mock_checker(self):
        checker = AsyncMock(spec=AvailabilityChecker)
        checker.check = AsyncMock(return_value=ConflictReport())
        return checker

    @pytest.mark.asyncio
    async def test_applies_latest_result(self, mock_checker, delivery_machine):
        result = await ReviewAvailabilityUseCase(mock_checker).execute(delivery_machine)

        assert result.applied is True
        assert result.generation == delivery_machine.session.availability_generation
        assert delivery_machine.session.availability is result.report
        mock_checker.check.assert_awaited_once_with(delivery_machine.document)

    @pytest.mark.asyncio
    async def test_superseded_result_is_discarded(self, mock_checker, delivery_machine):
        async def check_while_user_edits(document):
            # A newer check is issued before this one returns
            delivery_machine.begin_availability_check()
            return ConflictReport()

        mock_checker.check.side_effect = check_while_user_edits

        result = await ReviewAvailabilityUseCase(mock_checker).execute(delivery_machine)

        assert result.applied is False
        assert delivery_machine.session.availability is None

    @pytest.mark.asyncio
    async def test_real_checker_end_to_end(
        self, delivery_machine, mock_availability_query, mock_assignment_repository
    ):
        mock_availability_query.get_available_quantity.return_value = 1
        checker = AvailabilityChecker(mock_availability_query, mock_assignment_repository)

        result = await ReviewAvailabilityUseCase(checker).execute(delivery_machine)

        assert result.applied is True
        assert delivery_machine.session.has_conflicts is True
        assert result.report.items[0].shortfall == 1
