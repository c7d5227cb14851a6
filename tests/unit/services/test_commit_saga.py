"""
Unit tests for the commit saga.
"""

from unittest.mock import AsyncMock

import pytest

from dispatch_wizard.application.services.commit_saga import (
    CommitSaga,
    SagaContext,
    SagaStep,
)


class TestCommitSaga:
    """Test cases for CommitSaga."""

    @pytest.fixture
    def saga(self, mock_transaction_service):
        return CommitSaga(mock_transaction_service.commit, mock_transaction_service.rollback)

    @pytest.mark.asyncio
    async def test_commits_after_each_step(self, saga, mock_transaction_service):
        async def first(context):
            context.record("jobs", "job-1")

        async def second(context):
            context.record("quotes", "q-1")

        outcome = await saga.run([SagaStep("first", first), SagaStep("second", second)])

        assert outcome.succeeded is True
        assert outcome.completed_steps == ["first", "second"]
        assert outcome.committed_ids == {"jobs": ["job-1"], "quotes": ["q-1"]}
        assert mock_transaction_service.commit.await_count == 2
        mock_transaction_service.rollback.assert_not_called()

    @pytest.mark.asyncio
    async def test_failure_keeps_earlier_steps(self, saga, mock_transaction_service):
        third = AsyncMock()

        async def first(context):
            context.record("jobs", "job-1")

        async def second(context):
            context.record("jobs", "job-2")
            raise RuntimeError("insert failed")

        outcome = await saga.run(
            [SagaStep("first", first), SagaStep("second", second), SagaStep("third", third)]
        )

        assert outcome.succeeded is False
        assert outcome.failed_step == "second"
        assert outcome.error == "insert failed"
        assert outcome.completed_steps == ["first"]
        # Uncommitted ids of the failing step are dropped
        assert outcome.committed_ids == {"jobs": ["job-1"]}
        assert outcome.rolled_back is False
        mock_transaction_service.rollback.assert_awaited_once()
        third.assert_not_called()

    @pytest.mark.asyncio
    async def test_compensations_run_in_reverse(self, saga):
        calls = []

        def compensation(name):
            async def undo(context):
                calls.append(name)
                return True

            return undo

        async def boom(context):
            raise ValueError()

        outcome = await saga.run(
            [
                SagaStep("a", AsyncMock(), compensation("a")),
                SagaStep("b", AsyncMock(), compensation("b")),
                SagaStep("c", boom),
            ]
        )

        assert calls == ["b", "a"]
        assert outcome.rolled_back is True
        assert outcome.error == "ValueError"

    @pytest.mark.asyncio
    async def test_first_step_failure_reports_nothing_rolled_back(self, saga):
        async def boom(context):
            raise RuntimeError("no")

        outcome = await saga.run([SagaStep("only", boom)])

        assert outcome.completed_steps == []
        assert outcome.rolled_back is False

    @pytest.mark.asyncio
    async def test_shares_context_values(self, saga):
        context = SagaContext()

        async def produce(ctx):
            ctx.values["job_id"] = "job-1"

        async def consume(ctx):
            ctx.record("line_items", f"{ctx.values['job_id']}-line")

        await saga.run([SagaStep("produce", produce), SagaStep("consume", consume)], context)

        assert context.committed_ids == {"line_items": ["job-1-line"]}
