"""
Unit tests for the send quote use case.
"""

from uuid import uuid4

import pytest

from dispatch_wizard.application.use_cases.send_quote import SendQuoteUseCase
from dispatch_wizard.domain.entities.quote import Quote, QuoteItem
from dispatch_wizard.domain.exceptions.quote_error import QuoteDeliveryError, QuoteNotFoundError
from dispatch_wizard.domain.value_objects.quote_status import DeliveryMethod, QuoteStatus


class TestSendQuoteUseCase:
    """Test cases for SendQuoteUseCase."""

    @pytest.fixture
    def quote(self):
        return Quote(
            customer_id="cust-1",
            quote_number="Q0007",
            items=[QuoteItem(line_item_type="product", name="Unit", quantity=2, unit_price="20")],
        )

    @pytest.fixture
    def use_case(self, mock_quote_repository, mock_quote_delivery, mock_transaction_service, quote):
        mock_quote_repository.get_by_id.return_value = quote
        return SendQuoteUseCase(mock_quote_repository, mock_quote_delivery, mock_transaction_service)

    @pytest.mark.asyncio
    async def test_accepted_delivery_marks_sent(
        self, use_case, quote, mock_quote_delivery, mock_quote_repository, mock_transaction_service
    ):
        result = await use_case.execute(quote.id, DeliveryMethod.EMAIL)

        assert result.status == QuoteStatus.SENT
        payload = mock_quote_delivery.deliver.call_args.args[0]
        assert payload["quote_number"] == "Q0007"
        assert payload["total_amount"] == "40.00"
        mock_quote_repository.update_status.assert_awaited_once_with(quote.id, QuoteStatus.SENT)
        mock_transaction_service.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_queued_delivery_marks_pending(self, use_case, quote, mock_quote_delivery):
        mock_quote_delivery.deliver.return_value = False

        result = await use_case.execute(quote.id, "sms")

        assert result.method == DeliveryMethod.SMS
        assert result.status == QuoteStatus.PENDING

    @pytest.mark.asyncio
    async def test_save_draft_never_dispatches(
        self, use_case, quote, mock_quote_delivery, mock_quote_repository
    ):
        result = await use_case.execute(quote.id, DeliveryMethod.SAVE_DRAFT)

        assert result.status == QuoteStatus.DRAFT
        mock_quote_delivery.deliver.assert_not_called()
        mock_quote_repository.update_status.assert_not_called()

    @pytest.mark.asyncio
    async def test_failed_delivery_propagates(
        self, use_case, quote, mock_quote_delivery, mock_quote_repository
    ):
        mock_quote_delivery.deliver.side_effect = QuoteDeliveryError(str(quote.id), "email", "503")

        with pytest.raises(QuoteDeliveryError):
            await use_case.execute(quote.id, DeliveryMethod.EMAIL)

        mock_quote_repository.update_status.assert_not_called()

    @pytest.mark.asyncio
    async def test_unknown_quote(self, use_case, mock_quote_repository):
        mock_quote_repository.get_by_id.return_value = None

        with pytest.raises(QuoteNotFoundError):
            await use_case.execute(uuid4(), DeliveryMethod.EMAIL)
