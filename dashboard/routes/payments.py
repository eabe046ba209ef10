from fastapi import APIRouter, Depends, Request

from dashboard.enums import RecordType
from dashboard.middleware.rate_limit import rate_limit_write
from dashboard.models.records import CamelModel, Payment, PaymentUpdate, SuccessResponse
from dashboard.services.leads import set_payments_finished
from dashboard.services.notion import NotionService, get_notion_service
from dashboard.services.properties import PAYMENT_FIELDS
from dashboard.services.records import list_records
from dashboard.utils import validate_page_id

router = APIRouter()


class PaymentListResponse(CamelModel):
    payments: list[Payment]


@router.get("", response_model=PaymentListResponse)
async def list_payments(notion: NotionService = Depends(get_notion_service)):
    """Payment view over sales; unset payment flags read as "No"."""
    records = await list_records(notion, RecordType.SALE, PAYMENT_FIELDS)
    return PaymentListResponse(payments=[Payment(**record) for record in records])


@router.patch("/{page_id}", response_model=SuccessResponse)
@rate_limit_write()
async def update_payment(
    request: Request,
    page_id: str,
    update: PaymentUpdate,
    notion: NotionService = Depends(get_notion_service),
):
    await set_payments_finished(notion, validate_page_id(page_id), update.all_payments_finished)
    return SuccessResponse()
