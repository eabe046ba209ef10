from fastapi import APIRouter, Depends, Request

from dashboard.enums import RecordType
from dashboard.middleware.rate_limit import rate_limit_write
from dashboard.models.records import CamelModel, Sale, SaleUpdate, SuccessResponse
from dashboard.services.notion import NotionService, get_notion_service
from dashboard.services.properties import SALE_FIELDS
from dashboard.services.records import get_record, list_records, update_record
from dashboard.utils import validate_page_id

router = APIRouter()


class SaleListResponse(CamelModel):
    sales: list[Sale]


class SaleResponse(CamelModel):
    sale: Sale


@router.get("", response_model=SaleListResponse)
async def list_sales(notion: NotionService = Depends(get_notion_service)):
    """List every page classified as a sale (appointments view)."""
    records = await list_records(notion, RecordType.SALE, SALE_FIELDS)
    return SaleListResponse(sales=[Sale(**record) for record in records])


@router.get("/{page_id}", response_model=SaleResponse)
async def get_sale(page_id: str, notion: NotionService = Depends(get_notion_service)):
    record = await get_record(notion, validate_page_id(page_id), SALE_FIELDS)
    return SaleResponse(sale=Sale(**record))


@router.patch("/{page_id}", response_model=SuccessResponse)
@rate_limit_write()
async def update_sale(
    request: Request,
    page_id: str,
    update: SaleUpdate,
    notion: NotionService = Depends(get_notion_service),
):
    """Update only the fields present in the request body."""
    await update_record(
        notion, validate_page_id(page_id), update.model_dump(exclude_unset=True), SALE_FIELDS
    )
    return SuccessResponse()
