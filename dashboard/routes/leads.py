from fastapi import APIRouter, Depends, Request

from dashboard.enums import RecordType
from dashboard.middleware.rate_limit import rate_limit_write
from dashboard.models.records import CamelModel, Lead, LeadCreate, LeadUpdate, SuccessResponse
from dashboard.services import leads as lead_service
from dashboard.services.notion import NotionService, get_notion_service
from dashboard.services.properties import LEAD_FIELDS
from dashboard.services.records import get_record, list_records, update_record
from dashboard.utils import validate_page_id

router = APIRouter()


class LeadListResponse(CamelModel):
    leads: list[Lead]


class LeadResponse(CamelModel):
    lead: Lead


class LeadCreateResponse(CamelModel):
    success: bool = True
    id: str
    template_seeded: bool


class ConvertResponse(SuccessResponse):
    sales_date: str


@router.get("", response_model=LeadListResponse)
async def list_leads(notion: NotionService = Depends(get_notion_service)):
    """List every page classified as a lead."""
    records = await list_records(notion, RecordType.LEAD, LEAD_FIELDS)
    return LeadListResponse(leads=[Lead(**record) for record in records])


@router.post("", response_model=LeadCreateResponse)
@rate_limit_write()
async def create_lead(
    request: Request,
    lead: LeadCreate,
    notion: NotionService = Depends(get_notion_service),
):
    """Create a lead page and seed its comment/document sections."""
    result = await lead_service.create_lead(notion, lead.model_dump(exclude_unset=True))
    return LeadCreateResponse(id=result.id, template_seeded=result.template_seeded)


@router.get("/{page_id}", response_model=LeadResponse)
async def get_lead(page_id: str, notion: NotionService = Depends(get_notion_service)):
    record = await get_record(notion, validate_page_id(page_id), LEAD_FIELDS)
    return LeadResponse(lead=Lead(**record))


@router.patch("/{page_id}", response_model=SuccessResponse)
@rate_limit_write()
async def update_lead(
    request: Request,
    page_id: str,
    update: LeadUpdate,
    notion: NotionService = Depends(get_notion_service),
):
    """Update only the fields present in the request body."""
    await update_record(
        notion, validate_page_id(page_id), update.model_dump(exclude_unset=True), LEAD_FIELDS
    )
    return SuccessResponse()


@router.patch("/{page_id}/convert", response_model=ConvertResponse)
@rate_limit_write()
async def convert_lead(
    request: Request,
    page_id: str,
    notion: NotionService = Depends(get_notion_service),
):
    """Turn a lead into a sale dated today."""
    sales_date = await lead_service.convert_to_sale(notion, validate_page_id(page_id))
    return ConvertResponse(sales_date=sales_date)


@router.patch("/{page_id}/cancel", response_model=SuccessResponse)
@rate_limit_write()
async def cancel_lead(
    request: Request,
    page_id: str,
    notion: NotionService = Depends(get_notion_service),
):
    await lead_service.cancel_lead(notion, validate_page_id(page_id))
    return SuccessResponse()
