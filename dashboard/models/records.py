"""Record views over database pages (Lead, Sale, Payment) and their updates."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serialising to the camelCase keys the UI expects."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SuccessResponse(CamelModel):
    success: bool = True


class Lead(CamelModel):
    id: str
    sales_representative: str | None = None
    lead_date: str | None = None
    customer_name: str | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    job_type: str | None = None
    equipment_needed: str | None = None
    phone_number: str | None = None
    email: str | None = None


class Sale(CamelModel):
    id: str
    sales_date: str | None = None
    appointment_date: str | None = None
    sales_representative: str | None = None
    customer_name: str | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    job_type: str | None = None
    appointment_status: str | None = None
    sales_status: str | None = None
    equipment_needed: str | None = None
    live_representative: str | None = None
    live_representative_paid: str | None = None
    sales_representative_paid: str | None = None
    phone_number: str | None = None
    email: str | None = None


class Payment(CamelModel):
    id: str
    sales_representative: str | None = None
    live_representative: str | None = None
    customer_name: str | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    job_type: str | None = None
    appointment_status: str | None = None
    sales_status: str | None = None
    all_payments_finished: str | None = None
    live_representative_paid: str | None = None
    sales_representative_paid: str | None = None


# Partial updates: only fields present in the request body are sent upstream,
# so callers use ``model_dump(exclude_unset=True)``.


class LeadUpdate(CamelModel):
    sales_representative: str | None = None
    lead_date: str | None = None
    customer_name: str | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    job_type: str | None = None
    equipment_needed: str | None = None
    phone_number: str | None = None
    email: str | None = None


class LeadCreate(LeadUpdate):
    pass


class SaleUpdate(CamelModel):
    sales_date: str | None = None
    appointment_date: str | None = None
    sales_representative: str | None = None
    customer_name: str | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    job_type: str | None = None
    appointment_status: str | None = None
    sales_status: str | None = None
    equipment_needed: str | None = None
    live_representative: str | None = None
    live_representative_paid: str | None = None
    sales_representative_paid: str | None = None
    phone_number: str | None = None
    email: str | None = None


class PaymentUpdate(CamelModel):
    all_payments_finished: bool
