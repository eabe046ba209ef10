"""Models package - re-exports all models for convenient imports."""

from dashboard.models.content import Comment, CommentCreate, Document
from dashboard.models.records import (
    CamelModel,
    Lead,
    LeadCreate,
    LeadUpdate,
    Payment,
    PaymentUpdate,
    Sale,
    SaleUpdate,
    SuccessResponse,
)

__all__ = [
    "CamelModel",
    "Comment",
    "CommentCreate",
    "Document",
    "Lead",
    "LeadCreate",
    "LeadUpdate",
    "Payment",
    "PaymentUpdate",
    "Sale",
    "SaleUpdate",
    "SuccessResponse",
]
