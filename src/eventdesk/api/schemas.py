"""
eventdesk.api.schemas

Request bodies for the RPC procedures.

Responsibilities:
- Define camelCase wire models (snake_case attributes in Python).
- Enforce input bounds (lengths, minimum counts, enum value sets) before
  any procedure logic runs.
"""

from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from eventdesk.auth.models import Role
from eventdesk.db.models import (
    ExpenseStatus,
    MealChoice,
    MealPreference,
    OrderStatus,
    PersonSize,
    ProductKind,
    ProductSubtype,
    RecordStatus,
)
from eventdesk.services.reports import ExportType


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AuthedRequest(CamelModel):
    # Optional here so a missing token is reported by the gate, not as a shape error.
    auth_token: str | None = None


# Auth / users


class LoginRequest(CamelModel):
    email: str = Field(min_length=1, max_length=320)
    password: str = Field(min_length=1)


class MemberFields(CamelModel):
    member_name: str = Field(min_length=1, max_length=256)
    member_email: str = Field(min_length=3, max_length=320)
    member_phone: str | None = Field(default=None, max_length=64)
    adults: int = Field(default=1, ge=1)
    children: int = Field(default=0, ge=0)
    infants: int = Field(default=0, ge=0)
    elder: int = Field(default=0, ge=0)


class RegisterRequest(MemberFields):
    password: str = Field(min_length=6)


class CreateUserRequest(AuthedRequest, MemberFields):
    password: str = Field(min_length=6)
    role: Role


class UpdateUserRequest(AuthedRequest):
    user_id: int
    member_name: str | None = Field(default=None, min_length=1, max_length=256)
    member_email: str | None = Field(default=None, min_length=3, max_length=320)
    member_phone: str | None = Field(default=None, max_length=64)
    adults: int | None = Field(default=None, ge=1)
    children: int | None = Field(default=None, ge=0)
    infants: int | None = Field(default=None, ge=0)
    elder: int | None = Field(default=None, ge=0)
    password: str | None = Field(default=None, min_length=6)
    role: Role | None = None


class UserIdRequest(AuthedRequest):
    user_id: int


# Venues


class CreateVenueRequest(AuthedRequest):
    venue_address: str = Field(min_length=1, max_length=512)
    venue_capacity: int = Field(ge=1)
    venue_details: str | None = None


class UpdateVenueRequest(AuthedRequest):
    venue_id: int
    venue_address: str | None = Field(default=None, min_length=1, max_length=512)
    venue_capacity: int | None = Field(default=None, ge=1)
    venue_details: str | None = None


class VenueIdRequest(AuthedRequest):
    venue_id: int


# Events / sessions


class CreateEventRequest(AuthedRequest):
    event_name: str = Field(min_length=1, max_length=256)
    start_date: date
    end_date: date
    event_details: str | None = None
    venue_id: int


class UpdateEventRequest(AuthedRequest):
    event_id: int
    event_name: str | None = Field(default=None, min_length=1, max_length=256)
    start_date: date | None = None
    end_date: date | None = None
    event_details: str | None = None
    venue_id: int | None = None


class EventIdRequest(AuthedRequest):
    event_id: int


class CreateSessionRequest(AuthedRequest):
    session_name: str = Field(min_length=1, max_length=256)
    session_date: datetime
    start_time: str = Field(max_length=32)
    end_time: str = Field(max_length=32)
    session_details: str | None = None
    session_balance_capacity: int = Field(ge=1)
    event_id: int


class UpdateSessionRequest(AuthedRequest):
    session_id: int
    session_name: str | None = Field(default=None, min_length=1, max_length=256)
    session_date: datetime | None = None
    start_time: str | None = Field(default=None, max_length=32)
    end_time: str | None = Field(default=None, max_length=32)
    session_details: str | None = None
    session_balance_capacity: int | None = Field(default=None, ge=1)


class SessionIdRequest(AuthedRequest):
    session_id: int


class SessionsQuery(AuthedRequest):
    event_id: int | None = None


class PublicSessionsQuery(CamelModel):
    event_id: int | None = None


# Products


class VariantFields(CamelModel):
    product_size: PersonSize
    product_choice: MealChoice
    product_pref: MealPreference
    product_price: float = Field(ge=0)
    product_subtype: ProductSubtype


class CreateProductRequest(AuthedRequest):
    product_code: str = Field(min_length=1, max_length=64)
    product_name: str = Field(min_length=1, max_length=256)
    product_desc: str | None = None
    product_type: ProductKind
    product_types: list[VariantFields] = Field(default_factory=list)


class UpdateProductRequest(AuthedRequest):
    product_id: int
    product_code: str | None = Field(default=None, min_length=1, max_length=64)
    product_name: str | None = Field(default=None, min_length=1, max_length=256)
    product_desc: str | None = None
    product_type: ProductKind | None = None
    status: RecordStatus | None = None


class ProductIdRequest(AuthedRequest):
    product_id: int


class CreateVariantRequest(AuthedRequest, VariantFields):
    product_id: int


class UpdateVariantRequest(AuthedRequest):
    product_type_id: int
    product_size: PersonSize | None = None
    product_choice: MealChoice | None = None
    product_pref: MealPreference | None = None
    product_price: float | None = Field(default=None, ge=0)
    product_subtype: ProductSubtype | None = None
    status: RecordStatus | None = None


class VariantIdRequest(AuthedRequest):
    product_type_id: int


class SessionTagRequest(AuthedRequest):
    product_id: int
    session_id: int


# Expenses


class CreateExpenseRequest(AuthedRequest):
    expense_type: str = Field(min_length=1, max_length=128)
    vendor: str = Field(min_length=1, max_length=256)
    amount: float = Field(ge=0)
    receipt_file: str | None = Field(default=None, max_length=1024)
    event_id: int


class ExpensesQuery(AuthedRequest):
    event_id: int | None = None
    status: ExpenseStatus | None = None


class UpdateExpenseStatusRequest(AuthedRequest):
    expense_id: int
    status: ExpenseStatus


# Orders


class OrderLineFields(CamelModel):
    product_id: int
    product_type_id: int | None = None
    quantity: int = Field(ge=0)
    session_id: int | None = None


class UpdateOrderRequest(AuthedRequest):
    order_id: int
    total_cost: float | None = Field(default=None, ge=0)
    status: OrderStatus | None = None
    order_lines: list[OrderLineFields] | None = None


class OrderIdRequest(AuthedRequest):
    order_id: int


# Registration


class ProductSelection(CamelModel):
    product_id: int
    product_type_id: int
    quantity: int = Field(ge=1)


class SessionSelection(CamelModel):
    session_id: int
    opt_out_of_food: bool = False
    product_selections: list[ProductSelection] = Field(default_factory=list)


class PartyFields(CamelModel):
    adults: int = Field(ge=1)
    children: int = Field(default=0, ge=0)
    infants: int = Field(default=0, ge=0)
    elder: int = Field(default=0, ge=0)


class GuestRegistrationRequest(PartyFields):
    guest_name: str = Field(min_length=1, max_length=256)
    guest_email: str | None = Field(default=None, max_length=320)
    guest_phone: str | None = Field(default=None, max_length=64)
    guest_location: str | None = Field(default=None, max_length=256)
    member_id: int
    event_id: int
    session_selections: list[SessionSelection] = Field(min_length=1)


class MemberRegistrationRequest(AuthedRequest, PartyFields):
    event_id: int
    session_selections: list[SessionSelection] = Field(min_length=1)


# Reports


class ExportRequest(AuthedRequest):
    export_type: ExportType
    event_id: int | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
