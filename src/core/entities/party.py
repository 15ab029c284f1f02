"""Customers and vendors."""

from datetime import datetime

from pydantic import BaseModel


class Customer(BaseModel):
    id: str | None = None
    name: str
    company: str | None = None
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class Vendor(BaseModel):
    id: str | None = None
    name: str
    contact_person: str | None = None
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    bank_details: str | None = None
    payment_terms: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
