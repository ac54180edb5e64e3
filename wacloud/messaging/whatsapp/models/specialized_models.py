"""
Specialized message models for WhatsApp messaging.

Location and contact card payloads.
"""

from typing import Literal

from pydantic import Field

from wacloud.schemas.core.base_models import RequestModel

from .basic_models import BaseMessage
from .media_models import HTTP_URL_PATTERN

HomeOrWork = Literal["HOME", "WORK"]


class LocationObject(RequestModel):
    """Geographic coordinates with a display name and address."""

    latitude: float = Field(..., ge=-90, le=90, description="Latitude in degrees")
    longitude: float = Field(..., ge=-180, le=180, description="Longitude in degrees")
    name: str = Field(..., description="Location name")
    address: str = Field(..., description="Location address")


class LocationMessage(BaseMessage):
    type: Literal["location"]
    location: LocationObject


class ContactAddress(RequestModel):
    street: str | None = None
    city: str | None = None
    state: str | None = None
    zip: str | None = None
    country: str | None = None
    country_code: str | None = None
    type: HomeOrWork | None = None


class ContactEmail(RequestModel):
    email: str | None = Field(None, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    type: HomeOrWork | None = None


class ContactName(RequestModel):
    """Structured contact name. Only the formatted name is required."""

    formatted_name: str = Field(..., min_length=1)
    first_name: str | None = None
    last_name: str | None = None
    middle_name: str | None = None
    suffix: str | None = None
    prefix: str | None = None


class ContactOrg(RequestModel):
    company: str | None = None
    department: str | None = None
    title: str | None = None


class ContactPhone(RequestModel):
    phone: str | None = None
    type: Literal["CELL", "MAIN", "IPHONE", "HOME", "WORK"] | None = None
    wa_id: str | None = None


class ContactUrl(RequestModel):
    url: str | None = Field(None, pattern=HTTP_URL_PATTERN)
    type: HomeOrWork | None = None


class Contact(RequestModel):
    """A contact card."""

    name: ContactName
    addresses: list[ContactAddress] | None = None
    birthday: str | None = Field(None, description="Birthday as YYYY-MM-DD")
    emails: list[ContactEmail] | None = None
    org: ContactOrg | None = None
    phones: list[ContactPhone] | None = None
    urls: list[ContactUrl] | None = None


class ContactsMessage(BaseMessage):
    type: Literal["contacts"]
    contacts: list[Contact] = Field(..., min_length=1)
