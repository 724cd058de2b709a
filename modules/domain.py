"""
Domain models for the product showcase.
Shared dataclasses used across the application.
"""
from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional, Literal


OTHER_OPTION_VALUE = "Other"


@dataclass
class Product:
    """
    A product card on the showcase page.

    The name is the natural identifier (no numeric key).
    Prices are in USD; sold products have available=False.
    """

    name: str
    description: str
    price: Decimal
    available: bool = True

    @property
    def status_label(self) -> str:
        """Text shown in the card's status badge."""
        return "Available" if self.available else "Sold"


@dataclass
class DropdownOption:
    """
    One entry of the contact form's product dropdown.

    Besides one entry per available product, the dropdown carries a
    disabled placeholder (empty value) and a catch-all "Other" entry.
    """

    value: str
    label: str
    disabled: bool = False

    @property
    def is_placeholder(self) -> bool:
        return self.value == ""

    @property
    def is_other(self) -> bool:
        return self.value.strip().lower() == OTHER_OPTION_VALUE.lower()


@dataclass
class Catalog:
    """
    Everything the showcase page displays: page metadata, the product
    cards and the independently authored dropdown option list.
    """

    title: str
    owner: str
    contact_email: str
    products: List[Product]
    dropdown: List[DropdownOption]

    def find_product(self, name: str) -> Optional[Product]:
        """Return the first product card with this name, if any."""
        for product in self.products:
            if product.name == name:
                return product
        return None


@dataclass(frozen=True)
class FormSubmission:
    """
    Raw contact form values, read once per submit and then discarded.
    """

    name: str
    email: str
    selected_product: str
    message: str = ""


@dataclass(frozen=True)
class MailMessage:
    """
    A composed mail request. Immutable once built.

    encoded_uri is the mailto: URI with subject and body percent-encoded.
    """

    recipient: str
    subject: str
    body: str
    encoded_uri: str


@dataclass(frozen=True)
class ValidationError:
    """A single failed constraint on a form field."""

    field: str
    message: str


@dataclass
class ContactOutcome:
    """
    Result of one contact form submission attempt.

    States:
    - "confirmed": message built, mail client opened, user thanked
    - "rejected": validation failed, nothing built or shown
    """

    state: Literal["confirmed", "rejected"]
    mail_message: Optional[MailMessage] = None
    errors: List[ValidationError] = field(default_factory=list)
    confirmation: Optional[str] = None
