"""
Catalog loader and consistency checks for the product showcase.

The page shows product cards and, separately, a product dropdown in the
contact form. Both lists are authored by hand in the catalog file, so
this module verifies that they describe the same products:

- every available product is offered exactly once in the dropdown
- sold products are never offered
- option labels quote the same price as the card
- product names are unique
"""
import json
import logging
import re
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional, Set

from modules.domain import (
    Catalog,
    DropdownOption,
    Product,
    OTHER_OPTION_VALUE,
)

logger = logging.getLogger(__name__)


CATALOG_REQUIRED_KEYS = [
    "title",
    "owner",
    "contact_email",
    "products",
    "dropdown",
]

PRODUCT_REQUIRED_KEYS = ["name", "description", "price", "available"]

# First "$<digits>" token in a label, e.g. "Mini Pizza - $15" -> 15
PRICE_TOKEN_PATTERN = re.compile(r"\$(\d+)")

PLACEHOLDER_LABEL = "-- Choose a product --"
OTHER_OPTION_LABEL = "Other / Custom request"


class CatalogConfigError(Exception):
    """Raised when the catalog file is malformed or missing required fields."""
    pass


class CatalogMismatch(Exception):
    """Raised when product cards and dropdown options disagree."""

    def __init__(self, problems: List[str]):
        self.problems = problems
        super().__init__(
            f"Catalog and dropdown are inconsistent: {'; '.join(problems)}"
        )


def format_price(price: Decimal) -> str:
    """
    Render a price the way cards and option labels show it.

    Example:
        >>> format_price(Decimal("45"))
        '$45'
    """
    return f"${int(price)}"


def parse_price_token(text: str) -> Optional[int]:
    """Return the integer of the first $<digits> token in text, or None."""
    match = PRICE_TOKEN_PATTERN.search(text)
    return int(match.group(1)) if match else None


def _parse_price(raw: Any, product_name: str) -> Decimal:
    if isinstance(raw, bool):
        raise CatalogConfigError(f"Invalid price for '{product_name}': {raw!r}")
    try:
        price = Decimal(str(raw))
    except (InvalidOperation, ValueError):
        raise CatalogConfigError(f"Invalid price for '{product_name}': {raw!r}")

    if not price.is_finite() or price <= 0:
        raise CatalogConfigError(
            f"Price for '{product_name}' must be a positive finite number, got {raw!r}"
        )
    return price


def _parse_product(data: Dict[str, Any], index: int) -> Product:
    if not isinstance(data, dict):
        raise CatalogConfigError(f"Product #{index} must be an object")

    missing_keys = [key for key in PRODUCT_REQUIRED_KEYS if key not in data]
    if missing_keys:
        raise CatalogConfigError(
            f"Product #{index} is missing required keys: {', '.join(missing_keys)}"
        )

    if not isinstance(data["name"], str) or not data["name"].strip():
        raise CatalogConfigError(f"Product #{index} must have a non-empty string name")
    name = data["name"].strip()

    if not isinstance(data["description"], str) or not data["description"].strip():
        raise CatalogConfigError(f"Product '{name}' must have a non-empty string description")
    description = data["description"].strip()

    if not isinstance(data["available"], bool):
        raise CatalogConfigError(f"Product '{name}': 'available' must be true or false")

    return Product(
        name=name,
        description=description,
        price=_parse_price(data["price"], name),
        available=data["available"],
    )


def _parse_option(data: Dict[str, Any], index: int) -> DropdownOption:
    if not isinstance(data, dict) or "value" not in data or "label" not in data:
        raise CatalogConfigError(
            f"Dropdown option #{index} must be an object with 'value' and 'label'"
        )

    for key in ("value", "label"):
        if not isinstance(data[key], str):
            raise CatalogConfigError(
                f"Dropdown option #{index}: '{key}' must be a string, got {data[key]!r}"
            )

    disabled = data.get("disabled", False)
    if not isinstance(disabled, bool):
        raise CatalogConfigError(
            f"Dropdown option #{index}: 'disabled' must be true or false"
        )

    return DropdownOption(value=data["value"], label=data["label"], disabled=disabled)


def load_catalog(path: str) -> Catalog:
    """
    Load and validate the catalog from a JSON file.

    Required keys in the file:
    - title, owner, contact_email: page metadata
    - products: list of {name, description, price, available}
    - dropdown: list of {value, label, disabled?}

    Only the file's shape is validated here. Whether the dropdown agrees
    with the cards is checked by validate_consistency().

    Args:
        path: Path to catalog.json

    Returns:
        Parsed Catalog

    Raises:
        FileNotFoundError: If the file doesn't exist
        CatalogConfigError: If the file is not valid JSON or is malformed
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        raise FileNotFoundError(f"Catalog file not found: {path}")
    except json.JSONDecodeError as e:
        raise CatalogConfigError(f"Invalid JSON in catalog: {e}")

    if not isinstance(data, dict):
        raise CatalogConfigError("Invalid catalog: top level must be an object")

    missing_keys = [key for key in CATALOG_REQUIRED_KEYS if key not in data]
    if missing_keys:
        raise CatalogConfigError(
            f"Missing required keys in catalog: {', '.join(missing_keys)}"
        )

    for key in ("title", "owner", "contact_email"):
        if not isinstance(data[key], str):
            raise CatalogConfigError(f"Invalid catalog: '{key}' must be a string")

    for key in ("products", "dropdown"):
        if not isinstance(data[key], list):
            raise CatalogConfigError(f"Invalid catalog: '{key}' must be a list")

    catalog = Catalog(
        title=data["title"],
        owner=data["owner"],
        contact_email=data["contact_email"],
        products=[_parse_product(item, i) for i, item in enumerate(data["products"])],
        dropdown=[_parse_option(item, i) for i, item in enumerate(data["dropdown"])],
    )

    logger.info(
        f"Loaded catalog from {path}: {len(catalog.products)} products, "
        f"{len(catalog.dropdown)} dropdown options"
    )
    return catalog


def list_available_product_names(catalog: Catalog) -> Set[str]:
    """Names of all products that can still be ordered."""
    return {product.name for product in catalog.products if product.available}


def list_sold_product_names(catalog: Catalog) -> Set[str]:
    """Names of all sold products."""
    return {product.name for product in catalog.products if not product.available}


def list_dropdown_option_names(dropdown: List[DropdownOption]) -> Set[str]:
    """Values of all dropdown options except the placeholder and "Other"."""
    return {
        option.value
        for option in dropdown
        if not option.is_placeholder and not option.is_other
    }


def validate_consistency(catalog: Catalog, dropdown: List[DropdownOption]) -> None:
    """
    Check that the dropdown mirrors the catalog's available products.

    Every problem found is collected before raising, so a single run
    reports all the edits that are needed.

    Options without a $<digits> token in their label (the placeholder and
    "Other") are exempt from the price comparison.

    Args:
        catalog: Catalog holding the product cards
        dropdown: Dropdown options to check against the cards

    Raises:
        CatalogMismatch: If the two lists disagree in any way
    """
    problems: List[str] = []

    # Duplicate card titles
    seen: Set[str] = set()
    for product in catalog.products:
        if product.name in seen:
            problems.append(f"Duplicate product name: '{product.name}'")
        seen.add(product.name)

    # Duplicate product entries in the dropdown
    option_counts: Dict[str, int] = {}
    for option in dropdown:
        if option.is_placeholder or option.is_other:
            continue
        option_counts[option.value] = option_counts.get(option.value, 0) + 1
    for value, count in option_counts.items():
        if count > 1:
            problems.append(f"Dropdown lists '{value}' {count} times")

    available = list_available_product_names(catalog)
    sold = list_sold_product_names(catalog)
    offered = list_dropdown_option_names(dropdown)

    for name in sorted(available - offered):
        problems.append(f"Available product missing from dropdown: '{name}'")

    for name in sorted(offered & sold):
        problems.append(f"Sold product offered in dropdown: '{name}'")

    for name in sorted(offered - available - sold):
        problems.append(f"Dropdown offers unknown product: '{name}'")

    # Prices quoted in option labels
    for option in dropdown:
        option_price = parse_price_token(option.label)
        if option_price is None:
            continue
        product = catalog.find_product(option.value)
        if product is None:
            continue
        if int(product.price) != option_price:
            problems.append(
                f"Price mismatch for '{option.value}': card says "
                f"{format_price(product.price)}, dropdown says ${option_price}"
            )

    if problems:
        logger.warning(f"Catalog consistency check found {len(problems)} problem(s)")
        raise CatalogMismatch(problems)


def derive_dropdown_options(catalog: Catalog) -> List[DropdownOption]:
    """
    Build the dropdown from the catalog instead of authoring it by hand.

    Returns a disabled placeholder, one option per available product in
    card order, and the catch-all "Other" entry. The result always passes
    validate_consistency() for a catalog with unique names.
    """
    options = [DropdownOption(value="", label=PLACEHOLDER_LABEL, disabled=True)]
    for product in catalog.products:
        if product.available:
            options.append(
                DropdownOption(
                    value=product.name,
                    label=f"{product.name} - {format_price(product.price)}",
                )
            )
    options.append(DropdownOption(value=OTHER_OPTION_VALUE, label=OTHER_OPTION_LABEL))
    return options


def copyright_notice(catalog: Catalog, year: Optional[int] = None) -> str:
    """Footer text, e.g. "© 2026 Lily. All rights reserved." (current year by default)."""
    year = year or datetime.now().year
    return f"© {year} {catalog.owner}. All rights reserved."
