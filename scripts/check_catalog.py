#!/usr/bin/env python3
"""
Check that the contact form dropdown matches the product cards.

Usage:
    python scripts/check_catalog.py [path/to/catalog.json]

Defaults to the CATALOG_PATH setting (config/catalog.json).
Exits with status 1 if the catalog can't be loaded or is inconsistent.
"""

import sys
import os

# Add parent directory to path so we can import modules
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from modules.catalog import (
    load_catalog,
    validate_consistency,
    list_available_product_names,
    list_sold_product_names,
    CatalogConfigError,
    CatalogMismatch,
)
from modules.settings import get_settings


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv

    if len(argv) > 1:
        print("Usage: python check_catalog.py [catalog_file]")
        return 1

    catalog_path = argv[0] if argv else get_settings().CATALOG_PATH

    try:
        catalog = load_catalog(catalog_path)
    except (FileNotFoundError, CatalogConfigError) as e:
        print(f"✗ Error: {e}")
        return 1

    print(f"Catalog: {catalog_path}")
    print(f"  Products: {len(catalog.products)}")
    print(f"  Available: {len(list_available_product_names(catalog))}")
    print(f"  Sold: {len(list_sold_product_names(catalog))}")
    print(f"  Dropdown options: {len(catalog.dropdown)}")
    print("")

    try:
        validate_consistency(catalog, catalog.dropdown)
    except CatalogMismatch as e:
        print(f"✗ {len(e.problems)} problem(s) found:")
        for problem in e.problems:
            print(f"  • {problem}")
        return 1

    print("✓ Dropdown matches product cards")
    return 0


if __name__ == '__main__':
    sys.exit(main())
