"""Catalog Service: static reference content for each procedure.

Read-only configuration baked into the process. Entries are rendered
verbatim by callers (equipment, contraindications, considerations,
red flags, references).

Usage:
    from procsafe.services.catalog_service import get_procedure, list_procedures
    for info in list_procedures():
        print(info.name)
"""

from .catalog import CATALOG, get_procedure, list_procedures, parse_procedure_id

__all__ = [
    "CATALOG",
    "get_procedure",
    "list_procedures",
    "parse_procedure_id",
]
