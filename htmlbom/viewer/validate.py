"""Consistency checks run before any output is produced."""
import logging

from htmlbom.exceptions import FieldCountMismatchError, InvalidReferenceError
from htmlbom.pcb.document import BomDocument

logger = logging.getLogger(__name__)


def check_footprint_ids(document: BomDocument) -> None:
    """Ensure every BOM row entry points at an existing footprint."""
    count = len(document.footprints)
    for rows in (document.bom_front, document.bom_back, document.bom_both):
        for row in rows:
            for refmap in row:
                if not 0 <= refmap.footprint_id < count:
                    logger.warning(
                        f"{refmap.reference} references footprint {refmap.footprint_id}, "
                        f"but only {count} footprints exist"
                    )
                    raise InvalidReferenceError(refmap.reference, refmap.footprint_id, count)


def check_field_counts(document: BomDocument) -> None:
    """Ensure every footprint has one value per field column."""
    expected = len(document.fields)
    for footprint_id, footprint in enumerate(document.footprints):
        if len(footprint.fields) != expected:
            logger.warning(
                f"Footprint {footprint_id} has {len(footprint.fields)} fields, expected {expected}"
            )
            raise FieldCountMismatchError(footprint_id, expected, len(footprint.fields))


def validate(document: BomDocument) -> None:
    """
    Validate a document.

    Footprint IDs are checked first, field counts only once all IDs are valid.

    Raises:
        InvalidReferenceError: A BOM row references a nonexistent footprint
        FieldCountMismatchError: A footprint's field count differs from document.fields
    """
    check_footprint_ids(document)
    check_field_counts(document)
