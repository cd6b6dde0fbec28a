"""Work-order field extraction interfaces."""

from .assembler import assemble_record, parse_work_order
from .engine import ExtractionResult, FieldExtractor, extract_fields
from .models import NOT_AVAILABLE, WorkOrderRecord, coerce_number

__all__ = [
    "ExtractionResult",
    "FieldExtractor",
    "NOT_AVAILABLE",
    "WorkOrderRecord",
    "assemble_record",
    "coerce_number",
    "extract_fields",
    "parse_work_order",
]
