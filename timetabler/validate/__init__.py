from .checks import is_clean, validate_all
from .report import format_validation_report, write_validation_report

__all__ = ["validate_all", "is_clean", "format_validation_report", "write_validation_report"]
