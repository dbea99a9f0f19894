"""Report shaping for the licensing engine output (no I/O)."""

from .ai_response import report_from_ai_response
from .fallback import build_fallback_report, business_type_name
from .prompt import build_report_messages, build_report_prompt

__all__ = [
    "build_fallback_report",
    "build_report_messages",
    "build_report_prompt",
    "business_type_name",
    "report_from_ai_response",
]
