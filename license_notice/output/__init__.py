"""Output formatters for license-notice."""

from license_notice.output.summary import SummaryFormatter
from license_notice.output.text import TextNoticeFormatter

__all__ = [
    "SummaryFormatter",
    "TextNoticeFormatter",
]
