"""Notice analysis logic for license-notice."""
from license_notice.analysis.grouping import NoticeGrouper

__all__ = ["NoticeGrouper"]
