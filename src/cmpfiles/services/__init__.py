from cmpfiles.services.report_service import ReportService, ALL_MATCHED_MESSAGE

__all__ = ["ReportService", "ALL_MATCHED_MESSAGE"]
