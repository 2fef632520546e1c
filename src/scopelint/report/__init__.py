from scopelint.report.aggregator import ReportAggregator, ReportEntry, Summary

__all__ = ["ReportAggregator", "ReportEntry", "Summary"]
