"""Treasury reporting: check classification, aggregation and report assembly.

Dependency direction: report_service -> report_builder -> classifier/aggregator -> records
"""

from .data_source import SqlTreasuryDataSource, TreasuryDataSource
from .records import AccountBalance, Check
from .report_service import TreasuryReportService

__all__ = [
    "AccountBalance",
    "Check",
    "SqlTreasuryDataSource",
    "TreasuryDataSource",
    "TreasuryReportService",
]
