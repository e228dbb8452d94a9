"""API difference report generation."""

from jdiffreport.report.descriptor import Descriptor, DescriptorGenerator
from jdiffreport.report.driver import (
    ReportDriver,
    ReportResult,
    ReportState,
    can_generate_report,
    copy_black_gif,
)

__all__ = [
    "Descriptor",
    "DescriptorGenerator",
    "ReportDriver",
    "ReportResult",
    "ReportState",
    "can_generate_report",
    "copy_black_gif",
]
