"""Rule engine for detecting missing error-tracking instrumentation.

Given a project root, the ``ErrorTrackingAnalyzer`` checks the Composer
manifest for a known error-tracking SDK and, failing that, scans a fixed
set of source files for live SDK usage. It returns a single ``Result``.

Submodules
----------
- ``models``: Data types (Status, Severity, Issue, Result).
- ``patterns``: Compiled pattern catalog and hook-body inspection.
- ``engine``: The ErrorTrackingAnalyzer class.

All public names are re-exported here::

    from trackguard.core.analyzer import ErrorTrackingAnalyzer, Result, Status
"""

from trackguard.core.analyzer.models import (
    AnalyzerMetadata,
    Issue,
    Location,
    Result,
    Severity,
    Status,
)
from trackguard.core.analyzer.engine import ErrorTrackingAnalyzer

__all__ = [
    "AnalyzerMetadata",
    "ErrorTrackingAnalyzer",
    "Issue",
    "Location",
    "Result",
    "Severity",
    "Status",
]
