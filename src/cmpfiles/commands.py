"""
Unified command orchestrator for comparing files.
Single code path for the CLI and library callers. No presentation code here.
"""
from typing import Optional, Callable
import logging

from cmpfiles.core.interfaces import ByteStream
from cmpfiles.core.models import CompareParams, CompareReport
from cmpfiles.core.session import CompareSession

logger = logging.getLogger(__name__)


class CompareCommand:
    """
    Orchestrates one comparison:
    1. Open every source named in the params
    2. Build a session with the requested buffer size
    3. Run the comparison and snapshot the verdicts into a report
    4. Release every resource, whatever happened

    Usage:
        params = CompareParams.from_human_readable(["a.iso", "b.iso"], "64K")
        report = CompareCommand().execute(params, progress_callback=printer)
        if not report.all_matched:
            ...
    """

    def __init__(self, stdin: Optional[ByteStream] = None):
        self._stdin = stdin
        self.report: Optional[CompareReport] = None

    def execute(
            self,
            params: CompareParams,
            progress_callback: Optional[Callable[[str, int, Optional[int]], None]] = None
    ) -> CompareReport:
        """
        Execute the comparison with given parameters.

        Args:
            params: Validated comparison parameters
            progress_callback: (stage: str, current: int, total: Optional[int]) -> None

        Returns:
            Report with one verdict per pair, in enumeration order

        Raises:
            ConfigurationError: If parameters are invalid
            ResourceError: If a source cannot be opened or buffers cannot be allocated
        """
        logger.info(f"🔍 Comparing {len(params.identities)} sources, buffer size {params.buffer_size} bytes")

        with CompareSession.open(params.identities, params.buffer_size, stdin=self._stdin) as session:
            session.run(progress_callback=progress_callback)
            self.report = session.report()

        return self.report

    def get_report(self) -> CompareReport:
        """Get the report of the last execution."""
        if self.report is None:
            raise RuntimeError("Execute command first before accessing the report")
        return self.report
