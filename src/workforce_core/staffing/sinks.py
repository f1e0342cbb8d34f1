"""Deliver the staffing gap report to a caller-supplied sink."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable, List, Protocol, Union, runtime_checkable

import pandas as pd

logger = logging.getLogger(__name__)


@runtime_checkable
class TextSink(Protocol):
    """Writable text stream such as an open file or ``io.StringIO``."""

    def write(self, s: str) -> Any: ...


ReportSink = Union[str, Path, List[dict], TextSink, Callable[[pd.DataFrame], Any]]


def write_report(report: pd.DataFrame, sink: ReportSink) -> None:
    """Write ``report`` to ``sink``.

    Supported sinks:
    - ``str`` / ``Path``: CSV file (UTF-8 with BOM so Excel shows it correctly),
      parent directories are created.
    - ``list``: extended with one dict per report row.
    - object with a ``write`` method: CSV text written to the stream.
    - callable: called with the report DataFrame.

    Raises:
        TypeError: If the sink type is not supported.
    """
    if isinstance(sink, (str, Path)):
        path = Path(sink)
        path.parent.mkdir(parents=True, exist_ok=True)
        report.to_csv(path, index=False, encoding="utf-8-sig")
        logger.info("Wrote %d report row(s) to %s", len(report), path)
    elif isinstance(sink, list):
        sink.extend(report.to_dict(orient="records"))
    elif isinstance(sink, TextSink):
        report.to_csv(sink, index=False)
    elif callable(sink):
        sink(report)
    else:
        raise TypeError(f"Unsupported report sink: {type(sink).__name__}")
