"""Draw annotated bar charts of the stack frame layout of a function call, before, during and after the call."""

import logging
import sys
from typing import Any, Mapping, TextIO

logger = logging.getLogger(__name__)

# pylint: disable=wrong-import-position
from callstack_chart.chart import CallArgument, ChartConfig, ConfigValidationError
from callstack_chart.config import DrawConfig
from callstack_chart.draw import CallStackChartDrawer, PlotlyHtmlBackend
from callstack_chart.layout import frame_size


def create_call_stack_chart(
    options: Mapping[str, Any] | ChartConfig, out: TextIO | None = None, config: DrawConfig | None = None
) -> None:
    """Validate the chart options and write the call stack chart as HTML to `out`.

    Writes to standard output unless `out` is given, styling comes from a default DrawConfig unless `config` is given.
    Raises ConfigValidationError before writing anything if the options do not have the expected shape.
    """
    if out is None:
        out = sys.stdout
    if config is None:
        config = DrawConfig()
    backend = PlotlyHtmlBackend(out, plotly_js=config.plotly_js, full_html=config.full_html)
    CallStackChartDrawer(config, backend).draw(options)


__all__ = [
    "CallArgument",
    "CallStackChartDrawer",
    "ChartConfig",
    "ConfigValidationError",
    "DrawConfig",
    "create_call_stack_chart",
    "frame_size",
    "logger",
]
