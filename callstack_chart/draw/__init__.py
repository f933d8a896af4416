"""Submodule containing chart drawing functionality, given call stack chart options."""

from .backend import ChartBackend, PlotlyHtmlBackend
from .draw import CallStackChartDrawer, ChartDescription

__all__ = ["CallStackChartDrawer", "ChartBackend", "ChartDescription", "PlotlyHtmlBackend"]
