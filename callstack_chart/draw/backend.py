"""
Module containing rendering backends, which take a declarative chart description
(bar traces, layout and render options) and produce the chart for a target container.
"""

import json
import logging
from typing import Protocol, TextIO

import plotly.graph_objects as go

logger = logging.getLogger(__name__)


def _js_string(val: str) -> str:
    # keep "</script>" inside strings from closing the script element
    return json.dumps(val).replace("</", "<\\/")


class ChartBackend(Protocol):
    """Anything that can plot a chart description into the container identified by `target_id`."""

    def new_plot(self, target_id: str, data: list[dict], layout: dict, options: dict) -> None:
        """Plot bar traces with the given layout and render options, replacing any existing chart."""

    def append_link(self, target_id: str, text: str, href: str) -> None:
        """Append an anchor element as a child of the chart container."""


class PlotlyHtmlBackend:
    """Backend that renders charts with plotly and writes them to an output stream as HTML."""

    def __init__(self, out: TextIO, plotly_js: str = "cdn", full_html: bool = False) -> None:
        self.out = out
        self.plotly_js = plotly_js
        self.full_html = full_html

    @property
    def include_plotlyjs(self) -> bool | str:
        """Map the `plotly_js` setting to the value understood by `Figure.to_html`."""
        match self.plotly_js:
            case "inline":
                return True
            case "none":
                return False
        return self.plotly_js

    def new_plot(self, target_id: str, data: list[dict], layout: dict, options: dict) -> None:
        fig = go.Figure(data=data, layout=layout)
        logger.debug("writing plotly chart %s with %d traces", target_id, len(data))
        self.out.write(
            fig.to_html(
                config=options,
                include_plotlyjs=self.include_plotlyjs,
                full_html=self.full_html,
                div_id=target_id,
            )
        )
        self.out.write("\n")

    def append_link(self, target_id: str, text: str, href: str) -> None:
        self.out.write(
            "<script>\n"
            "(function() {\n"
            '    var link = document.createElement("a");\n'
            f"    link.href = {_js_string(href)};\n"
            f"    link.textContent = {_js_string(text)};\n"
            f"    document.getElementById({_js_string(target_id)}).appendChild(link);\n"
            "})();\n"
            "</script>\n"
        )
