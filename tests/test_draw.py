"""Tests for describing call stack charts and handing them to rendering backends."""

from __future__ import annotations

import logging
from io import StringIO

import pytest

from callstack_chart import create_call_stack_chart
from callstack_chart.chart import ConfigValidationError
from callstack_chart.config import DrawConfig
from callstack_chart.draw import CallStackChartDrawer, PlotlyHtmlBackend


def test_draw_hands_description_to_backend(chart_options: dict, backend) -> None:
    """One plot call for the chart container, with a trace per segment."""

    desc = CallStackChartDrawer(DrawConfig(), backend).draw(chart_options)

    assert len(backend.calls) == 1
    method, target_id, data, layout, options = backend.calls[0]
    assert (method, target_id) == ("new_plot", "call-stack-chart")
    assert data == desc.data
    assert [trace["text"] for trace in data] == [
        "Return Value",
        "Return Value",
        "Link Register",
        "Frame Pointer",
        "Argument 0 (x)",
        "Padding",
        "Return Value",
    ]
    assert [trace["x"] for trace in data] == [["Before Call"]] + [["During Call"]] * 5 + [["After Call"]]
    assert layout["barmode"] == "stack"
    assert options == {"responsive": True, "displayModeBar": False, "staticPlot": True}


def test_bar_trace_shape(chart_options: dict, backend) -> None:
    """Each trace is a single outlined bar with its legend centred inside."""

    desc = CallStackChartDrawer(DrawConfig(), backend).describe(chart_options)

    assert desc.data[4] == {
        "x": ["During Call"],
        "y": [4],
        "type": "bar",
        "hoverinfo": "y",
        "marker": {"color": "red", "line": {"color": "black", "width": 1}},
        "textposition": "inside",
        "insidetextanchor": "middle",
        "text": "Argument 0 (x)",
    }


def test_layout_annotations_and_shapes(chart_options: dict, backend) -> None:
    """Frame annotations and overlays are placed from the return value size and frame size."""

    layout = CallStackChartDrawer(DrawConfig(), backend).describe(chart_options).layout

    assert layout["title"] == {"text": "foo(x)"}
    assert layout["xaxis"]["title"] == {"text": "Call State"}
    assert layout["yaxis"] == {"title": {"text": "Stack Usage (Bytes)"}, "range": [0, 32]}
    assert layout["showlegend"] is False

    function_call, size_label = layout["annotations"]
    assert (function_call["text"], function_call["y"], function_call["textangle"]) == ("Function Call", 12, 270)
    assert (size_label["text"], size_label["y"]) == ("16 Bytes", 22)

    boundary, frame_box = layout["shapes"]
    assert (boundary["type"], boundary["y0"], boundary["y1"]) == ("line", 4, 4)
    assert (frame_box["type"], frame_box["y0"], frame_box["y1"]) == ("rect", 0, 24)
    assert frame_box["line"]["dash"] == "dot"


def test_y_max_is_not_clamped(chart_options: dict, backend, caplog: pytest.LogCaptureFixture) -> None:
    """A yMax below the frame is kept as given and a warning is logged."""

    with caplog.at_level(logging.WARNING, logger="callstack_chart"):
        desc = CallStackChartDrawer(DrawConfig(), backend).describe(chart_options | {"yMax": 10})

    assert desc.layout["yaxis"]["range"] == [0, 10]
    assert "clipped" in caplog.text


def test_invalid_options_do_not_reach_backend(chart_options: dict, backend) -> None:
    """Validation fails before anything is drawn."""

    with pytest.raises(ConfigValidationError) as exc_info:
        CallStackChartDrawer(DrawConfig(), backend).draw(chart_options | {"linkRegister": "true"})

    assert exc_info.value.field == "linkRegister"
    assert backend.calls == []


def test_attribution_link_appended_after_plot(chart_options: dict, backend) -> None:
    """The configured attribution link is appended to the chart container once it is plotted."""

    cfg = DrawConfig(attribution={"text": "stack frames explained", "href": "https://example.com/frames"})
    CallStackChartDrawer(cfg, backend).draw(chart_options)

    assert [call[0] for call in backend.calls] == ["new_plot", "append_link"]
    assert backend.calls[1] == ("append_link", "call-stack-chart", "stack frames explained", "https://example.com/frames")


def test_no_attribution_by_default(chart_options: dict, backend) -> None:
    CallStackChartDrawer(DrawConfig(), backend).draw(chart_options)

    assert [call[0] for call in backend.calls] == ["new_plot"]


@pytest.mark.parametrize(
    ("plotly_js", "expected"),
    [("cdn", "cdn"), ("inline", True), ("none", False), ("js/plotly.min.js", "js/plotly.min.js")],
)
def test_plotly_js_setting(plotly_js: str, expected: bool | str) -> None:
    assert PlotlyHtmlBackend(StringIO(), plotly_js=plotly_js).include_plotlyjs == expected


def test_create_call_stack_chart_writes_html(chart_options: dict) -> None:
    """The plotly backend writes a div for the chart id containing the segment legends."""

    out = StringIO()
    create_call_stack_chart(chart_options, out=out, config=DrawConfig(plotly_js="none"))
    html = out.getvalue()

    assert 'id="call-stack-chart"' in html
    assert "Frame Pointer" in html
    assert "16 Bytes" in html
    assert "<html>" not in html


def test_create_call_stack_chart_full_html_with_attribution(chart_options: dict) -> None:
    """Full documents end with a script appending the attribution link to the chart container."""

    out = StringIO()
    cfg = DrawConfig(
        plotly_js="none",
        full_html=True,
        attribution={"text": "</script>source", "href": "https://example.com/source"},
    )
    create_call_stack_chart(chart_options, out=out, config=cfg)
    html = out.getvalue()

    assert "<html>" in html
    assert 'document.getElementById("call-stack-chart").appendChild(link);' in html
    assert 'link.href = "https://example.com/source";' in html
    assert 'link.textContent = "<\\/script>source";' in html


def test_create_call_stack_chart_writes_nothing_when_invalid(chart_options: dict) -> None:
    out = StringIO()

    with pytest.raises(ConfigValidationError):
        create_call_stack_chart(chart_options | {"callArgs": None}, out=out)

    assert out.getvalue() == ""


def test_whole_float_frame_size_prints_as_integer(chart_options: dict, backend) -> None:
    """A frame size of 16.0 bytes is labelled "16 Bytes", fractional sizes keep their fraction."""

    drawer = CallStackChartDrawer(DrawConfig(), backend)

    whole = drawer.describe(chart_options | {"padding": 4.0}).layout["annotations"][1]["text"]
    fractional = drawer.describe(chart_options | {"padding": 4.5}).layout["annotations"][1]["text"]

    assert whole == "16 Bytes"
    assert fractional == "16.5 Bytes"


def test_describe_rejects_missing_options(backend) -> None:
    with pytest.raises(ConfigValidationError):
        CallStackChartDrawer(DrawConfig(), backend).describe(None)  # type: ignore[arg-type]

    assert backend.calls == []
