"""
Module containing configuration related to styling of produced call stack charts
and the options passed to the rendering backend.
"""

from pydantic import BaseModel
from pydantic_settings import BaseSettings, SettingsConfigDict


class DrawConfig(BaseSettings):
    """Configuration related to chart drawing, including category names, legends, colors and annotations."""

    model_config = SettingsConfigDict(env_prefix="CALLSTACK_", extra="ignore")

    class Attribution(BaseModel):
        """Link appended to the chart container after rendering, for `attribution` config."""

        text: str
        href: str

    # names of the call states on the x axis, in drawing order
    before_call_label: str = "Before Call"
    during_call_label: str = "During Call"
    after_call_label: str = "After Call"

    # legends written inside each bar segment
    return_value_legend: str = "Return Value"
    link_register_legend: str = "Link Register"
    frame_pointer_legend: str = "Frame Pointer"
    padding_legend: str = "Padding"
    # formatted with the zero-based `index` and the `name` of each call argument
    argument_legend: str = "Argument {index} ({name})"

    # caller-reserved slot for the return value, and the returned value itself
    return_variable_color: str = "lightgrey"
    return_value_color: str = "lightblue"

    # saved link register and frame pointer
    saved_register_color: str = "lightgreen"
    padding_color: str = "white"

    # outline around every segment
    outline_color: str = "black"
    outline_width: float = 1

    x_axis_title: str = "Call State"
    y_axis_title: str = "Stack Usage (Bytes)"

    # hide segment legends that would render smaller than this font size
    uniformtext_min_size: int = 8

    # annotations placed next to the "during call" frame
    annotation_color: str = "grey"
    annotation_size: int = 12
    function_call_legend: str = "Function Call"
    # formatted with the computed frame `size` in bytes
    frame_size_legend: str = "{size} Bytes"

    # horizontal line marking the call boundary at the top of the return value
    call_boundary_color: str = "black"
    call_boundary_width: float = 2

    # dashed rectangle around the "during call" frame, x in category coordinates
    frame_box_color: str = "grey"
    frame_box_width: float = 2
    frame_box_dash: str = "dot"
    frame_box_x0: float = 0.45
    frame_box_x1: float = 1.54
    frame_box_margin: float = 4

    # options for the rendered chart, static by default
    responsive: bool = True
    display_mode_bar: bool = False
    static_plot: bool = True

    # where the HTML output loads plotly.js from: "cdn", "inline", "none" or a URL/path ending in .js
    plotly_js: str = "cdn"

    # output a full HTML document instead of an embeddable <div>
    full_html: bool = False

    # optional link appended to the chart container, e.g. {"text": "source", "href": "https://..."}
    attribution: Attribution | None = None


class Config(BaseSettings):
    """All configuration settings used for this module."""

    model_config = SettingsConfigDict(env_prefix="CALLSTACK_")

    draw_config: DrawConfig = DrawConfig()
