"""
Module containing the stack frame layout of a function call, i.e. the frame size and the
ordered bar segments that make up each call state column of the chart.
"""

import logging
from dataclasses import dataclass

from callstack_chart.chart import ChartConfig
from callstack_chart.config import DrawConfig

logger = logging.getLogger(__name__)

# size in bytes of a saved register, i.e. link register and frame pointer
REGISTER_SIZE = 4


def frame_size(chart: ChartConfig) -> int | float:
    """Return the total size of the stack frame allocated during the call, in bytes."""
    return (
        (chart.return_value_size if chart.return_value_on_call_stack else 0)
        + sum(arg.size for arg in chart.call_args)
        + (REGISTER_SIZE if chart.link_register else 0)
        + REGISTER_SIZE  # frame pointer
        + chart.padding
    )


@dataclass(frozen=True, slots=True)
class BarSegment:
    """A single piece of a stacked bar, belonging to the call state column `category`."""

    category: str
    size: int | float
    color: str
    text: str


@dataclass(frozen=True, slots=True)
class FrameLayout:
    """Frame size and bar segments for a chart, in drawing order from bottom to top of each column."""

    size: int | float
    segments: tuple[BarSegment, ...]

    @classmethod
    def from_chart(cls, chart: ChartConfig, cfg: DrawConfig) -> "FrameLayout":
        """Lay out the segments of the before, during and after call columns for the given chart."""
        before, during, after = cfg.before_call_label, cfg.during_call_label, cfg.after_call_label
        ret_size = chart.return_value_size

        segments = [
            BarSegment(before, ret_size, cfg.return_variable_color, cfg.return_value_legend),
            BarSegment(
                during,
                ret_size,
                cfg.return_variable_color if chart.return_value_on_call_stack else cfg.return_value_color,
                cfg.return_value_legend,
            ),
        ]
        if chart.link_register:
            segments.append(BarSegment(during, REGISTER_SIZE, cfg.saved_register_color, cfg.link_register_legend))
        segments.append(BarSegment(during, REGISTER_SIZE, cfg.saved_register_color, cfg.frame_pointer_legend))
        segments += [
            BarSegment(during, arg.size, arg.color, cfg.argument_legend.format(index=ind, name=arg.name))
            for ind, arg in enumerate(chart.call_args)
        ]
        if chart.return_value_on_call_stack:
            segments.append(BarSegment(during, ret_size, cfg.return_value_color, cfg.return_value_legend))
        segments.append(BarSegment(during, chart.padding, cfg.padding_color, cfg.padding_legend))
        segments.append(BarSegment(after, ret_size, cfg.return_value_color, cfg.return_value_legend))

        size = frame_size(chart)
        logger.debug("frame of chart %s is %s bytes in %d segments", chart.id, size, len(segments))
        return cls(size=size, segments=tuple(segments))

    def column(self, category: str) -> list[BarSegment]:
        """Return the segments of a single call state column, bottom to top."""
        return [seg for seg in self.segments if seg.category == category]

    def dump(self) -> dict:
        """Returns a dict-valued dump of the frame layout, grouping segments by column."""
        columns: dict[str, list[dict]] = {}
        for seg in self.segments:
            columns.setdefault(seg.category, []).append({"text": seg.text, "size": seg.size, "color": seg.color})
        return {"frame_size": self.size, "columns": columns}
