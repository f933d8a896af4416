"""
Given the options of a function call (in a yaml) with its return value, arguments, link register
usage and padding, print an HTML chart of its stack frame layout before, during and after the call.
"""

import logging
import sys
from argparse import ArgumentParser, FileType, Namespace
from importlib.metadata import version

import yaml

from callstack_chart import logger
from callstack_chart.chart import ChartConfig
from callstack_chart.config import Config, DrawConfig
from callstack_chart.draw import CallStackChartDrawer, PlotlyHtmlBackend
from callstack_chart.layout import FrameLayout


def _load_chart(args: Namespace, config: Config) -> dict:
    """Read chart options from the yaml, merging any `draw_config` it contains into the active config."""
    chart_data = yaml.safe_load(args.chart_yaml)
    assert isinstance(chart_data, dict), "Chart options need to be specified as a mapping in chart_yaml"

    if custom_config := chart_data.pop("draw_config", None):
        assert isinstance(custom_config, dict), "The `draw_config` field in chart_yaml needs to be a mapping"
        config.draw_config = DrawConfig.model_validate(config.draw_config.model_dump() | custom_config)

    logger.debug("chart options: %s", chart_data)
    return chart_data


def draw(args: Namespace, config: Config) -> None:
    """Draw the call stack chart in HTML format to stdout."""
    chart_data = _load_chart(args, config)
    if args.full_html:
        config.draw_config = config.draw_config.model_copy(update={"full_html": True})
    if args.plotly_js:
        config.draw_config = config.draw_config.model_copy(update={"plotly_js": args.plotly_js})

    cfg = config.draw_config
    drawer = CallStackChartDrawer(cfg, PlotlyHtmlBackend(args.output, plotly_js=cfg.plotly_js, full_html=cfg.full_html))
    drawer.draw(chart_data)


def frame(args: Namespace, config: Config) -> None:
    """Dump the frame size and segments of each call state column as YAML to stdout."""
    chart_data = _load_chart(args, config)
    layout = FrameLayout.from_chart(ChartConfig.from_options(chart_data), config.draw_config)
    yaml.safe_dump(layout.dump(), args.output, sort_keys=False, allow_unicode=True)


def dump_config(args: Namespace, config: Config) -> None:
    """Dump the currently active config, either default or parsed from args."""
    yaml.safe_dump(config.model_dump(), args.output, sort_keys=False, allow_unicode=True)


def main() -> None:
    """Parse the configuration and print the chart using CallStackChartDrawer."""
    parser = ArgumentParser(description=__doc__)
    parser.add_argument("-v", "--version", action="version", version=version("callstack-chart"))
    parser.add_argument("-d", "--debug", action="store_true")
    parser.add_argument(
        "-c",
        "--config",
        help="A YAML file containing settings for drawing, "
        "default can be dumped using `dump-config` command and to be modified",
        type=FileType("rt", encoding="utf-8"),
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    draw_p = subparsers.add_parser("draw", help="draw an HTML chart of the call stack frame")
    draw_p.add_argument(
        "chart_yaml",
        help='YAML file (or stdin for "-") containing chart options: id, title, returnValueSize, '
        "returnValueOnCallStack, callArgs, linkRegister, padding and yMax",
        type=FileType("rt", encoding="utf-8"),
    )
    draw_p.add_argument("--full-html", help="Output a full HTML document instead of a <div>", action="store_true")
    draw_p.add_argument(
        "--plotly-js",
        help='Where to load plotly.js from: "cdn", "inline", "none" or a URL/path ending in .js',
    )
    draw_p.add_argument(
        "-o",
        "--output",
        help="Output to path instead of stdout",
        type=FileType("wt", encoding="utf-8"),
        default=sys.stdout,
    )

    frame_p = subparsers.add_parser(
        "frame", help="print the frame size and bar segments of each call state as YAML, without drawing"
    )
    frame_p.add_argument(
        "chart_yaml",
        help='YAML file (or stdin for "-") containing chart options, same as for the `draw` command',
        type=FileType("rt", encoding="utf-8"),
    )
    frame_p.add_argument(
        "-o",
        "--output",
        help="Output to path instead of stdout",
        type=FileType("wt", encoding="utf-8"),
        default=sys.stdout,
    )

    dump_p = subparsers.add_parser(
        "dump-config", help="dump default draw config to stdout that can be passed to -c/--config option"
    )
    dump_p.add_argument(
        "-o",
        "--output",
        help="Output to path instead of stdout",
        type=FileType("wt", encoding="utf-8"),
        default=sys.stdout,
    )

    args = parser.parse_args()

    logging.basicConfig(format="%(levelname)s: %(name)s: %(message)s")
    if args.debug:
        logger.setLevel(logging.DEBUG)

    config = Config.model_validate(yaml.safe_load(args.config)) if args.config else Config()

    match args.command:
        case "draw":
            draw(args, config)
        case "frame":
            frame(args, config)
        case "dump-config":
            dump_config(args, config)


if __name__ == "__main__":
    main()
