import argparse
from dataclasses import replace

from application.policies.chronology_policy import ChronologyPolicy
from application.use_cases.build_pnf_chart import BuildPnFChart
from domain.exceptions.errors import DomainError
from domain.value_objects.chart_settings import PnFChartSettings
from domain.value_objects.chart_types import BoxSizeMode, ConstructionType
from infrastructure.config.chart import load_chart_settings
from infrastructure.config.settings import load_settings
from infrastructure.data_providers.csv_price_loader import CsvPriceLoader
from infrastructure.storage.logging.logger import configure_domain_logging, get_logger
from interfaces.controllers.chart_controller import ChartController
from interfaces.presenters.console_presenter import format_chart, format_summary, format_trend_lines

_CONSTRUCTION_CHOICES = {
    "close": ConstructionType.CLOSING_PRICE,
    "high_low": ConstructionType.HIGH_LOW,
}


def build_controller(chart_settings: PnFChartSettings) -> ChartController:
    build_chart = BuildPnFChart(chart_settings=chart_settings, chronology_policy=ChronologyPolicy())
    return ChartController(build_chart=build_chart)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Build a Point & Figure chart from a CSV price file.")
    parser.add_argument("--file", help="CSV file with timestamp,date,open,high,low,close rows.")
    parser.add_argument(
        "--construction",
        choices=sorted(_CONSTRUCTION_CHOICES),
        help="Price construction method (default from PNF_CONSTRUCTION_TYPE).",
    )
    parser.add_argument(
        "--box-mode",
        choices=[mode.value for mode in BoxSizeMode],
        help="Box size mode (default from PNF_BOX_SIZE_MODE).",
    )
    parser.add_argument("--box-size", type=float, help="Box size in price units, or percent in PERCENTAGE mode.")
    parser.add_argument("--reversal", type=int, help="Number of boxes needed for a reversal.")
    parser.add_argument("--limit", type=int, help="Only chart the most recent N bars.")
    parser.add_argument("--grid", action="store_true", help="Print the chart grid and trend lines.")
    return parser.parse_args()


def resolve_chart_settings(args: argparse.Namespace) -> PnFChartSettings:
    """Environment defaults overridden by whatever was passed on the command line."""
    overrides = {}
    if args.construction:
        overrides["construction_type"] = _CONSTRUCTION_CHOICES[args.construction]
    if args.box_mode:
        overrides["box_size_mode"] = BoxSizeMode(args.box_mode)
    if args.box_size is not None:
        overrides["box_size"] = args.box_size
    if args.reversal is not None:
        overrides["reversal_count"] = args.reversal
    return replace(load_chart_settings(), **overrides)


def main() -> None:
    settings = load_settings()
    logger = get_logger(__name__, level=settings.log_level)
    configure_domain_logging(settings.log_level)

    args = parse_args()
    path = args.file or settings.data_file
    if not path:
        logger.error("A price file is required (--file or PNF_DATA_FILE).")
        raise SystemExit(1)

    try:
        controller = build_controller(resolve_chart_settings(args))
        result = controller.build_from_source(CsvPriceLoader(path), limit=args.limit)
    except (DomainError, ValueError) as exc:
        logger.error("Could not build chart: %s", exc)
        raise SystemExit(1) from exc

    print(format_summary(result.chart))
    if args.grid:
        print()
        print(format_chart(result.chart))
        print()
        print(format_trend_lines(result.chart.trend_line_manager))


if __name__ == "__main__":
    main()
