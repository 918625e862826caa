from __future__ import annotations

from dataclasses import replace

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware

from application.policies.chronology_policy import ChronologyPolicy
from application.use_cases.build_pnf_chart import BuildPnFChart
from domain.entities.price_bar import PriceBar
from domain.exceptions.errors import ChartConfigurationError, DataProviderError, DomainError
from domain.indicators.pnf import TrendLineSnapshot, snapshot_trend_line
from domain.services.box_size_policy import BoxSizePolicy
from domain.services.point_and_figure_chart import PointAndFigureChart
from domain.value_objects.chart_settings import PnFChartSettings
from domain.value_objects.chart_types import BoxSizeMode, ConstructionType
from infrastructure.config.chart import load_chart_settings
from infrastructure.config.settings import load_settings
from infrastructure.storage.logging.logger import configure_domain_logging, get_logger
from interfaces.controllers.chart_controller import ChartController
from .models import (
    BoxResponse,
    BoxSizeResponse,
    ChartRequest,
    ChartResponse,
    ChartSettingsRequest,
    ColumnResponse,
    ObservationRequest,
    TrendLineResponse,
)


def _parse_enum(enum_type, value: str, field: str):
    try:
        return enum_type(value.strip().upper())
    except ValueError:
        valid = [member.value for member in enum_type]
        raise HTTPException(status_code=400, detail=f"Invalid {field}. Valid options: {valid}")


def _merge_settings(defaults: PnFChartSettings, request: ChartSettingsRequest) -> PnFChartSettings:
    overrides = {}
    if request.construction_type is not None:
        overrides["construction_type"] = _parse_enum(
            ConstructionType, request.construction_type, "construction_type"
        )
    if request.box_size_mode is not None:
        overrides["box_size_mode"] = _parse_enum(BoxSizeMode, request.box_size_mode, "box_size_mode")
    if request.box_size is not None:
        overrides["box_size"] = request.box_size
    if request.reversal_count is not None:
        overrides["reversal_count"] = request.reversal_count
    try:
        return replace(defaults, **overrides)
    except ChartConfigurationError as e:
        raise HTTPException(status_code=400, detail=str(e))


def _to_bar(observation: ObservationRequest, position: int) -> PriceBar:
    if observation.price is not None:
        return PriceBar.from_price(observation.price, observation.timestamp)
    if None in (observation.high, observation.low, observation.close):
        raise DataProviderError(
            f"Observation {position} needs either 'price' or 'high', 'low' and 'close'"
        )
    return PriceBar(
        timestamp=observation.timestamp,
        open=observation.close,
        high=observation.high,
        low=observation.low,
        close=observation.close,
    )


def _trend_line_response(snapshot: TrendLineSnapshot) -> TrendLineResponse:
    return TrendLineResponse(
        type=snapshot.line_type.value,
        start_column=snapshot.start_column,
        start_price=snapshot.start_price,
        end_column=snapshot.end_column,
        end_price=snapshot.end_price,
        box_size=snapshot.box_size,
        is_active=snapshot.is_active,
        touch_count=snapshot.touch_count,
    )


def _chart_response(chart: PointAndFigureChart) -> ChartResponse:
    manager = chart.trend_line_manager
    active = manager.active_trend_line
    return ChartResponse(
        construction_type=chart.construction_type.value,
        box_size_mode=chart.box_size_mode.value,
        box_size=chart.box_size,
        reversal_count=chart.reversal_count,
        column_count=chart.column_count,
        bias=chart.bias.value,
        columns=[
            ColumnResponse(
                index=idx,
                type=column.column_type.value,
                highest_price=column.highest_price,
                lowest_price=column.lowest_price,
                boxes=[
                    BoxResponse(price=box.price, type=box.box_type.value, marker=box.marker)
                    for box in column
                ],
            )
            for idx, column in enumerate(chart.columns)
        ],
        trend_lines=[_trend_line_response(snapshot_trend_line(line)) for line in manager.trend_lines],
        active_trend_line=_trend_line_response(snapshot_trend_line(active)) if active else None,
        prices=chart.all_prices(),
    )


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = load_settings()
    logger = get_logger(__name__, level=settings.log_level)
    configure_domain_logging(settings.log_level)
    default_chart_settings = load_chart_settings()
    chronology_policy = ChronologyPolicy()

    app = FastAPI(
        title="Point & Figure API",
        description="Builds Point-and-Figure charts and trend lines from price observations",
        version="1.0.0",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["http://localhost:3000"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/api/health")
    async def health():
        return {"status": "ok", "env": settings.env.value}

    @app.get("/api/box-size", response_model=BoxSizeResponse)
    async def get_box_size(
        price: float = Query(..., description="Reference price"),
        mode: str = Query(BoxSizeMode.AUTO.value, description="Box size mode"),
        box_size: float = Query(0.0, ge=0.0, description="Configured box size or percent"),
    ) -> BoxSizeResponse:
        """Resolve the box size for a price and snap the price to the grid."""
        box_mode = _parse_enum(BoxSizeMode, mode, "mode")
        try:
            policy = BoxSizePolicy(box_mode, box_size)
            size = policy.calculate_box_size(price)
        except ChartConfigurationError as e:
            raise HTTPException(status_code=400, detail=str(e))

        return BoxSizeResponse(
            price=price,
            mode=box_mode.value,
            box_size=size,
            rounded_up=BoxSizePolicy.round_to_multiple(price, size, round_up=True),
            rounded_down=BoxSizePolicy.round_to_multiple(price, size, round_up=False),
        )

    @app.post("/api/charts", response_model=ChartResponse)
    async def build_chart(request: ChartRequest) -> ChartResponse:
        """Build a chart from the posted observations and return columns, trend lines and bias."""
        chart_settings = _merge_settings(default_chart_settings, request.settings)
        controller = ChartController(
            build_chart=BuildPnFChart(chart_settings=chart_settings, chronology_policy=chronology_policy)
        )
        try:
            bars = [_to_bar(obs, idx) for idx, obs in enumerate(request.observations)]
            result = controller.build_from_bars(bars)
        except DataProviderError as e:
            raise HTTPException(status_code=422, detail=str(e))
        except DomainError as e:
            logger.warning("Chart build rejected: %s", str(e))
            raise HTTPException(status_code=400, detail=str(e))

        logger.info(
            "Built chart with %d columns from %d observations", result.chart.column_count, len(bars)
        )
        return _chart_response(result.chart)

    logger.info("FastAPI app created successfully")
    return app


app = create_app()
