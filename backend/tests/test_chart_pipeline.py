"""
Tests for the chart pipeline service and the chart session.
"""

import threading

import pytest

from forexchart.schemas.chart import ChartUploadRequest, NotificationSeverity
from forexchart.schemas.indicators import IndicatorConfig
from forexchart.services.base import (
    EmptyResultError,
    ParseError,
    ProcessingTimeoutError,
    ServiceError,
)
from forexchart.services.chart import ChartService, ChartSession, notification_for
from forexchart.services.indicators import IndicatorService


class BlockingIndicatorService(IndicatorService):
    """Indicator engine that waits until released."""

    def __init__(self):
        self.release = threading.Event()

    def calculate(self, candles, config):
        self.release.wait(timeout=5)
        return super().calculate(candles, config)


class FailingIndicatorService(IndicatorService):
    def calculate(self, candles, config):
        raise RuntimeError("boom")


class TestChartService:
    @pytest.mark.asyncio
    async def test_process_upload(self, wave_csv):
        service = ChartService(indicator_service=IndicatorService())

        data = await service.process_upload(wave_csv, IndicatorConfig.default())

        assert len(data.candles) == 120
        assert len(data.volume_profile) == 30
        assert data.levels
        assert data.candles[19].sma20 is not None
        assert data.candles[19].atr is None

    @pytest.mark.asyncio
    async def test_execute(self, wave_csv):
        service = ChartService(indicator_service=IndicatorService())
        request = ChartUploadRequest(csv_text=wave_csv, indicators=IndicatorConfig(rsi=True))

        data = await service.execute(request)

        assert data.indicators == IndicatorConfig(rsi=True)
        assert data.candles[14].rsi is not None

    @pytest.mark.asyncio
    async def test_no_valid_rows(self):
        service = ChartService(indicator_service=IndicatorService())
        text = "ticker,date,time,open,high,low,close,volume\nX,2023-06-01,00:00,a,b,c,d,e\n"

        with pytest.raises(EmptyResultError):
            await service.process_upload(text, IndicatorConfig.default())

    @pytest.mark.asyncio
    async def test_malformed_csv(self):
        service = ChartService(indicator_service=IndicatorService())

        with pytest.raises(ParseError):
            await service.process_upload('header\n"unterminated', IndicatorConfig.default())

    @pytest.mark.asyncio
    async def test_timeout(self, wave_csv):
        indicators = BlockingIndicatorService()
        service = ChartService(indicator_service=indicators)

        try:
            with pytest.raises(ProcessingTimeoutError) as exc_info:
                await service.process_upload(wave_csv, IndicatorConfig.default(), timeout=0.05)
        finally:
            indicators.release.set()

        assert exc_info.value.details == {"timeout_seconds": 0.05}
        assert exc_info.value.__cause__ is not None

    @pytest.mark.asyncio
    async def test_recalculate(self, wave_candles):
        service = ChartService(indicator_service=IndicatorService())

        data = await service.recalculate(wave_candles, IndicatorConfig(macd=True))

        assert len(data.candles) == len(wave_candles)
        assert data.candles[33].macd is not None
        assert data.candles[33].sma20 is None

    @pytest.mark.asyncio
    async def test_health_check(self):
        assert await ChartService(indicator_service=IndicatorService()).health_check()


class TestNotifications:
    @pytest.mark.parametrize(
        "error, message",
        [
            (EmptyResultError("x", "empty"), "No valid data found in the file"),
            (ProcessingTimeoutError("x", "slow"), "Data processing timed out"),
            (ParseError("x", "bad quote"), "Error loading data: bad quote"),
            (ServiceError("x", "custom"), "custom"),
            (RuntimeError("boom"), "Failed to process the file. Please check the file format and try again."),
        ],
    )
    def test_messages(self, error, message):
        notification = notification_for(error)

        assert notification.message == message
        assert notification.severity == NotificationSeverity.ERROR


class TestChartSession:
    @pytest.fixture
    def session(self):
        return ChartSession(service=ChartService(indicator_service=IndicatorService()))

    @pytest.mark.asyncio
    async def test_empty_view(self, session):
        view = session.view()

        assert view.candles == []
        assert view.total_count == 0
        assert not session.has_data

    @pytest.mark.asyncio
    async def test_successful_upload(self, session, wave_csv):
        outcome = await session.upload(ChartUploadRequest(csv_text=wave_csv))

        assert outcome.ok
        assert outcome.response.notification.message == "Data loaded successfully"
        assert outcome.response.notification.severity == NotificationSeverity.SUCCESS
        assert outcome.response.total_count == 120
        assert outcome.response.display_count == 120
        assert session.indicators == IndicatorConfig.default()

    @pytest.mark.asyncio
    async def test_failed_upload_keeps_previous_data(self, session, wave_csv):
        await session.upload(ChartUploadRequest(csv_text=wave_csv))
        previous = session.data

        outcome = await session.upload(ChartUploadRequest(csv_text='a\n"broken'))

        assert not outcome.ok
        assert isinstance(outcome.error, ParseError)
        assert outcome.response.notification.message.startswith("Error loading data:")
        assert outcome.response.total_count == 120
        assert session.data is previous

    @pytest.mark.asyncio
    async def test_empty_upload_on_fresh_session(self, session):
        outcome = await session.upload(ChartUploadRequest(csv_text="header only"))

        assert isinstance(outcome.error, EmptyResultError)
        assert outcome.response.candles == []
        assert outcome.response.notification.message == "No valid data found in the file"

    @pytest.mark.asyncio
    async def test_negative_volume_row_skipped(self, session):
        text = (
            "ticker,date,time,open,high,low,close,volume\n"
            "EURUSD,2023-06-01,00:00,1.07,1.08,1.06,1.075,-100\n"
            "EURUSD,2023-06-02,00:00,1.07,1.08,1.06,1.072,50\n"
        )

        outcome = await session.upload(ChartUploadRequest(csv_text=text))

        assert outcome.ok
        assert outcome.response.total_count == 1
        assert sum(level.volume for level in outcome.response.volume_profile) == 50

    @pytest.mark.asyncio
    async def test_unexpected_error_wrapped(self, wave_csv):
        session = ChartSession(service=ChartService(indicator_service=FailingIndicatorService()))

        outcome = await session.upload(ChartUploadRequest(csv_text=wave_csv))

        assert isinstance(outcome.error, ServiceError)
        assert outcome.error.details == {"cause": "boom"}
        assert outcome.response.notification.message.startswith("Failed to process the file")

    @pytest.mark.asyncio
    async def test_downsampled_view(self, session, long_wave_csv):
        outcome = await session.upload(
            ChartUploadRequest(csv_text=long_wave_csv, target_length=1000)
        )

        assert outcome.response.total_count == 2500
        assert outcome.response.display_count == 834
        assert session.view(full=True).display_count == 2500

    @pytest.mark.asyncio
    async def test_set_indicators_recalculates(self, session, wave_csv):
        await session.upload(
            ChartUploadRequest(csv_text=wave_csv, indicators=IndicatorConfig(sma=True))
        )

        outcome = await session.set_indicators(IndicatorConfig(rsi=True))

        assert outcome.ok
        candles = outcome.response.candles
        assert all(c.sma20 is None for c in candles)
        assert candles[14].rsi is not None
        assert session.indicators == IndicatorConfig(rsi=True)

    @pytest.mark.asyncio
    async def test_set_indicators_without_data(self, session):
        outcome = await session.set_indicators(IndicatorConfig(atr=True))

        assert outcome.response.candles == []
        assert session.indicators == IndicatorConfig(atr=True)

    @pytest.mark.asyncio
    async def test_custom_aggregates(self, session, wave_csv):
        assert session.volume_profile(10) == []

        await session.upload(ChartUploadRequest(csv_text=wave_csv))

        assert len(session.volume_profile(10)) == 10
        assert session.support_resistance(5, 0.001)

    @pytest.mark.asyncio
    async def test_clear(self, session, wave_csv):
        await session.upload(ChartUploadRequest(csv_text=wave_csv))
        session.clear()

        assert not session.has_data
