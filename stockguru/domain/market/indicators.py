"""
Domain service: Technical indicator calculation.

Pure business logic over an ordered series of daily closing prices
(oldest first). No web framework imports. No IO. No side effects.

Computes:
    - RSI (Wilder's smoothing)
    - SMA and EMA
    - MACD line, signal line and histogram
    - Bollinger Bands (population standard deviation)

Series math runs on pandas rolling windows and ``ewm`` recurrences.
Every call builds its own Series, so concurrent calls on different
inputs never share state.
"""

import math
from collections.abc import Sequence

import pandas as pd

from stockguru.domain.market.entities import (
    BollingerBands,
    IndicatorSnapshot,
    MacdPoint,
)
from stockguru.domain.market.errors import (
    InsufficientDataError,
    InvalidPriceSeriesError,
)

MIN_SAMPLES = 50


def _check_period(period: int) -> None:
    if period < 1:
        raise ValueError(f"Indicator period must be >= 1, got {period}")


def _as_series(values: Sequence[float]) -> pd.Series:
    return pd.Series(list(values), dtype="float64")


def _wilder_average(values: pd.Series, period: int) -> pd.Series:
    """Seed with the mean of the first ``period`` values, then smooth by ``1/period``."""
    seeded = pd.concat(
        [pd.Series([values.iloc[:period].mean()]), values.iloc[period:]],
        ignore_index=True,
    )
    return seeded.ewm(alpha=1.0 / period, adjust=False).mean()


def rsi(prices: Sequence[float], period: int = 14) -> list[float]:
    """Compute Wilder's Relative Strength Index.

    The first ``period`` price changes seed the average gain and loss as
    simple means. Every later change is smoothed into the running
    averages with weight ``1/period``. Zero average loss pins RSI at 100.

    Args:
        prices: Closing prices, oldest first.
        period: Smoothing window.

    Returns:
        One RSI value per price from index ``period`` onward
        (``len(prices) - period`` values, empty if the series is too short).
    """
    _check_period(period)
    if len(prices) <= period:
        return []

    delta = _as_series(prices).diff().iloc[1:]
    avg_gain = _wilder_average(delta.clip(lower=0), period)
    avg_loss = _wilder_average(-delta.clip(upper=0), period)
    values = 100.0 - 100.0 / (1.0 + avg_gain / avg_loss)
    return values.where(avg_loss != 0, 100.0).tolist()


def sma(prices: Sequence[float], period: int) -> list[float]:
    """Compute the simple moving average for every full trailing window."""
    _check_period(period)
    return _as_series(prices).rolling(window=period).mean().iloc[period - 1 :].tolist()


def ema(prices: Sequence[float], period: int) -> list[float]:
    """Compute the exponential moving average.

    Seeded with the first price and smoothed with ``k = 2 / (period + 1)``.
    The first ``period - 1`` values are warm-up and are discarded, so the
    result has ``len(prices) - period + 1`` values and its first element
    lines up with ``prices[period - 1]``.
    """
    _check_period(period)
    if len(prices) < period:
        return []
    smoothed = _as_series(prices).ewm(span=period, adjust=False).mean()
    return smoothed.iloc[period - 1 :].tolist()


def _align_trailing(
    first: list[float],
    first_start: int,
    second: list[float],
    second_start: int,
) -> tuple[int, list[float], list[float]]:
    """Trim two derived series so element ``j`` of both refers to the same price.

    ``*_start`` is the index of the source price that each series' first
    element was computed at. Both series must end on the same source price.

    Returns:
        The shared start index and the two trimmed series.
    """
    start = max(first_start, second_start)
    first = first[start - first_start :]
    second = second[start - second_start :]
    if len(first) != len(second):
        raise ValueError(
            "Derived series do not end on the same price sample: "
            f"{len(first)} vs {len(second)} values from index {start}"
        )
    return start, first, second


def macd(
    prices: Sequence[float],
    fast: int = 12,
    slow: int = 26,
    signal: int = 9,
) -> list[MacdPoint]:
    """Compute MACD, its signal line and the histogram.

    MACD line = EMA(fast) - EMA(slow), with both EMAs aligned on the
    price they were computed at. Signal = EMA(MACD line, signal).
    Histogram = MACD - signal on the same sample.

    Returns:
        One point per sample where all three values exist, oldest first.
    """
    _check_period(fast)
    _check_period(slow)
    _check_period(signal)

    start, fast_line, slow_line = _align_trailing(
        ema(prices, fast), fast - 1, ema(prices, slow), slow - 1
    )
    macd_line = [f - s for f, s in zip(fast_line, slow_line)]

    _, macd_line, signal_line = _align_trailing(
        macd_line, start, ema(macd_line, signal), start + signal - 1
    )
    return [
        MacdPoint(macd=m, signal=s, histogram=m - s)
        for m, s in zip(macd_line, signal_line)
    ]


def bollinger_bands(
    prices: Sequence[float],
    period: int = 20,
    multiplier: float = 2.0,
) -> list[BollingerBands]:
    """Compute Bollinger Bands around the simple moving average.

    Band width is ``multiplier`` population standard deviations of the
    trailing window.
    """
    _check_period(period)
    windows = _as_series(prices).rolling(window=period)
    middle = windows.mean().iloc[period - 1 :]
    deviation = windows.std(ddof=0).iloc[period - 1 :]
    return [
        BollingerBands(upper=m + multiplier * d, middle=m, lower=m - multiplier * d)
        for m, d in zip(middle.tolist(), deviation.tolist())
    ]


class TechnicalIndicatorCalculator:
    """Computes the dashboard's indicator snapshot from closing prices.

    Stateless: configuration is fixed at construction and every call to
    ``compute`` works on its own input only.
    """

    def __init__(
        self,
        rsi_period: int = 14,
        sma_period: int = 20,
        ema_period: int = 50,
        macd_fast: int = 12,
        macd_slow: int = 26,
        macd_signal: int = 9,
        bollinger_period: int = 20,
        bollinger_multiplier: float = 2.0,
        min_samples: int = MIN_SAMPLES,
    ) -> None:
        self._rsi_period = rsi_period
        self._sma_period = sma_period
        self._ema_period = ema_period
        self._macd_fast = macd_fast
        self._macd_slow = macd_slow
        self._macd_signal = macd_signal
        self._bollinger_period = bollinger_period
        self._bollinger_multiplier = bollinger_multiplier
        self._min_samples = min_samples

    @property
    def required_samples(self) -> int:
        """Smallest series length for which every indicator has a value."""
        return max(
            self._min_samples,
            self._rsi_period + 1,
            self._sma_period,
            self._ema_period,
            max(self._macd_fast, self._macd_slow) + self._macd_signal - 1,
            self._bollinger_period,
        )

    def compute(self, prices: Sequence[float]) -> IndicatorSnapshot:
        """Compute the latest value of every indicator.

        Args:
            prices: Closing prices, oldest first.

        Returns:
            A new IndicatorSnapshot.

        Raises:
            InvalidPriceSeriesError: If a price is non-finite or negative.
            InsufficientDataError: If the series is shorter than
                ``required_samples``. No partial snapshot is produced.
        """
        series = _validated(prices)
        if len(series) < self.required_samples:
            raise InsufficientDataError(self.required_samples, len(series))

        latest_macd = macd(
            series, self._macd_fast, self._macd_slow, self._macd_signal
        )[-1]
        return IndicatorSnapshot(
            rsi=rsi(series, self._rsi_period)[-1],
            macd=latest_macd.macd,
            signal=latest_macd.signal,
            histogram=latest_macd.histogram,
            sma20=sma(series, self._sma_period)[-1],
            ema50=ema(series, self._ema_period)[-1],
            bollinger=bollinger_bands(
                series, self._bollinger_period, self._bollinger_multiplier
            )[-1],
        )


def _validated(prices: Sequence[float]) -> list[float]:
    series = [float(price) for price in prices]
    for index, value in enumerate(series):
        if not math.isfinite(value) or value < 0:
            raise InvalidPriceSeriesError(index, value)
    return series


def compute_indicators(prices: Sequence[float]) -> IndicatorSnapshot:
    """Compute the standard snapshot (RSI-14, SMA-20, EMA-50, MACD 12/26/9, BB 20/2)."""
    return TechnicalIndicatorCalculator().compute(prices)
