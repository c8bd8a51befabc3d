"""
Domain service: Alert evaluation.

Checks user alerts against a live price and, for RSI alerts, the latest
RSI. No IO.
"""

from typing import Optional

from stockguru.domain.accounts.entities import (
    AlertEvaluation,
    AlertType,
    StockAlert,
)


def evaluate_alert(
    alert: StockAlert,
    price: Optional[float],
    rsi: Optional[float],
) -> AlertEvaluation:
    """Decide whether an alert's condition currently holds.

    Args:
        alert: The alert to check.
        price: Latest price of the alert's symbol, None if unavailable.
        rsi: Latest RSI of the alert's symbol, None if unavailable.

    Returns:
        The evaluation. Missing data never triggers an alert.
    """
    target = float(alert.target_value)
    observed = rsi if alert.alert_type.needs_indicators else price

    if observed is None:
        return AlertEvaluation(
            alert=alert,
            triggered=False,
            observed_value=None,
            reason="No live data available",
        )

    if alert.alert_type is AlertType.PRICE_ABOVE:
        triggered = observed >= target
        reason = f"Price {observed:.2f} {'>=' if triggered else '<'} {target:.2f}"
    elif alert.alert_type is AlertType.PRICE_BELOW:
        triggered = observed <= target
        reason = f"Price {observed:.2f} {'<=' if triggered else '>'} {target:.2f}"
    elif alert.alert_type is AlertType.RSI_OVERBOUGHT:
        triggered = observed >= target
        reason = f"RSI {observed:.1f} {'>=' if triggered else '<'} {target:.1f}"
    else:
        triggered = observed <= target
        reason = f"RSI {observed:.1f} {'<=' if triggered else '>'} {target:.1f}"

    return AlertEvaluation(
        alert=alert,
        triggered=triggered,
        observed_value=observed,
        reason=reason,
    )
