"""
Use cases: Manage and evaluate price and RSI alerts.

Evaluation fetches each distinct symbol once. RSI is only computed for
symbols that have an RSI alert.
"""

import logging
from dataclasses import replace
from typing import Optional
from uuid import UUID

from stockguru.application.accounts.dtos import CreateAlertCommand, UpdateAlertCommand
from stockguru.application.market.dtos import GetQuoteQuery, GetTechnicalIndicatorsQuery
from stockguru.application.market.get_quote import GetQuoteUseCase
from stockguru.application.market.get_technical_indicators import (
    GetTechnicalIndicatorsUseCase,
)
from stockguru.domain.accounts.alert_evaluator import evaluate_alert
from stockguru.domain.accounts.entities import AlertEvaluation, StockAlert
from stockguru.domain.accounts.errors import AlertNotFoundError
from stockguru.domain.accounts.ports import AlertRepository
from stockguru.domain.market.errors import MarketDomainError

logger = logging.getLogger(__name__)


class CreateAlertUseCase:
    """Creates an active alert."""

    def __init__(self, alerts: AlertRepository) -> None:
        self._alerts = alerts

    def execute(self, command: CreateAlertCommand) -> StockAlert:
        alert = self._alerts.save(
            StockAlert(
                user_id=command.user_id,
                symbol=command.symbol.upper(),
                alert_type=command.alert_type,
                target_value=command.target_value,
            )
        )
        logger.info(
            "Created %s alert on %s for user %s",
            alert.alert_type.value,
            alert.symbol,
            alert.user_id,
        )
        return alert


class ListAlertsUseCase:
    """Lists a user's active alerts."""

    def __init__(self, alerts: AlertRepository) -> None:
        self._alerts = alerts

    def execute(self, user_id: str) -> list[StockAlert]:
        return self._alerts.list_active(user_id)


class UpdateAlertUseCase:
    """Changes the target or active flag of an alert.

    Raises:
        AlertNotFoundError: If the alert does not exist.
    """

    def __init__(self, alerts: AlertRepository) -> None:
        self._alerts = alerts

    def execute(self, command: UpdateAlertCommand) -> StockAlert:
        alert = self._alerts.get(command.alert_id)
        if alert is None:
            raise AlertNotFoundError(str(command.alert_id))

        changes = {}
        if command.target_value is not None:
            changes["target_value"] = command.target_value
        if command.is_active is not None:
            changes["is_active"] = command.is_active
        return self._alerts.save(replace(alert, **changes))


class DeleteAlertUseCase:
    """Deletes an alert.

    Raises:
        AlertNotFoundError: If the alert does not exist.
    """

    def __init__(self, alerts: AlertRepository) -> None:
        self._alerts = alerts

    def execute(self, alert_id: UUID) -> None:
        if not self._alerts.delete(alert_id):
            raise AlertNotFoundError(str(alert_id))
        logger.info("Deleted alert %s", alert_id)


class EvaluateAlertsUseCase:
    """Checks a user's active alerts against live prices and RSI."""

    def __init__(
        self,
        alerts: AlertRepository,
        get_quote: GetQuoteUseCase,
        get_indicators: GetTechnicalIndicatorsUseCase,
    ) -> None:
        self._alerts = alerts
        self._get_quote = get_quote
        self._get_indicators = get_indicators

    def execute(self, user_id: str) -> list[AlertEvaluation]:
        """Return one evaluation per active alert, in listing order."""
        active = self._alerts.list_active(user_id)
        prices: dict[str, Optional[float]] = {}
        rsis: dict[str, Optional[float]] = {}

        evaluations = []
        for alert in active:
            if alert.symbol not in prices:
                prices[alert.symbol] = self._price(alert.symbol)
            rsi = None
            if alert.alert_type.needs_indicators:
                if alert.symbol not in rsis:
                    rsis[alert.symbol] = self._rsi(alert.symbol)
                rsi = rsis[alert.symbol]
            evaluations.append(evaluate_alert(alert, prices[alert.symbol], rsi))

        logger.info(
            "Evaluated %d alerts for user %s, %d triggered",
            len(evaluations),
            user_id,
            sum(1 for e in evaluations if e.triggered),
        )
        return evaluations

    def _price(self, symbol: str) -> Optional[float]:
        try:
            return self._get_quote.execute(GetQuoteQuery(symbol)).price
        except MarketDomainError as exc:
            logger.warning("No price for alert symbol %s: %s", symbol, exc.message)
            return None

    def _rsi(self, symbol: str) -> Optional[float]:
        try:
            return self._get_indicators.execute(GetTechnicalIndicatorsQuery(symbol)).rsi
        except MarketDomainError as exc:
            logger.warning("No RSI for alert symbol %s: %s", symbol, exc.message)
            return None
