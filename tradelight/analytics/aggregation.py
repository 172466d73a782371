"""Dashboard derivations over a collection of day logs.

Every function here is pure and accepts ``DayLog`` models or raw mappings
(as loaded from storage). Missing or malformed sub-fields count as zero or
absent instead of raising; logs without a usable date are left out of the
date-keyed views.
"""

from datetime import date
from typing import Any, Iterable, NamedTuple, Optional, Union

from tradelight.models.day_log import DayLog, is_logged_day, to_day
from tradelight.models.summary import DaySummary, FeedEntry, Progress, TradeStats
from tradelight.models.trade import coerce_number

LogLike = Union[DayLog, dict]

DEFAULT_GOAL_DAYS = 30


class _TradeFacts(NamedTuple):
    pnl: float
    instrument: str
    has_image: bool


def _log_date(log: Any) -> Optional[date]:
    if isinstance(log, DayLog):
        return log.date
    if isinstance(log, dict):
        return to_day(log.get("date"))
    return None


def _log_trades(log: Any) -> list[_TradeFacts]:
    if isinstance(log, DayLog):
        return [_TradeFacts(t.pnl, t.instrument, t.has_image) for t in log.trades]
    if not isinstance(log, dict):
        return []
    raw_trades = log.get("trades")
    if not isinstance(raw_trades, (list, tuple)):
        return []

    facts = []
    for item in raw_trades:
        if not isinstance(item, dict):
            facts.append(_TradeFacts(0.0, "", False))
            continue
        image = item.get("analysisImage", item.get("analysis_image"))
        facts.append(
            _TradeFacts(
                coerce_number(item.get("pnl"), 0.0),
                str(item.get("instrument") or ""),
                bool(image),
            )
        )
    return facts


def summarize(logs: Iterable[LogLike]) -> dict[str, DaySummary]:
    """Per-day totals for the calendar.

    Logs sharing a day key add up into one summary.

    Returns:
        Mapping of ``YYYY-MM-DD`` to the day's summary.
    """
    totals: dict[str, list] = {}
    for log in logs:
        day = _log_date(log)
        if day is None:
            continue
        trades = _log_trades(log)
        entry = totals.setdefault(day.isoformat(), [0.0, 0, False])
        entry[0] += sum(trade.pnl for trade in trades)
        entry[1] += len(trades)
        entry[2] = entry[2] or any(trade.has_image for trade in trades)

    return {
        key: DaySummary(pnl=pnl, trade_count=count, is_logged=is_logged_day(pnl, has_image))
        for key, (pnl, count, has_image) in totals.items()
    }


def flatten(logs: Iterable[LogLike]) -> list[FeedEntry]:
    """Recent-trade feed, most recent day first.

    One entry per trade. A zero-result trade on a day with a screenshot is a
    "no trade" entry; other zero-result trades are left out. Trades of the
    same day keep their original order.
    """
    entries = []
    for log in logs:
        day = _log_date(log)
        if day is None:
            continue
        trades = _log_trades(log)
        day_has_image = any(trade.has_image for trade in trades)
        for trade in trades:
            is_no_trade = day_has_image and trade.pnl == 0
            if trade.pnl == 0 and not is_no_trade:
                continue
            entries.append(
                FeedEntry(
                    date=day,
                    instrument=trade.instrument,
                    pnl=trade.pnl,
                    is_no_trade=is_no_trade,
                )
            )
    return sorted(entries, key=lambda entry: entry.date, reverse=True)


def stats(logs: Iterable[LogLike]) -> TradeStats:
    """Net P&L, average win and win rate across every trade.

    Zero-result trades count toward net P&L but not toward the win rate.
    """
    pnls = [trade.pnl for log in logs for trade in _log_trades(log)]
    if not pnls:
        return TradeStats()

    winners = [pnl for pnl in pnls if pnl > 0]
    with_result = [pnl for pnl in pnls if pnl != 0]

    avg_win = sum(winners) / len(winners) if winners else 0.0
    win_rate = (len(winners) / len(with_result) * 100) if with_result else 0.0
    return TradeStats(net_pnl=sum(pnls), avg_win=avg_win, win_rate=win_rate)


def progress(logs: Iterable[LogLike], goal: int = DEFAULT_GOAL_DAYS) -> Progress:
    """Distinct logged days against a goal. The percentage is not capped.

    Raises:
        ValueError: If ``goal`` is not positive.
    """
    if goal <= 0:
        raise ValueError("goal must be positive")

    logged_days = set()
    for log in logs:
        day = _log_date(log)
        if day is None:
            continue
        trades = _log_trades(log)
        day_pnl = sum(trade.pnl for trade in trades)
        if is_logged_day(day_pnl, any(trade.has_image for trade in trades)):
            logged_days.add(day.isoformat())

    count = len(logged_days)
    return Progress(logged_day_count=count, goal=goal, percent_of_goal=count / goal * 100)
