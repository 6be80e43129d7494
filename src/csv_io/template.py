# src/csv_io/template.py
"""Static CSV template describing the import columns."""
import csv
import io

TEMPLATE_REQUIRED_HEADERS = [
    "symbol",
    "entry_price",
    "exit_price",
    "quantity",
    "trade_type",
    "entry_date",
    "entry_time",
    "exit_date",
    "exit_time",
]

TEMPLATE_OPTIONAL_HEADERS = [
    "stop_loss",
    "strategy",
    "outcome",
    "notes",
    "chart_link",
    "vix",
    "call_iv",
    "put_iv",
    "strike_price",
    "option_type",
    "vwap_position",
    "ema_position",
    "market_condition",
    "timeframe",
    "trade_direction",
    "exit_reason",
    "entry_emotion",
    "exit_emotion",
]

TEMPLATE_HEADERS = TEMPLATE_REQUIRED_HEADERS + TEMPLATE_OPTIONAL_HEADERS

TEMPLATE_INSTRUCTIONS = {
    "symbol": "Required",
    "entry_price": "Required",
    "exit_price": "Optional",
    "quantity": "Required",
    "trade_type": "Required: options, futures, equity",
    "entry_date": "Required (DD-MM-YYYY)",
    "entry_time": "Required (HH:MM)",
    "exit_date": "Optional (DD-MM-YYYY)",
    "exit_time": "Optional (HH:MM)",
    "stop_loss": "Optional",
    "strategy": "Optional",
    "outcome": "Optional: profit, loss, breakeven",
    "notes": "Optional",
    "chart_link": "Optional: URL to chart image",
    "vix": "Optional: volatility index",
    "call_iv": "Optional: call implied volatility",
    "put_iv": "Optional: put implied volatility",
    "strike_price": "Optional: for options",
    "option_type": "Optional: call, put",
    "vwap_position": "Optional: above_vwap, below_vwap",
    "ema_position": "Optional: above_20ema, below_20ema",
    "market_condition": "Optional: trending, ranging, news_driven, volatile",
    "timeframe": "Optional: 1min, 5min, 15min, 1hr",
    "trade_direction": "Optional: long, short",
    "exit_reason": "Optional: stop_loss, target, manual, time_based",
    "entry_emotion": "Optional: fear, greed, fomo, revenge, neutral, confident",
    "exit_emotion": "Optional: satisfied, regretful, relieved, frustrated",
}

TEMPLATE_EXAMPLE = {
    "symbol": "NIFTY",
    "entry_price": "100.50",
    "exit_price": "105.75",
    "quantity": "10",
    "trade_type": "options",
    "entry_date": "01-06-2023",
    "entry_time": "10:30",
    "exit_date": "01-06-2023",
    "exit_time": "14:45",
    "stop_loss": "95.00",
    "strategy": "Trendline Breakout",
    "outcome": "profit",
    "notes": "This is a sample trade",
    "chart_link": "https://tradingview.com/chart/sample",
    "vix": "15.5",
    "call_iv": "30",
    "put_iv": "28",
    "strike_price": "100",
    "option_type": "call",
    "vwap_position": "above_vwap",
    "ema_position": "above_20ema",
    "market_condition": "trending",
    "timeframe": "5min",
    "trade_direction": "long",
    "exit_reason": "target",
    "entry_emotion": "confident",
    "exit_emotion": "satisfied",
}


def build_template_csv() -> str:
    """Header row, an instructions row and one example row."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(TEMPLATE_HEADERS)
    writer.writerow([TEMPLATE_INSTRUCTIONS[h] for h in TEMPLATE_HEADERS])
    writer.writerow([TEMPLATE_EXAMPLE[h] for h in TEMPLATE_HEADERS])
    return buffer.getvalue()
