"""
Indicator catalog helpers.

Indicators are precomputed upstream; this only labels and places them.
"""

from app.schemas.bars import IndicatorPane

# Prefix -> pane. Anything unmatched is drawn over price.
PANE_PREFIXES = (
    ("rsi", IndicatorPane.RSI),
    ("atr", IndicatorPane.ATR),
)


def classify_pane(indicator_id: str) -> IndicatorPane:
    """Pick the chart pane for an indicator column by its name prefix."""
    for prefix, pane in PANE_PREFIXES:
        if indicator_id.startswith(prefix):
            return pane
    return IndicatorPane.PRICE


def indicator_label(indicator_id: str) -> str:
    """'rsi_14_ema' -> 'RSI 14 EMA'."""
    return indicator_id.replace("_", " ").upper()
