"""
SSL Channel / Trend Fusion signal engine.

Provides unified interfaces for:
- Data loading and time-range window selection
- Indicator calculations (SMA/EMA, RSI, SSL Channel, Trend Fusion)
- Signal generation (confluence of both indicators)
"""
