"""
MMA App - Market Microstructure Analytics

Descriptive and heuristic analytics over order book snapshots and trade
tapes: spread, imbalance, tape pressure, volume profile, delta/CVD and
pattern detection (iceberg, spoofing, support/resistance, absorption).
"""

__version__ = "0.1.0"
__author__ = "MMA Team"
