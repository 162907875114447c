"""
Airplane crash dashboard
========================

Interactive bar charts over the "Airplane Crashes and Fatalities Since 1908"
dataset: crashes per year, and fatalities per operator for one selected year.

- Records are loaded once in `crash_dashboard/records.py`.
- Grouping and top-N selection live in `crash_dashboard/aggregator.py`.
- Figures are built from draw commands in `crash_dashboard/renderer.py`.
- The Dash app is in `crash_dashboard/app.py`.
"""

__version__ = "0.1.0"
