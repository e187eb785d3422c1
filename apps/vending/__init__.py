"""
Vending App - Postcard Machine Collections

This app records cash collections from coin-operated postcard vending
machines together with the change-exchange float kept beside each machine,
and derives per-collection financial metrics.

Key Features:
- Collection validation (ranges, future dates, 4-coins-per-postcard rule)
- Duplicate rejection per (date, round, location)
- Metrics calculation: machine total, float total, postcards sold,
  revenue, cost, profit, float reconciliation flag
- Filtered, paginated listing and period summaries

Architecture:
- Models: Collection
- Services: validation, metrics calculation, collection management, summary
- Views: RESTful API with a ViewSet
- Exceptions: Domain exception hierarchy
"""
