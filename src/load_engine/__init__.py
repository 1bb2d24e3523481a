"""Training load engine: load models, CTL/ATL recurrence and chain sync."""
