"""Personal net worth valuation engine."""
