"""Pure domain helpers (projections, OTP codes, pagination math)."""
