"""HTTP API for the fee-tier router."""
