"""Resolution, acquisition, persistence and reconciliation logic."""
