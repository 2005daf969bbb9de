"""Default request/response types used when none are injected."""
