"""Infrastructure layer - database, repositories, middleware and telemetry."""
