"""Tests for tracing setup."""

from opentelemetry.sdk.trace import TracerProvider

from stormforge.infrastructure.telemetry import tracing


class TestConfigureTracing:
    def test_returns_provider_with_resource(self):
        provider = tracing.configure_tracing(
            service_name="stormforge-test",
            service_version="9.9.9",
            environment="test",
        )
        try:
            assert isinstance(provider, TracerProvider)
            attributes = provider.resource.attributes
            assert attributes["service.name"] == "stormforge-test"
            assert attributes["service.version"] == "9.9.9"
            assert attributes["deployment.environment"] == "test"
        finally:
            tracing.shutdown_tracing()

    def test_shutdown_is_idempotent(self):
        tracing.configure_tracing(environment="test")

        tracing.shutdown_tracing()
        tracing.shutdown_tracing()

        assert tracing._tracer_provider is None
