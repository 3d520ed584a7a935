"""Custom exception hierarchy for the enrichment pipeline."""

from __future__ import annotations

from typing import Any


class EnrichmentError(Exception):
    """Base error for the material enrichment pipeline."""

    kind = "enrichment_error"
    retryable = False
    status_code = 500

    def to_payload(self) -> dict[str, Any]:
        """Return the structured error result handed to the calling layer."""
        return {
            "error": str(self),
            "kind": self.kind,
            "retryable": self.retryable,
        }


class MissingParameterError(EnrichmentError):
    """Raised when a required request parameter is absent or blank."""

    kind = "missing_parameter"
    status_code = 400

    def __init__(self, names: list[str]) -> None:
        self.names = list(names)
        super().__init__(f"Missing required parameters: {' and '.join(self.names)}")


class UpstreamFetchError(EnrichmentError):
    """Raised when the catalog, taxonomy or completion service cannot be reached."""

    kind = "upstream_fetch"
    status_code = 502


class UpstreamTimeoutError(UpstreamFetchError):
    """Raised when an external call exceeds its time bound."""

    kind = "upstream_timeout"
    retryable = True
    status_code = 504


class ConfigurationError(EnrichmentError):
    """Raised when a collaborator cannot be built from the configured settings."""

    kind = "configuration"


class SchemaFormatError(EnrichmentError):
    """Raised when a category schema response matches none of the known shapes."""

    kind = "schema_format"


class NoInferenceResultError(EnrichmentError):
    """Raised when the completion capability returns no content."""

    kind = "no_inference_result"


class InferenceParseError(EnrichmentError):
    """Raised when the completion content is not the documented JSON object."""

    kind = "inference_parse"


class ContractViolationError(EnrichmentError):
    """Raised when an assembled record fails the output contract."""

    kind = "contract_violation"

    def __init__(self, material_name: str | None, errors: list[str]) -> None:
        self.material_name = material_name or "Unnamed material"
        self.errors = list(errors)
        message = f"{self.material_name} produced an invalid record:\n- " + "\n- ".join(self.errors)
        super().__init__(message)

    def to_payload(self) -> dict[str, Any]:
        payload = super().to_payload()
        payload["violations"] = list(self.errors)
        return payload
