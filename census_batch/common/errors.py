"""Domain errors and failure typing."""

from __future__ import annotations


class GeocoderError(Exception):
    """Base class for geocoder failures."""

    error_code = "GEOCODER_ERROR"


class ConfigError(GeocoderError):
    """Raised for invalid or missing configuration."""

    error_code = "CONFIG_ERROR"


class RequestError(GeocoderError):
    """Raised once every attempt to submit a batch has failed.

    Carries the encoded batch and the configuration it was sent with so the
    caller can log it or resubmit it by hand.
    """

    error_code = "RequestError"

    def __init__(
        self,
        csv: str,
        *,
        benchmark: str,
        geography: str | None,
        retries: int,
        timeout: float,
    ) -> None:
        super().__init__(f"Batch submission failed after {retries} retries (timeout={timeout}s)")
        self.code = self.error_code
        self.csv = csv
        self.benchmark = benchmark
        self.geography = geography
        self.retries = retries
        self.timeout = timeout

    def to_dict(self) -> dict:
        return {
            "code": self.code,
            "csv": self.csv,
            "benchmark": self.benchmark,
            "geography": self.geography,
            "retries": self.retries,
            "timeout": self.timeout,
        }
