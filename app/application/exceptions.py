class UnknownServiceError(LookupError):
    """Raised when no question source knows the requested service."""

    def __init__(self, service: str) -> None:
        super().__init__(f"Unknown service: {service!r}")
        self.service = service


class ServiceCatalogError(ValueError):
    """Raised when a service-catalog document cannot be turned into a question bank."""
    pass
