class UpstreamError(Exception):
    """Base class for request-level failures."""


class InvalidFormat(UpstreamError, ValueError):
    """A duration, size, timestamp or id could not be parsed."""

    def __init__(self, kind: str, value: str):
        self.kind = kind
        self.value = value
        super().__init__(f"invalid {kind}: {value!r}")


class NotFound(UpstreamError, LookupError):
    """No resource is stored under the requested id."""

    def __init__(self, id: int):
        self.id = id
        super().__init__(f"resource {id} not found")
