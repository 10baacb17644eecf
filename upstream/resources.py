from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict

from .errors import NotFound
from .randstr import generate

DEFAULT_LIMIT = 10
NAME_LENGTH = 10


class Resource(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    name: str


class ResourceStore:
    """Read-only collection of resources keyed by a dense 0-based id.

    Built once at startup and shared by every request; nothing writes to it
    afterwards, so no locking is needed.
    """

    def __init__(self, resources: Mapping[int, Resource], default_limit: int = DEFAULT_LIMIT):
        self._resources = MappingProxyType(dict(resources))
        self.default_limit = default_limit

    @classmethod
    def seed(cls, count: int, name_length: int = NAME_LENGTH, default_limit: int = DEFAULT_LIMIT) -> "ResourceStore":
        if count <= 0:
            raise ValueError(f"resource count must be positive, got {count}")
        resources: Dict[int, Resource] = {
            i: Resource(id=i, name=generate(name_length)) for i in range(count)
        }
        return cls(resources, default_limit=default_limit)

    def __len__(self) -> int:
        return len(self._resources)

    def __iter__(self) -> Iterator[Resource]:
        return (self._resources[i] for i in sorted(self._resources))

    def list(self, limit: Optional[int] = None) -> List[Resource]:
        """First ``limit`` resources by ascending id; 0/None/negative means the default."""
        if not limit or limit < 0:
            limit = self.default_limit
        ids = sorted(self._resources)[:limit]
        return [self._resources[i] for i in ids]

    def get(self, id: int) -> Resource:
        try:
            return self._resources[id]
        except KeyError:
            raise NotFound(id) from None
