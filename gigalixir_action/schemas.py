"""Shapes of the JSON documents printed by the gigalixir CLI."""
from typing import List, Optional, Type, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError

from .errors import ProviderResponseError

T = TypeVar("T")


class AppRecord(BaseModel):
    unique_name: str


class Release(BaseModel):
    version: int
    summary: Optional[str] = None
    created_at: Optional[str] = None
    sha: Optional[str] = None


class Pod(BaseModel):
    version: int
    status: str
    name: Optional[str] = None


class PodStatus(BaseModel):
    pods: List[Pod] = []
    replicas_desired: int
    replicas_running: Optional[int] = None

    def healthy_count(self, version: int) -> int:
        return sum(
            1 for pod in self.pods if pod.version == version and pod.status == "Healthy"
        )


def parse_output(output: str, shape: Type[T], what: str) -> T:
    try:
        return TypeAdapter(shape).validate_json(output)
    except ValidationError as e:
        raise ProviderResponseError(f"Unexpected {what} output from gigalixir: {e}") from e
