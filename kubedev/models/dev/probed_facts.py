"""Facts observed from a running container."""

from pydantic import BaseModel, Field


class ProbedFacts(BaseModel):
    """Runtime facts with probe fallbacks already applied."""

    user_id: int | None = None
    workdir: str
    command: list[str]
    has_resource_limits: bool = False
    ports: list[int] = Field(default_factory=list)
