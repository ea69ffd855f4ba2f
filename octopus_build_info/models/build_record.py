from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_pascal


class BuildCommit(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_pascal, populate_by_name=True)

    id: str
    comment: str = ""


class BuildRecord(BaseModel):
    """Octopus build information for one workflow run. Serialized with Octopus field names."""
    model_config = ConfigDict(frozen=True, alias_generator=to_pascal, populate_by_name=True)

    build_environment: str
    build_number: str
    build_url: str
    branch: Optional[str] = None
    vcs_type: str
    vcs_root: str
    vcs_commit_number: str
    commits: Tuple[BuildCommit, ...] = ()

    def to_octopus(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
