from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Found:
    """The commit the previous release was built from."""
    commit_sha: str


@dataclass(frozen=True)
class NotFound:
    """No usable previous release; reason is for logging only."""
    reason: str = ""


PreviousReference = Union[Found, NotFound]
