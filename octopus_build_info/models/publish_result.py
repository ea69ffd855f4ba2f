from dataclasses import dataclass, field


@dataclass(frozen=True)
class PublishResult:
    package_id: str
    version: str
    response: dict = field(default_factory=dict)
