"""Data models and constants for hub metadata resolution."""

from dataclasses import asdict, dataclass
from enum import Enum

DEFAULT_ENDPOINT = "https://huggingface.co"
DEFAULT_REVISION = "main"


class RepoType(Enum):
    """Kind of hub repository. The value is the API path segment."""

    MODEL = "models"
    DATASET = "datasets"
    SPACE = "spaces"

    @classmethod
    def parse(cls, value: "str | RepoType") -> "RepoType":
        """Accept 'model', 'models', 'Dataset', ... or a RepoType."""
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        for member in cls:
            if key in (member.value, member.value[:-1]):
                return member
        raise ValueError(f"Unknown repo type: {value!r}")


@dataclass(frozen=True)
class Repo:
    """Identity of a hub repository."""

    id: str
    type: RepoType = RepoType.MODEL

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Repository id is required")

    @classmethod
    def parse(cls, value: "str | Repo", repo_type: "str | RepoType" = RepoType.MODEL) -> "Repo":
        """Normalize the convenience string form into a Repo."""
        if isinstance(value, cls):
            return value
        return cls(id=value, type=RepoType.parse(repo_type))

    @property
    def api_path(self) -> str:
        return f"api/{self.type.value}/{self.id}"


@dataclass(frozen=True)
class FileMetadata:
    """Metadata about a file versioned on the hub.

    For LFS files, ``size`` is the size of the stored blob, not the pointer,
    and ``location`` usually points at a CDN host rather than the hub.
    """

    commit_hash: str | None
    etag: str | None
    location: str
    size: int | None = None

    def to_dict(self) -> dict:
        return asdict(self)
