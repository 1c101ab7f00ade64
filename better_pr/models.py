"""Data models for Bitbucket pull request triage."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, List, Optional


REVIEWER_ROLE = 'REVIEWER'
CHANGES_REQUESTED_STATE = 'changes_requested'


class Bucket(Enum):
    """Review status of a pull request, valued by its display rank."""
    REVIEWER_UNAPPROVED = 10
    REVIEWER_APPROVED = 20
    NOT_REVIEWER = 30
    AUTHOR = 40
    WIP = 50

    @property
    def rank(self) -> int:
        return self.value


@dataclass
class User:
    """A Bitbucket account."""
    id: str
    display_name: str = ''

    @classmethod
    def from_api(cls, data: Optional[Dict]) -> Optional['User']:
        if not data or not data.get('uuid'):
            return None
        return cls(id=data['uuid'], display_name=data.get('display_name') or '')


@dataclass
class Participant:
    """A user attached to a pull request as reviewer or participant."""
    user: Optional[User]
    role: str = ''
    approved: bool = False
    state: Optional[str] = None

    @classmethod
    def from_api(cls, data: Dict) -> 'Participant':
        return cls(
            user=User.from_api(data.get('user')),
            role=data.get('role') or '',
            approved=bool(data.get('approved', False)),
            state=data.get('state')
        )

    @property
    def is_reviewer(self) -> bool:
        return self.role == REVIEWER_ROLE

    @property
    def requested_changes(self) -> bool:
        return self.state == CHANGES_REQUESTED_STATE


@dataclass
class PullRequest:
    """An open pull request as returned by the detail endpoint."""
    id: int
    title: Optional[str] = None
    author: Optional[User] = None
    participants: List[Participant] = field(default_factory=list)
    url: str = ''

    @classmethod
    def from_api(cls, data: Dict) -> 'PullRequest':
        links = data.get('links') or {}
        html = links.get('html') or {}
        return cls(
            id=data.get('id') or 0,
            title=data.get('title'),
            author=User.from_api(data.get('author')),
            participants=[Participant.from_api(p) for p in data.get('participants') or []],
            url=html.get('href') or ''
        )

    @property
    def author_id(self) -> Optional[str]:
        return self.author.id if self.author else None

    def participant_for(self, user_id: str) -> Optional[Participant]:
        """Return the participant record of a user, if they take part in this PR."""
        for participant in self.participants:
            if participant.user and participant.user.id == user_id:
                return participant
        return None


@dataclass
class Workspace:
    """A Bitbucket workspace, stored in the cache as {uuid, name}."""
    uuid: str
    name: str = ''

    @classmethod
    def from_api(cls, data: Dict) -> 'Workspace':
        return cls(uuid=data.get('uuid') or '', name=data.get('name') or '')

    def to_dict(self) -> Dict[str, str]:
        return {'uuid': self.uuid, 'name': self.name}


@dataclass
class Repository:
    """A Bitbucket repository, stored in the cache as {uuid, name}."""
    uuid: str
    name: str = ''

    @classmethod
    def from_api(cls, data: Dict) -> 'Repository':
        return cls(uuid=data.get('uuid') or '', name=data.get('name') or '')

    def to_dict(self) -> Dict[str, str]:
        return {'uuid': self.uuid, 'name': self.name}


@dataclass
class Counts:
    """Number of classified pull requests per bucket across a run."""
    per_bucket: Dict[Bucket, int] = field(default_factory=lambda: {bucket: 0 for bucket in Bucket})

    def increment(self, bucket: Bucket):
        self.per_bucket[bucket] += 1

    def __getitem__(self, bucket: Bucket) -> int:
        return self.per_bucket[bucket]

    def __iter__(self) -> Iterator[Bucket]:
        return iter(sorted(self.per_bucket, key=lambda b: b.rank))

    @property
    def total(self) -> int:
        return sum(self.per_bucket.values())
