"""
Typed records produced by the sheet pipeline.

ProgramRecord keeps the camelCase key ``completionDate`` in its dict form so
the JSON served by ``/api/programs`` matches what the dashboard expects.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field


# Column order of the Programs tab (positional, no header lookup).
PROGRAM_FIELDS: tuple[str, ...] = (
    "goals",
    "tasks",
    "team",
    "priority",
    "owner",
    "status",
    "eta",
    "completion_date",
    "links",
    "notes",
)

_JSON_NAMES = {"completion_date": "completionDate"}


@dataclass(frozen=True)
class ProgramRecord:
    """One data row of the Programs sheet."""

    id: str
    goals: str = ""
    tasks: str = ""
    team: str = ""
    priority: str = ""
    owner: str = ""
    status: str = ""
    eta: str = ""
    completion_date: str = ""
    links: str = ""
    notes: str = ""

    def to_dict(self) -> dict[str, str]:
        return {_JSON_NAMES.get(k, k): v for k, v in asdict(self).items()}

    @classmethod
    def from_dict(cls, data: dict[str, str]) -> ProgramRecord:
        """Build a record from its JSON form (camelCase or snake_case keys)."""
        values = {"id": data.get("id", "")}
        for name in PROGRAM_FIELDS:
            json_name = _JSON_NAMES.get(name, name)
            values[name] = data.get(json_name, data.get(name, "")) or ""
        return cls(**values)

    def get(self, column: str) -> str:
        """Return a field by its dashboard column name (``completionDate`` ok)."""
        if column == "completionDate":
            column = "completion_date"
        return getattr(self, column, "")


@dataclass
class FilterOptions:
    """Distinct sorted values per categorical field."""

    teams: list[str] = field(default_factory=list)
    priorities: list[str] = field(default_factory=list)
    owners: list[str] = field(default_factory=list)
    statuses: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, list[str]]:
        return asdict(self)

    @classmethod
    def empty(cls) -> FilterOptions:
        return cls()

    @classmethod
    def from_dict(cls, data: dict[str, list[str]]) -> FilterOptions:
        return cls(
            teams=list(data.get("teams", [])),
            priorities=list(data.get("priorities", [])),
            owners=list(data.get("owners", [])),
            statuses=list(data.get("statuses", [])),
        )
