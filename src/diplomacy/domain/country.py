from dataclasses import dataclass, field
from typing import Dict, Iterable, Optional


@dataclass(frozen=True)
class CountryRef:
    """
    One side of a diplomatic edge, as emitted by the save parser.
    """
    tag: str         # e.g. "SWE", "DNK"
    name: str


@dataclass(frozen=True)
class CountryDisplay:
    tag: str
    name: str
    flag: str        # opaque identifier resolved by the avatar component


@dataclass(frozen=True)
class CountryDirectory:
    """
    Read-only tag -> display metadata lookup for one loaded save.
    """
    entries: Dict[str, CountryDisplay] = field(default_factory=dict)

    def lookup(self, tag: str) -> Optional[CountryDisplay]:
        return self.entries.get(tag)

    @staticmethod
    def from_displays(displays: Iterable[CountryDisplay]) -> "CountryDirectory":
        return CountryDirectory(entries={d.tag: d for d in displays})

    @staticmethod
    def from_names(names: Dict[str, str]) -> "CountryDirectory":
        return CountryDirectory(
            entries={tag: CountryDisplay(tag=tag, name=name, flag=tag) for tag, name in names.items()}
        )
