"""
Verse API: Translation Registry
================================

What:  Static mapping of translation code → backing SQLite file.
Why:   Defines the universe of valid translation codes independently of
       which databases actually opened. The verse service uses it to tell
       "unknown translation" (404) apart from "known but unavailable" (503).
How:   Built once from DEFAULT_TRANSLATIONS and the assets directory, then
       exposed read-only.
"""

from pathlib import Path
from types import MappingProxyType
from typing import Iterator, Mapping, Optional, Union

# Translation code → file name inside the assets directory.
# Codes are matched case-sensitively.
DEFAULT_TRANSLATIONS: Mapping[str, str] = MappingProxyType({
    "KJV": "KJV+.Sqlite3",
    "RST": "RST+.Sqlite3",
})


class TranslationRegistry:
    """
    Immutable translation code → location lookup.

    Example:
        registry = TranslationRegistry.from_assets("assets")
        registry.resolve("KJV")   # Path("assets/KJV+.Sqlite3")
        registry.resolve("XYZ")   # None
    """

    def __init__(self, locations: Mapping[str, Union[str, Path]]):
        self._locations: Mapping[str, Path] = MappingProxyType(
            {name: Path(location) for name, location in locations.items()}
        )

    @classmethod
    def from_assets(
        cls,
        assets_dir: Union[str, Path],
        translations: Mapping[str, str] = DEFAULT_TRANSLATIONS,
    ) -> "TranslationRegistry":
        """Build a registry whose file names are resolved against `assets_dir`."""
        base = Path(assets_dir)
        return cls({name: base / filename for name, filename in translations.items()})

    def resolve(self, name: str) -> Optional[Path]:
        """Return the backing file for `name`, or None if it is not registered."""
        return self._locations.get(name)

    @property
    def names(self) -> list:
        return list(self._locations)

    def items(self):
        return self._locations.items()

    def __contains__(self, name: object) -> bool:
        return name in self._locations

    def __iter__(self) -> Iterator[str]:
        return iter(self._locations)

    def __len__(self) -> int:
        return len(self._locations)
