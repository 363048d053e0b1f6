"""Reconciliation configuration, correction tables and result dataclasses."""

import json
from dataclasses import asdict, dataclass, field
from datetime import UTC, datetime
from importlib import resources
from pathlib import Path
from typing import Any

from bookrecon.models import ConsolidatedRecord, EditionGroup, WorkCluster

__all__ = [
    "ConfigError",
    "CorrectionTables",
    "ReconcileConfig",
    "ReconcileResult",
    "load_default_corrections",
]


class ConfigError(ValueError):
    """Raised when configuration values or correction tables are invalid."""


@dataclass(frozen=True)
class CorrectionTables:
    """Known provider data-quality fixes, keyed by ISBN or literal string.

    Attributes
    ----------
    binding_by_isbn : dict[str, str]
        ISBN -> corrected binding, applied before any other normalization.
    edition_by_isbn : dict[str, int]
        ISBN -> corrected edition number, consulted before any parsing.
    isolated_isbns : frozenset[str]
        ISBNs whose records are never merged with another record.
    concatenated_authors : dict[str, list[str]]
        Run-together author literals -> individual names.
    split_given_names : frozenset[str]
        Lowercase given names that mark a three-word author string as two
        run-together authors when found at either end.
    primary_authors : tuple[str, ...]
        Lowercase author names sorted first in consolidated author lists.
    """

    binding_by_isbn: dict[str, str] = field(default_factory=dict)
    edition_by_isbn: dict[str, int] = field(default_factory=dict)
    isolated_isbns: frozenset[str] = frozenset()
    concatenated_authors: dict[str, list[str]] = field(default_factory=dict)
    split_given_names: frozenset[str] = frozenset()
    primary_authors: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        """Validate table contents."""
        for isbn, number in self.edition_by_isbn.items():
            if not isinstance(number, int) or number < 1:
                raise ConfigError(
                    f"edition_by_isbn[{isbn!r}] must be a positive int, got {number!r}"
                )
        for isbn, binding in self.binding_by_isbn.items():
            if not isinstance(binding, str) or not binding.strip():
                raise ConfigError(f"binding_by_isbn[{isbn!r}] must be a non-empty string")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CorrectionTables":
        """Build tables from a JSON-compatible dictionary.

        Parameters
        ----------
        data : dict[str, Any]
            Mapping with any of the attribute names as keys.

        Returns
        -------
        CorrectionTables
            Parsed tables; missing keys default to empty.
        """
        return cls(
            binding_by_isbn={str(k): str(v) for k, v in data.get("binding_by_isbn", {}).items()},
            edition_by_isbn={str(k): v for k, v in data.get("edition_by_isbn", {}).items()},
            isolated_isbns=frozenset(str(i) for i in data.get("isolated_isbns", [])),
            concatenated_authors={
                str(k): [str(n) for n in v]
                for k, v in data.get("concatenated_authors", {}).items()
            },
            split_given_names=frozenset(
                str(n).lower() for n in data.get("split_given_names", [])
            ),
            primary_authors=tuple(str(n).lower() for n in data.get("primary_authors", [])),
        )

    @classmethod
    def load(cls, path: Path | str) -> "CorrectionTables":
        """Load tables from a JSON file.

        Raises
        ------
        FileNotFoundError
            If the file does not exist.
        ConfigError
            If the file is not a JSON object or holds invalid entries.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Corrections file not found: {path}")
        with path.open("r", encoding="utf-8") as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise ConfigError(f"Invalid corrections file {path.name}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"Corrections file {path.name} must hold a JSON object")
        return cls.from_dict(data)

    def merged_with(self, other: "CorrectionTables") -> "CorrectionTables":
        """Return tables where entries of ``other`` extend or override these."""
        return CorrectionTables(
            binding_by_isbn={**self.binding_by_isbn, **other.binding_by_isbn},
            edition_by_isbn={**self.edition_by_isbn, **other.edition_by_isbn},
            isolated_isbns=self.isolated_isbns | other.isolated_isbns,
            concatenated_authors={**self.concatenated_authors, **other.concatenated_authors},
            split_given_names=self.split_given_names | other.split_given_names,
            primary_authors=self.primary_authors
            + tuple(a for a in other.primary_authors if a not in self.primary_authors),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-compatible dictionary."""
        return {
            "binding_by_isbn": dict(self.binding_by_isbn),
            "edition_by_isbn": dict(self.edition_by_isbn),
            "isolated_isbns": sorted(self.isolated_isbns),
            "concatenated_authors": {k: list(v) for k, v in self.concatenated_authors.items()},
            "split_given_names": sorted(self.split_given_names),
            "primary_authors": list(self.primary_authors),
        }


def load_default_corrections() -> CorrectionTables:
    """Load the correction tables bundled with the package."""
    text = resources.files("bookrecon.data").joinpath("corrections.json").read_text("utf-8")
    return CorrectionTables.from_dict(json.loads(text))


_THRESHOLD_FIELDS = (
    "consolidation_title_threshold",
    "cluster_high_similarity",
    "cluster_subset_similarity",
    "cluster_core_publisher_similarity",
    "cluster_publisher_similarity",
    "cluster_core_similarity",
    "core_overlap_ratio",
)

_WINDOW_FIELDS = (
    "consolidation_year_window",
    "edition_one_year_window",
    "audiobook_year_window",
    "min_publication_year",
    "max_years_ahead",
    "year_validity_ahead",
)


@dataclass
class ReconcileConfig:
    """Configuration for the edition reconciliation pipeline.

    The similarity thresholds and year windows were tuned against a small
    fixture set and are part of the engine's contract; override them only
    in tests or experiments.

    Attributes
    ----------
    corrections : CorrectionTables | None
        ISBN and author corrections. If None, the bundled defaults are used.
    current_year : int | None
        Reference year for plausibility checks. If None, the current UTC year.
    min_publication_year : int
        Earliest accepted publication year (default: 1990).
    max_years_ahead : int
        Accepted publication years end at current_year + this (default: 2).
    year_validity_ahead : int
        Parsed years beyond current_year + this are ignored (default: 5).
    english_languages : tuple[str, ...]
        Accepted language codes (lowercase).
    non_english_title_fragments : tuple[str, ...]
        Lowercase title fragments that mark a translated edition.
    consolidation_title_threshold : float
        Minimum title similarity for duplicate consolidation (default: 0.8).
    consolidation_year_window : int
        Maximum year gap between duplicates (default: 5).
    cluster_high_similarity : float
        Similarity above which titles always cluster (default: 0.7).
    cluster_subset_similarity : float
        Similarity required alongside a substring match (default: 0.4).
    cluster_core_publisher_similarity : float
        Similarity required alongside a core match and publisher
        consistency (default: 0.3).
    cluster_publisher_similarity : float
        Similarity required alongside publisher consistency (default: 0.5).
    cluster_core_similarity : float
        Similarity required alongside a core match alone (default: 0.4).
    core_overlap_ratio : float
        Share of the smaller significant-word set that must overlap for a
        core match (default: 0.7).
    main_title_veto : bool
        Keep records apart when their main titles share no significant word.
    edition_one_year_window : int
        Year window around the earliest year for a synthesized first
        edition (default: 1).
    audiobook_year_window : int
        Maximum year gap when attaching audiobooks to editions (default: 5).
    max_edition_number : int
        Numeric edition captures above this are rejected as years (default: 99).
    """

    corrections: CorrectionTables | None = None
    current_year: int | None = None
    min_publication_year: int = 1990
    max_years_ahead: int = 2
    year_validity_ahead: int = 5
    english_languages: tuple[str, ...] = ("en", "eng", "english")
    non_english_title_fragments: tuple[str, ...] = (
        "seien sie",
        "klüger",
        "anwalt",
        "risikokapitalgeber",
        "german edition",
    )
    consolidation_title_threshold: float = 0.8
    consolidation_year_window: int = 5
    cluster_high_similarity: float = 0.7
    cluster_subset_similarity: float = 0.4
    cluster_core_publisher_similarity: float = 0.3
    cluster_publisher_similarity: float = 0.5
    cluster_core_similarity: float = 0.4
    core_overlap_ratio: float = 0.7
    main_title_veto: bool = True
    edition_one_year_window: int = 1
    audiobook_year_window: int = 5
    max_edition_number: int = 99

    def __post_init__(self) -> None:
        """Set defaults and validate."""
        if self.corrections is None:
            self.corrections = load_default_corrections()

        if self.current_year is None:
            self.current_year = datetime.now(UTC).year

        for name in _THRESHOLD_FIELDS:
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ConfigError(f"{name} must be in [0, 1], got {value}")

        for name in _WINDOW_FIELDS:
            value = getattr(self, name)
            if value < 0:
                raise ConfigError(f"{name} must be >= 0, got {value}")

        if self.max_edition_number < 1:
            raise ConfigError(f"max_edition_number must be >= 1, got {self.max_edition_number}")

        self.english_languages = tuple(lang.lower() for lang in self.english_languages)

    @property
    def tables(self) -> CorrectionTables:
        """Correction tables (never None after initialization)."""
        assert self.corrections is not None
        return self.corrections

    @property
    def year(self) -> int:
        """Reference year (never None after initialization)."""
        assert self.current_year is not None
        return self.current_year

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        data = asdict(self)
        data["corrections"] = self.tables.to_dict()
        data["english_languages"] = list(self.english_languages)
        data["non_english_title_fragments"] = list(self.non_english_title_fragments)
        return data


@dataclass
class ReconcileResult:
    """Results from one reconciliation call.

    Attributes
    ----------
    groups : list[EditionGroup]
        Edition groups, newest edition first.
    clusters : list[WorkCluster]
        Work clusters in creation order.
    unassigned : list[ConsolidatedRecord]
        Records that no edition could claim: undated, or dated before the
        first edition.
    counters : dict[str, int]
        Per-stage record counts.
    """

    groups: list[EditionGroup] = field(default_factory=list)
    clusters: list[WorkCluster] = field(default_factory=list)
    unassigned: list[ConsolidatedRecord] = field(default_factory=list)
    counters: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "groups": [g.to_dict() for g in self.groups],
            "clusters": [
                {"key": c.key, "rids": [r.rid for r in c.records]} for c in self.clusters
            ],
            "unassigned": [c.rid for c in self.unassigned],
            "counters": dict(self.counters),
        }
