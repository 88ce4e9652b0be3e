"""Data-driven jurisdiction rule tables.

A ``RuleTable`` maps ``(jurisdiction, category)`` to an immutable
``RuleTableEntry``. Each entry is an ordered list of elapsed-time tiers; the
evaluator picks the first tier whose window contains the elapsed time. Adding
a jurisdiction means adding an entry, not another branch.

Tables are module-level constants built at import time. A malformed table
(unordered tiers, a missing open-ended tier, a duplicate key) raises
``ConfigurationError`` while the module loads, so it can never reach a user.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Iterable, Mapping, Optional

from rights.errors import ConfigurationError
from rights.models import Citation, EvidenceFlag, InputRecord, Jurisdiction, Provision
from rights.time_arithmetic import ElapsedTime, TimeWindow


# ---------------------------------------------------------------------------
# Tiers
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TierOutcome:
    """Evidence-dependent override of a tier's eligibility and remedies."""

    eligible: bool
    remedies: tuple[Provision, ...]


@dataclass(frozen=True)
class Tier:
    """One contiguous elapsed-time bracket and its bundle of advice.

    ``window=None`` marks the open-ended last tier. ``label`` is formatted
    with ``remaining`` (days left in the window) and ``limit`` (e.g.
    ``"30-day"``).
    """

    name: str
    window: Optional[TimeWindow]
    eligible: bool
    rights: tuple[Provision, ...]
    remedies: tuple[Provision, ...]
    warnings: tuple[str, ...] = ()
    label: str = ""
    variants: tuple[tuple[EvidenceFlag, TierOutcome], ...] = ()

    def contains(self, elapsed: ElapsedTime) -> bool:
        return self.window is None or self.window.contains(elapsed)

    def outcome_for(self, evidence: frozenset[EvidenceFlag]) -> TierOutcome:
        for flag, outcome in self.variants:
            if flag in evidence:
                return outcome
        return TierOutcome(eligible=self.eligible, remedies=self.remedies)

    def describe_window(self, elapsed: ElapsedTime) -> str:
        if self.window is None:
            return self.label
        return self.label.format(
            remaining=self.window.remaining_days(elapsed),
            limit=self.window.describe(),
        )


# ---------------------------------------------------------------------------
# Entries
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class RuleTableEntry:
    """Rules for one jurisdiction (and optionally one category).

    ``next_steps`` are templates formatted with ``counterparty``; when the
    user gave no name, ``counterparty_default`` is used.
    """

    jurisdiction: Jurisdiction
    category: Optional[str]
    tiers: tuple[Tier, ...]
    citations: tuple[Citation, ...] = ()
    next_steps: tuple[str, ...] = ()
    counterparty_default: str = "the seller"
    escalation: Optional[str] = None
    deadline: Optional[str] = None

    def __post_init__(self):
        key = f"{self.jurisdiction.value}/{self.category or '*'}"
        if not self.tiers:
            raise ConfigurationError(f"Rule table entry {key} has no tiers")
        if self.tiers[-1].window is not None:
            raise ConfigurationError(f"Rule table entry {key}: last tier must be open-ended")

        bounds = []
        for tier in self.tiers[:-1]:
            if tier.window is None:
                raise ConfigurationError(
                    f"Rule table entry {key}: open-ended tier {tier.name!r} must be last"
                )
            bounds.append(tier.window.approx_days)
        if any(a >= b for a, b in zip(bounds, bounds[1:])):
            raise ConfigurationError(
                f"Rule table entry {key}: tier windows must be strictly ascending, got {bounds}"
            )


# ---------------------------------------------------------------------------
# Table
# ---------------------------------------------------------------------------

# (record, entry, assessment) -> None; see rights.evaluator for the built-ins.
Modifier = Callable[[InputRecord, RuleTableEntry, Any], None]

RuleKey = tuple[Jurisdiction, Optional[str]]


@dataclass(frozen=True)
class RuleTable:
    """Immutable lookup from ``(jurisdiction, category)`` to an entry.

    ``keyed_by`` names, per jurisdiction, the ``InputRecord`` field that
    selects the category: ``"category"``, ``"subcategory"``, or ``None`` for a
    single jurisdiction-wide entry.

    Usage::

        table = RuleTable.build("vehicle", entries, keyed_by={Jurisdiction.UK: "category"})
        entry = table.entry_for(record)
    """

    name: str
    entries: Mapping[RuleKey, RuleTableEntry]
    keyed_by: Mapping[Jurisdiction, Optional[str]]
    modifiers: tuple[Modifier, ...] = ()

    @classmethod
    def build(
        cls,
        name: str,
        entries: Iterable[RuleTableEntry],
        keyed_by: Mapping[Jurisdiction, Optional[str]],
        modifiers: Iterable[Modifier] = (),
    ) -> "RuleTable":
        index: dict[RuleKey, RuleTableEntry] = {}
        for entry in entries:
            key = (entry.jurisdiction, entry.category)
            if entry.jurisdiction not in keyed_by:
                raise ConfigurationError(
                    f"{name}: entry for {entry.jurisdiction.value} but jurisdiction is not keyed"
                )
            if (keyed_by[entry.jurisdiction] is None) != (entry.category is None):
                raise ConfigurationError(
                    f"{name}: entry {entry.jurisdiction.value}/{entry.category} does not match "
                    f"key field {keyed_by[entry.jurisdiction]!r}"
                )
            if key in index:
                raise ConfigurationError(
                    f"{name}: duplicate entry {entry.jurisdiction.value}/{entry.category}"
                )
            index[key] = entry

        return cls(
            name=name,
            entries=MappingProxyType(index),
            keyed_by=MappingProxyType(dict(keyed_by)),
            modifiers=tuple(modifiers),
        )

    @property
    def jurisdictions(self) -> tuple[Jurisdiction, ...]:
        return tuple(self.keyed_by)

    def lookup(self, jurisdiction: Jurisdiction, category: Optional[str]) -> RuleTableEntry:
        """Pure lookup. An unmapped pair is a configuration error, never a default."""
        try:
            return self.entries[(jurisdiction, category)]
        except KeyError:
            raise ConfigurationError(
                f"{self.name}: no rule table entry for {jurisdiction.value}/{category}"
            ) from None

    def category_key(self, record: InputRecord) -> Optional[str]:
        if record.jurisdiction not in self.keyed_by:
            raise ConfigurationError(
                f"{self.name}: jurisdiction {record.jurisdiction.value} is not supported"
            )
        field_name = self.keyed_by[record.jurisdiction]
        if field_name is None:
            return None
        return getattr(record, field_name)

    def entry_for(self, record: InputRecord) -> RuleTableEntry:
        return self.lookup(record.jurisdiction, self.category_key(record))

    def supported_pairs(self) -> list[RuleKey]:
        return list(self.entries)
