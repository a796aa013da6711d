# cluster_imputer/diagnostics.py
"""Warning collector handed through analytics calls.

Non-fatal conditions (excluded columns, dropped correlation pairs) are
recorded here and mirrored to the module logger so callers can inspect them
without capturing console output.
"""
import logging
from dataclasses import dataclass, field
from typing import List, Tuple

logger = logging.getLogger(__name__)

EXCLUDED_MISSING = "excluded-missing"
EXCLUDED_NON_NUMERIC = "excluded-non-numeric"
DROPPED_PAIR = "dropped-pair"


@dataclass(frozen=True)
class Diagnostic:
    kind: str
    message: str
    columns: Tuple[str, ...] = ()


@dataclass
class Diagnostics:
    records: List[Diagnostic] = field(default_factory=list)

    def warn(self, kind, message, columns=()):
        record = Diagnostic(kind, message, tuple(columns))
        self.records.append(record)
        logger.warning("%s %s", message, list(record.columns))
        return record

    def of_kind(self, kind):
        return [r for r in self.records if r.kind == kind]

    def __len__(self):
        return len(self.records)

    def __iter__(self):
        return iter(self.records)
