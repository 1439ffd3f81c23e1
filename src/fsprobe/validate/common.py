"""Expectations on path snapshots"""

import abc
import dataclasses
import typing

from fsprobe.fsprobe_identity import (
    IdentitySnapshot,
)
from fsprobe.fsprobe_path import (
    PathSnapshot,
)


INVALID_LABEL_MISSING = 'INVALID_MISSING'
INVALID_LABEL_UNREADABLE = 'INVALID_UNREADABLE'
INVALID_LABEL_PERMISSION = 'INVALID_PERMISSION'
INVALID_LABEL_TYPE = 'INVALID_TYPE'


@dataclasses.dataclass(frozen=True)
class Invalid:
    """Single unmet expectation of a path"""

    label: str
    location: str
    info: str

    def __str__(self):
        return f"[{self.label}] {self.location}: {self.info}"


class Validator(abc.ABC):
    """Inspect a PathSnapshot and record each
    unmet expectation as Invalid

    Subclasses implement _inspect() and call
    _reject() for every finding. An identity
    may be handed in to resolve all access
    checks of one run against the same ids.
    """

    def __init__(self, label: str, snapshot: PathSnapshot,
                 identity: IdentitySnapshot = None):
        self.label = label
        self.input_data = snapshot
        self.identity = identity
        self.invalids: typing.List[Invalid] = []

    @property
    def location(self) -> str:
        return str(self.input_data.path)

    def _reject(self, info: str):
        self.invalids.append(Invalid(self.label, self.location, info))

    @abc.abstractmethod
    def _inspect(self):
        """Gather findings for snapshot"""

    def valid(self) -> bool:
        """Re-run inspection, true if nothing was rejected"""
        self.invalids = []
        self._inspect()
        return len(self.invalids) == 0
