"""Validation and change tracking for batch IED renames."""

import re
import threading
from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass, field

from iedrename.models.ied import IEDRecord
from iedrename.models.rename import ItemView, RenameOp, ValidationReason, ValidationResult
from iedrename.search import SearchQuery


# Naming rules for IED names
NAME_PATTERN = re.compile(r"[A-Za-z][0-9A-Za-z_]*")
MIN_NAME_LENGTH = 1
MAX_NAME_LENGTH = 63


def validate_name(value: str, holders: int = 1) -> ValidationReason:
    """Validate a proposed IED name.

    Args:
        value: The proposed name.
        holders: How many items in the session currently hold `value`,
            including the item being validated.

    Returns:
        The first failing rule, or `ValidationReason.VALID`.
    """
    if value == "":
        return ValidationReason.EMPTY
    if NAME_PATTERN.fullmatch(value) is None:
        return ValidationReason.PATTERN_MISMATCH
    if not MIN_NAME_LENGTH <= len(value) <= MAX_NAME_LENGTH:
        return ValidationReason.LENGTH_OUT_OF_RANGE
    if holders != 1:
        return ValidationReason.DUPLICATE
    return ValidationReason.VALID


@dataclass
class ListItem:
    """One editable IED within a rename session."""

    record: IEDRecord
    current_value: str
    reason: ValidationReason = ValidationReason.VALID

    @property
    def identity(self) -> str:
        return self.record.name

    @property
    def is_valid(self) -> bool:
        return self.reason is ValidationReason.VALID

    @property
    def is_dirty(self) -> bool:
        return self.current_value != self.record.name

    @property
    def searchable_text(self) -> str:
        return self.record.searchable_text(self.current_value)


@dataclass
class ListSession:
    """All items of a rename session plus the derived global state."""

    items: dict[str, ListItem] = field(default_factory=dict)
    pending_rename_identities: set[str] = field(default_factory=set)
    all_valid: bool = True


class ListValidationEngine:
    """Tracks proposed names, validity and pending renames for a list of IEDs.

    Any edit can change the validity of other items, since uniqueness is checked
    against the proposed names of the whole session. Every edit therefore
    revalidates every item.

    All operations hold `lock`, so edits and reads from other threads (such as
    a debounced search) are applied one at a time in arrival order.
    """

    def __init__(self) -> None:
        self.session: ListSession | None = None
        self.lock = threading.RLock()

    def load_session(self, records: Iterable[IEDRecord]) -> ListSession:
        """Start a new session, discarding any edits from a previous one.

        Args:
            records: IEDs to rename, each proposed name initialised to its original name.

        Returns:
            The new session.

        Raises:
            ValueError: If two records share the same name.
        """
        items: dict[str, ListItem] = {}
        for record in records:
            if record.name in items:
                raise ValueError(f"Found duplicate IED name '{record.name}'. IED names must be unique in the source.")
            items[record.name] = ListItem(record=record, current_value=record.name)

        with self.lock:
            self.session = ListSession(items=items)
            self._revalidate()
            return self.session

    def close(self) -> None:
        """Discard the current session and all uncommitted edits."""
        with self.lock:
            self.session = None

    def _require_session(self) -> ListSession:
        if self.session is None:
            raise RuntimeError("No rename session loaded. Call `load_session` first.")
        return self.session

    def _revalidate(self) -> None:
        session = self._require_session()
        holders = Counter(item.current_value for item in session.items.values())

        for item in session.items.values():
            item.reason = validate_name(item.current_value, holders[item.current_value])

        session.all_valid = all(item.is_valid for item in session.items.values())

    def set_current_value(self, identity: str, value: str) -> ValidationResult:
        """Propose a new name for one IED and revalidate the session.

        Args:
            identity: Original name of the IED being edited.
            value: The proposed name.

        Returns:
            Validation result for the edited IED, including the session-wide validity.

        Raises:
            ValueError: If `identity` is not part of the session.
        """
        with self.lock:
            session = self._require_session()
            if identity not in session.items:
                raise ValueError(f"Unknown IED '{identity}'.")

            item = session.items[identity]
            item.current_value = value

            if item.is_dirty:
                session.pending_rename_identities.add(identity)
            else:
                session.pending_rename_identities.discard(identity)

            self._revalidate()

            return ValidationResult(
                identity=identity,
                value=value,
                reason=item.reason,
                is_dirty=item.is_dirty,
                all_valid=session.all_valid,
            )

    def item(self, identity: str) -> ListItem:
        with self.lock:
            session = self._require_session()
            if identity not in session.items:
                raise ValueError(f"Unknown IED '{identity}'.")
            return session.items[identity]

    @property
    def all_valid(self) -> bool:
        with self.lock:
            return self._require_session().all_valid

    @property
    def pending_renames(self) -> list[str]:
        """Identities with a proposed name that differs from the original, in load order."""
        with self.lock:
            session = self._require_session()
            return [identity for identity in session.items if identity in session.pending_rename_identities]

    def is_committable(self) -> bool:
        """Whether there is at least one pending rename and every IED is valid."""
        with self.lock:
            session = self._require_session()
            return bool(session.pending_rename_identities) and session.all_valid

    def commit(self) -> list[RenameOp]:
        """Return the renames to apply.

        Committing is inert when the session is not committable, in which case
        an empty list is returned. The session is left untouched; call `close`
        once the renames have been dispatched.
        """
        with self.lock:
            if not self.is_committable():
                return []

            session = self._require_session()
            return [
                RenameOp(old_name=identity, new_name=session.items[identity].current_value)
                for identity in self.pending_renames
            ]

    def views(self, query: SearchQuery | None = None) -> list[ItemView]:
        """Project the session state for display, ordered by descriptive text.

        Ordering ignores case.

        Args:
            query: Optional search query deciding each item's visibility.

        Returns:
            One view per item.
        """
        with self.lock:
            session = self._require_session()
            items = sorted(session.items.values(), key=lambda item: item.record.sort_key.casefold())

            return [
                ItemView(
                    identity=item.identity,
                    current_value=item.current_value,
                    reason=item.reason,
                    is_dirty=item.is_dirty,
                    visible=query is None or query.test(item.searchable_text),
                    first_line=item.record.first_line,
                    second_line=item.record.second_line,
                )
                for item in items
            ]
