from __future__ import annotations

from typing import Iterable, Iterator, Optional, Union

from ..errors import NotAMemberError, PersistenceError
from ..logging_utils import get_logger
from .option_binding import OptionBinding

_LOGGER = get_logger(__name__)

Member = Union[OptionBinding, str]


class ExclusiveGroup:
    """A set of option bindings of which at most one is selected.

    Members keep their declaration order; it decides which member survives
    when stored state marks more than one of them as selected.
    """

    def __init__(self, name: str, bindings: Iterable[OptionBinding] = ()) -> None:
        self.name = name
        self._bindings: list[OptionBinding] = []
        for binding in bindings:
            self.add(binding)

    def add(self, binding: OptionBinding) -> None:
        if any(existing.option_id == binding.option_id for existing in self._bindings):
            raise ValueError(f"Option '{binding.option_id}' already belongs to group '{self.name}'.")
        self._bindings.append(binding)

    @property
    def bindings(self) -> tuple[OptionBinding, ...]:
        return tuple(self._bindings)

    def __iter__(self) -> Iterator[OptionBinding]:
        return iter(self._bindings)

    def __len__(self) -> int:
        return len(self._bindings)

    def __contains__(self, member: object) -> bool:
        if isinstance(member, OptionBinding):
            return any(binding is member for binding in self._bindings)
        if isinstance(member, str):
            return any(binding.option_id == member for binding in self._bindings)
        return False

    def get(self, option_id: str) -> Optional[OptionBinding]:
        for binding in self._bindings:
            if binding.option_id == option_id:
                return binding
        return None

    @property
    def selected(self) -> Optional[OptionBinding]:
        for binding in self._bindings:
            if binding.selected:
                return binding
        return None

    @property
    def selected_id(self) -> Optional[str]:
        binding = self.selected
        return binding.option_id if binding is not None else None

    def initialize(self, bindings: Iterable[OptionBinding] | None = None) -> Optional[OptionBinding]:
        if bindings is not None:
            self._bindings = []
            for binding in bindings:
                self.add(binding)
        winner: Optional[OptionBinding] = None
        demoted: list[str] = []
        for binding in self._bindings:
            if not binding.initialize():
                continue
            if winner is None:
                winner = binding
                continue
            binding.deselect()
            demoted.append(binding.option_id)
        if demoted:
            _LOGGER.warning(
                "ExclusiveGroup %s stored state had several selections; kept=%s demoted=%s",
                self.name,
                winner.option_id if winner is not None else None,
                ",".join(demoted),
            )
        _LOGGER.debug("ExclusiveGroup %s initialized selected=%s", self.name, self.selected_id)
        return winner

    def resolve(self, member: Member) -> OptionBinding:
        if isinstance(member, OptionBinding):
            if member in self:
                return member
            option_id = member.option_id
        else:
            option_id = str(member)
            binding = self.get(option_id)
            if binding is not None:
                return binding
        _LOGGER.error("ExclusiveGroup %s asked to select foreign option=%s", self.name, option_id)
        raise NotAMemberError(f"Option '{option_id}' is not a member of group '{self.name}'.")

    def select(self, member: Member) -> bool:
        """Make ``member`` the single selected option.

        Returns False when it already was the committed selection (nothing is
        written and no side effect runs). A ``PersistenceError`` leaves every
        member untouched. Change listeners run once the siblings are demoted;
        a failing listener is logged and does not undo the selection.
        """
        binding = self.resolve(member)
        if binding.selected and self.selected is binding:
            _LOGGER.debug("ExclusiveGroup %s select no-op option=%s", self.name, binding.option_id)
            return False
        binding.on_select()
        for other in self._bindings:
            if other is binding:
                continue
            try:
                other.deselect(persist=True)
            except PersistenceError:
                _LOGGER.warning(
                    "ExclusiveGroup %s could not persist deselect option=%s",
                    self.name,
                    other.option_id,
                    exc_info=True,
                )
        binding.notify_change()
        binding.run_side_effect()
        _LOGGER.debug("ExclusiveGroup %s selected=%s", self.name, binding.option_id)
        return True
