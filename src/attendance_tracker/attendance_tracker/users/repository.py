from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Employee


class EmployeeRepository(Protocol):
    """Read-only employee lookups used by the attendance core.

    Note (DIP): services depend on this interface, never on a concrete DB.
    """

    def get_by_id(self, user_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def list_expected_on(self, weekday: str) -> Sequence[Employee]:
        """Active employees whose off day is unset or differs from `weekday`."""

        raise NotImplementedError

    def count_active(self) -> int:
        raise NotImplementedError
