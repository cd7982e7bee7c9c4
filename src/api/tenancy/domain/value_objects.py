"""Value objects for the tenancy domain.

Value objects are immutable descriptors that provide type safety and
domain semantics for tenant identifiers.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class IdentifierSource(StrEnum):
    """Where in the request a tenant identifier was found."""

    HEADER = "header"
    QUERY = "query"


@dataclass(frozen=True)
class TenantId:
    """Identifier for a tenant as carried on the wire.

    The value is kept as text so it can be echoed back verbatim in
    rejection messages. Directory lookups use the integer form, see
    ``as_int``.
    """

    value: str

    def __str__(self) -> str:
        """Return string representation."""
        return self.value

    @classmethod
    def from_string(cls, value: str) -> TenantId:
        """Create TenantId from raw request text.

        Args:
            value: Raw header or query parameter value

        Returns:
            TenantId holding the trimmed value
        """
        return cls(value=value.strip())

    def as_int(self) -> int:
        """Parse the identifier as a positive integer.

        An optional leading ``+`` is allowed (``"+42"`` is tenant 42).

        Returns:
            The numeric tenant identifier used by the tenant directory

        Raises:
            ValueError: If the value is blank, not a decimal integer, or not positive
        """
        digits = self.value[1:] if self.value.startswith("+") else self.value
        if not (digits.isascii() and digits.isdecimal()):
            raise ValueError(f"Invalid TenantId: {self.value!r}")

        parsed = int(digits)
        if parsed <= 0:
            raise ValueError(f"Invalid TenantId: {self.value!r}")

        return parsed


@dataclass(frozen=True)
class ExtractedIdentifier:
    """A tenant identifier together with where it was found."""

    tenant_id: TenantId
    source: IdentifierSource
    name: str
