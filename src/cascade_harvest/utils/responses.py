"""
Standard response envelopes for the CLI and services.

The final enumeration is exported as human-readable JSON, keeping the key
order in which the mapping was built.

Example:
    >>> result = OperationResult.ok({"BMW": ["X1", "X3"]})
    >>> print(result.to_json())
    {"success": true, "data": {"BMW": ["X1", "X3"]}}

    >>> result = OperationResult.fail("timeout waiting for #brand")
    >>> print(result.to_json())
    {"success": false, "error": "timeout waiting for #brand"}
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any


@dataclass
class OperationResult:
    """
    Standard result for an operation.

    Attributes:
        success: Whether the operation succeeded.
        data: Returned data (when success=True).
        error: Error message (when success=False).
        metadata: Optional extra info (counts, timings).
    """

    success: bool
    data: Any = None
    error: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_json(self, ensure_ascii: bool = False, indent: int | None = None) -> str:
        """Serialize to a JSON string; keys keep insertion order."""
        d: dict[str, Any] = {"success": self.success}
        if self.success:
            if self.data is not None:
                d["data"] = self.data
        else:
            if self.error:
                d["error"] = self.error
        if self.metadata:
            d["metadata"] = self.metadata
        return json.dumps(d, ensure_ascii=ensure_ascii, indent=indent)

    @classmethod
    def ok(cls, data: Any = None, **metadata: Any) -> OperationResult:
        return cls(success=True, data=data, metadata=metadata)

    @classmethod
    def fail(cls, error: str, **metadata: Any) -> OperationResult:
        return cls(success=False, error=error, metadata=metadata)


@dataclass
class HarvestResult(OperationResult):
    """
    Result of an option harvest (dependent or flat).
    """

    @classmethod
    def ok_with_mapping(
        cls,
        mapping: dict[str, Any],
        **metadata: Any,
    ) -> HarvestResult:
        """
        Build a success result for a harvested mapping.

        Args:
            mapping: parent value -> child values, or label -> value.
            **metadata: Extra metadata (counts per outcome).
        """
        return cls(success=True, data=mapping, metadata={"count": len(mapping), **metadata})
