"""
Type-safe model call parameters.

``ModelParameters`` carries the sampling and length controls accepted by the
text-generation models.  They are flattened into the request body next to
``model`` and ``messages``.

Design:
    - ``extra = "forbid"`` catches typos immediately.
    - ``to_call_kwargs()`` returns only set, non-zero values.  The service
      treats a missing field differently from an explicit ``0`` for some
      parameters, so a zero is never sent.
    - ``merge()`` lets per-call parameters override client defaults.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class ModelParameters(BaseModel):
    """
    Optional sampling parameters for a chat request.

    Usage::

        from workersai import ModelParameters

        params = ModelParameters(temperature=0.3, max_tokens=256)
        kwargs = params.to_call_kwargs()
        # → {"temperature": 0.3, "max_tokens": 256}
    """

    model_config = ConfigDict(extra="forbid")

    temperature: Optional[float] = Field(
        None, ge=0.0, le=5.0,
        description="Sampling temperature. Higher values give more random output.",
    )
    top_p: Optional[float] = Field(
        None, ge=0.0, le=2.0,
        description="Nucleus sampling probability mass.",
    )
    top_k: Optional[int] = Field(
        None, ge=0, le=50,
        description="Limit sampling to the k most likely tokens.",
    )
    max_tokens: Optional[int] = Field(
        None, ge=0,
        description="Maximum tokens to generate.",
    )

    # ------------------------------------------------------------------ #
    # Helpers                                                              #
    # ------------------------------------------------------------------ #

    def to_call_kwargs(self) -> Dict[str, Any]:
        """
        Convert to the flattened request fields, excluding unset and zero values.

        Returns:
            Dict of parameter name → value.
        """
        return {k: v for k, v in self.model_dump().items() if v}

    def merge(self, override: "ModelParameters | None") -> "ModelParameters":
        """
        Return a **new** instance with *override* values taking precedence.

        Only set fields from *override* replace fields in ``self``; an explicit
        ``0`` counts as set.
        """
        if override is None:
            return self
        base = self.model_dump(exclude_none=True)
        base.update(override.model_dump(exclude_none=True))
        return type(self)(**base)
