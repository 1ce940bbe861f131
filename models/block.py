"""Block descriptor as produced by the upstream block parser."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class BlockDescriptor(BaseModel):
    """A parsed block: its type name and attribute set.

    ``name`` is ``None`` for freeform (classic) content, which is never
    annotated.  ``attributes`` keeps the key order it was given in so the
    serialized JSON matches the host's ordering.

    Accepts the parser's own keys (``blockName``, ``attrs``) as well as the
    field names.
    """

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    name: Optional[str] = Field(default=None, alias="blockName")
    attributes: dict[str, Any] = Field(default_factory=dict, alias="attrs")
