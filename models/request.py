"""RenderBlockRequest Pydantic model with strict validation (extra=forbid)."""

from typing import Optional

from pydantic import BaseModel, ConfigDict

from models.block import BlockDescriptor
from models.result import Strategy


class RenderBlockRequest(BaseModel):
    """Incoming request body for the POST /render-block endpoint.

    ``strategy`` overrides the configured strategy for this block only.
    Extra fields are rejected with a 422 response.
    """

    model_config = ConfigDict(extra="forbid")

    html: str
    block: BlockDescriptor
    strategy: Optional[Strategy] = None
