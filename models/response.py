"""RenderBlockResponse Pydantic model."""

from pydantic import BaseModel


class RenderBlockResponse(BaseModel):
    """Response body for the POST /render-block endpoint.

    ``html`` is the annotated fragment, or the fragment as received when
    annotation was skipped or fell back.
    """

    html: str
    annotated: bool
