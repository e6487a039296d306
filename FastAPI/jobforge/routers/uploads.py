import logging

from fastapi import APIRouter, Depends, HTTPException, status

from jobforge.core.context import RequestContext
from jobforge.core.protection import protect_action
from jobforge.dependencies import get_request_context
from jobforge.schemas.upload import PresignRequest, PresignResponse
from jobforge.services.uploads import is_allowed_content_type, presign_upload

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/uploads", tags=["uploads"])


@router.post("/presign", response_model=PresignResponse)
def presign(
    body: PresignRequest,
    ctx: RequestContext = Depends(get_request_context),
    _protected: None = Depends(protect_action),
):
    """Presigned upload for a company logo (image) or a resume (PDF)."""
    if not is_allowed_content_type(body.kind, body.content_type):
        expected = "an image" if body.kind == "logo" else "a PDF"
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"{body.kind.capitalize()} must be {expected}")
    try:
        return presign_upload(body.kind, ctx.user_id, body.filename, body.content_type)
    except Exception as e:
        logger.exception("Presign failed for user=%s kind=%s: %s", ctx.user_id, body.kind, e)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Upload is unavailable right now. Please try again.",
        ) from e
