"""
Vendor error envelope.

Failed Graph API calls answer with ``{"error": {...}}``. The exact set of
fields varies between endpoints, so the model is open and only the common
core is required.
"""

from wacloud.schemas.core.base_models import ResponseModel


class WhatsAppErrorDetail(ResponseModel):
    message: str
    type: str
    code: int
    error_subcode: int | None = None
    error_user_title: str | None = None
    error_user_msg: str | None = None
    fbtrace_id: str | None = None


class WhatsAppErrorResponse(ResponseModel):
    error: WhatsAppErrorDetail
