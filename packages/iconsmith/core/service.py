"""Request-boundary facade for icon-set generation.

Turns a parsed request body into a status code and a JSON-ready body:
validate, resolve the style, orchestrate, and classify any failure
exactly once.
"""

from __future__ import annotations

import logging
import uuid
from typing import Any

from pydantic import BaseModel, ConfigDict

from iconsmith.core.errors import ClassifiedError, classify_error
from iconsmith.core.errors.exceptions import RequestValidationError
from iconsmith.core.generation.models import ErrorResponse, GenerationRequest
from iconsmith.core.generation.orchestrator import IconGenerator, generate_icon_set
from iconsmith.core.styles import get_style_by_id, list_styles

logger = logging.getLogger(__name__)


class ServiceResponse(BaseModel):
    """HTTP-style response produced by the service.

    Attributes:
        status_code: HTTP status code.
        body: JSON-serializable response body.
    """

    model_config = ConfigDict(frozen=True)

    status_code: int
    body: dict[str, Any]

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


def error_response(classified: ClassifiedError) -> ServiceResponse:
    """Build the failure response for a classified error."""
    body = ErrorResponse(
        error=classified.message,
        code=classified.code,
        category=classified.category.value,
        recoverable=classified.recoverable,
        retry_after=classified.retry_after,
    )
    return ServiceResponse(
        status_code=classified.status_code,
        body=body.model_dump(mode="json", by_alias=True, exclude_none=True),
    )


class IconSetService:
    """Entry point used by the CLI and any HTTP adapter.

    Args:
        client: Icon generator shared across requests.
        logger: Logger for request events (defaults to the module logger).
    """

    def __init__(
        self,
        client: IconGenerator,
        *,
        logger: logging.Logger | logging.LoggerAdapter | None = None,
    ) -> None:
        self._client = client
        self._logger = logger or logging.getLogger(__name__)

    def list_styles(self) -> dict[str, Any]:
        """All style presets, serialized for clients."""
        styles = [style.model_dump(mode="json", by_alias=True) for style in list_styles()]
        return {"styles": styles}

    async def generate(self, payload: Any) -> ServiceResponse:
        """Generate an icon set from a parsed request body.

        Validation failures are returned before any model call is made.

        Args:
            payload: Parsed JSON body ({"prompt", "style", "brandColors"?}).

        Returns:
            200 with the icon set, or the classified error's status and body.
        """
        request_id = uuid.uuid4().hex[:12]
        log = logging.LoggerAdapter(self._logger, {"request_id": request_id})

        try:
            request = GenerationRequest.from_payload(payload)
            style = get_style_by_id(request.style)
            if style is None:
                raise RequestValidationError(f"Invalid style '{request.style}'", field="style")

            log.info(
                "Generation request validated: style=%s brand_colors=%d",
                request.style,
                len(request.brand_colors),
            )
            result = await generate_icon_set(self._client, request, style, logger=log)
        except RequestValidationError as e:
            log.info("Rejected generation request: %s", e.message)
            return error_response(classify_error(e, logger=log))
        except Exception as e:
            log.exception("Icon set generation failed")
            return error_response(classify_error(e, logger=log))

        return ServiceResponse(
            status_code=200,
            body=result.to_response().model_dump(mode="json", by_alias=True),
        )
