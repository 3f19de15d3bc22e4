"""Icon generation: prompt construction, model calls, orchestration, validation."""

from iconsmith.core.generation.client import (
    DEFAULT_MODEL,
    FIXED_GENERATION_PARAMS,
    IconGenerationClient,
    ModelRunner,
    ReplicateRunner,
    create_generation_client,
)
from iconsmith.core.generation.colors import hex_colors_to_names, hex_to_color_name, hex_to_rgb
from iconsmith.core.generation.models import (
    ICON_SET_SIZE,
    ErrorResponse,
    GeneratedIcon,
    GenerateResponse,
    GenerationRequest,
)
from iconsmith.core.generation.orchestrator import IconSetResult, generate_icon_set
from iconsmith.core.generation.prompt_builder import build_icon_prompt
from iconsmith.core.generation.response import extract_image_url
from iconsmith.core.generation.retry import RetryPolicy, execute_with_retry, is_transient_error
from iconsmith.core.generation.validator import ImageValidator

__all__ = [
    "DEFAULT_MODEL",
    "ErrorResponse",
    "FIXED_GENERATION_PARAMS",
    "GeneratedIcon",
    "GenerateResponse",
    "GenerationRequest",
    "ICON_SET_SIZE",
    "IconGenerationClient",
    "IconSetResult",
    "ImageValidator",
    "ModelRunner",
    "ReplicateRunner",
    "RetryPolicy",
    "build_icon_prompt",
    "create_generation_client",
    "execute_with_retry",
    "extract_image_url",
    "generate_icon_set",
    "hex_colors_to_names",
    "hex_to_color_name",
    "hex_to_rgb",
    "is_transient_error",
]
