import io
import logging
from dataclasses import dataclass

from PIL import Image

from resizer.exceptions import DecodeError, EncodeError
from resizer.formats import ImageFormat

logger = logging.getLogger(__name__)

WHITE = (255, 255, 255)


@dataclass(frozen=True)
class ScalingPlan:
    width: int
    height: int


@dataclass(frozen=True)
class UploadMetadata:
    content_length: int
    content_type: str


def plan_scaling(src_width: int, src_height: int, max_width: int, max_height: int) -> ScalingPlan:
    # factor = min(max_width / src_width, max_height / src_height), applied to
    # both axes and truncated. Kept in integers so the binding axis lands
    # exactly on the box edge instead of one pixel short.
    if max_width * src_height <= max_height * src_width:
        width = max_width
        height = (max_width * src_height) // src_width
    else:
        width = (max_height * src_width) // src_height
        height = max_height
    return ScalingPlan(width=max(1, width), height=max(1, height))


def scaling_factor(src_width: int, src_height: int, max_width: int, max_height: int) -> float:
    return min(max_width / src_width, max_height / src_height)


def decode(data: bytes) -> Image.Image:
    try:
        image = Image.open(io.BytesIO(data))
        image.load()
    except (OSError, Image.DecompressionBombError) as exc:
        raise DecodeError(f"Unable to decode image: {exc}") from exc
    return image


def _has_alpha(image: Image.Image) -> bool:
    if image.mode in ("RGBA", "LA", "PA", "RGBa", "La"):
        return True
    # tRNS colour keys on L, RGB and I images land here too, not just palettes.
    return "transparency" in image.info


def scale(image: Image.Image, max_width: int, max_height: int) -> tuple:
    """Resample image into the bounding box over an opaque white canvas.

    Returns the new RGB image and the ScalingPlan it was drawn with.
    """
    plan = plan_scaling(image.width, image.height, max_width, max_height)
    canvas = Image.new("RGB", (plan.width, plan.height), WHITE)

    if _has_alpha(image):
        resized = image.convert("RGBA").resize((plan.width, plan.height), Image.BILINEAR)
        canvas.paste(resized, (0, 0), mask=resized.getchannel("A"))
    else:
        resized = image.convert("RGB").resize((plan.width, plan.height), Image.BILINEAR)
        canvas.paste(resized, (0, 0))

    logger.debug(
        "Scaled %dx%d to %dx%d (factor %.4f)",
        image.width,
        image.height,
        plan.width,
        plan.height,
        scaling_factor(image.width, image.height, max_width, max_height),
    )
    return canvas, plan


def encode(image: Image.Image, image_format: ImageFormat) -> tuple:
    """Serialize image in image_format, returning (bytes, UploadMetadata)."""
    buffer = io.BytesIO()
    try:
        image.save(buffer, format=image_format.codec)
    except (OSError, ValueError, KeyError) as exc:
        raise EncodeError(f"Unable to encode {image_format.name} image: {exc}") from exc

    data = buffer.getvalue()
    return data, UploadMetadata(content_length=len(data), content_type=image_format.mime_type)
