"""
Image format conversion utilities.

Moves pixel data between ImageAccess and the collaborators that produce or
consume rasters:
- PIL Images (RGB / L)
- OpenCV arrays (BGR)
- uint8 NumPy arrays

Decoding and encoding files is left to PIL/OpenCV; these helpers only take
already decoded images.
"""

import logging
from typing import Optional

import cv2
import numpy as np
from PIL import Image

from image_access.constants import ImageConstants, RenderConstants
from image_access.core.image_access import ImageAccess
from image_access.diagnostics import DiagnosticSink

logger = logging.getLogger(__name__)


class ImageConverters:
    """Utilities for converting between ImageAccess and external image formats."""

    @staticmethod
    def clip_to_uint8(data: np.ndarray) -> np.ndarray:
        """
        Round and clip samples to [0, 255] and cast to uint8.

        NaN samples become 0.
        """
        data = np.nan_to_num(np.asarray(data, dtype=np.float64), nan=0.0)
        return np.clip(np.rint(data), 0, RenderConstants.UINT8_MAX).astype(np.uint8)

    @staticmethod
    def from_pil(
        image: Image.Image, rgb: bool = False, diagnostics: Optional[DiagnosticSink] = None
    ) -> ImageAccess:
        """
        Convert a PIL Image to ImageAccess.

        Args:
            image: PIL Image in any mode
            rgb: If True, keep the three colour channels; otherwise each
                pixel becomes floor((r + g + b) / 3)
            diagnostics: Diagnostics sink of the new image

        Returns:
            New ImageAccess
        """
        try:
            array = np.asarray(image.convert("RGB"), dtype=np.float64)

            if not rgb:
                array = np.floor(array.sum(axis=2) / ImageConstants.RGB_CHANNELS)

            return ImageAccess(array, diagnostics=diagnostics)

        except Exception as e:
            logger.error(f"Failed to convert PIL image: {e}")
            raise

    @staticmethod
    def to_pil(image: ImageAccess) -> Image.Image:
        """
        Convert ImageAccess to a PIL Image.

        Samples are rounded and clipped to [0, 255]. Grayscale images become
        mode "L", colour images mode "RGB".
        """
        try:
            return Image.fromarray(ImageConverters.clip_to_uint8(image.to_array()))

        except Exception as e:
            logger.error(f"Failed to convert image to PIL: {e}")
            raise

    @staticmethod
    def from_opencv(
        image: np.ndarray, diagnostics: Optional[DiagnosticSink] = None
    ) -> ImageAccess:
        """
        Convert an OpenCV array (grayscale or BGR) to ImageAccess.

        Colour channels are reordered to RGB.
        """
        image = np.asarray(image)
        is_bgr = (
            image.ndim == ImageConstants.COLOR_NDIM
            and image.shape[2] == ImageConstants.RGB_CHANNELS
        )
        if is_bgr:
            if image.dtype in (np.uint8, np.uint16, np.float32):
                image = cv2.cvtColor(image, cv2.COLOR_BGR2RGB)
            else:
                # cvtColor only handles 8/16-bit and float32 depths
                image = image[..., ::-1]
        return ImageAccess(image, diagnostics=diagnostics)

    @staticmethod
    def to_opencv(image: ImageAccess) -> np.ndarray:
        """Convert ImageAccess to a uint8 OpenCV array (grayscale or BGR)"""
        array = ImageConverters.clip_to_uint8(image.to_array())
        if image.is_color:
            array = cv2.cvtColor(array, cv2.COLOR_RGB2BGR)
        return array
