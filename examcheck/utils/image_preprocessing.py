import cv2
import numpy as np
import logging

from examcheck.config import SCAN_BLUR_KERNEL, SCAN_BLOCK_SIZE, SCAN_THRESHOLD_C

logger = logging.getLogger(__name__)

def threshold_sheet(image: np.ndarray,
                    blur_kernel: int = SCAN_BLUR_KERNEL,
                    block_size: int = SCAN_BLOCK_SIZE,
                    c: int = SCAN_THRESHOLD_C) -> np.ndarray:
    """
    Binarize an answer sheet so filled bubbles and ink come out white on black.

    Args:
        image: BGR, BGRA or single-channel image
        blur_kernel: Side of the Gaussian blur kernel (odd)
        block_size: Neighbourhood size for the adaptive threshold (odd, > 1)
        c: Constant subtracted from the local weighted mean

    Returns:
        Single-channel uint8 image with values 0 or 255
    """
    if image.ndim == 2:
        gray = image
    elif image.shape[2] == 4:
        gray = cv2.cvtColor(image, cv2.COLOR_BGRA2GRAY)
    else:
        gray = cv2.cvtColor(image, cv2.COLOR_BGR2GRAY)

    # Smooth paper texture before thresholding
    blur = cv2.GaussianBlur(gray, (blur_kernel, blur_kernel), 0)

    # Local threshold copes with uneven lighting from phone cameras
    return cv2.adaptiveThreshold(
        blur,
        255,
        cv2.ADAPTIVE_THRESH_GAUSSIAN_C,
        cv2.THRESH_BINARY_INV,
        block_size,
        c,
    )

def preprocess_answer_sheet(image_path: str) -> np.ndarray:
    """
    Load a photographed answer sheet and threshold it.

    Args:
        image_path: Path to the image file

    Returns:
        The thresholded sheet
    """
    logger.info(f"Preprocessing answer sheet: {image_path}")

    image = cv2.imread(image_path)
    if image is None:
        raise ValueError(f"Could not load image from path: {image_path}")

    thresh = threshold_sheet(image)
    logger.info(f"Answer sheet preprocessing complete: {image_path} ({thresh.shape[1]}x{thresh.shape[0]})")
    return thresh

def encode_png(image: np.ndarray) -> bytes:
    ok, buffer = cv2.imencode(".png", image)
    if not ok:
        raise ValueError("Could not encode image as PNG")
    return buffer.tobytes()
