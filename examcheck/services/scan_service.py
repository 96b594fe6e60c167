import logging

from examcheck.utils.image_preprocessing import preprocess_answer_sheet, encode_png

logger = logging.getLogger(__name__)

def preprocess_scan(file_path: str) -> bytes:
    """
    Threshold a captured answer sheet and return it as PNG bytes.

    Reading the marked bubbles into an AnswerSet is a later stage; this step only
    prepares the image for it and for the operator to review.
    """
    logger.info(f"Processing scanned sheet: {file_path}")
    thresh = preprocess_answer_sheet(file_path)
    return encode_png(thresh)
