from typing import Tuple

import numpy as np


def letterbox(
    image: np.ndarray,
    new_shape: Tuple[int, int] = (416, 416),
    color: Tuple[int, int, int] = (127, 127, 127),
    scale_fill: bool = False,
):
    """
    Fit an image into the network input, the way Darknet's `letterbox_image`
    does: scale to fit while keeping the aspect ratio and pad the rest evenly
    with mid-grey. With `scale_fill=True` the image is stretched to the input
    size instead (Darknet's plain `resize_image`).

    Args:
        new_shape: (width, height) of the network input

    Returns:
        padded: resized + padded image, exactly `new_shape`
        ratio: (w_ratio, h_ratio)
        pad: (dw, dh) padding applied to width/height (left/top only; right/bottom equal)
    """
    try:
        import cv2  # type: ignore
    except Exception as e:  # pragma: no cover
        raise ImportError("OpenCV is required for letterbox(). Install with `pip install opencv-python`.") from e

    if isinstance(new_shape, int):
        new_shape = (new_shape, new_shape)

    h, w = image.shape[:2]
    new_w, new_h = new_shape

    if scale_fill:
        resized_w, resized_h = new_w, new_h
        ratio = (new_w / w, new_h / h)
    else:
        r = min(new_w / w, new_h / h)
        ratio = (r, r)
        resized_w = min(new_w, max(1, int(round(w * r))))
        resized_h = min(new_h, max(1, int(round(h * r))))

    dw, dh = (new_w - resized_w) / 2, (new_h - resized_h) / 2

    if (w, h) != (resized_w, resized_h):
        image = cv2.resize(image, (resized_w, resized_h), interpolation=cv2.INTER_LINEAR)

    top, left = int(dh), int(dw)
    bottom, right = new_h - resized_h - top, new_w - resized_w - left
    if top or bottom or left or right:
        image = cv2.copyMakeBorder(image, top, bottom, left, right, cv2.BORDER_CONSTANT, value=color)

    return image, ratio, (dw, dh)
