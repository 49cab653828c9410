import cv2


class ImageLoadError(FileNotFoundError):
    """The image file could not be read or decoded."""


def load_image(path, flags=cv2.IMREAD_COLOR):
    image = cv2.imread(str(path), flags)
    if image is None:
        raise ImageLoadError(f"Could not open {path}.")
    return image


def save_image(image, path):
    if not cv2.imwrite(str(path), image):
        raise OSError(f"Could not write {path}.")
