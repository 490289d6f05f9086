"""
Conversion errors

Every failure the converter can hit is a DecodeError. The caller-facing
``message`` is a fixed literal per kind; ``reason`` carries the sub-cause.
"""

BASE64_ERROR_MESSAGE = "Erro ao decodificar base64"
IMAGE_ERROR_MESSAGE = "Erro ao carregar imagem"


class DecodeError(Exception):
    """Base class for input that cannot be turned into a raster."""
    message = "Erro ao decodificar entrada"
    kind = "decode"

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"{self.message}: {reason}")


class Base64DecodeError(DecodeError):
    """Thrown when the input string is not valid standard base64."""
    message = BASE64_ERROR_MESSAGE
    kind = "base64"


class ImageLoadError(DecodeError):
    """Thrown when the decoded bytes are not a readable raster image."""
    message = IMAGE_ERROR_MESSAGE
    kind = "image"
