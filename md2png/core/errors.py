class Md2PngError(Exception):
    """Base class for every failure raised by the rendering pipeline."""


class ConfigurationError(Md2PngError, ValueError):
    """Invalid run configuration, detected before any rendering work starts."""


class ResourceError(Md2PngError):
    """A requested input or stylesheet could not be read."""


class RenderingError(Md2PngError):
    """The headless browser failed to load the document or capture the image."""
