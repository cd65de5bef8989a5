"""
Error taxonomy shared by the library and the task.

Malformed configuration is not an exception: `darknet_task.config.try_parse`
returns None for it.
"""


class ResourceUnavailable(OSError):
    """A model, label, image or output path cannot be used."""


class ModelLoadError(ResourceUnavailable):
    """The network topology/weights could not be loaded by the backend."""


class ModelLabelMismatch(IndexError):
    """A class index produced by the model has no entry in the label table."""


class ResultFormatError(ValueError):
    """A detection field could not be rendered as text."""
