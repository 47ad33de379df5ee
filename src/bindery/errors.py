__all__ = ["ContainerError", "BindingNotFound", "OwnerReleased"]


class ContainerError(Exception):
    """Base class for errors raised by the container."""

    pass


class BindingNotFound(ContainerError, KeyError):
    """Raised when a key is looked up that has no binding registered."""

    def __init__(self, key: str):
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return f"No binding found for key '{self.key}'"


class OwnerReleased(ContainerError):
    """Raised when a resolver runs after its owner has been garbage collected."""

    pass
