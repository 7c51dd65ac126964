from __future__ import annotations


class ReleaserError(Exception):
    """Base exception class for all releaser errors.

    All custom exceptions raised by releaser inherit from this class, so the
    CLI boundary can catch releaser failures while letting system exceptions
    propagate naturally.

    Attributes:
        message: Human-readable error message describing what went wrong.

    Example:
        ```python
        try:
            await commit_release(gateway, config, "1.2.0")
        except ReleaserError as e:
            logger.error("release_failed", error=e.message)
            sys.exit(1)
        ```
    """

    def __init__(self, message: str) -> None:
        """Initialize the ReleaserError.

        Args:
            message: Human-readable error message.
        """
        self.message = message
        super().__init__(message)
