"""Exception hierarchy for the dataknobs hashtable package.

Container operations never raise for an absent key or a refused insert; those
outcomes are reported through booleans, zero values, or omission from a
result. Exceptions are reserved for the boundaries where a caller hands the
package data it cannot interpret, such as deserializing something that is not
a mapping.

Example:
    ```python
    from dataknobs_hashtable import Hashtable
    from dataknobs_hashtable.exceptions import HashtableError

    try:
        table = Hashtable.from_dict(["not", "a", "mapping"])
    except HashtableError as e:
        logger.error(f"Error: {e}")
        if e.context:
            logger.error(f"Context: {e.context}")
    ```
"""

from typing import Any, Dict


class HashtableError(Exception):
    """Base exception for the hashtable package.

    Attributes:
        context: Dictionary containing contextual information about the error
        details: Alias for context

    Args:
        message: Human-readable error message
        context: Optional dictionary with error context
        details: Alternative to context (both are supported)

    Example:
        ```python
        error = HashtableError(
            "Operation failed",
            context={"operation": "from_dict", "data_type": "list"}
        )
        str(error)
        # 'Operation failed'
        error.context
        # {'operation': 'from_dict', 'data_type': 'list'}
        ```
    """

    def __init__(
        self,
        message: str,
        context: Dict[str, Any] | None = None,
        details: Dict[str, Any] | None = None,
    ):
        super().__init__(message)
        # Details takes precedence if both are provided
        self.context = details or context or {}
        self.details = self.context


class SerializationError(HashtableError):
    """Raised when a container cannot be converted to or from a dict.

    Example:
        ```python
        raise SerializationError(
            "Data must be a mapping, got list",
            context={"class": "Hashtable", "data_type": "list"}
        )
        ```
    """

    pass
