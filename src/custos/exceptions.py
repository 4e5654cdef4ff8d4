"""
Custom Custos exception classes
"""

import logging
from typing import Any, Optional

logger = logging.getLogger(__name__)


class CustosException(Exception):
    """Base class for all Exceptions raised within Custos"""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args)

        self.extra_info = kwargs.get("extra_info", None)

    def __reduce__(self) -> tuple[Any, tuple[Any]]:
        return (self.__class__, (self.args[0],))


class CustosExceptionWithMessage(CustosException):
    def __init__(
        self, messages: dict[str, Any], traceback: Optional[str] = None, **kwargs: Any
    ) -> None:
        logger.debug(f"Exception:: {messages}")

        self.messages = messages
        self.traceback = traceback

        super().__init__(**kwargs)

    def __str__(self) -> str:
        return f"{dict(self.messages)}"

    def __reduce__(self) -> tuple[Any, tuple[Any]]:
        return (self.__class__, (self.messages,))


class ConfigurationError(CustosException):
    """Improper Configuration encountered like:
    * An important configuration variable is missing
    * An unknown document store provider
    * A store constructed without a session source
    """


class InvalidArgumentError(CustosException):
    """A required argument was not supplied"""


class ObjectDisposedError(CustosException):
    """Operation invoked on an object that has already been disposed"""


class InvalidOperationError(CustosException):
    """Operation being performed is not permitted"""


class NonUniqueObjectError(CustosException):
    """A different object with the same document key is already tracked by the session"""


class DocumentConflictError(CustosException):
    """A document key collided with an existing document on commit

    Equivalent to 409 (Conflict)"""


class DocumentMappingError(CustosExceptionWithMessage):
    """Document data could not be mapped to or from its object form"""
