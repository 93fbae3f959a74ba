"""Fetch result domain entities."""

from dataclasses import dataclass, field
from typing import Union


@dataclass(frozen=True)
class Found:
    """The provider returned the image.

    Attributes:
        content: Raw image bytes
    """

    content: bytes = field(repr=False)


@dataclass(frozen=True)
class NotFound:
    """The provider reported that no image exists for the key."""


@dataclass(frozen=True)
class TransientError:
    """The request failed for any reason other than "not found".

    Attributes:
        cause: The underlying exception, or a description of the bad response
    """

    cause: Exception | str


FetchResult = Union[Found, NotFound, TransientError]
