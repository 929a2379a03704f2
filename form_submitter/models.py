from enum import Enum
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Mapping, NamedTuple

import requests

from .constants import DEFAULT_TIMEOUT, MULTIPART, PLAIN_TEXT, URLENCODED


class Method(Enum):
    GET = "GET"
    POST = "POST"

    @classmethod
    def parse(cls, value: str | None) -> "Method":
        """
        Maps an HTML `method` attribute to a Method. Anything that is not
        "post" (case-insensitive) submits as GET, like browsers do.
        """
        if value is not None and value.strip().upper() == cls.POST.value:
            return cls.POST
        return cls.GET


class Enctype(Enum):
    URLENCODED = URLENCODED
    MULTIPART = MULTIPART
    PLAIN_TEXT = PLAIN_TEXT

    @classmethod
    def parse(cls, value: str | None) -> "Enctype":
        if value is None:
            return cls.URLENCODED
        value = value.strip().lower()
        for enctype in cls:
            if enctype.value == value:
                return enctype
        return cls.URLENCODED


@dataclass(frozen=True)
class ByIndex:
    index: int = 0

    def __post_init__(self):
        if self.index < 0:
            raise ValueError(f"Form index must be non-negative, got {self.index}")


@dataclass(frozen=True)
class ById:
    id: str


@dataclass(frozen=True)
class ByName:
    name: str


FormSelector = ByIndex | ById | ByName


@dataclass(frozen=True)
class ResolvedForm:
    action: str
    method: Method = Method.GET
    enctype: Enctype = Enctype.URLENCODED
    params: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        # GET never carries a body, so its enctype is meaningless
        if self.method is Method.GET and self.enctype is not Enctype.URLENCODED:
            object.__setattr__(self, "enctype", Enctype.URLENCODED)
        object.__setattr__(self, "params", MappingProxyType(dict(self.params)))


class PreparedRequest(NamedTuple):
    """
    The request a FormSession is about to send.

    `body` is None for GET, the URL-encoded string for URL-encoded POST,
    and the plain params dict for multipart or text/plain POST.
    """
    url: str
    method: Method
    enctype: Enctype
    body: str | dict[str, str] | None


class HTTPResponse(NamedTuple):
    status_code: int
    text: str
    url: str
    headers: Mapping[str, str]


@dataclass
class RequestOptions:
    """
    Transport configuration passed explicitly to every request.

    Attributes:
        follow_redirects (bool): Follow HTTP 3xx redirects.
        fail_on_http_error (bool): Raise TransportError on status codes >= 400
                                   instead of returning the response.
        timeout (float): Seconds before the request is abandoned.
        headers (dict): Extra headers, merged over the default headers.
        verify_ssl (bool): Verify TLS certificates.
        proxy (str): Proxy URL used for both http and https.
        session (requests.Session): Reused session, so cookies set while
                                    fetching a form are sent on submit.
    """
    follow_redirects: bool = True
    fail_on_http_error: bool = False
    timeout: float = DEFAULT_TIMEOUT
    headers: dict[str, str] = field(default_factory=dict)
    verify_ssl: bool = True
    proxy: str | None = None
    session: requests.Session | None = None

    def with_overrides(self, **changes: Any) -> "RequestOptions":
        return replace(self, **changes)
