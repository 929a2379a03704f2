import logging
from typing import Any, Mapping

import requests
from requests.structures import CaseInsensitiveDict

from .constants import HEADERS
from .errors import InvalidUrl, TransportError
from .models import Enctype, HTTPResponse, Method, RequestOptions
from .urls import is_absolute

logger = logging.getLogger(__name__)

Body = str | Mapping[str, str] | None


def request(
    url: str,
    method: Method | str = Method.GET,
    headers: Mapping[str, str] | None = None,
    body: Body = None,
    enctype: Enctype = Enctype.URLENCODED,
    options: RequestOptions | None = None,
) -> HTTPResponse:
    """
    Sends one HTTP request and returns the response body as a string.

    Args:
        url (str): Absolute URL to request.
        method (Method | str): GET or POST.
        headers (Mapping[str, str] | None): Headers for this call only, they
            win over both `options.headers` and the default headers.
        body: A pre-encoded string, or a params mapping encoded according to
            `enctype`.
        enctype (Enctype): How a params mapping body is encoded.
        options (RequestOptions | None): Transport configuration.

    Returns:
        HTTPResponse: Status code, body, final URL after redirects and headers.

    Raises:
        InvalidUrl: `url` is not a well-formed absolute URL.
        TransportError: The request failed, or returned an HTTP error status
            while `options.fail_on_http_error` is set.
    """
    if not is_absolute(url):
        raise InvalidUrl(f"Cannot send HTTP request, URL {url} is not valid.")
    if isinstance(method, str):
        method = Method(method.upper())
    if options is None:
        options = RequestOptions()

    merged_headers = CaseInsensitiveDict(HEADERS)
    merged_headers.update(options.headers)
    merged_headers.update(headers or {})

    kwargs: dict[str, Any] = {
        "timeout": options.timeout,
        "allow_redirects": options.follow_redirects,
        "verify": options.verify_ssl,
    }
    if options.proxy:
        kwargs["proxies"] = {"http": options.proxy, "https": options.proxy}
    kwargs.update(_encode_body(body, enctype, merged_headers))

    logger.info("%s %s", method.value, url)
    session = options.session if options.session is not None else requests.Session()
    try:
        res = session.request(method.value, url, headers=merged_headers, **kwargs)
    except requests.RequestException as e:
        raise TransportError(str(e), cause=e) from e
    finally:
        if options.session is None:
            session.close()

    if res.status_code >= 400:
        if options.fail_on_http_error:
            raise TransportError(
                f"The requested URL returned error: {res.status_code}",
                status_code=res.status_code,
            )
        logger.warning("%s %s returned status %d", method.value, url, res.status_code)

    return HTTPResponse(
        status_code=res.status_code,
        text=res.text,
        url=res.url,
        headers=CaseInsensitiveDict(res.headers),
    )


def _encode_body(body: Body, enctype: Enctype, headers: CaseInsensitiveDict) -> dict[str, Any]:
    if body is None:
        return {}

    if isinstance(body, str):
        if "Content-Type" not in headers:
            content_type = Enctype.PLAIN_TEXT if enctype is Enctype.PLAIN_TEXT else Enctype.URLENCODED
            headers["Content-Type"] = content_type.value
        return {"data": body.encode("utf-8")}

    if enctype is Enctype.MULTIPART:
        # (None, value) parts make requests emit plain form-data fields
        return {"files": [(name, (None, value)) for name, value in body.items()]}

    if enctype is Enctype.PLAIN_TEXT:
        if "Content-Type" not in headers:
            headers["Content-Type"] = f"{Enctype.PLAIN_TEXT.value}; charset=utf-8"
        text = "".join(f"{name}={value}\r\n" for name, value in body.items())
        return {"data": text.encode("utf-8")}

    return {"data": dict(body)}
