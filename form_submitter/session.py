import logging
from typing import Mapping
from urllib.parse import urlencode

from .models import Enctype, HTTPResponse, Method, PreparedRequest, RequestOptions, ResolvedForm
from .transport import request
from .urls import merge_query

logger = logging.getLogger(__name__)


class FormSession:
    """
    Holds a resolved form and the params the caller wants to submit on top
    of its defaults. Params the form doesn't have are added, params it has
    are replaced.
    """

    def __init__(self, form: ResolvedForm):
        self.form = form
        self._overrides: dict[str, str] = {}

    @classmethod
    def from_resolved(cls, form: ResolvedForm) -> "FormSession":
        return cls(form)

    @property
    def overrides(self) -> dict[str, str]:
        return dict(self._overrides)

    def set_params(self, overrides: Mapping[str, str]) -> None:
        """Replaces the override set. Calls are not cumulative."""
        self._overrides = dict(overrides)

    def effective_params(self) -> dict[str, str]:
        params = dict(self.form.params)
        params.update(self._overrides)
        return params

    def build_request(self) -> PreparedRequest:
        form = self.form
        params = self.effective_params()

        if form.method is Method.GET:
            return PreparedRequest(
                url=merge_query(form.action, urlencode(params)),
                method=Method.GET,
                enctype=Enctype.URLENCODED,
                body=None,
            )

        body = urlencode(params) if form.enctype is Enctype.URLENCODED else params
        return PreparedRequest(
            url=form.action,
            method=Method.POST,
            enctype=form.enctype,
            body=body,
        )

    def submit(self, options: RequestOptions | None = None) -> HTTPResponse:
        """
        Sends the form with the overrides applied.

        Args:
            options (RequestOptions | None): Transport configuration.

        Returns:
            HTTPResponse: The raw response, whatever its status code (unless
                          `options.fail_on_http_error` is set).

        Raises:
            TransportError: The request could not be completed.
        """
        prepared = self.build_request()
        logger.debug("Submitting form to %s with %s", prepared.url, prepared.body)
        return request(
            prepared.url,
            method=prepared.method,
            body=prepared.body,
            enctype=prepared.enctype,
            options=options,
        )
