from unittest.mock import Mock, patch

import pytest
import requests

from form_submitter.errors import TransportError
from form_submitter.form import from_url, send_form
from form_submitter.models import ByIndex, ByName, Enctype, Method, RequestOptions, ResolvedForm
from form_submitter.session import FormSession


def make_response(status_code=200, text="ok", url="https://x.test/s", headers=None):
    res = Mock()
    res.status_code = status_code
    res.text = text
    res.url = url
    res.headers = headers or {}
    return res


def test_get_query_is_order_stable_and_idempotent():
    form = ResolvedForm(action="https://x.test/s", method=Method.GET, params={"a": "1", "b": "2"})
    session = FormSession.from_resolved(form)

    first = session.build_request()
    second = session.build_request()

    assert first.url == "https://x.test/s?a=1&b=2"
    assert first.body is None
    assert first == second


def test_get_keeps_existing_query():
    form = ResolvedForm(action="https://x.test/s?lang=en", params={"q": "a b"})
    assert FormSession(form).build_request().url == "https://x.test/s?lang=en&q=a+b"


def test_get_without_params_leaves_action_alone():
    form = ResolvedForm(action="https://x.test/s")
    assert FormSession(form).build_request().url == "https://x.test/s"


def test_overrides_replace_and_add():
    form = ResolvedForm(action="https://x.test/s", params={"q": "hi", "lang": "en"})
    session = FormSession(form)
    session.set_params({"extra": "1", "q": "x"})

    assert session.effective_params() == {"q": "x", "lang": "en", "extra": "1"}
    assert session.build_request().url == "https://x.test/s?q=x&lang=en&extra=1"


def test_set_params_replaces_previous_overrides():
    session = FormSession(ResolvedForm(action="https://x.test/s", params={"q": "hi"}))
    session.set_params({"a": "1"})
    session.set_params({"b": "2"})

    assert session.overrides == {"b": "2"}
    assert session.effective_params() == {"q": "hi", "b": "2"}


def test_overrides_do_not_touch_resolved_form():
    form = ResolvedForm(action="https://x.test/s", params={"q": "hi"})
    session = FormSession(form)
    session.set_params({"q": "x"})

    assert dict(form.params) == {"q": "hi"}


def test_post_urlencoded_body():
    form = ResolvedForm(action="https://x.test/login?next=/", method=Method.POST, params={"user": "me", "pw": "p&w"})
    prepared = FormSession(form).build_request()

    assert prepared.url == "https://x.test/login?next=/"
    assert prepared.method is Method.POST
    assert prepared.enctype is Enctype.URLENCODED
    assert prepared.body == "user=me&pw=p%26w"


@pytest.mark.parametrize("enctype", [Enctype.MULTIPART, Enctype.PLAIN_TEXT])
def test_post_passes_params_through(enctype):
    form = ResolvedForm(action="https://x.test/up", method=Method.POST, enctype=enctype, params={"keep": "v"})
    session = FormSession(form)
    session.set_params({"extra": "e"})
    prepared = session.build_request()

    assert prepared.enctype is enctype
    assert prepared.body == {"keep": "v", "extra": "e"}


def test_get_form_drops_enctype():
    form = ResolvedForm(action="https://x.test/s", method=Method.GET, enctype=Enctype.MULTIPART)
    assert form.enctype is Enctype.URLENCODED


@patch("form_submitter.transport.requests.Session.request")
def test_submit_get(mock_request):
    mock_request.return_value = make_response(url="https://x.test/s?q=x")
    session = FormSession(ResolvedForm(action="https://x.test/s", params={"q": "hi"}))
    session.set_params({"q": "x"})

    res = session.submit()

    args, kwargs = mock_request.call_args
    assert args == ("GET", "https://x.test/s?q=x")
    assert "data" not in kwargs
    assert res.status_code == 200
    assert res.url == "https://x.test/s?q=x"
    assert session.overrides == {"q": "x"}


@patch("form_submitter.transport.requests.Session.request")
def test_submit_post(mock_request):
    mock_request.return_value = make_response()
    form = ResolvedForm(action="https://x.test/s", method=Method.POST, params={"a": "1"})

    FormSession(form).submit()

    args, kwargs = mock_request.call_args
    assert args == ("POST", "https://x.test/s")
    assert kwargs["data"] == b"a=1"
    assert kwargs["headers"]["Content-Type"] == "application/x-www-form-urlencoded"


@patch("form_submitter.transport.requests.Session.request")
def test_submit_returns_error_status_intact(mock_request):
    mock_request.return_value = make_response(status_code=500, text="boom")
    session = FormSession(ResolvedForm(action="https://x.test/s"))

    res = session.submit()

    assert res.status_code == 500
    assert res.text == "boom"


@patch("form_submitter.transport.requests.Session.request")
def test_submit_fail_on_http_error(mock_request):
    mock_request.return_value = make_response(status_code=500, text="boom")
    session = FormSession(ResolvedForm(action="https://x.test/s"))

    with pytest.raises(TransportError) as excinfo:
        session.submit(RequestOptions(fail_on_http_error=True))

    assert excinfo.value.status_code == 500


@patch("form_submitter.transport.requests.Session.request")
def test_submit_transport_failure(mock_request):
    mock_request.side_effect = requests.ConnectionError("connection refused")
    session = FormSession(ResolvedForm(action="https://x.test/s"))

    with pytest.raises(TransportError) as excinfo:
        session.submit()

    assert excinfo.value.message == "connection refused"
    assert isinstance(excinfo.value.cause, requests.ConnectionError)


@patch("form_submitter.transport.requests.Session.request")
def test_from_url_resolves_against_final_url(mock_request):
    html = '<form name="search" action="next"><input name="q" value="hi"></form>'
    mock_request.return_value = make_response(text=html, url="https://x.test/final/page")

    session = from_url("https://x.test/start", ByName("search"))

    assert session.form.action == "https://x.test/final/next"
    assert dict(session.form.params) == {"q": "hi"}


@patch("form_submitter.transport.requests.Session.request")
def test_send_form(mock_request):
    html = """
    <form action="/login" method="post">
        <input type="hidden" name="token" value="abc">
        <input type="text" name="user">
    </form>
    """
    mock_request.side_effect = [
        make_response(text=html, url="https://x.test/login"),
        make_response(text="welcome", url="https://x.test/home"),
    ]

    res = send_form("https://x.test/login", {"user": "me", "remember": "1"}, ByIndex())

    args, kwargs = mock_request.call_args
    assert args == ("POST", "https://x.test/login")
    assert kwargs["data"] == b"token=abc&user=me&remember=1"
    assert res.text == "welcome"
