import logging
from typing import Mapping

from .constants import (
    CHECKABLE_INPUT_TYPES,
    CHECKBOX_DEFAULT_VALUE,
    NON_DATA_INPUT_TYPES,
    SUBMITTABLE_TAGS,
)
from .dom import Document, ElementHandle, find_all, find_by_attribute, parse
from .errors import AmbiguousAction, FormNotFound, InvalidUrl
from .models import (
    ById,
    ByIndex,
    ByName,
    Enctype,
    FormSelector,
    HTTPResponse,
    Method,
    RequestOptions,
    ResolvedForm,
)
from .session import FormSession
from .transport import request
from .urls import is_absolute, resolve_reference

logger = logging.getLogger(__name__)

# characters browsers strip around attribute values such as action
HTML_WHITESPACE = " \t\n\r\f"


def resolve(html: str, selector: FormSelector = ByIndex(), base_url: str | None = None) -> ResolvedForm:
    """
    Rebuilds the request a browser would send when the selected form is
    submitted without touching any of its fields.

    Args:
        html (str): The content of the webpage containing the form.
        selector (FormSelector): Which form to resolve, ByIndex, ById or ByName.
        base_url (str | None): The absolute URL the HTML was fetched from,
                                relative actions are resolved against it.

    Returns:
        ResolvedForm: The absolute action, method, enctype and default params.

    Raises:
        MalformedHtml: The HTML cannot be parsed.
        FormNotFound: No form matches the selector.
        AmbiguousAction: The action is empty or relative and no base URL is given.
        InvalidUrl: The base URL or the resolved action is not a valid URL.
    """
    if base_url is not None and not is_absolute(base_url):
        raise InvalidUrl(f"URL {base_url} is not valid.")

    document = parse(html)
    form = get_form(document, selector)

    method = Method.parse(form.get_attribute("method"))
    enctype = Enctype.parse(form.get_attribute("enctype")) if method is Method.POST else Enctype.URLENCODED
    action = parse_action(form, base_url)
    params = parse_params(document, form)

    logger.debug("Resolved form %s: %s %s (%s), %d params", selector, method.value, action, enctype.value, len(params))
    return ResolvedForm(
        action=action,
        method=method,
        enctype=enctype,
        params=params,
    )


def from_html(html: str, selector: FormSelector = ByIndex(), base_url: str | None = None) -> FormSession:
    return FormSession.from_resolved(resolve(html, selector, base_url))


def from_url(url: str, selector: FormSelector = ByIndex(), options: RequestOptions | None = None) -> FormSession:
    """
    Fetches a webpage and resolves one of its forms. Relative actions are
    resolved against the final URL, after redirects.

    Args:
        url (str): The URL of the webpage containing the form.
        selector (FormSelector): Which form to resolve.
        options (RequestOptions | None): Transport configuration for the fetch.

    Returns:
        FormSession: A session wrapping the resolved form.
    """
    if not is_absolute(url):
        raise InvalidUrl(f"URL {url} is not valid.")

    res = request(url, options=options)
    return from_html(res.text, selector, base_url=res.url)


def send_form(
    url: str,
    params: Mapping[str, str],
    selector: FormSelector = ByIndex(),
    options: RequestOptions | None = None,
) -> HTTPResponse:
    """
    Fetches a webpage, fills the selected form with `params` on top of its
    defaults and submits it.
    """
    session = from_url(url, selector, options)
    session.set_params(params)
    return session.submit(options)


def find_forms(html: str, base_url: str | None = None) -> list[ResolvedForm]:
    """
    Resolves every form of a webpage, in document order.

    Forms whose action cannot be made absolute (an empty or relative action
    while `base_url` is None) are skipped with a warning, the other forms are
    still returned.

    Args:
        html (str): The content of the webpage containing the form(s).
        base_url (str | None): The URL the HTML was fetched from.

    Returns:
        list: A list of ResolvedForm objects. Empty if the page has no form.
    """
    document = parse(html)
    count = len(find_all(document.root, "form"))

    forms: list[ResolvedForm] = []
    for i in range(count):
        try:
            forms.append(resolve(html, ByIndex(i), base_url))
        except AmbiguousAction as e:
            logger.warning("Skipping form %d: %s", i, e)
    return forms


def get_form(document: Document, selector: FormSelector) -> ElementHandle:
    if isinstance(selector, ByIndex):
        forms = find_all(document.root, "form")
        form = forms[selector.index] if selector.index < len(forms) else None
    elif isinstance(selector, ById):
        form = next(iter(find_by_attribute(document.root, "form", "id", selector.id)), None)
    elif isinstance(selector, ByName):
        form = next(iter(find_by_attribute(document.root, "form", "name", selector.name)), None)
    else:
        raise TypeError(f"Unknown form selector {selector!r}")

    if form is None:
        raise FormNotFound(f"Cannot get form from DOM, no form matching {selector} found in the provided HTML.")

    return form


def parse_action(form: ElementHandle, base_url: str | None) -> str:
    action = (form.get_attribute("action") or "").strip(HTML_WHITESPACE)

    # an empty action submits back to the page the form came from
    if action == "":
        if base_url is None:
            raise AmbiguousAction("Form's action is empty and no URL is provided, don't know where to submit the form to.")
        return base_url

    if is_absolute(action):
        return action

    if base_url is None:
        raise AmbiguousAction(f"Form's action {action} is a relative link and no URL is provided, don't know where to submit the form to.")

    return resolve_reference(base_url, action)


def get_controls(document: Document, form: ElementHandle) -> list[ElementHandle]:
    """
    Returns the submittable controls owned by `form`, in document order:
    its descendants, plus the controls elsewhere in the document whose
    `form` attribute points at the form's id.
    """
    owned = set(find_all(form, SUBMITTABLE_TAGS))

    form_id = form.get_attribute("id")
    if form_id:
        owned.update(find_by_attribute(document.root, SUBMITTABLE_TAGS, "form", form_id))

    return [element for element in find_all(document.root, SUBMITTABLE_TAGS) if element in owned]


def parse_params(document: Document, form: ElementHandle) -> dict[str, str]:
    params: dict[str, str] = {}

    for element in get_controls(document, form):
        name = element.get_attribute("name")
        if element.get_flag("disabled") or not name:
            logger.debug("Skipping %r", element)
            continue

        value = control_value(element)
        if value is not None:
            params[name] = value

    return params


def control_value(element: ElementHandle) -> str | None:
    """
    Returns the value a control submits by default, or None when it submits
    nothing.
    """
    tag = element.tag_name

    if tag == "input":
        type_ = (element.get_attribute("type") or "text").strip().lower()
        value = element.get_attribute("value") or ""
        if type_ in CHECKABLE_INPUT_TYPES:
            if not element.get_flag("checked"):
                return None
            return value if value != "" else CHECKBOX_DEFAULT_VALUE
        if type_ in NON_DATA_INPUT_TYPES:
            return None
        return value

    if tag == "textarea":
        return element.inner_text()

    if tag == "select":
        return select_value(element)

    # buttons only submit when they trigger the submission
    return None


def select_value(select: ElementHandle) -> str:
    selected = None
    first = None

    for option in find_all(select, "option"):
        if option.get_flag("disabled"):
            continue
        parent = option.parent()
        if parent is not None and parent.get_flag("disabled"):
            continue

        if option.get_flag("selected"):
            selected = option
            break
        if first is None:
            first = option

    option = selected or first
    if option is None:
        return ""

    value = option.get_attribute("value")
    return value if value is not None else option.inner_text()


def print_form(form: ResolvedForm) -> None:
    """
    Prints the resolved form data in a more readable format.

    Args:
        form (ResolvedForm): The form to display.
    """
    print("\n--- Form ---")
    print(f"  Action: {form.action}")
    print(f"  Method: {form.method.value}")
    print(f"  Enctype: {form.enctype.value}")

    print("  Params:")
    if not form.params:
        print("    No params found for this form.")
    else:
        for name, value in form.params.items():
            print(f"    - {name}: '{value}'")
