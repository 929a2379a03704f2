from .errors import AmbiguousAction, FormNotFound, FormSubmitterError, InvalidUrl, MalformedHtml, TransportError
from .form import find_forms, from_html, from_url, print_form, resolve, send_form
from .models import ById, ByIndex, ByName, Enctype, FormSelector, HTTPResponse, Method, PreparedRequest, RequestOptions, ResolvedForm
from .session import FormSession
