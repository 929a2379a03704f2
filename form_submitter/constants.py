import os

USER_AGENT = os.environ.get(
    "FORM_SUBMITTER_USER_AGENT",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)

HEADERS = {
    "User-Agent": USER_AGENT
}

DEFAULT_TIMEOUT = float(os.environ.get("FORM_SUBMITTER_TIMEOUT", "10"))

SUBMITTABLE_TAGS = [
    "button",
    "input",
    "select",
    "textarea",
]

# input types that only trigger a submission and never carry data on their own
NON_DATA_INPUT_TYPES = [
    "button",
    "image",
    "reset",
    "submit",
]

CHECKABLE_INPUT_TYPES = [
    "checkbox",
    "radio",
]

CHECKBOX_DEFAULT_VALUE = "on"

URLENCODED = "application/x-www-form-urlencoded"
MULTIPART = "multipart/form-data"
PLAIN_TEXT = "text/plain"
