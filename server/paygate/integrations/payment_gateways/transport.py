"""
Transporters carry the user's browser to a payment provider.

A gateway only describes the transport; the caller turns it into an HTTP
response with ``to_response()`` and returns that to the browser.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from html import escape
from typing import Dict, Mapping, Optional

from starlette.responses import HTMLResponse, RedirectResponse, Response


class TransportType(str, Enum):
    POST = "post"
    REDIRECT = "redirect"


@dataclass(frozen=True)
class TransporterDescriptor:
    type: TransportType
    url: str
    form: Optional[Dict[str, str]] = None


class GatewayTransporter(ABC):
    """Outbound instruction sending the user to a provider."""

    @property
    @abstractmethod
    def descriptor(self) -> TransporterDescriptor:
        ...

    @abstractmethod
    def to_response(self) -> Response:
        ...


_POST_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title>Redirecting to the payment gateway</title>
</head>
<body onload="document.forms[0].submit();">
<form method="post" action="{action}">
{fields}
<noscript><button type="submit">Continue</button></noscript>
</form>
</body>
</html>
"""


def render_auto_post_form(url: str, form: Mapping[str, str]) -> str:
    """Render an HTML page whose form posts ``form`` to ``url`` on load."""
    fields = "\n".join(
        f'<input type="hidden" name="{escape(name)}" value="{escape(value)}">'
        for name, value in form.items()
    )
    return _POST_TEMPLATE.format(action=escape(url), fields=fields)


@dataclass(frozen=True)
class GatewayPost(GatewayTransporter):
    """Posts form fields to the provider through an auto-submitting HTML form."""
    url: str
    form: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "form", {name: str(value) for name, value in self.form.items()})

    @property
    def descriptor(self) -> TransporterDescriptor:
        return TransporterDescriptor(type=TransportType.POST, url=self.url, form=dict(self.form))

    def to_response(self) -> Response:
        return HTMLResponse(render_auto_post_form(self.url, self.form))


@dataclass(frozen=True)
class GatewayRedirect(GatewayTransporter):
    """Redirects the browser to the provider with a plain 302."""
    url: str

    @property
    def descriptor(self) -> TransporterDescriptor:
        return TransporterDescriptor(type=TransportType.REDIRECT, url=self.url)

    def to_response(self) -> Response:
        return RedirectResponse(self.url, status_code=302)
