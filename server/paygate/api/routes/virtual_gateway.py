"""
Provider side of the virtual gateway.

Receives the form posted by ``VirtualGateway.request``, lets the user pick a
successful or failed outcome, then posts ``Result`` and ``TransactionCode``
back to the shop's callback URL.
"""

import re
import uuid
from html import escape
from typing import Dict

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import HTMLResponse
from starlette.responses import Response

from paygate.api.dependencies.gateways import get_http_context
from paygate.core.logging import get_logger
from paygate.integrations.payment_gateways import GatewayPost, HttpContext, VirtualGateway

logger = get_logger(__name__)

PAY_COMMAND = "pay"

_PAGE_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title>Virtual payment gateway</title>
</head>
<body>
<h1>Virtual payment gateway</h1>
<p>This gateway is for testing only. No money is transferred.</p>
<table>
<tr><th>Tracking number</th><td>{tracking_number}</td></tr>
<tr><th>Amount</th><td>{amount}</td></tr>
<tr><th>Return URL</th><td>{redirect_url}</td></tr>
</table>
{pay_form}
{cancel_form}
</body>
</html>
"""


def _required_field(context: HttpContext, name: str) -> str:
    value = context.get_param(name)
    if value is None or not value.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Missing required field '{name}'",
        )
    return value


_INTEGER = re.compile(r"-?[0-9]+")


def _is_integer(value: str) -> bool:
    return _INTEGER.fullmatch(value) is not None


def _invoice_fields(context: HttpContext) -> Dict[str, str]:
    tracking_number = _required_field(context, VirtualGateway.TRACKING_NUMBER_FIELD)
    amount = _required_field(context, VirtualGateway.AMOUNT_FIELD)
    redirect_url = _required_field(context, VirtualGateway.REDIRECT_URL_FIELD)

    if not _is_integer(tracking_number):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="trackingNumber must be an integer")
    if not _is_integer(amount):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="amount must be an integer")
    if not redirect_url.lower().startswith(("http://", "https://")):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="redirectUrl must be an absolute http(s) URL")

    return {
        VirtualGateway.TRACKING_NUMBER_FIELD: tracking_number,
        VirtualGateway.AMOUNT_FIELD: amount,
        VirtualGateway.REDIRECT_URL_FIELD: redirect_url,
    }


def _outcome_form(action: str, fields: Dict[str, str], result: str, label: str) -> str:
    inputs = "\n".join(
        f'<input type="hidden" name="{escape(name)}" value="{escape(value)}">'
        for name, value in {
            **fields,
            VirtualGateway.COMMAND_TYPE_FIELD: PAY_COMMAND,
            VirtualGateway.RESULT_FIELD: result,
        }.items()
    )
    return f'<form method="post" action="{escape(action)}">\n{inputs}\n<button type="submit">{label}</button>\n</form>'


def _render_payment_page(action: str, context: HttpContext) -> Response:
    fields = _invoice_fields(context)
    logger.info(
        "virtual_gateway_page.request",
        tracking_number=fields[VirtualGateway.TRACKING_NUMBER_FIELD],
        amount=fields[VirtualGateway.AMOUNT_FIELD],
    )
    return HTMLResponse(
        _PAGE_TEMPLATE.format(
            tracking_number=escape(fields[VirtualGateway.TRACKING_NUMBER_FIELD]),
            amount=escape(fields[VirtualGateway.AMOUNT_FIELD]),
            redirect_url=escape(fields[VirtualGateway.REDIRECT_URL_FIELD]),
            pay_form=_outcome_form(action, fields, "true", "Pay"),
            cancel_form=_outcome_form(action, fields, "false", "Cancel"),
        )
    )


def _complete_payment(context: HttpContext) -> Response:
    fields = _invoice_fields(context)
    result = _required_field(context, VirtualGateway.RESULT_FIELD).lower()
    if result not in {"true", "false"}:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Result must be 'true' or 'false'")

    form = {
        VirtualGateway.RESULT_FIELD: result,
        VirtualGateway.TRACKING_NUMBER_FIELD: fields[VirtualGateway.TRACKING_NUMBER_FIELD],
    }
    if result == "true":
        form[VirtualGateway.TRANSACTION_CODE_FIELD] = uuid.uuid4().hex[:16].upper()

    logger.info(
        "virtual_gateway_page.completed",
        tracking_number=fields[VirtualGateway.TRACKING_NUMBER_FIELD],
        result=result,
    )
    return GatewayPost(fields[VirtualGateway.REDIRECT_URL_FIELD], form).to_response()


def build_router(gateway_path: str) -> APIRouter:
    router = APIRouter(tags=["virtual-gateway"])

    @router.api_route(gateway_path, methods=["GET", "POST"], response_class=HTMLResponse)
    async def virtual_gateway_endpoint(
        request: Request,
        context: HttpContext = Depends(get_http_context),
    ) -> Response:
        command = context.get_param(VirtualGateway.COMMAND_TYPE_FIELD)
        if command is None:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Missing CommandType")

        command = command.lower()
        if command == VirtualGateway.REQUEST_COMMAND:
            return _render_payment_page(request.url.path, context)
        if command == PAY_COMMAND:
            return _complete_payment(context)

        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Unknown CommandType '{command}'")

    return router
