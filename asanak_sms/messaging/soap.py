from __future__ import annotations

import re
from typing import Any, NamedTuple, Optional

MSG_ENCODING_UNICODE = 8

_FAULT_MARKER = re.compile(r"<soap:Fault", flags=re.I)
# Fault fields never span a line terminator (\r, \n, U+2028, U+2029).
_FAULT_CODE = re.compile(r"<faultcode>([^\r\n\u2028\u2029]*?)</faultcode>", flags=re.I)
_FAULT_STRING = re.compile(r"<faultstring>([^\r\n\u2028\u2029]*?)</faultstring>", flags=re.I)


class SoapFault(NamedTuple):
    code: str
    message: str


def build_send_sms_envelope(username: str, password: str, source_address: str, destination: str, message: str) -> str:
    """
    sendSms request for the CompositeSmsGateway web service.

    Values are embedded as-is. Nothing is XML-escaped, so a message containing
    '<' or '&' yields a malformed envelope; the gateway's handling of escaped
    bodies is unverified.
    """
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<SOAP-ENV:Envelope xmlns:SOAP-ENV="http://schemas.xmlsoap.org/soap/envelope/"\n'
        '                   xmlns:ns1="http://webService.compositeSmsGateway.services.sdp.peykasa.com/">\n'
        "  <SOAP-ENV:Body>\n"
        "    <ns1:sendSms>\n"
        "      <userCredential>\n"
        f"        <username>{username}</username>\n"
        f"        <password>{password}</password>\n"
        "      </userCredential>\n"
        f"      <srcAddresses>{source_address}</srcAddresses>\n"
        f"      <destAddresses>{destination}</destAddresses>\n"
        f"      <msgBody>{message}</msgBody>\n"
        f"      <msgEncoding>{MSG_ENCODING_UNICODE}</msgEncoding>\n"
        "    </ns1:sendSms>\n"
        "  </SOAP-ENV:Body>\n"
        "</SOAP-ENV:Envelope>"
    )


def parse_soap_fault(xml: Any) -> Optional[SoapFault]:
    # Textual scan; the gateway only ever returns a sendSmsResponse or a soap:Fault.
    if not isinstance(xml, str):
        return None
    if not _FAULT_MARKER.search(xml):
        return None

    code_m = _FAULT_CODE.search(xml)
    string_m = _FAULT_STRING.search(xml)
    code = (code_m.group(1) if code_m else "") or "UNKNOWN"
    message = (string_m.group(1) if string_m else "") or "Unknown SOAP fault"
    return SoapFault(code=code, message=message)
