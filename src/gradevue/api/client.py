"""
Minimal StudentVue SOAP client.

Only the two methods the session needs are exposed: ``Gradebook`` and
``StudentInfo``. Responses are converted from XML into the nested-dict shape
the parser expects, with attributes under ``_``-prefixed keys.
"""

import xml.etree.ElementTree as ET
from typing import Any, Optional, Tuple
from urllib.parse import urlparse
from xml.sax.saxutils import escape

import requests

from gradevue.errors import UpstreamAuthFailure, UpstreamError, UpstreamTimeout
from gradevue.gradebook.models import Credentials
from gradevue.logging.config import logger_api
from gradevue.utils import request_timeout

SERVICE_PATH = "/Service/PXPCommunication.asmx"
OPERATION = "ProcessWebServiceRequest"
AUTH_ERROR_HINTS = ("password", "username", "user name", "invalid", "incorrect")

ENVELOPE = """<?xml version="1.0" encoding="utf-8"?>
<soap12:Envelope xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance" xmlns:xsd="http://www.w3.org/2001/XMLSchema" xmlns:soap12="http://www.w3.org/2003/05/soap-envelope">
  <soap12:Body>
    <{operation} xmlns="http://edupoint.com/webservices/">
      <userID>{user}</userID>
      <password>{password}</password>
      <skipLoginLog>true</skipLoginLog>
      <parent>false</parent>
      <webServiceHandleName>PXPWebServices</webServiceHandleName>
      <methodName>{method}</methodName>
      <paramStr>{params}</paramStr>
    </{operation}>
  </soap12:Body>
</soap12:Envelope>"""


def normalize_district_url(district: str) -> str:
    """
    Normalizes a user-entered district address to ``scheme://host``.

    Args:
        district (str): e.g. ``"student.district.org/"`` or ``"https://x.org/PXP2_Login.aspx"``.

    Returns:
        str: The base URL, defaulting to https when no scheme is given.
    """
    url = district.strip().rstrip("/")
    if not url.startswith(("http://", "https://")):
        url = "https://" + url

    parsed = urlparse(url)
    if not parsed.netloc:
        return url
    return f"{parsed.scheme}://{parsed.netloc}"


def district_url_variants(district: str) -> list:
    """
    Lists the base URLs worth trying for a district, most likely first.

    The variants are the normalized base host, the exact URL when it carries
    a path, and the host without a leading ``student...`` label for ``.com``
    districts. Duplicates are removed.
    """
    url = district.strip().rstrip("/")
    if not url.startswith(("http://", "https://")):
        url = "https://" + url

    base = normalize_district_url(url)
    variants = [base]

    parsed = urlparse(url)
    if parsed.path and parsed.path != "/":
        variants.append(url)

    host = parsed.netloc.lower()
    parts = host.split(".")
    if ".com" in host and len(parts) >= 3 and "student" in parts[0]:
        variants.append(f"{parsed.scheme}://{'.'.join(parts[1:])}")

    return list(dict.fromkeys(variants))


def is_auth_error(message: str) -> bool:
    message = (message or "").lower()
    return any(hint in message for hint in AUTH_ERROR_HINTS)


def _strip_namespace(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def element_to_dict(element: ET.Element) -> Any:
    """
    Converts an XML element into nested dicts.

    Attributes become ``_Name`` keys, repeated child tags become lists, and an
    element with only text collapses to that string. Text alongside attributes
    or children is kept under ``"#text"``.
    """
    node = {f"_{name}": value for name, value in element.attrib.items()}

    for child in element:
        tag = _strip_namespace(child.tag)
        value = element_to_dict(child)
        if tag in node:
            if not isinstance(node[tag], list):
                node[tag] = [node[tag]]
            node[tag].append(value)
        else:
            node[tag] = value

    text = (element.text or "").strip()
    if not node:
        return text
    if text:
        node["#text"] = text
    return node


class StudentVueClient:
    """
    Talks to one district's PXPCommunication service.

    Attributes:
        district (str): The base URL of the district, or a full service URL.
        username (str): The StudentVue user id.
        password (str): The StudentVue password.
        timeout (float): Seconds before a request raises UpstreamTimeout.
    """

    def __init__(self, district: str, username: str, password: str, timeout: Optional[float] = None):
        self.district = district
        self.username = username.strip()
        self.password = password
        self.timeout = request_timeout if timeout is None else timeout

    @property
    def endpoint(self) -> str:
        url = self.district.rstrip("/")
        if not url.startswith(("http://", "https://")):
            url = "https://" + url
        if url.lower().endswith(".asmx"):
            return url
        return url + SERVICE_PATH

    def build_envelope(self, method: str, params: Optional[dict] = None) -> str:
        inner = "".join(
            f"<{key}>{escape(str(value))}</{key}>" for key, value in (params or {}).items()
        )
        param_str = f"<Params>{inner}</Params>" if inner else "<Params/>"
        return ENVELOPE.format(
            operation=OPERATION,
            user=escape(self.username),
            password=escape(self.password),
            method=escape(method),
            params=escape(param_str),
        )

    def request(self, method: str, params: Optional[dict] = None) -> dict:
        """
        Calls a PXP web service method.

        Args:
            method (str): The service method name, e.g. ``"Gradebook"``.
            params (dict, optional): Values for the ``<Params>`` block.

        Returns:
            dict: The result document as ``{root_tag: content}``.

        Raises:
            UpstreamTimeout: If the request exceeds ``self.timeout``.
            UpstreamAuthFailure: If the service rejects the credentials.
            UpstreamError: For transport failures and malformed or error responses.
        """
        logger_api.info(f"Requesting {method} from {self.endpoint}")

        try:
            res = requests.post(
                url=self.endpoint,
                data=self.build_envelope(method, params).encode("utf-8"),
                headers={"Content-Type": "application/soap+xml; charset=utf-8"},
                timeout=self.timeout,
            )
            res.raise_for_status()
        except requests.exceptions.Timeout as e:
            raise UpstreamTimeout(
                "Request timed out. The server took too long to respond."
            ) from e
        except requests.exceptions.RequestException as e:
            raise UpstreamError(f"Request to {self.endpoint} failed: {e}") from e

        return self.parse_response(res.text)

    def parse_response(self, text: str) -> dict:
        try:
            envelope = ET.fromstring(text)
        except ET.ParseError as e:
            raise UpstreamError("Invalid SOAP response") from e

        result = None
        for element in envelope.iter():
            if _strip_namespace(element.tag) == OPERATION + "Result":
                result = element
                break

        if result is None or not (result.text or "").strip():
            raise UpstreamError("No result in SOAP response")

        try:
            root = ET.fromstring(result.text.strip())
        except ET.ParseError as e:
            raise UpstreamError("Invalid result document in SOAP response") from e

        tag = _strip_namespace(root.tag)
        content = element_to_dict(root)

        if tag == "RT_ERROR":
            message = root.attrib.get("ERROR_MESSAGE") or "StudentVue error"
            if is_auth_error(message):
                raise UpstreamAuthFailure(message)
            raise UpstreamError(message)

        return {tag: content}

    def check_login(self) -> None:
        self.request("StudentInfo")

    def gradebook(self, report_period: Optional[int] = None) -> Any:
        params = {"ReportPeriod": report_period} if report_period is not None else None
        return self.request("Gradebook", params).get("Gradebook")

    def student_info(self) -> Any:
        return self.request("StudentInfo").get("StudentInfo")


def login_with_fallback(
    district: str, username: str, password: str, timeout: Optional[float] = None
) -> StudentVueClient:
    """
    Finds a district URL variant that accepts the credentials.

    Variants are tried in order. An authentication failure stops the search
    immediately, since another URL will not fix a wrong password.

    Returns:
        StudentVueClient: A client bound to the first working variant.

    Raises:
        UpstreamAuthFailure: If the credentials are rejected.
        UpstreamError: The last error seen when every variant fails.
    """
    last_error = UpstreamError(f"No usable URL for district {district!r}")

    for url in district_url_variants(district):
        client = StudentVueClient(url, username, password, timeout)
        try:
            client.check_login()
        except UpstreamAuthFailure:
            logger_api.warning(f"Login rejected by {url}")
            raise
        except UpstreamError as e:
            logger_api.warning(f"Login failed for {url}: {e}")
            last_error = e
            continue

        logger_api.info(f"Login successful with URL: {url}")
        return client

    raise last_error


def fetch_gradebook(
    credentials: Credentials, report_period: Optional[int] = None
) -> Tuple[Any, Any]:
    """
    Fetches the raw gradebook and student info for a set of credentials.

    A failure to fetch the student info is logged and tolerated.

    Returns:
        Tuple[Any, Any]: ``(raw_gradebook, raw_student_info)``, the latter None
            when it could not be fetched.
    """
    client = login_with_fallback(
        credentials.district, credentials.username, credentials.password
    )
    raw_gradebook = client.gradebook(report_period)

    try:
        raw_student_info = client.student_info()
    except UpstreamError as e:
        logger_api.warning(f"Could not fetch student info: {e}")
        raw_student_info = None

    return raw_gradebook, raw_student_info
