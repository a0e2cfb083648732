"""
Client for the clinic REST API that supplies table records.

Every response uses the `{success, data, message}` envelope; successful
payloads are unwrapped before they reach the tables. Reads retry transient
failures, writes never do.
"""
import os
from typing import Any, Callable, Dict, List, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from constants import (
    API_PATH_SUFFIX,
    DEFAULT_API_TIMEOUT,
    DEFAULT_MAX_RETRIES,
    RESOURCE_PATHS,
    RETRY_BACKOFF_FACTOR,
    RETRY_BACKOFF_MAX,
    RETRYABLE_STATUS_CODES
)
from error_handler import (
    APIError,
    AuthenticationError,
    ConfigurationError,
    ValidationError,
    log_and_reraise,
    validate_environment_variable
)
from logging_helper import LoggingHelper, LogType

logger = LoggingHelper.get_logger(LogType.MAIN)


def normalize_base_url(url: str) -> str:
    """
    Make sure the API base URL ends with /api.

    Examples:
        >>> normalize_base_url('http://localhost:5000')
        'http://localhost:5000/api'
        >>> normalize_base_url('https://clinic.example/api/')
        'https://clinic.example/api'
    """
    url = (url or '').rstrip('/')
    if not url:
        raise ConfigurationError("Clinic API URL is not configured")
    return url if url.endswith(API_PATH_SUFFIX) else f"{url}{API_PATH_SUFFIX}"


def unwrap_envelope(body: Any) -> Any:
    """
    Unwrap a `{success: true, data: X}` envelope.

    Returns X, or the whole body when data is null. Bodies that are not an
    envelope, or where success is false or data is absent, are returned
    unchanged.
    """
    if isinstance(body, dict) and 'success' in body:
        if body.get('success') and 'data' in body:
            data = body['data']
            return data if data is not None else body
    return body


def build_retry(max_retries: int = DEFAULT_MAX_RETRIES) -> Retry:
    """Retry policy for reads: exponential backoff on transient statuses."""
    return Retry(
        total=max_retries,
        backoff_factor=RETRY_BACKOFF_FACTOR,
        backoff_max=RETRY_BACKOFF_MAX,
        status_forcelist=RETRYABLE_STATUS_CODES,
        allowed_methods=frozenset({'GET'}),
        raise_on_status=False
    )


class ClientSession:
    """
    Login state of the client: bearer token, user and selected branch.

    Cleared when the API answers 401.
    """

    def __init__(self, token: Optional[str] = None, user: Optional[Dict[str, Any]] = None,
                 selected_branch: Optional[Dict[str, Any]] = None):
        self.token = token
        self.user = user
        self.selected_branch = selected_branch

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    def clear(self) -> None:
        self.token = None
        self.user = None
        self.selected_branch = None

    def __repr__(self) -> str:
        return f"ClientSession(authenticated={self.is_authenticated})"


class ClinicAPI:
    """
    Interface to the clinic REST API.

    Args:
        base_url: API root; '/api' is appended when missing
        session_state: ClientSession holding the bearer token
        timeout: Request timeout in seconds
        max_retries: Retries for GET requests on transient failures
        on_unauthorized: Called after a 401 has cleared the session
    """

    def __init__(self, base_url: str, session_state: Optional[ClientSession] = None,
                 timeout: float = DEFAULT_API_TIMEOUT, max_retries: int = DEFAULT_MAX_RETRIES,
                 on_unauthorized: Optional[Callable[[], None]] = None) -> None:
        self.base_url = normalize_base_url(base_url)
        self.session_state = session_state or ClientSession()
        self.timeout = timeout
        self.on_unauthorized = on_unauthorized

        # Reads go through the retrying session, writes through a plain one
        self.session = requests.Session()
        adapter = HTTPAdapter(max_retries=build_retry(max_retries))
        self.session.mount('http://', adapter)
        self.session.mount('https://', adapter)

        self.write_session = requests.Session()
        no_retry = HTTPAdapter(max_retries=Retry(total=0, raise_on_status=False))
        self.write_session.mount('http://', no_retry)
        self.write_session.mount('https://', no_retry)

        logger.info(f"Clinic API URL: {self.base_url}")

    @classmethod
    def from_env(cls, on_unauthorized: Optional[Callable[[], None]] = None) -> 'ClinicAPI':
        """
        Build a client from CLINIC_API_URL, CLINIC_API_TOKEN,
        CLINIC_API_TIMEOUT and CLINIC_API_MAX_RETRIES.

        Raises:
            ConfigurationError: if CLINIC_API_URL is not set
        """
        base_url = os.getenv('CLINIC_API_URL')
        if not base_url:
            raise ConfigurationError("Missing CLINIC_API_URL. Please check configuration.")

        timeout = validate_environment_variable(
            'CLINIC_API_TIMEOUT', default=DEFAULT_API_TIMEOUT,
            converter=float, validator=lambda x: x > 0)
        max_retries = validate_environment_variable(
            'CLINIC_API_MAX_RETRIES', default=DEFAULT_MAX_RETRIES,
            converter=int, validator=lambda x: 0 <= x <= 10)

        token = os.getenv('CLINIC_API_TOKEN')
        if token:
            logger.info("Using service token for clinic API authentication")

        return cls(base_url, ClientSession(token=token), timeout=timeout,
                   max_retries=max_retries, on_unauthorized=on_unauthorized)

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def _headers(self) -> Dict[str, str]:
        headers = {'Content-Type': 'application/json'}
        if self.session_state.token:
            headers['Authorization'] = f"Bearer {self.session_state.token}"
        return headers

    @staticmethod
    def _error_message(response: requests.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and body.get('message'):
            return str(body['message'])
        return f"HTTP {response.status_code}: {response.reason}"

    def _handle_unauthorized(self, response: requests.Response) -> None:
        logger.warning("Clinic API rejected credentials (401), clearing session")
        self.session_state.clear()
        if self.on_unauthorized is not None:
            self.on_unauthorized()
        raise AuthenticationError(self._error_message(response))

    def request(self, method: str, path: str, params: Optional[Dict[str, Any]] = None,
                json: Any = None) -> Any:
        """
        Send one request and return the unwrapped payload.

        Raises:
            AuthenticationError: on 401 (session already cleared)
            APIError: on other error statuses or when the API is unreachable
        """
        method = method.upper()
        url = self._url(path)
        http = self.session if method == 'GET' else self.write_session
        logger.debug(f"{method} {url} params={params}")

        try:
            response = http.request(method, url, params=params, json=json,
                                    headers=self._headers(), timeout=self.timeout)
        except requests.RequestException as e:
            log_and_reraise(e, f"Clinic API {method} {path} failed", as_type=APIError)

        if response.status_code == 401:
            self._handle_unauthorized(response)

        if response.status_code >= 400:
            message = self._error_message(response)
            logger.error(f"Clinic API error: {method} {path} -> HTTP {response.status_code} - {message}")
            raise APIError(message, status_code=response.status_code)

        if not response.content:
            return None
        try:
            body = response.json()
        except ValueError:
            return response.text
        return unwrap_envelope(body)

    def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return self.request('GET', path, params=params)

    def post(self, path: str, json: Any = None) -> Any:
        return self.request('POST', path, json=json)

    def put(self, path: str, json: Any = None) -> Any:
        return self.request('PUT', path, json=json)

    def patch(self, path: str, json: Any = None) -> Any:
        return self.request('PATCH', path, json=json)

    def delete(self, path: str) -> Any:
        return self.request('DELETE', path)

    def get_records(self, resource: str, params: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        """
        Fetch a record collection for a table.

        Args:
            resource: One of RESOURCE_PATHS (patients, appointments, ...)
            params: Optional query parameters (e.g. branch filter)

        Returns:
            List of records; a bare object becomes a one-element list

        Raises:
            ValidationError: for an unknown resource
        """
        path = RESOURCE_PATHS.get(resource)
        if path is None:
            raise ValidationError(f"Unknown resource: {resource}")

        payload = self.get(path, params=params)
        if payload is None:
            return []
        if isinstance(payload, list):
            return payload
        return [payload]

    def close(self) -> None:
        self.session.close()
        self.write_session.close()
