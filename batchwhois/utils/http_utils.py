"""HTTP utility functions for batchwhois."""

import logging
import threading
from typing import Any, Dict, Optional

import requests
from requests.exceptions import ConnectionError, RequestException, Timeout

from batchwhois.core.exceptions import APIError, NetworkError


class HTTPUtils:
    """Thin wrapper around a requests session with batchwhois error mapping.
    
    Worker threads each get their own session, since a requests.Session is
    not safe to share between threads.
    """

    def __init__(self, timeout: float = 10, user_agent: Optional[str] = None):
        """Initialize HTTP utilities.
        
        Args:
            timeout: HTTP request timeout in seconds
            user_agent: Custom User-Agent string
        """
        self.timeout = timeout
        self.user_agent = user_agent or "batchwhois/1.0"
        self.logger = logging.getLogger('batchwhois.http_utils')
        self._local = threading.local()

    @property
    def session(self) -> requests.Session:
        session = getattr(self._local, 'session', None)
        if session is None:
            session = requests.Session()
            session.headers.update({
                'User-Agent': self.user_agent
            })
            self._local.session = session
        return session

    def make_request(self, url: str, method: str = 'GET',
                     params: Optional[Dict] = None,
                     headers: Optional[Dict] = None,
                     json_data: Optional[Dict] = None) -> requests.Response:
        """Make an HTTP request.
        
        Args:
            url: URL to request
            method: HTTP method (GET, POST, etc.)
            params: URL parameters
            headers: HTTP headers
            json_data: JSON body
            
        Returns:
            Response object
            
        Raises:
            NetworkError: If the request fails or returns an error status
        """
        try:
            response = self.session.request(
                method=method,
                url=url,
                params=params,
                headers=headers or {},
                json=json_data,
                timeout=self.timeout
            )
            response.raise_for_status()
            return response
        except Timeout:
            self.logger.debug(f"Timeout connecting to {url}")
            raise NetworkError(f"Timeout connecting to {url}")
        except ConnectionError:
            self.logger.debug(f"Connection error for {url}")
            raise NetworkError(f"Connection error for {url}")
        except RequestException as e:
            self.logger.debug(f"Request error for {url}: {e}")
            raise NetworkError(f"Request error for {url}") from e

    def get_json(self, url: str, params: Optional[Dict] = None) -> Any:
        """GET a URL and decode its JSON body.
        
        Raises:
            NetworkError: If the request fails
            APIError: If the body is not valid JSON
        """
        response = self.make_request(url, params=params)
        try:
            return response.json()
        except ValueError as e:
            raise APIError(f"Invalid JSON response from {url}") from e
